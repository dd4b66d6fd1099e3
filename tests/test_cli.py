from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

import mailtmpl.cli as cli_mod
import mailtmpl.config.settings as settings_mod
from conftest import FakeClient, write_template_dir
from mailtmpl.cli import cli as mailtmpl_cli
from mailtmpl.errors import ApiError

REMOTE = [
    {
        "TemplateId": 1,
        "Name": "Unchanged",
        "Alias": "unchanged",
        "TemplateType": "Standard",
        "Subject": "Same",
        "HtmlBody": "<p>same</p>",
        "TextBody": None,
        "LayoutTemplate": None,
    }
]


@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    root = tmp_path / "templates"
    write_template_dir(
        root,
        "unchanged",
        {"Name": "Unchanged", "Alias": "unchanged", "Subject": "Same", "TemplateType": "Standard"},
        html="<p>same</p>",
    )
    write_template_dir(
        root,
        "brand-new",
        {"Name": "Brand new", "Alias": "brand-new", "Subject": "New", "TemplateType": "Standard"},
        html="<p>new</p>",
    )
    return root


@pytest.fixture
def client(monkeypatch) -> FakeClient:
    fake = FakeClient(REMOTE)
    monkeypatch.setattr(cli_mod, "TemplatesClient", lambda *args, **kwargs: fake)
    return fake


def invoke(*args: str, input: str | None = None):
    return CliRunner().invoke(mailtmpl_cli, ["--server-token", "t", *args], input=input)


def test_push_previews_only_added(templates_dir: Path, client: FakeClient) -> None:
    result = invoke("push", str(templates_dir), input="n\n")

    assert result.exit_code == 0, result.output
    assert "1 template will be pushed." in result.output
    assert "brand-new" in result.output
    assert "Canceling push" in result.output
    assert client.pushed() == []


def test_push_all_previews_unmodified_too(templates_dir: Path, client: FakeClient) -> None:
    result = invoke("push", str(templates_dir), "--all", input="n\n")

    assert result.exit_code == 0, result.output
    assert "2 templates will be pushed." in result.output
    assert "Added" in result.output
    assert "Unmodified" in result.output


def test_push_confirmed(templates_dir: Path, client: FakeClient) -> None:
    result = invoke("push", str(templates_dir), input="y\n")

    assert result.exit_code == 0, result.output
    assert client.pushed() == [("create", "brand-new")]
    assert "All finished!" in result.output


def test_push_force_skips_confirmation(templates_dir: Path, client: FakeClient) -> None:
    result = invoke("push", str(templates_dir), "--force", "--all")

    assert result.exit_code == 0, result.output
    assert "Are you sure" not in result.output
    assert client.pushed() == [("create", "brand-new"), ("edit", "unchanged")]


def test_push_partial_failure_exits_zero(templates_dir: Path, client: FakeClient) -> None:
    client.fail_on[("create", "brand-new")] = ApiError("Invalid template", status_code=422)
    result = invoke("push", str(templates_dir), "--force", "--all")

    assert result.exit_code == 0, result.output
    assert "Failed to push 1 template" in result.output
    assert ("edit", "unchanged") in client.pushed()


def test_push_nothing_to_do(tmp_path: Path, client: FakeClient) -> None:
    write_template_dir(
        tmp_path,
        "unchanged",
        {"Name": "Unchanged", "Alias": "unchanged", "Subject": "Same"},
        html="<p>same</p>",
    )
    result = invoke("push", str(tmp_path))
    assert result.exit_code == 0, result.output
    assert "There are no changes to push." in result.output


def test_push_missing_directory(tmp_path: Path, client: FakeClient) -> None:
    result = invoke("push", str(tmp_path / "missing"))
    assert result.exit_code == 1
    assert "Could not find directory" in result.output
    assert client.calls == []


def test_push_empty_directory(tmp_path: Path, client: FakeClient) -> None:
    result = invoke("push", str(tmp_path))
    assert result.exit_code == 1
    assert "No templates were found" in result.output
    assert client.calls == []


def test_push_listing_failure(templates_dir: Path, client: FakeClient) -> None:
    client.list_error = ApiError("Bad or missing API token", status_code=401)
    result = invoke("push", str(templates_dir), "--force")
    assert result.exit_code == 1
    assert "Bad or missing API token" in result.output
    assert client.pushed() == []


def test_token_prompt(templates_dir: Path, client: FakeClient) -> None:
    result = CliRunner().invoke(
        mailtmpl_cli, ["push", str(templates_dir), "--force"], input="secret\n"
    )
    assert result.exit_code == 0, result.output
    assert client.pushed() == [("create", "brand-new")]


def test_empty_token_is_fatal(templates_dir: Path, client: FakeClient) -> None:
    result = CliRunner().invoke(mailtmpl_cli, ["push", str(templates_dir)], input="\n")
    assert result.exit_code == 1
    assert "Invalid server token" in result.output
    assert client.calls == []


def test_pull(tmp_path: Path, client: FakeClient) -> None:
    out = tmp_path / "out"
    result = invoke("pull", str(out))
    assert result.exit_code == 0, result.output
    assert "1 template has been saved" in result.output
    assert (out / "unchanged" / "meta.json").exists()


def test_pull_asks_before_overwriting(templates_dir: Path, client: FakeClient) -> None:
    result = invoke("pull", str(templates_dir), input="n\n")
    assert result.exit_code == 0, result.output
    assert "Canceling pull" in result.output
    assert client.calls == []

    result = invoke("pull", str(templates_dir), "--overwrite")
    assert result.exit_code == 0, result.output
    assert client.calls


def test_pull_empty_server(tmp_path: Path, client: FakeClient) -> None:
    client.templates = []
    result = invoke("pull", str(tmp_path / "out"))
    assert result.exit_code == 1
    assert "no templates" in result.output


def test_delete_by_alias(client: FakeClient) -> None:
    result = invoke("delete", "unchanged")
    assert result.exit_code == 0, result.output
    assert client.calls == [("delete", "unchanged")]
    assert "1 template has been deleted" in result.output


def test_delete_all_requires_phrase(client: FakeClient) -> None:
    result = invoke("delete", "--all", input="y\nnope\n")
    assert result.exit_code == 0, result.output
    assert "Canceling delete" in result.output
    assert client.calls == []

    result = invoke("delete", "--all", input="y\ndelete all templates\n")
    assert result.exit_code == 0, result.output
    assert ("delete", 1) in client.calls


def test_delete_needs_targets(client: FakeClient) -> None:
    result = invoke("delete")
    assert result.exit_code == 1
    assert client.calls == []


def test_invalid_config_is_reported(
    monkeypatch, tmp_path: Path, templates_dir: Path, client: FakeClient
) -> None:
    config = tmp_path / ".mailtmpl.yml"
    config.write_text("timeout: -1\n")
    monkeypatch.setattr(settings_mod, "discover_settings_path", lambda start=None: config)

    result = invoke("push", str(templates_dir), "--force")

    assert result.exit_code == 1
    assert "timeout must be a positive number" in result.output
    assert "Traceback" not in result.output
    assert client.calls == []
