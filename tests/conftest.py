from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest

import mailtmpl.config.settings as settings_mod
from mailtmpl.errors import ApiError


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    """Keep tests independent of any .mailtmpl.yml on the machine."""
    monkeypatch.delenv("MAILTMPL_CONFIG", raising=False)
    monkeypatch.delenv("POSTMARK_SERVER_TOKEN", raising=False)
    monkeypatch.delenv("POSTMARK_REQUEST_HOST", raising=False)
    monkeypatch.setattr(settings_mod, "discover_settings_path", lambda start=None: None)
    settings_mod.get_settings.cache_clear()
    yield
    settings_mod.get_settings.cache_clear()
    # the CLI reroutes mailtmpl logging; let caplog see it again
    logger = logging.getLogger("mailtmpl")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


class FakeClient:
    """In-memory stand-in for TemplatesClient that records every call."""

    def __init__(self, templates: Optional[List[Dict[str, Any]]] = None) -> None:
        self.templates: List[Dict[str, Any]] = list(templates or [])
        self.calls: List[Tuple[str, Any]] = []
        self.fail_on: Dict[Tuple[str, Any], Exception] = {}
        self.list_error: Optional[Exception] = None

    def _maybe_fail(self, op: str, key: Any) -> None:
        error = self.fail_on.get((op, key))
        if error is not None:
            raise error

    def list_templates(self, count=300, offset=0, template_type=None):
        self.calls.append(("list", (count, offset, template_type)))
        if self.list_error is not None:
            raise self.list_error
        items = [
            t
            for t in self.templates
            if template_type is None or t.get("TemplateType", "Standard") == template_type
        ]
        page = [
            {k: v for k, v in t.items() if k not in ("HtmlBody", "TextBody", "Subject")}
            for t in items[offset : offset + count]
        ]
        return {"TotalCount": len(items), "Templates": page}

    def get_template(self, id_or_alias):
        self.calls.append(("get", id_or_alias))
        self._maybe_fail("get", id_or_alias)
        for t in self.templates:
            if id_or_alias in (t.get("TemplateId"), t.get("Alias")):
                return dict(t)
        raise ApiError("Template not found", status_code=404, error_code=1101)

    def create_template(self, template):
        self.calls.append(("create", template["Alias"]))
        self._maybe_fail("create", template["Alias"])
        return {"TemplateId": 999}

    def edit_template(self, id_or_alias, template):
        self.calls.append(("edit", id_or_alias))
        self._maybe_fail("edit", id_or_alias)
        return {"TemplateId": 1}

    def delete_template(self, id_or_alias):
        self.calls.append(("delete", id_or_alias))
        self._maybe_fail("delete", id_or_alias)
        return {"ErrorCode": 0, "Message": "Template removed."}

    def pushed(self) -> List[Tuple[str, Any]]:
        return [c for c in self.calls if c[0] in ("create", "edit")]


def write_template_dir(
    root: Path,
    folder: str,
    meta: Dict[str, Any],
    html: Optional[str] = None,
    text: Optional[str] = None,
) -> Path:
    path = root / folder
    path.mkdir(parents=True, exist_ok=True)
    (path / "meta.json").write_text(json.dumps(meta), encoding="utf-8")
    if html is not None:
        (path / "content.html").write_text(html, encoding="utf-8")
    if text is not None:
        (path / "content.txt").write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()
