"""CLI interface for mailtmpl - email template sync."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import NoReturn, Optional, Tuple

import click

from .client import ServerAuth, TemplatesClient
from .config import Settings, get_settings
from .errors import (
    ConfigError,
    DirectoryNotFoundError,
    MissingAliasError,
    MissingTokenError,
    NoTemplatesError,
    RemoteFetchError,
)
from .models import ChangeSetItem, TemplateRecord, TemplateType
from .review import build_review, render_review, review_summary
from .sync import (
    build_manifest,
    delete_templates,
    fetch_remote_catalog,
    pull_templates,
    push_templates,
    reconcile,
)
from .utils import configure_logging, console, pluralize, pluralize_with_number

DELETE_ALL_PHRASE = "delete all templates"


def fail(message: str) -> NoReturn:
    console.print(message, style="bold red", markup=False)
    sys.exit(1)


def resolve_token(token: Optional[str]) -> str:
    if not token:
        token = click.prompt(
            "Please enter your server token", hide_input=True, default="", show_default=False
        )
    if not token:
        raise MissingTokenError("Invalid server token.")
    return token


def load_cli_settings() -> Settings:
    try:
        return get_settings()
    except ConfigError as exc:
        fail(f"Error: {exc}")


def make_client(ctx: click.Context) -> TemplatesClient:
    """Build an authenticated client from the group options."""
    settings = load_cli_settings()
    try:
        token = resolve_token(ctx.obj.get("server_token"))
    except MissingTokenError as exc:
        fail(str(exc))
    return TemplatesClient(
        ServerAuth(token=token),
        api_url=ctx.obj.get("request_host") or settings["api_url"],
        timeout=settings["timeout"],
    )


@click.group()
@click.option(
    "--server-token",
    envvar="POSTMARK_SERVER_TOKEN",
    default=None,
    help="Server API token (prompted for when missing).",
)
@click.option(
    "--request-host",
    envvar="POSTMARK_REQUEST_HOST",
    default=None,
    help="Override the API base URL.",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    server_token: Optional[str],
    request_host: Optional[str],
    verbose: bool,
) -> None:
    """Sync email templates between a local directory and a server."""
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["server_token"] = server_token
    ctx.obj["request_host"] = request_host


@cli.command("push")
@click.argument("templates_dir", type=click.Path(path_type=Path))
@click.option("--force", "-f", is_flag=True, help="Push without asking for confirmation.")
@click.option(
    "--all", "-a", "push_all", is_flag=True, help="Push unmodified templates too."
)
@click.pass_context
def push_cmd(
    ctx: click.Context, templates_dir: Path, force: bool, push_all: bool
) -> None:
    """
    Push templates from TEMPLATES_DIR to the server.

    Compares the local templates with the ones on the server, shows what
    will be added or modified, and pushes after confirmation. Layouts are
    pushed before templates.
    """
    settings = load_cli_settings()
    try:
        manifest = build_manifest(templates_dir, settings)
    except (DirectoryNotFoundError, NotADirectoryError) as exc:
        fail(f"Error: {exc}")
    if not manifest:
        fail("Error: No templates were found in this directory.")

    client = make_client(ctx)
    try:
        with console.status("Fetching templates..."):
            remote_catalog = fetch_remote_catalog(client, settings["page_size"])
    except RemoteFetchError as exc:
        fail(str(exc))

    change_set = reconcile(remote_catalog, manifest, push_all=push_all)
    if not change_set:
        console.print("There are no changes to push.", style="green")
        return

    review = build_review(change_set)
    console.print(render_review(review))
    console.print(review_summary(review), style="yellow")

    if not force and not click.confirm(
        "Are you sure you want to push these templates?", default=False
    ):
        console.print("Canceling push. Have a good day!")
        return

    def before_each(item: ChangeSetItem) -> None:
        console.print(f"Pushing {item.record.label}...", style="dim")

    def on_error(item: ChangeSetItem, error: Exception) -> None:
        console.print(f"{item.record.label}: {error}", style="red", markup=False)

    def on_complete(failures: int) -> None:
        if failures == 0:
            console.print("All finished!", style="bold green")
        else:
            console.print(
                f"Failed to push {pluralize_with_number(failures, 'template')}. "
                "Please see the output above for more details.",
                style="bold red",
            )

    try:
        result = push_templates(
            client,
            change_set,
            on_before_each=before_each,
            on_error=on_error,
            on_complete=on_complete,
        )
    except MissingAliasError as exc:
        fail(str(exc))

    pushed = len(result.pushed)
    console.print(
        f"Pushed {pluralize_with_number(pushed, 'template')} successfully.",
        style="green" if pushed else "yellow",
    )


@cli.command("pull")
@click.argument("output_dir", type=click.Path(path_type=Path, file_okay=False))
@click.option(
    "--overwrite", "-o", is_flag=True, help="Overwrite existing files without asking."
)
@click.pass_context
def pull_cmd(ctx: click.Context, output_dir: Path, overwrite: bool) -> None:
    """Pull templates from the server into OUTPUT_DIR."""
    output_dir = output_dir.expanduser()
    if (
        not overwrite
        and output_dir.is_dir()
        and any(output_dir.iterdir())
        and not click.confirm(
            f"Are you sure you want to overwrite the files in {output_dir}?",
            default=False,
        )
    ):
        console.print("Canceling pull.")
        return

    client = make_client(ctx)

    def on_saved(record: TemplateRecord, folder: Path) -> None:
        console.print(f"Saved {record.label} to {folder}", style="dim")

    try:
        with console.status("Pulling templates..."):
            result = pull_templates(client, output_dir, on_saved=on_saved)
    except (RemoteFetchError, NoTemplatesError) as exc:
        fail(str(exc))

    saved = len(result.saved)
    console.print(
        f"All finished! {saved} {pluralize(saved, 'template has', 'templates have')} "
        f"been saved to {output_dir}.",
        style="green",
    )
    if result.failure_count:
        console.print(
            f"Failed to pull {pluralize_with_number(result.failure_count, 'template')}.",
            style="bold red",
        )


@cli.command("delete")
@click.argument("ids_or_aliases", nargs=-1)
@click.option("--all", "delete_all", is_flag=True, help="Delete every template of --type.")
@click.option(
    "--type",
    "template_type",
    type=click.Choice([t.value for t in TemplateType]),
    default=TemplateType.STANDARD.value,
    show_default=True,
    help="Template type deleted by --all.",
)
@click.option("--force", "-f", is_flag=True, help="Delete without asking for confirmation.")
@click.pass_context
def delete_cmd(
    ctx: click.Context,
    ids_or_aliases: Tuple[str, ...],
    delete_all: bool,
    template_type: str,
    force: bool,
) -> None:
    """
    Delete templates by id or alias, or all templates of a type with --all.

    Layouts can only be deleted while no template uses them.
    """
    if bool(ids_or_aliases) == delete_all:
        fail("Error: pass template ids/aliases or --all, but not both.")

    if delete_all and not force:
        if not click.confirm(f"Delete ALL {template_type} templates? Are you sure?", default=False):
            console.print("Canceling delete.")
            return
        phrase = click.prompt(f'Enter "{DELETE_ALL_PHRASE}" to confirm', default="")
        if phrase != DELETE_ALL_PHRASE:
            console.print("Canceling delete.")
            return

    settings = load_cli_settings()
    client = make_client(ctx)

    def on_error(target: object, error: Exception) -> None:
        console.print(f"{target}: {error}", style="red", markup=False)

    try:
        result = delete_templates(
            client,
            ids_or_aliases,
            template_type=template_type if delete_all else None,
            page_size=settings["page_size"],
            on_error=on_error,
        )
    except (RemoteFetchError, NoTemplatesError) as exc:
        fail(str(exc))

    deleted = len(result.deleted)
    console.print(
        f"All finished! {deleted} {pluralize(deleted, 'template has', 'templates have')} "
        "been deleted.",
        style="green" if not result.failure_count else "yellow",
    )
    if result.failure_count:
        console.print(
            f"Failed to delete {pluralize_with_number(result.failure_count, 'template')}.",
            style="bold red",
        )


def main() -> None:
    cli(obj={})
