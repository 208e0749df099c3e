"""keybasectl command line.

`keybasectl lookup --user alice,bob` resolves the usernames, then their
public keys, and exits non-zero if anything was missing or failed.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from adapters.json_exporter import export_report_json
from cli import doctor
from cli.ui_components import (
    build_result_table,
    build_summary_panel,
    build_version_table,
    format_result_lines,
)
from core.config import AppSettings, resolve_api_base_url, split_users
from core.domain.errors import KeybaseError, NotFoundError
from core.domain.models import LookupKind, LookupResult
from core.logging_setup import configure_logging
from core.services.lookup_pipeline import PipelineHooks, run_lookups
from core.version import build_context

app = typer.Typer(no_args_is_help=True, help="Look up usernames and public keys on keybase.io.")
app.add_typer(doctor.app, name="doctor")

_console = Console()

USER_ENV = "KEYBASECTL_USER"


def _render_result(result: LookupResult, *, table: bool) -> None:
    for line in format_result_lines(result):
        _console.print(line, highlight=False, markup=False)
    if table and (result.found or result.not_found):
        _console.print(build_result_table(result))


@app.command()
def lookup(
    user: Optional[List[str]] = typer.Option(
        None,
        "--user",
        "-u",
        help=f"User(s) to look up, comma separated or repeated. Alternatively sourced from {USER_ENV} [required]",
        show_default=False,
    ),
    api: Optional[str] = typer.Option(
        None,
        "--api",
        help="Keybase API endpoint: 'production' (default), 'staging' or a base URL. "
        "Alternatively sourced from KEYBASECTL_API_ENDPOINT.",
        show_default=False,
    ),
    debug: bool = typer.Option(False, "--debug", help="Turn on debug logging on stderr."),
    public_keys: bool = typer.Option(
        True,
        "--public-keys/--no-public-keys",
        help="Also look up each user's public key.",
    ),
    table: bool = typer.Option(True, "--table/--no-table", help="Render result tables."),
    json_output: Optional[Path] = typer.Option(
        None,
        "--json-output",
        help="Write the lookup report as JSON to this path.",
        dir_okay=False,
        writable=True,
    ),
) -> None:
    """Look up users (and their public keys) against the keybase API."""

    try:
        settings = AppSettings()
    except ValidationError as exc:
        _console.print(f"[red]invalid configuration:[/red] {escape(str(exc))}", highlight=False)
        raise typer.Exit(code=2) from exc
    updates: dict[str, object] = {}
    if api is not None:
        try:
            resolve_api_base_url(api)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--api") from exc
        updates["api_endpoint"] = api
    if debug:
        updates["debug"] = True
    if updates:
        settings = settings.model_copy(update=updates)

    logger = configure_logging(debug=settings.debug)
    logger.info("starting engines")

    identifiers = split_users(user) or list(settings.user)
    logger.debug("cli flag --user: %s, environment %s: %s", user, USER_ENV, settings.user)
    if not identifiers:
        logger.error("required flag or environment variable not set! flag: user, environmentVariable: %s", USER_ENV)
        _console.print(
            f'required flag or environment variable not set! flag: "--user", environmentVariable: "{USER_ENV}"',
            highlight=False,
        )
        raise typer.Exit(code=1)

    def on_done(result: LookupResult) -> None:
        _render_result(result, table=table)

    def on_error(kind: LookupKind, exc: KeybaseError) -> None:
        if isinstance(exc, NotFoundError):
            _render_result(exc.result, table=table)
        else:
            _console.print(f"[red]error[/red] ({kind.label()} lookup): {escape(str(exc))}", highlight=False)

    report = asyncio.run(
        run_lookups(
            settings=settings,
            identifiers=identifiers,
            include_public_keys=public_keys,
            hooks=PipelineHooks(lookup_done=on_done, lookup_error=on_error),
            logger=logger,
        )
    )

    if json_output is not None:
        path = export_report_json(report=report, output_path=json_output)
        _console.print(f"[green]Report written to:[/green] {path}", highlight=False)

    if table:
        _console.print(build_summary_panel(report))

    logger.info("stopping engines, we're done")
    if not report.ok:
        raise typer.Exit(code=1)


@app.command()
def version() -> None:
    """Show build and version metadata."""

    _console.print(build_version_table(build_context()))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
