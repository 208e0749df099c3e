"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.keybase.query import LOOKUP_PATH
from core.config import AppSettings, get_user_env_file

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        return False, str(exc) or exc.__class__.__name__


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="keybasectl doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))
    table.add_row("API endpoint", "OK", f"{settings.api_endpoint} -> {settings.api_base_url}")
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    if settings.user:
        table.add_row("Default users", "OK", ", ".join(settings.user))
    else:
        table.add_row("Default users", "OPTIONAL", "KEYBASECTL_USER not set -> pass --user")

    # Connectivity (best-effort)
    url = f"{settings.api_base_url}{LOOKUP_PATH}?usernames=&fields=basics"
    ok_http, detail_http = asyncio.run(_check_http(url, settings))
    table.add_row("API connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] the API is unreachable; check network access or `--api`/KEYBASECTL_API_ENDPOINT."
        )
        raise typer.Exit(code=1)
