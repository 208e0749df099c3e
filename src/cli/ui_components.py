"""CLI UI components (Rich).

Kept apart from the commands so the same tables render for every lookup kind.
"""

from __future__ import annotations

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import LookupKind, LookupReport, LookupResult
from core.version import BuildInfo


def build_result_table(result: LookupResult) -> Table:
    """One row per requested username: found ones first, then missing ones."""

    if result.kind is LookupKind.PUBLIC_KEY:
        table = Table(title="Keybase public keys")
        detail_header = "Fingerprint"
    else:
        table = Table(title="Keybase users")
        detail_header = "Name"
    table.add_column("Username", style="cyan", no_wrap=True)
    table.add_column("Found", style="white")
    table.add_column(detail_header, style="magenta")

    found = set(result.found)
    ordered = [*result.found, *result.not_found]
    for name in ordered:
        if name in found:
            entry = result.entries.get(name)
            detail = ""
            if entry is not None:
                detail = (
                    entry.fingerprint() if result.kind is LookupKind.PUBLIC_KEY else entry.display_name()
                ) or ""
            table.add_row(name, Text("yes", style="green"), detail)
        else:
            table.add_row(name, Text("no", style="red"), "")
    return table


def format_result_lines(result: LookupResult) -> list[str]:
    """Plain-text summary lines, same wording for both lookup kinds."""

    if result.kind is LookupKind.PUBLIC_KEY:
        suffix = "public key {state} during keybase public key lookup"
    else:
        suffix = "{state} during keybase lookup"

    lines: list[str] = []
    if result.found:
        lines.append(f"user(s): {', '.join(result.found)} " + suffix.format(state="found"))
    if result.not_found:
        lines.append(f"user(s): {', '.join(result.not_found)} " + suffix.format(state="not found"))
    return lines


def build_summary_panel(report: LookupReport) -> Panel:
    body = Text()
    body.append(f"API: {report.api_base_url}\n", style="dim")
    body.append(f"Usernames: {', '.join(report.identifiers) or '-'}\n")
    if report.ok:
        body.append("All lookups succeeded", style="bold green")
        border = "green"
    else:
        body.append("Errors:\n", style="bold red")
        for error in report.errors:
            body.append(f"- {error}\n")
        border = "red"
    return Panel(body, title=Text("keybasectl", style="bold cyan"), border_style=border)


def build_version_table(info: BuildInfo) -> Table:
    table = Table(title="keybasectl")
    table.add_column("Key", style="bright_green", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("version", info.version)
    table.add_row("commit", info.commit or "-")
    table.add_row("build date", info.build_date or "-")
    table.add_row("python", info.python_version)
    table.add_row("platform", info.system)
    return table
