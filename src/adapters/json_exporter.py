"""JSON export of a lookup report.

Lets other tools consume the found/not-found split without scraping the
console output.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import LookupReport


def export_report_json(*, report: LookupReport, output_path: Path) -> Path:
    """Export `LookupReport` as UTF-8 JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = report.model_dump(mode="json", exclude_none=True)
    payload["ok"] = report.ok
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
