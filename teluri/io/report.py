# file: teluri/io/report.py
"""
Record export helpers.

Reports are plain dictionaries (JSON-serializable) so the same structure can
be written as JSON or flattened into CSV rows.
"""

from __future__ import annotations

import csv
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Mapping

from teluri import __version__
from teluri.core.equality import canonical_params, strip_visual_separators
from teluri.core.record import PhoneNumberRecord


def utc_now_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


def record_report(record: PhoneNumberRecord) -> dict[str, Any]:
    """
    Describe a record, including the normalized forms used for comparison.
    """

    params = canonical_params(record.params)
    return {
        "metadata": {
            "tool": "teluri",
            "version": __version__,
            "generated_at": utc_now_iso(),
        },
        "record": record.to_dict(),
        "canonical": {
            "number": strip_visual_separators(record.number),
            "extension": strip_visual_separators(record.extension),
            "sub_address": record.sub_address.lower() if record.sub_address else record.sub_address,
            "params": [list(pair) for pair in params] if params is not None else None,
        },
    }


def export_json(report: Mapping[str, Any], path: Path) -> None:
    """Write a report to disk as pretty-printed JSON."""

    path.write_text(json.dumps(report, indent=2, sort_keys=True), encoding="utf-8")


def _safe_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (str, int, float, bool)):
        return str(value)
    return json.dumps(value, ensure_ascii=True, sort_keys=True)


def _iter_kv_rows(section: str, data: Mapping[str, Any] | None) -> Iterable[dict[str, str]]:
    if not isinstance(data, dict):
        return []
    return [
        {"section": section, "key": _safe_str(key), "value": _safe_str(data.get(key))}
        for key in sorted(data.keys())
    ]


def export_csv(report: Mapping[str, Any], path: Path) -> None:
    """Export a report as `section,key,value` rows."""

    rows: list[dict[str, str]] = []
    rows.extend(_iter_kv_rows("metadata", report.get("metadata")))
    rows.extend(_iter_kv_rows("record", report.get("record")))
    rows.extend(_iter_kv_rows("canonical", report.get("canonical")))

    with path.open("w", encoding="utf-8", newline="") as fh:
        writer = csv.DictWriter(fh, fieldnames=["row_index", "section", "key", "value"])
        writer.writeheader()
        for idx, row in enumerate(rows):
            writer.writerow({"row_index": str(idx), **row})
