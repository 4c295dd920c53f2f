# File: backend/app/core/export/csv_exporter.py
# Version: v0.1.0
"""
CSV export of lambda scores and CSV import of candidate tables.

Nested factorization records are never written to CSV; use the JSON exporter
for those.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Union

EXPORT_COLUMNS = ["protospacer", "PAM", "sequence_location", "source", "lambda_score"]
NESTED_KEYS = ("factorization_details",)


def _flat(row: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: ("" if v is None else v) for k, v in row.items() if k not in NESTED_KEYS}


def _headers(rows: Sequence[Mapping[str, Any]]) -> List[str]:
    """Export columns first (when present), then any extra columns in first-seen order."""
    seen: List[str] = []
    for r in rows:
        for k in r.keys():
            if k not in NESTED_KEYS and k not in seen:
                seen.append(k)
    head = [c for c in EXPORT_COLUMNS if c in seen]
    return head + [c for c in seen if c not in head]


def scores_to_csv(rows: Iterable[Mapping[str, Any]]) -> str:
    """Render rows as CSV text (empty string for no rows)."""
    rows = [_flat(r) for r in rows]
    if not rows:
        return ""
    buf = io.StringIO()
    w = csv.DictWriter(buf, fieldnames=_headers(rows), restval="", lineterminator="\n")
    w.writeheader()
    w.writerows(rows)
    return buf.getvalue()


def export_scores_csv(rows: Iterable[Mapping[str, Any]], path: Path) -> Path:
    """Write score rows to `path` and return it."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(scores_to_csv(rows), encoding="utf-8")
    return path


def read_candidate_table(source: Union[str, Path]) -> List[Dict[str, str]]:
    """
    Load a candidate table from a CSV file (`Path`) or CSV text (`str`).

    Header names and values are stripped; rows whose field count differs from
    the header are dropped. A leading byte-order mark (Excel "CSV UTF-8") is
    ignored for both files and text.
    """
    text = source.read_text(encoding="utf-8-sig") if isinstance(source, Path) else (source or "")
    text = text.lstrip("\ufeff")
    reader = csv.reader(io.StringIO(text.strip()))
    try:
        header = [h.strip() for h in next(reader)]
    except StopIteration:
        return []
    rows: List[Dict[str, str]] = []
    for values in reader:
        if len(values) != len(header):
            continue
        rows.append({h: v.strip() for h, v in zip(header, values)})
    return rows
