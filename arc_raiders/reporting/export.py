"""
JSON and CSV export for fetched records.

All file-writing functions create missing parent directories and return the
written ``Path``. They accept pydantic records or plain dicts; records are
dumped under their API wire names with unset optional fields dropped, so an
export looks like what the server sent.

CSV layout:
  - Nested objects are flattened to dotted column names (``stats.damage``).
  - Lists are NOT flattened; they stay in one cell as compact JSON.
  - Columns come from the first record unless ``fieldnames`` is given;
    missing cells are empty and extra keys are ignored.
  - ``None`` → empty, booleans → ``true``/``false``.
  - Standard CSV quoting for commas, quotes and newlines.
"""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Iterable, Optional

from pydantic import BaseModel

from arc_raiders.errors import ExportError


def to_plain(record: Any) -> Any:
    """Dump a pydantic record (or list of them) to JSON-ready Python values."""
    if isinstance(record, BaseModel):
        return record.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(record, Mapping):
        return {k: to_plain(v) for k, v in record.items()}
    if isinstance(record, (list, tuple)):
        return [to_plain(r) for r in record]
    return record


def flatten_record(record: Any, prefix: str = "") -> dict[str, Any]:
    """Flatten nested mappings into dotted keys; lists are kept intact.

    >>> flatten_record({"id": "1", "nested": {"x": 1}, "tags": ["a"]})
    {'id': '1', 'nested.x': 1, 'tags': ['a']}
    """
    result: dict[str, Any] = {}
    for key, value in to_plain(record).items():
        name = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            result.update(flatten_record(value, name))
        else:
            result[name] = value
    return result


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, dict)):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def to_csv_string(
    records: Iterable[Any],
    fieldnames: Optional[list[str]] = None,
) -> str:
    """Render ``records`` as CSV text; an empty input yields ``""``."""
    rows = [flatten_record(r) for r in records]
    if not rows:
        return ""
    cols = fieldnames or list(rows[0].keys())

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(cols)
    for row in rows:
        writer.writerow([_cell(row.get(col)) for col in cols])
    return buf.getvalue()


def export_to_csv(
    records: Iterable[Any],
    path: Path,
    fieldnames: Optional[list[str]] = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    Records or row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order. If None, uses the flattened keys of the
                    first record.

    Returns:
        ``path`` as written.

    Raises:
        ExportError: If ``records`` is empty. Nothing is written.
    """
    records = list(records)
    if not records:
        raise ExportError("Cannot export an empty collection to CSV.")
    text = to_csv_string(records, fieldnames)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def to_json_string(data: Any) -> str:
    """Pretty-print ``data`` (records, lists or dicts) with 2-space indent."""
    return json.dumps(to_plain(data), indent=2, default=str)


def export_to_json(data: Any, path: Path) -> Path:
    """Write ``data`` to a pretty-printed JSON file.

    Args:
        data: Record, list or dict to serialise.
        path: Destination file path (parent dirs created if missing).

    Returns:
        ``path`` as written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_json_string(data), encoding="utf-8")
    return path
