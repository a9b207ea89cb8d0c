from __future__ import annotations

import re
from typing import Any

import orjson

from .errors import ParseError

RawRecord = dict[str, str]

# "/*O_o*/\ngoogle.visualization.Query.setResponse(" ... ");"
GVIZ_PREFIX_LENGTH = 47
GVIZ_SUFFIX_LENGTH = 2

_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")

# snake-cased header -> canonical raw key
KEY_ALIASES: dict[str, str] = {
    "course_id": "id",
    "short_description": "short",
    "short_desc": "short",
    "full_description": "fulldesc",
    "video": "video_url",
    "video_link": "video_url",
}


def parse_csv(text: str) -> list[RawRecord]:
    """Split a published CSV body into records keyed by lower-cased header.

    Quoted fields are not supported: every line is split on ``,`` positionally.
    Short rows are padded with empty strings, so no row is ever dropped.
    """
    text = text.strip()
    if not text:
        return []
    lines = text.split("\n")
    headers = [h.strip().lower() for h in lines[0].split(",")]
    records: list[RawRecord] = []
    for line in lines[1:]:
        values = line.split(",")
        records.append({h: (values[i].strip() if i < len(values) else "") for i, h in enumerate(headers)})
    return records


def _cell_text(cell: Any) -> str:
    if not isinstance(cell, dict):
        return ""
    value = cell.get("v")
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_gviz(text: str) -> list[RawRecord]:
    """Decode a table-query response envelope.

    Header labels keep their original casing here; see ``canonical_record``.
    """
    body = text.strip()[GVIZ_PREFIX_LENGTH:-GVIZ_SUFFIX_LENGTH]
    try:
        payload = orjson.loads(body)
    except orjson.JSONDecodeError as exc:
        raise ParseError(f"Invalid table-query envelope: {exc}") from exc

    table = payload.get("table") if isinstance(payload, dict) else None
    if not isinstance(table, dict):
        raise ParseError("Table-query envelope has no table object")

    cols = table.get("cols") or []
    rows = table.get("rows") or []
    if not isinstance(cols, list) or not isinstance(rows, list):
        raise ParseError("Table-query cols and rows must be lists")
    if any(col is not None and not isinstance(col, dict) for col in cols):
        raise ParseError("Table-query column entries must be objects")

    headers = [str((col or {}).get("label") or "") for col in cols]
    records: list[RawRecord] = []
    for row in rows:
        if row is not None and not isinstance(row, dict):
            raise ParseError(f"Table-query row must be an object, got {type(row).__name__}")
        cells = (row or {}).get("c") or []
        if not isinstance(cells, list):
            raise ParseError("Table-query row cells must be a list")
        records.append({h: (_cell_text(cells[i]) if i < len(cells) else "") for i, h in enumerate(headers)})
    return records


def parse_records(text: str, mode: str) -> list[RawRecord]:
    if mode == "csv":
        return parse_csv(text)
    if mode == "gviz":
        return parse_gviz(text)
    raise ValueError(f"Unknown source mode: {mode!r}")


def _snake_case(label: str) -> str:
    label = _CAMEL_BOUNDARY_RE.sub("_", label.strip())
    return re.sub(r"[\s\-]+", "_", label).lower()


def canonical_record(record: RawRecord, mode: str) -> RawRecord:
    """Map a parsed record onto the lower-case keys the normalizer reads."""
    if mode == "csv":
        return dict(record)
    out: RawRecord = {}
    for key, value in record.items():
        name = _snake_case(key)
        name = KEY_ALIASES.get(name, name)
        # first column wins when two labels collapse to the same key
        out.setdefault(name, value)
    return out
