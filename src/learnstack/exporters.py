from __future__ import annotations

import csv
from collections.abc import Sequence
from pathlib import Path

import orjson

from .models import Course

CSV_FIELDS = [
    "id",
    "title",
    "short_description",
    "full_description",
    "category",
    "level",
    "duration",
    "price",
    "video_url",
    "embed_url",
    "resources",
]


def export_json(courses: Sequence[Course], path: Path) -> None:
    payload = [
        {**c.to_dict(), "resources": [{"name": r.name, "href": r.href} for r in c.resources]} for c in courses
    ]
    path.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))


def export_csv(courses: Sequence[Course], path: Path) -> None:
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        writer.writerows(c.to_dict() for c in courses)
