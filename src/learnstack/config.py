from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

SHEET_CSV_URL = (
    "https://docs.google.com/spreadsheets/d/e/2PACX-1vTOYa1xUpJrVcd2cvyxlvcu4J3vsK3puGn0opnhnTB1qbRL-"
    "_ul6wsFJRDtkpkxytPVhgLslDmy8t3w/pub?output=csv&gid=0"
)
SHEET_URL_ENV = "LEARNSTACK_SHEET_URL"

SOURCE_MODES = ("csv", "gviz")
VIDEO_HOSTS = ("drive", "youtube")


@dataclass(slots=True)
class CatalogConfig:
    sheet_url: str | None = SHEET_CSV_URL
    source_mode: str = "csv"
    video_host: str = "drive"
    storage_path: Path = Path.home() / ".learnstack" / "storage.json"
    storage_key: str = "learnstack_completed"
    timeout_seconds: int = 20
    deterministic_ids: bool = False

    def __post_init__(self) -> None:
        if self.source_mode not in SOURCE_MODES:
            raise ValueError(f"Unknown source mode: {self.source_mode!r}")
        if self.video_host not in VIDEO_HOSTS:
            raise ValueError(f"Unknown video host: {self.video_host!r}")

    @staticmethod
    def resolve_sheet_url(override: str | None = None) -> str | None:
        """Pick the sheet URL: explicit override, then the environment, then the built-in constant.

        A blank value at any level means "no remote source" and yields ``None``.
        """
        if override is not None:
            return override.strip() or None
        env_value = os.environ.get(SHEET_URL_ENV)
        if env_value is not None:
            return env_value.strip() or None
        return SHEET_CSV_URL
