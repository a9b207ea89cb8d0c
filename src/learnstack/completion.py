from __future__ import annotations

import logging
import math
import os
from pathlib import Path

import orjson

logger = logging.getLogger(__name__)


class LocalStorage:
    """String key/value store persisted as one JSON object on disk."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        try:
            data = orjson.loads(self.path.read_bytes())
        except FileNotFoundError:
            return {}
        except (OSError, orjson.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable storage file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring storage file %s: expected an object", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # swap in a fully written sibling file
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_bytes(orjson.dumps(data, option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS))
        os.replace(tmp_path, self.path)

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


class CompletionTracker:
    def __init__(self, storage: LocalStorage, key: str = "learnstack_completed") -> None:
        self.storage = storage
        self.key = key
        self._completed: set[str] = self._load()

    def _load(self) -> set[str]:
        raw = self.storage.get_item(self.key)
        if not raw:
            return set()
        try:
            ids = orjson.loads(raw)
        except orjson.JSONDecodeError:
            logger.warning("Completion state under %r is corrupt; starting empty", self.key)
            return set()
        if not isinstance(ids, list):
            logger.warning("Completion state under %r is not a list; starting empty", self.key)
            return set()
        return {str(i) for i in ids}

    def _save(self) -> None:
        self.storage.set_item(self.key, orjson.dumps(sorted(self._completed)).decode("utf-8"))

    @property
    def completed_ids(self) -> frozenset[str]:
        return frozenset(self._completed)

    def is_completed(self, course_id: str) -> bool:
        return course_id in self._completed

    def mark_completed(self, course_id: str) -> bool:
        """Add ``course_id`` to the set. Returns False if it was already there."""
        if course_id in self._completed:
            return False
        self._completed.add(course_id)
        self._save()
        return True

    def percent_complete(self, catalog_size: int) -> int:
        if catalog_size <= 0:
            return 0
        percent = math.floor(len(self._completed) / catalog_size * 100 + 0.5)
        return max(0, min(100, percent))

    def __contains__(self, course_id: object) -> bool:
        return course_id in self._completed

    def __len__(self) -> int:
        return len(self._completed)
