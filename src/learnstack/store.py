from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .models import Course

logger = logging.getLogger(__name__)


class CatalogStore:
    """In-memory read model for the currently loaded catalog.

    A load replaces the whole collection; courses are never merged or updated
    in place.
    """

    def __init__(self, courses: Iterable[Course] = ()) -> None:
        self._courses: tuple[Course, ...] = ()
        self._by_id: dict[str, Course] = {}
        self.replace(courses)

    def replace(self, courses: Iterable[Course]) -> None:
        self._courses = tuple(courses)
        by_id: dict[str, Course] = {}
        for course in self._courses:
            if course.id in by_id:
                logger.warning("Duplicate course id %r (%s); keeping the first", course.id, course.title)
                continue
            by_id[course.id] = course
        self._by_id = by_id

    @property
    def courses(self) -> tuple[Course, ...]:
        return self._courses

    @property
    def categories(self) -> list[str]:
        return sorted({c.category for c in self._courses})

    @property
    def levels(self) -> list[str]:
        return sorted({c.level for c in self._courses})

    def get(self, course_id: str) -> Course | None:
        return self._by_id.get(course_id)

    def filter(self, search: str = "", category: str = "", level: str = "") -> list[Course]:
        query = (search or "").strip().lower()
        return [
            c
            for c in self._courses
            if (not query or query in c.search_text)
            and (not category or c.category == category)
            and (not level or c.level == level)
        ]

    def __len__(self) -> int:
        return len(self._courses)

    def __iter__(self) -> Iterator[Course]:
        return iter(self._courses)
