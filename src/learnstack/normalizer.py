from __future__ import annotations

import hashlib
import secrets
import string
from collections.abc import Callable, Collection, Iterable, Mapping

from .embed import DriveEmbedStrategy, EmbedStrategy
from .models import Course, Resource

IdFactory = Callable[[Mapping[str, str]], str]

_ID_ALPHABET = string.ascii_lowercase + string.digits
RANDOM_ID_LENGTH = 7


def random_id(raw: Mapping[str, str] | None = None) -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(RANDOM_ID_LENGTH))


def stable_id(raw: Mapping[str, str]) -> str:
    """Reproducible id derived from title and category, for tests and static exports."""
    seed = f"{_first(raw, 'title')}\x1f{_first(raw, 'category')}"
    return hashlib.sha1(seed.encode("utf-8")).hexdigest()[:10]


def _first(raw: Mapping[str, str], *keys: str) -> str:
    for key in keys:
        value = raw.get(key)
        if value is None:
            continue
        value = str(value).strip()
        if value:
            return value
    return ""


def parse_resources(text: str | None) -> tuple[Resource, ...]:
    if not text:
        return ()
    resources: list[Resource] = []
    for entry in text.split(";"):
        label, _, href = entry.partition("|")
        label, href = label.strip(), href.strip()
        if not href:
            continue
        resources.append(Resource(name=label or href, href=href))
    return tuple(resources)


class CourseNormalizer:
    def __init__(self, embed_strategy: EmbedStrategy | None = None, id_factory: IdFactory = random_id) -> None:
        self.embed_strategy = embed_strategy or DriveEmbedStrategy()
        self.id_factory = id_factory

    def _course_id(self, raw: Mapping[str, str], taken: Collection[str]) -> str:
        course_id = _first(raw, "id")
        if course_id:
            return course_id
        base = course_id = self.id_factory(raw)
        suffix = 1
        while course_id in taken:
            suffix += 1
            course_id = f"{base}-{suffix}"
        return course_id

    def normalize(self, raw: Mapping[str, str], taken: Collection[str] = ()) -> Course:
        """Map one raw record onto a Course.

        Generated ids that clash with ``taken`` get a ``-2``, ``-3``... suffix.
        """
        short = _first(raw, "short", "summary")
        video_url = _first(raw, "video_url")
        return Course(
            id=self._course_id(raw, taken),
            title=_first(raw, "title") or "Untitled",
            short_description=short,
            full_description=_first(raw, "fulldesc", "full_desc", "description") or short,
            category=_first(raw, "category") or "General",
            level=_first(raw, "level") or "Beginner",
            duration=_first(raw, "duration"),
            price=_first(raw, "price") or "Free",
            video_url=video_url,
            embed_url=self.embed_strategy.embed_url(video_url),
            resources=parse_resources(raw.get("resources")),
        )

    def normalize_all(self, records: Iterable[Mapping[str, str]]) -> list[Course]:
        records = list(records)
        taken = {_first(raw, "id") for raw in records} - {""}
        courses: list[Course] = []
        for raw in records:
            course = self.normalize(raw, taken)
            taken.add(course.id)
            courses.append(course)
        return courses
