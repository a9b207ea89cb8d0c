from __future__ import annotations

import pytest

from learnstack.completion import CompletionTracker, LocalStorage
from learnstack.models import Course, Resource
from learnstack.store import CatalogStore


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "storage.json")


@pytest.fixture
def tracker(storage):
    return CompletionTracker(storage)


@pytest.fixture
def courses():
    return [
        Course(
            id="bio1",
            title="Foundations of Biology",
            short_description="Cells and taxonomy.",
            full_description="Deep dive into the cell.",
            category="Biology",
            level="Beginner",
            duration="4h",
        ),
        Course(
            id="cs1",
            title="Frontend Web Development",
            short_description="HTML, CSS, JavaScript.",
            full_description="Responsive websites.",
            category="CS",
            level="Intermediate",
            duration="8h",
            price="$25",
            resources=(Resource(name="Starter kit", href="https://example.com/kit.zip"),),
        ),
        Course(
            id="cs2",
            title="Algorithms",
            short_description="Sorting and graphs.",
            full_description="Includes a unit on web crawlers.",
            category="CS",
            level="Advanced",
        ),
        Course(
            id="cs3",
            title="Databases",
            short_description="SQL basics.",
            full_description="Relational modelling.",
            category="CS",
            level="Beginner",
        ),
    ]


@pytest.fixture
def store(courses):
    return CatalogStore(courses)
