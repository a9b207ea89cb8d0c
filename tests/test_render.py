from __future__ import annotations

from bs4 import BeautifulSoup

from learnstack.loader import LOAD_FAILED_MESSAGE, CatalogLoad
from learnstack.models import Course, Resource
from learnstack.render import (
    EMPTY_GRID_TEXT,
    NO_COMPLETED_TEXT,
    NO_VIDEO_TEXT,
    render_card,
    render_category_options,
    render_detail,
    render_grid,
    render_level_options,
    render_load_error,
    render_page,
    render_progress,
)
from learnstack.store import CatalogStore


def parse(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def test_card_escapes_text_and_shows_badge_state(tracker):
    course = Course(id="x1", title="<script>alert(1)</script>", category="CS")

    html = render_card(course, tracker)

    assert "<script>" not in html
    soup = parse(html)
    assert soup.h3.get_text() == "<script>alert(1)</script>"
    assert "hidden" in soup.select_one("[data-completed='x1']")["class"]

    tracker.mark_completed("x1")
    badge = parse(render_card(course, tracker)).select_one("[data-completed='x1']")
    assert "hidden" not in badge["class"]


def test_grid_lists_cards_in_order(courses, tracker):
    soup = parse(render_grid(courses, tracker))

    assert [b["data-id"] for b in soup.select("button.view-btn")] == ["bio1", "cs1", "cs2", "cs3"]


def test_empty_grid_shows_message(tracker):
    assert EMPTY_GRID_TEXT in render_grid([], tracker)


def test_category_options_start_with_all(store):
    soup = parse(render_category_options(store.categories, selected="CS"))

    options = soup.select("option")
    assert [o.get_text() for o in options] == ["All categories", "Biology", "CS"]
    assert options[0]["value"] == ""
    assert options[2].has_attr("selected")


def test_detail_embeds_video_and_resources(tracker):
    course = Course(
        id="v1",
        title="Video course",
        full_description="Long text",
        embed_url="https://drive.google.com/file/d/ABCDEFGHIJ1234/preview",
        resources=(Resource(name="Slides", href="https://x/s.pdf"),),
    )

    soup = parse(render_detail(course, tracker))

    assert soup.iframe["src"] == course.embed_url
    assert soup.iframe["title"] == "Video course video"
    link = soup.select_one("#resources-list a")
    assert link["href"] == "https://x/s.pdf"
    assert link["rel"] == ["noopener", "noreferrer"]
    assert soup.select_one("#course-full-desc").get_text() == "Long text"
    button = soup.select_one("#mark-complete")
    assert button.get_text() == "Mark as Completed"
    assert not button.has_attr("disabled")


def test_detail_without_video_and_completed(tracker):
    course = Course(id="n1", title="No video", short_description="Only short")
    tracker.mark_completed("n1")

    soup = parse(render_detail(course, tracker))

    assert soup.iframe is None
    assert NO_VIDEO_TEXT in soup.get_text()
    assert soup.select_one("#course-full-desc").get_text() == "Only short"
    button = soup.select_one("#mark-complete")
    assert button.get_text() == "Completed"
    assert button.has_attr("disabled")
    assert button["aria-pressed"] == "true"


def test_progress_page(store, tracker):
    assert NO_COMPLETED_TEXT in render_progress(store, tracker)

    tracker.mark_completed("cs1")
    soup = parse(render_progress(store, tracker))

    assert soup.select_one("#progress-fill")["aria-valuenow"] == "25"
    assert soup.select_one("#progress-text").get_text() == "1 of 4 courses completed (25%)"
    assert [li.get_text() for li in soup.select("#completed-courses li")] == ["Frontend Web Development"]


def test_load_error_message():
    soup = parse(render_load_error(LOAD_FAILED_MESSAGE))

    assert soup.select_one(".load-error").get_text() == LOAD_FAILED_MESSAGE


def test_page_applies_filters(store, tracker):
    load = CatalogLoad(store=store, source="remote")

    soup = parse(render_page(load, tracker, search="web", category="CS"))

    assert soup.title.get_text() == "LearnStack"
    assert [b["data-id"] for b in soup.select("button.view-btn")] == ["cs1", "cs2"]


def test_page_shows_load_error_in_listing(tracker):
    load = CatalogLoad(store=CatalogStore(), source="failed", error=LOAD_FAILED_MESSAGE)

    soup = parse(render_page(load, tracker))

    assert soup.select_one("#grid .load-error").get_text() == LOAD_FAILED_MESSAGE
    assert soup.select("article.card") == []


def test_level_options_start_with_all(store):
    soup = parse(render_level_options(store.levels, selected="Advanced"))

    options = soup.select("#level-filter option")
    assert [o.get_text() for o in options] == ["All levels", "Advanced", "Beginner", "Intermediate"]
    assert options[1].has_attr("selected")


def test_page_renders_level_filter_and_applies_it(store, tracker):
    load = CatalogLoad(store=store, source="remote")

    soup = parse(render_page(load, tracker, level="Beginner"))

    assert soup.select_one("#level-filter option[selected]")["value"] == "Beginner"
    assert [b["data-id"] for b in soup.select("button.view-btn")] == ["bio1", "cs3"]
