from __future__ import annotations

from collections.abc import Iterable, Sequence

from bs4 import BeautifulSoup, Tag

from .completion import CompletionTracker
from .loader import CatalogLoad
from .models import Course
from .store import CatalogStore

EMPTY_GRID_TEXT = "No courses match your search or filter."
NO_VIDEO_TEXT = "No video available for this course."
NO_COMPLETED_TEXT = "No completed courses yet."


def _soup() -> BeautifulSoup:
    return BeautifulSoup("", "lxml")


def _el(soup: BeautifulSoup, name: str, text: str | None = None, attrs: dict[str, str] | None = None) -> Tag:
    """Build a tag; text goes in as a string node so BeautifulSoup escapes it."""
    tag = soup.new_tag(name, attrs=attrs or {})
    if text is not None:
        tag.string = text
    return tag


def _meta(soup: BeautifulSoup, values: Iterable[str]) -> Tag:
    meta = _el(soup, "div", attrs={"class": "meta"})
    for value in values:
        meta.append(_el(soup, "span", value, {"class": "kv"}))
    return meta


def _card(soup: BeautifulSoup, course: Course, tracker: CompletionTracker) -> Tag:
    card = _el(soup, "article", attrs={"class": "card", "role": "listitem"})

    top = _el(soup, "div", attrs={"class": "card-top"})
    body = _el(soup, "div")
    body.append(_el(soup, "h3", course.title))
    body.append(_el(soup, "p", course.short_description))
    body.append(_meta(soup, [course.category, course.level, course.duration]))
    top.append(body)

    side = _el(soup, "div", attrs={"class": "card-side"})
    side.append(_meta(soup, [course.price]))
    side.append(_el(soup, "button", "View Course", {"class": "btn view-btn", "data-id": course.id}))
    top.append(side)
    card.append(top)

    footer = _el(soup, "div", attrs={"class": "card-footer"})
    footer.append(_el(soup, "small", f"{course.level} • {course.duration}"))
    badge_class = "badge" if tracker.is_completed(course.id) else "badge hidden"
    footer.append(_el(soup, "span", "Completed ✓", {"class": badge_class, "data-completed": course.id}))
    card.append(footer)
    return card


def render_card(course: Course, tracker: CompletionTracker) -> str:
    return str(_card(_soup(), course, tracker))


def _grid(soup: BeautifulSoup, courses: Sequence[Course], tracker: CompletionTracker) -> Tag:
    grid = _el(soup, "section", attrs={"id": "grid", "class": "grid", "role": "list"})
    if not courses:
        grid.append(_el(soup, "p", EMPTY_GRID_TEXT, {"class": "empty"}))
        return grid
    for course in courses:
        grid.append(_card(soup, course, tracker))
    return grid


def render_grid(courses: Sequence[Course], tracker: CompletionTracker) -> str:
    return str(_grid(_soup(), courses, tracker))


def _options(soup: BeautifulSoup, select_id: str, all_label: str, values: Iterable[str], selected: str = "") -> Tag:
    select = _el(soup, "select", attrs={"id": select_id})
    select.append(_el(soup, "option", all_label, {"value": ""}))
    for value in values:
        option = _el(soup, "option", value, {"value": value})
        if value == selected:
            option["selected"] = "selected"
        select.append(option)
    return select


def render_category_options(categories: Iterable[str], selected: str = "") -> str:
    return str(_options(_soup(), "category-filter", "All categories", categories, selected))


def render_level_options(levels: Iterable[str], selected: str = "") -> str:
    return str(_options(_soup(), "level-filter", "All levels", levels, selected))


def _load_error(soup: BeautifulSoup, message: str) -> Tag:
    grid = _el(soup, "section", attrs={"id": "grid", "class": "grid"})
    grid.append(_el(soup, "p", message, {"class": "load-error", "role": "alert"}))
    return grid


def render_load_error(message: str) -> str:
    return str(_load_error(_soup(), message))


def _detail(soup: BeautifulSoup, course: Course, tracker: CompletionTracker) -> Tag:
    done = tracker.is_completed(course.id)
    page = _el(soup, "section", attrs={"id": "course-page", "data-id": course.id})
    page.append(_el(soup, "h2", course.title, {"id": "course-title"}))
    page.append(_meta(soup, [course.category, course.level, course.duration]))

    video = _el(soup, "div", attrs={"id": "video-wrapper"})
    if course.embed_url:
        video.append(
            _el(
                soup,
                "iframe",
                attrs={
                    "src": course.embed_url,
                    "width": "100%",
                    "height": "480",
                    "allow": "autoplay; encrypted-media",
                    "title": f"{course.title} video",
                    "style": "border:0",
                },
            )
        )
    else:
        video.append(_el(soup, "div", NO_VIDEO_TEXT, {"class": "video-placeholder"}))
    page.append(video)

    page.append(_el(soup, "p", course.full_description or course.short_description, {"id": "course-full-desc"}))

    resources = _el(soup, "ul", attrs={"id": "resources-list"})
    for resource in course.resources:
        item = _el(soup, "li")
        item.append(_el(soup, "span", resource.name))
        item.append(
            _el(soup, "a", "Download", {"href": resource.href, "target": "_blank", "rel": "noopener noreferrer"})
        )
        resources.append(item)
    page.append(resources)

    button = _el(
        soup,
        "button",
        "Completed" if done else "Mark as Completed",
        {"id": "mark-complete", "class": "btn", "aria-pressed": "true" if done else "false"},
    )
    if done:
        button["disabled"] = "disabled"
    page.append(button)
    page.append(_el(soup, "span", "Completed ✓", {"id": "complete-badge", "class": "badge" if done else "badge hidden"}))
    return page


def render_detail(course: Course, tracker: CompletionTracker) -> str:
    return str(_detail(_soup(), course, tracker))


def _progress(soup: BeautifulSoup, store: CatalogStore, tracker: CompletionTracker) -> Tag:
    percent = tracker.percent_complete(len(store))
    page = _el(soup, "section", attrs={"id": "progress-page"})

    bar = _el(soup, "div", attrs={"class": "progress-bar"})
    bar.append(
        _el(
            soup,
            "div",
            attrs={
                "id": "progress-fill",
                "class": "progress-fill",
                "role": "progressbar",
                "style": f"width:{percent}%",
                "aria-valuenow": str(percent),
                "aria-valuemin": "0",
                "aria-valuemax": "100",
            },
        )
    )
    page.append(bar)
    page.append(
        _el(soup, "p", f"{len(tracker)} of {len(store)} courses completed ({percent}%)", {"id": "progress-text"})
    )

    completed = [c for c in store if tracker.is_completed(c.id)]
    if not completed:
        page.append(_el(soup, "p", NO_COMPLETED_TEXT, {"class": "empty"}))
        return page
    listing = _el(soup, "ul", attrs={"id": "completed-courses"})
    for course in completed:
        listing.append(_el(soup, "li", course.title, {"data-id": course.id}))
    page.append(listing)
    return page


def render_progress(store: CatalogStore, tracker: CompletionTracker) -> str:
    return str(_progress(_soup(), store, tracker))


def render_page(
    load: CatalogLoad,
    tracker: CompletionTracker,
    search: str = "",
    category: str = "",
    level: str = "",
    title: str = "LearnStack",
) -> str:
    """Standalone HTML document: filters, course grid and progress summary."""
    soup = BeautifulSoup("<!DOCTYPE html><html><head></head><body></body></html>", "lxml")
    soup.head.append(_el(soup, "meta", attrs={"charset": "utf-8"}))
    soup.head.append(_el(soup, "title", title))

    app = _el(soup, "main", attrs={"id": "app"})
    app.append(_el(soup, "h1", title))
    app.append(_options(soup, "category-filter", "All categories", load.store.categories, category))
    app.append(_options(soup, "level-filter", "All levels", load.store.levels, level))
    if load.error:
        app.append(_load_error(soup, load.error))
    else:
        app.append(_grid(soup, load.store.filter(search=search, category=category, level=level), tracker))
    app.append(_progress(soup, load.store, tracker))
    soup.body.append(app)
    return str(soup)
