from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from .completion import CompletionTracker, LocalStorage
from .config import SOURCE_MODES, VIDEO_HOSTS, CatalogConfig
from .exporters import export_csv, export_json
from .loader import CatalogLoad, load_catalog
from .logger import configure_logging
from .models import Course
from .render import render_page


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="learnstack", description="Browse the LearnStack course catalog")
    parser.add_argument("--sheet-url", default=None, help="Published sheet URL (blank uses the built-in courses)")
    parser.add_argument("--mode", choices=SOURCE_MODES, default="csv", help="Payload flavor of the sheet URL")
    parser.add_argument("--video-host", choices=VIDEO_HOSTS, default="drive")
    parser.add_argument("--state-file", default=None, help="Where completion state is stored")
    parser.add_argument("--deterministic-ids", action="store_true", help="Derive missing ids from title and category")
    parser.add_argument("-v", "--verbose", action="store_true")

    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="List courses, optionally filtered")
    list_cmd.add_argument("--search", default="")
    list_cmd.add_argument("--category", default="")
    list_cmd.add_argument("--level", default="")

    show_cmd = sub.add_parser("show", help="Show one course")
    show_cmd.add_argument("course_id")

    complete_cmd = sub.add_parser("complete", help="Mark a course as completed")
    complete_cmd.add_argument("course_id")

    sub.add_parser("progress", help="Show completion progress")

    export_cmd = sub.add_parser("export", help="Write courses.json and courses.csv")
    export_cmd.add_argument("--output-dir", default="output")

    render_cmd = sub.add_parser("render", help="Write the catalog as a standalone HTML page")
    render_cmd.add_argument("--output", default="index.html")
    render_cmd.add_argument("--search", default="")
    render_cmd.add_argument("--category", default="")
    render_cmd.add_argument("--level", default="")

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> CatalogConfig:
    config = CatalogConfig(
        sheet_url=CatalogConfig.resolve_sheet_url(args.sheet_url),
        source_mode=args.mode,
        video_host=args.video_host,
        deterministic_ids=args.deterministic_ids,
    )
    if args.state_file:
        config.storage_path = Path(args.state_file)
    return config


def _print_course_line(course: Course, tracker: CompletionTracker) -> None:
    mark = "x" if tracker.is_completed(course.id) else " "
    print(f"[{mark}] {course.id:<12} {course.title}  ({course.category} / {course.level} / {course.price})")


def _run_command(args: argparse.Namespace, load: CatalogLoad, tracker: CompletionTracker) -> int:
    store = load.store

    if args.command == "list":
        if load.error:
            print(load.error)
            return 0
        courses = store.filter(search=args.search, category=args.category, level=args.level)
        if not courses:
            print("No courses match your search or filter.")
        for course in courses:
            _print_course_line(course, tracker)
        return 0

    if args.command == "show":
        course = store.get(args.course_id)
        if course is None:
            print(f"Unknown course: {args.course_id}", file=sys.stderr)
            return 1
        print(course.title)
        print(f"{course.category} | {course.level} | {course.duration} | {course.price}")
        print()
        print(course.full_description or course.short_description)
        print()
        print(f"Video: {course.embed_url or 'No video available for this course.'}")
        for resource in course.resources:
            print(f"  - {resource.name}: {resource.href}")
        print("Completed" if tracker.is_completed(course.id) else "Not completed")
        return 0

    if args.command == "complete":
        if store.get(args.course_id) is None:
            print(f"Unknown course: {args.course_id}", file=sys.stderr)
            return 1
        if tracker.mark_completed(args.course_id):
            print(f"Marked {args.course_id} as completed.")
        else:
            print(f"{args.course_id} is already completed.")
        return 0

    if args.command == "progress":
        percent = tracker.percent_complete(len(store))
        print(f"{len(tracker)} of {len(store)} courses completed ({percent}%)")
        for course in store:
            if tracker.is_completed(course.id):
                print(f"  - {course.title}")
        return 0

    if args.command == "export":
        output_dir = Path(args.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        export_json(store.courses, output_dir / "courses.json")
        export_csv(store.courses, output_dir / "courses.csv")
        print(f"Exported {len(store)} courses")
        print(f"JSON: {output_dir / 'courses.json'}")
        print(f"CSV:  {output_dir / 'courses.csv'}")
        return 0

    if args.command == "render":
        output = Path(args.output)
        html = render_page(load, tracker, search=args.search, category=args.category, level=args.level)
        output.write_text(html, encoding="utf-8")
        print(f"HTML: {output}")
        return 0

    raise ValueError(f"Unknown command: {args.command}")


async def _run(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    config = build_config(args)
    tracker = CompletionTracker(LocalStorage(config.storage_path), key=config.storage_key)
    load = await load_catalog(config)
    return _run_command(args, load, tracker)


def main(argv: Sequence[str] | None = None) -> int:
    return asyncio.run(_run(argv))


if __name__ == "__main__":
    sys.exit(main())
