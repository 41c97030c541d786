from __future__ import annotations

import argparse
import enum
import os
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from .cache import list_files, load_manifest, merge_manifest, write_manifest
from .config import SiteConfig, SitePaths, find_config, load_config
from .errors import BuildError
from .models import DocumentSummary
from .pages import build_listing_pages, render_document, write_pages
from .render import copy_static, load_templates

FULL_REBUILD_PREFIXES = ("src/templates/", "config/")
FULL_REBUILD_FILES = ("template.html",)
FRAW_PREFIX = "src/fraw/"
POSTS_PREFIX = "posts/"
CHANGED_FILES_ENV = "CHANGED_FILES"
MAX_WORKERS = 32


class BuildMode(enum.Enum):
    FULL = "full"
    INCREMENTAL = "incremental"


@dataclass(frozen=True)
class BuildPlan:
    mode: BuildMode
    changed_posts: tuple[str, ...] = ()
    reason: str = ""


def normalize_changed_path(value: str) -> str:
    path = value.strip().replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    return path


def parse_changed_files(value: str) -> list[str]:
    paths = (normalize_changed_path(line) for line in (value or "").split("\n"))
    return [path for path in paths if path]


def plan_build(changed_files: list[str], incremental: bool) -> BuildPlan:
    """Decide between a full rebuild and rebuilding only changed posts.

    Template, config and passthrough changes touch every page, so any of
    them forces a full build even when posts changed too.
    """
    if not incremental:
        return BuildPlan(BuildMode.FULL, reason="full build requested")

    paths = [normalize_changed_path(path) for path in changed_files]
    paths = [path for path in paths if path]
    if any(path.startswith(FULL_REBUILD_PREFIXES) or path in FULL_REBUILD_FILES for path in paths):
        return BuildPlan(BuildMode.FULL, reason="template/config changes")
    if any(path.startswith(FRAW_PREFIX) for path in paths):
        return BuildPlan(BuildMode.FULL, reason="fraw changes")

    changed_posts = []
    for path in paths:
        if path.startswith(POSTS_PREFIX) and path.endswith(".md"):
            name = PurePosixPath(path).name
            if name not in changed_posts:
                changed_posts.append(name)
    if changed_posts:
        return BuildPlan(BuildMode.INCREMENTAL, tuple(changed_posts), reason="post changes")
    return BuildPlan(BuildMode.FULL, reason="no recognized changes")


def resolve_workers(value: int) -> int:
    workers = value if value > 0 else (os.cpu_count() or 1)
    return max(1, min(workers, MAX_WORKERS))


def list_post_files(posts_dir: Path) -> list[str]:
    if not posts_dir.exists():
        return []
    return sorted(path.name for path in posts_dir.iterdir() if path.is_file() and path.suffix == ".md")


def build_documents(
    filenames: list[str], config: SiteConfig, templates: dict[str, str], paths: SitePaths, workers: int
) -> list[DocumentSummary]:
    """Render posts on the pool, then write them here in submission order.

    Posts sharing a slug share output paths; the last filename wins.
    """

    def render(filename: str) -> tuple[DocumentSummary, list[tuple[Path, str]]]:
        return render_document(filename, config, templates, paths)

    if not filenames:
        return []
    workers = min(workers, len(filenames))
    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            rendered = list(executor.map(render, filenames))
    else:
        rendered = [render(filename) for filename in filenames]

    summaries = []
    for summary, pages in rendered:
        write_pages(pages, paths)
        summaries.append(summary)
    return summaries


def warn_slug_collisions(summaries: list[DocumentSummary], cached: list[DocumentSummary] | None = None) -> None:
    seen = {summary.slug: summary.source for summary in cached or [] if summary.source}
    fresh_seen = {}
    for summary in summaries:
        other = fresh_seen.get(summary.slug) or seen.get(summary.slug)
        if other and other != summary.source:
            print(
                f"Warning: slug '{summary.slug}' of {summary.source} collides with {other}; "
                "output pages are overwritten.",
                file=sys.stderr,
            )
        fresh_seen[summary.slug] = summary.source


def build_site(
    root: Path,
    incremental: bool = False,
    changed_files: list[str] | None = None,
    workers: int = 0,
) -> BuildPlan:
    paths = SitePaths.from_root(root)
    config = load_config(find_config(paths.config_dir))
    templates = load_templates(paths.templates_dir)
    build_workers = resolve_workers(workers)

    paths.output_dir.mkdir(parents=True, exist_ok=True)
    all_posts = list_post_files(paths.posts_dir)
    plan = plan_build(changed_files or [], incremental)

    if plan.mode is BuildMode.INCREMENTAL:
        print(f"Incremental build - changed posts: {', '.join(plan.changed_posts)}")
        cached = load_manifest(paths.manifest_path)
        to_build = [name for name in plan.changed_posts if name in all_posts]
        built_now = build_documents(to_build, config, templates, paths, build_workers)
        warn_slug_collisions(built_now, cached)
        merged = merge_manifest(cached, built_now)
        build_listing_pages(merged, config, templates, paths)
        write_manifest(paths.manifest_path, merged)
        print("Done.")
        return plan

    if incremental:
        print(f"Full rebuild triggered by {plan.reason}.")
    print("Building all posts...")
    posts = build_documents(all_posts, config, templates, paths, build_workers)
    warn_slug_collisions(posts)
    build_listing_pages(posts, config, templates, paths)

    print("Copying fraw files...")
    for dest in copy_static(paths.fraw_dir, paths.output_dir, list_files(paths.fraw_dir)):
        print(f"  Copied: {paths.relative(dest)}")

    write_manifest(paths.manifest_path, posts)
    print("Done.")
    return plan


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Static blog builder with incremental rebuilds.")
    parser.add_argument(
        "--changed",
        action="store_true",
        help="Only rebuild posts that changed (paths as arguments or in $CHANGED_FILES).",
    )
    parser.add_argument("paths", nargs="*", help="Changed file paths, relative to the site root.")
    parser.add_argument("--root", default=".", help="Site project directory.")
    parser.add_argument(
        "--workers",
        default=0,
        type=int,
        help="Number of worker threads for building posts (0 = auto).",
    )
    args = parser.parse_args(argv)

    changed_files = args.paths or parse_changed_files(os.environ.get(CHANGED_FILES_ENV, ""))
    start = time.perf_counter()
    try:
        build_site(Path(args.root).resolve(), incremental=args.changed, changed_files=changed_files, workers=args.workers)
    except BuildError as exc:
        print(f"Build failed: {exc}", file=sys.stderr)
        sys.exit(1)
    elapsed = time.perf_counter() - start
    print(f"Build completed in {elapsed:.2f}s.")


if __name__ == "__main__":
    main()
