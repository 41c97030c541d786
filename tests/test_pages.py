import pytest

from blogsdk.config import SitePaths, find_config, load_config
from blogsdk.content import short_id
from blogsdk.errors import FrontMatterError
from blogsdk.models import AuthorRef, DocumentSummary
from blogsdk.pages import build_document, build_listing_pages, render_document, sort_summaries
from blogsdk.render import load_templates
from conftest import read_page, write_post


def load_site(root):
    paths = SitePaths.from_root(root)
    return load_config(find_config(paths.config_dir)), load_templates(paths.templates_dir), paths


def entry(slug: str, date: str | None = None) -> DocumentSummary:
    return DocumentSummary(title=slug, slug=slug, id=slug, author=AuthorRef(fullname="Ann"), date=date)


def test_sort_summaries_puts_undated_last() -> None:
    items = [entry("none"), entry("new", "2024-01-01"), entry("old", "2023-06-01")]
    assert [item.slug for item in sort_summaries(items)] == ["new", "old", "none"]


def test_sort_summaries_is_stable() -> None:
    items = [
        entry("u1"),
        entry("d1", "2024-01-01"),
        entry("u2"),
        entry("d2", "2024-01-01"),
        entry("mixed", "2024-01-01T12:00:00Z"),
    ]
    assert [item.slug for item in sort_summaries(items)] == ["mixed", "d1", "d2", "u1", "u2"]


def test_build_document_writes_primary_page_and_redirects(site) -> None:
    config, templates, paths = load_site(site)
    write_post(site, "hello.md", {"title": "Hello World", "author": "a@x.com"}, "## Intro\n\nHi there.\n")

    result = build_document("hello.md", config, templates, paths)

    doc_id = short_id("Hello World")
    assert result.slug == "hello-world"
    assert result.id == doc_id
    assert result.short is None
    assert result.date is None
    assert result.author.fullname == "Ann"
    assert result.author.company is None

    page = read_page(site, "a", "hello-world", "index.html")
    assert "Hello World" in page
    assert "Ann" in page
    assert "Acme" not in page
    assert "#intro" in page
    assert "/a/hello-world/" in read_page(site, "a", doc_id, "index.html")
    assert "/a/hello-world/" in read_page(site, "article", "hello-world", "index.html")
    assert sorted(p.name for p in (site / "pages" / "a").iterdir()) == sorted([doc_id, "hello-world"])


def test_build_document_writes_alias_redirect(site) -> None:
    config, templates, paths = load_site(site)
    write_post(
        site,
        "launch.md",
        {"title": "Launch Notes", "author": "b@y.com", "id": "ln1", "short": "go", "date": "2024-03-05"},
    )

    result = build_document("launch.md", config, templates, paths)

    assert result.id == "ln1"
    assert result.date_str == "March 5, 2024"
    assert result.author.company.display == "Acme Corp"
    assert "/a/launch-notes/" in read_page(site, "a", "ln1", "index.html")
    assert "/a/launch-notes/" in read_page(site, "a", "go", "index.html")
    page = read_page(site, "a", "launch-notes", "index.html")
    assert "Acme Corp" in page
    assert "March 5, 2024" in page


def test_build_document_skips_alias_equal_to_slug(site) -> None:
    config, templates, paths = load_site(site)
    write_post(site, "same.md", {"title": "Same", "short": "same"})

    build_document("same.md", config, templates, paths)

    assert sorted(p.name for p in (site / "pages" / "a").iterdir()) == sorted(["same", short_id("Same")])


def test_build_document_title_falls_back_to_filename(site) -> None:
    config, templates, paths = load_site(site)
    write_post(site, "Plain Notes.md", body="No header here.\n")

    result = build_document("Plain Notes.md", config, templates, paths)

    assert result.title == "Plain Notes"
    assert result.slug == "plain-notes"


def test_build_document_unknown_author_degrades(site) -> None:
    config, templates, paths = load_site(site)
    write_post(site, "ghost.md", {"title": "Ghost", "author": "nobody@example.com"})

    result = build_document("ghost.md", config, templates, paths)

    assert result.author == AuthorRef(fullname="nobody@example.com", contact="#", company=None)


def test_build_document_malformed_header_raises(site) -> None:
    config, templates, paths = load_site(site)
    (site / "posts" / "bad.md").write_text("---\ntitle: [oops\n---\nbody\n", encoding="utf-8")

    with pytest.raises(FrontMatterError):
        build_document("bad.md", config, templates, paths)


def test_build_listing_pages(site) -> None:
    config, templates, paths = load_site(site)
    items = [
        entry("undated"),
        DocumentSummary(
            title="Fresh",
            slug="fresh",
            id="f1",
            author=config.resolve_author("b@y.com"),
            date="2024-01-01",
            date_str="January 1, 2024",
            description="Newest one",
        ),
    ] + [entry(f"old-{i}", f"2020-01-0{i}") for i in range(1, 6)]

    ordered = build_listing_pages(items, config, templates, paths)

    assert ordered[0].slug == "fresh"
    assert ordered[-1].slug == "undated"
    home = read_page(site, "home", "index.html")
    assert "Newest one" in home
    assert "Notes and articles" in home
    assert "/a/undated/" not in home
    assert "/a/old-1/" not in home
    articles = read_page(site, "articles", "index.html")
    assert articles.index("/a/fresh/") < articles.index("/a/old-5/") < articles.index("/a/undated/")
    editors = read_page(site, "editors", "index.html")
    assert editors.index("Ann") < editors.index("Bob")
    assert "Acme Corp" in editors
    assert "/home/" in read_page(site, "index.html")


def test_render_document_returns_pages_without_writing(site) -> None:
    config, templates, paths = load_site(site)
    write_post(site, "launch.md", {"title": "Launch Notes", "id": "ln1", "short": "go"})

    result, pages = render_document("launch.md", config, templates, paths)

    assert result.slug == "launch-notes"
    assert [path.relative_to(site / "pages").as_posix() for path, _ in pages] == [
        "a/launch-notes/index.html",
        "a/ln1/index.html",
        "a/go/index.html",
        "article/launch-notes/index.html",
    ]
    assert "Launch Notes" in pages[0][1]
    assert not (site / "pages").exists()
