from __future__ import annotations

from pathlib import Path

from .config import SiteConfig, SitePaths
from .content import format_date, normalize_date, parse_front_matter, short_id, slugify
from .models import AuthorRef, CompanyRef, DocumentSummary
from .render import markdown_to_html, redirect_html, render_template, write_page
from .toc import build_toc
from .views import ArticlesView, ArticleView, EditorsView, HomeView

RECENT_LIMIT = 5
LIST_JOIN = "\n        "


def company_link(company: CompanyRef | None, sep: str = " @ ") -> str:
    if company is None:
        return ""
    return f'{sep}<a href="{company.contact}">{company.display}</a>'


def render_document(
    filename: str, config: SiteConfig, templates: dict[str, str], paths: SitePaths
) -> tuple[DocumentSummary, list[tuple[Path, str]]]:
    """Parse and render one post without touching the output tree.

    Returns the summary plus the pages to write: the article first, then
    its id, alias and long-form redirects.
    """
    source = paths.posts_dir / filename
    raw_text = source.read_text(encoding="utf-8")
    meta, body = parse_front_matter(raw_text, source)

    title = str(meta.get("title") or Path(filename).stem)
    slug = slugify(title)
    doc_id = str(meta.get("id") or short_id(title))
    short = meta.get("short")
    short = str(short) if short else None

    author_key = str(meta.get("author") or "")
    author = config.resolve_author(author_key)
    date = normalize_date(meta.get("date"), source)
    date_str = format_date(date)
    description = str(meta.get("description") or "")

    content_html, toc_html = build_toc(markdown_to_html(body))
    view = ArticleView(
        site_title=config.title,
        site_url=config.url,
        title=title,
        description=description,
        content=content_html,
        date=date_str,
        toc=toc_html,
        author_fullname=author.fullname,
        author_contact=author.contact,
        company_html=company_link(author.company),
    )

    out = paths.output_dir
    target = f"/a/{slug}/"
    pages = [(out / "a" / slug / "index.html", render_template(templates["article"], view.to_vars()))]

    redirects = []
    if doc_id != slug:
        redirects.append(out / "a" / doc_id / "index.html")
    if short and short not in (slug, doc_id):
        redirects.append(out / "a" / short / "index.html")
    redirects.append(out / "article" / slug / "index.html")
    pages.extend((path, redirect_html(target)) for path in redirects)

    summary = DocumentSummary(
        title=title,
        slug=slug,
        id=doc_id,
        author=author,
        source=filename,
        short=short,
        date=date,
        date_str=date_str,
        description=description,
    )
    return summary, pages


def write_pages(pages: list[tuple[Path, str]], paths: SitePaths) -> None:
    for path, html_text in pages:
        write_page(path, html_text, paths.relative(path))


def build_document(filename: str, config: SiteConfig, templates: dict[str, str], paths: SitePaths) -> DocumentSummary:
    summary, pages = render_document(filename, config, templates, paths)
    write_pages(pages, paths)
    return summary


def sort_summaries(summaries: list[DocumentSummary]) -> list[DocumentSummary]:
    dated = [summary for summary in summaries if summary.date]
    undated = [summary for summary in summaries if not summary.date]
    dated.sort(key=lambda summary: summary.sort_date, reverse=True)
    return dated + undated


def post_list_item(summary: DocumentSummary) -> str:
    author = summary.author
    date_line = f"&mdash; {summary.date_str}" if summary.date_str else ""
    description = f'<p class="post-description">{summary.description}</p>' if summary.description else ""
    return (
        "<li>\n"
        f'          <a class="post-title" href="/a/{summary.slug}/">{summary.title}</a>\n'
        '          <p class="post-meta">\n'
        f'            <a href="{author.contact}">{author.fullname}</a>{company_link(author.company)}\n'
        f"            {date_line}\n"
        "          </p>\n"
        f"          {description}\n"
        "        </li>"
    )


def editor_list_item(author: AuthorRef) -> str:
    return (
        "<li>\n"
        f'          <span class="editor-name"><a href="{author.contact}">{author.fullname}</a></span>\n'
        f'          <span class="editor-meta">{company_link(author.company, " &mdash; ")}</span>\n'
        "        </li>"
    )


def build_listing_pages(
    summaries: list[DocumentSummary], config: SiteConfig, templates: dict[str, str], paths: SitePaths
) -> list[DocumentSummary]:
    out = paths.output_dir
    ordered = sort_summaries(summaries)

    home = HomeView(
        site_title=config.title,
        site_description=config.description,
        recent_posts=LIST_JOIN.join(post_list_item(summary) for summary in ordered[:RECENT_LIMIT]),
    )
    home_path = out / "home" / "index.html"
    write_page(home_path, render_template(templates["home"], home.to_vars()), paths.relative(home_path))

    root_path = out / "index.html"
    write_page(root_path, redirect_html("/home/"), paths.relative(root_path))

    articles = ArticlesView(
        site_title=config.title,
        posts=LIST_JOIN.join(post_list_item(summary) for summary in ordered),
    )
    articles_path = out / "articles" / "index.html"
    write_page(articles_path, render_template(templates["articles"], articles.to_vars()), paths.relative(articles_path))

    editors = EditorsView(
        site_title=config.title,
        editors=LIST_JOIN.join(editor_list_item(config.resolve_author(key)) for key in config.users),
    )
    editors_path = out / "editors" / "index.html"
    write_page(editors_path, render_template(templates["editors"], editors.to_vars()), paths.relative(editors_path))
    return ordered
