from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

ARTICLE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>{{ page.title }} | {{ site.title }}</title>
  <meta name="description" content="{{ page.description }}">
</head>
<body>
  <!-- article -->
  <nav class="toc"><ul>{{ page.toc }}</ul></nav>
  <article>
    <h1>{{ page.title }}</h1>
    <p class="byline"><a href="{{ page.author.contact }}">{{ page.author.fullname }}</a>{{ page.author.company_html }} {{ page.date }}</p>
    {{ page.content }}
  </article>
</body>
</html>
"""

HOME_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head><title>{{ site.title }}</title></head>
<body>
  <p class="tagline">{{ site.description }}</p>
  <ul class="recent">{{ page.recent_posts }}</ul>
</body>
</html>
"""

ARTICLES_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head><title>Articles | {{ site.title }}</title></head>
<body><ul class="posts">{{ page.posts }}</ul></body>
</html>
"""

EDITORS_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head><title>Editors | {{ site.title }}</title></head>
<body><ul class="editors">{{ page.editors }}</ul></body>
</html>
"""

CONFIG = {
    "site": {"title": "Test Blog", "description": "Notes and articles", "url": "https://blog.example"},
    "data": {
        "users": {
            "a@x.com": {"Name": "Ann", "contact": "mailto:a@x.com"},
            "b@y.com": {"Name": "Bob", "contact": "https://bob.example", "company": "acme"},
        },
        "companies": {
            "acme": {"display": "Acme Corp", "contact": "https://acme.example"},
        },
    },
}


def write_post(root: Path, name: str, meta: dict | None = None, body: str = "Some text.\n") -> Path:
    path = root / "posts" / name
    path.parent.mkdir(parents=True, exist_ok=True)
    if meta:
        header = yaml.safe_dump(meta, sort_keys=False)
        path.write_text(f"---\n{header}---\n{body}", encoding="utf-8")
    else:
        path.write_text(body, encoding="utf-8")
    return path


def read_page(root: Path, *parts: str) -> str:
    return root.joinpath("pages", *parts).read_text(encoding="utf-8")


@pytest.fixture
def site(tmp_path: Path) -> Path:
    templates = tmp_path / "src" / "templates"
    templates.mkdir(parents=True)
    templates.joinpath("article.html").write_text(ARTICLE_TEMPLATE, encoding="utf-8")
    templates.joinpath("home.html").write_text(HOME_TEMPLATE, encoding="utf-8")
    templates.joinpath("articles.html").write_text(ARTICLES_TEMPLATE, encoding="utf-8")
    templates.joinpath("editors.html").write_text(EDITORS_TEMPLATE, encoding="utf-8")

    config_dir = tmp_path / "config"
    config_dir.mkdir()
    config_dir.joinpath("config.json").write_text(json.dumps(CONFIG, indent=2), encoding="utf-8")

    (tmp_path / "posts").mkdir()
    return tmp_path
