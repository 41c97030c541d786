from __future__ import annotations

import re
import shutil
from pathlib import Path
from typing import Mapping

import markdown
import minify_html

from .errors import TemplateNotFoundError

PLACEHOLDER_RE = re.compile(r"\{\{([^}]+)\}\}")
TAG_RE = re.compile(r"<[^>]+>")
TEMPLATE_NAMES = ("article", "home", "articles", "editors")
MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "codehilite"]


def strip_tags(html_text: str) -> str:
    return TAG_RE.sub("", html_text)


def lookup(variables: Mapping, dotted: str) -> object:
    value: object = variables
    for key in dotted.strip().split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(key)
    return value


def render_template(template: str, variables: Mapping) -> str:
    def repl(match: re.Match) -> str:
        value = lookup(variables, match.group(1))
        return "" if value is None else str(value)

    return PLACEHOLDER_RE.sub(repl, template)


def markdown_to_html(text: str) -> str:
    md = markdown.Markdown(extensions=MARKDOWN_EXTENSIONS)
    return md.convert(text)


def read_template(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def load_templates(templates_dir: Path) -> dict[str, str]:
    templates = {}
    for name in TEMPLATE_NAMES:
        path = templates_dir / f"{name}.html"
        if not path.exists():
            raise TemplateNotFoundError(f"Template not found: {path}")
        templates[name] = read_template(path)
    return templates


def redirect_html(target: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta http-equiv="refresh" content="0;url={target}">
  <title>Redirecting…</title>
</head>
<body>
  <p>Redirecting… <a href="{target}">{target}</a></p>
</body>
</html>"""


def compact_html(html_text: str) -> str:
    return minify_html.minify(html_text, minify_css=True, minify_js=True)


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def write_page(path: Path, html_text: str, label: str) -> None:
    write_text(path, compact_html(html_text))
    print(f"  Built: {label}")


def copy_static(static_dir: Path, output_dir: Path, files: list[Path]) -> list[Path]:
    copied = []
    for item in sorted(files, key=lambda p: p.as_posix()):
        dest = output_dir / item.relative_to(static_dir)
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(item, dest)
        copied.append(dest)
    return copied
