from __future__ import annotations

import re

from .content import slugify
from .render import strip_tags

HEADING_RE = re.compile(r"<(h[23])>(.*?)</\1>", re.IGNORECASE)
TOC_JOIN = "\n        "


def build_toc(html_text: str) -> tuple[str, str]:
    """Add anchor ids to h2/h3 headings and build a linked outline.

    Ids come from the heading text with inner markup removed. Repeated
    headings get repeated ids.
    """
    entries = []

    def repl(match: re.Match) -> str:
        tag, text = match.group(1), match.group(2)
        anchor = slugify(strip_tags(text))
        entries.append((tag.lower(), text, anchor))
        return f'<{tag} id="{anchor}">{text}</{tag}>'

    annotated = HEADING_RE.sub(repl, html_text)
    items = []
    for tag, text, anchor in entries:
        indent = ' style="margin-left:1rem"' if tag == "h3" else ""
        items.append(f'<li{indent}><a href="#{anchor}">{text}</a></li>')
    return annotated, TOC_JOIN.join(items)
