from __future__ import annotations

import datetime as dt
import re
from pathlib import Path

import yaml

from .errors import FrontMatterError

STRIP_RE = re.compile(r"[^A-Za-z0-9_\s-]")
SPACE_RE = re.compile(r"\s+")
DASH_RE = re.compile(r"-+")

SHORT_ID_SEED = 5381
SHORT_ID_MAX_LEN = 6
SHORT_ID_MIN_LEN = 4
BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def slugify(text: str) -> str:
    text = STRIP_RE.sub("", str(text).lower()).strip()
    text = SPACE_RE.sub("-", text)
    text = DASH_RE.sub("-", text)
    return text.strip("-")


def _int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(BASE36[rem])
    return "".join(reversed(digits))


def short_id(text: str) -> str:
    """Stable short identifier for a title.

    Rolling 32-bit hash over the UTF-16 code units of ``text``; the same
    title always maps to the same id, so ``/a/<id>/`` links survive
    changes to anything but the title itself.
    """
    data = str(text).encode("utf-16-le")
    h = SHORT_ID_SEED
    for i in range(0, len(data), 2):
        code = data[i] | (data[i + 1] << 8)
        h = _int32(_int32(h * 31) + code)
    return _base36(abs(h))[:SHORT_ID_MAX_LEN].rjust(SHORT_ID_MIN_LEN, "0")


def parse_front_matter(text: str, source: Path | str = "<string>") -> tuple[dict, str]:
    clean_text = text.lstrip("\ufeff")
    lines = clean_text.splitlines()
    if not lines or lines[0].strip() != "---":
        return {}, clean_text

    end = None
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            end = i
            break
    if end is None:
        return {}, clean_text

    header = "\n".join(lines[1:end])
    try:
        meta = yaml.safe_load(header)
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"Invalid front matter in {source}: {exc}") from exc
    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise FrontMatterError(f"Front matter must be a mapping: {source}")
    body = "\n".join(lines[end + 1 :])
    return meta, body


def parse_iso_date(value: str) -> dt.datetime:
    parsed = dt.datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(dt.timezone.utc).replace(tzinfo=None)
    return parsed


def normalize_date(value: object, source: Path | str = "<string>") -> str | None:
    if value is None or value == "":
        return None
    if isinstance(value, (dt.datetime, dt.date)):
        return value.isoformat()
    text = str(value).strip()
    try:
        parse_iso_date(text)
    except ValueError as exc:
        raise FrontMatterError(f"Invalid date in {source}: {text!r}") from exc
    return text


def format_date(value: str | None) -> str:
    if not value:
        return ""
    parsed = parse_iso_date(value)
    return f"{parsed:%B} {parsed.day}, {parsed.year}"
