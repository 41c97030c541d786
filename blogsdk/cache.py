from __future__ import annotations

import json
from pathlib import Path

from .errors import ManifestError
from .models import DocumentSummary


def list_files(root: Path) -> list[Path]:
    if not root.exists():
        return []
    return [path for path in root.rglob("*") if path.is_file()]


def load_manifest(path: Path) -> list[DocumentSummary]:
    if not path.exists():
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Invalid manifest {path}: {exc}") from exc
    if not isinstance(data, list):
        raise ManifestError(f"Manifest must be a list: {path}")
    return [DocumentSummary.from_dict(item) for item in data]


def write_manifest(path: Path, summaries: list[DocumentSummary]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    data = [summary.to_dict() for summary in summaries]
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


def merge_manifest(cached: list[DocumentSummary], fresh: list[DocumentSummary]) -> list[DocumentSummary]:
    """Replace cached entries by slug with freshly built ones.

    Entries for documents that no longer exist are kept; only a full
    build drops them.
    """
    fresh_slugs = {summary.slug for summary in fresh}
    return [summary for summary in cached if summary.slug not in fresh_slugs] + list(fresh)
