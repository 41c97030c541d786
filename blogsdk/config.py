from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

import yaml

from .models import AuthorRef, CompanyRef

try:
    import tomllib as toml
except ImportError:
    import tomli as toml

DEFAULT_TITLE = "BlogSDK"
CONFIG_NAMES = ("config.json", "config.toml", "config.yaml", "config.yml")


@dataclass(frozen=True)
class SitePaths:
    root: Path
    posts_dir: Path
    templates_dir: Path
    fraw_dir: Path
    config_dir: Path
    output_dir: Path
    manifest_path: Path

    @classmethod
    def from_root(cls, root: Path) -> SitePaths:
        output_dir = root / "pages"
        return cls(
            root=root,
            posts_dir=root / "posts",
            templates_dir=root / "src" / "templates",
            fraw_dir=root / "src" / "fraw",
            config_dir=root / "config",
            output_dir=output_dir,
            manifest_path=output_dir / "posts-manifest.json",
        )

    def relative(self, path: Path) -> str:
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()


@dataclass(frozen=True)
class SiteConfig:
    title: str = DEFAULT_TITLE
    description: str = ""
    url: str = ""
    users: Mapping[str, dict] = field(default_factory=lambda: MappingProxyType({}))
    companies: Mapping[str, dict] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_dict(cls, data: dict) -> SiteConfig:
        site = data.get("site") or {}
        tables = data.get("data") or {}
        return cls(
            title=str(site.get("title") or DEFAULT_TITLE),
            description=str(site.get("description") or ""),
            url=str(site.get("url") or ""),
            users=MappingProxyType(dict(tables.get("users") or {})),
            companies=MappingProxyType(dict(tables.get("companies") or {})),
        )

    def resolve_company(self, key: object) -> CompanyRef | None:
        if not key:
            return None
        data = self.companies.get(str(key))
        if not data:
            return None
        return CompanyRef(
            display=str(data.get("display") or key),
            contact=str(data.get("contact") or "#"),
        )

    def resolve_author(self, key: str) -> AuthorRef:
        """Look up an author by key, degrading to the raw key when unknown."""
        data = self.users.get(key) or {}
        return AuthorRef(
            fullname=str(data.get("Name") or data.get("name") or key),
            contact=str(data.get("contact") or "#"),
            company=self.resolve_company(data.get("company")),
        )


def find_config(config_dir: Path) -> Path:
    for name in CONFIG_NAMES:
        candidate = config_dir / name
        if candidate.exists():
            return candidate
    return config_dir / CONFIG_NAMES[0]


def load_config(path: Path) -> SiteConfig:
    if not path.exists():
        print(f"Config file not found: {path}", file=sys.stderr)
        sys.exit(1)
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        try:
            data = toml.loads(text)
        except toml.TOMLDecodeError as exc:
            print(f"Invalid TOML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
    elif suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            print(f"Invalid YAML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        if data is None:
            data = {}
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            print(f"Invalid JSON in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
    if not isinstance(data, dict):
        print(f"Config must be a mapping: {path}", file=sys.stderr)
        sys.exit(1)
    problem = config_shape_error(data)
    if problem:
        print(f"Invalid config file {path}: {problem}", file=sys.stderr)
        sys.exit(1)
    return SiteConfig.from_dict(data)


def config_shape_error(data: dict) -> str:
    for section in ("site", "data"):
        if data.get(section) is not None and not isinstance(data[section], dict):
            return f"'{section}' must be a mapping"
    tables = data.get("data") or {}
    for table in ("users", "companies"):
        entries = tables.get(table)
        if entries is None:
            continue
        if not isinstance(entries, dict):
            return f"'data.{table}' must be a mapping"
        for key, value in entries.items():
            if not isinstance(value, dict):
                return f"'data.{table}.{key}' must be a mapping"
    return ""
