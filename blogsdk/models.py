from __future__ import annotations

from dataclasses import dataclass

from .content import parse_iso_date
from .errors import ManifestError


@dataclass(frozen=True)
class CompanyRef:
    display: str
    contact: str

    def to_dict(self) -> dict:
        return {"display": self.display, "contact": self.contact}


@dataclass(frozen=True)
class AuthorRef:
    fullname: str
    contact: str = "#"
    company: CompanyRef | None = None

    def to_dict(self) -> dict:
        return {
            "fullname": self.fullname,
            "contact": self.contact,
            "company": self.company.to_dict() if self.company else None,
        }


@dataclass(frozen=True)
class DocumentSummary:
    """Listing-ready projection of a built document.

    This is also the manifest entry: incremental builds rebuild listing
    pages from these records instead of re-parsing unchanged sources.
    """

    title: str
    slug: str
    id: str
    author: AuthorRef
    source: str = ""
    short: str | None = None
    date: str | None = None
    date_str: str = ""
    description: str = ""

    @property
    def sort_date(self):
        return parse_iso_date(self.date) if self.date else None

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "title": self.title,
            "slug": self.slug,
            "id": self.id,
            "short": self.short,
            "date": self.date,
            "dateStr": self.date_str,
            "description": self.description,
            "author": self.author.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> DocumentSummary:
        if not isinstance(data, dict) or not data.get("slug"):
            raise ManifestError(f"Invalid manifest entry: {data!r}")
        author_data = data.get("author") or {}
        company_data = author_data.get("company")
        company = None
        if company_data:
            company = CompanyRef(
                display=str(company_data.get("display", "")),
                contact=str(company_data.get("contact", "#")),
            )
        date = data.get("date") or None
        if date is not None:
            try:
                parse_iso_date(str(date))
            except ValueError as exc:
                raise ManifestError(f"Invalid date in manifest entry {data['slug']!r}: {date!r}") from exc
            date = str(date)
        short = data.get("short")
        return cls(
            title=str(data.get("title", "")),
            slug=str(data["slug"]),
            id=str(data.get("id", "")),
            author=AuthorRef(
                fullname=str(author_data.get("fullname", "")),
                contact=str(author_data.get("contact", "#")),
                company=company,
            ),
            source=str(data.get("source", "")),
            short=str(short) if short else None,
            date=date,
            date_str=str(data.get("dateStr", "")),
            description=str(data.get("description", "")),
        )
