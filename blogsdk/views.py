from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ArticleView:
    site_title: str
    site_url: str
    title: str
    description: str
    content: str
    date: str
    toc: str
    author_fullname: str
    author_contact: str
    company_html: str

    def to_vars(self) -> dict:
        return {
            "site": {"title": self.site_title, "url": self.site_url},
            "page": {
                "title": self.title,
                "description": self.description,
                "content": self.content,
                "date": self.date,
                "toc": self.toc,
                "author": {
                    "fullname": self.author_fullname,
                    "contact": self.author_contact,
                    "company_html": self.company_html,
                },
            },
        }


@dataclass(frozen=True)
class HomeView:
    site_title: str
    site_description: str
    recent_posts: str

    def to_vars(self) -> dict:
        return {
            "site": {"title": self.site_title, "description": self.site_description},
            "page": {"recent_posts": self.recent_posts},
        }


@dataclass(frozen=True)
class ArticlesView:
    site_title: str
    posts: str

    def to_vars(self) -> dict:
        return {"site": {"title": self.site_title}, "page": {"posts": self.posts}}


@dataclass(frozen=True)
class EditorsView:
    site_title: str
    editors: str

    def to_vars(self) -> dict:
        return {"site": {"title": self.site_title}, "page": {"editors": self.editors}}
