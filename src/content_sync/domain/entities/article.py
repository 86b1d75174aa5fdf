"""
Article Entities - Published and draft content.

Key Entities:
    - ArticleStatus: draft / published / scheduled
    - EngagementCounts: view, like and comment counters
    - Article: A single piece of content as returned by the server
    - ArticleDraft: Fields submitted when creating an article

Architecture:
    Entities are frozen dataclasses. Cache updates replace an entity with a
    modified copy (``dataclasses.replace``) rather than mutating it in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from .identity import Identity


class ArticleStatus(Enum):
    """Publication state of an article."""

    DRAFT = "draft"
    PUBLISHED = "published"
    SCHEDULED = "scheduled"

    @classmethod
    def parse(cls, value: Any) -> ArticleStatus:
        """Unknown or missing states are read as draft."""
        try:
            return cls(value)
        except ValueError:
            return cls.DRAFT


@dataclass(frozen=True, slots=True)
class EngagementCounts:
    """Server-maintained counters."""

    view: int = 0
    like: int = 0
    comment: int = 0


@dataclass(frozen=True, slots=True)
class Article:
    """
    An article as returned by the content service.

    Attributes:
        id: Server-assigned id
        title: Title, also usable as a natural key
        content: Markdown body
        summary: Short summary
        tags: Tag set
        author: Author identity
        status: Publication state
        counts: View/like/comment counters
        cover_image: Optional cover image URL
        created_at: Server timestamp string
        updated_at: Server timestamp string
        published_at: Publication (or scheduled publication) timestamp
    """

    id: int
    title: str
    content: str = ""
    summary: str = ""
    tags: frozenset[str] = field(default_factory=frozenset)
    author: Identity | None = None
    status: ArticleStatus = ArticleStatus.DRAFT
    counts: EngagementCounts = field(default_factory=EngagementCounts)
    cover_image: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    published_at: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Article:
        """Create Article from the wire format."""
        author = data.get("author")
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            content=data.get("content", ""),
            summary=data.get("summary", ""),
            tags=frozenset(data.get("tags") or ()),
            author=Identity.from_dict(author) if author else None,
            status=ArticleStatus.parse(data.get("status")),
            counts=EngagementCounts(
                view=data.get("view_count", 0),
                like=data.get("like_count", 0),
                comment=data.get("comment_count", 0),
            ),
            cover_image=data.get("cover_image") or None,
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            published_at=data.get("published_at"),
        )

    def with_like_delta(self, delta: int) -> Article:
        """Return a copy whose like counter is shifted by ``delta``."""
        return replace(self, counts=replace(self.counts, like=self.counts.like + delta))


@dataclass(slots=True)
class ArticleDraft:
    """Payload for ``POST /articles``."""

    title: str
    content: str
    summary: str = ""
    tags: list[str] = field(default_factory=list)
    status: ArticleStatus = ArticleStatus.DRAFT
    cover_image: str | None = None
    published_at: Any = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "title": self.title,
            "content": self.content,
            "summary": self.summary,
            "tags": list(self.tags),
            "status": self.status.value,
        }
        if self.cover_image:
            payload["cover_image"] = self.cover_image
        if self.published_at is not None:
            payload["published_at"] = self.published_at
        return payload
