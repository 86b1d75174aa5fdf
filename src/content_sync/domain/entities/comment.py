"""
Comment Entities - Threaded discussion under an article.

Comments form a tree through ``parent_id``. ``replies`` only caches whatever
pages of ``/comments/{id}/replies`` have been fetched so far; it is not
guaranteed to be complete.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .identity import Identity


@dataclass(frozen=True, slots=True)
class Comment:
    """A comment or a reply."""

    id: int
    content: str
    article_id: int
    author: Identity | None = None
    parent_id: int | None = None
    replies: tuple[Comment, ...] = field(default_factory=tuple)
    reply_count: int = 0
    latest_reply: Comment | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Comment:
        """Create Comment from the wire format (recursively for replies)."""
        author = data.get("author")
        latest = data.get("latest_reply")
        return cls(
            id=data["id"],
            content=data.get("content", ""),
            article_id=data.get("article_id", 0),
            author=Identity.from_dict(author) if author else None,
            parent_id=data.get("parent_id"),
            replies=tuple(cls.from_dict(r) for r in data.get("replies") or ()),
            reply_count=data.get("reply_count", 0),
            latest_reply=cls.from_dict(latest) if latest else None,
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


@dataclass(slots=True)
class CommentDraft:
    """Payload for ``POST /comments``."""

    content: str
    article_id: int
    parent_id: int | None = None
    fingerprint: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"content": self.content, "article_id": self.article_id}
        if self.parent_id is not None:
            payload["parent_id"] = self.parent_id
        if self.fingerprint:
            payload["fingerprint"] = self.fingerprint
        return payload
