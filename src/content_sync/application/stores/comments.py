"""
Comment store - the collection store instantiated for comments.

``items`` holds the top-level comments of one article. Replies live in the
``replies`` cache of their parent and are filled by ``fetch_replies``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from content_sync.domain.entities import Comment, CommentDraft, Page

from .collection import CollectionStore

if TYPE_CHECKING:
    from content_sync.infrastructure.resources import CommentAPI


class CommentStore(CollectionStore[Comment]):
    """Cached comments for the article being viewed."""

    _entity_name = "comments"

    def __init__(self, api: CommentAPI, *, page_size: int = 10) -> None:
        super().__init__(api, page_size=page_size)
        self._api = api

    async def fetch(  # type: ignore[override]
        self, article_id: int, page: int | None = None, page_size: int | None = None
    ) -> Page[Comment]:
        return await self._load(self._api.list_page, page, page_size, {"article_id": article_id})

    async def fetch_replies(self, comment_id: int, page: int = 1, page_size: int | None = None) -> Page[Comment]:
        """
        Load one page of replies into the parent's ``replies`` cache.

        Page 1 replaces the cached replies, later pages append. The parent's
        ``reply_count`` takes the server-reported total.
        """
        size = page_size if page_size is not None else self.state.page_size
        result = await self._remote("fetch_replies", self._api.list_replies(comment_id, page, size))

        def merge(parent: Comment) -> Comment:
            replies = tuple(result.items) if page == 1 else (*parent.replies, *result.items)
            return replace(parent, replies=replies, reply_count=result.total)

        self._apply(comment_id, merge)
        return result

    async def create(self, payload: CommentDraft | Mapping[str, Any]) -> Comment:
        """
        Post a comment.

        A reply whose parent is cached is attached to that parent; anything
        else is prepended to ``items``.
        """
        if isinstance(payload, CommentDraft):
            payload = payload.to_payload()
        comment = await self._remote("create", self._api.create(self._prepare_payload(dict(payload))))

        if comment.parent_id is not None and self.find(comment.parent_id) is not None:
            self._apply(
                comment.parent_id,
                lambda p: replace(p, replies=(*p.replies, comment), reply_count=p.reply_count + 1),
            )
        else:
            self.state.items = [comment, *self.state.items]
        return comment

    async def delete(self, comment_id: int, *, fingerprint: str | None = None) -> None:  # type: ignore[override]
        """Delete a comment or reply; ``fingerprint`` authorizes anonymous deletion."""
        await self._remote("delete", self._api.delete(comment_id, fingerprint=fingerprint))
        self._forget(comment_id)
        self.state.items = [_without_reply(item, comment_id) for item in self.state.items]


def _without_reply(parent: Comment, reply_id: int) -> Comment:
    if not any(r.id == reply_id for r in parent.replies):
        return parent
    return replace(
        parent,
        replies=tuple(r for r in parent.replies if r.id != reply_id),
        reply_count=max(parent.reply_count - 1, 0),
    )
