"""Comment endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from content_sync.domain.entities import Comment, Page

if TYPE_CHECKING:
    from content_sync.infrastructure.http import ApiGateway


def _parse_page(data: Any) -> Page[Comment]:
    return Page.from_dict(data, key="comments", parse=Comment.from_dict)


class CommentAPI:
    """
    Comment operations.

    ``list_page`` needs an ``article_id`` filter: comments are only ever
    listed per article.
    """

    def __init__(self, gateway: ApiGateway) -> None:
        self._gateway = gateway

    async def list_page(self, page: int, page_size: int, *, article_id: int, **filters: Any) -> Page[Comment]:
        data = await self._gateway.get(
            f"/articles/{article_id}/comments",
            params={"page": page, "page_size": page_size, **filters},
        )
        return _parse_page(data)

    async def list_replies(self, comment_id: int, page: int, page_size: int) -> Page[Comment]:
        data = await self._gateway.get(
            f"/comments/{comment_id}/replies",
            params={"page": page, "page_size": page_size},
        )
        return _parse_page(data)

    async def create(self, payload: dict[str, Any]) -> Comment:
        return Comment.from_dict(await self._gateway.post("/comments", payload))

    async def delete(self, comment_id: int, *, fingerprint: str | None = None) -> None:
        body = {"fingerprint": fingerprint} if fingerprint else None
        await self._gateway.delete(f"/comments/{comment_id}", json=body)
