"""
Article endpoints.

Implements the ``ResourceOperations[Article]`` capability set consumed by the
generic collection store, plus the article-only extras (published listing,
search, title lookup, likes, import/export, image upload).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, BinaryIO
from urllib.parse import quote

from content_sync.domain.entities import Article, Page

from .payload import require_fields, require_text

if TYPE_CHECKING:
    from content_sync.infrastructure.http import ApiGateway

FileArg = tuple[str, bytes | BinaryIO] | tuple[str, bytes | BinaryIO, str]


def _page_params(page: int, page_size: int, filters: dict[str, Any]) -> dict[str, Any]:
    return {"page": page, "page_size": page_size, **filters}


def _parse_page(data: Any) -> Page[Article]:
    return Page.from_dict(data, key="articles", parse=Article.from_dict)


class ArticleAPI:
    """``/articles`` and ``/images`` operations."""

    def __init__(self, gateway: ApiGateway) -> None:
        self._gateway = gateway

    # ── Listing ─────────────────────────────────────────────────────────

    async def list_page(self, page: int, page_size: int, **filters: Any) -> Page[Article]:
        """Admin listing (drafts visible with ``include_drafts=True``)."""
        data = await self._gateway.get("/articles", params=_page_params(page, page_size, filters))
        return _parse_page(data)

    async def list_published(self, page: int, page_size: int, **filters: Any) -> Page[Article]:
        data = await self._gateway.get("/articles/published", params=_page_params(page, page_size, filters))
        return _parse_page(data)

    async def search(self, keyword: str, page: int, page_size: int, **filters: Any) -> Page[Article]:
        params = {"keyword": keyword, **_page_params(page, page_size, filters)}
        data = await self._gateway.get("/articles/search", params=params)
        return _parse_page(data)

    # ── Single entity ───────────────────────────────────────────────────

    async def get(self, article_id: int) -> Article:
        return Article.from_dict(await self._gateway.get(f"/articles/{article_id}"))

    async def get_by_title(self, title: str) -> Article:
        return Article.from_dict(await self._gateway.get(f"/articles/title/{quote(title, safe='')}"))

    async def create(self, payload: dict[str, Any]) -> Article:
        return Article.from_dict(await self._gateway.post("/articles", payload))

    async def update(self, article_id: int, payload: dict[str, Any]) -> Article:
        body = {"id": article_id, **payload}
        return Article.from_dict(await self._gateway.put(f"/articles/{article_id}", body))

    async def delete(self, article_id: int, **options: Any) -> None:
        await self._gateway.delete(f"/articles/{article_id}")

    async def unpublish(self, article_id: int) -> None:
        await self._gateway.post(f"/articles/{article_id}/unpublish")

    # ── Engagement ──────────────────────────────────────────────────────

    async def like(self, article_id: int) -> None:
        await self._gateway.post(f"/articles/{article_id}/like")

    async def unlike(self, article_id: int) -> None:
        await self._gateway.delete(f"/articles/{article_id}/like")

    # ── Bulk / media ────────────────────────────────────────────────────

    async def export_archive(self) -> bytes:
        return await self._gateway.get("/articles/export", response_type="binary")

    async def import_archive(self, file: FileArg) -> None:
        await self._gateway.post("/articles/import", files={"file": file})

    async def upload_image(self, file: FileArg) -> str:
        path = "/images/upload"
        data = require_fields(await self._gateway.post(path, files={"file": file}), path, "url")
        return require_text(data, "url", path)
