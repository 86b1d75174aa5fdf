"""
Article store - the editable collection store instantiated for articles.

Adds the published listing, keyword search, title lookup, publish/unpublish
helpers, like/unlike and the bulk import/export passthroughs. Schedule
timestamps are zoned before create/update.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from datetime import tzinfo
from enum import Enum
from typing import TYPE_CHECKING, Any

from content_sync.domain.entities import Article, ArticleDraft, ArticleStatus, Page

from .collection import EditableCollectionStore
from .scheduling import localize_schedule

if TYPE_CHECKING:
    from content_sync.infrastructure.resources import ArticleAPI
    from content_sync.infrastructure.resources.articles import FileArg


class ArticleStore(EditableCollectionStore[Article]):
    """
    Cached view of the article collection.

    Example:
        store = ArticleStore(ArticleAPI(gateway))
        await store.fetch_published()            # page 1, replaces
        await store.fetch_published(page=2)      # appends
        await store.like(store.items[0].id)
    """

    _entity_name = "articles"

    def __init__(self, api: ArticleAPI, *, page_size: int = 10, tz: tzinfo | None = None) -> None:
        super().__init__(api, page_size=page_size)
        self._api = api
        self._tz = tz

    # ── Listing ─────────────────────────────────────────────────────────

    async def fetch_published(
        self, page: int | None = None, page_size: int | None = None, **filters: Any
    ) -> Page[Article]:
        return await self._load(self._api.list_published, page, page_size, filters, operation="fetch_published")

    async def search(
        self, keyword: str, page: int = 1, page_size: int | None = None, **filters: Any
    ) -> Page[Article]:
        """Keyword search. Always replaces ``items``, whatever page was loaded before."""

        async def loader(p: int, size: int, **f: Any) -> Page[Article]:
            return await self._api.search(keyword, p, size, **f)

        return await self._load(loader, page, page_size, filters, replace=True, operation="search")

    # ── Detail ──────────────────────────────────────────────────────────

    async def fetch_by_id(self, article_id: int) -> Article:
        return await self._load_detail(lambda: self._api.get(article_id), "fetch_by_id")

    async def fetch_by_title(self, title: str) -> Article:
        return await self._load_detail(lambda: self._api.get_by_title(title), "fetch_by_title")

    # ── Mutations ───────────────────────────────────────────────────────

    async def create(self, payload: ArticleDraft | Mapping[str, Any]) -> Article:
        if isinstance(payload, ArticleDraft):
            payload = payload.to_payload()
        return await super().create(payload)

    async def update(self, article_id: int, payload: Mapping[str, Any] | None = None, **changes: Any) -> Article:
        return await super().update(article_id, {**(payload or {}), **changes})

    async def publish(self, article_id: int) -> Article:
        return await self.update(article_id, status=ArticleStatus.PUBLISHED)

    async def unpublish(self, article_id: int) -> None:
        """Revert to draft. The server returns no entity, so the change is applied locally after success."""
        await self._remote("unpublish", self._api.unpublish(article_id))
        self._apply(article_id, lambda a: replace(a, status=ArticleStatus.DRAFT, published_at=None))

    async def like(self, article_id: int) -> None:
        await self._remote("like", self._api.like(article_id))
        self._apply(article_id, lambda a: a.with_like_delta(1))

    async def unlike(self, article_id: int) -> None:
        await self._remote("unlike", self._api.unlike(article_id))
        self._apply(article_id, lambda a: a.with_like_delta(-1))

    # ── Bulk / media (no cache effect) ──────────────────────────────────

    async def export_archive(self) -> bytes:
        return await self._remote("export", self._api.export_archive())

    async def import_archive(self, file: FileArg) -> None:
        await self._remote("import", self._api.import_archive(file))

    async def upload_image(self, file: FileArg) -> str:
        return await self._remote("upload_image", self._api.upload_image(file))

    def _prepare_payload(self, payload: dict[str, Any]) -> dict[str, Any]:
        payload = {k: v.value if isinstance(v, Enum) else v for k, v in payload.items()}
        if isinstance(payload.get("tags"), (set, frozenset, tuple)):
            payload["tags"] = sorted(payload["tags"])
        return localize_schedule(payload, self._tz)
