"""
Collection Store - generic paginated-list cache.

One implementation of the merge/mutation policy, instantiated per entity type
with that entity's remote operations injected as a ``ResourceOperations``
capability set.

Fetch merge policy:
    - No page requested, or page 1: the result replaces ``items``
    - Page > 1: the result is appended to ``items`` (no de-duplication)
    - ``total``, ``page`` and ``page_size`` always come from the response
    - A failed fetch leaves the state untouched

Mutation policy (write-through):
    The cache only changes after the server confirmed the call, using the
    entity the server returned. A failed mutation changes nothing and the
    error propagates.

Concurrency:
    Overlapping fetches are neither cancelled nor de-duplicated. Whichever
    settles last defines ``items`` and the pagination metadata.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar

from cachetools import LRUCache

from content_sync.core.exceptions import ContentSyncError
from content_sync.domain.entities import Page

logger = logging.getLogger(__name__)


class HasId(Protocol):
    @property
    def id(self) -> Any: ...


T = TypeVar("T", bound=HasId)
R = TypeVar("R")

PageLoader = Callable[..., Awaitable[Page[T]]]


class ResourceOperations(Protocol[T]):
    """Remote operations a collection store is built from."""

    async def list_page(self, page: int, page_size: int, **filters: Any) -> Page[T]: ...

    async def create(self, payload: dict[str, Any]) -> T: ...

    async def delete(self, entity_id: Any, **options: Any) -> None: ...


class UpdatableOperations(ResourceOperations[T], Protocol[T]):
    """Remote operations of a collection whose entities can be edited."""

    async def update(self, entity_id: Any, payload: dict[str, Any]) -> T: ...


@dataclass
class CollectionState(Generic[T]):
    """
    Observable state of one collection.

    ``total`` reflects the most recent server response even when only part of
    the collection has been loaded.
    """

    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 10
    loading: bool = False

    @property
    def has_more(self) -> bool:
        return len(self.items) < self.total


class DetailCache(Generic[T]):
    """
    The single "currently viewed" entity.

    Backed by a one-slot ``LRUCache`` keyed by entity id, so loading a new
    entity always evicts the previous one.
    """

    def __init__(self) -> None:
        self._cache: LRUCache[Any, T] = LRUCache(maxsize=1)

    @property
    def current(self) -> T | None:
        for value in self._cache.values():
            return value
        return None

    def holds(self, entity_id: Any) -> bool:
        return entity_id in self._cache

    def set(self, entity: T) -> None:
        self._cache[entity.id] = entity

    def sync(self, entity: T) -> None:
        """Replace the cached entity if it has the same id."""
        if self.holds(entity.id):
            self._cache[entity.id] = entity

    def discard(self, entity_id: Any) -> None:
        self._cache.pop(entity_id, None)

    def clear(self) -> None:
        self._cache.clear()


class CollectionStore(Generic[T]):
    """
    Paginated cache over one remote collection.

    Subclasses add entity-specific operations and may override
    ``_prepare_payload`` to transform create/update bodies. Collections
    whose operations can edit entities use ``EditableCollectionStore``.

    Args:
        operations: Remote capability set for this entity type
        page_size: Initial page size
    """

    _entity_name: str = "entity"

    def __init__(self, operations: ResourceOperations[T], *, page_size: int = 10) -> None:
        self._ops = operations
        self.state: CollectionState[T] = CollectionState(page_size=page_size)
        self.detail: DetailCache[T] = DetailCache()

    # ── Convenience accessors ───────────────────────────────────────────

    @property
    def items(self) -> list[T]:
        return self.state.items

    @property
    def current(self) -> T | None:
        return self.detail.current

    @property
    def has_more(self) -> bool:
        return self.state.has_more

    # ── Fetch ───────────────────────────────────────────────────────────

    async def fetch(self, page: int | None = None, page_size: int | None = None, **filters: Any) -> Page[T]:
        """Load a page from the default listing and merge it into ``items``."""
        return await self._load(self._ops.list_page, page, page_size, filters)

    async def _load(
        self,
        loader: PageLoader[T],
        page: int | None,
        page_size: int | None,
        filters: Mapping[str, Any],
        *,
        replace: bool | None = None,
        operation: str = "fetch",
    ) -> Page[T]:
        """
        Shared fetch path.

        Args:
            loader: Listing coroutine ``(page, page_size, **filters) -> Page``
            page: Requested page; ``None`` means the store's current page
            page_size: Requested page size; ``None`` means the current one
            filters: Extra listing parameters
            replace: Force wholesale replacement (search); ``None`` derives
                it from ``page``
            operation: Name used in log messages
        """
        target_page = page if page is not None else self.state.page
        target_size = page_size if page_size is not None else self.state.page_size
        if replace is None:
            replace = page is None or page == 1

        self.state.loading = True
        try:
            result = await loader(target_page, target_size, **filters)
        except ContentSyncError as e:
            logger.error(f"{self._entity_name}.{operation} failed: {e}")
            raise
        finally:
            self.state.loading = False

        self._merge(result, replace=replace)
        return result

    def _merge(self, result: Page[T], *, replace: bool) -> None:
        if replace:
            self.state.items = list(result.items)
        else:
            self.state.items = [*self.state.items, *result.items]
        self.state.total = result.total
        self.state.page = result.page
        self.state.page_size = result.page_size
        logger.debug(
            f"{self._entity_name}: {'replaced' if replace else 'appended'} {len(result.items)} items "
            f"(page {result.page}, total {result.total})"
        )

    async def _load_detail(self, loader: Callable[[], Awaitable[T]], operation: str) -> T:
        self.state.loading = True
        try:
            entity = await loader()
        except ContentSyncError as e:
            logger.error(f"{self._entity_name}.{operation} failed: {e}")
            raise
        finally:
            self.state.loading = False
        self.detail.set(entity)
        return entity

    # ── Mutations ───────────────────────────────────────────────────────

    async def create(self, payload: Mapping[str, Any]) -> T:
        """Create remotely, then prepend the server's entity."""
        entity = await self._remote("create", self._ops.create(self._prepare_payload(dict(payload))))
        self.state.items = [entity, *self.state.items]
        return entity

    async def delete(self, entity_id: Any, **options: Any) -> None:
        """Delete remotely, then drop the entity from ``items`` and the detail view."""
        await self._remote("delete", self._ops.delete(entity_id, **options))
        self._forget(entity_id)

    def reset(self) -> None:
        """Forget everything loaded so far."""
        self.state.items = []
        self.state.total = 0
        self.state.page = 1
        self.detail.clear()

    # ── Helpers ─────────────────────────────────────────────────────────

    def _prepare_payload(self, payload: dict[str, Any]) -> dict[str, Any]:
        return payload

    async def _remote(self, operation: str, call: Awaitable[R]) -> R:
        try:
            return await call
        except ContentSyncError as e:
            logger.error(f"{self._entity_name}.{operation} failed: {e}")
            raise

    def _sync(self, entity: T) -> None:
        self.state.items = [entity if item.id == entity.id else item for item in self.state.items]
        self.detail.sync(entity)

    def _forget(self, entity_id: Any) -> None:
        self.state.items = [item for item in self.state.items if item.id != entity_id]
        self.detail.discard(entity_id)

    def _apply(self, entity_id: Any, change: Callable[[T], T]) -> None:
        """Apply a confirmed local change to every cached copy of one entity."""
        self.state.items = [change(item) if item.id == entity_id else item for item in self.state.items]
        current = self.detail.current
        if current is not None and current.id == entity_id:
            self.detail.set(change(current))

    def find(self, entity_id: Any) -> T | None:
        for item in self.state.items:
            if item.id == entity_id:
                return item
        return None


class EditableCollectionStore(CollectionStore[T]):
    """Collection store whose entities can be updated in place."""

    def __init__(self, operations: UpdatableOperations[T], *, page_size: int = 10) -> None:
        super().__init__(operations, page_size=page_size)
        self._editable_ops = operations

    async def update(self, entity_id: Any, payload: Mapping[str, Any]) -> T:
        """Update remotely, then swap in the server's entity wherever it is cached."""
        entity = await self._remote(
            "update", self._editable_ops.update(entity_id, self._prepare_payload(dict(payload)))
        )
        self._sync(entity)
        return entity
