"""Collection stores and their detail caches."""

from __future__ import annotations

from .articles import ArticleStore
from .collection import (
    CollectionState,
    CollectionStore,
    DetailCache,
    EditableCollectionStore,
    ResourceOperations,
    UpdatableOperations,
)
from .comments import CommentStore
from .scheduling import localize_schedule, to_zoned_timestamp

__all__ = [
    "ArticleStore",
    "CollectionState",
    "CollectionStore",
    "CommentStore",
    "DetailCache",
    "EditableCollectionStore",
    "ResourceOperations",
    "UpdatableOperations",
    "localize_schedule",
    "to_zoned_timestamp",
]
