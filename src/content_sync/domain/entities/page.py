"""Paginated list payloads."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """
    One page of a server-side list.

    ``total`` is the size of the whole collection, not of this page.
    """

    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 10

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any] | None,
        *,
        key: str,
        parse: Callable[[dict[str, Any]], T],
    ) -> Page[T]:
        """
        Parse ``{<key>: [...], total, page, page_size}``.

        Args:
            data: Unwrapped response payload
            key: Name of the list field ("articles", "comments")
            parse: Entity factory applied to each element
        """
        data = data or {}
        return cls(
            items=[parse(item) for item in data.get(key) or ()],
            total=data.get("total", 0),
            page=data.get("page", 1),
            page_size=data.get("page_size", 10),
        )
