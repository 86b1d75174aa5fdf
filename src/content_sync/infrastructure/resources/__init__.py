"""Per-resource REST operations built on the API gateway."""

from __future__ import annotations

from .articles import ArticleAPI
from .auth import AuthAPI
from .comments import CommentAPI

__all__ = ["ArticleAPI", "AuthAPI", "CommentAPI"]
