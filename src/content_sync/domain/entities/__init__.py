"""
Domain Entities

Core business objects mirrored from the content service.
"""

from __future__ import annotations

from .article import Article, ArticleDraft, ArticleStatus, EngagementCounts
from .comment import Comment, CommentDraft
from .identity import Identity, LoginResult, Role
from .page import Page

__all__ = [
    # Identity
    "Identity",
    "LoginResult",
    "Role",
    # Articles
    "Article",
    "ArticleDraft",
    "ArticleStatus",
    "EngagementCounts",
    # Comments
    "Comment",
    "CommentDraft",
    # Lists
    "Page",
]
