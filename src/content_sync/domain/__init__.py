"""
Domain Layer - Core Business Objects

Contains:
- entities: Identity, Article, Comment, Page
"""

from .entities import (
    Article,
    ArticleDraft,
    ArticleStatus,
    Comment,
    CommentDraft,
    EngagementCounts,
    Identity,
    LoginResult,
    Page,
    Role,
)

__all__ = [
    "Article",
    "ArticleDraft",
    "ArticleStatus",
    "Comment",
    "CommentDraft",
    "EngagementCounts",
    "Identity",
    "LoginResult",
    "Page",
    "Role",
]
