"""
content-sync - client-side state synchronization for a content service.

Keeps an in-memory cache of articles, comments and the authenticated session
consistent with a remote CMS API.

Usage:
    from content_sync import ApplicationContainer, load_settings

    container = ApplicationContainer()
    container.config.from_dict(load_settings().as_dict())

    await container.session_manager().bootstrap()
    articles = container.article_store()
    await articles.fetch_published()
    for article in articles.items:
        print(article.id, article.title)

Components:
    - ApiGateway: single chokepoint for remote calls (bearer auth, envelope, 401)
    - SessionManager: login / logout / bootstrap / identity refresh
    - CollectionStore: paginated-list cache (ArticleStore, CommentStore)
    - DetailCache: the currently viewed entity
"""

from .application.session import SessionContext, SessionManager, SessionStatus
from .application.stores import (
    ArticleStore,
    CollectionState,
    CollectionStore,
    CommentStore,
    DetailCache,
    EditableCollectionStore,
)
from .config import ClientSettings, load_settings
from .container import ApplicationContainer
from .core.exceptions import (
    APIError,
    ConfigurationError,
    ContentSyncError,
    MalformedResponseError,
    RemoteError,
    SessionExpiredError,
    TransportError,
)
from .infrastructure.http import ApiGateway

__version__ = "0.1.0"

__all__ = [
    # Wiring
    "ApplicationContainer",
    "ClientSettings",
    "load_settings",
    # Components
    "ApiGateway",
    "SessionContext",
    "SessionManager",
    "SessionStatus",
    "ArticleStore",
    "CollectionState",
    "CollectionStore",
    "CommentStore",
    "DetailCache",
    "EditableCollectionStore",
    # Errors
    "APIError",
    "ConfigurationError",
    "ContentSyncError",
    "MalformedResponseError",
    "RemoteError",
    "SessionExpiredError",
    "TransportError",
]
