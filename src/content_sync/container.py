"""
Application DI Container (dependency-injector).

Wires storage, session, gateway and stores together so that every store
shares one gateway and one session context.

Usage::

    from content_sync.config import load_settings
    from content_sync.container import ApplicationContainer

    container = ApplicationContainer()
    container.config.from_dict(load_settings().as_dict())

    session = container.session_manager()
    await session.bootstrap()
    articles = container.article_store()

    # In tests, override any provider:
    container.storage.override(providers.Object(MemoryStorage()))
"""

from __future__ import annotations

from dependency_injector import containers, providers

from content_sync.application.session import SessionContext, SessionManager
from content_sync.application.stores import ArticleStore, CommentStore
from content_sync.config import resolve_timezone
from content_sync.infrastructure.http import ApiGateway
from content_sync.infrastructure.resources import ArticleAPI, AuthAPI, CommentAPI
from content_sync.infrastructure.storage import DeviceFingerprint, JsonFileStorage


class ApplicationContainer(containers.DeclarativeContainer):
    """Central DI container for the content-sync client.

    Providers:
    - ``storage``: durable key-value storage (credential, fingerprint)
    - ``session_context``: credential/identity shared with the gateway
    - ``gateway``: the API gateway
    - ``session_manager``, ``article_store``, ``comment_store``
    - ``fingerprint``: device fingerprint for anonymous comments
    """

    config = providers.Configuration()

    storage = providers.Singleton(JsonFileStorage, path=config.state_file)

    session_context = providers.Singleton(
        SessionContext,
        storage=storage,
        login_path=config.login_path,
    )

    gateway = providers.Singleton(
        ApiGateway,
        base_url=config.api_url,
        session=session_context,
        timeout=config.timeout,
    )

    auth_api = providers.Singleton(AuthAPI, gateway=gateway)
    article_api = providers.Singleton(ArticleAPI, gateway=gateway)
    comment_api = providers.Singleton(CommentAPI, gateway=gateway)

    session_manager = providers.Singleton(SessionManager, context=session_context, auth_api=auth_api)

    article_store = providers.Singleton(
        ArticleStore,
        api=article_api,
        page_size=config.page_size,
        tz=providers.Callable(resolve_timezone, config.timezone),
    )

    comment_store = providers.Singleton(CommentStore, api=comment_api, page_size=config.page_size)

    fingerprint = providers.Singleton(DeviceFingerprint, storage=storage)

__all__ = ["ApplicationContainer"]
