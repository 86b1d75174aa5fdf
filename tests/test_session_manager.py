"""
Tests for application/session (SessionContext + SessionManager).

Covers: bootstrap ordering, login/logout protocol, identity refresh,
        credential refresh, 401-driven reset from unrelated stores.
"""

from __future__ import annotations

import asyncio
import logging

import httpx
import pytest

from content_sync.application.session import SessionContext, SessionManager, SessionStatus
from content_sync.application.stores import ArticleStore
from content_sync.core.exceptions import MalformedResponseError, RemoteError, SessionExpiredError, TransportError
from content_sync.domain.entities import Identity, Role
from content_sync.infrastructure.http import ApiGateway
from content_sync.infrastructure.resources import ArticleAPI, AuthAPI
from content_sync.infrastructure.storage import TOKEN_KEY, MemoryStorage

from tests.helpers import envelope, user_data


def build(service, storage) -> tuple[SessionManager, ApiGateway]:
    context = SessionContext(storage)
    gateway = ApiGateway("http://cms.test/api", context, transport=service.transport())
    return SessionManager(context, AuthAPI(gateway)), gateway


# ============================================================
# SessionContext
# ============================================================


class TestSessionContext:
    def test_reads_persisted_credential(self, authed_storage):
        context = SessionContext(authed_storage)
        assert context.credential == "stored-token"
        assert context.identity is None
        assert context.initialized is False

    def test_identity_requires_credential(self, storage):
        context = SessionContext(storage)
        with pytest.raises(RuntimeError):
            context.set_identity(Identity(id=1, display_name="alice"))

    def test_clear_removes_persisted_credential(self, authed_storage):
        context = SessionContext(authed_storage)
        context.clear()
        assert authed_storage.get(TOKEN_KEY) is None

    def test_failing_listener_does_not_block_others(self, authed_storage, caplog):
        context = SessionContext(authed_storage)
        navigations: list[str] = []

        def broken(route: str) -> None:
            raise RuntimeError("router not mounted")

        context.subscribe(broken)
        context.subscribe(navigations.append)

        with caplog.at_level(logging.ERROR, logger="content_sync.application.session.context"):
            context.expire()

        assert navigations == ["/login"]
        assert context.credential is None
        assert "router not mounted" in caplog.text


# ============================================================
# bootstrap
# ============================================================


class TestBootstrap:
    async def test_without_credential_makes_no_calls(self, service, storage):
        manager, gateway = build(service, storage)
        assert await manager.bootstrap() is None
        assert manager.initialized is True
        assert manager.identity is None
        assert manager.status is SessionStatus.ANONYMOUS
        assert service.requests == []
        await gateway.close()

    async def test_restores_identity(self, service, authed_storage):
        service.on("GET", "/auth/me", envelope(user_data(5, "carol", "admin")))
        manager, gateway = build(service, authed_storage)

        identity = await manager.bootstrap()

        assert identity.id == 5
        assert identity.role is Role.ADMIN
        assert manager.status is SessionStatus.AUTHENTICATED
        assert manager.is_logged_in and manager.is_admin
        assert manager.initialized is True
        assert service.requests[0].headers["authorization"] == "Bearer stored-token"
        await gateway.close()

    async def test_failure_cleans_up_and_initializes(self, service, authed_storage):
        service.on("GET", "/auth/me", httpx.Response(500, json={"message": "boom"}))
        manager, gateway = build(service, authed_storage)

        assert await manager.bootstrap() is None

        assert manager.initialized is True
        assert manager.context.credential is None
        assert authed_storage.get(TOKEN_KEY) is None
        assert manager.status is SessionStatus.ANONYMOUS
        await gateway.close()

    @pytest.mark.parametrize("payload", [None, "ok", [1, 2], {"username": "no-id"}])
    async def test_malformed_identity_cleans_up(self, service, authed_storage, payload):
        service.on("GET", "/auth/me", envelope(payload))
        manager, gateway = build(service, authed_storage)

        assert await manager.bootstrap() is None

        assert manager.identity is None
        assert manager.context.credential is None
        assert authed_storage.get(TOKEN_KEY) is None
        assert manager.status is SessionStatus.ANONYMOUS
        assert manager.initialized is True
        await gateway.close()

    async def test_initialized_only_after_completion(self, service, authed_storage):
        release = asyncio.Event()
        observed: list[tuple[bool, SessionStatus]] = []
        manager, gateway = build(service, authed_storage)

        async def current_user():
            await release.wait()
            return Identity.from_dict(user_data())

        manager._auth.current_user = current_user  # type: ignore[method-assign]
        task = asyncio.create_task(manager.bootstrap())
        await asyncio.sleep(0)
        observed.append((manager.initialized, manager.status))
        release.set()
        await task

        assert observed == [(False, SessionStatus.INITIALIZING)]
        assert manager.initialized is True
        await gateway.close()


# ============================================================
# login
# ============================================================


class TestLogin:
    async def test_success_persists_credential(self, service, storage):
        service.on("POST", "/auth/login", envelope({"token": "new-token", "user": user_data(3, "dave", "user")}))
        manager, gateway = build(service, storage)

        result = await manager.login("dave", "secret")

        assert result.credential == "new-token"
        assert service.body() == {"username": "dave", "password": "secret"}
        assert storage.get(TOKEN_KEY) == "new-token"
        assert manager.identity.display_name == "dave"
        assert manager.is_admin is False
        assert manager.status is SessionStatus.AUTHENTICATED
        assert manager.is_loading is False
        await gateway.close()

    async def test_failure_keeps_previous_session(self, service, authed_storage):
        service.on("GET", "/auth/me", envelope(user_data()))
        service.on("POST", "/auth/login", httpx.Response(400, json={"message": "bad request"}))
        manager, gateway = build(service, authed_storage)
        await manager.bootstrap()

        with pytest.raises(RemoteError):
            await manager.login("alice", "wrong")

        assert manager.context.credential == "stored-token"
        assert manager.identity.display_name == "alice"
        assert manager.is_loading is False
        await gateway.close()

    @pytest.mark.parametrize(
        "payload",
        [None, {"user": user_data()}, {"token": "", "user": user_data()}, {"token": "t", "user": None}],
    )
    async def test_malformed_login_reply_keeps_state(self, service, storage, payload):
        service.on("POST", "/auth/login", envelope(payload))
        manager, gateway = build(service, storage)

        with pytest.raises(MalformedResponseError):
            await manager.login("dave", "secret")

        assert storage.get(TOKEN_KEY) is None
        assert manager.status is SessionStatus.ANONYMOUS
        await gateway.close()

    async def test_authenticating_is_transient(self, service, storage):
        manager, gateway = build(service, storage)
        release = asyncio.Event()

        async def login(username, password):
            await release.wait()
            raise TransportError("offline")

        manager._auth.login = login  # type: ignore[method-assign]
        task = asyncio.create_task(manager.login("a", "b"))
        await asyncio.sleep(0)
        assert manager.status is SessionStatus.AUTHENTICATING
        assert manager.is_loading is True
        release.set()
        with pytest.raises(TransportError):
            await task
        assert manager.status is SessionStatus.ANONYMOUS
        await gateway.close()


# ============================================================
# logout
# ============================================================


class TestLogout:
    async def test_clears_local_state(self, service, authed_storage):
        service.on("GET", "/auth/me", envelope(user_data()))
        service.on("POST", "/auth/logout", envelope(None))
        manager, gateway = build(service, authed_storage)
        await manager.bootstrap()

        await manager.logout()

        assert manager.identity is None
        assert manager.context.credential is None
        assert authed_storage.get(TOKEN_KEY) is None
        assert service.requests[-1].url.path == "/api/auth/logout"
        await gateway.close()

    async def test_remote_failure_swallowed(self, service, authed_storage):
        service.on("GET", "/auth/me", envelope(user_data()))
        service.on("POST", "/auth/logout", httpx.Response(500))
        manager, gateway = build(service, authed_storage)
        await manager.bootstrap()

        await manager.logout()

        assert manager.status is SessionStatus.ANONYMOUS
        assert authed_storage.get(TOKEN_KEY) is None
        await gateway.close()

    async def test_transport_failure_swallowed(self, authed_storage):
        def offline(request):
            raise httpx.ConnectError("offline", request=request)

        context = SessionContext(authed_storage)
        gateway = ApiGateway("http://cms.test/api", context, transport=httpx.MockTransport(offline))
        manager = SessionManager(context, AuthAPI(gateway))

        await manager.logout()

        assert context.credential is None
        await gateway.close()


# ============================================================
# refresh
# ============================================================


class TestRefresh:
    async def test_refresh_identity_updates(self, service, authed_storage):
        service.on("GET", "/auth/me", envelope(user_data(1, "alice", "user")))
        manager, gateway = build(service, authed_storage)

        identity = await manager.refresh_identity()

        assert identity.role is Role.USER
        assert manager.identity == identity
        await gateway.close()

    async def test_refresh_identity_failure_logs_out_locally(self, service, authed_storage):
        service.on("GET", "/auth/me", httpx.Response(502))
        manager, gateway = build(service, authed_storage)

        assert await manager.refresh_identity() is None
        assert manager.context.credential is None
        await gateway.close()

    async def test_refresh_identity_null_payload_logs_out_locally(self, service, authed_storage):
        service.on("GET", "/auth/me", envelope(None))
        manager, gateway = build(service, authed_storage)

        assert await manager.refresh_identity() is None
        assert authed_storage.get(TOKEN_KEY) is None
        await gateway.close()

    async def test_refresh_credential_without_token_raises(self, service, authed_storage):
        service.on("POST", "/auth/refresh", envelope({}))
        manager, gateway = build(service, authed_storage)
        with pytest.raises(MalformedResponseError):
            await manager.refresh_credential()
        assert authed_storage.get(TOKEN_KEY) == "stored-token"
        await gateway.close()

    async def test_refresh_identity_without_credential(self, service, storage):
        manager, gateway = build(service, storage)
        assert await manager.refresh_identity() is None
        assert service.requests == []
        await gateway.close()

    async def test_refresh_credential(self, service, authed_storage):
        service.on("POST", "/auth/refresh", envelope({"token": "rotated"}))
        manager, gateway = build(service, authed_storage)

        assert await manager.refresh_credential() == "rotated"
        assert authed_storage.get(TOKEN_KEY) == "rotated"
        await gateway.close()

    async def test_refresh_credential_failure_raises(self, service, authed_storage):
        service.on("POST", "/auth/refresh", httpx.Response(500))
        manager, gateway = build(service, authed_storage)
        with pytest.raises(RemoteError):
            await manager.refresh_credential()
        assert authed_storage.get(TOKEN_KEY) == "stored-token"
        await gateway.close()


# ============================================================
# Global 401 reaction
# ============================================================


class TestGlobalUnauthorized:
    async def test_401_from_article_store_resets_session(self, service):
        storage = MemoryStorage({TOKEN_KEY: "stale"})
        service.on("GET", "/auth/me", envelope(user_data()))
        service.on("GET", "/articles", httpx.Response(401, json={"message": "expired"}))
        manager, gateway = build(service, storage)
        navigations: list[str] = []
        manager.context.subscribe(navigations.append)
        await manager.bootstrap()
        store = ArticleStore(ArticleAPI(gateway))

        with pytest.raises(SessionExpiredError):
            await store.fetch()

        assert storage.get(TOKEN_KEY) is None
        assert manager.status is SessionStatus.ANONYMOUS
        assert navigations == ["/login"]
        await gateway.close()

    async def test_failing_listener_keeps_session_error(self, service, authed_storage):
        context = SessionContext(authed_storage)
        gateway = ApiGateway("http://cms.test/api", context, transport=service.transport())
        service.on("GET", "/articles", httpx.Response(401))

        def broken(route: str) -> None:
            raise RuntimeError("router not mounted")

        context.subscribe(broken)

        with pytest.raises(SessionExpiredError):
            await ArticleStore(ArticleAPI(gateway)).fetch()
        assert context.credential is None
        await gateway.close()
