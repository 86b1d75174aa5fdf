"""
Session Manager - authenticated-session lifecycle.

States:
    ANONYMOUS -> INITIALIZING -> {AUTHENTICATED, ANONYMOUS}
    AUTHENTICATED -> ANONYMOUS      (logout, or 401 via the gateway)
    AUTHENTICATING                  (transient, only while login() runs)

Callers such as route guards must not make authorization decisions while
``initialized`` is False: bootstrap may still be resolving a stored credential.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from content_sync.core.exceptions import ContentSyncError

if TYPE_CHECKING:
    from content_sync.domain.entities import Identity, LoginResult
    from content_sync.infrastructure.resources import AuthAPI

    from .context import SessionContext

logger = logging.getLogger(__name__)


class SessionStatus(Enum):
    ANONYMOUS = "anonymous"
    INITIALIZING = "initializing"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class SessionManager:
    """Owns login, logout, bootstrap and identity refresh."""

    def __init__(self, context: SessionContext, auth_api: AuthAPI) -> None:
        self._context = context
        self._auth = auth_api
        self._bootstrapping = False
        self._authenticating = False

    # ── State ───────────────────────────────────────────────────────────

    @property
    def context(self) -> SessionContext:
        return self._context

    @property
    def identity(self) -> Identity | None:
        return self._context.identity

    @property
    def initialized(self) -> bool:
        return self._context.initialized

    @property
    def is_loading(self) -> bool:
        return self._authenticating

    @property
    def is_logged_in(self) -> bool:
        return self._context.credential is not None and self._context.identity is not None

    @property
    def is_admin(self) -> bool:
        identity = self._context.identity
        return identity is not None and identity.is_admin

    @property
    def status(self) -> SessionStatus:
        if self._authenticating:
            return SessionStatus.AUTHENTICATING
        if self._bootstrapping:
            return SessionStatus.INITIALIZING
        if self.is_logged_in:
            return SessionStatus.AUTHENTICATED
        return SessionStatus.ANONYMOUS

    # ── Protocol ────────────────────────────────────────────────────────

    async def bootstrap(self) -> Identity | None:
        """
        Resolve a persisted credential into an identity.

        Never raises for remote failures: a credential that cannot be resolved
        is discarded locally. ``initialized`` is set at the end in all cases.
        """
        self._bootstrapping = True
        try:
            if self._context.credential is None:
                logger.debug("No stored credential, starting anonymous")
                return None
            return await self._resolve_identity()
        finally:
            self._bootstrapping = False
            self._context.mark_initialized()

    async def login(self, username: str, password: str) -> LoginResult:
        """
        Authenticate and persist the returned credential.

        Raises:
            ContentSyncError: Remote failure; the previous session is kept
        """
        self._authenticating = True
        try:
            result = await self._auth.login(username, password)
        except ContentSyncError:
            logger.warning(f"Login failed for {username!r}")
            raise
        finally:
            self._authenticating = False

        self._context.set_credential(result.credential)
        self._context.set_identity(result.identity)
        logger.info(f"Logged in as {result.identity.display_name} ({result.identity.role.value})")
        return result

    async def logout(self) -> None:
        """Best-effort remote logout; local state is cleared regardless."""
        try:
            await self._auth.logout()
        except ContentSyncError as e:
            logger.warning(f"Remote logout failed, clearing local session anyway: {e}")
        finally:
            self._context.clear()
            logger.info("Logged out")

    async def refresh_identity(self) -> Identity | None:
        """Re-fetch the identity; on failure, fall back to a local logout."""
        if self._context.credential is None:
            return None
        return await self._resolve_identity()

    async def refresh_credential(self) -> str:
        """
        Exchange the current credential for a fresh one.

        Raises:
            ContentSyncError: Remote failure (a 401 will also have expired the session)
        """
        try:
            token = await self._auth.refresh_token()
        except ContentSyncError:
            logger.exception("Credential refresh failed")
            raise
        self._context.set_credential(token)
        return token

    async def _resolve_identity(self) -> Identity | None:
        try:
            identity = await self._auth.current_user()
        except ContentSyncError as e:
            logger.warning(f"Could not resolve current user, discarding credential: {e}")
            self._context.clear()
            return None
        if self._context.credential is None:
            # logged out while the request was in flight
            return None
        self._context.set_identity(identity)
        logger.info(f"Session restored for {identity.display_name}")
        return identity
