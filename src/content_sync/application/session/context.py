"""
Session context - the shared, explicitly injected session state.

The gateway reads the credential from here and calls ``expire()`` on a 401.
Anything that needs to react to a forced logout (typically the navigation
layer, which should show the login surface) subscribes with a callback.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from content_sync.domain.entities import Identity
from content_sync.infrastructure.storage import TOKEN_KEY, KeyValueStorage

logger = logging.getLogger(__name__)

ForceLoginListener = Callable[[str], None]


class SessionContext:
    """
    Credential, identity and bootstrap flag.

    Invariant: ``identity`` is only set while ``credential`` is set.

    Args:
        storage: Durable storage the credential is persisted to
        login_path: Route handed to force-login listeners
    """

    def __init__(self, storage: KeyValueStorage, login_path: str = "/login") -> None:
        self._storage = storage
        self._login_path = login_path
        self._credential: str | None = storage.get(TOKEN_KEY)
        self._identity: Identity | None = None
        self._initialized = False
        self._listeners: list[ForceLoginListener] = []

    @property
    def credential(self) -> str | None:
        return self._credential

    @property
    def identity(self) -> Identity | None:
        return self._identity

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def login_path(self) -> str:
        return self._login_path

    def set_credential(self, credential: str) -> None:
        """Store a credential in memory and in durable storage."""
        self._credential = credential
        self._storage.set(TOKEN_KEY, credential)

    def set_identity(self, identity: Identity) -> None:
        if self._credential is None:
            msg = "Cannot attach an identity to a session without a credential"
            raise RuntimeError(msg)
        self._identity = identity

    def mark_initialized(self) -> None:
        self._initialized = True

    def clear(self) -> None:
        """Drop credential and identity, including the persisted credential."""
        self._credential = None
        self._identity = None
        self._storage.delete(TOKEN_KEY)

    def expire(self) -> None:
        """
        Clear the session and tell subscribers to show the login surface.

        A listener that raises is logged; the remaining listeners still run.
        """
        self.clear()
        logger.info("Session expired, forcing navigation to login")
        for listener in list(self._listeners):
            try:
                listener(self._login_path)
            except Exception:
                logger.exception(f"Force-login listener {listener!r} failed")

    def subscribe(self, listener: ForceLoginListener) -> Callable[[], None]:
        """
        Register a force-login callback.

        Returns:
            A function that removes the subscription.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
