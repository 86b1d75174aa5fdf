"""
Device fingerprint used to attribute anonymous comments.

The value is opaque to the rest of the client. Once generated it is stored
and never cleared, so it stays stable for the device.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable

from .key_value import FINGERPRINT_KEY, KeyValueStorage

logger = logging.getLogger(__name__)


def _random_fingerprint() -> str:
    return uuid.uuid4().hex


class DeviceFingerprint:
    """
    Lazily generated, persisted device fingerprint.

    Example:
        fingerprint = DeviceFingerprint(storage)
        await comments.delete(42, fingerprint=fingerprint.get())
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        generator: Callable[[], str] = _random_fingerprint,
    ) -> None:
        self._storage = storage
        self._generator = generator

    def stored(self) -> str | None:
        """Return the fingerprint if one was already generated."""
        return self._storage.get(FINGERPRINT_KEY)

    def get(self) -> str:
        """Return the stored fingerprint, generating and persisting one if needed."""
        value = self.stored()
        if value:
            return value
        value = self._generator()
        self._storage.set(FINGERPRINT_KEY, value)
        logger.debug("Generated new device fingerprint")
        return value
