"""Durable client-side storage."""

from __future__ import annotations

from .fingerprint import DeviceFingerprint
from .key_value import (
    FINGERPRINT_KEY,
    TOKEN_KEY,
    JsonFileStorage,
    KeyValueStorage,
    MemoryStorage,
)

__all__ = [
    "DeviceFingerprint",
    "FINGERPRINT_KEY",
    "TOKEN_KEY",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
]
