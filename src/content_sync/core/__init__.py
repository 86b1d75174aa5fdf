"""
Core module for content-sync.

Provides the unified exception hierarchy shared by every layer.
"""

from .exceptions import (
    # Base
    ContentSyncError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    # API errors
    APIError,
    MalformedResponseError,
    RemoteError,
    SessionExpiredError,
    TransportError,
    # Configuration errors
    ConfigurationError,
)

__all__ = [
    "ContentSyncError",
    "ErrorCategory",
    "ErrorContext",
    "ErrorSeverity",
    "APIError",
    "MalformedResponseError",
    "RemoteError",
    "SessionExpiredError",
    "TransportError",
    "ConfigurationError",
]
