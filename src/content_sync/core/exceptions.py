"""
Unified Exception Hierarchy for content-sync.

Every failure that crosses the API Gateway is translated into one of these
types, so stores and the session manager only ever need to catch
``ContentSyncError``.

Exception Hierarchy:
    ContentSyncError (base)
    ├── APIError
    │   ├── TransportError
    │   ├── RemoteError
    │   │   └── SessionExpiredError
    │   └── MalformedResponseError
    └── ConfigurationError
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    WARNING = auto()  # Recoverable, caller may continue
    ERROR = auto()  # Operation failed
    CRITICAL = auto()  # Client cannot continue


class ErrorCategory(Enum):
    """Categories for error classification."""

    API = "api"
    TRANSPORT = "transport"
    SESSION = "session"
    CONFIGURATION = "config"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """
    Rich context attached to every error.

    Attributes:
        operation: Logical operation name (e.g. "articles.fetch")
        method: HTTP verb of the failing call
        path: Resource path relative to the API base URL
        status: HTTP status code, if a response was received
        detail: Server-supplied message, if any
        metadata: Anything else worth reporting
    """

    operation: str | None = None
    method: str | None = None
    path: str | None = None
    status: int | None = None
    detail: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


class ContentSyncError(Exception):
    """
    Base exception for all content-sync errors.

    Provides:
    - Structured error context
    - Severity classification
    - JSON-friendly formatting
    """

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        category: ErrorCategory = ErrorCategory.API,
    ) -> None:
        super().__init__(message)
        self.context = context or ErrorContext()
        self.severity = severity
        self.category = category

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "error": str(self),
            "category": self.category.value,
            "severity": self.severity.name.lower(),
        }
        if self.context.operation:
            result["operation"] = self.context.operation
        if self.context.path:
            result["path"] = self.context.path
        if self.context.status is not None:
            result["status"] = self.context.status
        if self.context.detail:
            result["detail"] = self.context.detail
        return result


# =============================================================================
# API Errors
# =============================================================================


class APIError(ContentSyncError):
    """Base class for errors raised while talking to the content service."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
        category: ErrorCategory = ErrorCategory.API,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.ERROR,
            category=category,
        )


class TransportError(APIError):
    """Raised when no response could be obtained (DNS, connect, timeout...)."""

    def __init__(
        self,
        message: str = "Request could not be delivered",
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, context=context, category=ErrorCategory.TRANSPORT)


class RemoteError(APIError):
    """Raised when the service answered with a non-success status."""

    def __init__(
        self,
        status: int,
        body: Any = None,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        detail = _extract_detail(body)
        ctx = context or ErrorContext()
        ctx = ErrorContext(
            operation=ctx.operation,
            method=ctx.method,
            path=ctx.path,
            status=status,
            detail=detail or ctx.detail,
            metadata=ctx.metadata,
        )
        message = f"HTTP {status}"
        if detail:
            message = f"HTTP {status}: {detail}"
        super().__init__(message, context=ctx)
        self.status = status
        self.body = body


class SessionExpiredError(RemoteError):
    """
    Raised for status 401.

    By the time this propagates, the gateway has already cleared the
    session and told subscribers to navigate to the login surface.
    """

    def __init__(
        self,
        body: Any = None,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(401, body, context=context)
        self.category = ErrorCategory.SESSION
        self.severity = ErrorSeverity.WARNING


class MalformedResponseError(APIError):
    """Raised when a success response does not carry the expected payload."""

    def __init__(
        self,
        message: str = "Unexpected response payload",
        *,
        payload: Any = None,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, context=context)
        self.payload = payload


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(ContentSyncError):
    """Raised for invalid client configuration."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.CONFIGURATION,
        )


def _extract_detail(body: Any) -> str | None:
    """Pull a human-readable message out of an error body."""
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
        return None
    if isinstance(body, str) and body.strip():
        return body.strip()[:200]
    return None
