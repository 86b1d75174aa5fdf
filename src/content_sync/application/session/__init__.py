"""Session Management."""

from __future__ import annotations

from .context import ForceLoginListener, SessionContext
from .manager import SessionManager, SessionStatus

__all__ = [
    "ForceLoginListener",
    "SessionContext",
    "SessionManager",
    "SessionStatus",
]
