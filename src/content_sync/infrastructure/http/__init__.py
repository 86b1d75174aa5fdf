"""HTTP access to the content service."""

from __future__ import annotations

from .gateway import ApiGateway, ResponseType, SessionHandle

__all__ = ["ApiGateway", "ResponseType", "SessionHandle"]
