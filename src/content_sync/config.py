"""
Client settings.

Read from the environment:
    CONTENT_SYNC_API_URL: API root (default: http://localhost:8080/api)
    CONTENT_SYNC_TIMEOUT: Request timeout in seconds (default: 10)
    CONTENT_SYNC_STATE_FILE: JSON file holding the credential and fingerprint
    CONTENT_SYNC_LOGIN_PATH: Route sent to force-login listeners (default: /login)
    CONTENT_SYNC_PAGE_SIZE: Initial page size of every store (default: 10)
    CONTENT_SYNC_TIMEZONE: IANA zone for scheduled timestamps (default: system zone)
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from datetime import tzinfo
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from content_sync.core.exceptions import ConfigurationError

DEFAULT_API_URL = "http://localhost:8080/api"
DEFAULT_STATE_FILE = "~/.content-sync/state.json"


@dataclass(frozen=True, slots=True)
class ClientSettings:
    """Everything the container needs to build a client."""

    api_url: str = DEFAULT_API_URL
    timeout: float = 10.0
    state_file: str = DEFAULT_STATE_FILE
    login_path: str = "/login"
    page_size: int = 10
    timezone: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Format accepted by ``ApplicationContainer.config.from_dict``."""
        return asdict(self)


def load_settings(environ: dict[str, str] | None = None) -> ClientSettings:
    """
    Build settings from environment variables.

    Raises:
        ConfigurationError: A numeric or timezone value is invalid
    """
    env = os.environ if environ is None else environ
    timezone = env.get("CONTENT_SYNC_TIMEZONE") or None
    if timezone:
        resolve_timezone(timezone)
    page_size = _number(env, "CONTENT_SYNC_PAGE_SIZE", int, 10)
    if page_size < 1:
        msg = f"CONTENT_SYNC_PAGE_SIZE must be positive, got {page_size}"
        raise ConfigurationError(msg)
    return ClientSettings(
        api_url=env.get("CONTENT_SYNC_API_URL", DEFAULT_API_URL),
        timeout=_number(env, "CONTENT_SYNC_TIMEOUT", float, 10.0),
        state_file=env.get("CONTENT_SYNC_STATE_FILE", DEFAULT_STATE_FILE),
        login_path=env.get("CONTENT_SYNC_LOGIN_PATH", "/login"),
        page_size=page_size,
        timezone=timezone,
    )


def resolve_timezone(name: str | None) -> tzinfo | None:
    """Map an IANA zone name to ``tzinfo``; ``None`` keeps the system zone."""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        msg = f"Unknown timezone: {name!r}"
        raise ConfigurationError(msg) from e


def _number(env: Any, key: str, kind: type, default: Any) -> Any:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return kind(raw)
    except ValueError as e:
        msg = f"{key} must be a {kind.__name__}, got {raw!r}"
        raise ConfigurationError(msg) from e
