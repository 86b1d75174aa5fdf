"""Authentication endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from content_sync.domain.entities import Identity, LoginResult

from .payload import require_fields, require_text

if TYPE_CHECKING:
    from content_sync.infrastructure.http import ApiGateway


class AuthAPI:
    """``/auth/*`` operations."""

    def __init__(self, gateway: ApiGateway) -> None:
        self._gateway = gateway

    async def login(self, username: str, password: str) -> LoginResult:
        path = "/auth/login"
        data = require_fields(
            await self._gateway.post(path, {"username": username, "password": password}),
            path,
            "token",
            "user",
        )
        require_text(data, "token", path)
        require_fields(data["user"], path, "id")
        return LoginResult.from_dict(data)

    async def logout(self) -> None:
        await self._gateway.post("/auth/logout")

    async def current_user(self) -> Identity:
        path = "/auth/me"
        return Identity.from_dict(require_fields(await self._gateway.get(path), path, "id"))

    async def refresh_token(self) -> str:
        path = "/auth/refresh"
        data = require_fields(await self._gateway.post(path), path, "token")
        return require_text(data, "token", path)
