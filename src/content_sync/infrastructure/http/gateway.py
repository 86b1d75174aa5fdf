"""
API Gateway - the single chokepoint for calls to the content service.

Every request made by the client passes through ``ApiGateway``, which:
- Attaches the session credential as a bearer token (when there is one)
- Unwraps the ``{"data": ...}`` response envelope
- Reacts to 401 by expiring the session, whoever made the call
- Translates httpx failures into the ``content_sync.core`` hierarchy

Failed calls are not retried and concurrent identical calls are not merged.
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Protocol

import httpx
from typing_extensions import Self

from content_sync.core.exceptions import (
    ErrorContext,
    RemoteError,
    SessionExpiredError,
    TransportError,
)

logger = logging.getLogger(__name__)

ResponseType = Literal["json", "binary"]


class SessionHandle(Protocol):
    """What the gateway needs from the session: read the token, expire it."""

    @property
    def credential(self) -> str | None: ...

    def expire(self) -> None: ...


class ApiGateway:
    """
    Verb-shaped access to the content service.

    Example:
        async with ApiGateway("https://cms.example.com/api", session) as api:
            page = await api.get("/articles/published", params={"page": 1})
    """

    _service_name: str = "content-service"

    def __init__(
        self,
        base_url: str,
        session: SessionHandle,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the gateway.

        Args:
            base_url: API root, e.g. "http://localhost:8080/api"
            session: Source of the bearer credential and target of the 401 reaction
            timeout: Request timeout in seconds (httpx enforces it)
            client: Pre-built httpx client; the gateway will not close it
            transport: Custom httpx transport, mainly for tests
        """
        self._base_url = base_url.rstrip("/")
        self._session = session
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def _build_url(self, path: str) -> str:
        """Build full URL from a resource path or a full URL."""
        if path.startswith(("http://", "https://")):
            return path
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self._base_url}{path}"

    def _auth_headers(self) -> dict[str, str]:
        credential = self._session.credential
        if credential:
            return {"Authorization": f"Bearer {credential}"}
        return {}

    # ------------------------------------------------------------------
    # Verbs
    # ------------------------------------------------------------------

    async def get(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        response_type: ResponseType = "json",
    ) -> Any:
        return await self.request("GET", path, params=params, response_type=response_type)

    async def post(
        self,
        path: str,
        json: Any = None,
        *,
        params: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
        response_type: ResponseType = "json",
    ) -> Any:
        return await self.request(
            "POST", path, params=params, json=json, files=files, response_type=response_type
        )

    async def put(
        self,
        path: str,
        json: Any = None,
        *,
        params: dict[str, Any] | None = None,
        response_type: ResponseType = "json",
    ) -> Any:
        return await self.request("PUT", path, params=params, json=json, response_type=response_type)

    async def delete(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        response_type: ResponseType = "json",
    ) -> Any:
        return await self.request("DELETE", path, params=params, json=json, response_type=response_type)

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        files: dict[str, Any] | None = None,
        response_type: ResponseType = "json",
    ) -> Any:
        """
        Issue one request and return the unwrapped payload.

        Returns:
            The envelope's ``data`` member (``None`` when absent), or raw bytes
            when ``response_type="binary"``.

        Raises:
            SessionExpiredError: Status 401 (session already expired)
            RemoteError: Any other non-2xx status
            TransportError: No response was obtained
        """
        ctx = ErrorContext(method=method, path=path)
        response = await self._execute_request(method, path, params=params, json=json, files=files, ctx=ctx)

        if response.status_code == 401:
            logger.warning(f"{self._service_name}: 401 on {method} {path}, expiring session")
            self._session.expire()
            raise SessionExpiredError(_error_body(response), context=ctx)

        if response.is_error:
            body = _error_body(response)
            logger.warning(f"{self._service_name} HTTP error {response.status_code} on {method} {path}")
            raise RemoteError(response.status_code, body, context=ctx)

        return self._parse_response(response, response_type)

    async def _execute_request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None,
        json: Any,
        files: dict[str, Any] | None,
        ctx: ErrorContext,
    ) -> httpx.Response:
        """Execute the HTTP request, mapping transport failures."""
        url = self._build_url(path)
        logger.debug(f"{method} {url} params={params}")
        try:
            return await self._client.request(
                method,
                url,
                params=_clean_params(params),
                json=json if files is None else None,
                files=files,
                headers=self._auth_headers(),
            )
        except httpx.RequestError as e:
            logger.warning(f"{self._service_name} request failed: {method} {path}: {e}")
            raise TransportError(f"{method} {path} failed: {e}", context=ctx) from e

    def _parse_response(self, response: httpx.Response, response_type: ResponseType) -> Any:
        """Strip the envelope; binary bodies are returned untouched."""
        if response_type == "binary":
            return response.content
        if not response.content:
            return None
        try:
            body = response.json()
        except ValueError:
            logger.warning(f"{self._service_name}: non-JSON success body from {response.request.url}")
            return None
        if isinstance(body, dict):
            return body.get("data")
        return None

    async def close(self) -> None:
        """Close the underlying HTTP client if the gateway created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()


def _clean_params(params: dict[str, Any] | None) -> dict[str, Any] | None:
    """Drop ``None`` values and serialise booleans the way the server expects."""
    if not params:
        return None
    cleaned: dict[str, Any] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        cleaned[key] = value
    return cleaned


def _error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
