"""
Test helpers: wire-format factories and a fake content service.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx

# ============================================================
# Wire-format factories
# ============================================================


def user_data(user_id: int = 1, username: str = "alice", role: str = "admin") -> dict[str, Any]:
    return {
        "id": user_id,
        "username": username,
        "email": f"{username}@example.com",
        "role": role,
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
    }


def article_data(article_id: int, **overrides: Any) -> dict[str, Any]:
    data = {
        "id": article_id,
        "title": f"Article {article_id}",
        "content": "# Body",
        "summary": "Summary",
        "tags": ["python"],
        "author": user_data(),
        "status": "published",
        "view_count": 10,
        "like_count": 3,
        "comment_count": 0,
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
        "published_at": "2024-01-01T00:00:00Z",
    }
    data.update(overrides)
    return data


def comment_data(comment_id: int, article_id: int = 1, parent_id: int | None = None, **overrides: Any) -> dict:
    data = {
        "id": comment_id,
        "content": f"Comment {comment_id}",
        "author": user_data(2, "bob", "user"),
        "article_id": article_id,
        "parent_id": parent_id,
        "reply_count": 0,
        "created_at": "2024-01-02T00:00:00Z",
        "updated_at": "2024-01-02T00:00:00Z",
    }
    data.update(overrides)
    return data


def article_page(ids: list[int], total: int, page: int = 1, page_size: int = 10) -> dict[str, Any]:
    return {"articles": [article_data(i) for i in ids], "total": total, "page": page, "page_size": page_size}


def comment_page(comments: list[dict], total: int, page: int = 1, page_size: int = 10) -> dict[str, Any]:
    return {"comments": comments, "total": total, "page": page, "page_size": page_size}


def envelope(payload: Any, status: int = 200) -> httpx.Response:
    return httpx.Response(status, json={"data": payload})


# ============================================================
# Fake content service
# ============================================================

Handler = Callable[[httpx.Request], httpx.Response]


class FakeContentService:
    """
    Route table for ``httpx.MockTransport``.

    Routes are keyed by ``(method, path)`` where path is relative to the
    API root; every received request is recorded.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Handler | httpx.Response] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, response: Handler | httpx.Response) -> None:
        self.routes[(method, path)] = response

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")
        route = self.routes.get((request.method, path))
        if route is None:
            return httpx.Response(404, json={"message": f"no route {request.method} {path}"})
        if callable(route):
            return route(request)
        return httpx.Response(route.status_code, headers=route.headers, content=route.content)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)
