"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from content_sync.application.session import SessionContext
from content_sync.infrastructure.http import ApiGateway
from content_sync.infrastructure.storage import TOKEN_KEY, MemoryStorage

from tests.helpers import FakeContentService

# ============================================================
# Environment Fixtures
# ============================================================


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def storage():
    """Empty durable storage (anonymous visitor)."""
    return MemoryStorage()


@pytest.fixture
def authed_storage():
    """Durable storage holding a credential from a previous run."""
    return MemoryStorage({TOKEN_KEY: "stored-token"})


# ============================================================
# Remote service
# ============================================================


@pytest.fixture
def service():
    return FakeContentService()


@pytest.fixture
def session_context(storage):
    return SessionContext(storage)


@pytest.fixture
async def gateway(service, session_context):
    gw = ApiGateway("http://cms.test/api", session_context, transport=service.transport())
    yield gw
    await gw.close()
