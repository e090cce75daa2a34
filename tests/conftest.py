#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pytest fixtures for blogrender tests.
Posts are plain in-memory dicts, shaped like records from the post store.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from blogrender.core.config import get_settings
from blogrender.main import create_app


# -----------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached per process; tests that patch the env need a clean slate."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest_asyncio.fixture(scope="function")
async def client():
    """HTTP test client wired to a fresh application instance."""
    app = create_app()
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# -----------------------------------------------------------------------------
# Record builders
# -----------------------------------------------------------------------------

@pytest.fixture
def make_body():
    def _make(language: str = "en", content: str = "Hello", fmt: str = "markdown",
              title: str | None = None, default: bool = False) -> dict:
        return {
            "language": language,
            "title": title if title is not None else f"Title ({language})",
            "content": content,
            "format": fmt,
            "default": default,
        }
    return _make


@pytest.fixture
def make_post(make_body):
    def _make(*bodies: dict, **fields) -> dict:
        post = {
            "date": "2024-03-01T12:00:00Z",
            "slug": "hello-world",
            "body": list(bodies) if bodies else [make_body()],
        }
        post.update(fields)
        return post
    return _make


# -----------------------------------------------------------------------------
