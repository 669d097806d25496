#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pytest fixtures for Kindle Notion tests.
Uses an in-memory fake Notion store so no external services are needed.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from kindle_notion.core.config import Settings, get_settings
from kindle_notion.core.security import create_session_token
from kindle_notion.main import create_app
from kindle_notion.schemas import Block, Collection, Document, PagedResult
from kindle_notion.services.notion import NotionAPIError, NotionError, get_notion


# -----------------------------------------------------------------------------
# Fake content store
# -----------------------------------------------------------------------------

class FakeNotion:
    """Stand-in for NotionClient backed by dicts; records every call."""

    def __init__(self) -> None:
        self.pages: dict[str, Document] = {}
        self.databases: dict[str, Collection] = {}
        self.rows: dict[str, dict[Optional[str], PagedResult[Document]]] = {}
        self.children: dict[str, dict[Optional[str], PagedResult[Block]]] = {}
        self.failures: dict[str, NotionError] = {}
        self.calls: list[tuple] = []

    def _check(self, method: str) -> None:
        if method in self.failures:
            raise self.failures[method]

    async def retrieve_page(self, page_id: str) -> Document:
        self.calls.append(("retrieve_page", page_id))
        self._check("retrieve_page")
        if page_id not in self.pages:
            raise NotionAPIError(f"Could not find page with ID: {page_id}.", 404, "object_not_found")
        return self.pages[page_id]

    async def retrieve_database(self, database_id: str) -> Collection:
        self.calls.append(("retrieve_database", database_id))
        self._check("retrieve_database")
        if database_id not in self.databases:
            raise NotionAPIError(f"Could not find database with ID: {database_id}.", 404, "object_not_found")
        return self.databases[database_id]

    async def query_database(self, database_id: str, cursor: Optional[str] = None,
                             page_size: int = 20) -> PagedResult[Document]:
        self.calls.append(("query_database", database_id, cursor, page_size))
        self._check("query_database")
        try:
            return self.rows[database_id][cursor]
        except KeyError:
            raise NotionAPIError(f"Could not find database with ID: {database_id}.", 404, "object_not_found")

    async def list_block_children(self, block_id: str, cursor: Optional[str] = None,
                                  page_size: int = 100) -> PagedResult[Block]:
        self.calls.append(("list_block_children", block_id, cursor, page_size))
        self._check("list_block_children")
        try:
            return self.children[block_id][cursor]
        except KeyError:
            raise NotionAPIError(f"Could not find block with ID: {block_id}.", 404, "object_not_found")


# -----------------------------------------------------------------------------

@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        environment="testing",
        notion_api_key="secret_test",
        notion_database_id="root-db",
        admin_user="reader",
        admin_pass="s3cret-pass",
        session_secret="test-session-secret",
        session_cookie_secure=False,
    )


@pytest.fixture
def store() -> FakeNotion:
    return FakeNotion()


@pytest.fixture
def app(settings, store):
    """Application wired to the fake store and test settings."""
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_notion] = lambda: store
    return app


@pytest_asyncio.fixture(scope="function")
async def client(app):
    """HTTP test client for the wired application."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def auth_headers(settings) -> dict:
    token = create_session_token(settings.admin_user, settings)
    return {"Cookie": f"{settings.session_cookie}={token}"}


# -----------------------------------------------------------------------------
