#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Notion content-store client
===========================
Thin async client over the Notion REST API (httpx).  Only the four read
calls the reader needs are implemented; every response is decoded into the
models in :mod:`kindle_notion.schemas.content` before it leaves this module.

A client is cheap and holds no state worth sharing, so the web layer opens a
fresh one per request (see :func:`get_notion`).
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Optional

import httpx
from fastapi import Depends

from kindle_notion.core.config import Settings, get_settings
from kindle_notion.schemas import (
    Block, Collection, Document, PagedResult,
    decode_block, decode_database, decode_list, decode_page,
)

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Errors
# -----------------------------------------------------------------------------

class NotionError(Exception):
    """Base class for anything that went wrong talking to Notion."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotionAPIError(NotionError):
    """Notion answered, with an error object (not found, forbidden, wrong type...)."""

    def __init__(self, message: str, status: int = 0, code: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.code = code


class NotionRequestError(NotionError):
    """The request never got a usable answer (network, timeout, bad JSON)."""


# -----------------------------------------------------------------------------
# Client
# -----------------------------------------------------------------------------

class NotionClient:

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://api.notion.com/v1",
        notion_version: str = "2022-06-28",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Notion-Version": notion_version,
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> NotionClient:
        return cls(
            settings.notion_api_key,
            base_url=settings.notion_base_url,
            notion_version=settings.notion_version,
            timeout=settings.notion_timeout,
            **kwargs,
        )

    async def __aenter__(self) -> NotionClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ── Transport ──────────────────────────────────────────────────────────

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        log.debug("Notion %s %s", method, path)
        try:
            resp = await self._http.request(method, path, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as exc:
            # InvalidURL and StreamError are not HTTPError subclasses
            raise NotionRequestError(f"Could not reach Notion: {exc}") from exc

        try:
            data = resp.json()
        except ValueError:
            data = None

        if resp.is_error:
            if isinstance(data, dict) and data.get("message"):
                raise NotionAPIError(
                    str(data["message"]),
                    status=resp.status_code,
                    code=str(data.get("code") or ""),
                )
            raise NotionAPIError(
                f"Notion returned HTTP {resp.status_code}",
                status=resp.status_code,
            )
        if not isinstance(data, dict):
            raise NotionRequestError("Notion returned a response that is not a JSON object")
        return data

    # ── Reads ──────────────────────────────────────────────────────────────

    async def retrieve_page(self, page_id: str) -> Document:
        data = await self._request("GET", f"/pages/{page_id}")
        if data.get("object") != "page":
            raise NotionAPIError(f"{page_id} is not a page", code="validation_error")
        return decode_page(data)

    async def retrieve_database(self, database_id: str) -> Collection:
        data = await self._request("GET", f"/databases/{database_id}")
        if data.get("object") != "database":
            raise NotionAPIError(f"{database_id} is not a database", code="validation_error")
        return decode_database(data)

    async def query_database(
        self,
        database_id: str,
        cursor: Optional[str] = None,
        page_size: int = 20,
    ) -> PagedResult[Document]:
        body: dict[str, Any] = {"page_size": page_size}
        if cursor:
            body["start_cursor"] = cursor
        data = await self._request("POST", f"/databases/{database_id}/query", json=body)
        return decode_list(data, decode_page)

    async def list_block_children(
        self,
        block_id: str,
        cursor: Optional[str] = None,
        page_size: int = 100,
    ) -> PagedResult[Block]:
        params: dict[str, Any] = {"page_size": page_size}
        if cursor:
            params["start_cursor"] = cursor
        data = await self._request("GET", f"/blocks/{block_id}/children", params=params)
        return decode_list(data, decode_block)


# -----------------------------------------------------------------------------
# FastAPI dependency
# -----------------------------------------------------------------------------

async def get_notion(settings: Settings = Depends(get_settings)) -> AsyncIterator[NotionClient]:
    async with NotionClient.from_settings(settings) as client:
        yield client


# -----------------------------------------------------------------------------
