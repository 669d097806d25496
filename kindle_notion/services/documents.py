#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Document / collection resolver
==============================
Given a Notion id, work out whether it is a page or a database, fetch one
page of its content and render the body HTML.

Store errors are not handled here; they propagate as NotionError and the
route turns them into an in-page error.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from kindle_notion.core.config import Settings
from kindle_notion.schemas import ContentNode
from kindle_notion.services.notion import NotionAPIError, NotionClient
from kindle_notion.services.renderer import (
    DOCS_ROUTE, doc_route,
    render_blocks, render_collection_header, render_document_header,
    render_listing, render_pagination,
)


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RenderedPage:
    title: str
    body: str


# -----------------------------------------------------------------------------

async def classify(store: NotionClient, node_id: str) -> ContentNode:
    """Look *node_id* up as a page first, then as a database."""
    try:
        return await store.retrieve_page(node_id)
    except NotionAPIError:
        return await store.retrieve_database(node_id)


# -----------------------------------------------------------------------------

async def render_root(
    store: NotionClient,
    settings: Settings,
    cursor: Optional[str] = None,
) -> RenderedPage:
    """The configured root database, as a paginated list of links."""
    result = await store.query_database(
        settings.notion_database_id, cursor=cursor, page_size=settings.listing_page_size,
    )
    body = (
        "<h1>📚 Documents</h1>"
        + render_listing(result.items, empty_text="No documents")
        + render_pagination(result, DOCS_ROUTE)
    )
    return RenderedPage(title="Documents", body=body)


# -----------------------------------------------------------------------------

async def render_node(
    store: NotionClient,
    settings: Settings,
    node_id: str,
    cursor: Optional[str] = None,
) -> RenderedPage:
    node = await classify(store, node_id)
    route = doc_route(node_id)

    if node.kind == "collection":
        result = await store.query_database(
            node_id, cursor=cursor, page_size=settings.listing_page_size,
        )
        body = (
            render_collection_header(node)
            + render_listing(result.items)
            + render_pagination(result, route)
        )
        return RenderedPage(title=node.title, body=body)

    children = await store.list_block_children(
        node_id, cursor=cursor, page_size=settings.document_page_size,
    )
    body = (
        render_document_header(node)
        + render_blocks(children.items)
        + render_pagination(children, route, label="Continue →")
    )
    return RenderedPage(title=node.title, body=body)


# -----------------------------------------------------------------------------
