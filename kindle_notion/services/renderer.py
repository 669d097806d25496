#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Block renderer
==============
Turns decoded Notion content into the small HTML subset the e-reader
browser handles well.

Pipeline, leaves first:
  - render_rich_text : RichSpan sequence   → inline HTML
  - render_block     : one Block           → HTML fragment
  - render_blocks    : Block sequence      → HTML, with bulleted / numbered
                       items grouped into <ul> / <ol>
  - render_pagination: PagedResult + route → "next page" link (or nothing)

Everything here is a pure function of its input.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import html
from enum import Enum
from typing import Iterable, Optional
from urllib.parse import quote

from kindle_notion.schemas import (
    Block, BulletItem, ChildCollectionRef, ChildDocumentRef, Code,
    Collection, Divider, Document, Heading1, Heading2, Heading3,
    NumberItem, PagedResult, Paragraph, Quote, RichSpan, ToDo,
    UnsupportedMedia,
)


DOCS_ROUTE = "/docs"

CHECKED_GLYPH = "☑"
UNCHECKED_GLYPH = "☐"
CHILD_DOCUMENT_ICON = "📄"
CHILD_COLLECTION_ICON = "📊"
MEDIA_PLACEHOLDER = "<p><i>[media]</i></p>"


def escape(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` for element content."""
    return html.escape(text, quote=False)


def doc_route(node_id: str) -> str:
    """Path of the reader view for *node_id*, before any HTML escaping."""
    return f"{DOCS_ROUTE}/{quote(node_id, safe='')}"


def doc_url(node_id: str) -> str:
    return html.escape(doc_route(node_id))


# -----------------------------------------------------------------------------
# Rich text
# -----------------------------------------------------------------------------

def _render_span(span: RichSpan) -> str:
    s = escape(span.text)
    if span.bold:
        s = f"<b>{s}</b>"
    if span.italic:
        s = f"<i>{s}</i>"
    if span.code:
        s = f"<code>{s}</code>"
    if span.href:
        s = f'<a href="{html.escape(span.href)}">{s}</a>'
    return s


def render_rich_text(spans: Iterable[RichSpan]) -> str:
    return "".join(_render_span(s) for s in spans)


# -----------------------------------------------------------------------------
# Single block
# -----------------------------------------------------------------------------

_HEADING_TAGS = {Heading1: "h1", Heading2: "h2", Heading3: "h3"}


def render_block(block: Block) -> str:
    """
    Render one block.  List items come out as bare ``<li>``; the containers
    are the job of :func:`render_blocks`.  Unknown kinds render as "".
    """
    if isinstance(block, Paragraph):
        return f"<p>{render_rich_text(block.rich_text) or '&nbsp;'}</p>"
    if isinstance(block, (Heading1, Heading2, Heading3)):
        tag = _HEADING_TAGS[type(block)]
        return f"<{tag}>{render_rich_text(block.rich_text)}</{tag}>"
    if isinstance(block, (BulletItem, NumberItem)):
        return f"<li>{render_rich_text(block.rich_text)}</li>"
    if isinstance(block, Quote):
        return f"<blockquote>{render_rich_text(block.rich_text)}</blockquote>"
    if isinstance(block, Code):
        text = block.first_run.text if block.first_run else ""
        return f"<pre><code>{escape(text)}</code></pre>"
    if isinstance(block, Divider):
        return "<hr>"
    if isinstance(block, ToDo):
        glyph = CHECKED_GLYPH if block.checked else UNCHECKED_GLYPH
        return f"<p>{glyph} {render_rich_text(block.rich_text)}</p>"
    if isinstance(block, ChildDocumentRef):
        return (f'<p class="item"><a href="{doc_url(block.target_id)}">'
                f'{CHILD_DOCUMENT_ICON} {escape(block.title)}</a></p>')
    if isinstance(block, ChildCollectionRef):
        return (f'<p class="item"><a href="{doc_url(block.target_id)}">'
                f'{CHILD_COLLECTION_ICON} {escape(block.title)}</a></p>')
    if isinstance(block, UnsupportedMedia):
        return MEDIA_PLACEHOLDER
    return ""


# -----------------------------------------------------------------------------
# Block sequence with list grouping
# -----------------------------------------------------------------------------

class ListState(Enum):
    NONE = "none"
    UNORDERED = "ul"
    ORDERED = "ol"


def _list_state_for(block: Block) -> ListState:
    if isinstance(block, BulletItem):
        return ListState.UNORDERED
    if isinstance(block, NumberItem):
        return ListState.ORDERED
    return ListState.NONE


def _transition(current: ListState, wanted: ListState) -> str:
    """Tags needed to move from *current* list state to *wanted*."""
    if current is wanted:
        return ""
    out = ""
    if current is not ListState.NONE:
        out += f"</{current.value}>"
    if wanted is not ListState.NONE:
        out += f"<{wanted.value}>"
    return out


def render_blocks(blocks: Iterable[Block]) -> str:
    """
    Render blocks in source order, wrapping runs of bulleted items in
    ``<ul>`` and runs of numbered items in ``<ol>``.

    Lists are never nested and are always closed, including at the end of
    the sequence.  A list cut by a page boundary is closed on each page.
    """
    parts: list[str] = []
    state = ListState.NONE
    for block in blocks:
        wanted = _list_state_for(block)
        parts.append(_transition(state, wanted))
        parts.append(render_block(block))
        state = wanted
    parts.append(_transition(state, ListState.NONE))
    return "".join(parts)


# -----------------------------------------------------------------------------
# Headers, listings, pagination
# -----------------------------------------------------------------------------

def render_document_header(doc: Document) -> str:
    return f"<h1>{escape(doc.icon)} {escape(doc.title)}</h1>"


def render_collection_header(collection: Collection) -> str:
    return f"<h1>{escape(collection.title)}</h1>"


def render_listing(docs: Iterable[Document], empty_text: str = "No items") -> str:
    items = "".join(
        f'<a class="item" href="{doc_url(d.id)}">{escape(d.icon)} {escape(d.title)}</a>'
        for d in docs if d.id
    )
    return items or f"<p>{escape(empty_text)}</p>"


def render_pagination(page: PagedResult, route: str, label: str = "Next →") -> str:
    """
    Link to the next page of *route*, or "" when there is none.

    The cursor is handed back exactly as Notion issued it; it is only
    percent-encoded for the query string.
    """
    cursor: Optional[str] = page.next_cursor
    if not page.has_more or not cursor:
        return ""
    href = f"{route}?cursor={quote(cursor, safe='')}"
    return f'<div class="pg"><a href="{html.escape(href)}">{escape(label)}</a></div>'


# -----------------------------------------------------------------------------
