#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Tests for single-block rendering.

All tests call the renderer directly, without an HTTP round-trip.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest
from kindle_notion.schemas import (
    BulletItem, ChildCollectionRef, ChildDocumentRef, Code, Divider,
    Heading1, Heading2, Heading3, NumberItem, Paragraph, Quote, RichSpan,
    Document, ToDo, Unknown, UnsupportedMedia, decode_block,
)
from kindle_notion.services.renderer import render_block, render_listing


def _rt(*texts: str) -> tuple[RichSpan, ...]:
    return tuple(RichSpan(text=t) for t in texts)


# ── Text blocks ───────────────────────────────────────────────────────────────

def test_paragraph():
    assert render_block(Paragraph(rich_text=_rt("Hello"))) == "<p>Hello</p>"


def test_empty_paragraph_keeps_blank_line():
    assert render_block(Paragraph()) == "<p>&nbsp;</p>"


def test_paragraph_of_empty_spans_keeps_blank_line():
    assert render_block(Paragraph(rich_text=_rt(""))) == "<p>&nbsp;</p>"


@pytest.mark.parametrize("cls,tag", [(Heading1, "h1"), (Heading2, "h2"), (Heading3, "h3")])
def test_headings(cls, tag):
    assert render_block(cls(rich_text=_rt("Title"))) == f"<{tag}>Title</{tag}>"


def test_list_items_have_no_container():
    assert render_block(BulletItem(rich_text=_rt("a"))) == "<li>a</li>"
    assert render_block(NumberItem(rich_text=_rt("1"))) == "<li>1</li>"


def test_quote():
    assert render_block(Quote(rich_text=_rt("wise"))) == "<blockquote>wise</blockquote>"


def test_rich_text_styles_inside_block():
    block = Paragraph(rich_text=(RichSpan(text="a"), RichSpan(text="b", italic=True)))
    assert render_block(block) == "<p>a<i>b</i></p>"


# ── Code ─────────────────────────────────────────────────────────────────────

def test_code_escapes_first_run():
    block = Code(first_run=RichSpan(text="if a < b && c:\n    pass", bold=True))
    assert render_block(block) == "<pre><code>if a &lt; b &amp;&amp; c:\n    pass</code></pre>"


def test_code_without_text():
    assert render_block(Code()) == "<pre><code></code></pre>"


def test_code_keeps_only_first_run_from_api():
    block = decode_block({
        "type": "code",
        "code": {"rich_text": [{"plain_text": "first"}, {"plain_text": "second"}], "language": "python"},
    })
    assert render_block(block) == "<pre><code>first</code></pre>"


# ── Others ───────────────────────────────────────────────────────────────────

def test_divider():
    assert render_block(Divider()) == "<hr>"


def test_todo_checked():
    block = ToDo(rich_text=(RichSpan(text="done", bold=True),), checked=True)
    assert render_block(block) == "<p>☑ <b>done</b></p>"


def test_todo_unchecked():
    assert render_block(ToDo(rich_text=_rt("later"))) == "<p>☐ later</p>"


def test_child_document_link():
    block = ChildDocumentRef(id="c1", target_id="c1", title="Sub <page>")
    assert render_block(block) == '<p class="item"><a href="/docs/c1">📄 Sub &lt;page&gt;</a></p>'


def test_child_collection_link():
    block = ChildCollectionRef(id="d1", target_id="d1", title="Tasks")
    assert render_block(block) == '<p class="item"><a href="/docs/d1">📊 Tasks</a></p>'


@pytest.mark.parametrize("kind", ["image", "video", "embed", "file", "pdf", "audio"])
def test_media_placeholder(kind):
    assert render_block(UnsupportedMedia(kind=kind)) == "<p><i>[media]</i></p>"


# ── Unknown kinds ────────────────────────────────────────────────────────────

@pytest.mark.parametrize("kind", ["synced_block", "table", "column_list", "callout", "unknown", ""])
def test_unknown_kinds_render_empty(kind):
    assert render_block(Unknown(kind=kind)) == ""


@pytest.mark.parametrize("raw", [
    {"type": "breadcrumb", "breadcrumb": {}},
    {"type": "table_of_contents"},
    {"id": "x"},
    {},
    None,
    "paragraph",
])
def test_unknown_payloads_decode_and_render_empty(raw):
    assert render_block(decode_block(raw)) == ""


def test_child_link_id_is_percent_encoded():
    block = ChildDocumentRef(id="a?b", target_id="a?b", title="Q")
    assert 'href="/docs/a%3Fb"' in render_block(block)


def test_listing_skips_rows_without_id():
    docs = (Document(id="", title="Ghost"), Document(id="p1", title="Real"))
    assert render_listing(docs) == '<a class="item" href="/docs/p1">📄 Real</a>'
    assert render_listing((Document(id=""),)) == "<p>No items</p>"
