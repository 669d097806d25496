#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pydantic v2 models for Notion content.

Raw API payloads are decoded exactly once, here, into immutable models:
pages and databases become Document / Collection, blocks become one of the
Block variants, list responses become PagedResult.  Anything the decoder does
not recognise (or cannot parse) becomes an Unknown block instead of raising.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Generic, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator


DEFAULT_TITLE = "Untitled"
DEFAULT_ICON = "📄"

T = TypeVar("T")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Rich text
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RichSpan(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = ""
    bold: bool = False
    italic: bool = False
    code: bool = False
    href: Optional[str] = None

    @classmethod
    def from_notion(cls, raw: Mapping[str, Any]) -> RichSpan:
        ann = raw.get("annotations")
        if not isinstance(ann, Mapping):
            ann = {}
        text = raw.get("plain_text")
        href = raw.get("href")
        return cls(
            text=text if isinstance(text, str) else "",
            bold=bool(ann.get("bold")),
            italic=bool(ann.get("italic")),
            code=bool(ann.get("code")),
            href=href if isinstance(href, str) and href else None,
        )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Blocks
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class _Block(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = ""


class _TextBlock(_Block):
    rich_text: tuple[RichSpan, ...] = ()


# -----------------------------------------------------------------------------

class Paragraph(_TextBlock):
    kind: Literal["paragraph"] = "paragraph"


class Heading1(_TextBlock):
    kind: Literal["heading_1"] = "heading_1"


class Heading2(_TextBlock):
    kind: Literal["heading_2"] = "heading_2"


class Heading3(_TextBlock):
    kind: Literal["heading_3"] = "heading_3"


class BulletItem(_TextBlock):
    kind: Literal["bulleted_list_item"] = "bulleted_list_item"


class NumberItem(_TextBlock):
    kind: Literal["numbered_list_item"] = "numbered_list_item"


class Quote(_TextBlock):
    kind: Literal["quote"] = "quote"


class ToDo(_TextBlock):
    kind: Literal["to_do"] = "to_do"
    checked: bool = False


# -----------------------------------------------------------------------------

class Code(_Block):
    """Code block.  Only the first text run is kept."""
    kind: Literal["code"] = "code"
    first_run: Optional[RichSpan] = None


class Divider(_Block):
    kind: Literal["divider"] = "divider"


class ChildDocumentRef(_Block):
    kind: Literal["child_page"] = "child_page"
    target_id: str
    title: str = ""


class ChildCollectionRef(_Block):
    kind: Literal["child_database"] = "child_database"
    target_id: str
    title: str = ""


MEDIA_KINDS = ("image", "video", "embed", "file", "pdf", "audio")


class UnsupportedMedia(_Block):
    kind: Literal["image", "video", "embed", "file", "pdf", "audio"]


class Unknown(_Block):
    kind: str = "unknown"


Block = Union[
    Paragraph, Heading1, Heading2, Heading3,
    BulletItem, NumberItem, Quote, ToDo,
    Code, Divider,
    ChildDocumentRef, ChildCollectionRef,
    UnsupportedMedia, Unknown,
]


_TEXT_BLOCKS: dict[str, type[_TextBlock]] = {
    "paragraph":          Paragraph,
    "heading_1":          Heading1,
    "heading_2":          Heading2,
    "heading_3":          Heading3,
    "bulleted_list_item": BulletItem,
    "numbered_list_item": NumberItem,
    "quote":              Quote,
}


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Content nodes
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class Document(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["document"] = "document"
    id: str
    title: str = DEFAULT_TITLE
    icon: str = DEFAULT_ICON


class Collection(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["collection"] = "collection"
    id: str
    title: str = DEFAULT_TITLE
    icon: str = DEFAULT_ICON


ContentNode = Union[Document, Collection]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Pagination
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class PagedResult(BaseModel, Generic[T]):
    """One page of results.  ``next_cursor`` is opaque and only kept when ``has_more``."""
    model_config = ConfigDict(frozen=True)

    items: tuple[T, ...] = ()
    has_more: bool = False
    next_cursor: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _drop_stale_cursor(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and not data.get("has_more"):
            data = {**data, "next_cursor": None}
        return data


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Decoders
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _spans(payload: Mapping[str, Any], key: str = "rich_text") -> tuple[RichSpan, ...]:
    runs = payload.get(key)
    if not isinstance(runs, list):
        return ()
    return tuple(RichSpan.from_notion(r) for r in runs if isinstance(r, Mapping))


def _plain(payload: Mapping[str, Any], key: str) -> str:
    return "".join(s.text for s in _spans(payload, key))


def _icon(raw: Mapping[str, Any]) -> str:
    icon = raw.get("icon")
    if isinstance(icon, Mapping) and icon.get("type") == "emoji" and icon.get("emoji"):
        return str(icon["emoji"])
    return DEFAULT_ICON


# -----------------------------------------------------------------------------

def page_title(raw: Mapping[str, Any]) -> str:
    """Title of a page: the first non-empty property of type ``title``."""
    props = raw.get("properties")
    if isinstance(props, Mapping):
        for prop in props.values():
            if isinstance(prop, Mapping) and prop.get("type") == "title":
                title = _plain(prop, "title")
                if title:
                    return title
    return DEFAULT_TITLE


def database_title(raw: Mapping[str, Any]) -> str:
    return _plain(raw, "title") or DEFAULT_TITLE


def decode_page(raw: Any) -> Document:
    """A row that is not an object decodes to an id-less :class:`Document`."""
    if not isinstance(raw, Mapping):
        raw = {}
    return Document(id=str(raw.get("id") or ""), title=page_title(raw), icon=_icon(raw))


def decode_database(raw: Any) -> Collection:
    if not isinstance(raw, Mapping):
        raw = {}
    return Collection(id=str(raw.get("id") or ""), title=database_title(raw), icon=_icon(raw))


# -----------------------------------------------------------------------------

def decode_block(raw: Any) -> Block:
    """
    Decode one raw block object.

    Never raises: unrecognised kinds and malformed payloads both come back
    as :class:`Unknown` so a schema change upstream only loses that block.
    """
    if not isinstance(raw, Mapping):
        return Unknown()

    kind = raw.get("type")
    if not isinstance(kind, str) or not kind:
        kind = "unknown"
    block_id = str(raw.get("id") or "")
    payload = raw.get(kind)
    if not isinstance(payload, Mapping):
        payload = {}

    try:
        if kind in _TEXT_BLOCKS:
            return _TEXT_BLOCKS[kind](id=block_id, rich_text=_spans(payload))
        if kind == "to_do":
            return ToDo(id=block_id, rich_text=_spans(payload), checked=bool(payload.get("checked")))
        if kind == "code":
            runs = _spans(payload)
            return Code(id=block_id, first_run=runs[0] if runs else None)
        if kind == "divider":
            return Divider(id=block_id)
        if kind == "child_page":
            return ChildDocumentRef(id=block_id, target_id=block_id, title=payload.get("title") or "")
        if kind == "child_database":
            return ChildCollectionRef(id=block_id, target_id=block_id, title=payload.get("title") or "")
        if kind in MEDIA_KINDS:
            return UnsupportedMedia(id=block_id, kind=kind)
    except ValidationError:
        pass
    return Unknown(id=block_id, kind=kind)


# -----------------------------------------------------------------------------

def decode_list(raw: Mapping[str, Any], decode_item: Callable[[Any], T]) -> PagedResult[T]:
    """Decode a Notion ``list`` response with *decode_item* applied to each result."""
    results = raw.get("results")
    if not isinstance(results, list):
        results = []
    cursor = raw.get("next_cursor")
    return PagedResult(
        items=tuple(decode_item(r) for r in results),
        has_more=bool(raw.get("has_more")),
        next_cursor=cursor if isinstance(cursor, str) else None,
    )


# -----------------------------------------------------------------------------
