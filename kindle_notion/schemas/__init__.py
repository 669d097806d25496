from kindle_notion.schemas.content import (
    RichSpan,
    Block, Paragraph, Heading1, Heading2, Heading3,
    BulletItem, NumberItem, Quote, ToDo, Code, Divider,
    ChildDocumentRef, ChildCollectionRef, UnsupportedMedia, Unknown,
    Document, Collection, ContentNode,
    PagedResult,
    decode_block, decode_page, decode_database, decode_list,
    DEFAULT_ICON, DEFAULT_TITLE, MEDIA_KINDS,
)

__all__ = [
    "RichSpan",
    "Block", "Paragraph", "Heading1", "Heading2", "Heading3",
    "BulletItem", "NumberItem", "Quote", "ToDo", "Code", "Divider",
    "ChildDocumentRef", "ChildCollectionRef", "UnsupportedMedia", "Unknown",
    "Document", "Collection", "ContentNode",
    "PagedResult",
    "decode_block", "decode_page", "decode_database", "decode_list",
    "DEFAULT_ICON", "DEFAULT_TITLE", "MEDIA_KINDS",
]
