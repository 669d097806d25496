#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Font-size preference, kept in a plain cookie.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import Request, Response

from kindle_notion.core.config import Settings


FONT_SIZES = (16, 18, 20, 22, 24, 26, 28)
DEFAULT_FONT_SIZE = 18


# -----------------------------------------------------------------------------

def get_font_size(request: Request, settings: Settings) -> int:
    raw = request.cookies.get(settings.font_cookie, "")
    try:
        size = int(raw)
    except ValueError:
        return DEFAULT_FONT_SIZE
    return size if size in FONT_SIZES else DEFAULT_FONT_SIZE


def step_font_size(current: int, delta: int) -> int:
    """Move *delta* steps along FONT_SIZES, clamped to the ends."""
    idx = FONT_SIZES.index(current) if current in FONT_SIZES else FONT_SIZES.index(DEFAULT_FONT_SIZE)
    idx = min(max(idx + delta, 0), len(FONT_SIZES) - 1)
    return FONT_SIZES[idx]


def set_font_cookie(response: Response, size: int, settings: Settings) -> None:
    response.set_cookie(
        key=settings.font_cookie,
        value=str(size),
        max_age=settings.font_cookie_max_age,
        path="/",
    )


def safe_back_url(back: str | None, default: str = "/docs") -> str:
    """Only follow local paths; anything else goes to *default*."""
    if not back or not back.startswith("/") or back.startswith("//") or "\\" in back:
        return default
    return back


# -----------------------------------------------------------------------------
