#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Jinja2 UI views (server-rendered HTML pages)
============================================
GET  /                 — redirect to /docs or /login
GET  /login            — login form
POST /login            — process login
GET  /logout           — logout
GET  /font/up          — bigger text
GET  /font/down        — smaller text
GET  /docs             — root database listing          [auth]
GET  /docs/{node_id}   — page or database, paginated    [auth]
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from kindle_notion.core.config import Settings, get_settings
from kindle_notion.core.security import (
    clear_session_cookie, is_authenticated, set_session_cookie, verify_credentials,
)
from kindle_notion.services.documents import RenderedPage, render_node, render_root
from kindle_notion.services.fonts import (
    FONT_SIZES, get_font_size, safe_back_url, set_font_cookie, step_font_size,
)
from kindle_notion.services.notion import NotionClient, NotionError, get_notion

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

router = APIRouter(tags=["ui"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def _current_url(request: Request) -> str:
    """Path plus query string of the current request."""
    return request.url.path + (f"?{request.url.query}" if request.url.query else "")


def base_context(request: Request, settings: Settings, nav: bool = True, **extra) -> dict:
    """Base template context (request passed separately as first arg to TemplateResponse)."""
    size = get_font_size(request, settings)
    current = _current_url(request)
    return {
        "site_name": settings.app_name,
        "app_version": settings.app_version,
        "nav": nav,
        "font_size": size,
        "can_decrease": size > FONT_SIZES[0],
        "can_increase": size < FONT_SIZES[-1],
        "back": quote(current, safe=""),
        **extra,
    }


def _login_redirect(next_url: str = "/docs") -> RedirectResponse:
    return RedirectResponse(url=f"/login?next={quote(next_url, safe='/')}", status_code=302)


def _render_page(request: Request, settings: Settings, page: RenderedPage):
    return templates.TemplateResponse(
        request,
        "page.html",
        base_context(request, settings, title=page.title, body=page.body),
    )


def _error_page(request: Request, settings: Settings, message: str):
    # Upstream failures are shown in-page; the HTTP status stays 200.
    return templates.TemplateResponse(
        request,
        "error.html",
        base_context(request, settings, title="Error", message=message),
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Home
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.get("/")
async def home(request: Request, settings: Settings = Depends(get_settings)):
    target = "/docs" if is_authenticated(request, settings) else "/login"
    return RedirectResponse(url=target, status_code=302)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Auth UI
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.get("/login", response_class=HTMLResponse)
async def login_form(
    request: Request,
    next: str = "/docs",
    settings: Settings = Depends(get_settings),
):
    if is_authenticated(request, settings):
        return RedirectResponse(url=safe_back_url(next), status_code=302)
    return templates.TemplateResponse(
        request,
        "login.html",
        base_context(request, settings, nav=False, title="Login", next=next, error=None),
    )


@router.post("/login", response_class=HTMLResponse)
async def login_submit(
    request: Request,
    username: str = Form(default=""),
    password: str = Form(default=""),
    next: str     = Form(default="/docs"),
    settings: Settings = Depends(get_settings),
):
    if not verify_credentials(username, password, settings):
        log.info("Failed login for %r", username)
        return templates.TemplateResponse(
            request,
            "login.html",
            base_context(request, settings, nav=False, title="Login", next=next,
                         error="Invalid username or password"),
            status_code=401,
        )

    response = RedirectResponse(url=safe_back_url(next), status_code=303)
    set_session_cookie(response, username, settings)
    return response


@router.get("/logout")
async def logout(settings: Settings = Depends(get_settings)):
    response = RedirectResponse(url="/login", status_code=302)
    clear_session_cookie(response, settings)
    return response


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Font size
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _font_redirect(request: Request, settings: Settings, delta: int, back: Optional[str]):
    size = step_font_size(get_font_size(request, settings), delta)
    response = RedirectResponse(url=safe_back_url(back), status_code=302)
    set_font_cookie(response, size, settings)
    return response


@router.get("/font/up")
async def font_up(
    request: Request,
    back: Optional[str] = None,
    settings: Settings = Depends(get_settings),
):
    return _font_redirect(request, settings, +1, back)


@router.get("/font/down")
async def font_down(
    request: Request,
    back: Optional[str] = None,
    settings: Settings = Depends(get_settings),
):
    return _font_redirect(request, settings, -1, back)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Documents
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.get("/docs", response_class=HTMLResponse)
async def docs_index(
    request: Request,
    cursor: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    store: NotionClient = Depends(get_notion),
):
    if not is_authenticated(request, settings):
        return _login_redirect(_current_url(request))
    try:
        page = await render_root(store, settings, cursor=cursor or None)
    except NotionError as exc:
        log.warning("Notion error listing root database: %s", exc.message)
        return _error_page(request, settings, exc.message)
    return _render_page(request, settings, page)


@router.get("/docs/{node_id}", response_class=HTMLResponse)
async def docs_view(
    request: Request,
    node_id: str,
    cursor: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    store: NotionClient = Depends(get_notion),
):
    if not is_authenticated(request, settings):
        return _login_redirect(_current_url(request))
    try:
        page = await render_node(store, settings, node_id, cursor=cursor or None)
    except NotionError as exc:
        log.warning("Notion error rendering %s: %s", node_id, exc.message)
        return _error_page(request, settings, exc.message)
    return _render_page(request, settings, page)


# -----------------------------------------------------------------------------
