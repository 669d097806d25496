#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for the font-size preference cookie and controls."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest
from httpx import AsyncClient

from kindle_notion.schemas import Document, PagedResult
from kindle_notion.services.fonts import (
    DEFAULT_FONT_SIZE, FONT_SIZES, safe_back_url, step_font_size,
)


# -----------------------------------------------------------------------------
# Unit
# -----------------------------------------------------------------------------

def test_step_up_and_down():
    assert step_font_size(18, +1) == 20
    assert step_font_size(18, -1) == 16


def test_step_clamps_at_bounds():
    assert step_font_size(FONT_SIZES[-1], +1) == FONT_SIZES[-1]
    assert step_font_size(FONT_SIZES[0], -1) == FONT_SIZES[0]


def test_step_from_unknown_size_starts_at_default():
    assert step_font_size(17, +1) == step_font_size(DEFAULT_FONT_SIZE, +1)


def test_safe_back_url():
    assert safe_back_url("/docs/abc?cursor=x") == "/docs/abc?cursor=x"
    assert safe_back_url(None) == "/docs"
    assert safe_back_url("") == "/docs"
    assert safe_back_url("https://evil.example/") == "/docs"
    assert safe_back_url("//evil.example/") == "/docs"


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_font_up_sets_cookie_and_goes_back(client: AsyncClient):
    resp = await client.get("/font/up", params={"back": "/docs/abc"}, follow_redirects=False)
    assert resp.status_code == 302
    assert resp.headers["location"] == "/docs/abc"
    assert resp.headers["set-cookie"].startswith("fs=20")


@pytest.mark.asyncio
async def test_font_down_from_cookie(client: AsyncClient):
    resp = await client.get("/font/down", headers={"Cookie": "fs=24"}, follow_redirects=False)
    assert resp.headers["location"] == "/docs"
    assert resp.headers["set-cookie"].startswith("fs=22")


@pytest.mark.asyncio
async def test_font_up_clamped(client: AsyncClient):
    resp = await client.get("/font/up", headers={"Cookie": "fs=28"}, follow_redirects=False)
    assert resp.headers["set-cookie"].startswith("fs=28")


@pytest.mark.asyncio
async def test_font_garbage_cookie_uses_default(client: AsyncClient):
    resp = await client.get("/font/down", headers={"Cookie": "fs=huge"}, follow_redirects=False)
    assert resp.headers["set-cookie"].startswith("fs=16")


@pytest.mark.asyncio
async def test_font_external_back_ignored(client: AsyncClient):
    resp = await client.get("/font/up", params={"back": "https://evil.example/"}, follow_redirects=False)
    assert resp.headers["location"] == "/docs"


@pytest.mark.asyncio
async def test_layout_uses_font_size(client: AsyncClient, store, auth_headers):
    store.rows["root-db"] = {None: PagedResult(items=(Document(id="p1", title="One"),))}
    headers = {"Cookie": auth_headers["Cookie"] + "; fs=26"}
    resp = await client.get("/docs", headers=headers)
    assert "font:26px/1.6" in resp.text
    assert '<a href="/font/down?back=%2Fdocs">−</a>' in resp.text
    assert '<a href="/font/up?back=%2Fdocs">+</a>' in resp.text


@pytest.mark.asyncio
async def test_layout_disables_control_at_bound(client: AsyncClient, store, auth_headers):
    store.rows["root-db"] = {None: PagedResult(items=())}
    headers = {"Cookie": auth_headers["Cookie"] + "; fs=28"}
    resp = await client.get("/docs", headers=headers)
    assert "<span>+</span>" in resp.text
    assert "/font/up" not in resp.text


@pytest.mark.asyncio
async def test_login_page_has_no_font_controls(client: AsyncClient):
    resp = await client.get("/login")
    assert "/font/up" not in resp.text


# -----------------------------------------------------------------------------
