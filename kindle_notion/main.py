#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Kindle Notion: FastAPI application factory
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from kindle_notion.core.config import get_settings
from kindle_notion.ui import views


# -----------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not settings.notion_api_key:
        logging.getLogger(__name__).warning("NOTION_API_KEY is not set; every document request will fail")
    yield


# -----------------------------------------------------------------------------

def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Notion pages as light, paginated HTML for e-reader browsers.",
        # /docs belongs to the reader
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    # ── UI (Jinja2) router ────────────────────────────────────────────────

    app.include_router(views.router)

    # ── Global exception handlers ─────────────────────────────────────────

    @app.exception_handler(404)
    async def not_found(request: Request, exc):
        return views.templates.TemplateResponse(
            request,
            "error.html",
            views.base_context(request, get_settings(), title="Not found",
                               message="The page you requested could not be found."),
            status_code=404,
        )

    # ── Health check ──────────────────────────────────────────────────────

    @app.get("/health", tags=["system"])
    async def health():
        return {"ok": True, "app": settings.app_name, "version": settings.app_version}

    return app


# -----------------------------------------------------------------------------

app = create_app()


# -----------------------------------------------------------------------------
