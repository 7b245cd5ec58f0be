"""FastAPI application exposing the storm-report views.

Routes
  GET /               plain canonical-text page
  GET /ticker         scrolling ticker overlay
  GET /compact        compact overlay
  GET /dashboard      statistics dashboard
  GET /api/data       canonical text + status as JSON
  GET /api/ticker     ticker items as JSON
  GET /api/compact    compact sections as JSON
  GET /api/dashboard  dashboard model as JSON
  GET /config         show config, or ``?url=`` to switch feeds
  GET /health         health-check
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any
from urllib.parse import urlparse
from zoneinfo import ZoneInfo

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from stormticker import config, templates
from stormticker.models import CompactModel, DashboardModel, SnapshotStatus, TickerItem
from stormticker.service import StormService

logger = logging.getLogger(__name__)

_DATA_RELOAD_MS = 30_000
_VIEW_RELOAD_MS = 60_000


def _local(when: datetime, fmt: str) -> str:
    return when.astimezone(ZoneInfo(config.DISPLAY_TIMEZONE)).strftime(fmt)


def create_app(service: StormService, start_scheduler: bool = True) -> FastAPI:
    """Build the app around *service*; the refresh loop runs for the app's lifetime."""
    started = time.monotonic()

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        if start_scheduler:
            service.start()
        try:
            yield
        finally:
            if start_scheduler:
                service.stop()

    app = FastAPI(
        title="Storm Ticker",
        description="Local storm reports rendered as broadcast overlays.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── HTML views ────────────────────────────────────────────────────

    @app.get("/", response_class=HTMLResponse)
    def data_page() -> str:
        snapshot = service.snapshot
        body = templates.DATA_BODY.render(
            text=snapshot.canonical_text,
            is_error=snapshot.status is SnapshotStatus.ERROR,
            updated=_local(snapshot.last_updated, "%b %d, %Y, %I:%M:%S %p"),
        )
        return templates.render_page("Storm Reports", templates.DATA_CSS, body, _DATA_RELOAD_MS)

    @app.get("/ticker", response_class=HTMLResponse)
    def ticker_page() -> str:
        body = templates.TICKER_BODY.render(items=service.get_ticker_items())
        return templates.render_page("Weather Ticker", templates.TICKER_CSS, body, _VIEW_RELOAD_MS)

    @app.get("/compact", response_class=HTMLResponse)
    def compact_page() -> str:
        snapshot = service.snapshot
        body = templates.COMPACT_BODY.render(
            compact=service.get_compact_sections(),
            updated=_local(snapshot.last_updated, "%I:%M:%S %p"),
        )
        return templates.render_page("Weather Compact", templates.COMPACT_CSS, body, _VIEW_RELOAD_MS)

    @app.get("/dashboard", response_class=HTMLResponse)
    def dashboard_page() -> str:
        snapshot = service.snapshot
        body = templates.DASHBOARD_BODY.render(
            dash=service.get_dashboard_model(),
            updated=_local(snapshot.last_updated, "%I:%M:%S %p"),
        )
        return templates.render_page(
            "Storm Dashboard", templates.DASHBOARD_CSS, body, _VIEW_RELOAD_MS
        )

    # ── JSON API ──────────────────────────────────────────────────────

    @app.get("/api/data")
    def api_data() -> dict[str, Any]:
        snapshot = service.snapshot
        return {
            "data": snapshot.canonical_text,
            "lastUpdated": snapshot.last_updated.isoformat(),
            "status": snapshot.status.value,
        }

    @app.get("/api/ticker", response_model=list[TickerItem])
    def api_ticker() -> list[TickerItem]:
        return service.get_ticker_items()

    @app.get("/api/compact", response_model=CompactModel)
    def api_compact() -> CompactModel:
        return service.get_compact_sections()

    @app.get("/api/dashboard", response_model=DashboardModel)
    def api_dashboard() -> DashboardModel:
        return service.get_dashboard_model()

    # ── Operations ────────────────────────────────────────────────────

    @app.get("/config")
    def config_endpoint(url: str | None = Query(default=None)) -> dict[str, Any]:
        scheduler = service.scheduler
        if not url:
            return {
                "message": "Current configuration",
                "apiUrl": scheduler.feed_url,
                "refreshInterval": scheduler.interval,
            }
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise HTTPException(status_code=400, detail=f"Not an http(s) URL: {url}")
        service.set_feed_url(url)
        return {"message": "URL updated successfully", "newUrl": url}

    @app.get("/health")
    def health() -> dict[str, Any]:
        return {
            "status": "healthy",
            "uptime": round(time.monotonic() - started, 3),
            "lastUpdated": service.get_last_updated().isoformat(),
        }

    return app
