"""Read-side facade over the published snapshot, used by the server and CLI."""

from __future__ import annotations

from datetime import datetime

from stormticker import config
from stormticker.feed_client import FeedClient
from stormticker.models import (
    CompactModel,
    DashboardModel,
    Snapshot,
    SnapshotStatus,
    TickerItem,
)
from stormticker.scheduler import RefreshScheduler
from stormticker.views import compact_sections, dashboard_model, ticker_items


class StormService:
    """Every getter reads the current snapshot once and renders from it."""

    def __init__(self, scheduler: RefreshScheduler) -> None:
        self.scheduler = scheduler

    @classmethod
    def from_config(
        cls,
        feed_url: str | None = None,
        interval: float | None = None,
        client: FeedClient | None = None,
    ) -> StormService:
        scheduler = RefreshScheduler(
            client=client or FeedClient(),
            feed_url=feed_url or config.FEED_URL,
            interval=interval if interval and interval > 0 else config.REFRESH_INTERVAL,
        )
        return cls(scheduler)

    @property
    def snapshot(self) -> Snapshot:
        return self.scheduler.snapshot

    def get_status(self) -> SnapshotStatus:
        return self.snapshot.status

    def get_canonical_text(self) -> str:
        return self.snapshot.canonical_text

    def get_last_updated(self) -> datetime:
        return self.snapshot.last_updated

    def get_ticker_items(self) -> list[TickerItem]:
        return ticker_items(self.snapshot)

    def get_compact_sections(self) -> CompactModel:
        return compact_sections(self.snapshot)

    def get_dashboard_model(self) -> DashboardModel:
        return dashboard_model(self.snapshot)

    def set_feed_url(self, url: str) -> None:
        self.scheduler.set_feed_url(url)

    def refresh(self) -> bool:
        return self.scheduler.refresh_now()

    def start(self) -> None:
        self.scheduler.start()

    def stop(self) -> None:
        self.scheduler.stop()
