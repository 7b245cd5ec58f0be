"""Background refresh loop and the published snapshot it owns."""

from __future__ import annotations

import logging
import threading

from stormticker.feed_client import FeedClient
from stormticker.models import Snapshot
from stormticker.pipeline import error_snapshot, loading_snapshot, run_cycle

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Runs the pipeline at startup and then every *interval* seconds.

    The current ``Snapshot`` is a single reference: each cycle builds a new
    snapshot and swaps it in with one assignment, so readers never see a
    half-built result and never wait on a refresh. Only one cycle runs at a
    time; a tick that arrives while a cycle is still running is skipped.
    """

    def __init__(self, client: FeedClient, feed_url: str, interval: float) -> None:
        if interval <= 0:
            raise ValueError(f"Refresh interval must be positive, got {interval}")
        self._client = client
        self._feed_url = feed_url
        self._interval = interval
        self._snapshot = loading_snapshot(feed_url)
        self._cycle_lock = threading.Lock()
        self._refresh_requested = threading.Event()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    # ── public ──────────────────────────────────────────────────────────

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def feed_url(self) -> str:
        return self._feed_url

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def refresh_now(self) -> bool:
        """Run cycles in the calling thread until no refresh is pending.

        Returns False only when another cycle was already running and this
        call did no work. A refresh requested while a cycle runs is picked
        up after the lock is released, by this call or by whichever thread
        takes the lock next.
        """
        ran = False
        while True:
            if not self._cycle_lock.acquire(blocking=False):
                if not ran:
                    logger.warning("Refresh already in progress; skipping this tick.")
                return ran
            try:
                ran = True
                self._refresh_requested.clear()
                self._snapshot = self._cycle(self._feed_url)
            finally:
                self._cycle_lock.release()
            if not self._refresh_requested.is_set():
                return True
            logger.info("Refresh requested mid-cycle; refreshing again.")

    def set_feed_url(self, url: str) -> None:
        """Point at a new feed and refresh immediately, off the caller's thread."""
        self._feed_url = url
        self._refresh_requested.set()
        logger.info("Updated API URL to: %s", url)
        threading.Thread(
            target=self.refresh_now, name="stormticker-refresh-now", daemon=True
        ).start()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._loop, name="stormticker-refresh", daemon=True)
        self._thread.start()
        logger.info("Refresh loop started (every %ss)", self._interval)

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Refresh loop stopped")

    # ── private ─────────────────────────────────────────────────────────

    def _cycle(self, url: str) -> Snapshot:
        try:
            return run_cycle(self._client, url)
        except Exception as exc:
            # Keep the loop alive; surface the failure as the published state.
            logger.exception("Refresh cycle failed unexpectedly")
            return error_snapshot(str(exc) or type(exc).__name__, url)

    def _loop(self) -> None:
        self.refresh_now()
        while not self._stop_event.wait(self._interval):
            self.refresh_now()
