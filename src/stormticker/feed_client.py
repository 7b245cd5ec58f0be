"""Minimal storm-report feed client (read-only GeoJSON over HTTP)."""

from __future__ import annotations

import logging
from typing import Any

import requests

from stormticker import config

logger = logging.getLogger(__name__)


class FeedClientError(Exception):
    """Raised when the feed cannot be fetched or decoded."""


def is_feature_collection(payload: Any) -> bool:
    """True when *payload* declares itself a GeoJSON FeatureCollection with features."""
    return (
        isinstance(payload, dict)
        and payload.get("type") == "FeatureCollection"
        and isinstance(payload.get("features"), list)
    )


class FeedClient:
    """Thin wrapper around a single ``GET`` of the storm-report feed.

    No retries: a failed fetch is reported and the next scheduled cycle
    tries again.
    """

    def __init__(
        self,
        timeout: float = config.FEED_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(config.request_headers())

    # ── public ──────────────────────────────────────────────────────────
    def fetch(self, url: str) -> Any:
        """Fetch *url* and return the decoded JSON body."""
        logger.info("Fetching data from: %s", url)
        try:
            resp = self._session.get(url, timeout=self._timeout)
        except requests.Timeout as exc:
            raise FeedClientError(f"timeout of {self._timeout}s exceeded") from exc
        except requests.RequestException as exc:
            raise FeedClientError(str(exc)) from exc

        if not 200 <= resp.status_code < 300:
            raise FeedClientError(
                f"Request failed with status code {resp.status_code}: {resp.text[:200]}"
            )
        try:
            return resp.json()
        except ValueError as exc:
            raise FeedClientError(f"Invalid JSON from feed: {exc}") from exc

    def close(self) -> None:
        self._session.close()
