"""Pipeline orchestration — wires fetch → normalise → aggregate → render."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from stormticker.aggregate import aggregate
from stormticker.canonical import LOADING, error_text, render_canonical
from stormticker.feed_client import FeedClient, FeedClientError, is_feature_collection
from stormticker.models import Snapshot, SnapshotStatus
from stormticker.normalize import normalize, records_from_features

logger = logging.getLogger(__name__)


def loading_snapshot(feed_url: str = "") -> Snapshot:
    """The state published before the first cycle completes."""
    return Snapshot(
        status=SnapshotStatus.LOADING,
        canonical_text=LOADING,
        last_updated=datetime.now(UTC),
        feed_url=feed_url,
    )


def error_snapshot(message: str, feed_url: str = "") -> Snapshot:
    return Snapshot(
        status=SnapshotStatus.ERROR,
        canonical_text=error_text(message),
        error=message,
        last_updated=datetime.now(UTC),
        feed_url=feed_url,
    )


def build_snapshot(payload: Any, feed_url: str = "") -> Snapshot:
    """Turn a decoded feed body into a complete snapshot.

    Anything other than a FeatureCollection is passed through verbatim as
    pretty-printed JSON.
    """
    now = datetime.now(UTC)
    if not is_feature_collection(payload):
        logger.info("Feed is not a FeatureCollection; passing raw JSON through.")
        raw = json.dumps(payload, indent=2, ensure_ascii=False)
        return Snapshot(
            status=SnapshotStatus.PASSTHROUGH,
            canonical_text=raw,
            raw=raw,
            last_updated=now,
            feed_url=feed_url,
        )

    reports = normalize(records_from_features(payload["features"]))
    model = aggregate(reports)
    return Snapshot(
        status=SnapshotStatus.EMPTY if model.is_empty else SnapshotStatus.OK,
        canonical_text=render_canonical(model),
        model=model,
        last_updated=now,
        feed_url=feed_url,
    )


def run_cycle(client: FeedClient, feed_url: str) -> Snapshot:
    """Execute one refresh cycle; feed failures become an error snapshot."""
    try:
        payload = client.fetch(feed_url)
    except FeedClientError as exc:
        logger.error("Error fetching data: %s", exc)
        return error_snapshot(str(exc), feed_url)

    snapshot = build_snapshot(payload, feed_url)
    logger.info(
        "Data updated successfully [status=%s] — %s",
        snapshot.status,
        snapshot.canonical_text[:200].replace("\n", " | "),
    )
    return snapshot
