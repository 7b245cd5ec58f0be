"""Normalisation — raw feed records into canonical ``StormReport`` entities."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from pydantic import ValidationError

from stormticker.models import RawFeedRecord, StormReport

logger = logging.getLogger(__name__)


def _clean(value: str | None) -> str | None:
    """Strip *value*; empty strings and the literal ``null`` become None."""
    if value is None:
        return None
    stripped = value.strip()
    if not stripped or stripped.lower() == "null":
        return None
    return stripped


def _first(*values: str | None) -> str | None:
    for value in values:
        cleaned = _clean(value)
        if cleaned is not None:
            return cleaned
    return None


def parse_magnitude(raw: str | None) -> tuple[float | None, str | None]:
    """Return ``(value, text)``; both None unless *raw* is a usable number."""
    text = _clean(raw)
    if text is None:
        return None, None
    try:
        value = float(text)
    except ValueError:
        return None, None
    if value != value:  # NaN
        return None, None
    return value, text


def parse_time(raw: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    text = _clean(raw)
    if text is None:
        return None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def normalize_record(record: RawFeedRecord) -> StormReport | None:
    """Resolve one record, or return None when its timestamp is unusable."""
    when = parse_time(record.valid_time)
    if when is None:
        return None

    magnitude, magnitude_text = parse_magnitude(record.magnitude)
    # Kept as published; length caps and display use the raw text.
    remark = record.remark if _clean(record.remark) is not None else None

    try:
        return StormReport(
            weather_type=_first(record.type_text, record.type) or "UNKNOWN",
            state=_first(record.state, record.st) or "Unknown",
            city=_clean(record.city) or "Unknown",
            county=_clean(record.county),
            magnitude=magnitude,
            magnitude_text=magnitude_text,
            unit=_clean(record.unit),
            time=when,
            remark=remark,
            source=_clean(record.source),
        )
    except ValidationError:
        logger.debug("Rejected record %r", record, exc_info=True)
        return None


def normalize(records: Iterable[RawFeedRecord]) -> list[StormReport]:
    """Normalise *records* in feed order, dropping only unparseable timestamps."""
    reports: list[StormReport] = []
    seen = 0
    for record in records:
        seen += 1
        report = normalize_record(record)
        if report is None:
            logger.debug("Dropping record without a valid time: %r", record.valid_time)
            continue
        reports.append(report)

    logger.info(
        "Normalize: %d raw → %d reports (dropped %d bad timestamps)",
        seen,
        len(reports),
        seen - len(reports),
    )
    return reports


def records_from_features(features: Iterable[object]) -> list[RawFeedRecord]:
    """Wrap each GeoJSON feature's properties in a ``RawFeedRecord``."""
    return [RawFeedRecord.from_feature(feature) for feature in features]
