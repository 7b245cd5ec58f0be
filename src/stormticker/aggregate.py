"""Group normalised reports by weather type and by state."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from functools import cmp_to_key

from stormticker.models import AggregatedModel, ReportGroup, StateCount, StormReport

logger = logging.getLogger(__name__)

# Weather-type glyphs (keys are upper-case; lookup is case-insensitive)
_GLYPHS: dict[str, str] = {
    "RAIN": "🌧️",
    "SNOW": "❄️",
    "HAIL": "🧊",
    "TORNADO": "🌪️",
    "WIND": "💨",
    "LIGHTNING": "⚡",
    "FLOOD": "🌊",
    "THUNDERSTORM": "⛈️",
    "FUNNEL": "🌪️",
    "FREEZING RAIN": "🧊",
    "SLEET": "🌨️",
    "BLIZZARD": "❄️",
    "DUST": "🌪️",
    "FOG": "🌫️",
}
DEFAULT_GLYPH = "🌩️"


def weather_emoji(weather_type: str) -> str:
    """Return the glyph for *weather_type*, or the default for unknown types."""
    return _GLYPHS.get(weather_type.upper(), DEFAULT_GLYPH)


def compare_reports(a: StormReport, b: StormReport) -> int:
    """Order two reports within a group.

    Magnitude descending when *both* carry one, otherwise newest first.
    """
    if a.magnitude is not None and b.magnitude is not None:
        if a.magnitude == b.magnitude:
            return 0
        return -1 if a.magnitude > b.magnitude else 1
    if a.time == b.time:
        return 0
    return -1 if a.time > b.time else 1


def sort_members(reports: Sequence[StormReport]) -> list[StormReport]:
    return sorted(reports, key=cmp_to_key(compare_reports))


def aggregate(reports: Sequence[StormReport]) -> AggregatedModel:
    """Build the aggregated model.

    Groups and state counts are ordered by size descending; ties keep the
    order in which each key was first seen (``sorted`` is stable and dicts
    preserve insertion order).
    """
    buckets: dict[str, list[StormReport]] = {}
    state_counts: Counter[str] = Counter()

    for report in reports:
        buckets.setdefault(report.weather_type, []).append(report)
        state_counts[report.state] += 1

    groups = [
        ReportGroup(
            weather_type=weather_type,
            emoji=weather_emoji(weather_type),
            reports=tuple(sort_members(members)),
        )
        for weather_type, members in buckets.items()
    ]
    groups.sort(key=lambda g: g.count, reverse=True)

    states = [StateCount(state=state, count=count) for state, count in state_counts.items()]
    states.sort(key=lambda s: s.count, reverse=True)

    logger.info(
        "Aggregated %d reports into %d types across %d states",
        len(reports),
        len(groups),
        len(states),
    )
    return AggregatedModel(total_count=len(reports), states=tuple(states), groups=tuple(groups))
