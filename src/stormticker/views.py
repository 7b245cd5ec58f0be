"""Presentation views built straight from a published snapshot.

Every builder switches on ``Snapshot.status`` first; only ``ok`` snapshots
reach the per-report formatting.
"""

from __future__ import annotations

from stormticker import config
from stormticker.canonical import error_text, format_clock, plural
from stormticker.models import (
    AggregatedModel,
    CompactModel,
    DashboardGroup,
    DashboardModel,
    DashboardStat,
    ReportCard,
    Snapshot,
    SnapshotStatus,
    StormReport,
    TickerItem,
)

QUIET_TEXT = "No storm reports in the last 2 hours - All quiet!"
PASSTHROUGH_TEXT = "Feed format not recognized - showing raw data"

# ── Ticker significance ────────────────────────────────────────────────────
_HAIL_THRESHOLD = 1.0
_WIND_THRESHOLD = 60.0
_RAIN_THRESHOLD = 1.0


def is_significant(report: StormReport) -> bool:
    """Flag a report for emphasis by type or by magnitude threshold."""
    kind = report.weather_type.upper()
    if "TORNADO" in kind or "FLOOD" in kind:
        return True
    if report.magnitude is None:
        return False
    if "HAIL" in kind:
        return report.magnitude >= _HAIL_THRESHOLD
    if "WIND" in kind or "WND" in kind or "GUST" in kind:
        return report.magnitude >= _WIND_THRESHOLD
    if "RAIN" in kind:
        return report.magnitude >= _RAIN_THRESHOLD
    return False


def _ticker_phrase(report: StormReport) -> str:
    if report.inline_remark is not None:
        phrase = f"{report.inline_remark} - {report.location}"
    elif report.measurement:
        phrase = f"{report.measurement} reported in {report.location}"
    else:
        phrase = f"Reported in {report.location}"
    phrase += f" at {format_clock(report.time)}"
    if report.notable_source:
        phrase += f" [{report.notable_source}]"
    return phrase


def _ticker_from_model(model: AggregatedModel) -> list[TickerItem]:
    if model.is_empty:
        return [TickerItem(label="🌤️ WEATHER", text=QUIET_TEXT)]
    if not model.groups:
        return [
            TickerItem(
                label="🌪️ WEATHER",
                text=f"{model.total_count} storm reports in the last 2 hours",
            )
        ]
    return [
        TickerItem(
            label=f"{group.emoji} {group.weather_type.upper()}",
            text=_ticker_phrase(report),
            significant=is_significant(report),
        )
        for group in model.groups
        for report in group.reports
    ]


def ticker_items(snapshot: Snapshot) -> list[TickerItem]:
    """Scrolling-ticker items; never empty."""
    if snapshot.status is SnapshotStatus.ERROR:
        return [TickerItem(label="⚠️ ERROR", text=error_text(snapshot.error or "unknown error"))]
    if snapshot.status is SnapshotStatus.PASSTHROUGH:
        return [TickerItem(label="📄 DATA", text=PASSTHROUGH_TEXT)]
    if snapshot.status is SnapshotStatus.LOADING or snapshot.model is None:
        return [TickerItem(label="⏳ LOADING", text="Waiting for the first storm report update")]
    return _ticker_from_model(snapshot.model)


def compact_sections(snapshot: Snapshot) -> CompactModel:
    """Header, total and per-state / per-type counts for small displays."""
    status = snapshot.status
    if status is SnapshotStatus.ERROR:
        return CompactModel(
            status=status,
            header="⚠️ Weather Data Error",
            summary=error_text(snapshot.error or "unknown error"),
        )
    if status is SnapshotStatus.PASSTHROUGH:
        return CompactModel(status=status, header="📄 Raw Feed", summary=PASSTHROUGH_TEXT)
    model = snapshot.model
    if status is SnapshotStatus.LOADING or model is None:
        return CompactModel(status=SnapshotStatus.LOADING, header="⏳ Storm Reports", summary="Loading...")
    if model.is_empty:
        return CompactModel(
            status=status,
            header="🌤️ Weather Status",
            summary="All Quiet - No Storm Reports",
        )
    return CompactModel(
        status=status,
        header="🌪️ Storm Reports",
        summary=f"{plural(model.total_count, 'report')} in the last 2 hours",
        state_lines=[f"📍 {s.state}: {plural(s.count, 'report')}" for s in model.states],
        group_lines=[f"{g.emoji} {g.weather_type} ({g.count})" for g in model.groups],
    )


def _card(report: StormReport) -> ReportCard:
    details = [
        part
        for part in (report.measurement, report.inline_remark or report.note)
        if part
    ]
    return ReportCard(
        location=report.location,
        time=format_clock(report.time),
        details=" - ".join(details) or None,
        source=report.notable_source,
    )


def _stats(model: AggregatedModel) -> list[DashboardStat]:
    return [
        DashboardStat(label="Total Reports", value=str(model.total_count)),
        DashboardStat(label="States Affected", value=str(len(model.states))),
        DashboardStat(label="Weather Types", value=str(len(model.groups))),
        DashboardStat(label="Time Window", value=config.WINDOW_LABEL),
    ]


def dashboard_model(snapshot: Snapshot) -> DashboardModel:
    """Summary statistics plus a detail card per report, grouped by type."""
    title = "🌪️ Storm Reports Dashboard"
    status = snapshot.status
    if status is SnapshotStatus.ERROR:
        return DashboardModel(
            status=status,
            title=title,
            message=error_text(snapshot.error or "unknown error"),
        )
    if status is SnapshotStatus.PASSTHROUGH:
        return DashboardModel(status=status, title=title, message=PASSTHROUGH_TEXT)
    model = snapshot.model
    if status is SnapshotStatus.LOADING or model is None:
        return DashboardModel(status=SnapshotStatus.LOADING, title=title, message="Loading...")
    if model.is_empty:
        return DashboardModel(
            status=status,
            title=title,
            stats=_stats(model),
            message=QUIET_TEXT,
        )
    return DashboardModel(
        status=status,
        title=title,
        stats=_stats(model),
        groups=[
            DashboardGroup(
                weather_type=group.weather_type,
                emoji=group.emoji,
                count=group.count,
                cards=[_card(report) for report in group.reports],
            )
            for group in model.groups
        ],
    )
