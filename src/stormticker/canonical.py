"""Canonical text rendering — the multi-line summary other systems consume.

Field order and punctuation here are an external interface; views must not
parse this text, they read the ``AggregatedModel`` directly.
"""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from stormticker import config
from stormticker.models import AggregatedModel, StormReport

HEADER = "🌪️ STORM REPORTS - Last 2 Hours"
STATE_HEADER = "📍 REPORTS BY STATE:"
NO_REPORTS = "No recent storm reports in the past 2 hours."
LOADING = "Loading..."

_INDENT = "   "
_NOTE_INDENT = "     "


def format_clock(when: datetime, tz: str | None = None) -> str:
    """12-hour ``hh:MM AM`` in the display timezone."""
    return when.astimezone(ZoneInfo(tz or config.DISPLAY_TIMEZONE)).strftime("%I:%M %p")


def plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


def error_text(message: str) -> str:
    return f"Error: {message}"


def report_line(report: StormReport) -> str:
    clock = format_clock(report.time)
    remark = report.inline_remark
    if remark is not None:
        line = f"{report.location} ({clock}) - {remark}"
    else:
        prefix = f"{report.measurement} - " if report.measurement else ""
        line = f"{prefix}{report.location} ({clock})"
    if report.notable_source:
        line += f" [{report.notable_source}]"
    return line


def render_canonical(model: AggregatedModel) -> str:
    """Serialise *model* into the canonical text block."""
    if model.is_empty:
        return NO_REPORTS

    lines = [HEADER, f"Total Reports: {model.total_count}", "", STATE_HEADER]
    lines.extend(f"{_INDENT}{s.state}: {plural(s.count, 'report')}" for s in model.states)
    lines.append("")

    for group in model.groups:
        lines.append(f"{group.emoji} {group.weather_type} ({group.count}):")
        for report in group.reports:
            lines.append(f"{_INDENT}{report_line(report)}")
            if report.note:
                lines.append(f"{_NOTE_INDENT}{report.note}")
        lines.append("")

    return "\n".join(lines).strip()

