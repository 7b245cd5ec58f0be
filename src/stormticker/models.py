"""Domain models used across the pipeline."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field, field_validator

FLASH_FLOOD = "FLASH FLOOD"

# Remark length caps (exclusive)
INLINE_REMARK_CAP = 300
NOTE_REMARK_CAP = 200

UNINTERESTING_SOURCES = frozenset({"Mesonet", "ASOS"})


class RawFeedRecord(BaseModel):
    """One feature's ``properties`` bag exactly as the feed published it."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    type_text: str | None = Field(
        default=None, validation_alias=AliasChoices("typetext", "typeText", "type_text")
    )
    type: str | None = None
    state: str | None = None
    st: str | None = None
    city: str | None = None
    county: str | None = None
    magnitude: str | None = None
    unit: str | None = None
    valid_time: str | None = Field(
        default=None, validation_alias=AliasChoices("valid", "validTime", "valid_time")
    )
    remark: str | None = None
    source: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _scalar_to_text(cls, value: Any) -> str | None:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return None

    @classmethod
    def from_feature(cls, feature: Any) -> RawFeedRecord:
        """Build a record from a GeoJSON feature; anything malformed yields an empty bag."""
        props = feature.get("properties") if isinstance(feature, dict) else None
        return cls.model_validate(props if isinstance(props, dict) else {})


class StormReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    weather_type: str
    state: str
    city: str
    county: str | None = None
    magnitude: float | None = None
    magnitude_text: str | None = None  # as published, e.g. "1.50"
    unit: str | None = None
    time: datetime
    remark: str | None = None
    source: str | None = None

    @property
    def is_flash_flood(self) -> bool:
        return self.weather_type.upper() == FLASH_FLOOD

    @property
    def has_magnitude(self) -> bool:
        return self.magnitude is not None

    @property
    def measurement(self) -> str | None:
        """Magnitude with its unit appended, or None without a numeric magnitude."""
        if not self.has_magnitude:
            return None
        return f"{self.magnitude_text}{self.unit or ''}"

    @property
    def location(self) -> str:
        text = self.city
        if self.county and self.county not in self.city:
            text += f", {self.county} County"
        return f"{text}, {self.state}"

    @property
    def inline_remark(self) -> str | None:
        """Remark shown in place of the measurement on flash-flood lines."""
        if self.is_flash_flood and _meaningful(self.remark, INLINE_REMARK_CAP):
            return self.remark
        return None

    @property
    def note(self) -> str | None:
        """Remark shown beneath the report line for every other type."""
        if not self.is_flash_flood and _meaningful(self.remark, NOTE_REMARK_CAP):
            return self.remark
        return None

    @property
    def notable_source(self) -> str | None:
        if self.source and self.source not in UNINTERESTING_SOURCES:
            return self.source
        return None


def _meaningful(remark: str | None, cap: int) -> bool:
    return (
        remark is not None
        and len(remark) < cap
        and "24-hour" not in remark
        and remark.lower() != "null"
    )


class ReportGroup(BaseModel):
    model_config = ConfigDict(frozen=True)

    weather_type: str  # exact feed spelling, never case-folded
    emoji: str
    reports: tuple[StormReport, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def count(self) -> int:
        return len(self.reports)


class StateCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: str
    count: int


class AggregatedModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_count: int = 0
    states: tuple[StateCount, ...] = ()
    groups: tuple[ReportGroup, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.total_count == 0


class SnapshotStatus(StrEnum):
    LOADING = "loading"
    OK = "ok"
    EMPTY = "empty"
    ERROR = "error"
    PASSTHROUGH = "passthrough"


class Snapshot(BaseModel):
    """One published refresh result. Replaced wholesale, never mutated."""

    model_config = ConfigDict(frozen=True)

    status: SnapshotStatus
    canonical_text: str
    model: AggregatedModel | None = None
    error: str | None = None
    raw: str | None = None
    last_updated: datetime
    feed_url: str = ""


# ── View models ────────────────────────────────────────────────────────────


class TickerItem(BaseModel):
    label: str
    text: str
    significant: bool = False


class CompactModel(BaseModel):
    status: SnapshotStatus
    header: str
    summary: str
    state_lines: list[str] = Field(default_factory=list)
    group_lines: list[str] = Field(default_factory=list)


class DashboardStat(BaseModel):
    label: str
    value: str


class ReportCard(BaseModel):
    location: str
    time: str
    details: str | None = None
    source: str | None = None


class DashboardGroup(BaseModel):
    weather_type: str
    emoji: str
    count: int
    cards: list[ReportCard] = Field(default_factory=list)


class DashboardModel(BaseModel):
    status: SnapshotStatus
    title: str
    stats: list[DashboardStat] = Field(default_factory=list)
    groups: list[DashboardGroup] = Field(default_factory=list)
    message: str | None = None
