"""Unit tests for feed-record normalisation."""

from datetime import UTC, datetime

from stormticker.models import RawFeedRecord
from stormticker.normalize import normalize, parse_magnitude, parse_time, records_from_features


def _make(**props: object) -> RawFeedRecord:
    props.setdefault("valid", "2024-05-01T14:30:00Z")
    return RawFeedRecord.model_validate(props)


class TestFieldResolution:
    def test_typetext_preferred_over_type(self) -> None:
        [report] = normalize([_make(typetext="HAIL", type="H")])
        assert report.weather_type == "HAIL"

    def test_camel_case_type_text_accepted(self) -> None:
        [report] = normalize([_make(typeText="TSTM WND GST")])
        assert report.weather_type == "TSTM WND GST"

    def test_type_fallback_and_default(self) -> None:
        reports = normalize([_make(type="H"), _make()])
        assert [r.weather_type for r in reports] == ["H", "UNKNOWN"]

    def test_state_fallback_and_default(self) -> None:
        reports = normalize([_make(state="IA"), _make(st="NE"), _make()])
        assert [r.state for r in reports] == ["IA", "NE", "Unknown"]

    def test_feed_casing_kept(self) -> None:
        [report] = normalize([_make(typetext="Flash Flood")])
        assert report.weather_type == "Flash Flood"
        assert report.is_flash_flood

    def test_missing_city_defaults(self) -> None:
        [report] = normalize([_make(state="KS")])
        assert report.city == "Unknown"
        assert report.location == "Unknown, KS"

    def test_null_literals_become_absent(self) -> None:
        [report] = normalize(
            [_make(remark="NULL", unit="null", county="Null", source="null")]
        )
        assert report.remark is None
        assert report.unit is None
        assert report.county is None
        assert report.source is None

    def test_remark_kept_unstripped(self) -> None:
        [report] = normalize([_make(remark="  Trees down  ")])
        assert report.remark == "  Trees down  "
        assert report.note == "  Trees down  "

    def test_remark_cap_counts_surrounding_whitespace(self) -> None:
        remark = "x" * 198 + "  "
        [note_report, inline_report] = normalize(
            [
                _make(typetext="HAIL", remark=remark),
                _make(typetext="FLASH FLOOD", remark="y" * 298 + "  "),
            ]
        )
        assert note_report.remark == remark
        assert note_report.note is None
        assert inline_report.inline_remark is None

    def test_blank_remark_becomes_absent(self) -> None:
        [report] = normalize([_make(remark="   ")])
        assert report.remark is None

    def test_validtime_alias(self) -> None:
        record = RawFeedRecord.model_validate({"validTime": "2024-05-01T14:30:00Z"})
        assert len(normalize([record])) == 1


class TestMagnitude:
    def test_numeric_string(self) -> None:
        assert parse_magnitude("1.50") == (1.5, "1.50")

    def test_absent_values(self) -> None:
        for raw in (None, "", "   ", "null", "NULL", "heavy"):
            assert parse_magnitude(raw) == (None, None)

    def test_number_in_feed_is_coerced(self) -> None:
        [report] = normalize([_make(magnitude=60)])
        assert report.magnitude == 60.0
        assert report.magnitude_text == "60"

    def test_empty_magnitude_is_not_zero(self) -> None:
        [report] = normalize([_make(magnitude=" ")])
        assert report.magnitude is None
        assert not report.has_magnitude
        assert report.measurement is None


class TestTimestamps:
    def test_utc_z_suffix(self) -> None:
        assert parse_time("2024-05-01T14:30:00Z") == datetime(2024, 5, 1, 14, 30, tzinfo=UTC)

    def test_naive_taken_as_utc(self) -> None:
        assert parse_time("2024-05-01T14:30:00") == datetime(2024, 5, 1, 14, 30, tzinfo=UTC)

    def test_unparseable_records_are_dropped(self) -> None:
        records = [
            _make(typetext="HAIL"),
            _make(typetext="HAIL", valid="yesterday-ish"),
            RawFeedRecord.model_validate({"typetext": "WIND"}),
            _make(typetext="RAIN"),
        ]
        reports = normalize(records)
        assert [r.weather_type for r in reports] == ["HAIL", "RAIN"]

    def test_missing_optional_fields_never_drop(self) -> None:
        reports = normalize([_make(), _make(), _make()])
        assert len(reports) == 3


class TestFeatures:
    def test_properties_are_read(self) -> None:
        features = [
            {"type": "Feature", "properties": {"typetext": "HAIL", "state": "IA"}},
            {"type": "Feature"},
            "not a feature",
        ]
        records = records_from_features(features)
        assert records[0].type_text == "HAIL"
        assert records[1] == RawFeedRecord()
        assert records[2] == RawFeedRecord()

    def test_empty_input(self) -> None:
        assert normalize([]) == []
