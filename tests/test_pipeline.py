"""End-to-end tests for one refresh cycle (no network)."""

import json
from typing import Any

from stormticker.canonical import NO_REPORTS
from stormticker.feed_client import FeedClientError
from stormticker.models import SnapshotStatus
from stormticker.pipeline import build_snapshot, run_cycle
from stormticker.views import compact_sections, dashboard_model, ticker_items


def _feature(**props: Any) -> dict[str, Any]:
    props.setdefault("valid", "2024-05-01T14:30:00Z")
    return {"type": "Feature", "geometry": None, "properties": props}


def _collection(*features: dict[str, Any]) -> dict[str, Any]:
    return {"type": "FeatureCollection", "features": list(features)}


class FakeClient:
    def __init__(self, payload: Any = None, error: Exception | None = None) -> None:
        self.payload = payload
        self.error = error
        self.urls: list[str] = []

    def fetch(self, url: str) -> Any:
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.payload


class TestBuildSnapshot:
    def test_zero_features(self) -> None:
        snap = build_snapshot(_collection(), "http://feed")
        assert snap.status is SnapshotStatus.EMPTY
        assert snap.canonical_text == NO_REPORTS
        assert "All quiet" in ticker_items(snap)[0].text
        stats = {s.label: s.value for s in dashboard_model(snap).stats}
        assert stats["Total Reports"] == "0"
        assert stats["States Affected"] == "0"

    def test_two_hail_reports(self) -> None:
        snap = build_snapshot(
            _collection(
                _feature(typetext="HAIL", state="IA", city="Ames", magnitude="0.75", unit="INCH"),
                _feature(typetext="HAIL", state="IA", city="Boone", magnitude="1.5", unit="INCH"),
            )
        )
        assert snap.status is SnapshotStatus.OK
        assert "   IA: 2 reports" in snap.canonical_text
        lines = snap.canonical_text.splitlines()
        start = lines.index("🧊 HAIL (2):")
        assert lines[start + 1].startswith("   1.5INCH - Boone")
        assert lines[start + 2].startswith("   0.75INCH - Ames")

    def test_flash_flood_remark_inline_everywhere(self) -> None:
        snap = build_snapshot(
            _collection(
                _feature(
                    typetext="FLASH FLOOD",
                    state="MO",
                    city="Joplin",
                    remark="Several roads closed due to flowing water.",
                )
            )
        )
        assert (
            "   Joplin, MO (09:30 AM) - Several roads closed due to flowing water."
            in snap.canonical_text
        )
        [item] = ticker_items(snap)
        assert "Several roads closed" in item.text
        assert "Reported in" not in item.text

    def test_null_remark_absent_in_every_view(self) -> None:
        snap = build_snapshot(
            _collection(
                _feature(typetext="HAIL", state="IA", city="Ames", magnitude="1.0", remark="NuLl"),
                _feature(typetext="FLASH FLOOD", state="IA", city="Ames", remark="null"),
            )
        )
        assert snap.model is not None
        assert all(r.remark is None for g in snap.model.groups for r in g.reports)
        assert "null" not in snap.canonical_text.lower()
        assert all("null" not in i.text.lower() for i in ticker_items(snap))
        for group in dashboard_model(snap).groups:
            for card in group.cards:
                assert card.details is None or "null" not in card.details.lower()

    def test_bad_timestamp_excluded_from_totals(self) -> None:
        snap = build_snapshot(
            _collection(
                _feature(typetext="HAIL", state="IA"),
                _feature(typetext="HAIL", state="IA", valid="garbage"),
            )
        )
        assert snap.model is not None
        assert snap.model.total_count == 1
        assert "Total Reports: 1" in snap.canonical_text

    def test_unrecognized_shape_passes_through(self) -> None:
        payload = {"alerts": [{"id": 1, "name": "Tornado Warning"}]}
        snap = build_snapshot(payload)
        assert snap.status is SnapshotStatus.PASSTHROUGH
        assert snap.model is None
        assert snap.canonical_text == json.dumps(payload, indent=2, ensure_ascii=False)

    def test_features_not_a_list_passes_through(self) -> None:
        snap = build_snapshot({"type": "FeatureCollection", "features": None})
        assert snap.status is SnapshotStatus.PASSTHROUGH


class TestRunCycle:
    def test_success(self) -> None:
        client = FakeClient(_collection(_feature(typetext="TORNADO", state="KS", city="Wichita")))
        snap = run_cycle(client, "http://feed")  # type: ignore[arg-type]
        assert client.urls == ["http://feed"]
        assert snap.status is SnapshotStatus.OK
        assert snap.feed_url == "http://feed"

    def test_fetch_failure_is_consistent_across_views(self) -> None:
        client = FakeClient(error=FeedClientError("timeout of 10s exceeded"))
        snap = run_cycle(client, "http://feed")  # type: ignore[arg-type]

        assert snap.status is SnapshotStatus.ERROR
        assert snap.canonical_text == "Error: timeout of 10s exceeded"
        assert snap.model is None
        [item] = ticker_items(snap)
        assert item.label == "⚠️ ERROR"
        assert compact_sections(snap).status is SnapshotStatus.ERROR
        dash = dashboard_model(snap)
        assert dash.status is SnapshotStatus.ERROR
        assert dash.groups == []
