"""Tests for the issue report store and hazard catalog."""
import json
import logging
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from access_nav.core.hazards import HazardCatalog
from access_nav.core.reports import IssueReportStore, OwnerOnlyDeletions
from access_nav.models import HazardPoint, IssueType

T0 = datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _store(tmp_path, **kwargs) -> IssueReportStore:
    kwargs.setdefault("clock", FakeClock(T0))
    return IssueReportStore(tmp_path / "reports.json", **kwargs)


def test_create_sets_id_timestamp_and_expiry(tmp_path):
    store = _store(tmp_path)
    report = store.create(lat=27.62, lng=85.54, type="pothole", description="Deep hole")
    assert report.id
    assert report.type is IssueType.POTHOLE
    assert report.created_at == T0
    assert report.expires_at == T0 + timedelta(hours=48)


def test_ids_are_unique(tmp_path):
    store = _store(tmp_path)
    ids = {store.create(lat=27.62, lng=85.54, type="other", description=f"r{i}").id for i in range(20)}
    assert len(ids) == 20


def test_persisted_schema(tmp_path):
    store = _store(tmp_path)
    store.create(lat=27.62, lng=85.54, type="wet_floor", description="Slippery", photo_url="p.jpg")
    data = json.loads((tmp_path / "reports.json").read_text())
    assert set(data[0]) >= {"id", "lat", "lng", "type", "description", "photo_url", "created_at", "expires_at"}
    assert data[0]["type"] == "wet_floor"


def test_list_reads_back_across_instances(tmp_path):
    _store(tmp_path).create(lat=27.62, lng=85.54, type="pothole", description="A")
    assert [r.description for r in _store(tmp_path).list()] == ["A"]


def test_list_excludes_expired(tmp_path):
    clock = FakeClock(T0)
    store = _store(tmp_path, clock=clock)
    store.create(lat=27.62, lng=85.54, type="pothole", description="old")
    clock.now = T0 + timedelta(hours=49)
    assert store.list() == []
    assert len(store.all()) == 1


def test_purge_expired(tmp_path):
    clock = FakeClock(T0)
    store = _store(tmp_path, clock=clock)
    store.create(lat=27.62, lng=85.54, type="pothole", description="old")
    clock.now = T0 + timedelta(hours=47)
    store.create(lat=27.62, lng=85.54, type="pothole", description="new")
    clock.now = T0 + timedelta(hours=49)
    assert store.purge_expired() == 1
    assert [r.description for r in store.all()] == ["new"]


def test_reports_without_ttl_never_expire(tmp_path):
    store = _store(tmp_path, ttl=None)
    report = store.create(lat=27.62, lng=85.54, type="other", description="forever")
    assert report.expires_at is None
    assert store.list(now=T0 + timedelta(days=365)) == [report]


def test_delete(tmp_path):
    store = _store(tmp_path)
    report = store.create(lat=27.62, lng=85.54, type="pothole", description="A")
    assert store.delete(report.id) is True
    assert store.list() == []
    assert store.delete(report.id) is False


def test_owner_only_policy(tmp_path):
    store = _store(tmp_path, policy=OwnerOnlyDeletions())
    report = store.create(lat=27.62, lng=85.54, type="pothole", description="A", owner_id="alice")
    assert store.delete(report.id, requester_id="bob") is False
    assert store.delete(report.id, requester_id="alice") is True


@pytest.mark.parametrize("kwargs", [
    {"lat": 91.0, "lng": 85.54, "type": "pothole", "description": "x"},
    {"lat": 27.62, "lng": 200.0, "type": "pothole", "description": "x"},
    {"lat": 27.62, "lng": 85.54, "type": "lava", "description": "x"},
    {"lat": 27.62, "lng": 85.54, "type": "pothole", "description": "   "},
])
def test_invalid_input_is_rejected_without_writing(tmp_path, kwargs):
    store = _store(tmp_path)
    with pytest.raises(ValidationError):
        store.create(**kwargs)
    assert not (tmp_path / "reports.json").exists()


def test_corrupt_file_reads_as_empty(tmp_path, caplog):
    (tmp_path / "reports.json").write_text("{not json")
    with caplog.at_level(logging.WARNING, logger="access_nav.core.reports"):
        assert _store(tmp_path).list() == []
    assert caplog.records


def test_malformed_record_is_skipped(tmp_path):
    store = _store(tmp_path)
    store.create(lat=27.62, lng=85.54, type="pothole", description="good")
    data = json.loads((tmp_path / "reports.json").read_text())
    data.append({"id": "bad", "lat": "north"})
    (tmp_path / "reports.json").write_text(json.dumps(data))
    assert [r.description for r in store.list()] == ["good"]


def test_unwritable_store_drops_write(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")
    store = IssueReportStore(blocker / "reports.json", clock=FakeClock(T0))
    assert store.create(lat=27.62, lng=85.54, type="pothole", description="A") is None
    assert store.list() == []


class TestHazardCatalog:
    def _static(self):
        return [HazardPoint(lat=27.62, lon=85.54, severity="info", category="ramp")]

    def test_report_active_at_47h_and_expired_at_49h(self, tmp_path):
        store = _store(tmp_path)
        store.create(lat=27.63, lng=85.55, type="broken_ramp", description="Cracked")
        catalog = HazardCatalog(static_points=self._static(), reports=store)

        active = catalog.active_hazards(T0 + timedelta(hours=47))
        assert len(active) == 2
        assert active[1].severity == "hazard"
        assert active[1].category == "broken_ramp"

        assert catalog.active_hazards(T0 + timedelta(hours=49)) == self._static()

    def test_order_is_static_then_provider_then_reports(self, tmp_path):
        store = _store(tmp_path)
        store.create(lat=27.63, lng=85.55, type="pothole", description="r")
        osm = [HazardPoint(lat=27.61, lon=85.53, severity="hazard", category="Stairs")]
        catalog = HazardCatalog(static_points=self._static(), reports=store, provider_points=osm)
        assert [h.category for h in catalog.active_hazards(T0)] == ["ramp", "Stairs", "pothole"]

    def test_duplicates_are_kept(self):
        catalog = HazardCatalog(static_points=self._static() * 2)
        assert len(catalog.active_hazards(T0)) == 2

    def test_storage_failure_yields_static_only(self, tmp_path):
        (tmp_path / "reports.json").write_text("[[[")
        catalog = HazardCatalog(static_points=self._static(), reports=_store(tmp_path))
        assert catalog.active_hazards(T0) == self._static()


def test_unparseable_store_is_not_overwritten(tmp_path):
    store = _store(tmp_path)
    store.create(lat=27.62, lng=85.54, type="pothole", description="first")
    path = tmp_path / "reports.json"
    truncated = path.read_text()[:-5]
    path.write_text(truncated)

    assert store.create(lat=27.62, lng=85.54, type="pothole", description="second") is None
    assert path.read_text() == truncated
    assert store.delete("anything") is False
    assert store.purge_expired() == 0
    assert path.read_text() == truncated


def test_malformed_record_blocks_rewrites(tmp_path):
    store = _store(tmp_path)
    first = store.create(lat=27.62, lng=85.54, type="pothole", description="first")
    data = json.loads((tmp_path / "reports.json").read_text())
    data.append({"id": "bad", "lat": "north"})
    (tmp_path / "reports.json").write_text(json.dumps(data))

    assert store.create(lat=27.62, lng=85.54, type="pothole", description="second") is None
    assert store.delete(first.id) is False
    assert len(json.loads((tmp_path / "reports.json").read_text())) == 2


def test_writes_leave_no_temp_files(tmp_path):
    store = _store(tmp_path)
    report = store.create(lat=27.62, lng=85.54, type="pothole", description="A")
    store.delete(report.id)
    assert [p.name for p in tmp_path.iterdir()] == ["reports.json"]


def test_naive_timestamps_are_skipped(tmp_path):
    record = {
        "id": "naive", "lat": 27.62, "lng": 85.54, "type": "pothole",
        "description": "no timezone",
        "created_at": "2026-03-01T08:00:00", "expires_at": "2026-03-03T08:00:00",
    }
    (tmp_path / "reports.json").write_text(json.dumps([record]))
    static = [HazardPoint(lat=27.62, lon=85.54, severity="info", category="ramp")]
    catalog = HazardCatalog(static_points=static, reports=_store(tmp_path))

    assert catalog.active_hazards(T0) == static
