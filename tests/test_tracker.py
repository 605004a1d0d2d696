"""Tests for the tracker service."""

from datetime import date, datetime, timezone

import pytest

from detox_tracker.models import HealthMetric, TestOutcome, UsageFrequency
from detox_tracker.services.clearance import InvalidUsageFrequencyError
from detox_tracker.services.storage import (
    HEALTH_TRACKING,
    LOGS,
    LocalStore,
    StoreUnavailableError,
)
from detox_tracker.services.tracker import FALLBACK_MESSAGE, TrackerService, open_tracker


class TestLogs:
    """Tests for symptom logs."""
    
    def test_add_and_list(self, tracker):
        first = tracker.add_log(["Anxiety"], intensity=7, entry_date=date(2025, 1, 1))
        second = tracker.add_log(["Headache", "Anxiety"], intensity=3, notes="Slept badly")
        
        logs = tracker.list_logs()
        
        assert [e.id for e in logs] == [second.id, first.id]
        assert logs[0].notes == "Slept badly"
        assert logs[1].entry_date == date(2025, 1, 1)
    
    def test_empty_notes_stored_as_none(self, tracker):
        entry = tracker.add_log([], notes="")
        assert entry.notes is None
    
    def test_recent_logs(self, tracker):
        for i in range(7):
            tracker.add_log([], intensity=i + 1)
        
        recent = tracker.recent_logs()
        assert len(recent) == 5
        assert recent[0].intensity == 7
    
    def test_delete(self, tracker):
        entry = tracker.add_log(["Nausea"])
        
        assert tracker.delete_log(entry.id) is True
        assert tracker.delete_log(entry.id) is False
        assert tracker.list_logs() == []


class TestTestResults:

    def test_newest_date_first(self, tracker):
        tracker.add_test_result("positive", result_date=date(2025, 1, 1))
        tracker.add_test_result(TestOutcome.NEGATIVE, notes="faint line", result_date=date(2025, 1, 9))
        
        results = tracker.list_test_results()
        
        assert [r.result for r in results] == [TestOutcome.NEGATIVE, TestOutcome.POSITIVE]
        assert results[0].notes == "faint line"
    
    def test_unknown_outcome(self, tracker):
        with pytest.raises(ValueError):
            tracker.add_test_result("maybe")


class TestPreferences:
    """Tests for usage pattern and dark mode."""
    
    def test_defaults(self, tracker):
        prefs = tracker.get_preferences()
        assert prefs.usage_frequency == UsageFrequency.HEAVY
        assert prefs.dark_mode is False
    
    def test_set_usage_frequency(self, tracker):
        tracker.set_usage_frequency("light")
        assert tracker.get_preferences().usage_frequency == UsageFrequency.LIGHT
    
    def test_invalid_usage_frequency(self, tracker):
        with pytest.raises(InvalidUsageFrequencyError):
            tracker.set_usage_frequency("always")
        assert tracker.get_preferences().usage_frequency == UsageFrequency.HEAVY
    
    def test_toggle_dark_mode_keeps_frequency(self, tracker):
        tracker.set_usage_frequency("moderate")
        
        assert tracker.toggle_dark_mode() is True
        assert tracker.toggle_dark_mode() is False
        assert tracker.get_preferences().usage_frequency == UsageFrequency.MODERATE


class TestHealthTracking:
    """Tests for water and exercise metrics."""
    
    def test_empty_day(self, tracker):
        record = tracker.get_health_record(date(2025, 1, 1))
        assert record.id is None
        assert record.water_intake == 0
    
    def test_one_record_per_day(self, tracker):
        day = date(2025, 1, 1)
        tracker.update_health_metric("water", 1, day)
        tracker.update_health_metric(HealthMetric.WATER, 1, day)
        record = tracker.update_health_metric(HealthMetric.EXERCISE, 15, day)
        
        assert record.water_intake == 2
        assert record.exercise_minutes == 15
        assert len(tracker.store.query(HEALTH_TRACKING)) == 1
    
    def test_never_negative(self, tracker):
        day = date(2025, 1, 1)
        tracker.update_health_metric("exercise", 5, day)
        record = tracker.update_health_metric("exercise", -15, day)
        assert record.exercise_minutes == 0
    
    def test_days_are_separate(self, tracker):
        tracker.update_health_metric("water", 3, date(2025, 1, 1))
        assert tracker.get_health_record(date(2025, 1, 2)).water_intake == 0


class TestProgress:
    """Tests for derived progress and export."""
    
    NOW = datetime(2025, 1, 5, 12, 0, tzinfo=timezone.utc)
    
    def test_no_logs(self, tracker):
        report = tracker.progress(self.NOW)
        assert report.remaining_percent == 100
        assert report.pass_probability == 0
    
    def test_uses_saved_frequency(self, tracker):
        tracker.add_log([], intensity=8, entry_date=date(2025, 1, 1))
        tracker.add_log([], intensity=4, entry_date=date(2025, 1, 3))
        tracker.set_usage_frequency("light")
        
        report = tracker.progress(self.NOW)
        
        assert report.days_clean == 5
        # 5 of 7 days: round(28.57)
        assert report.remaining_percent == 29
        assert report.pass_probability == 71
        assert [p.clearance_percent for p in report.points] == [100, 71]
    
    def test_export(self, tracker):
        tracker.add_log(["Craving"], entry_date=date(2025, 1, 1))
        tracker.add_test_result("negative", result_date=date(2025, 1, 4))
        
        data = tracker.export_data(self.NOW)
        
        assert set(data) == {"logs", "testResults", "usageFrequency", "daysClean", "exportDate"}
        assert data["logs"][0]["symptoms"] == ["Craving"]
        assert data["logs"][0]["id"]
        assert data["testResults"][0]["result"] == "negative"
        assert data["usageFrequency"] == "heavy"
        assert data["daysClean"] == 5
    
    def test_export_filename(self):
        assert TrackerService.export_filename(date(2025, 4, 1)) == "cyberdetox-data-2025-04-01.json"


class TestFallback:
    """Tests for the remote/local dual write."""
    
    def test_read_falls_back_to_cache(self, offline_tracker, cache):
        cache.save(LOGS, {"date": "2025-01-01", "intensity": 6, "createdAt": "2025-01-01T10:00:00Z"}, "cached")
        
        logs = offline_tracker.list_logs()
        
        assert [e.id for e in logs] == ["cached"]
        assert offline_tracker.offline is True
        assert offline_tracker.last_error == FALLBACK_MESSAGE
    
    def test_write_goes_to_cache_when_offline(self, offline_tracker, cache):
        entry = offline_tracker.add_log(["Insomnia"])
        
        assert cache.load(LOGS, entry.id)["symptoms"] == ["Insomnia"]
        assert offline_tracker.offline is True
    
    def test_health_update_offline(self, offline_tracker):
        record = offline_tracker.update_health_metric("water", 2, date(2025, 1, 1))
        again = offline_tracker.update_health_metric("water", 1, date(2025, 1, 1))
        
        assert again.id == record.id
        assert again.water_intake == 3
    
    def test_writes_mirrored_with_same_id(self, settings, tmp_path, cache):
        primary = LocalStore(settings, path=tmp_path / "primary.json")
        tracker = TrackerService(primary, cache=cache, settings=settings)
        
        entry = tracker.add_log(["Sweating"])
        tracker.set_usage_frequency("light")
        
        assert primary.load(LOGS, entry.id) == cache.load(LOGS, entry.id)
        assert cache.load("settings", "user")["usageFrequency"] == "light"
        assert tracker.offline is False
    
    def test_listing_refreshes_cache(self, settings, tmp_path, cache):
        primary = LocalStore(settings, path=tmp_path / "primary.json")
        primary.save(LOGS, {"date": "2025-01-02", "intensity": 2, "createdAt": "2025-01-02T00:00:00Z"}, "p1")
        cache.save(LOGS, {"date": "2024-12-01", "intensity": 9, "createdAt": "2024-12-01T00:00:00Z"}, "stale")
        
        TrackerService(primary, cache=cache, settings=settings).list_logs()
        
        assert [d["id"] for d in cache.query(LOGS)] == ["p1"]
    
    def test_delete_mirrored(self, settings, tmp_path, cache):
        primary = LocalStore(settings, path=tmp_path / "primary.json")
        tracker = TrackerService(primary, cache=cache, settings=settings)
        entry = tracker.add_log([])
        
        tracker.delete_log(entry.id)
        
        assert cache.load(LOGS, entry.id) is None
    
    def test_without_cache_errors_propagate(self, settings, unreachable_store):
        tracker = TrackerService(unreachable_store, settings=settings)
        
        with pytest.raises(StoreUnavailableError):
            tracker.list_logs()
        with pytest.raises(StoreUnavailableError):
            tracker.add_log(["Anxiety"])


class TestOpenTracker:

    def test_local_only(self, settings):
        with open_tracker(settings) as tracker:
            assert isinstance(tracker.store, LocalStore)
            assert tracker.cache is None
    
    def test_remote_with_cache(self, settings):
        remote = settings.model_copy(update={"firestore_project_id": "demo"})
        
        with open_tracker(remote) as tracker:
            assert tracker.cache is not None
            assert tracker.store.client.documents_url.endswith(
                "/projects/demo/databases/(default)/documents"
            )
