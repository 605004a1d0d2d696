"""Tracker service: application operations over the document stores."""

import logging
from datetime import date, datetime, timezone
from typing import Any, Iterable, Optional, Union

from ..models.health import HealthMetric, HealthRecord
from ..models.log import LogEntry, TestOutcome, TestResult, utc_now
from ..models.preferences import UsageFrequency, UserPreferences
from ..utils.config import Settings, get_settings
from .clearance import resolve_frequency
from .progress import ProgressReport, summarize
from .storage import (
    HEALTH_TRACKING,
    LOGS,
    SETTINGS,
    TEST_RESULTS,
    DocumentStore,
    LocalStore,
    RemoteStore,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)

PREFERENCES_ID = "user"
FALLBACK_MESSAGE = "Failed to load data. Using local storage as fallback."


class TrackerService:
    """
    Symptom logs, test results, health metrics and preferences.
    
    Reads and writes go to ``store``. When a local ``cache`` is given,
    successful writes are mirrored into it, log and test-result listings
    refresh it, and it takes over whenever ``store`` is unavailable.
    Last write wins; nothing is reconciled when the remote comes back.
    """
    
    def __init__(
        self,
        store: DocumentStore,
        cache: Optional[LocalStore] = None,
        settings: Optional[Settings] = None,
    ):
        self.store = store
        self.cache = cache
        self.settings = settings or get_settings()
        self.offline = False
        self.last_error: Optional[str] = None
    
    def _fall_back(self, error: StoreUnavailableError) -> LocalStore:
        if self.cache is None:
            raise error
        logger.warning("Remote store unavailable, using local cache: %s", error)
        self.offline = True
        return self.cache
    
    def _read(self, operation: str, collection: str, *args, mirror: bool = False, **kwargs) -> Any:
        try:
            result = getattr(self.store, operation)(collection, *args, **kwargs)
        except StoreUnavailableError as e:
            cache = self._fall_back(e)
            self.last_error = FALLBACK_MESSAGE
            return getattr(cache, operation)(collection, *args, **kwargs)
        
        if mirror and self.cache is not None:
            self.cache.replace_all(collection, result)
        return result
    
    def _write(
        self,
        collection: str,
        data: dict,
        doc_id: Optional[str] = None,
        merge: bool = False,
    ) -> str:
        try:
            doc_id = self.store.save(collection, data, doc_id, merge=merge)
        except StoreUnavailableError as e:
            return self._fall_back(e).save(collection, data, doc_id, merge=merge)
        
        if self.cache is not None:
            self.cache.save(collection, data, doc_id, merge=merge)
        return doc_id
    
    def _delete(self, collection: str, doc_id: str) -> bool:
        try:
            removed = self.store.delete(collection, doc_id)
        except StoreUnavailableError as e:
            return self._fall_back(e).delete(collection, doc_id)
        
        if self.cache is not None:
            self.cache.delete(collection, doc_id)
        return removed
    
    # Symptom logs
    
    def list_logs(self) -> list[LogEntry]:
        """All logs, newest first."""
        docs = self._read("query", LOGS, order_by="createdAt", descending=True, mirror=True)
        return [LogEntry.model_validate(d) for d in docs]
    
    def recent_logs(self, limit: int = 5) -> list[LogEntry]:
        return self.list_logs()[:limit]
    
    def add_log(
        self,
        symptoms: Iterable[str] = (),
        intensity: int = 5,
        notes: Optional[str] = None,
        entry_date: Optional[date] = None,
    ) -> LogEntry:
        """Record a symptom log."""
        entry = LogEntry(
            entry_date=entry_date or date.today(),
            symptoms=list(symptoms),
            intensity=intensity,
            notes=notes or None,
        )
        entry.id = self._write(LOGS, entry.to_document())
        logger.info("Saved log %s for %s", entry.id, entry.entry_date)
        return entry
    
    def delete_log(self, log_id: str) -> bool:
        removed = self._delete(LOGS, log_id)
        if removed:
            logger.info("Deleted log %s", log_id)
        return removed
    
    # Test results
    
    def list_test_results(self) -> list[TestResult]:
        """All test results, most recent test date first."""
        docs = self._read("query", TEST_RESULTS, order_by="date", descending=True, mirror=True)
        return [TestResult.model_validate(d) for d in docs]
    
    def add_test_result(
        self,
        result: Union[TestOutcome, str],
        notes: Optional[str] = None,
        result_date: Optional[date] = None,
    ) -> TestResult:
        """Record a test outcome (positive or negative)."""
        test = TestResult(
            result=TestOutcome(result),
            notes=notes or None,
            result_date=result_date or date.today(),
        )
        test.id = self._write(TEST_RESULTS, test.to_document())
        logger.info("Saved %s test result for %s", test.result.value, test.result_date)
        return test
    
    # Preferences
    
    def get_preferences(self) -> UserPreferences:
        doc = self._read("load", SETTINGS, PREFERENCES_ID)
        if doc is None:
            return UserPreferences(id=PREFERENCES_ID)
        return UserPreferences.model_validate(doc)
    
    def _save_preferences(self, preferences: UserPreferences, *fields: str) -> None:
        preferences.updated_at = utc_now()
        data = preferences.model_dump(
            mode="json",
            by_alias=True,
            include={*fields, "updated_at"},
        )
        self._write(SETTINGS, data, PREFERENCES_ID, merge=True)
    
    def set_usage_frequency(self, usage_frequency: Union[UsageFrequency, str]) -> UserPreferences:
        """Change the usage pattern. Unknown values raise InvalidUsageFrequencyError."""
        preferences = self.get_preferences()
        preferences.usage_frequency = resolve_frequency(usage_frequency)
        self._save_preferences(preferences, "usage_frequency")
        return preferences
    
    def toggle_dark_mode(self) -> bool:
        preferences = self.get_preferences()
        preferences.dark_mode = not preferences.dark_mode
        self._save_preferences(preferences, "dark_mode")
        return preferences.dark_mode
    
    # Health tracking
    
    def get_health_record(self, day: Optional[date] = None) -> HealthRecord:
        """The record for a day, or an empty unsaved one."""
        day = day or date.today()
        docs = self._read("query", HEALTH_TRACKING, where={"date": day.isoformat()})
        if docs:
            return HealthRecord.model_validate(docs[0])
        return HealthRecord(record_date=day)
    
    def update_health_metric(
        self,
        metric: Union[HealthMetric, str],
        change: int,
        day: Optional[date] = None,
    ) -> HealthRecord:
        """
        Adjust water or exercise for a day, never going below zero.
        
        Creates the day's record on first use, otherwise merges the
        changed field into it.
        """
        metric = HealthMetric(metric)
        record = self.get_health_record(day)
        setattr(record, metric.field_name, max(0, record.value(metric) + change))
        record.updated_at = utc_now()
        
        if record.id is None:
            record.id = self._write(HEALTH_TRACKING, record.to_document())
        else:
            data = record.model_dump(
                mode="json",
                by_alias=True,
                include={metric.field_name, "updated_at"},
            )
            self._write(HEALTH_TRACKING, data, record.id, merge=True)
        return record
    
    # Derived views
    
    def progress(
        self,
        now: Optional[datetime] = None,
        logs: Optional[list[LogEntry]] = None,
    ) -> ProgressReport:
        """
        Chart series, days clean, clearance and pass probability.
        
        Pass ``logs`` when they have already been listed to skip a second query.
        """
        if logs is None:
            logs = self.list_logs()
        return summarize(logs, self.get_preferences().usage_frequency, now)
    
    def export_data(self, now: Optional[datetime] = None) -> dict:
        """Everything the user has recorded, as JSON-ready data."""
        now = now or datetime.now(timezone.utc)
        logs = self.list_logs()
        report = self.progress(now, logs)
        return {
            "logs": [e.model_dump(mode="json", by_alias=True) for e in logs],
            "testResults": [
                t.model_dump(mode="json", by_alias=True) for t in self.list_test_results()
            ],
            "usageFrequency": report.usage_frequency.value,
            "daysClean": report.days_clean,
            "exportDate": now.isoformat(),
        }
    
    @staticmethod
    def export_filename(day: Optional[date] = None) -> str:
        day = day or date.today()
        return f"cyberdetox-data-{day.isoformat()}.json"
    
    def close(self) -> None:
        self.store.close()
        if self.cache is not None:
            self.cache.close()
    
    def __enter__(self) -> "TrackerService":
        return self
    
    def __exit__(self, *args) -> None:
        self.close()


def open_tracker(settings: Optional[Settings] = None) -> TrackerService:
    """
    Build a tracker for the configured stores.
    
    With Firestore configured the local store becomes the fallback cache;
    otherwise the local store is used on its own.
    """
    settings = settings or get_settings()
    local = LocalStore(settings)
    if settings.has_remote:
        return TrackerService(RemoteStore(settings=settings), cache=local, settings=settings)
    return TrackerService(local, settings=settings)
