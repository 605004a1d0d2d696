"""Data models for the tracker."""

from .health import HealthMetric, HealthRecord
from .log import LogEntry, TestOutcome, TestResult
from .preferences import UsageFrequency, UserPreferences

__all__ = [
    "LogEntry",
    "TestResult",
    "TestOutcome",
    "HealthRecord",
    "HealthMetric",
    "UserPreferences",
    "UsageFrequency",
]
