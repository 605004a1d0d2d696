"""Business logic services."""

from .clearance import InvalidUsageFrequencyError, estimate_remaining, pass_probability
from .progress import ProgressReport, ProgressSeries, aggregate, summarize
from .storage import DocumentStore, LocalStore, RemoteStore, StoreError, StoreUnavailableError
from .tracker import TrackerService, open_tracker

__all__ = [
    "estimate_remaining",
    "pass_probability",
    "InvalidUsageFrequencyError",
    "aggregate",
    "summarize",
    "ProgressSeries",
    "ProgressReport",
    "DocumentStore",
    "LocalStore",
    "RemoteStore",
    "StoreError",
    "StoreUnavailableError",
    "TrackerService",
    "open_tracker",
]
