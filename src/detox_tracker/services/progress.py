"""Progress series built from symptom logs."""

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import NamedTuple, Optional, Sequence, Union

import pandas as pd

from ..models.log import LogEntry
from ..models.preferences import UsageFrequency
from .clearance import estimate_remaining, pass_probability, resolve_frequency, round_half_up

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class ProgressPoint:
    """One charted day."""
    date: date
    avg_intensity: float
    clearance_percent: int
    
    def as_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "intensity": self.avg_intensity,
            "clearancePercent": self.clearance_percent,
        }


class ProgressSeries(NamedTuple):
    """Per-day points in ascending date order plus the days-clean count."""
    points: list[ProgressPoint]
    days_clean: int


@dataclass
class ProgressReport:
    """Everything the dashboard shows about progress."""
    usage_frequency: UsageFrequency
    points: list[ProgressPoint]
    days_clean: int
    remaining_percent: int
    pass_probability: int
    
    def as_dict(self) -> dict:
        return {
            "usageFrequency": self.usage_frequency.value,
            "daysClean": self.days_clean,
            "remainingPercent": self.remaining_percent,
            "passProbability": self.pass_probability,
            "chart": [p.as_dict() for p in self.points],
        }


def _as_instant(value: Union[date, datetime]) -> datetime:
    # Calendar days count from UTC midnight
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def days_between(start: Union[date, datetime], end: Union[date, datetime]) -> int:
    """
    Whole days between two points in time.
    
    Uses the ceiling of the absolute elapsed time divided by one day, so any
    part of a day counts as a full day. Dates are taken at UTC midnight.
    """
    elapsed = abs((_as_instant(end) - _as_instant(start)).total_seconds())
    return math.ceil(elapsed / SECONDS_PER_DAY)


def aggregate(
    entries: Sequence[LogEntry],
    usage_frequency: Union[UsageFrequency, str],
    now: Optional[datetime] = None,
) -> ProgressSeries:
    """
    Group logs by date into chart points.
    
    Same-day intensities are averaged. Clearance for each day is estimated
    from the days elapsed since the earliest log.
    """
    frequency = resolve_frequency(usage_frequency)
    if not entries:
        return ProgressSeries([], 0)
    
    now = now or datetime.now(timezone.utc)
    
    df = pd.DataFrame(
        [{"date": e.entry_date, "intensity": e.intensity} for e in entries]
    )
    daily = df.groupby("date", sort=True)["intensity"].mean()
    
    first_date = daily.index[0]
    days_clean = days_between(first_date, now)
    
    points = []
    for day, avg in daily.items():
        days_since_start = days_between(first_date, day)
        points.append(ProgressPoint(
            date=day,
            avg_intensity=round_half_up(float(avg), 1),
            clearance_percent=estimate_remaining(frequency, days_since_start),
        ))
    
    return ProgressSeries(points, days_clean)


def summarize(
    entries: Sequence[LogEntry],
    usage_frequency: Union[UsageFrequency, str],
    now: Optional[datetime] = None,
) -> ProgressReport:
    """Aggregate logs and add the current clearance and pass probability."""
    frequency = resolve_frequency(usage_frequency)
    points, days_clean = aggregate(entries, frequency, now)
    
    # No logs means no progress yet
    remaining = estimate_remaining(frequency, days_clean) if points else 100
    
    return ProgressReport(
        usage_frequency=frequency,
        points=points,
        days_clean=days_clean,
        remaining_percent=remaining,
        pass_probability=pass_probability(remaining),
    )
