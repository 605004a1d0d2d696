"""Countdown to a target date."""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional


@dataclass(frozen=True)
class TimeRemaining:
    days: int
    hours: int
    minutes: int
    seconds_left: float = field(default=0.0, compare=False, repr=False)
    
    @property
    def expired(self) -> bool:
        return self.seconds_left <= 0
    
    def __str__(self) -> str:
        return f"{self.days}d {self.hours}h {self.minutes}m"


def time_remaining(target: Optional[date], now: Optional[datetime] = None) -> Optional[TimeRemaining]:
    """
    Days, hours and minutes until local midnight of the target date.
    
    Returns None when no target is set, and zeros once it has passed.
    """
    if target is None:
        return None
    
    now = now or datetime.now()
    seconds = (datetime.combine(target, time.min) - now).total_seconds()
    if seconds <= 0:
        return TimeRemaining(0, 0, 0)
    
    minutes, _ = divmod(int(seconds), 60)
    hours, minutes = divmod(minutes, 60)
    days, hours = divmod(hours, 24)
    return TimeRemaining(days, hours, minutes, seconds_left=seconds)
