"""Daily health tracking model."""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .log import StoredModel, utc_now


class HealthMetric(str, Enum):
    """Metrics adjusted from the health panel."""
    WATER = "water"
    EXERCISE = "exercise"
    
    @property
    def field_name(self) -> str:
        return "water_intake" if self is HealthMetric.WATER else "exercise_minutes"


class HealthRecord(StoredModel):
    """Water and exercise totals for one calendar day."""
    
    record_date: date = Field(default_factory=date.today, alias="date")
    water_intake: int = Field(default=0, ge=0)  # glasses
    exercise_minutes: int = Field(default=0, ge=0, alias="exercise")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: Optional[datetime] = None
    
    def value(self, metric: HealthMetric) -> int:
        return getattr(self, metric.field_name)
    
    @staticmethod
    def progress(value: int, goal: int) -> float:
        """Percent of a daily goal reached, capped at 100."""
        if goal <= 0:
            return 100.0
        return min(100.0, value / goal * 100)
