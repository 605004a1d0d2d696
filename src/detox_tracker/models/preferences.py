"""User preferences (a single document)."""

from datetime import datetime
from enum import Enum
from typing import Optional

from .log import StoredModel


class UsageFrequency(str, Enum):
    """Self-reported usage pattern before stopping."""
    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"
    
    @property
    def description(self) -> str:
        return {
            UsageFrequency.LIGHT: "Light (occasional use)",
            UsageFrequency.MODERATE: "Moderate (several times/week)",
            UsageFrequency.HEAVY: "Heavy (daily use)",
        }[self]


class UserPreferences(StoredModel):
    """Usage pattern and display settings."""
    
    usage_frequency: UsageFrequency = UsageFrequency.HEAVY
    dark_mode: bool = False
    updated_at: Optional[datetime] = None
