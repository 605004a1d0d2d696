"""Request bodies for the JSON API."""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..models.log import TestOutcome
from ..models.preferences import UsageFrequency


class LogCreate(BaseModel):
    date: Optional[dt.date] = None
    symptoms: list[str] = Field(default_factory=list)
    intensity: int = Field(default=5, ge=1, le=10)
    notes: Optional[str] = None


class TestResultCreate(BaseModel):
    __test__ = False
    
    date: Optional[dt.date] = None
    result: TestOutcome
    notes: Optional[str] = None


class MetricChange(BaseModel):
    change: int
    date: Optional[dt.date] = None


class PreferencesUpdate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
    
    usage_frequency: UsageFrequency
