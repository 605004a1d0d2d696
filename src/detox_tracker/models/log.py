"""Symptom log and drug-test models."""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StoredModel(BaseModel):
    """Base for models persisted as documents.
    
    Documents use camelCase field names; attributes stay snake_case.
    """
    
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
    
    id: Optional[str] = None
    
    def to_document(self) -> dict:
        """Serialize for a document store (the id lives outside the body)."""
        return self.model_dump(mode="json", by_alias=True, exclude={"id"})


class LogEntry(StoredModel):
    """A single symptom log."""
    
    entry_date: date = Field(default_factory=date.today, alias="date")
    time_of_day: str = Field(
        default_factory=lambda: datetime.now().strftime("%I:%M:%S %p"),
        alias="time",
    )
    symptoms: list[str] = Field(default_factory=list)
    intensity: int = Field(default=5, ge=1, le=10)
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    
    @field_validator("symptoms")
    @classmethod
    def _unique_symptoms(cls, value: list[str]) -> list[str]:
        seen: list[str] = []
        for symptom in value:
            symptom = symptom.strip()
            if symptom and symptom not in seen:
                seen.append(symptom)
        return seen
    
    @property
    def display_symptoms(self) -> str:
        return ", ".join(self.symptoms) or "None reported"


class TestOutcome(str, Enum):
    """Drug test outcome."""
    __test__ = False
    
    POSITIVE = "positive"
    NEGATIVE = "negative"
    
    @property
    def label(self) -> str:
        return "Failed" if self is TestOutcome.POSITIVE else "Passed"


class TestResult(StoredModel):
    """A recorded drug test."""
    
    # Keep pytest from collecting this as a test class
    __test__ = False
    
    result_date: date = Field(default_factory=date.today, alias="date")
    result: TestOutcome
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    
    @property
    def passed(self) -> bool:
        return self.result == TestOutcome.NEGATIVE
