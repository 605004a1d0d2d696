"""JSON routes for water and exercise tracking."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...models.health import HealthMetric, HealthRecord
from ...services.tracker import TrackerService
from ..deps import get_tracker
from ..schemas import MetricChange

router = APIRouter()


def _with_goals(record: HealthRecord, tracker: TrackerService) -> dict:
    settings = tracker.settings
    return {
        **record.model_dump(mode="json", by_alias=True),
        "waterGoal": settings.water_goal_glasses,
        "exerciseGoal": settings.exercise_goal_minutes,
        "waterProgress": HealthRecord.progress(record.water_intake, settings.water_goal_glasses),
        "exerciseProgress": HealthRecord.progress(
            record.exercise_minutes, settings.exercise_goal_minutes
        ),
    }


@router.get("/")
async def get_health(
    day: Optional[date] = Query(default=None, alias="date"),
    tracker: TrackerService = Depends(get_tracker),
):
    """Water and exercise totals for a day (today by default)."""
    return _with_goals(tracker.get_health_record(day), tracker)


@router.post("/{metric}")
async def update_metric(
    metric: HealthMetric,
    body: MetricChange,
    tracker: TrackerService = Depends(get_tracker),
):
    """Add to (or subtract from) a metric."""
    record = tracker.update_health_metric(metric, body.change, day=body.date)
    return _with_goals(record, tracker)
