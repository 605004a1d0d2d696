"""JSON routes for symptom logs."""

from fastapi import APIRouter, Depends, HTTPException, Query

from ...services.tracker import TrackerService
from ..deps import get_tracker
from ..schemas import LogCreate

router = APIRouter()


@router.get("/")
async def list_logs(
    limit: int = Query(default=0, ge=0),
    tracker: TrackerService = Depends(get_tracker),
):
    """Symptom logs, newest first. A limit of 0 returns everything."""
    logs = tracker.recent_logs(limit) if limit else tracker.list_logs()
    return [log.model_dump(mode="json", by_alias=True) for log in logs]


@router.post("/", status_code=201)
async def create_log(
    body: LogCreate,
    tracker: TrackerService = Depends(get_tracker),
):
    """Save a symptom log."""
    entry = tracker.add_log(
        symptoms=body.symptoms,
        intensity=body.intensity,
        notes=body.notes,
        entry_date=body.date,
    )
    return entry.model_dump(mode="json", by_alias=True)


@router.delete("/{log_id}", status_code=204)
async def delete_log(
    log_id: str,
    tracker: TrackerService = Depends(get_tracker),
):
    if not tracker.delete_log(log_id):
        raise HTTPException(status_code=404, detail=f"Log {log_id} not found")
