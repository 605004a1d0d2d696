"""JSON routes for drug test results."""

from fastapi import APIRouter, Depends

from ...services.tracker import TrackerService
from ..deps import get_tracker
from ..schemas import TestResultCreate

router = APIRouter()


@router.get("/")
async def list_test_results(tracker: TrackerService = Depends(get_tracker)):
    """Test results, most recent first."""
    return [
        {**t.model_dump(mode="json", by_alias=True), "label": t.result.label}
        for t in tracker.list_test_results()
    ]


@router.post("/", status_code=201)
async def create_test_result(
    body: TestResultCreate,
    tracker: TrackerService = Depends(get_tracker),
):
    test = tracker.add_test_result(body.result, notes=body.notes, result_date=body.date)
    return test.model_dump(mode="json", by_alias=True)
