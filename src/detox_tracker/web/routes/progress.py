"""JSON routes for progress, preferences and export."""

import json

from fastapi import APIRouter, Depends, Response

from ...services.clearance import baseline_days
from ...services.countdown import time_remaining
from ...services.tips import simulate_test, tip_of_the_day
from ...services.tracker import TrackerService
from ..deps import get_tracker
from ..schemas import PreferencesUpdate

router = APIRouter()


@router.get("/")
async def get_progress(tracker: TrackerService = Depends(get_tracker)):
    """Days clean, clearance estimate, pass probability and chart data."""
    report = tracker.progress()
    return {
        **report.as_dict(),
        "baselineDays": baseline_days(report.usage_frequency),
        "tip": tip_of_the_day(),
        "offline": tracker.offline,
        "error": tracker.last_error,
    }


@router.get("/countdown")
async def get_countdown(tracker: TrackerService = Depends(get_tracker)):
    target = tracker.settings.target_date
    remaining = time_remaining(target)
    if remaining is None:
        return {"targetDate": None}
    return {
        "targetDate": target.isoformat(),
        "days": remaining.days,
        "hours": remaining.hours,
        "minutes": remaining.minutes,
        "expired": remaining.expired,
    }


@router.post("/simulate")
async def simulate(tracker: TrackerService = Depends(get_tracker)):
    """Roll a simulated test against the current pass probability."""
    report = tracker.progress()
    passed = simulate_test(report.pass_probability)
    return {
        "passed": passed,
        "passProbability": report.pass_probability,
        "remainingPercent": report.remaining_percent,
    }


@router.get("/export")
async def export(tracker: TrackerService = Depends(get_tracker)):
    """Download all data as a JSON file."""
    content = json.dumps(tracker.export_data(), indent=2)
    return Response(
        content=content,
        media_type="application/json",
        headers={
            "Content-Disposition": f'attachment; filename="{tracker.export_filename()}"',
        },
    )


@router.get("/settings")
async def get_settings(tracker: TrackerService = Depends(get_tracker)):
    return tracker.get_preferences().model_dump(mode="json", by_alias=True)


@router.put("/settings")
async def update_settings(
    body: PreferencesUpdate,
    tracker: TrackerService = Depends(get_tracker),
):
    preferences = tracker.set_usage_frequency(body.usage_frequency)
    return preferences.model_dump(mode="json", by_alias=True)


@router.post("/settings/dark-mode")
async def toggle_dark_mode(tracker: TrackerService = Depends(get_tracker)):
    return {"darkMode": tracker.toggle_dark_mode()}
