"""HTML panels and their form handlers."""

from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from ...models.health import HealthMetric, HealthRecord
from ...models.log import TestOutcome
from ...models.preferences import UsageFrequency
from ...services.countdown import time_remaining
from ...services.tips import COMMON_SYMPTOMS, DETOX_TIPS, RESOURCES, simulate_test, tip_of_the_day
from ...services.tracker import TrackerService
from ..deps import get_tracker

router = APIRouter()
templates = Jinja2Templates(directory=Path(__file__).parent.parent / "templates")

PANELS = {
    "dashboard": "Dashboard",
    "log": "Log Symptoms",
    "tests": "Test Results",
    "health": "Health",
    "resources": "Resources",
}

HISTORY_SIZE = 5


def _parse_date(value: Optional[str]):
    if not value:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date: {value}")


def _back(panel: str, **params: str) -> RedirectResponse:
    query = "&".join(f"{k}={v}" for k, v in params.items())
    url = f"/?panel={panel}" + (f"&{query}" if query else "")
    return RedirectResponse(url=url, status_code=303)


@router.get("/", response_class=HTMLResponse)
async def show_panel(
    request: Request,
    panel: str = Query(default="dashboard"),
    simulated: Optional[str] = Query(default=None),
    tracker: TrackerService = Depends(get_tracker),
):
    """Render one of the five panels."""
    if panel not in PANELS:
        raise HTTPException(status_code=404, detail=f"Unknown panel: {panel}")
    
    settings = tracker.settings
    logs = tracker.list_logs()
    preferences = tracker.get_preferences()
    report = tracker.progress(logs=logs)
    health = tracker.get_health_record()
    
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "panel": panel,
            "panels": PANELS,
            "preferences": preferences,
            "frequencies": list(UsageFrequency),
            "report": report,
            "countdown": time_remaining(settings.target_date),
            "tip": tip_of_the_day(),
            "tips": DETOX_TIPS,
            "resources": RESOURCES,
            "common_symptoms": COMMON_SYMPTOMS,
            "history": logs[:HISTORY_SIZE],
            "more_count": max(0, len(logs) - HISTORY_SIZE),
            "test_results": tracker.list_test_results() if panel == "tests" else [],
            "health": health,
            "water_goal": settings.water_goal_glasses,
            "exercise_goal": settings.exercise_goal_minutes,
            "water_progress": HealthRecord.progress(health.water_intake, settings.water_goal_glasses),
            "exercise_progress": HealthRecord.progress(
                health.exercise_minutes, settings.exercise_goal_minutes
            ),
            "simulated": simulated,
            "error": tracker.last_error,
            "today": datetime.now().date().isoformat(),
        },
    )


@router.post("/log")
async def save_log(
    entry_date: Optional[str] = Form(default=None),
    symptoms: list[str] = Form(default=[]),
    custom_symptom: Optional[str] = Form(default=None),
    intensity: int = Form(default=5, ge=1, le=10),
    notes: Optional[str] = Form(default=None),
    tracker: TrackerService = Depends(get_tracker),
):
    """Save a symptom log from the form."""
    selected = list(symptoms)
    if custom_symptom:
        selected.append(custom_symptom)
    
    tracker.add_log(
        symptoms=selected,
        intensity=intensity,
        notes=notes,
        entry_date=_parse_date(entry_date),
    )
    return _back("log")


@router.post("/log/{log_id}/delete")
async def delete_log(
    log_id: str,
    panel: str = Form(default="dashboard"),
    tracker: TrackerService = Depends(get_tracker),
):
    tracker.delete_log(log_id)
    return _back(panel)


@router.post("/tests")
async def save_test_result(
    result: TestOutcome = Form(...),
    result_date: Optional[str] = Form(default=None),
    notes: Optional[str] = Form(default=None),
    tracker: TrackerService = Depends(get_tracker),
):
    tracker.add_test_result(result, notes=notes, result_date=_parse_date(result_date))
    return _back("tests")


@router.post("/health/{metric}")
async def adjust_health(
    metric: HealthMetric,
    change: int = Form(...),
    tracker: TrackerService = Depends(get_tracker),
):
    tracker.update_health_metric(metric, change)
    return _back("health")


@router.post("/usage")
async def change_usage(
    usage_frequency: UsageFrequency = Form(...),
    tracker: TrackerService = Depends(get_tracker),
):
    tracker.set_usage_frequency(usage_frequency)
    return _back("dashboard")


@router.post("/dark-mode")
async def toggle_dark_mode(
    panel: str = Form(default="dashboard"),
    tracker: TrackerService = Depends(get_tracker),
):
    tracker.toggle_dark_mode()
    return _back(panel)


@router.post("/simulate")
async def simulate(tracker: TrackerService = Depends(get_tracker)):
    report = tracker.progress()
    passed = simulate_test(report.pass_probability)
    return _back("resources", simulated="pass" if passed else "fail")
