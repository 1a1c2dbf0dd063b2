"""Tracker API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from calorie_tracker.api.models import EntryCreate, EntryOut, LimitUpdate, SummaryOut
from calorie_tracker.domain.entries import Entry, Meal, Workout

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer
    from calorie_tracker.domain.summary import TrackerSummary
    from calorie_tracker.services.tracker import CaloriesTracker

router = APIRouter(tags=["tracker"])


def _tracker(request: Request) -> CaloriesTracker:
    container: AppContainer = request.app.state.container
    return container.tracker


@router.get("/tracker")
async def get_summary(request: Request) -> SummaryOut:
    """Return the current calorie balance."""
    return _summary_out(_tracker(request).summary())


@router.get("/meals")
async def list_meals(request: Request, q: str | None = None) -> list[EntryOut]:
    """Return logged meals, optionally filtered by name."""
    tracker = _tracker(request)
    meals = tracker.find_meals(q) if q else tracker.meals
    return [_entry_out(meal) for meal in meals]


@router.post("/meals", status_code=status.HTTP_201_CREATED)
async def add_meal(payload: EntryCreate, request: Request) -> EntryOut:
    """Log a meal."""
    meal = Meal.create(payload.name, payload.calories)
    _tracker(request).add_meal(meal)
    return _entry_out(meal)


@router.delete("/meals/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_meal(entry_id: str, request: Request) -> None:
    """Remove a meal; unknown ids succeed silently."""
    _tracker(request).remove_meal(entry_id)


@router.get("/workouts")
async def list_workouts(request: Request, q: str | None = None) -> list[EntryOut]:
    """Return logged workouts, optionally filtered by name."""
    tracker = _tracker(request)
    workouts = tracker.find_workouts(q) if q else tracker.workouts
    return [_entry_out(workout) for workout in workouts]


@router.post("/workouts", status_code=status.HTTP_201_CREATED)
async def add_workout(payload: EntryCreate, request: Request) -> EntryOut:
    """Log a workout."""
    workout = Workout.create(payload.name, payload.calories)
    _tracker(request).add_workout(workout)
    return _entry_out(workout)


@router.delete("/workouts/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_workout(entry_id: str, request: Request) -> None:
    """Remove a workout; unknown ids succeed silently."""
    _tracker(request).remove_workout(entry_id)


@router.put("/limit")
async def set_limit(payload: LimitUpdate, request: Request) -> SummaryOut:
    """Change the daily calorie limit."""
    tracker = _tracker(request)
    tracker.set_limit(payload.limit)
    return _summary_out(tracker.summary())


@router.post("/reset")
async def reset(request: Request) -> SummaryOut:
    """Clear all entries and the running total."""
    tracker = _tracker(request)
    tracker.reset()
    return _summary_out(tracker.summary())


def _entry_out(entry: Entry) -> EntryOut:
    return EntryOut(id=entry.id, name=entry.name, calories=entry.calories)


def _summary_out(summary: TrackerSummary) -> SummaryOut:
    return SummaryOut(
        calorie_limit=summary.calorie_limit,
        total_calories=summary.total_calories,
        calories_consumed=summary.calories_consumed,
        calories_burned=summary.calories_burned,
        calories_remaining=summary.calories_remaining,
        progress_percentage=summary.progress_percentage,
        over_limit=summary.over_limit,
    )
