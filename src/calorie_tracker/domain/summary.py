"""Domain models for tracker read-outs."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TrackerSummary:
    """Derived values shown after every change."""

    calorie_limit: float
    total_calories: float
    calories_consumed: float
    calories_burned: float
    calories_remaining: float
    progress_percentage: float
    over_limit: bool
