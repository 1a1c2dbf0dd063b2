"""Calorie ledger kept in sync with persistent storage."""

import logging
import math
from dataclasses import dataclass, field

from calorie_tracker.domain.entries import (
    DEFAULT_CALORIE_LIMIT,
    Meal,
    Workout,
    filter_by_name,
)
from calorie_tracker.domain.summary import TrackerSummary
from calorie_tracker.services.storage import CalorieStorage

logger = logging.getLogger(__name__)

MAX_PROGRESS = 100.0
TOTAL_TOLERANCE = 1e-6


@dataclass
class CaloriesTracker:
    """Running calorie balance over logged meals and workouts.

    Every mutation updates the in-memory snapshot and writes the change
    through to storage before returning.
    """

    storage: CalorieStorage
    default_calorie_limit: float = DEFAULT_CALORIE_LIMIT
    _calorie_limit: float = field(init=False, default=DEFAULT_CALORIE_LIMIT)
    _total_calories: float = field(init=False, default=0.0)
    _meals: list[Meal] = field(init=False, default_factory=list)
    _workouts: list[Workout] = field(init=False, default_factory=list)

    @property
    def calorie_limit(self) -> float:
        """Daily calorie target."""
        return self._calorie_limit

    @property
    def total_calories(self) -> float:
        """Calories eaten minus calories burned."""
        return self._total_calories

    @property
    def meals(self) -> list[Meal]:
        """Meals in the order they were logged."""
        return list(self._meals)

    @property
    def workouts(self) -> list[Workout]:
        """Workouts in the order they were logged."""
        return list(self._workouts)

    def initialize(self) -> None:
        """Load the snapshot from storage."""
        self._calorie_limit = self.storage.get_calorie_limit(
            self.default_calorie_limit
        )
        self._total_calories = self.storage.get_total_calories(0.0)
        self._meals = self.storage.get_meals()
        self._workouts = self.storage.get_workouts()
        expected = self.computed_total()
        if not math.isclose(
            self._total_calories, expected, rel_tol=0.0, abs_tol=TOTAL_TOLERANCE
        ):
            logger.warning(
                "Stored total %s does not match logged entries (%s); repairing",
                self._total_calories,
                expected,
            )
            self._total_calories = expected
            self.storage.update_total_calories(expected)

    def add_meal(self, meal: Meal) -> None:
        """Log a meal and add its calories to the total."""
        self._meals.append(meal)
        self.storage.save_meal(meal)
        self._total_calories += meal.calories
        self.storage.update_total_calories(self._total_calories)
        logger.info("Added meal %s (%s kcal)", meal.id, meal.calories)

    def remove_meal(self, entry_id: str) -> None:
        """Remove a meal by id; unknown ids are ignored."""
        index = _find_index(self._meals, entry_id)
        if index is None:
            return
        meal = self._meals[index]
        self._total_calories -= meal.calories
        self.storage.update_total_calories(self._total_calories)
        del self._meals[index]
        self.storage.remove_meal(entry_id)
        logger.info("Removed meal %s", entry_id)

    def add_workout(self, workout: Workout) -> None:
        """Log a workout and subtract its calories from the total."""
        self._workouts.append(workout)
        self.storage.save_workout(workout)
        self._total_calories -= workout.calories
        self.storage.update_total_calories(self._total_calories)
        logger.info("Added workout %s (%s kcal)", workout.id, workout.calories)

    def remove_workout(self, entry_id: str) -> None:
        """Remove a workout by id; unknown ids are ignored."""
        index = _find_index(self._workouts, entry_id)
        if index is None:
            return
        workout = self._workouts[index]
        self._total_calories += workout.calories
        self.storage.update_total_calories(self._total_calories)
        del self._workouts[index]
        self.storage.remove_workout(entry_id)
        logger.info("Removed workout %s", entry_id)

    def set_limit(self, limit: float) -> None:
        """Change the daily limit and persist it."""
        self._calorie_limit = float(limit)
        self.storage.set_calorie_limit(self._calorie_limit)
        logger.info("Calorie limit set to %s", self._calorie_limit)

    def reset(self) -> None:
        """Forget all entries and the total; the limit is kept."""
        self._total_calories = 0.0
        self._meals = []
        self._workouts = []
        self.storage.clear_all()
        logger.info("Tracker reset")

    def calories_consumed(self) -> float:
        return sum((meal.calories for meal in self._meals), 0.0)

    def calories_burned(self) -> float:
        return sum((workout.calories for workout in self._workouts), 0.0)

    def calories_remaining(self) -> float:
        return self._calorie_limit - self._total_calories

    def computed_total(self) -> float:
        """Recompute the balance from the entry lists."""
        return self.calories_consumed() - self.calories_burned()

    def progress_percentage(self) -> float:
        """Share of the limit used, capped at 100.

        A zero limit counts as fully used.
        """
        if self._calorie_limit == 0:
            return MAX_PROGRESS
        percentage = self._total_calories / self._calorie_limit * 100
        return min(percentage, MAX_PROGRESS)

    def is_over_limit(self) -> bool:
        """Return True when nothing of the limit remains."""
        return self.calories_remaining() <= 0

    def find_meals(self, query: str) -> list[Meal]:
        """Return meals whose name contains the query."""
        return filter_by_name(self._meals, query)

    def find_workouts(self, query: str) -> list[Workout]:
        """Return workouts whose name contains the query."""
        return filter_by_name(self._workouts, query)

    def summary(self) -> TrackerSummary:
        """Return the current derived values."""
        return TrackerSummary(
            calorie_limit=self._calorie_limit,
            total_calories=self._total_calories,
            calories_consumed=self.calories_consumed(),
            calories_burned=self.calories_burned(),
            calories_remaining=self.calories_remaining(),
            progress_percentage=self.progress_percentage(),
            over_limit=self.is_over_limit(),
        )


def _find_index(entries: list[Meal] | list[Workout], entry_id: str) -> int | None:
    for index, entry in enumerate(entries):
        if entry.id == entry_id:
            return index
    return None
