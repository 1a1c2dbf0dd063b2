"""Persistence of the tracker snapshot in a textual key-value store."""

import logging
import math
from dataclasses import dataclass
from typing import Protocol

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from calorie_tracker.domain.entries import (
    DEFAULT_CALORIE_LIMIT,
    Entry,
    EntryT,
    Meal,
    Workout,
)

logger = logging.getLogger(__name__)

CALORIE_LIMIT_KEY = "calorieLimit"
TOTAL_CALORIES_KEY = "totalCalories"
MEALS_KEY = "meals"
WORKOUTS_KEY = "workouts"


class StoredEntry(BaseModel):
    """Persisted shape of a meal or workout."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    calories: float = Field(ge=0, allow_inf_nan=False)


_ENTRIES_ADAPTER = TypeAdapter(list[StoredEntry])


class CorruptDataError(ValueError):
    """Raised when a stored collection cannot be decoded."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Stored value for {key!r} is corrupt: {reason}")
        self.key = key
        self.reason = reason


class KeyValueStore(Protocol):
    """String-keyed, string-valued durable storage."""

    def get_item(self, key: str) -> str | None:
        """Return the stored text for a key, if present."""

    def set_item(self, key: str, value: str) -> None:
        """Store text under a key, replacing any previous value."""

    def remove_item(self, key: str) -> None:
        """Delete a key; missing keys are ignored."""


@dataclass
class CalorieStorage:
    """Reads and writes the limit, total, meals and workouts."""

    store: KeyValueStore

    def get_calorie_limit(self, default: float = DEFAULT_CALORIE_LIMIT) -> float:
        """Return the stored calorie limit or the default."""
        return self._get_number(CALORIE_LIMIT_KEY, default)

    def set_calorie_limit(self, limit: float) -> None:
        """Persist the calorie limit."""
        self.store.set_item(CALORIE_LIMIT_KEY, _format_number(limit))

    def get_total_calories(self, default: float = 0.0) -> float:
        """Return the stored running total or the default."""
        return self._get_number(TOTAL_CALORIES_KEY, default)

    def update_total_calories(self, total: float) -> None:
        """Persist the running total."""
        self.store.set_item(TOTAL_CALORIES_KEY, _format_number(total))

    def load_meals(self) -> list[Meal]:
        """Return stored meals, raising CorruptDataError on bad data."""
        return _decode(self.store.get_item(MEALS_KEY), MEALS_KEY, Meal)

    def load_workouts(self) -> list[Workout]:
        """Return stored workouts, raising CorruptDataError on bad data."""
        return _decode(self.store.get_item(WORKOUTS_KEY), WORKOUTS_KEY, Workout)

    def get_meals(self) -> list[Meal]:
        """Return stored meals, or an empty list if they can't be read."""
        try:
            return self.load_meals()
        except CorruptDataError as exc:
            logger.warning("Ignoring stored meals: %s", exc.reason)
            return []

    def get_workouts(self) -> list[Workout]:
        """Return stored workouts, or an empty list if they can't be read."""
        try:
            return self.load_workouts()
        except CorruptDataError as exc:
            logger.warning("Ignoring stored workouts: %s", exc.reason)
            return []

    def save_meal(self, meal: Meal) -> None:
        """Append a meal to the stored list."""
        meals = self.get_meals()
        meals.append(meal)
        self.store.set_item(MEALS_KEY, _encode(meals))

    def save_workout(self, workout: Workout) -> None:
        """Append a workout to the stored list."""
        workouts = self.get_workouts()
        workouts.append(workout)
        self.store.set_item(WORKOUTS_KEY, _encode(workouts))

    def remove_meal(self, entry_id: str) -> None:
        """Delete the first stored meal with the given id."""
        meals = self.get_meals()
        if _remove_first(meals, entry_id):
            self.store.set_item(MEALS_KEY, _encode(meals))

    def remove_workout(self, entry_id: str) -> None:
        """Delete the first stored workout with the given id."""
        workouts = self.get_workouts()
        if _remove_first(workouts, entry_id):
            self.store.set_item(WORKOUTS_KEY, _encode(workouts))

    def clear_all(self) -> None:
        """Drop the total and both lists; the calorie limit is kept."""
        self.store.remove_item(TOTAL_CALORIES_KEY)
        self.store.remove_item(MEALS_KEY)
        self.store.remove_item(WORKOUTS_KEY)

    def _get_number(self, key: str, default: float) -> float:
        raw = self.store.get_item(key)
        if raw is None or not raw.strip():
            return default
        try:
            value = float(raw)
        except ValueError:
            logger.warning("Ignoring non-numeric value stored for %s", key)
            return default
        if not math.isfinite(value):
            logger.warning("Ignoring non-finite value stored for %s", key)
            return default
        return value


def _decode(raw: str | None, key: str, entry_type: type[EntryT]) -> list[EntryT]:
    if raw is None or not raw.strip():
        return []
    try:
        stored = _ENTRIES_ADAPTER.validate_json(raw)
    except ValidationError as exc:
        raise CorruptDataError(key, f"{exc.error_count()} validation error(s)") from exc
    return [
        entry_type(id=item.id, name=item.name, calories=item.calories)
        for item in stored
    ]


def _encode(entries: list[EntryT]) -> str:
    stored = [_to_stored(entry) for entry in entries]
    return _ENTRIES_ADAPTER.dump_json(stored).decode("utf-8")


def _to_stored(entry: Entry) -> StoredEntry:
    return StoredEntry.model_construct(
        id=entry.id, name=entry.name, calories=entry.calories
    )


def _remove_first(entries: list[EntryT], entry_id: str) -> bool:
    for index, entry in enumerate(entries):
        if entry.id == entry_id:
            del entries[index]
            return True
    return False


def _format_number(value: float) -> str:
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)
