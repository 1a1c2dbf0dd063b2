"""Domain models for logged meals and workouts."""

from dataclasses import dataclass
from typing import Self, TypeVar
from uuid import uuid4

DEFAULT_CALORIE_LIMIT = 2000.0


def new_entry_id() -> str:
    """Return a fresh random entry id."""
    return uuid4().hex


@dataclass(frozen=True)
class Entry:
    """A named calorie amount, identified by an opaque id."""

    id: str
    name: str
    calories: float

    @classmethod
    def create(cls, name: str, calories: float) -> Self:
        """Build an entry with a newly generated id."""
        return cls(id=new_entry_id(), name=name, calories=float(calories))


@dataclass(frozen=True)
class Meal(Entry):
    """Food eaten; adds to the running total."""


@dataclass(frozen=True)
class Workout(Entry):
    """Exercise done; subtracts from the running total."""


EntryT = TypeVar("EntryT", bound=Entry)


def filter_by_name(entries: list[EntryT], query: str) -> list[EntryT]:
    """Return entries whose name contains the query, ignoring case."""
    needle = query.strip().lower()
    if not needle:
        return list(entries)
    return [entry for entry in entries if needle in entry.name.lower()]
