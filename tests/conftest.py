"""Shared test fixtures."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

import pytest

from calorie_tracker.adapters.memory_store import InMemoryKeyValueStore
from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.services.storage import CalorieStorage
from calorie_tracker.services.tracker import CaloriesTracker


@dataclass
class RecordingKeyValueStore(InMemoryKeyValueStore):
    """In-memory store that records every write for ordering checks."""

    writes: list[tuple[str, str, str | None]] = field(default_factory=list)

    def set_item(self, key: str, value: str) -> None:
        self.writes.append(("set", key, value))
        super().set_item(key, value)

    def remove_item(self, key: str) -> None:
        self.writes.append(("remove", key, None))
        super().remove_item(key)


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    """Minimal stand-in for a Supabase query builder over one table."""

    name: str
    rows: dict[str, dict[str, object]] = field(default_factory=dict)
    calls: list[tuple[str, object]] = field(default_factory=list)

    def select(self, *columns: str) -> "FakeTable":
        self._action = "select"
        self._columns = columns
        self._filters: list[tuple[str, object]] = []
        return self

    def upsert(self, payload: dict[str, object]) -> "FakeTable":
        self._action = "upsert"
        self._payload = payload
        self._filters = []
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        self._filters = []
        return self

    def eq(self, column: str, value: object) -> "FakeTable":
        self._filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        self.calls.append((self._action, list(self._filters)))
        if self._action == "upsert":
            self.rows[str(self._payload["key"])] = dict(self._payload)
            return FakeResponse(data=[dict(self._payload)])
        matched = [
            key
            for key, row in self.rows.items()
            if all(row.get(column) == value for column, value in self._filters)
        ]
        if self._action == "delete":
            removed = [self.rows.pop(key) for key in matched]
            return FakeResponse(data=removed)
        return FakeResponse(
            data=[{"value": self.rows[key]["value"]} for key in matched]
        )


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


@pytest.fixture(autouse=True)
def reset_app_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("calorie_tracker")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def settings() -> Settings:
    return Settings(storage_backend="memory", _env_file=None)


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def storage(store: InMemoryKeyValueStore) -> CalorieStorage:
    return CalorieStorage(store)


@pytest.fixture
def tracker(storage: CalorieStorage) -> CaloriesTracker:
    tracker = CaloriesTracker(storage)
    tracker.initialize()
    return tracker


@pytest.fixture
def container(
    settings: Settings,
    store: InMemoryKeyValueStore,
    storage: CalorieStorage,
    tracker: CaloriesTracker,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        store=store,
        storage=storage,
        tracker=tracker,
    )
