"""Tests for the JSON file key-value store."""

import json
from pathlib import Path

import pytest

from calorie_tracker.adapters import file_store
from calorie_tracker.adapters.file_store import JsonFileKeyValueStore
from calorie_tracker.domain.entries import Meal, Workout
from calorie_tracker.services.storage import CalorieStorage
from calorie_tracker.services.tracker import CaloriesTracker


def test_missing_file_reads_as_empty(tmp_path: Path) -> None:
    store = JsonFileKeyValueStore.create(tmp_path / "state.json")

    assert store.get_item("meals") is None
    assert not (tmp_path / "state.json").exists()


def test_values_persist_across_instances(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "state.json"
    first = JsonFileKeyValueStore.create(path)
    first.set_item("calorieLimit", "1800")
    first.set_item("totalCalories", "250")
    first.remove_item("totalCalories")

    second = JsonFileKeyValueStore.create(path)

    assert second.get_item("calorieLimit") == "1800"
    assert second.get_item("totalCalories") is None
    assert json.loads(path.read_text(encoding="utf-8")) == {"calorieLimit": "1800"}
    assert not path.with_name("state.json.tmp").exists()


def test_unreadable_file_reads_as_empty(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_text("{oops", encoding="utf-8")
    store = JsonFileKeyValueStore.create(path)

    assert store.get_item("calorieLimit") is None

    store.set_item("calorieLimit", "2100")
    assert json.loads(path.read_text(encoding="utf-8")) == {"calorieLimit": "2100"}


def test_non_object_file_reads_as_empty(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    assert JsonFileKeyValueStore.create(path).get_item("meals") is None


def test_tracker_restarts_from_file(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    tracker = CaloriesTracker(CalorieStorage(JsonFileKeyValueStore.create(path)))
    tracker.initialize()
    lunch = Meal.create("Lunch", 600)
    run = Workout.create("Run", 300)
    tracker.add_meal(lunch)
    tracker.add_workout(run)
    tracker.set_limit(2400)

    restarted = CaloriesTracker(CalorieStorage(JsonFileKeyValueStore.create(path)))
    restarted.initialize()

    assert restarted.meals == [lunch]
    assert restarted.workouts == [run]
    assert restarted.total_calories == 300
    assert restarted.calorie_limit == 2400


def test_failed_write_keeps_previous_state(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "state.json"
    store = JsonFileKeyValueStore.create(path)
    store.set_item("calorieLimit", "1800")

    def fail_replace(src: object, dst: object) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(file_store.os, "replace", fail_replace)

    with pytest.raises(OSError, match="disk full"):
        store.set_item("calorieLimit", "2500")
    with pytest.raises(OSError, match="disk full"):
        store.remove_item("calorieLimit")

    assert store.get_item("calorieLimit") == "1800"
    assert not path.with_name("state.json.tmp").exists()
    assert json.loads(path.read_text(encoding="utf-8")) == {"calorieLimit": "1800"}


def test_reads_file_with_raw_json_values(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_text(
        json.dumps(
            {
                "meals": [{"id": "a1", "name": "Toast", "calories": 120}],
                "calorieLimit": 1800,
            }
        ),
        encoding="utf-8",
    )
    storage = CalorieStorage(JsonFileKeyValueStore.create(path))

    assert storage.get_meals() == [Meal(id="a1", name="Toast", calories=120.0)]
    assert storage.get_calorie_limit() == 1800
