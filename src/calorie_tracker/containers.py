"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from calorie_tracker.adapters.file_store import JsonFileKeyValueStore
from calorie_tracker.adapters.memory_store import InMemoryKeyValueStore
from calorie_tracker.adapters.supabase_store import SupabaseKeyValueStore
from calorie_tracker.config import Settings, parse_storage_backend
from calorie_tracker.services.storage import CalorieStorage, KeyValueStore
from calorie_tracker.services.tracker import CaloriesTracker


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: KeyValueStore
    storage: CalorieStorage
    tracker: CaloriesTracker


def build_store(settings: Settings) -> KeyValueStore:
    """Create the key-value backend selected in settings."""
    backend = parse_storage_backend(settings.storage_backend)
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError(
                "Supabase storage requires SUPABASE_URL and SUPABASE_SERVICE_KEY"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(client, table=settings.supabase_table)
    return JsonFileKeyValueStore.create(settings.storage_path)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container with a loaded tracker."""
    resolved_settings = settings or Settings()
    store = build_store(resolved_settings)
    storage = CalorieStorage(store)
    tracker = CaloriesTracker(
        storage=storage,
        default_calorie_limit=resolved_settings.default_calorie_limit,
    )
    tracker.initialize()
    return AppContainer(
        settings=resolved_settings,
        store=store,
        storage=storage,
        tracker=tracker,
    )
