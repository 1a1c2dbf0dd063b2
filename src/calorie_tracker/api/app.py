"""FastAPI application factory."""

import logging

from fastapi import FastAPI

from calorie_tracker.api.tracker import router as tracker_router
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Calorie Tracker")
    app.state.container = container

    app.include_router(tracker_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    logger.info(
        "Calorie tracker ready (storage=%s, limit=%s)",
        container.settings.storage_backend,
        container.tracker.calorie_limit,
    )
    return app
