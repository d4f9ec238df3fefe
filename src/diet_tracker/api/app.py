"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from diet_tracker.api.admin import router as admin_router
from diet_tracker.api.feedback import router as feedback_router
from diet_tracker.api.foods import router as foods_router
from diet_tracker.api.meals import router as meals_router
from diet_tracker.api.profile import router as profile_router
from diet_tracker.api.summaries import router as summaries_router
from diet_tracker.api.water import router as water_router
from diet_tracker.app_logging import configure_logging
from diet_tracker.containers import AppContainer
from diet_tracker.domain.feedback import WidgetUnavailable


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.environment)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        state_container.widget = await state_container.widget_service.initialize()
        if isinstance(state_container.widget, WidgetUnavailable):
            logger.info(
                "Feedback widget unavailable: %s", state_container.widget.reason
            )
        yield
        await state_container.close_resources()

    app = FastAPI(title="Diet Tracker", lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)
    app.include_router(foods_router)
    app.include_router(meals_router)
    app.include_router(summaries_router)
    app.include_router(profile_router)
    app.include_router(water_router)
    app.include_router(feedback_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
