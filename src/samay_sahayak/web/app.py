"""FastAPI application for the samay-sahayak API."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__, config
from ..agents.generator import TimetableGenerator
from ..db.engine import DatabaseManager
from ..db.repositories import AnalyticsRepository, TimetableRepository
from ..exceptions import DatabaseUnavailableError, PlannerError
from ..services.analytics import AnalyticsService
from .middleware import setup_middleware
from .routers import analytics, catalog, generation, timetables

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - runs on startup and shutdown."""
    config.configure_logging()
    config.validate_config()

    manager: DatabaseManager = app.state.db_manager
    try:
        await manager.connect()
    except DatabaseUnavailableError as e:
        # Keep serving; handlers retry the connection on demand
        logger.error("Starting without a database: %s", e.details)

    logger.info("API server started")
    yield

    logger.info("Shutting down API server...")
    await manager.close()


def create_app(
    db_path: Path | None = None,
    generator: TimetableGenerator | None = None,
    api_prefix: str | None = None,
    db_manager: DatabaseManager | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    prefix = api_prefix if api_prefix is not None else config.API_PREFIX

    app = FastAPI(
        title="samay-sahayak",
        description="AI-assisted daily timetable planner",
        version=__version__,
        lifespan=lifespan,
    )

    manager = db_manager or DatabaseManager(db_path)
    app.state.db_manager = manager
    app.state.generator = generator or TimetableGenerator()
    app.state.timetable_repo = TimetableRepository(manager.db_path)
    app.state.analytics_service = AnalyticsService(AnalyticsRepository(manager.db_path))

    setup_middleware(app)

    app.include_router(generation.router, prefix=prefix)
    app.include_router(timetables.router, prefix=prefix)
    app.include_router(analytics.router, prefix=prefix)
    app.include_router(catalog.router, prefix=prefix)

    @app.get(f"{prefix}/health")
    async def health(request: Request):
        """Liveness probe with database connection health."""
        db_manager = request.app.state.db_manager
        await db_manager.check()
        return {
            "status": "OK",
            "message": "Samay Sahayak backend is running",
            "database": db_manager.health(),
        }

    @app.exception_handler(PlannerError)
    async def planner_error_handler(request: Request, exc: PlannerError):
        logger.error(
            "%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.details
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception: %s", exc, exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Internal server error", "details": None},
        )

    return app
