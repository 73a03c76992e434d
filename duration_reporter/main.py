"""
Duration Reporter - HTTP Application

FastAPI app exposing the global duration reporter for inspection. The
reporter lives in the process that tracks the actions, so the app has to be
served from that same process. Either build it with ``create_app()`` or mount
``duration_reporter.routes.router`` on the host application::

    host_app.include_router(router)
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import BaseModel

from .reporter import get_duration_reporter
from .routes import router

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    events_tracked: int
    time_unit: str
    uptime_seconds: float


def create_app() -> FastAPI:
    """Build the FastAPI app with the duration routes mounted."""
    start_time = time.time()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        reporter = get_duration_reporter()
        logger.info(f"Duration reporter API ready (unit: {reporter.time_unit.symbol})")
        yield
        logger.info("Shutting down...")

    app = FastAPI(
        title="Duration Reporter API",
        version="1.0.0",
        description="Inspect in-process event/action durations",
        lifespan=lifespan,
    )
    app.include_router(router)

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint."""
        reporter = get_duration_reporter()
        return HealthResponse(
            status="ok",
            events_tracked=len(reporter.report_data()),
            time_unit=reporter.time_unit.symbol,
            uptime_seconds=time.time() - start_time,
        )

    return app
