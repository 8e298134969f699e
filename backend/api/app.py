"""
FastAPI application factory for the Live Picks API service.

Creates the app with:
- REST routes (live scores with graded model picks)
- Middleware stack
- Health check endpoints
- Lifespan management (startup/shutdown)
"""
from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Union

from fastapi import FastAPI

from enrichment.config import get_enrichment_settings
from enrichment.engine import PredictionEnrichmentEngine
from enrichment.live_scores import LiveScoresRepository, LiveScoresService
from shared.config import get_settings
from shared.utils.database import DatabaseManager
from shared.utils.logging import get_logger, setup_logging
from shared.utils.metrics import start_metrics_server

from api.dependencies import get_db, get_predictions_db, init_dependencies
from api.middleware import setup_middleware
from api.routes.live import router as live_router

logger = get_logger(__name__)

# Retry connection on startup (databases may not be ready yet)
_CONNECT_RETRY_ATTEMPTS = 10
_CONNECT_RETRY_BASE_DELAY_S = 2.0


async def _connect_with_retry(connect_fn, name: str) -> None:
    """Call async connect_fn(); retry with exponential backoff on failure."""
    for attempt in range(1, _CONNECT_RETRY_ATTEMPTS + 1):
        try:
            await connect_fn()
            return
        except Exception as exc:
            if attempt == _CONNECT_RETRY_ATTEMPTS:
                raise
            delay = _CONNECT_RETRY_BASE_DELAY_S * (2 ** (attempt - 1))
            logger.warning(
                "connect_retry",
                name=name,
                attempt=attempt,
                max_attempts=_CONNECT_RETRY_ATTEMPTS,
                delay_s=delay,
                error=str(exc),
            )
            await asyncio.sleep(delay)


@asynccontextmanager
async def _noop_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """No-op lifespan for testing without databases."""
    yield


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.
    Connects both databases, wires the enrichment engine and disposes the
    engines on shutdown.
    """
    settings = get_settings()
    setup_logging("api")
    start_metrics_server(settings.metrics_port)

    db = DatabaseManager(settings)
    predictions_db = DatabaseManager.for_predictions(settings)

    await _connect_with_retry(db.connect, "LiveDatabase")
    await _connect_with_retry(predictions_db.connect, "PredictionsDatabase")

    engine = PredictionEnrichmentEngine.from_database(predictions_db, get_enrichment_settings())
    service = LiveScoresService(LiveScoresRepository(db), engine)
    init_dependencies(db, predictions_db, service)

    logger.info(
        "api_service_started",
        host=settings.api_host,
        port=settings.api_port,
        leagues=[league.value for league in engine.leagues],
    )

    yield

    await predictions_db.disconnect()
    await db.disconnect()
    logger.info("api_service_stopped")


def create_app(*, use_lifespan: bool = True) -> FastAPI:
    """Create and configure the FastAPI application. Set use_lifespan=False for testing without databases."""
    app = FastAPI(
        title="Live Picks API",
        description="Live games enriched with graded model predictions",
        version="1.0.0",
        lifespan=lifespan if use_lifespan else _noop_lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    setup_middleware(app)

    app.include_router(live_router)

    @app.get("/health", tags=["system"])
    async def health() -> dict[str, str]:
        return {"status": "ok", "service": "api"}

    @app.get("/ready", tags=["system"])
    async def readiness() -> Dict[str, Union[str, bool]]:
        """Readiness check against both databases."""
        live_ok = await get_db().ping()
        predictions_ok = await get_predictions_db().ping()
        return {
            "status": "ok" if (live_ok and predictions_ok) else "degraded",
            "database": live_ok,
            "predictions_database": predictions_ok,
        }

    return app


# For running with uvicorn directly
app = create_app()
