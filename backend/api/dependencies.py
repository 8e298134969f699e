"""
Dependency injection for the API service.
Provides the database managers and the live-scores service to route handlers.
"""
from __future__ import annotations

from enrichment.live_scores import LiveScoresService
from shared.utils.database import DatabaseManager

# Module-level singletons, initialized at startup
_db: DatabaseManager | None = None
_predictions_db: DatabaseManager | None = None
_live_scores: LiveScoresService | None = None


def init_dependencies(
    db: DatabaseManager,
    predictions_db: DatabaseManager,
    live_scores: LiveScoresService,
) -> None:
    """Initialize module-level singletons. Called once at startup."""
    global _db, _predictions_db, _live_scores
    _db = db
    _predictions_db = predictions_db
    _live_scores = live_scores


def get_db() -> DatabaseManager:
    """FastAPI dependency: returns the live-scores DatabaseManager."""
    if _db is None:
        raise RuntimeError("DatabaseManager not initialized, call init_dependencies first")
    return _db


def get_predictions_db() -> DatabaseManager:
    """FastAPI dependency: returns the predictions DatabaseManager."""
    if _predictions_db is None:
        raise RuntimeError("Predictions DatabaseManager not initialized, call init_dependencies first")
    return _predictions_db


def get_live_scores_service() -> LiveScoresService:
    if _live_scores is None:
        raise RuntimeError("LiveScoresService not initialized, call init_dependencies first")
    return _live_scores
