"""
Live scores REST endpoint.

GET /v1/live-scores?league=NBA: in-progress games with graded model picks.
"""
from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from enrichment.live_scores import LiveScoresService
from shared.models.enums import League
from shared.utils.logging import get_logger

from api.dependencies import get_live_scores_service

logger = get_logger(__name__)
router = APIRouter(prefix="/v1/live-scores", tags=["live"])


@router.get("")
async def list_live_scores(
    league: Optional[League] = Query(default=None, description="Restrict to one league"),
    service: LiveScoresService = Depends(get_live_scores_service),
) -> dict[str, Any]:
    """
    Live games, each with a `predictions` object when a model row matched.
    Games without a matching prediction carry no `predictions` key.
    """
    games = await service.get_live_scores(league)
    return {
        "games": [game.to_wire() for game in games],
        "count": len(games),
    }
