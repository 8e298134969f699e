"""
Live score loading and the enriched live-scores read path.
The repository propagates database errors; the service degrades them to [].
"""
from __future__ import annotations

from typing import Any, Optional, Sequence

from sqlalchemy import select

from enrichment.engine import PredictionEnrichmentEngine
from shared.models.domain import EnrichedGame, LiveGame
from shared.models.enums import League
from shared.models.orm import LiveScoreORM
from shared.utils.database import DatabaseManager
from shared.utils.logging import get_logger

logger = get_logger(__name__)


def live_game_from_row(row: Any) -> LiveGame:
    """Map a live_scores row to the domain model."""
    return LiveGame(
        id=str(row.id),
        league=League(row.league),
        home_team=row.home_team,
        away_team=row.away_team,
        home_score=row.home_score or 0,
        away_score=row.away_score or 0,
        external_game_id=row.game_id or "",
        home_abbr=row.home_abbr,
        away_abbr=row.away_abbr,
        status=row.status,
        period=row.period,
        time_remaining=row.time_remaining,
        is_live=bool(row.is_live),
    )


class LiveScoresRepository:

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def get_live_games(self, leagues: Optional[Sequence[League]] = None) -> list[LiveGame]:
        """Live games for the supported leagues, ordered by league then away team."""
        wanted = [league.value for league in (leagues or list(League))]
        async with self._db.read_session() as session:
            result = await session.execute(
                select(LiveScoreORM)
                .where(LiveScoreORM.is_live.is_(True), LiveScoreORM.league.in_(wanted))
                .order_by(LiveScoreORM.league, LiveScoreORM.away_abbr)
            )
            rows = result.scalars().all()
        return [live_game_from_row(row) for row in rows]


class LiveScoresService:
    """Loads live games and enriches them with model predictions."""

    def __init__(self, repository: LiveScoresRepository, engine: PredictionEnrichmentEngine) -> None:
        self._repository = repository
        self._engine = engine

    async def get_live_scores(self, league: Optional[League] = None) -> list[EnrichedGame]:
        """
        Enriched live games. A failed live-score load is logged and served as
        an empty list; callers never see an error from this path.
        """
        league_name = league.value if league else None
        try:
            games = await self._repository.get_live_games([league] if league else None)
        except Exception as exc:
            logger.error("live_scores_load_failed", league=league_name, error=str(exc), exc_info=True)
            return []
        logger.debug("live_games_loaded", count=len(games), league=league_name)
        return await self._engine.enrich(games)
