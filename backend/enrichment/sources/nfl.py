"""NFL predictions: EPA model output joined to the betting lines table."""
from __future__ import annotations

from datetime import date
from typing import Any, Callable, Iterable, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from enrichment.sources.base import (
    NFLPrediction,
    PredictionRecord,
    PredictionSource,
    as_number,
    as_probability,
)
from shared.models.enums import League
from shared.models.orm import NFLBettingLineORM, NFLPredictionORM
from shared.utils.database import DatabaseManager


def build_nfl_records(predictions: Iterable[Any], lines: Iterable[Any]) -> list[NFLPrediction]:
    """Left join prediction rows to line rows on training_key."""
    lines_by_key = {row.training_key: row for row in lines}
    records: list[NFLPrediction] = []
    for row in predictions:
        line = lines_by_key.get(row.training_key)
        records.append(
            NFLPrediction(
                training_key=row.training_key,
                home_team=row.home_team,
                away_team=row.away_team,
                home_away_ml_prob=as_probability(row.home_away_ml_prob),
                home_away_spread_cover_prob=as_probability(row.home_away_spread_cover_prob),
                ou_result_prob=as_probability(row.ou_result_prob),
                home_spread=as_number(line.home_spread) if line else None,
                away_spread=as_number(line.away_spread) if line else None,
                over_line=as_number(line.over_line) if line else None,
            )
        )
    return records


class NFLPredictionSource(PredictionSource):
    """Latest run_id among games dated today or later."""

    def __init__(self, db: DatabaseManager, today: Optional[Callable[[], date]] = None) -> None:
        super().__init__(db)
        self._today = today or date.today

    @property
    def league(self) -> League:
        return League.NFL

    async def load(self, session: AsyncSession) -> list[PredictionRecord]:
        today = self._today()
        latest_run = await session.scalar(
            select(func.max(NFLPredictionORM.run_id)).where(NFLPredictionORM.game_date >= today)
        )
        if latest_run is None:
            return []

        result = await session.execute(
            select(NFLPredictionORM)
            .where(NFLPredictionORM.run_id == latest_run, NFLPredictionORM.game_date >= today)
            .order_by(NFLPredictionORM.game_date, NFLPredictionORM.training_key)
        )
        predictions = list(result.scalars().all())
        if not predictions:
            return []

        keys = [row.training_key for row in predictions]
        lines = await self.optional_rows(
            session,
            select(NFLBettingLineORM).where(NFLBettingLineORM.training_key.in_(keys)),
            table=NFLBettingLineORM.__tablename__,
        )
        return build_nfl_records(predictions, lines)
