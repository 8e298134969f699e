"""NBA predictions for the most recent model run."""
from __future__ import annotations

from typing import Any, Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from enrichment.sources.base import (
    NBAPrediction,
    PredictionRecord,
    PredictionSource,
    as_number,
    as_probability,
)
from shared.models.enums import League
from shared.models.orm import NBAInputValuesORM, NBAPredictionORM


def build_nba_records(predictions: Iterable[Any], inputs: Iterable[Any]) -> list[NBAPrediction]:
    """Left join predictions to the input values view on game_id."""
    inputs_by_game = {row.game_id: row for row in inputs}
    records: list[NBAPrediction] = []
    for row in predictions:
        view = inputs_by_game.get(row.game_id)
        # Names on the prediction row can be blank for early runs.
        home_team = row.home_team or (view.home_team if view else None)
        away_team = row.away_team or (view.away_team if view else None)
        if not home_team or not away_team:
            continue
        records.append(
            NBAPrediction(
                game_id=row.game_id,
                home_team=home_team,
                away_team=away_team,
                run_id=row.run_id,
                home_win_prob=as_probability(row.home_win_prob),
                model_fair_home_spread=as_number(row.model_fair_home_spread),
                model_fair_total=as_number(row.model_fair_total),
                home_score_pred=as_number(row.home_score_pred),
                away_score_pred=as_number(row.away_score_pred),
                home_spread=as_number(view.home_spread) if view else None,
                total_line=as_number(view.total_line) if view else None,
            )
        )
    return records


class NBAPredictionSource(PredictionSource):

    @property
    def league(self) -> League:
        return League.NBA

    async def load(self, session: AsyncSession) -> list[PredictionRecord]:
        latest_run = await session.scalar(
            select(NBAPredictionORM.run_id)
            .where(NBAPredictionORM.as_of_ts_utc.is_not(None))
            .order_by(NBAPredictionORM.as_of_ts_utc.desc())
            .limit(1)
        )
        if latest_run is None:
            return []

        result = await session.execute(
            select(NBAPredictionORM)
            .where(NBAPredictionORM.run_id == latest_run)
            .order_by(NBAPredictionORM.game_id)
        )
        predictions = list(result.scalars().all())
        if not predictions:
            return []

        game_ids = [row.game_id for row in predictions]
        inputs = await self.optional_rows(
            session,
            select(NBAInputValuesORM).where(NBAInputValuesORM.game_id.in_(game_ids)),
            table=NBAInputValuesORM.__tablename__,
        )
        return build_nba_records(predictions, inputs)
