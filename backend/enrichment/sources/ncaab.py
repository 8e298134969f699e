"""College basketball predictions for the most recent model run."""
from __future__ import annotations

from typing import Any, Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from enrichment.sources.base import (
    NCAABPrediction,
    PredictionRecord,
    PredictionSource,
    as_number,
    as_probability,
    first_present,
)
from shared.models.enums import League
from shared.models.orm import CBBInputValuesORM, NCAABPredictionORM


def build_ncaab_records(predictions: Iterable[Any], inputs: Iterable[Any]) -> list[NCAABPrediction]:
    """
    Lines recorded with the prediction win; the input values view only
    fills in a line the prediction row left empty.
    """
    inputs_by_game = {row.game_id: row for row in inputs}
    records: list[NCAABPrediction] = []
    for row in predictions:
        view = inputs_by_game.get(row.game_id)
        records.append(
            NCAABPrediction(
                game_id=row.game_id,
                home_team=row.home_team,
                away_team=row.away_team,
                run_id=row.run_id,
                home_win_prob=as_probability(row.home_win_prob),
                pred_total_points=as_number(row.pred_total_points),
                pred_home_margin=as_number(row.pred_home_margin),
                home_score_pred=as_number(row.home_score_pred),
                away_score_pred=as_number(row.away_score_pred),
                home_spread=first_present(row.vegas_home_spread, view.spread if view else None),
                total_line=first_present(row.vegas_total, view.over_under if view else None),
            )
        )
    return records


class NCAABPredictionSource(PredictionSource):

    @property
    def league(self) -> League:
        return League.NCAAB

    async def load(self, session: AsyncSession) -> list[PredictionRecord]:
        latest_run = await session.scalar(
            select(NCAABPredictionORM.run_id)
            .where(NCAABPredictionORM.as_of_ts_utc.is_not(None))
            .order_by(NCAABPredictionORM.as_of_ts_utc.desc())
            .limit(1)
        )
        if latest_run is None:
            return []

        result = await session.execute(
            select(NCAABPredictionORM)
            .where(NCAABPredictionORM.run_id == latest_run)
            .order_by(NCAABPredictionORM.game_id)
        )
        predictions = list(result.scalars().all())
        if not predictions:
            return []

        game_ids = [row.game_id for row in predictions]
        inputs = await self.optional_rows(
            session,
            select(CBBInputValuesORM).where(CBBInputValuesORM.game_id.in_(game_ids)),
            table=CBBInputValuesORM.__tablename__,
        )
        return build_ncaab_records(predictions, inputs)
