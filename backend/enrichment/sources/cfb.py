"""College football predictions for the latest (season, week)."""
from __future__ import annotations

from typing import Any, Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from enrichment.sources.base import (
    CFBPrediction,
    PredictionRecord,
    PredictionSource,
    as_number,
    as_probability,
    first_present,
)
from shared.models.enums import League
from shared.models.orm import CFBApiPredictionORM, CFBWeeklyInputORM


def build_cfb_records(inputs: Iterable[Any], api_rows: Iterable[Any]) -> list[CFBPrediction]:
    """
    Left join weekly inputs to the API prediction rows on id.
    Edges come only from the API rows; predicted scores prefer the API row
    and fall back to the weekly input.
    """
    api_by_id = {row.id: row for row in api_rows}
    records: list[CFBPrediction] = []
    for row in inputs:
        api = api_by_id.get(row.id)
        records.append(
            CFBPrediction(
                game_key=row.id,
                home_team=row.home_team,
                away_team=row.away_team,
                pred_ml_proba=as_probability(row.pred_ml_proba),
                pred_spread_proba=as_probability(row.pred_spread_proba),
                pred_total_proba=as_probability(row.pred_total_proba),
                api_spread=as_number(row.api_spread),
                api_over_line=as_number(row.api_over_line),
                home_spread_diff=as_number(api.home_spread_diff) if api else None,
                over_line_diff=as_number(api.over_line_diff) if api else None,
                pred_home_score=first_present(
                    api.pred_home_score if api else None, row.pred_home_score
                ),
                pred_away_score=first_present(
                    api.pred_away_score if api else None, row.pred_away_score
                ),
            )
        )
    return records


class CFBPredictionSource(PredictionSource):

    @property
    def league(self) -> League:
        return League.NCAAF

    async def load(self, session: AsyncSession) -> list[PredictionRecord]:
        latest = (
            await session.execute(
                select(CFBWeeklyInputORM.season, CFBWeeklyInputORM.week)
                .order_by(CFBWeeklyInputORM.season.desc(), CFBWeeklyInputORM.week.desc())
                .limit(1)
            )
        ).first()
        if latest is None:
            return []
        season, week = latest

        result = await session.execute(
            select(CFBWeeklyInputORM)
            .where(CFBWeeklyInputORM.season == season, CFBWeeklyInputORM.week == week)
            .order_by(CFBWeeklyInputORM.id)
        )
        inputs = list(result.scalars().all())
        if not inputs:
            return []

        ids = [row.id for row in inputs]
        api_rows = await self.optional_rows(
            session,
            select(CFBApiPredictionORM).where(CFBApiPredictionORM.id.in_(ids)),
            table=CFBApiPredictionORM.__tablename__,
        )
        return build_cfb_records(inputs, api_rows)
