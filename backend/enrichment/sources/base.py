"""
Prediction record variants and the base source interface.
Each league's table shape is kept as its own frozen record; every source
returns only rows from that league's latest model run.
"""
from __future__ import annotations

import asyncio
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from shared.models.enums import League
from shared.utils.database import DatabaseManager
from shared.utils.logging import get_logger
from shared.utils.metrics import (
    PREDICTION_RECORDS,
    PREDICTION_SOURCE_FETCHES,
    PREDICTION_SOURCE_LATENCY,
    atrack_latency,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class NFLPrediction:
    training_key: str
    home_team: str
    away_team: str
    home_away_ml_prob: Optional[float] = None
    home_away_spread_cover_prob: Optional[float] = None
    ou_result_prob: Optional[float] = None
    home_spread: Optional[float] = None
    away_spread: Optional[float] = None
    over_line: Optional[float] = None

    league: ClassVar[League] = League.NFL


@dataclass(frozen=True)
class CFBPrediction:
    game_key: int
    home_team: str
    away_team: str
    pred_ml_proba: Optional[float] = None
    pred_spread_proba: Optional[float] = None
    pred_total_proba: Optional[float] = None
    api_spread: Optional[float] = None
    api_over_line: Optional[float] = None
    home_spread_diff: Optional[float] = None  # positive: model likes home against the line
    over_line_diff: Optional[float] = None  # positive: model total above the posted total
    pred_home_score: Optional[float] = None
    pred_away_score: Optional[float] = None

    league: ClassVar[League] = League.NCAAF


@dataclass(frozen=True)
class NBAPrediction:
    game_id: int
    home_team: str
    away_team: str
    run_id: Optional[str] = None
    home_win_prob: Optional[float] = None
    model_fair_home_spread: Optional[float] = None
    model_fair_total: Optional[float] = None
    home_score_pred: Optional[float] = None
    away_score_pred: Optional[float] = None
    home_spread: Optional[float] = None
    total_line: Optional[float] = None

    league: ClassVar[League] = League.NBA


@dataclass(frozen=True)
class NCAABPrediction:
    game_id: int
    home_team: str
    away_team: str
    run_id: Optional[str] = None
    home_win_prob: Optional[float] = None
    pred_total_points: Optional[float] = None
    pred_home_margin: Optional[float] = None
    home_score_pred: Optional[float] = None
    away_score_pred: Optional[float] = None
    home_spread: Optional[float] = None
    total_line: Optional[float] = None

    league: ClassVar[League] = League.NCAAB


PredictionRecord = Union[NFLPrediction, CFBPrediction, NBAPrediction, NCAABPrediction]


def as_number(value: Any) -> Optional[float]:
    """Finite float or None. Zero is a real value (pick'em line, even edge)."""
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def as_probability(value: Any) -> Optional[float]:
    """Probability in [0, 1] or None; out-of-range values are dropped."""
    number = as_number(value)
    if number is None:
        return None
    if not 0.0 <= number <= 1.0:
        logger.debug("prediction_probability_out_of_range", value=number)
        return None
    return number


def first_present(*values: Any) -> Optional[float]:
    """First value that is a finite number."""
    for value in values:
        number = as_number(value)
        if number is not None:
            return number
    return None


def negate(value: Optional[float]) -> Optional[float]:
    return -value if value is not None else None


class PredictionSource(ABC):
    """Base for the per-league prediction readers."""

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    @property
    @abstractmethod
    def league(self) -> League:
        pass

    @abstractmethod
    async def load(self, session: AsyncSession) -> list[PredictionRecord]:
        """
        Read the latest run for this league and normalize it to records.
        May raise; fetch() turns failures into an empty list.
        """
        pass

    async def _load_in_session(self) -> list[PredictionRecord]:
        async with self._db.read_session() as session:
            return await self.load(session)

    async def fetch(self, timeout_s: Optional[float] = None) -> list[PredictionRecord]:
        """
        Latest-run records for this league. Never raises: a storage error or
        timeout is logged and degrades to an empty candidate list.
        """
        league = self.league.value
        try:
            async with atrack_latency(PREDICTION_SOURCE_LATENCY, league=league):
                records = await asyncio.wait_for(self._load_in_session(), timeout=timeout_s)
        except asyncio.TimeoutError:
            PREDICTION_SOURCE_FETCHES.labels(league=league, status="timeout").inc()
            logger.warning("prediction_source_timeout", league=league, timeout_s=timeout_s)
            return []
        except Exception as exc:
            PREDICTION_SOURCE_FETCHES.labels(league=league, status="error").inc()
            logger.warning("prediction_source_fetch_failed", league=league, error=str(exc))
            return []

        PREDICTION_SOURCE_FETCHES.labels(league=league, status="ok").inc()
        PREDICTION_RECORDS.labels(league=league).set(len(records))
        if not records:
            logger.info("prediction_source_empty", league=league)
        else:
            logger.debug("prediction_source_fetched", league=league, records=len(records))
        return records

    async def optional_rows(self, session: AsyncSession, stmt: Any, table: str) -> list[Any]:
        """
        Rows for a companion lines/edges query. A failure here is not fatal:
        records are still returned with those fields left empty.
        """
        try:
            return list((await session.execute(stmt)).scalars().all())
        except Exception as exc:
            logger.warning(
                "prediction_lines_fetch_failed",
                league=self.league.value,
                table=table,
                error=str(exc),
            )
            return []
