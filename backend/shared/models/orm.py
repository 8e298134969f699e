"""
SQLAlchemy 2.0 ORM models for Live Picks.
The live_scores table lives in the live database; every other table or view
here belongs to the predictions database and is read-only to this backend.
"""
from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional

from sqlalchemy import Boolean, Date, DateTime, Float, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class LiveBase(DeclarativeBase):
    pass


class PredictionsBase(DeclarativeBase):
    pass


# ── Live database ───────────────────────────────────────────────────────
class LiveScoreORM(LiveBase):
    __tablename__ = "live_scores"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    game_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    league: Mapped[str] = mapped_column(String(20), nullable=False)
    away_team: Mapped[str] = mapped_column(String(200), nullable=False)
    away_abbr: Mapped[Optional[str]] = mapped_column(String(20))
    away_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    away_color: Mapped[Optional[str]] = mapped_column(String(16))
    home_team: Mapped[str] = mapped_column(String(200), nullable=False)
    home_abbr: Mapped[Optional[str]] = mapped_column(String(20))
    home_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    home_color: Mapped[Optional[str]] = mapped_column(String(16))
    status: Mapped[Optional[str]] = mapped_column(Text)
    period: Mapped[Optional[str]] = mapped_column(String(20))
    time_remaining: Mapped[Optional[str]] = mapped_column(String(20))
    is_live: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    last_updated: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


# ── NFL ─────────────────────────────────────────────────────────────────
class NFLPredictionORM(PredictionsBase):
    __tablename__ = "nfl_predictions_epa"

    training_key: Mapped[str] = mapped_column(String(100), primary_key=True)
    run_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    game_date: Mapped[date] = mapped_column(Date, nullable=False)
    home_team: Mapped[str] = mapped_column(String(100), nullable=False)
    away_team: Mapped[str] = mapped_column(String(100), nullable=False)
    home_away_ml_prob: Mapped[Optional[float]] = mapped_column(Float)
    home_away_spread_cover_prob: Mapped[Optional[float]] = mapped_column(Float)
    ou_result_prob: Mapped[Optional[float]] = mapped_column(Float)


class NFLBettingLineORM(PredictionsBase):
    __tablename__ = "nfl_betting_lines"

    training_key: Mapped[str] = mapped_column(String(100), primary_key=True)
    home_team: Mapped[Optional[str]] = mapped_column(String(100))
    away_team: Mapped[Optional[str]] = mapped_column(String(100))
    home_spread: Mapped[Optional[float]] = mapped_column(Float)
    away_spread: Mapped[Optional[float]] = mapped_column(Float)
    over_line: Mapped[Optional[float]] = mapped_column(Float)


# ── College football ────────────────────────────────────────────────────
class CFBWeeklyInputORM(PredictionsBase):
    """Weekly model inputs and outputs; one (season, week) per model run."""
    __tablename__ = "cfb_live_weekly_inputs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    season: Mapped[int] = mapped_column(Integer, nullable=False)
    week: Mapped[int] = mapped_column(Integer, nullable=False)
    home_team: Mapped[str] = mapped_column(String(100), nullable=False)
    away_team: Mapped[str] = mapped_column(String(100), nullable=False)
    pred_ml_proba: Mapped[Optional[float]] = mapped_column(Float)
    pred_spread_proba: Mapped[Optional[float]] = mapped_column(Float)
    pred_total_proba: Mapped[Optional[float]] = mapped_column(Float)
    api_spread: Mapped[Optional[float]] = mapped_column(Float)
    api_over_line: Mapped[Optional[float]] = mapped_column(Float)
    pred_home_score: Mapped[Optional[float]] = mapped_column(Float)
    pred_away_score: Mapped[Optional[float]] = mapped_column(Float)


class CFBApiPredictionORM(PredictionsBase):
    """Edge and projected-score companion rows, keyed by the weekly input id."""
    __tablename__ = "cfb_api_predictions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    home_spread_diff: Mapped[Optional[float]] = mapped_column(Float)
    over_line_diff: Mapped[Optional[float]] = mapped_column(Float)
    pred_home_score: Mapped[Optional[float]] = mapped_column(Float)
    pred_away_score: Mapped[Optional[float]] = mapped_column(Float)


# ── NBA ─────────────────────────────────────────────────────────────────
class NBAPredictionORM(PredictionsBase):
    __tablename__ = "nba_predictions"

    run_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    game_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    as_of_ts_utc: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    home_team: Mapped[Optional[str]] = mapped_column(String(100))
    away_team: Mapped[Optional[str]] = mapped_column(String(100))
    home_win_prob: Mapped[Optional[float]] = mapped_column(Float)
    away_win_prob: Mapped[Optional[float]] = mapped_column(Float)
    model_fair_home_spread: Mapped[Optional[float]] = mapped_column(Float)
    model_fair_total: Mapped[Optional[float]] = mapped_column(Float)
    home_score_pred: Mapped[Optional[float]] = mapped_column(Float)
    away_score_pred: Mapped[Optional[float]] = mapped_column(Float)


class NBAInputValuesORM(PredictionsBase):
    """Read-only view with schedule, names and market lines per NBA game."""
    __tablename__ = "nba_input_values_view"

    game_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    game_date: Mapped[Optional[date]] = mapped_column(Date)
    home_team: Mapped[Optional[str]] = mapped_column(String(100))
    away_team: Mapped[Optional[str]] = mapped_column(String(100))
    home_spread: Mapped[Optional[float]] = mapped_column(Float)
    total_line: Mapped[Optional[float]] = mapped_column(Float)


# ── College basketball ──────────────────────────────────────────────────
class NCAABPredictionORM(PredictionsBase):
    __tablename__ = "ncaab_predictions"

    run_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    game_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    as_of_ts_utc: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    home_team: Mapped[str] = mapped_column(String(100), nullable=False)
    away_team: Mapped[str] = mapped_column(String(100), nullable=False)
    vegas_home_spread: Mapped[Optional[float]] = mapped_column(Float)
    vegas_total: Mapped[Optional[float]] = mapped_column(Float)
    home_win_prob: Mapped[Optional[float]] = mapped_column(Float)
    away_win_prob: Mapped[Optional[float]] = mapped_column(Float)
    pred_home_margin: Mapped[Optional[float]] = mapped_column(Float)
    pred_total_points: Mapped[Optional[float]] = mapped_column(Float)
    home_score_pred: Mapped[Optional[float]] = mapped_column(Float)
    away_score_pred: Mapped[Optional[float]] = mapped_column(Float)
    model_version: Mapped[Optional[str]] = mapped_column(String(50))


class CBBInputValuesORM(PredictionsBase):
    """Read-only view with market lines per college basketball game."""
    __tablename__ = "v_cbb_input_values"

    game_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    game_date_et: Mapped[Optional[date]] = mapped_column(Date)
    home_team: Mapped[Optional[str]] = mapped_column(String(100))
    away_team: Mapped[Optional[str]] = mapped_column(String(100))
    spread: Mapped[Optional[float]] = mapped_column(Float)
    over_under: Mapped[Optional[float]] = mapped_column(Float)
