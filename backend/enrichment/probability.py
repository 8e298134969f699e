"""
Per-market probability derivation.

Every market has an ordered chain of signal functions. Each function looks
at one kind of evidence on the record and returns a home/over probability,
or None when that evidence is missing; the first non-None value wins.
A market with no signal is absent, never defaulted to 0.5.

The bounded edge mapping and the 0.6/0.4 fallbacks are uncalibrated
placeholders.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from enrichment.sources.base import (
    CFBPrediction,
    NBAPrediction,
    NCAABPrediction,
    NFLPrediction,
    PredictionRecord,
)
from shared.models.enums import Market

EDGE_SLOPE = 0.05
EDGE_CAP = 0.35
COARSE_FAVORED = 0.6

Signal = Callable[[PredictionRecord], Optional[float]]


@dataclass(frozen=True)
class DerivedSignal:
    """Probability of Home (moneyline/spread) or Over (total), plus the home/posted line."""
    probability: float
    line: Optional[float] = None


def edge_probability(edge: float) -> float:
    """Positive edge favors home/over. Bounded to [0.15, 0.85]."""
    shift = min(abs(edge) * EDGE_SLOPE, EDGE_CAP)
    return 0.5 + shift if edge > 0 else 0.5 - shift


def coarse_probability(favors_home: bool) -> float:
    return COARSE_FAVORED if favors_home else 1.0 - COARSE_FAVORED


# ── Moneyline ───────────────────────────────────────────────────────────
def moneyline_stored(record: PredictionRecord) -> Optional[float]:
    if isinstance(record, NFLPrediction):
        return record.home_away_ml_prob
    if isinstance(record, CFBPrediction):
        return record.pred_ml_proba
    if isinstance(record, (NBAPrediction, NCAABPrediction)):
        return record.home_win_prob
    return None


def moneyline_from_scores(record: PredictionRecord) -> Optional[float]:
    if isinstance(record, CFBPrediction):
        home, away = record.pred_home_score, record.pred_away_score
    elif isinstance(record, (NBAPrediction, NCAABPrediction)):
        home, away = record.home_score_pred, record.away_score_pred
    else:
        return None
    if home is None or away is None or home == away:
        return None
    return coarse_probability(home > away)


# ── Spread ──────────────────────────────────────────────────────────────
def spread_stored(record: PredictionRecord) -> Optional[float]:
    if isinstance(record, NFLPrediction):
        return record.home_away_spread_cover_prob
    if isinstance(record, CFBPrediction):
        return record.pred_spread_proba
    return None


def spread_from_edge(record: PredictionRecord) -> Optional[float]:
    if isinstance(record, CFBPrediction):
        edge = record.home_spread_diff
    elif isinstance(record, NBAPrediction):
        # Fair spread below the market spread means the model likes home more.
        if record.model_fair_home_spread is None or record.home_spread is None:
            return None
        edge = record.home_spread - record.model_fair_home_spread
    elif isinstance(record, NCAABPrediction):
        # Projected home margin beyond what the line gives away.
        if record.pred_home_margin is None or record.home_spread is None:
            return None
        edge = record.pred_home_margin + record.home_spread
    else:
        return None
    return edge_probability(edge) if edge is not None else None


def spread_from_win_probability(record: PredictionRecord) -> Optional[float]:
    if isinstance(record, (NBAPrediction, NCAABPrediction)):
        return record.home_win_prob
    return None


# ── Total ───────────────────────────────────────────────────────────────
def total_stored(record: PredictionRecord) -> Optional[float]:
    if isinstance(record, NFLPrediction):
        return record.ou_result_prob
    if isinstance(record, CFBPrediction):
        return record.pred_total_proba
    return None


def total_from_model_total(record: PredictionRecord) -> Optional[float]:
    if isinstance(record, NBAPrediction):
        model_total = record.model_fair_total
    elif isinstance(record, NCAABPrediction):
        model_total = record.pred_total_points
    else:
        return None
    if model_total is None or record.total_line is None:
        return None
    return edge_probability(model_total - record.total_line)


def total_from_edge_sign(record: PredictionRecord) -> Optional[float]:
    if not isinstance(record, CFBPrediction):
        return None
    if record.over_line_diff is None or record.over_line_diff == 0:
        return None
    return coarse_probability(record.over_line_diff > 0)


MONEYLINE_SIGNALS: tuple[Signal, ...] = (moneyline_stored, moneyline_from_scores)
SPREAD_SIGNALS: tuple[Signal, ...] = (spread_stored, spread_from_edge, spread_from_win_probability)
TOTAL_SIGNALS: tuple[Signal, ...] = (total_stored, total_from_model_total, total_from_edge_sign)

SIGNAL_CHAINS: dict[Market, tuple[Signal, ...]] = {
    Market.MONEYLINE: MONEYLINE_SIGNALS,
    Market.SPREAD: SPREAD_SIGNALS,
    Market.TOTAL: TOTAL_SIGNALS,
}


# ── Lines ───────────────────────────────────────────────────────────────
def spread_line(record: PredictionRecord) -> Optional[float]:
    """Posted spread from the home side's perspective."""
    if isinstance(record, CFBPrediction):
        return record.api_spread
    if isinstance(record, NFLPrediction) and record.home_spread is None and record.away_spread is not None:
        return -record.away_spread + 0.0
    return record.home_spread


def total_line(record: PredictionRecord) -> Optional[float]:
    if isinstance(record, NFLPrediction):
        return record.over_line
    if isinstance(record, CFBPrediction):
        return record.api_over_line
    return record.total_line


def first_signal(record: PredictionRecord, chain: Sequence[Signal]) -> Optional[float]:
    for signal in chain:
        probability = signal(record)
        if probability is not None:
            return probability
    return None


def derive(record: PredictionRecord, market: Market) -> Optional[DerivedSignal]:
    """
    Home/over probability for one market, with the line it is graded against.
    None when the market has no signal, or no posted line for spread/total.
    """
    if market is Market.MONEYLINE:
        line = None
    else:
        line = spread_line(record) if market is Market.SPREAD else total_line(record)
        if line is None:
            return None

    probability = first_signal(record, SIGNAL_CHAINS[market])
    if probability is None:
        return None
    return DerivedSignal(probability=probability, line=line)
