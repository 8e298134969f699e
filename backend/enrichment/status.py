"""Live grading of derived predictions against the current score."""
from __future__ import annotations

from typing import Optional

from enrichment.probability import DerivedSignal, derive
from enrichment.sources.base import PredictionRecord
from shared.models.domain import GamePredictions, LiveGame, MarketPrediction
from shared.models.enums import Market, PredictedSide


def _side_probability(p: float, favored: bool) -> float:
    return p if favored else 1.0 - p


def moneyline_status(game: LiveGame, derived: DerivedSignal) -> MarketPrediction:
    home_pick = derived.probability > 0.5
    differential = game.home_score - game.away_score
    # A tied score is not hitting for either side.
    hitting = differential > 0 if home_pick else differential < 0
    return MarketPrediction(
        predicted=PredictedSide.HOME if home_pick else PredictedSide.AWAY,
        is_hitting=hitting,
        probability=_side_probability(derived.probability, home_pick),
        line=None,
        current_differential=differential,
    )


def spread_status(game: LiveGame, derived: DerivedSignal) -> MarketPrediction:
    if derived.line is None:
        raise ValueError("spread grading requires a line")
    home_pick = derived.probability > 0.5
    adjusted = (game.home_score - game.away_score) + derived.line
    # adjusted == 0 is a push and hits for neither side.
    hitting = adjusted > 0 if home_pick else adjusted < 0
    return MarketPrediction(
        predicted=PredictedSide.HOME if home_pick else PredictedSide.AWAY,
        is_hitting=hitting,
        probability=_side_probability(derived.probability, home_pick),
        # 0.0 rather than -0.0 for an away pick on a pick'em line
        line=derived.line if home_pick else -derived.line + 0.0,
        current_differential=adjusted,
    )


def total_status(game: LiveGame, derived: DerivedSignal) -> MarketPrediction:
    if derived.line is None:
        raise ValueError("total grading requires a line")
    over_pick = derived.probability > 0.5
    differential = (game.home_score + game.away_score) - derived.line
    hitting = differential > 0 if over_pick else differential < 0
    return MarketPrediction(
        predicted=PredictedSide.OVER if over_pick else PredictedSide.UNDER,
        is_hitting=hitting,
        probability=_side_probability(derived.probability, over_pick),
        line=derived.line,
        current_differential=differential,
    )


_STATUS_BY_MARKET = {
    Market.MONEYLINE: moneyline_status,
    Market.SPREAD: spread_status,
    Market.TOTAL: total_status,
}


def status(game: LiveGame, market: Market, derived: DerivedSignal) -> MarketPrediction:
    return _STATUS_BY_MARKET[market](game, derived)


def _market_status(game: LiveGame, record: PredictionRecord, market: Market) -> Optional[MarketPrediction]:
    derived = derive(record, market)
    if derived is None:
        return None
    return status(game, market, derived)


def build_game_predictions(game: LiveGame, record: PredictionRecord) -> GamePredictions:
    """Grade all three markets independently; missing markets stay unset."""
    moneyline = _market_status(game, record, Market.MONEYLINE)
    spread = _market_status(game, record, Market.SPREAD)
    over_under = _market_status(game, record, Market.TOTAL)
    present = [m for m in (moneyline, spread, over_under) if m is not None]
    return GamePredictions(
        moneyline=moneyline,
        spread=spread,
        over_under=over_under,
        has_any_hitting=any(m.is_hitting for m in present),
    )
