"""Unit tests for live grading of moneyline, spread and total picks."""
from __future__ import annotations

import math

import pytest

from enrichment.probability import DerivedSignal
from enrichment.sources.base import NFLPrediction
from enrichment.status import (
    build_game_predictions,
    moneyline_status,
    spread_status,
    status,
    total_status,
)
from shared.models.domain import GamePredictions, LiveGame
from shared.models.enums import League, Market, PredictedSide


def _game(home: int, away: int) -> LiveGame:
    return LiveGame(
        id="g1",
        league=League.NFL,
        home_team="Kansas City Chiefs",
        away_team="Buffalo Bills",
        home_score=home,
        away_score=away,
    )


def _record(**kwargs) -> NFLPrediction:
    return NFLPrediction(
        training_key="KC_BUF_2024",
        home_team="Kansas City Chiefs",
        away_team="Buffalo Bills",
        **kwargs,
    )


# ── Moneyline ───────────────────────────────────────────────────────────

class TestMoneyline:

    def test_home_pick_leading(self) -> None:
        result = moneyline_status(_game(24, 21), DerivedSignal(0.7))
        assert result.predicted == PredictedSide.HOME
        assert result.is_hitting is True
        assert result.probability == 0.7
        assert result.current_differential == 3
        assert result.line is None

    def test_away_pick_reports_complement(self) -> None:
        result = moneyline_status(_game(24, 21), DerivedSignal(0.3))
        assert result.predicted == PredictedSide.AWAY
        assert result.is_hitting is False
        assert result.probability == pytest.approx(0.7)

    @pytest.mark.parametrize("p", [0.7, 0.3])
    def test_tie_never_hits(self, p: float) -> None:
        assert moneyline_status(_game(21, 21), DerivedSignal(p)).is_hitting is False

    def test_even_probability_picks_away(self) -> None:
        result = moneyline_status(_game(0, 0), DerivedSignal(0.5))
        assert result.predicted == PredictedSide.AWAY
        assert result.probability == 0.5


# ── Spread ──────────────────────────────────────────────────────────────

class TestSpread:

    def test_home_favorite_not_covering(self) -> None:
        result = spread_status(_game(24, 21), DerivedSignal(0.58, line=-6.5))
        assert result.predicted == PredictedSide.HOME
        assert result.current_differential == pytest.approx(-3.5)
        assert result.is_hitting is False
        assert result.line == -6.5
        assert result.probability == pytest.approx(0.58)

    def test_away_pick_reports_away_line(self) -> None:
        result = spread_status(_game(24, 21), DerivedSignal(0.42, line=-6.5))
        assert result.predicted == PredictedSide.AWAY
        assert result.line == 6.5
        assert result.is_hitting is True
        assert result.probability == pytest.approx(0.58)

    @pytest.mark.parametrize("p", [0.6, 0.4])
    def test_push_never_hits(self, p: float) -> None:
        result = spread_status(_game(24, 21), DerivedSignal(p, line=-3.0))
        assert result.current_differential == 0
        assert result.is_hitting is False

    def test_underdog_covering(self) -> None:
        result = spread_status(_game(17, 20), DerivedSignal(0.55, line=7.0))
        assert result.current_differential == 4
        assert result.is_hitting is True

    def test_away_pick_on_pickem_line_reports_positive_zero(self) -> None:
        result = spread_status(_game(20, 20), DerivedSignal(0.4, line=0.0))
        assert result.predicted == PredictedSide.AWAY
        assert result.line == 0.0
        assert math.copysign(1.0, result.line) == 1.0
        assert result.model_dump(mode="json")["line"] == 0.0
        assert "-0.0" not in result.model_dump_json()

    def test_requires_line(self) -> None:
        with pytest.raises(ValueError):
            spread_status(_game(1, 0), DerivedSignal(0.6))


# ── Total ───────────────────────────────────────────────────────────────

class TestTotal:

    def test_over_hitting(self) -> None:
        result = total_status(_game(24, 21), DerivedSignal(0.62, line=44.5))
        assert result.predicted == PredictedSide.OVER
        assert result.is_hitting is True
        assert result.current_differential == pytest.approx(0.5)
        assert result.line == 44.5

    def test_under_not_hitting(self) -> None:
        result = total_status(_game(24, 21), DerivedSignal(0.38, line=44.5))
        assert result.predicted == PredictedSide.UNDER
        assert result.is_hitting is False
        assert result.line == 44.5
        assert result.probability == pytest.approx(0.62)

    @pytest.mark.parametrize("p", [0.7, 0.3])
    def test_exact_total_never_hits(self, p: float) -> None:
        assert total_status(_game(24, 21), DerivedSignal(p, line=45.0)).is_hitting is False


def test_status_dispatches_by_market() -> None:
    game = _game(24, 21)
    assert status(game, Market.MONEYLINE, DerivedSignal(0.7)).predicted == PredictedSide.HOME
    assert status(game, Market.TOTAL, DerivedSignal(0.7, line=40.0)).predicted == PredictedSide.OVER


# ── Aggregation ─────────────────────────────────────────────────────────

def test_build_game_predictions_all_markets() -> None:
    record = _record(
        home_away_ml_prob=0.64,
        home_away_spread_cover_prob=0.58,
        ou_result_prob=0.35,
        home_spread=-6.5,
        over_line=47.5,
    )
    predictions = build_game_predictions(_game(24, 21), record)

    assert predictions.moneyline.is_hitting is True
    assert predictions.spread.is_hitting is False
    assert predictions.spread.current_differential == pytest.approx(-3.5)
    assert predictions.over_under.predicted == PredictedSide.UNDER
    assert predictions.over_under.is_hitting is True
    assert predictions.has_any_hitting is True


def test_missing_total_signal_leaves_over_under_unset() -> None:
    record = _record(home_away_ml_prob=0.3, over_line=47.5)
    predictions = build_game_predictions(_game(24, 21), record)

    assert predictions.over_under is None
    assert predictions.spread is None
    assert predictions.moneyline is not None
    assert "over_under" not in predictions.to_wire()


def test_has_any_hitting_false_when_nothing_hits() -> None:
    record = _record(home_away_ml_prob=0.3)
    assert build_game_predictions(_game(24, 21), record).has_any_hitting is False


def test_no_markets_serializes_to_flag_only() -> None:
    predictions = build_game_predictions(_game(24, 21), _record())
    assert predictions == GamePredictions()
    assert predictions.to_wire() == {"has_any_hitting": False}
