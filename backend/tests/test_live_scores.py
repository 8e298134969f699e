"""
Unit tests for the live score read path: row mapping, the repository query
and the enriched service.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from types import SimpleNamespace
from typing import Any, AsyncIterator
from unittest.mock import AsyncMock, MagicMock

import pytest

from enrichment.live_scores import LiveScoresRepository, LiveScoresService, live_game_from_row
from shared.models.domain import EnrichedGame, GamePredictions, LiveGame, MarketPrediction
from shared.models.enums import League, PredictedSide


def _row(**kwargs) -> SimpleNamespace:
    values = dict(
        id="3f1c",
        game_id="NBA-401585",
        league="NBA",
        home_team="Boston Celtics",
        home_abbr="BOS",
        home_score=88,
        away_team="Miami Heat",
        away_abbr="MIA",
        away_score=80,
        status="In Progress",
        period="Q3",
        time_remaining="4:12",
        is_live=True,
    )
    values.update(kwargs)
    return SimpleNamespace(**values)


# ── Row mapping ─────────────────────────────────────────────────────────

class TestLiveGameFromRow:

    def test_maps_fields(self) -> None:
        game = live_game_from_row(_row())
        assert game.league == League.NBA
        assert game.external_game_id == "NBA-401585"
        assert game.home_score == 88
        assert game.period == "Q3"

    def test_null_scores_become_zero(self) -> None:
        game = live_game_from_row(_row(home_score=None, away_score=None))
        assert (game.home_score, game.away_score) == (0, 0)

    def test_unknown_league_rejected(self) -> None:
        with pytest.raises(ValueError):
            live_game_from_row(_row(league="NHL"))


# ── Wire shape ──────────────────────────────────────────────────────────

def test_to_wire_matched_omits_absent_markets() -> None:
    game = live_game_from_row(_row())
    predictions = GamePredictions(
        moneyline=MarketPrediction(
            predicted=PredictedSide.HOME,
            is_hitting=True,
            probability=0.66,
            line=None,
            current_differential=8,
        ),
        has_any_hitting=True,
    )

    wire = EnrichedGame.from_live(game, predictions).to_wire()

    assert wire["predictions"]["moneyline"]["predicted"] == "Home"
    assert wire["predictions"]["has_any_hitting"] is True
    assert "spread" not in wire["predictions"]
    assert wire["league"] == "NBA"


def test_to_wire_unmatched_has_no_predictions() -> None:
    wire = EnrichedGame.from_live(live_game_from_row(_row())).to_wire()
    assert "predictions" not in wire


# ── Repository / service ────────────────────────────────────────────────

class FakeDatabase:
    def __init__(self, session: Any) -> None:
        self.session = session

    @asynccontextmanager
    async def read_session(self) -> AsyncIterator[Any]:
        yield self.session


@pytest.mark.asyncio
async def test_repository_maps_rows() -> None:
    result = MagicMock()
    result.scalars.return_value.all.return_value = [_row(), _row(id="9a", league="NFL", game_id="NFL-1")]
    session = MagicMock()
    session.execute = AsyncMock(return_value=result)

    games = await LiveScoresRepository(FakeDatabase(session)).get_live_games()

    assert [g.league for g in games] == [League.NBA, League.NFL]
    session.execute.assert_awaited_once()


@pytest.mark.asyncio
async def test_repository_propagates_database_errors() -> None:
    session = MagicMock()
    session.execute = AsyncMock(side_effect=RuntimeError("db down"))

    with pytest.raises(RuntimeError):
        await LiveScoresRepository(FakeDatabase(session)).get_live_games()


@pytest.mark.asyncio
async def test_service_enriches_loaded_games() -> None:
    game = LiveGame(id="1", league=League.NCAAB, home_team="Duke", away_team="Kentucky")
    repository = MagicMock()
    repository.get_live_games = AsyncMock(return_value=[game])
    engine = MagicMock()
    engine.enrich = AsyncMock(return_value=[EnrichedGame.from_live(game)])

    result = await LiveScoresService(repository, engine).get_live_scores(League.NCAAB)

    repository.get_live_games.assert_awaited_once_with([League.NCAAB])
    engine.enrich.assert_awaited_once_with([game])
    assert result[0].id == "1"


@pytest.mark.asyncio
async def test_service_degrades_failed_load_to_empty() -> None:
    repository = MagicMock()
    repository.get_live_games = AsyncMock(side_effect=RuntimeError("db down"))
    engine = MagicMock()
    engine.enrich = AsyncMock()

    result = await LiveScoresService(repository, engine).get_live_scores()

    assert result == []
    engine.enrich.assert_not_awaited()
