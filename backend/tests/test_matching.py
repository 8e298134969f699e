"""Unit tests for live game to prediction record matching."""
from __future__ import annotations

import pytest

from enrichment.matching import (
    match_by_game_id,
    match_by_team_names,
    match_prediction,
    normalize_team_name,
    parse_external_game_id,
)
from enrichment.sources.base import CFBPrediction, NBAPrediction, NFLPrediction
from shared.models.domain import LiveGame
from shared.models.enums import League


def _live(league: League, home: str, away: str, external_game_id: str = "") -> LiveGame:
    return LiveGame(
        id="live-1",
        league=league,
        home_team=home,
        away_team=away,
        external_game_id=external_game_id,
    )


# ── Normalization ───────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "a,b",
    [
        ("Montréal St.", "montreal st"),
        ("  Texas   A&M ", "TEXAS A&M"),
        ("San José State", "san jose state"),
        ("St. John's", "st johns"),
        ("Winston-Salem St", "winston salem st"),
    ],
)
def test_normalize_equivalent_names(a: str, b: str) -> None:
    assert normalize_team_name(a) == normalize_team_name(b)


def test_normalize_empty() -> None:
    assert normalize_team_name("") == ""


# ── Identifier parsing ──────────────────────────────────────────────────

def test_parse_external_game_id() -> None:
    assert parse_external_game_id("NBA-401585", League.NBA) == 401585
    assert parse_external_game_id("NCAAB-12", League.NCAAB) == 12
    assert parse_external_game_id("401585", League.NBA) == 401585


@pytest.mark.parametrize("raw", ["", "NBA-", "NBA-abc", "NBA-12x", "NBA--4"])
def test_parse_external_game_id_malformed(raw: str) -> None:
    assert parse_external_game_id(raw, League.NBA) is None


# ── Strategies ──────────────────────────────────────────────────────────

def test_identifier_match_wins_over_names() -> None:
    by_id = NBAPrediction(game_id=55, home_team="BOS", away_team="MIA")
    by_name = NBAPrediction(game_id=99, home_team="Boston Celtics", away_team="Miami Heat")
    game = _live(League.NBA, "Boston Celtics", "Miami Heat", "NBA-55")

    assert match_prediction(game, [by_name, by_id]) is by_id


def test_malformed_identifier_falls_back_to_names() -> None:
    record = NBAPrediction(game_id=55, home_team="Boston Celtics", away_team="Miami Heat")
    game = _live(League.NBA, "boston celtics", "Miami Heat", "NBA-abc")

    assert match_by_game_id(game, [record]) is None
    assert match_prediction(game, [record]) is record


def test_identifier_strategy_skips_football() -> None:
    record = NFLPrediction(training_key="55", home_team="Chiefs", away_team="Bills")
    game = _live(League.NFL, "Jets", "Dolphins", "NFL-55")

    assert match_by_game_id(game, [record]) is None
    assert match_prediction(game, [record]) is None


def test_swapped_orientation_is_rejected() -> None:
    record = CFBPrediction(game_key=1, home_team="Auburn", away_team="Alabama")
    game = _live(League.NCAAF, "Alabama", "Auburn")

    assert match_by_team_names(game, [record]) is None


def test_first_candidate_wins_on_duplicate_names() -> None:
    first = CFBPrediction(game_key=1, home_team="Alabama", away_team="Auburn")
    second = CFBPrediction(game_key=2, home_team="Alabama", away_team="Auburn")
    game = _live(League.NCAAF, "Alabama", "Auburn")

    assert match_prediction(game, [first, second]) is first


def test_no_candidates() -> None:
    assert match_prediction(_live(League.NBA, "A", "B", "NBA-1"), []) is None
