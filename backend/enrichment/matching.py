"""
Live game to prediction record matching.

Strategies are tried in order; the first one that returns a record wins:
  1. feed identifier -> game_id (basketball leagues only)
  2. normalized home/away name equality, same orientation
"""
from __future__ import annotations

import re
import unicodedata
from typing import Callable, Optional, Sequence

from enrichment.sources.base import NBAPrediction, NCAABPrediction, PredictionRecord
from shared.models.domain import LiveGame
from shared.models.enums import League
from shared.utils.logging import get_logger

logger = get_logger(__name__)

MatchStrategy = Callable[[LiveGame, Sequence[PredictionRecord]], Optional[PredictionRecord]]

_PUNCTUATION = re.compile(r"[^\w\s-]")
_WHITESPACE = re.compile(r"\s+")


def normalize_team_name(name: str) -> str:
    """
    Case-fold, strip diacritics and punctuation, collapse whitespace.
    'Montréal  St.' and 'montreal st' normalize to the same key; hyphens
    separate words.
    """
    if not name:
        return ""
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    cleaned = _PUNCTUATION.sub("", stripped.casefold())
    cleaned = cleaned.replace("-", " ").replace("_", " ")
    return _WHITESPACE.sub(" ", cleaned).strip()


def parse_external_game_id(external_game_id: str, league: League) -> Optional[int]:
    """'NBA-401585' -> 401585. Anything unparseable -> None."""
    if not external_game_id:
        return None
    prefix = f"{league.value}-"
    raw = external_game_id[len(prefix):] if external_game_id.startswith(prefix) else external_game_id
    raw = raw.strip()
    if not (raw.isascii() and raw.isdigit()):
        return None
    return int(raw)


def match_by_game_id(
    game: LiveGame, candidates: Sequence[PredictionRecord]
) -> Optional[PredictionRecord]:
    if not game.league.is_basketball:
        return None
    game_id = parse_external_game_id(game.external_game_id, game.league)
    if game_id is None:
        return None
    for record in candidates:
        if isinstance(record, (NBAPrediction, NCAABPrediction)) and record.game_id == game_id:
            return record
    return None


def match_by_team_names(
    game: LiveGame, candidates: Sequence[PredictionRecord]
) -> Optional[PredictionRecord]:
    home = normalize_team_name(game.home_team)
    away = normalize_team_name(game.away_team)
    if not home or not away:
        return None
    for record in candidates:
        # Swapped home/away is treated as no match.
        if (
            normalize_team_name(record.home_team) == home
            and normalize_team_name(record.away_team) == away
        ):
            return record
    return None


MATCH_STRATEGIES: tuple[MatchStrategy, ...] = (match_by_game_id, match_by_team_names)


def match_prediction(
    game: LiveGame,
    candidates: Sequence[PredictionRecord],
    strategies: Sequence[MatchStrategy] = MATCH_STRATEGIES,
) -> Optional[PredictionRecord]:
    """Find the prediction record for a live game, or None."""
    for strategy in strategies:
        record = strategy(game, candidates)
        if record is not None:
            return record
    logger.debug(
        "prediction_no_match",
        game_id=game.id,
        league=game.league.value,
        home=game.home_team,
        away=game.away_team,
    )
    return None
