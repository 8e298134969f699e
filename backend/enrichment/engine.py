"""
Prediction Enrichment Engine.
Fetches the latest model run for every league concurrently, matches each
live game to its prediction row and grades the moneyline, spread and total
picks against the current score.
"""
from __future__ import annotations

import asyncio
from typing import Mapping, Optional, Sequence

from enrichment.config import EnrichmentSettings, get_enrichment_settings
from enrichment.matching import match_prediction
from enrichment.sources import SOURCE_CLASSES, PredictionRecord, PredictionSource
from enrichment.status import build_game_predictions
from shared.models.domain import EnrichedGame, LiveGame
from shared.models.enums import League
from shared.utils.database import DatabaseManager
from shared.utils.logging import get_logger
from shared.utils.metrics import ENRICHED_GAMES, ENRICHMENT_DURATION, atrack_latency

logger = get_logger(__name__)

CandidatesByLeague = Mapping[League, Sequence[PredictionRecord]]


def enrich_game(game: LiveGame, candidates: CandidatesByLeague) -> EnrichedGame:
    """Attach graded predictions to one live game. Pure; no I/O."""
    record = match_prediction(game, candidates.get(game.league, ()))
    if record is None:
        return EnrichedGame.from_live(game)
    return EnrichedGame.from_live(game, build_game_predictions(game, record))


class PredictionEnrichmentEngine:
    """Live games in, enriched games out. Holds no state between calls."""

    def __init__(
        self,
        sources: Sequence[PredictionSource],
        settings: Optional[EnrichmentSettings] = None,
    ) -> None:
        self._settings = settings or get_enrichment_settings()
        enabled = set(self._settings.enabled_leagues)
        self._sources = [s for s in sources if s.league in enabled]

    @classmethod
    def from_database(
        cls,
        db: DatabaseManager,
        settings: Optional[EnrichmentSettings] = None,
    ) -> "PredictionEnrichmentEngine":
        """One source per supported league, all reading the predictions database."""
        return cls([source_cls(db) for source_cls in SOURCE_CLASSES.values()], settings)

    @property
    def leagues(self) -> list[League]:
        return [s.league for s in self._sources]

    async def fetch_candidates(self) -> dict[League, list[PredictionRecord]]:
        """Fetch every source concurrently; a failed source contributes []."""
        timeout_s = self._settings.source_timeout_s
        results = await asyncio.gather(*(s.fetch(timeout_s) for s in self._sources))
        return {source.league: records for source, records in zip(self._sources, results)}

    async def enrich(self, live_games: Sequence[LiveGame]) -> list[EnrichedGame]:
        """
        Enrich live games in input order. A failure on one game leaves that
        game unmatched; nothing here aborts the whole batch.
        """
        if not live_games:
            return []

        async with atrack_latency(ENRICHMENT_DURATION):
            candidates = await self.fetch_candidates()
            enriched: list[EnrichedGame] = []
            for game in live_games:
                try:
                    result = enrich_game(game, candidates)
                except Exception:
                    logger.exception("enrichment_game_failed", game_id=game.id, league=game.league.value)
                    result = EnrichedGame.from_live(game)
                ENRICHED_GAMES.labels(
                    league=game.league.value,
                    matched=str(result.is_matched).lower(),
                ).inc()
                enriched.append(result)

        logger.info(
            "enrichment_completed",
            games=len(enriched),
            matched=sum(1 for g in enriched if g.is_matched),
            candidates={league.value: len(records) for league, records in candidates.items()},
        )
        return enriched
