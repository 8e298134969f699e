from enrichment.engine import PredictionEnrichmentEngine, enrich_game
from enrichment.live_scores import LiveScoresRepository, LiveScoresService

__all__ = [
    "LiveScoresRepository",
    "LiveScoresService",
    "PredictionEnrichmentEngine",
    "enrich_game",
]
