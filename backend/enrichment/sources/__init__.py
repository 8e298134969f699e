from enrichment.sources.base import (
    CFBPrediction,
    NBAPrediction,
    NCAABPrediction,
    NFLPrediction,
    PredictionRecord,
    PredictionSource,
)
from enrichment.sources.cfb import CFBPredictionSource
from enrichment.sources.nba import NBAPredictionSource
from enrichment.sources.ncaab import NCAABPredictionSource
from enrichment.sources.nfl import NFLPredictionSource
from shared.models.enums import League

SOURCE_CLASSES: dict[League, type[PredictionSource]] = {
    League.NFL: NFLPredictionSource,
    League.NCAAF: CFBPredictionSource,
    League.NBA: NBAPredictionSource,
    League.NCAAB: NCAABPredictionSource,
}

__all__ = [
    "CFBPrediction",
    "CFBPredictionSource",
    "NBAPrediction",
    "NBAPredictionSource",
    "NCAABPrediction",
    "NCAABPredictionSource",
    "NFLPrediction",
    "NFLPredictionSource",
    "PredictionRecord",
    "PredictionSource",
    "SOURCE_CLASSES",
]
