"""
Pydantic v2 domain models shared by the enrichment engine and the API.
These are the canonical wire/internal representations, not ORM models.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from shared.models.enums import League, PredictedSide

MARKET_FIELDS = ("moneyline", "spread", "over_under")


# ── Base ────────────────────────────────────────────────────────────────
class DomainModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True, frozen=True)


# ── Live feed ───────────────────────────────────────────────────────────
class LiveGame(DomainModel):
    """An in-progress game as written by the live-score poller."""
    id: str
    league: League
    home_team: str
    away_team: str
    home_score: int = 0
    away_score: int = 0
    external_game_id: str = Field(
        default="",
        description="League-prefixed feed id, e.g. 'NBA-401585'",
    )
    home_abbr: Optional[str] = None
    away_abbr: Optional[str] = None
    status: Optional[str] = None
    period: Optional[str] = None
    time_remaining: Optional[str] = None
    is_live: bool = True


# ── Prediction output ───────────────────────────────────────────────────
class MarketPrediction(DomainModel):
    """Live grading of one market's pick."""
    predicted: PredictedSide
    is_hitting: bool
    probability: float = Field(ge=0.5, le=1.0, description="Probability of the predicted side")
    line: Optional[float] = None
    current_differential: float


class GamePredictions(DomainModel):
    moneyline: Optional[MarketPrediction] = None
    spread: Optional[MarketPrediction] = None
    over_under: Optional[MarketPrediction] = None
    has_any_hitting: bool = False

    def to_wire(self) -> dict[str, Any]:
        """JSON shape with absent markets omitted."""
        data = self.model_dump(mode="json")
        for key in MARKET_FIELDS:
            if data[key] is None:
                del data[key]
        return data


class EnrichedGame(LiveGame):
    """A live game plus its graded predictions, when a prediction row matched."""
    predictions: Optional[GamePredictions] = None

    @classmethod
    def from_live(cls, game: LiveGame, predictions: Optional[GamePredictions] = None) -> "EnrichedGame":
        return cls(**game.model_dump(), predictions=predictions)

    @property
    def is_matched(self) -> bool:
        return self.predictions is not None

    def to_wire(self) -> dict[str, Any]:
        """JSON shape; unmatched games carry no 'predictions' key at all."""
        data = self.model_dump(mode="json", exclude={"predictions"})
        if self.predictions is not None:
            data["predictions"] = self.predictions.to_wire()
        return data
