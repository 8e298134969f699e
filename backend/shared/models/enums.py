"""Domain enumerations for the Live Picks backend."""
from __future__ import annotations

from enum import Enum


class League(str, Enum):
    """Leagues with a model prediction table. Values match the live feed."""
    NFL = "NFL"
    NCAAF = "NCAAF"
    NBA = "NBA"
    NCAAB = "NCAAB"

    @property
    def is_basketball(self) -> bool:
        return self in (League.NBA, League.NCAAB)


class Market(str, Enum):
    MONEYLINE = "moneyline"
    SPREAD = "spread"
    TOTAL = "total"


class PredictedSide(str, Enum):
    HOME = "Home"
    AWAY = "Away"
    OVER = "Over"
    UNDER = "Under"
