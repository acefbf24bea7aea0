"""Domain value objects."""

from .types import Puuid, RankTier

__all__ = [
    "Puuid",
    "RankTier",
]
