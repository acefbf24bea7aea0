"""Domain value objects and type aliases."""

from enum import Enum
from typing import NewType

# Type aliases for domain clarity
Puuid = NewType("Puuid", str)


class RankTier(str, Enum):
    """Ranked ladder tier, lowest first."""

    IRON = "IRON"
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"
    EMERALD = "EMERALD"
    DIAMOND = "DIAMOND"
    MASTER = "MASTER"
    GRANDMASTER = "GRANDMASTER"
    CHALLENGER = "CHALLENGER"
    UNRANKED = "UNRANKED"
