"""Port (interface) for player data sources."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from ...domain.value_objects import Puuid


@dataclass
class FetchMetadata:
    """Metadata about a fetched player data set."""

    puuid: str
    platform: str
    region: str
    queue_type: str
    fetched_at: str  # ISO 8601
    match_ids_found: int
    matches_fetched: int


@dataclass
class RawPlayerData:
    """Raw player data from an external source."""

    puuid: str
    summoner: Dict[str, Any]
    mastery: List[Dict[str, Any]]
    matches: List[Dict[str, Any]]  # match-v5 records, most recent first
    rank: Dict[str, Any] | None = None  # solo-queue league entry
    champion_names: Dict[int, str] = field(default_factory=dict)


class PlayerDataPort(ABC):
    """Port for fetching a player's recent matches and profile data."""

    @abstractmethod
    def fetch_player_data(
        self,
        puuid: Puuid,
        count: int | None = None,
    ) -> Tuple[RawPlayerData | None, FetchMetadata | None]:
        """Fetch profile data and the most recent match records.

        Args:
            puuid: Player identifier
            count: Number of recent matches, source default when None

        Returns:
            Tuple of (raw player data, fetch metadata)
        """
        ...
