"""Port (interface) for building player analytics."""

from abc import ABC, abstractmethod
from typing import Any, Dict

from .player_data import FetchMetadata, RawPlayerData


class AnalyticsBuilderPort(ABC):
    """Port for turning raw player data into an analytics report."""

    @abstractmethod
    def build_report(
        self,
        data: RawPlayerData,
        meta: FetchMetadata,
        rank_tier: str | None = None,
    ) -> Dict[str, Any]:
        """Build the analytics report for one player.

        Args:
            data: Raw player data
            meta: Fetch metadata
            rank_tier: Optional tier overriding the fetched rank

        Returns:
            Report dictionary with ``meta``, ``rank``, ``analytics`` and
            ``lp_progression``
        """
        ...
