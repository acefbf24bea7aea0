"""Infrastructure adapters."""

from .riot_player_adapter import RiotAnalyticsBuilderAdapter, RiotPlayerDataAdapter

__all__ = [
    "RiotAnalyticsBuilderAdapter",
    "RiotPlayerDataAdapter",
]
