"""Application ports (interfaces)."""

from .analytics_builder import AnalyticsBuilderPort
from .player_data import FetchMetadata, PlayerDataPort, RawPlayerData

__all__ = [
    "AnalyticsBuilderPort",
    "FetchMetadata",
    "PlayerDataPort",
    "RawPlayerData",
]
