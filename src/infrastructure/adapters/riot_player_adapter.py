"""Adapter wrapping the analytics Riot ingest and report modules."""

from dataclasses import asdict
from typing import Any, Dict, Tuple

from analytics.config import RiotConfig, riot_config_from_env
from analytics.report import build_report
from analytics.riot_ingest import FetchMeta, PlayerDataBundle, fetch_player_data

from ...application.ports.analytics_builder import AnalyticsBuilderPort
from ...application.ports.player_data import (
    FetchMetadata,
    PlayerDataPort,
    RawPlayerData,
)


class RiotPlayerDataAdapter(PlayerDataPort):
    """Adapter for fetching player data from the Riot API."""

    def __init__(self, config: RiotConfig | None = None):
        """Initialize with Riot configuration.

        Args:
            config: Riot settings. If None, read from the environment.
        """
        self._config = config or riot_config_from_env()

    def fetch_player_data(
        self,
        puuid: str,
        count: int | None = None,
    ) -> Tuple[RawPlayerData | None, FetchMetadata | None]:
        if not self._config.api_key:
            raise ValueError("RIOT_API_KEY not configured")

        bundle, meta = fetch_player_data(self._config, puuid=puuid, count=count)
        if not bundle.matches:
            return None, None

        data = RawPlayerData(
            puuid=bundle.puuid,
            summoner=bundle.summoner,
            mastery=bundle.mastery,
            matches=bundle.matches,
            rank=bundle.rank,
            champion_names=bundle.champion_names,
        )
        return data, FetchMetadata(**asdict(meta))


class RiotAnalyticsBuilderAdapter(AnalyticsBuilderPort):
    """Adapter for building reports using the analytics module."""

    def build_report(
        self,
        data: RawPlayerData,
        meta: FetchMetadata,
        rank_tier: str | None = None,
    ) -> Dict[str, Any]:
        bundle = PlayerDataBundle(
            puuid=data.puuid,
            summoner=data.summoner,
            mastery=data.mastery,
            match_ids=[(m.get("metadata") or {}).get("matchId") or "" for m in data.matches],
            matches=data.matches,
            rank=data.rank,
            champion_names=data.champion_names,
        )
        return build_report(bundle, FetchMeta(**asdict(meta)), rank_tier=rank_tier)
