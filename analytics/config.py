from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


PLATFORM_URL = "https://{platform}.api.riotgames.com"
REGION_URL = "https://{region}.api.riotgames.com"
DDRAGON_URL = "https://ddragon.leagueoflegends.com"

DEFAULT_PLATFORM = "euw1"
DEFAULT_REGION = "europe"
DEFAULT_MATCH_COUNT = 10
DEFAULT_MASTERY_COUNT = 10
DEFAULT_QUEUE_TYPE = "ranked"
SOLO_QUEUE = "RANKED_SOLO_5x5"

# Development key limits: 20 requests per second, 100 per two minutes.
RATE_LIMITS = ((20, 1.0), (100, 120.0))


@dataclass(frozen=True)
class CacheConfig:
    enabled: bool
    base_dir: Path


@dataclass(frozen=True)
class RiotConfig:
    api_key: Optional[str]
    platform: str = DEFAULT_PLATFORM
    region: str = DEFAULT_REGION
    match_count: int = DEFAULT_MATCH_COUNT
    queue_type: str = DEFAULT_QUEUE_TYPE
    max_concurrency: int = 1
    timeout_s: int = 20

    @property
    def platform_url(self) -> str:
        return PLATFORM_URL.format(platform=self.platform)

    @property
    def region_url(self) -> str:
        return REGION_URL.format(region=self.region)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def cache_config_from_env() -> CacheConfig:
    enabled = os.environ.get("RIOT_CACHE", "0").lower() in {"1", "true", "yes"}
    base_dir = Path(os.environ.get("RIOT_CACHE_DIR", ".cache/riot"))
    return CacheConfig(enabled=enabled, base_dir=base_dir)


def riot_config_from_env() -> RiotConfig:
    return RiotConfig(
        api_key=os.environ.get("RIOT_API_KEY") or None,
        platform=os.environ.get("RIOT_PLATFORM", DEFAULT_PLATFORM),
        region=os.environ.get("RIOT_REGION", DEFAULT_REGION),
        match_count=_env_int("RIOT_MATCH_COUNT", DEFAULT_MATCH_COUNT),
        queue_type=os.environ.get("RIOT_MATCH_QUEUE_TYPE", DEFAULT_QUEUE_TYPE),
        max_concurrency=max(1, _env_int("RIOT_MAX_CONCURRENCY", 1)),
        timeout_s=_env_int("RIOT_TIMEOUT_S", 20),
    )
