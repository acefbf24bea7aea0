from __future__ import annotations

import hashlib
import json
import logging
import threading
import time
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Deque, Dict, List, Optional, Tuple

import requests
from requests.utils import quote

from .config import DDRAGON_URL, RATE_LIMITS, CacheConfig, RiotConfig, cache_config_from_env

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = (429, 500, 502, 503, 504)


class RiotApiError(RuntimeError):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass
class RateLimiter:
    """Sliding-window limiter shared by every thread using one client."""

    limits: Tuple[Tuple[int, float], ...] = RATE_LIMITS
    poll_s: float = 0.1
    _calls: Deque[float] = field(default_factory=deque, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def _has_room(self, now: float) -> bool:
        horizon = max(window for _, window in self.limits)
        while self._calls and now - self._calls[0] >= horizon:
            self._calls.popleft()
        for max_calls, window in self.limits:
            if sum(1 for t in self._calls if now - t < window) >= max_calls:
                return False
        return True

    def wait(self) -> None:
        while True:
            with self._lock:
                now = time.monotonic()
                if self._has_room(now):
                    self._calls.append(now)
                    return
            time.sleep(self.poll_s)


@dataclass
class RiotApiClient:
    api_key: str
    platform_url: str
    region_url: str
    timeout_s: int = 20
    cache: Optional[CacheConfig] = None
    rate_limiter: Optional[RateLimiter] = None

    def __post_init__(self) -> None:
        self.session = requests.Session()
        self.session.headers.update(
            {
                "X-Riot-Token": self.api_key,
                "accept": "application/json",
            }
        )
        if self.cache is None:
            self.cache = cache_config_from_env()
        if self.rate_limiter is None:
            self.rate_limiter = RateLimiter()

    @classmethod
    def from_config(cls, config: RiotConfig) -> "RiotApiClient":
        if not config.api_key:
            raise ValueError("RIOT_API_KEY is not configured")
        return cls(
            api_key=config.api_key,
            platform_url=config.platform_url,
            region_url=config.region_url,
            timeout_s=config.timeout_s,
        )

    def _cache_path(self, url: str, params: Optional[Dict[str, Any]]) -> Path:
        assert self.cache is not None
        key_src = json.dumps({"url": url, "params": params or {}}, sort_keys=True)
        digest = hashlib.sha1(key_src.encode("utf-8")).hexdigest()
        return self.cache.base_dir / f"{digest}.json"

    @staticmethod
    def _retry_delay(resp: requests.Response, fallback: float) -> float:
        retry_after = resp.headers.get("Retry-After")
        try:
            return float(retry_after) if retry_after else fallback
        except ValueError:
            return fallback

    def get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        retries: int = 3,
        backoff_s: float = 0.6,
        use_cache: bool = False,
        rate_limited: bool = True,
    ) -> Any:
        cache = self.cache if use_cache else None
        if cache and cache.enabled:
            path = self._cache_path(url, params)
            if path.exists():
                with path.open("r", encoding="utf-8") as f:
                    return json.load(f)

        last_err: Optional[Exception] = None
        for attempt in range(retries):
            if rate_limited and self.rate_limiter is not None:
                self.rate_limiter.wait()
            try:
                resp = self.session.get(url, params=params, timeout=self.timeout_s)
            except requests.RequestException as exc:
                last_err = exc
                time.sleep(backoff_s * (attempt + 1))
                continue

            if resp.status_code in RETRYABLE_STATUS:
                last_err = RiotApiError(f"HTTP {resp.status_code} from {url}", resp.status_code)
                delay = self._retry_delay(resp, backoff_s * (attempt + 1))
                logger.debug(f"Riot API {resp.status_code} on {url}, retrying in {delay:.1f}s")
                time.sleep(delay)
                continue
            if resp.status_code >= 400:
                raise RiotApiError(
                    f"Riot API error {resp.status_code} for {url}: {resp.text[:200]}",
                    resp.status_code,
                )

            try:
                data = resp.json()
            except ValueError as exc:
                raise RiotApiError(f"Unexpected non-JSON response from {url}", resp.status_code) from exc

            if cache and cache.enabled:
                path.parent.mkdir(parents=True, exist_ok=True)
                with path.open("w", encoding="utf-8") as f:
                    json.dump(data, f)
            return data

        raise RiotApiError(f"Failed after {retries} attempts. Last error: {last_err}")

    def get_account_by_riot_id(self, game_name: str, tag_line: str) -> Dict[str, Any]:
        url = (
            f"{self.region_url}/riot/account/v1/accounts/by-riot-id/"
            f"{quote(game_name, safe='')}/{quote(tag_line, safe='')}"
        )
        return self.get_json(url)

    def get_summoner(self, puuid: str) -> Dict[str, Any]:
        return self.get_json(f"{self.platform_url}/lol/summoner/v4/summoners/by-puuid/{quote(puuid, safe='')}")

    def get_league_entries(self, puuid: str) -> List[Dict[str, Any]]:
        return self.get_json(f"{self.platform_url}/lol/league/v4/entries/by-puuid/{quote(puuid, safe='')}")

    def get_top_mastery(self, puuid: str, count: int = 10) -> List[Dict[str, Any]]:
        url = f"{self.platform_url}/lol/champion-mastery/v4/champion-masteries/by-puuid/{quote(puuid, safe='')}/top"
        return self.get_json(url, params={"count": count})

    def get_match_ids(
        self, puuid: str, count: int = 10, start: int = 0, queue_type: Optional[str] = None
    ) -> List[str]:
        params: Dict[str, Any] = {"count": count, "start": start}
        if queue_type:
            params["type"] = queue_type
        url = f"{self.region_url}/lol/match/v5/matches/by-puuid/{quote(puuid, safe='')}/ids"
        return self.get_json(url, params=params)

    def get_match(self, match_id: str) -> Dict[str, Any]:
        # Finished matches never change, so these are safe to cache.
        return self.get_json(f"{self.region_url}/lol/match/v5/matches/{quote(match_id, safe='')}", use_cache=True)

    def get_champion_names(self) -> Dict[int, str]:
        """Champion numeric id -> Data Dragon champion id (e.g. ``103 -> "Ahri"``)."""
        versions = self.get_json(f"{DDRAGON_URL}/api/versions.json", rate_limited=False)
        if not versions:
            raise RiotApiError("Data Dragon returned no versions")
        data = self.get_json(
            f"{DDRAGON_URL}/cdn/{versions[0]}/data/en_US/champion.json",
            use_cache=True,
            rate_limited=False,
        )
        return {int(champ["key"]): champ["id"] for champ in (data.get("data") or {}).values()}
