from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from .config import DEFAULT_MASTERY_COUNT, SOLO_QUEUE, RiotConfig
from .extract import extract_match_history_entry
from .riot_client import RiotApiClient, RiotApiError

logger = logging.getLogger(__name__)

ProgressFn = Callable[[int, int, str], None]


@dataclass
class PlayerDataBundle:
    puuid: str
    summoner: Dict[str, Any]
    mastery: List[Dict[str, Any]]
    match_ids: List[str]
    matches: List[Dict[str, Any]]
    rank: Optional[Dict[str, Any]] = None
    champion_names: Dict[int, str] = field(default_factory=dict)


@dataclass
class FetchMeta:
    puuid: str
    platform: str
    region: str
    queue_type: str
    fetched_at: str
    match_ids_found: int
    matches_fetched: int


def _iso_z(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def solo_queue_entry(entries: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    return next((e for e in entries or [] if e.get("queueType") == SOLO_QUEUE), None)


def resolve_puuid(client: RiotApiClient, riot_id: str) -> str:
    """Look up a player's puuid from ``GameName#TAG``."""
    game_name, sep, tag_line = riot_id.partition("#")
    if not sep or not game_name or not tag_line:
        raise ValueError(f"Riot id must look like 'GameName#TAG', got '{riot_id}'")
    account = client.get_account_by_riot_id(game_name, tag_line)
    puuid = account.get("puuid")
    if not puuid:
        raise RuntimeError(f"No puuid returned for '{riot_id}'")
    return puuid


def fetch_full_player_data(
    client: RiotApiClient,
    puuid: str,
    count: int = 10,
    queue_type: Optional[str] = "ranked",
    max_concurrency: int = 1,
    on_progress: Optional[ProgressFn] = None,
) -> PlayerDataBundle:
    """Fetch summoner, mastery, solo-queue rank and the latest match details.

    Match details come back in the order of the match id list (most recent
    first) whatever the concurrency.
    """
    workers = max(1, max_concurrency)
    with ThreadPoolExecutor(max_workers=max(workers, 3)) as executor:
        summoner_f = executor.submit(client.get_summoner, puuid)
        mastery_f = executor.submit(client.get_top_mastery, puuid, DEFAULT_MASTERY_COUNT)
        ids_f = executor.submit(client.get_match_ids, puuid, count, 0, queue_type)
        summoner = summoner_f.result()
        mastery = mastery_f.result()
        match_ids = ids_f.result() or []

    total = 3 + len(match_ids)
    if on_progress:
        on_progress(3, total, "Base data loaded")
    logger.debug(f"[ingest] {len(match_ids)} match ids for {puuid}")

    try:
        rank = solo_queue_entry(client.get_league_entries(puuid))
    except RiotApiError as exc:
        logger.warning(f"[ingest] league entries unavailable for {puuid}: {exc}")
        rank = None

    matches: List[Dict[str, Any]] = []
    with ThreadPoolExecutor(max_workers=workers) as executor:
        for i, match in enumerate(executor.map(client.get_match, match_ids), start=1):
            matches.append(match)
            logger.debug(f"[ingest] match {i}/{len(match_ids)} loaded")
            if on_progress:
                on_progress(3 + i, total, f"Match {i}/{len(match_ids)} loaded")

    return PlayerDataBundle(
        puuid=puuid,
        summoner=summoner or {},
        mastery=mastery or [],
        match_ids=list(match_ids),
        matches=matches,
        rank=rank,
    )


def fetch_player_data(
    config: RiotConfig,
    puuid: Optional[str] = None,
    riot_id: Optional[str] = None,
    count: Optional[int] = None,
    with_champion_names: bool = True,
    on_progress: Optional[ProgressFn] = None,
) -> Tuple[PlayerDataBundle, FetchMeta]:
    client = RiotApiClient.from_config(config)
    if not puuid:
        if not riot_id:
            raise ValueError("Either a puuid or a Riot id is required")
        puuid = resolve_puuid(client, riot_id)
        logger.debug(f"[account] resolved '{riot_id}' -> {puuid}")

    bundle = fetch_full_player_data(
        client,
        puuid,
        count=count or config.match_count,
        queue_type=config.queue_type,
        max_concurrency=config.max_concurrency,
        on_progress=on_progress,
    )
    if with_champion_names:
        try:
            bundle.champion_names = client.get_champion_names()
        except RiotApiError as exc:
            logger.warning(f"[ddragon] champion names unavailable: {exc}")

    meta = FetchMeta(
        puuid=puuid,
        platform=config.platform,
        region=config.region,
        queue_type=config.queue_type,
        fetched_at=_iso_z(datetime.now(timezone.utc)),
        match_ids_found=len(bundle.match_ids),
        matches_fetched=len(bundle.matches),
    )
    return bundle, meta


def fetch_match_history_page(
    client: RiotApiClient,
    puuid: str,
    start: int = 0,
    count: int = 10,
    queue_type: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """One page of display-ready history entries, any queue by default.

    Matches that fail to load are skipped.
    """
    match_ids = client.get_match_ids(puuid, count=count, start=start, queue_type=queue_type) or []
    entries: List[Dict[str, Any]] = []
    for match_id in match_ids:
        try:
            match = client.get_match(match_id)
        except RiotApiError as exc:
            logger.warning(f"[history] skipping {match_id}: {exc}")
            continue
        entry = extract_match_history_entry(match, puuid)
        if entry:
            entries.append(entry)
    return entries


def bundle_to_json(bundle: PlayerDataBundle, meta: Optional[FetchMeta] = None) -> Dict[str, Any]:
    out = asdict(bundle)
    # JSON object keys are strings
    out["champion_names"] = {str(k): v for k, v in bundle.champion_names.items()}
    return {"meta": asdict(meta) if meta else {}, "bundle": out}


def bundle_from_json(raw: Dict[str, Any]) -> Tuple[PlayerDataBundle, Optional[FetchMeta]]:
    item = raw.get("bundle") or raw
    bundle = PlayerDataBundle(
        puuid=item.get("puuid") or "",
        summoner=item.get("summoner") or {},
        mastery=item.get("mastery") or [],
        match_ids=item.get("match_ids") or [],
        matches=item.get("matches") or [],
        rank=item.get("rank"),
        champion_names={int(k): v for k, v in (item.get("champion_names") or {}).items()},
    )
    meta_dict = raw.get("meta") or {}
    meta = None
    if meta_dict:
        meta = FetchMeta(
            puuid=meta_dict.get("puuid") or bundle.puuid,
            platform=meta_dict.get("platform") or "",
            region=meta_dict.get("region") or "",
            queue_type=meta_dict.get("queue_type") or "",
            fetched_at=meta_dict.get("fetched_at") or "",
            match_ids_found=meta_dict.get("match_ids_found") or len(bundle.match_ids),
            matches_fetched=meta_dict.get("matches_fetched") or len(bundle.matches),
        )
    return bundle, meta
