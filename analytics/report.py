from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .aggregate import compute_analytics, resolve_champion_names
from .extract import PlayerMatchStats, extract_player_stats
from .ranks import estimate_lp_progression, lp_to_rank_label, rank_label, rank_to_lp
from .riot_ingest import FetchMeta, PlayerDataBundle

logger = logging.getLogger(__name__)


def build_player_analytics(
    matches: Sequence[Dict[str, Any]],
    puuid: str,
    mastery: Optional[Sequence[Mapping[str, Any]]] = None,
    summoner: Optional[Mapping[str, Any]] = None,
    rank_tier: Optional[str] = None,
    champion_names: Optional[Mapping[int, str]] = None,
) -> Dict[str, Any]:
    stats: List[PlayerMatchStats] = []
    for match in matches:
        s = extract_player_stats(match, puuid)
        if s is None:
            match_id = (match.get("metadata") or {}).get("matchId")
            logger.debug(f"Player {puuid} not in match {match_id}, skipping")
            continue
        stats.append(s)

    logger.info(f"Aggregating {len(stats)}/{len(matches)} matches for {puuid}")
    analytics = compute_analytics(stats, mastery, summoner, rank_tier)
    if champion_names:
        resolve_champion_names(analytics, champion_names)
    return analytics


def build_report(
    bundle: PlayerDataBundle,
    meta: Optional[FetchMeta] = None,
    rank_tier: Optional[str] = None,
) -> Dict[str, Any]:
    """Analytics plus rank context for one fetched (or replayed) player bundle.

    An explicit ``rank_tier`` overrides the solo-queue entry in the bundle.
    """
    rank = bundle.rank or {}
    tier = rank_tier or rank.get("tier")
    division = rank.get("rank") if not rank_tier else None
    lp = rank.get("leaguePoints", 0) if not rank_tier else 0

    analytics = build_player_analytics(
        bundle.matches,
        bundle.puuid,
        mastery=bundle.mastery,
        summoner=bundle.summoner,
        rank_tier=tier,
        champion_names=bundle.champion_names,
    )
    progression = estimate_lp_progression(analytics["match_history"], tier, division, lp)

    return {
        "meta": asdict(meta) if meta else {"puuid": bundle.puuid},
        "rank": {
            "tier": tier or "UNRANKED",
            "division": division,
            "lp": lp,
            "label": rank_label(tier, division),
            "wins": rank.get("wins", 0),
            "losses": rank.get("losses", 0),
            "total_lp": rank_to_lp(tier, division, lp),
        },
        "analytics": analytics,
        "lp_progression": [{**p, "label": lp_to_rank_label(p["lp"])} for p in progression],
    }
