from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from .tables import APEX_TIER_BASE_LP, DIVISION_ORDER, DIVISIONAL_TIERS, RANK_ORDER

LP_PER_WIN = 22
LP_PER_LOSS = 18
LP_PER_DIVISION = 100
LP_PER_TIER = LP_PER_DIVISION * len(DIVISION_ORDER)

UNRANKED = "UNRANKED"


def rank_index(tier: Optional[str]) -> int:
    """Position of ``tier`` in the ladder, or -1 when unknown."""
    try:
        return RANK_ORDER.index((tier or "").upper())
    except ValueError:
        return -1


def rank_label(tier: Optional[str], division: Optional[str] = None) -> str:
    tier = (tier or "").upper()
    if not tier or tier == UNRANKED:
        return "Unranked"
    name = tier.capitalize()
    if tier in APEX_TIER_BASE_LP or not division:
        return name
    return f"{name} {division}"


def rank_to_lp(tier: Optional[str], division: Optional[str], lp: Any) -> int:
    tier = (tier or "").upper()
    points = int(lp or 0)
    if tier in APEX_TIER_BASE_LP:
        return APEX_TIER_BASE_LP[tier] + points
    if tier not in DIVISIONAL_TIERS:
        return 0
    div_index = DIVISION_ORDER.index(division) if division in DIVISION_ORDER else 0
    return DIVISIONAL_TIERS.index(tier) * LP_PER_TIER + div_index * LP_PER_DIVISION + points


def lp_to_rank_label(total_lp: float) -> str:
    """Inverse of :func:`rank_to_lp` at division granularity, e.g. ``1250 -> "Gold II"``."""
    for tier in sorted(APEX_TIER_BASE_LP, key=APEX_TIER_BASE_LP.get, reverse=True):
        if total_lp >= APEX_TIER_BASE_LP[tier]:
            return tier.capitalize()
    total = max(0, int(total_lp))
    # LP between the end of Diamond I and the Master floor stays in Diamond
    tier_index = min(total // LP_PER_TIER, len(DIVISIONAL_TIERS) - 1)
    remainder = total - tier_index * LP_PER_TIER
    div_index = min(remainder // LP_PER_DIVISION, len(DIVISION_ORDER) - 1)
    return f"{DIVISIONAL_TIERS[tier_index].capitalize()} {DIVISION_ORDER[div_index]}"


def estimate_lp_progression(
    match_history: Sequence[Mapping[str, Any]],
    tier: Optional[str],
    division: Optional[str],
    lp: Any,
) -> List[Dict[str, int]]:
    """Reconstruct an approximate LP curve from recent results.

    ``match_history`` is most recent first; entries without a ``win`` flag
    are ignored. Starting from the current LP, each game is undone (a win
    removes the usual gain, a loss restores the usual loss), never going
    below zero. Points come back oldest first, so the last point is the
    current LP and ``index`` counts how many games back a point sits.
    """
    ranked = [m for m in match_history or [] if m.get("win") is not None]
    if not ranked:
        return []

    running = rank_to_lp(tier, division, lp)
    points = [{"lp": running, "index": 0}]
    for i, match in enumerate(ranked, start=1):
        running = max(0, running - LP_PER_WIN if match["win"] else running + LP_PER_LOSS)
        points.insert(0, {"lp": running, "index": i})
    return points
