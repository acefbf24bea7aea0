from __future__ import annotations

from typing import Any, Dict, List

PLAYSTYLE_AXES = ("aggressive", "defensive", "farming", "teamplay", "vision", "early_game")

TAG_THRESHOLD = 3
FALLBACK_TAG_THRESHOLD = 2


def empty_scores() -> Dict[str, int]:
    return {axis: 0 for axis in PLAYSTYLE_AXES}


def classify_playstyle(
    overview: Dict[str, Any],
    by_role: Dict[str, Any],
    highlights: Dict[str, Any],
    early_game: Dict[str, Any],
) -> Dict[str, Any]:
    """Score six behavioural axes with fixed threshold ladders.

    The dominant axis becomes the playstyle type (ties resolved in axis
    order). Tags list every axis scoring at least 3, or the dominant axis
    alone when it scores at least 2.
    """
    scores = empty_scores()

    avg_kills = overview.get("avg_kills", 0)
    if avg_kills >= 6:
        scores["aggressive"] += 3
    elif avg_kills >= 4:
        scores["aggressive"] += 2
    if overview.get("avg_damage_share", 0) >= 25:
        scores["aggressive"] += 2
    if highlights.get("first_blood_rate", 0) >= 30:
        scores["aggressive"] += 2
    if early_game.get("avg_solo_kills", 0) >= 1:
        scores["aggressive"] += 2

    deaths = overview.get("avg_deaths_per_game", 0)
    if deaths <= 3:
        scores["defensive"] += 3
    elif deaths <= 5:
        scores["defensive"] += 2
    if overview.get("avg_damage_taken_per_min", 0) >= 600:
        scores["defensive"] += 1

    cs = overview.get("avg_cs_per_min", 0)
    if cs >= 8:
        scores["farming"] += 3
    elif cs >= 7:
        scores["farming"] += 2
    elif cs >= 6:
        scores["farming"] += 1

    kp = overview.get("avg_kill_participation", 0)
    if kp >= 70:
        scores["teamplay"] += 3
    elif kp >= 60:
        scores["teamplay"] += 2
    if overview.get("avg_assists", 0) >= 8:
        scores["teamplay"] += 2

    vision = overview.get("avg_vision_per_min", 0)
    if vision >= 0.8:
        scores["vision"] += 3
    elif vision >= 0.6:
        scores["vision"] += 2
    if overview.get("avg_control_wards_bought", 0) >= 2:
        scores["vision"] += 1

    if early_game.get("first_blood_rate", 0) >= 30:
        scores["early_game"] += 2
    if early_game.get("avg_turret_plates", 0) >= 1.5:
        scores["early_game"] += 2
    if early_game.get("avg_cs_at_10", 0) >= 70:
        scores["early_game"] += 2

    # sorted() is stable, so equal scores keep axis order
    ranked = sorted(scores.items(), key=lambda kv: kv[1], reverse=True)
    top_axis, top_score = ranked[0]

    tags: List[str] = [axis for axis, score in ranked if score >= TAG_THRESHOLD]
    if not tags and top_score >= FALLBACK_TAG_THRESHOLD:
        tags.append(top_axis)

    return {"type": top_axis, "tags": tags, "scores": scores}
