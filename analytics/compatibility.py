from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .ranks import rank_index
from .tables import (
    CHAMPION_SYNERGIES,
    ROLE_COMPLEMENTS,
    ROLE_DISPLAY_NAMES,
    UNKNOWN_ROLE,
    normalize_role,
)

MAX_SCORE = 100

BOT_LANE_POINTS = 20
COMPLEMENT_POINTS = 16
DIFFERENT_ROLE_POINTS = 10

RANK_POINTS_BY_DISTANCE = (15, 12, 7, 3)
UNKNOWN_RANK_POINTS = 5

SAME_STYLE_POINTS = 5

SW_LABELS = {
    "cs": "CS",
    "kda": "KDA",
    "vision": "Vision",
    "deaths": "Survival",
    "winrate": "Winrate",
    "kp": "KP",
    "damage": "Damage",
    "gold": "Gold",
    "firstblood": "First blood",
    "solokills": "Solo kills",
    "controlwards": "Control wards",
}


@dataclass
class CompatibilityDetail:
    label: str
    points: int
    description: Optional[str] = None


@dataclass
class CompatibilityResult:
    score: int
    details: List[CompatibilityDetail] = field(default_factory=list)
    breakdown: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["details"] = [
            {k: v for k, v in d.items() if not (k == "description" and v is None)}
            for d in out["details"]
        ]
        return out


def _role(role: str) -> str:
    # unlisted roles keep their own name so only identical ones collide
    normalized = normalize_role(role)
    return (role or "").upper() if normalized == UNKNOWN_ROLE else normalized


def _roles(profile: Mapping[str, Any]) -> List[str]:
    return [_role(r) for r in profile.get("roles") or []]


def compute_role_score(my_roles: Sequence[str], other_roles: Sequence[str]) -> int:
    best = 0
    for mine in my_roles:
        complements = ROLE_COMPLEMENTS.get(mine, ())
        for theirs in other_roles:
            if theirs in complements:
                bot_lane = {mine, theirs} == {"ADC", "SUPPORT"}
                best = max(best, BOT_LANE_POINTS if bot_lane else COMPLEMENT_POINTS)
            elif mine != theirs:
                best = max(best, DIFFERENT_ROLE_POINTS)
    return best


def describe_role_match(my_roles: Sequence[str], other_roles: Sequence[str]) -> str:
    for mine in my_roles:
        complements = ROLE_COMPLEMENTS.get(mine, ())
        for theirs in other_roles:
            if theirs in complements:
                return f"{ROLE_DISPLAY_NAMES.get(mine, mine)} + {ROLE_DISPLAY_NAMES.get(theirs, theirs)}"
    return ""


def compute_rank_score(my_tier: Optional[str], other_tier: Optional[str]) -> int:
    mine = rank_index(my_tier)
    theirs = rank_index(other_tier)
    if mine == -1 or theirs == -1:
        return UNKNOWN_RANK_POINTS
    distance = abs(mine - theirs)
    if distance < len(RANK_POINTS_BY_DISTANCE):
        return RANK_POINTS_BY_DISTANCE[distance]
    return 0


def count_shared_slots(my_schedule: Sequence[str], other_schedule: Sequence[str]) -> int:
    theirs = set(other_schedule)
    return sum(1 for slot in my_schedule if slot in theirs)


def compute_schedule_score(my_schedule: Sequence[str], other_schedule: Sequence[str]) -> int:
    shared = count_shared_slots(my_schedule, other_schedule)
    if shared >= 3:
        return 15
    if shared == 2:
        return 10
    if shared == 1:
        return 5
    return 0


def compute_style_score(my_style: Optional[str], other_style: Optional[str]) -> int:
    if not my_style or not other_style:
        return 0
    return SAME_STYLE_POINTS if my_style == other_style else 0


def _champion_pool(analytics: Optional[Mapping[str, Any]]) -> List[str]:
    return list(((analytics or {}).get("by_champion") or {}).keys())


def find_synergy_pairs(my_champs: Sequence[str], other_champs: Sequence[str]) -> List[Tuple[str, str]]:
    """Unique unordered champion pairs where either side lists the other as a partner."""
    pairs: List[Tuple[str, str]] = []
    for mine in my_champs:
        partners = CHAMPION_SYNERGIES.get(mine, ())
        for theirs in other_champs:
            if theirs in partners:
                pairs.append((mine, theirs))
    for theirs in other_champs:
        partners = CHAMPION_SYNERGIES.get(theirs, ())
        for mine in my_champs:
            if mine in partners:
                pairs.append((theirs, mine))

    unique: List[Tuple[str, str]] = []
    seen = set()
    for a, b in pairs:
        key = tuple(sorted((a, b)))
        if key not in seen:
            seen.add(key)
            unique.append((a, b))
    return unique


def compute_champion_synergy_score(
    my_analytics: Optional[Mapping[str, Any]], other_analytics: Optional[Mapping[str, Any]]
) -> Tuple[int, List[Tuple[str, str]]]:
    if not (my_analytics or {}).get("by_champion") or not (other_analytics or {}).get("by_champion"):
        return 0, []
    pairs = find_synergy_pairs(_champion_pool(my_analytics), _champion_pool(other_analytics))
    count = len(pairs)
    if count >= 4:
        score = 15
    elif count == 3:
        score = 12
    elif count == 2:
        score = 9
    elif count == 1:
        score = 5
    else:
        score = 0
    return score, pairs


def _playstyle_scores(analytics: Optional[Mapping[str, Any]]) -> Optional[Mapping[str, Any]]:
    return ((analytics or {}).get("playstyle") or {}).get("scores") or None


def compute_playstyle_score(
    my_analytics: Optional[Mapping[str, Any]], other_analytics: Optional[Mapping[str, Any]]
) -> Tuple[int, str]:
    mine = _playstyle_scores(my_analytics)
    theirs = _playstyle_scores(other_analytics)
    if not mine or not theirs:
        return 0, ""

    def axis(scores: Mapping[str, Any], name: str) -> float:
        return scores.get(name, 0) or 0

    score = 0
    reasons: List[str] = []

    if axis(mine, "aggressive") >= 4 and axis(theirs, "defensive") >= 4:
        score += 3
        reasons.append("Aggressive + Defensive")
    elif axis(mine, "defensive") >= 4 and axis(theirs, "aggressive") >= 4:
        score += 3
        reasons.append("Defensive + Aggressive")

    if axis(mine, "farming") >= 4 and axis(theirs, "teamplay") >= 4:
        score += 3
        reasons.append("Farming carry + Teamplay")
    elif axis(mine, "teamplay") >= 4 and axis(theirs, "farming") >= 4:
        score += 3
        reasons.append("Teamplay + Farming carry")

    if axis(mine, "vision") >= 3 and axis(theirs, "vision") >= 3:
        score += 2
        reasons.append("Good vision on both sides")

    if axis(mine, "early_game") >= 3 and axis(theirs, "early_game") >= 3:
        score += 2
        reasons.append("Double early game")

    if axis(mine, "teamplay") >= 3 and axis(theirs, "teamplay") >= 3:
        score += 2
        reasons.append("Good coordination")

    return min(10, score), ", ".join(reasons[:2])


def _keys(entries: Optional[Sequence[Mapping[str, Any]]]) -> List[str]:
    return [e.get("key") for e in entries or [] if e.get("key")]


def compute_strength_weakness_score(
    my_analytics: Optional[Mapping[str, Any]], other_analytics: Optional[Mapping[str, Any]]
) -> Tuple[int, str]:
    if not my_analytics or not other_analytics:
        return 0, ""

    my_weak = _keys(my_analytics.get("weaknesses"))
    my_strong = set(_keys(my_analytics.get("strengths")))
    other_weak = _keys(other_analytics.get("weaknesses"))
    other_strong = set(_keys(other_analytics.get("strengths")))

    covered: List[str] = []
    for key in my_weak:
        if key in other_strong and key not in covered:
            covered.append(key)
    for key in other_weak:
        if key in my_strong and key not in covered:
            covered.append(key)

    description = ", ".join(SW_LABELS.get(k, k) for k in covered[:3])
    return min(10, len(covered) * 3), description


def compute_performance_score(other_analytics: Optional[Mapping[str, Any]]) -> int:
    overview = (other_analytics or {}).get("overview")
    if not overview:
        return 0

    score = 0
    winrate = overview.get("winrate", 0)
    if winrate >= 55:
        score += 3
    elif winrate >= 50:
        score += 2

    kda = overview.get("avg_kda", 0)
    if kda >= 3.5:
        score += 3
    elif kda >= 2.5:
        score += 1

    if overview.get("avg_deaths_per_game", 0) <= 4:
        score += 2
    if overview.get("avg_kill_participation", 0) >= 65:
        score += 2

    return min(10, score)


def compute_compatibility_score(
    my_profile: Mapping[str, Any], other_profile: Mapping[str, Any]
) -> CompatibilityResult:
    """Score how well two players would duo together, from 0 to 100.

    Eight independently capped sub-scores are summed: roles (20), rank (15),
    schedule (15), declared style (5), champion synergy (15), playstyle
    complementarity (10), strength/weakness coverage (10) and the other
    player's performance (10). Details only list notable sub-scores; the
    breakdown always lists all of them.
    """
    details: List[CompatibilityDetail] = []
    breakdown: Dict[str, int] = {}
    my_analytics = my_profile.get("analytics")
    other_analytics = other_profile.get("analytics")

    my_roles = _roles(my_profile)
    other_roles = _roles(other_profile)
    role = compute_role_score(my_roles, other_roles)
    breakdown["role"] = role
    if role >= 12:
        details.append(
            CompatibilityDetail("Complementary roles", role, describe_role_match(my_roles, other_roles))
        )

    rank = compute_rank_score(my_profile.get("rank_tier"), other_profile.get("rank_tier"))
    breakdown["rank"] = rank
    if rank >= 8:
        details.append(CompatibilityDetail("Close rank", rank))

    my_schedule = my_profile.get("schedule") or []
    other_schedule = other_profile.get("schedule") or []
    schedule = compute_schedule_score(my_schedule, other_schedule)
    breakdown["schedule"] = schedule
    if schedule >= 5:
        shared = count_shared_slots(my_schedule, other_schedule)
        details.append(CompatibilityDetail(f"{shared} shared slot{'s' if shared > 1 else ''}", schedule))

    style = compute_style_score(my_profile.get("play_style"), other_profile.get("play_style"))
    breakdown["style"] = style
    if style > 0:
        details.append(CompatibilityDetail("Same play style", style))

    champ, pairs = compute_champion_synergy_score(my_analytics, other_analytics)
    breakdown["champion_synergy"] = champ
    if champ >= 5 and pairs:
        details.append(
            CompatibilityDetail("Champion synergies", champ, ", ".join(f"{a} + {b}" for a, b in pairs[:3]))
        )

    playstyle, playstyle_desc = compute_playstyle_score(my_analytics, other_analytics)
    breakdown["playstyle"] = playstyle
    if playstyle >= 4:
        details.append(CompatibilityDetail("Complementary playstyles", playstyle, playstyle_desc))

    coverage, coverage_desc = compute_strength_weakness_score(my_analytics, other_analytics)
    breakdown["strength_weakness"] = coverage
    if coverage >= 4:
        details.append(CompatibilityDetail("Strengths cover weaknesses", coverage, coverage_desc))

    performance = compute_performance_score(other_analytics)
    breakdown["performance"] = performance
    if performance >= 5:
        details.append(CompatibilityDetail("Good level of play", performance))

    total = round(sum(breakdown.values()))
    return CompatibilityResult(score=max(0, min(MAX_SCORE, total)), details=details, breakdown=breakdown)
