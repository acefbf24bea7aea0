from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from .tables import DEFAULT_CS_BENCHMARK, DEFAULT_RANK_TIER, RANK_CS_BENCHMARKS


def rank_cs_benchmark(rank_tier: Optional[str]) -> float:
    return RANK_CS_BENCHMARKS.get((rank_tier or "").upper(), DEFAULT_CS_BENCHMARK)


def _entry(key: str, label: str, value: Any, benchmark: Any, description: str) -> Dict[str, Any]:
    return {
        "key": key,
        "label": label,
        "value": value,
        "benchmark": benchmark,
        "description": description,
    }


def evaluate_strengths_weaknesses(
    overview: Dict[str, Any],
    rank_tier: Optional[str],
    highlights: Optional[Dict[str, Any]] = None,
    early_game: Optional[Dict[str, Any]] = None,
    damage_composition: Optional[Dict[str, Any]] = None,
) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """Compare aggregate metrics against fixed (and rank-aware) benchmarks.

    Each metric is checked once, in a fixed order, and lands in strengths,
    weaknesses, or neither. List order follows evaluation order.
    """
    strengths: List[Dict[str, Any]] = []
    weaknesses: List[Dict[str, Any]] = []
    rank = (rank_tier or DEFAULT_RANK_TIER).upper()
    highlights = highlights or {}
    early_game = early_game or {}

    cs = overview.get("avg_cs_per_min", 0)
    cs_bench = rank_cs_benchmark(rank)
    if cs >= cs_bench:
        strengths.append(_entry("cs", "High CS/min", cs, cs_bench, f"Above the {rank} average"))
    elif cs < cs_bench - 1:
        weaknesses.append(_entry("cs", "Low CS/min", cs, cs_bench, f"Below the {rank} average"))

    kda = overview.get("avg_kda", 0)
    if kda >= 4:
        strengths.append(_entry("kda", "Excellent KDA", kda, 3, "Very good kill/death ratio"))
    elif kda < 2:
        weaknesses.append(_entry("kda", "Low KDA", kda, 3, "Too many deaths compared to kills"))

    vision = overview.get("avg_vision_per_min", 0)
    if vision >= 0.7:
        strengths.append(_entry("vision", "Map vision", vision, 0.55, "Excellent vision control"))
    elif vision < 0.35:
        weaknesses.append(_entry("vision", "Poor vision", vision, 0.55, "Buy and place more wards"))

    deaths = overview.get("avg_deaths_per_game", 0)
    if deaths <= 3.5:
        strengths.append(_entry("deaths", "Survival", deaths, 5, "Few deaths, good positioning"))
    elif deaths > 7:
        weaknesses.append(_entry("deaths", "Too many deaths", deaths, 5, "Work on positioning"))

    winrate = overview.get("winrate", 0)
    if winrate >= 57:
        strengths.append(_entry("winrate", "High winrate", winrate, 50, "Positive impact on games"))
    elif winrate < 43:
        weaknesses.append(_entry("winrate", "Low winrate", winrate, 50, "Tends to lose games"))

    kp = overview.get("avg_kill_participation", 0)
    if kp >= 70:
        strengths.append(_entry("kp", "Kill participation", kp, 60, "Heavily involved in kills"))
    elif kp < 45:
        weaknesses.append(_entry("kp", "Low kill participation", kp, 60, "Not present enough in fights"))

    share = overview.get("avg_damage_share", 0)
    if share >= 28:
        strengths.append(_entry("damage", "Damage impact", share, 20, "Carries the team's damage"))
    elif share < 12:
        weaknesses.append(_entry("damage", "Low damage", share, 20, "Not enough damage contribution"))

    gold = overview.get("avg_gold_per_min", 0)
    if gold >= 450:
        strengths.append(_entry("gold", "Gold/min", gold, 380, "Excellent gold income"))
    elif gold < 300:
        weaknesses.append(_entry("gold", "Low gold/min", gold, 380, "Falling behind on gold"))

    first_blood = highlights.get("first_blood_rate", 0)
    if first_blood >= 40:
        strengths.append(_entry("firstblood", "First blood", first_blood, 20, "Aggressive early game"))

    solo_kills = early_game.get("avg_solo_kills", 0)
    if solo_kills >= 1.5:
        strengths.append(_entry("solokills", "Solo kills", solo_kills, 0.5, "Dominant in 1v1s"))

    control_wards = overview.get("avg_control_wards_bought", 0)
    if control_wards >= 2.5:
        strengths.append(
            _entry("controlwards", "Control wards", control_wards, 1.5, "Good investment in vision")
        )
    elif control_wards < 0.5:
        weaknesses.append(
            _entry("controlwards", "No control wards", control_wards, 1.5, "Buy control wards")
        )

    return strengths, weaknesses
