from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from .benchmarks import evaluate_strengths_weaknesses
from .extract import PlayerMatchStats, kda_ratio, round_half_up
from .playstyle import classify_playstyle, empty_scores
from .tables import CHAMPION_SYNERGIES, normalize_role

TREND_WINDOW = 5
KDA_IMPROVING_FACTOR = 1.15
KDA_DECLINING_FACTOR = 0.85
CS_TREND_BAND = 0.5
MAX_TOP_ITEMS = 6
MAX_SYNERGIES = 8
MAX_TOP_CHAMPIONS = 10


def _mean(stats: Sequence[PlayerMatchStats], fn: Callable[[PlayerMatchStats], float]) -> float:
    if not stats:
        return 0.0
    return sum(fn(s) for s in stats) / len(stats)


def _pct(part: float, total: float) -> float:
    return round_half_up(part / total * 100, 1) if total > 0 else 0


def _damage_split(physical: float, magic: float, true: float) -> Dict[str, float]:
    total = physical + magic + true
    return {
        "physical": _pct(physical, total),
        "magic": _pct(magic, total),
        "true": _pct(true, total),
    }


def order_most_recent_first(stats: Iterable[Optional[PlayerMatchStats]]) -> List[PlayerMatchStats]:
    """Drop missing records and order by game creation, newest first.

    Trend windows depend on this order. The sort is stable, so records with
    equal (or unknown) creation times keep the caller's order.
    """
    valid = [s for s in stats if s is not None]
    return sorted(valid, key=lambda s: s.game_creation, reverse=True)


def _compact_match(s: PlayerMatchStats) -> Dict[str, Any]:
    return {
        "match_id": s.match_id,
        "win": s.win,
        "kills": s.kills,
        "deaths": s.deaths,
        "assists": s.assists,
        "cs_per_min": round_half_up(s.cs_per_min, 1),
        "vision_per_min": round_half_up(s.vision_per_min, 2),
        "damage_share": round_half_up(s.damage_share * 100, 1),
        "kp": round_half_up(s.kill_participation * 100, 1),
        "duration": round_half_up(s.game_duration_minutes, 1),
        "game_creation": s.game_creation,
    }


def compute_overview(stats: Sequence[PlayerMatchStats]) -> Dict[str, Any]:
    games = len(stats)
    wins = sum(1 for s in stats if s.win)
    kills = sum(s.kills for s in stats)
    deaths = sum(s.deaths for s in stats)
    assists = sum(s.assists for s in stats)

    return {
        "total_games": games,
        "winrate": round_half_up(wins / games * 100, 1),
        "avg_kda": round_half_up(kda_ratio(kills, deaths, assists), 2),
        "avg_kills": round_half_up(kills / games, 1),
        "avg_deaths": round_half_up(deaths / games, 1),
        "avg_assists": round_half_up(assists / games, 1),
        "avg_cs_per_min": round_half_up(_mean(stats, lambda s: s.cs_per_min), 1),
        "avg_vision_per_min": round_half_up(_mean(stats, lambda s: s.vision_per_min), 2),
        "avg_damage_share": round_half_up(_mean(stats, lambda s: s.damage_share) * 100, 1),
        "avg_deaths_per_game": round_half_up(deaths / games, 1),
        "avg_kill_participation": round_half_up(_mean(stats, lambda s: s.kill_participation) * 100, 1),
        "avg_gold_per_min": round_half_up(_mean(stats, lambda s: s.gold_per_min)),
        "avg_damage_per_min": round_half_up(_mean(stats, lambda s: s.damage_per_min)),
        "avg_damage_taken_per_min": round_half_up(_mean(stats, lambda s: s.damage_taken_per_min)),
        "avg_wards_placed": round_half_up(_mean(stats, lambda s: s.wards_placed), 1),
        "avg_wards_killed": round_half_up(_mean(stats, lambda s: s.wards_killed), 1),
        "avg_control_wards_bought": round_half_up(_mean(stats, lambda s: s.control_wards_bought), 1),
        "avg_game_duration": round_half_up(_mean(stats, lambda s: s.game_duration_minutes), 1),
        "avg_cc_time": round_half_up(_mean(stats, lambda s: s.time_ccing_others), 1),
    }


def compute_damage_composition(stats: Sequence[PlayerMatchStats]) -> Dict[str, float]:
    return _damage_split(
        sum(s.physical_damage for s in stats),
        sum(s.magic_damage for s in stats),
        sum(s.true_damage for s in stats),
    )


def compute_highlights(stats: Sequence[PlayerMatchStats]) -> Dict[str, Any]:
    first_bloods = sum(1 for s in stats if s.took_first_blood)
    return {
        "double_kills": sum(s.double_kills for s in stats),
        "triple_kills": sum(s.triple_kills for s in stats),
        "quadra_kills": sum(s.quadra_kills for s in stats),
        "penta_kills": sum(s.penta_kills for s in stats),
        "solo_kills": sum(s.solo_kills for s in stats),
        "first_bloods": first_bloods,
        "first_blood_rate": _pct(first_bloods, len(stats)),
        "first_towers": sum(1 for s in stats if s.took_first_tower),
        "turret_plates_taken": sum(s.turret_plates_taken for s in stats),
    }


def compute_early_game(stats: Sequence[PlayerMatchStats], first_blood_rate: float) -> Dict[str, Any]:
    return {
        "avg_cs_at_10": round_half_up(_mean(stats, lambda s: s.lane_minions_first_10_min), 1),
        "first_blood_rate": first_blood_rate,
        "avg_turret_plates": round_half_up(_mean(stats, lambda s: s.turret_plates_taken), 1),
        "avg_solo_kills": round_half_up(_mean(stats, lambda s: s.solo_kills), 1),
    }


@dataclass
class _ChampionRollup:
    games: int = 0
    wins: int = 0
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    cs_per_min: float = 0.0
    damage_per_min: float = 0.0
    gold_per_min: float = 0.0
    vision_per_min: float = 0.0
    kill_participation: float = 0.0
    physical_damage: int = 0
    magic_damage: int = 0
    true_damage: int = 0
    solo_kills: int = 0
    first_bloods: int = 0
    control_wards: int = 0
    roles: Counter = field(default_factory=Counter)
    items: Counter = field(default_factory=Counter)
    matches: List[Dict[str, Any]] = field(default_factory=list)

    def add(self, s: PlayerMatchStats) -> None:
        self.games += 1
        if s.win:
            self.wins += 1
        self.kills += s.kills
        self.deaths += s.deaths
        self.assists += s.assists
        self.cs_per_min += s.cs_per_min
        self.damage_per_min += s.damage_per_min
        self.gold_per_min += s.gold_per_min
        self.vision_per_min += s.vision_per_min
        self.kill_participation += s.kill_participation
        self.physical_damage += s.physical_damage
        self.magic_damage += s.magic_damage
        self.true_damage += s.true_damage
        self.solo_kills += s.solo_kills
        if s.took_first_blood:
            self.first_bloods += 1
        self.control_wards += s.control_wards_bought
        self.roles[normalize_role(s.team_position)] += 1
        self.items.update(i for i in s.items if i > 0)
        self.matches.append({**_compact_match(s), "items": list(s.items)})

    def summary(self) -> Dict[str, Any]:
        # Counter.most_common keeps first-seen order among equal counts
        n = self.games
        main_role = self.roles.most_common(1)
        return {
            "games": n,
            "winrate": round_half_up(self.wins / n * 100, 1),
            "avg_kda": round_half_up(kda_ratio(self.kills, self.deaths, self.assists), 2),
            "avg_cs_per_min": round_half_up(self.cs_per_min / n, 1),
            "avg_damage_per_min": round_half_up(self.damage_per_min / n),
            "avg_gold_per_min": round_half_up(self.gold_per_min / n),
            "avg_vision_per_min": round_half_up(self.vision_per_min / n, 2),
            "avg_kp": round_half_up(self.kill_participation / n * 100, 1),
            "avg_kills": round_half_up(self.kills / n, 1),
            "avg_deaths": round_half_up(self.deaths / n, 1),
            "avg_assists": round_half_up(self.assists / n, 1),
            "damage_composition": _damage_split(self.physical_damage, self.magic_damage, self.true_damage),
            "main_role": main_role[0][0] if main_role else "UNKNOWN",
            "avg_solo_kills": round_half_up(self.solo_kills / n, 1),
            "first_blood_rate": round_half_up(self.first_bloods / n * 100, 1),
            "avg_control_wards": round_half_up(self.control_wards / n, 1),
            "top_items": [
                {"id": item_id, "count": count}
                for item_id, count in self.items.most_common(MAX_TOP_ITEMS)
            ],
            "matches": self.matches,
        }


def compute_by_champion(stats: Sequence[PlayerMatchStats]) -> Dict[str, Dict[str, Any]]:
    rollups: Dict[str, _ChampionRollup] = {}
    for s in stats:
        rollups.setdefault(s.champion_name, _ChampionRollup()).add(s)
    return {name: r.summary() for name, r in rollups.items()}


def compute_by_role(stats: Sequence[PlayerMatchStats]) -> Dict[str, Dict[str, Any]]:
    buckets: Dict[str, Dict[str, Any]] = {}
    for s in stats:
        bucket = buckets.setdefault(normalize_role(s.team_position), {"games": 0, "wins": 0, "kda": []})
        bucket["games"] += 1
        if s.win:
            bucket["wins"] += 1
        bucket["kda"].append(s.kda)

    return {
        role: {
            "games": b["games"],
            "winrate": round_half_up(b["wins"] / b["games"] * 100, 1),
            "avg_kda": round_half_up(sum(b["kda"]) / len(b["kda"]), 2),
        }
        for role, b in buckets.items()
    }


def _window_kda(window: Sequence[PlayerMatchStats]) -> float:
    if not window:
        return 0.0
    takedowns = sum(s.kills + s.assists for s in window)
    return takedowns / max(1, sum(s.deaths for s in window))


def _window_winrate(window: Sequence[PlayerMatchStats]) -> float:
    if not window:
        return 0
    return round_half_up(sum(1 for s in window if s.win) / len(window) * 100, 1)


def _window_cs(window: Sequence[PlayerMatchStats]) -> float:
    if not window:
        return 0
    return round_half_up(_mean(window, lambda s: s.cs_per_min), 1)


def compute_trends(stats: Sequence[PlayerMatchStats]) -> Dict[str, Any]:
    """Compare the 5 most recent games with the 5 before them.

    ``stats`` must be ordered most recent first.
    """
    recent = stats[:TREND_WINDOW]
    previous = stats[TREND_WINDOW : TREND_WINDOW * 2]

    recent_kda = _window_kda(recent)
    previous_kda = _window_kda(previous)
    kda_trend = "stable"
    if recent_kda > previous_kda * KDA_IMPROVING_FACTOR:
        kda_trend = "improving"
    elif recent_kda < previous_kda * KDA_DECLINING_FACTOR:
        kda_trend = "declining"

    recent_cs = _window_cs(recent)
    previous_cs = _window_cs(previous)
    cs_trend = "stable"
    if recent_cs > previous_cs + CS_TREND_BAND:
        cs_trend = "improving"
    elif recent_cs < previous_cs - CS_TREND_BAND:
        cs_trend = "declining"

    return {
        "recent_winrate": _window_winrate(recent),
        "previous_winrate": _window_winrate(previous),
        "kda_trend": kda_trend,
        "recent_cs": recent_cs,
        "previous_cs": previous_cs,
        "cs_trend": cs_trend,
    }


def compute_match_history(stats: Sequence[PlayerMatchStats]) -> List[Dict[str, Any]]:
    return [
        {
            "champion": s.champion_name,
            **_compact_match(s),
            "role": normalize_role(s.team_position),
        }
        for s in stats
    ]


def compute_top_champions(mastery: Optional[Sequence[Mapping[str, Any]]]) -> List[Dict[str, Any]]:
    return [
        {
            "champion_id": m.get("championId"),
            "champion_name": None,
            "mastery_level": m.get("championLevel"),
            "mastery_points": m.get("championPoints"),
        }
        for m in list(mastery or [])[:MAX_TOP_CHAMPIONS]
    ]


def compute_champion_synergies(champions: Iterable[str]) -> List[Dict[str, Any]]:
    """Rank partner champions that pair well with the player's pool."""
    partners: Dict[str, Dict[str, Any]] = {}
    for champ in champions:
        for partner in CHAMPION_SYNERGIES.get(champ, ()):
            entry = partners.setdefault(partner, {"champion": partner, "matched_with": [], "score": 0})
            entry["matched_with"].append(champ)
            entry["score"] += 1
    ranked = sorted(partners.values(), key=lambda e: e["score"], reverse=True)
    return ranked[:MAX_SYNERGIES]


def empty_analytics(summoner: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    summoner = summoner or {}
    return {
        "overview": {
            "total_games": 0,
            "winrate": 0,
            "avg_kda": 0,
            "avg_kills": 0,
            "avg_deaths": 0,
            "avg_assists": 0,
            "avg_cs_per_min": 0,
            "avg_vision_per_min": 0,
            "avg_damage_share": 0,
            "avg_deaths_per_game": 0,
            "avg_kill_participation": 0,
            "avg_gold_per_min": 0,
            "avg_damage_per_min": 0,
            "avg_damage_taken_per_min": 0,
            "avg_wards_placed": 0,
            "avg_wards_killed": 0,
            "avg_control_wards_bought": 0,
            "avg_game_duration": 0,
            "avg_cc_time": 0,
        },
        "damage_composition": {"physical": 0, "magic": 0, "true": 0},
        "highlights": {
            "double_kills": 0,
            "triple_kills": 0,
            "quadra_kills": 0,
            "penta_kills": 0,
            "solo_kills": 0,
            "first_bloods": 0,
            "first_blood_rate": 0,
            "first_towers": 0,
            "turret_plates_taken": 0,
        },
        "early_game": {"avg_cs_at_10": 0, "first_blood_rate": 0, "avg_turret_plates": 0, "avg_solo_kills": 0},
        "by_champion": {},
        "by_role": {},
        "trends": {
            "recent_winrate": 0,
            "previous_winrate": 0,
            "kda_trend": "stable",
            "recent_cs": 0,
            "previous_cs": 0,
            "cs_trend": "stable",
        },
        "match_history": [],
        "top_champions": [],
        "synergies": [],
        "playstyle": {"type": "unknown", "tags": [], "scores": empty_scores()},
        "strengths": [],
        "weaknesses": [],
        "summoner_level": summoner.get("summonerLevel") or 0,
        "profile_icon_id": summoner.get("profileIconId") or 0,
    }


def compute_analytics(
    stats_list: Iterable[Optional[PlayerMatchStats]],
    mastery: Optional[Sequence[Mapping[str, Any]]] = None,
    summoner: Optional[Mapping[str, Any]] = None,
    rank_tier: Optional[str] = None,
) -> Dict[str, Any]:
    """Fold per-match stats into the player's aggregate analytics snapshot.

    Missing (None) records are dropped and the rest are ordered most recent
    first before any window is taken. An empty input yields
    ``empty_analytics`` rather than an error.
    """
    stats = order_most_recent_first(stats_list)
    if not stats:
        return empty_analytics(summoner)

    summoner = summoner or {}
    overview = compute_overview(stats)
    damage_composition = compute_damage_composition(stats)
    highlights = compute_highlights(stats)
    early_game = compute_early_game(stats, highlights["first_blood_rate"])
    by_champion = compute_by_champion(stats)
    by_role = compute_by_role(stats)

    playstyle = classify_playstyle(overview, by_role, highlights, early_game)
    strengths, weaknesses = evaluate_strengths_weaknesses(
        overview, rank_tier, highlights, early_game, damage_composition
    )

    return {
        "overview": overview,
        "damage_composition": damage_composition,
        "highlights": highlights,
        "early_game": early_game,
        "by_champion": by_champion,
        "by_role": by_role,
        "trends": compute_trends(stats),
        "match_history": compute_match_history(stats),
        "top_champions": compute_top_champions(mastery),
        "synergies": compute_champion_synergies(by_champion.keys()),
        "playstyle": playstyle,
        "strengths": strengths,
        "weaknesses": weaknesses,
        "summoner_level": summoner.get("summonerLevel") or 0,
        "profile_icon_id": summoner.get("profileIconId") or 0,
    }


def resolve_champion_names(
    analytics: Dict[str, Any], champion_names: Mapping[int, str]
) -> Dict[str, Any]:
    """Fill mastery entries' champion names from an id -> name lookup, in place."""
    for champ in analytics.get("top_champions") or []:
        champion_id = champ.get("champion_id")
        if champion_id and not champ.get("champion_name"):
            champ["champion_name"] = champion_names.get(int(champion_id)) or f"Champion{champion_id}"
    return analytics
