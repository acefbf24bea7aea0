from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .tables import UNKNOWN_ROLE, queue_name


@dataclass(frozen=True)
class Teammate:
    champion_name: Optional[str]
    position: Optional[str]


@dataclass
class PlayerMatchStats:
    match_id: str
    champion_name: str
    team_position: str
    win: bool
    game_duration_minutes: float
    game_creation: int

    kills: int
    deaths: int
    assists: int
    kill_participation: float

    total_minions_killed: int
    neutral_minions_killed: int
    cs_per_min: float

    vision_score: int
    wards_placed: int
    wards_killed: int
    control_wards_bought: int
    vision_per_min: float

    total_damage_dealt_to_champions: int
    physical_damage: int
    magic_damage: int
    true_damage: int
    damage_share: float
    damage_per_min: float
    damage_taken: int
    damage_taken_per_min: float

    gold_earned: int
    gold_per_min: float

    turret_kills: int = 0
    inhibitor_kills: int = 0
    dragon_kills: int = 0
    baron_kills: int = 0

    first_blood_kill: bool = False
    first_blood_assist: bool = False
    first_tower_kill: bool = False
    first_tower_assist: bool = False

    double_kills: int = 0
    triple_kills: int = 0
    quadra_kills: int = 0
    penta_kills: int = 0

    longest_time_spent_living: int = 0
    total_time_cc_dealt: int = 0
    time_ccing_others: int = 0
    total_heals_on_teammates: int = 0
    total_damage_shielded_on_teammates: int = 0

    solo_kills: int = 0
    turret_plates_taken: int = 0
    lane_minions_first_10_min: int = 0

    items: List[int] = field(default_factory=list)
    teammates: List[Teammate] = field(default_factory=list)

    @property
    def kda(self) -> float:
        return kda_ratio(self.kills, self.deaths, self.assists)

    @property
    def took_first_blood(self) -> bool:
        return self.first_blood_kill or self.first_blood_assist

    @property
    def took_first_tower(self) -> bool:
        return self.first_tower_kill or self.first_tower_assist


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves toward +inf, matching how the stats are displayed (no banker's rounding)."""
    scale = 10 ** digits
    rounded = math.floor(value * scale + 0.5) / scale
    return int(rounded) if digits == 0 else rounded


def kda_ratio(kills: float, deaths: float, assists: float) -> float:
    # Deathless games report kills + assists, never infinity.
    if deaths > 0:
        return (kills + assists) / deaths
    return float(kills + assists)


def _safe_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _per_min(value: float, minutes: float) -> float:
    return value / minutes if minutes > 0 else 0.0


def _items(participant: Dict[str, Any]) -> List[int]:
    return [_safe_int(participant.get(f"item{i}")) for i in range(7)]


def _find_participant(info: Dict[str, Any], puuid: str) -> Optional[Dict[str, Any]]:
    return next((p for p in info.get("participants") or [] if p.get("puuid") == puuid), None)


def extract_player_stats(match: Dict[str, Any], puuid: str) -> Optional[PlayerMatchStats]:
    """Flatten one match-v5 record into the target player's per-match stats.

    Returns None when the player is not a participant of the match; callers
    skip those matches.
    """
    info = match.get("info") or {}
    p = _find_participant(info, puuid)
    if p is None:
        return None

    minutes = _safe_int(info.get("gameDuration")) / 60
    team_id = p.get("teamId")
    team = [pp for pp in info.get("participants") or [] if pp.get("teamId") == team_id]
    team_damage = sum(_safe_int(pp.get("totalDamageDealtToChampions")) for pp in team)
    team_kills = sum(_safe_int(pp.get("kills")) for pp in team)

    kills = _safe_int(p.get("kills"))
    deaths = _safe_int(p.get("deaths"))
    assists = _safe_int(p.get("assists"))
    minions = _safe_int(p.get("totalMinionsKilled"))
    monsters = _safe_int(p.get("neutralMinionsKilled"))
    vision = _safe_int(p.get("visionScore"))
    damage = _safe_int(p.get("totalDamageDealtToChampions"))
    taken = _safe_int(p.get("totalDamageTaken"))
    gold = _safe_int(p.get("goldEarned"))
    challenges = p.get("challenges") or {}

    return PlayerMatchStats(
        match_id=str((match.get("metadata") or {}).get("matchId") or ""),
        champion_name=p.get("championName") or "",
        team_position=p.get("teamPosition") or p.get("individualPosition") or UNKNOWN_ROLE,
        win=bool(p.get("win")),
        game_duration_minutes=minutes,
        game_creation=_safe_int(info.get("gameCreation")),
        kills=kills,
        deaths=deaths,
        assists=assists,
        kill_participation=(kills + assists) / team_kills if team_kills > 0 else 0.0,
        total_minions_killed=minions,
        neutral_minions_killed=monsters,
        cs_per_min=_per_min(minions + monsters, minutes),
        vision_score=vision,
        wards_placed=_safe_int(p.get("wardsPlaced")),
        wards_killed=_safe_int(p.get("wardsKilled")),
        control_wards_bought=_safe_int(p.get("visionWardsBoughtInGame")),
        vision_per_min=_per_min(vision, minutes),
        total_damage_dealt_to_champions=damage,
        physical_damage=_safe_int(p.get("physicalDamageDealtToChampions")),
        magic_damage=_safe_int(p.get("magicDamageDealtToChampions")),
        true_damage=_safe_int(p.get("trueDamageDealtToChampions")),
        damage_share=damage / team_damage if team_damage > 0 else 0.0,
        damage_per_min=_per_min(damage, minutes),
        damage_taken=taken,
        damage_taken_per_min=_per_min(taken, minutes),
        gold_earned=gold,
        gold_per_min=_per_min(gold, minutes),
        turret_kills=_safe_int(p.get("turretKills")),
        inhibitor_kills=_safe_int(p.get("inhibitorKills")),
        dragon_kills=_safe_int(p.get("dragonKills")),
        baron_kills=_safe_int(p.get("baronKills")),
        first_blood_kill=bool(p.get("firstBloodKill")),
        first_blood_assist=bool(p.get("firstBloodAssist")),
        first_tower_kill=bool(p.get("firstTowerKill")),
        first_tower_assist=bool(p.get("firstTowerAssist")),
        double_kills=_safe_int(p.get("doubleKills")),
        triple_kills=_safe_int(p.get("tripleKills")),
        quadra_kills=_safe_int(p.get("quadraKills")),
        penta_kills=_safe_int(p.get("pentaKills")),
        longest_time_spent_living=_safe_int(p.get("longestTimeSpentLiving")),
        total_time_cc_dealt=_safe_int(p.get("totalTimeCCDealt")),
        time_ccing_others=_safe_int(p.get("timeCCingOthers")),
        total_heals_on_teammates=_safe_int(p.get("totalHealsOnTeammates")),
        total_damage_shielded_on_teammates=_safe_int(p.get("totalDamageShieldedOnTeammates")),
        solo_kills=_safe_int(challenges.get("soloKills")),
        turret_plates_taken=_safe_int(challenges.get("turretPlatesTaken")),
        lane_minions_first_10_min=_safe_int(challenges.get("laneMinionsFirst10Minutes")),
        items=_items(p),
        teammates=[
            Teammate(champion_name=t.get("championName"), position=t.get("teamPosition"))
            for t in team
            if t.get("puuid") != puuid
        ],
    )


def _rune_ids(participant: Dict[str, Any]) -> Tuple[int, int]:
    primary_rune = 0
    secondary_tree = 0
    styles = (participant.get("perks") or {}).get("styles") or []
    primary = next((s for s in styles if s.get("description") == "primaryStyle"), None)
    secondary = next((s for s in styles if s.get("description") == "subStyle"), None)
    if primary and primary.get("selections"):
        primary_rune = _safe_int(primary["selections"][0].get("perk"))
    if secondary:
        secondary_tree = _safe_int(secondary.get("style"))
    return primary_rune, secondary_tree


def _team_objectives(team: Dict[str, Any]) -> Dict[str, Any]:
    objectives = team.get("objectives") or {}

    def kills(name: str) -> int:
        return _safe_int((objectives.get(name) or {}).get("kills"))

    return {
        "team_id": team.get("teamId"),
        "win": bool(team.get("win")),
        "baron_kills": kills("baron"),
        "dragon_kills": kills("dragon"),
        "tower_kills": kills("tower"),
        "rift_herald_kills": kills("riftHerald"),
    }


def extract_match_history_entry(match: Dict[str, Any], puuid: str) -> Optional[Dict[str, Any]]:
    """Display-ready summary of one match from the player's point of view."""
    info = match.get("info") or {}
    p = _find_participant(info, puuid)
    if p is None:
        return None

    duration = _safe_int(info.get("gameDuration"))
    team_id = p.get("teamId")
    participants = info.get("participants") or []
    team_kills = sum(_safe_int(pp.get("kills")) for pp in participants if pp.get("teamId") == team_id)
    kills = _safe_int(p.get("kills"))
    deaths = _safe_int(p.get("deaths"))
    assists = _safe_int(p.get("assists"))
    cs_total = _safe_int(p.get("totalMinionsKilled")) + _safe_int(p.get("neutralMinionsKilled"))
    primary_rune, secondary_tree = _rune_ids(p)

    return {
        "match_id": (match.get("metadata") or {}).get("matchId"),
        "win": bool(p.get("win")),
        "queue_id": info.get("queueId"),
        "queue_name": queue_name(info.get("queueId")),
        "game_creation": info.get("gameCreation"),
        "game_duration": f"{duration // 60}:{duration % 60:02d}",
        "game_duration_seconds": duration,
        "champion_name": p.get("championName"),
        "champ_level": p.get("champLevel"),
        "summoner1_id": p.get("summoner1Id"),
        "summoner2_id": p.get("summoner2Id"),
        "primary_rune_id": primary_rune,
        "secondary_tree_id": secondary_tree,
        "kills": kills,
        "deaths": deaths,
        "assists": assists,
        "kda_ratio": f"{round_half_up((kills + assists) / deaths, 2):.2f}" if deaths > 0 else "Perfect",
        "cs_total": cs_total,
        "cs_per_min": f"{round_half_up(cs_total / (duration / 60), 1):.1f}" if duration > 0 else "0",
        "vision_score": _safe_int(p.get("visionScore")),
        "kill_participation": round_half_up((kills + assists) / team_kills * 100) if team_kills > 0 else 0,
        "items": _items(p),
        "player_team_id": team_id,
        "participants": [
            {
                "puuid": pp.get("puuid"),
                "champion_name": pp.get("championName"),
                "team_id": pp.get("teamId"),
                "summoner_name": (pp.get("riotIdGameName") or pp.get("summonerName") or "").strip(),
                "tag_line": (pp.get("riotIdTagline") or "").strip(),
                "kills": _safe_int(pp.get("kills")),
                "deaths": _safe_int(pp.get("deaths")),
                "assists": _safe_int(pp.get("assists")),
                "total_damage_dealt_to_champions": _safe_int(pp.get("totalDamageDealtToChampions")),
                "cs": _safe_int(pp.get("totalMinionsKilled")) + _safe_int(pp.get("neutralMinionsKilled")),
                "vision_score": _safe_int(pp.get("visionScore")),
                "gold_earned": _safe_int(pp.get("goldEarned")),
                "items": _items(pp),
                "champ_level": pp.get("champLevel"),
            }
            for pp in participants
        ],
        "teams": [_team_objectives(t) for t in info.get("teams") or []],
    }
