import pytest

from analytics.aggregate import (
    compute_analytics,
    compute_champion_synergies,
    compute_trends,
    empty_analytics,
    order_most_recent_first,
    resolve_champion_names,
)
from analytics.extract import PlayerMatchStats


def _stats(
    i: int = 0,
    champion: str = "Ahri",
    position: str = "MIDDLE",
    win: bool = True,
    kills: int = 5,
    deaths: int = 3,
    assists: int = 7,
    cs_per_min: float = 7.0,
    physical: int = 1000,
    magic: int = 8000,
    true: int = 500,
    items=None,
    game_creation=None,
) -> PlayerMatchStats:
    damage = physical + magic + true
    return PlayerMatchStats(
        match_id=f"EUW1_{i}",
        champion_name=champion,
        team_position=position,
        win=win,
        game_duration_minutes=30.0,
        # most recent first by default: lower index, newer game
        game_creation=game_creation if game_creation is not None else 1_700_000_000_000 - i * 3_600_000,
        kills=kills,
        deaths=deaths,
        assists=assists,
        kill_participation=0.6,
        total_minions_killed=int(cs_per_min * 30),
        neutral_minions_killed=0,
        cs_per_min=cs_per_min,
        vision_score=18,
        wards_placed=8,
        wards_killed=2,
        control_wards_bought=1,
        vision_per_min=0.6,
        total_damage_dealt_to_champions=damage,
        physical_damage=physical,
        magic_damage=magic,
        true_damage=true,
        damage_share=0.25,
        damage_per_min=damage / 30,
        damage_taken=15000,
        damage_taken_per_min=500.0,
        gold_earned=11000,
        gold_per_min=366.0,
        items=items if items is not None else [3089, 3157, 0, 0, 0, 0, 3340],
    )


def test_ten_ahri_games_with_six_wins() -> None:
    stats = [_stats(i, win=i < 6) for i in range(10)]
    analytics = compute_analytics(stats)
    assert analytics["overview"]["total_games"] == 10
    assert analytics["overview"]["winrate"] == 60.0
    assert list(analytics["by_champion"]) == ["Ahri"]
    assert analytics["by_champion"]["Ahri"]["games"] == 10
    assert analytics["by_champion"]["Ahri"]["main_role"] == "MID"
    assert list(analytics["by_role"]) == ["MID"]
    assert analytics["by_role"]["MID"]["games"] == 10


def test_zero_death_kda_is_kills_plus_assists() -> None:
    analytics = compute_analytics([_stats(kills=5, deaths=0, assists=5)])
    assert analytics["overview"]["avg_kda"] == 10.0
    assert analytics["by_champion"]["Ahri"]["avg_kda"] == 10.0
    assert analytics["by_role"]["MID"]["avg_kda"] == 10.0


def test_empty_input_yields_empty_shape() -> None:
    analytics = compute_analytics([], summoner={"summonerLevel": 187, "profileIconId": 29})
    assert analytics == empty_analytics({"summonerLevel": 187, "profileIconId": 29})
    assert analytics["overview"]["total_games"] == 0
    assert analytics["playstyle"]["type"] == "unknown"
    assert set(analytics["playstyle"]["scores"].values()) == {0}
    assert analytics["summoner_level"] == 187
    assert compute_analytics([None, None])["overview"]["total_games"] == 0


def test_missing_records_are_dropped() -> None:
    analytics = compute_analytics([None, _stats(0), None])
    assert analytics["overview"]["total_games"] == 1


def test_compute_analytics_is_idempotent() -> None:
    stats = [_stats(i, win=i % 3 != 0, kills=i, deaths=i % 4) for i in range(8)]
    assert compute_analytics(stats, rank_tier="GOLD") == compute_analytics(stats, rank_tier="GOLD")


def test_input_order_does_not_matter() -> None:
    stats = [_stats(i, win=i < 5, kills=10 - i, cs_per_min=5 + i * 0.3) for i in range(10)]
    shuffled = stats[3:] + stats[:3]
    assert compute_analytics(shuffled) == compute_analytics(stats)


def test_order_most_recent_first_is_stable_for_equal_times() -> None:
    a = _stats(0, champion="Ahri", game_creation=5)
    b = _stats(1, champion="Zed", game_creation=5)
    c = _stats(2, champion="Lux", game_creation=9)
    assert [s.champion_name for s in order_most_recent_first([a, None, b, c])] == ["Lux", "Ahri", "Zed"]


def test_damage_composition_closure() -> None:
    analytics = compute_analytics([_stats(0, physical=1234, magic=4321, true=777), _stats(1)])
    comp = analytics["damage_composition"]
    assert comp["physical"] + comp["magic"] + comp["true"] == pytest.approx(100, abs=0.2)

    zero = compute_analytics([_stats(0, physical=0, magic=0, true=0)])
    assert zero["damage_composition"] == {"physical": 0, "magic": 0, "true": 0}


def test_trend_stable_for_identical_windows() -> None:
    trends = compute_analytics([_stats(i) for i in range(10)])["trends"]
    assert trends["kda_trend"] == "stable"
    assert trends["cs_trend"] == "stable"
    assert trends["recent_winrate"] == trends["previous_winrate"]


def test_trend_improving_and_declining() -> None:
    better_recently = [_stats(i, kills=10, deaths=1, cs_per_min=8.0) for i in range(5)] + [
        _stats(i, kills=1, deaths=5, cs_per_min=6.0) for i in range(5, 10)
    ]
    trends = compute_trends(better_recently)
    assert trends["kda_trend"] == "improving"
    assert trends["cs_trend"] == "improving"
    assert (trends["recent_cs"], trends["previous_cs"]) == (8.0, 6.0)

    trends = compute_trends(list(reversed(better_recently)))
    assert trends["kda_trend"] == "declining"
    assert trends["cs_trend"] == "declining"


def test_cs_trend_band_is_half_a_creep() -> None:
    stats = [_stats(i, cs_per_min=7.4) for i in range(5)] + [_stats(i, cs_per_min=7.0) for i in range(5, 10)]
    assert compute_trends(stats)["cs_trend"] == "stable"


def test_top_items_ignore_empty_slots_and_keep_first_seen_ties() -> None:
    stats = [
        _stats(0, items=[3157, 3089, 0, 0, 0, 0, 0]),
        _stats(1, items=[3089, 3157, 3020, 0, 0, 0, 0]),
    ]
    top = compute_analytics(stats)["by_champion"]["Ahri"]["top_items"]
    assert top == [{"id": 3157, "count": 2}, {"id": 3089, "count": 2}, {"id": 3020, "count": 1}]


def test_top_items_capped_at_six() -> None:
    stats = [_stats(0, items=[1, 2, 3, 4, 5, 6, 7]), _stats(1, items=[7, 0, 0, 0, 0, 0, 0])]
    top = compute_analytics(stats)["by_champion"]["Ahri"]["top_items"]
    assert len(top) == 6
    assert top[0] == {"id": 7, "count": 2}


def test_main_role_tie_goes_to_first_encountered() -> None:
    stats = [_stats(0, position="TOP"), _stats(1, position="MIDDLE")]
    assert compute_analytics(stats)["by_champion"]["Ahri"]["main_role"] == "TOP"


def test_by_role_normalizes_positions() -> None:
    stats = [
        _stats(0, position="BOTTOM"),
        _stats(1, position="ADC"),
        _stats(2, position="UTILITY"),
        _stats(3, position="UNKNOWN"),
    ]
    by_role = compute_analytics(stats)["by_role"]
    assert by_role["ADC"]["games"] == 2
    assert by_role["SUPPORT"]["games"] == 1
    assert by_role["UNKNOWN"]["games"] == 1


def test_champion_synergies() -> None:
    synergies = compute_champion_synergies(["Jinx", "Vayne"])
    assert synergies[0] == {"champion": "Lulu", "matched_with": ["Jinx", "Vayne"], "score": 2}
    assert [s["champion"] for s in synergies if s["score"] == 2] == ["Lulu", "Thresh", "Nami", "Janna"]
    assert len(synergies) <= 8
    assert compute_champion_synergies(["Teemo"]) == []


def test_champion_synergies_keep_top_eight() -> None:
    synergies = compute_champion_synergies(["Jinx", "Kaisa", "Ezreal", "Jhin"])
    assert len(synergies) == 8
    assert [s["champion"] for s in synergies] == [
        "Thresh",
        "Nami",
        "Nautilus",
        "Braum",
        "Lulu",
        "Janna",
        "Alistar",
        "Leona",
    ]
    assert synergies[0]["matched_with"] == ["Jinx", "Kaisa", "Jhin"]


def test_top_champions_and_name_resolution() -> None:
    mastery = [
        {"championId": 100 + i, "championLevel": 7, "championPoints": 100000 - i}
        for i in range(12)
    ]
    analytics = compute_analytics([_stats(0)], mastery=mastery)
    top = analytics["top_champions"]
    assert len(top) == 10
    assert top[0] == {
        "champion_id": 100,
        "champion_name": None,
        "mastery_level": 7,
        "mastery_points": 100000,
    }

    resolve_champion_names(analytics, {103: "Ahri"})
    assert analytics["top_champions"][3]["champion_name"] == "Ahri"
    assert analytics["top_champions"][0]["champion_name"] == "Champion100"


def test_per_champion_matches_are_most_recent_first() -> None:
    stats = [_stats(i, game_creation=i) for i in range(3)]
    matches = compute_analytics(stats)["by_champion"]["Ahri"]["matches"]
    assert [m["game_creation"] for m in matches] == [2, 1, 0]
    assert matches[0]["items"] == [3089, 3157, 0, 0, 0, 0, 3340]
