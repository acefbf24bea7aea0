from analytics.playstyle import PLAYSTYLE_AXES, classify_playstyle


def _classify(overview=None, highlights=None, early_game=None):
    base = {"avg_deaths_per_game": 6}
    base.update(overview or {})
    return classify_playstyle(base, {}, highlights or {}, early_game or {})


def test_aggressive_player() -> None:
    result = _classify(
        {"avg_kills": 7, "avg_damage_share": 30},
        highlights={"first_blood_rate": 40},
        early_game={"avg_solo_kills": 1.5},
    )
    assert result["scores"]["aggressive"] == 9
    assert result["type"] == "aggressive"
    assert result["tags"] == ["aggressive"]


def test_tags_ordered_by_score() -> None:
    result = _classify(
        {"avg_cs_per_min": 8.5, "avg_vision_per_min": 0.9, "avg_control_wards_bought": 2}
    )
    assert result["scores"]["vision"] == 4
    assert result["scores"]["farming"] == 3
    assert result["type"] == "vision"
    assert result["tags"] == ["vision", "farming"]


def test_ties_resolve_in_axis_order() -> None:
    result = _classify({"avg_kills": 4, "avg_deaths_per_game": 5})
    assert result["scores"]["aggressive"] == 2
    assert result["scores"]["defensive"] == 2
    assert result["type"] == "aggressive"
    # nothing reaches 3, so only the dominant axis is tagged
    assert result["tags"] == ["aggressive"]


def test_weak_signals_produce_no_tags() -> None:
    result = _classify({"avg_cs_per_min": 6.2})
    assert result["scores"]["farming"] == 1
    assert result["tags"] == []


def test_early_game_and_teamplay_ladders() -> None:
    result = _classify(
        {"avg_kill_participation": 72, "avg_assists": 9},
        early_game={"first_blood_rate": 30, "avg_turret_plates": 1.5, "avg_cs_at_10": 70},
    )
    assert result["scores"]["teamplay"] == 5
    assert result["scores"]["early_game"] == 6
    assert result["tags"] == ["early_game", "teamplay"]


def test_scores_cover_every_axis() -> None:
    assert tuple(_classify()["scores"]) == PLAYSTYLE_AXES
