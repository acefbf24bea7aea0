from analytics.compatibility import (
    compute_champion_synergy_score,
    compute_compatibility_score,
    compute_performance_score,
    compute_playstyle_score,
    compute_rank_score,
    compute_role_score,
    compute_schedule_score,
    compute_strength_weakness_score,
)

SCHEDULE = ["mon-evening", "wed-evening", "sat-afternoon"]


def _analytics(champions=(), scores=None, strengths=(), weaknesses=(), overview=None):
    return {
        "by_champion": {c: {"games": 1} for c in champions},
        "playstyle": {"type": "unknown", "tags": [], "scores": scores or {}},
        "strengths": [{"key": k} for k in strengths],
        "weaknesses": [{"key": k} for k in weaknesses],
        "overview": overview or {},
    }


def _profile(roles=(), rank_tier=None, schedule=(), play_style=None, analytics=None):
    return {
        "roles": list(roles),
        "rank_tier": rank_tier,
        "schedule": list(schedule),
        "play_style": play_style,
        "analytics": analytics,
    }


STRONG_OVERVIEW = {
    "winrate": 58.0,
    "avg_kda": 3.8,
    "avg_deaths_per_game": 3.5,
    "avg_kill_participation": 68.0,
}


def test_role_score_symmetry() -> None:
    bot = compute_role_score(["ADC"], ["SUPPORT"])
    assert bot == compute_role_score(["SUPPORT"], ["ADC"]) == 20
    assert bot > compute_role_score(["ADC"], ["ADC"]) == 0
    assert bot > compute_role_score(["JUNGLE"], ["SUPPORT"]) == 10
    assert compute_role_score(["TOP"], ["JUNGLE"]) == 16
    assert compute_role_score(["MID", "ADC"], ["MID", "SUPPORT"]) == 20
    assert compute_role_score([], ["MID"]) == 0


def test_role_aliases_are_normalized() -> None:
    result = compute_compatibility_score(_profile(roles=["BOTTOM"]), _profile(roles=["UTILITY"]))
    assert result.breakdown["role"] == 20
    assert result.details[0].label == "Complementary roles"
    assert result.details[0].description == "ADC + Support"


def test_rank_score_by_distance() -> None:
    assert compute_rank_score("GOLD", "gold") == 15
    assert compute_rank_score("GOLD", "PLATINUM") == 12
    assert compute_rank_score("GOLD", "SILVER") == 12
    assert compute_rank_score("GOLD", "EMERALD") == 7
    assert compute_rank_score("GOLD", "DIAMOND") == 3
    assert compute_rank_score("IRON", "MASTER") == 0
    assert compute_rank_score(None, "GOLD") == 5
    assert compute_rank_score("GOLD", "UNRANKED") == 5


def test_schedule_score() -> None:
    assert compute_schedule_score(SCHEDULE, SCHEDULE) == 15
    assert compute_schedule_score(SCHEDULE, SCHEDULE[:2]) == 10
    assert compute_schedule_score(SCHEDULE, ["wed-evening", "sun-morning"]) == 5
    assert compute_schedule_score(SCHEDULE, []) == 0


def test_identical_profiles_beat_disjoint_ones() -> None:
    me = _profile(roles=["MID"], rank_tier="GOLD", schedule=SCHEDULE, play_style="tryhard")
    identical = compute_compatibility_score(me, dict(me))
    disjoint = compute_compatibility_score(
        _profile(rank_tier="IRON", schedule=["mon-morning"], play_style="chill"),
        _profile(rank_tier="CHALLENGER", schedule=["sun-night"], play_style="tryhard"),
    )
    assert identical.score == 35
    assert disjoint.score == 0
    assert identical.score > disjoint.score


def test_adc_pair_has_no_hidden_contributions() -> None:
    me = _profile(
        roles=["ADC"],
        rank_tier="GOLD",
        schedule=SCHEDULE[:2],
        play_style="chill",
        analytics=_analytics(champions=["Teemo"], overview=STRONG_OVERVIEW),
    )
    other = _profile(
        roles=["ADC"],
        rank_tier="GOLD",
        schedule=SCHEDULE[:2],
        play_style="chill",
        analytics=_analytics(champions=["Singed"], overview=STRONG_OVERVIEW),
    )
    result = compute_compatibility_score(me, other)
    b = result.breakdown
    assert b["role"] == 0
    assert b["champion_synergy"] == 0
    assert b["playstyle"] == 0
    assert b["strength_weakness"] == 0
    assert result.score == b["rank"] + b["schedule"] + b["style"] + b["performance"] == 40
    assert [d.label for d in result.details] == [
        "Close rank",
        "2 shared slots",
        "Same play style",
        "Good level of play",
    ]


def test_champion_synergy_pairs_are_deduplicated() -> None:
    score, pairs = compute_champion_synergy_score(
        _analytics(champions=["Jinx", "Ezreal"]),
        _analytics(champions=["Lulu", "Thresh", "Nami"]),
    )
    assert pairs == [("Jinx", "Lulu"), ("Jinx", "Thresh"), ("Jinx", "Nami"), ("Ezreal", "Nami")]
    assert score == 15


def test_champion_synergy_is_bidirectional() -> None:
    forward, _ = compute_champion_synergy_score(_analytics(champions=["Senna"]), _analytics(champions=["Jhin"]))
    backward, _ = compute_champion_synergy_score(_analytics(champions=["Jhin"]), _analytics(champions=["Senna"]))
    assert forward == backward == 5
    assert compute_champion_synergy_score(None, _analytics(champions=["Jhin"])) == (0, [])


def test_playstyle_complementarity() -> None:
    score, description = compute_playstyle_score(
        _analytics(scores={"aggressive": 5, "vision": 3}),
        _analytics(scores={"defensive": 4, "vision": 3}),
    )
    assert score == 5
    assert description == "Aggressive + Defensive, Good vision on both sides"

    capped, _ = compute_playstyle_score(
        _analytics(scores={"aggressive": 5, "farming": 5, "vision": 3, "early_game": 3, "teamplay": 4}),
        _analytics(scores={"defensive": 5, "teamplay": 4, "vision": 3, "early_game": 3}),
    )
    assert capped == 10


def test_strength_weakness_coverage() -> None:
    score, description = compute_strength_weakness_score(
        _analytics(strengths=["cs"], weaknesses=["vision", "kda"]),
        _analytics(strengths=["vision", "kda"], weaknesses=["cs"]),
    )
    assert score == 9
    assert description == "Vision, KDA, CS"

    capped, _ = compute_strength_weakness_score(
        _analytics(strengths=["cs", "gold"], weaknesses=["vision", "kda"]),
        _analytics(strengths=["vision", "kda"], weaknesses=["cs", "gold"]),
    )
    assert capped == 10


def test_performance_uses_other_player_only() -> None:
    assert compute_performance_score(_analytics(overview=STRONG_OVERVIEW)) == 10
    assert compute_performance_score(_analytics(overview={"winrate": 51, "avg_kda": 2.6, "avg_deaths_per_game": 6})) == 3
    assert compute_performance_score(None) == 0

    weak = _profile(analytics=_analytics(overview={"winrate": 30, "avg_kda": 1, "avg_deaths_per_game": 9}))
    strong = _profile(analytics=_analytics(overview=STRONG_OVERVIEW))
    assert compute_compatibility_score(weak, strong).breakdown["performance"] == 10
    assert compute_compatibility_score(strong, weak).breakdown["performance"] == 0


def test_best_possible_pair_scores_exactly_100() -> None:
    me = _profile(
        roles=["ADC"],
        rank_tier="GOLD",
        schedule=SCHEDULE,
        play_style="tryhard",
        analytics=_analytics(
            champions=["Jinx", "Ezreal"],
            scores={"aggressive": 5, "farming": 5, "vision": 3, "early_game": 3, "teamplay": 4},
            strengths=["cs", "gold"],
            weaknesses=["vision", "kda"],
        ),
    )
    other = _profile(
        roles=["SUPPORT"],
        rank_tier="GOLD",
        schedule=SCHEDULE,
        play_style="tryhard",
        analytics=_analytics(
            champions=["Lulu", "Thresh", "Nami"],
            scores={"defensive": 5, "teamplay": 4, "vision": 3, "early_game": 3},
            strengths=["vision", "kda"],
            weaknesses=["cs", "gold"],
            overview=STRONG_OVERVIEW,
        ),
    )
    result = compute_compatibility_score(me, other)
    assert sum(result.breakdown.values()) == 100
    assert result.score == 100
    assert len(result.details) == 8


def test_missing_analytics_scores_only_profile_fields() -> None:
    result = compute_compatibility_score(_profile(roles=["TOP"]), _profile(roles=["MID"]))
    assert result.score == 16 + 5
    assert result.breakdown["champion_synergy"] == 0
    assert result.breakdown["performance"] == 0


def test_result_to_dict_omits_empty_descriptions() -> None:
    result = compute_compatibility_score(
        _profile(roles=["JUNGLE"], rank_tier="GOLD"),
        _profile(roles=["MID"], rank_tier="GOLD"),
    ).to_dict()
    assert result["score"] == 31
    assert result["details"][0] == {"label": "Complementary roles", "points": 16, "description": "Jungle + Mid"}
    assert result["details"][1] == {"label": "Close rank", "points": 15}
    assert list(result["breakdown"]) == [
        "role",
        "rank",
        "schedule",
        "style",
        "champion_synergy",
        "playstyle",
        "strength_weakness",
        "performance",
    ]


def test_unlisted_roles_only_collide_when_identical() -> None:
    result = compute_compatibility_score({"roles": ["FILL"]}, {"roles": ["ANY"]})
    assert result.breakdown["role"] == 10
    same = compute_compatibility_score({"roles": ["FILL"]}, {"roles": ["fill"]})
    assert same.breakdown["role"] == 0
    aliased = compute_compatibility_score({"roles": ["BOTTOM"]}, {"roles": ["UTILITY"]})
    assert aliased.breakdown["role"] == 20
