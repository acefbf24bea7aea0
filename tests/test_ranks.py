from analytics.ranks import (
    estimate_lp_progression,
    lp_to_rank_label,
    rank_index,
    rank_label,
    rank_to_lp,
)


def test_rank_index() -> None:
    assert rank_index("IRON") == 0
    assert rank_index("challenger") == 9
    assert rank_index("UNRANKED") == -1
    assert rank_index(None) == -1


def test_rank_label() -> None:
    assert rank_label("GOLD", "II") == "Gold II"
    assert rank_label("MASTER", "I") == "Master"
    assert rank_label("UNRANKED", None) == "Unranked"
    assert rank_label(None) == "Unranked"


def test_rank_to_lp() -> None:
    assert rank_to_lp("IRON", "IV", 0) == 0
    assert rank_to_lp("GOLD", "II", 50) == 3 * 400 + 2 * 100 + 50
    assert rank_to_lp("GOLD", None, 10) == 1210
    assert rank_to_lp("MASTER", "I", 120) == 2920
    assert rank_to_lp("CHALLENGER", None, None) == 3600
    assert rank_to_lp("UNRANKED", None, 40) == 0


def test_lp_to_rank_label() -> None:
    assert lp_to_rank_label(0) == "Iron IV"
    assert lp_to_rank_label(1450) == "Gold II"
    assert lp_to_rank_label(1550) == "Gold I"
    assert lp_to_rank_label(2799) == "Diamond I"
    assert lp_to_rank_label(3300) == "Grandmaster"


def test_estimate_lp_progression_walks_backwards() -> None:
    history = [{"win": True}, {"win": False}, {"win": True}]
    points = estimate_lp_progression(history, "SILVER", "II", 30)
    current = rank_to_lp("SILVER", "II", 30)
    assert points[-1] == {"lp": current, "index": 0}
    assert [p["lp"] for p in points] == [current - 22 + 18 - 22, current - 22 + 18, current - 22, current]
    assert [p["index"] for p in points] == [3, 2, 1, 0]


def test_estimate_lp_progression_floors_at_zero() -> None:
    points = estimate_lp_progression([{"win": True}, {"win": True}], "IRON", "IV", 10)
    assert [p["lp"] for p in points] == [0, 0, 10]


def test_estimate_lp_progression_without_results() -> None:
    assert estimate_lp_progression([], "GOLD", "I", 0) == []
    assert estimate_lp_progression([{"champion": "Ahri"}], "GOLD", "I", 0) == []
