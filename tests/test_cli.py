import json

from analytics.cli import main
from analytics.riot_ingest import PlayerDataBundle, bundle_to_json


def test_analyze_from_raw_bundle(tmp_path, match_sample) -> None:
    bundle = PlayerDataBundle(
        puuid="puuid-me",
        summoner={"summonerLevel": 187},
        mastery=[{"championId": 103, "championLevel": 7, "championPoints": 250000}],
        match_ids=["EUW1_7000000001"],
        matches=[match_sample],
        rank={"tier": "GOLD", "rank": "II", "leaguePoints": 42},
        champion_names={103: "Ahri"},
    )
    raw_path = tmp_path / "raw.json"
    raw_path.write_text(json.dumps(bundle_to_json(bundle)), encoding="utf-8")
    out_path = tmp_path / "report.json"

    main(["analyze", "--from-raw", str(raw_path), "--output", str(out_path)])

    report = json.loads(out_path.read_text(encoding="utf-8"))
    assert report["rank"]["label"] == "Gold II"
    assert report["analytics"]["overview"]["total_games"] == 1
    assert report["analytics"]["top_champions"][0]["champion_name"] == "Ahri"


def test_analyze_text_output(tmp_path, match_sample, capsys) -> None:
    bundle = PlayerDataBundle(
        puuid="puuid-me", summoner={}, mastery=[], match_ids=[], matches=[match_sample]
    )
    raw_path = tmp_path / "raw.json"
    raw_path.write_text(json.dumps(bundle_to_json(bundle)), encoding="utf-8")

    main(["analyze", "--from-raw", str(raw_path), "--output-format", "text"])

    out = capsys.readouterr().out
    assert out.startswith("PLAYER ANALYTICS")
    assert "Rank: Unranked" in out
    assert "- Ahri: 1 games" in out


def test_compat_command(tmp_path, capsys) -> None:
    me = tmp_path / "me.json"
    other = tmp_path / "other.json"
    me.write_text(json.dumps({"rank_tier": "GOLD", "roles": ["TOP"], "schedule": ["mon"]}), encoding="utf-8")
    other.write_text(json.dumps({"rank_tier": "SILVER", "roles": ["JUNGLE"], "schedule": ["mon"]}), encoding="utf-8")

    main(["compat", str(me), str(other), "--output-format", "text"])

    out = capsys.readouterr().out
    assert out.startswith("COMPATIBILITY: ")
    assert "+12 Close rank" in out
    assert "+5 1 shared slot" in out
