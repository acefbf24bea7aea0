from __future__ import annotations

from typing import Any, Dict


def render_text(report: Dict[str, Any]) -> str:
    meta = report.get("meta", {})
    rank = report.get("rank", {})
    analytics = report.get("analytics", report)
    overview = analytics.get("overview", {})
    trends = analytics.get("trends", {})
    playstyle = analytics.get("playstyle", {})

    lines = []
    lines.append("PLAYER ANALYTICS")
    lines.append(f"Player: {meta.get('puuid')} | Rank: {rank.get('label', 'Unranked')}")
    lines.append(
        f"Level: {analytics.get('summoner_level', 0)} | Games analyzed: {overview.get('total_games', 0)}"
    )
    lines.append("")

    lines.append("Overview")
    lines.append(
        f"Winrate: {overview.get('winrate', 0)}% | KDA: {overview.get('avg_kda', 0)} "
        f"({overview.get('avg_kills', 0)}/{overview.get('avg_deaths', 0)}/{overview.get('avg_assists', 0)})"
    )
    lines.append(
        f"CS/min: {overview.get('avg_cs_per_min', 0)} | Vision/min: {overview.get('avg_vision_per_min', 0)} | "
        f"KP: {overview.get('avg_kill_participation', 0)}% | Damage share: {overview.get('avg_damage_share', 0)}%"
    )
    lines.append(
        f"Trends: KDA {trends.get('kda_trend', 'stable')} | CS {trends.get('cs_trend', 'stable')} "
        f"({trends.get('previous_cs', 0)} -> {trends.get('recent_cs', 0)})"
    )
    lines.append("")

    tags = ", ".join(playstyle.get("tags") or []) or "none"
    lines.append(f"Playstyle: {playstyle.get('type', 'unknown')} (tags: {tags})")
    lines.append("")

    lines.append("Champions")
    for name, champ in list((analytics.get("by_champion") or {}).items())[:5]:
        lines.append(
            f"- {name}: {champ.get('games', 0)} games | winrate {champ.get('winrate', 0)}% | "
            f"KDA {champ.get('avg_kda', 0)} | {champ.get('main_role')}"
        )
    lines.append("")

    lines.append("Strengths")
    for s in analytics.get("strengths") or []:
        lines.append(f"- {s.get('label')}: {s.get('value')} (benchmark {s.get('benchmark')})")
    lines.append("Weaknesses")
    for w in analytics.get("weaknesses") or []:
        lines.append(f"- {w.get('label')}: {w.get('value')} (benchmark {w.get('benchmark')})")

    synergies = analytics.get("synergies") or []
    if synergies:
        lines.append("")
        lines.append("Duo partners: " + ", ".join(s.get("champion") for s in synergies[:5]))

    return "\n".join(lines)


def render_compatibility_text(result: Dict[str, Any]) -> str:
    lines = [f"COMPATIBILITY: {result.get('score', 0)}/100"]
    for d in result.get("details") or []:
        suffix = f" ({d['description']})" if d.get("description") else ""
        lines.append(f"+{d.get('points', 0)} {d.get('label')}{suffix}")
    breakdown = result.get("breakdown") or {}
    if breakdown:
        lines.append("Breakdown: " + ", ".join(f"{k}={v}" for k, v in breakdown.items()))
    return "\n".join(lines)
