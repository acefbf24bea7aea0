from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Tuple


def _freeze(table: Dict[str, Tuple[str, ...]]) -> Mapping[str, Tuple[str, ...]]:
    return MappingProxyType(table)


# Lane-pairing conventions: champion -> ordered partners that pair well with it.
CHAMPION_SYNERGIES: Mapping[str, Tuple[str, ...]] = _freeze(
    {
        # ADC + support
        "Jinx": ("Lulu", "Thresh", "Nami", "Nautilus", "Janna"),
        "Kaisa": ("Nautilus", "Thresh", "Alistar", "Leona", "Braum"),
        "Ezreal": ("Karma", "Yuumi", "Lux", "Nami", "Braum"),
        "Jhin": ("Xerath", "Zyra", "Morgana", "Thresh", "Nami"),
        "Vayne": ("Lulu", "Nami", "Thresh", "Janna", "Soraka"),
        "MissFortune": ("Leona", "Nautilus", "Amumu", "Zyra", "Senna"),
        "Caitlyn": ("Lux", "Morgana", "Karma", "Zyra", "Xerath"),
        "Draven": ("Leona", "Nautilus", "Thresh", "Blitzcrank", "Alistar"),
        "Lucian": ("Nami", "Braum", "Thresh", "Alistar", "Soraka"),
        "Tristana": ("Alistar", "Leona", "Nautilus", "Thresh", "Blitzcrank"),
        "Ashe": ("Zyra", "Xerath", "Lux", "Leona", "Braum"),
        "Samira": ("Nautilus", "Leona", "Alistar", "Thresh", "Rell"),
        "Xayah": ("Rakan", "Thresh", "Nami", "Braum", "Leona"),
        "Aphelios": ("Thresh", "Lulu", "Nautilus", "Leona", "Braum"),
        "Twitch": ("Lulu", "Yuumi", "Rakan", "Thresh", "Nami"),
        "Kogmaw": ("Lulu", "Janna", "Braum", "Nami", "Soraka"),
        "Sivir": ("Yuumi", "Karma", "Lulu", "Janna", "Thresh"),
        "Varus": ("Thresh", "Xerath", "Zyra", "Leona", "Lux"),
        "Zeri": ("Lulu", "Yuumi", "Nami", "Janna", "Thresh"),
        # Support + ADC
        "Thresh": ("Lucian", "Draven", "Kaisa", "Samira", "Jinx"),
        "Nautilus": ("Kaisa", "Samira", "Draven", "Tristana", "Jinx"),
        "Leona": ("MissFortune", "Samira", "Draven", "Tristana", "Kaisa"),
        "Lulu": ("Kogmaw", "Twitch", "Vayne", "Jinx", "Zeri"),
        "Nami": ("Lucian", "Ezreal", "Jinx", "Vayne", "Jhin"),
        "Blitzcrank": ("Draven", "Samira", "Tristana", "Lucian", "MissFortune"),
        "Alistar": ("Kaisa", "Tristana", "Samira", "Draven", "Lucian"),
        "Braum": ("Lucian", "Kaisa", "Ashe", "Vayne", "Kogmaw"),
        "Rakan": ("Xayah", "Kaisa", "Twitch", "Samira", "MissFortune"),
        "Morgana": ("Caitlyn", "Jhin", "MissFortune", "Varus", "Ashe"),
        "Soraka": ("Vayne", "Kogmaw", "Lucian", "Jinx", "Sivir"),
        "Janna": ("Vayne", "Kogmaw", "Jinx", "Sivir", "Zeri"),
        "Yuumi": ("Ezreal", "Sivir", "Twitch", "Zeri", "Kogmaw"),
        "Senna": ("Tahm Kench", "MissFortune", "Jhin", "Ashe", "Seraphine"),
        # Solo laners with knock-up follow-up
        "Yasuo": ("Malphite", "Diana", "Yone", "Gragas", "Alistar"),
        "Yone": ("Malphite", "Diana", "Yasuo", "Gragas", "Alistar"),
        # Jungle + laner
        "Jarvan": ("Galio", "Orianna", "Yasuo", "MissFortune", "Rumble"),
        "Amumu": ("MissFortune", "Yasuo", "Orianna", "Katarina", "Kennen"),
    }
)

RANK_ORDER: Tuple[str, ...] = (
    "IRON",
    "BRONZE",
    "SILVER",
    "GOLD",
    "PLATINUM",
    "EMERALD",
    "DIAMOND",
    "MASTER",
    "GRANDMASTER",
    "CHALLENGER",
)

# Tiers with four divisions; apex tiers are scored on raw LP instead.
DIVISIONAL_TIERS: Tuple[str, ...] = RANK_ORDER[:7]
APEX_TIER_BASE_LP: Mapping[str, int] = MappingProxyType(
    {"MASTER": 2800, "GRANDMASTER": 3200, "CHALLENGER": 3600}
)
DIVISION_ORDER: Tuple[str, ...] = ("IV", "III", "II", "I")

DEFAULT_RANK_TIER = "SILVER"

RANK_CS_BENCHMARKS: Mapping[str, float] = MappingProxyType(
    {
        "IRON": 3.5,
        "BRONZE": 4.5,
        "SILVER": 5.5,
        "GOLD": 6.5,
        "PLATINUM": 7.25,
        "EMERALD": 7.25,
        "DIAMOND": 7.75,
        "MASTER": 8.0,
        "GRANDMASTER": 8.0,
        "CHALLENGER": 8.5,
    }
)
DEFAULT_CS_BENCHMARK = RANK_CS_BENCHMARKS[DEFAULT_RANK_TIER]

ROLE_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "TOP": "TOP",
        "JUNGLE": "JUNGLE",
        "MIDDLE": "MID",
        "MID": "MID",
        "BOTTOM": "ADC",
        "ADC": "ADC",
        "UTILITY": "SUPPORT",
        "SUPPORT": "SUPPORT",
    }
)
UNKNOWN_ROLE = "UNKNOWN"

ROLE_COMPLEMENTS: Mapping[str, Tuple[str, ...]] = _freeze(
    {
        "ADC": ("SUPPORT",),
        "SUPPORT": ("ADC",),
        "JUNGLE": ("TOP", "MID"),
        "TOP": ("JUNGLE", "MID"),
        "MID": ("JUNGLE", "TOP"),
    }
)

ROLE_DISPLAY_NAMES: Mapping[str, str] = MappingProxyType(
    {"TOP": "Top", "JUNGLE": "Jungle", "MID": "Mid", "ADC": "ADC", "SUPPORT": "Support"}
)

QUEUE_NAMES: Mapping[int, str] = MappingProxyType(
    {
        0: "Custom",
        400: "Normal Draft",
        420: "Ranked Solo",
        430: "Normal Blind",
        440: "Ranked Flex",
        450: "ARAM",
        700: "Clash",
        830: "Co-op Intro",
        840: "Co-op Beginner",
        850: "Co-op Intermediate",
        900: "ARURF",
        1020: "One for All",
        1300: "Nexus Blitz",
        1400: "Ultimate Spellbook",
        1700: "Arena",
        1900: "Pick URF",
    }
)


def normalize_role(position: str | None) -> str:
    return ROLE_ALIASES.get((position or "").upper(), UNKNOWN_ROLE)


def queue_name(queue_id: int | None) -> str:
    return QUEUE_NAMES.get(queue_id, "Other")
