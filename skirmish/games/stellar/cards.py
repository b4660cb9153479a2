"""
Stellar Skirmish Cards - Planet, corporation and mercenary definitions.

The default deck is a simple starter set you can replace:
15 planets, five each worth 1, 2 and 3 VP, classes cycling through the
three base-game colonies.
"""

from __future__ import annotations

from ...engine_core.entities import (
    MultiplierTable,
    Prize,
    PrizeClass,
    SpecialAbilityType,
    SpecialUnit,
)

BASE_CLASSES = [PrizeClass.TRADE_POST, PrizeClass.RESEARCH, PrizeClass.MINING]

# victory points -> number of planets
DEFAULT_VP_MAP = {
    1: 5,
    2: 5,
    3: 5,
}


def default_deck() -> list[Prize]:
    """Build the default planet deck, in a fixed order."""
    planets = []
    planet_id = 1

    for vp, count in DEFAULT_VP_MAP.items():
        for _ in range(count):
            planets.append(Prize(
                id=f"P{planet_id}",
                victory_points=vp,
                name=f"Planet {planet_id}",
                prize_class=BASE_CLASSES[(planet_id - 1) % len(BASE_CLASSES)],
            ))
            planet_id += 1

    return planets


# ============================================================================
# Corporations
# ============================================================================

DEEP_CORE_VENTURES = MultiplierTable(
    id="CORP_MINING",
    name="Deep Core Ventures",
    class_multipliers={PrizeClass.MINING.value: 2.0},
)

FREE_TRADERS_GUILD = MultiplierTable(
    id="CORP_TRADE",
    name="Free Traders Guild",
    class_multipliers={PrizeClass.TRADE_POST.value: 2.0, PrizeClass.RESEARCH.value: 0.5},
)

ACADEMY_OF_STARS = MultiplierTable(
    id="CORP_RESEARCH",
    name="Academy of Stars",
    class_multipliers={PrizeClass.RESEARCH.value: 1.5},
)

CORPORATIONS: list[MultiplierTable] = [
    DEEP_CORE_VENTURES,
    FREE_TRADERS_GUILD,
    ACADEMY_OF_STARS,
]


# ============================================================================
# Mercenaries
# ============================================================================

OVERPOWER_ACE = SpecialUnit(
    id="MERC_OVERPOWER",
    name="Overpower Ace",
    base_strength=7,
    ability_type=SpecialAbilityType.OVERPOWER_THRESHOLD,
    params={"threshold": 15, "fallback_strength": 1},
)

TIE_BREAKER = SpecialUnit(
    id="MERC_TIE",
    name="Tie Breaker",
    base_strength=5,
    ability_type=SpecialAbilityType.WIN_ALL_TIES,
)

PLANET_SWITCHER = SpecialUnit(
    id="MERC_SWAP",
    name="Planet Switcher",
    base_strength=10,
    ability_type=SpecialAbilityType.SWAP_POT,
)

MERCENARIES: list[SpecialUnit] = [
    OVERPOWER_ACE,
    TIE_BREAKER,
    PLANET_SWITCHER,
]


def get_corporation(corporation_id: str) -> MultiplierTable | None:
    """Look up a corporation by ID."""
    for corporation in CORPORATIONS:
        if corporation.id == corporation_id:
            return corporation
    return None


def get_mercenary(mercenary_id: str) -> SpecialUnit | None:
    """Look up a mercenary by ID."""
    for mercenary in MERCENARIES:
        if mercenary.id == mercenary_id:
            return mercenary
    return None
