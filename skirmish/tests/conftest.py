"""
Pytest fixtures for Skirmish tests.
"""

import pytest

from ..engine_core.entities import (
    Prize,
    PrizeAbility,
    PrizeAbilityType,
    PrizeClass,
    SpecialAbilityType,
    SpecialUnit,
)
from ..engine_core.reducer import MatchEngine
from ..engine_core.state import MatchState
from ..games.stellar.config import GameConfig


@pytest.fixture
def engine() -> MatchEngine:
    """A stateless engine."""
    return MatchEngine()


@pytest.fixture
def three_prizes() -> list[Prize]:
    """Deterministic prizes: P1=1 VP, P2=2 VP, P3=3 VP."""
    return [
        Prize(id="P1", victory_points=1, name="Test Planet 1"),
        Prize(id="P2", victory_points=2, name="Test Planet 2"),
        Prize(id="P3", victory_points=3, name="Test Planet 3"),
    ]


@pytest.fixture
def basic_state(engine: MatchEngine, three_prizes: list[Prize]) -> MatchState:
    """Two players, hands 1-15, three plain prizes."""
    config = GameConfig(
        player_count=2,
        prizes=three_prizes,
        hand_values=list(range(1, 16)),
    )
    return engine.start_new_game(config)


@pytest.fixture
def double_next_prizes() -> list[Prize]:
    """P1 doubles the next prize when claimed; P2 and P3 are classed."""
    return [
        Prize(
            id="P1",
            victory_points=1,
            name="Trigger World",
            prize_class=PrizeClass.TRADE_POST,
            abilities=(PrizeAbility(PrizeAbilityType.DOUBLE_NEXT_PRIZE_NO_BATTLE),),
        ),
        Prize(id="P2", victory_points=2, name="Rich Mining World", prize_class=PrizeClass.MINING),
        Prize(id="P3", victory_points=3, name="Research Hub", prize_class=PrizeClass.RESEARCH),
    ]


@pytest.fixture
def overpower_merc() -> SpecialUnit:
    return SpecialUnit(
        id="M_OF",
        name="Overpower Ace",
        base_strength=7,
        ability_type=SpecialAbilityType.OVERPOWER_THRESHOLD,
        params={"threshold": 15, "fallback_strength": 1},
    )


@pytest.fixture
def tie_merc() -> SpecialUnit:
    return SpecialUnit(
        id="M_TIE",
        name="Tie Breaker",
        base_strength=5,
        ability_type=SpecialAbilityType.WIN_ALL_TIES,
    )


@pytest.fixture
def swap_merc() -> SpecialUnit:
    return SpecialUnit(
        id="M_SWAP",
        name="Planet Switcher",
        base_strength=10,
        ability_type=SpecialAbilityType.SWAP_POT,
    )
