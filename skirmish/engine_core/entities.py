"""
Entities - Immutable value definitions for prizes, corporations and mercenaries.

These are definitions, not runtime zones:
- Prize: a claimable unit of victory points (a "planet")
- PrizeAbility: declarative ability descriptor attached to a prize
- MultiplierTable: per-player scoring modifiers by class (a "corporation")
- SpecialUnit: one-shot battle asset with a bespoke ability (a "mercenary")

Abilities are declarative. All interpretation lives in the battle and
scoring engines.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class PrizeClass(Enum):
    """Category tags for prizes."""
    # Base game
    TRADE_POST = "trade_post"
    RESEARCH = "research"
    MINING = "mining"

    # Expansion
    TRIBAL_WORLD = "tribal_world"
    INDUSTRIAL_WORLD = "industrial_world"
    SPACE_FARING_WORLD = "space_faring_world"

    # Promos
    STATION = "station"


class PrizeAbilityType(Enum):
    """Ability tags that can appear on a prize."""
    # On-claim: take the next deck prize at double value, no battle for it
    DOUBLE_NEXT_PRIZE_NO_BATTLE = "double_next_prize_no_battle"

    # Scoring-time: flat VP by count of claimed prizes of one class
    CLASS_SET_BONUS = "class_set_bonus"

    # Owner picks the class of this prize (no engine effect yet)
    CHOOSE_CLASS = "choose_class"

    # Scoring-time: liability worlds, lose a flat amount
    LOSE_VICTORY_POINTS = "lose_victory_points"


class SpecialAbilityType(Enum):
    """Ability tags for special units (mercenaries)."""
    OVERPOWER_THRESHOLD = "overpower_threshold"
    REVEAL_OPPONENT_CORP = "reveal_opponent_corp"
    WIN_ALL_TIES = "win_all_ties"
    RETURN_ONCE = "return_once"
    SWAP_POT = "swap_pot"
    PEEK_NEXT = "peek_next"


@dataclass(frozen=True)
class PrizeAbility:
    """
    Ability descriptor: a type tag plus opaque, per-type parameters.

    Examples:
        PrizeAbility(PrizeAbilityType.DOUBLE_NEXT_PRIZE_NO_BATTLE)
        PrizeAbility(
            PrizeAbilityType.CLASS_SET_BONUS,
            {"class": "mining", "thresholds": {2: 1, 3: 3, 4: 5}},
        )
    """
    type: PrizeAbilityType
    params: dict[str, Any] = field(default_factory=dict, compare=True, hash=False)


@dataclass(frozen=True)
class Prize:
    """
    A claimable prize.

    Victory points are signed: expansion rules allow negative worlds.
    Prizes are never edited in place; use with_victory_points() to derive
    an adjusted copy.
    """
    id: str
    victory_points: int
    name: str | None = None
    description: str | None = None
    prize_class: PrizeClass | None = None
    abilities: tuple[PrizeAbility, ...] = ()

    def __post_init__(self):
        if not self.id:
            raise ValueError("Prize id is required")
        # Accept any iterable of abilities, store as a tuple
        if not isinstance(self.abilities, tuple):
            object.__setattr__(self, "abilities", tuple(self.abilities))

    def with_victory_points(self, victory_points: int) -> Prize:
        """Return a copy with different victory points, all else unchanged."""
        return replace(self, victory_points=victory_points)


@dataclass(frozen=True)
class MultiplierTable:
    """
    Corporation: scoring multipliers keyed by class value.

    Multipliers can be:
    -  2.0 (double)
    -  1.0 (no change)
    - -1.0 (negative)
    -  1.5 (expansion corps)
    """
    id: str
    name: str
    class_multipliers: dict[str, float] = field(default_factory=dict, hash=False)

    def multiplier_for(self, prize_class: PrizeClass | None) -> float:
        """Multiplier for a class. Unclassed or unlisted classes count 1.0."""
        if prize_class is None:
            return 1.0
        return float(self.class_multipliers.get(prize_class.value, 1.0))


@dataclass(frozen=True)
class SpecialUnit:
    """
    Mercenary: a one-shot unit played instead of a hand card.

    base_strength is the value it fights with unless its ability
    overrides it during resolution.
    """
    id: str
    name: str
    base_strength: int
    ability_type: SpecialAbilityType
    params: dict[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        if not self.id:
            raise ValueError("Special unit id is required")
