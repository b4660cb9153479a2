"""
Stellar Skirmish Config - Validated input for a new match.

This module handles:
- Player count validation
- Default deck and fleet
- Shuffling with seed for determinism

The engine itself never shuffles; it plays the prize order it is given.
"""

from __future__ import annotations
import random
from dataclasses import dataclass, field

from ...engine_core.entities import Prize
from .cards import default_deck

DEFAULT_FLEET = list(range(1, 16))


class ConfigError(ValueError):
    """Raised when a game configuration is invalid."""


@dataclass
class GameConfig:
    """
    Configuration for one match.

    Args:
        player_count: Number of players (at least 2)
        prizes: Prize deck in play order (defaults to the stock deck)
        hand_values: Ship values every player starts with (defaults to 1-15)
        seed: Seed for deterministic shuffling; None keeps the given order
    """
    player_count: int = 2
    prizes: list[Prize] = field(default_factory=list)
    hand_values: list[int] = field(default_factory=list)
    seed: int | None = None

    def __post_init__(self):
        if self.player_count < 2:
            raise ConfigError("At least two players are required.")

        if not self.prizes:
            self.prizes = default_deck()
        else:
            self.prizes = list(self.prizes)

        if not self.hand_values:
            self.hand_values = list(DEFAULT_FLEET)
        else:
            self.hand_values = list(self.hand_values)

        if self.seed is not None:
            self.prizes = shuffle_with_seed(self.prizes, self.seed)

    @classmethod
    def from_prizes(
        cls,
        prizes: list[Prize],
        player_count: int = 2,
        seed: int | None = None,
        hand_values: list[int] | None = None,
    ) -> GameConfig:
        """Factory for "use THESE prizes as the deck"."""
        if not prizes:
            raise ConfigError("GameConfig.from_prizes requires a non-empty prize list.")

        return cls(
            player_count=player_count,
            prizes=prizes,
            hand_values=hand_values or list(DEFAULT_FLEET),
            seed=seed,
        )

    @classmethod
    def standard_two_player(cls, seed: int | None = None) -> GameConfig:
        return cls(
            player_count=2,
            prizes=default_deck(),
            hand_values=list(DEFAULT_FLEET),
            seed=seed,
        )


def shuffle_with_seed(prizes: list[Prize], seed: int) -> list[Prize]:
    """Return a shuffled copy; the same seed always gives the same order."""
    rng = random.Random(seed)
    shuffled = list(prizes)
    rng.shuffle(shuffled)
    return shuffled
