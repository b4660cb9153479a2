"""
Stellar Skirmish - The stock game.

Two or more fleets bid ship cards (1-15) for planets worth victory points.
Key mechanics:
- Highest ship wins the planet pot; ties add another planet to the pot
- Mercenaries are one-shot units bought with a ship card
- Corporations multiply the VP of chosen planet classes
- Some planets carry abilities (double the next planet, set bonuses)

This module contains:
- Game configuration with deterministic seeded shuffling
- The default planet deck
- Sample corporations and mercenaries
"""

from .config import GameConfig, ConfigError, DEFAULT_FLEET
from .cards import (
    default_deck,
    CORPORATIONS,
    MERCENARIES,
    get_corporation,
    get_mercenary,
)

__all__ = [
    "GameConfig",
    "ConfigError",
    "DEFAULT_FLEET",
    "default_deck",
    "CORPORATIONS",
    "MERCENARIES",
    "get_corporation",
    "get_mercenary",
]
