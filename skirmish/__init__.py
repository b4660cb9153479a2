"""
Skirmish - Territory-bidding card game engine

A deterministic, turn-by-turn engine for a simultaneous-bid card game.
Players commit ship cards or mercenaries each battle; the strongest play
claims the prize pot, ties grow it. The engine provides:
- Match state management
- Battle resolution with ability triggers
- End-of-game detection
- Final scoring with corporation multipliers and set bonuses
"""

__version__ = "0.1.0"
