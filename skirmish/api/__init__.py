"""
API module - Persistence boundary for the engine.

Provides:
- Pydantic snapshot records for matches, prizes, corporations and mercenaries
- Helpers to flatten a MatchState to JSON and restore it
"""

from .schemas import (
    AbilityRecord,
    PrizeRecord,
    MultiplierTableRecord,
    SpecialUnitRecord,
    MatchSnapshot,
    snapshot_state,
    restore_state,
)

__all__ = [
    "AbilityRecord",
    "PrizeRecord",
    "MultiplierTableRecord",
    "SpecialUnitRecord",
    "MatchSnapshot",
    "snapshot_state",
    "restore_state",
]
