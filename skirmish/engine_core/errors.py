"""
Engine errors.

Every error carries a stable error_code so the reducer can turn it into an
ActionResult failure without inspecting messages.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .state import MatchState


class EngineError(Exception):
    """Base class for all engine errors."""
    error_code = "ENGINE_ERROR"


class TerminalStateViolation(EngineError):
    """Raised when a battle action is submitted after the match has ended."""
    error_code = "GAME_OVER"


class IllegalAction(EngineError):
    """Raised for unknown players and for values or units not currently held."""
    error_code = "INVALID_ACTION"


class OwnershipViolation(EngineError):
    """Raised when a special unit is awarded with a bid value the bidder does not hold."""
    error_code = "OWNERSHIP_VIOLATION"


class PlayerOutOfCardsEarly(TerminalStateViolation):
    """
    Defensive anomaly: a player had no cards left while others still did.

    Normal rules make this unreachable. The terminated state is attached so
    callers can persist it.
    """
    error_code = "PLAYER_OUT_OF_CARDS_EARLY"

    def __init__(self, message: str, state: MatchState | None = None):
        self.state = state
        super().__init__(message)
