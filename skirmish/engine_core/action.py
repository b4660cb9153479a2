"""
Action System - Actions, payloads, and results.

Actions represent:
1. Battle actions (play a hand card, play a special unit)
2. Out-of-band actions (award a special unit after a bid)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .entities import SpecialUnit


class ActionType(Enum):
    """Types of actions in the system."""
    # Battle actions
    PLAY_CARD = "play_card"
    PLAY_SPECIAL = "play_special"

    # Out-of-band actions
    AWARD_SPECIAL = "award_special"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    This is a generic container; validation happens in the engine.
    """
    player_id: int | None = None

    # For PLAY_CARD, and the bid value for AWARD_SPECIAL
    card_value: int | None = None

    # For PLAY_SPECIAL
    special_id: str | None = None

    # For AWARD_SPECIAL
    special: SpecialUnit | None = None


@dataclass
class Action:
    """
    A complete action to be applied to a match state.

    Actions are validated fully before anything is mutated,
    and applied atomically.
    """
    action_type: ActionType
    payload: ActionPayload

    @classmethod
    def play_card(cls, player_id: int, card_value: int) -> Action:
        """Factory for committing a hand card to the current battle."""
        return cls(
            action_type=ActionType.PLAY_CARD,
            payload=ActionPayload(player_id=player_id, card_value=card_value),
        )

    @classmethod
    def play_special(cls, player_id: int, special_id: str) -> Action:
        """Factory for committing an owned special unit to the current battle."""
        return cls(
            action_type=ActionType.PLAY_SPECIAL,
            payload=ActionPayload(player_id=player_id, special_id=special_id),
        )

    @classmethod
    def award_special(cls, player_id: int, special: SpecialUnit, bid_value: int) -> Action:
        """Factory for awarding a special unit to the winner of a bid."""
        return cls(
            action_type=ActionType.AWARD_SPECIAL,
            payload=ActionPayload(player_id=player_id, card_value=bid_value, special=special),
        )


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded, or the terminated state on a fatal anomaly)
    - Errors (if failed)
    - Human-readable changes (for UI updates and logs)
    """
    success: bool
    new_state: Any | None = None  # MatchState
    error: str | None = None
    error_code: str | None = None

    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None, state: Any | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, new_state=state, error=error, error_code=error_code)

    @classmethod
    def success_with_state(cls, state: Any, changes: list[str] | None = None) -> ActionResult:
        """Create a success result with new state."""
        return cls(success=True, new_state=state, state_changes=changes or [])
