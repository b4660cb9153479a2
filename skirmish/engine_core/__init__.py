"""
Engine Core - Deterministic match state management and battle resolution.

The engine is the runtime that:
1. Creates a MatchState from a GameConfig
2. Applies player actions via the reducer
3. Resolves battles and fires ability triggers
4. Detects the end of the match
5. Scores the final state
"""

# Highest ship card in the standard fleet
MAX_HAND_VALUE = 15

from .entities import (
    Prize,
    PrizeAbility,
    PrizeAbilityType,
    PrizeClass,
    MultiplierTable,
    SpecialUnit,
    SpecialAbilityType,
)
from .state import MatchState, EndReason
from .errors import (
    EngineError,
    TerminalStateViolation,
    IllegalAction,
    OwnershipViolation,
    PlayerOutOfCardsEarly,
)
from .action import Action, ActionType, ActionPayload, ActionResult
from .reducer import MatchEngine, Reducer, apply_action
from .action_generator import legal_actions, legal_cards_for_player
from .scoring import final_scores, raw_scores

__all__ = [
    "MAX_HAND_VALUE",
    "Prize",
    "PrizeAbility",
    "PrizeAbilityType",
    "PrizeClass",
    "MultiplierTable",
    "SpecialUnit",
    "SpecialAbilityType",
    "MatchState",
    "EndReason",
    "EngineError",
    "TerminalStateViolation",
    "IllegalAction",
    "OwnershipViolation",
    "PlayerOutOfCardsEarly",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "MatchEngine",
    "Reducer",
    "apply_action",
    "legal_actions",
    "legal_cards_for_player",
    "final_scores",
    "raw_scores",
]
