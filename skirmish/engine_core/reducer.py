"""
Reducer - Applies player actions to a match state.

The engine is the single point of state mutation.

Design principles:
- (state, action) -> new_state: the input state is never touched
- Validates fully before mutating, then mutates a scratch clone
- MatchEngine raises EngineError subclasses; Reducer turns them into
  ActionResult failures
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from .action import Action, ActionResult, ActionType
from .action_generator import legal_cards_for_player
from .battle import check_end_of_game, end_match, resolve_battle
from .entities import SpecialUnit
from .errors import (
    EngineError,
    IllegalAction,
    OwnershipViolation,
    PlayerOutOfCardsEarly,
    TerminalStateViolation,
)
from .state import EndReason, MatchState

if TYPE_CHECKING:
    from ..games.stellar.config import GameConfig

LOGGER = logging.getLogger(__name__)


def _remove_first(values: list[int], value: int) -> list[int]:
    """Copy of values with exactly one occurrence of value removed."""
    remaining = list(values)
    remaining.remove(value)
    return remaining


@dataclass
class MatchEngine:
    """
    Battle engine for a single match.

    Stateless - all state is in MatchState. One engine can serve any
    number of independent matches.
    """

    def start_new_game(self, config: GameConfig) -> MatchState:
        """
        Create the initial state for a match.

        Every player gets an identical copy of the configured hand values.
        The prize order is taken as-is; shuffling happened in the config.
        """
        state = MatchState.create(
            player_count=config.player_count,
            hand_values=list(config.hand_values),
            prizes=list(config.prizes),
        )
        LOGGER.info(
            "New match: %s players, %s prizes, hand %s",
            state.player_count, len(state.prize_deck), config.hand_values,
        )
        return state

    def play_card(self, state: MatchState, player_id: int, card_value: int) -> MatchState:
        """
        Commit a hand card to the current battle.

        When all players have played, the battle is resolved (including
        tie rules) and end-of-game conditions are checked.
        """
        self._require_active(state)
        self._require_player(state, player_id)

        if not state.hands[player_id]:
            # Defensive: a player with no cards trying to play should never happen
            terminated = state.clone()
            end_match(terminated, EndReason.PLAYER_OUT_OF_CARDS_EARLY)
            LOGGER.error("Player %s tried to play with an empty hand", player_id)
            raise PlayerOutOfCardsEarly(
                f"Player {player_id} has no cards left to play.", state=terminated,
            )

        if not state.holds_card(player_id, card_value):
            raise IllegalAction(f"Player {player_id} does not have card {card_value}.")

        new_state = state.clone()
        new_state.prime_pot()

        # Always discarded, win, tie, or lose
        new_state.hands[player_id] = _remove_first(new_state.hands[player_id], card_value)
        self._record_play(new_state, player_id, card_value, special=None)

        return self._resolve_if_ready(new_state)

    def play_special(self, state: MatchState, player_id: int, special_id: str) -> MatchState:
        """
        Commit an owned special unit to the current battle.

        The unit is spent immediately, whatever the outcome. Its base
        strength stands in as the pending play until resolution.
        """
        self._require_active(state)
        self._require_player(state, player_id)

        index = next(
            (i for i, s in enumerate(state.specials[player_id]) if s.id == special_id),
            None,
        )
        if index is None:
            raise IllegalAction(f"Player {player_id} does not own special unit {special_id}.")

        new_state = state.clone()
        new_state.prime_pot()

        special = new_state.specials[player_id].pop(index)
        self._record_play(new_state, player_id, special.base_strength, special=special)

        return self._resolve_if_ready(new_state)

    def award_special(
        self,
        state: MatchState,
        player_id: int,
        special: SpecialUnit,
        bid_value: int,
    ) -> MatchState:
        """
        Award a special unit to the winner of a bid.

        The bid card is discarded from the winner's hand and the unit joins
        their specials. Other hands stay untouched.
        """
        self._require_active(state)
        self._require_player(state, player_id)

        if not state.holds_card(player_id, bid_value):
            raise OwnershipViolation(f"Player {player_id} does not have bid card {bid_value}.")

        new_state = state.clone()
        new_state.hands[player_id] = _remove_first(new_state.hands[player_id], bid_value)
        new_state.specials[player_id].append(special)
        LOGGER.debug("Player %s bid %s for special unit %s", player_id, bid_value, special.id)
        return new_state

    def legal_cards_for_player(self, state: MatchState, player_id: int) -> list[int]:
        """Cards a player may play right now."""
        self._require_player(state, player_id)
        return legal_cards_for_player(state, player_id)

    def is_game_over(self, state: MatchState) -> bool:
        return state.game_over

    # ===== Internals =====

    def _require_active(self, state: MatchState) -> None:
        if state.game_over:
            raise TerminalStateViolation("Game is already over.")

    def _require_player(self, state: MatchState, player_id: int) -> None:
        if not state.has_player(player_id):
            raise IllegalAction(f"Player {player_id} does not exist.")

    def _record_play(
        self,
        state: MatchState,
        player_id: int,
        value: int,
        special: SpecialUnit | None,
    ) -> None:
        if state.current_plays[player_id] is not None:
            LOGGER.warning(
                "Player %s replaced pending play %s with %s",
                player_id, state.current_plays[player_id], value,
            )
        state.current_plays[player_id] = value
        state.current_special_plays[player_id] = special
        LOGGER.debug("Player %s played %s", player_id, special.id if special else value)

    def _resolve_if_ready(self, state: MatchState) -> MatchState:
        if not state.all_players_have_played():
            return state

        resolve_battle(state)

        # A final tie already ended the match; skip the normal checks
        if not state.game_over:
            check_end_of_game(state)

        return state


@dataclass
class Reducer:
    """
    Reducer applies actions to match state.

    Returns ActionResult with new state or error; never raises for
    rule violations.
    """
    engine: MatchEngine = field(default_factory=MatchEngine)

    def apply(self, state: MatchState, action: Action) -> ActionResult:
        """
        Apply an action to the match state.

        Returns ActionResult with new state or error.
        """
        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )

        try:
            return handler(state, action)
        except PlayerOutOfCardsEarly as e:
            return ActionResult.failure(str(e), error_code=e.error_code, state=e.state)
        except EngineError as e:
            return ActionResult.failure(str(e), error_code=e.error_code)

    def _get_handler(self, action_type: ActionType) -> Callable[[MatchState, Action], ActionResult] | None:
        """Get the handler function for an action type."""
        handlers = {
            ActionType.PLAY_CARD: self._handle_play_card,
            ActionType.PLAY_SPECIAL: self._handle_play_special,
            ActionType.AWARD_SPECIAL: self._handle_award_special,
        }
        return handlers.get(action_type)

    def _handle_play_card(self, state: MatchState, action: Action) -> ActionResult:
        player_id = action.payload.player_id
        value = action.payload.card_value
        if value is None:
            raise IllegalAction("No card value given")

        new_state = self.engine.play_card(state, player_id, value)
        changes = [f"Player {player_id} played {value}"]
        changes.extend(self._describe_outcome(state, new_state))
        return ActionResult.success_with_state(new_state, changes=changes)

    def _handle_play_special(self, state: MatchState, action: Action) -> ActionResult:
        player_id = action.payload.player_id
        special_id = action.payload.special_id
        if not special_id:
            raise IllegalAction("No special unit given")

        new_state = self.engine.play_special(state, player_id, special_id)
        changes = [f"Player {player_id} sent special unit {special_id}"]
        changes.extend(self._describe_outcome(state, new_state))
        return ActionResult.success_with_state(new_state, changes=changes)

    def _handle_award_special(self, state: MatchState, action: Action) -> ActionResult:
        player_id = action.payload.player_id
        special = action.payload.special
        bid_value = action.payload.card_value
        if special is None or bid_value is None:
            raise IllegalAction("Awarding a special unit needs a unit and a bid value")

        new_state = self.engine.award_special(state, player_id, special, bid_value)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Player {player_id} won {special.name} with a bid of {bid_value}"],
        )

    def _describe_outcome(self, before: MatchState, after: MatchState) -> list[str]:
        """Human-readable summary of what a resolved battle changed."""
        resolved = all(after.current_plays[p] is None for p in after.player_ids)
        if not resolved:
            return []

        changes = []
        claimed_any = False
        for player_id in after.player_ids:
            gained = after.claimed_prizes[player_id][len(before.claimed_prizes[player_id]):]
            if gained:
                claimed_any = True
                changes.append(
                    f"Player {player_id} claimed {', '.join(p.id for p in gained)}"
                )
        if not claimed_any and after.prize_pot:
            changes.append(f"Tie: pot now holds {len(after.prize_pot)} prizes")
        if after.game_over and not before.game_over:
            changes.append(f"Game over ({after.end_reason.value})")
        return changes


def apply_action(state: MatchState, action: Action) -> ActionResult:
    """Convenience function to apply an action."""
    return Reducer().apply(state, action)
