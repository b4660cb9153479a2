"""
Action Generator - Generates all legal battle actions from a match state.

Used by:
1. UIs to show available plays
2. Drivers validating input before submitting it

Design: Generates Action objects, not just action types.
This ensures all generated actions are fully specified.
"""

from __future__ import annotations

from .state import MatchState
from .action import Action


def legal_cards_for_player(state: MatchState, player_id: int) -> list[int]:
    """
    Cards a player may play right now.

    For now this is just the hand.
    TODO: filter by status effects once a "can't play this card" rule exists.
    """
    if not state.has_player(player_id):
        return []
    return list(state.hands[player_id])


def legal_actions(state: MatchState, player_id: int) -> list[Action]:
    """
    Generate every legal battle action for a player.

    One PLAY_CARD per distinct hand value (duplicates play identically),
    one PLAY_SPECIAL per owned special unit.
    """
    if state.game_over or not state.has_player(player_id):
        return []

    actions = []

    seen: set[int] = set()
    for value in state.hands[player_id]:
        if value in seen:
            continue
        seen.add(value)
        actions.append(Action.play_card(player_id, value))

    for special in state.specials[player_id]:
        actions.append(Action.play_special(player_id, special.id))

    return actions
