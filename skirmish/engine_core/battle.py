"""
Battle resolution and end-of-game detection.

A battle resolves once every player has a pending play:
1. Pre-battle special effects (pot swaps)
2. Base strengths from the pending plays
3. Conditional strength overrides
4. Winner set, with tie-break override
5. Pending plays cleared
6. Single winner claims the whole pot, or the tie escalates the pot

These functions mutate the state they are given. The engine only ever
hands them a scratch clone.
"""

from __future__ import annotations
import logging

from .abilities import apply_pre_battle_effects, award_prize, break_tie, effective_strengths
from .state import EndReason, MatchState

LOGGER = logging.getLogger(__name__)


def determine_winners(state: MatchState, strengths: dict[int, int]) -> list[int]:
    """Players at the maximum effective strength, after tie-break overrides."""
    top = max(strengths.values())
    winners = [player_id for player_id, value in strengths.items() if value == top]

    if len(winners) > 1:
        winners = break_tie(state, winners)

    return winners


def resolve_battle(state: MatchState) -> None:
    """
    Resolve the current battle.

    - Single winner: takes every prize in the pot, in pot order.
    - Tie: another prize joins the pot (if available).
    - Tie with no prizes left: the pot is discarded and the match ends.
    """
    apply_pre_battle_effects(state)

    base_strengths = {
        player_id: int(state.current_plays[player_id])
        for player_id in state.player_ids
    }
    strengths = effective_strengths(state, base_strengths)
    winners = determine_winners(state, strengths)

    # Cards were already removed from hands when played
    state.reset_current_plays()

    if len(winners) == 1:
        winner_id = winners[0]
        pot, state.prize_pot = state.prize_pot, []
        LOGGER.debug(
            "Player %s wins battle %s, claims %s",
            winner_id, strengths, [p.id for p in pot],
        )
        for prize in pot:
            award_prize(state, winner_id, prize)
        return

    revealed = state.reveal_next_prize()
    if revealed is not None:
        state.prize_pot.append(revealed)
        LOGGER.debug(
            "Tie between %s, pot grows to %s",
            winners, [p.id for p in state.prize_pot],
        )
        return

    # Tie and nothing left to add
    state.discarded_prizes.extend(state.prize_pot)
    state.prize_pot = []
    end_match(state, EndReason.FINAL_TIE_POT_DISCARDED)


def check_end_of_game(state: MatchState) -> None:
    """
    Terminate the match if its hands say so.

    The early-exhaustion branch guards against an engine bug; normal rules
    never reach it.
    """
    if state.any_player_out_of_cards_early():
        LOGGER.error(
            "Player ran out of cards early: %s",
            {p: len(h) for p, h in state.hands.items()},
        )
        end_match(state, EndReason.PLAYER_OUT_OF_CARDS_EARLY)
        return

    if state.all_hands_empty():
        if state.unclaimed_prizes():
            end_match(state, EndReason.SHIPS_EXHAUSTED_PRIZES_REMAINING)
        else:
            end_match(state, EndReason.NORMAL)


def end_match(state: MatchState, reason: EndReason) -> None:
    state.game_over = True
    state.end_reason = reason
    LOGGER.info("Match over: %s", reason.value)
