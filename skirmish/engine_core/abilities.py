"""
Abilities - Interpretation of prize and special-unit ability tags.

Each trigger point has its own dispatch table keyed by ability type:
- on-claim: prize abilities that fire when a prize enters a claimed pile
- pre-battle: special abilities that change the pot before comparison
- strength override: special abilities that react to opponents' plays
- tie-break: special abilities that settle a tie

Tags not listed in a table are a no-op at that trigger point. Scoring-time
prize abilities live in scoring.py.
"""

from __future__ import annotations
import logging
from typing import Callable

from .entities import Prize, PrizeAbility, PrizeAbilityType, SpecialAbilityType, SpecialUnit
from .state import MatchState

LOGGER = logging.getLogger(__name__)


# =============================================================================
# On-claim (prize abilities)
# =============================================================================

def _double_next_prize_no_battle(
    state: MatchState,
    player_id: int,
    prize: Prize,
    ability: PrizeAbility,
) -> None:
    """
    Take the next deck prize at double value, skipping pot and battle.

    With nothing left in the deck there is nothing to double.
    """
    next_prize = state.reveal_next_prize()
    if next_prize is None:
        LOGGER.debug("No prize left to double for %s", prize.id)
        return

    doubled = next_prize.with_victory_points(next_prize.victory_points * 2)
    state.claimed_prizes[player_id].append(doubled)
    LOGGER.debug(
        "Player %s doubled %s to %s VP via %s",
        player_id, doubled.id, doubled.victory_points, prize.id,
    )


ON_CLAIM_HANDLERS: dict[PrizeAbilityType, Callable[[MatchState, int, Prize, PrizeAbility], None]] = {
    PrizeAbilityType.DOUBLE_NEXT_PRIZE_NO_BATTLE: _double_next_prize_no_battle,
}


def award_prize(state: MatchState, player_id: int, prize: Prize) -> None:
    """Append a prize to a claimed pile and fire its on-claim abilities in order."""
    state.claimed_prizes[player_id].append(prize)

    for ability in prize.abilities:
        handler = ON_CLAIM_HANDLERS.get(ability.type)
        if handler is None:
            # Scoring-time or inert ability
            continue
        handler(state, player_id, prize, ability)


# =============================================================================
# Pre-battle (special abilities affecting the pot)
# =============================================================================

def _swap_pot(state: MatchState) -> None:
    """Discard the most recently revealed pot prize and reveal a new one."""
    state.prime_pot()

    if not state.prize_pot or state.deck_exhausted:
        return

    discarded = state.prize_pot.pop()
    state.discarded_prizes.append(discarded)
    replacement = state.reveal_next_prize()
    state.prize_pot.append(replacement)
    LOGGER.debug("Pot swap: discarded %s, revealed %s", discarded.id, replacement.id)


PRE_BATTLE_HANDLERS: dict[SpecialAbilityType, Callable[[MatchState], None]] = {
    SpecialAbilityType.SWAP_POT: _swap_pot,
}


def apply_pre_battle_effects(state: MatchState) -> None:
    """
    Apply pot-changing special abilities before strengths are compared.

    Each ability type applies at most once per battle, however many
    players committed it.
    """
    pending = {
        special.ability_type
        for special in state.current_special_plays.values()
        if special is not None
    }
    for ability_type, handler in PRE_BATTLE_HANDLERS.items():
        if ability_type in pending:
            handler(state)


# =============================================================================
# Strength overrides
# =============================================================================

def _overpower_threshold(
    state: MatchState,
    player_id: int,
    special: SpecialUnit,
    base_strengths: dict[int, int],
) -> int:
    """
    Beat the top card: threshold + 1 if an opponent played the threshold,
    otherwise fall back to a low strength.

    Without a threshold param the match's top ship value is used.
    """
    threshold = int(special.params.get("threshold", state.max_hand_value))
    fallback = int(special.params.get("fallback_strength", 1))

    opponent_hit_threshold = any(
        strength == threshold
        for other_id, strength in base_strengths.items()
        if other_id != player_id
    )
    return threshold + 1 if opponent_hit_threshold else fallback


STRENGTH_OVERRIDES: dict[SpecialAbilityType, Callable[[MatchState, int, SpecialUnit, dict[int, int]], int]] = {
    SpecialAbilityType.OVERPOWER_THRESHOLD: _overpower_threshold,
}


def effective_strengths(state: MatchState, base_strengths: dict[int, int]) -> dict[int, int]:
    """
    Apply conditional strength overrides.

    Every override is evaluated against the base strengths of the others,
    never against another player's overridden value.
    """
    effective = dict(base_strengths)

    for player_id, special in state.current_special_plays.items():
        if special is None:
            continue
        override = STRENGTH_OVERRIDES.get(special.ability_type)
        if override is None:
            continue
        effective[player_id] = override(state, player_id, special, base_strengths)

    return effective


# =============================================================================
# Tie-break
# =============================================================================

TIE_BREAKERS = frozenset({SpecialAbilityType.WIN_ALL_TIES})


def break_tie(state: MatchState, tied: list[int]) -> list[int]:
    """
    Settle a tie when exactly one tied player holds a tie-break ability.

    Zero or several holders leave the tie standing.
    """
    holders = [
        player_id
        for player_id in tied
        if state.current_special_plays.get(player_id) is not None
        and state.current_special_plays[player_id].ability_type in TIE_BREAKERS
    ]
    if len(holders) == 1:
        LOGGER.debug("Player %s breaks the tie", holders[0])
        return holders
    return tied
