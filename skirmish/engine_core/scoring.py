"""
Scoring - Final scores for a match.

Pure functions: nothing here mutates the state.

- Per-class VP is multiplied by the player's corporation
- Unclassed VP is added without multipliers
- Set-bonus VP is computed separately and added at the end (never multiplied)
- Liability VP is subtracted at the end (never multiplied)
"""

from __future__ import annotations
import logging
from typing import Any

from .entities import Prize, PrizeAbilityType, PrizeClass
from .state import MatchState

LOGGER = logging.getLogger(__name__)


def raw_scores(state: MatchState) -> dict[int, int]:
    """Plain VP sums, no multipliers or bonuses."""
    return {
        player_id: sum(p.victory_points for p in state.claimed_prizes.get(player_id, []))
        for player_id in state.player_ids
    }


def base_vp_by_class_for_player(state: MatchState, player_id: int) -> dict[PrizeClass | None, float]:
    """Base VP per class, ignoring corporations and set bonuses. None is the unclassed bucket."""
    totals: dict[PrizeClass | None, float] = {}
    for prize in state.claimed_prizes.get(player_id, []):
        totals[prize.prize_class] = totals.get(prize.prize_class, 0.0) + prize.victory_points
    return totals


def _multiplier_for(state: MatchState, player_id: int, prize_class: PrizeClass | None) -> float:
    """Single place where an absent corporation or class resolves to 1.0."""
    table = state.multiplier_tables.get(player_id)
    if table is None:
        return 1.0
    return table.multiplier_for(prize_class)


def _threshold_bonus(thresholds: dict[Any, Any], count: int) -> float:
    """
    Bonus of the highest threshold not exceeding count, or 0.

    A table with any non-numeric key or value pays nothing.
    """
    try:
        table = sorted((int(t), float(v)) for t, v in thresholds.items())
    except (TypeError, ValueError):
        LOGGER.warning("Ignoring malformed set-bonus thresholds %r", thresholds)
        return 0.0

    bonus = 0.0
    for threshold, value in table:
        if threshold <= count:
            bonus = value
    return bonus


def _count_class(prizes: list[Prize], class_value: str) -> int:
    return sum(
        1 for p in prizes
        if p.prize_class is not None and p.prize_class.value == class_value
    )


def set_bonus_vp_for_player(state: MatchState, player_id: int) -> float:
    """
    Flat VP from CLASS_SET_BONUS abilities, NOT multiplied by corporations.

    Every ability counts on its own; two bonuses for the same class both pay.
    """
    prizes = state.claimed_prizes.get(player_id, [])
    total = 0.0

    for prize in prizes:
        for ability in prize.abilities:
            if ability.type != PrizeAbilityType.CLASS_SET_BONUS:
                continue

            target = ability.params.get("class")
            thresholds = ability.params.get("thresholds") or {}
            if isinstance(target, PrizeClass):
                target = target.value
            if not isinstance(target, str) or not isinstance(thresholds, dict):
                continue

            total += _threshold_bonus(thresholds, _count_class(prizes, target))

    return total


def liability_vp_for_player(state: MatchState, player_id: int) -> float:
    """VP lost to LOSE_VICTORY_POINTS abilities on claimed prizes."""
    total = 0.0
    for prize in state.claimed_prizes.get(player_id, []):
        for ability in prize.abilities:
            if ability.type == PrizeAbilityType.LOSE_VICTORY_POINTS:
                total += float(ability.params.get("amount", 0))
    return total


def final_score_for_player(state: MatchState, player_id: int) -> float:
    total = 0.0
    for prize_class, vp in base_vp_by_class_for_player(state, player_id).items():
        if prize_class is None:
            # Classless VP is never multiplied
            total += vp
        else:
            total += vp * _multiplier_for(state, player_id, prize_class)

    total += set_bonus_vp_for_player(state, player_id)
    total -= liability_vp_for_player(state, player_id)
    return total


def final_scores(state: MatchState) -> dict[int, float]:
    """Final scores with corporation multipliers and set bonuses applied."""
    return {player_id: final_score_for_player(state, player_id) for player_id in state.player_ids}
