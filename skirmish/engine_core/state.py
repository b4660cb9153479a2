"""
Match State - The mutable snapshot of one in-progress match.

Design principles:
- Immutable-friendly: the engine works on clone() and returns the copy
- Serializable: see skirmish.api.schemas for the snapshot format
- Per-player containers are keyed by the fixed domain 1..player_count
"""

from __future__ import annotations
from dataclasses import dataclass, field
from copy import deepcopy
from enum import Enum
from typing import Any

from . import MAX_HAND_VALUE
from .entities import Prize, MultiplierTable, SpecialUnit


class EndReason(Enum):
    """Why a match ended."""
    # All ships used, nothing left unclaimed
    NORMAL = "normal"

    # Tie with no prizes left to add; the pot was discarded
    FINAL_TIE_POT_DISCARDED = "final_tie_pot_discarded"

    # All ships used but some prizes were never claimed
    SHIPS_EXHAUSTED_PRIZES_REMAINING = "ships_exhausted_prizes_remaining"

    # Defensive: one player ran out of cards before the others
    PLAYER_OUT_OF_CARDS_EARLY = "player_out_of_cards_early"


@dataclass
class MatchState:
    """
    Complete state of one match at a point in time.

    All state changes go through the engine (see reducer.py).
    """
    player_count: int

    # player_id -> hand values still held
    hands: dict[int, list[int]] = field(default_factory=dict)

    # Full prize deck and the index of the next prize to reveal
    prize_deck: list[Prize] = field(default_factory=list)
    current_prize_index: int = 0

    # Prizes currently at stake, in reveal order
    prize_pot: list[Prize] = field(default_factory=list)

    # player_id -> claimed prizes, in claim order
    claimed_prizes: dict[int, list[Prize]] = field(default_factory=dict)

    # player_id -> value committed to the current battle
    current_plays: dict[int, int | None] = field(default_factory=dict)
    # player_id -> special unit committed to the current battle
    current_special_plays: dict[int, SpecialUnit | None] = field(default_factory=dict)

    game_over: bool = False
    end_reason: EndReason | None = None

    multiplier_tables: dict[int, MultiplierTable | None] = field(default_factory=dict)
    specials: dict[int, list[SpecialUnit]] = field(default_factory=dict)

    # Prizes removed from play without being claimed (pot swaps, final tie)
    discarded_prizes: list[Prize] = field(default_factory=list)

    # Highest ship value dealt at the start of the match
    max_hand_value: int = MAX_HAND_VALUE

    @classmethod
    def create(cls, player_count: int, hand_values: list[int], prizes: list[Prize]) -> MatchState:
        """Factory for a fresh match: identical hands, nothing revealed."""
        players = range(1, player_count + 1)
        return cls(
            player_count=player_count,
            hands={p: list(hand_values) for p in players},
            prize_deck=list(prizes),
            current_prize_index=0,
            prize_pot=[],
            claimed_prizes={p: [] for p in players},
            current_plays={p: None for p in players},
            current_special_plays={p: None for p in players},
            multiplier_tables={p: None for p in players},
            specials={p: [] for p in players},
            max_hand_value=max(hand_values, default=MAX_HAND_VALUE),
        )

    @property
    def player_ids(self) -> list[int]:
        return list(range(1, self.player_count + 1))

    def has_player(self, player_id: Any) -> bool:
        """True if player_id belongs to the key domain 1..player_count."""
        return (
            isinstance(player_id, int)
            and not isinstance(player_id, bool)
            and 1 <= player_id <= self.player_count
        )

    @property
    def deck_exhausted(self) -> bool:
        return self.current_prize_index >= len(self.prize_deck)

    @property
    def remaining_deck(self) -> list[Prize]:
        """Prizes not yet revealed, in deck order."""
        return self.prize_deck[self.current_prize_index:]

    def reveal_next_prize(self) -> Prize | None:
        """Advance the cursor and return the prize under it, or None if exhausted."""
        if self.deck_exhausted:
            return None
        prize = self.prize_deck[self.current_prize_index]
        self.current_prize_index += 1
        return prize

    def prime_pot(self) -> Prize | None:
        """
        Ensure there is a prize at stake before a battle.

        Reveals exactly one prize when the pot is empty. An exhausted deck
        leaves the pot empty, which is not an error.
        """
        if self.prize_pot:
            return None
        prize = self.reveal_next_prize()
        if prize is not None:
            self.prize_pot.append(prize)
        return prize

    def all_players_have_played(self) -> bool:
        return all(self.current_plays.get(p) is not None for p in self.player_ids)

    def reset_current_plays(self) -> None:
        for p in self.player_ids:
            self.current_plays[p] = None
            self.current_special_plays[p] = None

    def holds_card(self, player_id: int, value: Any) -> bool:
        """True if the player holds a ship of exactly this integer value."""
        if not isinstance(value, int) or isinstance(value, bool):
            return False
        return value in self.hands[player_id]

    def all_hands_empty(self) -> bool:
        return all(not self.hands.get(p) for p in self.player_ids)

    def any_player_out_of_cards_early(self) -> bool:
        """
        Defensive helper.

        True if at least one player has an empty hand while at least one
        other player still has cards.
        """
        empty = sum(1 for p in self.player_ids if not self.hands.get(p))
        return 0 < empty < self.player_count

    def unclaimed_prizes(self) -> list[Prize]:
        """
        Deck prizes that no player has claimed.

        Covers the unrevealed remainder, the pot, and anything discarded.
        Decided by where a prize sits, not by its id: ids need not be unique.
        """
        return self.remaining_deck + self.prize_pot + self.discarded_prizes

    def pot_total_victory_points(self) -> int:
        return sum(p.victory_points for p in self.prize_pot)

    def pot_summary(self) -> dict[str, Any]:
        """Pot details for UI/API: prizes, total VP and count."""
        return {
            "prizes": [
                {
                    "id": p.id,
                    "name": p.name,
                    "victory_points": p.victory_points,
                    "class": p.prize_class.value if p.prize_class else None,
                }
                for p in self.prize_pot
            ],
            "total_vp": self.pot_total_victory_points(),
            "count": len(self.prize_pot),
        }

    def clone(self) -> MatchState:
        """Deep copy the state."""
        return deepcopy(self)
