"""
Tests for battle resolution and end-of-game detection.

Tests:
- Starting a match
- Single winner claims the pot
- Ties escalate the pot, final tie discards it
- End reasons
- Rejected actions never mutate the input state
"""

import pytest

from ..engine_core.entities import Prize
from ..engine_core.errors import IllegalAction, PlayerOutOfCardsEarly, TerminalStateViolation
from ..engine_core.reducer import MatchEngine
from ..engine_core.scoring import final_scores
from ..engine_core.state import EndReason
from ..games.stellar.config import GameConfig


def _prizes(*vps):
    return [Prize(id=f"P{i}", victory_points=vp) for i, vp in enumerate(vps, start=1)]


def _ids(prizes):
    return [p.id for p in prizes]


class TestStartNewGame:
    """Tests for the initial match state."""

    def test_initial_state(self, basic_state):
        """Hands are full, nothing revealed, nothing claimed."""
        state = basic_state

        assert state.player_count == 2
        assert state.hands[1] == list(range(1, 16))
        assert state.hands[2] == list(range(1, 16))
        assert state.current_prize_index == 0
        assert state.prize_pot == []
        assert state.claimed_prizes == {1: [], 2: []}
        assert state.current_plays == {1: None, 2: None}
        assert state.game_over is False
        assert state.end_reason is None
        assert state.multiplier_tables == {1: None, 2: None}
        assert state.specials == {1: [], 2: []}

    def test_hands_are_independent(self, basic_state):
        """Each player gets their own copy of the hand values."""
        assert basic_state.hands[1] is not basic_state.hands[2]

    def test_three_players(self, engine, three_prizes):
        """Player ids run 1..N."""
        state = engine.start_new_game(GameConfig(player_count=3, prizes=three_prizes))

        assert state.player_ids == [1, 2, 3]
        assert set(state.hands) == {1, 2, 3}


class TestSimpleBattle:
    """Tests for a battle with a single winner."""

    def test_first_play_reveals_a_prize(self, engine, basic_state):
        """The first play of a battle primes an empty pot."""
        state = engine.play_card(basic_state, 1, 5)

        assert _ids(state.prize_pot) == ["P1"]
        assert state.current_prize_index == 1
        assert state.current_plays[1] == 5
        assert state.current_plays[2] is None
        assert 5 not in state.hands[1]

    def test_higher_card_wins_the_pot(self, engine, basic_state):
        """Player 1 plays 5, player 2 plays 3: player 1 claims P1."""
        state = engine.play_card(basic_state, 1, 5)
        state = engine.play_card(state, 2, 3)

        assert _ids(state.claimed_prizes[1]) == ["P1"]
        assert state.claimed_prizes[2] == []
        assert state.prize_pot == []
        assert len(state.hands[1]) == 14
        assert len(state.hands[2]) == 14
        assert 5 not in state.hands[1]
        assert 3 not in state.hands[2]
        assert state.current_plays == {1: None, 2: None}
        assert state.game_over is False

    def test_input_state_is_not_mutated(self, engine, basic_state):
        """play_card returns a new state and leaves its input alone."""
        engine.play_card(basic_state, 1, 5)

        assert basic_state.hands[1] == list(range(1, 16))
        assert basic_state.prize_pot == []
        assert basic_state.current_prize_index == 0
        assert basic_state.current_plays[1] is None

    def test_play_order_does_not_matter(self, engine, basic_state):
        """Player 2 may commit first."""
        state = engine.play_card(basic_state, 2, 9)
        state = engine.play_card(state, 1, 4)

        assert _ids(state.claimed_prizes[2]) == ["P1"]

    def test_duplicate_values_remove_one_copy(self, engine):
        """Only the first matching card leaves the hand."""
        config = GameConfig(prizes=_prizes(1, 1), hand_values=[3, 3, 5])
        state = engine.start_new_game(config)

        state = engine.play_card(state, 1, 3)

        assert state.hands[1] == [3, 5]

    def test_second_play_replaces_pending_play(self, engine, basic_state):
        """A player committing twice keeps only the latest value."""
        state = engine.play_card(basic_state, 1, 5)
        state = engine.play_card(state, 1, 7)
        state = engine.play_card(state, 2, 6)

        assert _ids(state.claimed_prizes[1]) == ["P1"]
        assert 5 not in state.hands[1]
        assert 7 not in state.hands[1]
        assert len(state.hands[1]) == 13


class TestTies:
    """Tests for tie escalation."""

    def test_tie_adds_next_prize(self, engine, basic_state):
        """A tie leaves the pot and reveals one more prize into it."""
        state = engine.play_card(basic_state, 1, 5)
        state = engine.play_card(state, 2, 5)

        assert _ids(state.prize_pot) == ["P1", "P2"]
        assert state.current_prize_index == 2
        assert state.claimed_prizes == {1: [], 2: []}

    def test_tie_then_win_claims_whole_pot(self, engine, basic_state):
        """The next winner takes the escalated pot in reveal order."""
        state = engine.play_card(basic_state, 1, 5)
        state = engine.play_card(state, 2, 5)
        state = engine.play_card(state, 1, 2)
        state = engine.play_card(state, 2, 1)

        assert _ids(state.claimed_prizes[1]) == ["P1", "P2"]
        assert state.prize_pot == []

    def test_tie_chain(self, engine):
        """Three ties in a row build a four-prize pot."""
        state = engine.start_new_game(GameConfig(prizes=_prizes(1, 2, 3, 4, 5)))

        for value in (1, 2, 3):
            state = engine.play_card(state, 1, value)
            state = engine.play_card(state, 2, value)

        assert _ids(state.prize_pot) == ["P1", "P2", "P3", "P4"]
        assert state.current_prize_index == 4

        state = engine.play_card(state, 1, 4)
        state = engine.play_card(state, 2, 5)

        assert _ids(state.claimed_prizes[2]) == ["P1", "P2", "P3", "P4"]
        assert state.prize_pot == []

    def test_final_tie_discards_pot(self, engine):
        """Tie with an exhausted deck: the pot is discarded and the match ends."""
        config = GameConfig(prizes=_prizes(1, 2), hand_values=[1, 2, 3])
        state = engine.start_new_game(config)

        state = engine.play_card(state, 1, 1)
        state = engine.play_card(state, 2, 1)
        assert _ids(state.prize_pot) == ["P1", "P2"]
        assert state.current_prize_index == 2

        state = engine.play_card(state, 1, 2)
        state = engine.play_card(state, 2, 2)

        assert state.game_over is True
        assert state.end_reason == EndReason.FINAL_TIE_POT_DISCARDED
        assert state.prize_pot == []
        assert _ids(state.discarded_prizes) == ["P1", "P2"]
        assert state.claimed_prizes == {1: [], 2: []}
        assert final_scores(state) == {1: 0.0, 2: 0.0}

    def test_final_tie_wins_over_normal_end(self, engine):
        """A final tie on the last cards reports the tie, not a normal end."""
        config = GameConfig(prizes=_prizes(1), hand_values=[1])
        state = engine.start_new_game(config)

        state = engine.play_card(state, 1, 1)
        state = engine.play_card(state, 2, 1)

        assert state.all_hands_empty()
        assert state.end_reason == EndReason.FINAL_TIE_POT_DISCARDED

    def test_three_way_battle_with_two_tied(self, engine):
        """Only the players at the top strength are tied."""
        state = engine.start_new_game(GameConfig(player_count=3, prizes=_prizes(1, 2, 3)))

        state = engine.play_card(state, 1, 9)
        state = engine.play_card(state, 2, 9)
        state = engine.play_card(state, 3, 2)

        assert _ids(state.prize_pot) == ["P1", "P2"]
        assert all(not claimed for claimed in state.claimed_prizes.values())


class TestEndOfGame:
    """Tests for end-of-game reasons."""

    def test_normal_end(self, engine):
        """All hands empty and every prize claimed."""
        config = GameConfig(prizes=_prizes(1), hand_values=[1, 2])
        state = engine.start_new_game(config)

        state = engine.play_card(state, 1, 2)
        state = engine.play_card(state, 2, 1)
        assert state.game_over is False

        # Deck is empty; this battle has nothing at stake
        state = engine.play_card(state, 1, 1)
        assert state.prize_pot == []
        state = engine.play_card(state, 2, 2)

        assert state.game_over is True
        assert state.end_reason == EndReason.NORMAL
        assert _ids(state.claimed_prizes[1]) == ["P1"]

    def test_ships_exhausted_with_pot_remaining(self, engine):
        """A tie on the last cards leaves the escalated pot unclaimed."""
        config = GameConfig(prizes=_prizes(1, 2), hand_values=[5])
        state = engine.start_new_game(config)

        state = engine.play_card(state, 1, 5)
        state = engine.play_card(state, 2, 5)

        assert state.game_over is True
        assert state.end_reason == EndReason.SHIPS_EXHAUSTED_PRIZES_REMAINING
        assert _ids(state.prize_pot) == ["P1", "P2"]
        assert _ids(state.unclaimed_prizes()) == ["P1", "P2"]

    def test_duplicate_ids_do_not_hide_unrevealed_prizes(self, engine):
        """A deck prize sharing an id with a claimed one is still unclaimed."""
        prizes = [
            Prize(id="X", victory_points=1),
            Prize(id="Y", victory_points=1),
            Prize(id="X", victory_points=5),
        ]
        state = engine.start_new_game(GameConfig(prizes=prizes, hand_values=[1, 2]))

        state = engine.play_card(state, 1, 2)
        state = engine.play_card(state, 2, 1)
        state = engine.play_card(state, 1, 1)
        state = engine.play_card(state, 2, 2)

        assert state.end_reason == EndReason.SHIPS_EXHAUSTED_PRIZES_REMAINING
        assert [p.victory_points for p in state.unclaimed_prizes()] == [5]

    def test_ships_exhausted_with_deck_remaining(self, engine):
        """More prizes than battles leaves the deck remainder unclaimed."""
        config = GameConfig(prizes=_prizes(1, 2, 3), hand_values=[4, 5])
        state = engine.start_new_game(config)

        state = engine.play_card(state, 1, 5)
        state = engine.play_card(state, 2, 4)
        state = engine.play_card(state, 1, 4)
        state = engine.play_card(state, 2, 5)

        assert state.end_reason == EndReason.SHIPS_EXHAUSTED_PRIZES_REMAINING
        assert _ids(state.remaining_deck) == ["P3"]
        assert _ids(state.unclaimed_prizes()) == ["P3"]

    def test_out_of_cards_early_after_bid(self, engine, tie_merc):
        """A bid shortens one hand, so it runs dry before the other."""
        config = GameConfig(prizes=_prizes(1, 2, 3), hand_values=[1, 2])
        state = engine.start_new_game(config)
        state = engine.award_special(state, 1, tie_merc, 1)

        state = engine.play_card(state, 1, 2)
        state = engine.play_card(state, 2, 1)

        assert state.hands == {1: [], 2: [2]}
        assert state.game_over is True
        assert state.end_reason == EndReason.PLAYER_OUT_OF_CARDS_EARLY

    def test_play_with_empty_hand_raises(self, engine, basic_state):
        """The early-out error carries the terminated state."""
        basic_state.hands[1] = []

        with pytest.raises(PlayerOutOfCardsEarly) as exc_info:
            engine.play_card(basic_state, 1, 3)

        terminated = exc_info.value.state
        assert terminated.game_over is True
        assert terminated.end_reason == EndReason.PLAYER_OUT_OF_CARDS_EARLY
        assert basic_state.game_over is False

    def test_out_of_cards_early_is_terminal(self, engine, basic_state):
        """PlayerOutOfCardsEarly is a kind of terminal state violation."""
        basic_state.hands[2] = []

        with pytest.raises(TerminalStateViolation):
            engine.play_card(basic_state, 2, 1)

    def test_is_game_over(self, engine):
        config = GameConfig(prizes=_prizes(1), hand_values=[1])
        state = engine.start_new_game(config)

        assert engine.is_game_over(state) is False
        state = engine.play_card(state, 1, 1)
        state = engine.play_card(state, 2, 1)
        assert engine.is_game_over(state) is True


class TestRejectedActions:
    """Tests that invalid actions raise and leave the input alone."""

    def test_unknown_player(self, engine, basic_state):
        with pytest.raises(IllegalAction):
            engine.play_card(basic_state, 3, 5)

    def test_player_zero(self, engine, basic_state):
        with pytest.raises(IllegalAction):
            engine.play_card(basic_state, 0, 5)

    def test_non_integer_player(self, engine, basic_state):
        """Player ids are integers; "1" is not player 1."""
        with pytest.raises(IllegalAction):
            engine.play_card(basic_state, "1", 5)

    @pytest.mark.parametrize("value", [True, 5.0, "5"])
    def test_value_must_be_an_int(self, engine, basic_state, value):
        """Values equal to a held card but of another type are not that card."""
        with pytest.raises(IllegalAction):
            engine.play_card(basic_state, 1, value)

        assert basic_state.hands[1] == list(range(1, 16))

    def test_value_not_in_hand(self, engine, basic_state):
        """A value the player does not hold is rejected before any reveal."""
        with pytest.raises(IllegalAction):
            engine.play_card(basic_state, 1, 16)

        assert basic_state.prize_pot == []
        assert basic_state.current_prize_index == 0

    def test_already_played_value(self, engine, basic_state):
        state = engine.play_card(basic_state, 1, 5)
        state = engine.play_card(state, 2, 3)

        with pytest.raises(IllegalAction):
            engine.play_card(state, 1, 5)

    def test_play_after_game_over(self, engine):
        """Nothing can be played once the match has ended."""
        config = GameConfig(prizes=_prizes(1), hand_values=[1, 2])
        state = engine.start_new_game(config)
        state = engine.play_card(state, 1, 1)
        state = engine.play_card(state, 2, 1)
        assert state.game_over is True

        hands = {p: list(h) for p, h in state.hands.items()}
        pot = list(state.prize_pot)
        claimed = {p: list(c) for p, c in state.claimed_prizes.items()}

        with pytest.raises(TerminalStateViolation):
            engine.play_card(state, 1, 2)

        assert state.hands == hands
        assert state.prize_pot == pot
        assert state.claimed_prizes == claimed

    def test_legal_cards_for_unknown_player(self, engine, basic_state):
        with pytest.raises(IllegalAction):
            engine.legal_cards_for_player(basic_state, 5)

    def test_legal_cards(self, engine, basic_state):
        state = engine.play_card(basic_state, 1, 15)

        assert engine.legal_cards_for_player(state, 1) == list(range(1, 15))
        assert engine.legal_cards_for_player(state, 2) == list(range(1, 16))


class TestMatchEngineIsStateless:
    """One engine drives any number of matches."""

    def test_independent_matches(self, three_prizes):
        engine = MatchEngine()
        first = engine.start_new_game(GameConfig(prizes=three_prizes))
        second = engine.start_new_game(GameConfig(prizes=three_prizes))

        first = engine.play_card(first, 1, 5)

        assert second.current_plays[1] is None
        assert second.prize_pot == []
