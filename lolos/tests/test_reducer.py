"""
Tests for the reducer (state transitions).

Tests:
- Dice, equation and staged discards
- Identical plays and their streak limit
- Fraction attacks, blocks and defenses
- Operation challenges and jokers
- Lolos calls and the win check
- Draw pile reshuffle and exhaustion
- Validation and error handling
"""

from dataclasses import fields, replace
import random

import pytest

from ..engine_core.state import (
    Card, CorruptStateError, Difficulty, GamePhase, GameState, Fraction, Operation,
)
from ..engine_core.action import Action, ActionPayload, ActionType, ErrorCode
from ..engine_core.action_generator import ActionGenerator
from ..engine_core.reducer import Reducer, apply_action
from ..engine_core.setup import create_lobby, start_game


def card_ids(cards):
    return [c.card_id for c in cards]


class TestHandlerTable:
    def test_every_action_type_has_a_handler(self):
        """The dispatch table covers the whole ActionType enum."""
        assert set(Reducer().handlers()) == set(ActionType)

    def test_payload_carries_only_move_fields(self):
        names = {f.name for f in fields(ActionPayload)}
        assert names == {"player_id", "card_id", "result", "display", "operation", "difficulty"}
        assert [f.name for f in fields(Action)] == ["action_type", "payload"]


class TestValidation:
    """Tests for checks common to every action."""

    def test_wrong_turn_rejected(self, make_state, filler):
        state = make_state({"alice": filler("a", 3), "bob": filler("b", 3)})
        result = apply_action(state, Action.roll_dice("bob"))

        assert not result.success
        assert result.error_code == ErrorCode.NOT_YOUR_TURN
        assert "turn" in result.error.lower()

    def test_unknown_player(self, make_state, filler):
        state = make_state({"alice": filler("a", 3), "bob": filler("b", 3)})
        result = apply_action(state, Action.call_lulos("mallory"))

        assert result.error_code == ErrorCode.PLAYER_NOT_FOUND

    def test_game_over_rejects_everything(self, make_state, filler):
        state = make_state(
            {"alice": [], "bob": filler("b", 3)},
            phase=GamePhase.GAME_OVER, winner_id="alice",
        )
        result = apply_action(state, Action.call_lulos("bob"))

        assert result.error_code == ErrorCode.GAME_OVER

    def test_rejection_leaves_state_untouched(self, make_state, filler):
        """A failed action returns no state and the input is unchanged."""
        state = make_state({"alice": filler("a", 3), "bob": filler("b", 3)})
        before = state
        result = apply_action(state, Action.begin_turn("alice"))

        assert not result.success
        assert result.new_state is None
        assert state == before
        assert result.to_dict()["error_code"] == "WRONG_PHASE"

    def test_corrupt_index_raises(self, make_state, filler):
        state = make_state({"alice": filler("a", 3), "bob": filler("b", 3)}, current=5)
        with pytest.raises(CorruptStateError):
            apply_action(state, Action.roll_dice("alice"))

    def test_duplicate_card_raises(self, make_state):
        card = Card.number("dup", 4)
        state = make_state({"alice": [card], "bob": [Card.number("b", 1)]}, discard=[card])
        with pytest.raises(CorruptStateError):
            apply_action(state, Action.roll_dice("alice"))

    def test_successful_action_is_recorded(self, make_state, filler):
        state = make_state(
            {"alice": filler("a", 3), "bob": filler("b", 3)},
            phase=GamePhase.TURN_TRANSITION,
        )
        action = Action.begin_turn("alice")
        result = apply_action(state, action)

        assert result.new_state.action_history == (action,)


class TestLobby:
    def test_only_start_game_in_lobby(self, roster):
        state = create_lobby(roster)
        result = apply_action(state, Action.roll_dice("alice"))

        assert result.error_code == ErrorCode.NOT_STARTED

    def test_host_starts_game(self, roster):
        state = create_lobby(roster, game_id="room-7")
        result = apply_action(state, Action.start_game("alice", "easy"), rng=random.Random(2))

        assert result.success
        new_state = result.new_state
        assert new_state.game_id == "room-7"
        assert new_state.phase == GamePhase.TURN_TRANSITION
        assert all(p.card_count == 10 for p in new_state.players)
        assert new_state.total_cards == 90

    def test_guest_cannot_start(self, roster):
        result = apply_action(create_lobby(roster), Action.start_game("bob"))
        assert result.error_code == ErrorCode.INVALID_SETUP

    def test_cannot_start_twice(self, roster):
        state = start_game(roster, rng=random.Random(2))
        result = apply_action(state, Action.start_game("alice"))
        assert result.error_code == ErrorCode.WRONG_PHASE


class TestDiceAndEquation:
    """Tests for rolling, confirming and discarding staged cards."""

    def test_full_turn_with_single_card(self, make_state, filler, reducer_with_rolls):
        """Roll 2, 3, 5; confirm 10; discard a 10; the turn passes to Bob."""
        ten = Card.number("a10", 10)
        state = make_state(
            {"alice": [ten, Card.number("a3", 3), Card.number("a4", 4)], "bob": filler("b", 3)},
            draw=filler("d", 5),
            discard=[Card.number("top", 12)],
        )
        reducer = reducer_with_rolls(2, 3, 5)

        rolled = reducer.apply(state, Action.roll_dice("alice")).new_state
        assert rolled.phase == GamePhase.BUILDING
        assert rolled.dice.values == (2, 3, 5)
        assert 10 in [t.result for t in rolled.valid_targets]

        solved = reducer.apply(rolled, Action.confirm_equation("alice", 10)).new_state
        assert solved.phase == GamePhase.SOLVED
        assert solved.equation_result == 10

        staged = reducer.apply(solved, Action.stage_card("alice", "a10")).new_state
        assert card_ids(staged.staged_cards) == ["a10"]

        result = reducer.apply(staged, Action.confirm_staged("alice"))
        assert result.success
        final = result.new_state
        assert final.phase == GamePhase.TURN_TRANSITION
        assert final.current_player.player_id == "bob"
        assert final.active_operation is None
        assert final.pile_top == ten
        assert final.get_player("alice").card_count == 2
        assert final.dice is None
        assert final.staged_cards == ()

    def test_full_turn_after_deal(self, roster, reducer_with_rolls):
        """A dealt two-player full game: Alice discards a 10 and Bob is up."""
        state = start_game(roster, Difficulty.FULL, random.Random(11))
        alice, bob = state.players
        assert alice.card_count == bob.card_count == 10

        ten = next((c for c in alice.hand if c.value == 10), None)
        if ten is None:
            ten = next(c for c in bob.hand + state.draw_pile if c.value == 10)
            given = alice.hand[0]

            def swap(cards):
                return tuple(given if c == ten else c for c in cards)

            state = state._copy_with(
                players=(replace(alice, hand=(ten,) + alice.hand[1:]), replace(bob, hand=swap(bob.hand))),
                draw_pile=swap(state.draw_pile),
            )
        total = state.total_cards
        reducer = reducer_with_rolls(2, 3, 5)

        state = reducer.apply(state, Action.begin_turn("alice")).new_state
        state = reducer.apply(state, Action.roll_dice("alice")).new_state
        state = reducer.apply(state, Action.confirm_equation("alice", 10)).new_state
        state = reducer.apply(state, Action.stage_card("alice", ten.card_id)).new_state
        result = reducer.apply(state, Action.confirm_staged("alice"))

        assert result.success
        final = result.new_state
        assert final.get_player("alice").card_count == 9
        assert final.get_player("bob").card_count == 10
        assert final.current_player.player_id == "bob"
        assert final.phase == GamePhase.TURN_TRANSITION
        assert final.pile_top == ten
        assert final.total_cards == total

    def test_unreachable_target_rejected(self, make_state, filler, reducer_with_rolls):
        state = make_state({"alice": filler("a", 3), "bob": filler("b", 3)})
        reducer = reducer_with_rolls(1, 1, 1)
        rolled = reducer.apply(state, Action.roll_dice("alice")).new_state

        result = reducer.apply(rolled, Action.confirm_equation("alice", 100))
        assert result.error_code == ErrorCode.INVALID_EQUATION

    def test_operation_card_in_combination(self, make_state, filler, reducer_with_rolls):
        """2 x 5 reaches 10; the x card becomes the next player's challenge."""
        state = make_state(
            {
                "alice": [Card.number("a2", 2), Card.number("a5", 5),
                          Card.of_operation("ax", Operation.MULTIPLY)] + filler("a", 2),
                "bob": filler("b", 3),
            },
            draw=filler("d", 5),
            discard=[Card.number("top", 12)],
        )
        reducer = reducer_with_rolls(2, 3, 5)
        s = reducer.apply(state, Action.roll_dice("alice")).new_state
        s = reducer.apply(s, Action.confirm_equation("alice", 10)).new_state
        for card_id in ("a2", "ax", "a5"):
            s = reducer.apply(s, Action.stage_card("alice", card_id)).new_state

        final = reducer.apply(s, Action.confirm_staged("alice")).new_state
        assert final.current_player.player_id == "bob"
        assert final.active_operation == Operation.MULTIPLY
        assert final.pile_top.card_id == "ax"
        assert final.get_player("alice").card_count == 2

    def test_wrong_combination_rejected(self, make_state, filler):
        state = make_state(
            {"alice": [Card.number("a7", 7)] + filler("a", 2), "bob": filler("b", 3)},
            phase=GamePhase.SOLVED, equation_result=10,
        )
        s = Reducer().apply(state, Action.stage_card("alice", "a7")).new_state
        result = Reducer().apply(s, Action.confirm_staged("alice"))

        assert result.error_code == ErrorCode.INVALID_COMBINATION

    def test_staging_rules(self, make_state, filler):
        state = make_state(
            {
                "alice": [Card.of_fraction("f", Fraction.HALF),
                          Card.of_operation("o1", Operation.ADD),
                          Card.of_operation("o2", Operation.SUBTRACT)],
                "bob": filler("b", 3),
            },
            phase=GamePhase.SOLVED, equation_result=4,
        )
        reducer = Reducer()

        assert reducer.apply(state, Action.stage_card("alice", "f")).error_code == ErrorCode.INVALID_CARD
        s = reducer.apply(state, Action.stage_card("alice", "o1")).new_state
        assert reducer.apply(s, Action.stage_card("alice", "o2")).error_code == ErrorCode.INVALID_CARD
        assert reducer.apply(s, Action.stage_card("alice", "o1")).error_code == ErrorCode.INVALID_CARD
        assert reducer.apply(s, Action.stage_card("alice", "zzz")).error_code == ErrorCode.CARD_NOT_FOUND

    def test_unstage(self, make_state, filler):
        state = make_state(
            {"alice": [Card.number("a1", 1)] + filler("a", 2), "bob": filler("b", 3)},
            phase=GamePhase.SOLVED, equation_result=1,
        )
        reducer = Reducer()
        s = reducer.apply(state, Action.stage_card("alice", "a1")).new_state
        s = reducer.apply(s, Action.unstage_card("alice", "a1")).new_state

        assert s.staged_cards == ()
        result = reducer.apply(s, Action.unstage_card("alice", "a1"))
        assert result.error_code == ErrorCode.CARD_NOT_FOUND

    def test_triple_bonus(self, make_state, filler, reducer_with_rolls):
        """Rolling 4, 4, 4 gives every other player four cards."""
        state = make_state(
            {"alice": filler("a", 3), "bob": filler("b", 3), "carol": filler("c", 3)},
            draw=filler("d", 10),
        )
        new_state = reducer_with_rolls(4, 4, 4).apply(state, Action.roll_dice("alice")).new_state

        assert new_state.get_player("alice").card_count == 3
        assert new_state.get_player("bob").card_count == 7
        assert new_state.get_player("carol").card_count == 7
        assert len(new_state.draw_pile) == 2
        assert new_state.total_cards == state.total_cards

    def test_cannot_roll_after_playing(self, make_state, filler):
        state = make_state(
            {"alice": filler("a", 3), "bob": filler("b", 3)}, has_played_cards=True,
        )
        result = apply_action(state, Action.roll_dice("alice"))
        assert result.error_code == ErrorCode.ALREADY_PLAYED


class TestIdenticalPlay:
    def test_identical_play_ends_turn(self, make_state, filler):
        state = make_state(
            {"alice": [Card.number("a9", 9)] + filler("a", 2), "bob": filler("b", 3)},
            discard=[Card.number("top", 9)],
        )
        new_state = apply_action(state, Action.play_identical("alice", "a9")).new_state

        assert new_state.pile_top.card_id == "a9"
        assert new_state.current_player.player_id == "bob"
        assert new_state.consecutive_identical_plays == 1

    def test_streak_limit(self, make_state, filler):
        state = make_state(
            {"alice": [Card.number("a9", 9)] + filler("a", 2), "bob": filler("b", 3)},
            discard=[Card.number("top", 9)],
            consecutive_identical_plays=2,
        )
        result = apply_action(state, Action.play_identical("alice", "a9"))
        assert result.error_code == ErrorCode.IDENTICAL_LIMIT

    def test_roll_resets_streak(self, make_state, filler, reducer_with_rolls):
        state = make_state(
            {"alice": filler("a", 3), "bob": filler("b", 3)}, consecutive_identical_plays=2,
        )
        new_state = reducer_with_rolls(1, 2, 3).apply(state, Action.roll_dice("alice")).new_state
        assert new_state.consecutive_identical_plays == 0

    def test_mismatch(self, make_state, filler):
        state = make_state(
            {"alice": [Card.number("a9", 9)] + filler("a", 2), "bob": filler("b", 3)},
            discard=[Card.number("top", 8)],
        )
        result = apply_action(state, Action.play_identical("alice", "a9"))
        assert result.error_code == ErrorCode.INVALID_CARD


class TestFractionAttack:
    """Tests for fraction attacks, blocks and defenses."""

    def three_player_state(self, make_state, filler):
        return make_state(
            {
                "alice": [Card.of_fraction("a-quarter", Fraction.QUARTER)] + filler("a", 2),
                "bob": [Card.of_fraction("b-half", Fraction.HALF), Card.number("b6", 6)] + filler("b", 2),
                "carol": filler("c", 3),
            },
            draw=filler("d", 6),
            discard=[Card.number("top", 24)],
        )

    def test_attack_block_and_penalty(self, make_state, filler):
        """24 attacked with 1/4 gives 6; blocked with 1/2 gives 3; Carol draws 2."""
        reducer = Reducer(rng=random.Random(0))
        s = self.three_player_state(make_state, filler)

        s = reducer.apply(s, Action.play_fraction("alice", "a-quarter")).new_state
        assert s.current_player.player_id == "bob"
        assert s.phase == GamePhase.TURN_TRANSITION
        assert (s.pending_fraction_target, s.fraction_penalty) == (6, 4)

        s = reducer.apply(s, Action.begin_turn("bob")).new_state
        assert s.phase == GamePhase.PRE_ROLL
        assert s.pending_fraction_target == 6

        s = reducer.apply(s, Action.play_fraction("bob", "b-half")).new_state
        assert s.current_player.player_id == "carol"
        assert (s.pending_fraction_target, s.fraction_penalty) == (3, 2)

        s = reducer.apply(s, Action.begin_turn("carol")).new_state
        s = reducer.apply(s, Action.defend_fraction_penalty("carol")).new_state
        assert s.get_player("carol").card_count == 5
        assert s.current_player.player_id == "alice"
        assert s.pending_fraction_target is None
        assert s.fraction_penalty == 0

    def test_defend_with_exact_number(self, make_state, filler):
        """Bob answers the 6 with his 6 and keeps his turn in pre-roll."""
        reducer = Reducer(rng=random.Random(0))
        s = self.three_player_state(make_state, filler)
        s = reducer.apply(s, Action.play_fraction("alice", "a-quarter")).new_state
        s = reducer.apply(s, Action.begin_turn("bob")).new_state

        s = reducer.apply(s, Action.defend_fraction_solve("bob", "b6")).new_state
        assert s.phase == GamePhase.PRE_ROLL
        assert s.current_player.player_id == "bob"
        assert s.pending_fraction_target is None
        assert s.fraction_attack_resolved
        assert s.pile_top.card_id == "b6"
        assert not s.has_played_cards

    def test_pending_attack_blocks_other_moves(self, make_state, filler):
        reducer = Reducer(rng=random.Random(0))
        s = self.three_player_state(make_state, filler)
        s = reducer.apply(s, Action.play_fraction("alice", "a-quarter")).new_state
        s = reducer.apply(s, Action.begin_turn("bob")).new_state

        for action in (Action.roll_dice("bob"), Action.end_turn("bob"), Action.draw_card("bob")):
            assert reducer.apply(s, action).error_code == ErrorCode.OBLIGATION_PENDING

    def test_wrong_defense_number(self, make_state, filler):
        reducer = Reducer(rng=random.Random(0))
        s = self.three_player_state(make_state, filler)
        s = reducer.apply(s, Action.play_fraction("alice", "a-quarter")).new_state
        s = reducer.apply(s, Action.begin_turn("bob")).new_state

        result = reducer.apply(s, Action.defend_fraction_solve("bob", "b-0"))
        assert result.error_code == ErrorCode.INVALID_CARD

    def test_block_must_divide(self, make_state, filler):
        state = make_state(
            {"alice": [Card.of_fraction("third", Fraction.THIRD)] + filler("a", 2), "bob": filler("b", 3)},
            pending_fraction_target=5, fraction_penalty=2,
        )
        result = apply_action(state, Action.play_fraction("alice", "third"))
        assert result.error_code == ErrorCode.INVALID_CARD

    def test_attack_needs_divisible_top(self, make_state, filler):
        state = make_state(
            {"alice": [Card.of_fraction("half", Fraction.HALF)] + filler("a", 2), "bob": filler("b", 3)},
            discard=[Card.number("top", 7)],
        )
        result = apply_action(state, Action.play_fraction("alice", "half"))
        assert result.error_code == ErrorCode.INVALID_CARD

    def test_no_attack_to_defend(self, make_state, filler):
        state = make_state({"alice": filler("a", 3), "bob": filler("b", 3)})
        result = apply_action(state, Action.defend_fraction_penalty("alice"))
        assert result.error_code == ErrorCode.NO_ATTACK


class TestOperationChallenge:
    """Tests for operation cards and jokers."""

    def test_played_operation_is_carried(self, make_state, filler):
        state = make_state(
            {
                "alice": [Card.of_operation("a+", Operation.ADD)] + filler("a", 2),
                "bob": [Card.of_operation("b+", Operation.ADD)] + filler("b", 2),
            },
            draw=filler("d", 4),
        )
        reducer = Reducer(rng=random.Random(0))
        s = reducer.apply(state, Action.play_operation("alice", "a+")).new_state
        assert s.active_operation == Operation.ADD
        assert s.phase == GamePhase.PRE_ROLL

        s = reducer.apply(s, Action.end_turn("alice")).new_state
        assert s.current_player.player_id == "bob"
        assert s.active_operation == Operation.ADD

        s = reducer.apply(s, Action.begin_turn("bob")).new_state
        assert s.phase == GamePhase.PRE_ROLL
        assert s.active_operation == Operation.ADD
        assert reducer.apply(s, Action.roll_dice("bob")).error_code == ErrorCode.OBLIGATION_PENDING

        s = reducer.apply(s, Action.play_operation("bob", "b+")).new_state
        s = reducer.apply(s, Action.end_turn("bob")).new_state
        assert s.current_player.player_id == "alice"
        assert s.active_operation == Operation.ADD

    def test_defense_must_match(self, make_state, filler):
        state = make_state(
            {"alice": [Card.of_operation("ax", Operation.MULTIPLY)] + filler("a", 2), "bob": filler("b", 3)},
            active_operation=Operation.ADD,
        )
        result = apply_action(state, Action.play_operation("alice", "ax"))
        assert result.error_code == ErrorCode.INVALID_CARD

    def test_no_defense_draws_at_begin_turn(self, make_state, filler):
        state = make_state(
            {"alice": filler("a", 3), "bob": filler("b", 3)},
            draw=filler("d", 4),
            phase=GamePhase.TURN_TRANSITION,
            active_operation=Operation.SUBTRACT,
        )
        s = apply_action(state, Action.begin_turn("alice")).new_state

        assert s.get_player("alice").card_count == 5
        assert s.active_operation is None
        assert s.phase == GamePhase.PRE_ROLL

    def test_unanswered_challenge_costs_two(self, make_state, filler):
        state = make_state(
            {"alice": [Card.joker("aj")] + filler("a", 2), "bob": filler("b", 3)},
            draw=filler("d", 4),
            active_operation=Operation.SUBTRACT,
        )
        s = apply_action(state, Action.end_turn("alice")).new_state

        assert s.get_player("alice").card_count == 5
        assert s.active_operation is None
        assert s.current_player.player_id == "bob"

    def test_joker_sets_chosen_operation(self, make_state, filler):
        state = make_state(
            {"alice": [Card.joker("aj")] + filler("a", 2), "bob": filler("b", 3)},
            active_operation=Operation.SUBTRACT,
        )
        s = apply_action(state, Action.play_joker("alice", "aj", "×")).new_state

        assert s.active_operation == Operation.MULTIPLY
        assert s.has_played_cards
        assert s.pile_top.card_id == "aj"

    def test_joker_unknown_operation(self, make_state, filler):
        state = make_state({"alice": [Card.joker("aj")] + filler("a", 2), "bob": filler("b", 3)})
        result = apply_action(state, Action.play_joker("alice", "aj", "%"))
        assert result.error_code == ErrorCode.INVALID_CARD

    def test_operation_played_after_staging_clears_stage(self, make_state, filler):
        state = make_state(
            {"alice": [Card.of_operation("a+", Operation.ADD)] + filler("a", 2), "bob": filler("b", 3)},
            phase=GamePhase.SOLVED, equation_result=5,
        )
        reducer = Reducer()
        s = reducer.apply(state, Action.stage_card("alice", "a+")).new_state
        s = reducer.apply(s, Action.play_operation("alice", "a+")).new_state

        assert s.staged_cards == ()
        assert reducer.apply(s, Action.end_turn("alice")).success


class TestLolos:
    """Tests for Lolos calls and the win condition."""

    def test_call_with_too_many_cards(self, make_state, filler):
        state = make_state({"alice": filler("a", 3), "bob": filler("b", 3)})
        result = apply_action(state, Action.call_lulos("alice"))
        assert result.error_code == ErrorCode.TOO_MANY_CARDS

    def test_call_out_of_turn(self, make_state, filler):
        state = make_state({"alice": filler("a", 3), "bob": filler("b", 2)})
        s = apply_action(state, Action.call_lulos("bob")).new_state

        assert s.get_player("bob").called_lolos
        assert s.current_player.player_id == "alice"

    def test_win_after_call(self, make_state, filler):
        state = make_state(
            {"alice": [Card.number("a9", 9)], "bob": filler("b", 3)},
            draw=filler("d", 3),
            discard=[Card.number("top", 9)],
        )
        reducer = Reducer()
        s = reducer.apply(state, Action.call_lulos("alice")).new_state
        s = reducer.apply(s, Action.play_identical("alice", "a9")).new_state

        assert s.phase == GamePhase.GAME_OVER
        assert s.winner.player_id == "alice"
        assert reducer.apply(s, Action.roll_dice("bob")).error_code == ErrorCode.GAME_OVER

    def test_forgot_to_call(self, make_state, filler):
        """Emptying the hand without a call costs exactly one card."""
        state = make_state(
            {"alice": [Card.number("a9", 9)], "bob": filler("b", 3)},
            draw=filler("d", 3),
            discard=[Card.number("top", 9)],
        )
        s = apply_action(state, Action.play_identical("alice", "a9")).new_state

        assert s.phase == GamePhase.TURN_TRANSITION
        assert s.get_player("alice").card_count == 1
        assert "forgot" in s.message.lower()

    def test_win_when_nothing_left_to_draw(self, make_state, filler):
        """The penalty card cannot be drawn, so the empty hand still wins."""
        state = make_state({"alice": [Card.of_operation("a+", Operation.ADD)], "bob": filler("b", 3)})
        s = apply_action(state, Action.play_operation("alice", "a+")).new_state

        assert s.phase == GamePhase.GAME_OVER
        assert s.winner_id == "alice"

    def test_last_card_without_call_at_end_of_turn(self, make_state, filler):
        state = make_state(
            {"alice": [Card.number("a9", 9), Card.number("a5", 5)], "bob": filler("b", 3)},
            draw=filler("d", 3),
            discard=[Card.number("top", 9)],
        )
        s = apply_action(state, Action.play_identical("alice", "a9")).new_state

        assert s.get_player("alice").card_count == 2
        assert "forgot" in s.message.lower()

    def test_calls_reset_at_turn_boundary(self, make_state, filler):
        state = make_state(
            {"alice": filler("a", 3), "bob": filler("b", 2)}, draw=filler("d", 3),
        )
        reducer = Reducer()
        s = reducer.apply(state, Action.call_lulos("bob")).new_state
        s = reducer.apply(s, Action.end_turn("alice")).new_state

        assert not s.get_player("bob").called_lolos


class TestDrawPile:
    """Tests for drawing, reshuffling and exhaustion."""

    def test_draw_ends_turn(self, make_state, filler):
        state = make_state({"alice": filler("a", 3), "bob": filler("b", 3)}, draw=filler("d", 3))
        s = apply_action(state, Action.draw_card("alice")).new_state

        assert s.get_player("alice").card_count == 4
        assert s.current_player.player_id == "bob"

    def test_reshuffle_keeps_top(self, make_state, filler, scripted_rng):
        """An empty draw pile is rebuilt from every discard but the top."""
        state = make_state(
            {"alice": filler("a", 3), "bob": filler("b", 3)},
            discard=[Card.number("x1", 1), Card.number("x2", 2), Card.number("x3", 3)],
        )
        s = Reducer(rng=scripted_rng()).apply(state, Action.draw_card("alice")).new_state

        assert card_ids(s.discard_pile) == ["x3"]
        assert card_ids(s.draw_pile) == ["x2"]
        assert s.get_player("alice").find_card("x1") is not None
        assert s.total_cards == state.total_cards

    def test_exhausted_table(self, make_state, filler):
        """With nothing to draw the draw is spent but the turn stays."""
        state = make_state(
            {"alice": filler("a", 3), "bob": filler("b", 3)},
            discard=[Card.number("x3", 3)],
        )
        reducer = Reducer()
        s = reducer.apply(state, Action.draw_card("alice")).new_state

        assert s.has_drawn_card
        assert s.current_player.player_id == "alice"
        assert s.get_player("alice").card_count == 3
        assert reducer.apply(s, Action.draw_card("alice")).error_code == ErrorCode.ALREADY_PLAYED
        assert reducer.apply(s, Action.end_turn("alice")).new_state.current_player.player_id == "bob"


class TestClosure:
    def test_random_playthrough_conserves_cards(self, roster):
        """Across a random legal walk every card stays in exactly one place."""
        rng = random.Random(11)
        reducer = Reducer(rng=random.Random(12))
        generator = ActionGenerator()
        state: GameState = start_game(roster, rng=random.Random(13))
        total = state.total_cards

        for _ in range(150):
            if state.phase == GamePhase.GAME_OVER:
                break
            actions = generator.generate(state)
            assert actions
            result = reducer.apply(state, rng.choice(actions))
            assert result.success
            state = result.new_state

            ids = [c.card_id for p in state.players for c in p.hand]
            ids += card_ids(state.draw_pile) + card_ids(state.discard_pile)
            assert len(ids) == total
            assert len(set(ids)) == total
