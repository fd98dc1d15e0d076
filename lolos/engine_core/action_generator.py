"""
Action Generator - Generates all legal actions from a game state.

The action generator is used by:
1. UI to show available actions and hints
2. Bots and simulations to enumerate possible moves
3. Validation (is this action in legal_actions?)

Candidates are built per action type and kept only if the reducer
accepts them, so the generator can never disagree with the rules.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import random

from .state import CardType, GamePhase, GameState, Operation
from .action import Action, ActionType
from .reducer import Reducer
from .validation import can_play_anything
from ..config import GameConfig, DEFAULT_CONFIG


@dataclass
class ActionGenerator:
    """Generates legal actions for one player of a game state."""
    config: GameConfig = DEFAULT_CONFIG
    _reducer: Reducer = field(init=False)

    def __post_init__(self):
        # Rolls and reshuffles during probing are thrown away
        self._reducer = Reducer(config=self.config, rng=random.Random(0))

    def generate(self, state: GameState, player_id: str | None = None) -> list[Action]:
        """
        Generate all legal actions for a player (default: the current player).

        Returns a list of fully-specified Action objects.
        """
        if state.phase == GamePhase.GAME_OVER or not state.players:
            return []
        player_id = player_id or state.current_player.player_id
        return [
            action for action in self._candidates(state, player_id)
            if self._reducer.apply(state, action).success
        ]

    def _candidates(self, state: GameState, player_id: str) -> list[Action]:
        if state.phase == GamePhase.LOBBY:
            return [Action.start_game(player_id, "full"), Action.start_game(player_id, "easy")]

        player = state.get_player(player_id)
        if player is None:
            return []

        candidates = [
            Action.begin_turn(player_id),
            Action.roll_dice(player_id),
            Action.confirm_staged(player_id),
            Action.defend_fraction_penalty(player_id),
            Action.draw_card(player_id),
            Action.call_lulos(player_id),
            Action.end_turn(player_id),
        ]
        candidates.extend(
            Action.confirm_equation(player_id, option.result, option.display)
            for option in state.valid_targets
        )
        for card in player.hand:
            candidates.extend(self._card_candidates(player_id, card))
        candidates.extend(Action.unstage_card(player_id, c.card_id) for c in state.staged_cards)
        return candidates

    def _card_candidates(self, player_id: str, card) -> list[Action]:
        card_id = card.card_id
        actions = [Action.play_identical(player_id, card_id)]
        if card.card_type == CardType.NUMBER:
            actions.append(Action.stage_card(player_id, card_id))
            actions.append(Action.defend_fraction_solve(player_id, card_id))
        elif card.card_type == CardType.OPERATION:
            actions.append(Action.stage_card(player_id, card_id))
            actions.append(Action.play_operation(player_id, card_id))
        elif card.card_type == CardType.FRACTION:
            actions.append(Action.play_fraction(player_id, card_id))
        else:
            actions.extend(Action.play_joker(player_id, card_id, op.value) for op in Operation)
        return actions

    def has_playable_card(self, state: GameState) -> bool:
        """Hint: could the current player get any card out of hand this turn."""
        return can_play_anything(
            state.current_player.hand,
            state.pile_top,
            state.equation_result,
            state.consecutive_identical_plays,
            self.config.identical_play_limit,
        )


def legal_actions(state: GameState, player_id: str | None = None) -> list[Action]:
    """
    Convenience function to get legal actions.

    Creates an ActionGenerator and generates actions.
    """
    return ActionGenerator().generate(state, player_id)


def is_legal(state: GameState, action: Action) -> bool:
    """Check if a specific action is legal."""
    for a in legal_actions(state, action.player_id):
        if (
            a.action_type == action.action_type
            and a.payload.card_id == action.payload.card_id
            and a.payload.result == action.payload.result
            and a.payload.operation == action.payload.operation
        ):
            return True
    return False
