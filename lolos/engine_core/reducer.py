"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through Reducer.apply().

Design principles:
- Pure transition: (state, action) -> new state or a structured error
- Validates before applying; a rejected action never touches state
- One handler per ActionType
- Randomness is injected, so a seeded Random replays a game exactly
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
import logging
import random

from .state import (
    Card, CardType, CorruptStateError, Difficulty, GamePhase, GameState,
    Operation, Seat,
)
from .action import Action, ActionType, ActionResult, ErrorCode, OFF_TURN_ACTIONS
from .arithmetic import generate_valid_targets, is_triple, roll_dice
from .validation import (
    validate_fraction_play, validate_identical_play, validate_staged_cards,
)
from .setup import start_game
from .turn import (
    advance_turn, begin_turn, check_win, discard_from_hand, draw_cards,
    end_turn, fraction_attack_open, operation_challenge_open, reshuffle_discard,
)
from ..config import GameConfig, DEFAULT_CONFIG

logger = logging.getLogger(__name__)

PLAYING_PHASES = {GamePhase.PRE_ROLL, GamePhase.BUILDING, GamePhase.SOLVED}


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Holds no game state itself; config supplies the rule constants and
    rng every random draw (dice, shuffles).
    """
    config: GameConfig = DEFAULT_CONFIG
    rng: random.Random = field(default_factory=random.Random)

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error.

        Raises:
            CorruptStateError: the state itself is structurally broken
        """
        self._check_structure(state)

        validation_error = self._validate_action(state, action)
        if validation_error:
            message, code = validation_error
            logger.debug("Rejected %s from %s: %s", action.action_type.value, action.player_id, message)
            return ActionResult.failure(message, error_code=code)

        handler = self._get_handler(action.action_type)
        result = handler(state, action)

        if result.success and result.new_state is not None:
            result.new_state = result.new_state._copy_with(
                action_history=result.new_state.action_history + (action,),
            )
            logger.debug(
                "Applied %s for %s in game %s -> %s",
                action.action_type.value, action.player_id,
                state.game_id, result.new_state.phase.value,
            )
        else:
            logger.debug("Rejected %s from %s: %s", action.action_type.value, action.player_id, result.error)
        return result

    def _check_structure(self, state: GameState):
        """Guard the invariants that only a caller bug can break."""
        if state.players and not 0 <= state.current_player_idx < len(state.players):
            raise CorruptStateError(
                f"current_player_idx {state.current_player_idx} out of range "
                f"for {len(state.players)} players"
            )
        card_ids = [c.card_id for p in state.players for c in p.hand]
        card_ids += [c.card_id for c in state.draw_pile + state.discard_pile]
        if len(card_ids) != len(set(card_ids)):
            raise CorruptStateError("a card id appears in more than one place")
        if state.staged_cards:
            hand_ids = {c.card_id for c in state.current_player.hand}
            if any(c.card_id not in hand_ids for c in state.staged_cards):
                raise CorruptStateError("staged cards are not all in the current hand")

    def _validate_action(self, state: GameState, action: Action) -> tuple[str, ErrorCode] | None:
        """
        Validate that an action is legal in the current state.

        Returns (message, code) if invalid, None if valid.
        """
        if state.phase == GamePhase.GAME_OVER:
            return "Game is over - no actions allowed", ErrorCode.GAME_OVER

        if state.phase == GamePhase.LOBBY:
            if action.action_type != ActionType.START_GAME:
                return "Game not started - only start_game allowed", ErrorCode.NOT_STARTED
        elif action.action_type == ActionType.START_GAME:
            return "Game already started", ErrorCode.WRONG_PHASE

        player = state.get_player(action.player_id) if action.player_id else None
        if player is None:
            return f"Player {action.player_id} not found", ErrorCode.PLAYER_NOT_FOUND

        if action.action_type not in OFF_TURN_ACTIONS:
            if action.player_id != state.current_player.player_id:
                return f"Not {player.name}'s turn", ErrorCode.NOT_YOUR_TURN

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        return self.handlers()[action_type]

    def handlers(self) -> dict:
        return {
            ActionType.START_GAME: self._handle_start_game,
            ActionType.BEGIN_TURN: self._handle_begin_turn,
            ActionType.ROLL_DICE: self._handle_roll_dice,
            ActionType.CONFIRM_EQUATION: self._handle_confirm_equation,
            ActionType.STAGE_CARD: self._handle_stage_card,
            ActionType.UNSTAGE_CARD: self._handle_unstage_card,
            ActionType.CONFIRM_STAGED: self._handle_confirm_staged,
            ActionType.PLAY_IDENTICAL: self._handle_play_identical,
            ActionType.PLAY_FRACTION: self._handle_play_fraction,
            ActionType.DEFEND_FRACTION_SOLVE: self._handle_defend_fraction_solve,
            ActionType.DEFEND_FRACTION_PENALTY: self._handle_defend_fraction_penalty,
            ActionType.PLAY_OPERATION: self._handle_play_operation,
            ActionType.PLAY_JOKER: self._handle_play_joker,
            ActionType.DRAW_CARD: self._handle_draw_card,
            ActionType.CALL_LULOS: self._handle_call_lulos,
            ActionType.END_TURN: self._handle_end_turn,
        }

    # =========================================================================
    # Setup and turn boundaries
    # =========================================================================

    def _handle_start_game(self, state: GameState, action: Action) -> ActionResult:
        """Deal a fresh game to the lobby roster."""
        player = state.get_player(action.player_id)
        if any(p.is_host for p in state.players) and not player.is_host:
            return ActionResult.failure("Only the host can start the game", ErrorCode.INVALID_SETUP)
        try:
            difficulty = Difficulty(action.payload.difficulty or Difficulty.FULL.value)
        except ValueError:
            return ActionResult.failure(
                f"Unknown difficulty: {action.payload.difficulty}", ErrorCode.INVALID_SETUP,
            )
        if state.num_players < self.config.min_players:
            return ActionResult.failure(
                f"At least {self.config.min_players} players are needed", ErrorCode.INVALID_SETUP,
            )

        roster = [
            Seat(player_id=p.player_id, name=p.name, is_host=p.is_host, is_connected=p.is_connected)
            for p in state.players
        ]
        new_state = start_game(roster, difficulty, self.rng, self.config, game_id=state.game_id)
        return ActionResult.success_with_state(
            new_state, changes=[f"Game started ({difficulty.value})"],
        )

    def _handle_begin_turn(self, state: GameState, action: Action) -> ActionResult:
        if state.phase != GamePhase.TURN_TRANSITION:
            return ActionResult.failure("The turn has already begun", ErrorCode.WRONG_PHASE)
        new_state = begin_turn(state, self.rng, self.config)
        return ActionResult.success_with_state(
            new_state, changes=[f"{state.current_player.name}'s turn began"],
        )

    def _handle_end_turn(self, state: GameState, action: Action) -> ActionResult:
        if state.phase not in PLAYING_PHASES:
            return ActionResult.failure("Cannot end the turn now", ErrorCode.WRONG_PHASE)
        if fraction_attack_open(state):
            return ActionResult.failure(
                "Resolve the fraction attack before ending the turn", ErrorCode.OBLIGATION_PENDING,
            )
        new_state = end_turn(state, self.rng, self.config)
        return ActionResult.success_with_state(
            new_state, changes=[f"{state.current_player.name} ended the turn"],
        )

    # =========================================================================
    # Dice and equation
    # =========================================================================

    def _handle_roll_dice(self, state: GameState, action: Action) -> ActionResult:
        """Roll, apply the triple bonus, and compute the target set."""
        if state.phase != GamePhase.PRE_ROLL:
            return ActionResult.failure("Cannot roll the dice now", ErrorCode.WRONG_PHASE)
        if state.has_played_cards:
            return ActionResult.failure(
                "You already played this turn - end your turn", ErrorCode.ALREADY_PLAYED,
            )
        if fraction_attack_open(state) or operation_challenge_open(state):
            return ActionResult.failure(
                "Answer the pending attack before rolling", ErrorCode.OBLIGATION_PENDING,
            )

        dice = roll_dice(self.rng)
        new_state = state._copy_with(dice=dice, message="")
        changes = [f"{state.current_player.name} rolled {dice.die1}, {dice.die2}, {dice.die3}"]

        if is_triple(dice):
            for idx in range(new_state.num_players):
                if idx != state.current_player_idx:
                    new_state = draw_cards(new_state, idx, dice.die1, self.rng)
            bonus = f"Triple {dice.die1}! Every other player draws {dice.die1} cards."
            new_state = new_state._copy_with(message=bonus)
            changes.append(bonus)

        new_state = new_state._copy_with(
            valid_targets=tuple(generate_valid_targets(dice)),
            phase=GamePhase.BUILDING,
            active_operation=None,
            consecutive_identical_plays=0,
        )
        return ActionResult.success_with_state(new_state, changes=changes)

    def _handle_confirm_equation(self, state: GameState, action: Action) -> ActionResult:
        """Accept a result only if it is in the server-side target set."""
        if state.phase != GamePhase.BUILDING:
            return ActionResult.failure("Not building an equation", ErrorCode.WRONG_PHASE)
        result = action.payload.result
        match = next((t for t in state.valid_targets if t.result == result), None)
        if match is None:
            return ActionResult.failure(
                f"{result} cannot be reached with these dice", ErrorCode.INVALID_EQUATION,
            )
        new_state = state._copy_with(
            phase=GamePhase.SOLVED,
            equation_result=match.result,
            last_equation_display=action.payload.display or match.display,
            staged_cards=(),
            message="",
        )
        return ActionResult.success_with_state(new_state, changes=[f"Target {result} confirmed"])

    # =========================================================================
    # Staging and discarding
    # =========================================================================

    def _handle_stage_card(self, state: GameState, action: Action) -> ActionResult:
        if state.phase != GamePhase.SOLVED or state.has_played_cards:
            return ActionResult.failure("Cannot stage a card now", ErrorCode.WRONG_PHASE)
        card = state.current_player.find_card(action.payload.card_id)
        if card is None:
            return ActionResult.failure(f"Card {action.payload.card_id} not in hand", ErrorCode.CARD_NOT_FOUND)
        if any(c.card_id == card.card_id for c in state.staged_cards):
            return ActionResult.failure("Card is already staged", ErrorCode.INVALID_CARD)
        if card.card_type not in (CardType.NUMBER, CardType.OPERATION):
            return ActionResult.failure("Only number or operation cards can be staged", ErrorCode.INVALID_CARD)
        if card.card_type == CardType.OPERATION and any(
            c.card_type == CardType.OPERATION for c in state.staged_cards
        ):
            return ActionResult.failure("Only one operation card can be staged", ErrorCode.INVALID_CARD)

        new_state = state._copy_with(staged_cards=state.staged_cards + (card,), message="")
        return ActionResult.success_with_state(new_state, changes=[f"Staged {card.label}"])

    def _handle_unstage_card(self, state: GameState, action: Action) -> ActionResult:
        if state.phase != GamePhase.SOLVED:
            return ActionResult.failure("Nothing to unstage now", ErrorCode.WRONG_PHASE)
        card_id = action.payload.card_id
        if not any(c.card_id == card_id for c in state.staged_cards):
            return ActionResult.failure(f"Card {card_id} is not staged", ErrorCode.CARD_NOT_FOUND)
        new_state = state._copy_with(
            staged_cards=tuple(c for c in state.staged_cards if c.card_id != card_id),
            message="",
        )
        return ActionResult.success_with_state(new_state, changes=[f"Unstaged {card_id}"])

    def _handle_confirm_staged(self, state: GameState, action: Action) -> ActionResult:
        """
        Discard the staged cards if they reach the confirmed result.

        A staged operation card goes on top and becomes an operation
        challenge for the next player. The turn ends.
        """
        if state.phase != GamePhase.SOLVED or state.has_played_cards:
            return ActionResult.failure("Cannot confirm now", ErrorCode.WRONG_PHASE)
        numbers = [c for c in state.staged_cards if c.card_type == CardType.NUMBER]
        op_cards = [c for c in state.staged_cards if c.card_type == CardType.OPERATION]
        op_card = op_cards[0] if op_cards else None
        if not numbers:
            return ActionResult.failure("Stage at least one number card", ErrorCode.INVALID_COMBINATION)
        if state.equation_result is None:
            return ActionResult.failure("No confirmed equation result", ErrorCode.WRONG_PHASE)
        if not validate_staged_cards(numbers, op_card, state.equation_result):
            return ActionResult.failure(
                f"These cards do not reach {state.equation_result}", ErrorCode.INVALID_COMBINATION,
            )

        player = state.current_player
        discards = numbers + ([op_card] if op_card else [])
        last_number = numbers[-1]
        new_operation = op_card.operation if op_card else state.active_operation
        if op_card:
            toast = f"{player.name} played {op_card.operation.value} - challenge!"
        else:
            toast = f"{player.name}: {state.last_equation_display or ''} -> played {last_number.value}"

        new_state = discard_from_hand(state, discards)._copy_with(
            staged_cards=(),
            consecutive_identical_plays=0,
            has_played_cards=True,
            last_card_value=last_number.value,
            active_operation=new_operation,
            last_move_message=toast,
            last_equation_display=None,
            message=f"Operation challenge {op_card.operation.value} for the next player!" if op_card else "",
        )
        new_state = check_win(new_state, self.rng)
        if new_state.phase != GamePhase.GAME_OVER:
            new_state = end_turn(new_state, self.rng, self.config)
        return ActionResult.success_with_state(new_state, changes=[toast])

    def _handle_play_identical(self, state: GameState, action: Action) -> ActionResult:
        """Match the discard top before rolling; the turn ends at once."""
        if state.phase != GamePhase.PRE_ROLL:
            return ActionResult.failure("Identical cards are played before rolling", ErrorCode.WRONG_PHASE)
        if state.has_played_cards:
            return ActionResult.failure("You already played this turn", ErrorCode.ALREADY_PLAYED)
        if fraction_attack_open(state) or operation_challenge_open(state):
            return ActionResult.failure("Answer the pending attack first", ErrorCode.OBLIGATION_PENDING)
        if state.consecutive_identical_plays >= self.config.identical_play_limit:
            return ActionResult.failure(
                "Identical-card limit reached - roll the dice", ErrorCode.IDENTICAL_LIMIT,
            )
        card = state.current_player.find_card(action.payload.card_id)
        if card is None:
            return ActionResult.failure(f"Card {action.payload.card_id} not in hand", ErrorCode.CARD_NOT_FOUND)
        if not validate_identical_play(card, state.pile_top):
            return ActionResult.failure("Card does not match the discard top", ErrorCode.INVALID_CARD)

        toast = f"{state.current_player.name} matched {card.label} - no dice this turn"
        new_state = discard_from_hand(state, [card])._copy_with(
            has_played_cards=True,
            consecutive_identical_plays=state.consecutive_identical_plays + 1,
            last_card_value=card.value if card.card_type == CardType.NUMBER else None,
            last_move_message=toast,
            message="",
        )
        new_state = check_win(new_state, self.rng)
        if new_state.phase != GamePhase.GAME_OVER:
            new_state = end_turn(new_state, self.rng, self.config)
        return ActionResult.success_with_state(new_state, changes=[toast])

    # =========================================================================
    # Fraction attacks
    # =========================================================================

    def _handle_play_fraction(self, state: GameState, action: Action) -> ActionResult:
        """
        Attack a number on the discard top, or block a pending attack.

        Either way the obligation is divided by the card's denominator
        and passed to the next player immediately.
        """
        if state.has_played_cards:
            return ActionResult.failure("You already played this turn", ErrorCode.ALREADY_PLAYED)
        card = state.current_player.find_card(action.payload.card_id)
        if card is None or card.card_type != CardType.FRACTION:
            return ActionResult.failure("Fraction card not in hand", ErrorCode.CARD_NOT_FOUND)
        denominator = card.fraction.denominator
        player = state.current_player

        if fraction_attack_open(state):
            if state.phase != GamePhase.PRE_ROLL:
                return ActionResult.failure("Blocks are played before rolling", ErrorCode.WRONG_PHASE)
            if state.pending_fraction_target % denominator != 0:
                return ActionResult.failure(
                    f"{card.fraction.value} does not divide {state.pending_fraction_target}",
                    ErrorCode.INVALID_CARD,
                )
            new_target = state.pending_fraction_target // denominator
            verb = "blocked with"
        else:
            if state.phase not in PLAYING_PHASES:
                return ActionResult.failure("Cannot play a fraction now", ErrorCode.WRONG_PHASE)
            if operation_challenge_open(state):
                return ActionResult.failure(
                    "Answer the operation challenge first", ErrorCode.OBLIGATION_PENDING,
                )
            top = state.pile_top
            if not validate_fraction_play(card, top):
                return ActionResult.failure(
                    "The fraction cannot divide the discard top", ErrorCode.INVALID_CARD,
                )
            new_target = top.value // denominator
            verb = "attacked with"

        toast = f"{player.name} {verb} {card.fraction.value} - challenge!"
        new_state = discard_from_hand(state, [card])._copy_with(has_played_cards=True)
        new_state = check_win(new_state, self.rng)
        if new_state.phase == GamePhase.GAME_OVER:
            return ActionResult.success_with_state(new_state, changes=[toast])

        new_state = advance_turn(
            new_state,
            pending_fraction_target=new_target,
            fraction_penalty=denominator,
            consecutive_identical_plays=0,
            last_move_message=toast,
            message=f"{player.name} {verb} {card.fraction.value}! Next target: {new_target}.",
        )
        return ActionResult.success_with_state(new_state, changes=[toast])

    def _handle_defend_fraction_solve(self, state: GameState, action: Action) -> ActionResult:
        """Answer a fraction attack with the exact number; the turn goes on."""
        if not fraction_attack_open(state):
            return ActionResult.failure("No fraction attack to defend", ErrorCode.NO_ATTACK)
        if state.phase != GamePhase.PRE_ROLL:
            return ActionResult.failure("Defend before rolling", ErrorCode.WRONG_PHASE)
        card = state.current_player.find_card(action.payload.card_id)
        if card is None:
            return ActionResult.failure(f"Card {action.payload.card_id} not in hand", ErrorCode.CARD_NOT_FOUND)
        if card.card_type != CardType.NUMBER or card.value != state.pending_fraction_target:
            return ActionResult.failure(
                f"Defend with a {state.pending_fraction_target}", ErrorCode.INVALID_CARD,
            )

        new_state = discard_from_hand(state, [card])._copy_with(
            pending_fraction_target=None,
            fraction_penalty=0,
            fraction_attack_resolved=True,
            last_card_value=card.value,
            message="Successful defense!",
        )
        new_state = check_win(new_state, self.rng)
        if new_state.phase != GamePhase.GAME_OVER:
            new_state = new_state._copy_with(phase=GamePhase.PRE_ROLL, has_played_cards=False)
        return ActionResult.success_with_state(
            new_state, changes=[f"{state.current_player.name} defended with {card.value}"],
        )

    def _handle_defend_fraction_penalty(self, state: GameState, action: Action) -> ActionResult:
        """Accept a fraction attack: draw the penalty and end the turn."""
        if not fraction_attack_open(state):
            return ActionResult.failure("No fraction attack to accept", ErrorCode.NO_ATTACK)
        if state.phase != GamePhase.PRE_ROLL:
            return ActionResult.failure("Cannot accept the penalty now", ErrorCode.WRONG_PHASE)

        player = state.current_player
        penalty = state.fraction_penalty
        toast = f"{player.name} drew {penalty} penalty cards"
        new_state = draw_cards(state, state.current_player_idx, penalty, self.rng)
        new_state = new_state._copy_with(
            pending_fraction_target=None,
            fraction_penalty=0,
            fraction_attack_resolved=True,
            last_move_message=toast,
            message=f"{toast}.",
        )
        new_state = end_turn(new_state, self.rng, self.config)
        return ActionResult.success_with_state(new_state, changes=[toast])

    # =========================================================================
    # Operation attacks
    # =========================================================================

    def _handle_play_operation(self, state: GameState, action: Action) -> ActionResult:
        """
        Lay an operation card as a challenge for the next player.

        While answering a challenge the card must match it. The turn does
        not advance; the player ends it explicitly.
        """
        if state.phase not in (GamePhase.PRE_ROLL, GamePhase.SOLVED):
            return ActionResult.failure("Cannot play an operation now", ErrorCode.WRONG_PHASE)
        if state.has_played_cards:
            return ActionResult.failure("You already played this turn", ErrorCode.ALREADY_PLAYED)
        if fraction_attack_open(state):
            return ActionResult.failure("Answer the fraction attack first", ErrorCode.OBLIGATION_PENDING)
        card = state.current_player.find_card(action.payload.card_id)
        if card is None or card.card_type != CardType.OPERATION:
            return ActionResult.failure("Operation card not in hand", ErrorCode.CARD_NOT_FOUND)
        if operation_challenge_open(state) and card.operation != state.active_operation:
            return ActionResult.failure(
                f"Defend with {state.active_operation.value} or a joker", ErrorCode.INVALID_CARD,
            )
        return self._lay_operation(state, card, card.operation)

    def _handle_play_joker(self, state: GameState, action: Action) -> ActionResult:
        """A joker stands in for any operation, chosen as it is played."""
        if state.phase not in (GamePhase.PRE_ROLL, GamePhase.SOLVED):
            return ActionResult.failure("Cannot play a joker now", ErrorCode.WRONG_PHASE)
        if state.has_played_cards:
            return ActionResult.failure("You already played this turn", ErrorCode.ALREADY_PLAYED)
        if fraction_attack_open(state):
            return ActionResult.failure("Answer the fraction attack first", ErrorCode.OBLIGATION_PENDING)
        card = state.current_player.find_card(action.payload.card_id)
        if card is None or card.card_type != CardType.JOKER:
            return ActionResult.failure("Joker not in hand", ErrorCode.CARD_NOT_FOUND)
        try:
            operation = Operation.parse(action.payload.operation)
        except ValueError:
            return ActionResult.failure(
                f"Unknown operation: {action.payload.operation}", ErrorCode.INVALID_CARD,
            )
        return self._lay_operation(state, card, operation)

    def _lay_operation(self, state: GameState, card: Card, operation: Operation) -> ActionResult:
        toast = f"{state.current_player.name} played {operation.value} - challenge!"
        new_state = discard_from_hand(state, [card])._copy_with(
            active_operation=operation,
            has_played_cards=True,
            staged_cards=(),
            last_move_message=toast,
            message="",
        )
        new_state = check_win(new_state, self.rng)
        return ActionResult.success_with_state(new_state, changes=[toast])

    # =========================================================================
    # Drawing and Lolos
    # =========================================================================

    def _handle_draw_card(self, state: GameState, action: Action) -> ActionResult:
        """Draw one card and end the turn; an exhausted table just spends the draw."""
        if state.phase not in PLAYING_PHASES:
            return ActionResult.failure("Cannot draw now", ErrorCode.WRONG_PHASE)
        if state.has_played_cards or state.has_drawn_card:
            return ActionResult.failure("Cannot draw a card now", ErrorCode.ALREADY_PLAYED)
        if fraction_attack_open(state):
            return ActionResult.failure("Answer the fraction attack first", ErrorCode.OBLIGATION_PENDING)

        player = state.current_player
        new_state = reshuffle_discard(state, self.rng)
        if not new_state.draw_pile:
            new_state = new_state._copy_with(has_drawn_card=True, message="No cards left to draw.")
            return ActionResult.success_with_state(new_state, changes=["Draw pile exhausted"])

        toast = f"{player.name} drew a card"
        new_state = draw_cards(new_state, state.current_player_idx, 1, self.rng)
        new_state = new_state._copy_with(has_drawn_card=True, last_move_message=toast)
        new_state = end_turn(new_state, self.rng, self.config)
        return ActionResult.success_with_state(new_state, changes=[toast])

    def _handle_call_lulos(self, state: GameState, action: Action) -> ActionResult:
        """Any player may declare Lolos for themselves while holding few enough cards."""
        idx = state.player_index(action.player_id)
        player = state.players[idx]
        if player.card_count > self.config.lolos_call_limit:
            return ActionResult.failure("Too many cards to call Lolos", ErrorCode.TOO_MANY_CARDS)
        new_state = state.with_player_at(idx, replace(player, called_lolos=True))._copy_with(
            message=f"{player.name} called Lolos!",
        )
        return ActionResult.success_with_state(new_state, changes=[f"{player.name} called Lolos"])


def apply_action(
    state: GameState,
    action: Action,
    rng: random.Random | None = None,
    config: GameConfig = DEFAULT_CONFIG,
) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(config=config, rng=rng or random.Random())
    return reducer.apply(state, action)
