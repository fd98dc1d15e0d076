"""
Turn State Machine - Pile mechanics, win check, turn boundaries.

Every function takes a GameState and returns a new one. Randomness
(reshuffles) comes from the rng the reducer passes in.
"""

from __future__ import annotations
from dataclasses import replace
import logging
import random

from .state import Card, CardType, GamePhase, GameState, Operation
from .deck import shuffle
from ..config import GameConfig, DEFAULT_CONFIG

logger = logging.getLogger(__name__)


def reshuffle_discard(state: GameState, rng: random.Random) -> GameState:
    """
    Turn the discard pile (all but its top) into a fresh draw pile.

    No-op while the draw pile still has cards or the discard pile
    cannot spare any.
    """
    if state.draw_pile or len(state.discard_pile) <= 1:
        return state
    top = state.discard_pile[-1]
    logger.debug("Reshuffling %d discards into the draw pile", len(state.discard_pile) - 1)
    return state._copy_with(
        draw_pile=tuple(shuffle(state.discard_pile[:-1], rng)),
        discard_pile=(top,),
    )


def draw_cards(state: GameState, player_idx: int, count: int, rng: random.Random) -> GameState:
    """Draw up to count cards for a player, stopping quietly when none are left."""
    drawn: list[Card] = []
    for _ in range(count):
        if not state.draw_pile:
            state = reshuffle_discard(state, rng)
        if not state.draw_pile:
            break
        drawn.append(state.draw_pile[0])
        state = state._copy_with(draw_pile=state.draw_pile[1:])
    if not drawn:
        return state
    player = state.players[player_idx]
    return state.with_player_at(player_idx, player.with_cards(tuple(drawn)))


def discard_from_hand(state: GameState, cards: list[Card]) -> GameState:
    """Move cards from the current player's hand onto the discard pile, in order."""
    ids = {c.card_id for c in cards}
    player = state.current_player.without_cards(ids)
    state = state.with_current_player(player)
    return state._copy_with(discard_pile=state.discard_pile + tuple(cards))


def check_win(state: GameState, rng: random.Random) -> GameState:
    """
    Evaluate the win condition after cards left the current player's hand.

    An empty hand wins outright after a Lolos call. Without the call the
    player draws one penalty card and still wins if nothing could be drawn.
    """
    player = state.current_player
    if player.hand:
        return state
    if player.called_lolos:
        logger.info("%s wins game %s", player.name, state.game_id)
        return state._copy_with(phase=GamePhase.GAME_OVER, winner_id=player.player_id)

    state = draw_cards(state, state.current_player_idx, 1, rng)
    if not state.current_player.hand:
        logger.info("%s wins game %s with an empty draw pile", player.name, state.game_id)
        return state._copy_with(phase=GamePhase.GAME_OVER, winner_id=player.player_id)
    return state._copy_with(
        lolos_penalty_applied=True,
        message=f"{player.name} forgot to call Lolos! Drew one penalty card.",
    )


def advance_turn(
    state: GameState,
    active_operation: Operation | None = None,
    pending_fraction_target: int | None = None,
    fraction_penalty: int = 0,
    **changes,
) -> GameState:
    """
    Pass the turn to the next player.

    Clears dice, targets, staged cards and per-turn flags, resets every
    player's Lolos call, and carries only the obligations given here.
    The identical-play streak is table-wide and is not reset.
    """
    next_idx = (state.current_player_idx + 1) % state.num_players
    return state._copy_with(
        players=tuple(replace(p, called_lolos=False) for p in state.players),
        current_player_idx=next_idx,
        phase=GamePhase.TURN_TRANSITION,
        turn_number=state.turn_number + 1,
        dice=None,
        valid_targets=(),
        equation_result=None,
        staged_cards=(),
        active_operation=active_operation,
        pending_fraction_target=pending_fraction_target,
        fraction_penalty=fraction_penalty,
        fraction_attack_resolved=False,
        has_played_cards=False,
        has_drawn_card=False,
        last_card_value=None,
        lolos_penalty_applied=False,
        **changes,
    )


def end_turn(
    state: GameState,
    rng: random.Random,
    config: GameConfig = DEFAULT_CONFIG,
) -> GameState:
    """
    Close the current turn and hand over to the next player.

    An operation challenge left unanswered costs the penalty draw; an
    operation played this turn is carried to the next player. A player
    left at the Lolos hand size without having called draws one card.
    """
    player_name = state.current_player.name
    carry_operation = None

    if state.active_operation is not None and not state.has_played_cards:
        state = draw_cards(state, state.current_player_idx, config.operation_penalty, rng)
        state = state._copy_with(
            message=f"{player_name} takes the {state.active_operation.value} penalty "
                    f"and draws {config.operation_penalty}.",
        )
    elif state.active_operation is not None:
        carry_operation = state.active_operation

    player = state.current_player
    if (
        player.card_count == config.lolos_penalty_hand_size
        and not player.called_lolos
        and not state.lolos_penalty_applied
    ):
        state = draw_cards(state, state.current_player_idx, 1, rng)
        state = state._copy_with(
            lolos_penalty_applied=True,
            message=f"{player_name} forgot to call Lolos! Drew one penalty card.",
        )

    return advance_turn(state, active_operation=carry_operation)


def has_operation_defense(state: GameState) -> bool:
    """Does the current player hold a matching operation card or a joker."""
    for card in state.current_player.hand:
        if card.card_type == CardType.JOKER:
            return True
        if card.card_type == CardType.OPERATION and card.operation == state.active_operation:
            return True
    return False


def begin_turn(
    state: GameState,
    rng: random.Random,
    config: GameConfig = DEFAULT_CONFIG,
) -> GameState:
    """
    Open the current player's turn and move to pre-roll.

    A player who cannot answer a pending operation challenge draws the
    penalty at once; otherwise pending obligations stay for explicit
    resolution.
    """
    if state.active_operation is not None:
        op = state.active_operation.value
        if has_operation_defense(state):
            return state._copy_with(
                phase=GamePhase.PRE_ROLL,
                message=f"Operation {op}! Play a matching operation or a joker, "
                        f"or end your turn and draw {config.operation_penalty}.",
            )
        state = draw_cards(state, state.current_player_idx, config.operation_penalty, rng)
        return state._copy_with(
            phase=GamePhase.PRE_ROLL,
            active_operation=None,
            message=f"No defense against {op}! Drew {config.operation_penalty} penalty cards.",
        )

    if fraction_attack_open(state):
        return state._copy_with(
            phase=GamePhase.PRE_ROLL,
            message=f"Fraction attack! Play a {state.pending_fraction_target}, block with a "
                    f"fraction, or draw {state.fraction_penalty}.",
        )

    return state._copy_with(
        phase=GamePhase.PRE_ROLL,
        pending_fraction_target=None,
        fraction_penalty=0,
        fraction_attack_resolved=False,
        message="",
    )


def operation_challenge_open(state: GameState) -> bool:
    """An operation challenge aimed at the current player is still unanswered."""
    return state.active_operation is not None and not state.has_played_cards


def fraction_attack_open(state: GameState) -> bool:
    return state.pending_fraction_target is not None and not state.fraction_attack_resolved
