"""
Game Setup - Creates the initial game state.

This module handles:
- Building and shuffling a fresh deck
- Round-robin dealing of starting hands
- Seeding the discard pile with a number card where possible

The result is a state in turn-transition with the first seat to act.
"""

from __future__ import annotations
import logging
import random
import uuid

from .state import Difficulty, GamePhase, GameState, PlayerState, Seat
from .deck import DeckBuilder, deal, seed_discard, shuffle
from ..config import GameConfig, DEFAULT_CONFIG

logger = logging.getLogger(__name__)


def create_lobby(roster: list[Seat], game_id: str | None = None) -> GameState:
    """A pre-game state holding the roster and nothing else."""
    return GameState(
        game_id=game_id or str(uuid.uuid4()),
        phase=GamePhase.LOBBY,
        players=tuple(_player_from_seat(seat) for seat in roster),
    )


def start_game(
    roster: list[Seat],
    difficulty: Difficulty | str = Difficulty.FULL,
    rng: random.Random | None = None,
    config: GameConfig = DEFAULT_CONFIG,
    game_id: str | None = None,
) -> GameState:
    """
    Set up a new Lolos game.

    Args:
        roster: Seats from the room, in turn order
        difficulty: easy (numbers 0-12) or full (numbers 0-25)
        rng: Randomness source; pass a seeded Random for reproducible games
        config: Rule constants
        game_id: Identifier to carry through (generated if omitted)

    Returns:
        Initial GameState in turn-transition for the first seat

    Raises:
        ValueError: fewer players than the configured minimum
    """
    if len(roster) < config.min_players:
        raise ValueError(f"Lolos needs at least {config.min_players} players")

    difficulty = Difficulty(difficulty)
    rng = rng or random.Random()

    deck = shuffle(DeckBuilder(config).build_deck(difficulty), rng)
    hands, remainder = deal(deck, len(roster), config.cards_per_player)
    first_discard, draw_pile = seed_discard(remainder)

    players = tuple(
        _player_from_seat(seat).with_cards(tuple(hand))
        for seat, hand in zip(roster, hands)
    )

    state = GameState(
        game_id=game_id or str(uuid.uuid4()),
        phase=GamePhase.TURN_TRANSITION,
        difficulty=difficulty,
        players=players,
        current_player_idx=0,
        draw_pile=tuple(draw_pile),
        discard_pile=(first_discard,) if first_discard else (),
    )
    logger.info(
        "Started %s game %s with %d players, %d cards in the draw pile",
        difficulty.value, state.game_id, len(players), len(state.draw_pile),
    )
    return state


def _player_from_seat(seat: Seat) -> PlayerState:
    return PlayerState(
        player_id=seat.player_id,
        name=seat.name,
        is_connected=seat.is_connected,
        is_host=seat.is_host,
    )
