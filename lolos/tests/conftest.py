"""
Pytest fixtures for Lolos tests.
"""

import pytest

from ..engine_core.state import Card, GamePhase, GameState, PlayerState, Seat
from ..engine_core.reducer import Reducer


class ScriptedRandom:
    """
    Stands in for random.Random with predictable draws.

    randint pops the next scripted value; shuffle leaves the order as is.
    """

    def __init__(self, rolls=()):
        self.rolls = list(rolls)

    def randint(self, a, b):
        return self.rolls.pop(0)

    def shuffle(self, x):
        pass


@pytest.fixture
def scripted_rng():
    """Factory for a ScriptedRandom with the given dice values."""
    return ScriptedRandom


@pytest.fixture
def reducer_with_rolls():
    """Factory for a Reducer whose dice come out as scripted."""
    def _make(*rolls):
        return Reducer(rng=ScriptedRandom(rolls))
    return _make


@pytest.fixture
def roster() -> list[Seat]:
    return [
        Seat(player_id="alice", name="Alice", is_host=True),
        Seat(player_id="bob", name="Bob"),
    ]


@pytest.fixture
def make_state():
    """
    Factory for a hand-built mid-game state.

    hands maps player id to cards, in seat order; the first seat hosts.
    """
    def _make(
        hands: dict[str, list[Card]],
        draw=(),
        discard=(),
        phase=GamePhase.PRE_ROLL,
        current=0,
        **changes,
    ) -> GameState:
        players = tuple(
            PlayerState(player_id=pid, name=pid.title(), hand=tuple(cards), is_host=(i == 0))
            for i, (pid, cards) in enumerate(hands.items())
        )
        return GameState(
            game_id="test_game",
            phase=phase,
            players=players,
            current_player_idx=current,
            draw_pile=tuple(draw),
            discard_pile=tuple(discard),
            **changes,
        )
    return _make


@pytest.fixture
def filler():
    """Factory for distinct number cards, useful to pad hands and piles."""
    def _make(prefix: str, count: int, value: int = 13) -> list[Card]:
        return [Card.number(f"{prefix}-{i}", value) for i in range(count)]
    return _make
