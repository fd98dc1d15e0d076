"""
Game State - The authoritative Lolos aggregate.

Design principles:
- Immutable: every container is a tuple and every dataclass is frozen,
  so a transition shares untouched branches with the previous snapshot
- Closed: a card lives in exactly one hand or pile at any time
- Serializable: plain values only, no random state or callbacks
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum


class CorruptStateError(Exception):
    """The aggregate violates a structural invariant; a caller bug, not a game event."""


class GamePhase(Enum):
    """Phases of the turn state machine."""
    LOBBY = "lobby"
    TURN_TRANSITION = "turn-transition"
    PRE_ROLL = "pre-roll"
    BUILDING = "building"
    SOLVED = "solved"
    GAME_OVER = "game-over"


class CardType(Enum):
    NUMBER = "number"
    FRACTION = "fraction"
    OPERATION = "operation"
    JOKER = "joker"


class Operation(Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "x"
    DIVIDE = "÷"

    @classmethod
    def parse(cls, symbol: str | Operation) -> Operation:
        """Resolve an operator symbol, accepting the usual aliases."""
        if isinstance(symbol, Operation):
            return symbol
        aliases = {"×": "x", "*": "x", "/": "÷"}
        return cls(aliases.get(symbol, symbol))


class Fraction(Enum):
    HALF = "1/2"
    THIRD = "1/3"
    QUARTER = "1/4"
    FIFTH = "1/5"

    @property
    def denominator(self) -> int:
        return int(self.value.split("/")[1])


class Difficulty(Enum):
    EASY = "easy"
    FULL = "full"


@dataclass(frozen=True)
class Card:
    """
    A single physical card.

    Exactly one payload is set, matching the card type. Jokers carry
    no payload; the operation they stand for is recorded when played.
    """
    card_id: str
    card_type: CardType
    value: int | None = None
    fraction: Fraction | None = None
    operation: Operation | None = None

    @classmethod
    def number(cls, card_id: str, value: int) -> Card:
        return cls(card_id=card_id, card_type=CardType.NUMBER, value=value)

    @classmethod
    def of_fraction(cls, card_id: str, fraction: Fraction) -> Card:
        return cls(card_id=card_id, card_type=CardType.FRACTION, fraction=fraction)

    @classmethod
    def of_operation(cls, card_id: str, operation: Operation) -> Card:
        return cls(card_id=card_id, card_type=CardType.OPERATION, operation=operation)

    @classmethod
    def joker(cls, card_id: str) -> Card:
        return cls(card_id=card_id, card_type=CardType.JOKER)

    @property
    def label(self) -> str:
        """Short human-readable face of the card."""
        if self.card_type == CardType.NUMBER:
            return str(self.value)
        if self.card_type == CardType.FRACTION:
            return self.fraction.value
        if self.card_type == CardType.OPERATION:
            return self.operation.value
        return "joker"


@dataclass(frozen=True)
class Seat:
    """
    A roster entry supplied by the room collaborator at game start.

    The engine reads identity and connection flags from it but does not
    own the room lifecycle.
    """
    player_id: str
    name: str
    is_host: bool = False
    is_connected: bool = True


@dataclass(frozen=True)
class PlayerState:
    """State for a single player."""
    player_id: str
    name: str
    hand: tuple[Card, ...] = ()
    called_lolos: bool = False
    is_connected: bool = True
    is_host: bool = False

    @property
    def card_count(self) -> int:
        return len(self.hand)

    def find_card(self, card_id: str) -> Card | None:
        for card in self.hand:
            if card.card_id == card_id:
                return card
        return None

    def without_cards(self, card_ids: set[str]) -> PlayerState:
        """Return new player with the given cards removed from hand."""
        return replace(self, hand=tuple(c for c in self.hand if c.card_id not in card_ids))

    def with_cards(self, cards: tuple[Card, ...]) -> PlayerState:
        """Return new player with cards appended to hand."""
        return replace(self, hand=self.hand + tuple(cards))


@dataclass(frozen=True)
class DiceResult:
    die1: int
    die2: int
    die3: int

    @property
    def values(self) -> tuple[int, int, int]:
        return (self.die1, self.die2, self.die3)


@dataclass(frozen=True)
class EquationOption:
    """A reachable target and the first equation found for it."""
    display: str
    result: int


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    The draw pile's top is the front of the tuple; the discard pile's
    top is the back. All state changes go through the reducer.
    """
    game_id: str
    phase: GamePhase = GamePhase.LOBBY
    difficulty: Difficulty = Difficulty.FULL
    turn_number: int = 0

    players: tuple[PlayerState, ...] = ()
    current_player_idx: int = 0

    draw_pile: tuple[Card, ...] = ()
    discard_pile: tuple[Card, ...] = ()

    # Dice and equation
    dice: DiceResult | None = None
    valid_targets: tuple[EquationOption, ...] = ()
    equation_result: int | None = None
    last_equation_display: str | None = None
    staged_cards: tuple[Card, ...] = ()

    # Obligations carried across a turn boundary
    active_operation: Operation | None = None
    pending_fraction_target: int | None = None
    fraction_penalty: int = 0
    fraction_attack_resolved: bool = False

    # Per-turn flags
    has_played_cards: bool = False
    has_drawn_card: bool = False
    last_card_value: int | None = None
    consecutive_identical_plays: int = 0
    lolos_penalty_applied: bool = False

    winner_id: str | None = None
    message: str = ""
    last_move_message: str | None = None

    action_history: tuple = field(default=(), repr=False)

    @property
    def current_player(self) -> PlayerState:
        """Get the current player."""
        return self.players[self.current_player_idx]

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def pile_top(self) -> Card | None:
        return self.discard_pile[-1] if self.discard_pile else None

    @property
    def winner(self) -> PlayerState | None:
        return self.get_player(self.winner_id) if self.winner_id else None

    @property
    def total_cards(self) -> int:
        """Cards in every hand and both piles; constant for a whole game."""
        in_hands = sum(p.card_count for p in self.players)
        return in_hands + len(self.draw_pile) + len(self.discard_pile)

    def get_player(self, player_id: str) -> PlayerState | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def player_index(self, player_id: str) -> int | None:
        for idx, p in enumerate(self.players):
            if p.player_id == player_id:
                return idx
        return None

    def with_player_at(self, idx: int, player: PlayerState) -> GameState:
        """Return new state with the player at idx replaced."""
        new_players = self.players[:idx] + (player,) + self.players[idx + 1:]
        return self._copy_with(players=new_players)

    def with_current_player(self, player: PlayerState) -> GameState:
        return self.with_player_at(self.current_player_idx, player)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
