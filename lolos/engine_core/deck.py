"""
Deck Builder - Card multiset construction, shuffling and dealing.

Card ids come from a counter owned by each DeckBuilder instance, so two
games running side by side never share or collide on ids.
"""

from __future__ import annotations
import random

from .state import Card, CardType, Difficulty, Fraction, Operation
from ..config import GameConfig, DEFAULT_CONFIG


NUMBER_COPIES = 4
FRACTION_COUNTS = {
    Fraction.HALF: 6,
    Fraction.THIRD: 4,
    Fraction.QUARTER: 4,
    Fraction.FIFTH: 4,
}
OPERATION_COPIES = 4
JOKER_COUNT = 4


class DeckBuilder:
    """
    Builds a fresh Lolos deck.

    Usage:
        builder = DeckBuilder()
        cards = builder.build_deck(Difficulty.FULL)
    """

    def __init__(self, config: GameConfig = DEFAULT_CONFIG):
        self.config = config
        self._next_id = 0

    def _make_id(self) -> str:
        self._next_id += 1
        return f"card-{self._next_id}"

    def reset(self):
        self._next_id = 0

    def build_deck(self, difficulty: Difficulty) -> list[Card]:
        """Return the full, unshuffled card list for a difficulty."""
        self.reset()
        max_number = self.config.max_number_for(difficulty)
        cards: list[Card] = []

        for _ in range(NUMBER_COPIES):
            for value in range(max_number + 1):
                cards.append(Card.number(self._make_id(), value))

        for fraction, count in FRACTION_COUNTS.items():
            for _ in range(count):
                cards.append(Card.of_fraction(self._make_id(), fraction))

        for operation in Operation:
            for _ in range(OPERATION_COPIES):
                cards.append(Card.of_operation(self._make_id(), operation))

        for _ in range(JOKER_COUNT):
            cards.append(Card.joker(self._make_id()))

        return cards


def shuffle(cards, rng: random.Random | None = None) -> list[Card]:
    """Return a uniformly shuffled copy; the input is left untouched."""
    rng = rng or random.Random()
    shuffled = list(cards)
    rng.shuffle(shuffled)
    return shuffled


def deal(
    deck: list[Card],
    player_count: int,
    per_player: int = 10,
) -> tuple[list[list[Card]], list[Card]]:
    """
    Deal round-robin, one card per player per round.

    Returns (hands, remainder). Stops early if the deck runs out.
    """
    hands: list[list[Card]] = [[] for _ in range(player_count)]
    idx = 0
    for _ in range(per_player):
        for p in range(player_count):
            if idx < len(deck):
                hands[p].append(deck[idx])
                idx += 1
    return hands, deck[idx:]


def seed_discard(remainder: list[Card]) -> tuple[Card | None, list[Card]]:
    """
    Pick the opening discard card.

    The first number card is preferred so the opening pile can be
    attacked with a fraction. Returns (discard, new remainder).
    """
    for idx, card in enumerate(remainder):
        if card.card_type == CardType.NUMBER:
            return card, remainder[:idx] + remainder[idx + 1:]
    if not remainder:
        return None, []
    return remainder[0], remainder[1:]
