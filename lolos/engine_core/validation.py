"""
Card validators - Legality checks for discarding cards.

These are distinct from dice-target enumeration: the values here are
cards the player chose, and the target is already fixed.
"""

from __future__ import annotations
from itertools import combinations
from typing import Iterable

from .state import Card, CardType, Operation
from .arithmetic import apply_operation, is_divisible_by_fraction


def validate_identical_play(card: Card, top: Card | None) -> bool:
    """A card is identical when type and payload match the discard top."""
    if top is None or card.card_type != top.card_type:
        return False
    if card.card_type == CardType.NUMBER:
        return card.value == top.value
    if card.card_type == CardType.FRACTION:
        return card.fraction == top.fraction
    if card.card_type == CardType.OPERATION:
        return card.operation == top.operation
    return True  # joker on joker


def validate_fraction_play(card: Card, top: Card | None) -> bool:
    """A fraction attacks a positive number top that it divides evenly."""
    if card.card_type != CardType.FRACTION or top is None:
        return False
    if top.card_type != CardType.NUMBER or top.value is None:
        return False
    return is_divisible_by_fraction(top.value, card.fraction)


def validate_staged_cards(
    number_cards: list[Card],
    op_card: Card | None,
    target: int,
) -> bool:
    """
    Check whether staged number cards (and at most one operation) reach target.

    Without an operation card the values are summed. With one, the cards
    are evaluated strictly left to right with the operation in one gap
    and + in every other gap, for any ordering. That shape always reduces
    to (sum of a non-empty group) op (one card) + (sum of the rest), which
    is what gets enumerated here instead of every permutation.
    """
    values = [c.value or 0 for c in number_cards]
    if not values:
        return False
    if op_card is None:
        return sum(values) == target

    op = op_card.operation
    indices = range(len(values))
    for pivot in indices:
        others = [i for i in indices if i != pivot]
        for size in range(1, len(others) + 1):
            for group in combinations(others, size):
                left = sum(values[i] for i in group)
                result = apply_operation(left, op, values[pivot])
                if result is None:
                    continue
                rest = sum(values[i] for i in others if i not in group)
                if result + rest == target:
                    return True
    return False


def compute_staged_result(staged: Iterable[Card]) -> int | None:
    """
    Preview the value of staged cards in staging order.

    Numbers are joined with + unless an operation card precedes them.
    """
    result: int | None = None
    pending = Operation.ADD
    saw_number = False
    for card in staged:
        if card.card_type == CardType.OPERATION:
            pending = card.operation
            continue
        if card.card_type != CardType.NUMBER:
            continue
        saw_number = True
        if result is None:
            result = card.value or 0
        else:
            result = apply_operation(result, pending, card.value or 0)
            pending = Operation.ADD
        if result is None:
            return None
    return result if saw_number else None


def can_sum_to_target(cards: Iterable[Card], target: int) -> bool:
    """True when some non-empty subset of number cards sums to target."""
    values = [c.value or 0 for c in cards if c.card_type == CardType.NUMBER]
    reachable: set[int] = set()
    for value in values:
        reachable |= {value} | {value + r for r in reachable}
    return target in reachable


def can_play_anything(
    hand: Iterable[Card],
    top: Card | None,
    target: int | None,
    identical_count: int,
    identical_limit: int = 2,
) -> bool:
    """Hint: does the hand hold any card that could legally leave it now."""
    hand = list(hand)
    if identical_count < identical_limit:
        if any(validate_identical_play(card, top) for card in hand):
            return True
    if any(c.card_type in (CardType.OPERATION, CardType.JOKER) for c in hand):
        return True
    if any(validate_fraction_play(c, top) for c in hand):
        return True
    if target is not None and can_sum_to_target(hand, target):
        return True
    return False
