"""
Arithmetic & Target Engine - Dice, operators and reachable targets.

Division is partial: it only applies when the divisor is non-zero and
divides evenly. An inapplicable branch yields None, never an error.
"""

from __future__ import annotations
from itertools import combinations, permutations, product
import random
import re

from .state import DiceResult, EquationOption, Fraction, Operation


HIGH_PRECEDENCE = {Operation.MULTIPLY, Operation.DIVIDE}


def apply_operation(a: int, op: Operation | str, b: int) -> int | None:
    """Apply a single operator; None when division is inapplicable."""
    op = Operation.parse(op)
    if op == Operation.ADD:
        return a + b
    if op == Operation.SUBTRACT:
        return a - b
    if op == Operation.MULTIPLY:
        return a * b
    if b != 0 and a % b == 0:
        return a // b
    return None


def eval_three_terms(
    a: int, op1: Operation | str, b: int, op2: Operation | str, c: int
) -> int | None:
    """
    Evaluate `a op1 b op2 c`.

    x and ÷ bind tighter than + and -; operators of the same tier
    evaluate left to right.
    """
    op1, op2 = Operation.parse(op1), Operation.parse(op2)
    if op2 in HIGH_PRECEDENCE and op1 not in HIGH_PRECEDENCE:
        right = apply_operation(b, op2, c)
        if right is None:
            return None
        return apply_operation(a, op1, right)
    left = apply_operation(a, op1, b)
    if left is None:
        return None
    return apply_operation(left, op2, c)


def fraction_denominator(fraction: Fraction | str) -> int:
    return Fraction(fraction).denominator


def is_divisible_by_fraction(value: int, fraction: Fraction) -> bool:
    return value > 0 and value % fraction.denominator == 0


def roll_dice(rng: random.Random | None = None) -> DiceResult:
    rng = rng or random.Random()
    return DiceResult(rng.randint(1, 6), rng.randint(1, 6), rng.randint(1, 6))


def is_triple(dice: DiceResult) -> bool:
    return dice.die1 == dice.die2 == dice.die3


def generate_valid_targets(dice: DiceResult) -> list[EquationOption]:
    """
    Enumerate every non-negative integer reachable from a roll.

    Three-dice equations come first (every ordering, every operator
    pair), then each pair of dice with a single operator, tried both
    ways round before moving to the next operator.
    The first equation found for a result wins; output is sorted by result.
    """
    found: dict[int, EquationOption] = {}

    def keep(display: str, result: int | None):
        if result is None or result < 0 or result in found:
            return
        found[result] = EquationOption(display=f"{display} = {result}", result=result)

    for a, b, c in permutations(dice.values):
        for op1, op2 in product(Operation, repeat=2):
            keep(
                f"{a} {op1.value} {b} {op2.value} {c}",
                eval_three_terms(a, op1, b, op2, c),
            )

    for a, b in combinations(dice.values, 2):
        for op in Operation:
            keep(f"{a} {op.value} {b}", apply_operation(a, op, b))
            keep(f"{b} {op.value} {a}", apply_operation(b, op, a))

    return sorted(found.values(), key=lambda option: option.result)


_TERM = r"\s*(-?\d+)\s*"
_OP = r"([+\-x×*÷/])"
_EQUATION_RE = re.compile(rf"^{_TERM}{_OP}{_TERM}(?:{_OP}{_TERM})?(?:=.*)?$")


def evaluate_equation(display: str) -> int | None:
    """
    Re-evaluate a two- or three-term equation string.

    Anything after `=` is ignored. Returns None for text that does not
    parse or whose division does not apply.
    """
    match = _EQUATION_RE.match(display)
    if not match:
        return None
    a, op1, b, op2, c = match.groups()
    if op2 is None:
        return apply_operation(int(a), op1, int(b))
    return eval_three_terms(int(a), op1, int(b), op2, int(c))
