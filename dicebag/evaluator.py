"""Fold a parsed dice expression into a single integer."""

from __future__ import annotations

import operator

from dicebag.errors import DivisionByZeroError
from dicebag.grammar import BinaryOp, Group, Integer, Negate, Node, RollTerm
from dicebag.roll import roll
from dicebag.sampler import Sampler, default_sampler


def _divide(left: int, right: int) -> int:
    """Integer division truncating toward zero."""
    if right == 0:
        raise DivisionByZeroError(f"Division by zero: {left} / {right}")
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


_OPERATORS = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _divide,
}


def evaluate(node: Node, sampler: Sampler | None = None) -> int:
    """Evaluate a parse tree, rolling every dice term afresh.

    Args:
        node: Root of a tree produced by ``dicebag.grammar.parse``.
        sampler: Random source for the dice; defaults to the process-wide sampler.

    Returns:
        The integer value of the expression.

    Raises:
        DivisionByZeroError: If any division has a zero divisor.
    """
    if sampler is None:
        sampler = default_sampler()

    if isinstance(node, Integer):
        return node.value
    if isinstance(node, RollTerm):
        return roll(node.spec, sampler)
    if isinstance(node, Group):
        return evaluate(node.inner, sampler)
    if isinstance(node, Negate):
        return -evaluate(node.operand, sampler)
    if isinstance(node, BinaryOp):
        # Left-associative chains lean left; walk the spine in a loop so long
        # sums like "1+1+...+1" do not grow the call stack.
        chain: list[BinaryOp] = []
        while isinstance(node, BinaryOp):
            chain.append(node)
            node = node.left
        total = evaluate(node, sampler)
        for link in reversed(chain):
            total = _OPERATORS[link.op](total, evaluate(link.right, sampler))
        return total
    raise TypeError(f"Not a dice expression node: {node!r}")
