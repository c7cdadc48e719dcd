"""Public entry points: one-shot evaluation and the reusable ``Roller``."""

from __future__ import annotations

from collections.abc import Iterator

from dicebag.evaluator import evaluate
from dicebag.grammar import parse
from dicebag.sampler import Sampler


def evaluate_notation(notation: str, sampler: Sampler | None = None) -> int:
    """Parse and roll ``notation`` once.

    Args:
        notation: Dice notation, e.g. "2d6+4".
        sampler: Optional random source.

    Returns:
        The integer total.

    Raises:
        ParseError: If the notation is invalid.
        DivisionByZeroError: If the expression divides by zero.
    """
    return evaluate(parse(notation), sampler)


roll_dice = evaluate_notation


class Roller:
    """A dice expression that can be rolled again on demand.

    The notation is validated when the roller is created. ``total()`` rolls
    once and remembers the result; ``reroll()`` and iteration replace it.
    """

    def __init__(self, notation: str, sampler: Sampler | None = None) -> None:
        parse(notation)
        self._notation = notation
        self._sampler = sampler
        self._total: int | None = None

    @property
    def notation(self) -> str:
        return self._notation

    def total(self) -> int:
        """Return the current total, rolling first if needed."""
        if self._total is None:
            self._total = self._roll()
        return self._total

    def reroll(self) -> int:
        """Discard the current total and roll again."""
        self._total = self._roll()
        return self._total

    def iter(self) -> Iterator[int]:
        """Yield fresh totals forever; each one becomes the current total."""
        while True:
            yield self.reroll()

    def __iter__(self) -> Iterator[int]:
        return self.iter()

    def __repr__(self) -> str:
        return f"Roller({self._notation!r})"

    def _roll(self) -> int:
        return evaluate_notation(self._notation, self._sampler)
