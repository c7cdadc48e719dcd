"""Roll engine: one group of dice with optional keep/drop and target rules.

A roll is described by an immutable ``RollSpec`` and evaluated by the pure
function ``roll()``. ``Roll`` is a small chaining builder on top of the two
for callers that prefer ``Roll().count(5).sides(6).keep_highest(3)``.

Out-of-range inputs are clamped silently:
  count            -> [0, MAX_ROLLS]
  numeric sides    -> [0, MAX_SIDES]
  custom faces     -> first MAX_CUSTOM_SIDES entries
  keep/drop amount -> [0, number of dice rolled]
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import ClassVar, Union

from dicebag.sampler import Sampler, default_sampler

logger = logging.getLogger(__name__)

MAX_ROLLS = 1000
MAX_SIDES = 2**32 - 1
MAX_CUSTOM_SIDES = 1000


def _clamp(value: int, upper: int) -> int:
    return max(0, min(value, upper))


# ---------------------------------------------------------------------------
# Die kinds
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NumericDie:
    """A die numbered 1..sides. A zero-sided die always shows 0."""

    sides: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "sides", _clamp(self.sides, MAX_SIDES))

    def __str__(self) -> str:
        return str(self.sides)


@dataclass(frozen=True)
class CustomDie:
    """A die with an explicit list of (possibly negative) faces."""

    faces: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "faces", tuple(self.faces)[:MAX_CUSTOM_SIDES])

    def __str__(self) -> str:
        return "[" + ",".join(str(face) for face in self.faces) + "]"


Die = Union[NumericDie, CustomDie]


# ---------------------------------------------------------------------------
# Take policies
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TakePolicy(ABC):
    amount: int

    symbol: ClassVar[str] = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", max(0, self.amount))

    @abstractmethod
    def apply(self, ordered: list[int]) -> list[int]:
        """Select from ``ordered`` (sorted ascending) and return the survivors."""

    def __str__(self) -> str:
        return f"{self.symbol}{self.amount}"


@dataclass(frozen=True)
class KeepHighest(TakePolicy):
    symbol: ClassVar[str] = "kh"

    def apply(self, ordered: list[int]) -> list[int]:
        keep = min(self.amount, len(ordered))
        return ordered[len(ordered) - keep :]


@dataclass(frozen=True)
class DropLowest(TakePolicy):
    symbol: ClassVar[str] = "dl"

    def apply(self, ordered: list[int]) -> list[int]:
        drop = min(self.amount, len(ordered))
        return ordered[drop:]


# ---------------------------------------------------------------------------
# Target policies
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TargetPolicy(ABC):
    threshold: int

    symbol: ClassVar[str] = ""

    @abstractmethod
    def matches(self, value: int) -> bool:
        """Return whether a single die value hits the target."""

    def successes(self, pool: Iterable[int]) -> int:
        """Return how many values in ``pool`` hit the target."""
        return sum(1 for value in pool if self.matches(value))

    def __str__(self) -> str:
        return f"{self.symbol}{self.threshold}"


@dataclass(frozen=True)
class GreaterThan(TargetPolicy):
    symbol: ClassVar[str] = ">"

    def matches(self, value: int) -> bool:
        return value > self.threshold


@dataclass(frozen=True)
class GreaterOrEqual(TargetPolicy):
    symbol: ClassVar[str] = ">="

    def matches(self, value: int) -> bool:
        return value >= self.threshold


@dataclass(frozen=True)
class LessThan(TargetPolicy):
    symbol: ClassVar[str] = "<"

    def matches(self, value: int) -> bool:
        return value < self.threshold


@dataclass(frozen=True)
class LessOrEqual(TargetPolicy):
    symbol: ClassVar[str] = "<="

    def matches(self, value: int) -> bool:
        return value <= self.threshold


TARGET_POLICIES: dict[str, type[TargetPolicy]] = {
    policy.symbol: policy for policy in (GreaterThan, GreaterOrEqual, LessThan, LessOrEqual)
}


# ---------------------------------------------------------------------------
# Roll specs and evaluation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RollSpec:
    """Everything needed to roll one dice term."""

    count: int = 0
    die: Die = field(default_factory=NumericDie)
    take: TakePolicy | None = None
    target: TargetPolicy | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "count", _clamp(self.count, MAX_ROLLS))

    def __str__(self) -> str:
        text = f"{self.count}d{self.die}"
        if self.take is not None:
            text += str(self.take)
        if self.target is not None:
            text += str(self.target)
        return text


def roll(spec: RollSpec, sampler: Sampler | None = None) -> int:
    """Roll the dice described by ``spec`` and return the result.

    Args:
        spec: The roll to perform.
        sampler: Random source; defaults to the process-wide sampler.

    Returns:
        The sum of the kept dice, or the number of successes when ``spec``
        has a target. Custom dice return the signed sum of their faces and
        ignore take and target rules.
    """
    if sampler is None:
        sampler = default_sampler()
    die = spec.die

    if isinstance(die, CustomDie):
        if not die.faces:
            return 0
        total = sum(sampler.uniform_choices(die.faces, spec.count))
        logger.debug("Rolled %s -> %d", spec, total)
        return total

    if die.sides == 0:
        pool = [0] * spec.count
    else:
        pool = sampler.uniform_ints(1, die.sides, spec.count)

    if spec.take is not None:
        pool = spec.take.apply(sorted(pool))

    if spec.target is not None:
        result = spec.target.successes(pool)
    else:
        result = sum(pool)
    logger.debug("Rolled %s -> %s = %d", spec, pool, result)
    return result


class Roll:
    """Chaining builder around ``RollSpec``.

    Every setter replaces one field of the current spec (last write wins)
    and returns the builder. ``evaluate`` may be called any number of times;
    each call rolls afresh.
    """

    def __init__(self, spec: RollSpec | None = None) -> None:
        self._spec = spec if spec is not None else RollSpec()

    @property
    def spec(self) -> RollSpec:
        return self._spec

    def count(self, count: int) -> Roll:
        self._spec = replace(self._spec, count=count)
        return self

    def sides(self, sides: int) -> Roll:
        self._spec = replace(self._spec, die=NumericDie(sides))
        return self

    def faces(self, faces: Iterable[int]) -> Roll:
        self._spec = replace(self._spec, die=CustomDie(tuple(faces)))
        return self

    def keep_highest(self, amount: int) -> Roll:
        self._spec = replace(self._spec, take=KeepHighest(amount))
        return self

    def drop_lowest(self, amount: int) -> Roll:
        self._spec = replace(self._spec, take=DropLowest(amount))
        return self

    def target(self, policy: TargetPolicy) -> Roll:
        self._spec = replace(self._spec, target=policy)
        return self

    def evaluate(self, sampler: Sampler | None = None) -> int:
        return roll(self._spec, sampler)

    def __repr__(self) -> str:
        return f"Roll({self._spec})"
