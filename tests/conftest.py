"""Shared test fixtures for the dicebag test suite.

Most tests check bounds, since real rolls are random. When a test needs exact
faces it takes the ``fixed_sampler`` fixture, a factory for a sampler that
replays a preset sequence:

    sampler = fixed_sampler([3, 1, 6])
    roll(spec, sampler)            # numeric dice see 3, then 1, then 6

For custom dice the preset values are indexes into the face list.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

import pytest

T = TypeVar("T")


class FixedSampler:
    """Sampler that replays preset values and records every draw."""

    def __init__(self, values: Iterable[int]) -> None:
        self.values = list(values)
        self.draws: list[tuple[int, int]] = []

    def _next(self) -> int:
        if not self.values:
            raise AssertionError("FixedSampler ran out of values")
        return self.values.pop(0)

    def uniform_int(self, low: int, high: int) -> int:
        self.draws.append((low, high))
        value = self._next()
        assert low <= value <= high, f"{value} outside [{low}, {high}]"
        return value

    def uniform_ints(self, low: int, high: int, k: int) -> list[int]:
        return [self.uniform_int(low, high) for _ in range(k)]

    def uniform_choice(self, seq: Sequence[T]) -> T:
        return seq[self._next()]

    def uniform_choices(self, seq: Sequence[T], k: int) -> list[T]:
        return [self.uniform_choice(seq) for _ in range(k)]


@pytest.fixture
def fixed_sampler() -> Callable[[Iterable[int]], FixedSampler]:
    return FixedSampler
