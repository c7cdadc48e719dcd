"""Random sources used by the roll engine.

The engine never touches the ``random`` module directly. It asks a
``Sampler`` for uniform integers and uniform picks, so tests can swap in a
fixed sequence and the CLI can seed a reproducible run.
"""

from __future__ import annotations

import random
import threading
from collections.abc import Sequence
from typing import Protocol, TypeVar

T = TypeVar("T")


class Sampler(Protocol):
    """Anything that can draw uniform integers and uniform picks."""

    def uniform_int(self, low: int, high: int) -> int: ...

    def uniform_ints(self, low: int, high: int, k: int) -> list[int]: ...

    def uniform_choice(self, seq: Sequence[T]) -> T: ...

    def uniform_choices(self, seq: Sequence[T], k: int) -> list[T]: ...


class RandomSampler:
    """Sampler backed by one ``random.Random`` per thread.

    Unseeded instances draw their state from OS entropy. A seeded instance
    gives every thread the same starting sequence.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._seed = seed
        self._local = threading.local()

    @property
    def rng(self) -> random.Random:
        rng = getattr(self._local, "rng", None)
        if rng is None:
            rng = random.Random(self._seed)
            self._local.rng = rng
        return rng

    def uniform_int(self, low: int, high: int) -> int:
        """Return an integer in ``[low, high]``, both ends inclusive."""
        return self.rng.randint(low, high)

    def uniform_ints(self, low: int, high: int, k: int) -> list[int]:
        """Return ``k`` independent integers in ``[low, high]``.

        The bound ``randrange`` and its stop value are looked up once for the
        whole batch.
        """
        randrange = self.rng.randrange
        stop = high + 1
        return [randrange(low, stop) for _ in range(k)]

    def uniform_choice(self, seq: Sequence[T]) -> T:
        """Return one element of ``seq``. ``seq`` must not be empty."""
        return self.rng.choice(seq)

    def uniform_choices(self, seq: Sequence[T], k: int) -> list[T]:
        """Return ``k`` independent picks from ``seq`` (with replacement)."""
        choice = self.rng.choice
        return [choice(seq) for _ in range(k)]


_default = RandomSampler()


def default_sampler() -> RandomSampler:
    """Return the process-wide entropy-backed sampler."""
    return _default
