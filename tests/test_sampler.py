"""Unit tests for the random sources."""

from __future__ import annotations

import threading

from dicebag.sampler import RandomSampler, default_sampler


class TestRandomSampler:
    def test_uniform_int_inclusive_bounds(self) -> None:
        sampler = RandomSampler()
        seen = {sampler.uniform_int(1, 3) for _ in range(300)}
        assert seen == {1, 2, 3}

    def test_uniform_ints(self) -> None:
        values = RandomSampler().uniform_ints(1, 6, 500)
        assert len(values) == 500
        assert all(1 <= v <= 6 for v in values)
        assert set(values) == {1, 2, 3, 4, 5, 6}

    def test_uniform_ints_empty_batch(self) -> None:
        assert RandomSampler().uniform_ints(1, 6, 0) == []

    def test_uniform_choice(self) -> None:
        faces = (-1, 0, 1)
        assert all(RandomSampler().uniform_choice(faces) in faces for _ in range(50))

    def test_uniform_choices_with_replacement(self) -> None:
        picks = RandomSampler().uniform_choices((7,), 5)
        assert picks == [7, 7, 7, 7, 7]

    def test_seeded_is_reproducible(self) -> None:
        first = RandomSampler(seed=7).uniform_ints(1, 100, 20)
        second = RandomSampler(seed=7).uniform_ints(1, 100, 20)
        assert first == second

    def test_one_generator_per_thread(self) -> None:
        sampler = RandomSampler()
        generators = []
        thread = threading.Thread(target=lambda: generators.append(sampler.rng))
        thread.start()
        thread.join()
        assert generators[0] is not sampler.rng
        assert sampler.rng is sampler.rng


def test_default_sampler_is_shared() -> None:
    assert default_sampler() is default_sampler()
    assert isinstance(default_sampler(), RandomSampler)
