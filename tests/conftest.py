import random

import pytest

from generate_random.generator import ValueGenerator
from generate_random.source import PyRandomSource, RandomSource


class ScriptedSource(RandomSource):
    """Replays fixed draws. Each list is consumed front to back."""

    def __init__(self, bools=(), ints=(), bits=()):
        self.bools = list(bools)
        self.ints = list(ints)
        self.bits = list(bits)
        self.draws = 0

    def next_bool(self) -> bool:
        self.draws += 1
        return self.bools.pop(0)

    def next_int_in_range(self, low: int, high: int) -> int:
        self.draws += 1
        value = self.ints.pop(0)
        assert low <= value < high, (value, low, high)
        return value

    def next_bits(self, bits: int) -> int:
        self.draws += 1
        value = self.bits.pop(0)
        assert 0 <= value < 1 << bits, (value, bits)
        return value

    @property
    def exhausted(self) -> bool:
        return not (self.bools or self.ints or self.bits)


class CountingSource(PyRandomSource):
    """Real random draws, counted."""

    def __init__(self, rng: random.Random):
        super().__init__(rng)
        self.draws = 0

    def next_bool(self) -> bool:
        self.draws += 1
        return super().next_bool()

    def next_int_in_range(self, low: int, high: int) -> int:
        self.draws += 1
        return super().next_int_in_range(low, high)

    def next_bits(self, bits: int) -> int:
        self.draws += 1
        return super().next_bits(bits)


@pytest.fixture
def generator():
    return ValueGenerator()


@pytest.fixture
def scripted():
    # factory: scripted(bools=[...], ints=[...], bits=[...])
    return ScriptedSource


@pytest.fixture
def counting_source():
    return CountingSource(random.Random(0))


@pytest.fixture
def source():
    return PyRandomSource(random.Random(0))
