"""
Randomness sources.

A source is the only thing generators draw from. Generators never keep a
reference to it between calls, so the same source can be threaded through
any number of nested generate() calls and the output stays a pure function
of the source state.
"""

import random
from abc import ABC, abstractmethod
from typing import Any, Optional

# Unicode scalar values skip the UTF-16 surrogate block.
SURROGATE_START = 0xD800
SURROGATE_GAP = 0x800
CHAR_COUNT = 0x110000 - SURROGATE_GAP


class RandomSource(ABC):
    """Uniform primitive draws backing every generator."""

    @abstractmethod
    def next_bool(self) -> bool: ...

    @abstractmethod
    def next_int_in_range(self, low: int, high: int) -> int:
        """Uniform integer in [low, high). Raises ValueError when empty."""

    @abstractmethod
    def next_bits(self, bits: int) -> int:
        """Uniform integer in [0, 2**bits)."""

    def next_int(self, bits: int, signed: bool) -> int:
        raw = self.next_bits(bits)
        if signed and raw >= 1 << (bits - 1):
            raw -= 1 << bits
        return raw

    def next_float(self, bits: int) -> float:
        # uniform on [0, 1) at the precision of the target width
        precision = 24 if bits == 32 else 53
        return self.next_bits(precision) * 2.0**-precision

    def next_char(self) -> str:
        n = self.next_int_in_range(0, CHAR_COUNT)
        if n >= SURROGATE_START:
            n += SURROGATE_GAP
        return chr(n)


class PyRandomSource(RandomSource):
    """Source backed by a `random.Random` instance."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def next_bool(self) -> bool:
        return self.rng.getrandbits(1) == 1

    def next_int_in_range(self, low: int, high: int) -> int:
        return self.rng.randrange(low, high)

    def next_bits(self, bits: int) -> int:
        return self.rng.getrandbits(bits)


class NumpySource(RandomSource):
    """Source backed by a `numpy.random.Generator`."""

    # numpy's integers() is limited to int64 bounds
    _INT64_SPAN = 1 << 63

    def __init__(self, generator: Any):
        self.generator = generator

    def next_bool(self) -> bool:
        return bool(self.generator.integers(0, 2))

    def next_int_in_range(self, low: int, high: int) -> int:
        if high <= low:
            raise ValueError(f"empty range [{low}, {high})")
        span = high - low
        if span < self._INT64_SPAN:
            return low + int(self.generator.integers(0, span))

        # rejection sampling for spans numpy can't express
        bits = span.bit_length()
        while True:
            candidate = self.next_bits(bits)
            if candidate < span:
                return low + candidate

    def next_bits(self, bits: int) -> int:
        nbytes = (bits + 7) // 8
        raw = int.from_bytes(self.generator.bytes(nbytes), "little")
        return raw >> (nbytes * 8 - bits)


def as_source(rng: Any = None) -> RandomSource:
    """Wrap whatever the caller passed as `rng` into a RandomSource.

    Accepts None (fresh unseeded source), an int seed, a `random.Random`,
    a numpy `Generator`, or an existing RandomSource.
    """
    if isinstance(rng, RandomSource):
        return rng
    if rng is None:
        return PyRandomSource()
    if isinstance(rng, bool):
        raise TypeError("bool is not a valid seed")
    if isinstance(rng, int):
        return PyRandomSource(random.Random(rng))
    if isinstance(rng, random.Random):
        return PyRandomSource(rng)
    if hasattr(rng, "integers") and hasattr(rng, "bytes"):
        return NumpySource(rng)
    raise TypeError(f"Cannot use {type(rng).__name__} as a randomness source")
