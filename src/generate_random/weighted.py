"""
Weighted variant selection.

Each variant owns the half-open interval [start, start + weight) of
[0, total). One uniform draw from [0, total) lands in exactly one interval,
so a zero-weight variant can never be selected. Tables are small (one
entry per declared variant), so a linear walk is used rather than a
prefix-sum search.
"""

from typing import Any, Sequence

from generate_random.exceptions import WeightError
from generate_random.source import RandomSource


def check_weight(name: Any, weight: Any) -> None:
    if isinstance(weight, bool) or not isinstance(weight, int):
        raise WeightError(f"Weight for {name!r} must be an integer, got {weight!r}")
    if weight < 0:
        raise WeightError(f"Negative weight {weight} for {name!r}")


def validate_weights(weights: Sequence[int]) -> int:
    """Check a weight table and return its total."""
    if not weights:
        raise WeightError("Weight table is empty")

    for index, weight in enumerate(weights):
        check_weight(index, weight)

    total = sum(weights)
    if total <= 0:
        raise WeightError(f"All variant weights are zero: {list(weights)}")
    return total


def select_variant(weights: Sequence[int], source: RandomSource) -> int:
    """Pick a variant index with probability weight / total."""
    total = validate_weights(weights)
    value = source.next_int_in_range(0, total)

    start = 0
    for index, weight in enumerate(weights):
        end = start + weight
        if start <= value < end:
            return index
        start = end

    raise AssertionError(f"unreachable: {value} not below total {total}")
