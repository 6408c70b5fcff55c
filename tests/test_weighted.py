import random
from collections import Counter

import pytest

from generate_random.exceptions import WeightError
from generate_random.source import PyRandomSource
from generate_random.weighted import select_variant, validate_weights


@pytest.mark.parametrize("value,expected", [(0, 0), (1, 0), (2, 1), (3, 2)])
def test_interval_walk(value, expected, scripted):
    source = scripted(ints=[value])
    assert select_variant([2, 1, 1], source) == expected
    assert source.draws == 1


@pytest.mark.parametrize("value", [0, 1, 2])
def test_zero_weight_is_never_selected(value, scripted):
    assert select_variant([0, 3, 0], scripted(ints=[value])) == 1


def test_single_variant_always_selected(counting_source):
    for i in range(100):
        assert select_variant([1], counting_source) == 0
        assert counting_source.draws == i + 1


def test_all_zero_weights_abort_before_drawing(scripted):
    source = scripted()
    with pytest.raises(WeightError):
        select_variant([0, 0], source)
    assert source.draws == 0


@pytest.mark.parametrize("weights", [[], [1, -1], [1.5, 1], [True, 1]])
def test_malformed_weights(weights):
    with pytest.raises(WeightError):
        validate_weights(weights)


def test_validate_returns_total():
    assert validate_weights([2, 0, 5]) == 7


def _frequencies(weights, trials, seed):
    source = PyRandomSource(random.Random(seed))
    counts = Counter(select_variant(weights, source) for _ in range(trials))
    return [counts[i] / trials for i in range(len(weights))]


@pytest.mark.fuzzing
def test_uniform_weights_converge():
    for freq in _frequencies([1, 1, 1], 30000, seed=3):
        assert abs(freq - 1 / 3) < 0.02


@pytest.mark.fuzzing
def test_double_weight_converges_to_half():
    freqs = _frequencies([2, 1, 1], 30000, seed=4)
    assert abs(freqs[0] - 0.5) < 0.02
    assert abs(freqs[1] - 0.25) < 0.02
    assert abs(freqs[2] - 0.25) < 0.02


def test_selection_is_deterministic():
    weights = [5, 1, 0, 3]
    first = _frequencies(weights, 500, seed=9)
    second = _frequencies(weights, 500, seed=9)
    assert first == second

    a = PyRandomSource(random.Random(11))
    b = PyRandomSource(random.Random(11))
    assert [select_variant(weights, a) for _ in range(50)] == [
        select_variant(weights, b) for _ in range(50)
    ]


def test_large_weights(scripted):
    weights = [2**70, 1]
    assert select_variant(weights, scripted(ints=[2**70 - 1])) == 0
    assert select_variant(weights, scripted(ints=[2**70])) == 1
