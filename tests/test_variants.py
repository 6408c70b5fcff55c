import logging
from dataclasses import dataclass

import pytest

from generate_random import generate_random, generate_random_variant, num_variants, variant_name
from generate_random.exceptions import UnsupportedTypeError, WeightError
from generate_random.types import U8, BoolT, BoxT, EnumT, Tagged, Variant


def make_shape(weights=(1, 1, 1)):
    unit, pair, point = weights
    return EnumT(
        "Shape",
        [
            Variant("Unit", weight=unit),
            Variant("Pair", [U8, BoolT()], weight=pair),
            Variant("Point", {"x": U8, "y": U8}, weight=point),
        ],
    )


def test_enumeration_protocol():
    shape = make_shape()
    assert shape.num_variants() == 3
    assert [shape.variant_name(i) for i in range(3)] == ["Unit", "Pair", "Point"]
    assert shape.weight_table() == [(0, 1), (1, 1), (2, 1)]


@pytest.mark.parametrize("index", [3, 99, -1])
def test_variant_name_out_of_range_is_empty(index):
    assert make_shape().variant_name(index) == ""


def test_pinned_unit_variant_draws_nothing(generator, scripted):
    source = scripted()
    assert generator.generate_variant(make_shape(), 0, source) == Tagged("Unit", None)
    assert source.draws == 0


def test_pinned_tuple_variant(generator, scripted):
    source = scripted(bits=[4], bools=[False])
    assert generator.generate_variant(make_shape(), 1, source) == Tagged("Pair", (4, False))
    assert source.exhausted


def test_pinned_record_variant(generator, scripted):
    source = scripted(bits=[4, 5])
    value = generator.generate_variant(make_shape(), 2, source)
    assert value == Tagged("Point", {"x": 4, "y": 5})


def test_pinned_ignores_weights(generator, source):
    shape = make_shape(weights=(1, 0, 1))
    assert generator.generate_variant(shape, 1, source).variant == "Pair"


@pytest.mark.parametrize("index", [99, 3, -1])
def test_pinned_out_of_range_falls_back_to_weighted(index, generator, scripted):
    shape = make_shape(weights=(0, 1, 0))
    # one selection draw, then the Pair payload
    source = scripted(ints=[0], bits=[4], bools=[True])
    assert generator.generate_variant(shape, index, source) == Tagged("Pair", (4, True))
    assert source.draws == 3


def test_pinned_out_of_range_logs_warning(generator, source, caplog):
    with caplog.at_level(logging.WARNING, logger="generate_random.generator"):
        generator.generate_variant(make_shape(), 99, source)
    assert "out of range" in caplog.text


def test_weighted_generation_selects_by_weight(generator, scripted):
    shape = make_shape(weights=(2, 1, 1))
    assert generator.generate(shape, scripted(ints=[1])) == Tagged("Unit", None)
    assert generator.generate(shape, scripted(ints=[2], bits=[0], bools=[True])) == Tagged(
        "Pair", (0, True)
    )


def test_single_variant(generator, counting_source):
    only = EnumT("Only", [Variant("It", [U8])])
    for _ in range(50):
        assert generator.generate(only, counting_source).variant == "It"


def test_all_zero_weights_are_fatal(generator, source):
    never = EnumT("Never", [Variant("A", weight=0), Variant("B", weight=0)])
    with pytest.raises(WeightError):
        generator.generate(never, source)


def test_negative_weight_rejected_at_declaration():
    with pytest.raises(WeightError):
        Variant("Bad", weight=-1)


@dataclass
class Circle:
    radius: int


def test_variant_constructor(generator, scripted):
    shape = EnumT("Figure", [Variant("Circle", {"radius": U8}, constructor=Circle)])
    assert generator.generate_variant(shape, 0, scripted(bits=[9])) == Circle(radius=9)


def test_recursive_enum_through_box(generator, source):
    cons_list = EnumT("List", [])
    cons_list.variants = [
        Variant("Nil", weight=3),
        Variant("Cons", [U8, BoxT(cons_list)]),
    ]

    for _ in range(100):
        node = generator.generate(cons_list, source)
        while node.variant == "Cons":
            head, node = node.payload
            assert 0 <= head < 256
        assert node == Tagged("Nil", None)


def test_api_on_shapes():
    shape = make_shape()
    assert num_variants(shape) == 3
    assert variant_name(shape, 2) == "Point"
    assert variant_name(shape, 7) == ""
    assert generate_random_variant(shape, 0, rng=1) == Tagged("Unit", None)
    assert generate_random(shape, rng=5) == generate_random(shape, rng=5)


def test_api_rejects_non_sum_types():
    with pytest.raises(UnsupportedTypeError):
        num_variants(U8)
    with pytest.raises(UnsupportedTypeError):
        generate_random_variant(int, 0)
