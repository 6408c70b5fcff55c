from typing import Any

from generate_random.exceptions import UnsupportedTypeError
from generate_random.generator import ValueGenerator
from generate_random.registry import DEFAULT_REGISTRY
from generate_random.source import as_source
from generate_random.types import EnumT, GenType

DEFAULT_GENERATOR = ValueGenerator()


def shape_of(tp: Any) -> GenType:
    return DEFAULT_REGISTRY.shape_of(tp)


def register(tp: Any, shape: GenType) -> None:
    DEFAULT_REGISTRY.register(tp, shape)


def generate_random(tp: Any, rng: Any = None) -> Any:
    """Create a new random value of `tp`.

    `tp` is either a shape or a Python type the registry can resolve;
    `rng` is anything `as_source` accepts (None, a seed, a random.Random,
    a numpy Generator or a RandomSource).
    """
    return DEFAULT_GENERATOR.generate(shape_of(tp), as_source(rng))


def _enum_shape(tp: Any) -> EnumT:
    shape = shape_of(tp)
    if not isinstance(shape, EnumT):
        raise UnsupportedTypeError(f"{tp!r} is not a sum type")
    return shape


def generate_random_variant(tp: Any, variant: int, rng: Any = None) -> Any:
    """Create a random value of the sum type `tp` with a predefined variant."""
    return DEFAULT_GENERATOR.generate_variant(_enum_shape(tp), variant, as_source(rng))


def num_variants(tp: Any) -> int:
    return _enum_shape(tp).num_variants()


def variant_name(tp: Any, variant: int) -> str:
    return _enum_shape(tp).variant_name(variant)
