from .api import (
    generate_random,
    generate_random_variant,
    num_variants,
    register,
    shape_of,
    variant_name,
)
from .config import DEFAULT_CONFIG, GenerationConfig
from .exceptions import GenerateRandomException, UnsupportedTypeError, WeightError
from .generator import ValueGenerator, freeze
from .ranges import (
    Range,
    RangeFrom,
    RangeFull,
    RangeInclusive,
    RangeKind,
    RangeTo,
    RangeToInclusive,
)
from .registry import DEFAULT_REGISTRY, TypeRegistry, variant_weights, weight
from .source import NumpySource, PyRandomSource, RandomSource, as_source
from .types import (
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    I128,
    ISIZE,
    U8,
    U16,
    U32,
    U64,
    U128,
    USIZE,
    BoolT,
    BoxT,
    CharT,
    DArrayT,
    EnumSetT,
    EnumT,
    FloatT,
    GenType,
    HashMapT,
    IntegerT,
    NoneT,
    OptionalT,
    RangeT,
    SArrayT,
    SetT,
    StringT,
    StructT,
    Tagged,
    TupleT,
    Variant,
    key_problem,
)
from .weighted import select_variant

__all__ = [
    "generate_random",
    "generate_random_variant",
    "num_variants",
    "variant_name",
    "register",
    "shape_of",
    "DEFAULT_CONFIG",
    "GenerationConfig",
    "GenerateRandomException",
    "UnsupportedTypeError",
    "WeightError",
    "ValueGenerator",
    "freeze",
    "Range",
    "RangeFrom",
    "RangeFull",
    "RangeInclusive",
    "RangeKind",
    "RangeTo",
    "RangeToInclusive",
    "DEFAULT_REGISTRY",
    "TypeRegistry",
    "variant_weights",
    "weight",
    "RandomSource",
    "PyRandomSource",
    "NumpySource",
    "as_source",
    "GenType",
    "BoolT",
    "CharT",
    "IntegerT",
    "FloatT",
    "StringT",
    "NoneT",
    "OptionalT",
    "SArrayT",
    "DArrayT",
    "SetT",
    "HashMapT",
    "BoxT",
    "TupleT",
    "RangeT",
    "StructT",
    "EnumT",
    "EnumSetT",
    "Variant",
    "Tagged",
    "key_problem",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "I8",
    "I16",
    "I32",
    "I64",
    "I128",
    "USIZE",
    "ISIZE",
    "F32",
    "F64",
    "select_variant",
]
