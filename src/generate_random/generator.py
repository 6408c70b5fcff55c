"""
Type-dispatched value generation.

Every generate call walks the shape tree depth-first and draws from the
source strictly left to right: struct fields in declaration order, tuple
members by position, range start before end. Subclasses may override
individual _generate_* strategies.
"""

import logging
from dataclasses import fields as dataclass_fields
from typing import Any, Optional

from generate_random.config import DEFAULT_CONFIG, GenerationConfig
from generate_random.exceptions import UnsupportedTypeError
from generate_random.ranges import RangeKind
from generate_random.source import RandomSource
from generate_random.types import (
    BoolT,
    BoxT,
    CharT,
    DArrayT,
    EnumSetT,
    EnumT,
    Fields,
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
    key_problem,
)
from generate_random.weighted import select_variant

logger = logging.getLogger(__name__)

_RANGE_CLASSES = frozenset(kind.value_cls for kind in RangeKind)


def freeze(value: Any) -> Any:
    """Return a hashable equivalent of a generated value.

    Lists and tuples become tuples, sets become frozensets and dicts become
    tuples of (key, value) pairs, recursively. Objects built by a
    constructor are returned unchanged.
    """
    value_type = type(value)
    if value_type is list or value_type is tuple:
        return tuple(freeze(v) for v in value)
    if value_type is set:
        return frozenset(freeze(v) for v in value)
    if value_type is dict:
        return tuple((k, freeze(v)) for k, v in value.items())
    if value_type is Tagged:
        return Tagged(value.variant, freeze(value.payload))
    if value_type in _RANGE_CLASSES:
        return value_type(*(freeze(getattr(value, f.name)) for f in dataclass_fields(value)))
    return value


class ValueGenerator:
    """Generates random values for type shapes."""

    def __init__(self, config: Optional[GenerationConfig] = None):
        self.config = config or DEFAULT_CONFIG

        self._generators = {
            BoolT: self._generate_bool,
            CharT: self._generate_char,
            IntegerT: self._generate_integer,
            FloatT: self._generate_float,
            StringT: self._generate_string,
            NoneT: self._generate_none,
            OptionalT: self._generate_optional,
            SArrayT: self._generate_sarray,
            DArrayT: self._generate_darray,
            SetT: self._generate_set,
            HashMapT: self._generate_hashmap,
            BoxT: self._generate_box,
            TupleT: self._generate_tuple,
            RangeT: self._generate_range,
            StructT: self._generate_struct,
            EnumT: self._generate_enum,
            EnumSetT: self._generate_enum_set,
        }

    def generate(self, gen_type: GenType, source: RandomSource) -> Any:
        """Generate a value for the given shape."""
        generator = self._generators.get(type(gen_type))
        if generator is None:
            raise UnsupportedTypeError(f"No generator for {type(gen_type).__name__}")
        return generator(gen_type, source)

    def generate_variant(self, enum_t: EnumT, index: int, source: RandomSource) -> Any:
        """Generate a value of `enum_t` pinned to the variant at `index`.

        An index outside the declared variants falls back to ordinary
        weighted selection.
        """
        if not 0 <= index < enum_t.num_variants():
            logger.warning(
                f"Variant index {index} out of range for {enum_t!r} "
                f"({enum_t.num_variants()} variants), selecting by weight"
            )
            return self._generate_enum(enum_t, source)

        variant = enum_t.variants[index]
        return variant.build(self._generate_fields(variant, source))

    # Scalars
    def _generate_bool(self, _gen_type: BoolT, source: RandomSource) -> bool:
        return source.next_bool()

    def _generate_char(self, _gen_type: CharT, source: RandomSource) -> str:
        return source.next_char()

    def _generate_integer(self, gen_type: IntegerT, source: RandomSource) -> int:
        return source.next_int(gen_type.bits, gen_type.signed)

    def _generate_float(self, gen_type: FloatT, source: RandomSource) -> float:
        return source.next_float(gen_type.bits)

    def _generate_string(self, _gen_type: StringT, source: RandomSource) -> str:
        alphabet = self.config.string_alphabet
        length = source.next_int_in_range(0, self.config.string_max_len)
        return "".join(
            alphabet[source.next_int_in_range(0, len(alphabet))] for _ in range(length)
        )

    def _generate_none(self, _gen_type: NoneT, _source: RandomSource) -> None:
        return None

    # Containers
    def _generate_optional(self, gen_type: OptionalT, source: RandomSource) -> Any:
        if source.next_bool():
            return self.generate(gen_type.value_type, source)
        return None

    def _generate_sarray(self, gen_type: SArrayT, source: RandomSource) -> list:
        return [self.generate(gen_type.value_type, source) for _ in range(gen_type.length)]

    def _draw_length(self, source: RandomSource) -> int:
        return source.next_int_in_range(0, self.config.collection_max_len)

    def _generate_darray(self, gen_type: DArrayT, source: RandomSource) -> list:
        n = self._draw_length(source)
        return [self.generate(gen_type.value_type, source) for _ in range(n)]

    def _check_key(self, shape: GenType) -> None:
        problem = key_problem(shape)
        if problem:
            raise UnsupportedTypeError(
                f"{shape!r} cannot be used as a set element or map key: {problem}"
            )

    def _generate_key(self, shape: GenType, source: RandomSource) -> Any:
        return freeze(self.generate(shape, source))

    def _generate_set(self, gen_type: SetT, source: RandomSource) -> set:
        self._check_key(gen_type.value_type)
        # duplicates collapse, so the set may be smaller than the drawn length
        n = self._draw_length(source)
        return {self._generate_key(gen_type.value_type, source) for _ in range(n)}

    def _generate_hashmap(self, gen_type: HashMapT, source: RandomSource) -> dict:
        self._check_key(gen_type.key_type)
        n = self._draw_length(source)
        result = {}
        for _ in range(n):
            key = self._generate_key(gen_type.key_type, source)
            result[key] = self.generate(gen_type.value_type, source)
        return result

    def _generate_box(self, gen_type: BoxT, source: RandomSource) -> Any:
        return self.generate(gen_type.value_type, source)

    def _generate_tuple(self, gen_type: TupleT, source: RandomSource) -> tuple:
        return tuple(self.generate(t, source) for t in gen_type.member_types)

    def _generate_range(self, gen_type: RangeT, source: RandomSource) -> Any:
        bounds = [
            self.generate(gen_type.value_type, source)
            for _ in range(gen_type.kind.n_bounds)
        ]
        return gen_type.kind.build(*bounds)

    # Product and sum types
    def _generate_fields(self, fields: Fields, source: RandomSource) -> Any:
        members = fields.members
        if members is None:
            return None
        if isinstance(members, dict):
            return {name: self.generate(t, source) for name, t in members.items()}
        return tuple(self.generate(t, source) for t in members)

    def _generate_struct(self, gen_type: StructT, source: RandomSource) -> Any:
        return gen_type.build(self._generate_fields(gen_type, source))

    def _generate_enum(self, gen_type: EnumT, source: RandomSource) -> Any:
        index = select_variant(gen_type.weights, source)
        return self.generate_variant(gen_type, index, source)

    def _generate_enum_set(self, gen_type: EnumSetT, source: RandomSource) -> Any:
        enum_type = gen_type.enum_type
        self._check_key(enum_type)
        n = 0
        if enum_type.num_variants():
            n = source.next_int_in_range(0, 2 * enum_type.num_variants())
        members = [freeze(self._generate_enum(enum_type, source)) for _ in range(n)]
        if gen_type.combine is None:
            return set(members)
        return gen_type.combine(members)
