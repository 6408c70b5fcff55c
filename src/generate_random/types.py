"""
Type shapes understood by the value generator.

Leaf and structural shapes are frozen dataclasses compared by structure.
StructT and EnumT are nominal: they carry a name and a constructor, compare
by identity, and allow their member table to be filled in after creation
so that self-referential types can be declared.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple, Union

from generate_random.ranges import RangeKind
from generate_random.weighted import check_weight

logger = logging.getLogger(__name__)

MAX_TUPLE_ARITY = 12


class GenType:
    """Base class for all generatable shapes."""


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BoolT(GenType):
    pass


@dataclass(frozen=True)
class CharT(GenType):
    pass


@dataclass(frozen=True)
class IntegerT(GenType):
    signed: bool
    bits: int

    def __post_init__(self):
        if self.bits not in (8, 16, 32, 64, 128):
            raise ValueError(f"Unsupported integer width: {self.bits}")

    @property
    def bounds(self) -> Tuple[int, int]:
        if self.signed:
            return -(2 ** (self.bits - 1)), 2 ** (self.bits - 1) - 1
        return 0, 2**self.bits - 1

    def __repr__(self) -> str:
        return f"{'i' if self.signed else 'u'}{self.bits}"


@dataclass(frozen=True)
class FloatT(GenType):
    bits: int

    def __post_init__(self):
        if self.bits not in (32, 64):
            raise ValueError(f"Unsupported float width: {self.bits}")

    def __repr__(self) -> str:
        return f"f{self.bits}"


@dataclass(frozen=True)
class StringT(GenType):
    """Bounded alphanumeric text."""


@dataclass(frozen=True)
class NoneT(GenType):
    """The unit shape; always None."""


U8 = IntegerT(False, 8)
U16 = IntegerT(False, 16)
U32 = IntegerT(False, 32)
U64 = IntegerT(False, 64)
U128 = IntegerT(False, 128)
I8 = IntegerT(True, 8)
I16 = IntegerT(True, 16)
I32 = IntegerT(True, 32)
I64 = IntegerT(True, 64)
I128 = IntegerT(True, 128)
USIZE = U64
ISIZE = I64
F32 = FloatT(32)
F64 = FloatT(64)


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OptionalT(GenType):
    value_type: GenType


@dataclass(frozen=True)
class SArrayT(GenType):
    value_type: GenType
    length: int

    def __post_init__(self):
        if self.length < 0:
            raise ValueError(f"Negative array length: {self.length}")


@dataclass(frozen=True)
class DArrayT(GenType):
    value_type: GenType


@dataclass(frozen=True)
class SetT(GenType):
    value_type: GenType


@dataclass(frozen=True)
class HashMapT(GenType):
    key_type: GenType
    value_type: GenType


@dataclass(frozen=True)
class BoxT(GenType):
    value_type: GenType


@dataclass(frozen=True)
class TupleT(GenType):
    member_types: Tuple[GenType, ...]

    def __post_init__(self):
        object.__setattr__(self, "member_types", tuple(self.member_types))
        if len(self.member_types) > MAX_TUPLE_ARITY:
            raise ValueError(
                f"Tuple arity {len(self.member_types)} exceeds "
                f"{MAX_TUPLE_ARITY}"
            )


@dataclass(frozen=True)
class RangeT(GenType):
    kind: RangeKind
    value_type: GenType


# ---------------------------------------------------------------------------
# Product and sum types
# ---------------------------------------------------------------------------

Members = Union[None, Dict[str, GenType], Sequence[GenType]]


def _normalize_members(members: Members) -> Union[None, Dict[str, GenType], Tuple[GenType, ...]]:
    if not members:
        return None
    if isinstance(members, dict):
        return dict(members)
    return tuple(members)


def _call_constructor(constructor: Callable, members: Members, payload: Any) -> Any:
    if isinstance(members, dict):
        return constructor(**payload)
    if members:
        return constructor(*payload)
    return constructor()


class Fields:
    """Shared member-table handling for structs and enum variants.

    `members` is one of:
      - a dict of name -> shape (record payload, built with keywords)
      - a sequence of shapes (tuple-like payload, built positionally)
      - None / empty (unit payload)
    """

    _members: Union[None, Dict[str, GenType], Tuple[GenType, ...]]

    @property
    def members(self):
        return self._members

    @members.setter
    def members(self, members: Members) -> None:
        self._members = _normalize_members(members)


class StructT(Fields, GenType):
    """Product type. Without a constructor the payload itself is the value:
    a dict for named fields, a tuple for positional ones, None for unit."""

    def __init__(
        self,
        name: str,
        members: Members = None,
        constructor: Optional[Callable] = None,
    ):
        self.name = name
        self.members = members
        self.constructor = constructor

    def build(self, payload: Any) -> Any:
        if self.constructor is None:
            return payload
        return _call_constructor(self.constructor, self._members, payload)

    def __repr__(self) -> str:
        return f"struct {self.name}"


class Tagged(NamedTuple):
    """Default value of an enum variant without a constructor."""

    variant: str
    payload: Any


class Variant(Fields):
    def __init__(
        self,
        name: str,
        members: Members = None,
        weight: int = 1,
        constructor: Optional[Callable] = None,
    ):
        check_weight(name, weight)
        self.name = name
        self.members = members
        self.weight = weight
        self.constructor = constructor

    def build(self, payload: Any) -> Any:
        if self.constructor is None:
            return Tagged(self.name, payload)
        return _call_constructor(self.constructor, self._members, payload)

    def __repr__(self) -> str:
        return f"Variant({self.name!r}, weight={self.weight})"


class EnumT(GenType):
    """Sum type: an ordered list of weighted variants."""

    def __init__(self, name: str, variants: Sequence[Variant]):
        self.name = name
        self.variants = list(variants)

    def num_variants(self) -> int:
        return len(self.variants)

    def variant_name(self, index: int) -> str:
        if 0 <= index < len(self.variants):
            return self.variants[index].name
        logger.debug(f"No variant {index} in {self!r}")
        return ""

    @property
    def weights(self) -> List[int]:
        return [v.weight for v in self.variants]

    def weight_table(self) -> List[Tuple[int, int]]:
        return list(enumerate(self.weights))

    def __repr__(self) -> str:
        return f"enum {self.name}"


@dataclass(frozen=True)
class EnumSetT(GenType):
    """A set of members of a unit-variant enum.

    Without `combine` the value is a set of the generated members; otherwise
    `combine` receives the list of drawn members (duplicates included).
    """

    enum_type: EnumT
    combine: Optional[Callable[[List[Any]], Any]] = None


# ---------------------------------------------------------------------------
# Hashability of set elements and map keys
# ---------------------------------------------------------------------------


def key_problem(shape: GenType) -> Optional[str]:
    """Describe why values of `shape` cannot be set elements or map keys.

    Generated keys are frozen first (lists and tuples become tuples, sets
    become frozensets, dicts become tuples of items), so plain containers
    are fine. What freezing cannot reach are objects built by a class
    constructor: those must be hashable themselves, and so must everything
    they hold. Returns None when the shape is usable as a key.
    """
    return _key_problem(shape, True, set())


def _key_problem(shape: GenType, frozen: bool, seen: set) -> Optional[str]:
    marker = (id(shape), frozen)
    if marker in seen:
        return None
    seen.add(marker)

    if isinstance(shape, (SArrayT, DArrayT, SetT, HashMapT)):
        if not frozen:
            return f"{type(shape).__name__} held by a hashable object"
        if isinstance(shape, HashMapT):
            return _key_problem(shape.key_type, frozen, seen) or _key_problem(
                shape.value_type, frozen, seen
            )
        return _key_problem(shape.value_type, frozen, seen)
    if isinstance(shape, (OptionalT, BoxT, RangeT)):
        return _key_problem(shape.value_type, frozen, seen)
    if isinstance(shape, TupleT):
        return _first_problem(shape.member_types, frozen, seen)
    if isinstance(shape, StructT):
        if shape.constructor is None and isinstance(shape.members, dict) and not frozen:
            return f"{shape!r} builds a dict"
        return _fields_problem(shape, frozen, seen)
    if isinstance(shape, EnumT):
        for variant in shape.variants:
            problem = _fields_problem(variant, frozen, seen)
            if problem:
                return problem
        return None
    if isinstance(shape, EnumSetT):
        if shape.combine is None and not frozen:
            return f"set of {shape.enum_type!r} held by a hashable object"
        return _key_problem(shape.enum_type, frozen, seen)
    return None


def _fields_problem(fields: Fields, frozen: bool, seen: set) -> Optional[str]:
    constructor = fields.constructor
    if isinstance(constructor, type):
        if constructor.__hash__ is None:
            return f"{constructor.__name__} is not hashable"
        # members end up inside the object, out of reach of freezing
        frozen = False
    members = fields.members
    if members is None:
        return None
    if isinstance(members, dict):
        members = members.values()
    return _first_problem(members, frozen, seen)


def _first_problem(shapes, frozen: bool, seen: set) -> Optional[str]:
    for t in shapes:
        problem = _key_problem(t, frozen, seen)
        if problem:
            return problem
    return None
