"""
Registration table mapping Python types to shapes.

Shapes are resolved once per type and cached. Dataclasses, NamedTuples,
Enums and the usual typing constructs (Optional, Union, list, set, dict,
tuple) are resolved from their annotations; anything else must be
registered explicitly.
"""

from __future__ import annotations

import functools
import logging
import operator
from dataclasses import fields, is_dataclass
from enum import Enum, Flag
from types import UnionType
from typing import Any, Callable, Dict, Union, get_args, get_origin, get_type_hints

from generate_random.exceptions import UnsupportedTypeError, WeightError
from generate_random.types import (
    F64,
    I64,
    BoolT,
    DArrayT,
    EnumSetT,
    EnumT,
    GenType,
    HashMapT,
    NoneT,
    OptionalT,
    SetT,
    StringT,
    StructT,
    TupleT,
    Variant,
    key_problem,
)
from generate_random.weighted import check_weight

logger = logging.getLogger(__name__)

WEIGHT_ATTR = "__generate_weight__"
VARIANT_WEIGHTS_ATTR = "__variant_weights__"

_SCALARS: Dict[Any, GenType] = {
    bool: BoolT(),
    int: I64,
    float: F64,
    str: StringT(),
    type(None): NoneT(),
    None: NoneT(),
}


def weight(n: int) -> Callable[[type], type]:
    """Set the weight of a class when it appears as a member of a Union."""

    def decorator(cls: type) -> type:
        check_weight(cls.__name__, n)
        setattr(cls, WEIGHT_ATTR, n)
        return cls

    return decorator


def variant_weights(**weights: int) -> Callable[[type], type]:
    """Set per-member weights of an Enum, e.g. @variant_weights(D=2)."""

    def decorator(enum_cls: type) -> type:
        for name, w in weights.items():
            check_weight(name, w)
        setattr(enum_cls, VARIANT_WEIGHTS_ATTR, dict(weights))
        return enum_cls

    return decorator


def _identity(value: Any) -> Any:
    return value


def _constant(value: Any) -> Callable[[], Any]:
    return lambda: value


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or repr(tp)


class TypeRegistry:
    """Resolves Python types and annotations to shapes."""

    def __init__(self):
        self._shapes: Dict[Any, GenType] = {}

    def register(self, tp: Any, shape: GenType) -> None:
        if not isinstance(shape, GenType):
            raise TypeError(f"Expected a shape, got {type(shape).__name__}")
        self._shapes[tp] = shape

    def shape_of(self, tp: Any) -> GenType:
        """Return the shape for `tp`, resolving and caching it on first use."""
        if isinstance(tp, GenType):
            return tp

        try:
            cached = self._shapes.get(tp)
        except TypeError:
            raise UnsupportedTypeError(f"Unhashable type annotation: {tp!r}")
        if cached is not None:
            return cached

        shape = self._resolve(tp)
        self._shapes[tp] = shape
        logger.debug(f"Resolved {tp!r} -> {shape!r}")
        return shape

    def _resolve(self, tp: Any) -> GenType:
        if tp in _SCALARS:
            return _SCALARS[tp]

        origin = get_origin(tp)
        args = get_args(tp)

        if origin is Union or origin is UnionType:
            return self._resolve_union(args)
        if origin is list:
            return DArrayT(self.shape_of(args[0]))
        if origin is set:
            return SetT(self._key_shape_of(args[0]))
        if origin is dict:
            return HashMapT(self._key_shape_of(args[0]), self.shape_of(args[1]))
        if origin is tuple:
            return self._resolve_tuple(args)

        if isinstance(tp, type):
            if is_dataclass(tp):
                return self._resolve_dataclass(tp)
            if issubclass(tp, Flag):
                return self._resolve_flag(tp)
            if issubclass(tp, Enum):
                return self._resolve_enum(tp)
            if issubclass(tp, tuple) and hasattr(tp, "_fields"):
                return self._resolve_namedtuple(tp)

        raise UnsupportedTypeError(f"Don't know how to generate {tp!r}")

    def _key_shape_of(self, tp: Any) -> GenType:
        shape = self.shape_of(tp)
        problem = key_problem(shape)
        if problem:
            raise UnsupportedTypeError(
                f"{_type_name(tp)} cannot be a set element or dict key: {problem}"
            )
        return shape

    def _resolve_union(self, args: tuple) -> GenType:
        members = [a for a in args if a is not type(None)]
        if len(members) < len(args):
            if len(members) == 1:
                return OptionalT(self.shape_of(members[0]))
            return OptionalT(self.shape_of(Union[tuple(members)]))

        variants = [
            Variant(
                _type_name(arg),
                [self.shape_of(arg)],
                weight=vars(arg).get(WEIGHT_ATTR, 1) if isinstance(arg, type) else 1,
                constructor=_identity,
            )
            for arg in members
        ]
        return EnumT(" | ".join(v.name for v in variants), variants)

    def _resolve_tuple(self, args: tuple) -> TupleT:
        if len(args) == 2 and args[1] is Ellipsis:
            raise UnsupportedTypeError("Variable-length tuples are not supported")
        # tuple[()] reports ((),) on older interpreters
        if args == ((),):
            args = ()
        return TupleT([self.shape_of(a) for a in args])

    def _with_placeholder(self, tp: type, struct_t: StructT, resolve_members) -> StructT:
        # cache first so self-referential fields resolve to this same shape
        self._shapes[tp] = struct_t
        try:
            struct_t.members = resolve_members()
        except Exception:
            del self._shapes[tp]
            raise
        return struct_t

    def _resolve_dataclass(self, tp: type) -> StructT:
        def resolve_members():
            hints = get_type_hints(tp)
            return {f.name: self.shape_of(hints[f.name]) for f in fields(tp) if f.init}

        return self._with_placeholder(tp, StructT(tp.__name__, constructor=tp), resolve_members)

    def _resolve_namedtuple(self, tp: type) -> StructT:
        def resolve_members():
            hints = get_type_hints(tp)
            missing = [name for name in tp._fields if name not in hints]
            if missing:
                raise UnsupportedTypeError(
                    f"{tp.__name__} has unannotated fields: {', '.join(missing)}"
                )
            return {name: self.shape_of(hints[name]) for name in tp._fields}

        return self._with_placeholder(tp, StructT(tp.__name__, constructor=tp), resolve_members)

    def _resolve_enum(self, tp: type) -> EnumT:
        weights = vars(tp).get(VARIANT_WEIGHTS_ATTR, {})
        unknown = set(weights) - {member.name for member in tp}
        if unknown:
            raise WeightError(
                f"Weights given for unknown members of {tp.__name__}: {sorted(unknown)}"
            )

        variants = [
            Variant(member.name, weight=weights.get(member.name, 1), constructor=_constant(member))
            for member in tp
        ]
        return EnumT(tp.__name__, variants)

    def _resolve_flag(self, tp: type) -> EnumSetT:
        """A Flag is generated as the union of a random set of its members."""
        empty = tp(0)

        def combine(members):
            return functools.reduce(operator.or_, members, empty)

        return EnumSetT(self._resolve_enum(tp), combine=combine)


DEFAULT_REGISTRY = TypeRegistry()
