"""Dyadic verbs: per-verb broadcasting case tables and dispatch."""

from __future__ import annotations

import os
from typing import Callable, Final

import jax.numpy as jnp

from . import numeric
from .ast import DyadicVerb
from .broadcast import map_array, map_map, zip_arrays, zip_maps
from .errors import (
    IndexOutOfBoundsError,
    InvalidMultiplicityError,
    KeyNotFoundError,
    ShapeMismatchError,
    TypeMismatchError,
    UnsupportedOperandsError,
)
from .values import ArrayValue, Int, Value, ValueKind, copy_value, kind_of

_NO_FAST_PATH: Final = object()
_USE_FAST_PATHS: Final[bool] = os.environ.get("ARRLANG_DISABLE_FAST_PATHS", "0") != "1"

_ARRAY: Final = ValueKind.ARRAY
_NUMERIC: Final = ValueKind.NUMERIC
_MAP: Final = ValueKind.MAP
_TEXT: Final = ValueKind.TEXT

Case = Callable[[DyadicVerb, Value, Value], Value]


def apply_dyadic(verb: DyadicVerb, lhs: Value, rhs: Value) -> Value:
    """Apply `verb` to two evaluated operands via its case table."""
    lhs_kind = kind_of(lhs)
    rhs_kind = kind_of(rhs)
    case = DYADIC_CASES[verb].get((lhs_kind, rhs_kind))
    if case is None:
        raise UnsupportedOperandsError(verb.value, lhs_kind.value, rhs_kind.value)
    return case(verb, lhs, rhs)


def supported_pairs(verb: DyadicVerb) -> frozenset[tuple[ValueKind, ValueKind]]:
    return frozenset(DYADIC_CASES[verb])


def _dense_operand(value: Value) -> tuple[type, int | None] | None:
    if isinstance(value, list):
        if not value:
            return None
        kind = numeric.uniform_kind(value)
        return None if kind is None else (kind, len(value))
    if numeric.uniform_kind((value,)) is None:
        return None
    return type(value), None


def _to_dense(value: Value, dtype) -> jnp.ndarray:
    if isinstance(value, list):
        return numeric.dense_vector(value, dtype)
    return jnp.asarray(value.value, dtype=dtype)


def _fast_binary_array(verb: DyadicVerb, lhs: Value, rhs: Value):
    """Vectorized path for flat single-kind numeric operands.

    Returns _NO_FAST_PATH whenever the structural path could behave
    differently (ragged lengths, mixed kinds, nested items).
    """
    op = verb.value
    if not _USE_FAST_PATHS or not numeric.has_kernel(op):
        return _NO_FAST_PATH
    left = _dense_operand(lhs)
    right = _dense_operand(rhs)
    if left is None or right is None:
        return _NO_FAST_PATH
    (left_kind, left_len), (right_kind, right_len) = left, right
    if left_len is not None and right_len is not None and left_len != right_len:
        return _NO_FAST_PATH
    if op in numeric.SAME_KIND_VERBS and left_kind is not right_kind:
        return _NO_FAST_PATH

    dtype = numeric.operand_dtype(op, left_kind, right_kind)
    out = numeric.apply_binary(op, _to_dense(lhs, dtype), _to_dense(rhs, dtype))
    return numeric.from_dense(out)


def _array_array(verb: DyadicVerb, lhs: list, rhs: list) -> Value:
    fast = _fast_binary_array(verb, lhs, rhs)
    if fast is not _NO_FAST_PATH:
        return fast
    return zip_arrays(lambda l_item, r_item: apply_dyadic(verb, l_item, r_item), lhs, rhs, verb=verb.value)


def _array_scalar(verb: DyadicVerb, lhs: list, rhs: Value) -> Value:
    fast = _fast_binary_array(verb, lhs, rhs)
    if fast is not _NO_FAST_PATH:
        return fast
    return map_array(lambda item: apply_dyadic(verb, item, rhs), lhs)


def _scalar_array(verb: DyadicVerb, lhs: Value, rhs: list) -> Value:
    fast = _fast_binary_array(verb, lhs, rhs)
    if fast is not _NO_FAST_PATH:
        return fast
    return map_array(lambda item: apply_dyadic(verb, lhs, item), rhs)


def _map_map(verb: DyadicVerb, lhs: dict, rhs: dict) -> Value:
    return zip_maps(lambda l_item, r_item: apply_dyadic(verb, l_item, r_item), lhs, rhs, verb=verb.value)


def _map_scalar(verb: DyadicVerb, lhs: dict, rhs: Value) -> Value:
    return map_map(lambda item: apply_dyadic(verb, item, rhs), lhs)


def _scalar_map(verb: DyadicVerb, lhs: Value, rhs: dict) -> Value:
    return map_map(lambda item: apply_dyadic(verb, lhs, item), rhs)


def _scalar_scalar(verb: DyadicVerb, lhs: Value, rhs: Value) -> Value:
    return numeric.scalar_binary(verb.value, lhs, rhs)


def _replicate(verb: DyadicVerb, lhs: list, rhs: list) -> Value:
    if len(lhs) != len(rhs):
        raise ShapeMismatchError(
            f"Replicate requires arrays of equal length, got {len(lhs)} and {len(rhs)}"
        )
    counts: list[int] = []
    for item in lhs:
        if not isinstance(item, Int):
            raise TypeMismatchError(f"Replicate counts must be Int, got {kind_of(item).value}")
        counts.append(item.value)

    out = ArrayValue()
    for count, item in zip(counts, rhs):
        if count < 0:
            raise InvalidMultiplicityError(f"Replicate count {count} is negative")
        out.extend(copy_value(item) for _ in range(count))
    return out


def _checked_index(array: list, index_value: Value) -> int:
    if not isinstance(index_value, Int):
        raise TypeMismatchError(f"Array index must be Int, got {type(index_value).__name__}")
    index = index_value.value
    if not 0 <= index < len(array):
        raise IndexOutOfBoundsError(index, len(array))
    return index


def _access_gather(verb: DyadicVerb, lhs: list, rhs: list) -> Value:
    indices = [_checked_index(lhs, item) for item in rhs]
    return ArrayValue(copy_value(lhs[index]) for index in indices)


def _access_index(verb: DyadicVerb, lhs: list, rhs: Value) -> Value:
    return copy_value(lhs[_checked_index(lhs, rhs)])


def _access_key(verb: DyadicVerb, lhs: dict, rhs: Value) -> Value:
    try:
        return copy_value(lhs[rhs.value])
    except KeyError:
        raise KeyNotFoundError(rhs.value) from None


def _access_project(verb: DyadicVerb, lhs: list, rhs: Value) -> Value:
    for item in lhs:
        if not isinstance(item, dict):
            raise TypeMismatchError(
                f"Projecting key {rhs.value!r} requires an array of maps, found {kind_of(item).value}"
            )
    return ArrayValue(_access_key(verb, item, rhs) for item in lhs)


_ARITHMETIC_CASES: Final[dict[tuple[ValueKind, ValueKind], Case]] = {
    (_ARRAY, _ARRAY): _array_array,
    (_ARRAY, _NUMERIC): _array_scalar,
    (_NUMERIC, _ARRAY): _scalar_array,
    (_MAP, _MAP): _map_map,
    (_NUMERIC, _NUMERIC): _scalar_scalar,
}

DYADIC_CASES: Final[dict[DyadicVerb, dict[tuple[ValueKind, ValueKind], Case]]] = {
    DyadicVerb.ADD: dict(_ARITHMETIC_CASES),
    DyadicVerb.SUBTRACT: dict(_ARITHMETIC_CASES),
    DyadicVerb.MULTIPLY: dict(_ARITHMETIC_CASES),
    DyadicVerb.DIVIDE: {
        (_ARRAY, _ARRAY): _array_array,
        (_ARRAY, _NUMERIC): _array_scalar,
        (_MAP, _NUMERIC): _map_scalar,
        (_NUMERIC, _NUMERIC): _scalar_scalar,
    },
    DyadicVerb.GREATER_THAN: {
        (_ARRAY, _NUMERIC): _array_scalar,
        (_NUMERIC, _NUMERIC): _scalar_scalar,
    },
    DyadicVerb.EQUALS: {
        (_ARRAY, _ARRAY): _array_array,
        (_ARRAY, _NUMERIC): _array_scalar,
        (_NUMERIC, _ARRAY): _scalar_array,
        (_MAP, _NUMERIC): _map_scalar,
        (_NUMERIC, _MAP): _scalar_map,
        (_NUMERIC, _NUMERIC): _scalar_scalar,
    },
    DyadicVerb.REPLICATE: {
        (_ARRAY, _ARRAY): _replicate,
    },
    DyadicVerb.ACCESS: {
        (_ARRAY, _ARRAY): _access_gather,
        (_ARRAY, _NUMERIC): _access_index,
        (_ARRAY, _TEXT): _access_project,
        (_MAP, _TEXT): _access_key,
    },
}


def _check_dispatch_table() -> None:
    missing = [verb.name for verb in DyadicVerb if verb not in DYADIC_CASES]
    if missing:
        raise RuntimeError(f"Dyadic verbs without a case table: {', '.join(missing)}")
    for verb, cases in DYADIC_CASES.items():
        if not cases:
            raise RuntimeError(f"Dyadic verb {verb.name} has an empty case table")
        for pair in cases:
            if len(pair) != 2 or not all(isinstance(kind, ValueKind) for kind in pair):
                raise RuntimeError(f"Dyadic verb {verb.name} has a malformed case key {pair!r}")


_check_dispatch_table()
