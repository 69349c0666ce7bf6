"""Numeric primitives over the Int/Float domain, computed with JAX kernels."""

from __future__ import annotations

import os
from typing import Callable, Final

import jax
from jax import lax
import jax.numpy as jnp

from .ast import DyadicVerb
from .errors import TypeMismatchError
from .values import ArrayValue, Float, Int, Numeric

# Int is a signed 64-bit integer and Float an IEEE-754 double.
jax.config.update("jax_enable_x64", True)

_USE_JITTED_KERNELS: Final[bool] = os.environ.get("ARRLANG_DISABLE_JITTED_KERNELS", "0") != "1"


def _as_int_result(mask: jnp.ndarray) -> jnp.ndarray:
    return lax.convert_element_type(mask, jnp.int64)


_BINARY_KERNELS: Final[dict[str, Callable[[jnp.ndarray, jnp.ndarray], jnp.ndarray]]] = {
    DyadicVerb.ADD.value: jnp.add,
    DyadicVerb.SUBTRACT.value: jnp.subtract,
    DyadicVerb.MULTIPLY.value: jnp.multiply,
    DyadicVerb.DIVIDE.value: jnp.true_divide,
    DyadicVerb.GREATER_THAN.value: lambda w, x: _as_int_result(jnp.greater(w, x)),
    DyadicVerb.EQUALS.value: lambda w, x: _as_int_result(jnp.equal(w, x)),
}

# Verbs whose scalar primitive requires both operands of one numeric kind.
SAME_KIND_VERBS: Final[frozenset[str]] = frozenset(
    {DyadicVerb.ADD.value, DyadicVerb.SUBTRACT.value, DyadicVerb.MULTIPLY.value}
)
COMPARISON_VERBS: Final[frozenset[str]] = frozenset(
    {DyadicVerb.GREATER_THAN.value, DyadicVerb.EQUALS.value}
)

_JITTED_BINARY_KERNELS: dict[str, Callable[[jnp.ndarray, jnp.ndarray], jnp.ndarray]] = {}


def _binary_kernel(op: str) -> Callable[[jnp.ndarray, jnp.ndarray], jnp.ndarray]:
    if not _USE_JITTED_KERNELS:
        return _BINARY_KERNELS[op]
    fn = _JITTED_BINARY_KERNELS.get(op)
    if fn is None:
        fn = jax.jit(_BINARY_KERNELS[op])
        _JITTED_BINARY_KERNELS[op] = fn
    return fn


def has_kernel(op: str) -> bool:
    return op in _BINARY_KERNELS


def dtype_for(kind: type) -> jnp.dtype:
    return jnp.int64 if kind is Int else jnp.float64


def result_kind(op: str, left_kind: type) -> type:
    """Numeric class produced by `op` for operands of the given classes."""
    if op in COMPARISON_VERBS:
        return Int
    if op == DyadicVerb.DIVIDE.value:
        return Float
    return left_kind


def operand_dtype(op: str, left_kind: type, right_kind: type) -> jnp.dtype:
    """Common dtype both operands are promoted to before the kernel runs."""
    if op == DyadicVerb.DIVIDE.value:
        return jnp.float64
    if left_kind is Int and right_kind is Int:
        return jnp.int64
    return jnp.float64


def check_kinds(op: str, left_kind: type, right_kind: type) -> None:
    if op in SAME_KIND_VERBS and left_kind is not right_kind:
        raise TypeMismatchError(
            f"Verb {op!r} cannot mix {left_kind.__name__} and {right_kind.__name__} operands"
        )


def apply_binary(op: str, left: jnp.ndarray, right: jnp.ndarray) -> jnp.ndarray:
    return _binary_kernel(op)(left, right)


def _wrap_scalar(kind: type, scalar) -> Numeric:
    return Int(int(scalar)) if kind is Int else Float(float(scalar))


def scalar_binary(op: str, left: Numeric, right: Numeric) -> Numeric:
    left_kind, right_kind = type(left), type(right)
    check_kinds(op, left_kind, right_kind)
    dtype = operand_dtype(op, left_kind, right_kind)
    out = apply_binary(
        op,
        jnp.asarray(left.value, dtype=dtype),
        jnp.asarray(right.value, dtype=dtype),
    )
    return _wrap_scalar(result_kind(op, left_kind), out.item())


def add(left: Numeric, right: Numeric) -> Numeric:
    return scalar_binary(DyadicVerb.ADD.value, left, right)


def subtract(left: Numeric, right: Numeric) -> Numeric:
    return scalar_binary(DyadicVerb.SUBTRACT.value, left, right)


def multiply(left: Numeric, right: Numeric) -> Numeric:
    return scalar_binary(DyadicVerb.MULTIPLY.value, left, right)


def divide(left: Numeric, right: Numeric) -> Float:
    """Always Float; division by zero yields inf or nan per IEEE-754."""
    return scalar_binary(DyadicVerb.DIVIDE.value, left, right)


def greater_than(left: Numeric, right: Numeric) -> Int:
    return scalar_binary(DyadicVerb.GREATER_THAN.value, left, right)


def equals(left: Numeric, right: Numeric) -> Int:
    return scalar_binary(DyadicVerb.EQUALS.value, left, right)


def uniform_kind(values) -> type | None:
    """Int or Float when every item is a numeric of that one class, else None."""
    kind = None
    for item in values:
        item_kind = type(item)
        if item_kind is not Int and item_kind is not Float:
            return None
        if kind is None:
            kind = item_kind
        elif item_kind is not kind:
            return None
    return kind


def dense_vector(values, dtype: jnp.dtype) -> jnp.ndarray:
    return jnp.asarray([item.value for item in values], dtype=dtype)


def dense_matrix(rows) -> jnp.ndarray | None:
    """Stack equal-length Int rows into a 2-D int64 array, or None if ragged/mixed."""
    width = None
    for row in rows:
        if not isinstance(row, list) or uniform_kind(row) is not Int:
            return None
        if width is None:
            width = len(row)
        elif len(row) != width:
            return None
    if not width:
        return None
    return jnp.asarray([[item.value for item in row] for row in rows], dtype=jnp.int64)


def from_dense(arr: jnp.ndarray):
    """Convert a JAX array back into nested ArrayValue / scalar values."""
    kind = Int if jnp.issubdtype(arr.dtype, jnp.integer) else Float

    def build(item):
        if isinstance(item, list):
            return ArrayValue(build(x) for x in item)
        return _wrap_scalar(kind, item)

    return build(arr.tolist())


def fold_dense(op: str, arr: jnp.ndarray) -> jnp.ndarray:
    """Reduce an int64 array along its leading axis with + or ×."""
    if op == DyadicVerb.ADD.value:
        return jnp.sum(arr, axis=0, dtype=arr.dtype)
    if op == DyadicVerb.MULTIPLY.value:
        return jnp.prod(arr, axis=0, dtype=arr.dtype)
    raise ValueError(f"No dense fold for verb {op!r}")
