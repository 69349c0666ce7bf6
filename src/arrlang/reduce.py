"""Reduce: fold a dyadic verb over an array from a shape-matched identity."""

from __future__ import annotations

import os
from typing import Final

from . import numeric
from .ast import DyadicVerb, OperatorVerb
from .broadcast import map_leaves
from .dyadic import apply_dyadic
from .errors import EmptyReduceError, OperatorNotImplementedError, UnsupportedOperandError
from .values import Float, Int, Value, kind_of

_NO_FAST_PATH: Final = object()
_USE_FAST_PATHS: Final[bool] = os.environ.get("ARRLANG_DISABLE_FAST_PATHS", "0") != "1"

# (Int identity, Float identity) per reducible verb.
_IDENTITIES: Final[dict[DyadicVerb, tuple[Int, Float]]] = {
    DyadicVerb.ADD: (Int(0), Float(0.0)),
    DyadicVerb.MULTIPLY: (Int(1), Float(1.0)),
}


def identity_like(verb: DyadicVerb, template: Value) -> Value:
    """Identity of `verb` with the array shape and map keys of `template`."""
    int_identity, float_identity = _IDENTITIES[verb]

    def leaf(value: Value) -> Value:
        if isinstance(value, Int):
            return int_identity
        if isinstance(value, Float):
            return float_identity
        raise UnsupportedOperandError(
            OperatorVerb.REDUCE.value,
            kind_of(value).value,
            f"no identity for {verb.value!r} over this element",
        )

    return map_leaves(leaf, template)


def _fast_fold(verb: DyadicVerb, values: list):
    # Int data only: a sequential Float fold rounds differently from jnp.sum.
    if not _USE_FAST_PATHS:
        return _NO_FAST_PATH
    if numeric.uniform_kind(values) is Int:
        arr = numeric.dense_vector(values, numeric.dtype_for(Int))
    else:
        arr = numeric.dense_matrix(values)
        if arr is None:
            return _NO_FAST_PATH
    return numeric.from_dense(numeric.fold_dense(verb.value, arr))


def reduce(verb: DyadicVerb, value: Value) -> Value:
    if verb not in _IDENTITIES:
        raise OperatorNotImplementedError(OperatorVerb.REDUCE.value, verb.value)
    if not isinstance(value, list):
        raise UnsupportedOperandError(OperatorVerb.REDUCE.value, kind_of(value).value, "expected an array")
    if not value:
        raise EmptyReduceError(f"Cannot reduce {verb.value!r} over an empty array")

    fast = _fast_fold(verb, value)
    if fast is not _NO_FAST_PATH:
        return fast

    acc = identity_like(verb, value[0])
    for item in value:
        acc = apply_dyadic(verb, acc, item)
    return acc


def apply_operator(verb: DyadicVerb, operator: OperatorVerb, value: Value) -> Value:
    if operator is OperatorVerb.REDUCE:
        return reduce(verb, value)
    raise OperatorNotImplementedError(operator.value, verb.value)
