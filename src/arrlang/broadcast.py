"""Structural map/zip helpers shared by the dyadic verbs and reduce."""

from __future__ import annotations

from typing import Callable

from .errors import ShapeMismatchError
from .values import ArrayValue, MapValue, Value


def map_array(fn: Callable[[Value], Value], array: list) -> ArrayValue:
    return ArrayValue(fn(item) for item in array)


def map_map(fn: Callable[[Value], Value], mapping: dict) -> MapValue:
    return MapValue((key, fn(item)) for key, item in mapping.items())


def zip_arrays(fn: Callable[[Value, Value], Value], left: list, right: list, *, verb: str) -> ArrayValue:
    if len(left) != len(right):
        raise ShapeMismatchError(
            f"Verb {verb!r} requires arrays of equal length, got {len(left)} and {len(right)}"
        )
    return ArrayValue(fn(l_item, r_item) for l_item, r_item in zip(left, right))


def zip_maps(fn: Callable[[Value, Value], Value], left: dict, right: dict, *, verb: str) -> MapValue:
    if len(left) != len(right):
        raise ShapeMismatchError(
            f"Verb {verb!r} requires maps of equal size, got {len(left)} and {len(right)} keys"
        )
    if left.keys() != right.keys():
        missing = sorted(set(left) ^ set(right))
        raise ShapeMismatchError(f"Verb {verb!r} requires maps with the same keys; differing keys {missing}")
    return MapValue((key, fn(item, right[key])) for key, item in left.items())


def map_leaves(fn: Callable[[Value], Value], value: Value) -> Value:
    """Apply `fn` to every non-container leaf, keeping array shape and map keys."""
    if isinstance(value, list):
        return map_array(lambda item: map_leaves(fn, item), value)
    if isinstance(value, dict):
        return map_map(lambda item: map_leaves(fn, item), value)
    return fn(value)
