"""Runtime value model and validators for the arrlang evaluator."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Final, Union

INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1


@dataclass(frozen=True)
class Int:
    """Signed 64-bit integer scalar."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, numbers.Integral):
            raise TypeError(f"Int requires an integer, got {type(self.value).__name__}")
        value = int(self.value)
        if not INT64_MIN <= value <= INT64_MAX:
            raise ValueError(f"Int value {value} does not fit in 64 bits")
        object.__setattr__(self, "value", value)


@dataclass(frozen=True)
class Float:
    """IEEE-754 double scalar."""

    value: float

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, numbers.Real):
            raise TypeError(f"Float requires a real number, got {type(self.value).__name__}")
        object.__setattr__(self, "value", float(self.value))


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class NullValue:
    pass


NULL: Final = NullValue()


class ArrayValue(list):
    """Explicit container type for arrays."""


class MapValue(dict):
    """Explicit container type for string-keyed maps."""


Numeric = Union[Int, Float]
Value = Union[Int, Float, Text, ArrayValue, MapValue, NullValue]


class ValueKind(str, Enum):
    NUMERIC = "numeric"
    TEXT = "text"
    ARRAY = "array"
    MAP = "map"
    NULL = "null"


def is_numeric(value: object) -> bool:
    return isinstance(value, (Int, Float))


def kind_of(value: object) -> ValueKind:
    if isinstance(value, (Int, Float)):
        return ValueKind.NUMERIC
    if isinstance(value, Text):
        return ValueKind.TEXT
    if isinstance(value, list):
        return ValueKind.ARRAY
    if isinstance(value, dict):
        return ValueKind.MAP
    if isinstance(value, NullValue):
        return ValueKind.NULL
    raise TypeError(f"Unsupported runtime type {type(value).__name__}")


def copy_value(value: Value) -> Value:
    """Deep-copy a value; scalars are immutable and shared."""
    if isinstance(value, list):
        return ArrayValue(copy_value(item) for item in value)
    if isinstance(value, dict):
        return MapValue((key, copy_value(item)) for key, item in value.items())
    return value


def validate_value(value: object, *, where: str = "value") -> None:
    if isinstance(value, (Int, Float, Text, NullValue)):
        return
    if isinstance(value, list):
        for idx, item in enumerate(value):
            validate_value(item, where=f"{where}[{idx}]")
        return
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"{where} has non-string key {key!r}")
            validate_value(item, where=f"{where}[{key!r}]")
        return
    raise TypeError(f"{where} has unsupported runtime type {type(value).__name__}")


def from_python(value: object) -> Value:
    """Build a runtime value from plain Python data (ints, floats, str, list, dict, None)."""
    if value is None:
        return NULL
    if isinstance(value, (Int, Float, Text, NullValue)):
        return value
    if isinstance(value, bool):
        raise TypeError("bool has no runtime representation; use 0 or 1")
    if isinstance(value, numbers.Integral):
        return Int(int(value))
    if isinstance(value, numbers.Real):
        return Float(float(value))
    if isinstance(value, str):
        return Text(value)
    if isinstance(value, dict):
        return MapValue((str(key), from_python(item)) for key, item in value.items())
    if isinstance(value, (list, tuple)):
        return ArrayValue(from_python(item) for item in value)
    raise TypeError(f"Cannot convert {type(value).__name__} to a runtime value")


def to_python(value: Value) -> object:
    """Inverse of from_python; Int/Float unwrap to int/float."""
    if isinstance(value, (Int, Float, Text)):
        return value.value
    if isinstance(value, NullValue):
        return None
    if isinstance(value, list):
        return [to_python(item) for item in value]
    if isinstance(value, dict):
        return {key: to_python(item) for key, item in value.items()}
    raise TypeError(f"Unsupported runtime type {type(value).__name__}")


def _format_number(value: Numeric) -> str:
    if isinstance(value, Int):
        return str(value.value) if value.value >= 0 else f"¯{-value.value}"
    real = value.value
    if math.isnan(real):
        return "NaN"
    if math.isinf(real):
        return "∞" if real > 0 else "¯∞"
    if math.copysign(1.0, real) < 0:
        return f"¯{-real!r}"
    return repr(real)


def format_value(value: Value) -> str:
    """Render a value in literal syntax, as `print` shows it."""
    if isinstance(value, (Int, Float)):
        return _format_number(value)
    if isinstance(value, Text):
        escaped = value.value.replace("'", "''")
        return f"'{escaped}'"
    if isinstance(value, NullValue):
        return "null"
    if isinstance(value, list):
        return "[" + ", ".join(format_value(item) for item in value) + "]"
    if isinstance(value, dict):
        items = [f"{format_value(Text(key))}: {format_value(item)}" for key, item in value.items()]
        return "{" + ", ".join(items) + "}"
    raise TypeError(f"Unsupported runtime type {type(value).__name__}")
