"""Monadic verbs: print, generate (iota) and shape."""

from __future__ import annotations

from typing import Callable, Final, Protocol

from .ast import MonadicVerb
from .errors import UnsupportedOperandError
from .values import NULL, ArrayValue, Int, Value, kind_of


class PrintChannel(Protocol):
    def emit(self, value: Value) -> None:
        ...


def _print(verb: MonadicVerb, value: Value, channel: PrintChannel) -> Value:
    channel.emit(value)
    return NULL


def _generate(verb: MonadicVerb, value: Value, channel: PrintChannel) -> Value:
    # n <= 0 yields the empty array.
    if not isinstance(value, Int):
        raise UnsupportedOperandError(verb.value, kind_of(value).value, "expected an Int count")
    return ArrayValue(Int(i) for i in range(value.value))


def _shape(verb: MonadicVerb, value: Value, channel: PrintChannel) -> Value:
    if not isinstance(value, list):
        raise UnsupportedOperandError(verb.value, kind_of(value).value, "shape is defined for arrays only")
    return Int(len(value))


_MONADIC_VERBS: Final[dict[MonadicVerb, Callable[[MonadicVerb, Value, PrintChannel], Value]]] = {
    MonadicVerb.PRINT: _print,
    MonadicVerb.GENERATE: _generate,
    MonadicVerb.SHAPE: _shape,
}


def apply_monadic(verb: MonadicVerb, value: Value, channel: PrintChannel) -> Value:
    """Apply `verb` to an evaluated operand; `channel` receives print output."""
    return _MONADIC_VERBS[verb](verb, value, channel)
