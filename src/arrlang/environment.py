"""Variable environment for one program run."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Callable, Iterator

from .errors import UndefinedVariableError
from .values import Value, copy_value, format_value, from_python, validate_value

logger = logging.getLogger(__name__)

Emitter = Callable[[Value], None]


def print_value(value: Value) -> None:
    print(format_value(value))


class Environment(MutableMapping[str, Value]):
    """Name to value bindings plus the channel `print` writes to.

    Values are copied on the way in and on the way out, so nothing read
    from the environment aliases what it stores.
    """

    def __init__(self, data: MutableMapping[str, object] | None = None, *, emitter: Emitter | None = None) -> None:
        self._values: dict[str, Value] = {}
        self._emitter: Emitter = emitter if emitter is not None else print_value
        if data is not None:
            for name, value in data.items():
                self[name] = from_python(value)

    def __getitem__(self, name: str) -> Value:
        return copy_value(self._values[name])

    def __setitem__(self, name: str, value: Value) -> None:
        if not isinstance(name, str) or not name:
            raise TypeError(f"Variable names must be non-empty strings, got {name!r}")
        validate_value(value, where=f"env[{name!r}]")
        self._values[name] = copy_value(value)

    def __delitem__(self, name: str) -> None:
        del self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __repr__(self) -> str:
        body = ", ".join(f"{name}={format_value(value)}" for name, value in self._values.items())
        return f"Environment({body})"

    def lookup(self, name: str) -> Value:
        try:
            return self[name]
        except KeyError:
            raise UndefinedVariableError(name) from None

    def assign(self, name: str, value: Value) -> None:
        self[name] = value
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("assign %s = %s", name, format_value(value))

    def snapshot(self) -> "Environment":
        """Independent copy sharing this environment's print channel."""
        clone = Environment(emitter=self._emitter)
        for name, value in self._values.items():
            clone._values[name] = copy_value(value)
        return clone

    def emit(self, value: Value) -> None:
        self._emitter(value)
