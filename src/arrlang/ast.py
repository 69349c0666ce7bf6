"""AST nodes and verb identifiers for one program line."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class DyadicVerb(str, Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "×"
    DIVIDE = "÷"
    REPLICATE = "/"
    GREATER_THAN = ">"
    EQUALS = "="
    ACCESS = "."


class MonadicVerb(str, Enum):
    PRINT = "print"
    GENERATE = "⍳"
    SHAPE = "⍴"


class OperatorVerb(str, Enum):
    REDUCE = "/"


@dataclass(frozen=True)
class NumericLiteral:
    value: int | float


@dataclass(frozen=True)
class StringLiteral:
    value: str


@dataclass(frozen=True)
class ArrayLiteral:
    items: tuple["Expr", ...]


@dataclass(frozen=True)
class MapLiteral:
    """Map literal; `entries` keys are unique."""

    entries: tuple[tuple[str, "Expr"], ...]

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for key, _ in self.entries:
            if key in seen:
                raise ValueError(f"Duplicate map key {key!r}")
            seen.add(key)

    @classmethod
    def from_dict(cls, entries: dict[str, "Expr"]) -> "MapLiteral":
        return cls(entries=tuple(entries.items()))


@dataclass(frozen=True)
class VariableRef:
    name: str


@dataclass(frozen=True)
class Assignment:
    name: str
    expr: "Expr"


@dataclass(frozen=True)
class DyadicApplication:
    verb: DyadicVerb
    lhs: "Expr"
    rhs: "Expr"


@dataclass(frozen=True)
class MonadicApplication:
    verb: MonadicVerb
    rhs: "Expr"


@dataclass(frozen=True)
class OperatorApplication:
    verb: DyadicVerb
    operator: OperatorVerb
    rhs: "Expr"


@dataclass(frozen=True)
class Program:
    lines: tuple["Expr", ...]


Expr = Union[
    NumericLiteral,
    StringLiteral,
    ArrayLiteral,
    MapLiteral,
    VariableRef,
    Assignment,
    DyadicApplication,
    MonadicApplication,
    OperatorApplication,
]
