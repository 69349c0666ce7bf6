"""Structured error types for parser/runtime separation."""

from __future__ import annotations

from dataclasses import dataclass

from .parser import ParseError


class ArrLangError(Exception):
    """Base class for structured arrlang errors."""


@dataclass(frozen=True)
class ArrLangParseError(ArrLangError):
    """Wraps parser failures with explicit parse-stage typing."""

    message: str
    start: int
    end: int
    expected: tuple[str, ...] = ()
    found: str | None = None

    @classmethod
    def from_parse_error(cls, err: ParseError) -> "ArrLangParseError":
        return cls(
            message=err.message,
            start=err.start,
            end=err.end,
            expected=err.expected,
            found=err.found,
        )

    def __str__(self) -> str:
        expected = ""
        if self.expected:
            expected = f"; expected {', '.join(self.expected)}"
        found = ""
        if self.found is not None:
            found = f"; found {self.found}"
        return f"{self.message} at span [{self.start}, {self.end}){expected}{found}"


class EvaluationError(ArrLangError):
    """Generic runtime failure after successful parse."""


class TypeMismatchError(EvaluationError):
    """Runtime value-kind compatibility failure."""


class UnsupportedOperandsError(TypeMismatchError):
    """Dyadic verb applied to a pair of kinds it has no case for."""

    def __init__(self, verb: str, lhs_kind: str, rhs_kind: str) -> None:
        super().__init__(f"Verb {verb!r} is not defined for ({lhs_kind}, {rhs_kind}) operands")
        self.verb = verb
        self.lhs_kind = lhs_kind
        self.rhs_kind = rhs_kind


class UnsupportedOperandError(TypeMismatchError):
    """Monadic verb or reduce applied to an operand kind it has no case for."""

    def __init__(self, verb: str, kind: str, detail: str | None = None) -> None:
        message = f"Verb {verb!r} is not defined for a {kind} operand"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.verb = verb
        self.kind = kind


class ShapeMismatchError(EvaluationError):
    """Array lengths or map key sets disagree where correspondence is required."""


class IndexOutOfBoundsError(ShapeMismatchError, IndexError):
    """Access index outside the indexed array."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"Index {index} is out of bounds for array of length {length}")
        self.index = index
        self.length = length


class KeyNotFoundError(EvaluationError, KeyError):
    """Map lookup on a missing key."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Key {self.key!r} not found in map"


class InvalidMultiplicityError(EvaluationError):
    """Replicate with a negative count."""


class UndefinedVariableError(EvaluationError, NameError):
    """Variable reference to a name the environment does not hold."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Undefined variable {name!r}")
        self.name = name


class UnsupportedError(EvaluationError):
    """Feature exists in the language but is not supported by the evaluator."""


class OperatorNotImplementedError(UnsupportedError):
    """Operator-verb applied with a verb it cannot take."""

    def __init__(self, operator: str, verb: str) -> None:
        super().__init__(f"Operator {operator!r} is not implemented for verb {verb!r}")
        self.operator = operator
        self.verb = verb


class EmptyReduceError(EvaluationError):
    """Reduce over an empty array."""
