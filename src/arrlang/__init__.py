"""arrlang public API."""

from .ast import DyadicVerb, MonadicVerb, OperatorVerb
from .driver import LineResult, ProgramResult, StatefulEvaluate, evaluate_with_errors, run_program
from .environment import Environment
from .errors import (
    ArrLangError,
    ArrLangParseError,
    EmptyReduceError,
    EvaluationError,
    IndexOutOfBoundsError,
    InvalidMultiplicityError,
    KeyNotFoundError,
    OperatorNotImplementedError,
    ShapeMismatchError,
    TypeMismatchError,
    UndefinedVariableError,
    UnsupportedError,
    UnsupportedOperandError,
    UnsupportedOperandsError,
)
from .evaluator import evaluate
from .parser import ParseError, parse, parse_program
from .values import NULL, ArrayValue, Float, Int, MapValue, Text, format_value, from_python, to_python

__all__ = [
    "parse",
    "parse_program",
    "ParseError",
    "evaluate",
    "run_program",
    "evaluate_with_errors",
    "Environment",
    "StatefulEvaluate",
    "LineResult",
    "ProgramResult",
    "DyadicVerb",
    "MonadicVerb",
    "OperatorVerb",
    "Int",
    "Float",
    "Text",
    "ArrayValue",
    "MapValue",
    "NULL",
    "format_value",
    "from_python",
    "to_python",
    "ArrLangError",
    "ArrLangParseError",
    "EvaluationError",
    "TypeMismatchError",
    "UnsupportedOperandsError",
    "UnsupportedOperandError",
    "ShapeMismatchError",
    "IndexOutOfBoundsError",
    "KeyNotFoundError",
    "InvalidMultiplicityError",
    "UndefinedVariableError",
    "UnsupportedError",
    "OperatorNotImplementedError",
    "EmptyReduceError",
]
