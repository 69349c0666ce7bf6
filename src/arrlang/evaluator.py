"""Recursive evaluator over AST nodes."""

from __future__ import annotations

from .ast import (
    ArrayLiteral,
    Assignment,
    DyadicApplication,
    Expr,
    MapLiteral,
    MonadicApplication,
    NumericLiteral,
    OperatorApplication,
    StringLiteral,
    VariableRef,
)
from .dyadic import apply_dyadic
from .environment import Environment
from .monadic import apply_monadic
from .reduce import apply_operator
from .values import NULL, ArrayValue, Float, Int, MapValue, Text, Value


def _numeric_literal(value: int | float) -> Value:
    if isinstance(value, float):
        return Float(value)
    return Int(value)


def evaluate(expr: Expr, env: Environment) -> Value:
    """Evaluate one AST node against `env`.

    Only Assignment writes to `env`; its right-hand side is evaluated
    against a snapshot, so assignments nested inside it are discarded.
    """
    if isinstance(expr, NumericLiteral):
        return _numeric_literal(expr.value)

    if isinstance(expr, StringLiteral):
        return Text(expr.value)

    if isinstance(expr, ArrayLiteral):
        return ArrayValue(evaluate(item, env) for item in expr.items)

    if isinstance(expr, MapLiteral):
        out = MapValue()
        for key, item in expr.entries:
            out[key] = evaluate(item, env)
        return out

    if isinstance(expr, VariableRef):
        return env.lookup(expr.name)

    if isinstance(expr, Assignment):
        value = evaluate(expr.expr, env.snapshot())
        env.assign(expr.name, value)
        return NULL

    if isinstance(expr, DyadicApplication):
        lhs = evaluate(expr.lhs, env)
        rhs = evaluate(expr.rhs, env)
        return apply_dyadic(expr.verb, lhs, rhs)

    if isinstance(expr, MonadicApplication):
        rhs = evaluate(expr.rhs, env)
        return apply_monadic(expr.verb, rhs, env)

    if isinstance(expr, OperatorApplication):
        rhs = evaluate(expr.rhs, env)
        return apply_operator(expr.verb, expr.operator, rhs)

    raise TypeError(f"Unsupported expression node: {type(expr)!r}")
