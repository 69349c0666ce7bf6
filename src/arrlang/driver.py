"""Program driver: runs lines in order over one environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, MutableMapping
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Final

from .ast import Expr, Program
from .environment import Environment
from .errors import ArrLangParseError, EvaluationError
from .evaluator import evaluate
from .parser import ParseError, parse_program
from .values import NULL, Value

logger = logging.getLogger(__name__)

_PROGRAM_CACHE_MAX: Final[int] = max(1, int(os.environ.get("ARRLANG_PROGRAM_CACHE_MAX", "256")))


@lru_cache(maxsize=_PROGRAM_CACHE_MAX)
def _parse_program_cached(source: str) -> Program:
    return parse_program(source)


@dataclass(frozen=True)
class LineResult:
    index: int
    node: Expr
    value: Value | None = None
    error: EvaluationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ProgramResult:
    env: Environment
    lines: list[LineResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(line.ok for line in self.lines)

    @property
    def errors(self) -> list[LineResult]:
        return [line for line in self.lines if not line.ok]

    @property
    def last_value(self) -> Value:
        for line in reversed(self.lines):
            if line.ok:
                return line.value
        return NULL


def _as_environment(env: Environment | MutableMapping[str, object] | None) -> Environment:
    if isinstance(env, Environment):
        return env
    return Environment(env)


def run_program(
    program: str | Program | Iterable[Expr],
    env: Environment | MutableMapping[str, object] | None = None,
    *,
    keep_going: bool = False,
) -> ProgramResult:
    """Evaluate each line in order.

    Stops at the first failing line unless `keep_going` is set, in which
    case the failure is recorded and the next line runs. Parse errors are
    raised before any line runs.
    """
    if isinstance(program, str):
        program = _parse_program_cached(program)
    lines = program.lines if isinstance(program, Program) else tuple(program)

    runtime_env = _as_environment(env)
    result = ProgramResult(env=runtime_env)
    for index, node in enumerate(lines):
        logger.debug("line %d: %s", index, type(node).__name__)
        try:
            value = evaluate(node, runtime_env)
        except EvaluationError as err:
            logger.debug("line %d failed: %s", index, err)
            result.lines.append(LineResult(index=index, node=node, error=err))
            if not keep_going:
                break
            continue
        result.lines.append(LineResult(index=index, node=node, value=value))
    return result


def evaluate_with_errors(source: str, env: Environment | MutableMapping[str, object] | None = None) -> Value:
    """Run source and return the last line's value, with structured parse errors."""
    try:
        program = _parse_program_cached(source)
    except ParseError as err:
        raise ArrLangParseError.from_parse_error(err) from err
    result = run_program(program, env)
    if not result.ok:
        raise result.errors[0].error
    return result.last_value


@dataclass
class StatefulEvaluate:
    """Callable wrapper that evaluates source in a persistent environment."""

    env: Environment = field(default_factory=Environment)

    def __call__(self, source: str) -> Value:
        return evaluate_with_errors(source, self.env)
