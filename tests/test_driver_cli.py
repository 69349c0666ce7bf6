from __future__ import annotations

import contextlib
import importlib.util
import io
import tempfile
import unittest
from pathlib import Path


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for driver tests")
class RunProgramTests(unittest.TestCase):
    def test_lines_share_one_environment(self) -> None:
        from arrlang import run_program
        from arrlang.values import NULL, Int

        result = run_program("x ← 1 2 3\ny ← +/ x\ny × 2")
        self.assertTrue(result.ok)
        self.assertEqual(len(result.lines), 3)
        self.assertIs(result.lines[0].value, NULL)
        self.assertEqual(result.env.lookup("y"), Int(6))
        self.assertEqual(result.last_value, Int(12))

    def test_stops_at_first_failing_line_by_default(self) -> None:
        from arrlang import run_program
        from arrlang.errors import UndefinedVariableError

        result = run_program("a ← 1\nb ← missing\nc ← 3")
        self.assertFalse(result.ok)
        self.assertEqual(len(result.lines), 2)
        self.assertEqual(result.errors[0].index, 1)
        self.assertIsInstance(result.errors[0].error, UndefinedVariableError)
        self.assertIn("a", result.env)
        self.assertNotIn("c", result.env)

    def test_keep_going_continues_after_failure(self) -> None:
        from arrlang import run_program
        from arrlang.errors import ShapeMismatchError

        result = run_program("a ← [1, 2] + [1]\nc ← 3", keep_going=True)
        self.assertEqual(len(result.lines), 2)
        self.assertIsInstance(result.errors[0].error, ShapeMismatchError)
        self.assertIn("c", result.env)

    def test_accepts_nodes_and_plain_mapping_env(self) -> None:
        from arrlang import parse, run_program
        from arrlang.values import Int

        result = run_program([parse("x + 1")], {"x": 4})
        self.assertEqual(result.last_value, Int(5))

    def test_print_goes_to_environment_channel(self) -> None:
        from arrlang import Environment, run_program
        from arrlang.values import from_python as v

        seen = []
        run_program("print 1 2\nprint {'k': 'v'}", Environment(emitter=seen.append))
        self.assertEqual(seen, [v([1, 2]), v({"k": "v"})])

    def test_parse_errors_raise_before_any_line_runs(self) -> None:
        from arrlang import Environment, ParseError, run_program

        seen = []
        with self.assertRaises(ParseError):
            run_program("print 1\nprint (", Environment(emitter=seen.append))
        self.assertEqual(seen, [])


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for driver tests")
class EvaluateWithErrorsTests(unittest.TestCase):
    def test_parse_failure_is_structured(self) -> None:
        from arrlang import ArrLangError, ArrLangParseError, evaluate_with_errors

        with self.assertRaises(ArrLangParseError) as ctx:
            evaluate_with_errors("1 +")
        self.assertIsInstance(ctx.exception, ArrLangError)
        self.assertEqual(ctx.exception.found, "EOF")
        self.assertIn("span", str(ctx.exception))

    def test_evaluation_errors_propagate_typed(self) -> None:
        from arrlang import IndexOutOfBoundsError, evaluate_with_errors

        with self.assertRaises(IndexOutOfBoundsError):
            evaluate_with_errors("[1] . 5")

    def test_stateful_evaluate_persists_bindings(self) -> None:
        from arrlang import StatefulEvaluate
        from arrlang.values import NULL, Int

        stateful = StatefulEvaluate()
        self.assertIs(stateful("a ← 10"), NULL)
        self.assertEqual(stateful("a + 5"), Int(15))
        self.assertEqual(stateful("a ← a × 2 ⋄ a"), Int(20))


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for CLI tests")
class CommandLineTests(unittest.TestCase):
    def _run(self, source: str, *flags: str) -> tuple[int, str]:
        from arrlang.cli import main

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "prog.arr"
            path.write_text(source, encoding="utf-8")
            out = io.StringIO()
            with contextlib.redirect_stdout(out):
                code = main([str(path), *flags])
        return code, out.getvalue()

    def test_successful_program_prints_and_exits_zero(self) -> None:
        code, out = self._run("x ← ⍳ 4\nprint +/ x\nprint x . [3, 0]")
        self.assertEqual(code, 0)
        self.assertEqual(out, "6\n[3, 0]\n")

    def test_failing_line_exits_one_and_logs(self) -> None:
        with self.assertLogs(level="ERROR") as logs:
            code, out = self._run("print 1\nprint missing\nprint 2")
        self.assertEqual(code, 1)
        self.assertEqual(out, "1\n")
        self.assertIn("statement 2: UndefinedVariableError", logs.output[0])

    def test_keep_going_runs_remaining_lines(self) -> None:
        with self.assertLogs(level="ERROR"):
            code, out = self._run("print missing\nprint 2", "--keep-going")
        self.assertEqual(code, 1)
        self.assertEqual(out, "2\n")

    def test_parse_error_exits_two(self) -> None:
        with self.assertLogs(level="ERROR"):
            code, out = self._run("print 1\nprint [")
        self.assertEqual(code, 2)
        self.assertEqual(out, "")

    def test_unreadable_file_exits_two(self) -> None:
        from arrlang.cli import main

        with tempfile.TemporaryDirectory() as tmp:
            with self.assertLogs(level="ERROR"):
                code = main([str(Path(tmp) / "missing.arr")])
        self.assertEqual(code, 2)

    def test_undecodable_file_exits_two(self) -> None:
        from arrlang.cli import main

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "binary.arr"
            path.write_bytes(b"print 1\n\xff\xfe\n")
            out = io.StringIO()
            with self.assertLogs(level="ERROR") as logs, contextlib.redirect_stdout(out):
                code = main([str(path)])
        self.assertEqual(code, 2)
        self.assertEqual(out.getvalue(), "")
        self.assertIn("Error reading", logs.output[0])

    def test_show_env_lists_final_bindings(self) -> None:
        code, out = self._run("x ← 1 2\ny ← ¯3", "--show-env")
        self.assertEqual(code, 0)
        self.assertEqual(out, "x = [1, 2]\ny = ¯3\n")


if __name__ == "__main__":
    unittest.main()
