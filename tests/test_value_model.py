from __future__ import annotations

import importlib.util
import unittest


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for value-model tests")
class ValueModelTests(unittest.TestCase):
    def test_int_rejects_bool_and_out_of_range(self) -> None:
        from arrlang.values import INT64_MAX, Int

        with self.assertRaises(TypeError):
            Int(True)
        with self.assertRaises(TypeError):
            Int(1.0)
        with self.assertRaises(ValueError):
            Int(INT64_MAX + 1)
        self.assertEqual(Int(INT64_MAX).value, INT64_MAX)

    def test_int_and_float_are_distinct_variants(self) -> None:
        from arrlang.values import Float, Int

        self.assertNotEqual(Int(1), Float(1.0))
        self.assertIsInstance(Float(2).value, float)

    def test_kind_of_covers_every_variant(self) -> None:
        from arrlang.values import NULL, ArrayValue, Float, Int, MapValue, Text, ValueKind, kind_of

        self.assertEqual(kind_of(Int(1)), ValueKind.NUMERIC)
        self.assertEqual(kind_of(Float(1.0)), ValueKind.NUMERIC)
        self.assertEqual(kind_of(Text("a")), ValueKind.TEXT)
        self.assertEqual(kind_of(ArrayValue()), ValueKind.ARRAY)
        self.assertEqual(kind_of(MapValue()), ValueKind.MAP)
        self.assertEqual(kind_of(NULL), ValueKind.NULL)
        with self.assertRaises(TypeError):
            kind_of(3)

    def test_copy_value_is_deep(self) -> None:
        from arrlang.values import Int, copy_value, from_python

        original = from_python([[1, 2], {"k": [3]}])
        clone = copy_value(original)
        self.assertEqual(clone, original)
        clone[0].append(Int(9))
        clone[1]["k"].append(Int(9))
        self.assertEqual(original, from_python([[1, 2], {"k": [3]}]))

    def test_from_python_and_back(self) -> None:
        from arrlang.values import NULL, ArrayValue, Float, Int, MapValue, Text, from_python, to_python

        value = from_python({"a": [1, 2.5, "x", None]})
        self.assertIsInstance(value, MapValue)
        self.assertIsInstance(value["a"], ArrayValue)
        self.assertEqual(list(value["a"]), [Int(1), Float(2.5), Text("x"), NULL])
        self.assertEqual(to_python(value), {"a": [1, 2.5, "x", None]})
        with self.assertRaises(TypeError):
            from_python(True)
        with self.assertRaises(TypeError):
            from_python(object())

    def test_validate_value_reports_location(self) -> None:
        from arrlang.values import ArrayValue, Int, validate_value

        validate_value(ArrayValue([Int(1)]))
        with self.assertRaisesRegex(TypeError, r"x\[1\]"):
            validate_value(ArrayValue([Int(1), 2]), where="x")

    def test_format_value_literal_syntax(self) -> None:
        from arrlang.values import NULL, Float, Int, Text, format_value, from_python

        self.assertEqual(format_value(Int(-3)), "¯3")
        self.assertEqual(format_value(Float(2.0)), "2.0")
        self.assertEqual(format_value(Float(-0.5)), "¯0.5")
        self.assertEqual(format_value(Float(float("nan"))), "NaN")
        self.assertEqual(format_value(Float(float("-inf"))), "¯∞")
        self.assertEqual(format_value(Text("it's")), "'it''s'")
        self.assertEqual(format_value(NULL), "null")
        self.assertEqual(format_value(from_python({"a": [1, 2]})), "{'a': [1, 2]}")


if __name__ == "__main__":
    unittest.main()
