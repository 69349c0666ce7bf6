from __future__ import annotations

import importlib.util
import math
import unittest


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for numeric kernel tests")
class NumericKernelTests(unittest.TestCase):
    def test_same_kind_arithmetic_keeps_variant(self) -> None:
        from arrlang import numeric
        from arrlang.values import Float, Int

        self.assertEqual(numeric.add(Int(2), Int(3)), Int(5))
        self.assertEqual(numeric.subtract(Int(2), Int(3)), Int(-1))
        self.assertEqual(numeric.multiply(Float(1.5), Float(2.0)), Float(3.0))

    def test_mixed_arithmetic_is_a_type_mismatch(self) -> None:
        from arrlang import numeric
        from arrlang.errors import TypeMismatchError
        from arrlang.values import Float, Int

        with self.assertRaises(TypeMismatchError):
            numeric.add(Int(1), Float(1.0))
        with self.assertRaises(TypeMismatchError):
            numeric.multiply(Float(1.0), Int(2))

    def test_int_arithmetic_wraps_at_64_bits(self) -> None:
        from arrlang import numeric
        from arrlang.values import INT64_MAX, INT64_MIN, Int

        self.assertEqual(numeric.add(Int(INT64_MAX), Int(1)), Int(INT64_MIN))

    def test_divide_always_returns_float(self) -> None:
        from arrlang import numeric
        from arrlang.values import Float, Int

        self.assertEqual(numeric.divide(Int(6), Int(3)), Float(2.0))
        self.assertEqual(numeric.divide(Int(7), Float(2.0)), Float(3.5))

    def test_divide_by_zero_follows_ieee(self) -> None:
        from arrlang import numeric
        from arrlang.values import Int

        self.assertEqual(numeric.divide(Int(1), Int(0)).value, math.inf)
        self.assertEqual(numeric.divide(Int(-1), Int(0)).value, -math.inf)
        self.assertTrue(math.isnan(numeric.divide(Int(0), Int(0)).value))

    def test_comparisons_return_int_flags_in_promoted_domain(self) -> None:
        from arrlang import numeric
        from arrlang.values import Float, Int

        self.assertEqual(numeric.greater_than(Float(2.5), Int(2)), Int(1))
        self.assertEqual(numeric.greater_than(Int(2), Int(2)), Int(0))
        self.assertEqual(numeric.equals(Int(1), Float(1.0)), Int(1))
        self.assertEqual(numeric.equals(Int(5), Int(6)), Int(0))

    def test_result_kind_follows_verb_family(self) -> None:
        from arrlang import numeric
        from arrlang.values import Float, Int

        self.assertIs(numeric.result_kind("+", Float), Float)
        self.assertIs(numeric.result_kind("÷", Int), Float)
        self.assertIs(numeric.result_kind(">", Float), Int)

    def test_dense_matrix_rejects_ragged_or_mixed_rows(self) -> None:
        from arrlang import numeric
        from arrlang.values import Float, Int

        self.assertIsNone(numeric.dense_matrix([[Int(1)], [Int(2), Int(3)]]))
        self.assertIsNone(numeric.dense_matrix([[Int(1)], [Float(2.0)]]))
        self.assertIsNone(numeric.dense_matrix([[], []]))
        self.assertEqual(numeric.dense_matrix([[Int(1), Int(2)], [Int(3), Int(4)]]).shape, (2, 2))

    def test_from_dense_maps_dtype_to_variant(self) -> None:
        import jax.numpy as jnp

        from arrlang import numeric
        from arrlang.values import Float, Int

        self.assertEqual(numeric.from_dense(jnp.asarray([1, 2], dtype=jnp.int64)), [Int(1), Int(2)])
        self.assertEqual(numeric.from_dense(jnp.asarray([[0.5]], dtype=jnp.float64)), [[Float(0.5)]])
        self.assertEqual(numeric.from_dense(jnp.asarray(3, dtype=jnp.int64)), Int(3))

    def test_fold_dense_along_leading_axis(self) -> None:
        import jax.numpy as jnp

        from arrlang import numeric

        arr = jnp.asarray([[1, 2], [3, 4]], dtype=jnp.int64)
        self.assertEqual(numeric.fold_dense("+", arr).tolist(), [4, 6])
        self.assertEqual(numeric.fold_dense("×", arr).tolist(), [3, 8])
        with self.assertRaises(ValueError):
            numeric.fold_dense("-", arr)


if __name__ == "__main__":
    unittest.main()
