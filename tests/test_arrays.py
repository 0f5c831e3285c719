from __future__ import annotations

import importlib.util
import unittest


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for array tests")
class ConstantArrayTests(unittest.TestCase):
    def test_ones_is_one_everywhere(self) -> None:
        from infinite_arrays import Ones

        ones = Ones()
        for index in (0, 1, 100, 10**12):
            with self.subTest(index=index):
                self.assertEqual(ones.get(index), 1.0)

    def test_zeros_is_zero_everywhere(self) -> None:
        from infinite_arrays import Zeros

        zeros = Zeros()
        self.assertEqual(zeros.get(0), 0.0)
        self.assertEqual(zeros.get(100), 0.0)

    def test_constant_iteration_repeats_value(self) -> None:
        from infinite_arrays import Ones

        it = Ones().iter()
        self.assertEqual([next(it), next(it), next(it)], [1.0, 1.0, 1.0])

    def test_constants_follow_requested_dtype(self) -> None:
        from fractions import Fraction

        import jax.numpy as jnp

        from infinite_arrays import Ones, Zeros

        self.assertIsInstance(Ones(int).get(3), int)
        self.assertEqual(Ones(Fraction).get(3), Fraction(1))

        value = Zeros("float32").get(7)
        self.assertEqual(value.dtype, jnp.float32)
        self.assertEqual(float(value), 0.0)

    def test_constants_reject_non_numeric_dtype(self) -> None:
        from infinite_arrays import ElementTypeError, Ones, Zeros

        for ctor in (Ones, Zeros):
            for dtype in (str, "bool", object):
                with self.subTest(ctor=ctor.__name__, dtype=dtype):
                    with self.assertRaises(ElementTypeError):
                        ctor(dtype)


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for array tests")
class InfiniteArrayFromFnTests(unittest.TestCase):
    def test_get_calls_function(self) -> None:
        from infinite_arrays import InfiniteArrayFromFn

        arr = InfiniteArrayFromFn(lambda i: i * 2)
        self.assertEqual(arr.get(0), 0)
        self.assertEqual(arr.get(1), 2)
        self.assertEqual(arr.get(5), 10)

    def test_get_is_not_memoized(self) -> None:
        from infinite_arrays import InfiniteArrayFromFn

        calls: list[int] = []

        def record(i: int) -> int:
            calls.append(i)
            return i

        arr = InfiniteArrayFromFn(record)
        arr.get(3)
        arr.get(3)
        self.assertEqual(calls, [3, 3])

    def test_iterator_references_source_function(self) -> None:
        from infinite_arrays import InfiniteArrayFromFn, SequenceIterator

        fn = lambda i: i * i  # noqa: E731
        arr = InfiniteArrayFromFn(fn)
        it = arr.iter()

        self.assertIsInstance(it, SequenceIterator)
        self.assertIs(arr.fn, fn)
        self.assertEqual([next(it) for _ in range(4)], [0, 1, 4, 9])
        self.assertEqual(it.index, 4)

    def test_iterators_are_single_pass_but_source_restarts(self) -> None:
        from infinite_arrays import InfiniteArrayFromFn

        arr = InfiniteArrayFromFn(lambda i: i + 10)
        first = arr.iter()
        next(first)
        next(first)
        self.assertEqual(next(first), 12)
        self.assertEqual(next(arr.iter()), 10)

    def test_rejects_non_callable(self) -> None:
        from infinite_arrays import InfiniteArrayFromFn

        with self.assertRaises(TypeError):
            InfiniteArrayFromFn(3)


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for array tests")
class ArrayProtocolTests(unittest.TestCase):
    def test_length_is_unbounded(self) -> None:
        from infinite_arrays import InfiniteVector, OneToInf, UnboundedLengthError

        arr = OneToInf(int)
        self.assertIsInstance(arr, InfiniteVector)
        self.assertIsNone(arr.length)
        self.assertTrue(arr)
        with self.assertRaises(UnboundedLengthError):
            len(arr)

    def test_indexing_and_slicing(self) -> None:
        from infinite_arrays import OneToInf, UnboundedLengthError

        arr = OneToInf(int)
        self.assertEqual(arr[0], 1)
        self.assertEqual(arr[2:5], [3, 4, 5])
        self.assertEqual(arr[:6:2], [1, 3, 5])
        with self.assertRaises(UnboundedLengthError):
            arr[3:]
        with self.assertRaises(ValueError):
            arr[0:4:-1]

    def test_negative_and_non_integer_indices(self) -> None:
        from infinite_arrays import InfiniteIndexError, Ones

        ones = Ones()
        with self.assertRaises(InfiniteIndexError):
            ones.get(-1)
        with self.assertRaises(IndexError):
            ones[-3]
        with self.assertRaises(TypeError):
            ones.get(1.5)

    def test_take_and_to_jax(self) -> None:
        import jax.numpy as jnp

        from infinite_arrays import OneToInf

        arr = OneToInf(int)
        self.assertEqual(arr.take(0), [])
        self.assertEqual(arr.take(4), [1, 2, 3, 4])
        out = arr.to_jax(3, dtype=jnp.int32)
        self.assertEqual(out.shape, (3,))
        self.assertEqual(out.tolist(), [1, 2, 3])
        with self.assertRaises(ValueError):
            arr.take(-1)

    def test_for_loop_uses_iteration(self) -> None:
        from infinite_arrays import InfStepRange

        seen = []
        for value in InfStepRange(1, 3):
            if len(seen) == 3:
                break
            seen.append(value)
        self.assertEqual(seen, [1, 4, 7])

    def test_repr_shows_prefix(self) -> None:
        from infinite_arrays import OneToInf
        from infinite_arrays import settings

        text = repr(OneToInf(int))
        self.assertTrue(text.startswith("OneToInf(["))
        self.assertTrue(text.endswith("...])"))
        if settings.REPR_PREVIEW >= 2:
            self.assertIn("1, 2", text)

    def test_arithmetic_operators_build_lazy_arrays(self) -> None:
        from infinite_arrays import InfiniteArrayFromFn, OneToInf, Ones

        nat = OneToInf(int)
        ones = Ones(int)

        total = nat + ones
        self.assertIsInstance(total, InfiniteArrayFromFn)
        self.assertEqual(total.get(4), 6)
        self.assertEqual((nat - ones).get(4), 4)
        self.assertEqual((nat * nat).get(3), 16)
        self.assertEqual((nat / nat).get(9), 1.0)
        self.assertEqual((nat + 10).get(0), 11)
        self.assertEqual((10 + nat).get(0), 11)
        self.assertEqual((nat - 1).get(0), 0)
        self.assertEqual((1 - nat).get(2), -2)
        self.assertEqual((nat * 3).get(2), 9)
        self.assertEqual((3 * nat).get(2), 9)
        self.assertEqual((nat / 2).get(0), 0.5)
        self.assertEqual((12 / nat).get(3), 3.0)
        self.assertEqual((-nat).get(0), -1)

        self.assertIs((10 + nat).dtype, (nat + 10).dtype)
        self.assertIs((3 * nat).dtype, (nat * 3).dtype)
        self.assertIs((10 + nat).dtype, int)

    def test_repr_survives_failing_elements(self) -> None:
        from infinite_arrays import Ones, Zeros, div_arrays

        broken = div_arrays(Ones(int), Zeros(int))
        self.assertEqual(repr(broken), "InfiniteArrayFromFn([...])")

    def test_arithmetic_with_unsupported_operand(self) -> None:
        from infinite_arrays import Ones

        with self.assertRaises(TypeError):
            Ones() + "x"


if __name__ == "__main__":
    unittest.main()
