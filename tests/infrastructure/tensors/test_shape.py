from unittest import TestCase
import unittest
import math

from nodegrad.infrastructure.tensor import Shape
from nodegrad.domain import InvalidShapeError, ShapeIndexError


class TestShapeConstruction(TestCase):
    def test_dims_round_trip(self):
        for dims in [(), (0,), (3,), (2, 3), (4, 1, 5), (2, 0, 7)]:
            self.assertEqual(Shape(dims).dims, dims)

    def test_accepts_any_iterable(self):
        self.assertEqual(Shape([2, 3]).dims, (2, 3))
        self.assertEqual(Shape(iter((1, 2))).dims, (1, 2))

    def test_rank_is_fixed_length(self):
        s = Shape((2, 3, 4))
        self.assertEqual(s.rank, 3)
        self.assertEqual(len(s), 3)

    def test_negative_extent_rejected(self):
        with self.assertRaises(InvalidShapeError):
            Shape((2, -1))

    def test_non_integer_extent_rejected(self):
        with self.assertRaises(InvalidShapeError):
            Shape((2, 1.5))
        with self.assertRaises(InvalidShapeError):
            Shape((True, 2))

    def test_invalid_shape_error_is_value_error(self):
        with self.assertRaises(ValueError):
            Shape((-3,))

    def test_immutable(self):
        s = Shape((2, 3))
        with self.assertRaises(AttributeError):
            s._dims = (4, 4)
        with self.assertRaises(AttributeError):
            s.dims = (4, 4)
        self.assertEqual(s.dims, (2, 3))


class TestShapeNumElements(TestCase):
    def test_product_of_extents(self):
        self.assertEqual(Shape((2, 3, 4)).num_elements(), 24)
        self.assertEqual(Shape((7,)).num_elements(), 7)

    def test_zero_extent_gives_zero(self):
        self.assertEqual(Shape((3, 0, 5)).num_elements(), 0)
        self.assertEqual(Shape((0,)).num_elements(), 0)

    def test_rank_zero_is_single_element(self):
        self.assertEqual(Shape(()).num_elements(), 1)


class TestShapeIndex(TestCase):
    def setUp(self) -> None:
        self.shape = Shape((4, 5, 6))

    def test_leading_axes_take_range_lengths(self):
        out = self.shape.index([range(1, 3)])
        self.assertEqual(out.dims, (2, 5, 6))

        out = self.shape.index([range(0, 4), range(2, 5)])
        self.assertEqual(out.dims, (4, 3, 6))

    def test_full_rank_index(self):
        out = self.shape.index([range(1), range(5), range(0, 6, 2)])
        self.assertEqual(out.dims, (1, 5, 3))

    def test_rank_is_preserved(self):
        out = self.shape.index([range(0, 1)])
        self.assertEqual(out.rank, self.shape.rank)

    def test_empty_range_list_keeps_shape(self):
        self.assertEqual(self.shape.index([]), self.shape)

    def test_returns_new_shape_without_mutation(self):
        out = self.shape.index([range(0, 2)])
        self.assertIsNot(out, self.shape)
        self.assertEqual(self.shape.dims, (4, 5, 6))

    def test_empty_range_gives_zero_extent(self):
        out = self.shape.index([range(3, 3)])
        self.assertEqual(out.dims, (0, 5, 6))
        self.assertEqual(out.num_elements(), 0)

    def test_num_elements_matches_range_lengths_times_trailing(self):
        cases = [
            [range(2)],
            [range(1, 4), range(0, 5, 2)],
            [range(4), range(5), range(6)],
            [range(2, 2)],
        ]
        for ranges in cases:
            out = self.shape.index(ranges)
            expected = math.prod(len(r) for r in ranges) * math.prod(
                self.shape.dims[len(ranges) :]
            )
            self.assertEqual(out.num_elements(), expected)

    def test_over_ranked_index_fails(self):
        with self.assertRaises(ShapeIndexError) as cm:
            Shape((2, 3)).index([range(1), range(1), range(1)])
        self.assertEqual(cm.exception.rank, 2)
        self.assertEqual(cm.exception.num_ranges, 3)

    def test_over_ranked_index_on_rank_zero(self):
        with self.assertRaises(ShapeIndexError):
            Shape(()).index([range(1)])

    def test_non_range_rejected(self):
        with self.assertRaises(TypeError):
            self.shape.index([slice(0, 2)])


class TestShapeValueSemantics(TestCase):
    def test_equality_and_hash(self):
        a = Shape((2, 3))
        b = Shape([2, 3])
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertNotEqual(a, Shape((3, 2)))
        self.assertEqual(len({a, b}), 1)

    def test_iteration_and_getitem(self):
        s = Shape((2, 3, 4))
        self.assertEqual(list(s), [2, 3, 4])
        self.assertEqual(s[1], 3)
        self.assertEqual(s[-1], 4)

    def test_repr(self):
        self.assertEqual(repr(Shape((2, 3))), "Shape([2, 3])")


if __name__ == "__main__":
    unittest.main()
