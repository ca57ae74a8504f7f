from unittest import TestCase
import unittest
import warnings

import numpy as np

from nodegrad.infrastructure.graph import (
    AddFn,
    IdentityFn,
    MulFn,
    SquareFn,
    backward,
    node_init,
    topological_order,
)
from nodegrad.infrastructure.tensor import Data, Shape


def vec(*values: float) -> Data:
    return Data.from_sequence([float(v) for v in values])


class TestTopologicalOrder(TestCase):
    def test_parents_before_children(self):
        a = node_init(root=1.0)
        b = node_init(root=2.0)
        c = node_init(lhs=a, rhs=b, out=MulFn)
        d = node_init(lhs=c, rhs=a, out=AddFn)

        order = topological_order(d)
        ids = [ref.id() for ref in order]

        self.assertEqual(ids[-1], d.id())
        self.assertLess(ids.index(a.id()), ids.index(c.id()))
        self.assertLess(ids.index(b.id()), ids.index(c.id()))
        self.assertLess(ids.index(c.id()), ids.index(d.id()))

    def test_shared_nodes_visited_once(self):
        a = node_init(root=1.0)
        b = node_init(lhs=a, rhs=a, out=AddFn)
        c = node_init(lhs=b, rhs=a, out=MulFn)
        self.assertEqual(len(topological_order(c)), 3)

    def test_parents_expanded_in_input_order(self):
        a = node_init(root=1.0)
        b = node_init(root=2.0)
        c = node_init(lhs=a, rhs=b, out=AddFn)
        order = topological_order(c)
        self.assertEqual([ref.id() for ref in order], [a.id(), b.id(), c.id()])

    def test_deep_chain_does_not_recurse(self):
        x = node_init(root=1.0)
        y = x
        for _ in range(5000):
            y = node_init(input=y, out=IdentityFn)
        order = topological_order(y)
        self.assertEqual(len(order), 5001)
        self.assertEqual(order[0].id(), x.id())
        self.assertEqual(order[-1].id(), y.id())


class TestBackward(TestCase):
    def test_scalar_chain(self):
        # z = x * y + x
        x = node_init(root=3.0)
        y = node_init(root=4.0)
        xy = node_init(lhs=x, rhs=y, out=MulFn)
        z = node_init(lhs=xy, rhs=x, out=AddFn)

        backward(z)

        self.assertEqual(x.grad(), 5.0)  # y + 1
        self.assertEqual(y.grad(), 3.0)  # x
        self.assertEqual(z.grad(), 1.0)

    def test_fan_out_gradients_are_summed(self):
        x = node_init(root=vec(1, 2, 3))
        w = node_init(root=vec(0.5, 0.5, 0.5))
        y = node_init(lhs=x, rhs=w, out=MulFn)
        z = node_init(lhs=y, rhs=x, out=AddFn)

        backward(z, vec(1, 1, 1))

        self.assertEqual(x.grad(), vec(1.5, 1.5, 1.5))
        self.assertEqual(w.grad(), vec(1, 2, 3))

    def test_same_node_on_both_sides(self):
        x = node_init(root=3.0)
        y = node_init(lhs=x, rhs=x, out=MulFn)  # x^2
        backward(y)
        self.assertEqual(x.grad(), 6.0)

    def test_unary_square(self):
        x = node_init(root=vec(1, -2))
        y = node_init(input=x, out=SquareFn)
        backward(y, vec(1, 1))
        self.assertEqual(x.grad(), vec(2, -4))

    def test_explicit_seed_scales_gradient(self):
        x = node_init(root=2.0)
        y = node_init(input=x, out=SquareFn)
        backward(y, 10.0)
        self.assertEqual(x.grad(), 40.0)

    def test_root_gradients_accumulate_across_passes(self):
        x = node_init(root=2.0)
        y = node_init(input=x, out=SquareFn)
        backward(y)
        backward(y)
        self.assertEqual(x.grad(), 8.0)
        self.assertEqual(y.grad(), 1.0)

    def test_zero_grad_between_passes(self):
        x = node_init(root=2.0)
        y = node_init(input=x, out=SquareFn)
        backward(y)
        x.zero_grad()
        backward(y)
        self.assertEqual(x.grad(), 4.0)

    def test_deep_chain(self):
        x = node_init(root=2.0)
        y = x
        for _ in range(5000):
            y = node_init(input=y, out=IdentityFn)
        backward(y, 3.0)
        self.assertEqual(x.grad(), 3.0)
        self.assertEqual(y.grad(), 3.0)

    def test_backward_on_root_seeds_itself(self):
        x = node_init(root=7.0)
        backward(x)
        self.assertEqual(x.grad(), 1.0)

    def test_non_scalar_implicit_seed_warns(self):
        x = node_init(root=Data.random(Shape((2, 2)), rng=0))
        y = node_init(input=x, out=SquareFn)
        with self.assertWarns(RuntimeWarning):
            backward(y)
        expected = x.value() + x.value()
        self.assertTrue(np.allclose(x.grad().value, expected.value))

    def test_scalar_implicit_seed_does_not_warn(self):
        x = node_init(root=vec(3))
        y = node_init(input=x, out=SquareFn)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            backward(y)
        self.assertEqual(x.grad(), vec(6))

    def test_order_of_independent_contributions_irrelevant(self):
        # Two graphs that consume the same inputs in opposite orders.
        a1 = node_init(root=vec(1, 2))
        b1 = node_init(root=vec(3, 4))
        out1 = node_init(
            lhs=node_init(lhs=a1, rhs=b1, out=MulFn),
            rhs=node_init(input=a1, out=SquareFn),
            out=AddFn,
        )

        a2 = node_init(root=vec(1, 2))
        b2 = node_init(root=vec(3, 4))
        out2 = node_init(
            lhs=node_init(input=a2, out=SquareFn),
            rhs=node_init(lhs=a2, rhs=b2, out=MulFn),
            out=AddFn,
        )

        backward(out1, vec(1, 1))
        backward(out2, vec(1, 1))

        self.assertEqual(a1.grad(), a2.grad())
        self.assertEqual(a1.grad(), vec(5, 8))  # b + 2a


if __name__ == "__main__":
    unittest.main()
