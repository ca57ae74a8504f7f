from unittest import TestCase
import unittest

from nodegrad.infrastructure.graph import (
    AddFn,
    BinaryOpNode,
    MulFn,
    NodeRef,
    RootNode,
    SquareFn,
    UnaryOpNode,
    binary_node,
    node_init,
    root_node,
    unary_node,
)
from nodegrad.infrastructure.tensor import Data


class TestNodeInit(TestCase):
    def test_root_shape(self):
        ref = node_init(root=Data.from_sequence([1.0, 2.0]))
        self.assertIsInstance(ref, NodeRef)
        with ref.borrow() as node:
            self.assertIsInstance(node, RootNode)
        self.assertEqual(ref.value(), Data.from_sequence([1.0, 2.0]))

    def test_unary_shape(self):
        x = node_init(root=3.0)
        y = node_init(input=x, out=SquareFn)
        with y.borrow() as node:
            self.assertIsInstance(node, UnaryOpNode)
        self.assertEqual(y.value(), 9.0)

    def test_binary_shape(self):
        a = node_init(root=2.0)
        b = node_init(root=5.0)
        c = node_init(lhs=a, rhs=b, out=MulFn)
        with c.borrow() as node:
            self.assertIsInstance(node, BinaryOpNode)
            self.assertTrue(node.lhs.ptr_eq(a))
            self.assertTrue(node.rhs.ptr_eq(b))
        self.assertEqual(c.value(), 10.0)

    def test_operation_nodes_hold_shared_handles(self):
        a = node_init(root=2.0)
        self.assertEqual(a.strong_count(), 1)

        node_b = node_init(lhs=a, rhs=a, out=AddFn)
        self.assertEqual(a.strong_count(), 3)

        del node_b
        self.assertEqual(a.strong_count(), 1)

    def test_unknown_keyword_shape(self):
        with self.assertRaises(TypeError):
            node_init(lhs=root_node(1.0), out=AddFn)
        with self.assertRaises(TypeError):
            node_init()
        with self.assertRaises(TypeError):
            node_init(root=1.0, out=AddFn)

    def test_positional_arguments_rejected(self):
        with self.assertRaises(TypeError):
            node_init(1.0)


class TestNamedFactories(TestCase):
    def test_named_factories_match_node_init(self):
        a = root_node(4.0)
        self.assertEqual(unary_node(a, SquareFn).value(), 16.0)
        self.assertEqual(binary_node(a, a, AddFn).value(), 8.0)

    def test_each_call_builds_a_new_node(self):
        a = root_node(1.0)
        b = root_node(1.0)
        self.assertNotEqual(a.id(), b.id())

    def test_non_function_descriptor_rejected(self):
        with self.assertRaises(TypeError):
            unary_node(root_node(1.0), lambda ctx, x: x)

    def test_non_payload_root_rejected(self):
        with self.assertRaises(TypeError):
            root_node(object())


if __name__ == "__main__":
    unittest.main()
