"""
Node construction facility.

Graph-participating nodes are only ever created through this module. Each
factory builds the concrete node, places it in a fresh `NodeCell` and returns
a ready-to-share `NodeRef`, so callers never assemble the sharing machinery
by hand.

Three invocation shapes are supported:

    node_init(lhs=a, rhs=b, out=MulFn)   # binary operation node
    node_init(input=a, out=SquareFn)     # unary operation node
    node_init(root=value)                # root (leaf) node
"""

from __future__ import annotations

from typing import Any

from ._node_ref import NodeRef
from ._op_nodes import BinaryOpNode, FunctionLike, UnaryOpNode
from ._root_node import RootNode

_BINARY_KEYS = frozenset({"lhs", "rhs", "out"})
_UNARY_KEYS = frozenset({"input", "out"})
_ROOT_KEYS = frozenset({"root"})


def root_node(value: Any) -> NodeRef:
    """
    Build a root node holding `value` and return a shared handle to it.

    Parameters
    ----------
    value : Any
        Payload for the leaf (parameter or input).

    Returns
    -------
    NodeRef
        Handle to the new root node.
    """
    return NodeRef.wrap(RootNode(value))


def unary_node(input: NodeRef, out: FunctionLike) -> NodeRef:
    """
    Build a unary operation node and return a shared handle to it.

    Parameters
    ----------
    input : NodeRef
        Handle to the single parent node.
    out : Type[Function] | Function
        Output-computation descriptor.

    Returns
    -------
    NodeRef
        Handle to the new operation node.
    """
    return NodeRef.wrap(UnaryOpNode(input, out))


def binary_node(lhs: NodeRef, rhs: NodeRef, out: FunctionLike) -> NodeRef:
    """
    Build a binary operation node and return a shared handle to it.

    Parameters
    ----------
    lhs : NodeRef
        Handle to the left-hand parent.
    rhs : NodeRef
        Handle to the right-hand parent. May be the same node as `lhs`.
    out : Type[Function] | Function
        Output-computation descriptor.

    Returns
    -------
    NodeRef
        Handle to the new operation node.
    """
    return NodeRef.wrap(BinaryOpNode(lhs, rhs, out))


def node_init(**kwargs: Any) -> NodeRef:
    """
    Build a shared node from one of the three supported keyword shapes.

    Parameters
    ----------
    **kwargs
        Exactly one of:
        - `lhs`, `rhs`, `out`: binary operation node
        - `input`, `out`: unary operation node
        - `root`: root node

    Returns
    -------
    NodeRef
        Handle to the newly created node.

    Raises
    ------
    TypeError
        If the keyword set matches none of the supported shapes.
    """
    keys = frozenset(kwargs)
    if keys == _BINARY_KEYS:
        return binary_node(kwargs["lhs"], kwargs["rhs"], kwargs["out"])
    if keys == _UNARY_KEYS:
        return unary_node(kwargs["input"], kwargs["out"])
    if keys == _ROOT_KEYS:
        return root_node(kwargs["root"])
    raise TypeError(
        "node_init() expects (lhs, rhs, out), (input, out) or (root); "
        f"got {sorted(keys)}"
    )
