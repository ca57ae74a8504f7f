"""
Shared, interior-mutable node handles.

A node that feeds several operations must be reachable from all of them
while still accepting gradient updates from each consuming edge. This module
provides the two pieces that make that possible:

- `NodeCell` owns exactly one node and tracks, at run time, whether it is
  currently borrowed for shared reads or for exclusive mutation. Overlapping
  incompatible borrows fail immediately with `BorrowError`.
- `NodeRef` is the handle graph code passes around. Cloning a handle is
  cheap (no copy of the node) and every clone observes the same node, so a
  gradient accumulated through one handle is visible through all others.

Notes
-----
- The model is single-threaded: borrow bookkeeping is plain attribute
  updates with no locking.
- Python's garbage collector owns node lifetime. Each cell counts its
  handles: construction increments the count and handle finalization
  (`__del__`) decrements it, so `strong_count()` reports how many live
  handles currently share the cell.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generic, Iterator, Optional, Sequence

from ...domain._errors import BorrowError
from ...domain._node import INode
from ...domain._node_id import NodeId
from ._node_base import Out


class NodeCell(Generic[Out]):
    """
    Owner of a single node with run-time-checked borrows.

    Parameters
    ----------
    node : INode
        The node to own.

    Notes
    -----
    - Any number of shared borrows may be active at once.
    - An exclusive borrow requires that no other borrow is active.
    - A failed borrow leaves the cell's bookkeeping unchanged.
    - A node can be owned by one cell only; placing it behind a second cell
      raises `BorrowError`.
    """

    __slots__ = ("_node", "_readers", "_writing", "_handles")

    def __init__(self, node: INode[Out]) -> None:
        if getattr(node, "_owned", False):
            raise BorrowError(node.id(), "owning")
        node._owned = True
        self._node = node
        self._readers = 0
        self._writing = False
        self._handles = 0

    @property
    def node_id(self) -> NodeId:
        return self._node.id()

    @contextmanager
    def borrow(self) -> Iterator[INode[Out]]:
        """
        Borrow the node for shared (read-only) access.

        Yields
        ------
        INode
            The owned node.

        Raises
        ------
        BorrowError
            If the node is currently borrowed exclusively.
        """
        if self._writing:
            raise BorrowError(self.node_id, "shared")
        self._readers += 1
        try:
            yield self._node
        finally:
            self._readers -= 1

    @contextmanager
    def borrow_mut(self) -> Iterator[INode[Out]]:
        """
        Borrow the node for exclusive (mutable) access.

        Yields
        ------
        INode
            The owned node.

        Raises
        ------
        BorrowError
            If the node is currently borrowed, shared or exclusively.
        """
        if self._writing or self._readers:
            raise BorrowError(self.node_id, "exclusive")
        self._writing = True
        try:
            yield self._node
        finally:
            self._writing = False

    def is_borrowed(self) -> bool:
        return self._writing or self._readers > 0


class NodeRef(Generic[Out]):
    """
    Shared handle to a graph node.

    Handles are created by the construction facility (`node_init` and its
    named variants) and duplicated with `clone()`; graph code never holds a
    bare node.

    Parameters
    ----------
    cell : NodeCell
        The cell this handle refers to.

    Notes
    -----
    Two handles compare equal (and hash equal) exactly when they refer to the
    same cell, so handles can be used directly as set members or dict keys.
    """

    __slots__ = ("_cell",)

    def __init__(self, cell: NodeCell[Out]) -> None:
        self._cell = cell
        cell._handles += 1

    @classmethod
    def wrap(cls, node: INode[Out]) -> "NodeRef[Out]":
        """
        Place a freshly built node behind a new cell and return its first handle.

        Parameters
        ----------
        node : INode
            The node to share.

        Returns
        -------
        NodeRef
            The only handle to the new cell.

        Raises
        ------
        BorrowError
            If `node` is already owned by another cell.
        """
        return cls(NodeCell(node))

    def __del__(self) -> None:
        cell = getattr(self, "_cell", None)
        if cell is not None:
            cell._handles -= 1

    # ------------------------------------------------------------------
    # Sharing
    # ------------------------------------------------------------------
    def clone(self) -> "NodeRef[Out]":
        """
        Return another handle to the same node.

        Returns
        -------
        NodeRef
            A new handle sharing this handle's cell. The node is not copied.
        """
        return type(self)(self._cell)

    def strong_count(self) -> int:
        """
        Return the number of live handles sharing this node.

        Returns
        -------
        int
            Count of handles (including this one) that refer to the cell.
        """
        return self._cell._handles

    def ptr_eq(self, other: "NodeRef[Any]") -> bool:
        """Return True if both handles refer to the same node."""
        return self._cell is other._cell

    @contextmanager
    def borrow(self) -> Iterator[INode[Out]]:
        """Shared borrow of the underlying node (see `NodeCell.borrow`)."""
        with self._cell.borrow() as node:
            yield node

    @contextmanager
    def borrow_mut(self) -> Iterator[INode[Out]]:
        """Exclusive borrow of the underlying node (see `NodeCell.borrow_mut`)."""
        with self._cell.borrow_mut() as node:
            yield node

    # ------------------------------------------------------------------
    # Node contract, forwarded under the appropriate borrow
    # ------------------------------------------------------------------
    def id(self) -> NodeId:
        return self._cell.node_id

    def value(self) -> Out:
        with self._cell.borrow() as node:
            return node.value()

    def grad(self) -> Out:
        """
        Return the node's gradient.

        Takes an exclusive borrow because the first read materializes and
        stores the zero gradient.
        """
        with self._cell.borrow_mut() as node:
            return node.grad()

    def update_grad(self, grad: Out) -> None:
        """
        Accumulate a gradient contribution into the shared node.

        Parameters
        ----------
        grad : Out
            Contribution flowing back through one consuming edge.

        Raises
        ------
        BorrowError
            If the node is borrowed elsewhere while the update is attempted.
        """
        with self._cell.borrow_mut() as node:
            node.update_grad(grad)

    def zero_grad(self) -> None:
        with self._cell.borrow_mut() as node:
            node.zero_grad()

    def forward(self) -> Out:
        with self._cell.borrow_mut() as node:
            return node.forward()

    def parents(self) -> Sequence["NodeRef[Any]"]:
        with self._cell.borrow() as node:
            return tuple(node.parents())

    def backward(self, grad_out: Out) -> Sequence[Optional[Out]]:
        with self._cell.borrow() as node:
            return node.backward(grad_out)

    def is_leaf(self) -> bool:
        return len(self.parents()) == 0

    # ------------------------------------------------------------------
    # Identity / diagnostics
    # ------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if isinstance(other, NodeRef):
            return self.ptr_eq(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.id())

    def __repr__(self) -> str:
        if self._cell._writing:
            return f"NodeRef(id={self.id()}, <borrowed>)"
        with self._cell.borrow() as node:
            return f"NodeRef({node!r})"
