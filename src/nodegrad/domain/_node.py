"""
Node capability contract.

This module defines `INode`, the interface every participant of the
computation graph satisfies. Operation nodes and the backward driver talk to
nodes exclusively through this contract (wrapped in a shared handle), so any
object that implements it can take part in forward and backward traversal.

Gradient semantics
------------------
- A node's gradient is absent until it is first read or written.
- The first `grad()` or `update_grad()` call materializes the additive zero
  of the node's current value and persists it.
- `update_grad()` is the single mutation path: it adds a contribution to the
  (lazily materialized) gradient. Contributions may arrive in any order and
  the final gradient is their sum.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, Optional, Protocol, Sequence, runtime_checkable

from typing_extensions import TypeVar

from ._node_id import NodeId

if TYPE_CHECKING:
    from ..infrastructure.graph._node_ref import NodeRef

Out = TypeVar("Out")


@runtime_checkable
class INode(Protocol, Generic[Out]):
    """
    Interface for graph nodes.

    Notes
    -----
    - `value()` and `grad()` return owned values (clones), never references
      into the node's storage.
    - `grad()` may mutate the node (it materializes the zero gradient), which
      is why shared handles take an exclusive borrow to call it.
    """

    def id(self) -> NodeId:
        """
        Return the node identity.

        Returns
        -------
        NodeId
            The id assigned at construction. It never changes.
        """
        ...

    def value(self) -> Out:
        """
        Return the current forward value.

        Returns
        -------
        Out
            A clone of the node's value. Gradient state is untouched.
        """
        ...

    def grad(self) -> Out:
        """
        Return the accumulated gradient, materializing zero on first access.

        Returns
        -------
        Out
            A clone of the accumulated gradient.
        """
        ...

    def update_grad(self, grad: Out) -> None:
        """
        Add a gradient contribution to the accumulated gradient.

        Parameters
        ----------
        grad : Out
            Contribution flowing back through one consuming edge.
        """
        ...

    def zero_grad(self) -> None:
        """Reset the gradient to the absent state."""
        ...

    def forward(self) -> Out:
        """
        Recompute the value from the current parent values.

        Returns
        -------
        Out
            The recomputed value. Leaf nodes return their stored value.
        """
        ...

    def parents(self) -> Sequence["NodeRef"]:
        """
        Return handles to the nodes this node was computed from.

        Returns
        -------
        Sequence[NodeRef]
            Parent handles in input order. Empty for root nodes.
        """
        ...

    def backward(self, grad_out: Out) -> Sequence[Optional[Out]]:
        """
        Map this node's gradient to one contribution per parent.

        Parameters
        ----------
        grad_out : Out
            The final gradient of this node.

        Returns
        -------
        Sequence[Optional[Out]]
            Contributions for each entry of `parents()`, in the same order.
            `None` means no gradient flows along that edge.
        """
        ...
