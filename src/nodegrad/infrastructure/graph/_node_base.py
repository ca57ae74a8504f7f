"""
Shared gradient-state implementation for concrete graph nodes.

`NodeBase` implements the identity and lazy-gradient half of the `INode`
contract once, so that root and operation nodes only provide their value
and their edges.

State machine
-------------
holds value, grad=None
    -> (first `grad()` or `update_grad()`) grad=<zero of value> [+ contribution]
    -> (`zero_grad()`) grad=None
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, Optional, Sequence

from typing_extensions import TypeVar

from ...domain._node_id import NodeId
from .._payload import clone_value, zeros_like

if TYPE_CHECKING:
    from ._node_ref import NodeRef

Out = TypeVar("Out")


class NodeBase(ABC, Generic[Out]):
    """
    Abstract base for nodes with identity and a lazily materialized gradient.

    Subclasses store their forward value in `_value` and implement
    `forward`, `parents` and `backward`.

    Attributes
    ----------
    _id : NodeId
        Identity minted at construction.
    _value : Out
        Current forward value.
    _grad : Optional[Out]
        Accumulated gradient, or None until first read or written.
    _owned : bool
        Set once the node has been placed behind a `NodeCell`.
    """

    def __init__(self) -> None:
        self._id: NodeId = NodeId.new()
        self._value: Any = None
        self._grad: Optional[Out] = None
        self._owned = False

    def id(self) -> NodeId:
        return self._id

    def value(self) -> Out:
        """
        Return a clone of the current forward value.

        Returns
        -------
        Out
            The node's value. Reading it never touches gradient state.
        """
        return clone_value(self._value)

    def grad(self) -> Out:
        """
        Return the accumulated gradient.

        On first access the gradient is materialized as the additive zero of
        the current value (so it has the value's shape) and persisted, which
        makes subsequent calls cheap and idempotent.

        Returns
        -------
        Out
            A clone of the accumulated gradient.
        """
        if self._grad is None:
            self._grad = zeros_like(self._value)
        return clone_value(self._grad)

    def update_grad(self, grad: Out) -> None:
        """
        Accumulate a gradient contribution.

        Parameters
        ----------
        grad : Out
            Contribution to add to the existing gradient.
        """
        self._grad = self.grad() + grad

    def zero_grad(self) -> None:
        """
        Clear the accumulated gradient.

        Notes
        -----
        The next `grad()` or `update_grad()` re-materializes the zero from the
        then-current value.
        """
        self._grad = None

    @abstractmethod
    def forward(self) -> Out: ...

    @abstractmethod
    def parents(self) -> Sequence["NodeRef"]: ...

    @abstractmethod
    def backward(self, grad_out: Out) -> Sequence[Optional[Out]]: ...

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self._id}, value={self._value!r}, "
            f"grad={self._grad!r})"
        )
