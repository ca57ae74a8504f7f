"""
Leaf graph nodes.

A `RootNode` holds a concrete value with no predecessors: a model parameter
or an input. It is the node type whose accumulated gradient is usually read
after a backward pass.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from .._payload import check_payload, clone_value
from ._node_base import NodeBase, Out

if TYPE_CHECKING:
    from ._node_ref import NodeRef


class RootNode(NodeBase[Out]):
    """
    Leaf node owning a value and a lazily materialized gradient.

    Parameters
    ----------
    value : Out
        The node's value. Must satisfy the payload contract.

    Raises
    ------
    TypeError
        If `value` is not a supported payload.

    Notes
    -----
    The value is cloned on the way in, so later mutation of the caller's
    object (e.g., an ndarray) cannot leak into the graph.
    """

    def __init__(self, value: Out) -> None:
        check_payload(value)
        super().__init__()
        self._value = clone_value(value)

    def forward(self) -> Out:
        """Return the stored value; leaves have nothing to recompute."""
        return self.value()

    def parents(self) -> Sequence["NodeRef"]:
        return ()

    def backward(self, grad_out: Out) -> Sequence[Optional[Out]]:
        return ()
