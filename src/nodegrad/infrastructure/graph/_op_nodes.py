"""
Operation nodes.

Operation nodes compute their value from one (unary) or two (binary) parent
nodes through a `Function` descriptor. They hold shared handles to their
parents, so one parent may feed several operations; during the backward pass
they map their own gradient to one contribution per parent via the
descriptor's `backward`.

Notes
-----
- The forward computation runs once at construction and again whenever
  `forward()` is called (e.g., after a parent's value changed).
- Parent handles are cloned on construction, which keeps the parents alive
  for as long as this node exists.
"""

from __future__ import annotations

from typing import Optional, Sequence, Type, Union

from ...domain._function import Function
from .._payload import check_payload, clone_value
from ._context import Context
from ._node_base import NodeBase, Out
from ._node_ref import NodeRef

FunctionLike = Union[Type[Function], Function]


class OpNode(NodeBase[Out]):
    """
    Node whose value is produced by a `Function` over its parents' values.

    Parameters
    ----------
    inputs : Sequence[NodeRef]
        Handles to the parent nodes, in the order `fn.forward` expects them.
    fn : Type[Function] | Function
        Output-computation descriptor.

    Raises
    ------
    TypeError
        If `fn` is not a `Function`, if an input is not a `NodeRef`, or if
        the forward result is not a supported payload.
    """

    arity: Optional[int] = None

    def __init__(self, inputs: Sequence["NodeRef"], fn: FunctionLike) -> None:
        if not (
            isinstance(fn, Function)
            or (isinstance(fn, type) and issubclass(fn, Function))
        ):
            raise TypeError(f"fn must be a Function, got {fn!r}")
        if self.arity is not None and len(inputs) != self.arity:
            raise ValueError(
                f"{type(self).__name__} expects {self.arity} input(s), got {len(inputs)}"
            )
        for ref in inputs:
            if not isinstance(ref, NodeRef):
                raise TypeError(f"inputs must be NodeRef handles, got {ref!r}")

        super().__init__()
        self._inputs: tuple["NodeRef", ...] = tuple(ref.clone() for ref in inputs)
        self._fn = fn
        self._ctx = Context()
        self.forward()

    @property
    def fn(self) -> FunctionLike:
        return self._fn

    def forward(self) -> Out:
        """
        Recompute the value from the parents' current values.

        Returns
        -------
        Out
            A clone of the new value.
        """
        ctx = Context()
        out = self._fn.forward(ctx, *(ref.value() for ref in self._inputs))
        check_payload(out)
        self._ctx = ctx
        self._value = out
        return clone_value(out)

    def parents(self) -> Sequence["NodeRef"]:
        return self._inputs

    def backward(self, grad_out: Out) -> Sequence[Optional[Out]]:
        """
        Map this node's gradient to per-parent contributions.

        Parameters
        ----------
        grad_out : Out
            Final gradient of this node.

        Returns
        -------
        tuple[Optional[Out], ...]
            One contribution per parent, in input order.

        Raises
        ------
        RuntimeError
            If the descriptor returns the wrong number of contributions.
        """
        grads = self._fn.backward(self._ctx, grad_out)
        if not isinstance(grads, (tuple, list)):
            grads = (grads,)
        if len(grads) != len(self._inputs):
            raise RuntimeError(
                "backward must return one grad per parent. "
                f"Got {len(grads)} grads for {len(self._inputs)} parents."
            )
        return tuple(grads)


class UnaryOpNode(OpNode[Out]):
    """Operation node with a single parent."""

    arity = 1

    def __init__(self, input: "NodeRef", fn: FunctionLike) -> None:
        super().__init__((input,), fn)


class BinaryOpNode(OpNode[Out]):
    """Operation node with a left-hand and a right-hand parent."""

    arity = 2

    def __init__(self, lhs: "NodeRef", rhs: "NodeRef", fn: FunctionLike) -> None:
        super().__init__((lhs, rhs), fn)

    @property
    def lhs(self) -> "NodeRef":
        return self._inputs[0]

    @property
    def rhs(self) -> "NodeRef":
        return self._inputs[1]
