"""
Reverse-mode traversal driver.

`backward` propagates a gradient from an output node to every node it was
computed from. Ordering is the driver's responsibility: all contributions to
a node are applied (via `update_grad`) before that node's gradient is read
and pushed to its own parents.
"""

from __future__ import annotations

import warnings
from typing import Any, Optional

from ...domain._node_id import NodeId
from .._payload import ones_like, payload_size
from ._node_ref import NodeRef


def topological_order(output: NodeRef) -> list[NodeRef]:
    """
    Return every node reachable from `output`, parents before children.

    Parameters
    ----------
    output : NodeRef
        Handle to the node the traversal starts from.

    Returns
    -------
    list[NodeRef]
        Reachable handles in topological order; `output` is last. Nodes
        reachable along several paths appear once.
    """
    topo: list[NodeRef] = []
    visited: set[NodeId] = set()
    stack: list[tuple[NodeRef, bool]] = [(output, False)]

    while stack:
        ref, expanded = stack.pop()
        if expanded:
            topo.append(ref)
            continue

        nid = ref.id()
        if nid in visited:
            continue
        visited.add(nid)

        stack.append((ref, True))
        # Reversed so parents are expanded in input order.
        for parent in reversed(ref.parents()):
            if parent.id() not in visited:
                stack.append((parent, False))

    return topo


def backward(output: NodeRef, grad_out: Optional[Any] = None) -> None:
    """
    Backpropagate gradients from `output` through the graph.

    Parameters
    ----------
    output : NodeRef
        Handle to the node to differentiate.
    grad_out : Any, optional
        Gradient with respect to `output`. If omitted, a one-filled value
        shaped like `output.value()` is used.

    Raises
    ------
    RuntimeError
        If an operation node returns the wrong number of contributions.

    Notes
    -----
    - Gradients of root nodes accumulate across calls; call `zero_grad()` on
      them between independent passes.
    - Gradients of operation nodes are reset at the start of every call, so
      they always reflect the current pass only and are never propagated
      twice.
    - An implicit seed for a non-scalar output emits a `RuntimeWarning`,
      because it differentiates the sum of the output's elements.
    """
    if grad_out is None:
        value = output.value()
        if payload_size(value) != 1:
            warnings.warn(
                "backward() called without grad_out on a non-scalar output; "
                "seeding with ones (differentiates the sum of all elements).",
                RuntimeWarning,
                stacklevel=2,
            )
        grad_out = ones_like(value)

    topo = topological_order(output)

    for ref in topo:
        if not ref.is_leaf():
            ref.zero_grad()

    output.update_grad(grad_out)

    # Children are visited before their parents, so each node's gradient is
    # final by the time it is read.
    for ref in reversed(topo):
        parents = ref.parents()
        if not parents:
            continue

        contributions = ref.backward(ref.grad())
        if len(contributions) != len(parents):
            raise RuntimeError(
                "backward must return one grad per parent. "
                f"Got {len(contributions)} grads for {len(parents)} parents."
            )

        for parent, g in zip(parents, contributions):
            if g is None:
                continue
            parent.update_grad(g)
