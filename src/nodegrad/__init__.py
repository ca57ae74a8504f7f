"""
nodegrad: a minimal differentiable-graph substrate.

Nodes hold payload values (`Data` tensors or numeric scalars), are shared
through `NodeRef` handles, and accumulate gradients during backward passes.
"""

from .domain import (
    BorrowError,
    DataShapeMismatchError,
    Function,
    INode,
    InvalidShapeError,
    IPayload,
    NodeId,
    RangeOutOfBoundsError,
    ShapeIndexError,
    ShapeReshapeError,
)
from .infrastructure import clone_value, ones_like, zeros_like
from .infrastructure.graph import (
    AddFn,
    BinaryOpNode,
    Context,
    IdentityFn,
    MulFn,
    NodeRef,
    RootNode,
    SquareFn,
    UnaryOpNode,
    backward,
    binary_node,
    node_init,
    root_node,
    unary_node,
)
from .infrastructure.tensor import DEFAULT_DTYPE, Data, Shape

__version__ = "0.1.0"

__all__ = [
    "BorrowError",
    "DataShapeMismatchError",
    "Function",
    "INode",
    "InvalidShapeError",
    "IPayload",
    "NodeId",
    "RangeOutOfBoundsError",
    "ShapeIndexError",
    "ShapeReshapeError",
    "clone_value",
    "ones_like",
    "zeros_like",
    "AddFn",
    "BinaryOpNode",
    "Context",
    "IdentityFn",
    "MulFn",
    "NodeRef",
    "RootNode",
    "SquareFn",
    "UnaryOpNode",
    "backward",
    "binary_node",
    "node_init",
    "root_node",
    "unary_node",
    "DEFAULT_DTYPE",
    "Data",
    "Shape",
]
