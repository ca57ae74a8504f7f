from ._backward import backward, topological_order
from ._context import Context
from ._functions import AddFn, IdentityFn, MulFn, SquareFn
from ._node_base import NodeBase
from ._node_builder import binary_node, node_init, root_node, unary_node
from ._node_ref import NodeCell, NodeRef
from ._op_nodes import BinaryOpNode, OpNode, UnaryOpNode
from ._root_node import RootNode

__all__ = [
    "backward",
    "topological_order",
    Context.__name__,
    AddFn.__name__,
    IdentityFn.__name__,
    MulFn.__name__,
    SquareFn.__name__,
    NodeBase.__name__,
    "binary_node",
    "node_init",
    "root_node",
    "unary_node",
    NodeCell.__name__,
    NodeRef.__name__,
    BinaryOpNode.__name__,
    OpNode.__name__,
    UnaryOpNode.__name__,
    RootNode.__name__,
]
