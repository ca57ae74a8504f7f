from ._errors import (
    BorrowError,
    DataShapeMismatchError,
    InvalidShapeError,
    RangeOutOfBoundsError,
    ShapeIndexError,
    ShapeReshapeError,
)
from ._function import Function
from ._node import INode
from ._node_id import NodeId
from ._payload import IPayload

__all__ = [
    BorrowError.__name__,
    DataShapeMismatchError.__name__,
    InvalidShapeError.__name__,
    RangeOutOfBoundsError.__name__,
    ShapeIndexError.__name__,
    ShapeReshapeError.__name__,
    Function.__name__,
    INode.__name__,
    NodeId.__name__,
    IPayload.__name__,
]
