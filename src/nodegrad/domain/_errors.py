"""
Precondition-violation exceptions for nodegrad.

This module defines the custom errors raised when graph construction code
breaks one of the structural contracts of the substrate: malformed shapes,
over-ranked index lists, buffers whose length disagrees with their shape,
and overlapping exclusive access to a shared node.

None of these errors describe an environmental or retryable failure. They
signal a programming error at the call site and are raised immediately so
that no malformed Shape, Data, or gradient state is ever observed.
"""

from __future__ import annotations

from typing import Any, Sequence


class InvalidShapeError(ValueError):
    """
    Raised when a Shape is constructed from invalid extents.

    Every extent must be a non-negative integer.

    Attributes
    ----------
    dims : tuple
        The rejected extents, as received.
    """

    def __init__(self, dims: Sequence[Any]) -> None:
        """
        Initialize the InvalidShapeError.

        Parameters
        ----------
        dims : Sequence[Any]
            The extents that failed validation.
        """
        super().__init__(
            f"Invalid shape {tuple(dims)!r}: extents must be non-negative integers."
        )
        self.dims = tuple(dims)


class ShapeIndexError(ValueError):
    """
    Raised when a Shape is indexed with more ranges than it has axes.

    Attributes
    ----------
    rank : int
        Rank of the indexed shape.
    num_ranges : int
        Number of ranges supplied by the caller.
    """

    def __init__(self, rank: int, num_ranges: int) -> None:
        """
        Initialize the ShapeIndexError.

        Parameters
        ----------
        rank : int
            Rank of the shape being indexed.
        num_ranges : int
            Number of ranges supplied.
        """
        super().__init__(
            f"Cannot index a rank-{rank} shape with {num_ranges} ranges."
        )
        self.rank = rank
        self.num_ranges = num_ranges


class RangeOutOfBoundsError(IndexError):
    """
    Raised when a range selects positions outside an axis of a Data buffer.

    Attributes
    ----------
    axis : int
        The axis the range was applied to.
    index_range : range
        The offending range.
    extent : int
        The extent of that axis.
    """

    def __init__(self, axis: int, index_range: range, extent: int) -> None:
        super().__init__(
            f"{index_range!r} is out of bounds for axis {axis} with extent {extent}."
        )
        self.axis = axis
        self.index_range = index_range
        self.extent = extent


class DataShapeMismatchError(ValueError):
    """
    Raised when a value buffer does not hold exactly `shape.num_elements()`
    elements.

    Attributes
    ----------
    length : int
        Number of elements in the supplied buffer.
    expected : int
        Element count implied by the shape.
    """

    def __init__(self, length: int, expected: int) -> None:
        """
        Initialize the DataShapeMismatchError.

        Parameters
        ----------
        length : int
            Buffer length that was supplied.
        expected : int
            Element count required by the shape.
        """
        super().__init__(
            f"Buffer of length {length} does not match shape with {expected} elements."
        )
        self.length = length
        self.expected = expected


class ShapeReshapeError(ValueError):
    """Raised when a reshape would change the number of elements."""

    def __init__(self, source: Any, target: Any) -> None:
        super().__init__(f"Cannot reshape {source!r} into {target!r}.")
        self.source = source
        self.target = target


class BorrowError(RuntimeError):
    """
    Raised when a shared node is borrowed in a way that overlaps an
    incompatible borrow that is still active.

    A shared (read) borrow conflicts with an active exclusive borrow, and an
    exclusive borrow conflicts with any active borrow.

    Attributes
    ----------
    node_id : Any
        Identity of the node whose cell was borrowed.
    requested : str
        The kind of borrow that was refused ("shared" or "exclusive").
    """

    def __init__(self, node_id: Any, requested: str) -> None:
        """
        Initialize the BorrowError.

        Parameters
        ----------
        node_id : Any
            Identity of the node that is already borrowed.
        requested : str
            The kind of borrow that was attempted.
        """
        super().__init__(
            f"Node {node_id} is already borrowed; {requested} borrow refused."
        )
        self.node_id = node_id
        self.requested = requested
