"""
Fixed-rank tensor shapes.

This module defines `Shape`, an immutable sequence of non-negative extents
(one per axis). The rank of a shape is fixed when it is constructed; every
transformation (e.g., range-based indexing) produces a new `Shape` instead of
mutating the existing one.
"""

from __future__ import annotations

import math
from numbers import Integral
from typing import Iterable, Iterator, Sequence

from ...domain._errors import InvalidShapeError, ShapeIndexError


class Shape:
    """
    Immutable, fixed-rank dimension vector.

    Parameters
    ----------
    dims : Iterable[int]
        Extent of each axis. Every extent must be a non-negative integer.

    Raises
    ------
    InvalidShapeError
        If any extent is negative or not an integer.

    Notes
    -----
    - `__slots__` plus a blocking `__setattr__` keep instances immutable, so
      shapes can be shared freely and used as dictionary keys.
    - A rank-0 shape describes a single element (the empty product is 1).
    """

    __slots__ = ("_dims",)

    def __init__(self, dims: Iterable[int]) -> None:
        dims = tuple(dims)
        for d in dims:
            if isinstance(d, bool) or not isinstance(d, Integral) or d < 0:
                raise InvalidShapeError(dims)
        object.__setattr__(self, "_dims", tuple(int(d) for d in dims))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def dims(self) -> tuple[int, ...]:
        """
        Return the extents of every axis.

        Returns
        -------
        tuple[int, ...]
            The extents, in axis order.
        """
        return self._dims

    @property
    def rank(self) -> int:
        """Number of axes."""
        return len(self._dims)

    def num_elements(self) -> int:
        """
        Return the number of elements described by this shape.

        Returns
        -------
        int
            The product of all extents. Zero if any extent is zero.
        """
        return math.prod(self._dims)

    def index(self, ranges: Sequence[range]) -> "Shape":
        """
        Derive the shape that results from slicing the leading axes.

        Axis `i < len(ranges)` gets the number of positions selected by
        `ranges[i]`; the remaining trailing axes keep their extents. The rank
        of the result always equals the rank of `self`.

        Parameters
        ----------
        ranges : Sequence[range]
            One range per leading axis to slice.

        Returns
        -------
        Shape
            A new shape of the same rank.

        Raises
        ------
        ShapeIndexError
            If more ranges than axes are supplied.
        TypeError
            If an element of `ranges` is not a `range`.
        """
        ranges = tuple(ranges)
        if len(ranges) > self.rank:
            raise ShapeIndexError(self.rank, len(ranges))

        for r in ranges:
            if not isinstance(r, range):
                raise TypeError(f"Shape.index expects range objects, got {type(r)!r}")

        sliced = tuple(len(r) for r in ranges)
        return Shape(sliced + self._dims[len(ranges) :])

    def __len__(self) -> int:
        return len(self._dims)

    def __iter__(self) -> Iterator[int]:
        return iter(self._dims)

    def __getitem__(self, axis: int) -> int:
        return self._dims[axis]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Shape):
            return self._dims == other._dims
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._dims)

    def __repr__(self) -> str:
        return f"Shape({list(self._dims)!r})"


def as_shape(shape: "Shape | Iterable[int]") -> Shape:
    """
    Normalize a shape-like argument to a `Shape`.

    Parameters
    ----------
    shape : Shape | Iterable[int]
        An existing shape (returned unchanged) or an iterable of extents.

    Returns
    -------
    Shape
        The normalized shape.
    """
    if isinstance(shape, Shape):
        return shape
    return Shape(shape)
