"""
Flat value buffers paired with a shape (NumPy CPU backend).

This module defines `Data`, the tensor payload carried by graph nodes. A
`Data` owns a flat, read-only NumPy buffer whose length always equals
`shape.num_elements()`, together with the `Shape` describing how that buffer
is laid out (C order).

Design notes
------------
- Construction is fallible: a buffer whose length disagrees with the shape is
  rejected with `DataShapeMismatchError` instead of being truncated or padded.
- Instances are never mutated after construction. Every operation returns a
  new `Data`; the underlying buffer is marked read-only.
- `Data` satisfies the payload contract (`zeros`, `ones`, `clone`, `+`, `*`,
  `repr`) so it can be stored in any graph node.
- Floating-point inputs default to `float32`, matching the tensor dtype used
  throughout the framework.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence, Union

import numpy as np
from typing_extensions import Self

from ...domain._errors import (
    DataShapeMismatchError,
    RangeOutOfBoundsError,
    ShapeReshapeError,
)
from ._shape import Shape, as_shape

DEFAULT_DTYPE = np.float32

ShapeLike = Union[Shape, Iterable[int]]


def _as_buffer(value: Any, dtype: Optional[Any]) -> np.ndarray:
    """
    Convert an array-like into an owned, flat, read-only buffer.

    When `dtype` is None, the dtype is inferred from `value` and any
    floating-point result is cast to `DEFAULT_DTYPE`.
    """
    arr = np.asarray(value, dtype=dtype)
    if dtype is None and arr.dtype.kind == "f":
        arr = arr.astype(DEFAULT_DTYPE, copy=False)
    buf = np.array(arr.reshape(-1), copy=True)
    buf.flags.writeable = False
    return buf


class Data:
    """
    Shaped value buffer used as a tensor payload.

    Parameters
    ----------
    value : array-like
        Buffer contents. Multi-dimensional inputs are flattened in C order.
    shape : Shape | Iterable[int]
        Logical shape of the buffer.
    dtype : optional
        NumPy dtype for the buffer. Inferred from `value` when omitted.

    Raises
    ------
    DataShapeMismatchError
        If the number of elements in `value` differs from
        `shape.num_elements()`.
    """

    __slots__ = ("_value", "_shape")

    def __init__(
        self, value: Any, shape: ShapeLike, dtype: Optional[Any] = None
    ) -> None:
        shape = as_shape(shape)
        buf = _as_buffer(value, dtype)
        if buf.size != shape.num_elements():
            raise DataShapeMismatchError(int(buf.size), shape.num_elements())
        self._value = buf
        self._shape = shape

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------
    @classmethod
    def random(
        cls,
        shape: ShapeLike,
        dtype: Any = DEFAULT_DTYPE,
        rng: Optional[Union[np.random.Generator, int]] = None,
    ) -> "Data":
        """
        Create a buffer filled with independent random draws.

        The distribution depends on the element type:

        - floating point: uniform on [0, 1)
        - signed/unsigned integers: uniform over the dtype's full range
        - bool: a fair coin

        Parameters
        ----------
        shape : Shape | Iterable[int]
            Shape of the result. A zero extent yields an empty buffer.
        dtype : optional
            Element dtype. Defaults to float32.
        rng : numpy.random.Generator | int, optional
            Generator or seed. A fresh, OS-seeded generator is used when
            omitted.

        Returns
        -------
        Data
            Randomly initialized data.

        Raises
        ------
        TypeError
            If the dtype has no default random distribution.

        Notes
        -----
        Intended for parameter initialization in tests and examples, not for
        statistically rigorous sampling.
        """
        shape = as_shape(shape)
        n = shape.num_elements()
        gen = np.random.default_rng(rng)
        dt = np.dtype(dtype)

        if dt.kind == "f":
            if dt in (np.float32, np.float64):
                buf = gen.random(n, dtype=dt)
            else:
                buf = gen.random(n).astype(dt)
        elif dt.kind in "iu":
            info = np.iinfo(dt)
            buf = gen.integers(info.min, info.max, size=n, dtype=dt, endpoint=True)
        elif dt.kind == "b":
            buf = gen.integers(0, 2, size=n).astype(bool)
        else:
            raise TypeError(f"No default random distribution for dtype {dt}")

        return cls(buf, shape, dtype=dt)

    @classmethod
    def from_sequence(cls, elems: Sequence[Any], dtype: Optional[Any] = None) -> "Data":
        """
        Convert a literal sequence into rank-1 data.

        Parameters
        ----------
        elems : Sequence[Any]
            Element values. Every element is copied into the new buffer.
        dtype : optional
            Element dtype. Inferred when omitted.

        Returns
        -------
        Data
            Data with shape `[len(elems)]`.

        Raises
        ------
        ValueError
            If `elems` is nested. Use `from_numpy` for multi-dimensional
            input.
        """
        arr = np.asarray(list(elems), dtype=dtype)
        if arr.ndim != 1:
            raise ValueError(
                f"from_sequence expects a flat sequence, got {arr.ndim}-D input; "
                "use Data.from_numpy for multi-dimensional data"
            )
        buf = _as_buffer(arr, dtype)
        return cls(buf, Shape((buf.size,)), dtype=buf.dtype)

    @classmethod
    def from_numpy(cls, arr: Any, dtype: Optional[Any] = None) -> "Data":
        """
        Convert an array-like of any rank, keeping its shape.

        Parameters
        ----------
        arr : array-like
            Source array.
        dtype : optional
            Element dtype. Inferred when omitted.

        Returns
        -------
        Data
            Data whose shape equals `np.shape(arr)`.
        """
        arr = np.asarray(arr)
        return cls(arr, Shape(arr.shape), dtype=dtype)

    @classmethod
    def full(cls, shape: ShapeLike, fill_value: Any, dtype: Any = DEFAULT_DTYPE) -> "Data":
        """Create data with every element set to `fill_value`."""
        shape = as_shape(shape)
        return cls(np.full(shape.num_elements(), fill_value, dtype=dtype), shape, dtype=dtype)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def value(self) -> np.ndarray:
        """
        Return the flat, read-only value buffer.

        Returns
        -------
        np.ndarray
            1-D buffer of length `shape.num_elements()`.
        """
        return self._value

    @property
    def shape(self) -> Shape:
        """The logical shape of the buffer."""
        return self._shape

    @property
    def dtype(self) -> np.dtype:
        return self._value.dtype

    def num_elements(self) -> int:
        return self._shape.num_elements()

    def to_numpy(self) -> np.ndarray:
        """
        Return a writable copy of the buffer laid out with the full shape.

        Returns
        -------
        np.ndarray
            Array of shape `shape.dims`.
        """
        return self._value.reshape(self._shape.dims).copy()

    # ------------------------------------------------------------------
    # Payload contract
    # ------------------------------------------------------------------
    def zeros(self) -> Self:
        """
        Return zero-filled data with the same shape and dtype.

        Returns
        -------
        Data
            The additive zero matching `self`.
        """
        return type(self)(np.zeros_like(self._value), self._shape, dtype=self.dtype)

    def ones(self) -> Self:
        """
        Return one-filled data with the same shape and dtype.

        Returns
        -------
        Data
            The multiplicative one matching `self`.
        """
        return type(self)(np.ones_like(self._value), self._shape, dtype=self.dtype)

    def clone(self) -> Self:
        """Return an independent copy of this data."""
        return type(self)(self._value, self._shape, dtype=self.dtype)

    def _check_same_shape(self, other: "Data", op: str) -> None:
        if self._shape != other._shape:
            raise ValueError(
                f"{op} shape mismatch: {self._shape!r} vs {other._shape!r}"
            )

    def _wrap(self, result: np.ndarray) -> Self:
        return type(self)(result, self._shape, dtype=result.dtype)

    def __add__(self, other: object) -> Self:
        if not isinstance(other, Data):
            return NotImplemented
        self._check_same_shape(other, "add")
        return self._wrap(self._value + other._value)

    def __mul__(self, other: object) -> Self:
        if not isinstance(other, Data):
            return NotImplemented
        self._check_same_shape(other, "mul")
        return self._wrap(self._value * other._value)

    def __neg__(self) -> Self:
        result = -self._value
        return type(self)(result, self._shape, dtype=result.dtype)

    def neg(self) -> Self:
        """Elementwise negation."""
        return -self

    def add_scalar(self, scalar: Any) -> Self:
        """
        Add a scalar to every element.

        Parameters
        ----------
        scalar : Any
            Value added elementwise. The buffer dtype is preserved.

        Returns
        -------
        Data
            The shifted data.
        """
        result = (self._value + scalar).astype(self.dtype, copy=False)
        return type(self)(result, self._shape, dtype=self.dtype)

    def mul_scalar(self, scalar: Any) -> Self:
        """Multiply every element by a scalar, preserving the dtype."""
        result = (self._value * scalar).astype(self.dtype, copy=False)
        return type(self)(result, self._shape, dtype=self.dtype)

    # ------------------------------------------------------------------
    # Structural ops
    # ------------------------------------------------------------------
    def reshape(self, shape: ShapeLike) -> Self:
        """
        Reinterpret the buffer with a different shape.

        Parameters
        ----------
        shape : Shape | Iterable[int]
            Target shape. May have a different rank.

        Returns
        -------
        Data
            Data sharing the same element sequence with the new shape.

        Raises
        ------
        ShapeReshapeError
            If the target shape holds a different number of elements.
        """
        shape = as_shape(shape)
        if shape.num_elements() != self._shape.num_elements():
            raise ShapeReshapeError(self._shape, shape)
        return type(self)(self._value, shape, dtype=self.dtype)

    def index(self, ranges: Sequence[range]) -> Self:
        """
        Select positions along the leading axes.

        Parameters
        ----------
        ranges : Sequence[range]
            One range per leading axis. Trailing axes are kept whole.

        Returns
        -------
        Data
            The selected elements, with shape `self.shape.index(ranges)`.

        Raises
        ------
        ShapeIndexError
            If more ranges than axes are supplied.
        RangeOutOfBoundsError
            If a range selects a position outside its axis.
        """
        ranges = tuple(ranges)
        out_shape = self._shape.index(ranges)

        for axis, r in enumerate(ranges):
            extent = self._shape[axis]
            if not len(r):
                continue
            lo, hi = (r[0], r[-1]) if r.step > 0 else (r[-1], r[0])
            if lo < 0 or hi >= extent:
                raise RangeOutOfBoundsError(axis, r, extent)

        if not ranges:
            return self.clone()

        grid = np.ix_(*[np.fromiter(r, dtype=np.intp, count=len(r)) for r in ranges])
        selected = self._value.reshape(self._shape.dims)[grid]
        return type(self)(selected, out_shape, dtype=self.dtype)

    # ------------------------------------------------------------------
    # Diagnostics / comparison
    # ------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Data):
            return NotImplemented
        return self._shape == other._shape and bool(
            np.array_equal(self._value, other._value)
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"Data(value={self._value.tolist()!r}, shape={self._shape!r}, "
            f"dtype={self.dtype})"
        )
