"""
Payload capability dispatch.

Graph nodes are generic over their payload type. Types that implement the
`IPayload` contract (e.g., `Data`) expose `zeros`/`ones`/`clone` methods
directly; built-in numeric scalars and raw NumPy arrays do not, so this
module adapts them through `functools.singledispatch` functions instead of
wrapping every scalar in a custom class.

Supported payloads
------------------
- any object exposing `zeros()`, `ones()` and `clone()` (the `IPayload`
  contract), e.g. `Data`
- `numbers.Number` scalars (int, float, complex, Fraction, NumPy scalars)
- `numpy.ndarray`
"""

from __future__ import annotations

from functools import singledispatch
from numbers import Number
from typing import Any

import numpy as np

from ..domain._payload import IPayload


def is_payload(value: Any) -> bool:
    """
    Check whether `value` satisfies the payload capability set.

    Parameters
    ----------
    value : Any
        Candidate node value.

    Returns
    -------
    bool
        True for numeric scalars, NumPy arrays and `IPayload` implementers.
    """
    if isinstance(value, bool):
        return False
    return isinstance(value, (Number, np.ndarray, IPayload))


def check_payload(value: Any) -> None:
    """
    Fail fast if `value` cannot be stored in a graph node.

    Raises
    ------
    TypeError
        If `value` lacks the zero/one/clone/add/mul capabilities.
    """
    if not is_payload(value):
        raise TypeError(
            f"{type(value).__name__!r} does not satisfy the node payload contract "
            "(zeros, ones, clone, +, *)"
        )


def _unsupported(fn_name: str, value: Any) -> TypeError:
    return TypeError(f"{fn_name}() does not support payload of type {type(value)!r}")


@singledispatch
def zeros_like(value: Any) -> Any:
    """
    Return the additive zero matching `value`'s shape and type.

    Parameters
    ----------
    value : Any
        Template payload.

    Returns
    -------
    Any
        The zero element.
    """
    if isinstance(value, IPayload):
        return value.zeros()
    raise _unsupported("zeros_like", value)


@zeros_like.register
def _(value: Number) -> Any:
    return type(value)(0)


@zeros_like.register
def _(value: np.ndarray) -> np.ndarray:
    return np.zeros_like(value)


@singledispatch
def ones_like(value: Any) -> Any:
    """
    Return the multiplicative one matching `value`'s shape and type.

    Used to seed backward passes when no explicit output gradient is given.
    """
    if isinstance(value, IPayload):
        return value.ones()
    raise _unsupported("ones_like", value)


@ones_like.register
def _(value: Number) -> Any:
    return type(value)(1)


@ones_like.register
def _(value: np.ndarray) -> np.ndarray:
    return np.ones_like(value)


@singledispatch
def clone_value(value: Any) -> Any:
    """
    Return an owned copy of `value` that shares no mutable storage.

    Scalars are immutable and returned as-is.
    """
    if isinstance(value, IPayload):
        return value.clone()
    raise _unsupported("clone_value", value)


@clone_value.register
def _(value: Number) -> Any:
    return value


@clone_value.register
def _(value: np.ndarray) -> np.ndarray:
    return value.copy()


@singledispatch
def payload_size(value: Any) -> int:
    """Return the number of scalar elements held by `value`."""
    num_elements = getattr(value, "num_elements", None)
    if callable(num_elements):
        return int(num_elements())
    raise _unsupported("payload_size", value)


@payload_size.register
def _(value: Number) -> int:
    return 1


@payload_size.register
def _(value: np.ndarray) -> int:
    return int(value.size)
