"""
Payload capability contract.

Any value stored in a graph node (a tensor `Data`, a bare scalar, ...) must
support the small algebra that differentiation relies on:

- producing the additive zero (and multiplicative one) matching its own
  shape/type, used to materialize gradients and to seed backward passes
- cloning, so nodes can hand out owned values decoupled from their storage
- addition, used for gradient accumulation
- multiplication, used by operation nodes for chain-rule products
- a printable representation for diagnostics

This module expresses that contract structurally so that concrete payloads
do not need to inherit from a common base class.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from typing_extensions import Self


@runtime_checkable
class IPayload(Protocol):
    """
    Structural contract for node payload types.

    Notes
    -----
    - Built-in numeric scalars do not expose `zeros`/`ones`/`clone` methods;
      the infrastructure layer adapts them through dispatch functions
      (`zeros_like`, `ones_like`, `clone_value`) instead of wrapping them.
    - `__add__` must be commutative and associative for gradient accumulation
      to be independent of the order in which contributions arrive.
    """

    def zeros(self) -> Self:
        """
        Return the additive zero with the same shape and element type.

        Returns
        -------
        Self
            A zero-filled value shaped like `self`.
        """
        ...

    def ones(self) -> Self:
        """
        Return the multiplicative one with the same shape and element type.

        Returns
        -------
        Self
            A one-filled value shaped like `self`.
        """
        ...

    def clone(self) -> Self:
        """
        Return an independent copy of this value.

        Returns
        -------
        Self
            A copy that shares no mutable storage with `self`.
        """
        ...

    def __add__(self, other: Self) -> Self: ...

    def __mul__(self, other: Self) -> Self: ...

    def __repr__(self) -> str: ...
