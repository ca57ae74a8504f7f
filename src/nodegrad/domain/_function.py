"""
Output-computation descriptors for operation nodes.

This module defines the abstract base class for the differentiable
computations attached to unary and binary operation nodes. A concrete
`Function` implements both the forward computation over its input values and
the backward mapping from the output gradient to per-input gradients.

The design mirrors function-level autograd systems (e.g., PyTorch's
`autograd.Function`): methods are static and per-invocation state lives on a
`ctx` object, so a single `Function` class can be shared by many nodes.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence


class Function(ABC):
    """
    Abstract base class for operation-node computations.

    Subclasses implement `forward` and `backward` as static methods. Any
    intermediate values needed for the backward pass should be stored on the
    provided `ctx` object during the forward pass.

    Notes
    -----
    - Only the payload contract (`+`, `*`, zero/one production) may be assumed
      about input values, so the same function works for tensors and scalars.
    - The `ctx` argument is created fresh for every forward invocation.
    """

    @staticmethod
    @abstractmethod
    def forward(ctx, *inputs: Any) -> Any:
        """
        Perform the forward computation.

        Parameters
        ----------
        ctx : Context
            Per-invocation context used to save values for backward.
        *inputs : Any
            Current values of the parent nodes, in input order.

        Returns
        -------
        Any
            The output value of the operation.
        """
        ...

    @staticmethod
    @abstractmethod
    def backward(ctx, grad_out: Any) -> Sequence[Optional[Any]]:
        """
        Compute gradient contributions for each input.

        Parameters
        ----------
        ctx : Context
            The context populated during the forward pass.
        grad_out : Any
            Gradient of the loss with respect to the output value.

        Returns
        -------
        Sequence[Optional[Any]]
            One contribution per input, in input order. Entries may be None
            for inputs that receive no gradient.
        """
        ...
