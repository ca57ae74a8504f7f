"""
Elementary operation-node functions.

These `Function` implementations use nothing beyond the payload contract
(`+`, `*`, zero/one production), so they apply unchanged to `Data`, NumPy
arrays and numeric scalars. They are the building blocks used to exercise
operation nodes and the backward driver; richer kernels belong to the
payload type.
"""

from typing import Any, Tuple

from ...domain._function import Function
from .._payload import clone_value


class AddFn(Function):
    """
    Elementwise addition.

    Implements:

        out = lhs + rhs

    Backward:

        d(out)/d(lhs) = 1,  d(out)/d(rhs) = 1
    """

    @staticmethod
    def forward(ctx, lhs: Any, rhs: Any) -> Any:
        return lhs + rhs

    @staticmethod
    def backward(ctx, grad_out: Any) -> Tuple[Any, Any]:
        return grad_out, grad_out


class MulFn(Function):
    """
    Elementwise multiplication.

    Implements:

        out = lhs * rhs

    Backward:

        d(out)/d(lhs) = rhs,  d(out)/d(rhs) = lhs

    Notes
    -----
    Both inputs are saved in the context for the chain-rule products.
    """

    @staticmethod
    def forward(ctx, lhs: Any, rhs: Any) -> Any:
        ctx.save_for_backward(lhs, rhs)
        return lhs * rhs

    @staticmethod
    def backward(ctx, grad_out: Any) -> Tuple[Any, Any]:
        lhs, rhs = ctx.saved_values
        return grad_out * rhs, grad_out * lhs


class SquareFn(Function):
    """
    Elementwise square.

    Implements:

        out = x * x

    Backward:

        d(out)/dx = 2x = x + x
    """

    @staticmethod
    def forward(ctx, x: Any) -> Any:
        ctx.save_for_backward(x)
        return x * x

    @staticmethod
    def backward(ctx, grad_out: Any) -> Tuple[Any]:
        (x,) = ctx.saved_values
        return (grad_out * (x + x),)


class IdentityFn(Function):
    """Pass-through function: out = x, d(out)/dx = 1."""

    @staticmethod
    def forward(ctx, x: Any) -> Any:
        return clone_value(x)

    @staticmethod
    def backward(ctx, grad_out: Any) -> Tuple[Any]:
        return (grad_out,)
