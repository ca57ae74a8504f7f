from typing import Any
from dataclasses import dataclass, field


@dataclass
class Context:
    """
    Per-invocation context passed to a `Function`'s forward and backward.

    A fresh `Context` is created every time an operation node runs its
    forward computation, and the same instance is handed to `backward`.

    Attributes
    ----------
    saved_values : list[Any]
        Values explicitly saved during the forward pass for use in backward
        (e.g., input values needed for chain-rule products).
    saved_meta : dict[str, Any]
        Non-payload metadata required for backward (e.g., shapes, flags).
    """

    saved_values: list[Any] = field(default_factory=list)
    saved_meta: dict[str, Any] = field(default_factory=dict)

    def save_for_backward(self, *values: Any) -> None:
        """
        Save values for use during the backward computation.

        Parameters
        ----------
        *values : Any
            Any number of payload values to append to `saved_values`.
        """
        self.saved_values.extend(values)
