"""
Node identity.

Every graph node receives a `NodeId` when it is created. The identity is not
derived from the node's content, so two structurally identical nodes are
still distinguishable, and ids are safe to use as keys for traversal
bookkeeping (e.g., visited sets).
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class NodeId:
    """
    Opaque, process-wide-unique node identity.

    Attributes
    ----------
    value : str
        Random token backing this identity. Equality and hashing are defined
        by this token only.

    Notes
    -----
    Use `NodeId.new()` to mint a fresh identity. Constructing a `NodeId` from
    an explicit token is supported for reproducing ids in tests, but graph
    code should never do so.
    """

    value: str

    @classmethod
    def new(cls) -> "NodeId":
        """
        Generate a fresh identity.

        Returns
        -------
        NodeId
            A new id backed by a random UUID4 hex token.
        """
        return cls(uuid.uuid4().hex)

    def __str__(self) -> str:
        return self.value
