"""Vertex and edge records stored in a replica.

``Vertex`` carries two notions of sameness:

- *identity*: the ``id`` field alone. Replicas correlate vertices by
  identity when merging and when resolving an edge endpoint back to a
  stored vertex.
- *value equality*: ``id`` and ``payload`` together. This is what
  ``==`` and ``hash`` use, so it is what the timestamped sets key on.

Two records with the same ``id`` but different payloads are therefore
different keys of the same identity, and can carry independent
timestamps.

``Edge`` is an unordered pair of vertex identifiers; ``Edge(a, b)`` and
``Edge(b, a)`` are equal and hash alike.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Vertex:
    """A graph vertex.

    Args:
        payload: Caller data, inert to merge logic. Must be hashable.
        id: Identity of the vertex. A fresh UUID is allocated when omitted;
            pass an existing ``id`` to build another record of the same
            identity.
    """

    payload: Any
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def same_identity(self, other: Vertex) -> bool:
        """True if both records denote the same vertex, whatever the payload."""
        return self.id == other.id

    def __call__(self) -> Any:
        return self.payload

    def __repr__(self) -> str:
        return f"Vertex({self.payload!r}, id={str(self.id)[:8]})"


@dataclass(frozen=True, eq=False)
class Edge:
    """Undirected edge between two vertex identities.

    Attributes:
        origin: Identifier of one endpoint.
        destination: Identifier of the other endpoint.
    """

    origin: uuid.UUID
    destination: uuid.UUID

    @classmethod
    def between(cls, first: Vertex, second: Vertex) -> Edge:
        """Build the edge joining two vertices."""
        return cls(first.id, second.id)

    @property
    def endpoints(self) -> frozenset[uuid.UUID]:
        return frozenset((self.origin, self.destination))

    def touches(self, vertex_id: uuid.UUID) -> bool:
        return vertex_id == self.origin or vertex_id == self.destination

    def other(self, vertex_id: uuid.UUID) -> uuid.UUID:
        """Return the endpoint opposite ``vertex_id``.

        Raises:
            ValueError: If ``vertex_id`` is not an endpoint of this edge.
        """
        if vertex_id == self.origin:
            return self.destination
        if vertex_id == self.destination:
            return self.origin
        raise ValueError(f"{vertex_id} is not an endpoint of {self!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return self.endpoints == other.endpoints

    def __hash__(self) -> int:
        return hash(self.endpoints)

    def __repr__(self) -> str:
        return f"Edge({str(self.origin)[:8]}, {str(self.destination)[:8]})"
