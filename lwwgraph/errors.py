"""Exceptions raised by lwwgraph.

Mutations never raise for malformed requests; they are ignored. The only
failure a caller has to handle is asking for paths between vertices that
are not currently visible.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lwwgraph.graph.elements import Vertex


class LWWGraphError(Exception):
    """Base class for all lwwgraph errors."""


class NotInGraph(LWWGraphError, KeyError):
    """A queried vertex is not visible in the replica.

    Attributes:
        vertex: The vertex that failed the containment check.
    """

    def __init__(self, vertex: Vertex):
        super().__init__(vertex)
        self.vertex = vertex

    def __str__(self) -> str:
        return f"vertex {self.vertex!r} is not part of the graph"
