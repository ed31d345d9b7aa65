"""Last-Writer-Wins element graph (LWW-element graph) CRDT replica.

An ``LWWGraph`` is one replica of an undirected graph. It keeps four
timestamped sets (vertex adds, vertex removes, edge adds, edge removes)
and never physically deletes anything locally: removing a vertex or an
edge records a tombstone instant. Whether a value is visible is decided
by comparing its latest add and remove instants.

Replicas are mutated independently, each with its own ``TimeSource``,
and reconciled with ``merge``, which leaves *both* replicas holding the
same converged records.

Tie-break rules (they differ on purpose):

- Queries (``contains_vertex``/``contains_edge``): an add and a remove at
  the same instant mean *not present*.
- Merge convergence: on equal instants the record of the replica ``merge``
  was called on wins.
- Merge segregation: on equal add/remove instants the value stays *added*.

Example::

    a = LWWGraph(name="a")
    b = LWWGraph(name="b")
    v1 = a.add_vertex("x")
    v2 = a.add_vertex("y")
    a.add_edge(v1, v2)
    b.add_vertex_record(v1)
    b.remove_vertex(v1)

    a.merge(b)
    assert a.digest() == b.digest()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from lwwgraph.core.clock import SystemClock
from lwwgraph.errors import NotInGraph
from lwwgraph.graph.elements import Edge, Vertex
from lwwgraph.graph.merge import merge_states
from lwwgraph.graph.paths import iter_simple_paths
from lwwgraph.graph.state import ReplicaState, is_visible

if TYPE_CHECKING:
    from collections.abc import Iterator

    from lwwgraph.core.clock import TimeSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphStats:
    """Mutation and merge counters for one replica.

    Attributes:
        vertices_added: Vertex add records written locally.
        vertices_removed: Vertex tombstones written locally.
        edges_added: Edge add records written locally.
        edges_removed: Edge tombstones written locally.
        mutations_ignored: Malformed or inapplicable mutations dropped.
        merges: Merges this replica took part in (either side).
    """

    vertices_added: int = 0
    vertices_removed: int = 0
    edges_added: int = 0
    edges_removed: int = 0
    mutations_ignored: int = 0
    merges: int = 0


class LWWGraph:
    """State-based LWW-element graph replica.

    Args:
        clock: Time source for stamping mutations. Defaults to the system
            wall clock.
        name: Label used in logs and ``repr``.
    """

    __slots__ = (
        "_clock",
        "_edges_added",
        "_edges_removed",
        "_merges",
        "_mutations_ignored",
        "_name",
        "_state",
        "_vertices_added",
        "_vertices_removed",
    )

    def __init__(self, clock: TimeSource | None = None, name: str | None = None):
        self._clock: TimeSource = clock if clock is not None else SystemClock()
        self._name = name or f"replica-{id(self):x}"
        self._state = ReplicaState()

        self._vertices_added = 0
        self._vertices_removed = 0
        self._edges_added = 0
        self._edges_removed = 0
        self._mutations_ignored = 0
        self._merges = 0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def clock(self) -> TimeSource:
        return self._clock

    @property
    def state(self) -> ReplicaState:
        """A copy of the replica's records; mutating it does not affect the replica."""
        return self._state.copy()

    @property
    def stats(self) -> GraphStats:
        """Frozen snapshot of this replica's counters."""
        return GraphStats(
            vertices_added=self._vertices_added,
            vertices_removed=self._vertices_removed,
            edges_added=self._edges_added,
            edges_removed=self._edges_removed,
            mutations_ignored=self._mutations_ignored,
            merges=self._merges,
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_vertex(self, payload: Any) -> Vertex:
        """Create a vertex holding ``payload`` and record it as added.

        Returns:
            The new vertex, with a freshly allocated identity.
        """
        return self.add_vertex_record(Vertex(payload))

    def add_vertex_record(self, vertex: Vertex) -> Vertex:
        """Record an existing vertex as added (re-adds refresh the instant)."""
        self._state.add_vertices[vertex] = self._clock.now()
        self._vertices_added += 1
        logger.debug("[%s] Added %r", self._name, vertex)
        return vertex

    def remove_vertex(self, vertex: Vertex) -> None:
        """Record a tombstone for ``vertex``.

        No-op unless this exact record (identity and payload) was added.
        """
        if vertex not in self._state.add_vertices:
            self._ignore("remove_vertex", "%r was never added", vertex)
            return
        self._state.remove_vertices[vertex] = self._clock.now()
        self._vertices_removed += 1
        logger.debug("[%s] Removed %r", self._name, vertex)

    def add_edge(self, *vertices: Vertex) -> Edge | None:
        """Record an edge between the first two vertices given.

        The edge is only added when both vertices are present in the
        vertex add-set. Presence is checked once, now, and ignores
        tombstones. Extra vertices are ignored.

        Returns:
            The added edge, or ``None`` if the request was ignored.
        """
        edge = self._edge_from(vertices, "add_edge")
        if edge is None:
            return None
        first, second = vertices[0], vertices[1]
        if first not in self._state.add_vertices or second not in self._state.add_vertices:
            self._ignore("add_edge", "endpoints of %r are not both in the graph", edge)
            return None
        self._state.add_edges[edge] = self._clock.now()
        self._edges_added += 1
        logger.debug("[%s] Added %r", self._name, edge)
        return edge

    def remove_edge(self, *vertices: Vertex) -> None:
        """Record a tombstone for the edge between the first two vertices.

        No-op unless the edge was added. Extra vertices are ignored.
        """
        edge = self._edge_from(vertices, "remove_edge")
        if edge is None:
            return
        if edge not in self._state.add_edges:
            self._ignore("remove_edge", "%r was never added", edge)
            return
        self._state.remove_edges[edge] = self._clock.now()
        self._edges_removed += 1
        logger.debug("[%s] Removed %r", self._name, edge)

    def _edge_from(self, vertices: tuple[Vertex, ...], operation: str) -> Edge | None:
        if len(vertices) < 2:
            self._ignore(operation, "needs two vertices, got %d", len(vertices))
            return None
        if vertices[0].same_identity(vertices[1]):
            self._ignore(operation, "both endpoints are %r", vertices[0])
            return None
        return Edge.between(vertices[0], vertices[1])

    def _ignore(self, operation: str, reason: str, *args: Any) -> None:
        self._mutations_ignored += 1
        logger.debug("[%s] Ignored %s: " + reason, self._name, operation, *args)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def contains_vertex(self, vertex: Vertex) -> bool:
        """True if ``vertex`` was added after its latest removal (ties: removed)."""
        return is_visible(vertex, self._state.add_vertices, self._state.remove_vertices)

    def contains_edge(self, *vertices: Vertex) -> bool:
        """True if the edge between the first two vertices is visible.

        Fewer than two vertices is never contained; extras are ignored.
        """
        if len(vertices) < 2:
            return False
        edge = Edge.between(vertices[0], vertices[1])
        return is_visible(edge, self._state.add_edges, self._state.remove_edges)

    def connected_vertices(self, vertex: Vertex) -> frozenset[Vertex]:
        """Visible vertices sharing an edge with ``vertex``.

        Edge endpoints are identifiers, so each one is resolved back to
        the first stored vertex record with that identifier. Edge
        tombstones are not consulted; only vertex visibility filters.
        """
        return frozenset(self._neighbours(vertex))

    def _neighbours(self, vertex: Vertex) -> list[Vertex]:
        linked = {
            edge.other(vertex.id)
            for edge in self._state.add_edges
            if edge.touches(vertex.id)
        }
        resolved: list[Vertex] = []
        seen: set = set()
        for stored in self._state.add_vertices:
            if stored.id in linked and stored.id not in seen:
                seen.add(stored.id)
                if self.contains_vertex(stored):
                    resolved.append(stored)
        return resolved

    def all_simple_paths(self, origin: Vertex, destination: Vertex) -> Iterator[list[Vertex]]:
        """Lazily enumerate every simple path from ``origin`` to ``destination``.

        Paths come out shortest first, in discovery order. Each call
        returns a fresh iterator.

        Raises:
            NotInGraph: If either endpoint is not currently visible.
        """
        for endpoint in (origin, destination):
            if not self.contains_vertex(endpoint):
                raise NotInGraph(endpoint)
        return iter_simple_paths(origin, destination, self._neighbours)

    def find_paths(self, origin: Vertex, destination: Vertex) -> list[list[Vertex]]:
        """Collect all simple paths, reporting missing endpoints instead of raising."""
        try:
            return list(self.all_simple_paths(origin, destination))
        except NotInGraph as exc:
            logger.warning("[%s] No paths: %s", self._name, exc)
            return []

    def vertices(self) -> frozenset[Vertex]:
        """All currently visible vertex records."""
        return frozenset(v for v in self._state.add_vertices if self.contains_vertex(v))

    def edges(self) -> frozenset[Edge]:
        """All currently visible edges."""
        return frozenset(
            e
            for e in self._state.add_edges
            if is_visible(e, self._state.add_edges, self._state.remove_edges)
        )

    def tombstoned_vertices(self) -> frozenset[Vertex]:
        """Vertex records whose latest record is a removal."""
        return frozenset(v for v in self._state.remove_vertices if not self.contains_vertex(v))

    def tombstoned_edges(self) -> frozenset[Edge]:
        """Edges whose latest record is a removal."""
        return frozenset(
            e
            for e in self._state.remove_edges
            if not is_visible(e, self._state.add_edges, self._state.remove_edges)
        )

    def __contains__(self, vertex: object) -> bool:
        return isinstance(vertex, Vertex) and self.contains_vertex(vertex)

    def __len__(self) -> int:
        return len(self.vertices())

    # ------------------------------------------------------------------
    # Replication
    # ------------------------------------------------------------------

    def merge(self, other: LWWGraph) -> None:
        """Two-way merge: both ``self`` and ``other`` end with the converged state.

        ``self`` is the source side and wins exact-instant conflicts during
        convergence. Each replica receives its own copy of the result.

        Args:
            other: The replica to reconcile with.
        """
        merged = merge_states(self._state, other._state)
        self._state = merged
        self._merges += 1
        if other is not self:
            other._state = merged.copy()
            other._merges += 1
        logger.info(
            "[%s] Merged with %s: %d vertices, %d edges visible",
            self._name,
            other._name,
            len(self.vertices()),
            len(self.edges()),
        )

    def copy(self, name: str | None = None) -> LWWGraph:
        """Independent replica with the same records and the same clock."""
        clone = LWWGraph(clock=self._clock, name=name or f"{self._name}-copy")
        clone._state = self._state.copy()
        return clone

    def digest(self) -> str:
        return self._state.digest()

    def is_converged_with(self, other: LWWGraph) -> bool:
        return self._state == other._state

    def __repr__(self) -> str:
        return (
            f"LWWGraph(name={self._name!r}, vertices={len(self.vertices())}, "
            f"edges={len(self.edges())})"
        )
