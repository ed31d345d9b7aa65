"""The four timestamped sets that make up one replica's state."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from lwwgraph.core.instant import Instant
    from lwwgraph.graph.elements import Edge, Vertex

T = TypeVar("T")


def is_visible(value: T, adds: dict[T, Instant], removes: dict[T, Instant]) -> bool:
    """LWW visibility of a single value.

    The value is visible if it has an add record and either no remove
    record or an add record strictly newer than the remove record. An
    exact tie counts as removed.
    """
    added = adds.get(value)
    if added is None:
        return False
    removed = removes.get(value)
    return removed is None or added > removed


@dataclass
class ReplicaState:
    """Add and remove records for vertices and edges.

    Records are only ever overwritten with a newer instant by local
    mutations; merges may drop superseded records.

    Attributes:
        add_vertices: Vertex add records.
        remove_vertices: Vertex tombstones.
        add_edges: Edge add records.
        remove_edges: Edge tombstones.
    """

    add_vertices: dict[Vertex, Instant] = field(default_factory=dict)
    remove_vertices: dict[Vertex, Instant] = field(default_factory=dict)
    add_edges: dict[Edge, Instant] = field(default_factory=dict)
    remove_edges: dict[Edge, Instant] = field(default_factory=dict)

    def copy(self) -> ReplicaState:
        """Return a state that shares no mutable containers with this one."""
        return ReplicaState(
            add_vertices=dict(self.add_vertices),
            remove_vertices=dict(self.remove_vertices),
            add_edges=dict(self.add_edges),
            remove_edges=dict(self.remove_edges),
        )

    def record_count(self) -> int:
        return (
            len(self.add_vertices)
            + len(self.remove_vertices)
            + len(self.add_edges)
            + len(self.remove_edges)
        )

    def digest(self) -> str:
        """Deterministic hash of all records, independent of insertion order.

        Two replicas with equal digests hold the same records.
        """
        parts: list[str] = []
        for label, records in (
            ("+v", self.add_vertices),
            ("-v", self.remove_vertices),
        ):
            parts.extend(
                f"{label}:{v.id}:{v.payload!r}:{ts.nanoseconds}" for v, ts in records.items()
            )
        for label, records in (
            ("+e", self.add_edges),
            ("-e", self.remove_edges),
        ):
            parts.extend(
                f"{label}:{'-'.join(sorted(str(i) for i in e.endpoints))}:{ts.nanoseconds}"
                for e, ts in records.items()
            )
        content = "|".join(sorted(parts))
        return hashlib.md5(content.encode()).hexdigest()
