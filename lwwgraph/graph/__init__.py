"""LWW-element graph CRDT.

- **Vertex** / **Edge**: stored values (identity-bearing, symmetric edges).
- **ReplicaState**: the four timestamped add/remove sets.
- **converge** / **segregate** / **merge_states**: the merge engine.
- **LWWGraph**: a replica with mutations, queries and two-way merge.
"""

from lwwgraph.graph.elements import Edge, Vertex
from lwwgraph.graph.lww_graph import GraphStats, LWWGraph
from lwwgraph.graph.merge import (
    EDGE_KEY,
    VERTEX_KEY,
    EdgeKey,
    MergeKey,
    VertexKey,
    converge,
    merge_states,
    segregate,
)
from lwwgraph.graph.paths import iter_simple_paths
from lwwgraph.graph.protocol import ConflictResolvable
from lwwgraph.graph.state import ReplicaState, is_visible

__all__ = [
    "ConflictResolvable",
    "EDGE_KEY",
    "Edge",
    "EdgeKey",
    "GraphStats",
    "LWWGraph",
    "MergeKey",
    "ReplicaState",
    "VERTEX_KEY",
    "Vertex",
    "VertexKey",
    "converge",
    "is_visible",
    "iter_simple_paths",
    "merge_states",
    "segregate",
]
