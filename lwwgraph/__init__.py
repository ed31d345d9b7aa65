"""lwwgraph - a state-based Last-Writer-Wins element graph CRDT.

Replicas of an undirected graph are edited independently and reconciled
by merging full state snapshots. Merge is commutative, associative and
idempotent; concurrent edits are resolved by timestamp.

Example::

    import lwwgraph

    a = lwwgraph.LWWGraph(name="a")
    b = lwwgraph.LWWGraph(name="b")
    x = a.add_vertex("x")
    b.add_vertex_record(x)
    a.merge(b)
"""

import logging

from lwwgraph.core import Instant, ManualClock, SkewedClock, SystemClock, TimeSource
from lwwgraph.errors import LWWGraphError, NotInGraph
from lwwgraph.graph import (
    ConflictResolvable,
    Edge,
    GraphStats,
    LWWGraph,
    ReplicaState,
    Vertex,
    converge,
    merge_states,
    segregate,
)
from lwwgraph.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_logging,
    set_level,
    set_module_level,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Time
    "Instant",
    "ManualClock",
    "SkewedClock",
    "SystemClock",
    "TimeSource",
    # Graph
    "ConflictResolvable",
    "Edge",
    "GraphStats",
    "LWWGraph",
    "ReplicaState",
    "Vertex",
    "converge",
    "merge_states",
    "segregate",
    # Errors
    "LWWGraphError",
    "NotInGraph",
    # Logging
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_logging",
    "set_level",
    "set_module_level",
]
