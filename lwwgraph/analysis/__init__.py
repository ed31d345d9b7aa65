"""Inspection helpers for replica state."""

from lwwgraph.analysis.state_frame import record_counts, state_frame

__all__ = [
    "record_counts",
    "state_frame",
]
