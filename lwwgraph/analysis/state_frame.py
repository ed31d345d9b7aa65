"""Tabular view of a replica's records.

Turns the four timestamped sets of an ``LWWGraph`` into a pandas
DataFrame with one row per record, so replica states can be printed,
filtered or compared side by side.

Example::

    from lwwgraph.analysis import record_counts, state_frame

    frame = state_frame(graph)
    print(frame[frame["kind"] == "edge"])
    print(record_counts(frame))
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd

if TYPE_CHECKING:
    import uuid

    from lwwgraph.graph.elements import Edge
    from lwwgraph.graph.lww_graph import LWWGraph

COLUMNS = ["replica", "kind", "record", "label", "identity", "timestamp", "visible"]


def _edge_label(edge: Edge, payloads: dict[uuid.UUID, object]) -> str:
    ends = [payloads.get(i, str(i)[:8]) for i in (edge.origin, edge.destination)]
    return f"{ends[0]}-{ends[1]}"


def state_frame(graph: LWWGraph) -> pd.DataFrame:
    """One row per add/remove record of ``graph``.

    Columns:
        replica: Replica name.
        kind: ``"vertex"`` or ``"edge"``.
        record: ``"add"`` or ``"remove"``.
        label: Vertex payload, or ``"a-b"`` from the endpoint payloads.
        identity: Vertex identifier, or the sorted endpoint identifiers.
        timestamp: UTC ``pandas.Timestamp`` of the record.
        visible: Whether the value is currently visible in ``graph``.

    Rows are ordered by timestamp, oldest first.
    """
    state = graph.state
    payloads = {v.id: v.payload for v in [*state.remove_vertices, *state.add_vertices]}

    rows = []
    for record, records in (("add", state.add_vertices), ("remove", state.remove_vertices)):
        for vertex, stamp in records.items():
            rows.append({
                "replica": graph.name,
                "kind": "vertex",
                "record": record,
                "label": vertex.payload,
                "identity": str(vertex.id),
                "timestamp": stamp.nanoseconds,
                "visible": graph.contains_vertex(vertex),
            })
    visible_edges = graph.edges()
    for record, records in (("add", state.add_edges), ("remove", state.remove_edges)):
        for edge, stamp in records.items():
            rows.append({
                "replica": graph.name,
                "kind": "edge",
                "record": record,
                "label": _edge_label(edge, payloads),
                "identity": "/".join(sorted(str(i) for i in edge.endpoints)),
                "timestamp": stamp.nanoseconds,
                "visible": edge in visible_edges,
            })

    frame = pd.DataFrame(rows, columns=COLUMNS)
    frame["timestamp"] = pd.to_datetime(frame["timestamp"], unit="ns", utc=True)
    return frame.sort_values("timestamp", kind="stable").reset_index(drop=True)


def record_counts(frame: pd.DataFrame) -> pd.DataFrame:
    """Count records per kind and record type.

    Returns:
        A frame indexed by kind (``edge``, ``vertex``) with ``add`` and
        ``remove`` columns; missing combinations count as zero.
    """
    if frame.empty:
        return pd.DataFrame(0, index=["edge", "vertex"], columns=["add", "remove"])
    counts = frame.groupby(["kind", "record"]).size().unstack(fill_value=0)
    return counts.reindex(
        index=["edge", "vertex"], columns=["add", "remove"], fill_value=0
    )
