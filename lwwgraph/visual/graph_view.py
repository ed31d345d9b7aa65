"""Drawing of a replica on a circular layout.

Only the query surface of ``LWWGraph`` is used. Every identity the replica
has records for gets a slot on a circle: visible vertices are filled,
tombstoned ones hollow. Visible edges are solid, tombstoned edges dashed.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import uuid

    from matplotlib.axes import Axes
    from matplotlib.figure import Figure

    from lwwgraph.graph.elements import Edge, Vertex
    from lwwgraph.graph.lww_graph import LWWGraph

VISIBLE_COLOR = "steelblue"
TOMBSTONE_COLOR = "lightgray"


def circular_layout(vertices: list[Vertex], radius: float = 1.0) -> dict[uuid.UUID, tuple[float, float]]:
    """Place vertex identities evenly on a circle, first one at the top.

    Records sharing an identity share a slot.
    """
    ids: list[uuid.UUID] = []
    for vertex in vertices:
        if vertex.id not in ids:
            ids.append(vertex.id)
    step = 2 * math.pi / max(len(ids), 1)
    return {
        vid: (radius * math.cos(math.pi / 2 - i * step), radius * math.sin(math.pi / 2 - i * step))
        for i, vid in enumerate(ids)
    }


def _draw_edges(ax: Axes, edges: frozenset[Edge], positions, **style) -> None:
    for edge in edges:
        if edge.origin not in positions or edge.destination not in positions:
            continue
        (x1, y1), (x2, y2) = positions[edge.origin], positions[edge.destination]
        ax.plot([x1, x2], [y1, y2], **style)


def draw_graph(ax: Axes, graph: LWWGraph, positions=None) -> dict[uuid.UUID, tuple[float, float]]:
    """Draw ``graph`` onto existing axes.

    Returns:
        The positions used, keyed by vertex identifier.
    """
    visible = graph.vertices()
    tombstoned = graph.tombstoned_vertices()
    ordered = sorted(visible | tombstoned, key=lambda v: (str(v.payload), str(v.id)))
    if positions is None:
        positions = circular_layout(ordered)

    _draw_edges(ax, graph.tombstoned_edges(), positions,
                color=TOMBSTONE_COLOR, linestyle="--", linewidth=1.0, zorder=1)
    _draw_edges(ax, graph.edges(), positions,
                color="black", linewidth=1.5, zorder=2)

    for vertex in ordered:
        x, y = positions[vertex.id]
        alive = vertex in visible
        ax.scatter(
            [x], [y], s=600, zorder=3,
            facecolor=VISIBLE_COLOR if alive else "white",
            edgecolor=VISIBLE_COLOR if alive else TOMBSTONE_COLOR,
            linewidth=2,
        )
        ax.annotate(
            str(vertex.payload), (x, y), ha="center", va="center", zorder=4,
            color="white" if alive else "gray", fontweight="bold",
        )

    ax.set_aspect("equal")
    ax.set_xlim(-1.4, 1.4)
    ax.set_ylim(-1.4, 1.4)
    ax.axis("off")
    return positions


def render_graph(
    graph: LWWGraph,
    output: str | Path | None = None,
    title: str | None = None,
) -> Figure:
    """Render ``graph`` as a standalone figure, optionally saving it as an image.

    Args:
        graph: Replica to draw.
        output: Image path; parent directories are created.
        title: Figure title (defaults to the replica name).

    Returns:
        The figure. It is closed when saved to ``output``.
    """
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(6, 6))
    draw_graph(ax, graph)
    ax.set_title(title or graph.name, fontweight="bold")
    fig.tight_layout()

    if output is not None:
        output = Path(output)
        output.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output, dpi=150)
        plt.close(fig)
    return fig
