"""Drawing of every simple path between two vertices, one panel per path."""

from __future__ import annotations

import math
from pathlib import Path
from typing import TYPE_CHECKING

from lwwgraph.visual.graph_view import circular_layout, draw_graph

if TYPE_CHECKING:
    from matplotlib.figure import Figure

    from lwwgraph.graph.elements import Vertex
    from lwwgraph.graph.lww_graph import LWWGraph

PATH_COLOR = "coral"


def render_paths(
    graph: LWWGraph,
    origin: Vertex,
    destination: Vertex,
    output: str | Path | None = None,
    max_paths: int = 12,
) -> Figure:
    """Render up to ``max_paths`` paths from ``origin`` to ``destination``.

    Unreachable or invisible endpoints produce a single panel saying so
    (``find_paths`` logs the reason).

    Args:
        graph: Replica to query.
        origin: First vertex of each path.
        destination: Last vertex of each path.
        output: Image path; parent directories are created.
        max_paths: Upper bound on panels drawn.

    Returns:
        The figure. It is closed when saved to ``output``.
    """
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    paths = graph.find_paths(origin, destination)[:max_paths]
    panels = max(len(paths), 1)
    cols = min(panels, 4)
    rows = math.ceil(panels / cols)

    fig, axes = plt.subplots(rows, cols, figsize=(4 * cols, 4 * rows), squeeze=False)
    flat = [ax for row in axes for ax in row]

    ordered = sorted(
        graph.vertices() | graph.tombstoned_vertices(),
        key=lambda v: (str(v.payload), str(v.id)),
    )
    positions = circular_layout(ordered)

    for ax, path in zip(flat, paths):
        draw_graph(ax, graph, positions)
        xs = [positions[v.id][0] for v in path]
        ys = [positions[v.id][1] for v in path]
        ax.plot(xs, ys, color=PATH_COLOR, linewidth=5, alpha=0.6, zorder=2.5)
        ax.set_title(" → ".join(str(v.payload) for v in path))

    if not paths:
        flat[0].text(0.5, 0.5, "no path", ha="center", va="center", transform=flat[0].transAxes)
        flat[0].axis("off")
    for ax in flat[max(len(paths), 1):]:
        ax.axis("off")

    fig.suptitle(
        f"{graph.name}: paths {origin.payload} → {destination.payload}", fontweight="bold"
    )
    fig.tight_layout(rect=[0, 0, 1, 0.95])

    if output is not None:
        output = Path(output)
        output.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output, dpi=150)
        plt.close(fig)
    return fig
