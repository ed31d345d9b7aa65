"""matplotlib renderers built on the replica query surface."""

from lwwgraph.visual.graph_view import circular_layout, draw_graph, render_graph
from lwwgraph.visual.path_view import render_paths

__all__ = [
    "circular_layout",
    "draw_graph",
    "render_graph",
    "render_paths",
]
