"""Enumeration of every simple path between two vertices.

The traversal is breadth-first over *paths*, not vertices: a FIFO queue
holds partial paths, and a path is extended by every neighbour of its
last vertex that it does not already contain. Every path that ends at the
destination is yielded, shortest first. Because no vertex repeats within
a path the search terminates, but the number of explored paths grows
exponentially with graph density.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from lwwgraph.graph.elements import Vertex


def iter_simple_paths(
    origin: Vertex,
    destination: Vertex,
    neighbours: Callable[[Vertex], list[Vertex]],
) -> Iterator[list[Vertex]]:
    """Yield simple paths from ``origin`` to ``destination`` in discovery order.

    Args:
        origin: First vertex of every path.
        destination: Last vertex of every path.
        neighbours: Returns the visible neighbours of a vertex, in the order
            they should be expanded.

    Yields:
        Paths as new lists of vertices, ``origin`` first.
    """
    queue: deque[list[Vertex]] = deque([[origin]])
    while queue:
        path = queue.popleft()
        last = path[-1]
        if last == destination:
            yield list(path)
        for vertex in neighbours(last):
            if vertex not in path:
                queue.append([*path, vertex])
