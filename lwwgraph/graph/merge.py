"""State merge for the LWW-element graph.

Merging two replica states happens in two passes:

1. **Convergence** (``converge``): each of the four timestamped sets is
   merged with its counterpart. Records are correlated through a
   ``MergeKey``; on a conflict the strictly newer record wins and an exact
   tie goes to the *source* side (the replica ``merge`` was called on).
2. **Segregation** (``segregate``): a value left in both the converged
   add-set and the converged remove-set is kept in exactly one of them.
   Here ties go to the *add* side.

``merge_states`` composes both passes into a pure function over two
``ReplicaState`` objects. It never mutates its inputs.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

from lwwgraph.graph.state import ReplicaState

if TYPE_CHECKING:
    import uuid

    from lwwgraph.core.instant import Instant
    from lwwgraph.graph.elements import Edge, Vertex

logger = logging.getLogger(__name__)

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)


@runtime_checkable
class MergeKey(Protocol[T_contra]):
    """Strategy deciding which records of two sets describe the same thing."""

    def identity(self, value: T_contra) -> Hashable:
        """Return the correlation key of ``value``."""
        ...


class VertexKey:
    """Correlates vertices by identifier, ignoring payload."""

    __slots__ = ()

    def identity(self, value: Vertex) -> uuid.UUID:
        return value.id

    def __repr__(self) -> str:
        return "VertexKey()"


class EdgeKey:
    """Correlates edges by value; edge equality is already symmetric."""

    __slots__ = ()

    def identity(self, value: Edge) -> Edge:
        return value

    def __repr__(self) -> str:
        return "EdgeKey()"


VERTEX_KEY = VertexKey()
EDGE_KEY = EdgeKey()


def _keep_latest(result: dict[T, Instant], value: T, stamp: Instant) -> None:
    current = result.get(value)
    if current is None or stamp > current:
        result[value] = stamp


def converge(
    source: dict[T, Instant],
    target: dict[T, Instant],
    key: MergeKey[T],
) -> dict[T, Instant]:
    """Merge two timestamped sets with LWW and source bias.

    Each source record is paired with the first not yet paired target
    record of the same identity (in the target's insertion order). The
    record with the strictly greater instant survives; on a tie the source
    record survives. Unpaired records from either side are carried over.

    Args:
        source: Records of the replica the merge was invoked on.
        target: Records of the other replica.
        key: Identity strategy for the value kind.

    Returns:
        A new mapping; neither input is modified.
    """
    pending: dict[Hashable, list[T]] = {}
    for value in target:
        pending.setdefault(key.identity(value), []).append(value)

    paired: set[T] = set()
    result: dict[T, Instant] = {}

    for value, stamp in source.items():
        candidates = pending.get(key.identity(value))
        if candidates:
            match = candidates.pop(0)
            paired.add(match)
            if target[match] > stamp:
                _keep_latest(result, match, target[match])
                continue
        _keep_latest(result, value, stamp)

    for value, stamp in target.items():
        if value not in paired:
            _keep_latest(result, value, stamp)

    return result


def segregate(
    adds: dict[T, Instant],
    removes: dict[T, Instant],
) -> tuple[dict[T, Instant], dict[T, Instant]]:
    """Make the add-set and remove-set mutually exclusive.

    For every value recorded in both, an add at or after the removal keeps
    the value in the add-set only; an older add leaves it in the remove-set
    only. Ties favour the add.

    Returns:
        ``(adds, removes)`` as new mappings.
    """
    adds = dict(adds)
    removes = dict(removes)
    for value in [v for v in adds if v in removes]:
        if adds[value] >= removes[value]:
            del removes[value]
        else:
            del adds[value]
    return adds, removes


def merge_states(source: ReplicaState, target: ReplicaState) -> ReplicaState:
    """Compute the converged state of two replicas.

    Vertex sets are converged with ``VERTEX_KEY`` and edge sets with
    ``EDGE_KEY``; each kind is then segregated independently.

    Args:
        source: State of the replica ``merge`` was invoked on (wins ties
            during convergence).
        target: State of the other replica.
    """
    add_vertices, remove_vertices = segregate(
        converge(source.add_vertices, target.add_vertices, VERTEX_KEY),
        converge(source.remove_vertices, target.remove_vertices, VERTEX_KEY),
    )
    add_edges, remove_edges = segregate(
        converge(source.add_edges, target.add_edges, EDGE_KEY),
        converge(source.remove_edges, target.remove_edges, EDGE_KEY),
    )
    merged = ReplicaState(
        add_vertices=add_vertices,
        remove_vertices=remove_vertices,
        add_edges=add_edges,
        remove_edges=remove_edges,
    )
    logger.debug(
        "Merged states: %d+%d vertex records, %d+%d edge records",
        len(add_vertices),
        len(remove_vertices),
        len(add_edges),
        len(remove_edges),
    )
    return merged
