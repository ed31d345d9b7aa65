"""Time sources for stamping replica mutations.

A replica never reads the system clock directly. It asks its
``TimeSource`` for ``now()``, which makes timestamps injectable:

- ``SystemClock`` reads the local wall clock (the default).
- ``ManualClock`` returns a fixed instant until moved, so tests can
  produce exact ties and strict orderings.
- ``SkewedClock`` shifts another source by a constant offset, modelling
  the clock skew between devices that last-writer-wins is exposed to.

Usage::

    from lwwgraph import LWWGraph, ManualClock

    clock = ManualClock()
    graph = LWWGraph(clock=clock)
    v = graph.add_vertex(1)
    graph.remove_vertex(v)          # same instant: removal wins the tie
    assert not graph.contains_vertex(v)
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable

from lwwgraph.core.instant import Instant


@runtime_checkable
class TimeSource(Protocol):
    """Protocol for anything that can report the current instant."""

    def now(self) -> Instant:
        """Return the current time as perceived by this source."""
        ...


class SystemClock:
    """Wall-clock time source backed by ``time.time_ns()``."""

    __slots__ = ()

    def now(self) -> Instant:
        return Instant(time.time_ns())

    def __repr__(self) -> str:
        return "SystemClock()"


class ManualClock:
    """Time source that only moves when told to.

    Args:
        start: Initial instant (default ``Instant.Epoch``).
    """

    __slots__ = ("_current",)

    def __init__(self, start: Instant = Instant.Epoch):
        self._current = start

    def now(self) -> Instant:
        return self._current

    def advance(self, seconds: int | float = 1) -> Instant:
        """Move the clock forward and return the new instant.

        Args:
            seconds: Non-negative step in seconds.

        Raises:
            ValueError: If ``seconds`` is negative.
        """
        if seconds < 0:
            raise ValueError(f"ManualClock cannot move backwards, got {seconds}")
        self._current = self._current + seconds
        return self._current

    def set(self, instant: Instant) -> None:
        """Jump to an arbitrary instant, forwards or backwards."""
        self._current = instant

    def __repr__(self) -> str:
        return f"ManualClock(now={self._current!r})"


class SkewedClock:
    """Reads another time source shifted by a constant offset.

    A positive offset means this clock reads ahead of the wrapped source,
    a negative one that it lags behind. Replicas with skewed clocks win or
    lose LWW conflicts they would not win or lose on a shared clock.

    Args:
        source: The underlying time source.
        offset_seconds: Constant offset applied to every reading.
    """

    __slots__ = ("_offset", "_source")

    def __init__(self, source: TimeSource, offset_seconds: int | float):
        self._source = source
        self._offset = offset_seconds

    @property
    def offset_seconds(self) -> int | float:
        return self._offset

    def now(self) -> Instant:
        return self._source.now() + self._offset

    def __repr__(self) -> str:
        return f"SkewedClock({self._source!r}, offset_seconds={self._offset})"
