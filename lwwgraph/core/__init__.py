"""Time primitives shared by every replica."""

from lwwgraph.core.clock import ManualClock, SkewedClock, SystemClock, TimeSource
from lwwgraph.core.instant import Instant

__all__ = [
    "Instant",
    "ManualClock",
    "SkewedClock",
    "SystemClock",
    "TimeSource",
]
