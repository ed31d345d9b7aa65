"""Immutable nanosecond timestamps used to stamp graph records.

Every add and remove record in a replica carries an ``Instant``. Ordering
between instants is the only thing last-writer-wins resolution looks at, so
the type is a frozen, totally ordered integer wrapper.

Example::

    from lwwgraph.core.instant import Instant

    t = Instant.from_seconds(1.5)
    assert t + 0.5 == Instant.from_seconds(2.0)
    assert Instant.Epoch < t
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import ClassVar

_NS_PER_SECOND = 1_000_000_000


@dataclass(frozen=True, order=True, slots=True)
class Instant:
    """A point in time, in integer nanoseconds since the Unix epoch.

    Attributes:
        nanoseconds: Nanoseconds since 1970-01-01T00:00:00Z.
    """

    nanoseconds: int

    Epoch: ClassVar[Instant]

    @classmethod
    def from_seconds(cls, seconds: int | float) -> Instant:
        """Create an instant from (possibly fractional) seconds.

        Raises:
            TypeError: If ``seconds`` is not a number.
        """
        if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
            raise TypeError(f"seconds must be int or float, got {type(seconds).__name__}")
        if isinstance(seconds, int):
            return cls(seconds * _NS_PER_SECOND)
        return cls(round(seconds * _NS_PER_SECOND))

    @classmethod
    def from_datetime(cls, moment: datetime) -> Instant:
        """Create an instant from a datetime (naive values are taken as UTC)."""
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=UTC)
        delta = moment - datetime(1970, 1, 1, tzinfo=UTC)
        ns = (delta.days * 86_400 + delta.seconds) * _NS_PER_SECOND
        return cls(ns + delta.microseconds * 1_000)

    def to_seconds(self) -> float:
        return self.nanoseconds / _NS_PER_SECOND

    def to_datetime(self) -> datetime:
        """Return the instant as an aware UTC datetime (microsecond precision)."""
        return datetime.fromtimestamp(self.to_seconds(), tz=UTC)

    def __add__(self, seconds: int | float) -> Instant:
        if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
            return Instant(self.nanoseconds + round(seconds * _NS_PER_SECOND))
        return NotImplemented

    def __sub__(self, seconds: int | float) -> Instant:
        if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
            return Instant(self.nanoseconds - round(seconds * _NS_PER_SECOND))
        return NotImplemented

    def __repr__(self) -> str:
        return f"Instant({self.to_seconds():.9f}s)"


Instant.Epoch = Instant(0)
