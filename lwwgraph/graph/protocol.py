"""Protocol for state-based replicated types.

A conflict-resolvable replica merges the full state of another replica
of the same type. Merge must be:

- **Commutative**: merging ``a`` with ``b`` or ``b`` with ``a`` converges
  to the same records.
- **Associative**: grouping of successive merges does not matter.
- **Idempotent**: merging a replica with an identical copy changes nothing.
"""

from __future__ import annotations

from typing import Protocol, Self, runtime_checkable


@runtime_checkable
class ConflictResolvable(Protocol):
    """Anything that can be reconciled with another replica of itself."""

    def merge(self, other: Self) -> None:
        """Merge ``other``'s state; both replicas end up converged.

        Args:
            other: Another replica of the same type.
        """
        ...

    def digest(self) -> str:
        """Fingerprint of the replica's state, equal across converged replicas."""
        ...
