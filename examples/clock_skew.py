"""Clock Skew: last-writer-wins trusts timestamps, not real-world order.

Architecture::

    replica-fast (clock +10s) ◄── merge ──► replica-slow (true clock)

Demonstrates:
1. A removal issued later in real time but stamped earlier than the add
   has no effect, locally or after merging.
2. Once the slow clock passes the fast replica's stamp, removals win again.
3. A pandas view of the records makes the stamps easy to compare.
"""

from lwwgraph import LWWGraph, ManualClock, SkewedClock
from lwwgraph.analysis import state_frame


def main():
    # --- Setup ---
    base = ManualClock()
    fast = LWWGraph(clock=SkewedClock(base, 10.0), name="replica-fast")
    slow = LWWGraph(clock=base, name="replica-slow")

    # --- Phase 1: fast replica adds, both sync ---
    doc = fast.add_vertex("document")
    fast.merge(slow)

    # --- Phase 2: slow replica removes 5s later in real time ---
    base.advance(5)
    slow.remove_vertex(doc)
    fast.merge(slow)

    print("=" * 60)
    print("Clock Skew Demo")
    print("=" * 60)
    print()
    print("Remove at true t=5s against an add stamped t=10s:")
    print(f"  replica-fast contains document: {fast.contains_vertex(doc)}")
    print(f"  replica-slow contains document: {slow.contains_vertex(doc)}")
    print()

    # --- Phase 3: slow clock catches up ---
    base.advance(6)
    slow.remove_vertex(doc)
    snapshot = state_frame(slow)
    slow.merge(fast)

    print("Remove at true t=11s:")
    print(f"  replica-fast contains document: {fast.contains_vertex(doc)}")
    print(f"  replica-slow contains document: {slow.contains_vertex(doc)}")
    print()
    print("replica-slow records before the last merge:")
    print(snapshot[["record", "label", "timestamp", "visible"]].to_string(index=False))


if __name__ == "__main__":
    main()
