"""Partition and heal: three replicas edit a shared topology offline.

Architecture::

    Edits ──► replica-a        replica-b        replica-c ◄── Edits
                  │                │                │
                  └──── merge ─────┴───── merge ────┘
                          (after the partition heals)

Demonstrates:
1. Every replica accepts edits without coordination.
2. A vertex removed on one replica and re-added later on another ends up
   present: the latest instant wins.
3. Pairwise merges around the ring leave all three replicas with the same
   records and the same digest.
"""

from lwwgraph import LWWGraph, ManualClock, Vertex


def main():
    # --- Setup ---
    clock = ManualClock()
    a = LWWGraph(clock=clock, name="replica-a")
    b = LWWGraph(clock=clock, name="replica-b")
    c = LWWGraph(clock=clock, name="replica-c")

    gateway = Vertex("gateway")
    services = {name: Vertex(name) for name in ("auth", "billing", "search")}

    for replica in (a, b, c):
        replica.add_vertex_record(gateway)
        clock.advance()

    # --- Partitioned edits ---
    a.add_vertex_record(services["auth"])
    a.add_edge(gateway, services["auth"])
    clock.advance()

    b.add_vertex_record(services["billing"])
    b.add_edge(gateway, services["billing"])
    clock.advance()
    b.remove_vertex(gateway)  # b decommissions the gateway
    clock.advance()

    c.add_vertex_record(services["search"])
    c.add_edge(gateway, services["search"])
    clock.advance()
    c.add_vertex_record(gateway)  # c re-registers it later
    clock.advance()

    print("=" * 60)
    print("Partition and Heal Demo")
    print("=" * 60)
    print()
    print("Before merging:")
    for replica in (a, b, c):
        names = sorted(v() for v in replica.vertices())
        print(f"  {replica.name}: {names}  digest={replica.digest()[:8]}")
    print()

    # --- Heal ---
    a.merge(b)
    b.merge(c)
    c.merge(a)

    print("After a<->b, b<->c, c<->a:")
    for replica in (a, b, c):
        names = sorted(v() for v in replica.vertices())
        print(f"  {replica.name}: {names}  digest={replica.digest()[:8]}")
    print()

    converged = a.is_converged_with(b) and b.is_converged_with(c)
    print(f"Converged: {converged}")
    print(f"Gateway present: {a.contains_vertex(gateway)}")
    print()
    for name, service in services.items():
        paths = a.find_paths(gateway, service)
        print(f"  gateway -> {name}: {len(paths)} path(s)")
    print()

    for replica in (a, b, c):
        stats = replica.stats
        print(f"{replica.name} stats:")
        print(f"  Vertices added: {stats.vertices_added}")
        print(f"  Vertices removed: {stats.vertices_removed}")
        print(f"  Edges added: {stats.edges_added}")
        print(f"  Merges: {stats.merges}")


if __name__ == "__main__":
    main()
