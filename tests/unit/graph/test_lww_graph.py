"""Tests for the LWWGraph replica: mutations, queries and merge."""

import pytest

from lwwgraph import LWWGraph, ManualClock, NotInGraph
from lwwgraph.core.instant import Instant
from lwwgraph.graph.elements import Edge, Vertex
from lwwgraph.graph.lww_graph import GraphStats
from lwwgraph.graph.protocol import ConflictResolvable


class TestLWWGraphCreation:

    def test_starts_empty(self, graph):
        assert len(graph) == 0
        assert graph.vertices() == frozenset()
        assert graph.edges() == frozenset()

    def test_default_clock_is_system_clock(self):
        from lwwgraph.core.clock import SystemClock

        assert isinstance(LWWGraph().clock, SystemClock)

    def test_implements_protocol(self, graph):
        assert isinstance(graph, ConflictResolvable)

    def test_repr(self, graph):
        graph.add_vertex(1)
        assert "'g'" in repr(graph)
        assert "vertices=1" in repr(graph)

    def test_default_name(self):
        assert LWWGraph().name.startswith("replica-")


class TestVertexMutations:

    def test_add_vertex_stamps_clock(self, graph, clock):
        clock.advance(3)
        v = graph.add_vertex("a")
        assert graph.state.add_vertices == {v: Instant.from_seconds(3)}
        assert graph.contains_vertex(v)
        assert v in graph

    def test_add_vertex_record_shares_identity(self, graph):
        v = Vertex("shared")
        assert graph.add_vertex_record(v) is v
        assert graph.contains_vertex(Vertex("shared", id=v.id))

    def test_remove_vertex(self, graph, clock):
        v = graph.add_vertex(1)
        clock.advance()
        graph.remove_vertex(v)
        assert not graph.contains_vertex(v)
        assert graph.tombstoned_vertices() == frozenset({v})

    def test_remove_keeps_add_record(self, graph, clock):
        v = graph.add_vertex(1)
        clock.advance()
        graph.remove_vertex(v)
        state = graph.state
        assert v in state.add_vertices
        assert v in state.remove_vertices

    def test_add_and_remove_at_same_instant_is_not_contained(self, graph):
        v = graph.add_vertex(1)
        graph.remove_vertex(v)
        assert not graph.contains_vertex(v)

    def test_readd_after_remove(self, graph, clock):
        v = graph.add_vertex(1)
        clock.advance()
        graph.remove_vertex(v)
        clock.advance()
        graph.add_vertex_record(v)
        assert graph.contains_vertex(v)

    def test_remove_never_added_is_noop(self, graph):
        graph.remove_vertex(Vertex(1))
        assert graph.state.remove_vertices == {}
        assert graph.stats.mutations_ignored == 1

    def test_remove_requires_exact_record(self, graph, clock):
        v = graph.add_vertex("a")
        clock.advance()
        graph.remove_vertex(Vertex("b", id=v.id))
        assert graph.contains_vertex(v)

    def test_payload_variants_coexist(self, graph, clock):
        v = graph.add_vertex("a")
        clock.advance()
        variant = graph.add_vertex_record(Vertex("b", id=v.id))
        clock.advance()
        graph.remove_vertex(v)
        assert not graph.contains_vertex(v)
        assert graph.contains_vertex(variant)


class TestEdgeMutations:

    def test_add_edge(self, graph):
        v1, v2 = graph.add_vertex(1), graph.add_vertex(2)
        edge = graph.add_edge(v1, v2)
        assert edge == Edge.between(v1, v2)
        assert graph.contains_edge(v1, v2)
        assert graph.contains_edge(v2, v1)

    def test_add_edge_extra_vertices_ignored(self, graph):
        v1, v2, v3 = graph.add_vertex(1), graph.add_vertex(2), graph.add_vertex(3)
        graph.add_edge(v1, v2, v3)
        assert graph.edges() == frozenset({Edge.between(v1, v2)})

    def test_add_edge_with_fewer_than_two_vertices_is_noop(self, graph):
        v1 = graph.add_vertex(1)
        assert graph.add_edge(v1) is None
        assert graph.add_edge() is None
        assert graph.state.add_edges == {}
        assert graph.stats.mutations_ignored == 2

    def test_add_edge_to_unknown_vertex_is_noop(self, graph):
        v1 = graph.add_vertex(1)
        assert graph.add_edge(v1, Vertex(2)) is None
        assert graph.state.add_edges == {}

    def test_add_edge_to_itself_is_noop(self, graph):
        v1 = graph.add_vertex(1)
        assert graph.add_edge(v1, v1) is None

    def test_add_edge_checks_presence_not_visibility(self, graph, clock):
        v1, v2 = graph.add_vertex(1), graph.add_vertex(2)
        clock.advance()
        graph.remove_vertex(v2)
        assert graph.add_edge(v1, v2) is not None

    def test_remove_edge(self, graph, clock):
        v1, v2 = graph.add_vertex(1), graph.add_vertex(2)
        graph.add_edge(v1, v2)
        clock.advance()
        graph.remove_edge(v2, v1)
        assert not graph.contains_edge(v1, v2)
        assert graph.tombstoned_edges() == frozenset({Edge.between(v1, v2)})

    def test_remove_edge_at_same_instant_is_not_contained(self, graph):
        v1, v2 = graph.add_vertex(1), graph.add_vertex(2)
        graph.add_edge(v1, v2)
        graph.remove_edge(v1, v2)
        assert not graph.contains_edge(v1, v2)

    def test_remove_unknown_edge_is_noop(self, graph):
        v1, v2 = graph.add_vertex(1), graph.add_vertex(2)
        graph.remove_edge(v1, v2)
        graph.remove_edge(v1)
        assert graph.state.remove_edges == {}
        assert graph.stats.mutations_ignored == 2

    def test_contains_edge_needs_two_vertices(self, graph):
        v1 = graph.add_vertex(1)
        assert not graph.contains_edge(v1)
        assert not graph.contains_edge()


class TestConnectedVertices:

    def test_neighbours(self, graph):
        v1, v2, v3 = graph.add_vertex(1), graph.add_vertex(2), graph.add_vertex(3)
        graph.add_edge(v1, v2)
        graph.add_edge(v1, v3)
        graph.add_edge(v2, v3)
        assert graph.connected_vertices(v2) == frozenset({v1, v3})
        assert graph.connected_vertices(v1) == frozenset({v2, v3})

    def test_removed_neighbour_filtered(self, graph, clock):
        v1, v2, v3 = graph.add_vertex(1), graph.add_vertex(2), graph.add_vertex(3)
        graph.add_edge(v1, v2)
        graph.add_edge(v1, v3)
        clock.advance()
        graph.remove_vertex(v3)
        assert graph.connected_vertices(v1) == frozenset({v2})

    def test_edge_tombstones_not_consulted(self, graph, clock):
        v1, v2 = graph.add_vertex(1), graph.add_vertex(2)
        graph.add_edge(v1, v2)
        clock.advance()
        graph.remove_edge(v1, v2)
        assert graph.connected_vertices(v1) == frozenset({v2})

    def test_resolves_endpoint_to_first_stored_record(self, graph, clock):
        v1, v2 = graph.add_vertex(1), graph.add_vertex(2)
        graph.add_edge(v1, v2)
        clock.advance()
        graph.add_vertex_record(Vertex("two", id=v2.id))
        assert graph.connected_vertices(v1) == frozenset({v2})

    def test_isolated_vertex(self, graph):
        v1 = graph.add_vertex(1)
        assert graph.connected_vertices(v1) == frozenset()


class TestPathsErrors:

    def test_unknown_origin_raises(self, graph):
        v = graph.add_vertex(1)
        stranger = Vertex(2)
        with pytest.raises(NotInGraph) as info:
            graph.all_simple_paths(stranger, v)
        assert info.value.vertex is stranger

    def test_removed_destination_raises(self, graph, clock):
        v1, v2 = graph.add_vertex(1), graph.add_vertex(2)
        clock.advance()
        graph.remove_vertex(v2)
        with pytest.raises(NotInGraph):
            graph.all_simple_paths(v1, v2)

    def test_not_in_graph_is_a_key_error(self, graph):
        with pytest.raises(KeyError):
            graph.all_simple_paths(Vertex(1), Vertex(2))

    def test_find_paths_reports_instead_of_raising(self, graph):
        assert graph.find_paths(Vertex(1), Vertex(2)) == []


class TestMerge:

    def _pair(self):
        clock = ManualClock()
        return LWWGraph(clock=clock, name="a"), LWWGraph(clock=clock, name="b"), clock

    def test_both_replicas_converge(self):
        a, b, clock = self._pair()
        a.add_vertex(1)
        clock.advance()
        b.add_vertex(2)

        a.merge(b)
        assert a.is_converged_with(b)
        assert a.digest() == b.digest()
        assert len(a) == len(b) == 2

    def test_replicas_do_not_share_containers(self):
        a, b, clock = self._pair()
        v = a.add_vertex(1)
        a.merge(b)
        clock.advance()
        b.remove_vertex(v)
        assert a.contains_vertex(v)
        assert not b.contains_vertex(v)

    def test_remote_remove_wins_when_newer(self):
        a, b, clock = self._pair()
        v = Vertex(1)
        a.add_vertex_record(v)
        b.add_vertex_record(v)
        clock.advance()
        b.remove_vertex(v)

        a.merge(b)
        assert not a.contains_vertex(v)
        assert a.state.add_vertices == {}

    def test_local_readd_wins_when_newer(self):
        a, b, clock = self._pair()
        v = Vertex(1)
        b.add_vertex_record(v)
        clock.advance()
        b.remove_vertex(v)
        clock.advance()
        a.add_vertex_record(v)

        b.merge(a)
        assert a.contains_vertex(v)
        assert b.contains_vertex(v)

    def test_tie_between_add_and_remove_ends_visible(self):
        a, b, _ = self._pair()
        v = Vertex(1)
        a.add_vertex_record(v)
        b.add_vertex_record(v)
        b.remove_vertex(v)
        assert not b.contains_vertex(v)

        a.merge(b)
        assert a.contains_vertex(v)
        assert b.contains_vertex(v)
        assert a.state.remove_vertices == {}

    def test_newer_payload_variant_replaces_older(self):
        a, b, clock = self._pair()
        v = a.add_vertex("old")
        clock.advance()
        renamed = b.add_vertex_record(Vertex("new", id=v.id))

        a.merge(b)
        assert a.vertices() == frozenset({renamed})

    def test_merge_with_self_is_noop_on_segregated_state(self):
        a, _, _ = self._pair()
        a.add_vertex(1)
        before = a.state
        a.merge(a)
        assert a.state == before
        assert a.stats.merges == 1

    def test_idempotent_with_snapshot_copy(self):
        a, b, clock = self._pair()
        v1, v2 = a.add_vertex(1), a.add_vertex(2)
        a.add_edge(v1, v2)
        clock.advance()
        b.add_vertex(3)
        a.merge(b)

        before = a.state
        a.merge(a.copy())
        assert a.state == before

    def test_stats_count_both_sides(self):
        a, b, _ = self._pair()
        a.merge(b)
        assert a.stats.merges == 1
        assert b.stats.merges == 1

    def test_stats_snapshot_is_frozen(self, graph):
        graph.add_vertex(1)
        stats = graph.stats
        assert stats == GraphStats(vertices_added=1)
        with pytest.raises(AttributeError):
            stats.vertices_added = 5


class TestMergeProperties:
    """Commutativity, associativity and idempotence on non-trivial histories."""

    @staticmethod
    def _seed():
        clock = ManualClock()
        v = {n: Vertex(n) for n in range(1, 6)}
        a = LWWGraph(clock=clock, name="a")
        b = LWWGraph(clock=clock, name="b")
        c = LWWGraph(clock=clock, name="c")

        for n in (1, 2, 3):
            a.add_vertex_record(v[n])
            clock.advance()
        a.add_edge(v[1], v[2])
        clock.advance()
        a.add_edge(v[2], v[3])
        clock.advance()

        for n in (1, 3, 4):
            b.add_vertex_record(v[n])
            clock.advance()
        b.add_edge(v[3], v[4])
        clock.advance()
        b.remove_vertex(v[1])
        clock.advance()

        for n in (2, 4, 5):
            c.add_vertex_record(v[n])
            clock.advance()
        c.add_edge(v[4], v[5])
        clock.advance()
        c.remove_edge(v[4], v[5])
        clock.advance()
        c.add_vertex_record(v[1])
        clock.advance()
        c.add_vertex_record(v[3])
        c.add_edge(v[1], v[3])
        clock.advance()
        return a, b, c, v

    def test_commutative(self):
        a, b, _, _ = self._seed()
        a2, b2 = a.copy(), b.copy()

        a.merge(b)
        b2.merge(a2)
        assert a.state == b2.state

    def test_associative(self):
        a, b, c, _ = self._seed()
        a2, b2, c2 = a.copy(), b.copy(), c.copy()

        a.merge(b)
        a.merge(c)

        b2.merge(c2)
        a2.merge(b2)

        assert a.state == a2.state

    def test_all_orders_agree_on_visibility(self):
        a, b, c, v = self._seed()
        a2, b2, c2 = a.copy(), b.copy(), c.copy()
        a.merge(b)
        a.merge(c)
        c2.merge(a2)
        c2.merge(b2)

        assert a.vertices() == c2.vertices()
        assert a.edges() == c2.edges()
        # vertex 1 was removed on b but re-added later on c
        assert a.contains_vertex(v[1])
        assert not a.contains_edge(v[4], v[5])

    def test_idempotent(self):
        a, b, c, _ = self._seed()
        a.merge(b)
        a.merge(c)
        snapshot = a.copy()

        before = a.state
        a.merge(snapshot)
        a.merge(snapshot)
        assert a.state == before


class TestCopy:

    def test_copy_is_independent(self, graph, clock):
        v = graph.add_vertex(1)
        clone = graph.copy(name="clone")
        clock.advance()
        clone.remove_vertex(v)
        assert graph.contains_vertex(v)
        assert clone.name == "clone"
        assert clone.clock is graph.clock

    def test_state_property_is_a_copy(self, graph):
        graph.state.add_vertices[Vertex(1)] = Instant.Epoch
        assert graph.state.add_vertices == {}
