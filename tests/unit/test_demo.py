"""Tests for the two-replica demo."""

import logging

from lwwgraph.core.clock import SystemClock
from lwwgraph.demo import main, run_demo


def _payloads(paths):
    return [[v() for v in path] for path in paths]


class TestRunDemo:

    def test_replicas_converge(self):
        result = run_demo()
        b = result.replica_b
        assert {v() for v in b.vertices()} == {1, 2, 3, 4, 5}
        assert len(b.edges()) == 4

    def test_tombstones_survive_merge(self):
        result = run_demo()
        a, v = result.replica_a, result.vertices
        assert not a.contains_vertex(v[6])
        assert not a.contains_edge(v[1], v[6])
        assert not a.contains_edge(v[6], v[3])
        assert a.tombstoned_vertices() == frozenset({v[6]})

    def test_edge_to_removed_vertex_ignored_after_merge(self):
        a = run_demo().replica_a
        assert a.stats.mutations_ignored == 1

    def test_paths_from_one_to_four(self):
        result = run_demo()
        assert _payloads(result.paths) == [[1, 2, 4], [1, 3, 4], [1, 2, 3, 4], [1, 3, 2, 4]]
        assert len(result.replica_a.edges()) == 6

    def test_deterministic_by_default(self):
        first, second = run_demo(), run_demo()
        assert _payloads(first.paths) == _payloads(second.paths)
        assert first.replica_a.stats == second.replica_a.stats

    def test_wall_clock_still_finds_paths(self):
        result = run_demo(clock=SystemClock())
        assert len(result.paths) == 4


class TestMain:

    def test_prints_summary(self, capsys):
        assert main([]) == 0
        out = capsys.readouterr().out
        assert "LWW-Element Graph Demo" in out
        assert "contains_vertex(6):  False" in out
        assert "  1, 2, 4" in out
        assert "  1, 3, 2, 4" in out

    def test_verbose_enables_debug_logging(self, capsys):
        main(["--verbose"])
        assert logging.getLogger("lwwgraph").level == logging.DEBUG
        assert "Ignored add_edge" in capsys.readouterr().err

    def test_plot_writes_images(self, capsys, test_output_dir):
        assert main(["--plot", str(test_output_dir)]) == 0
        for name in ("replica_a.png", "replica_b.png", "paths_1_4.png"):
            assert (test_output_dir / name).exists()
        assert "Saved images" in capsys.readouterr().out
