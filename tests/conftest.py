"""
Shared pytest fixtures for lwwgraph tests.
"""

import logging
from pathlib import Path

import pytest

from lwwgraph import LWWGraph, ManualClock


@pytest.fixture(scope="session")
def test_output_root() -> Path:
    """
    Root test_output directory, created once per session. Rendered images
    are kept there after the run for inspection.
    """
    output_dir = Path(__file__).parent.parent / "test_output"
    output_dir.mkdir(exist_ok=True)
    return output_dir


@pytest.fixture
def test_output_dir(request, test_output_root) -> Path:
    """
    Per-test output directory: test_output/<module_name>/<test_name>/
    """
    module_name = request.module.__name__.split(".")[-1]
    test_dir = test_output_root / module_name / request.node.name
    test_dir.mkdir(parents=True, exist_ok=True)
    return test_dir


@pytest.fixture
def clock() -> ManualClock:
    """A manual clock starting at the epoch."""
    return ManualClock()


@pytest.fixture
def graph(clock) -> LWWGraph:
    """An empty replica stamped by the shared manual clock."""
    return LWWGraph(clock=clock, name="g")


@pytest.fixture(autouse=True)
def reset_lwwgraph_logging():
    """Reset the lwwgraph logger before and after each test.

    Leaves only a NullHandler and an inherited level so that logging
    configured by one test cannot leak into another.
    """
    logger = logging.getLogger("lwwgraph")

    def reset():
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            if not isinstance(handler, logging.NullHandler):
                handler.close()
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)

    reset()
    yield
    reset()
