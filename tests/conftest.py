"""
Pytest fixtures for treegen tests.

All sources are seeded so every run draws the same stream.
"""

import pytest

from treegen.random_source import NumpyRandomSource, PyRandomSource

SEED = 42


@pytest.fixture
def py_source() -> PyRandomSource:
    """Seeded standard library source."""
    return PyRandomSource(SEED)


@pytest.fixture
def np_source() -> NumpyRandomSource:
    """Seeded numpy source."""
    return NumpyRandomSource(SEED)


@pytest.fixture(params=["python", "numpy"])
def source(request):
    """Seeded source for each backend."""
    if request.param == "python":
        return PyRandomSource(SEED)
    return NumpyRandomSource(SEED)


def grow_leaf_depths(policy, depth: int = 0, arity: int = 2) -> list[int]:
    """Grow a tree depth-first and return the depth of every leaf.

    Stands in for a real tree builder: one is_leaf query per node, a
    leaf on True, `arity` children one level down on False.
    """
    if depth > policy.max_depth + 1:
        raise AssertionError(f"Runaway growth past max_depth at depth {depth}")
    if policy.is_leaf(depth):
        return [depth]
    leaves = []
    for _ in range(arity):
        leaves.extend(grow_leaf_depths(policy, depth + 1, arity))
    return leaves


@pytest.fixture
def grow():
    """Reference depth-first builder driving a policy."""
    return grow_leaf_depths
