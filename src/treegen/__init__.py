"""
treegen: depth termination policies for random expression tree generation.

Genetic programming systems grow random trees top-down, one node at a time.
This package decides, for each node, whether it must be a leaf:
- Perfect growth (all leaves at one depth, DEAP's genFull)
- Full growth (leaves spread up to max_depth)
- Ranged full growth (leaves spread up to a drawn ceiling, DEAP's genGrow)
- Half-and-half (DEAP's genHalfAndHalf)
"""

__version__ = "0.1.0"

from treegen.config import GrowthConfig, GrowthMethod
from treegen.errors import (
    InvalidDepthRangeError,
    LeaseReleasedError,
    SourceBorrowedError,
    TreeGenError,
)
from treegen.modes import GrowthMode, ModeKind
from treegen.policy import GrowthPolicy
from treegen.random_source import (
    NumpyRandomSource,
    PyRandomSource,
    RandomSource,
    RandomStream,
    SourceLease,
)

__all__ = [
    "__version__",
    "GrowthConfig",
    "GrowthMethod",
    "GrowthMode",
    "GrowthPolicy",
    "InvalidDepthRangeError",
    "LeaseReleasedError",
    "ModeKind",
    "NumpyRandomSource",
    "PyRandomSource",
    "RandomSource",
    "RandomStream",
    "SourceBorrowedError",
    "SourceLease",
    "TreeGenError",
]
