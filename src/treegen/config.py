"""Declarative settings for building growth policies."""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any

from treegen.errors import validate_depth_range
from treegen.policy import GrowthPolicy
from treegen.random_source import NumpyRandomSource, PyRandomSource, RandomSource

SOURCE_BACKENDS: dict[str, type[RandomSource]] = {
    "python": PyRandomSource,
    "numpy": NumpyRandomSource,
}


class GrowthMethod(str, Enum):
    """Named ways of building a GrowthPolicy."""

    PERFECT = "perfect"
    FULL = "full"
    FULL_RANGED = "full_ranged"
    HALF_AND_HALF = "half_and_half"


@dataclass
class GrowthConfig:
    """Configuration for tree growth.

    Attributes:
        min_depth: Shallowest depth at which leaves may appear
        max_depth: Depth at which every branch ends
        method: Construction strategy (enum member or its string value)
        seed: Random seed for the source (None = OS entropy)
        backend: Random source backend ("python" or "numpy")
    """

    min_depth: int = 2
    max_depth: int = 6
    method: GrowthMethod = GrowthMethod.HALF_AND_HALF
    seed: int | None = None
    backend: str = "python"

    def __post_init__(self) -> None:
        self.min_depth, self.max_depth = validate_depth_range(self.min_depth, self.max_depth)
        try:
            self.method = GrowthMethod(self.method)
        except ValueError:
            valid = [m.value for m in GrowthMethod]
            raise ValueError(f"Unknown growth method: {self.method!r}. Valid: {valid}") from None
        if self.backend not in SOURCE_BACKENDS:
            raise ValueError(
                f"Unknown backend: {self.backend!r}. Valid: {sorted(SOURCE_BACKENDS)}"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GrowthConfig":
        """Build a config from a mapping, ignoring keys it does not know."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def make_source(self) -> RandomSource:
        """Create a fresh seeded random source for the configured backend."""
        return SOURCE_BACKENDS[self.backend](self.seed)

    def make_policy(self, source: RandomSource) -> GrowthPolicy:
        """Build a policy with the configured method, borrowing source."""
        constructors = {
            GrowthMethod.PERFECT: GrowthPolicy.perfect,
            GrowthMethod.FULL: GrowthPolicy.full,
            GrowthMethod.FULL_RANGED: GrowthPolicy.full_ranged,
            GrowthMethod.HALF_AND_HALF: GrowthPolicy.half_and_half,
        }
        return constructors[self.method](source, self.min_depth, self.max_depth)
