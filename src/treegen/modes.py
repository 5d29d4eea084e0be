"""Growth modes for random tree generation.

A growth mode decides how leaf depths are spread through a generated tree.
Modes are plain immutable values picked once when a policy is built.
"""

from dataclasses import dataclass
from enum import Enum, auto


class ModeKind(Enum):
    """Variants of tree growth."""

    PERFECT = auto()      # every leaf at chosen_depth
    FULL = auto()         # leaves between min_depth and max_depth
    FULL_RANGED = auto()  # leaves between min_depth and chosen_depth

    def carries_depth(self) -> bool:
        """Check if this variant stores a chosen depth."""
        return self in (ModeKind.PERFECT, ModeKind.FULL_RANGED)


@dataclass(frozen=True)
class GrowthMode:
    """A growth variant plus the depth it was bound to, if any.

    Attributes:
        kind: Which growth variant applies
        chosen_depth: Leaf ceiling drawn at construction (Perfect and FullRanged only)
    """

    kind: ModeKind
    chosen_depth: int | None = None

    def __post_init__(self) -> None:
        if self.kind.carries_depth():
            if self.chosen_depth is None:
                raise ValueError(f"{self.kind.name} mode requires a chosen_depth")
        elif self.chosen_depth is not None:
            raise ValueError(f"{self.kind.name} mode does not take a chosen_depth")

    @classmethod
    def perfect(cls, chosen_depth: int) -> "GrowthMode":
        return cls(ModeKind.PERFECT, chosen_depth)

    @classmethod
    def full(cls) -> "GrowthMode":
        return cls(ModeKind.FULL)

    @classmethod
    def full_ranged(cls, chosen_depth: int) -> "GrowthMode":
        return cls(ModeKind.FULL_RANGED, chosen_depth)

    def __str__(self) -> str:
        name = {
            ModeKind.PERFECT: "Perfect",
            ModeKind.FULL: "Full",
            ModeKind.FULL_RANGED: "FullRanged",
        }[self.kind]
        if self.chosen_depth is None:
            return name
        return f"{name}({self.chosen_depth})"
