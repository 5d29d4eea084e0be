"""Depth termination policy for random tree generation.

A GrowthPolicy is built once per tree and asked, node by node while the tree
is grown depth-first, whether the node being placed must be a leaf:

    with GrowthPolicy.half_and_half(source, min_depth=2, max_depth=6) as policy:
        root = grow(policy, depth=0)

where `grow` places a terminal when `policy.is_leaf(depth)` is True and an
operator with children at `depth + 1` otherwise. Node types, arity and payload
are the builder's business.

The policy borrows its random source for its whole lifetime and is itself a
`RandomStream`, so node payloads can be drawn from the policy while the
source stays checked out.
"""

import logging
import weakref

from treegen.errors import LeaseReleasedError, validate_depth_range
from treegen.modes import GrowthMode, ModeKind
from treegen.random_source import RandomSource, SourceLease

logger = logging.getLogger(__name__)


class GrowthPolicy:
    """Decides where a randomly grown tree places its leaves.

    Build through one of the classmethods:
    - perfect: all leaves at one depth drawn from [min_depth, max_depth]
    - full: leaves anywhere in [min_depth, max_depth]
    - full_ranged: leaves anywhere in [min_depth, d], d drawn from [min_depth, max_depth]
    - half_and_half: coin flip between perfect and full_ranged

    Attributes:
        mode: Growth mode, fixed at construction
        min_depth: Shallowest depth at which a leaf may be placed
        max_depth: Depth at which every branch terminates
    """

    def __init__(
        self,
        mode: GrowthMode,
        lease: SourceLease,
        min_depth: int,
        max_depth: int,
    ):
        min_depth, max_depth = validate_depth_range(min_depth, max_depth)
        if mode.chosen_depth is not None and not min_depth <= mode.chosen_depth <= max_depth:
            raise ValueError(
                f"chosen_depth {mode.chosen_depth} outside [{min_depth}, {max_depth}]"
            )

        self._mode = mode
        self._lease = lease
        self._min_depth = min_depth
        self._max_depth = max_depth
        self._finalizer = weakref.finalize(self, lease.release)

        logger.debug(f"Built {mode} growth policy for depths [{min_depth}, {max_depth}]")

    # Construction

    @classmethod
    def perfect(cls, source: RandomSource, min_depth: int, max_depth: int) -> "GrowthPolicy":
        """Grow a perfect tree: every leaf sits at the same depth.

        The depth is drawn uniformly from [min_depth, max_depth].

        **Equivalent to DEAP's `genFull`.**
        """
        min_depth, max_depth = validate_depth_range(min_depth, max_depth)
        return cls._build(source.borrow(), ModeKind.PERFECT, min_depth, max_depth)

    @classmethod
    def full(cls, source: RandomSource, min_depth: int, max_depth: int) -> "GrowthPolicy":
        """Grow a full tree: leaves at varying depths up to max_depth.

        Every depth in [min_depth, max_depth) gets the same chance of ending
        a branch; max_depth always does. Draws nothing at construction.

        **Not DEAP's `genFull`; see `perfect` for that.**
        """
        min_depth, max_depth = validate_depth_range(min_depth, max_depth)
        return cls._build(source.borrow(), ModeKind.FULL, min_depth, max_depth)

    @classmethod
    def full_ranged(cls, source: RandomSource, min_depth: int, max_depth: int) -> "GrowthPolicy":
        """Grow a full tree whose ceiling is drawn from [min_depth, max_depth].

        **Equivalent to DEAP's `genGrow`.**
        """
        min_depth, max_depth = validate_depth_range(min_depth, max_depth)
        return cls._build(source.borrow(), ModeKind.FULL_RANGED, min_depth, max_depth)

    @classmethod
    def half_and_half(cls, source: RandomSource, min_depth: int, max_depth: int) -> "GrowthPolicy":
        """Flip a coin between `perfect` (heads) and `full_ranged` (tails).

        **Equivalent to DEAP's `genHalfAndHalf`.**
        """
        min_depth, max_depth = validate_depth_range(min_depth, max_depth)
        lease = source.borrow()
        try:
            kind = ModeKind.PERFECT if lease.gen_bool() else ModeKind.FULL_RANGED
        except BaseException:
            lease.release()
            raise
        return cls._build(lease, kind, min_depth, max_depth)

    @classmethod
    def _build(
        cls,
        lease: SourceLease,
        kind: ModeKind,
        min_depth: int,
        max_depth: int,
    ) -> "GrowthPolicy":
        try:
            if kind is ModeKind.FULL:
                mode = GrowthMode.full()
            else:
                mode = GrowthMode(kind, lease.randint(min_depth, max_depth))
            return cls(mode, lease, min_depth, max_depth)
        except BaseException:
            lease.release()
            raise

    # Properties

    @property
    def mode(self) -> GrowthMode:
        return self._mode

    @property
    def min_depth(self) -> int:
        return self._min_depth

    @property
    def max_depth(self) -> int:
        return self._max_depth

    @property
    def chosen_depth(self) -> int | None:
        """Depth drawn at construction, None in Full mode."""
        return self._mode.chosen_depth

    @property
    def depth_ceiling(self) -> int:
        """Depth at which every branch is forced to end."""
        if self._mode.chosen_depth is None:
            return self._max_depth
        return self._mode.chosen_depth

    @property
    def closed(self) -> bool:
        return self._lease.released

    # Termination decision

    def is_leaf(self, current_depth: int) -> bool:
        """Decide whether the node at current_depth must be a leaf.

        Perfect mode is a plain comparison and draws nothing. Full and
        FullRanged end the branch at the ceiling and otherwise draw one
        weighted bool (true with probability 1/(ceiling - min_depth)) for
        depths in [min_depth, ceiling). Depths outside [min_depth, ceiling]
        are never leaves; stopping runaway recursion is the builder's job.

        Raises:
            LeaseReleasedError: If the policy has been closed.
        """
        if self._lease.released:
            raise LeaseReleasedError("GrowthPolicy has been closed")

        if self._mode.kind is ModeKind.PERFECT:
            return current_depth == self._mode.chosen_depth

        ceiling = self.depth_ceiling
        if current_depth == ceiling:
            return True
        if self._min_depth <= current_depth < ceiling:
            return self._lease.gen_weighted_bool(ceiling - self._min_depth)
        return False

    # RandomStream delegation

    def next_u32(self) -> int:
        return self._lease.next_u32()

    def next_u64(self) -> int:
        return self._lease.next_u64()

    def fill_bytes(self, dest: bytearray) -> None:
        self._lease.fill_bytes(dest)

    def randint(self, low: int, high: int) -> int:
        return self._lease.randint(low, high)

    def gen_bool(self) -> bool:
        return self._lease.gen_bool()

    def gen_weighted_bool(self, n: int) -> bool:
        return self._lease.gen_weighted_bool(n)

    # Lifetime

    def close(self) -> None:
        """Release the random source. Safe to call more than once."""
        self._finalizer()

    def __enter__(self) -> "GrowthPolicy":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __copy__(self):
        raise TypeError("GrowthPolicy cannot be copied; it would replay its random stream")

    def __deepcopy__(self, memo):
        raise TypeError("GrowthPolicy cannot be copied; it would replay its random stream")

    def __reduce__(self):
        raise TypeError("GrowthPolicy cannot be pickled; it would replay its random stream")

    def __repr__(self) -> str:
        return (
            f"GrowthPolicy({self._mode}, min_depth={self._min_depth}, "
            f"max_depth={self._max_depth})"
        )
