"""Exceptions raised by tree growth policies.

Depth range validation (subclass ValueError):
- InvalidDepthRangeError: Raised when a policy is built with unusable bounds.

Random source aliasing (subclass RuntimeError):
- SourceBorrowedError: Raised when a checked-out source is used directly.
- LeaseReleasedError: Raised when a released lease or closed policy is used.
"""

from numbers import Integral


class TreeGenError(Exception):
    """Base class for all treegen errors."""


class InvalidDepthRangeError(TreeGenError, ValueError):
    """Raised when depth bounds cannot describe a tree.

    Attributes:
        min_depth: The rejected minimum depth.
        max_depth: The rejected maximum depth.
    """

    def __init__(self, min_depth: object, max_depth: object, reason: str) -> None:
        self.min_depth = min_depth
        self.max_depth = max_depth
        super().__init__(f"Invalid depth range [{min_depth}, {max_depth}]: {reason}")


class SourceBorrowedError(TreeGenError, RuntimeError):
    """Raised when a random source is accessed while it is checked out."""


class LeaseReleasedError(TreeGenError, RuntimeError):
    """Raised when a lease is used after it has been released."""


def validate_depth_range(min_depth: int, max_depth: int) -> tuple[int, int]:
    """Reject depth bounds that no tree could satisfy.

    Returns:
        The bounds as plain ints (numpy integer scalars are accepted).
    """
    for value in (min_depth, max_depth):
        if isinstance(value, bool) or not isinstance(value, Integral):
            raise InvalidDepthRangeError(min_depth, max_depth, "depths must be integers")
    if min_depth < 0:
        raise InvalidDepthRangeError(min_depth, max_depth, "min_depth must be non-negative")
    if min_depth > max_depth:
        raise InvalidDepthRangeError(min_depth, max_depth, "min_depth must be <= max_depth")
    return int(min_depth), int(max_depth)
