"""Seedable random sources with an exclusive-borrow guard.

A tree growth policy holds its random source for its whole lifetime. Two
holders drawing from the same stream would desynchronize it, so a source is
checked out through `RandomSource.borrow()` and refuses direct use until the
returned `SourceLease` is released.

Backends:
- PyRandomSource: standard library `random.Random`
- NumpyRandomSource: `numpy.random.Generator` (PCG64 by default)
"""

from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable
import logging
import random

import numpy as np

from treegen.errors import LeaseReleasedError, SourceBorrowedError

logger = logging.getLogger(__name__)


@runtime_checkable
class RandomStream(Protocol):
    """Capabilities expected from anything that hands out randomness."""

    def next_u32(self) -> int: ...

    def next_u64(self) -> int: ...

    def fill_bytes(self, dest: bytearray) -> None: ...

    def randint(self, low: int, high: int) -> int: ...

    def gen_bool(self) -> bool: ...

    def gen_weighted_bool(self, n: int) -> bool: ...


class RandomSource(ABC):
    """Abstract seeded random source.

    Public draws check that the source is not checked out; the lease calls the
    underscored primitives directly.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._borrowed = False

    # Backend primitives

    @abstractmethod
    def _next_u32(self) -> int:
        """Draw a uniform integer in [0, 2**32)."""

    @abstractmethod
    def _next_u64(self) -> int:
        """Draw a uniform integer in [0, 2**64)."""

    @abstractmethod
    def _fill_bytes(self, dest: bytearray) -> None:
        """Overwrite dest with random bytes."""

    @abstractmethod
    def _randint(self, low: int, high: int) -> int:
        """Draw a uniform integer in [low, high]."""

    @abstractmethod
    def _gen_bool(self) -> bool:
        """Flip a fair coin."""

    def _gen_weighted_bool(self, n: int) -> bool:
        # n <= 1 (including the 1/0 case) is certain and consumes nothing
        if n <= 1:
            return True
        return self._randint(0, n - 1) == 0

    # Borrowing

    @property
    def is_borrowed(self) -> bool:
        """Whether a lease currently holds this source."""
        return self._borrowed

    def borrow(self) -> "SourceLease":
        """Check the source out for exclusive use.

        Raises:
            SourceBorrowedError: If another lease is still active.
        """
        self._ensure_available()
        self._borrowed = True
        logger.debug(f"Borrowed {self!r}")
        return SourceLease(self)

    def _return(self) -> None:
        self._borrowed = False
        logger.debug(f"Returned {self!r}")

    def _ensure_available(self) -> None:
        if self._borrowed:
            raise SourceBorrowedError(
                f"{type(self).__name__} is checked out; draw through its holder instead"
            )

    # RandomStream

    def next_u32(self) -> int:
        self._ensure_available()
        return self._next_u32()

    def next_u64(self) -> int:
        self._ensure_available()
        return self._next_u64()

    def fill_bytes(self, dest: bytearray) -> None:
        self._ensure_available()
        self._fill_bytes(dest)

    def randint(self, low: int, high: int) -> int:
        """Draw a uniform integer in [low, high], both inclusive."""
        self._ensure_available()
        _check_range(low, high)
        return self._randint(low, high)

    def gen_bool(self) -> bool:
        self._ensure_available()
        return self._gen_bool()

    def gen_weighted_bool(self, n: int) -> bool:
        """Return True with probability 1/n; always True for n <= 1."""
        self._ensure_available()
        return self._gen_weighted_bool(n)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seed={self.seed})"


class PyRandomSource(RandomSource):
    """Random source backed by `random.Random`."""

    def __init__(self, seed: int | None = None) -> None:
        super().__init__(seed)
        self.rng = random.Random(seed)

    def _next_u32(self) -> int:
        return self.rng.getrandbits(32)

    def _next_u64(self) -> int:
        return self.rng.getrandbits(64)

    def _fill_bytes(self, dest: bytearray) -> None:
        dest[:] = self.rng.randbytes(len(dest))

    def _randint(self, low: int, high: int) -> int:
        return self.rng.randint(low, high)

    def _gen_bool(self) -> bool:
        return self.rng.getrandbits(1) == 1


class NumpyRandomSource(RandomSource):
    """Random source backed by `numpy.random.Generator`."""

    def __init__(self, seed: int | None = None) -> None:
        super().__init__(seed)
        self.rng = np.random.default_rng(seed)

    def _next_u32(self) -> int:
        return int(self.rng.integers(0, 1 << 32, dtype=np.uint64))

    def _next_u64(self) -> int:
        return int(self.rng.bit_generator.random_raw())

    def _fill_bytes(self, dest: bytearray) -> None:
        dest[:] = self.rng.bytes(len(dest))

    def _randint(self, low: int, high: int) -> int:
        return int(self.rng.integers(low, high, endpoint=True))

    def _gen_bool(self) -> bool:
        return bool(self.rng.integers(0, 2))


class SourceLease:
    """Exclusive handle on a borrowed `RandomSource`.

    Forwards every `RandomStream` call to the source. Usable as a context
    manager; leaving the block releases the source.
    """

    def __init__(self, source: RandomSource) -> None:
        self._source: RandomSource | None = source

    @property
    def released(self) -> bool:
        return self._source is None

    @property
    def source(self) -> RandomSource:
        """The borrowed source.

        Raises:
            LeaseReleasedError: If the lease was already released.
        """
        if self._source is None:
            raise LeaseReleasedError("Random source lease has been released")
        return self._source

    def release(self) -> RandomSource | None:
        """Hand the source back. Safe to call more than once."""
        source, self._source = self._source, None
        if source is not None:
            source._return()
        return source

    def next_u32(self) -> int:
        return self.source._next_u32()

    def next_u64(self) -> int:
        return self.source._next_u64()

    def fill_bytes(self, dest: bytearray) -> None:
        self.source._fill_bytes(dest)

    def randint(self, low: int, high: int) -> int:
        _check_range(low, high)
        return self.source._randint(low, high)

    def gen_bool(self) -> bool:
        return self.source._gen_bool()

    def gen_weighted_bool(self, n: int) -> bool:
        return self.source._gen_weighted_bool(n)

    def __enter__(self) -> "SourceLease":
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()

    def __copy__(self):
        raise TypeError("SourceLease cannot be copied; it holds an exclusive borrow")

    def __deepcopy__(self, memo):
        raise TypeError("SourceLease cannot be copied; it holds an exclusive borrow")

    def __reduce__(self):
        raise TypeError("SourceLease cannot be pickled; it holds an exclusive borrow")

    def __repr__(self) -> str:
        state = "released" if self._source is None else repr(self._source)
        return f"SourceLease({state})"


def _check_range(low: int, high: int) -> None:
    if low > high:
        raise ValueError(f"randint range is empty: low ({low}) > high ({high})")
