"""Three-way comparison outcome used by ``Iter.compare``."""

from __future__ import annotations

from enum import IntEnum

__all__ = ['Ordering']


class Ordering(IntEnum):
    """Result of comparing two values (or sequences) lexicographically.

    The integer values match the sign convention of ``cmp``-style functions,
    so ``Ordering(-1) is Ordering.LESS``.
    """

    LESS = -1
    EQUAL = 0
    GREATER = 1

    @classmethod
    def of(cls, left: object, right: object) -> Ordering:
        """Compare two values using ``<`` only."""
        if left < right:  # type: ignore[operator]
            return cls.LESS
        if right < left:  # type: ignore[operator]
            return cls.GREATER
        return cls.EQUAL

    def reverse(self) -> Ordering:
        return Ordering(-self.value)
