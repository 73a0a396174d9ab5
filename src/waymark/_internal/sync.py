"""Thread-safe lazy cells backed by aiologic.

aiologic locks work from threads and from async code alike, so the
process-wide options can be first touched from either without racing.
"""

from __future__ import annotations

from collections.abc import Callable

import aiologic

__all__ = ['Lazy']


class Lazy[T]:
    """A value computed on first access, at most once until reset.

    The initializer runs under an aiologic lock with a double check, so
    concurrent first readers all observe the same instance.

    Examples:
        >>> calls = []
        >>> lazy = Lazy(lambda: calls.append(1) or 'ready')
        >>> lazy.get()
        'ready'
        >>> lazy.get()
        'ready'
        >>> len(calls)
        1
    """

    __slots__ = ('_init', '_is_set', '_lock', '_value')

    def __init__(self, init: Callable[[], T]) -> None:
        self._init = init
        self._lock = aiologic.Lock()
        self._value: T | None = None
        self._is_set = False

    def get(self) -> T:
        """Return the value, running the initializer if needed."""
        if self._is_set:
            return self._value  # type: ignore[return-value]

        with self._lock:
            if not self._is_set:
                self._value = self._init()
                self._is_set = True
            return self._value  # type: ignore[return-value]

    def is_initialized(self) -> bool:
        """Check whether the initializer has already run."""
        return self._is_set

    def reset(self) -> None:
        """Drop the cached value so the next ``get`` re-initializes."""
        with self._lock:
            self._value = None
            self._is_set = False
