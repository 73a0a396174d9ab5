"""Pull-based lazy sequences that yield Options.

``Iter`` wraps any iterable and hands its elements out one at a time as
``Option`` values. Adapters (``map``, ``filter``, ``chain``, ``cycle`` ...)
wrap an ``Iter`` in another ``Iter`` and only pull from their source when
they are pulled themselves.

Two kinds of ``Nothing`` can come out of ``next()``:

- exhaustion: the source has no more elements;
- holes: the source held a default-equivalent raw value (``0``, ``None``
  ...) or an explicit ``Nothing``.

Python iteration (``for option in it``) yields holes and stops at
exhaustion. Terminal operations such as ``collect`` and ``fold`` skip
holes.

Example:
    ```python
    from waymark.iter import into_iter

    into_iter([1, 2, 3, 4]).filter(lambda x: x % 2 == 0).map(str).collect()
    # ['2', '4']

    into_iter([1, 2, 3]).cycle().take(7).collect()
    # [1, 2, 3, 1, 2, 3, 1]
    ```
"""

from __future__ import annotations

import copy
import sys
from collections.abc import Callable, Iterable, Iterator, Sized
from typing import TYPE_CHECKING, Any, Protocol, Self, runtime_checkable

from waymark.iter.ordering import Ordering
from waymark.option import Nothing, Option, Some

if TYPE_CHECKING:
    from waymark.iter.adapters import (
        Chain,
        Cloned,
        Copied,
        Cycle,
        Enumerate,
        Filter,
        FilterMap,
        FlatMap,
        Flatten,
        Fuse,
        Inspect,
        Map,
        Take,
    )

__all__ = ['MAX_SIZE', 'Cloneable', 'Iter', 'SizeHint', 'clone_value', 'into_iter']

MAX_SIZE = sys.maxsize

type SizeHint = tuple[int, Option[int]]

_MISSING: Any = object()
_HOLE: Any = object()


@runtime_checkable
class Cloneable(Protocol):
    """Elements that know how to duplicate themselves."""

    def clone(self) -> Self: ...


def clone_value[T](value: T) -> T:
    """Duplicate ``value`` via ``clone()`` if it has one, else ``copy.deepcopy``."""
    if isinstance(value, Cloneable):
        return value.clone()
    return copy.deepcopy(value)


def _compare_elements(left: Any, right: Any) -> Ordering:
    if left is _HOLE or right is _HOLE:
        if left is right:
            return Ordering.EQUAL
        return Ordering.LESS if left is _HOLE else Ordering.GREATER
    return Ordering.of(left, right)


def into_iter[T](elements: Iterable[T] | Iter[T]) -> Iter[T]:
    """Return ``elements`` if it already is an Iter, otherwise wrap it."""
    if isinstance(elements, Iter):
        return elements
    return Iter(elements)


class Iter[T]:
    """A single-pass sequence whose ``next()`` returns ``Option[T]``.

    Raw source elements are converted with ``Option.of``; elements that are
    already Options pass through untouched.

    Subclasses implement ``_pull``, which returns the next Option (possibly a
    hole) or raises ``StopIteration`` once the source is exhausted.
    """

    __slots__ = ('_remaining', '_source')

    def __init__(self, elements: Iterable[T] = ()) -> None:
        self._source: Iterator[Any] = iter(elements)
        self._remaining: int | None = len(elements) if isinstance(elements, Sized) else None

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> Option[T]:
        return self._pull()

    def _next_item(self) -> Any:
        item = next(self._source)
        if self._remaining is not None:
            self._remaining -= 1
        return item

    def _pull(self) -> Option[T]:
        item = self._next_item()
        if isinstance(item, Option):
            return item
        return Option.of(item)

    def _pull_raw(self) -> Any:
        """Pull the next element without the default-value conversion.

        Raw zeros and ``False`` come back as themselves; ``None`` and
        explicit Nothing come back as the ``_HOLE`` marker.
        """
        item = self._next_item()
        if isinstance(item, Option):
            return item.value if isinstance(item, Some) else _HOLE
        return _HOLE if item is None else item

    def _raw_values(self) -> Iterator[Any]:
        while True:
            try:
                yield self._pull_raw()
            except StopIteration:
                return

    def _values(self) -> Iterator[T]:
        """Iterate the unwrapped values, skipping holes."""
        for option in self:
            if isinstance(option, Some):
                yield option.value

    def next(self) -> Option[T]:
        """Pull the next element; Nothing once the sequence is exhausted."""
        try:
            return self._pull()
        except StopIteration:
            return Nothing

    def size_hint(self) -> SizeHint:
        """Estimate the number of remaining pulls as ``(lower, upper)``.

        ``upper`` is Nothing when unknown. An exhausted sized source also
        reports Nothing, since ``Some`` cannot hold ``0``.
        """
        if self._remaining is None:
            return 0, Nothing
        return self._remaining, Option.of(self._remaining)

    # ------------------------------------------------------------------
    # adapters
    # ------------------------------------------------------------------

    def map[U](self, f: Callable[[T], U]) -> Map[T, U]:
        """Lazily apply ``f`` to every value; holes pass through."""
        from waymark.iter.adapters import Map

        return Map(self, f)

    def filter(self, predicate: Callable[[T], bool]) -> Filter[T]:
        """Keep values matching ``predicate``; holes are dropped."""
        from waymark.iter.adapters import Filter

        return Filter(self, predicate)

    def filter_map[U](self, f: Callable[[T], Option[U]]) -> FilterMap[T, U]:
        """Map through an Option-returning function, dropping Nothing results."""
        from waymark.iter.adapters import FilterMap

        return FilterMap(self, f)

    def flat_map[U](self, f: Callable[[T], Iterable[U]]) -> FlatMap[T, U]:
        """Map each value to a sequence and flatten one level."""
        from waymark.iter.adapters import FlatMap

        return FlatMap(self, f)

    def flatten(self) -> Flatten[Any]:
        """Flatten a sequence of sequences (or of Options) one level."""
        from waymark.iter.adapters import Flatten

        return Flatten(self)

    def chain(self, other: Iterable[T]) -> Chain[T]:
        """Yield everything from self, then everything from ``other``."""
        from waymark.iter.adapters import Chain

        return Chain(self, into_iter(other))

    def enumerate(self) -> Enumerate[T]:
        """Pair each value with its zero-based index; holes get no index."""
        from waymark.iter.adapters import Enumerate

        return Enumerate(self)

    def take(self, n: int) -> Take[T]:
        """Pull at most ``n`` times from the source, then stop for good."""
        from waymark.iter.adapters import Take

        return Take(self, n)

    def inspect(self, action: Callable[[T], object]) -> Inspect[T]:
        from waymark.iter.adapters import Inspect

        return Inspect(self, action)

    def cloned(self) -> Cloned[T]:
        """Yield deep duplicates (``clone()`` or ``copy.deepcopy``) of each value."""
        from waymark.iter.adapters import Cloned

        return Cloned(self)

    def copied(self) -> Copied[T]:
        """Yield shallow copies (``copy.copy``) of each value."""
        from waymark.iter.adapters import Copied

        return Copied(self)

    def cycle(self) -> Cycle[T]:
        """Repeat the sequence forever, replaying clones after the first pass."""
        from waymark.iter.adapters import Cycle

        return Cycle(self)

    def fuse(self) -> Fuse[T]:
        """Stop permanently after the first Nothing (hole or exhaustion)."""
        from waymark.iter.adapters import Fuse

        return Fuse(self)

    # ------------------------------------------------------------------
    # terminal operations
    # ------------------------------------------------------------------

    def collect[C](self, into: Callable[[Iterable[T]], C] = list) -> C:  # type: ignore[assignment]
        """Drain the sequence into a collection, skipping holes.

        Args:
            into: Collection constructor fed with the values. Defaults to list.

        Returns:
            The built collection.
        """
        return into(self._values())

    def fold[A](self, init: A, f: Callable[[A, T], A]) -> A:
        """Strict left fold over the values."""
        accumulator = init
        for value in self._values():
            accumulator = f(accumulator, value)
        return accumulator

    def all(self, predicate: Callable[[T], bool]) -> bool:
        """Short-circuiting; True for an empty sequence."""
        return all(predicate(value) for value in self._values())

    def any(self, predicate: Callable[[T], bool]) -> bool:
        """Short-circuiting; False for an empty sequence."""
        return any(predicate(value) for value in self._values())

    def count(self) -> int:
        """Consume the sequence and count its values."""
        return sum(1 for _ in self._values())

    def last(self) -> Option[T]:
        """Consume the sequence and return its last value."""
        last: Option[T] = Nothing
        for value in self._values():
            last = Some(value)
        return last

    def find(self, predicate: Callable[[T], bool]) -> Option[T]:
        """Return the first value matching ``predicate``."""
        for value in self._values():
            if predicate(value):
                return Some(value)
        return Nothing

    def find_map[U](self, f: Callable[[T], Option[U]]) -> Option[U]:
        """Return the first Some produced by ``f``."""
        for value in self._values():
            result = f(value)
            if result.is_some():
                return result
        return Nothing

    def for_each(self, action: Callable[[T], object]) -> None:
        for value in self._values():
            action(value)

    def compare(self, other: Iterable[T]) -> Ordering:
        """Compare lexicographically with ``other``.

        Elements are compared as they sit in the source, so ``0`` and
        ``False`` take part like any other value. Holes (``None``, Nothing,
        or values an adapter turned into Nothing) sort below every value and
        equal to each other. The first unequal pair decides. If one sequence
        is a prefix of the other, the shorter one is LESS; two empty
        sequences are EQUAL.

        Examples:
            >>> into_iter([1, 2]).compare([1, 3])
            <Ordering.LESS: -1>
            >>> into_iter([0, 1]).compare([1])
            <Ordering.LESS: -1>
            >>> into_iter([]).compare([0])
            <Ordering.LESS: -1>
            >>> into_iter([]).compare([])
            <Ordering.EQUAL: 0>
        """
        left = self._raw_values()
        right = into_iter(other)._raw_values()
        while True:
            mine = next(left, _MISSING)
            theirs = next(right, _MISSING)
            if mine is _MISSING:
                return Ordering.EQUAL if theirs is _MISSING else Ordering.LESS
            if theirs is _MISSING:
                return Ordering.GREATER
            ordering = _compare_elements(mine, theirs)
            if ordering is not Ordering.EQUAL:
                return ordering

    def lt(self, other: Iterable[T]) -> bool:
        return self.compare(other) is Ordering.LESS

    def le(self, other: Iterable[T]) -> bool:
        return self.compare(other) is not Ordering.GREATER

    def gt(self, other: Iterable[T]) -> bool:
        return self.compare(other) is Ordering.GREATER

    def ge(self, other: Iterable[T]) -> bool:
        return self.compare(other) is not Ordering.LESS

    def eq(self, other: Iterable[T]) -> bool:
        return self.compare(other) is Ordering.EQUAL

    def ne(self, other: Iterable[T]) -> bool:
        return self.compare(other) is not Ordering.EQUAL
