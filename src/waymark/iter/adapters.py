"""Lazy adapters returned by the ``Iter`` combinator methods.

Each adapter owns its upstream ``Iter`` and pulls from it only when it is
pulled itself. Callback exceptions propagate unchanged, except that a
StopIteration escaping a callback is re-raised as RuntimeError so it
cannot pass for exhaustion.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterable
from typing import Any

from waymark.iter.base import _HOLE, MAX_SIZE, Iter, SizeHint, clone_value, into_iter
from waymark.option import Nothing, NothingType, Option, Some

__all__ = [
    'Chain',
    'Cloned',
    'Copied',
    'Cycle',
    'Enumerate',
    'Filter',
    'FilterMap',
    'FlatMap',
    'Flatten',
    'Fuse',
    'Inspect',
    'Map',
    'Take',
]


def _guarded[**P, R](f: Callable[P, R]) -> Callable[P, R]:
    """Re-raise a StopIteration escaping ``f`` as RuntimeError.

    Adapters signal exhaustion with StopIteration, so one leaking out of a
    user callback would otherwise end the sequence silently.
    """

    def call(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return f(*args, **kwargs)
        except StopIteration as exc:
            msg = f'{getattr(f, "__qualname__", repr(f))} raised StopIteration'
            raise RuntimeError(msg) from exc

    return call


_clone = _guarded(clone_value)
_copy = _guarded(copy.copy)


def _add_bounds(left: SizeHint, right: SizeHint) -> SizeHint:
    lower = min(left[0] + right[0], MAX_SIZE)
    match left[1], right[1]:
        case Some(a), Some(b):
            return lower, Option.of(min(a + b, MAX_SIZE))
        case _:
            return lower, Nothing


class _Adapter[T](Iter[T]):
    """Base for adapters: raw pulls come from ``_pull``, holes stay holes."""

    __slots__ = ()

    def _pull_raw(self) -> Any:
        option = self._pull()
        return option.value if isinstance(option, Some) else _HOLE


class Map[T, U](_Adapter[U]):
    """Applies ``f`` to each value. Holes pass through unchanged."""

    __slots__ = ('_f',)

    def __init__(self, source: Iter[T], f: Callable[[T], U]) -> None:
        self._source = source
        self._f = _guarded(f)

    def _pull(self) -> Option[U]:
        return self._source._pull().map(self._f)

    def size_hint(self) -> SizeHint:
        return self._source.size_hint()


class Filter[T](_Adapter[T]):
    """Yields only values satisfying the predicate."""

    __slots__ = ('_predicate',)

    def __init__(self, source: Iter[T], predicate: Callable[[T], bool]) -> None:
        self._source = source
        self._predicate = _guarded(predicate)

    def _pull(self) -> Option[T]:
        while True:
            option = self._source._pull()
            if option.is_some_and(self._predicate):
                return option

    def size_hint(self) -> SizeHint:
        return 0, self._source.size_hint()[1]


class FilterMap[T, U](_Adapter[U]):
    """Maps through an Option-returning function and skips Nothing results."""

    __slots__ = ('_f',)

    def __init__(self, source: Iter[T], f: Callable[[T], Option[U]]) -> None:
        self._source = source
        self._f = _guarded(f)

    def _pull(self) -> Option[U]:
        while True:
            result = self._source._pull().and_then(self._f)
            if result.is_some():
                return result

    def size_hint(self) -> SizeHint:
        return 0, self._source.size_hint()[1]


class FlatMap[T, U](_Adapter[U]):
    """Maps each value to a sequence and yields that sequence's values.

    Holes in the outer and inner sequences are skipped.
    """

    __slots__ = ('_f', '_inner')

    def __init__(self, source: Iter[T], f: Callable[[T], Iterable[U]]) -> None:
        self._source = source
        self._f = _guarded(f)
        self._inner: Iter[U] | None = None

    def _pull(self) -> Option[U]:
        while True:
            if self._inner is not None:
                try:
                    option = self._inner._pull()
                except StopIteration:
                    self._inner = None
                else:
                    if option.is_some():
                        return option
                    continue

            outer = self._source._pull()
            if isinstance(outer, Some):
                self._inner = into_iter(self._f(outer.value))

    def size_hint(self) -> SizeHint:
        if self._inner is None:
            return 0, Nothing
        return self._inner.size_hint()[0], Nothing


def _as_sequence(value: Any) -> Iterable[Any]:
    if isinstance(value, Option):
        return (value,)
    return value


class Flatten[T](FlatMap[Any, T]):
    """Removes one level of nesting from a sequence of sequences.

    Option elements count as sequences of zero or one value.
    """

    __slots__ = ()

    def __init__(self, source: Iter[Any]) -> None:
        super().__init__(source, _as_sequence)


class Chain[T](_Adapter[T]):
    """Exhausts the first sequence, then the second."""

    __slots__ = ('_first', '_second')

    def __init__(self, first: Iter[T], second: Iter[T]) -> None:
        self._first: Iter[T] | None = first
        self._second = second

    def _pull(self) -> Option[T]:
        if self._first is not None:
            try:
                return self._first._pull()
            except StopIteration:
                self._first = None
        return self._second._pull()

    def _pull_raw(self) -> Any:
        if self._first is not None:
            try:
                return self._first._pull_raw()
            except StopIteration:
                self._first = None
        return self._second._pull_raw()

    def size_hint(self) -> SizeHint:
        if self._first is None:
            return self._second.size_hint()
        return _add_bounds(self._first.size_hint(), self._second.size_hint())


class Enumerate[T](_Adapter[tuple[int, T]]):
    """Pairs each value with its zero-based index.

    Holes pass through and do not consume an index.
    """

    __slots__ = ('_index',)

    def __init__(self, source: Iter[T]) -> None:
        self._source = source
        self._index = 0

    def _pull(self) -> Option[tuple[int, T]]:
        option = self._source._pull()
        if isinstance(option, NothingType):
            return option
        pair = (self._index, option.value)
        self._index += 1
        return Some(pair)

    def size_hint(self) -> SizeHint:
        return self._source.size_hint()


class Take[T](_Adapter[T]):
    """Pulls at most ``n`` times, holes included, then stays exhausted."""

    __slots__ = ('_left',)

    def __init__(self, source: Iter[T], n: int) -> None:
        self._source = source
        self._left = max(n, 0)

    def _pull(self) -> Option[T]:
        if self._left <= 0:
            raise StopIteration
        self._left -= 1
        return self._source._pull()

    def _pull_raw(self) -> Any:
        if self._left <= 0:
            raise StopIteration
        self._left -= 1
        return self._source._pull_raw()

    def size_hint(self) -> SizeHint:
        if self._left <= 0:
            return 0, Nothing
        lower, upper = self._source.size_hint()
        bound = upper.map_or(self._left, lambda size: min(size, self._left))
        return min(lower, self._left), Option.of(bound)


class Inspect[T](_Adapter[T]):
    """Calls ``action`` on each value as it passes through."""

    __slots__ = ('_action',)

    def __init__(self, source: Iter[T], action: Callable[[T], object]) -> None:
        self._source = source
        self._action = _guarded(action)

    def _pull(self) -> Option[T]:
        return self._source._pull().inspect(self._action)

    def size_hint(self) -> SizeHint:
        return self._source.size_hint()


class Cloned[T](_Adapter[T]):
    """Yields clones so callers cannot mutate the source's elements."""

    __slots__ = ()

    def __init__(self, source: Iter[T]) -> None:
        self._source = source

    def _pull(self) -> Option[T]:
        option = self._source._pull()
        if isinstance(option, Some):
            return Some(_clone(option.value))
        return option

    def size_hint(self) -> SizeHint:
        return self._source.size_hint()


class Copied[T](Cloned[T]):
    """Yields shallow copies of the source's elements."""

    __slots__ = ()

    def _pull(self) -> Option[T]:
        option = self._source._pull()
        if isinstance(option, Some):
            return Some(_copy(option.value))
        return option


class Cycle[T](_Adapter[T]):
    """Repeats the sequence endlessly.

    The first pass yields the source's own elements and remembers them;
    every later pass yields fresh clones. An empty source stays empty.
    """

    __slots__ = ('_position', '_seen', '_source_done')

    def __init__(self, source: Iter[T]) -> None:
        self._source = source
        self._seen: list[Option[T]] = []
        self._source_done = False
        self._position = 0

    def _pull(self) -> Option[T]:
        if not self._source_done:
            try:
                option = self._source._pull()
            except StopIteration:
                self._source_done = True
            else:
                self._seen.append(option)
                return option

        if not self._seen:
            raise StopIteration
        option = self._seen[self._position]
        self._position = (self._position + 1) % len(self._seen)
        if isinstance(option, Some):
            return Some(_clone(option.value))
        return option

    def size_hint(self) -> SizeHint:
        if self._seen or self._source.size_hint()[0] > 0:
            return MAX_SIZE, Some(MAX_SIZE)
        if self._source_done:
            return 0, Nothing
        return self._source.size_hint()


class Fuse[T](_Adapter[T]):
    """Latches to Nothing after the first Nothing, hole or exhaustion."""

    __slots__ = ('_fused',)

    def __init__(self, source: Iter[T]) -> None:
        self._source = source
        self._fused = False

    def _pull(self) -> Option[T]:
        if self._fused:
            raise StopIteration
        try:
            option = self._source._pull()
        except StopIteration:
            self._fused = True
            raise
        if option.is_none():
            self._fused = True
        return option

    def size_hint(self) -> SizeHint:
        if self._fused:
            return 0, Nothing
        return self._source.size_hint()
