"""Helpers for plain iterables of Options.

These operate on any ``Iterable[Option[T]]`` (lists of lookups, generator
expressions ...) without wrapping it in an ``Iter`` first.

Example:
    ```python
    from waymark.sequences import first_or, map_options

    lookups = [Option.of(cache.get(key)) for key in keys]
    first_or(map_options(lookups, str.upper), lambda name: name.startswith('A'), 'NOBODY')
    ```
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

from waymark.option import Nothing, Option

__all__ = [
    'filter_options',
    'first_or',
    'first_or_else',
    'first_or_none',
    'last_or',
    'last_or_else',
    'last_or_none',
    'map_options',
]


def _always(_: object) -> bool:
    return True


def filter_options[T](options: Iterable[Option[T]], predicate: Callable[[T], bool]) -> Iterator[Option[T]]:
    """Lazily apply ``Option.filter`` to every element."""
    return (option.filter(predicate) for option in options)


def map_options[T, U](options: Iterable[Option[T]], f: Callable[[T], U]) -> Iterator[Option[U]]:
    """Lazily apply ``Option.map`` to every element."""
    return (option.map(f) for option in options)


def first_or_none[T](options: Iterable[Option[T]], predicate: Callable[[T], bool] = _always) -> Option[T]:
    """Return the first Some whose value matches ``predicate``, else Nothing.

    Stops consuming ``options`` at the first match.
    """
    for option in options:
        if option.is_some_and(predicate):
            return option
    return Nothing


def first_or[T](options: Iterable[Option[T]], predicate: Callable[[T], bool], default: T) -> T:
    return first_or_none(options, predicate).unwrap_or(default)


def first_or_else[T](options: Iterable[Option[T]], predicate: Callable[[T], bool], factory: Callable[[], T]) -> T:
    return first_or_none(options, predicate).unwrap_or_else(factory)


def last_or_none[T](options: Iterable[Option[T]], predicate: Callable[[T], bool] = _always) -> Option[T]:
    """Return the last Some whose value matches ``predicate``, else Nothing."""
    last: Option[T] = Nothing
    for option in options:
        if option.is_some_and(predicate):
            last = option
    return last


def last_or[T](options: Iterable[Option[T]], predicate: Callable[[T], bool], default: T) -> T:
    return last_or_none(options, predicate).unwrap_or(default)


def last_or_else[T](options: Iterable[Option[T]], predicate: Callable[[T], bool], factory: Callable[[], T]) -> T:
    return last_or_none(options, predicate).unwrap_or_else(factory)
