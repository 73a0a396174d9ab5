"""Lazy, pull-based sequences yielding Options, with composable adapters."""

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
from waymark.iter.base import MAX_SIZE, Cloneable, Iter, SizeHint, clone_value, into_iter
from waymark.iter.ordering import Ordering

__all__ = [
    'MAX_SIZE',
    'Chain',
    'Cloneable',
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
    'Iter',
    'Map',
    'Ordering',
    'SizeHint',
    'Take',
    'clone_value',
    'into_iter',
]
