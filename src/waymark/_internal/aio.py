"""Helpers for awaitables that end up not being awaited."""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Any, Protocol, runtime_checkable

__all__ = ['SupportsClose', 'discard']


@runtime_checkable
class SupportsClose(Protocol):
    def close(self) -> object: ...


def discard(awaitable: Awaitable[Any]) -> None:
    """Release an awaitable that a short-circuit decided not to await.

    Coroutines (and the async wrappers around them) are closed so they are
    not reported as never awaited. Tasks and futures have no ``close`` and
    are left to their owner.
    """
    if isinstance(awaitable, SupportsClose):
        awaitable.close()
