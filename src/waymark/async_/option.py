"""AsyncOption type for async-aware Option operations.

The Option counterpart of ``AsyncResult``: wrap the awaitable, chain
``a*`` methods, await once at the end.

Example:
    ```python
    async def find_user(name: str) -> Option[User]:
        ...

    email = await (
        AsyncOption(find_user('ada'))
        .afilter(lambda user: user.active)
        .amap(lambda user: user.email)
        .aunwrap_or('[unknown]')
    )
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Coroutine, Generator
from typing import TYPE_CHECKING, Any

from waymark._internal.aio import discard
from waymark.option import Nothing, Option

if TYPE_CHECKING:
    from waymark.async_.result import AsyncResult
    from waymark.result import Result

__all__ = ['AsyncOption']


class AsyncOption[T]:
    """Async-aware Option wrapper for composing async Option operations.

    Note:
        Like AsyncResult, an AsyncOption wrapping a coroutine can only be
        awaited once.
    """

    __slots__ = ('_awaitable',)

    def __init__(self, awaitable: Awaitable[Option[T]]) -> None:
        self._awaitable = awaitable

    def __await__(self) -> Generator[Any, Any, Option[T]]:
        return self._awaitable.__await__()

    def close(self) -> None:
        """Release the wrapped awaitable without running it."""
        discard(self._awaitable)

    @classmethod
    def from_some(cls, value: T) -> AsyncOption[T]:
        """Create an AsyncOption containing ``Option.some(value)``."""

        async def _some() -> Option[T]:
            return Option.some(value)

        return cls(_some())

    @classmethod
    def from_nothing(cls) -> AsyncOption[T]:
        async def _nothing() -> Option[T]:
            return Nothing

        return cls(_nothing())

    @classmethod
    def from_option(cls, option: Option[T]) -> AsyncOption[T]:
        """Create an AsyncOption from a synchronous Option."""

        async def _option() -> Option[T]:
            return option

        return cls(_option())

    def amap[U](self, f: Callable[[T], U]) -> AsyncOption[U]:
        """Apply a sync function to the Some value.

        Example:
            ```python
            option = await AsyncOption.from_some(5).amap(lambda x: x * 2)
            assert option == Some(10)
            ```
        """

        async def _mapped() -> Option[U]:
            return (await self._awaitable).map(f)

        return AsyncOption(_mapped())

    def amap_async[U](self, f: Callable[[T], Awaitable[U]]) -> AsyncOption[U]:
        """Apply an async function to the Some value; Nothing never awaits ``f``."""

        async def _mapped() -> Option[U]:
            return await (await self._awaitable).map_async(f)

        return AsyncOption(_mapped())

    def aand_then[U](self, f: Callable[[T], Option[U]]) -> AsyncOption[U]:
        async def _chained() -> Option[U]:
            return (await self._awaitable).and_then(f)

        return AsyncOption(_chained())

    def aand_then_async[U](self, f: Callable[[T], Awaitable[Option[U]]]) -> AsyncOption[U]:
        async def _chained() -> Option[U]:
            return await (await self._awaitable).and_then_async(f)

        return AsyncOption(_chained())

    def afilter(self, predicate: Callable[[T], bool]) -> AsyncOption[T]:
        async def _filtered() -> Option[T]:
            return (await self._awaitable).filter(predicate)

        return AsyncOption(_filtered())

    def afilter_async(self, predicate: Callable[[T], Awaitable[bool]]) -> AsyncOption[T]:
        async def _filtered() -> Option[T]:
            return await (await self._awaitable).filter_async(predicate)

        return AsyncOption(_filtered())

    def ainspect(self, action: Callable[[T], object]) -> AsyncOption[T]:
        async def _inspected() -> Option[T]:
            return (await self._awaitable).inspect(action)

        return AsyncOption(_inspected())

    def aor_else(self, factory: Callable[[], Option[T]]) -> AsyncOption[T]:
        """Fall back to ``factory()`` when the Option is Nothing."""

        async def _recovered() -> Option[T]:
            return (await self._awaitable).or_else(factory)

        return AsyncOption(_recovered())

    def aor_else_async(self, factory: Callable[[], Awaitable[Option[T]]]) -> AsyncOption[T]:
        async def _recovered() -> Option[T]:
            return await (await self._awaitable).or_else_async(factory)

        return AsyncOption(_recovered())

    def aflatten(self) -> AsyncOption[Any]:
        """Collapse ``Some(Option)`` one level."""

        async def _flattened() -> Option[Any]:
            return (await self._awaitable).flatten()

        return AsyncOption(_flattened())

    def atranspose(self) -> AsyncResult[Option[Any], Any]:
        """Transpose ``Option[Result]`` into ``Result[Option]``."""
        from waymark.async_.result import AsyncResult

        async def _transposed() -> Result[Option[Any], Any]:
            return (await self._awaitable).transpose()

        return AsyncResult(_transposed())

    def aok_or[E](self, error: E) -> AsyncResult[T, E]:
        """Convert to an AsyncResult, using ``error`` for Nothing."""
        from waymark.async_.result import AsyncResult

        async def _converted() -> Result[T, E]:
            return (await self._awaitable).ok_or(error)

        return AsyncResult(_converted())

    def aok_or_else[E](self, factory: Callable[[], E]) -> AsyncResult[T, E]:
        from waymark.async_.result import AsyncResult

        async def _converted() -> Result[T, E]:
            return (await self._awaitable).ok_or_else(factory)

        return AsyncResult(_converted())

    def azip[U](self, other: Awaitable[Option[U]]) -> AsyncOption[tuple[T, U]]:
        """Pair this Some value with another's.

        ``other`` is only awaited when ``self`` turns out to be Some; a skipped
        coroutine is closed.
        """

        async def _zipped() -> Option[tuple[T, U]]:
            first = await self._awaitable
            if first.is_none():
                discard(other)
                return Nothing
            return first.zip(await other)

        return AsyncOption(_zipped())

    def azip_with[U, R](self, other: Awaitable[Option[U]], combine: Callable[[T, U], R]) -> AsyncOption[R]:
        async def _zipped() -> Option[R]:
            first = await self._awaitable
            if first.is_none():
                discard(other)
                return Nothing
            return first.zip_with(await other, combine)

        return AsyncOption(_zipped())

    def amatch[U](self, on_some: Callable[[T], U], on_none: Callable[[], U]) -> Coroutine[Any, Any, U]:
        """Await the Option and fold it with one of two sync branches."""

        async def _matched() -> U:
            return (await self._awaitable).match(on_some, on_none)

        return _matched()

    def aunwrap_or(self, default: T) -> Coroutine[Any, Any, T]:
        async def _unwrap() -> T:
            return (await self._awaitable).unwrap_or(default)

        return _unwrap()

    def aunwrap_or_else(self, factory: Callable[[], T]) -> Coroutine[Any, Any, T]:
        async def _unwrap() -> T:
            return (await self._awaitable).unwrap_or_else(factory)

        return _unwrap()

    def aunwrap_or_else_async(self, factory: Callable[[], Awaitable[T]]) -> Coroutine[Any, Any, T]:
        async def _unwrap() -> T:
            return await (await self._awaitable).unwrap_or_else_async(factory)

        return _unwrap()
