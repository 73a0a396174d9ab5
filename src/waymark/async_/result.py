"""AsyncResult type for async-aware Result operations.

AsyncResult wraps an Awaitable[Result[T, E]] and provides async-aware
transformation methods that compose cleanly in async contexts.

Example:
    ```python
    async def fetch_user(id: int) -> Result[User, Error]:
        ...

    # Chain async operations
    result = await (
        AsyncResult(fetch_user(1))
        .aand_then(validate_user)
        .amap(format_response)
    )
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Coroutine, Generator
from typing import TYPE_CHECKING, Any

from waymark._internal.aio import discard
from waymark.result import Err, Ok, Result

if TYPE_CHECKING:
    from waymark.async_.option import AsyncOption
    from waymark.option import Option

__all__ = ['AsyncResult']


class AsyncResult[T, E]:
    """Async-aware Result wrapper for composing async Result operations.

    AsyncResult holds an Awaitable[Result[T, E]] and provides methods
    for transforming and chaining async operations that produce Results.
    Each ``a*`` method returns a new AsyncResult (or a coroutine for the
    terminal ones); nothing runs until the chain is awaited, and steps run
    strictly one after another.

    Note:
        AsyncResult is single-shot when wrapping a coroutine object.
        Coroutines can only be awaited once; awaiting the same AsyncResult
        multiple times will raise RuntimeError. Use from_ok/from_err/from_result
        for reusable values, or wrap a Task/Future for multi-await scenarios.

    Example:
        ```python
        async def get_data() -> Result[int, str]:
            return Ok(42)

        async def main():
            result = await AsyncResult(get_data()).amap(lambda x: x * 2)
            assert result == Ok(84)
        ```
    """

    __slots__ = ('_awaitable',)

    def __init__(self, awaitable: Awaitable[Result[T, E]]) -> None:
        """Create an AsyncResult from an awaitable.

        Args:
            awaitable: An awaitable that produces a Result[T, E].
        """
        self._awaitable = awaitable

    def __await__(self) -> Generator[Any, Any, Result[T, E]]:
        return self._awaitable.__await__()

    def close(self) -> None:
        """Release the wrapped awaitable without running it."""
        discard(self._awaitable)

    @classmethod
    def from_ok(cls, value: T) -> AsyncResult[T, E]:
        """Create an AsyncResult containing Ok(value)."""

        async def _ok() -> Result[T, E]:
            return Ok(value)

        return cls(_ok())

    @classmethod
    def from_err(cls, error: E) -> AsyncResult[T, E]:
        """Create an AsyncResult containing Err(error)."""

        async def _err() -> Result[T, E]:
            return Err(error)

        return cls(_err())

    @classmethod
    def from_result(cls, result: Result[T, E]) -> AsyncResult[T, E]:
        """Create an AsyncResult from a synchronous Result."""

        async def _result() -> Result[T, E]:
            return result

        return cls(_result())

    def amap[U](self, f: Callable[[T], U]) -> AsyncResult[U, E]:
        """Apply a sync function to the Ok value.

        Args:
            f: Sync function to apply to the Ok value.

        Returns:
            New AsyncResult with the transformed value.

        Example:
            ```python
            result = await AsyncResult.from_ok(5).amap(lambda x: x * 2)
            assert result == Ok(10)
            ```
        """

        async def _mapped() -> Result[U, E]:
            return (await self._awaitable).map(f)

        return AsyncResult(_mapped())

    def amap_async[U](self, f: Callable[[T], Awaitable[U]]) -> AsyncResult[U, E]:
        """Apply an async function to the Ok value.

        ``f`` is only awaited when the underlying Result is Ok.
        """

        async def _mapped() -> Result[U, E]:
            return await (await self._awaitable).map_async(f)

        return AsyncResult(_mapped())

    def amap_err[F](self, f: Callable[[E], F]) -> AsyncResult[T, F]:
        """Apply a sync function to the Err value."""

        async def _mapped() -> Result[T, F]:
            return (await self._awaitable).map_err(f)

        return AsyncResult(_mapped())

    def amap_err_async[F](self, f: Callable[[E], Awaitable[F]]) -> AsyncResult[T, F]:
        """Apply an async function to the Err value."""

        async def _mapped() -> Result[T, F]:
            return await (await self._awaitable).map_err_async(f)

        return AsyncResult(_mapped())

    def aand_then[U](self, f: Callable[[T], Result[U, E]]) -> AsyncResult[U, E]:
        """Chain with a sync function that returns a Result.

        Example:
            ```python
            def validate(x: int) -> Result[int, str]:
                return Ok(x) if x > 0 else Err('not positive')

            result = await AsyncResult.from_ok(5).aand_then(validate)
            assert result == Ok(5)
            ```
        """

        async def _chained() -> Result[U, E]:
            return (await self._awaitable).and_then(f)

        return AsyncResult(_chained())

    def aand_then_async[U](self, f: Callable[[T], Awaitable[Result[U, E]]]) -> AsyncResult[U, E]:
        """Chain with an async function that returns a Result."""

        async def _chained() -> Result[U, E]:
            return await (await self._awaitable).and_then_async(f)

        return AsyncResult(_chained())

    def aor_else[F](self, f: Callable[[E], Result[T, F]]) -> AsyncResult[T, F]:
        """Recover from an Err with a sync function."""

        async def _recovered() -> Result[T, F]:
            return (await self._awaitable).or_else(f)

        return AsyncResult(_recovered())

    def aor_else_async[F](self, f: Callable[[E], Awaitable[Result[T, F]]]) -> AsyncResult[T, F]:
        """Recover from an Err with an async function."""

        async def _recovered() -> Result[T, F]:
            return await (await self._awaitable).or_else_async(f)

        return AsyncResult(_recovered())

    def ainspect(self, action: Callable[[T], object]) -> AsyncResult[T, E]:
        """Call ``action`` with the Ok value, passing the Result through."""

        async def _inspected() -> Result[T, E]:
            return (await self._awaitable).inspect(action)

        return AsyncResult(_inspected())

    def ainspect_err(self, action: Callable[[E], object]) -> AsyncResult[T, E]:
        """Call ``action`` with the Err value, passing the Result through."""

        async def _inspected() -> Result[T, E]:
            return (await self._awaitable).inspect_err(action)

        return AsyncResult(_inspected())

    def aflatten(self) -> AsyncResult[Any, E]:
        """Collapse ``Ok(Result)`` one level."""

        async def _flattened() -> Result[Any, E]:
            return (await self._awaitable).flatten()

        return AsyncResult(_flattened())

    def atranspose(self) -> AsyncOption[Result[Any, E]]:
        """Transpose ``Result[Option]`` into ``Option[Result]``."""
        from waymark.async_.option import AsyncOption

        async def _transposed() -> Option[Result[Any, E]]:
            return (await self._awaitable).transpose()

        return AsyncOption(_transposed())

    def amatch[U](self, on_ok: Callable[[T], U], on_err: Callable[[E], U]) -> Coroutine[Any, Any, U]:
        """Await the Result and fold it with one of two sync branches."""

        async def _matched() -> U:
            return (await self._awaitable).match(on_ok, on_err)

        return _matched()

    def aunwrap_or(self, default: T) -> Coroutine[Any, Any, T]:
        """Unwrap with a default value."""

        async def _unwrap() -> T:
            return (await self._awaitable).unwrap_or(default)

        return _unwrap()

    def aunwrap_or_else(self, f: Callable[[E], T]) -> Coroutine[Any, Any, T]:
        """Unwrap with a function computing the fallback from the error."""

        async def _unwrap() -> T:
            return (await self._awaitable).unwrap_or_else(f)

        return _unwrap()

    def aunwrap_or_else_async(self, f: Callable[[E], Awaitable[T]]) -> Coroutine[Any, Any, T]:
        async def _unwrap() -> T:
            return await (await self._awaitable).unwrap_or_else_async(f)

        return _unwrap()

    def aok(self) -> AsyncOption[T]:
        """Keep the Ok value as an Option, discarding any error."""
        from waymark.async_.option import AsyncOption

        async def _ok() -> Option[T]:
            return (await self._awaitable).get_ok()

        return AsyncOption(_ok())

    def aerr(self) -> AsyncOption[E]:
        """Keep the Err value as an Option, discarding any success."""
        from waymark.async_.option import AsyncOption

        async def _err() -> Option[E]:
            return (await self._awaitable).get_err()

        return AsyncOption(_err())

    def azip[U](self, other: Awaitable[Result[U, E]]) -> AsyncResult[tuple[T, U], E]:
        """Pair this Ok value with another's.

        ``self`` is awaited first; ``other`` is only awaited when ``self`` is
        Ok; a skipped coroutine is closed. The first Err wins.

        Args:
            other: Awaitable producing the second Result.

        Returns:
            AsyncResult of ``Ok((a, b))`` or the first Err.
        """

        async def _zipped() -> Result[tuple[T, U], E]:
            first = await self._awaitable
            if isinstance(first, Err):
                discard(other)
                return first
            second = await other
            if isinstance(second, Err):
                return second
            return Ok((first.value, second.value))  # type: ignore[union-attr]

        return AsyncResult(_zipped())
