"""@safe and @safe_async decorators for turning exceptions into Err."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, overload

import wrapt

from waymark.config import CallerInfo
from waymark.result import Result

__all__ = ['safe', 'safe_async']


def _keep_exception(exc: Exception) -> Exception:
    return exc


def _caller_for(wrapped: Callable[..., Any]) -> CallerInfo:
    code = getattr(wrapped, '__code__', None)
    return CallerInfo(
        member_name=getattr(wrapped, '__qualname__', repr(wrapped)),
        argument_expression=getattr(wrapped, '__name__', repr(wrapped)),
        line_number=code.co_firstlineno if code is not None else 0,
    )


@overload
def safe[**P, T](
    func: Callable[P, T],
) -> Callable[P, Result[T, Exception]]: ...


@overload
def safe[**P, T, E](
    func: None = None,
    *,
    on_error: Callable[[Exception], E],
) -> Callable[[Callable[P, T]], Callable[P, Result[T, E]]]: ...


def safe[**P, T](
    func: Callable[P, T] | None = None,
    *,
    on_error: Callable[[Exception], Any] = _keep_exception,
) -> Any:
    """Decorator that catches exceptions and returns Err.

    Wraps a function so that it returns Ok(value) on success and
    Err(on_error(exception)) if an ``Exception`` is raised. Calls go through
    ``Result.try_``, so swallowed exceptions are logged and reported to the
    configured exception logger.

    Can be used with or without arguments:
        @safe
        def risky(): ...

        @safe(on_error=Error.from_exception)
        def structured(): ...

    Args:
        func: The function to wrap (when used without parentheses).
        on_error: Projects the caught exception into the Err payload.
            Defaults to keeping the exception itself.

    Returns:
        A wrapped function that returns Result[T, E] instead of T.

    Example:
        ```python
        @safe
        def divide(a: int, b: int) -> float:
            return a / b
        divide(10, 2)
        # Ok(value=5.0)
        divide(10, 0)
        # Err(error=ZeroDivisionError('division by zero'))
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[P, T],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Result[T, Any]:
        return Result.try_(
            lambda: wrapped(*args, **kwargs),
            on_error,
            caller=_caller_for(wrapped),
        )

    if func is not None:
        return wrapper(func)
    return wrapper


@overload
def safe_async[**P, T](
    func: Callable[P, Awaitable[T]],
) -> Callable[P, Awaitable[Result[T, Exception]]]: ...


@overload
def safe_async[**P, T, E](
    func: None = None,
    *,
    on_error: Callable[[Exception], E],
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[Result[T, E]]]]: ...


def safe_async[**P, T](
    func: Callable[P, Awaitable[T]] | None = None,
    *,
    on_error: Callable[[Exception], Any] = _keep_exception,
) -> Any:
    """Async decorator that catches exceptions and returns Err.

    The async counterpart of :func:`safe`, routed through
    ``Result.try_async``. Task cancellation is never converted into an Err.

    Example:
        ```python
        @safe_async
        async def fetch(url: str) -> str:
            # may raise
            return await http_get(url)
        ```
    """

    @wrapt.decorator
    async def wrapper(
        wrapped: Callable[P, Awaitable[T]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Result[T, Any]:
        return await Result.try_async(
            lambda: wrapped(*args, **kwargs),
            on_error,
            caller=_caller_for(wrapped),
        )

    if func is not None:
        return wrapper(func)
    return wrapper
