"""Result type: Ok[T] | Err[E] for fallible computations.

``Result`` is the explicit alternative to raising: the error travels in the
return value and callers decide what to do with it.

Example:
    ```python
    from waymark import Err, Error, Ok, Result

    def parse_port(raw: str) -> Result[int, Error]:
        return Result.try_(lambda: int(raw), Error.from_exception).and_then(
            lambda port: Ok(port) if 0 < port < 65536 else Err(Error('port.range', raw))
        )

    parse_port('8080')   # Ok(value=8080)
    parse_port('http')   # Err(error=Error(code=ErrorCode(value='ValueError'), ...))
    ```

Unlike ``Some``, ``Ok`` and ``Err`` accept any payload, default values
included.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import TYPE_CHECKING, Any, Never, TypeIs

import anyio
import msgspec

from waymark.config import CallerInfo, capture_caller, get_options
from waymark.exceptions import UnmetExpectationError, UnwrapPayloadError
from waymark.option import Nothing, NothingType, Option, Some

if TYPE_CHECKING:
    from anyio import CancelScope

__all__ = ['Err', 'Ok', 'Result', 'collect']


class Result[T, E]:
    """Success (``Ok``) or failure (``Err``) of an operation.

    ``Result`` itself is never instantiated; it carries the factories and the
    shared contract implemented by the two variants.
    """

    __slots__ = ()

    # ------------------------------------------------------------------
    # construction
    # ------------------------------------------------------------------

    @staticmethod
    def ok[U](value: U) -> Ok[U]:
        return Ok(value)

    @staticmethod
    def err[F](error: F) -> Err[F]:
        return Err(error)

    @staticmethod
    def try_[U, F](
        factory: Callable[[], U],
        on_error: Callable[[Exception], F],
        *,
        caller: CallerInfo | None = None,
    ) -> Result[U, F]:
        """Run ``factory`` and capture any exception as an Err.

        The caught exception is reported through ``MonadOptions.log`` (a
        structlog debug event, then the configured exception logger) and
        projected into the error domain with ``on_error``.

        Args:
            factory: Zero-argument callable producing the Ok value.
            on_error: Maps the caught exception to the Err payload.
            caller: Call-site metadata for diagnostics; captured from the
                stack when omitted.

        Returns:
            ``Ok(factory())`` or ``Err(on_error(exception))``.

        Examples:
            >>> Result.try_(lambda: 42, str)
            Ok(value=42)
            >>> Result.try_(lambda: 1 / 0, lambda e: type(e).__name__)
            Err(error='ZeroDivisionError')
        """
        try:
            value = factory()
        except Exception as exc:
            get_options().log(exc, caller or capture_caller())
            return Err(on_error(exc))
        return Ok(value)

    @staticmethod
    async def try_async[U, F](
        factory: Callable[..., Awaitable[U]],
        on_error: Callable[[Exception], F],
        cancellation: CancelScope | None = None,
        *,
        caller: CallerInfo | None = None,
    ) -> Result[U, F]:
        """Await ``factory`` and capture any exception as an Err.

        Args:
            factory: Async callable producing the Ok value. Called with
                ``cancellation`` as its only argument when one is given,
                otherwise with no arguments.
            on_error: Maps the caught exception to the Err payload.
            cancellation: Cancel scope forwarded to ``factory``. Observing it
                is the factory's responsibility.
            caller: Call-site metadata for diagnostics.

        Returns:
            ``Ok(await factory())`` or ``Err(on_error(exception))``.
        """
        try:
            if cancellation is None:
                value = await factory()
            else:
                value = await factory(cancellation)
        except anyio.get_cancelled_exc_class():
            raise
        except Exception as exc:
            get_options().log(exc, caller or capture_caller())
            return Err(on_error(exc))
        return Ok(value)

    # ------------------------------------------------------------------
    # contract implemented by Ok / Err
    # ------------------------------------------------------------------

    def is_ok(self) -> TypeIs[Ok[T]]: ...
    def is_err(self) -> TypeIs[Err[E]]: ...
    def is_ok_and(self, predicate: Callable[[T], bool]) -> bool: ...
    def is_err_and(self, predicate: Callable[[E], bool]) -> bool: ...
    def match[U](self, on_ok: Callable[[T], U], on_err: Callable[[E], U]) -> U: ...
    def expect(self, message: str) -> T: ...
    def expect_err(self, message: str) -> E: ...
    def unwrap(self) -> T: ...
    def unwrap_err(self) -> E: ...
    def unwrap_or(self, default: T) -> T: ...
    def unwrap_or_default(self, default_factory: Callable[[], T] | None = None) -> T | None: ...
    def unwrap_or_else(self, f: Callable[[E], T]) -> T: ...
    def map[U](self, f: Callable[[T], U]) -> Result[U, E]: ...
    def map_err[F](self, f: Callable[[E], F]) -> Result[T, F]: ...
    def map_or[U](self, default: U, f: Callable[[T], U]) -> U: ...
    def map_or_else[U](self, err_f: Callable[[E], U], ok_f: Callable[[T], U]) -> U: ...
    def inspect(self, action: Callable[[T], object]) -> Result[T, E]: ...
    def inspect_err(self, action: Callable[[E], object]) -> Result[T, E]: ...
    def and_[U](self, other: Result[U, E]) -> Result[U, E]: ...
    def and_then[U](self, f: Callable[[T], Result[U, E]]) -> Result[U, E]: ...
    def or_[F](self, other: Result[T, F]) -> Result[T, F]: ...
    def or_else[F](self, f: Callable[[E], Result[T, F]]) -> Result[T, F]: ...
    def get_ok(self) -> Option[T]: ...
    def get_err(self) -> Option[E]: ...
    def flatten(self) -> Result[Any, E]: ...
    def transpose(self) -> Option[Result[Any, E]]: ...

    async def is_ok_and_async(self, predicate: Callable[[T], Awaitable[bool]]) -> bool: ...
    async def is_err_and_async(self, predicate: Callable[[E], Awaitable[bool]]) -> bool: ...
    async def match_async[U](
        self,
        on_ok: Callable[[T], Awaitable[U]],
        on_err: Callable[[E], Awaitable[U]],
    ) -> U: ...
    async def unwrap_or_else_async(self, f: Callable[[E], Awaitable[T]]) -> T: ...
    async def map_async[U](self, f: Callable[[T], Awaitable[U]]) -> Result[U, E]: ...
    async def map_err_async[F](self, f: Callable[[E], Awaitable[F]]) -> Result[T, F]: ...
    async def map_or_async[U](self, default: U, f: Callable[[T], Awaitable[U]]) -> U: ...
    async def map_or_else_async[U](
        self,
        err_f: Callable[[E], Awaitable[U]],
        ok_f: Callable[[T], Awaitable[U]],
    ) -> U: ...
    async def inspect_async(self, action: Callable[[T], Awaitable[object]]) -> Result[T, E]: ...
    async def inspect_err_async(self, action: Callable[[E], Awaitable[object]]) -> Result[T, E]: ...
    async def and_then_async[U](self, f: Callable[[T], Awaitable[Result[U, E]]]) -> Result[U, E]: ...
    async def or_else_async[F](self, f: Callable[[E], Awaitable[Result[T, F]]]) -> Result[T, F]: ...


class Ok[T](msgspec.Struct, Result[T, Any], frozen=True, gc=False):
    """Success variant of Result containing a value of type T.

    Examples:
        >>> Ok(2).map(lambda x: x + 1)
        Ok(value=3)
        >>> Ok(2).map_err(str)
        Ok(value=2)
        >>> Ok(0).unwrap()
        0
    """

    value: T

    def is_ok(self) -> TypeIs[Ok[T]]:
        """Return True."""
        return True

    def is_err(self) -> TypeIs[Err[Any]]:
        """Return False."""
        return False

    def is_ok_and(self, predicate: Callable[[T], bool]) -> bool:
        """Return predicate(value)."""
        return predicate(self.value)

    def is_err_and(self, predicate: Callable[[Any], bool]) -> bool:  # noqa: ARG002
        """Return False without calling ``predicate``."""
        return False

    def match[U](self, on_ok: Callable[[T], U], on_err: Callable[[Any], U]) -> U:  # noqa: ARG002
        """Invoke ``on_ok`` with the value."""
        return on_ok(self.value)

    def expect(self, message: str) -> T:  # noqa: ARG002
        """Return the value; ``message`` is only used by Err."""
        return self.value

    def expect_err(self, message: str) -> Never:
        """Raise UnmetExpectationError with ``message`` and the Ok value."""
        raise UnmetExpectationError.for_payload(message, self.value)

    def unwrap(self) -> T:
        """Return the value."""
        return self.value

    def unwrap_err(self) -> Never:
        """Raise UnwrapPayloadError carrying the Ok value."""
        raise UnwrapPayloadError.for_ok(self.value)

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        """Return the value, ignoring ``default``."""
        return self.value

    def unwrap_or_default(self, default_factory: Callable[[], T] | None = None) -> T:  # noqa: ARG002
        """Return the value, ignoring ``default_factory``."""
        return self.value

    def unwrap_or_else(self, f: Callable[[Any], T]) -> T:  # noqa: ARG002
        """Return the value without calling ``f``."""
        return self.value

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Return Ok(f(value))."""
        return Ok(f(self.value))

    def map_err(self, f: Callable[[Any], Any]) -> Ok[T]:  # noqa: ARG002
        """Return self without calling ``f``."""
        return self

    def map_or[U](self, default: U, f: Callable[[T], U]) -> U:  # noqa: ARG002
        """Return f(value)."""
        return f(self.value)

    def map_or_else[U](self, err_f: Callable[[Any], U], ok_f: Callable[[T], U]) -> U:  # noqa: ARG002
        """Return ok_f(value)."""
        return ok_f(self.value)

    def inspect(self, action: Callable[[T], object]) -> Ok[T]:
        """Call ``action`` with the value and return self."""
        action(self.value)
        return self

    def inspect_err(self, action: Callable[[Any], object]) -> Ok[T]:  # noqa: ARG002
        """Return self without calling ``action``."""
        return self

    def and_[U, E](self, other: Result[U, E]) -> Result[U, E]:
        """Return ``other``."""
        return other

    def and_then[U, E](self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain another fallible step on the value."""
        return f(self.value)

    def or_(self, other: Result[T, Any]) -> Ok[T]:  # noqa: ARG002
        """Return self."""
        return self

    def or_else(self, f: Callable[[Any], Result[T, Any]]) -> Ok[T]:  # noqa: ARG002
        """Return self without calling ``f``."""
        return self

    def get_ok(self) -> Option[T]:
        """Return the value as an Option (Nothing if it is default-equivalent)."""
        return Option.of(self.value)

    def get_err(self) -> NothingType:
        """Return Nothing."""
        return Nothing

    def flatten(self) -> Result[Any, Any]:
        """Collapse ``Ok(Ok(v))`` / ``Ok(Err(e))`` into the inner Result.

        Raises:
            TypeError: If the value is not a Result.
        """
        if isinstance(self.value, Result):
            return self.value
        msg = f'flatten() requires Ok(Result), got {self!r}'
        raise TypeError(msg)

    def transpose(self) -> Option[Result[Any, Any]]:
        """Turn ``Ok(Some(v))`` into ``Some(Ok(v))`` and ``Ok(Nothing)`` into Nothing.

        Raises:
            TypeError: If the value is not an Option.
        """
        match self.value:
            case Some(value):
                return Some(Ok(value))
            case NothingType():
                return Nothing
            case _:
                msg = f'transpose() requires Ok(Option), got {self!r}'
                raise TypeError(msg)

    async def is_ok_and_async(self, predicate: Callable[[T], Awaitable[bool]]) -> bool:
        """Await predicate(value)."""
        return await predicate(self.value)

    async def is_err_and_async(self, predicate: Callable[[Any], Awaitable[bool]]) -> bool:  # noqa: ARG002
        """Return False without awaiting anything."""
        return False

    async def match_async[U](
        self,
        on_ok: Callable[[T], Awaitable[U]],
        on_err: Callable[[Any], Awaitable[U]],  # noqa: ARG002
    ) -> U:
        """Await ``on_ok`` with the value."""
        return await on_ok(self.value)

    async def unwrap_or_else_async(self, f: Callable[[Any], Awaitable[T]]) -> T:  # noqa: ARG002
        """Return the value without awaiting ``f``."""
        return self.value

    async def map_async[U](self, f: Callable[[T], Awaitable[U]]) -> Ok[U]:
        """Await f(value) and wrap it in Ok."""
        return Ok(await f(self.value))

    async def map_err_async(self, f: Callable[[Any], Awaitable[Any]]) -> Ok[T]:  # noqa: ARG002
        """Return self without awaiting anything."""
        return self

    async def map_or_async[U](self, default: U, f: Callable[[T], Awaitable[U]]) -> U:  # noqa: ARG002
        """Await f(value)."""
        return await f(self.value)

    async def map_or_else_async[U](
        self,
        err_f: Callable[[Any], Awaitable[U]],  # noqa: ARG002
        ok_f: Callable[[T], Awaitable[U]],
    ) -> U:
        """Await ok_f(value)."""
        return await ok_f(self.value)

    async def inspect_async(self, action: Callable[[T], Awaitable[object]]) -> Ok[T]:
        """Await ``action`` with the value and return self."""
        await action(self.value)
        return self

    async def inspect_err_async(self, action: Callable[[Any], Awaitable[object]]) -> Ok[T]:  # noqa: ARG002
        """Return self without awaiting anything."""
        return self

    async def and_then_async[U, E](self, f: Callable[[T], Awaitable[Result[U, E]]]) -> Result[U, E]:
        """Await the Result-returning ``f`` on the value."""
        return await f(self.value)

    async def or_else_async(self, f: Callable[[Any], Awaitable[Result[T, Any]]]) -> Ok[T]:  # noqa: ARG002
        """Return self without awaiting ``f``."""
        return self


class Err[E](msgspec.Struct, Result[Any, E], frozen=True, gc=False):
    """Failure variant of Result containing an error of type E.

    Examples:
        >>> Err('boom').map(lambda x: x + 1)
        Err(error='boom')
        >>> Err('boom').map_err(str.upper)
        Err(error='BOOM')
        >>> Err('boom').unwrap_or(0)
        0
    """

    error: E

    def is_ok(self) -> TypeIs[Ok[Any]]:
        """Return False."""
        return False

    def is_err(self) -> TypeIs[Err[E]]:
        """Return True."""
        return True

    def is_ok_and(self, predicate: Callable[[Any], bool]) -> bool:  # noqa: ARG002
        """Return False without calling ``predicate``."""
        return False

    def is_err_and(self, predicate: Callable[[E], bool]) -> bool:
        """Return predicate(error)."""
        return predicate(self.error)

    def match[U](self, on_ok: Callable[[Any], U], on_err: Callable[[E], U]) -> U:  # noqa: ARG002
        """Invoke ``on_err`` with the error."""
        return on_err(self.error)

    def expect(self, message: str) -> Never:
        """Raise UnmetExpectationError with ``message`` and the error."""
        raise UnmetExpectationError.for_payload(message, self.error)

    def expect_err(self, message: str) -> E:  # noqa: ARG002
        """Return the error; ``message`` is only used by Ok."""
        return self.error

    def unwrap(self) -> Never:
        """Raise UnwrapPayloadError carrying the error."""
        raise UnwrapPayloadError.for_err(self.error)

    def unwrap_err(self) -> E:
        """Return the error."""
        return self.error

    def unwrap_or[U](self, default: U) -> U:
        """Return ``default``."""
        return default

    def unwrap_or_default[U](self, default_factory: Callable[[], U] | None = None) -> U | None:
        """Return ``default_factory()`` if given, else ``None``."""
        if default_factory is None:
            return None
        return default_factory()

    def unwrap_or_else[U](self, f: Callable[[E], U]) -> U:
        """Return f(error)."""
        return f(self.error)

    def map(self, f: Callable[[Any], Any]) -> Err[E]:  # noqa: ARG002
        """Return self without calling ``f``."""
        return self

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Return Err(f(error))."""
        return Err(f(self.error))

    def map_or[U](self, default: U, f: Callable[[Any], U]) -> U:  # noqa: ARG002
        """Return ``default``."""
        return default

    def map_or_else[U](self, err_f: Callable[[E], U], ok_f: Callable[[Any], U]) -> U:  # noqa: ARG002
        """Return err_f(error)."""
        return err_f(self.error)

    def inspect(self, action: Callable[[Any], object]) -> Err[E]:  # noqa: ARG002
        """Return self without calling ``action``."""
        return self

    def inspect_err(self, action: Callable[[E], object]) -> Err[E]:
        """Call ``action`` with the error and return self."""
        action(self.error)
        return self

    def and_(self, other: Result[Any, E]) -> Err[E]:  # noqa: ARG002
        """Return self."""
        return self

    def and_then(self, f: Callable[[Any], Result[Any, E]]) -> Err[E]:  # noqa: ARG002
        """Return self without calling ``f``."""
        return self

    def or_[T, F](self, other: Result[T, F]) -> Result[T, F]:
        """Return ``other``."""
        return other

    def or_else[T, F](self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """Recover from the error with another fallible step."""
        return f(self.error)

    def get_ok(self) -> NothingType:
        """Return Nothing."""
        return Nothing

    def get_err(self) -> Option[E]:
        """Return the error as an Option (Nothing if it is default-equivalent)."""
        return Option.of(self.error)

    def flatten(self) -> Err[E]:
        """Return self."""
        return self

    def transpose(self) -> Some[Err[E]]:
        """An Err always transposes to ``Some(Err(e))``, never to Nothing."""
        return Some(self)

    async def is_ok_and_async(self, predicate: Callable[[Any], Awaitable[bool]]) -> bool:  # noqa: ARG002
        """Return False without awaiting anything."""
        return False

    async def is_err_and_async(self, predicate: Callable[[E], Awaitable[bool]]) -> bool:
        """Await predicate(error)."""
        return await predicate(self.error)

    async def match_async[U](
        self,
        on_ok: Callable[[Any], Awaitable[U]],  # noqa: ARG002
        on_err: Callable[[E], Awaitable[U]],
    ) -> U:
        """Await ``on_err`` with the error."""
        return await on_err(self.error)

    async def unwrap_or_else_async[U](self, f: Callable[[E], Awaitable[U]]) -> U:
        """Await f(error)."""
        return await f(self.error)

    async def map_async(self, f: Callable[[Any], Awaitable[Any]]) -> Err[E]:  # noqa: ARG002
        """Return self without awaiting anything."""
        return self

    async def map_err_async[F](self, f: Callable[[E], Awaitable[F]]) -> Err[F]:
        """Await f(error) and wrap it in Err."""
        return Err(await f(self.error))

    async def map_or_async[U](self, default: U, f: Callable[[Any], Awaitable[U]]) -> U:  # noqa: ARG002
        """Return ``default``."""
        return default

    async def map_or_else_async[U](
        self,
        err_f: Callable[[E], Awaitable[U]],
        ok_f: Callable[[Any], Awaitable[U]],  # noqa: ARG002
    ) -> U:
        """Await err_f(error)."""
        return await err_f(self.error)

    async def inspect_async(self, action: Callable[[Any], Awaitable[object]]) -> Err[E]:  # noqa: ARG002
        """Return self without awaiting anything."""
        return self

    async def inspect_err_async(self, action: Callable[[E], Awaitable[object]]) -> Err[E]:
        """Await ``action`` with the error and return self."""
        await action(self.error)
        return self

    async def and_then_async(self, f: Callable[[Any], Awaitable[Result[Any, E]]]) -> Err[E]:  # noqa: ARG002
        """Return self without awaiting anything."""
        return self

    async def or_else_async[T, F](self, f: Callable[[E], Awaitable[Result[T, F]]]) -> Result[T, F]:
        """Await the Result-returning ``f`` on the error."""
        return await f(self.error)


def collect[T, E](results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Gather Ok values into a list, stopping at the first Err.

    Args:
        results: Results to combine. Consumed lazily.

    Returns:
        ``Ok([values...])`` if every result is Ok, else the first Err.

    Examples:
        >>> collect([Ok(1), Ok(2)])
        Ok(value=[1, 2])
        >>> collect([Ok(1), Err('bad'), Err('worse')])
        Err(error='bad')
    """
    values: list[T] = []
    for result in results:
        match result:
            case Ok(value):
                values.append(value)
            case Err():
                return result
    return Ok(values)
