"""Option type: Some[T] | Nothing for optional values.

``Some`` can never wrap a default-equivalent value (``None``, numeric zero,
the nil UUID, or whatever the configured predicate says), which keeps the
implicit conversion ``Option.of`` unambiguous:

    ```python
    from waymark import Nothing, Option, Some

    Option.of('ada')    # Some(value='ada')
    Option.of(0)        # Nothing
    Some(0)             # raises InvalidStateError

    match Option.of(lookup(user_id)):
        case Some(user):
            greet(user)
        case _:
            greet_guest()
    ```

Every combinator returns a new Option; nothing is mutated. Methods with an
``_async`` suffix take callbacks returning awaitables and only await when
the callback actually has to run.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Never, TypeIs

import anyio
import msgspec

from waymark.config import CallerInfo, capture_caller, get_options
from waymark.exceptions import InvalidStateError, UnmetExpectationError, UnwrapError

if TYPE_CHECKING:
    from waymark.result import Err, Ok, Result

__all__ = ['Nothing', 'NothingType', 'Option', 'Some']


class Option[T]:
    """Presence (``Some``) or absence (``Nothing``) of a value.

    ``Option`` itself is never instantiated; it carries the factories and the
    shared contract implemented by the two variants.
    """

    __slots__ = ()

    # ------------------------------------------------------------------
    # construction
    # ------------------------------------------------------------------

    @staticmethod
    def some[U](value: U) -> Some[U]:
        """Wrap ``value``; raises InvalidStateError for default values."""
        return Some(value)

    @staticmethod
    def none() -> NothingType:
        """Return the ``Nothing`` singleton."""
        return Nothing

    @staticmethod
    def of[U](value: U) -> Option[U]:
        """Convert a raw value: default-equivalent values become Nothing.

        This is lossy for legitimately zero-like values (``Option.of(0)`` is
        Nothing), so prefer ``Option.some`` when absence is not intended.

        Examples:
            >>> Option.of(42)
            Some(value=42)
            >>> Option.of(0)
            Nothing
        """
        if get_options().is_default(value):
            return Nothing
        return Some(value)

    @staticmethod
    def from_nullable[U](value: U | None) -> Option[U]:
        """Convert ``None`` to Nothing and anything else through ``Option.of``."""
        if value is None:
            return Nothing
        return Option.of(value)

    @staticmethod
    def try_[U](factory: Callable[[], U], *, caller: CallerInfo | None = None) -> Option[U]:
        """Run ``factory``, returning Nothing if it raises.

        The exception is reported through ``MonadOptions.log`` together with
        ``caller`` (captured from the stack when omitted).

        Args:
            factory: Zero-argument callable producing the value.
            caller: Call-site metadata for diagnostics.

        Returns:
            ``Option.of(factory())``, or Nothing on exception.
        """
        try:
            value = factory()
        except Exception as exc:
            get_options().log(exc, caller or capture_caller())
            return Nothing
        return Option.of(value)

    @staticmethod
    async def try_async[U](
        factory: Callable[[], Awaitable[U]],
        *,
        caller: CallerInfo | None = None,
    ) -> Option[U]:
        """Async ``try_``: await ``factory()``; Nothing if it raises.

        Cancellation of the surrounding task is never swallowed.
        """
        try:
            value = await factory()
        except anyio.get_cancelled_exc_class():
            raise
        except Exception as exc:
            get_options().log(exc, caller or capture_caller())
            return Nothing
        return Option.of(value)

    # ------------------------------------------------------------------
    # contract implemented by Some / NothingType
    # ------------------------------------------------------------------

    def is_some(self) -> TypeIs[Some[T]]: ...
    def is_none(self) -> TypeIs[NothingType]: ...
    def is_some_and(self, predicate: Callable[[T], bool]) -> bool: ...
    def is_none_or(self, predicate: Callable[[T], bool]) -> bool: ...
    def match[U](self, on_some: Callable[[T], U], on_none: Callable[[], U]) -> U: ...
    def expect(self, message: str) -> T: ...
    def unwrap(self) -> T: ...
    def unwrap_or(self, default: T) -> T: ...
    def unwrap_or_default(self, default_factory: Callable[[], T] | None = None) -> T | None: ...
    def unwrap_or_else(self, factory: Callable[[], T]) -> T: ...
    def map[U](self, f: Callable[[T], U]) -> Option[U]: ...
    def map_or[U](self, default: U, f: Callable[[T], U]) -> U: ...
    def map_or_else[U](self, default_factory: Callable[[], U], f: Callable[[T], U]) -> U: ...
    def inspect(self, action: Callable[[T], object]) -> Option[T]: ...
    def filter(self, predicate: Callable[[T], bool]) -> Option[T]: ...
    def or_(self, other: Option[T]) -> Option[T]: ...
    def or_else(self, factory: Callable[[], Option[T]]) -> Option[T]: ...
    def xor(self, other: Option[T]) -> Option[T]: ...
    def and_[U](self, other: Option[U]) -> Option[U]: ...
    def and_then[U](self, f: Callable[[T], Option[U]]) -> Option[U]: ...
    def flat_map[U](self, f: Callable[[T], Option[U]]) -> Option[U]: ...
    def zip[U](self, other: Option[U]) -> Option[tuple[T, U]]: ...
    def zip_with[U, R](self, other: Option[U], combine: Callable[[T, U], R]) -> Option[R]: ...
    def unzip(self) -> tuple[Option[Any], Option[Any]]: ...
    def ok_or[E](self, error: E) -> Result[T, E]: ...
    def ok_or_else[E](self, factory: Callable[[], E]) -> Result[T, E]: ...
    def flatten(self) -> Option[Any]: ...
    def transpose(self) -> Result[Option[Any], Any]: ...

    async def is_some_and_async(self, predicate: Callable[[T], Awaitable[bool]]) -> bool: ...
    async def is_none_or_async(self, predicate: Callable[[T], Awaitable[bool]]) -> bool: ...
    async def match_async[U](
        self,
        on_some: Callable[[T], Awaitable[U]],
        on_none: Callable[[], Awaitable[U]],
    ) -> U: ...
    async def unwrap_or_else_async(self, factory: Callable[[], Awaitable[T]]) -> T: ...
    async def map_async[U](self, f: Callable[[T], Awaitable[U]]) -> Option[U]: ...
    async def map_or_async[U](self, default: U, f: Callable[[T], Awaitable[U]]) -> U: ...
    async def map_or_else_async[U](
        self,
        default_factory: Callable[[], Awaitable[U]],
        f: Callable[[T], Awaitable[U]],
    ) -> U: ...
    async def inspect_async(self, action: Callable[[T], Awaitable[object]]) -> Option[T]: ...
    async def filter_async(self, predicate: Callable[[T], Awaitable[bool]]) -> Option[T]: ...
    async def or_else_async(self, factory: Callable[[], Awaitable[Option[T]]]) -> Option[T]: ...
    async def and_then_async[U](self, f: Callable[[T], Awaitable[Option[U]]]) -> Option[U]: ...
    async def zip_with_async[U, R](
        self,
        other: Option[U],
        combine: Callable[[T, U], Awaitable[R]],
    ) -> Option[R]: ...
    async def ok_or_else_async[E](self, factory: Callable[[], Awaitable[E]]) -> Result[T, E]: ...


class Some[T](msgspec.Struct, Option[T], frozen=True, gc=False):
    """Some variant of Option containing a non-default value of type T.

    Examples:
        >>> some = Some(42)
        >>> some.unwrap()
        42
        >>> some.map(lambda x: x * 2)
        Some(value=84)
        >>> some.filter(lambda x: x > 100)
        Nothing
    """

    value: T

    def __post_init__(self) -> None:
        if get_options().is_default(self.value):
            msg = f'The value of a `Some` option cannot be a default value: {self.value!r}.'
            raise InvalidStateError(msg)

    def is_some(self) -> TypeIs[Some[T]]:
        """Return True."""
        return True

    def is_none(self) -> TypeIs[NothingType]:
        """Return False."""
        return False

    def is_some_and(self, predicate: Callable[[T], bool]) -> bool:
        """Return predicate(value)."""
        return predicate(self.value)

    def is_none_or(self, predicate: Callable[[T], bool]) -> bool:
        """Return predicate(value)."""
        return predicate(self.value)

    def match[U](self, on_some: Callable[[T], U], on_none: Callable[[], U]) -> U:  # noqa: ARG002
        """Invoke ``on_some`` with the value."""
        return on_some(self.value)

    def expect(self, message: str) -> T:  # noqa: ARG002
        """Return the value; ``message`` is only used by Nothing."""
        return self.value

    def unwrap(self) -> T:
        """Return the value."""
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        """Return the value, ignoring ``default``."""
        return self.value

    def unwrap_or_default(self, default_factory: Callable[[], T] | None = None) -> T:  # noqa: ARG002
        """Return the value, ignoring ``default_factory``."""
        return self.value

    def unwrap_or_else(self, factory: Callable[[], T]) -> T:  # noqa: ARG002
        """Return the value without calling ``factory``."""
        return self.value

    def map[U](self, f: Callable[[T], U]) -> Option[U]:
        """Apply ``f`` to the value.

        The result goes through ``Option.of``, so a mapper returning a
        default-equivalent value produces Nothing.

        Args:
            f: Function to apply to the Some value.

        Returns:
            Option of the mapped value.
        """
        return Option.of(f(self.value))

    def map_or[U](self, default: U, f: Callable[[T], U]) -> U:  # noqa: ARG002
        """Return f(value)."""
        return f(self.value)

    def map_or_else[U](self, default_factory: Callable[[], U], f: Callable[[T], U]) -> U:  # noqa: ARG002
        """Return f(value) without calling ``default_factory``."""
        return f(self.value)

    def inspect(self, action: Callable[[T], object]) -> Some[T]:
        """Call ``action`` with the value and return self unchanged."""
        action(self.value)
        return self

    def filter(self, predicate: Callable[[T], bool]) -> Option[T]:
        """Return self if predicate(value) holds, else Nothing."""
        if predicate(self.value):
            return self
        return Nothing

    def or_(self, other: Option[T]) -> Some[T]:  # noqa: ARG002
        """Return self."""
        return self

    def or_else(self, factory: Callable[[], Option[T]]) -> Some[T]:  # noqa: ARG002
        """Return self without calling ``factory``."""
        return self

    def xor(self, other: Option[T]) -> Option[T]:
        """Return self unless ``other`` is also Some."""
        if isinstance(other, Some):
            return Nothing
        return self

    def and_[U](self, other: Option[U]) -> Option[U]:
        """Return ``other``."""
        return other

    def and_then[U](self, f: Callable[[T], Option[U]]) -> Option[U]:
        """Apply an Option-returning function to the value (flat map)."""
        return f(self.value)

    def flat_map[U](self, f: Callable[[T], Option[U]]) -> Option[U]:
        """Alias of ``and_then``."""
        return f(self.value)

    def zip[U](self, other: Option[U]) -> Option[tuple[T, U]]:
        """Pair both values if ``other`` is Some."""
        if isinstance(other, Some):
            return Some((self.value, other.value))
        return Nothing

    def zip_with[U, R](self, other: Option[U], combine: Callable[[T, U], R]) -> Option[R]:
        """Combine both values with ``combine`` if ``other`` is Some."""
        return other.map(lambda other_value: combine(self.value, other_value))

    def unzip(self) -> tuple[Option[Any], Option[Any]]:
        """Split ``Some((a, b))`` into ``(Option.of(a), Option.of(b))``."""
        first, second = self.value  # type: ignore[misc]
        return Option.of(first), Option.of(second)

    def ok_or[E](self, error: E) -> Ok[T]:  # noqa: ARG002
        """Return Ok(value)."""
        from waymark.result import Ok

        return Ok(self.value)

    def ok_or_else[E](self, factory: Callable[[], E]) -> Ok[T]:  # noqa: ARG002
        """Return Ok(value) without calling ``factory``."""
        from waymark.result import Ok

        return Ok(self.value)

    def flatten(self) -> Option[Any]:
        """Collapse ``Some(Some(v))`` to ``Some(v)`` and ``Some(Nothing)`` to Nothing.

        Raises:
            TypeError: If the value is not an Option.
        """
        if isinstance(self.value, Option):
            return self.value
        msg = f'flatten() requires Some(Option), got {self!r}'
        raise TypeError(msg)

    def transpose(self) -> Result[Option[Any], Any]:
        """Turn ``Some(Ok(v))`` into ``Ok(Some(v))`` and ``Some(Err(e))`` into ``Err(e)``.

        Raises:
            TypeError: If the value is not a Result.
        """
        from waymark.result import Err, Ok

        match self.value:
            case Ok(value):
                return Ok(Option.of(value))
            case Err():
                return self.value
            case _:
                msg = f'transpose() requires Some(Result), got {self!r}'
                raise TypeError(msg)

    async def is_some_and_async(self, predicate: Callable[[T], Awaitable[bool]]) -> bool:
        """Await predicate(value)."""
        return await predicate(self.value)

    async def is_none_or_async(self, predicate: Callable[[T], Awaitable[bool]]) -> bool:
        """Await predicate(value)."""
        return await predicate(self.value)

    async def match_async[U](
        self,
        on_some: Callable[[T], Awaitable[U]],
        on_none: Callable[[], Awaitable[U]],  # noqa: ARG002
    ) -> U:
        """Await ``on_some`` with the value."""
        return await on_some(self.value)

    async def unwrap_or_else_async(self, factory: Callable[[], Awaitable[T]]) -> T:  # noqa: ARG002
        """Return the value without awaiting ``factory``."""
        return self.value

    async def map_async[U](self, f: Callable[[T], Awaitable[U]]) -> Option[U]:
        """Await f(value) and wrap the result with ``Option.of``."""
        return Option.of(await f(self.value))

    async def map_or_async[U](self, default: U, f: Callable[[T], Awaitable[U]]) -> U:  # noqa: ARG002
        """Await f(value)."""
        return await f(self.value)

    async def map_or_else_async[U](
        self,
        default_factory: Callable[[], Awaitable[U]],  # noqa: ARG002
        f: Callable[[T], Awaitable[U]],
    ) -> U:
        """Await f(value) without calling ``default_factory``."""
        return await f(self.value)

    async def inspect_async(self, action: Callable[[T], Awaitable[object]]) -> Some[T]:
        """Await ``action`` with the value and return self."""
        await action(self.value)
        return self

    async def filter_async(self, predicate: Callable[[T], Awaitable[bool]]) -> Option[T]:
        """Return self if the awaited predicate holds, else Nothing."""
        if await predicate(self.value):
            return self
        return Nothing

    async def or_else_async(self, factory: Callable[[], Awaitable[Option[T]]]) -> Some[T]:  # noqa: ARG002
        """Return self without awaiting ``factory``."""
        return self

    async def and_then_async[U](self, f: Callable[[T], Awaitable[Option[U]]]) -> Option[U]:
        """Await the Option-returning ``f`` on the value."""
        return await f(self.value)

    async def zip_with_async[U, R](
        self,
        other: Option[U],
        combine: Callable[[T, U], Awaitable[R]],
    ) -> Option[R]:
        """Await ``combine`` on both values if ``other`` is Some."""
        if isinstance(other, Some):
            return Option.of(await combine(self.value, other.value))
        return Nothing

    async def ok_or_else_async[E](self, factory: Callable[[], Awaitable[E]]) -> Ok[T]:  # noqa: ARG002
        """Return Ok(value) without awaiting ``factory``."""
        from waymark.result import Ok

        return Ok(self.value)


class NothingType(msgspec.Struct, Option[Never], frozen=True, gc=False):
    """Nothing variant of Option representing absence of a value.

    Use the ``Nothing`` singleton rather than instantiating this class.
    Callbacks handed to a Nothing are never invoked, except the fallback
    ones (``unwrap_or_else``, ``or_else``, ``on_none`` ...).
    """

    def __repr__(self) -> str:
        return 'Nothing'

    def is_some(self) -> TypeIs[Some[Never]]:
        """Return False."""
        return False

    def is_none(self) -> TypeIs[NothingType]:
        """Return True."""
        return True

    def is_some_and(self, predicate: Callable[[Any], bool]) -> bool:  # noqa: ARG002
        """Return False without calling ``predicate``."""
        return False

    def is_none_or(self, predicate: Callable[[Any], bool]) -> bool:  # noqa: ARG002
        """Return True without calling ``predicate``."""
        return True

    def match[U](self, on_some: Callable[[Any], U], on_none: Callable[[], U]) -> U:  # noqa: ARG002
        """Invoke ``on_none``."""
        return on_none()

    def expect(self, message: str) -> Never:
        """Raise UnmetExpectationError carrying ``message``."""
        raise UnmetExpectationError(message)

    def unwrap(self) -> Never:
        """Raise UnwrapError."""
        raise UnwrapError('Unwrap called for a `None` value.')

    def unwrap_or[U](self, default: U) -> U:
        """Return ``default``."""
        return default

    def unwrap_or_default[U](self, default_factory: Callable[[], U] | None = None) -> U | None:
        """Return ``default_factory()`` if given, else ``None``."""
        if default_factory is None:
            return None
        return default_factory()

    def unwrap_or_else[U](self, factory: Callable[[], U]) -> U:
        """Return factory()."""
        return factory()

    def map(self, f: Callable[[Any], Any]) -> NothingType:  # noqa: ARG002
        """Return Nothing without calling ``f``."""
        return self

    def map_or[U](self, default: U, f: Callable[[Any], U]) -> U:  # noqa: ARG002
        """Return ``default``."""
        return default

    def map_or_else[U](self, default_factory: Callable[[], U], f: Callable[[Any], U]) -> U:  # noqa: ARG002
        """Return default_factory()."""
        return default_factory()

    def inspect(self, action: Callable[[Any], object]) -> NothingType:  # noqa: ARG002
        """Return Nothing without calling ``action``."""
        return self

    def filter(self, predicate: Callable[[Any], bool]) -> NothingType:  # noqa: ARG002
        """Return Nothing."""
        return self

    def or_[U](self, other: Option[U]) -> Option[U]:
        """Return ``other``."""
        return other

    def or_else[U](self, factory: Callable[[], Option[U]]) -> Option[U]:
        """Return factory()."""
        return factory()

    def xor[U](self, other: Option[U]) -> Option[U]:
        """Return ``other`` if it is Some, else Nothing."""
        if isinstance(other, Some):
            return other
        return self

    def and_(self, other: Option[Any]) -> NothingType:  # noqa: ARG002
        """Return Nothing."""
        return self

    def and_then(self, f: Callable[[Any], Option[Any]]) -> NothingType:  # noqa: ARG002
        """Return Nothing without calling ``f``."""
        return self

    def flat_map(self, f: Callable[[Any], Option[Any]]) -> NothingType:  # noqa: ARG002
        """Return Nothing without calling ``f``."""
        return self

    def zip(self, other: Option[Any]) -> NothingType:  # noqa: ARG002
        """Return Nothing."""
        return self

    def zip_with(self, other: Option[Any], combine: Callable[[Any, Any], Any]) -> NothingType:  # noqa: ARG002
        """Return Nothing without calling ``combine``."""
        return self

    def unzip(self) -> tuple[NothingType, NothingType]:
        """Return ``(Nothing, Nothing)``."""
        return self, self

    def ok_or[E](self, error: E) -> Err[E]:
        """Return Err(error)."""
        from waymark.result import Err

        return Err(error)

    def ok_or_else[E](self, factory: Callable[[], E]) -> Err[E]:
        """Return Err(factory())."""
        from waymark.result import Err

        return Err(factory())

    def flatten(self) -> NothingType:
        """Return Nothing."""
        return self

    def transpose(self) -> Ok[NothingType]:
        """Nothing transposes to ``Ok(Nothing)``."""
        from waymark.result import Ok

        return Ok(self)

    async def is_some_and_async(self, predicate: Callable[[Any], Awaitable[bool]]) -> bool:  # noqa: ARG002
        """Return False without awaiting anything."""
        return False

    async def is_none_or_async(self, predicate: Callable[[Any], Awaitable[bool]]) -> bool:  # noqa: ARG002
        """Return True without awaiting anything."""
        return True

    async def match_async[U](
        self,
        on_some: Callable[[Any], Awaitable[U]],  # noqa: ARG002
        on_none: Callable[[], Awaitable[U]],
    ) -> U:
        """Await ``on_none``."""
        return await on_none()

    async def unwrap_or_else_async[U](self, factory: Callable[[], Awaitable[U]]) -> U:
        """Await factory()."""
        return await factory()

    async def map_async(self, f: Callable[[Any], Awaitable[Any]]) -> NothingType:  # noqa: ARG002
        """Return Nothing without awaiting anything."""
        return self

    async def map_or_async[U](self, default: U, f: Callable[[Any], Awaitable[U]]) -> U:  # noqa: ARG002
        """Return ``default``."""
        return default

    async def map_or_else_async[U](
        self,
        default_factory: Callable[[], Awaitable[U]],
        f: Callable[[Any], Awaitable[U]],  # noqa: ARG002
    ) -> U:
        """Await default_factory()."""
        return await default_factory()

    async def inspect_async(self, action: Callable[[Any], Awaitable[object]]) -> NothingType:  # noqa: ARG002
        """Return Nothing without awaiting anything."""
        return self

    async def filter_async(self, predicate: Callable[[Any], Awaitable[bool]]) -> NothingType:  # noqa: ARG002
        """Return Nothing without awaiting anything."""
        return self

    async def or_else_async[U](self, factory: Callable[[], Awaitable[Option[U]]]) -> Option[U]:
        """Await factory()."""
        return await factory()

    async def and_then_async(self, f: Callable[[Any], Awaitable[Option[Any]]]) -> NothingType:  # noqa: ARG002
        """Return Nothing without awaiting anything."""
        return self

    async def zip_with_async(
        self,
        other: Option[Any],  # noqa: ARG002
        combine: Callable[[Any, Any], Awaitable[Any]],  # noqa: ARG002
    ) -> NothingType:
        """Return Nothing without awaiting anything."""
        return self

    async def ok_or_else_async[E](self, factory: Callable[[], Awaitable[E]]) -> Err[E]:
        """Await factory() and wrap it in Err."""
        from waymark.result import Err

        return Err(await factory())


Nothing = NothingType()
"""The singleton Nothing value."""
