"""Process-wide options consumed by Option/Result construction paths.

The options object is created lazily on first use (guarded by an aiologic
lock) and is meant to be configured once at start-up:

    ```python
    from waymark.config import configure
    from waymark import structlog_exception_logger

    configure(
        lambda options: options.use_exception_logger(structlog_exception_logger)
        .use_fallback_error_message('Something broke.')
    )
    ```

Reads afterwards take no lock.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any
from uuid import UUID

import msgspec

from waymark._internal.sync import Lazy
from waymark._logging import get_logger

if TYPE_CHECKING:
    from waymark.error import ErrorCode

__all__ = [
    'CallerInfo',
    'ErrorCodeFactory',
    'ExceptionLogger',
    'MonadOptions',
    'capture_caller',
    'configure',
    'get_options',
    'is_default_value',
    'reset_options',
    'set_error_code_factory',
    'set_exception_logger',
    'set_fallback_error_code',
    'set_fallback_error_message',
]

_log = get_logger(__name__)

DEFAULT_FALLBACK_ERROR_CODE = 'Unspecified'
DEFAULT_FALLBACK_ERROR_MESSAGE = 'An unexpected error occurred.'

_EXCEPTION = 'Exception'
_ZERO_VALUE_TYPES: tuple[type, ...] = (bool, int, float, complex, Decimal)


class CallerInfo(msgspec.Struct, frozen=True):
    """Where a swallowed exception's factory was invoked from.

    Attributes:
        member_name: Name of the calling function.
        argument_expression: Source text of the call (best effort).
        line_number: Line number of the call.
    """

    member_name: str
    argument_expression: str
    line_number: int


type ExceptionLogger = Callable[[Exception, CallerInfo], None]


def capture_caller(depth: int = 1) -> CallerInfo:
    """Describe a frame further up the stack.

    Args:
        depth: How many frames above the function calling ``capture_caller``
            to describe. ``1`` is that function's caller.

    Returns:
        CallerInfo for the frame, or an empty CallerInfo if the stack is
        shallower than requested.
    """
    frame = inspect.currentframe()
    try:
        target = frame
        for _ in range(depth + 1):
            if target is None:
                break
            target = target.f_back
        if target is None:
            return CallerInfo(member_name='', argument_expression='', line_number=0)

        info = inspect.getframeinfo(target, context=1)
        expression = info.code_context[0].strip() if info.code_context else ''
        return CallerInfo(
            member_name=info.function,
            argument_expression=expression,
            line_number=info.lineno,
        )
    finally:
        del frame


def is_default_value(value: object) -> bool:
    """Built-in default-value predicate.

    ``None``, numeric zero of the value-like builtins (``bool``, ``int``,
    ``float``, ``complex``, ``Decimal``) and the nil UUID count as default.
    Subclasses such as ``IntEnum`` members are not treated as default.
    """
    if value is None:
        return True
    if type(value) in _ZERO_VALUE_TYPES:
        return value == 0
    if type(value) is UUID:
        return value.int == 0
    return False


class ErrorCodeFactory:
    """Derives error codes from enum members and exceptions.

    Subclass and override either method, then register the instance with
    ``MonadOptions.use_error_code_factory``.
    """

    def from_enum(self, member: Enum) -> ErrorCode:
        """Return ``"{EnumTypeName}.{member}"``."""
        from waymark.error import ErrorCode

        return ErrorCode(f'{type(member).__name__}.{member.name}')

    def from_exception(self, exception: BaseException) -> ErrorCode:
        """Return the exception type name without a trailing ``Exception``.

        A type named exactly ``Exception`` keeps its name.
        """
        from waymark.error import ErrorCode

        name = type(exception).__name__
        if name == _EXCEPTION:
            return ErrorCode(_EXCEPTION)
        if name.lower().endswith(_EXCEPTION.lower()):
            return ErrorCode(name[: -len(_EXCEPTION)])
        return ErrorCode(name)


class MonadOptions:
    """Mutable, process-wide library options.

    Obtain the shared instance through ``configure`` or ``get_options``;
    every ``use_*`` method returns the instance so calls can be chained.
    """

    __slots__ = (
        '_default_value_predicate',
        '_error_code_factory',
        '_exception_logger',
        '_fallback_error_code',
        '_fallback_error_message',
    )

    def __init__(self) -> None:
        self._exception_logger: ExceptionLogger | None = None
        self._error_code_factory = ErrorCodeFactory()
        self._fallback_error_code = DEFAULT_FALLBACK_ERROR_CODE
        self._fallback_error_message = DEFAULT_FALLBACK_ERROR_MESSAGE
        self._default_value_predicate: Callable[[Any], bool] = is_default_value

    @property
    def exception_logger(self) -> ExceptionLogger | None:
        return self._exception_logger

    @property
    def error_code_factory(self) -> ErrorCodeFactory:
        return self._error_code_factory

    @property
    def fallback_error_code(self) -> str:
        return self._fallback_error_code

    @property
    def fallback_error_message(self) -> str:
        return self._fallback_error_message

    @property
    def default_value_predicate(self) -> Callable[[Any], bool]:
        return self._default_value_predicate

    def use_exception_logger(self, logger: ExceptionLogger) -> MonadOptions:
        """Set the callback invoked whenever ``try_``/``safe`` swallows an exception."""
        self._exception_logger = logger
        return self

    def use_error_code_factory(self, factory: ErrorCodeFactory) -> MonadOptions:
        """Replace the strategy used to derive error codes."""
        self._error_code_factory = factory
        return self

    def use_fallback_error_code(self, error_code: str) -> MonadOptions:
        """Set the code used when an ErrorCode is built from a blank string.

        Raises:
            ValueError: If ``error_code`` is blank.
        """
        if not error_code or error_code.isspace():
            msg = 'The fallback error code cannot be empty or whitespace.'
            raise ValueError(msg)
        self._fallback_error_code = error_code.strip()
        return self

    def use_fallback_error_message(self, error_message: str) -> MonadOptions:
        """Set the message used when an Error is built from a blank message.

        Raises:
            ValueError: If ``error_message`` is blank.
        """
        if not error_message or error_message.isspace():
            msg = 'The fallback error message cannot be empty or whitespace.'
            raise ValueError(msg)
        self._fallback_error_message = error_message.strip()
        return self

    def use_default_value_predicate(self, predicate: Callable[[Any], bool]) -> MonadOptions:
        """Replace the predicate deciding which values ``Some`` may not wrap."""
        self._default_value_predicate = predicate
        return self

    def is_default(self, value: object) -> bool:
        """Apply the configured default-value predicate."""
        return self._default_value_predicate(value)

    def log(self, exception: Exception, caller: CallerInfo) -> None:
        """Report an exception that was converted into Nothing/Err."""
        _log.debug(
            'exception_handled',
            exc_type=type(exception).__qualname__,
            exc_message=str(exception),
            member_name=caller.member_name,
            line_number=caller.line_number,
            argument_expression=caller.argument_expression,
        )
        if self._exception_logger is not None:
            self._exception_logger(exception, caller)


_options: Lazy[MonadOptions] = Lazy(MonadOptions)


def get_options() -> MonadOptions:
    """Return the process-wide options, creating them on first use."""
    return _options.get()


def configure(callback: Callable[[MonadOptions], object]) -> MonadOptions:
    """Apply ``callback`` to the process-wide options.

    Args:
        callback: Receives the shared MonadOptions; its return value is ignored.

    Returns:
        The shared MonadOptions.
    """
    options = _options.get()
    callback(options)
    return options


def reset_options() -> None:
    """Restore the defaults. Intended for test isolation."""
    _options.reset()


def set_exception_logger(logger: ExceptionLogger) -> MonadOptions:
    return get_options().use_exception_logger(logger)


def set_error_code_factory(factory: ErrorCodeFactory) -> MonadOptions:
    return get_options().use_error_code_factory(factory)


def set_fallback_error_code(error_code: str) -> MonadOptions:
    return get_options().use_fallback_error_code(error_code)


def set_fallback_error_message(error_message: str) -> MonadOptions:
    return get_options().use_fallback_error_message(error_message)
