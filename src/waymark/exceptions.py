"""Exceptions raised when the Option/Result API is misused.

These signal programmer errors (unwrapping without checking, constructing
``Some`` around a default value). They are not meant for control flow;
prefer ``match`` or the ``unwrap_or*`` family in production paths.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    'InvalidStateError',
    'MonadError',
    'UnmetExpectationError',
    'UnwrapError',
    'UnwrapPayloadError',
]


class MonadError(Exception):
    """Base class for all waymark misuse errors."""


class UnwrapError(MonadError):
    """Raised when unwrapping the wrong variant.

    Raised as-is by ``Nothing.unwrap()``; wrong-variant Result unwraps raise
    the payload-carrying subclass :class:`UnwrapPayloadError`.
    """


class UnwrapPayloadError[T](UnwrapError):
    """Unwrap error carrying the payload of the variant that was actually held.

    Attributes:
        value: The Ok value (for ``unwrap_err``) or Err error (for ``unwrap``).
    """

    __slots__ = ('_value',)

    def __init__(self, message: str, value: T) -> None:
        self._value = value
        super().__init__(message)

    @property
    def value(self) -> T:
        """The payload of the opposing variant."""
        return self._value

    @classmethod
    def for_err(cls, error: Any) -> UnwrapPayloadError[Any]:
        """Build the error raised by ``Err.unwrap()``."""
        return cls('Unwrap called on an `Err` result.', error)

    @classmethod
    def for_ok(cls, value: Any) -> UnwrapPayloadError[Any]:
        """Build the error raised by ``Ok.unwrap_err()``."""
        return cls('Unwrap called on an `Ok` result.', value)


class UnmetExpectationError(MonadError):
    """Raised by ``expect``/``expect_err`` when the expected variant is absent."""

    @classmethod
    def for_payload(cls, message: str, payload: Any) -> UnmetExpectationError:
        """Build an error whose message carries the unexpected payload."""
        return cls(f'{message}: {payload}')


class InvalidStateError(MonadError):
    """Raised when constructing ``Some`` around a default-equivalent value."""
