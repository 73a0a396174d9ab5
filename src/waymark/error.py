"""Structured error values for the Err side of a Result.

``Error`` pairs a stable, machine-readable ``ErrorCode`` with a human
message. Codes can be derived from enum members or exception types through
the ``ErrorCodeFactory`` registered in the process-wide options.

Example:
    ```python
    from enum import Enum
    from waymark import Error, Result

    class UserError(Enum):
        NOT_FOUND = 'not_found'

    def find(name: str) -> Result[str, Error]:
        if name != 'ada':
            return Result.err(Error.from_enum(UserError.NOT_FOUND, f'{name} not found'))
        return Result.ok(name)

    str(find('bob').unwrap_err())  # '[UserError.NOT_FOUND] bob not found'
    ```
"""

from __future__ import annotations

from enum import Enum

import msgspec
from msgspec.structs import force_setattr

from waymark.config import get_options

__all__ = ['Error', 'ErrorCode']


def _is_blank(value: str | None) -> bool:
    return not value or value.isspace()


class ErrorCode(msgspec.Struct, frozen=True, gc=False):
    """A short, stable classification of an error.

    Blank values are replaced by the configured fallback code; anything else
    is stored trimmed.

    Examples:
        >>> ErrorCode('  user.not_found ').value
        'user.not_found'
        >>> str(ErrorCode(''))
        'Unspecified'
    """

    value: str

    def __post_init__(self) -> None:
        if _is_blank(self.value):
            force_setattr(self, 'value', get_options().fallback_error_code)
        else:
            force_setattr(self, 'value', self.value.strip())

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_enum(cls, member: Enum) -> ErrorCode:
        """Derive a code from an enum member using the configured factory."""
        return get_options().error_code_factory.from_enum(member)

    @classmethod
    def from_exception(cls, exception: BaseException) -> ErrorCode:
        """Derive a code from an exception type using the configured factory."""
        return get_options().error_code_factory.from_exception(exception)


class Error(msgspec.Struct, frozen=True, gc=False):
    """An error code plus a human-readable message.

    Attributes:
        code: The error classification. A plain string is converted to an
            ErrorCode.
        message: Description of what went wrong. Blank messages are replaced
            by the configured fallback message.
    """

    code: ErrorCode
    message: str

    def __post_init__(self) -> None:
        if isinstance(self.code, str):
            force_setattr(self, 'code', ErrorCode(self.code))
        if _is_blank(self.message):
            force_setattr(self, 'message', get_options().fallback_error_message)

    def __str__(self) -> str:
        return f'[{self.code}] {self.message}'

    @classmethod
    def from_enum(cls, member: Enum, message: str) -> Error:
        """Build an Error whose code is derived from ``member``."""
        return cls(ErrorCode.from_enum(member), message)

    @classmethod
    def from_exception(cls, exception: BaseException) -> Error:
        """Build an Error from an exception's type and message."""
        return cls(ErrorCode.from_exception(exception), str(exception))
