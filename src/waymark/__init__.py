"""waymark: Option and Result types for Python 3.13+.

Explicit optional values and error handling with sync and async
combinators, lazy Option-yielding iterators, and process-wide options for
error codes and exception logging.

Flat imports (preferred):
    from waymark import Option, Some, Nothing, Result, Ok, Err
    from waymark import Error, ErrorCode, into_iter, safe, configure

Submodule imports (for organization):
    from waymark.option import Some, Nothing, Option
    from waymark.result import Ok, Err, Result, collect
    from waymark.iter import Iter, into_iter, Ordering
    from waymark.async_ import AsyncOption, AsyncResult
    from waymark.config import MonadOptions, configure
"""

# Logging
from waymark._logging import configure_logging, structlog_exception_logger

# Async
from waymark.async_ import AsyncOption, AsyncResult

# Configuration
from waymark.config import (
    CallerInfo,
    ErrorCodeFactory,
    MonadOptions,
    configure,
    get_options,
    reset_options,
    set_error_code_factory,
    set_exception_logger,
    set_fallback_error_code,
    set_fallback_error_message,
)

# Decorators
from waymark.decorators import safe, safe_async

# Errors
from waymark.error import Error, ErrorCode
from waymark.exceptions import (
    InvalidStateError,
    MonadError,
    UnmetExpectationError,
    UnwrapError,
    UnwrapPayloadError,
)

# Iterators
from waymark.iter import Cloneable, Iter, Ordering, into_iter
from waymark.option import Nothing, NothingType, Option, Some
from waymark.result import Err, Ok, Result, collect

__all__ = [
    # Async
    'AsyncOption',
    'AsyncResult',
    # Configuration
    'CallerInfo',
    # Iterators
    'Cloneable',
    # Result types
    'Err',
    # Errors
    'Error',
    'ErrorCode',
    'ErrorCodeFactory',
    # Exceptions
    'InvalidStateError',
    'Iter',
    'MonadError',
    'MonadOptions',
    # Option types
    'Nothing',
    'NothingType',
    'Ok',
    'Option',
    'Ordering',
    'Result',
    'Some',
    'UnmetExpectationError',
    'UnwrapError',
    'UnwrapPayloadError',
    'collect',
    'configure',
    # Logging
    'configure_logging',
    'get_options',
    'into_iter',
    'reset_options',
    # Decorators
    'safe',
    'safe_async',
    'set_error_code_factory',
    'set_exception_logger',
    'set_fallback_error_code',
    'set_fallback_error_message',
    'structlog_exception_logger',
]
