"""Structured logging for waymark.

The library only ever emits through structlog loggers obtained from
``get_logger``. Applications that do not configure logging get structlog's
defaults; ``configure_logging`` is offered for scripts and tests that want
structlog and stdlib records rendered the same way through
``ProcessorFormatter``.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from waymark.config import CallerInfo

__all__ = [
    'configure_logging',
    'get_logger',
    'structlog_exception_logger',
]


def _get_shared_processors() -> list[Any]:
    """Processors shared between structlog and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.stdlib.ExtraAdder(),
    ]


def _get_renderer(json_output: bool = True) -> Any:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = True,
) -> None:
    """Configure structlog and stdlib logging to share one output format.

    Args:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL").
        json_output: If True, emit JSON lines. If False, use console output.
    """
    structlog.configure(
        processors=[
            *_get_shared_processors(),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_get_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _get_renderer(json_output),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger.

    Args:
        name: Logger name, usually the calling module's ``__name__``.

    Returns:
        A structlog bound logger.
    """
    return structlog.get_logger(name)


def structlog_exception_logger(exception: Exception, caller: CallerInfo) -> None:
    """Exception logger that reports swallowed exceptions as warnings.

    Suitable for ``MonadOptions.use_exception_logger``:

        configure(lambda o: o.use_exception_logger(structlog_exception_logger))
    """
    get_logger('waymark').warning(
        'exception_swallowed',
        exc_type=type(exception).__qualname__,
        exc_message=str(exception),
        member_name=caller.member_name,
        line_number=caller.line_number,
        argument_expression=caller.argument_expression,
        exc_info=exception,
    )
