"""
Structured Logging Configuration
Routes engine events from structlog through one stdlib handler on the
``genui`` logger, rendered for consoles or as JSON lines.
"""

import logging
import sys
from typing import TYPE_CHECKING, Any, TextIO

import structlog
from pythonjsonlogger import jsonlogger

if TYPE_CHECKING:
    from .config import Settings

ENGINE_LOGGER = "genui"

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_FORMAT = "%(levelname)s %(name)s %(message)s"


def _engine_handler(json_logs: bool, stream: TextIO | None) -> logging.Handler:
    handler = logging.StreamHandler(stream or sys.stdout)
    if json_logs:
        handler.setFormatter(jsonlogger.JsonFormatter(JSON_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def configure_logging(level: str = "INFO", json_logs: bool = False, stream: TextIO | None = None) -> None:
    """
    Configure structured logging for the engine.

    Replaces any handler installed by a previous call, so settings can be
    applied again when a new container is built. Engine records do not
    propagate to the root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Emit one JSON object per event, event fields as keys
        stream: Output stream, stdout by default
    """
    engine_logger = logging.getLogger(ENGINE_LOGGER)
    for old in list(engine_logger.handlers):
        engine_logger.removeHandler(old)
    engine_logger.addHandler(_engine_handler(json_logs, stream))
    engine_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    engine_logger.propagate = False

    # JSON mode hands the event dict to the stdlib formatter as record fields
    final = structlog.stdlib.render_to_log_kwargs if json_logs else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            final,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def configure_from_settings(settings: "Settings", stream: TextIO | None = None) -> None:
    """Configure logging from engine settings."""
    configure_logging(level=settings.log_level, json_logs=settings.json_logs, stream=stream)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


class LogContext:
    """Bind fields to every engine event logged in scope."""

    def __init__(self, **kwargs: Any):
        self.context = kwargs

    def __enter__(self) -> "LogContext":
        structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.unbind_contextvars(*self.context.keys())
