"""
Operation Tracing
Structured timing for render passes, patch application and stream handling.
"""

import time
from contextlib import contextmanager
from typing import Any, Iterator

from .logging_config import get_logger

logger = get_logger(__name__)

# Operations slower than this are logged at WARNING
SLOW_OPERATION_SECONDS = 0.1


@contextmanager
def trace_operation(operation: str, **kwargs: Any) -> Iterator[dict[str, Any]]:
    """
    Context manager for tracing operations with structured logging.

    The yielded dict collects extra fields that are logged when the
    operation ends.

    Args:
        operation: Name of the operation
        **kwargs: Additional context to log
    """
    start = time.perf_counter()
    extra: dict[str, Any] = {}
    logger.debug("operation_start", operation=operation, **kwargs)

    try:
        yield extra
    except Exception as e:
        duration = time.perf_counter() - start
        logger.error(
            "operation_error",
            operation=operation,
            error=str(e),
            duration_ms=duration * 1000,
            **{**kwargs, **extra},
        )
        raise
    else:
        duration = time.perf_counter() - start
        if duration > SLOW_OPERATION_SECONDS:
            logger.warning(
                "operation_slow",
                operation=operation,
                duration_ms=duration * 1000,
                **{**kwargs, **extra},
            )
        else:
            logger.debug(
                "operation_end",
                operation=operation,
                duration_ms=duration * 1000,
                **{**kwargs, **extra},
            )
