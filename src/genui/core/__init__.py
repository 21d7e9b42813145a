"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .logging_config import configure_logging, configure_from_settings, get_logger, LogContext
from .json import (
    extract_json,
    find_json_object,
    loads,
    safe_json_dumps,
    serialized_size,
    JSONParseError,
)
from .validate import (
    PayloadError,
    PayloadIssue,
    check_payload,
    validate_json_size,
    validate_json_depth,
)
from .tracing import trace_operation


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "LogContext",
    # JSON
    "extract_json",
    "find_json_object",
    "loads",
    "safe_json_dumps",
    "serialized_size",
    "JSONParseError",
    # Validation
    "PayloadError",
    "PayloadIssue",
    "check_payload",
    "validate_json_size",
    "validate_json_depth",
    # Tracing
    "trace_operation",
    # DI
    "create_container",
]
