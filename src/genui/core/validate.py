"""Payload guards for incoming schemas and patch lists."""

from dataclasses import dataclass
from typing import Any

from returns.result import Result, Success, Failure

from .json import safe_json_dumps


# Validation limits
MAX_SCHEMA_SIZE = 1024 * 1024  # 1MB
MAX_SCHEMA_DEPTH = 64


class PayloadError(Exception):
    """Payload exceeds a structural limit."""

    pass


@dataclass(frozen=True)
class PayloadIssue:
    """Rejected payload with details (for Result pattern)."""

    message: str


def validate_json_size(obj: Any, max_size: int = MAX_SCHEMA_SIZE, name: str = "Schema") -> None:
    """
    Reject payloads whose compact JSON encoding is too large.

    Raises:
        PayloadError: If size exceeds limit
    """
    size = len(safe_json_dumps(obj))
    if size > max_size:
        raise PayloadError(f"{name} size {size} bytes exceeds maximum of {max_size} bytes")


def validate_json_depth(obj: Any, max_depth: int = MAX_SCHEMA_DEPTH) -> None:
    """
    Reject payloads nested deeper than ``max_depth``.

    Iterative walk; recursion depth does not grow with the payload.

    Raises:
        PayloadError: If depth exceeds limit
    """
    stack: list[tuple[Any, int]] = [(obj, 0)]
    while stack:
        value, depth = stack.pop()
        if depth > max_depth:
            raise PayloadError(f"JSON nesting depth {depth} exceeds maximum {max_depth}")
        if isinstance(value, dict):
            stack.extend((v, depth + 1) for v in value.values())
        elif isinstance(value, (list, tuple)):
            stack.extend((v, depth + 1) for v in value)


def check_payload(
    payload: Any,
    max_size: int = MAX_SCHEMA_SIZE,
    max_depth: int = MAX_SCHEMA_DEPTH,
    name: str = "Schema",
) -> Result[Any, PayloadIssue]:
    """
    Check payload limits (Result pattern version).

    Returns:
        Success with the untouched payload, or Failure describing the violation
    """
    try:
        validate_json_depth(payload, max_depth)
        validate_json_size(payload, max_size, name)
    except PayloadError as e:
        return Failure(PayloadIssue(str(e)))
    return Success(payload)
