"""Fast JSON handling for schemas and streamed model output."""

from typing import Any
import json

import msgspec
import orjson
from json_repair import repair_json

_decoder = msgspec.json.Decoder()
_encoder = msgspec.json.Encoder()


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def _strip_fences(text: str) -> str:
    """Drop a markdown code fence around the payload, if any."""
    if "```" not in text:
        return text

    if "```json" in text:
        start = text.find("```json") + 7
    else:
        start = text.find("```") + 3

    end = text.find("```", start)
    if end == -1:
        return text[start:].strip()
    return text[start:end].strip()


def find_json_object(text: str) -> str | None:
    """
    Locate the outermost JSON object in free-form text.

    Args:
        text: Model output, possibly wrapped in prose or markdown

    Returns:
        The candidate object text, or None if no braces were found
    """
    working = _strip_fences(text.strip())
    start = working.find("{")
    end = working.rfind("}")
    if start == -1 or end == -1 or end < start:
        return None
    return working[start:end + 1]


def _expect_dict(value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise JSONParseError(f"Expected object, got {type(value).__name__}")
    return value


def extract_json(text: str, repair: bool = True) -> dict[str, Any]:
    """
    Extract and parse a JSON object from text.

    Decoding tries msgspec first, then the standard library, and finally
    json_repair when ``repair`` is enabled.

    Args:
        text: Text containing a JSON object
        repair: Attempt to repair truncated or malformed JSON

    Returns:
        Parsed JSON object

    Raises:
        JSONParseError: If no object can be recovered
    """
    candidate = find_json_object(text)
    if candidate is None:
        raise JSONParseError("No JSON object found in text")

    try:
        return _expect_dict(_decoder.decode(candidate.encode("utf-8")))
    except msgspec.DecodeError as e:
        if not repair:
            raise JSONParseError(f"Invalid JSON: {e}", e) from e

    try:
        return _expect_dict(json.loads(candidate))
    except json.JSONDecodeError:
        pass

    try:
        repaired = json.loads(repair_json(candidate))
    except (ValueError, TypeError) as e:
        raise JSONParseError(f"JSON repair failed: {e}", e) from e
    return _expect_dict(repaired)


def loads(text: str | bytes) -> Any:
    """Strictly decode a JSON document of any shape."""
    try:
        return orjson.loads(text)
    except orjson.JSONDecodeError as e:
        raise JSONParseError(f"Invalid JSON: {e}", e) from e


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string using fastest available library.

    Args:
        obj: Object to encode
        **kwargs: Additional arguments (indent)

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0)

    if indent == 0:
        try:
            return orjson.dumps(obj).decode("utf-8")
        except TypeError:
            # e.g. integers outside 64-bit range
            pass

        try:
            return _encoder.encode(obj).decode("utf-8")
        except (TypeError, ValueError, OverflowError):
            pass

    return json.dumps(obj, indent=indent if indent > 0 else None, default=repr)


def serialized_size(obj: Any) -> int:
    """Length of the compact JSON encoding of ``obj``; 0 for falsy scalars."""
    if obj is None or (not obj and not isinstance(obj, (dict, list))):
        return 0
    return len(safe_json_dumps(obj))
