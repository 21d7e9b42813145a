"""JSON codec tests with property-based testing."""

import json

import pytest
from hypothesis import given, strategies as st

from genui.core import JSONParseError, extract_json, find_json_object, loads, safe_json_dumps, serialized_size


def test_extract_json_clean():
    """Test extracting clean JSON."""
    assert extract_json('{"type": "card", "count": 42}') == {"type": "card", "count": 42}


def test_extract_json_with_markdown():
    """Test extracting JSON from markdown code blocks."""
    text = '''Here's the schema:
```json
{"type": "card", "props": {"title": "Test"}}
```
Done!'''
    assert extract_json(text) == {"type": "card", "props": {"title": "Test"}}


def test_extract_json_with_extra_text():
    """Test extracting JSON with surrounding text."""
    text = 'Some text before {"type": "divider"} and after'
    assert extract_json(text) == {"type": "divider"}


def test_extract_json_repairs_trailing_comma():
    """Test malformed JSON is repaired when allowed."""
    assert extract_json('{"type": "card", "props": {},}') == {"type": "card", "props": {}}

    with pytest.raises(JSONParseError):
        extract_json('{"type": "card", "props": {},}', repair=False)


def test_extract_json_invalid():
    """Test error when no object is present."""
    with pytest.raises(JSONParseError):
        extract_json("This has no JSON", repair=False)
    assert find_json_object("nothing") is None


def test_loads_strict():
    """Test strict decoding accepts any JSON shape."""
    assert loads("[1, 2]") == [1, 2]
    assert loads(b'{"a": null}') == {"a": None}
    with pytest.raises(JSONParseError):
        loads("{'single': 'quotes'}")


def test_safe_json_dumps_with_indent():
    """Test JSON serialization with indentation."""
    obj = {"title": "Test"}
    result = safe_json_dumps(obj, indent=2)
    assert json.loads(result) == obj
    assert "\n" in result


def test_safe_json_dumps_unserializable_values():
    """Test values JSON cannot represent fall back to repr."""
    result = json.loads(safe_json_dumps({"handler": print, "big": 2 ** 70}))
    assert result["big"] == 2 ** 70
    assert "print" in result["handler"]


@pytest.mark.parametrize("value, size", [
    (None, 0),
    ("", 0),
    (0, 0),
    ({}, 2),
    ([], 2),
    ("abc", 5),
    ({"a": 1}, 7),
])
def test_serialized_size(value, size):
    """Test serialized byte counting."""
    assert serialized_size(value) == size


@given(st.dictionaries(st.text(min_size=1), st.integers(min_value=-(2 ** 63), max_value=2 ** 63 - 1)))
def test_json_roundtrip(data):
    """Property test: JSON serialization roundtrip."""
    assert json.loads(safe_json_dumps(data)) == data
