"""Tests for wire schema normalization."""

import json

import pytest
from hypothesis import given, strategies as st

from genui.schema import UINode, UnsupportedNode, is_wire_schema, normalize_schema


def _wire(layout=None, components=None):
    return {"schemaVersion": "1", "layout": layout or {}, "components": components or []}


@pytest.mark.unit
def test_wire_detection():
    """Test wire format needs both a version marker and a components list."""
    assert is_wire_schema(_wire())
    assert not is_wire_schema({"components": []})
    assert not is_wire_schema({"schemaVersion": "1", "components": "nope"})
    assert not is_wire_schema({"type": "card"})
    assert not is_wire_schema(None)


@pytest.mark.unit
def test_canonical_passes_through(normalizer):
    """Test canonical input is returned as-is."""
    node = UINode(type="card", props={"title": "x"})
    assert normalizer.normalize(node) is node

    parsed = normalizer.normalize({"type": "card", "props": {"title": "x"}})
    assert parsed.type == "card"
    assert parsed.props == {"title": "x"}


@pytest.mark.unit
@pytest.mark.parametrize("layout_type, expected", [
    ("flexbox", "flexbox"),
    ("GRID", "grid"),
    ("Card", "card"),
    ("stack", "container"),
    (None, "container"),
])
def test_layout_type_mapping(normalizer, layout_type, expected):
    """Test layout kinds map case-insensitively with a container fallback."""
    root = normalizer.normalize(_wire({"type": layout_type}))
    assert root.type == expected


@pytest.mark.unit
def test_layout_props_per_type(normalizer):
    """Test root props derived from the layout."""
    flex = normalizer.normalize(_wire({"type": "flexbox", "direction": "row", "gap": 8, "extra": 1}))
    assert flex.props == {"direction": "row", "gap": 8}

    grid = normalizer.normalize(_wire({"type": "grid"}))
    assert grid.props == {"columns": 1, "gap": 16}

    card = normalizer.normalize(_wire({"type": "card"}))
    assert card.props == {"title": ""}

    container = normalizer.normalize(_wire({"type": "vertical", "maxWidth": 800}))
    assert container.props == {"maxWidth": 800, "variant": "default"}


@pytest.mark.unit
def test_typography_mapping(normalizer):
    """Test heading, paragraph and divider defaults."""
    root = normalizer.normalize(_wire(components=[
        {"type": "heading", "text": "Hi"},
        {"type": "paragraph", "text": "Body", "ariaLabel": "intro"},
        {"type": "divider"},
    ]))

    heading, paragraph, divider = root.children
    assert heading.props == {"text": "Hi", "level": 2, "ariaLabel": ""}
    assert paragraph.props == {"text": "Body", "ariaLabel": "intro"}
    assert divider.type == "divider"
    assert divider.props == {"ariaLabel": ""}


@pytest.mark.unit
def test_input_unification(normalizer):
    """Test text-input and number-input become input nodes."""
    root = normalizer.normalize(_wire(components=[
        {"type": "text-input", "id": "name", "label": "Name"},
        {"type": "number-input", "id": "age", "label": "Age", "value": 3, "required": True},
    ]))

    text, number = root.children
    assert text.type == "input"
    assert text.id == "name"
    assert text.props["type"] == "text"
    assert text.props["label"] == "Name"
    assert text.props["placeholder"] == ""
    assert "pattern" not in text.props

    assert number.props["type"] == "number"
    assert number.props["value"] == 3
    assert number.props["required"] is True


@pytest.mark.unit
def test_passthrough_with_nested_components(normalizer):
    """Test pass-through types keep their fields and nest children."""
    root = normalizer.normalize(_wire(components=[
        {
            "type": "Card",
            "title": "Box",
            "components": [
                {"type": "button", "label": "Go", "events": {"click": "noop"}},
            ],
        },
    ]))

    card = root.children[0]
    assert card.type == "card"
    assert card.props == {"title": "Box"}
    assert card.children[0].type == "button"
    assert card.children[0].props == {"label": "Go"}
    assert card.children[0].events == {"click": "noop"}


@pytest.mark.unit
def test_nested_props_object_is_merged(normalizer):
    """Test a nested props object is merged under top-level fields."""
    root = normalizer.normalize(_wire(components=[
        {"type": "button", "props": {"label": "Inner", "size": "small"}, "label": "Outer"},
    ]))
    assert root.children[0].props == {"label": "Outer", "size": "small"}


@pytest.mark.unit
def test_unknown_component_degrades(normalizer):
    """Test unknown components become visible error nodes."""
    root = normalizer.normalize(_wire(components=[{"type": "map-view", "foo": 1}]))

    node = root.children[0]
    assert isinstance(node, UnsupportedNode)
    assert node.type == "error"
    assert node.original_type == "map-view"
    assert "map-view" in node.props["message"]
    assert node.props["title"] == "Unsupported component"
    assert node.props["dismissible"] is False
    assert node.props["visible"] is True
    assert json.loads(node.props["details"]) == {"type": "map-view", "foo": 1}


@pytest.mark.unit
def test_unsupported_node_serializes_as_plain_error():
    """Test the diagnostic source is not part of the serialized tree."""
    node = normalize_schema(_wire(components=["not a component"])).children[0]
    assert node.to_dict()["type"] == "error"
    assert "source" not in node.to_dict()


_json_leaf = st.one_of(st.none(), st.booleans(), st.integers(), st.text(max_size=10))
_wire_component = st.one_of(
    _json_leaf,
    st.fixed_dictionaries(
        {"type": st.one_of(
            st.sampled_from(["heading", "paragraph", "divider", "text-input", "number-input",
                             "select", "button", "card", "list", "unknown-thing"]),
            _json_leaf,
        )},
        optional={"text": _json_leaf, "label": _json_leaf, "components": st.lists(_json_leaf, max_size=3)},
    ),
)


@pytest.mark.unit
@given(
    layout=st.one_of(_json_leaf, st.dictionaries(st.sampled_from(["type", "columns", "gap"]), _json_leaf)),
    components=st.lists(_wire_component, max_size=6),
)
def test_normalization_totality(layout, components):
    """Property: every wire schema normalizes to typed nodes."""
    root = normalize_schema({"schemaVersion": "1", "layout": layout, "components": components})

    assert isinstance(root.type, str) and root.type
    stack = list(root.children)
    while stack:
        node = stack.pop()
        assert isinstance(node.type, str) and node.type
        stack.extend(node.children)
