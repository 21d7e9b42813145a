"""Tests for schema validation."""

import pytest
from hypothesis import given, strategies as st
from returns.result import Failure, Success

from genui.components import BaseComponent, ComponentRegistry
from genui.rendering import SchemaValidator, kind_of
from genui.schema import UINode


@pytest.fixture
def strict_validator():
    """Validator over a registry with strict contracts."""
    registry = ComponentRegistry()
    registry.register("input", lambda: BaseComponent("input"), {
        "name": "input",
        "propsSchema": {
            "label": {"type": "string", "required": True},
            "value": {"type": ["string", "number"]},
            "size": {"type": "string", "enum": ["small", "large"]},
            "options": {"type": "array"},
            "meta": {"type": "any"},
        },
    })
    registry.register("stack", lambda: BaseComponent("stack"), {
        "name": "stack",
        "isContainer": True,
        "propsSchema": {"children": {"type": "array", "required": True}},
    })
    return SchemaValidator(registry)


@pytest.mark.unit
@pytest.mark.parametrize("value, kind", [
    (None, "null"),
    (True, "boolean"),
    (3, "number"),
    (2.5, "number"),
    ("x", "string"),
    ([1], "array"),
    ({"a": 1}, "object"),
    (print, "function"),
])
def test_kind_of(value, kind):
    """Test runtime kinds distinguish arrays from objects."""
    assert kind_of(value) == kind


@pytest.mark.unit
def test_missing_type_short_circuits(strict_validator):
    """Test a node without type gets exactly one error."""
    report = strict_validator.validate(UINode(props={"label": 3}))
    assert report.valid is False
    assert report.errors == ("Schema missing type property",)


@pytest.mark.unit
def test_unregistered_type_short_circuits(strict_validator):
    """Test unknown types get exactly one error."""
    report = strict_validator.validate(UINode(type="hologram"))
    assert report.errors == ("Component type 'hologram' not registered",)


@pytest.mark.unit
def test_required_prop(strict_validator):
    """Test required props must be present and non-null."""
    report = strict_validator.validate(UINode(type="input"))
    assert report.valid is False
    assert any("label" in e for e in report.errors)

    report = strict_validator.validate(UINode(type="input", props={"label": None}))
    assert report.errors == ("Property 'label' is required",)


@pytest.mark.unit
def test_type_mismatch_is_reported_not_coerced(strict_validator):
    """Test kind mismatches become errors and props stay untouched."""
    node = UINode(type="input", props={"label": 42, "options": {"a": 1}})
    report = strict_validator.validate(node)

    assert "Property 'label' should be type string, got number" in report.errors
    assert "Property 'options' should be type array, got object" in report.errors
    assert node.props["label"] == 42


@pytest.mark.unit
def test_union_and_any_types(strict_validator):
    """Test alternative type lists and the any wildcard."""
    for value in ("a", 1):
        report = strict_validator.validate(UINode(type="input", props={"label": "L", "value": value}))
        assert report.valid

    report = strict_validator.validate(UINode(type="input", props={"label": "L", "value": [1]}))
    assert report.errors == ("Property 'value' should be type string | number, got array",)

    report = strict_validator.validate(UINode(type="input", props={"label": "L", "meta": [1, {}]}))
    assert report.valid


@pytest.mark.unit
def test_enum_membership(strict_validator):
    """Test enum violations are reported."""
    report = strict_validator.validate(UINode(type="input", props={"label": "L", "size": "huge"}))
    assert report.errors == ("Property 'size' value 'huge' not in allowed values: small, large",)


@pytest.mark.unit
def test_required_children(strict_validator):
    """Test containers can require children."""
    report = strict_validator.validate(UINode(type="stack"))
    assert report.errors == ("Component 'stack' requires children",)

    report = strict_validator.validate(UINode(type="stack", children=[UINode(type="input")]))
    assert report.valid


@pytest.mark.unit
def test_validation_is_shallow(strict_validator):
    """Test invalid children do not fail the parent."""
    node = UINode(type="stack", children=[UINode(type="hologram")])
    assert strict_validator.validate(node).valid


@pytest.mark.unit
def test_validate_result(strict_validator):
    """Test Result pattern version."""
    good = UINode(type="input", props={"label": "L"})
    assert strict_validator.validate_result(good) == Success(good)

    result = strict_validator.validate_result(UINode(type="input"))
    assert isinstance(result, Failure)
    assert "label" in result.failure().summary()


@pytest.mark.unit
def test_library_accepts_normalized_output(validator, normalizer, sample_wire_schema):
    """Test normalized wire nodes validate against the built-in library."""
    root = normalizer.normalize(sample_wire_schema)
    assert validator.validate(root).valid
    for child in root.children:
        assert validator.validate(child).valid, child.type


@pytest.mark.unit
@given(
    node_type=st.sampled_from(["input", "stack", "hologram", None]),
    props=st.dictionaries(
        st.sampled_from(["label", "value", "size", "options", "meta"]),
        st.one_of(st.none(), st.booleans(), st.integers(), st.text(max_size=5), st.lists(st.integers(), max_size=2)),
    ),
)
def test_validation_determinism(node_type, props):
    """Property: validating the same node twice gives the same report."""
    registry = ComponentRegistry()
    registry.register("input", lambda: BaseComponent("input"), {
        "name": "input",
        "propsSchema": {
            "label": {"type": "string", "required": True},
            "size": {"type": "string", "enum": ["small", "large"]},
        },
    })
    validator = SchemaValidator(registry)
    node = UINode(type=node_type, props=props)

    assert validator.validate(node) == validator.validate(node)
