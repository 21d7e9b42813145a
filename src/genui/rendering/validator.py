"""Schema Validator - checks a node against its capability contract."""

from dataclasses import dataclass, field
from typing import Any

from returns.result import Failure, Result, Success

from genui.components import ComponentRegistry, PropSpec
from genui.core import get_logger
from genui.schema import UINode

logger = get_logger(__name__)

# Declared type that accepts any value
ANY_TYPE = "any"


@dataclass(frozen=True)
class ValidationReport:
    """Outcome of validating one node."""

    valid: bool
    errors: tuple[str, ...] = field(default_factory=tuple)

    def summary(self) -> str:
        return ", ".join(self.errors)


def kind_of(value: Any) -> str:
    """Runtime kind name of a JSON value; lists are distinct from objects."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if callable(value):
        return "function"
    return "object"


class SchemaValidator:
    """
    Validates a node's type and props against the registry.

    Shallow: only the given node is checked, never its children.
    """

    def __init__(self, registry: ComponentRegistry) -> None:
        self.registry = registry

    def validate(self, node: UINode) -> ValidationReport:
        """
        Validate one node.

        Args:
            node: Node to check

        Returns:
            Report with every problem found, in declaration order
        """
        if not node.type:
            return ValidationReport(False, ("Schema missing type property",))

        capability = self.registry.get_capability(node.type)
        if capability is None:
            return ValidationReport(False, (f"Component type '{node.type}' not registered",))

        errors: list[str] = []
        for prop_name, spec in capability.props_schema.items():
            if prop_name == "children":
                continue
            errors.extend(self._check_prop(prop_name, node.props.get(prop_name), spec))

        children_spec = capability.props_schema.get("children")
        if children_spec is not None and children_spec.required and not node.children:
            errors.append(f"Component '{node.type}' requires children")

        if errors:
            logger.debug("validation_failed", type=node.type, errors=len(errors))
        return ValidationReport(not errors, tuple(errors))

    def validate_result(self, node: UINode) -> Result[UINode, ValidationReport]:
        """Validate (Result pattern version)."""
        report = self.validate(node)
        return Success(node) if report.valid else Failure(report)

    def _check_prop(self, name: str, value: Any, spec: PropSpec) -> list[str]:
        if value is None:
            return [f"Property '{name}' is required"] if spec.required else []

        errors = []
        allowed = spec.allowed_types
        actual = kind_of(value)
        if allowed and ANY_TYPE not in allowed and actual not in allowed:
            errors.append(f"Property '{name}' should be type {' | '.join(allowed)}, got {actual}")

        if spec.enum is not None and value not in spec.enum:
            allowed_values = ", ".join(str(v) for v in spec.enum)
            errors.append(f"Property '{name}' value '{value}' not in allowed values: {allowed_values}")

        return errors
