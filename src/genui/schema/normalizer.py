"""Schema Normalizer - AI wire schema to canonical UINode tree."""

from typing import Any, Dict, List

from genui.core import get_logger, safe_json_dumps
from .models import UINode, UnsupportedNode

logger = get_logger(__name__)

# Layout kinds kept as their own root type; anything else becomes "container"
LAYOUT_TYPES = frozenset({"flexbox", "grid", "card"})

# Wire component types copied through with their fields as props
PASSTHROUGH_TYPES = frozenset({
    "select", "checkbox", "radio", "textarea", "button", "card", "grid", "list",
})

INPUT_TYPES = {"text-input": "text", "number-input": "number"}

# Keys that describe structure rather than props
_STRUCTURAL_KEYS = frozenset({"type", "props", "components", "children", "events"})


def is_wire_schema(raw: Any) -> bool:
    """Wire format carries a schemaVersion marker and a components array."""
    return (
        isinstance(raw, dict)
        and raw.get("schemaVersion") is not None
        and isinstance(raw.get("components"), list)
    )


class SchemaNormalizer:
    """
    Normalizes external AI schemas into the canonical tree.

    Never fails on unknown wire components: they degrade to a visible
    ``error`` node so the rest of the tree still renders.
    """

    def normalize(self, raw: UINode | Dict[str, Any]) -> UINode:
        """
        Return ``raw`` as a canonical UINode.

        Args:
            raw: Canonical node/dict, or wire schema ({schemaVersion, layout, components})

        Returns:
            Canonical root node
        """
        if isinstance(raw, UINode):
            return raw

        if not is_wire_schema(raw):
            return UINode.model_validate(raw)

        layout = raw.get("layout")
        if not isinstance(layout, dict):
            layout = {}

        root_type = self._resolve_layout_type(layout.get("type"))
        children = self._expand_components(raw["components"])

        logger.debug(
            "wire_schema_normalized",
            root=root_type,
            components=len(children),
            schema_version=raw.get("schemaVersion"),
        )
        return UINode(type=root_type, props=self._layout_props(root_type, layout), children=children)

    def _resolve_layout_type(self, layout_type: Any) -> str:
        kind = str(layout_type).lower() if layout_type is not None else ""
        return kind if kind in LAYOUT_TYPES else "container"

    def _layout_props(self, root_type: str, layout: Dict[str, Any]) -> Dict[str, Any]:
        """Root props per layout kind; other layout fields are dropped."""
        match root_type:
            case "flexbox":
                keys = ("direction", "gap", "padding", "alignItems", "justifyContent")
                return {k: layout[k] for k in keys if layout.get(k) is not None}
            case "grid":
                return {"columns": layout.get("columns", 1), "gap": layout.get("gap", 16)}
            case "card":
                return {"title": layout.get("title", "")}
            case _:
                return {
                    "maxWidth": layout.get("maxWidth", 1200),
                    "variant": layout.get("variant", "default"),
                }

    def _expand_components(self, components: List[Any]) -> List[UINode]:
        """Recursively expand a wire component list"""
        return [self._expand_component(comp) for comp in components]

    def _expand_component(self, comp: Any) -> UINode:
        if not isinstance(comp, dict) or not isinstance(comp.get("type"), str):
            return self._unsupported(comp)

        wire_type = comp["type"]
        kind = wire_type.lower()
        fields = self._fields(comp)

        if kind == "heading":
            props = {
                "text": fields.get("text", ""),
                "level": fields.get("level", 2),
                "ariaLabel": fields.get("ariaLabel", ""),
            }
            return self._node(comp, "heading", props)

        if kind == "paragraph":
            props = {"text": fields.get("text", ""), "ariaLabel": fields.get("ariaLabel", "")}
            return self._node(comp, "paragraph", props)

        if kind == "divider":
            return self._node(comp, "divider", {"ariaLabel": fields.get("ariaLabel", "")})

        if kind in INPUT_TYPES:
            return self._node(comp, "input", self._input_props(comp, fields, INPUT_TYPES[kind]))

        if kind in PASSTHROUGH_TYPES:
            node = self._node(comp, kind, fields)
            nested = comp.get("components")
            if isinstance(nested, list):
                node.children = self._expand_components(nested)
            return node

        return self._unsupported(comp)

    def _fields(self, comp: Dict[str, Any]) -> Dict[str, Any]:
        """Component fields; top-level keys win over a nested ``props`` object."""
        fields: Dict[str, Any] = {}
        if isinstance(comp.get("props"), dict):
            fields.update(comp["props"])
        fields.update({k: v for k, v in comp.items() if k not in _STRUCTURAL_KEYS})
        return fields

    def _input_props(self, comp: Dict[str, Any], fields: Dict[str, Any], input_type: str) -> Dict[str, Any]:
        props = {
            "id": comp.get("id", fields.get("id")),
            "type": input_type,
            "label": fields.get("label", ""),
            "placeholder": fields.get("placeholder", ""),
            "value": fields.get("value", ""),
            "disabled": fields.get("disabled", False),
            "required": fields.get("required", False),
            "pattern": fields.get("pattern"),
            "error": fields.get("error"),
        }
        # Optional fields are omitted rather than sent as null
        return {k: v for k, v in props.items() if v is not None}

    def _node(self, comp: Dict[str, Any], node_type: str, props: Dict[str, Any]) -> UINode:
        events = comp.get("events")
        comp_id = comp.get("id")
        return UINode(
            id=str(comp_id) if comp_id is not None else None,
            type=node_type,
            props=props,
            events=events if isinstance(events, dict) else {},
        )

    def _unsupported(self, comp: Any) -> UnsupportedNode:
        original = comp.get("type") if isinstance(comp, dict) else comp
        logger.warning("unsupported_component", type=str(original))
        return UnsupportedNode(
            props={
                "title": "Unsupported component",
                "message": f"Component type '{original}' is not supported yet.",
                "details": safe_json_dumps(comp),
                "dismissible": False,
                "visible": True,
            },
            source=comp,
        )


def normalize_schema(raw: UINode | Dict[str, Any]) -> UINode:
    """
    Convenience function to normalize a schema

    Args:
        raw: Canonical or wire-format schema

    Returns:
        Canonical root node
    """
    return SchemaNormalizer().normalize(raw)
