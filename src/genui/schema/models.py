"""UI Schema Data Models."""

from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_serializer


class UINode(BaseModel):
    """
    Canonical schema unit: one node of the declarative UI tree.

    ``type`` may be absent; that is reported by validation, not rejected
    here. Unknown top-level keys (e.g. ``rendererVersion``) are kept.
    """

    model_config = ConfigDict(extra="allow")

    id: str | None = Field(default=None, description="Unique identifier")
    type: str | None = Field(default=None, description="Registered component type")
    props: dict[str, Any] = Field(default_factory=dict)
    children: list["UINode"] = Field(default_factory=list)
    events: dict[str, Any] = Field(default_factory=dict)

    @field_validator("props", "events", mode="before")
    @classmethod
    def _null_mapping(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("children", mode="before")
    @classmethod
    def _null_children(cls, v: Any) -> Any:
        return [] if v is None else v

    @model_serializer(mode="wrap")
    def _omit_missing_identity(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        for key in ("id", "type"):
            if data.get(key) is None:
                data.pop(key, None)
        return data

    @property
    def renderer_version(self) -> str | None:
        extra = self.model_extra or {}
        return extra.get("rendererVersion")

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-shaped dict of this subtree."""
        return self.model_dump()


class UnsupportedNode(UINode):
    """
    Visible stand-in for a wire component the engine cannot map.

    Serializes as an ordinary ``error`` node; the original component is
    kept on ``source`` for diagnostics only.
    """

    type: str | None = "error"
    source: Any = Field(default=None, exclude=True)

    @property
    def original_type(self) -> str:
        if isinstance(self.source, dict):
            return str(self.source.get("type"))
        return type(self.source).__name__


UINode.model_rebuild()
