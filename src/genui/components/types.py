"""
Component Type Definitions
Capability contracts for renderable node types
"""

from typing import Any, Callable, Dict, List, Optional, Union
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ComponentCategory(str, Enum):
    """Component categories for organization and discovery"""
    FORM = "form"
    LAYOUT = "layout"
    DATA_DISPLAY = "data-display"
    NAVIGATION = "navigation"
    TYPOGRAPHY = "typography"
    ERROR = "error"


class ContractModel(BaseModel):
    """Base for capability metadata; accepts camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class PropSpec(ContractModel):
    """
    Declared contract of a single prop.

    Used only for validation; values are never coerced to match.
    """
    type: Optional[Union[str, List[str]]] = None
    enum: Optional[List[Any]] = None
    required: bool = False
    default: Any = None
    description: str = ""

    @property
    def allowed_types(self) -> List[str]:
        if self.type is None:
            return []
        return list(self.type) if isinstance(self.type, list) else [self.type]


class Capability(ContractModel):
    """Contract of a registered component type"""
    name: str
    description: str = ""
    category: Optional[ComponentCategory] = None
    props_schema: Dict[str, PropSpec] = Field(default_factory=dict)
    events_schema: Dict[str, Any] = Field(default_factory=dict)
    is_container: bool = False
    content_host: Optional[str] = None

    def host_property(self) -> str:
        """Attribute name of the child mount point on live instances."""
        return self.content_host or "contentHost"


class RegisteredComponent(BaseModel):
    """Registry entry: factory plus its capability contract"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    type: str
    factory: Callable[[], Any]
    capability: Capability
