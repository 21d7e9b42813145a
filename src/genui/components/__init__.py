"""
Component System
Capability registry and host runtime for renderable node types
"""

from .types import (
    Capability,
    ComponentCategory,
    PropSpec,
    RegisteredComponent,
)
from .base import (
    BaseComponent,
    ContainerComponent,
    EventEmitter,
    Subscription,
    TabsComponent,
    ViewHost,
)
from .registry import ComponentRegistry, RegistryError
from .catalog import (
    COMPONENT_LIBRARY,
    CONTAINER_HOSTS,
    build_factory,
    library_capabilities,
    register_library_components,
)

__all__ = [
    "Capability",
    "ComponentCategory",
    "PropSpec",
    "RegisteredComponent",
    "BaseComponent",
    "ContainerComponent",
    "EventEmitter",
    "Subscription",
    "TabsComponent",
    "ViewHost",
    "ComponentRegistry",
    "RegistryError",
    "COMPONENT_LIBRARY",
    "CONTAINER_HOSTS",
    "build_factory",
    "library_capabilities",
    "register_library_components",
]
