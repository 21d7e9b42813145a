"""
Component Registry
Catalog of renderable node types and their capability contracts
"""

from typing import Any, Callable, Dict, Iterable, List, Optional

from pydantic import ValidationError

from genui.core import get_logger
from .types import Capability, ComponentCategory, RegisteredComponent

logger = get_logger(__name__)


class RegistryError(Exception):
    """Invalid component registration."""

    pass


class ComponentRegistry:
    """
    Registry of component factories keyed by node type.

    Read-mostly: entries are registered at startup and looked up by the
    validator and renderer. Registering an existing type replaces it.
    """

    def __init__(self):
        self._entries: Dict[str, RegisteredComponent] = {}

    def register(
        self,
        type: str,
        factory: Callable[[], Any],
        capability: Capability | Dict[str, Any],
    ) -> bool:
        """
        Register a component type (last write wins).

        Args:
            type: Node type key
            factory: Zero-argument callable producing a live instance
            capability: Capability contract (model or camelCase dict)

        Returns:
            True if an existing registration was replaced

        Raises:
            RegistryError: Empty type, non-callable factory or malformed capability
        """
        if not type:
            raise RegistryError("Component type must be a non-empty string")
        if not callable(factory):
            raise RegistryError(f"Factory for '{type}' is not callable")
        if not isinstance(capability, Capability):
            try:
                capability = Capability.model_validate(capability)
            except ValidationError as e:
                raise RegistryError(f"Invalid capability for '{type}': {e}") from e

        replaced = type in self._entries
        if replaced:
            logger.warning("component_replaced", type=type)

        self._entries[type] = RegisteredComponent(type=type, factory=factory, capability=capability)
        return replaced

    def register_batch(self, entries: Iterable[RegisteredComponent]) -> None:
        """Register multiple components at once"""
        for entry in entries:
            self.register(entry.type, entry.factory, entry.capability)

    def get(self, type: str) -> Optional[RegisteredComponent]:
        return self._entries.get(type)

    def has(self, type: str) -> bool:
        return type in self._entries

    def get_capability(self, type: str) -> Optional[Capability]:
        entry = self._entries.get(type)
        return entry.capability if entry else None

    def get_registered_types(self) -> List[str]:
        return list(self._entries.keys())

    def get_all(self) -> List[RegisteredComponent]:
        return list(self._entries.values())

    def list_by_category(self, category: ComponentCategory) -> List[Capability]:
        """List capabilities in a category"""
        return [
            e.capability for e in self._entries.values()
            if e.capability.category == category
        ]

    def unregister(self, type: str) -> bool:
        """Unregister a component; returns whether it was registered"""
        if type in self._entries:
            del self._entries[type]
            logger.info("component_unregistered", type=type)
            return True
        return False

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, type: object) -> bool:
        return type in self._entries

    def get_stats(self) -> Dict[str, Any]:
        """Get registry statistics"""
        categories: Dict[str, int] = {}
        for entry in self._entries.values():
            cat = entry.capability.category.value if entry.capability.category else "uncategorized"
            categories[cat] = categories.get(cat, 0) + 1

        return {
            "total_components": len(self._entries),
            "containers": sum(1 for e in self._entries.values() if e.capability.is_container),
            "categories": categories,
        }
