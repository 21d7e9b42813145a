"""
Component Library
Built-in component catalog registered at startup
"""

from functools import partial
from typing import Any, Callable, Dict, List

from genui.core import get_logger
from .base import BaseComponent, ContainerComponent, TabsComponent
from .registry import ComponentRegistry
from .types import Capability

logger = get_logger(__name__)


def _options(label: str = "Array of options") -> Dict[str, Any]:
    return {
        "type": "array",
        "items": {"type": "object", "properties": {"label": {"type": "string"}, "value": {"type": "any"}}},
        "description": label,
    }


_FIELD_EVENTS = {
    "valueChange": "Emits the new value",
    "change": "Emits the committed value",
    "blur": "Field lost focus",
}

# Container types and the attribute exposing their child mount point
CONTAINER_HOSTS: Dict[str, str] = {
    "container": "containerHost",
    "grid": "gridHost",
    "card": "cardContent",
    "tabs": "tabsHost",
    "flexbox": "flexHost",
    "accordion": "accordionHost",
    "toolbar": "toolbarHost",
}

COMPONENT_LIBRARY: List[Dict[str, Any]] = [
    # Form Components
    {
        "name": "input",
        "category": "form",
        "description": "Text input field with label, placeholder, and validation",
        "propsSchema": {
            "id": {"type": "string", "description": "Unique identifier"},
            "type": {
                "type": "string",
                "enum": ["text", "email", "password", "number", "tel", "url"],
                "default": "text",
            },
            "label": {"type": "string", "description": "Field label"},
            "placeholder": {"type": "string", "description": "Placeholder text"},
            "value": {"type": ["string", "number"], "description": "Current value"},
            "disabled": {"type": "boolean", "default": False},
            "required": {"type": "boolean", "default": False},
            "pattern": {"type": "string", "description": "Regex pattern for validation"},
            "error": {"type": "string", "description": "Error message"},
        },
        "eventsSchema": _FIELD_EVENTS,
    },
    {
        "name": "select",
        "category": "form",
        "description": "Dropdown select field with options",
        "propsSchema": {
            "id": {"type": "string", "description": "Unique identifier"},
            "label": {"type": "string", "description": "Field label"},
            "placeholder": {"type": "string", "description": "Placeholder text"},
            "value": {"type": "any", "description": "Current value"},
            "options": _options(),
            "disabled": {"type": "boolean", "default": False},
            "required": {"type": "boolean", "default": False},
            "error": {"type": "string", "description": "Error message"},
        },
        "eventsSchema": _FIELD_EVENTS,
    },
    {
        "name": "checkbox",
        "category": "form",
        "description": "Checkbox input with label",
        "propsSchema": {
            "id": {"type": "string", "description": "Unique identifier"},
            "label": {"type": "string", "description": "Field label"},
            "checked": {"type": "boolean", "default": False},
            "disabled": {"type": "boolean", "default": False},
            "error": {"type": "string", "description": "Error message"},
        },
        "eventsSchema": {"checkedChange": "Emits the checked state", "change": "", "blur": ""},
    },
    {
        "name": "radio",
        "category": "form",
        "description": "Radio button group with multiple options",
        "propsSchema": {
            "id": {"type": "string", "description": "Unique identifier"},
            "groupLabel": {"type": "string", "description": "Group label"},
            "value": {"type": "any", "description": "Currently selected value"},
            "options": _options("Array of radio options"),
            "disabled": {"type": "boolean", "default": False},
            "error": {"type": "string", "description": "Error message"},
        },
        "eventsSchema": {"valueChange": "Emits the selected value", "change": ""},
    },
    {
        "name": "textarea",
        "category": "form",
        "description": "Multi-line text input field",
        "propsSchema": {
            "id": {"type": "string", "description": "Unique identifier"},
            "label": {"type": "string", "description": "Field label"},
            "placeholder": {"type": "string", "description": "Placeholder text"},
            "value": {"type": "string", "description": "Current value"},
            "rows": {"type": "number", "default": 4},
            "cols": {"type": "number", "default": 50},
            "maxLength": {"type": "number", "description": "Maximum character count"},
            "disabled": {"type": "boolean", "default": False},
            "required": {"type": "boolean", "default": False},
            "error": {"type": "string", "description": "Error message"},
        },
        "eventsSchema": _FIELD_EVENTS,
    },
    {
        "name": "button",
        "category": "form",
        "description": "Interactive button with variants and states",
        "propsSchema": {
            "label": {"type": "string", "description": "Button text"},
            "type": {"type": "string", "enum": ["button", "submit", "reset"], "default": "button"},
            "variant": {
                "type": "string",
                "enum": ["primary", "secondary", "danger", "success"],
                "default": "primary",
            },
            "size": {"type": "string", "enum": ["small", "medium", "large"], "default": "medium"},
            "disabled": {"type": "boolean", "default": False},
            "loading": {"type": "boolean", "default": False},
        },
        "eventsSchema": {"click": "Button pressed"},
    },
    # Layout Components
    {
        "name": "container",
        "category": "layout",
        "description": "Container wrapper with max-width and variants",
        "propsSchema": {
            "maxWidth": {"type": "number", "default": 1200, "description": "Max width in pixels"},
            "variant": {"type": "string", "enum": ["default", "fluid", "card"], "default": "default"},
        },
    },
    {
        "name": "grid",
        "category": "layout",
        "description": "CSS Grid layout component",
        "propsSchema": {
            "columns": {
                "type": ["number", "string"],
                "default": 1,
                "description": "Number of columns or grid template string",
            },
            "gap": {"type": "number", "default": 16, "description": "Gap in pixels"},
        },
    },
    {
        "name": "card",
        "category": "layout",
        "description": "Card container with header, content, and footer",
        "propsSchema": {
            "title": {"type": "string", "description": "Card title"},
            "padding": {"type": "number", "default": 1, "description": "Padding in rem"},
            "elevated": {"type": "boolean", "default": True, "description": "Add shadow"},
            "footer": {"type": "boolean", "default": False, "description": "Show footer"},
        },
    },
    {
        "name": "tabs",
        "category": "layout",
        "description": "Tabbed interface, one child per tab panel",
        "propsSchema": {
            "tabs": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "label": {"type": "string"},
                        "value": {"type": "string"},
                        "disabled": {"type": "boolean"},
                    },
                },
                "description": "Array of tab definitions",
            },
            "defaultTab": {"type": "string", "description": "Default active tab"},
            "selectionMode": {"type": "string", "enum": ["follow", "explicit"], "default": "follow"},
            "orientation": {"type": "string", "enum": ["horizontal", "vertical"], "default": "horizontal"},
        },
        "eventsSchema": {"tabChange": "Emits the active tab value"},
    },
    {
        "name": "accordion",
        "category": "layout",
        "description": "Expandable/collapsible sections",
        "propsSchema": {
            "items": {"type": "array", "description": "Array of accordion items"},
            "multiExpandable": {"type": "boolean", "default": True, "description": "Allow multiple panels open"},
        },
    },
    {
        "name": "flexbox",
        "category": "layout",
        "description": "Flexbox layout component",
        "propsSchema": {
            "direction": {
                "type": "string",
                "enum": ["row", "column", "row-reverse", "column-reverse"],
                "default": "column",
            },
            "alignItems": {
                "type": "string",
                "enum": ["stretch", "flex-start", "center", "flex-end", "baseline"],
                "default": "stretch",
            },
            "justifyContent": {
                "type": "string",
                "enum": ["flex-start", "center", "flex-end", "space-between", "space-around", "space-evenly"],
                "default": "flex-start",
            },
            "wrap": {"type": "string", "enum": ["nowrap", "wrap", "wrap-reverse"], "default": "nowrap"},
            "gap": {"type": ["number", "string"], "default": 0},
            "padding": {"type": ["number", "string"], "default": 0},
        },
    },
    # Data Display Components
    {
        "name": "table",
        "category": "data-display",
        "description": "Data table with striping and borders",
        "propsSchema": {
            "columns": {"type": "array", "description": "Column definitions"},
            "data": {"type": "array", "description": "Table data rows"},
            "striped": {"type": "boolean", "default": True},
            "bordered": {"type": "boolean", "default": True},
            "hoverable": {"type": "boolean", "default": True},
        },
        "eventsSchema": {"rowClick": "Emits the clicked row"},
    },
    {
        "name": "list",
        "category": "data-display",
        "description": "List component with items and descriptions",
        "propsSchema": {
            "items": {"type": "array", "description": "Array of list items"},
            "styled": {"type": "boolean", "default": True},
        },
        "eventsSchema": {"itemClick": "Emits the clicked item"},
    },
    {
        "name": "listbox",
        "category": "data-display",
        "description": "Accessible listbox with keyboard navigation and selection",
        "propsSchema": {
            "options": _options("Array of listbox options"),
            "label": {"type": "string", "description": "Listbox label"},
            "multi": {"type": "boolean", "default": False, "description": "Allow multiple selection"},
            "orientation": {"type": "string", "enum": ["vertical", "horizontal"], "default": "vertical"},
            "selectionMode": {"type": "string", "enum": ["follow", "explicit"], "default": "explicit"},
        },
        "eventsSchema": {"selectionChange": "Emits the selected values"},
    },
    {
        "name": "basic-chart",
        "category": "data-display",
        "description": "Basic chart component with bar, line, and pie charts",
        "propsSchema": {
            "data": {"type": "array", "description": "Chart data points"},
            "title": {"type": "string", "description": "Chart title"},
            "type": {"type": "string", "enum": ["bar", "line", "pie"], "default": "bar"},
            "width": {"type": "number", "default": 400},
            "height": {"type": "number", "default": 300},
        },
    },
    # Typography Components
    {
        "name": "heading",
        "category": "typography",
        "description": "Heading text with configurable level",
        "propsSchema": {
            "text": {"type": "string", "description": "Heading text"},
            "level": {"type": "number", "default": 2, "description": "Heading level (1-6)"},
            "ariaLabel": {"type": "string", "description": "Accessibility label"},
        },
    },
    {
        "name": "paragraph",
        "category": "typography",
        "description": "Paragraph text",
        "propsSchema": {
            "text": {"type": "string", "description": "Paragraph text"},
            "ariaLabel": {"type": "string", "description": "Accessibility label"},
        },
    },
    {
        "name": "divider",
        "category": "typography",
        "description": "Horizontal divider line",
        "propsSchema": {
            "ariaLabel": {"type": "string", "description": "Accessibility label"},
        },
    },
    # Navigation Components
    {
        "name": "wizard-stepper",
        "category": "navigation",
        "description": "Multi-step wizard with stepper UI",
        "propsSchema": {
            "steps": {"type": "array", "description": "Array of wizard steps"},
        },
        "eventsSchema": {"stepChange": "Emits the new step index", "back": "", "next": "", "finish": ""},
    },
    {
        "name": "menu",
        "category": "navigation",
        "description": "Dropdown menu with keyboard navigation and groups",
        "propsSchema": {
            "actions": {"type": "array", "description": "Array of menu actions"},
            "triggerLabel": {"type": "string", "default": "Menu", "description": "Trigger button text"},
        },
        "eventsSchema": {"actionSelected": "Emits the chosen action value"},
    },
    {
        "name": "toolbar",
        "category": "navigation",
        "description": "Accessible toolbar with keyboard navigation",
        "propsSchema": {
            "orientation": {"type": "string", "enum": ["horizontal", "vertical"], "default": "horizontal"},
            "ariaLabel": {"type": "string", "default": "Toolbar", "description": "Accessible label"},
        },
    },
    # Error Component
    {
        "name": "error",
        "category": "error",
        "description": "Error display with retry and reporting options",
        "propsSchema": {
            "title": {"type": "string", "description": "Error title"},
            "message": {"type": "string", "description": "Error message"},
            "details": {"type": "string", "description": "Detailed error information"},
            "dismissible": {"type": "boolean", "default": True},
            "visible": {"type": "boolean", "default": True},
        },
        "eventsSchema": {"retry": "", "tryDifferent": "", "reportIssue": "", "close": ""},
    },
]


def build_factory(capability: Capability) -> Callable[[], BaseComponent]:
    """Reference host-runtime factory for a catalog capability."""
    outputs = tuple(capability.events_schema)
    if capability.name == "tabs":
        return partial(TabsComponent, capability.name, capability.host_property(), outputs)
    if capability.is_container:
        return partial(ContainerComponent, capability.name, capability.host_property(), outputs)
    return partial(BaseComponent, capability.name, outputs)


def library_capabilities() -> List[Capability]:
    """Capabilities of the built-in library, container semantics applied."""
    capabilities = []
    for entry in COMPONENT_LIBRARY:
        data = dict(entry)
        host = CONTAINER_HOSTS.get(entry["name"])
        if host:
            data.update(isContainer=True, contentHost=host)
        capabilities.append(Capability.model_validate(data))
    return capabilities


def register_library_components(registry: ComponentRegistry) -> ComponentRegistry:
    """Register all library components into ``registry``."""
    for capability in library_capabilities():
        registry.register(capability.name, build_factory(capability), capability)

    logger.info("library_registered", components=len(registry))
    return registry
