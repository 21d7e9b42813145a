"""
GenUI Engine
Declarative UI rendering and incremental patching for AI-generated schemas
"""

from genui.core import create_container, get_settings, configure_logging
from genui.components import ComponentRegistry, ViewHost, register_library_components
from genui.schema import UINode, normalize_schema
from genui.rendering import JsonPatchEngine, SchemaRenderer, SchemaValidator, apply_json_patch
from genui.streaming import StreamChunk, StreamingController
from genui.handlers import UIHandler

__version__ = "0.1.0"

__all__ = [
    "create_container",
    "get_settings",
    "configure_logging",
    "ComponentRegistry",
    "ViewHost",
    "register_library_components",
    "UINode",
    "normalize_schema",
    "JsonPatchEngine",
    "SchemaRenderer",
    "SchemaValidator",
    "apply_json_patch",
    "StreamChunk",
    "StreamingController",
    "UIHandler",
]
