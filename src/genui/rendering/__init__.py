"""
Rendering
Validation, tree rendering and patch application for canonical schemas
"""

from .validator import SchemaValidator, ValidationReport, kind_of
from .patch import (
    JsonPatchEngine,
    PatchError,
    PatchFailure,
    PatchOperation,
    PatchResult,
    apply_json_patch,
    parse_path,
)
from .renderer import (
    RenderError,
    RenderResult,
    SchemaRenderer,
    json_to_schema,
    resolve_handler,
    schema_to_json,
)

__all__ = [
    "SchemaValidator",
    "ValidationReport",
    "kind_of",
    "JsonPatchEngine",
    "PatchError",
    "PatchFailure",
    "PatchOperation",
    "PatchResult",
    "apply_json_patch",
    "parse_path",
    "RenderError",
    "RenderResult",
    "SchemaRenderer",
    "json_to_schema",
    "resolve_handler",
    "schema_to_json",
]
