"""
UI Schema
Canonical node model and external schema normalization
"""

from .models import UINode, UnsupportedNode
from .normalizer import SchemaNormalizer, is_wire_schema, normalize_schema

__all__ = [
    "UINode",
    "UnsupportedNode",
    "SchemaNormalizer",
    "is_wire_schema",
    "normalize_schema",
]
