"""Pytest configuration and fixtures."""

import os
from typing import Any

import pytest

from genui.components import ComponentRegistry, ViewHost, register_library_components
from genui.core import Settings, create_container
from genui.handlers import UIHandler
from genui.rendering import JsonPatchEngine, SchemaRenderer, SchemaValidator
from genui.schema import SchemaNormalizer, UINode
from genui.streaming import StreamingController


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["GENUI_LOG_LEVEL"] = "DEBUG"


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings, independent of the cached instance."""
    return Settings()


@pytest.fixture
def di_container(settings):
    """Dependency injection container for testing."""
    return create_container(settings)


@pytest.fixture
def registry():
    """Registry loaded with the built-in library."""
    return register_library_components(ComponentRegistry())


@pytest.fixture
def empty_registry():
    return ComponentRegistry()


@pytest.fixture
def host():
    """Fresh root mount point."""
    return ViewHost("root")


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def validator(registry):
    return SchemaValidator(registry)


@pytest.fixture
def normalizer():
    return SchemaNormalizer()


@pytest.fixture
def renderer(registry, validator, settings):
    return SchemaRenderer(registry, validator, settings)


@pytest.fixture
def patch_engine():
    return JsonPatchEngine()


@pytest.fixture
def streaming(settings):
    return StreamingController(settings)


@pytest.fixture
def ui_handler(registry, normalizer, validator, renderer, patch_engine, streaming, settings):
    """Handler wired with fresh engine parts."""
    return UIHandler(
        registry=registry,
        normalizer=normalizer,
        validator=validator,
        renderer=renderer,
        patch_engine=patch_engine,
        streaming=streaming,
        settings=settings,
    )


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture
def sample_wire_schema() -> dict[str, Any]:
    """Wire schema as produced by the generator."""
    return {
        "schemaVersion": "1",
        "layout": {"type": "grid", "columns": 2},
        "components": [
            {"type": "heading", "id": "title", "text": "Sign up", "level": 1},
            {"type": "text-input", "id": "email", "label": "Email", "placeholder": "you@example.com"},
            {"type": "button", "id": "submit", "label": "Submit", "variant": "primary"},
        ],
    }


@pytest.fixture
def sample_tree() -> UINode:
    """Canonical card with two children."""
    return UINode.model_validate({
        "type": "card",
        "props": {"title": "Profile"},
        "children": [
            {"type": "heading", "props": {"text": "Details", "level": 2}},
            {"type": "paragraph", "props": {"text": "Hello"}},
        ],
    })
