"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from genui.components import ComponentRegistry, register_library_components
from genui.handlers import UIHandler
from genui.rendering import JsonPatchEngine, SchemaRenderer, SchemaValidator
from genui.schema import SchemaNormalizer
from genui.streaming import StreamingController
from .config import Settings, get_settings
from .logging_config import configure_from_settings


class EngineModule(Module):
    """Engine dependencies, one instance of each per injector."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings or get_settings()

    @singleton
    @provider
    def provide_registry(self) -> ComponentRegistry:
        """Provide registry pre-loaded with the built-in library."""
        return register_library_components(ComponentRegistry())

    @singleton
    @provider
    def provide_validator(self, registry: ComponentRegistry) -> SchemaValidator:
        return SchemaValidator(registry)

    @singleton
    @provider
    def provide_normalizer(self) -> SchemaNormalizer:
        return SchemaNormalizer()

    @singleton
    @provider
    def provide_renderer(
        self, registry: ComponentRegistry, validator: SchemaValidator, settings: Settings
    ) -> SchemaRenderer:
        return SchemaRenderer(registry, validator, settings)

    @singleton
    @provider
    def provide_patch_engine(self) -> JsonPatchEngine:
        return JsonPatchEngine()

    @singleton
    @provider
    def provide_streaming(self, settings: Settings) -> StreamingController:
        return StreamingController(settings)

    @singleton
    @provider
    def provide_ui_handler(
        self,
        registry: ComponentRegistry,
        normalizer: SchemaNormalizer,
        validator: SchemaValidator,
        renderer: SchemaRenderer,
        patch_engine: JsonPatchEngine,
        streaming: StreamingController,
        settings: Settings,
    ) -> UIHandler:
        """Provide the caller-facing handler with all dependencies."""
        return UIHandler(
            registry=registry,
            normalizer=normalizer,
            validator=validator,
            renderer=renderer,
            patch_engine=patch_engine,
            streaming=streaming,
            settings=settings,
        )


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector, applying the logging settings first."""
    module = EngineModule(settings)
    configure_from_settings(settings or get_settings())
    return Injector([module])
