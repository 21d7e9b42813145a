"""UI Handler."""

import asyncio
from typing import Any, Iterable, Optional

from pydantic import BaseModel, Field, ValidationError
from returns.result import Failure

from genui.components import Capability, ComponentRegistry, ViewHost
from genui.core import (
    JSONParseError,
    LogContext,
    Settings,
    check_payload,
    extract_json,
    get_logger,
    get_settings,
    trace_operation,
)
from genui.monitoring import metrics_collector
from genui.rendering import JsonPatchEngine, RenderResult, SchemaRenderer, SchemaValidator
from genui.schema import SchemaNormalizer, UINode
from genui.streaming import ChunkType, StreamChunk, StreamingController

logger = get_logger(__name__)


class DynamicUIState(BaseModel):
    """Displayed schema and its bookkeeping."""

    current_schema: Optional[UINode] = None
    loading: bool = False
    error: Optional[str] = None
    schema_history: list[UINode] = Field(default_factory=list)


class UIHandler:
    """
    Caller-facing surface of the engine.

    A failed load or patch records ``state.error`` and leaves the
    current schema untouched.
    """

    def __init__(
        self,
        registry: ComponentRegistry,
        normalizer: SchemaNormalizer,
        validator: SchemaValidator,
        renderer: SchemaRenderer,
        patch_engine: JsonPatchEngine,
        streaming: StreamingController,
        settings: Optional[Settings] = None,
    ) -> None:
        self.registry = registry
        self.normalizer = normalizer
        self.validator = validator
        self.renderer = renderer
        self.patch_engine = patch_engine
        self.streaming = streaming
        self.settings = settings or get_settings()
        self.state = DynamicUIState()
        self.last_render: Optional[RenderResult] = None

    def load_schema(self, raw: UINode | dict[str, Any]) -> bool:
        """
        Normalize, validate and display a complete schema.

        Args:
            raw: Canonical or wire-format schema

        Returns:
            True if the schema became current
        """
        payload = raw.to_dict() if isinstance(raw, UINode) else raw
        checked = check_payload(payload, self.settings.max_schema_size, self.settings.max_schema_depth)
        if isinstance(checked, Failure):
            metrics_collector.record_schema_load("rejected")
            self._set_error(f"Schema rejected: {checked.failure().message}")
            return False

        try:
            node = self.normalizer.normalize(raw)
        except ValidationError as e:
            metrics_collector.record_schema_load("invalid")
            self._set_error(f"Failed to load schema: {e}")
            return False

        report = self.validator.validate(node)
        if not report.valid:
            metrics_collector.record_schema_load("invalid")
            metrics_collector.record_validation_failure(node.type)
            self._set_error(f"Schema validation failed: {report.summary()}")
            return False

        self._commit(node)
        metrics_collector.record_schema_load("success")
        logger.info("schema_loaded", type=node.type, children=len(node.children))
        return True

    def load_schema_json(self, text: str) -> bool:
        """Load a schema from LLM output text."""
        try:
            raw = extract_json(text)
        except JSONParseError as e:
            metrics_collector.record_schema_load("unparseable")
            self._set_error(f"Failed to parse schema: {e}")
            return False
        return self.load_schema(raw)

    def apply_patch_updates(self, patches: Iterable[Any]) -> bool:
        """
        Apply incremental updates to the current schema.

        Failing operations are skipped; the result must still validate
        before it replaces the current schema.

        Returns:
            True if the patched schema became current
        """
        current = self.state.current_schema
        if current is None:
            self._set_error("No current schema to patch")
            return False

        patches = list(patches)
        with trace_operation("apply_patch", patches=len(patches)) as extra:
            result = self.patch_engine.apply(current, patches)
            extra["skipped"] = len(result.skipped)

        try:
            node = self.normalizer.normalize(result.tree)
        except ValidationError as e:
            self._set_error(f"Patched schema is not a valid tree: {e}")
            return False

        report = self.validator.validate(node)
        if not report.valid:
            metrics_collector.record_validation_failure(node.type)
            self._set_error(f"Patched schema validation failed: {report.summary()}")
            return False

        self._commit(node)
        logger.info("patches_applied", applied=result.applied, skipped=len(result.skipped))
        return True

    def get_current_schema(self) -> Optional[UINode]:
        return self.state.current_schema

    def clear_schema(self) -> None:
        self.state.current_schema = None
        self.state.error = None

    def set_loading(self, loading: bool) -> None:
        self.state.loading = loading

    def get_schema_history(self) -> list[UINode]:
        return list(self.state.schema_history)

    def revert_to_previous(self) -> bool:
        """Make the previous schema current again; needs two history entries."""
        history = self.state.schema_history
        if len(history) < 2:
            return False

        history.pop()
        self.state.current_schema = history[-1]
        metrics_collector.set_history_size(len(history))
        logger.info("schema_reverted", history=len(history))
        return True

    def get_available_component_types(self) -> list[str]:
        return self.registry.get_registered_types()

    def get_component_capability(self, type: str) -> Optional[Capability]:
        return self.registry.get_capability(type)

    def render_current_schema(self, host: Optional[ViewHost]) -> Any:
        """
        Render the current schema into ``host``, clearing it first.

        Returns:
            Root component instance, or None when rendering failed
        """
        if host is None:
            self._set_error("Missing mount target for rendering")
            return None

        current = self.state.current_schema
        if current is None:
            self._set_error("No schema loaded to render")
            return None

        with LogContext(schema_id=current.id or current.type):
            result = self.renderer.mount(current, host)
        self.last_render = result

        if result.error:
            self._set_error(result.error)
            return None
        return result.component

    async def render_when_ready(self, host: Optional[ViewHost]) -> Any:
        """Render after yielding one event-loop turn so the host can settle."""
        await asyncio.sleep(0)
        return self.render_current_schema(host)

    def start_stream(self) -> None:
        self.streaming.start_streaming()
        self.set_loading(True)

    def handle_chunk(self, chunk: StreamChunk | dict[str, Any]) -> bool:
        """
        Feed one stream chunk.

        A completed stream is loaded like any schema; a failed one
        records the error and keeps the current schema.

        Returns:
            True if the chunk completed the stream with a schema now current
        """
        if not isinstance(chunk, StreamChunk):
            try:
                chunk = StreamChunk.model_validate(chunk)
            except ValidationError as e:
                logger.warning("stream_chunk_invalid", error=str(e))
                return False

        if not self.streaming.add_chunk(chunk) or chunk.type is ChunkType.PARTIAL:
            return False

        self.set_loading(False)
        if self.streaming.error is not None:
            self._set_error(f"Stream failed: {self.streaming.error}")
            return False
        return self.load_schema(self.streaming.current_schema)

    def _commit(self, node: UINode) -> None:
        history = self.state.schema_history
        history.append(node)
        overflow = len(history) - self.settings.history_limit
        if overflow > 0:
            del history[:overflow]

        self.state.current_schema = node
        self.state.error = None
        metrics_collector.set_history_size(len(history))

    def _set_error(self, error: str) -> None:
        self.state.error = error
        self.state.loading = False
        logger.warning("ui_error", error=error)
