"""
Streaming Controller
State machine accumulating streamed UI chunks until a schema completes.

States: IDLE -> STREAMING -> {COMPLETE | ERROR}; COMPLETE and ERROR go
back to STREAMING when a new stream starts. The controller never
renders; callers normalize, validate and render the completed schema.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, AsyncIterable, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from genui.core import JSONParseError, Settings, extract_json, get_logger, get_settings, serialized_size
from genui.monitoring import metrics_collector

logger = get_logger(__name__)


class StreamState(str, Enum):
    IDLE = "idle"
    STREAMING = "streaming"
    COMPLETE = "complete"
    ERROR = "error"


class ChunkType(str, Enum):
    PARTIAL = "partial"
    COMPLETE = "complete"
    ERROR = "error"


class StreamChunk(BaseModel):
    """One unit delivered by the transport."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: ChunkType
    data: Any = None
    sequence_id: Optional[int] = Field(default=None, alias="sequenceId")


class UIState(BaseModel):
    """Snapshot of the controller."""

    state: StreamState
    current_schema: Any = None
    streaming_chunks: list[StreamChunk] = Field(default_factory=list)
    is_streaming: bool = False
    completion_percentage: int = 0
    last_update: Optional[datetime] = None
    error: Optional[str] = None


class StreamingController:
    """
    Owns the in-flight stream and the last completed schema.

    Progress is a size heuristic: the serialized bytes of partial chunk
    payloads against ``progress_byte_budget``, capped at ``progress_cap``
    until the stream completes.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self._reset()

    def _reset(self) -> None:
        self.state = StreamState.IDLE
        self.current_schema: Any = None
        self.error: Optional[str] = None
        self.completion_percentage = 0
        self.last_update: Optional[datetime] = None
        self._chunks: list[StreamChunk] = []
        self._total_bytes = 0
        self._last_sequence_id: Optional[int] = None

    @property
    def is_streaming(self) -> bool:
        return self.state is StreamState.STREAMING

    @property
    def streaming_chunks(self) -> list[StreamChunk]:
        return list(self._chunks)

    @property
    def total_chunks(self) -> int:
        return len(self._chunks)

    def start_streaming(self) -> None:
        """Begin a new stream, discarding anything accumulated before."""
        if self.is_streaming:
            logger.info("stream_restarted", discarded_chunks=len(self._chunks))

        self.state = StreamState.STREAMING
        self.current_schema = None
        self.error = None
        self.completion_percentage = 0
        self.last_update = datetime.now(timezone.utc)
        self._chunks = []
        self._total_bytes = 0
        self._last_sequence_id = None

    def add_chunk(self, chunk: StreamChunk | dict[str, Any]) -> bool:
        """
        Process one chunk.

        Args:
            chunk: StreamChunk or its dict form (``{type, data, sequenceId}``)

        Returns:
            False if the chunk was dropped (malformed or out of sequence)
        """
        if not isinstance(chunk, StreamChunk):
            try:
                chunk = StreamChunk.model_validate(chunk)
            except ValidationError as e:
                logger.warning("stream_chunk_invalid", error=str(e))
                return False

        if not self._accept_sequence(chunk):
            return False

        metrics_collector.record_stream_chunk(chunk.type.value)

        if chunk.type is ChunkType.PARTIAL:
            self._add_partial(chunk)
        elif chunk.type is ChunkType.COMPLETE:
            self._complete_from_chunk(chunk)
        else:
            self.set_streaming_error(self._error_message(chunk.data))
        return True

    def _accept_sequence(self, chunk: StreamChunk) -> bool:
        if chunk.sequence_id is None:
            return True

        last = self._last_sequence_id
        if self.settings.enforce_sequence_order and last is not None and chunk.sequence_id <= last:
            logger.warning(
                "stream_chunk_out_of_order",
                sequence_id=chunk.sequence_id,
                last_sequence_id=last,
            )
            metrics_collector.record_stream_chunk_dropped()
            return False

        self._last_sequence_id = chunk.sequence_id
        return True

    def _add_partial(self, chunk: StreamChunk) -> None:
        self._chunks.append(chunk)
        self._total_bytes += serialized_size(chunk.data)
        progress = self._total_bytes * 100 // self.settings.progress_byte_budget
        self.completion_percentage = min(self.settings.progress_cap, progress)

    def _complete_from_chunk(self, chunk: StreamChunk) -> None:
        data = chunk.data
        if data is None or isinstance(data, str):
            text = self.assembled_text() if data is None else data
            try:
                data = extract_json(text)
            except JSONParseError as e:
                logger.warning("stream_schema_unparseable", error=str(e), chunks=len(self._chunks))
                self.set_streaming_error(f"Failed to parse streamed schema: {e}")
                return
        self.complete_streaming(data)

    @staticmethod
    def _error_message(data: Any) -> str:
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return str(data) if data else "Stream failed"

    def complete_streaming(self, schema: Any) -> None:
        """Record the completed schema and leave the streaming state."""
        self.current_schema = schema
        self.state = StreamState.COMPLETE
        self.completion_percentage = 100
        self.error = None
        self.last_update = datetime.now(timezone.utc)
        logger.info("stream_complete", chunks=len(self._chunks))

    def set_streaming_error(self, error: str) -> None:
        """Record an upstream failure; no schema is set."""
        self.error = error
        self.state = StreamState.ERROR
        logger.warning("stream_error", error=error)

    def clear(self) -> None:
        """Reset to the initial state."""
        self._reset()

    def assembled_text(self) -> str:
        """Concatenated text of the partial chunks carrying strings."""
        return "".join(c.data for c in self._chunks if isinstance(c.data, str))

    def get_state(self) -> UIState:
        return UIState(
            state=self.state,
            current_schema=self.current_schema,
            streaming_chunks=list(self._chunks),
            is_streaming=self.is_streaming,
            completion_percentage=self.completion_percentage,
            last_update=self.last_update,
            error=self.error,
        )

    async def consume(self, stream: AsyncIterable[StreamChunk | dict[str, Any]]) -> StreamState:
        """
        Drive the controller from an async chunk source.

        Stops at the first chunk that ends the stream.

        Args:
            stream: Async iterator of chunks in arrival order

        Returns:
            Final state
        """
        if not self.is_streaming:
            self.start_streaming()

        async for chunk in stream:
            self.add_chunk(chunk)
            if not self.is_streaming:
                break

        return self.state
