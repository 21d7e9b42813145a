"""Tests for the streaming controller."""

import pytest

from genui.core import Settings
from genui.streaming import ChunkType, StreamChunk, StreamingController, StreamState


def partial(data, seq=None):
    return {"type": "partial", "data": data, "sequenceId": seq}


@pytest.mark.unit
def test_initial_state(streaming):
    """Test a new controller is idle and empty."""
    state = streaming.get_state()
    assert state.state is StreamState.IDLE
    assert state.is_streaming is False
    assert state.completion_percentage == 0
    assert state.current_schema is None
    assert state.last_update is None
    assert streaming.total_chunks == 0


@pytest.mark.unit
def test_start_streaming(streaming):
    """Test starting a stream resets and timestamps."""
    streaming.start_streaming()

    assert streaming.state is StreamState.STREAMING
    assert streaming.is_streaming
    assert streaming.last_update is not None


@pytest.mark.unit
def test_partial_chunks_accumulate_with_progress(streaming):
    """Test progress follows serialized payload size."""
    streaming.start_streaming()
    streaming.add_chunk(partial("x" * 998))  # 1000 bytes with quotes

    assert streaming.total_chunks == 1
    assert streaming.completion_percentage == 10


@pytest.mark.unit
def test_progress_is_capped_until_complete(streaming):
    """Test progress never reaches 100 before completion."""
    streaming.start_streaming()
    streaming.add_chunk(partial({"blob": "y" * 20_000}))
    assert streaming.completion_percentage == 90

    streaming.add_chunk({"type": "complete", "data": {"type": "card"}})
    assert streaming.completion_percentage == 100


@pytest.mark.unit
def test_progress_settings():
    """Test budget and cap come from settings."""
    controller = StreamingController(Settings(progress_byte_budget=100, progress_cap=50))
    controller.start_streaming()
    controller.add_chunk(partial("abc"))  # 5 bytes
    assert controller.completion_percentage == 5

    controller.add_chunk(partial("z" * 200))
    assert controller.completion_percentage == 50


@pytest.mark.unit
def test_empty_payloads_count_zero(streaming):
    streaming.start_streaming()
    streaming.add_chunk(partial(None))
    streaming.add_chunk(partial(""))
    assert streaming.total_chunks == 2
    assert streaming.completion_percentage == 0


@pytest.mark.unit
def test_complete_sets_schema(streaming):
    """Test a complete chunk records the schema and clears errors."""
    streaming.start_streaming()
    streaming.add_chunk(StreamChunk(type=ChunkType.COMPLETE, data={"type": "card"}))

    assert streaming.state is StreamState.COMPLETE
    assert streaming.current_schema == {"type": "card"}
    assert streaming.error is None
    assert not streaming.is_streaming


@pytest.mark.unit
def test_complete_without_data_parses_assembled_text(streaming):
    """Test streamed text is assembled and parsed on completion."""
    streaming.start_streaming()
    for piece in ['```json\n{"type": "card", ', '"props": {"title": "T"}}', "\n```"]:
        streaming.add_chunk(partial(piece))
    streaming.add_chunk({"type": "complete"})

    assert streaming.assembled_text().startswith("```json")
    assert streaming.current_schema == {"type": "card", "props": {"title": "T"}}


@pytest.mark.unit
def test_complete_with_string_payload(streaming):
    streaming.start_streaming()
    streaming.add_chunk({"type": "complete", "data": 'Here you go: {"type": "divider"}'})
    assert streaming.current_schema == {"type": "divider"}


@pytest.mark.unit
def test_unparseable_completion_is_an_error(streaming):
    """Test text without an object ends the stream in error."""
    streaming.start_streaming()
    streaming.add_chunk(partial("no json here"))
    streaming.add_chunk({"type": "complete"})

    assert streaming.state is StreamState.ERROR
    assert "parse" in streaming.error
    assert streaming.current_schema is None


@pytest.mark.unit
@pytest.mark.parametrize("data, message", [
    ("upstream timeout", "upstream timeout"),
    ({"message": "quota exceeded"}, "quota exceeded"),
    (None, "Stream failed"),
])
def test_error_chunk(streaming, data, message):
    """Test error chunks record a message without a schema."""
    streaming.start_streaming()
    streaming.add_chunk({"type": "error", "data": data})

    assert streaming.state is StreamState.ERROR
    assert streaming.error == message
    assert streaming.current_schema is None
    assert not streaming.is_streaming


@pytest.mark.unit
def test_restart_discards_previous_chunks(streaming):
    """Test a second start wins over an in-flight stream."""
    streaming.start_streaming()
    streaming.add_chunk(partial("a"))
    streaming.add_chunk(partial("b"))

    streaming.start_streaming()
    assert streaming.total_chunks == 0
    assert streaming.completion_percentage == 0
    assert streaming.is_streaming


@pytest.mark.unit
def test_restart_after_terminal_states(streaming):
    """Test complete and error states can start streaming again."""
    streaming.start_streaming()
    streaming.add_chunk({"type": "error", "data": "x"})
    streaming.start_streaming()
    assert streaming.state is StreamState.STREAMING
    assert streaming.error is None

    streaming.add_chunk({"type": "complete", "data": {"type": "card"}})
    streaming.start_streaming()
    assert streaming.current_schema is None


@pytest.mark.unit
def test_clear(streaming):
    """Test clear resets every field."""
    streaming.start_streaming()
    streaming.add_chunk(partial("a", seq=1))
    streaming.add_chunk({"type": "complete", "data": {"type": "card"}})
    streaming.clear()

    assert streaming.get_state() == StreamingController().get_state()


@pytest.mark.unit
def test_out_of_order_chunks_dropped(streaming):
    """Test stale sequence ids are dropped."""
    streaming.start_streaming()
    assert streaming.add_chunk(partial("a", seq=1))
    assert streaming.add_chunk(partial("b", seq=3))
    assert not streaming.add_chunk(partial("c", seq=2))
    assert not streaming.add_chunk(partial("d", seq=3))
    assert streaming.add_chunk(partial("e"))

    assert streaming.assembled_text() == "abe"


@pytest.mark.unit
def test_sequence_resets_on_restart(streaming):
    streaming.start_streaming()
    streaming.add_chunk(partial("a", seq=5))
    streaming.start_streaming()
    assert streaming.add_chunk(partial("b", seq=1))


@pytest.mark.unit
def test_sequence_order_can_be_disabled():
    """Test chunks are accepted in any order when checking is off."""
    controller = StreamingController(Settings(enforce_sequence_order=False))
    controller.start_streaming()
    controller.add_chunk(partial("a", seq=2))
    assert controller.add_chunk(partial("b", seq=1))
    assert controller.total_chunks == 2


@pytest.mark.unit
def test_invalid_chunk_is_dropped(streaming):
    streaming.start_streaming()
    assert streaming.add_chunk({"type": "telemetry"}) is False
    assert streaming.total_chunks == 0
    assert streaming.is_streaming


async def _chunks(items):
    for item in items:
        yield item


@pytest.mark.asyncio
async def test_consume_stream(streaming):
    """Test an async source drives the controller to completion."""
    state = await streaming.consume(_chunks([
        partial('{"type": '),
        partial('"card"}'),
        {"type": "complete"},
        partial("ignored"),
    ]))

    assert state is StreamState.COMPLETE
    assert streaming.current_schema == {"type": "card"}
    assert streaming.total_chunks == 2


@pytest.mark.asyncio
async def test_consume_stops_on_error(streaming):
    state = await streaming.consume(_chunks([partial("a"), {"type": "error", "data": "down"}, partial("b")]))
    assert state is StreamState.ERROR
    assert streaming.error == "down"
