"""
Streaming
Chunk accumulation and stream state for generated UIs
"""

from .controller import ChunkType, StreamChunk, StreamingController, StreamState, UIState

__all__ = [
    "ChunkType",
    "StreamChunk",
    "StreamingController",
    "StreamState",
    "UIState",
]
