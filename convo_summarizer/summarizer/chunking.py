"""Boundary-aware splitting of oversized transcripts."""

from __future__ import annotations

from typing import List

from convo_summarizer.summarizer.errors import ChunkingDefect
from convo_summarizer.summarizer.models import Chunk


DEFAULT_CHUNK_SIZE = 40_000
DEFAULT_BOUNDARY_RATIO = 0.8


def _find_cut(window: str, chunk_size: int, boundary_ratio: float) -> int:
    """Length to keep from a non-final window."""
    boundary = max(window.rfind("."), window.rfind("\n"))
    if boundary > chunk_size * boundary_ratio:
        return boundary + 1
    return len(window)


def split_text(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    boundary_ratio: float = DEFAULT_BOUNDARY_RATIO,
) -> List[Chunk]:
    """
    Split ``text`` into ordered, non-overlapping chunks of at most ``chunk_size``.

    Each non-final window is cut just after its last ``.`` or newline when that
    boundary lies in the trailing ``1 - boundary_ratio`` share of the window;
    otherwise at the raw offset. Joining ``chunk.text`` for all chunks yields the
    input unchanged.

    Raises:
        ValueError: If ``chunk_size`` is not positive.
        ChunkingDefect: If non-empty input produced no chunks.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    chunks: List[Chunk] = []
    position = 0
    while position < len(text):
        window = text[position : position + chunk_size]
        if position + chunk_size < len(text):
            window = window[: _find_cut(window, chunk_size, boundary_ratio)]
        end = position + len(window)
        chunks.append(Chunk(index=len(chunks), start=position, end=end, text=window))
        position = end

    if text and not chunks:
        raise ChunkingDefect(f"No chunks produced for {len(text)} characters of input")
    return chunks
