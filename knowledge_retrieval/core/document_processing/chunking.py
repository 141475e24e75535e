"""
Overlapping text chunker.

Cuts a document into windows of at most chunk_size characters, preferring
to end a window just after a period, else at a space, as long as the cut
falls in the second half of the window. Consecutive windows overlap by
chunk_overlap characters so that sentences straddling a boundary appear
in both chunks.

Dependencies: pydantic
System role: Chunking utility for long documents
"""

import logging

from .models import ContentChunk

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 2000
DEFAULT_CHUNK_OVERLAP = 200


def _find_cut(text: str, start: int, end: int, chunk_size: int) -> int:
    """Return the window end, moved back to a sentence or word boundary when one is late enough."""
    if end >= len(text):
        return end
    min_cut = start + chunk_size * 0.5
    # cut stays inside the window so no chunk exceeds chunk_size
    sentence_end = text.rfind(".", start, end)
    if sentence_end > min_cut:
        return sentence_end + 1
    word_end = text.rfind(" ", start, end)
    if word_end > min_cut:
        return word_end
    return end


def chunk_content(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> list[ContentChunk]:
    """
    Split text into overlapping chunks.

    Text no longer than chunk_size is returned whole as a single chunk.
    Chunk contents are whitespace-trimmed and empty windows are skipped,
    so chunk_index is always contiguous from 0.

    Args:
        text: Document body
        chunk_size: Maximum window length in characters
        chunk_overlap: Characters shared by consecutive windows

    Returns:
        list[ContentChunk]: Chunks in document order; [] for blank text

    Raises:
        ValueError: If chunk_size <= 0, chunk_overlap < 0 or chunk_overlap >= chunk_size
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if chunk_overlap < 0 or chunk_overlap >= chunk_size:
        raise ValueError(
            f"chunk_overlap must be in [0, chunk_size), got {chunk_overlap} for chunk_size {chunk_size}"
        )

    if not text or not text.strip():
        return []

    if len(text) <= chunk_size:
        return [ContentChunk(content=text, chunk_index=0, chunk_size=len(text), total_chunks=1)]

    pieces: list[str] = []
    start = 0
    while start < len(text):
        end = _find_cut(text, start, min(start + chunk_size, len(text)), chunk_size)
        piece = text[start:end].strip()
        if piece:
            pieces.append(piece)
        start = max(end - chunk_overlap, start + 1)
        if end >= len(text):
            break

    logger.debug(
        f"{__name__}:chunk_content - {len(text)} chars -> {len(pieces)} chunks "
        f"(size={chunk_size}, overlap={chunk_overlap})"
    )
    return [
        ContentChunk(
            content=piece,
            chunk_index=index,
            chunk_size=len(piece),
            total_chunks=len(pieces),
        )
        for index, piece in enumerate(pieces)
    ]
