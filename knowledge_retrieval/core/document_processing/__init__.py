"""
Document processing for ingestion.

Splits long documents into overlapping chunks that are embedded and
stored individually.

Dependencies: pydantic
System role: Chunking utility used by the ingestion writer
"""

from .chunking import DEFAULT_CHUNK_OVERLAP, DEFAULT_CHUNK_SIZE, chunk_content
from .models import ContentChunk

__all__ = [
    "chunk_content",
    "ContentChunk",
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_CHUNK_OVERLAP",
]
