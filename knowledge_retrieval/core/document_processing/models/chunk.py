"""
Chunk domain model for long-document splitting.

Dependencies: pydantic
System role: Data structure produced by the chunking utility
"""

from pydantic import BaseModel, Field


class ContentChunk(BaseModel):
    """One window of a long document."""

    content: str = Field(description="Trimmed chunk text")
    chunk_index: int = Field(ge=0, description="0-based position in the document")
    chunk_size: int = Field(ge=0, description="Character length of content")
    total_chunks: int = Field(ge=0, description="Number of chunks produced for the document")
