"""
Models for document processing.

Exports: ContentChunk
"""

from .chunk import ContentChunk

__all__ = ["ContentChunk"]
