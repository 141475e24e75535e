"""
Context formatting for language model prompts.

Dependencies: None
System role: Renders ranked documents into a citation-friendly text block
"""

from typing import Sequence

from knowledge_retrieval.models.knowledge import KnowledgeDocument

ENTRY_SEPARATOR = "\n\n---\n\n"
KNOWLEDGE_BASE_LABEL = "📄 Knowledge Base"
WEB_LABEL = "🌐 Web"


def make_excerpt(text: str, limit: int) -> str:
    """Return text cut to limit characters, with "..." appended when cut."""
    if len(text) > limit:
        return f"{text[:limit]}..."
    return text


def format_document(
    document: KnowledgeDocument,
    position: int,
    max_content_chars: int = 1000,
) -> str:
    """
    Render one numbered context entry.

    Args:
        document: Document to render
        position: 1-based sequence number
        max_content_chars: Content budget before truncation

    Returns:
        str: Entry text
    """
    relevance = ""
    if document.similarity is not None:
        relevance = f" (relevance: {document.similarity * 100:.1f}%)"
    label = WEB_LABEL if document.source_type == "web" else KNOWLEDGE_BASE_LABEL

    lines = [
        f"[Document {position}{relevance}] {label}",
        f"Title: {document.title}",
        f"Source: {document.url or document.source}",
        f"Content: {make_excerpt(document.content, max_content_chars)}",
    ]
    if document.summary:
        lines.append(f"Summary: {document.summary}")
    return "\n".join(lines)


def format_results_for_rag(
    documents: Sequence[KnowledgeDocument],
    max_content_chars: int = 1000,
) -> str:
    """
    Render ranked documents as one context block.

    Args:
        documents: Documents in rank order
        max_content_chars: Content budget per entry

    Returns:
        str: Entries separated by a horizontal rule; "" for no documents
    """
    return ENTRY_SEPARATOR.join(
        format_document(document, position, max_content_chars)
        for position, document in enumerate(documents, start=1)
    )
