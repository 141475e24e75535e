"""
Agent tools backed by the retrieval engine and embedding services.
"""

from knowledge_retrieval.core.agentic_system.tools.embedding_tools import (
    create_get_embedding_tool,
    create_text_embedding_tool,
)
from knowledge_retrieval.core.agentic_system.tools.knowledge_search_tool import (
    create_knowledge_search_tool,
)
from knowledge_retrieval.core.agentic_system.tools.registry import ToolRegistry

__all__ = [
    "ToolRegistry",
    "create_knowledge_search_tool",
    "create_text_embedding_tool",
    "create_get_embedding_tool",
]
