"""
Tool registry.

Maps tool keys to factories so an agent can be assembled with all tools
or a chosen subset.

Dependencies: langchain_core.tools
System role: Tool discovery for LLM orchestration
"""

from typing import TYPE_CHECKING, Callable

from langchain_core.tools import BaseTool

from knowledge_retrieval.core.agentic_system.tools.embedding_tools import (
    create_get_embedding_tool,
    create_text_embedding_tool,
)
from knowledge_retrieval.core.agentic_system.tools.knowledge_search_tool import (
    create_knowledge_search_tool,
)

if TYPE_CHECKING:
    from knowledge_retrieval.application.services.embedding_storage_service import (
        EmbeddingStorageService,
    )
    from knowledge_retrieval.core.retrieval.knowledge_retriever import KnowledgeRetriever

ToolFactory = Callable[[], BaseTool]


class ToolRegistry:
    """Named tool factories."""

    def __init__(self, factories: dict[str, ToolFactory] | None = None) -> None:
        self._factories: dict[str, ToolFactory] = dict(factories or {})

    @classmethod
    def with_defaults(
        cls,
        retriever: "KnowledgeRetriever",
        embedding_service: "EmbeddingStorageService",
    ) -> "ToolRegistry":
        """Registry holding embedding, get_embedding and search_knowledge_base."""
        return cls(
            {
                "embedding": lambda: create_text_embedding_tool(embedding_service),
                "get_embedding": lambda: create_get_embedding_tool(embedding_service),
                "search_knowledge_base": lambda: create_knowledge_search_tool(retriever),
            }
        )

    def register(self, key: str, factory: ToolFactory) -> None:
        self._factories[key] = factory

    def create_tool(self, key: str) -> BaseTool | None:
        factory = self._factories.get(key)
        return factory() if factory else None

    def get_all_tools(self) -> dict[str, BaseTool]:
        return {key: factory() for key, factory in self._factories.items()}

    def get_available_tools(self) -> list[str]:
        return list(self._factories)

    def has_tool(self, key: str) -> bool:
        return key in self._factories
