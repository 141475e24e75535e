"""
Knowledge base search tool.

Exposes KnowledgeRetriever.search_tool to a language model agent. The tool
never raises: failures come back as {"success": False, "error": ...}.

Dependencies: langchain_core.tools, knowledge_retrieval.core.retrieval
System role: Retrieval entry point for LLM orchestration
"""

import logging
from typing import TYPE_CHECKING, Any

from langchain_core.tools import tool

from knowledge_retrieval.models.knowledge import KnowledgeSearchRequest

if TYPE_CHECKING:
    from knowledge_retrieval.core.retrieval.knowledge_retriever import KnowledgeRetriever

logger = logging.getLogger(__name__)


def create_knowledge_search_tool(retriever: "KnowledgeRetriever"):
    """
    Create a search tool bound to a KnowledgeRetriever instance.

    Args:
        retriever: Retrieval engine

    Returns:
        BaseTool: Async tool named search_knowledge_base
    """

    @tool
    async def search_knowledge_base(
        query: str,
        limit: int | None = None,
        threshold: float | None = None,
        source: str | None = None,
        source_type: str | None = None,
        search_mode: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
    ) -> dict[str, Any]:
        """Search the knowledge base for relevant documents and information.

        Use this to find specific information from stored documents, blog posts,
        and other knowledge sources.

        Args:
            query: The search query or question
            limit: Maximum number of results to return (default: 3, max: 5)
            threshold: Minimum similarity threshold for vector search (0-1, default: 0.8)
            source: Filter by specific source (e.g., 'blog.aloha-corp.com')
            source_type: Filter by source type (e.g., 'blog', 'markdown', 'document', 'web')
            search_mode: 'text', 'vector' or 'hybrid' (default: 'hybrid')
            date_from: Filter results from this date (ISO string)
            date_to: Filter results to this date (ISO string)
        """
        logger.info(f"{__name__}:search_knowledge_base - START query_len={len(query)}, limit={limit}")
        response = await retriever.search_tool(
            KnowledgeSearchRequest(
                query=query,
                limit=limit,
                threshold=threshold,
                source=source,
                source_type=source_type,
                search_mode=search_mode,
                date_from=date_from,
                date_to=date_to,
            )
        )
        logger.info(f"{__name__}:search_knowledge_base - END success={response.success}")
        return response.model_dump(mode="json", exclude_none=True)

    return search_knowledge_base
