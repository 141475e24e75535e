"""
Hybrid knowledge retrieval.

Exports:
  - KnowledgeRetriever, SearchOutcome: Retrieval engine
  - LexicalSearch, VectorSearch: Search branches
  - SearchMode, SearchOptions, SearchFilters, DEFAULT_SEARCH_OPTIONS: Request parameters
  - cosine_similarity, combine_results, filter_valid_results, format_results_for_rag
"""

from knowledge_retrieval.core.retrieval.context_formatter import format_results_for_rag, make_excerpt
from knowledge_retrieval.core.retrieval.fusion import combine_results
from knowledge_retrieval.core.retrieval.knowledge_retriever import KnowledgeRetriever, SearchOutcome
from knowledge_retrieval.core.retrieval.lexical_search import LexicalSearch
from knowledge_retrieval.core.retrieval.search_options import (
    DEFAULT_SEARCH_OPTIONS,
    SearchMode,
    SearchOptions,
)
from knowledge_retrieval.core.retrieval.similarity import cosine_similarity
from knowledge_retrieval.core.retrieval.source_validator import filter_valid_results, is_trusted_url
from knowledge_retrieval.core.retrieval.vector_search import VectorSearch
from knowledge_retrieval.models.knowledge import SearchFilters

__all__ = [
    "KnowledgeRetriever",
    "SearchOutcome",
    "LexicalSearch",
    "VectorSearch",
    "SearchMode",
    "SearchOptions",
    "SearchFilters",
    "DEFAULT_SEARCH_OPTIONS",
    "cosine_similarity",
    "combine_results",
    "filter_valid_results",
    "is_trusted_url",
    "format_results_for_rag",
    "make_excerpt",
]
