"""
Hybrid knowledge retriever.

Runs the lexical and vector branches concurrently, fuses and re-ranks
their results, drops placeholder sources, and renders the survivors for
a language model. Also implements the search_knowledge_base tool contract.

Degradation policy: a branch whose store query fails, whose provider
errors, or which is cancelled contributes no results and the request
continues with the remaining branch. A vector branch whose provider is
disabled is not run at all. Only when every branch that ran failed does
the request fail with StoreUnavailableError. A dimension mismatch
between stored and query vectors is a data integrity error and always
propagates.

Dependencies: asyncio, pydantic, knowledge_retrieval.core.retrieval
System role: Retrieval engine orchestration
"""

import asyncio
import logging
import math
from datetime import datetime, timezone
from typing import Any, Callable, Sequence

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from knowledge_retrieval.configs.retrieval import RetrievalSettings
from knowledge_retrieval.core.exceptions import (
    DimensionMismatchError,
    KnowledgeRetrievalException,
    StoreQueryError,
    StoreUnavailableError,
    ValidationError,
)
from knowledge_retrieval.core.retrieval.context_formatter import format_results_for_rag, make_excerpt
from knowledge_retrieval.core.retrieval.fusion import combine_results
from knowledge_retrieval.core.retrieval.lexical_search import LexicalSearch
from knowledge_retrieval.core.retrieval.search_options import (
    DEFAULT_SEARCH_OPTIONS,
    SearchMode,
    SearchOptions,
)
from knowledge_retrieval.core.retrieval.source_validator import filter_valid_results
from knowledge_retrieval.core.retrieval.vector_search import VectorSearch
from knowledge_retrieval.models.knowledge import (
    KnowledgeDocument,
    KnowledgeSearchError,
    KnowledgeSearchRequest,
    KnowledgeSearchResponse,
    KnowledgeSearchResult,
    SearchFilters,
)
from knowledge_retrieval.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

NO_QUERY_MESSAGE = "No query provided."
NO_RESULTS_MESSAGE = "No relevant documents found."
NO_RESULTS_TOOL_MESSAGE = "No relevant documents found for your query."


class SearchOutcome(BaseModel):
    """Validated, ranked documents plus branch bookkeeping."""

    documents: list[KnowledgeDocument] = Field(default_factory=list)
    search_mode: SearchMode = SearchMode.HYBRID
    failed_branches: list[str] = Field(default_factory=list)
    dropped_count: int = Field(default=0, description="Documents removed by source validation")


def extract_query(query_or_messages: str | Sequence[Any] | None) -> str:
    """
    Pull the query text out of a string or a chat message list.

    For a message list the content of the last message is used. Messages
    may be dicts with a "content" key or objects with a content attribute;
    list content (content blocks) contributes its text parts.

    Args:
        query_or_messages: Raw query or conversation

    Returns:
        str: Stripped query, "" when nothing usable was found
    """
    if query_or_messages is None:
        return ""
    if isinstance(query_or_messages, str):
        return query_or_messages.strip()
    if not query_or_messages:
        return ""

    last = query_or_messages[-1]
    content = last.get("content") if isinstance(last, dict) else getattr(last, "content", None)
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(str(part.get("text", "")))
        content = " ".join(parts)
    return content.strip() if isinstance(content, str) else ""


def parse_iso_datetime(value: str | None, field: str) -> datetime | None:
    """
    Parse an ISO-8601 date or datetime; naive values are taken as UTC.

    Raises:
        ValidationError: If value is not ISO-8601
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError as e:
        raise ValidationError(f"Invalid ISO date for {field}: {value}", field=field) from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class KnowledgeRetriever:
    """
    Hybrid retrieval engine.

    Holds no per-request state; one instance can serve concurrent requests.
    """

    def __init__(
        self,
        lexical: LexicalSearch,
        vector: VectorSearch,
        settings: RetrievalSettings | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        Args:
            lexical: Full-text search branch
            vector: Embedding search branch
            settings: Tuning knobs (defaults from RetrievalSettings)
            clock: Returns the reference time for recency scoring
        """
        self._lexical = lexical
        self._vector = vector
        self._settings = settings or RetrievalSettings()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def _run_branches(
        self,
        query: str,
        options: SearchOptions,
    ) -> tuple[list[list[KnowledgeDocument]], list[str], list[str]]:
        branch_limit = math.ceil(options.limit * DEFAULT_SEARCH_OPTIONS.branch_overfetch)
        names: list[str] = []
        calls = []
        if options.search_mode.uses_text:
            names.append("lexical")
            calls.append(self._lexical.search(query, options.filters, branch_limit))
        if options.search_mode.uses_vector and not self._vector.is_enabled():
            # a disabled provider never queries the store
            logger.warning(
                f"{__name__}:hybrid_search - Embeddings disabled, vector branch skipped"
            )
        elif options.search_mode.uses_vector:
            names.append("vector")
            calls.append(
                self._vector.search(query, options.filters, branch_limit, options.threshold)
            )

        outcomes = await asyncio.gather(*calls, return_exceptions=True)

        result_sets: list[list[KnowledgeDocument]] = []
        failed: list[str] = []
        for name, outcome in zip(names, outcomes):
            if isinstance(outcome, DimensionMismatchError):
                raise outcome
            if isinstance(outcome, asyncio.CancelledError):
                logger.warning(f"{__name__}:hybrid_search - {name} branch cancelled, using no results")
                result_sets.append([])
            elif isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                failed.append(name)
                level = "store" if isinstance(outcome, StoreQueryError) else "unexpected"
                logger.error(
                    f"{__name__}:hybrid_search - {name} branch failed ({level}): "
                    f"{type(outcome).__name__}: {outcome}"
                )
                result_sets.append([])
            else:
                result_sets.append(outcome)
        return result_sets, names, failed

    async def hybrid_search(
        self,
        query: str,
        options: SearchOptions | None = None,
    ) -> tuple[list[KnowledgeDocument], list[str]]:
        """
        Run the active branches concurrently and fuse their results.

        Each branch is asked for ceil(limit * 1.5) documents so that fusion
        has room to reorder before truncating to limit.

        Args:
            query: Free text
            options: Limit, threshold, filters, mode and recency weight

        Returns:
            tuple: (fused documents before source validation, failed branch names)

        Raises:
            StoreUnavailableError: If every active branch failed
            DimensionMismatchError: If stored and query vectors differ in length
        """
        options = options or SearchOptions()
        result_sets, active, failed = await self._run_branches(query, options)

        if active and len(failed) == len(active):
            raise StoreUnavailableError(
                "Knowledge store unavailable: all search branches failed",
                {"branches": failed},
            )

        fused = combine_results(
            result_sets,
            limit=options.limit,
            recency_weight=options.recency_weight,
            now=self._clock(),
            multi_hit_bonus=self._settings.multi_hit_bonus,
        )
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:hybrid_search - Fused results",
            mode=options.search_mode.value,
            branch_counts=[len(r) for r in result_sets],
            fused=len(fused),
            failed=failed,
        )
        return fused, failed

    async def search(self, query: str, options: SearchOptions | None = None) -> SearchOutcome:
        """
        Hybrid search followed by source validation.

        Args:
            query: Free text; blank queries return an empty outcome
            options: Search options

        Returns:
            SearchOutcome: Documents safe to show to a caller

        Raises:
            StoreUnavailableError: If every active branch failed
            DimensionMismatchError: If stored and query vectors differ in length
        """
        options = options or SearchOptions()
        if not query or not query.strip():
            return SearchOutcome(search_mode=options.search_mode)

        fused, failed = await self.hybrid_search(query, options)
        valid = filter_valid_results(fused, self._settings.placeholder_domains)
        return SearchOutcome(
            documents=valid,
            search_mode=options.search_mode,
            failed_branches=failed,
            dropped_count=len(fused) - len(valid),
        )

    async def retrieve(
        self,
        query_or_messages: str | Sequence[Any],
        limit: int | None = None,
        threshold: float | None = None,
    ) -> str:
        """
        Build a context block for a query or conversation.

        Never raises for retrieval failures; errors are reported in the
        returned string.

        Args:
            query_or_messages: Query text or chat messages (last one is used)
            limit: Maximum documents (default 3)
            threshold: Minimum vector similarity (default 0.8)

        Returns:
            str: Formatted context, or a sentinel message
        """
        query = extract_query(query_or_messages)
        if not query:
            return NO_QUERY_MESSAGE

        logger.info(f"{__name__}:retrieve - START query={query[:100]!r}")
        try:
            options = SearchOptions(
                limit=limit or self._settings.default_limit,
                threshold=threshold if threshold is not None else self._settings.similarity_threshold,
                recency_weight=self._settings.recency_weight,
            )
            outcome = await self.search(query, options)
        except KnowledgeRetrievalException as e:
            logger.error(f"{__name__}:retrieve - {type(e).__name__}: {e}")
            return f"Error in knowledge retrieval: {e.message}"
        except PydanticValidationError as e:
            logger.error(f"{__name__}:retrieve - Invalid options: {e}")
            return f"Error in knowledge retrieval: {e}"

        if not outcome.documents:
            return NO_RESULTS_MESSAGE
        logger.info(f"{__name__}:retrieve - END documents={len(outcome.documents)}")
        return format_results_for_rag(outcome.documents, self._settings.context_excerpt_chars)

    def build_tool_options(self, request: KnowledgeSearchRequest) -> SearchOptions:
        """
        Translate tool arguments into search options.

        limit defaults to 3 and is capped at 5; dates are ISO strings.

        Raises:
            ValidationError: For an unknown search mode or malformed date
        """
        limit = request.limit or self._settings.default_limit
        limit = max(1, min(limit, self._settings.max_limit))

        mode = request.search_mode or SearchMode.HYBRID.value
        try:
            search_mode = SearchMode(mode.lower())
        except ValueError as e:
            raise ValidationError(f"Invalid search mode: {mode}", field="search_mode") from e

        threshold = request.threshold
        if threshold is None:
            threshold = self._settings.similarity_threshold
        if not 0.0 <= threshold <= 1.0:
            raise ValidationError(f"Threshold must be between 0 and 1: {threshold}", field="threshold")

        return SearchOptions(
            limit=limit,
            threshold=threshold,
            filters=SearchFilters(
                source=request.source or None,
                source_type=request.source_type or None,
                date_from=parse_iso_datetime(request.date_from, "date_from"),
                date_to=parse_iso_datetime(request.date_to, "date_to"),
            ),
            search_mode=search_mode,
            recency_weight=self._settings.tool_recency_weight,
        )

    async def search_tool(
        self,
        request: KnowledgeSearchRequest,
    ) -> KnowledgeSearchResponse | KnowledgeSearchError:
        """
        Execute the search_knowledge_base tool contract.

        Never raises: every failure becomes a KnowledgeSearchError payload.
        A blank query is not a failure; it finds nothing.

        Args:
            request: Tool arguments

        Returns:
            KnowledgeSearchResponse | KnowledgeSearchError
        """
        try:
            options = self.build_tool_options(request)
            outcome = await self.search(request.query, options)
        except KnowledgeRetrievalException as e:
            logger.error(f"{__name__}:search_tool - {type(e).__name__}: {e}")
            return KnowledgeSearchError(error=e.message, query=request.query)
        except Exception as e:
            logger.exception(f"{__name__}:search_tool - Unexpected failure: {type(e).__name__}")
            return KnowledgeSearchError(error=str(e) or "Unknown error occurred", query=request.query)

        if not outcome.documents:
            return KnowledgeSearchResponse(
                message=NO_RESULTS_TOOL_MESSAGE,
                query=request.query,
                search_type=outcome.search_mode.value,
            )

        documents = outcome.documents
        return KnowledgeSearchResponse(
            message=f"Found {len(documents)} relevant document(s) from knowledge base",
            query=request.query,
            results=[
                KnowledgeSearchResult(
                    title=doc.title,
                    content=make_excerpt(doc.content, self._settings.result_excerpt_chars),
                    url=doc.url,
                    source=doc.source,
                    source_type=doc.source_type,
                    summary=doc.summary,
                    similarity=doc.similarity,
                    created_at=doc.created_at,
                )
                for doc in documents
            ],
            context=format_results_for_rag(documents, self._settings.context_excerpt_chars),
            search_type=outcome.search_mode.value,
            db_results_count=len(documents),
        )
