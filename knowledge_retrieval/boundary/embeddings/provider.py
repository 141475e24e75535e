"""
Embedding provider protocol and Gemini adapter.

The retrieval engine only sees EmbeddingProvider. The Gemini adapter turns
every failure (missing key, network, quota, malformed response) into None
so that callers degrade instead of crashing.

Dependencies: langchain_google_genai, tenacity, python-dotenv
System role: Embedding provider boundary
"""

import asyncio
import logging
from typing import Protocol, runtime_checkable

from dotenv import load_dotenv
from langchain_google_genai import GoogleGenerativeAIEmbeddings
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from knowledge_retrieval.boundary.embeddings.task_types import TaskType, resolve_task_type
from knowledge_retrieval.configs.embedding import EmbeddingSettings

logger = logging.getLogger(__name__)
load_dotenv()


@runtime_checkable
class EmbeddingProvider(Protocol):
    """Turns text into a fixed-length float vector."""

    model_name: str
    dimensions: int

    def is_enabled(self) -> bool:
        """True when credentials are configured."""
        ...

    async def generate(
        self,
        text: str,
        task_type: TaskType | str | None = None,
    ) -> list[float] | None:
        """Return the embedding of text, or None when unavailable."""
        ...


class GeminiEmbeddingProvider:
    """
    Google Gemini embeddings via langchain_google_genai.

    The SDK call is blocking, so it runs in a worker thread. Transient
    failures are retried with exponential backoff before giving up.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = "models/gemini-embedding-001",
        dimensions: int = 768,
        max_retries: int = 3,
    ) -> None:
        """
        Args:
            api_key: Google Generative AI key; None disables the provider
            model: Embedding model ID
            dimensions: Output dimensionality for every call
            max_retries: Attempts per call before returning None
        """
        self._api_key = api_key
        self.model_name = model
        self.dimensions = dimensions
        self._client: GoogleGenerativeAIEmbeddings | None = None
        self._embed_with_retry = retry(
            retry=retry_if_exception_type(Exception),
            stop=stop_after_attempt(max(1, max_retries)),
            wait=wait_exponential_jitter(initial=1, max=10, jitter=1),
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:generate - Retry {retry_state.attempt_number}/{max_retries} "
                f"after {type(retry_state.outcome.exception()).__name__}"
            ),
            reraise=True,
        )(self._embed)

    @classmethod
    def from_settings(cls, settings: EmbeddingSettings) -> "GeminiEmbeddingProvider":
        return cls(
            api_key=settings.api_key,
            model=settings.model,
            dimensions=settings.dimensions,
            max_retries=settings.max_retries,
        )

    def is_enabled(self) -> bool:
        return bool(self._api_key)

    def _get_client(self) -> GoogleGenerativeAIEmbeddings:
        if self._client is None:
            self._client = GoogleGenerativeAIEmbeddings(
                model=self.model_name,
                google_api_key=self._api_key,
            )
        return self._client

    def _embed(self, text: str, gemini_task_type: str) -> list[float]:
        return self._get_client().embed_query(
            text,
            task_type=gemini_task_type,
            output_dimensionality=self.dimensions,
        )

    async def generate(
        self,
        text: str,
        task_type: TaskType | str | None = None,
    ) -> list[float] | None:
        """
        Generate an embedding for text.

        Args:
            text: Text to embed; blank text yields None
            task_type: Task type hint, defaults to RETRIEVAL_DOCUMENT

        Returns:
            list[float] | None: Vector, or None if disabled or the call failed
        """
        if not text or not text.strip():
            return None
        if not self.is_enabled():
            logger.warning(
                f"{__name__}:generate - No Google API key configured, embeddings disabled"
            )
            return None

        gemini_task_type = resolve_task_type(task_type)
        try:
            vector = await asyncio.to_thread(self._embed_with_retry, text, gemini_task_type)
        except Exception as e:
            logger.error(
                f"{__name__}:generate - Embedding failed task_type={gemini_task_type}: "
                f"{type(e).__name__}: {e}"
            )
            return None

        if not vector:
            logger.error(f"{__name__}:generate - Provider returned an empty vector")
            return None
        if len(vector) != self.dimensions:
            # every stored vector must share one length or cosine comparison fails
            logger.error(
                f"{__name__}:generate - Provider returned {len(vector)} dimensions, "
                f"expected {self.dimensions}"
            )
            return None
        return [float(v) for v in vector]


def create_embedding_provider(settings: EmbeddingSettings) -> EmbeddingProvider:
    """Build the configured embedding provider."""
    provider = GeminiEmbeddingProvider.from_settings(settings)
    if not provider.is_enabled():
        logger.warning(
            f"{__name__}:create_embedding_provider - GOOGLE_API_KEY not set, "
            "vector search will return no results"
        )
    return provider
