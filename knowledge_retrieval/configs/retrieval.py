"""
Retrieval configuration settings.

Defaults for hybrid search, score fusion, source validation, context
rendering and document chunking.

Dependencies: pydantic, pydantic_settings
System role: Retrieval engine tuning knobs
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from knowledge_retrieval.configs.base import BaseSettings

PLACEHOLDER_DOMAINS: tuple[str, ...] = (
    "example.com",
    "example.org",
    "example.net",
    "test.com",
    "placeholder.com",
    "mock.com",
    "demo.com",
)


class RetrievalSettings(BaseSettings):
    """Hybrid retrieval configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RETRIEVAL_",
        case_sensitive=False,
        extra="ignore",
    )

    default_limit: int = Field(default=3, description="Results returned when no limit is given")
    max_limit: int = Field(default=5, description="Hard cap on results for tool calls")
    similarity_threshold: float = Field(
        default=0.8,
        ge=0.0,
        le=1.0,
        description="Minimum cosine similarity for vector matches",
    )
    recency_weight: float = Field(default=0.1, description="Recency bonus weight for direct retrieval")
    multi_hit_bonus: float = Field(default=0.1, description="Score bonus per additional result set hit")
    tool_recency_weight: float = Field(default=0.2, description="Recency bonus weight for tool calls")

    chunk_size: int = Field(default=2000, description="Target chunk size in characters")
    chunk_overlap: int = Field(default=200, description="Overlap between adjacent chunks")
    chunk_threshold: int = Field(
        default=3000,
        description="Documents longer than this are stored as parent plus chunks",
    )

    context_excerpt_chars: int = Field(default=1000, description="Content budget per context entry")
    result_excerpt_chars: int = Field(default=500, description="Content budget per tool result")

    placeholder_domains: list[str] = Field(
        default=list(PLACEHOLDER_DOMAINS),
        description="Hosts whose documents never reach the caller",
    )
