"""
Embedding provider configuration settings.

Google Gemini embedding model, output dimensionality and credentials.
The API key is optional: without one the provider reports itself as
disabled and vector search degrades to lexical-only results.

Dependencies: pydantic, pydantic_settings
System role: Embedding provider configuration
"""

from pydantic import AliasChoices, Field
from pydantic_settings import SettingsConfigDict

from knowledge_retrieval.configs.base import BaseSettings


class EmbeddingSettings(BaseSettings):
    """Gemini embedding configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EMBEDDING_",
        populate_by_name=True,
        case_sensitive=False,
        extra="ignore",
    )

    model: str = Field(
        default="models/gemini-embedding-001",
        description="Google embedding model ID",
    )
    dimensions: int = Field(
        default=768,
        description="Fixed output dimensionality for every embedding call",
    )
    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "EMBEDDING_API_KEY",
            "GOOGLE_API_KEY",
            "LLM_API_KEY",
            "GOOGLE_GENERATIVE_AI_API_KEY",
        ),
        description="Google Generative AI API key",
    )
    max_retries: int = Field(
        default=3,
        description="Attempts per embedding call before giving up",
    )
