"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
Each concern (database, embeddings, retrieval) owns its own settings class
with an environment variable prefix.
"""

from knowledge_retrieval.configs.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
