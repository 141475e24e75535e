"""
Observability module.

Provides logging configuration and safe structured-logging helpers.
"""

from knowledge_retrieval.observability.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
