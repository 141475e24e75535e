"""
Search modes, options and tuning defaults.

Dependencies: pydantic
System role: Retrieval request parameters
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from knowledge_retrieval.models.knowledge import SearchFilters


class SearchMode(str, Enum):
    """Which search branches run for a request."""

    TEXT = "text"
    VECTOR = "vector"
    HYBRID = "hybrid"

    @property
    def uses_text(self) -> bool:
        return self in (SearchMode.TEXT, SearchMode.HYBRID)

    @property
    def uses_vector(self) -> bool:
        return self in (SearchMode.VECTOR, SearchMode.HYBRID)


class SearchDefaults(BaseModel):
    """Fixed retrieval constants."""

    model_config = ConfigDict(frozen=True)

    limit: int = 3
    threshold: float = 0.8
    recency_weight: float = 0.1
    tool_recency_weight: float = 0.2
    multi_hit_bonus: float = 0.1
    neutral_score: float = 0.5
    recency_window_days: int = 30
    default_date_range_days: int = 30
    branch_overfetch: float = 1.5


DEFAULT_SEARCH_OPTIONS = SearchDefaults()


class SearchOptions(BaseModel):
    """Per-request retrieval options."""

    limit: int = Field(default=DEFAULT_SEARCH_OPTIONS.limit, ge=1)
    threshold: float = Field(default=DEFAULT_SEARCH_OPTIONS.threshold, ge=0.0, le=1.0)
    filters: SearchFilters = Field(default_factory=SearchFilters)
    search_mode: SearchMode = SearchMode.HYBRID
    recency_weight: float = Field(default=DEFAULT_SEARCH_OPTIONS.recency_weight, ge=0.0)
