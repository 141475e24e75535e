"""
Result fusion and re-ranking.

Merges the result sets of the search branches into one ranked list:
vector similarity (or a neutral score for keyword-only hits) plus a bonus
for recently created documents, plus a bonus for every extra branch that
found the same document.

Dependencies: pydantic
System role: Hybrid ranking
"""

from datetime import datetime, timezone
from typing import Iterable, Sequence
from uuid import UUID

from knowledge_retrieval.core.retrieval.search_options import DEFAULT_SEARCH_OPTIONS
from knowledge_retrieval.models.knowledge import KnowledgeDocument

_SECONDS_PER_DAY = 86400.0


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def recency_bonus(
    created_at: datetime | None,
    now: datetime,
    weight: float,
    window_days: int = DEFAULT_SEARCH_OPTIONS.recency_window_days,
) -> float:
    """
    Linear bonus decaying from weight (just created) to 0 at window_days.

    Args:
        created_at: Document creation time
        now: Reference time
        weight: Bonus for a document created at now
        window_days: Age at which the bonus reaches zero

    Returns:
        float: max(0, (window_days - age_days) / window_days) * weight
    """
    if created_at is None or weight == 0:
        return 0.0
    age_days = (_as_utc(now) - _as_utc(created_at)).total_seconds() / _SECONDS_PER_DAY
    return max(0.0, (window_days - age_days) / window_days) * weight


def relevance_score(
    document: KnowledgeDocument,
    now: datetime,
    recency_weight: float,
    neutral_score: float = DEFAULT_SEARCH_OPTIONS.neutral_score,
) -> float:
    """Base similarity (or neutral_score) plus the recency bonus."""
    base = document.similarity if document.similarity is not None else neutral_score
    return base + recency_bonus(document.created_at, now, recency_weight)


def combine_results(
    result_sets: Iterable[Sequence[KnowledgeDocument]],
    limit: int = DEFAULT_SEARCH_OPTIONS.limit,
    recency_weight: float = DEFAULT_SEARCH_OPTIONS.recency_weight,
    now: datetime | None = None,
    multi_hit_bonus: float = DEFAULT_SEARCH_OPTIONS.multi_hit_bonus,
    neutral_score: float = DEFAULT_SEARCH_OPTIONS.neutral_score,
) -> list[KnowledgeDocument]:
    """
    Deduplicate, score and rank documents from several result sets.

    The first occurrence of a document is kept. Each further occurrence
    raises its score to max(current, new) + multi_hit_bonus. Ties keep
    first-seen order. Inputs are not modified; the returned documents are
    copies whose similarity holds the fused score.

    Args:
        result_sets: One sequence per search branch
        limit: Maximum number of documents returned
        recency_weight: Weight of the recency bonus
        now: Reference time for document age (defaults to current UTC time)
        multi_hit_bonus: Added per extra branch hit
        neutral_score: Base score for documents without similarity

    Returns:
        list[KnowledgeDocument]: At most limit documents, best first
    """
    now = now or datetime.now(timezone.utc)
    fused: dict[UUID, tuple[KnowledgeDocument, float]] = {}

    for results in result_sets:
        for document in results:
            score = relevance_score(document, now, recency_weight, neutral_score)
            existing = fused.get(document.id)
            if existing is None:
                fused[document.id] = (document, score)
            else:
                kept, current = existing
                fused[document.id] = (kept, max(current, score) + multi_hit_bonus)

    ranked = sorted(fused.values(), key=lambda item: item[1], reverse=True)
    return [
        document.model_copy(update={"similarity": score})
        for document, score in ranked[: max(limit, 0)]
    ]
