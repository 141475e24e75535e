"""
Embedding task types.

Callers pass a short hint describing how a vector will be used; Gemini
biases the vector geometry accordingly.

Dependencies: None
System role: Task type vocabulary shared by tools, services and search
"""

from enum import Enum


class TaskType(str, Enum):
    """Intended use of an embedding."""

    DOCUMENT = "document"
    SEARCH_QUERY = "search_query"
    SIMILARITY = "similarity"
    CLUSTERING = "clustering"
    CLASSIFICATION = "classification"


GEMINI_TASK_TYPES: dict[TaskType, str] = {
    TaskType.DOCUMENT: "RETRIEVAL_DOCUMENT",
    TaskType.SEARCH_QUERY: "RETRIEVAL_QUERY",
    TaskType.SIMILARITY: "SEMANTIC_SIMILARITY",
    TaskType.CLUSTERING: "CLUSTERING",
    TaskType.CLASSIFICATION: "CLASSIFICATION",
}

DEFAULT_GEMINI_TASK_TYPE = GEMINI_TASK_TYPES[TaskType.DOCUMENT]

# Gemini task types without a short hint; passed through unchanged
RAW_GEMINI_TASK_TYPES = frozenset(
    {
        *GEMINI_TASK_TYPES.values(),
        "QUESTION_ANSWERING",
        "FACT_VERIFICATION",
        "CODE_RETRIEVAL_QUERY",
    }
)


def resolve_task_type(task_type: TaskType | str | None) -> str:
    """
    Map a task type hint to the Gemini task type name.

    Accepts TaskType members, their string values ("search_query"), or raw
    Gemini names ("RETRIEVAL_QUERY"). Unknown or missing hints fall back to
    RETRIEVAL_DOCUMENT.

    Args:
        task_type: Hint from the caller

    Returns:
        str: Gemini task type
    """
    if task_type is None:
        return DEFAULT_GEMINI_TASK_TYPE
    if isinstance(task_type, TaskType):
        return GEMINI_TASK_TYPES[task_type]

    value = task_type.strip()
    try:
        return GEMINI_TASK_TYPES[TaskType(value.lower())]
    except ValueError:
        pass
    if value.upper() in RAW_GEMINI_TASK_TYPES:
        return value.upper()
    return DEFAULT_GEMINI_TASK_TYPE
