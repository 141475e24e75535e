"""
Vector similarity.

Dependencies: numpy
System role: Scoring primitive for vector search
"""

from typing import Sequence

import numpy as np

from knowledge_retrieval.core.exceptions import DimensionMismatchError


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine of the angle between two vectors.

    Args:
        a: Query vector
        b: Stored vector

    Returns:
        float: dot(a, b) / (|a| * |b|), or 0.0 when either norm is zero

    Raises:
        DimensionMismatchError: If the vectors differ in length
    """
    if len(a) != len(b):
        raise DimensionMismatchError(expected=len(a), actual=len(b))

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return float(np.dot(va, vb) / (norm_a * norm_b))
