"""
Deterministic offline embedding provider.

Vectors are a hash-seeded bag-of-words projection: texts sharing words get
nearby vectors, identical texts get identical vectors, and no network is
touched. Explicit text-to-vector mappings override the projection.

Dependencies: numpy
System role: Test double and local development provider
"""

import hashlib
import re

import numpy as np

from knowledge_retrieval.boundary.embeddings.task_types import TaskType, resolve_task_type

_TOKEN_PATTERN = re.compile(r"\w+", re.UNICODE)


class FakeEmbeddingProvider:
    """EmbeddingProvider implementation that never calls a remote model."""

    def __init__(
        self,
        dimensions: int = 768,
        vectors: dict[str, list[float]] | None = None,
        enabled: bool = True,
        model_name: str = "fake-embedding",
    ) -> None:
        """
        Args:
            dimensions: Length of projected vectors
            vectors: Exact text to vector overrides
            enabled: False simulates a missing API key
            model_name: Reported model ID
        """
        self.dimensions = dimensions
        self.model_name = model_name
        self._vectors = dict(vectors or {})
        self._enabled = enabled
        self.calls: list[tuple[str, str]] = []

    def is_enabled(self) -> bool:
        return self._enabled

    def _project(self, text: str) -> list[float]:
        total = np.zeros(self.dimensions)
        for token in _TOKEN_PATTERN.findall(text.lower()):
            seed = int.from_bytes(hashlib.sha256(token.encode("utf-8")).digest()[:4], "big")
            total += np.random.default_rng(seed).standard_normal(self.dimensions)
        norm = np.linalg.norm(total)
        if norm == 0:
            return total.tolist()
        return (total / norm).tolist()

    async def generate(
        self,
        text: str,
        task_type: TaskType | str | None = None,
    ) -> list[float] | None:
        if not self._enabled or not text or not text.strip():
            return None
        self.calls.append((text, resolve_task_type(task_type)))
        if text in self._vectors:
            return list(self._vectors[text])
        return self._project(text)
