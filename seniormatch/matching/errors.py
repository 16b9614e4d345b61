from __future__ import annotations

from typing import Any, Dict, Optional


class MatchingError(Exception):
    """Base matching error."""

    def __init__(
        self,
        message: str,
        *,
        partition: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.partition = partition
        self.data = data or {}


class InvalidProfileError(MatchingError):
    """Raised when a request carries no usable profile."""


class EmbeddingError(MatchingError):
    """Raised when the embedding service fails or returns nothing usable."""


class RetrievalError(MatchingError):
    """Raised when the vector index cannot answer a search."""


class GenerationError(MatchingError):
    """Raised when the generative re-rank call fails or its output cannot be parsed."""
