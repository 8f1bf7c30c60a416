"""Domain errors (typed) for card retrieval.

Why: One error family for the application and interface layers, no infra leaks.
"""

from dataclasses import dataclass


class DomainError(Exception):
    """Base class for domain-specific errors."""


class ValidationError(DomainError):
    """Invalid caller input (case id, question, revealed ids, card data)."""


class NotReadyError(DomainError):
    """Card index has not been built yet, or the last build failed."""


class CardNotFoundError(DomainError):
    """Requested card (e.g. a case's initial card) does not exist."""


@dataclass(frozen=True)
class DimensionMismatchError(DomainError):
    """Two vectors of unequal length met in a vector operation."""

    left: int
    right: int

    def __str__(self) -> str:
        return f"vector dimension mismatch: {self.left} != {self.right}"


# Infrastructure-mapped errors
class EmbeddingError(DomainError):
    """Embedding provider failed, timed out, or returned a malformed payload."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class DocumentError(DomainError):
    """Card dataset loading/parsing failed."""
