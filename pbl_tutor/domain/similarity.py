"""Pure vector math for card scoring.

Why: Norm and dot product are stateless → they belong to the Domain.
"""

from collections.abc import Sequence
from math import sqrt

from .errors import DimensionMismatchError
from .types import Score


def norm(vector: Sequence[float]) -> float:
    """Euclidean (L2) norm of a vector.

    Returns 1.0 for an all-zero vector so that downstream divisions stay defined;
    a degenerate vector then scores 0 against everything instead of failing.
    """
    return sqrt(sum(x * x for x in vector)) or 1.0


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    """Sum of elementwise products.

    Raises:
        DimensionMismatchError: if the vectors differ in length
    """
    if len(a) != len(b):
        raise DimensionMismatchError(left=len(a), right=len(b))
    return sum(x * y for x, y in zip(a, b, strict=True))


def cosine_similarity(
    a: Sequence[float], norm_a: float, b: Sequence[float], norm_b: float
) -> Score:
    """Cosine similarity with precomputed norms.

    Args:
        a: First vector
        norm_a: ``norm(a)``
        b: Second vector
        norm_b: ``norm(b)``

    Returns:
        Score between -1 and 1 for non-degenerate vectors
    """
    return dot(a, b) / (norm_a * norm_b)
