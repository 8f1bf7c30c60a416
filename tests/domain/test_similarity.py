"""Domain tests for vector math.

Why: Every reveal decision rests on these three functions.
"""

import math

import pytest

from pbl_tutor.domain.errors import DimensionMismatchError
from pbl_tutor.domain.similarity import cosine_similarity, dot, norm


def test_norm_is_euclidean():
    assert abs(norm((3.0, 4.0)) - 5.0) < 1e-9


def test_norm_of_zero_vector_is_one():
    """Degenerate vectors get norm 1.0 instead of 0."""
    assert norm((0.0, 0.0, 0.0)) == 1.0
    assert norm(()) == 1.0


@pytest.mark.parametrize(
    "vec",
    [(1.0,), (-2.0, 0.5), (1e-3, 0.0, 7.0), (0.0, 0.0)],
)
def test_norm_is_always_positive(vec):
    assert norm(vec) > 0


def test_dot_product():
    assert dot((1.0, 2.0, 3.0), (4.0, 5.0, 6.0)) == 32.0


def test_dot_is_symmetric():
    a = (0.3, -1.2, 4.0)
    b = (2.5, 0.1, -0.7)
    assert dot(a, b) == dot(b, a)


def test_dot_rejects_unequal_lengths():
    with pytest.raises(DimensionMismatchError) as exc:
        dot((1.0, 2.0), (1.0, 2.0, 3.0))
    assert exc.value.left == 2
    assert exc.value.right == 3
    assert "2 != 3" in str(exc.value)


def test_self_similarity_is_one():
    v = (0.2, -0.4, 0.9)
    assert math.isclose(cosine_similarity(v, norm(v), v, norm(v)), 1.0, rel_tol=1e-9)


def test_orthogonal_vectors_score_zero():
    u = (1.0, 0.0)
    v = (0.0, 1.0)
    assert cosine_similarity(u, norm(u), v, norm(v)) == 0.0


def test_opposite_vectors_score_minus_one():
    u = (1.0, 1.0)
    v = (-1.0, -1.0)
    assert math.isclose(cosine_similarity(u, norm(u), v, norm(v)), -1.0, rel_tol=1e-9)


def test_zero_vector_scores_zero():
    zero = (0.0, 0.0)
    v = (0.6, 0.8)
    assert cosine_similarity(zero, norm(zero), v, norm(v)) == 0.0
