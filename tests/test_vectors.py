# tests/test_vectors.py
"""
U1 — Vector primitives

Covers:
- dot / norm / vec_sum / scale / divide_by basics
- normalize in place and its zero-vector failure
- normalize_rows (TXN) zero-row policies
- cosine similarity conventions for zero documents and zero concepts
"""

from __future__ import annotations

import math
import warnings

import pytest
import torch

from spkmeans.utils.vectors import (
    dot, norm, vec_sum, scale, divide_by, normalize, normalize_rows,
    cosine_similarity, cosine_similarity_matrix,
)
from spkmeans.utils.validation import DegenerateVectorError


def test_dot_and_norm():
    a = torch.tensor([1.0, 2.0, 3.0])
    b = torch.tensor([4.0, -5.0, 6.0])
    assert dot(a, b).item() == pytest.approx(12.0)
    assert dot(a, b).item() == dot(b, a).item()
    assert norm(torch.tensor([3.0, 4.0])).item() == pytest.approx(5.0)


def test_dot_shape_mismatch_raises():
    with pytest.raises(ValueError):
        dot(torch.ones(3), torch.ones(4))


def test_vec_sum_rows_and_empty():
    vectors = torch.tensor([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
    assert torch.equal(vec_sum(vectors), torch.tensor([9.0, 12.0]))

    empty = torch.empty(0, 4)
    assert torch.equal(vec_sum(empty), torch.zeros(4))


def test_scale_and_divide_are_in_place():
    v = torch.tensor([2.0, 4.0])
    out = scale(v, 0.5)
    assert out is v
    assert torch.equal(v, torch.tensor([1.0, 2.0]))

    divide_by(v, 2.0)
    assert torch.equal(v, torch.tensor([0.5, 1.0]))


def test_normalize_in_place():
    v = torch.tensor([3.0, 4.0])
    out = normalize(v)
    assert out is v
    assert torch.allclose(v, torch.tensor([0.6, 0.8]))
    assert norm(v).item() == pytest.approx(1.0)


def test_normalize_zero_vector_raises():
    with pytest.raises(DegenerateVectorError):
        normalize(torch.zeros(3))


def test_normalize_rows_unit_norms():
    X = torch.tensor([[3.0, 4.0], [1.0, 0.0], [2.0, 2.0]])
    out = normalize_rows(X)
    assert out is X
    assert torch.allclose(torch.linalg.vector_norm(X, dim=1), torch.ones(3))


def test_normalize_rows_zero_row_ignore_warns_and_keeps_zero():
    X = torch.tensor([[3.0, 4.0], [0.0, 0.0]])
    with pytest.warns(UserWarning, match="zero norm"):
        normalize_rows(X, zero_policy="ignore")
    assert torch.equal(X[1], torch.zeros(2))
    assert torch.allclose(X[0], torch.tensor([0.6, 0.8]))
    assert torch.isfinite(X).all()


def test_normalize_rows_zero_row_raise():
    X = torch.tensor([[3.0, 4.0], [0.0, 0.0]])
    with pytest.raises(DegenerateVectorError, match="index 1"):
        normalize_rows(X, zero_policy="raise")


def test_normalize_rows_large_finite_rows_do_not_overflow():
    # squared entries overflow float32, the row itself is finite
    X = torch.tensor([[1e20, 1e20], [3e30, 4e30], [1.0, 0.0]])
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        normalize_rows(X)
    assert torch.allclose(torch.linalg.vector_norm(X, dim=1), torch.ones(3))
    assert torch.allclose(X[0], torch.full((2,), 2 ** -0.5))
    assert torch.allclose(X[1], torch.tensor([0.6, 0.8]))


def test_normalize_rows_tiny_rows():
    X = torch.tensor([[3e-40, 4e-40]])
    normalize_rows(X)
    assert torch.allclose(X[0], torch.tensor([0.6, 0.8]))


def test_normalize_rows_non_finite_rows_follow_zero_policy():
    X = torch.tensor([[3.0, 4.0], [float("inf"), 1.0], [float("nan"), 0.0]])
    with pytest.warns(UserWarning, match="2 document"):
        normalize_rows(X, zero_policy="ignore")
    assert torch.allclose(X[0], torch.tensor([0.6, 0.8]))
    assert torch.equal(X[1:], torch.zeros(2, 2))

    Y = torch.tensor([[3.0, 4.0], [float("inf"), 1.0]])
    original = Y.clone()
    with pytest.raises(DegenerateVectorError, match="index 1"):
        normalize_rows(Y, zero_policy="raise")
    assert torch.equal(Y, original)


def test_cosine_similarity_values():
    doc = torch.tensor([1.0, 0.0])
    assert cosine_similarity(doc, torch.tensor([2.0, 0.0])) == pytest.approx(1.0)
    assert cosine_similarity(doc, torch.tensor([0.0, 5.0])) == pytest.approx(0.0)
    assert cosine_similarity(doc, torch.tensor([1.0, 1.0])) == pytest.approx(1 / math.sqrt(2))


def test_cosine_similarity_zero_conventions():
    assert cosine_similarity(torch.ones(2), torch.zeros(2)) == float("-inf")
    assert cosine_similarity(torch.zeros(2), torch.ones(2)) == 0.0


def test_cosine_similarity_matrix_matches_scalar():
    X = torch.tensor([[1.0, 0.0], [0.6, 0.8], [0.0, 0.0]])
    concepts = torch.tensor([[0.0, 1.0], [0.0, 0.0], [1.0, 1.0]])

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        S = cosine_similarity_matrix(X, concepts)

    assert S.shape == (3, 3)
    for i in range(3):
        for k in range(3):
            expected = cosine_similarity(X[i], concepts[k])
            if expected == float("-inf"):
                assert S[i, k].item() == float("-inf")
            else:
                assert S[i, k].item() == pytest.approx(expected, abs=1e-6)
    assert not torch.isnan(S).any()
