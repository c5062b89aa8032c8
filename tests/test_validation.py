# tests/test_validation.py
"""
U7 — Input and configuration validation

Covers:
- validate_data conversions (list / numpy / tensor) and copy semantics
- rejection of NaN, inf, empty and non-2D input
- n_clusters / word_count / loop parameter checks raise ConfigurationError
"""

from __future__ import annotations

import numpy as np
import pytest
import torch

from spkmeans.utils.validation import (
    ConfigurationError, validate_data, check_n_clusters, check_word_count,
    check_labels, validate_params,
)


def test_validate_data_numpy_and_list(torch_device):
    X_np = np.random.RandomState(0).rand(5, 3)
    X_t = validate_data(X_np, device=torch_device)
    assert isinstance(X_t, torch.Tensor)
    assert X_t.dtype == torch.float32
    assert X_t.shape == (5, 3)

    X_list = [[1.0, 2.0, 3.0], [0.5, 0.1, 4.2]]
    assert validate_data(X_list).shape == (2, 3)


def test_validate_data_copy_semantics():
    X = torch.rand(3, 2)
    assert validate_data(X, copy=True) is not X
    assert validate_data(X, copy=False) is X

    X64 = torch.rand(3, 2, dtype=torch.float64)
    assert validate_data(X64, copy=False).dtype == torch.float64

    ints = torch.ones(2, 2, dtype=torch.int64)
    assert validate_data(ints).dtype == torch.float32


@pytest.mark.parametrize("bad", [
    [[1.0, float("nan")]],
    [[1.0, float("inf")]],
    [1.0, 2.0],
    np.zeros((0, 3)),
])
def test_validate_data_rejects(bad):
    with pytest.raises(ValueError):
        validate_data(bad)


def test_validate_data_type_error():
    with pytest.raises(TypeError):
        validate_data("documents")


@pytest.mark.parametrize("k", [0, -1, 5])
def test_check_n_clusters_out_of_range(k):
    with pytest.raises(ConfigurationError):
        check_n_clusters(k, n_documents=4)


@pytest.mark.parametrize("k", [2.0, "2", True])
def test_check_n_clusters_type(k):
    with pytest.raises(ConfigurationError):
        check_n_clusters(k, n_documents=4)


def test_check_n_clusters_ok():
    check_n_clusters(4, n_documents=4)
    check_n_clusters(np.int64(1), n_documents=4)


def test_configuration_error_is_value_error():
    assert issubclass(ConfigurationError, ValueError)


def test_check_word_count():
    check_word_count(None, 10)
    check_word_count(10, 10)
    with pytest.raises(ConfigurationError):
        check_word_count(9, 10)
    with pytest.raises(ConfigurationError):
        check_word_count(0, 10)


def test_check_labels():
    assert check_labels(np.array([0, 1, 1]), 3, 2).tolist() == [0, 1, 1]
    with pytest.raises(ConfigurationError):
        check_labels([[0, 1]], 2, 2)
    with pytest.raises(ConfigurationError):
        check_labels("01", 2, 2)


@pytest.mark.parametrize("tol,max_iter,policy", [
    (0.0, 10, "ignore"),
    (-1e-3, 10, "ignore"),
    (1e-3, 0, "ignore"),
    (1e-3, 2.5, "ignore"),
    (1e-3, 10, "skip"),
])
def test_validate_params_rejects(tol, max_iter, policy):
    with pytest.raises(ConfigurationError):
        validate_params(tol, max_iter, policy)


def test_validate_params_accepts_uncapped():
    validate_params(1e-3, None, "raise")
