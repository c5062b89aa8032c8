"""
Input validation for spherical k-means.

Provides the exception types raised by the package and the checks run on
documents and configuration before any clustering work starts.
"""

from typing import Optional, Union
import torch
from torch import Tensor
import numpy as np


ZERO_VECTOR_POLICIES = ('ignore', 'raise')


class ConfigurationError(ValueError):
    """Raised when clustering parameters are inconsistent with the input."""


class DegenerateVectorError(ValueError):
    """Raised when a zero-norm vector would have to be normalized."""


def validate_data(X: Union[Tensor, np.ndarray, list],
                 dtype: torch.dtype = torch.float32,
                 device: Optional[torch.device] = None,
                 ensure_finite: bool = True,
                 copy: bool = True) -> Tensor:
    """Validate and convert document vectors to a 2D float tensor.

    Args:
        X: Documents as an (n, d) tensor, numpy array or nested list
        dtype: Target floating point type
        device: Target device (None keeps the tensor where it is)
        ensure_finite: Whether to reject inf/nan
        copy: Whether to force a copy. When False and X is already a
            floating tensor on the right device, the returned tensor is X
            itself. Floating tensors keep their dtype.

    Returns:
        Validated (n, d) tensor

    Raises:
        TypeError: If X cannot be converted
        ValueError: If X is not a non-empty 2D array of finite values
    """
    if isinstance(X, Tensor):
        if not X.is_floating_point():
            X = X.to(dtype=dtype)
        if device is not None and X.device != device:
            X = X.to(device)
        elif copy:
            X = X.clone()
    elif isinstance(X, np.ndarray):
        X = torch.from_numpy(np.array(X, dtype=np.float64)).to(dtype=dtype, device=device)
    elif isinstance(X, (list, tuple)):
        X = torch.tensor(X, dtype=dtype, device=device)
    else:
        raise TypeError(f"Cannot convert {type(X)} to tensor")

    if X.dim() != 2:
        raise ValueError(f"Expected 2D array, got {X.dim()}D")

    n_documents, n_words = X.shape
    if n_documents < 1:
        raise ValueError("Found 0 documents, but need at least 1")
    if n_words < 1:
        raise ValueError("Found 0 words, but need at least 1")

    if ensure_finite:
        if torch.isnan(X).any():
            raise ValueError("Input contains NaN values")
        if torch.isinf(X).any():
            raise ValueError("Input contains infinite values")

    return X


def check_n_clusters(n_clusters: int, n_documents: int) -> None:
    """Validate the number of clusters against the document count.

    Raises:
        ConfigurationError: If n_clusters is not an integer in [1, n_documents]
    """
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, (int, np.integer)):
        raise ConfigurationError(f"n_clusters must be int, got {type(n_clusters).__name__}")

    if n_clusters <= 0:
        raise ConfigurationError(f"n_clusters must be positive, got {n_clusters}")

    if n_clusters > n_documents:
        raise ConfigurationError(f"n_clusters ({n_clusters}) cannot be larger than "
                                 f"the number of documents ({n_documents})")


def check_word_count(word_count: Optional[int], n_words: int) -> None:
    """Check that a declared word count matches the data dimension."""
    if word_count is None:
        return
    if isinstance(word_count, bool) or not isinstance(word_count, (int, np.integer)):
        raise ConfigurationError(f"word_count must be int, got {type(word_count).__name__}")
    if word_count <= 0:
        raise ConfigurationError(f"word_count must be positive, got {word_count}")
    if word_count != n_words:
        raise ConfigurationError(f"word_count={word_count} does not match document "
                                 f"dimension {n_words}")


def check_labels(labels: Union[Tensor, np.ndarray, list],
                 n_documents: int, n_clusters: int) -> Tensor:
    """Validate an explicit initial labelling.

    Returns:
        (n_documents,) long tensor with values in [0, n_clusters)
    """
    if isinstance(labels, Tensor):
        labels = labels.long()
    elif isinstance(labels, np.ndarray):
        labels = torch.from_numpy(labels).long()
    elif isinstance(labels, (list, tuple)):
        labels = torch.tensor(labels, dtype=torch.long)
    else:
        raise ConfigurationError(f"Cannot use {type(labels).__name__} as initial labels")

    if labels.dim() != 1:
        raise ConfigurationError(f"Initial labels must be 1D, got {labels.dim()}D")
    if len(labels) != n_documents:
        raise ConfigurationError(f"Expected {n_documents} initial labels, got {len(labels)}")
    if (labels < 0).any() or (labels >= n_clusters).any():
        raise ConfigurationError(f"Initial labels must lie in [0, {n_clusters})")

    return labels


def validate_params(tol: float, max_iter: Optional[int], zero_vector_policy: str) -> None:
    """Validate loop configuration.

    Raises:
        ConfigurationError: On a non-positive tolerance, a non-positive
            iteration cap, or an unknown zero-vector policy
    """
    if not tol > 0:
        raise ConfigurationError(f"tol must be positive, got {tol}")

    if max_iter is not None:
        if isinstance(max_iter, bool) or not isinstance(max_iter, (int, np.integer)):
            raise ConfigurationError(f"max_iter must be int or None, got {type(max_iter).__name__}")
        if max_iter < 1:
            raise ConfigurationError(f"max_iter must be at least 1, got {max_iter}")

    if zero_vector_policy not in ZERO_VECTOR_POLICIES:
        raise ConfigurationError(f"zero_vector_policy must be one of {ZERO_VECTOR_POLICIES}, "
                                 f"got {zero_vector_policy!r}")
