# tests/utils.py
"""
Small, reusable helpers used across the spkmeans test suite.

Functions:
- unit(v): unit-normalize a vector (numpy or torch), preserving input type.
- perm_invariant_accuracy(y_pred, y_true, K): best accuracy over label permutations.
- assert_store_invariants(store, n): totality and disjointness of a PartitionStore.
- assert_unit_concepts(store, concepts, atol): unit norm of non-empty concepts.
- time_block(label, meta=None): context manager that prints wall-clock time with optional metadata.
"""

from __future__ import annotations

import json
import itertools
import time
from contextlib import contextmanager
from typing import Any, Dict, Union

import numpy as np
import torch

ArrayLike = Union[np.ndarray, torch.Tensor]

_EPS = 1e-12


def unit(v: ArrayLike) -> ArrayLike:
    """
    Return the unit-normalized vector, preserving input type (numpy or torch).
    """
    if isinstance(v, torch.Tensor):
        return v / (v.norm() + _EPS)
    v = np.asarray(v, dtype=np.float64)
    if v.ndim != 1:
        raise ValueError(f"unit() expects 1D input, got shape {v.shape}")
    return v / (np.linalg.norm(v) + _EPS)


def perm_invariant_accuracy(y_pred: ArrayLike, y_true: ArrayLike, K: int) -> float:
    """
    Best accuracy over all relabelings of y_pred. Brute force; keep K small.
    """
    y_pred = np.asarray(y_pred.cpu() if isinstance(y_pred, torch.Tensor) else y_pred)
    y_true = np.asarray(y_true)
    best = 0.0
    for perm in itertools.permutations(range(K)):
        mapped = np.array(perm)[y_pred]
        best = max(best, float(np.mean(mapped == y_true)))
    return best


def assert_store_invariants(store, n_documents: int) -> None:
    """Every document in exactly one partition; sizes sum to n."""
    assert store.is_total()
    assert int(store.sizes.sum().item()) == n_documents
    seen = torch.cat([store.members(k) for k in range(store.n_clusters)])
    assert len(seen) == n_documents
    assert len(torch.unique(seen)) == n_documents


def assert_unit_concepts(store, concepts: torch.Tensor, atol: float = 1e-5) -> None:
    """Concepts of non-empty partitions have unit norm; empty ones are zero."""
    norms = torch.linalg.vector_norm(concepts, dim=1)
    for k in range(store.n_clusters):
        if store.size(k) > 0:
            assert abs(norms[k].item() - 1.0) < atol, f"concept {k} has norm {norms[k].item()}"
        else:
            assert norms[k].item() == 0.0


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Context manager to time a block and print a single-line summary.

    Output
    ------
    [timing] fit {"n":400,"d":30,"K":3} 0.123s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        meta_str = " " + json.dumps(meta, separators=(",", ":")) if meta else ""
        print(f"[timing] {label}{meta_str} {dt:.3f}s")
