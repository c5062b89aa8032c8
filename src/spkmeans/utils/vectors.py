"""
Vector primitives for spherical k-means.

All functions operate on dense float tensors. Functions documented as
in-place modify their argument and also return it for chaining.
"""

import warnings
import torch
from torch import Tensor

from .validation import DegenerateVectorError


def dot(a: Tensor, b: Tensor) -> Tensor:
    """Inner product of two (d,) vectors."""
    if a.shape != b.shape:
        raise ValueError(f"Shape mismatch: {tuple(a.shape)} vs {tuple(b.shape)}")
    return torch.dot(a, b)


def norm(v: Tensor) -> Tensor:
    """Euclidean norm, sqrt(dot(v, v))."""
    return torch.sqrt(dot(v, v))


def vec_sum(vectors: Tensor) -> Tensor:
    """Element-wise sum over the rows of an (m, d) tensor.

    Returns the (d,) zero vector when m == 0.
    """
    if vectors.dim() != 2:
        raise ValueError(f"Expected 2D tensor, got {vectors.dim()}D")
    return vectors.sum(dim=0)


def scale(v: Tensor, factor: float) -> Tensor:
    """Multiply v by factor in place."""
    return v.mul_(factor)


def divide_by(v: Tensor, divisor) -> Tensor:
    """Divide v by divisor in place."""
    return v.div_(divisor)


def normalize(v: Tensor) -> Tensor:
    """Scale v to unit Euclidean norm in place.

    Raises:
        DegenerateVectorError: If v has zero norm
    """
    length = norm(v)
    if length == 0:
        raise DegenerateVectorError("Cannot normalize a zero-norm vector")
    return divide_by(v, length)


def normalize_rows(X: Tensor, zero_policy: str = 'ignore') -> Tensor:
    """Normalize every row of X to unit norm in place (TXN scheme).

    Args:
        X: (n, d) float tensor
        zero_policy: 'ignore' warns and leaves zero rows (and rows with
            inf/nan entries) as zero vectors, 'raise' raises
            DegenerateVectorError before X is modified

    Returns:
        X, normalized
    """
    # Rows are pre-scaled by their largest magnitude so the norm of a large
    # finite row cannot overflow
    max_abs = X.abs().amax(dim=1)
    degenerate = ~((max_abs > 0) & torch.isfinite(max_abs))
    n_degenerate = int(degenerate.sum().item())

    if n_degenerate:
        first = torch.nonzero(degenerate)[0].item()
        if zero_policy == 'raise':
            raise DegenerateVectorError(f"{n_degenerate} document(s) have zero norm or "
                                        f"non-finite entries (first at index {first})")
        warnings.warn(f"{n_degenerate} document(s) have zero norm or non-finite entries "
                      f"(first at index {first}); they are kept as zero vectors")

    ones = torch.ones_like(max_abs)
    X.div_(torch.where(degenerate, ones, max_abs).unsqueeze(1))
    norms = torch.linalg.vector_norm(X, dim=1)
    X.div_(torch.where(degenerate, ones, norms).unsqueeze(1))
    if n_degenerate:
        X[degenerate] = 0
    return X


def cosine_similarity(doc: Tensor, concept: Tensor) -> float:
    """dot(doc, concept) / (norm(doc) * norm(concept)).

    A zero concept scores -inf, so it never wins an assignment. A zero
    document scores 0 against every other concept.
    """
    concept_norm = norm(concept)
    if concept_norm == 0:
        return float('-inf')
    doc_norm = norm(doc)
    if doc_norm == 0:
        return 0.0
    return (dot(doc, concept) / (doc_norm * concept_norm)).item()


def cosine_similarity_matrix(X: Tensor, concepts: Tensor) -> Tensor:
    """Batched cosine similarity.

    Args:
        X: (n, d) documents
        concepts: (k, d) concept vectors

    Returns:
        (n, k) similarities with the same zero-vector conventions as
        cosine_similarity
    """
    dots = X @ concepts.t()
    doc_norms = torch.linalg.vector_norm(X, dim=1)
    concept_norms = torch.linalg.vector_norm(concepts, dim=1)

    denom = doc_norms.unsqueeze(1) * concept_norms.unsqueeze(0)
    similarities = torch.zeros_like(dots)
    valid = denom > 0
    similarities[valid] = dots[valid] / denom[valid]

    dead = (concept_norms == 0).unsqueeze(0).expand_as(similarities)
    similarities[dead] = float('-inf')
    return similarities
