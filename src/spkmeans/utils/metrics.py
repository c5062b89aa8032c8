"""
Quality and inspection metrics for spherical k-means results.
"""

from typing import List, Optional, Sequence, Tuple, Union
import torch
from torch import Tensor

from .vectors import dot, vec_sum


def partition_quality(members: Tensor, concept: Tensor) -> float:
    """dot(sum(members), concept) for a single partition.

    Args:
        members: (m, d) member documents, m may be zero
        concept: (d,) concept vector

    Returns:
        Partition quality, 0.0 for an empty partition
    """
    if members.shape[0] == 0:
        return 0.0
    return dot(vec_sum(members), concept).item()


def total_quality(X: Tensor, labels: Tensor, concepts: Tensor) -> float:
    """Sum of partition_quality over all partitions.

    Args:
        X: (n, d) normalized documents
        labels: (n,) partition index per document
        concepts: (k, d) concept vectors
    """
    quality = 0.0
    for k in range(concepts.shape[0]):
        quality += partition_quality(X[labels == k], concepts[k])
    return quality


def mean_alignment(X: Tensor, labels: Tensor, concepts: Tensor) -> Tensor:
    """Average cosine alignment of each partition's members to its concept.

    Documents are assumed to be unit length, so the alignment of a member
    is dot(doc, concept). Empty partitions report 0.

    Returns:
        (k,) tensor
    """
    n_clusters = concepts.shape[0]
    sums = torch.zeros_like(concepts).index_add_(0, labels, X)
    counts = torch.bincount(labels, minlength=n_clusters).to(X.dtype)
    per_partition = (sums * concepts).sum(dim=1)
    return torch.where(counts > 0, per_partition / counts.clamp(min=1), torch.zeros_like(counts))


def top_dimensions(members: Tensor, n: int = 10,
                   vocabulary: Optional[Sequence[str]] = None
                   ) -> List[Tuple[Union[int, str], float]]:
    """Highest-weighted word dimensions of a partition.

    Sums the member weights per word and returns the top n words, heaviest
    first. Equal weights are ordered by ascending word index.

    Args:
        members: (m, d) member documents
        n: Number of words to return (capped at d)
        vocabulary: Optional sequence mapping word index to word

    Returns:
        List of (word index or word, summed weight)
    """
    n_words = members.shape[1]
    n = min(n, n_words)
    if vocabulary is not None and len(vocabulary) != n_words:
        raise ValueError(f"Vocabulary has {len(vocabulary)} words, "
                         f"documents have {n_words}")

    weights = vec_sum(members).detach().cpu().tolist()
    order = sorted(range(n_words), key=lambda i: (-weights[i], i))[:n]

    if vocabulary is None:
        return [(i, weights[i]) for i in order]
    return [(vocabulary[i], weights[i]) for i in order]
