"""
Contiguous-block initialization for spherical k-means.

Splits the documents, in their original order, into k consecutive blocks.
"""

import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy


def contiguous_labels(n_points: int, n_clusters: int,
                      device: torch.device = None) -> Tensor:
    """Labels for k contiguous blocks of floor(n / k) documents.

    The last block absorbs the remainder, so every block is non-empty
    whenever n_clusters <= n_points.
    """
    if n_clusters > n_points:
        raise ValueError(f"Cannot create {n_clusters} clusters from {n_points} points")

    split = n_points // n_clusters
    labels = torch.arange(n_points, device=device) // split
    return labels.clamp(max=n_clusters - 1)


class ContiguousInit(InitializationStrategy):
    """First k-1 blocks hold floor(n / k) documents, the last holds the rest."""

    def initialize(self, points: Tensor, n_clusters: int,
                   **kwargs) -> Tensor:
        """Partition documents into contiguous blocks.

        Args:
            points: (n, d) documents
            n_clusters: Number of partitions

        Returns:
            (n,) initial partition indices
        """
        return contiguous_labels(points.shape[0], n_clusters, device=points.device)
