"""
Random initialization strategy for spherical k-means.

Shuffles the documents and then splits them into contiguous blocks.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from .contiguous import contiguous_labels


class RandomInit(InitializationStrategy):
    """Random balanced partition.

    Every partition receives floor(n / k) randomly chosen documents, with the
    remainder going to the last one, so no partition starts empty.
    """

    def __init__(self, generator: Optional[torch.Generator] = None):
        """
        Args:
            generator: Optional CPU generator for reproducible shuffles
        """
        self.generator = generator

    def initialize(self, points: Tensor, n_clusters: int,
                   **kwargs) -> Tensor:
        """Initialize with a shuffled block split.

        Args:
            points: (n, d) documents
            n_clusters: Number of partitions

        Returns:
            (n,) initial partition indices
        """
        n_points = points.shape[0]
        device = points.device

        if n_clusters > n_points:
            raise ValueError(f"Cannot create {n_clusters} clusters from {n_points} points")

        perm = torch.randperm(n_points, generator=self.generator).to(device)
        block_labels = contiguous_labels(n_points, n_clusters, device=device)

        labels = torch.empty(n_points, dtype=torch.long, device=device)
        labels[perm] = block_labels
        return labels
