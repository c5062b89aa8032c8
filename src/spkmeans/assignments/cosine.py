"""
Nearest-concept assignment for spherical k-means.

Assigns each document to the concept it has the largest cosine similarity
with.
"""

from typing import List
import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy, ClusterRepresentation


class CosineAssignment(AssignmentStrategy):
    """Hard assignment to the most similar concept.

    Candidates are visited in index order and a later concept only takes
    over when its similarity is strictly greater than the best so far, so
    ties go to the lowest-indexed partition.
    """

    def compute_assignments(self, points: Tensor,
                            representations: List[ClusterRepresentation],
                            **kwargs) -> Tensor:
        """Assign each document to its most similar concept.

        Args:
            points: (n, d) documents
            representations: List of K cluster representations

        Returns:
            (n,) tensor of partition indices
        """
        similarities = self.similarity_matrix(points, representations)
        return self.assign_from_similarities(similarities)

    @staticmethod
    def similarity_matrix(points: Tensor,
                          representations: List[ClusterRepresentation]) -> Tensor:
        """(n, K) cosine similarities of every document to every concept."""
        n_points = points.shape[0]
        n_clusters = len(representations)

        similarities = torch.empty(n_points, n_clusters, device=points.device,
                                   dtype=points.dtype)
        for k, representation in enumerate(representations):
            similarities[:, k] = representation.similarity_to_point(points)
        return similarities

    @staticmethod
    def assign_from_similarities(similarities: Tensor) -> Tensor:
        """Strict-maximum column per row, lowest index on ties."""
        best_value = similarities[:, 0].clone()
        best_index = torch.zeros(similarities.shape[0], dtype=torch.long,
                                 device=similarities.device)

        for k in range(1, similarities.shape[1]):
            better = similarities[:, k] > best_value
            best_index[better] = k
            best_value = torch.where(better, similarities[:, k], best_value)

        return best_index
