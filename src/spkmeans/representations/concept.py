"""
Concept vector representation for spherical k-means.

A cluster is represented by a single unit-length direction, the normalized
mean of its member documents.
"""

from typing import Optional
import torch
from torch import Tensor

from .base_representation import BaseRepresentation
from ..utils.vectors import vec_sum, scale, normalize, cosine_similarity_matrix
from ..utils.validation import DegenerateVectorError


def compute_concept(members: Tensor, n_words: Optional[int] = None) -> Tensor:
    """Concept vector of a partition.

    The member sum is scaled by 1 / n_words and then normalized to unit
    length. The scaling does not change the direction.

    Args:
        members: (m, d) member documents
        n_words: Word count used for the scaling step (defaults to d)

    Returns:
        (d,) unit concept vector, or the zero vector when the partition is
        empty or its members sum to zero
    """
    if n_words is None:
        n_words = members.shape[1]

    concept = vec_sum(members)
    scale(concept, 1.0 / n_words)
    try:
        normalize(concept)
    except DegenerateVectorError:
        concept.zero_()
    return concept


class ConceptRepresentation(BaseRepresentation):
    """Cluster represented by a unit concept vector.

    An empty cluster, or one whose members cancel out, holds the zero vector
    and is marked degenerate. Degenerate concepts score -inf against every
    document so they never win an assignment.
    """

    @property
    def is_degenerate(self) -> bool:
        """True when the concept is the zero vector."""
        return not bool(torch.any(self._concept != 0))

    def similarity_to_point(self, points: Tensor) -> Tensor:
        """Cosine similarity from documents to the concept.

        Args:
            points: (n, d) tensor of documents

        Returns:
            (n,) tensor; -inf everywhere for a degenerate concept, 0 for
            zero documents
        """
        self._check_points_shape(points)
        return cosine_similarity_matrix(points, self._concept.unsqueeze(0)).squeeze(1)

    def update_from_points(self, points: Tensor, n_words: Optional[int] = None,
                           **kwargs) -> None:
        """Replace the concept with that of the given members.

        Args:
            points: (m, d) member documents, m may be zero
            n_words: Word count used for scaling (defaults to dimension)
        """
        self._check_points_shape(points)
        self._concept = compute_concept(points, n_words or self._dimension)

    def __repr__(self) -> str:
        return (f"ConceptRepresentation(dimension={self._dimension}, "
                f"concept_norm={self._concept.norm():.3f})")
