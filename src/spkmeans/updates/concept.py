"""
Concept update strategy for spherical k-means.
"""

from typing import Optional
from torch import Tensor

from ..base.interfaces import ParameterUpdater, ClusterRepresentation


class ConceptUpdater(ParameterUpdater):
    """Recomputes a cluster's concept vector from its members."""

    def __init__(self, n_words: Optional[int] = None):
        """
        Args:
            n_words: Word count used to scale member sums before
                normalizing (None uses the representation's dimension)
        """
        self.n_words = n_words

    def update(self, representation: ClusterRepresentation,
               points: Tensor,
               **kwargs) -> None:
        """Recompute the concept from scratch.

        Args:
            representation: Cluster representation to update
            points: Members of this cluster (already filtered), may be empty
            **kwargs: Ignored
        """
        representation.update_from_points(points, n_words=self.n_words)
