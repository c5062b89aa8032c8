"""
Core interfaces for the spherical k-means components.

This module defines the abstract base classes each pluggable piece of the
refinement loop implements, so that assignment, concept updates,
initialization, convergence and scoring can be swapped independently.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any
import torch
from torch import Tensor


class ClusterRepresentation(ABC):
    """Abstract base class for cluster representations.

    A spherical k-means cluster is represented by its concept vector; the
    interface leaves room for representations carrying more state.
    """

    @abstractmethod
    def similarity_to_point(self, points: Tensor) -> Tensor:
        """Compute similarity from points to this cluster representation.

        Args:
            points: (n, d) tensor of documents

        Returns:
            (n,) tensor of similarities, larger is closer
        """
        pass

    @abstractmethod
    def update_from_points(self, points: Tensor, **kwargs) -> None:
        """Recompute cluster parameters from its member documents.

        Args:
            points: (m, d) tensor of member documents, m may be zero
            **kwargs: Additional update-specific parameters
        """
        pass

    @abstractmethod
    def get_parameters(self) -> Dict[str, Tensor]:
        """Return all parameters defining this cluster representation."""
        pass

    @abstractmethod
    def set_parameters(self, params: Dict[str, Tensor]) -> None:
        """Set cluster parameters from dictionary."""
        pass

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Ambient dimension (word count) of the data."""
        pass

    @abstractmethod
    def to(self, device: torch.device) -> 'ClusterRepresentation':
        """Move representation to specified device."""
        pass


class AssignmentStrategy(ABC):
    """Abstract base class for document-to-partition assignment strategies."""

    @abstractmethod
    def compute_assignments(self, points: Tensor,
                            representations: list[ClusterRepresentation],
                            **kwargs) -> Tensor:
        """Compute a partition index for every document.

        Args:
            points: (n, d) tensor of documents
            representations: List of K cluster representations, read-only
                for the whole pass
            **kwargs: Strategy-specific parameters

        Returns:
            (n,) long tensor of partition indices
        """
        pass


class ParameterUpdater(ABC):
    """Abstract base class for cluster parameter update strategies."""

    @abstractmethod
    def update(self, representation: ClusterRepresentation,
               points: Tensor,
               **kwargs) -> None:
        """Update cluster parameters given its member documents.

        Args:
            representation: Cluster representation to update
            points: (m, d) member documents of this cluster
            **kwargs: Update-specific parameters
        """
        pass


class InitializationStrategy(ABC):
    """Abstract base class for initial partitioning strategies."""

    @abstractmethod
    def initialize(self, points: Tensor, n_clusters: int,
                   **kwargs) -> Tensor:
        """Build the initial partition.

        Args:
            points: (n, d) tensor of documents
            n_clusters: Number of partitions to create
            **kwargs: Strategy-specific parameters

        Returns:
            (n,) long tensor of initial partition indices
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if algorithm has converged.

        Args:
            current_state: Dictionary containing current algorithm state

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []


class ClusteringObjective(ABC):
    """Abstract base class for clustering objective functions."""

    @abstractmethod
    def compute(self, points: Tensor,
                representations: list[ClusterRepresentation],
                assignments: Tensor) -> Tensor:
        """Compute objective function value.

        Args:
            points: (n, d) tensor of documents
            representations: List of cluster representations
            assignments: (n,) partition indices

        Returns:
            Scalar objective value
        """
        pass

    @property
    @abstractmethod
    def minimize(self) -> bool:
        """Whether to minimize (True) or maximize (False) this objective."""
        pass
