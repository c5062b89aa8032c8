"""
Core data structures for spherical k-means.

This module provides the partition store that tracks which document belongs
to which cluster, the per-iteration algorithm state, and the result object
handed back to callers.
"""

from typing import Optional, List, Tuple, Dict, Any, Sequence, Union
import torch
from torch import Tensor
from dataclasses import dataclass, field

from ..utils.metrics import top_dimensions, mean_alignment


@dataclass(frozen=True)
class Partition:
    """One cluster: its index, member document rows, size and concept."""

    index: int
    members: Tensor   # (m,) row indices into the document matrix
    size: int
    concept: Tensor   # (d,) concept vector

    @property
    def is_empty(self) -> bool:
        return self.size == 0


class PartitionStore:
    """Assignment of every document to exactly one of k partitions.

    A store is built in full from a label vector and is never modified
    afterwards; each refinement step builds a new store and drops the old
    one. Members are referenced by row index into the document matrix.
    """

    def __init__(self, labels: Tensor, n_clusters: int):
        """
        Args:
            labels: (n,) partition index per document
            n_clusters: Number of partitions k
        """
        if labels.dim() != 1:
            raise ValueError(f"Expected 1D labels, got {labels.dim()}D")
        if len(labels) > 0 and (labels.min() < 0 or labels.max() >= n_clusters):
            raise ValueError(f"Labels must lie in [0, {n_clusters})")

        self.n_clusters = n_clusters
        self._labels = labels.long().clone()
        self._members = [
            torch.where(self._labels == k)[0] for k in range(n_clusters)
        ]
        self._sizes = torch.bincount(self._labels, minlength=n_clusters)

    @classmethod
    def from_members(cls, members: Sequence[Tensor], n_documents: int) -> 'PartitionStore':
        """Build a store from per-partition index lists.

        Raises:
            ValueError: If the lists overlap or do not cover every document
        """
        labels = torch.full((n_documents,), -1, dtype=torch.long)
        for k, rows in enumerate(members):
            rows = torch.as_tensor(rows, dtype=torch.long).cpu()
            if (labels[rows] != -1).any():
                raise ValueError(f"Partition {k} shares documents with another partition")
            labels[rows] = k
        if (labels == -1).any():
            missing = torch.where(labels == -1)[0].tolist()
            raise ValueError(f"Documents {missing} are not in any partition")
        return cls(labels, len(members))

    def reassign(self, labels: Tensor) -> 'PartitionStore':
        """Return a new store for the given labels; self is left untouched.

        Raises:
            ValueError: If the label count differs from this store's
        """
        if labels.shape[0] != self.n_documents:
            raise ValueError(f"Expected {self.n_documents} labels, got {labels.shape[0]}")
        return PartitionStore(labels, self.n_clusters)

    @property
    def labels(self) -> Tensor:
        """(n,) partition index per document (a copy)."""
        return self._labels.clone()

    @property
    def n_documents(self) -> int:
        return self._labels.shape[0]

    @property
    def sizes(self) -> Tensor:
        """(k,) number of members per partition."""
        return self._sizes.clone()

    def members(self, cluster_idx: int) -> Tensor:
        """Row indices of the documents in a partition."""
        return self._members[cluster_idx]

    def size(self, cluster_idx: int) -> int:
        return int(self._sizes[cluster_idx].item())

    def empty_partitions(self) -> List[int]:
        """Indices of partitions with no members."""
        return [k for k in range(self.n_clusters) if self.size(k) == 0]

    def is_total(self) -> bool:
        """True when memberships are pairwise disjoint and cover every document."""
        if int(self._sizes.sum().item()) != self.n_documents:
            return False
        if self.n_documents == 0:
            return True
        covered = torch.cat(self._members)
        return bool(torch.equal(torch.sort(covered).values,
                                torch.arange(self.n_documents, device=covered.device)))

    def partitions(self, concepts: Tensor) -> List[Partition]:
        """Pair every partition's membership with its concept vector.

        Args:
            concepts: (k, d) concept vectors
        """
        if concepts.shape[0] != self.n_clusters:
            raise ValueError(f"Expected {self.n_clusters} concepts, got {concepts.shape[0]}")
        return [
            Partition(index=k, members=self._members[k], size=self.size(k),
                      concept=concepts[k])
            for k in range(self.n_clusters)
        ]

    def to(self, device: torch.device) -> 'PartitionStore':
        """Move to specified device."""
        return PartitionStore(self._labels.to(device), self.n_clusters)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PartitionStore):
            return NotImplemented
        return (self.n_clusters == other.n_clusters
                and torch.equal(self._labels.cpu(), other._labels.cpu()))

    def __repr__(self) -> str:
        return f"PartitionStore(n_clusters={self.n_clusters}, sizes={self._sizes.tolist()})"


@dataclass
class AlgorithmState:
    """State of the refinement loop after one iteration.

    Iteration 0 is the initial partition, before any reassignment.
    """
    iteration: int
    store: PartitionStore
    concepts: Tensor        # (k, d)
    quality: float
    delta: Optional[float] = None
    converged: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ClusterResult:
    """Outcome of a clustering run.

    Holds the final partitions with their concept vectors together with the
    normalized documents they index into, so callers can inspect members
    without access to the loop.
    """
    partitions: List[Partition]
    concepts: Tensor            # (k, d) concept vectors
    labels: Tensor              # (n,) final partition per document
    documents: Tensor           # (n, d) normalized documents
    n_documents: int
    n_words: int
    quality: float
    n_iter: int
    converged: bool
    quality_history: List[float] = field(default_factory=list)
    timings: Dict[str, Dict[str, float]] = field(default_factory=dict)

    @property
    def n_clusters(self) -> int:
        return len(self.partitions)

    @property
    def sizes(self) -> List[int]:
        return [p.size for p in self.partitions]

    def members(self, cluster_idx: int) -> Tensor:
        """(m, d) member documents of a partition."""
        return self.documents[self.partitions[cluster_idx].members]

    def top_dimensions(self, cluster_idx: int, n: int = 10,
                       vocabulary: Optional[Sequence[str]] = None
                       ) -> List[Tuple[Union[int, str], float]]:
        """Heaviest words of a partition by summed member weight."""
        return top_dimensions(self.members(cluster_idx), n=n, vocabulary=vocabulary)

    def alignment(self) -> Tensor:
        """(k,) mean cosine alignment of members to their concept."""
        return mean_alignment(self.documents, self.labels, self.concepts)

    def __repr__(self) -> str:
        return (f"ClusterResult(n_clusters={self.n_clusters}, sizes={self.sizes}, "
                f"quality={self.quality:.6f}, n_iter={self.n_iter}, "
                f"converged={self.converged})")
