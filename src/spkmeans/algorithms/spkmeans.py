"""
Spherical k-means clustering algorithm.

Clusters unit-normalized document vectors by direction, representing each
cluster with a unit concept vector, using the modular refinement loop.
"""

from typing import Optional, List, Union, Sequence, Dict, Any
import torch
from torch import Tensor
import numpy as np

from ..base.clustering_base import BaseClusteringAlgorithm
from ..base.data_structures import ClusterResult
from ..base.interfaces import ClusterRepresentation, ClusteringObjective
from ..representations.concept import ConceptRepresentation
from ..assignments.cosine import CosineAssignment
from ..updates.concept import ConceptUpdater
from ..initialization.contiguous import ContiguousInit
from ..initialization.random import RandomInit
from ..initialization.from_previous import FromPreviousInit
from ..utils.convergence import QualityThreshold
from ..utils.metrics import partition_quality
from ..utils.validation import ConfigurationError
from ..utils.timing import PhaseTimer


# Default minimum quality gain per iteration
Q_THRESHOLD = 0.001


class ConceptQualityObjective(ClusteringObjective):
    """Spherical k-means quality: sum over clusters of dot(sum(members), concept)."""

    def compute(self, points: Tensor, representations: List[ClusterRepresentation],
                assignments: Tensor) -> Tensor:
        """Compute total quality of a partitioning.

        Empty clusters contribute 0.
        """
        total = 0.0
        for k, rep in enumerate(representations):
            members = points[assignments == k]
            total += partition_quality(members, rep.get_parameters()['concept'])
        return torch.tensor(total, dtype=torch.float64)

    @property
    def minimize(self) -> bool:
        return False


class SphericalKMeans(BaseClusteringAlgorithm):
    """Spherical k-means clustering algorithm.

    Partitions documents into K clusters by cosine similarity. Documents are
    normalized to unit length once; each cluster is summarized by the
    normalized mean of its members (its concept vector).

    Parameters
    ----------
    n_clusters : int
        Number of clusters
    init : str or array-like, default='contiguous'
        Initial partition:
        - 'contiguous' : split documents in order into K blocks
        - 'random' : split a random permutation into K blocks
        - array of shape (n_samples,) : use as initial partition indices
    max_iter : int or None, default=100
        Maximum number of refinement iterations, None for no cap
    tol : float, default=0.001
        Refinement stops once an iteration raises quality by at most tol
    zero_vector_policy : {'ignore', 'raise'}, default='ignore'
        How all-zero documents are handled during normalization
    copy_x : bool, default=True
        If False, float tensor input is normalized in place
    verbose : int, default=0
        Verbosity level
    random_state : int, optional
        Random seed for the 'random' initialization
    device : str or torch.device, optional
        Device for computation (CPU/GPU)
    timer : PhaseTimer, optional
        Collector receiving per-phase timings

    Attributes
    ----------
    concepts_ : Tensor of shape (n_clusters, n_features)
        Unit concept vectors (zero rows for empty clusters)
    labels_ : Tensor of shape (n_samples,)
        Cluster assignments for training data
    quality_ : float
        Final quality value
    n_iter_ : int
        Number of refinement iterations run
    result_ : ClusterResult
        Full result of the last fit
    """

    def __init__(self,
                 n_clusters: int,
                 init: Union[str, Tensor, np.ndarray, list] = 'contiguous',
                 max_iter: Optional[int] = 100,
                 tol: float = Q_THRESHOLD,
                 zero_vector_policy: str = 'ignore',
                 copy_x: bool = True,
                 verbose: int = 0,
                 random_state: Optional[int] = None,
                 device: Optional[Union[str, torch.device]] = None,
                 timer: Optional[PhaseTimer] = None):
        """Initialize spherical k-means algorithm."""
        super().__init__(
            n_clusters=n_clusters,
            max_iter=max_iter,
            tol=tol,
            zero_vector_policy=zero_vector_policy,
            copy_x=copy_x,
            verbose=verbose,
            random_state=random_state,
            device=device,
            timer=timer
        )
        self.init = init

    def _create_components(self, n_words: int) -> None:
        """Create spherical k-means specific components."""
        self.assignment_strategy = CosineAssignment()
        self.update_strategy = ConceptUpdater(n_words)

        if isinstance(self.init, str):
            if self.init == 'contiguous':
                self.initialization_strategy = ContiguousInit()
            elif self.init == 'random':
                generator = None
                if self.random_state is not None:
                    generator = torch.Generator()
                    generator.manual_seed(self.random_state)
                self.initialization_strategy = RandomInit(generator)
            else:
                raise ConfigurationError(f"Unknown init method: {self.init}")
        else:
            self.initialization_strategy = FromPreviousInit(self.init)

        self.convergence_criterion = QualityThreshold(threshold=self.tol)
        self.objective = ConceptQualityObjective()

    def _create_representations(self, data: Tensor) -> List[ClusterRepresentation]:
        """Create empty concept representations."""
        dimension = data.shape[1]
        return [
            ConceptRepresentation(dimension, data.device, data.dtype)
            for _ in range(self.n_clusters)
        ]

    def fit(self, X: Tensor, y: Optional[Tensor] = None,
            word_count: Optional[int] = None) -> 'SphericalKMeans':
        """Fit spherical k-means clustering.

        Parameters
        ----------
        X : Tensor of shape (n_samples, n_features)
            Document vectors
        y : Ignored
            Not used, present for API consistency
        word_count : int, optional
            Declared number of words, must equal n_features

        Returns
        -------
        self : SphericalKMeans
            Fitted estimator
        """
        return super().fit(X, y, word_count=word_count)

    def score(self, X: Tensor, y: Optional[Tensor] = None) -> float:
        """Quality of X under the fitted concepts.

        Parameters
        ----------
        X : Tensor of shape (n_samples, n_features)
            New documents (not modified)
        y : Ignored
            Not used

        Returns
        -------
        score : float
            Sum over clusters of dot(sum(assigned documents), concept)
        """
        self._check_fitted()
        X = self._prepare_documents(X, copy=True)
        labels = self.assignment_strategy.compute_assignments(X, self.representations)
        return float(self.objective.compute(X, self.representations, labels))

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        params = super().get_params(deep)
        params['init'] = self.init
        return params


def run_clustering(documents: Union[Tensor, np.ndarray, Sequence[Sequence[float]]],
                   k: int,
                   word_count: Optional[int] = None,
                   **kwargs) -> ClusterResult:
    """Cluster documents into k partitions with spherical k-means.

    Args:
        documents: (n, d) document vectors, n >= 1
        k: Number of clusters, 1 <= k <= n
        word_count: Declared word count; must equal d when given
        **kwargs: Passed to SphericalKMeans (init, tol, max_iter, ...)

    Returns:
        ClusterResult of the converged run

    Raises:
        ConfigurationError: If k or word_count is inconsistent with the data
    """
    model = SphericalKMeans(n_clusters=k, **kwargs)
    model.fit(documents, word_count=word_count)
    return model.result_
