"""
Base class for spherical k-means style clustering algorithms.

Provides the refinement loop: normalize documents once, build an initial
partition, then alternate between reassignment and concept recomputation
until the quality gain drops to the convergence threshold.
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, List, Union
import torch
from torch import Tensor
import warnings

from .interfaces import (
    ClusterRepresentation, AssignmentStrategy, ParameterUpdater,
    InitializationStrategy, ConvergenceCriterion, ClusteringObjective
)
from .data_structures import PartitionStore, AlgorithmState, ClusterResult
from ..utils.vectors import normalize_rows
from ..utils.validation import (
    validate_data, check_n_clusters, check_word_count, validate_params
)
from ..utils.device import parse_device, synchronize_device
from ..utils.timing import PhaseTimer


class ConvergenceWarning(UserWarning):
    """Emitted when the loop stops at max_iter without converging."""


class BaseClusteringAlgorithm:
    """Base class implementing the refinement loop.

    Subclasses need to specify:
    - Cluster representation type
    - Assignment strategy
    - Parameter update strategy
    - Initialization strategy
    - Convergence criterion
    - Objective function
    """

    def __init__(self,
                 n_clusters: int,
                 max_iter: Optional[int] = 100,
                 tol: float = 1e-3,
                 zero_vector_policy: str = 'ignore',
                 copy_x: bool = True,
                 verbose: int = 0,
                 random_state: Optional[int] = None,
                 device: Optional[Union[str, torch.device]] = None,
                 timer: Optional[PhaseTimer] = None):
        """
        Args:
            n_clusters: Number of clusters K
            max_iter: Maximum refinement iterations (None for no cap)
            tol: Minimum quality gain per iteration to keep refining
            zero_vector_policy: 'ignore' or 'raise' for all-zero documents
            copy_x: If False, float tensors are normalized in place
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
            random_state: Random seed for reproducibility
            device: Torch device or device string (None for auto-detect)
            timer: Collector for per-phase timings (a fresh one per fit if None)
        """
        self.n_clusters = n_clusters
        self.max_iter = max_iter
        self.tol = tol
        self.zero_vector_policy = zero_vector_policy
        self.copy_x = copy_x
        self.verbose = verbose
        self.random_state = random_state
        self.device = parse_device(device)
        self.timer = timer

        # These will be set by subclasses
        self.representations: Optional[List[ClusterRepresentation]] = None
        self.assignment_strategy: Optional[AssignmentStrategy] = None
        self.update_strategy: Optional[ParameterUpdater] = None
        self.initialization_strategy: Optional[InitializationStrategy] = None
        self.convergence_criterion: Optional[ConvergenceCriterion] = None
        self.objective: Optional[ClusteringObjective] = None

        # Algorithm state
        self.fitted_ = False
        self.n_iter_ = 0
        self.converged_ = False
        self.history_: List[AlgorithmState] = []
        self.store_: Optional[PartitionStore] = None
        self.result_: Optional[ClusterResult] = None
        self.timings_: Dict[str, Dict[str, float]] = {}

    @abstractmethod
    def _create_components(self, n_words: int) -> None:
        """Create algorithm-specific components.

        Subclasses must implement this to instantiate:
        - self.assignment_strategy
        - self.update_strategy
        - self.initialization_strategy
        - self.convergence_criterion
        - self.objective
        """
        pass

    @abstractmethod
    def _create_representations(self, data: Tensor) -> List[ClusterRepresentation]:
        """Create one (empty) cluster representation per cluster.

        Args:
            data: (n, d) normalized documents

        Returns:
            List of K cluster representations
        """
        pass

    def fit(self, X: Tensor, y: Optional[Tensor] = None,
            word_count: Optional[int] = None) -> 'BaseClusteringAlgorithm':
        """Fit the clustering model.

        Args:
            X: (n, d) document vectors
            y: Ignored (for sklearn compatibility)
            word_count: Optional declared word count, checked against d

        Returns:
            Self
        """
        return self._fit(X, word_count)

    def fit_predict(self, X: Tensor, y: Optional[Tensor] = None,
                    word_count: Optional[int] = None) -> Tensor:
        """Fit and return the final partition index of each document."""
        self._fit(X, word_count)
        return self.result_.labels

    def predict(self, X: Tensor) -> Tensor:
        """Assign new documents to the fitted concepts.

        Args:
            X: (n, d) document vectors (not modified)

        Returns:
            (n,) tensor of partition indices
        """
        self._check_fitted()
        X = self._prepare_documents(X, copy=True)
        return self.assignment_strategy.compute_assignments(X, self.representations)

    def _fit(self, X: Tensor, word_count: Optional[int] = None) -> 'BaseClusteringAlgorithm':
        """Internal fit method implementing the refinement loop."""
        validate_params(self.tol, self.max_iter, self.zero_vector_policy)
        X = validate_data(X, device=self.device, copy=self.copy_x)
        n_documents, n_words = X.shape
        check_n_clusters(self.n_clusters, n_documents)
        check_word_count(word_count, n_words)

        self._create_components(n_words)

        # Initializers only look at the shape, so a bad labelling is
        # rejected before X is touched
        initial_labels = self.initialization_strategy.initialize(X, self.n_clusters)

        timer = self.timer if self.timer is not None else PhaseTimer()
        timer.reset()
        timer.start()

        # TXN: the only normalization documents ever receive
        normalize_rows(X, self.zero_vector_policy)

        if self.verbose:
            print(f"Running spherical k-means on {n_documents} documents, "
                  f"{n_words} words with k={self.n_clusters}")

        store = PartitionStore(initial_labels, self.n_clusters)
        if self.verbose >= 2:
            for k in range(self.n_clusters):
                print(f"Created initial partition {k} of size {store.size(k)}")

        self.representations = self._create_representations(X)
        self._update_concepts(X, store)
        quality = self._compute_quality(X, store)

        degenerate = set(self._degenerate_partitions())
        if degenerate:
            warnings.warn(f"Concepts of partitions {sorted(degenerate)} are zero after "
                          f"initialization; these partitions receive no documents")

        self.convergence_criterion.reset()
        self.convergence_criterion.check({'iteration': 0, 'objective': quality})
        self.history_ = [AlgorithmState(
            iteration=0,
            store=store,
            concepts=self._stack_concepts(),
            quality=quality
        )]

        if self.verbose:
            print(f"Initial quality: {quality:.6f}")

        iteration = 0
        converged = False
        while self.max_iter is None or iteration < self.max_iter:
            iteration += 1

            # Every document is scored against the same concept snapshot
            with timer.phase('partition'):
                labels = self.assignment_strategy.compute_assignments(
                    X, self.representations
                )
                store = store.reassign(labels)
                synchronize_device(self.device)

            with timer.phase('concepts'):
                self._update_concepts(X, store)
                synchronize_device(self.device)

            # Covers partitions that emptied and partitions whose members cancel out
            now_degenerate = set(self._degenerate_partitions())
            newly_degenerate = now_degenerate - degenerate
            degenerate = now_degenerate
            if newly_degenerate:
                warnings.warn(f"Concepts of partitions {sorted(newly_degenerate)} became zero "
                              f"at iteration {iteration}; these partitions receive no "
                              f"further documents")

            with timer.phase('quality'):
                quality = self._compute_quality(X, store)

            converged = self.convergence_criterion.check({
                'iteration': iteration,
                'objective': quality,
                'labels': labels,
                'store': store
            })
            delta = getattr(self.convergence_criterion, 'delta', None)

            self.history_.append(AlgorithmState(
                iteration=iteration,
                store=store,
                concepts=self._stack_concepts(),
                quality=quality,
                delta=delta,
                converged=converged
            ))

            if self.verbose >= 2 or (self.verbose >= 1 and iteration % 10 == 0):
                change = f" ({delta:+.6f})" if delta is not None else ""
                print(f"Iteration {iteration:3d}: quality = {quality:.6f}{change}")

            if converged:
                if self.verbose:
                    print(f"Converged at iteration {iteration}")
                break

        total_ms = timer.stop()

        if not converged:
            warnings.warn(f"Failed to converge after {self.max_iter} iterations",
                          ConvergenceWarning)

        self.n_iter_ = iteration
        self.converged_ = converged
        self.store_ = store
        self.timings_ = timer.summary()
        self.result_ = ClusterResult(
            partitions=store.partitions(self._stack_concepts()),
            concepts=self._stack_concepts(),
            labels=store.labels,
            documents=X,
            n_documents=n_documents,
            n_words=n_words,
            quality=quality,
            n_iter=iteration,
            converged=converged,
            quality_history=[state.quality for state in self.history_],
            timings=self.timings_
        )

        if self.verbose:
            print(f"Done in {total_ms / 1000:.3f} seconds after {iteration} iterations.")
            if self.verbose >= 2:
                self._print_timings()

        self.fitted_ = True
        return self

    def _update_concepts(self, X: Tensor, store: PartitionStore) -> None:
        """Recompute every representation from its current members."""
        for k, representation in enumerate(self.representations):
            self.update_strategy.update(representation, X[store.members(k)])

    def _compute_quality(self, X: Tensor, store: PartitionStore) -> float:
        value = self.objective.compute(X, self.representations, store.labels)
        return float(value)

    def _degenerate_partitions(self) -> List[int]:
        """Indices of partitions whose concept is the zero vector."""
        zero_rows = (self._stack_concepts() == 0).all(dim=1)
        return torch.nonzero(zero_rows).flatten().tolist()

    def _stack_concepts(self) -> Tensor:
        return torch.stack([
            rep.get_parameters()['concept'] for rep in self.representations
        ])

    def _prepare_documents(self, X: Tensor, copy: bool) -> Tensor:
        X = validate_data(X, device=self.device, copy=copy)
        if X.shape[1] != self.result_.n_words:
            raise ValueError(f"Expected {self.result_.n_words} words, got {X.shape[1]}")
        return normalize_rows(X, self.zero_vector_policy)

    def _print_timings(self) -> None:
        summary = self.timings_
        if sum(entry['ms'] for entry in summary.values()) == 0:
            print("No time stats available: program finished too fast.")
            return
        print("Timers (ms):")
        for name, entry in summary.items():
            print(f"   {name} [{entry['ms']:.3f}] ({entry['percent']:.1f}%)")

    def _check_fitted(self) -> None:
        if not self.fitted_:
            raise RuntimeError("Model must be fitted before use")

    @property
    def concepts_(self) -> Tensor:
        """(k, d) fitted concept vectors."""
        self._check_fitted()
        return self.result_.concepts

    @property
    def labels_(self) -> Tensor:
        """(n,) partition index of each training document."""
        self._check_fitted()
        return self.result_.labels

    @property
    def quality_(self) -> float:
        """Final quality value."""
        self._check_fitted()
        return self.result_.quality

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'n_clusters': self.n_clusters,
            'max_iter': self.max_iter,
            'tol': self.tol,
            'zero_vector_policy': self.zero_vector_policy,
            'copy_x': self.copy_x,
            'verbose': self.verbose,
            'random_state': self.random_state,
            'device': self.device,
            'timer': self.timer
        }

    def set_params(self, **params) -> 'BaseClusteringAlgorithm':
        """Set parameters (sklearn compatibility)."""
        valid = self.get_params()
        for key, value in params.items():
            if key not in valid:
                raise ValueError(f"Invalid parameter {key!r} for {type(self).__name__}")
            if key == 'device':
                value = parse_device(value)
            setattr(self, key, value)
        return self
