"""
spkmeans: spherical k-means clustering for document vectors.

Clusters dense bag-of-words vectors by direction. Each document is
normalized to unit length, documents are assigned to the concept vector they
have the highest cosine similarity with, and concept vectors are recomputed
until the clustering quality stops improving.

Example usage:
    >>> import torch
    >>> from spkmeans import SphericalKMeans, run_clustering
    >>>
    >>> # Term weights for 100 documents over a 500-word vocabulary
    >>> X = torch.rand(100, 500)
    >>>
    >>> # Estimator interface
    >>> model = SphericalKMeans(n_clusters=5, verbose=1)
    >>> model.fit(X)
    >>> labels = model.labels_
    >>>
    >>> # Functional interface
    >>> result = run_clustering(X, k=5, word_count=500)
    >>> result.top_dimensions(0, n=10)
"""

__version__ = '0.1.0'

# Import main algorithms
from .algorithms.spkmeans import SphericalKMeans, run_clustering

# Import visualization
from .visualization import (
    plot_concepts_2d,
    plot_quality_history
)

# Convenience imports
from .base import (
    Partition,
    PartitionStore,
    ClusterResult,
    AlgorithmState
)
from .base.clustering_base import ConvergenceWarning
from .utils.validation import ConfigurationError, DegenerateVectorError
from .utils.timing import PhaseTimer

__all__ = [
    # Algorithms
    'SphericalKMeans',
    'run_clustering',

    # Core data structures
    'Partition',
    'PartitionStore',
    'ClusterResult',
    'AlgorithmState',
    'PhaseTimer',

    # Errors and warnings
    'ConfigurationError',
    'DegenerateVectorError',
    'ConvergenceWarning',

    # Visualization
    'plot_concepts_2d',
    'plot_quality_history',

    # Version
    '__version__'
]
