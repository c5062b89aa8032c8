"""Base classes and interfaces for spherical k-means."""

from .interfaces import (
    ClusterRepresentation,
    AssignmentStrategy,
    ParameterUpdater,
    InitializationStrategy,
    ConvergenceCriterion,
    ClusteringObjective
)

from .data_structures import (
    Partition,
    PartitionStore,
    AlgorithmState,
    ClusterResult
)

from .clustering_base import BaseClusteringAlgorithm

__all__ = [
    # Interfaces
    'ClusterRepresentation',
    'AssignmentStrategy',
    'ParameterUpdater',
    'InitializationStrategy',
    'ConvergenceCriterion',
    'ClusteringObjective',

    # Data structures
    'Partition',
    'PartitionStore',
    'AlgorithmState',
    'ClusterResult',

    # Base algorithm
    'BaseClusteringAlgorithm'
]
