"""Clustering algorithm implementations."""

from .spkmeans import SphericalKMeans, ConceptQualityObjective, run_clustering, Q_THRESHOLD

__all__ = [
    'SphericalKMeans',
    'ConceptQualityObjective',
    'run_clustering',
    'Q_THRESHOLD'
]
