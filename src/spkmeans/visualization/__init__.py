"""Visualization utilities for clustering results."""

from .plot_clusters import (
    plot_concepts_2d,
    plot_quality_history
)

__all__ = [
    'plot_concepts_2d',
    'plot_quality_history'
]
