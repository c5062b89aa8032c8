"""Parameter update strategies for spherical k-means."""

from .concept import ConceptUpdater

__all__ = [
    'ConceptUpdater'
]
