"""Assignment strategies for spherical k-means."""

from .cosine import CosineAssignment

__all__ = [
    'CosineAssignment'
]
