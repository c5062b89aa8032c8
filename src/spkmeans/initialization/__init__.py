"""Initialization strategies for spherical k-means."""

from .contiguous import ContiguousInit, contiguous_labels
from .random import RandomInit
from .from_previous import FromPreviousInit

__all__ = [
    'ContiguousInit',
    'contiguous_labels',
    'RandomInit',
    'FromPreviousInit'
]
