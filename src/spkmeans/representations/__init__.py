"""Cluster representation implementations."""

from .base_representation import BaseRepresentation
from .concept import ConceptRepresentation, compute_concept

__all__ = [
    'BaseRepresentation',
    'ConceptRepresentation',
    'compute_concept'
]
