"""
Base representation class with common functionality for all cluster representations.
"""

from typing import Dict
import torch
from torch import Tensor

from ..base.interfaces import ClusterRepresentation


class BaseRepresentation(ClusterRepresentation):
    """Base class providing common functionality for cluster representations."""

    def __init__(self, dimension: int, device: torch.device,
                 dtype: torch.dtype = torch.float32):
        """
        Args:
            dimension: Word count d of the documents
            device: Torch device for tensor allocation
            dtype: Floating point type of the documents
        """
        self._dimension = dimension
        self._device = device
        self._dtype = dtype
        self._concept = torch.zeros(dimension, device=device, dtype=dtype)

    @property
    def dimension(self) -> int:
        """Word count of the documents."""
        return self._dimension

    @property
    def device(self) -> torch.device:
        """Device where tensors are stored."""
        return self._device

    @property
    def concept(self) -> Tensor:
        """Cluster concept vector."""
        return self._concept

    @concept.setter
    def concept(self, value: Tensor):
        """Set cluster concept vector."""
        if value.shape != (self._dimension,):
            raise ValueError(f"Expected concept of shape ({self._dimension},), "
                             f"got {tuple(value.shape)}")
        self._concept = value.to(device=self._device, dtype=self._dtype)

    def to(self, device: torch.device) -> 'BaseRepresentation':
        """Move representation to specified device."""
        new_repr = self.__class__(self._dimension, device, self._dtype)

        params = self.get_parameters()
        new_params = {k: v.to(device) for k, v in params.items()}
        new_repr.set_parameters(new_params)

        return new_repr

    def _check_points_shape(self, points: Tensor):
        """Validate shape of input documents."""
        if points.dim() != 2:
            raise ValueError(f"Expected 2D tensor, got {points.dim()}D")
        if points.shape[1] != self._dimension:
            raise ValueError(f"Expected dimension {self._dimension}, got {points.shape[1]}")

    def get_parameters(self) -> Dict[str, Tensor]:
        return {'concept': self._concept.clone()}

    def set_parameters(self, params: Dict[str, Tensor]) -> None:
        if 'concept' in params:
            self.concept = params['concept']
