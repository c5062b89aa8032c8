"""
Initialization from a previous labelling.

Useful for warm starts, e.g. re-running on the same documents with a
labelling produced by an earlier fit.
"""

from typing import Union
import numpy as np
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from ..base.data_structures import PartitionStore
from ..utils.validation import ConfigurationError, check_labels


class FromPreviousInit(InitializationStrategy):
    """Initialize from explicit partition indices.

    Accepts either:
    - A (n,) tensor, numpy array or list of partition indices
    - A PartitionStore from a previous run
    """

    def __init__(self, initial_state: Union[Tensor, np.ndarray, list, PartitionStore]):
        """
        Args:
            initial_state: Previous labelling to start from
        """
        self.initial_state = initial_state

    def initialize(self, points: Tensor, n_clusters: int,
                   **kwargs) -> Tensor:
        """Validate and return the stored labelling.

        Args:
            points: (n, d) documents (used for validation)
            n_clusters: Expected number of partitions

        Returns:
            (n,) initial partition indices on the documents' device
        """
        state = self.initial_state
        if isinstance(state, PartitionStore):
            if state.n_clusters != n_clusters:
                raise ConfigurationError(f"PartitionStore has {state.n_clusters} clusters, "
                                         f"but n_clusters={n_clusters}")
            state = state.labels

        labels = check_labels(state, points.shape[0], n_clusters)
        return labels.to(points.device)
