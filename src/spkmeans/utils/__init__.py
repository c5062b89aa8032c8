"""Utility functions for spherical k-means."""

from .vectors import (
    dot,
    norm,
    vec_sum,
    scale,
    divide_by,
    normalize,
    normalize_rows,
    cosine_similarity,
    cosine_similarity_matrix
)

from .convergence import QualityThreshold

from .metrics import (
    partition_quality,
    total_quality,
    mean_alignment,
    top_dimensions
)

from .validation import (
    ConfigurationError,
    DegenerateVectorError,
    validate_data,
    check_n_clusters,
    check_word_count,
    check_labels,
    validate_params
)

from .device import (
    get_default_device,
    parse_device,
    synchronize_device
)

from .timing import PhaseTimer

__all__ = [
    # Vector primitives
    'dot',
    'norm',
    'vec_sum',
    'scale',
    'divide_by',
    'normalize',
    'normalize_rows',
    'cosine_similarity',
    'cosine_similarity_matrix',

    # Convergence criteria
    'QualityThreshold',

    # Metrics
    'partition_quality',
    'total_quality',
    'mean_alignment',
    'top_dimensions',

    # Validation
    'ConfigurationError',
    'DegenerateVectorError',
    'validate_data',
    'check_n_clusters',
    'check_word_count',
    'check_labels',
    'validate_params',

    # Device management
    'get_default_device',
    'parse_device',
    'synchronize_device',

    # Timing
    'PhaseTimer'
]
