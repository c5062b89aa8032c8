"""
Convergence criteria for the spherical k-means refinement loop.

The loop maximizes quality, so convergence is declared once an iteration
fails to raise quality by more than a fixed threshold.
"""

from typing import Dict, Any, Optional

from ..base.interfaces import ConvergenceCriterion


class QualityThreshold(ConvergenceCriterion):
    """Stop when the quality gain of an iteration is not above a threshold.

    The first call records the initial quality and never converges. Every
    later call computes delta = quality - previous and converges when
    delta <= threshold. Zero and negative deltas both stop the loop.
    """

    def __init__(self, threshold: float = 1e-3):
        """
        Args:
            threshold: Minimum quality gain required to keep iterating
        """
        super().__init__()
        self.threshold = threshold
        self.previous: Optional[float] = None
        self.current: Optional[float] = None
        self.delta: Optional[float] = None

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Record this iteration's quality and report convergence."""
        quality = float(current_state['objective'])

        if self.current is None:
            self.current = quality
            return False

        self.previous = self.current
        self.current = quality
        self.delta = self.current - self.previous

        converged = self.delta <= self.threshold
        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'quality': self.current,
            'delta': self.delta,
            'converged': converged
        })
        return converged

    def reset(self):
        super().reset()
        self.previous = None
        self.current = None
        self.delta = None
