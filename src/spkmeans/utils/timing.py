"""
Per-phase timing statistics for the refinement loop.

A PhaseTimer is handed to the loop by the caller (or created per fit) and
accumulates wall-clock time for each named phase across iterations.
"""

import time
from contextlib import contextmanager
from typing import Dict, Iterator, Optional


class PhaseTimer:
    """Accumulates elapsed milliseconds per phase."""

    PHASES = ('partition', 'concepts', 'quality')

    def __init__(self):
        self.totals_ms: Dict[str, float] = {phase: 0.0 for phase in self.PHASES}
        self.total_ms = 0.0
        self._start: Optional[float] = None

    def start(self) -> None:
        """Start the overall run clock."""
        self._start = time.perf_counter()

    def stop(self) -> float:
        """Stop the overall run clock and return total elapsed ms."""
        if self._start is None:
            raise RuntimeError("PhaseTimer.stop() called before start()")
        self.total_ms = (time.perf_counter() - self._start) * 1000.0
        self._start = None
        return self.total_ms

    @contextmanager
    def phase(self, name: str) -> Iterator[None]:
        """Time a block and add it to the named phase."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            elapsed = (time.perf_counter() - t0) * 1000.0
            self.totals_ms[name] = self.totals_ms.get(name, 0.0) + elapsed

    def reset(self) -> None:
        self.totals_ms = {phase: 0.0 for phase in self.PHASES}
        self.total_ms = 0.0
        self._start = None

    def summary(self) -> Dict[str, Dict[str, float]]:
        """Per-phase milliseconds and percentage of the summed phase time.

        Percentages are 0 when no phase time was recorded.
        """
        phase_total = sum(self.totals_ms.values())
        report = {}
        for name, ms in self.totals_ms.items():
            share = (ms / phase_total) * 100.0 if phase_total > 0 else 0.0
            report[name] = {'ms': ms, 'percent': share}
        return report

    def __repr__(self) -> str:
        phases = ', '.join(f"{k}={v:.3f}ms" for k, v in self.totals_ms.items())
        return f"PhaseTimer(total={self.total_ms:.3f}ms, {phases})"
