from __future__ import annotations


class TickThrottle:
    """Accumulates frame deltas and fires once the interval has elapsed.

    The accumulator resets to zero on fire, so a long frame produces one tick,
    not a burst of catch-up ticks.
    """

    def __init__(self, interval: float):
        if interval <= 0:
            raise ValueError(f"tick interval must be positive, got {interval}")
        self.interval = interval
        self._elapsed = 0.0

    @property
    def elapsed(self) -> float:
        return self._elapsed

    def advance(self, delta: float) -> bool:
        self._elapsed += max(0.0, delta)
        if self._elapsed >= self.interval:
            self._elapsed = 0.0
            return True
        return False
