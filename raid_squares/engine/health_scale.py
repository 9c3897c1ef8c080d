"""Health fraction -> square scale.

Concave curve: squares shrink quickly when health first drops and flatten
out near zero, so small hits on a full-health unit are already visible.
"""
from __future__ import annotations

from raid_squares.models.config import (
    DEFAULT_MAX_SCALE,
    DEFAULT_MIN_SCALE,
    DEFAULT_SCALE_EXPONENT,
)


def health_fraction(health: float, health_max: float) -> float:
    """current / max clamped to [0, 1]; a non-positive max counts as 0."""
    if health_max <= 0:
        return 0.0
    return min(1.0, max(0.0, health / health_max))


class HealthScaler:
    def __init__(
        self,
        min_scale: float = DEFAULT_MIN_SCALE,
        max_scale: float = DEFAULT_MAX_SCALE,
        exponent: float = DEFAULT_SCALE_EXPONENT,
    ):
        if not 0 < exponent < 1:
            raise ValueError(f"exponent must be in (0, 1), got {exponent}")
        if not min_scale < max_scale:
            raise ValueError(f"min_scale {min_scale} must be below max_scale {max_scale}")
        self.min_scale = min_scale
        self.max_scale = max_scale
        self.exponent = exponent

    def scale(self, fraction: float) -> float:
        f = min(1.0, max(0.0, fraction))
        value = self.min_scale + (self.max_scale - self.min_scale) * (
            1 - (1 - f) ** self.exponent
        )
        # Guard float drift at the endpoints
        return min(self.max_scale, max(self.min_scale, value))

    def scale_for_health(self, health: float, health_max: float) -> float:
        return self.scale(health_fraction(health, health_max))
