"""Visual state computer — one unit snapshot in, one VisualDescriptor out.

Order of rules:
- label: first three characters of the name ("???" if unknown)
- dead or ghost: black, minimum scale; otherwise class color and health scale
- out of range (never the local player): grey fill, half alpha
- border: recent damage while in range > current target > plain thin border

Damage outranks targeting so a hit on the current target still shows red.
"""
from __future__ import annotations

from typing import Mapping

from raid_squares.engine.health_scale import HealthScaler
from raid_squares.models import (
    CLASS_COLORS,
    DEAD_COLOR,
    DEFAULT_UNIT_COLOR,
    HIDDEN,
    OUT_OF_RANGE_COLOR,
    BorderStyle,
    Color,
    UnitSnapshot,
    VisualDescriptor,
)
from raid_squares.models.visual import (
    IN_RANGE_ALPHA,
    LABEL_LENGTH,
    LABEL_PLACEHOLDER,
    OUT_OF_RANGE_ALPHA,
)


def label_for(name: str | None) -> str:
    text = (name or "").strip()
    if not text:
        return LABEL_PLACEHOLDER
    return text[:LABEL_LENGTH]


class VisualStateComputer:
    def __init__(
        self,
        scaler: HealthScaler,
        class_colors: Mapping[str, Color] | None = None,
    ):
        self._scaler = scaler
        self._class_colors = dict(CLASS_COLORS if class_colors is None else class_colors)

    def class_color(self, snapshot: UnitSnapshot) -> Color:
        if snapshot.is_player and snapshot.class_token:
            return self._class_colors.get(snapshot.class_token.upper(), DEFAULT_UNIT_COLOR)
        return DEFAULT_UNIT_COLOR

    def compute(
        self,
        snapshot: UnitSnapshot | None,
        is_damaged_recently: bool,
        is_targeted: bool,
        range_ok: bool,
    ) -> VisualDescriptor:
        if snapshot is None:
            return HIDDEN

        if snapshot.is_dead_or_ghost:
            fill = DEAD_COLOR
            scale = self._scaler.min_scale
        else:
            fill = self.class_color(snapshot)
            scale = self._scaler.scale_for_health(snapshot.health, snapshot.health_max)

        in_range = snapshot.is_self or range_ok
        if not in_range:
            fill = OUT_OF_RANGE_COLOR

        if is_damaged_recently and in_range:
            border = BorderStyle.DAMAGED
        elif is_targeted:
            border = BorderStyle.TARGETED
        else:
            border = BorderStyle.THIN

        return VisualDescriptor(
            visible=True,
            scale=scale,
            fill_color=fill,
            border=border,
            alpha=IN_RANGE_ALPHA if in_range else OUT_OF_RANGE_ALPHA,
            label=label_for(snapshot.name),
        )
