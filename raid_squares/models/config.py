from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from raid_squares.input.keys import MODIFIER_NAMES, normalize_key_token

logger = logging.getLogger(__name__)

DEFAULT_SLOT_COUNT = 40
DEFAULT_COLUMNS = 8
DEFAULT_SPACING = 2
DEFAULT_BASE_TEXTURE_SIZE = 20
DEFAULT_MIN_SCALE = 0.3
DEFAULT_MAX_SCALE = 1.5
DEFAULT_SCALE_EXPONENT = 0.3
DEFAULT_DAMAGE_WINDOW_SEC = 3.0
DEFAULT_TICK_INTERVAL_SEC = 0.25
DEFAULT_FRAME_INTERVAL_MS = 16
DEFAULT_DRAG_MODIFIER = "ctrl"
DEFAULT_LABEL_ALPHA = 0.3
DEFAULT_GROUP_MODE = "raid"
DEFAULT_DEMO_MEMBER_COUNT = 25

_GROUP_MODES = ("solo", "party", "raid")


def _int_at_least(value: object, default: int, name: str, minimum: int) -> int:
    if isinstance(value, bool):
        logger.warning("Config %s=%r is not an integer; using %s", name, value, default)
        return default
    try:
        result = int(value)
    except (TypeError, ValueError):
        logger.warning("Config %s=%r is not an integer; using %s", name, value, default)
        return default
    if result < minimum:
        logger.warning("Config %s=%r must be >= %s; using %s", name, value, minimum, default)
        return default
    return result


def _positive_int(value: object, default: int, name: str) -> int:
    return _int_at_least(value, default, name, 1)


def _non_negative_int(value: object, default: int, name: str) -> int:
    return _int_at_least(value, default, name, 0)


def _number(value: object, default: float, name: str) -> float | None:
    """float(value), or None (after a warning) when it is not a finite number."""
    if isinstance(value, bool):
        logger.warning("Config %s=%r is not a number; using %s", name, value, default)
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        logger.warning("Config %s=%r is not a number; using %s", name, value, default)
        return None
    if not math.isfinite(result):
        logger.warning("Config %s=%r is not finite; using %s", name, value, default)
        return None
    return result


def _positive_float(value: object, default: float, name: str) -> float:
    result = _number(value, default, name)
    if result is None:
        return default
    if not result > 0:
        logger.warning("Config %s=%r must be > 0; using %s", name, value, default)
        return default
    return result


def _float_in_range(
    value: object, default: float, name: str, low: float, high: float | None = None
) -> float:
    """Number within [low, high] (high=None means unbounded), else the default."""
    result = _number(value, default, name)
    if result is None:
        return default
    if result < low or (high is not None and result > high):
        bounds = f"[{low}, {high}]" if high is not None else f">= {low}"
        logger.warning("Config %s=%r must be %s; using %s", name, value, bounds, default)
        return default
    return result


def _optional_int(value: object, name: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        logger.warning("Config %s=%r is not an integer; ignoring it", name, value)
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Config %s=%r is not an integer; ignoring it", name, value)
        return None


def _section(data: dict, key: str) -> dict:
    section = data.get(key, {})
    if section is None:
        return {}
    if not isinstance(section, dict):
        logger.warning("Config section %r is not an object; using defaults", key)
        return {}
    return section


@dataclass
class AppConfig:
    """Startup configuration. Loaded once, never written back."""
    slot_count: int = DEFAULT_SLOT_COUNT
    columns: int = DEFAULT_COLUMNS
    spacing: int = DEFAULT_SPACING
    base_texture_size: int = DEFAULT_BASE_TEXTURE_SIZE
    min_scale: float = DEFAULT_MIN_SCALE
    max_scale: float = DEFAULT_MAX_SCALE
    scale_exponent: float = DEFAULT_SCALE_EXPONENT
    damage_window_sec: float = DEFAULT_DAMAGE_WINDOW_SEC
    tick_interval_sec: float = DEFAULT_TICK_INTERVAL_SEC
    # Host refresh period; its variable deltas feed the tick accumulator
    frame_interval_ms: int = DEFAULT_FRAME_INTERVAL_MS
    drag_modifier: str = DEFAULT_DRAG_MODIFIER
    label_alpha: float = DEFAULT_LABEL_ALPHA
    demo_enabled: bool = True
    demo_group_mode: str = DEFAULT_GROUP_MODE
    demo_member_count: int = DEFAULT_DEMO_MEMBER_COUNT
    demo_seed: int | None = None

    @property
    def rows(self) -> int:
        return math.ceil(self.slot_count / self.columns)

    @property
    def cell_size(self) -> int:
        """Cell edge in pixels; large enough for a square at max_scale."""
        return int(round(self.base_texture_size * self.max_scale))

    def cell_origin(self, index: int) -> tuple[int, int]:
        """Top-left offset of slot `index` (0-based) inside the frame."""
        col = index % self.columns
        row = index // self.columns
        step = self.cell_size + self.spacing
        return col * step, row * step

    def slot_at(self, x: float, y: float) -> int | None:
        """Slot index under frame-local point (x, y); None over spacing or outside the grid."""
        if x < 0 or y < 0:
            return None
        step = self.cell_size + self.spacing
        col = int(x // step)
        row = int(y // step)
        if col >= self.columns:
            return None
        index = row * self.columns + col
        if index >= self.slot_count:
            return None
        origin_x, origin_y = self.cell_origin(index)
        if x >= origin_x + self.cell_size or y >= origin_y + self.cell_size:
            return None
        return index

    def frame_size(self) -> tuple[int, int]:
        width = self.columns * self.cell_size + (self.columns - 1) * self.spacing
        height = self.rows * self.cell_size + (self.rows - 1) * self.spacing
        return width, height

    @classmethod
    def from_dict(cls, data: dict) -> AppConfig:
        if not isinstance(data, dict):
            logger.warning("Config root is not an object; using defaults")
            data = {}
        slots = _section(data, "slots")
        layout = _section(data, "layout")
        scaling = _section(data, "scaling")
        timing = _section(data, "timing")
        overlay = _section(data, "overlay")
        demo = _section(data, "demo")

        min_scale = _float_in_range(
            scaling.get("min_scale", DEFAULT_MIN_SCALE), DEFAULT_MIN_SCALE, "scaling.min_scale", 0.0
        )
        max_scale = _float_in_range(
            scaling.get("max_scale", DEFAULT_MAX_SCALE), DEFAULT_MAX_SCALE, "scaling.max_scale", 0.0
        )
        if not min_scale < max_scale:
            logger.warning(
                "Config scale bounds %s..%s invalid; using %s..%s",
                min_scale,
                max_scale,
                DEFAULT_MIN_SCALE,
                DEFAULT_MAX_SCALE,
            )
            min_scale, max_scale = DEFAULT_MIN_SCALE, DEFAULT_MAX_SCALE

        exponent = _float_in_range(
            scaling.get("exponent", DEFAULT_SCALE_EXPONENT),
            DEFAULT_SCALE_EXPONENT,
            "scaling.exponent",
            0.0,
            1.0,
        )
        if not 0 < exponent < 1:
            logger.warning(
                "Config scaling exponent %s must be in (0, 1); using %s",
                exponent,
                DEFAULT_SCALE_EXPONENT,
            )
            exponent = DEFAULT_SCALE_EXPONENT

        modifier = normalize_key_token(overlay.get("drag_modifier", DEFAULT_DRAG_MODIFIER))
        if modifier not in MODIFIER_NAMES:
            logger.warning(
                "Config drag_modifier %r is not a modifier key; using %s",
                overlay.get("drag_modifier"),
                DEFAULT_DRAG_MODIFIER,
            )
            modifier = DEFAULT_DRAG_MODIFIER

        raw_mode = demo.get("group_mode", DEFAULT_GROUP_MODE)
        group_mode = str(raw_mode or DEFAULT_GROUP_MODE).strip().lower()
        if group_mode not in _GROUP_MODES:
            logger.warning(
                "Config demo.group_mode %r is not one of %s; using %s",
                raw_mode,
                ", ".join(_GROUP_MODES),
                DEFAULT_GROUP_MODE,
            )
            group_mode = DEFAULT_GROUP_MODE

        return cls(
            slot_count=_positive_int(slots.get("count", DEFAULT_SLOT_COUNT), DEFAULT_SLOT_COUNT, "slots.count"),
            columns=_positive_int(layout.get("columns", DEFAULT_COLUMNS), DEFAULT_COLUMNS, "layout.columns"),
            spacing=_non_negative_int(layout.get("spacing", DEFAULT_SPACING), DEFAULT_SPACING, "layout.spacing"),
            base_texture_size=_positive_int(
                layout.get("base_texture_size", DEFAULT_BASE_TEXTURE_SIZE),
                DEFAULT_BASE_TEXTURE_SIZE,
                "layout.base_texture_size",
            ),
            min_scale=min_scale,
            max_scale=max_scale,
            scale_exponent=exponent,
            damage_window_sec=_positive_float(
                timing.get("damage_window_sec", DEFAULT_DAMAGE_WINDOW_SEC),
                DEFAULT_DAMAGE_WINDOW_SEC,
                "timing.damage_window_sec",
            ),
            tick_interval_sec=_positive_float(
                timing.get("tick_interval_sec", DEFAULT_TICK_INTERVAL_SEC),
                DEFAULT_TICK_INTERVAL_SEC,
                "timing.tick_interval_sec",
            ),
            frame_interval_ms=_positive_int(
                timing.get("frame_interval_ms", DEFAULT_FRAME_INTERVAL_MS),
                DEFAULT_FRAME_INTERVAL_MS,
                "timing.frame_interval_ms",
            ),
            drag_modifier=modifier,
            label_alpha=_float_in_range(
                overlay.get("label_alpha", DEFAULT_LABEL_ALPHA),
                DEFAULT_LABEL_ALPHA,
                "overlay.label_alpha",
                0.0,
                1.0,
            ),
            demo_enabled=bool(demo.get("enabled", True)),
            demo_group_mode=group_mode,
            demo_member_count=_positive_int(
                demo.get("member_count", DEFAULT_DEMO_MEMBER_COUNT),
                DEFAULT_DEMO_MEMBER_COUNT,
                "demo.member_count",
            ),
            demo_seed=_optional_int(demo.get("seed"), "demo.seed"),
        )

    def to_dict(self) -> dict:
        """Serialize to the same shape from_dict reads."""
        return {
            "slots": {"count": self.slot_count},
            "layout": {
                "columns": self.columns,
                "spacing": self.spacing,
                "base_texture_size": self.base_texture_size,
            },
            "scaling": {
                "min_scale": self.min_scale,
                "max_scale": self.max_scale,
                "exponent": self.scale_exponent,
            },
            "timing": {
                "damage_window_sec": self.damage_window_sec,
                "tick_interval_sec": self.tick_interval_sec,
                "frame_interval_ms": self.frame_interval_ms,
            },
            "overlay": {
                "drag_modifier": self.drag_modifier,
                "label_alpha": self.label_alpha,
            },
            "demo": {
                "enabled": self.demo_enabled,
                "group_mode": self.demo_group_mode,
                "member_count": self.demo_member_count,
                "seed": self.demo_seed,
            },
        }
