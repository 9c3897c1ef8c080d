from raid_squares.models.config import AppConfig
from raid_squares.models.events import DAMAGE_SUB_EVENTS, EventKind, GameEvent
from raid_squares.models.unit import (
    GroupMode,
    Slot,
    SlotAssignment,
    UnitRef,
    UnitRefKind,
    UnitSnapshot,
)
from raid_squares.models.visual import (
    CLASS_COLORS,
    DEAD_COLOR,
    DEFAULT_UNIT_COLOR,
    HIDDEN,
    OUT_OF_RANGE_COLOR,
    BorderStyle,
    Color,
    VisualDescriptor,
)

__all__ = [
    "AppConfig",
    "BorderStyle",
    "CLASS_COLORS",
    "Color",
    "DAMAGE_SUB_EVENTS",
    "DEAD_COLOR",
    "DEFAULT_UNIT_COLOR",
    "EventKind",
    "GameEvent",
    "GroupMode",
    "HIDDEN",
    "OUT_OF_RANGE_COLOR",
    "Slot",
    "SlotAssignment",
    "UnitRef",
    "UnitRefKind",
    "UnitSnapshot",
    "VisualDescriptor",
]
