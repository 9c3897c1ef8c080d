from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# RGB components in [0, 1]
Color = tuple[float, float, float]

DEAD_COLOR: Color = (0.0, 0.0, 0.0)
OUT_OF_RANGE_COLOR: Color = (0.5, 0.5, 0.5)
DEFAULT_UNIT_COLOR: Color = (1.0, 1.0, 1.0)

LABEL_PLACEHOLDER = "???"
LABEL_LENGTH = 3

IN_RANGE_ALPHA = 1.0
OUT_OF_RANGE_ALPHA = 0.5

# Class token -> fill color, as reported by the game client's class color table.
CLASS_COLORS: dict[str, Color] = {
    "DEATHKNIGHT": (0.77, 0.12, 0.23),
    "DEMONHUNTER": (0.64, 0.19, 0.79),
    "DRUID": (1.0, 0.49, 0.04),
    "EVOKER": (0.20, 0.58, 0.50),
    "HUNTER": (0.67, 0.83, 0.45),
    "MAGE": (0.25, 0.78, 0.92),
    "MONK": (0.0, 1.0, 0.60),
    "PALADIN": (0.96, 0.55, 0.73),
    "PRIEST": (1.0, 1.0, 1.0),
    "ROGUE": (1.0, 0.96, 0.41),
    "SHAMAN": (0.0, 0.44, 0.87),
    "WARLOCK": (0.53, 0.53, 0.93),
    "WARRIOR": (0.78, 0.61, 0.43),
}


class BorderStyle(Enum):
    NONE = "none"
    THIN = "thin"
    DAMAGED = "damaged"
    TARGETED = "targeted"


@dataclass(frozen=True)
class VisualDescriptor:
    """Everything the renderer needs to draw one slot."""
    visible: bool
    scale: float = 0.0
    fill_color: Color = DEFAULT_UNIT_COLOR
    border: BorderStyle = BorderStyle.NONE
    alpha: float = IN_RANGE_ALPHA
    label: str = ""

    @classmethod
    def hidden(cls) -> VisualDescriptor:
        return cls(visible=False)


HIDDEN = VisualDescriptor.hidden()
