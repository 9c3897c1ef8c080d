from raid_squares.input.keys import (
    MODIFIER_NAMES,
    format_modifier_for_display,
    is_modifier_token,
    normalize_key_token,
)

__all__ = [
    "MODIFIER_NAMES",
    "format_modifier_for_display",
    "is_modifier_token",
    "normalize_key_token",
]
