"""Helpers for normalizing key names reported by the keyboard hook."""
from __future__ import annotations

MODIFIER_NAMES = ("ctrl", "shift", "alt")

_MOD_ALIASES = {
    "ctrl": "ctrl",
    "control": "ctrl",
    "left ctrl": "ctrl",
    "right ctrl": "ctrl",
    "ctrl_l": "ctrl",
    "ctrl_r": "ctrl",
    "left control": "ctrl",
    "right control": "ctrl",
    "shift": "shift",
    "left shift": "shift",
    "right shift": "shift",
    "shift_l": "shift",
    "shift_r": "shift",
    "alt": "alt",
    "left alt": "alt",
    "right alt": "alt",
    "alt_l": "alt",
    "alt_r": "alt",
    "alt gr": "alt",
    "altgr": "alt",
}


def normalize_key_token(token: object) -> str:
    """Normalize one key name to canonical lowercase; modifier variants collapse (e.g. 'Right Ctrl' -> 'ctrl')."""
    if not token:
        return ""
    raw = str(token).strip().lower()
    if raw in _MOD_ALIASES:
        return _MOD_ALIASES[raw]
    t = " ".join(raw.replace("_", " ").split())
    if not t:
        return ""
    return _MOD_ALIASES.get(t, t)


def is_modifier_token(token: object) -> bool:
    return normalize_key_token(token) in MODIFIER_NAMES


def format_modifier_for_display(modifier: str) -> str:
    normalized = normalize_key_token(modifier)
    return {"ctrl": "Ctrl", "shift": "Shift", "alt": "Alt"}.get(normalized, normalized.upper())
