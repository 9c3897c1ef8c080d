"""Per-unit memory of the most recent incoming damage."""
from __future__ import annotations


class DamageMemory:
    """Maps unit GUID -> timestamp of the last damage event.

    Entries are overwritten, never evicted; a stale entry simply falls outside
    the window at read time. The number of GUIDs is bounded by the encounter.
    """

    def __init__(self) -> None:
        self._last_damage: dict[str, float] = {}

    def record_damage(self, guid: str, timestamp: float) -> None:
        self._last_damage[guid] = timestamp

    def last_damage(self, guid: str | None) -> float | None:
        if guid is None:
            return None
        return self._last_damage.get(guid)

    def is_recently_damaged(self, guid: str | None, now: float, window: float) -> bool:
        last = self.last_damage(guid)
        if last is None:
            return False
        return (now - last) <= window

    def __len__(self) -> int:
        return len(self._last_damage)
