from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EventKind(Enum):
    ROSTER_CHANGED = "roster_changed"
    ENTERED_WORLD = "entered_world"
    TARGET_CHANGED = "target_changed"
    COMBAT_LOG = "combat_log"
    TICK = "tick"
    MODIFIER_STATE_CHANGED = "modifier_state_changed"


# Combat-log sub-events that count as incoming damage for the border
DAMAGE_SUB_EVENTS = frozenset(
    {"SWING_DAMAGE", "RANGE_DAMAGE", "SPELL_DAMAGE", "SPELL_PERIODIC_DAMAGE"}
)


@dataclass(frozen=True)
class GameEvent:
    """A single event consumed by RefreshPipeline.dispatch."""
    kind: EventKind
    sub_event: str | None = None
    dest_guid: str | None = None
    modifier_down: bool = False

    @classmethod
    def roster_changed(cls) -> GameEvent:
        return cls(EventKind.ROSTER_CHANGED)

    @classmethod
    def entered_world(cls) -> GameEvent:
        return cls(EventKind.ENTERED_WORLD)

    @classmethod
    def target_changed(cls) -> GameEvent:
        return cls(EventKind.TARGET_CHANGED)

    @classmethod
    def combat_log(cls, sub_event: str, dest_guid: str | None) -> GameEvent:
        return cls(EventKind.COMBAT_LOG, sub_event=sub_event, dest_guid=dest_guid)

    @classmethod
    def tick(cls) -> GameEvent:
        return cls(EventKind.TICK)

    @classmethod
    def modifier_state(cls, down: bool) -> GameEvent:
        return cls(EventKind.MODIFIER_STATE_CHANGED, modifier_down=bool(down))

    @property
    def is_damage(self) -> bool:
        return self.kind == EventKind.COMBAT_LOG and self.sub_event in DAMAGE_SUB_EVENTS
