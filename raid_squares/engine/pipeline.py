"""Refresh pipeline — decides when slots are reassigned and recomputed.

Event handling:
- roster changed / entered world: reassign slots, then recompute every slot
- target changed: recompute every slot
- combat-log damage: remember the hit only; the next tick shows the border
- tick (throttled frame deltas): recompute every slot
- modifier state changed: forward to the drag hook

A click on a square (target_slot) targets its unit through the provider and
then posts a target-changed event.

Events are queued and drained in arrival order. A post made while a drain is
running (e.g. from a renderer callback) is appended, never run nested.
"""
from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Protocol

from raid_squares.engine.damage_memory import DamageMemory
from raid_squares.engine.health_scale import HealthScaler
from raid_squares.engine.slot_assigner import SlotAssigner
from raid_squares.engine.tick import TickThrottle
from raid_squares.engine.visual_state import VisualStateComputer
from raid_squares.models import (
    HIDDEN,
    AppConfig,
    EventKind,
    GameEvent,
    Slot,
    SlotAssignment,
    VisualDescriptor,
)
from raid_squares.provider.game_state import GameStateProvider

logger = logging.getLogger(__name__)


class SlotRenderer(Protocol):
    def apply(self, index: int, descriptor: VisualDescriptor) -> None: ...

    def set_drag_enabled(self, enabled: bool) -> None: ...


class RefreshPipeline:
    """Owns the slot table and DamageMemory; the only writer of either."""

    def __init__(
        self,
        config: AppConfig,
        provider: GameStateProvider,
        renderer: SlotRenderer,
        memory: DamageMemory | None = None,
        on_notice: Callable[[str], None] | None = None,
    ):
        self._config = config
        self._provider = provider
        self._renderer = renderer
        self.memory = memory if memory is not None else DamageMemory()
        self._assigner = SlotAssigner(provider.in_combat_lockdown, on_notice)
        self._computer = VisualStateComputer(
            HealthScaler(config.min_scale, config.max_scale, config.scale_exponent)
        )
        self._throttle = TickThrottle(config.tick_interval_sec)
        self.slots: list[Slot] = [Slot(i) for i in range(config.slot_count)]
        self._queue: deque[GameEvent] = deque()
        self._draining = False
        self.drag_enabled = False
        # Hook for modifier-state changes; replace to customize drag behaviour.
        self.on_modifier_changed: Callable[[bool], None] = self._default_modifier_hook

    @property
    def assigner(self) -> SlotAssigner:
        return self._assigner

    def start(self) -> None:
        """Initial pass: assign and draw, drag handle off."""
        self.on_modifier_changed(False)
        self.post(GameEvent.entered_world())

    # --- queue ---

    def post(self, event: GameEvent) -> None:
        self._queue.append(event)
        if self._draining:
            return
        self._draining = True
        try:
            while self._queue:
                self._dispatch(self._queue.popleft())
        finally:
            self._draining = False

    def advance(self, elapsed: float) -> bool:
        """Feed one frame delta; posts a tick when the throttle fires."""
        if self._throttle.advance(elapsed):
            self.post(GameEvent.tick())
            return True
        return False

    def _dispatch(self, event: GameEvent) -> None:
        kind = event.kind
        if kind in (EventKind.ROSTER_CHANGED, EventKind.ENTERED_WORLD):
            self.reassign()
            self.refresh_all()
        elif kind == EventKind.TARGET_CHANGED:
            self.refresh_all()
        elif kind == EventKind.COMBAT_LOG:
            self._handle_combat_log(event)
        elif kind == EventKind.TICK:
            logger.debug("Tick")
            self.refresh_all()
        elif kind == EventKind.MODIFIER_STATE_CHANGED:
            self.on_modifier_changed(event.modifier_down)

    def _handle_combat_log(self, event: GameEvent) -> None:
        # No recompute here: heavy combat-log traffic would otherwise redraw per hit.
        if not event.is_damage:
            logger.debug("Ignoring combat-log sub-event %s", event.sub_event)
            return
        if not event.dest_guid:
            return
        self.memory.record_damage(event.dest_guid, self._provider.now())

    def _default_modifier_hook(self, down: bool) -> None:
        self.drag_enabled = bool(down)
        self._renderer.set_drag_enabled(self.drag_enabled)

    # --- work ---

    def reassign(self) -> tuple[SlotAssignment, ...]:
        table = self._assigner.assign(
            self._provider.group_mode(),
            len(self.slots),
            self._provider.group_size(),
        )
        for assignment in table:
            slot = self.slots[assignment.index]
            slot.unit = assignment.unit
            slot.active = slot.unit is not None and self._provider.unit_exists(slot.unit)
        return table

    def target_slot(self, index: int) -> bool:
        """Target the unit shown in slot `index` (a click on its square)."""
        if not 0 <= index < len(self.slots):
            return False
        unit = self.slots[index].unit
        if unit is None or not self._provider.unit_exists(unit):
            logger.debug("Click on empty slot %d ignored", index)
            return False
        if not self._provider.target_unit(unit):
            return False
        self.post(GameEvent.target_changed())
        return True

    def compute_slot(self, slot: Slot) -> VisualDescriptor:
        snapshot = self._provider.snapshot(slot.unit)
        if snapshot is None:
            return HIDDEN
        damaged = self.memory.is_recently_damaged(
            snapshot.guid, self._provider.now(), self._config.damage_window_sec
        )
        return self._computer.compute(snapshot, damaged, snapshot.is_target, snapshot.in_range)

    def refresh_all(self) -> None:
        for slot in self.slots:
            descriptor = self.compute_slot(slot)
            slot.active = descriptor.visible
            if descriptor == slot.descriptor:
                continue
            slot.descriptor = descriptor
            self._renderer.apply(slot.index, descriptor)
