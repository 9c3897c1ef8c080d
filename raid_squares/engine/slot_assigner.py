"""Slot assigner — maps group members onto the fixed slot grid.

Rules, in order:
1. Combat lockdown: keep the previous table and log a notice.
2. Raid: slot i -> raid member i.
3. Party: slot 1 -> player, slots 2..5 -> party1..party4, rest empty.
4. Solo: slot 1 -> player, rest empty.

Whether a mapped role currently resolves to a unit is decided later, at
refresh time; the table only says which role each slot points at.
"""
from __future__ import annotations

import logging
from typing import Callable

from raid_squares.models import GroupMode, SlotAssignment, UnitRef

logger = logging.getLogger(__name__)

MAX_PARTY_SIZE = 5
MAX_RAID_SIZE = 40

LOCKDOWN_NOTICE = "[RaidSquares] Skipping unit updates due to combat lockdown."


def empty_assignment(slot_count: int) -> tuple[SlotAssignment, ...]:
    return tuple(SlotAssignment(i) for i in range(slot_count))


class SlotAssigner:
    """Builds the slot -> role table. No-op while the lock callback reports True."""

    def __init__(
        self,
        is_locked: Callable[[], bool],
        on_notice: Callable[[str], None] | None = None,
    ):
        self._is_locked = is_locked
        self._on_notice = on_notice
        self._current: tuple[SlotAssignment, ...] | None = None
        self.skipped_count = 0

    @property
    def current(self) -> tuple[SlotAssignment, ...] | None:
        return self._current

    def assign(
        self,
        group_mode: GroupMode,
        slot_count: int,
        member_count: int | None = None,
    ) -> tuple[SlotAssignment, ...]:
        """Return the assignment table for `slot_count` slots.

        `member_count` is the reported group size (player included); when given,
        slots past the roster are left empty instead of pointing at absent members.
        """
        if self._is_locked():
            self.skipped_count += 1
            logger.warning(LOCKDOWN_NOTICE)
            if self._on_notice is not None:
                self._on_notice(LOCKDOWN_NOTICE)
            if self._current is None:
                return empty_assignment(slot_count)
            return self._current

        table = tuple(
            SlotAssignment(i, self._unit_for_slot(i + 1, group_mode, member_count))
            for i in range(slot_count)
        )
        self._current = table
        filled = sum(1 for a in table if not a.is_empty)
        logger.info("Assigned %d of %d slots (%s)", filled, slot_count, group_mode.value)
        return table

    @staticmethod
    def _unit_for_slot(
        position: int, group_mode: GroupMode, member_count: int | None
    ) -> UnitRef | None:
        """`position` is 1-based, matching the game's role numbering."""
        if member_count is not None and position > member_count and position > 1:
            return None
        if group_mode == GroupMode.RAID:
            if position > MAX_RAID_SIZE:
                return None
            return UnitRef.raid(position)
        if group_mode == GroupMode.PARTY:
            if position == 1:
                return UnitRef.player()
            if position <= MAX_PARTY_SIZE:
                return UnitRef.party(position - 1)
            return None
        if position == 1:
            return UnitRef.player()
        return None
