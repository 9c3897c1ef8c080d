"""Game-state provider seam.

GameStateProvider lists every unit fact the refresh pipeline reads. A client
integration implements it against the live game; InMemoryGameState is a
self-contained implementation backed by plain records, used by the demo
simulator and the tests.
"""
from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Iterable

from raid_squares.models import GroupMode, UnitRef, UnitRefKind, UnitSnapshot

logger = logging.getLogger(__name__)


class GameStateProvider(ABC):
    """Read-only view of the game. Role references are resolved on every call."""

    @abstractmethod
    def now(self) -> float:
        """Monotonic clock in seconds."""

    @abstractmethod
    def group_mode(self) -> GroupMode: ...

    @abstractmethod
    def group_size(self) -> int:
        """Number of group members including the local player (1 when solo)."""

    @abstractmethod
    def in_combat_lockdown(self) -> bool: ...

    @abstractmethod
    def unit_exists(self, ref: UnitRef) -> bool: ...

    @abstractmethod
    def unit_guid(self, ref: UnitRef) -> str | None: ...

    @abstractmethod
    def unit_name(self, ref: UnitRef) -> str | None: ...

    @abstractmethod
    def unit_health(self, ref: UnitRef) -> tuple[float, float]:
        """(current, max) health."""

    @abstractmethod
    def unit_is_dead_or_ghost(self, ref: UnitRef) -> bool: ...

    @abstractmethod
    def unit_class(self, ref: UnitRef) -> tuple[bool, str | None]:
        """(is a player, class token or None)."""

    @abstractmethod
    def unit_in_range(self, ref: UnitRef) -> bool: ...

    @abstractmethod
    def unit_is_target(self, ref: UnitRef) -> bool: ...

    @abstractmethod
    def unit_is_self(self, ref: UnitRef) -> bool: ...

    @abstractmethod
    def target_unit(self, ref: UnitRef) -> bool:
        """Make `ref` the current target; False when it does not resolve."""

    def snapshot(self, ref: UnitRef | None) -> UnitSnapshot | None:
        """Bundle the facts for `ref`, or None when it does not resolve to a unit."""
        if ref is None or ref.kind == UnitRefKind.UNRESOLVED:
            return None
        if not self.unit_exists(ref):
            return None
        health, health_max = self.unit_health(ref)
        is_player, class_token = self.unit_class(ref)
        return UnitSnapshot(
            guid=self.unit_guid(ref),
            name=self.unit_name(ref),
            health=health,
            health_max=health_max,
            is_dead_or_ghost=self.unit_is_dead_or_ghost(ref),
            is_player=is_player,
            class_token=class_token,
            in_range=self.unit_in_range(ref),
            is_target=self.unit_is_target(ref),
            is_self=self.unit_is_self(ref),
        )


@dataclass
class UnitRecord:
    """Mutable unit state held by InMemoryGameState."""
    guid: str
    name: str | None
    health: float
    health_max: float
    class_token: str | None = None
    is_player: bool = True
    is_dead: bool = False
    in_range: bool = True


class InMemoryGameState(GameStateProvider):
    """Provider backed by UnitRecords; roster order decides role numbering."""

    def __init__(self, clock: Callable[[], float] | None = None):
        self._clock = clock or time.monotonic
        self._mode = GroupMode.SOLO
        self._player: UnitRecord | None = None
        # Other members in reported order (party) or the full raid roster (raid)
        self._members: list[UnitRecord] = []
        self._target_guid: str | None = None
        self._lockdown = False

    # --- mutation (game side) ---

    def set_player(self, record: UnitRecord) -> None:
        self._player = record

    def set_group(self, mode: GroupMode, members: Iterable[UnitRecord] = ()) -> None:
        """Set roster. For RAID, `members` is the full raid including the player."""
        self._mode = mode
        self._members = list(members) if mode != GroupMode.SOLO else []
        logger.debug("Group set to %s with %d members", mode.value, len(self._members))

    def set_target(self, guid: str | None) -> None:
        self._target_guid = guid

    def set_lockdown(self, locked: bool) -> None:
        self._lockdown = bool(locked)

    def records(self) -> list[UnitRecord]:
        result = list(self._members)
        if self._player is not None and self._player not in result:
            result.insert(0, self._player)
        return result

    # --- GameStateProvider ---

    def now(self) -> float:
        return self._clock()

    def group_mode(self) -> GroupMode:
        return self._mode

    def group_size(self) -> int:
        if self._mode == GroupMode.RAID:
            return len(self._members)
        if self._mode == GroupMode.PARTY:
            return len(self._members) + 1
        return 1

    def in_combat_lockdown(self) -> bool:
        return self._lockdown

    def _resolve(self, ref: UnitRef) -> UnitRecord | None:
        if ref.kind == UnitRefKind.PLAYER:
            return self._player
        if ref.kind == UnitRefKind.PARTY and self._mode == GroupMode.PARTY:
            if 1 <= ref.index <= len(self._members):
                return self._members[ref.index - 1]
        if ref.kind == UnitRefKind.RAID and self._mode == GroupMode.RAID:
            if 1 <= ref.index <= len(self._members):
                return self._members[ref.index - 1]
        return None

    def unit_exists(self, ref: UnitRef) -> bool:
        return self._resolve(ref) is not None

    def unit_guid(self, ref: UnitRef) -> str | None:
        rec = self._resolve(ref)
        return rec.guid if rec else None

    def unit_name(self, ref: UnitRef) -> str | None:
        rec = self._resolve(ref)
        return rec.name if rec else None

    def unit_health(self, ref: UnitRef) -> tuple[float, float]:
        rec = self._resolve(ref)
        if rec is None:
            return 0.0, 0.0
        return rec.health, rec.health_max

    def unit_is_dead_or_ghost(self, ref: UnitRef) -> bool:
        rec = self._resolve(ref)
        return bool(rec and rec.is_dead)

    def unit_class(self, ref: UnitRef) -> tuple[bool, str | None]:
        rec = self._resolve(ref)
        if rec is None:
            return False, None
        return rec.is_player, rec.class_token

    def unit_in_range(self, ref: UnitRef) -> bool:
        rec = self._resolve(ref)
        return bool(rec and rec.in_range)

    def unit_is_target(self, ref: UnitRef) -> bool:
        rec = self._resolve(ref)
        return rec is not None and self._target_guid is not None and rec.guid == self._target_guid

    def unit_is_self(self, ref: UnitRef) -> bool:
        rec = self._resolve(ref)
        return rec is not None and self._player is not None and rec.guid == self._player.guid

    def target_unit(self, ref: UnitRef) -> bool:
        rec = self._resolve(ref)
        if rec is None:
            return False
        self._target_guid = rec.guid
        logger.debug("Targeted %s (%s)", rec.name, rec.guid)
        return True
