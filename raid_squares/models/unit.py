from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from raid_squares.models.visual import VisualDescriptor


class GroupMode(Enum):
    SOLO = "solo"
    PARTY = "party"
    RAID = "raid"


class UnitRefKind(Enum):
    PLAYER = "player"
    PARTY = "party"
    RAID = "raid"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class UnitRef:
    """Role reference for a slot ("player", "party2", "raid17")."""
    kind: UnitRefKind
    index: int = 0

    @classmethod
    def player(cls) -> UnitRef:
        return cls(UnitRefKind.PLAYER)

    @classmethod
    def party(cls, index: int) -> UnitRef:
        return cls(UnitRefKind.PARTY, index)

    @classmethod
    def raid(cls, index: int) -> UnitRef:
        return cls(UnitRefKind.RAID, index)

    @classmethod
    def from_token(cls, token: str) -> UnitRef:
        """Parse a role token; anything unrecognized becomes UNRESOLVED."""
        t = str(token or "").strip().lower()
        if t == "player":
            return cls.player()
        for kind in (UnitRefKind.PARTY, UnitRefKind.RAID):
            prefix = kind.value
            if t.startswith(prefix) and t[len(prefix):].isdigit():
                return cls(kind, int(t[len(prefix):]))
        return cls(UnitRefKind.UNRESOLVED)

    @property
    def token(self) -> str:
        if self.kind == UnitRefKind.PLAYER:
            return "player"
        if self.kind in (UnitRefKind.PARTY, UnitRefKind.RAID):
            return f"{self.kind.value}{self.index}"
        return ""

    def __str__(self) -> str:
        return self.token or "<unresolved>"


@dataclass(frozen=True)
class UnitSnapshot:
    """Facts about one unit for one refresh. Produced by the game-state provider."""
    guid: str | None
    name: str | None
    health: float = 0.0
    health_max: float = 0.0
    is_dead_or_ghost: bool = False
    is_player: bool = False
    class_token: str | None = None
    in_range: bool = True
    is_target: bool = False
    # True for the local player's own unit, whichever role token points at it
    is_self: bool = False


@dataclass(frozen=True)
class SlotAssignment:
    """One row of an assignment table: slot index (0-based) -> role or empty."""
    index: int
    unit: UnitRef | None = None

    @property
    def is_empty(self) -> bool:
        return self.unit is None


@dataclass
class Slot:
    """A fixed grid position owned by the refresh pipeline."""
    index: int
    unit: UnitRef | None = None
    active: bool = False
    descriptor: VisualDescriptor | None = None
