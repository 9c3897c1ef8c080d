"""Demo raid simulator — drives an InMemoryGameState so the overlay can run
without a game client. Each step may damage, heal, kill, revive, retarget or
move members out of range; damage is reported back as combat-log events.
"""
from __future__ import annotations

import logging
import random

from raid_squares.models import CLASS_COLORS, GameEvent, GroupMode
from raid_squares.provider.game_state import InMemoryGameState, UnitRecord

logger = logging.getLogger(__name__)

_NAMES = (
    "Aerith", "Brakk", "Celestine", "Dorn", "Elowen", "Fenwick", "Grizzle",
    "Halvard", "Isolde", "Jorund", "Kaelith", "Lunara", "Morrick", "Nyssa",
    "Orlan", "Pyria", "Quill", "Rhogar", "Sylvar", "Thessaly", "Ulric",
    "Vesna", "Wrenna", "Xandor", "Yrsa", "Zephyr",
)

_DAMAGE_KINDS = ("SWING_DAMAGE", "RANGE_DAMAGE", "SPELL_DAMAGE", "SPELL_PERIODIC_DAMAGE")

DAMAGE_CHANCE = 0.6
HEAL_CHANCE = 0.5
REVIVE_CHANCE = 0.02
TARGET_CHANCE = 0.05
RANGE_FLIP_CHANCE = 0.03


class DemoRaidSimulator:
    def __init__(
        self,
        state: InMemoryGameState,
        group_mode: GroupMode = GroupMode.RAID,
        member_count: int = 25,
        seed: int | None = None,
    ):
        self._state = state
        self._rng = random.Random(seed)
        self._mode = group_mode
        self._member_count = member_count
        self._guid_counter = 0

    def _new_record(self) -> UnitRecord:
        self._guid_counter += 1
        health_max = float(self._rng.randint(80, 160) * 1000)
        return UnitRecord(
            guid=f"Player-0000-{self._guid_counter:08X}",
            name=self._rng.choice(_NAMES),
            health=health_max,
            health_max=health_max,
            class_token=self._rng.choice(sorted(CLASS_COLORS)),
        )

    def populate(self) -> GameEvent:
        """Build the roster and return the roster-changed event to post."""
        player = self._new_record()
        self._state.set_player(player)
        if self._mode == GroupMode.SOLO:
            self._state.set_group(GroupMode.SOLO)
        elif self._mode == GroupMode.PARTY:
            others = [self._new_record() for _ in range(min(4, self._member_count - 1))]
            self._state.set_group(GroupMode.PARTY, others)
        else:
            raid = [player] + [self._new_record() for _ in range(self._member_count - 1)]
            self._state.set_group(GroupMode.RAID, raid)
        logger.info(
            "Demo %s populated with %d members", self._mode.value, self._state.group_size()
        )
        return GameEvent.roster_changed()

    def step(self) -> list[GameEvent]:
        """Advance the simulation one step; returns the events it produced."""
        events: list[GameEvent] = []
        records = self._state.records()
        if not records:
            return events

        if self._rng.random() < DAMAGE_CHANCE:
            victim = self._rng.choice(records)
            if not victim.is_dead:
                victim.health = max(0.0, victim.health - victim.health_max * self._rng.uniform(0.03, 0.3))
                if victim.health <= 0:
                    victim.is_dead = True
                events.append(GameEvent.combat_log(self._rng.choice(_DAMAGE_KINDS), victim.guid))

        if self._rng.random() < HEAL_CHANCE:
            patient = self._rng.choice(records)
            if not patient.is_dead:
                patient.health = min(patient.health_max, patient.health + patient.health_max * self._rng.uniform(0.05, 0.25))
                events.append(GameEvent.combat_log("SPELL_HEAL", patient.guid))

        for rec in records:
            if rec.is_dead and self._rng.random() < REVIVE_CHANCE:
                rec.is_dead = False
                rec.health = rec.health_max * 0.3

        if self._rng.random() < TARGET_CHANCE:
            target = self._rng.choice(records + [None])
            self._state.set_target(target.guid if target else None)
            events.append(GameEvent.target_changed())

        if self._rng.random() < RANGE_FLIP_CHANCE:
            rec = self._rng.choice(records)
            rec.in_range = not rec.in_range

        return events
