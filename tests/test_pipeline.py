import unittest

from raid_squares.engine.pipeline import RefreshPipeline
from raid_squares.engine.tick import TickThrottle
from raid_squares.models import AppConfig, BorderStyle, GameEvent, GroupMode, UnitRef
from raid_squares.provider.game_state import InMemoryGameState, UnitRecord


class _RecordingRenderer:
    def __init__(self) -> None:
        self.applied: list[tuple] = []
        self.latest: dict = {}
        self.drag_calls: list[bool] = []

    def apply(self, index, descriptor) -> None:
        self.applied.append((index, descriptor))
        self.latest[index] = descriptor

    def set_drag_enabled(self, enabled) -> None:
        self.drag_calls.append(enabled)


class _Clock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def _record(guid: str, name: str, health: float = 100.0) -> UnitRecord:
    return UnitRecord(guid=guid, name=name, health=health, health_max=100.0, class_token="PRIEST")


class RefreshPipelineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = _Clock()
        self.state = InMemoryGameState(clock=self.clock)
        self.player = _record("g-self", "Selene")
        self.state.set_player(self.player)
        self.renderer = _RecordingRenderer()
        self.config = AppConfig(slot_count=10)
        self.notices: list[str] = []
        self.pipeline = RefreshPipeline(
            self.config, self.state, self.renderer, on_notice=self.notices.append
        )

    def _raid(self, count: int) -> list[UnitRecord]:
        members = [self.player] + [_record(f"g-{i}", f"Member{i}") for i in range(2, count + 1)]
        self.state.set_group(GroupMode.RAID, members)
        return members

    def test_start_assigns_draws_and_disables_drag(self) -> None:
        self.pipeline.start()
        self.assertEqual(self.renderer.drag_calls, [False])
        self.assertTrue(self.renderer.latest[0].visible)
        self.assertEqual(self.renderer.latest[0].label, "Sel")
        self.assertFalse(self.renderer.latest[1].visible)
        self.assertEqual(self.pipeline.slots[0].unit, UnitRef.player())
        self.assertTrue(self.pipeline.slots[0].active)

    def test_roster_change_reassigns_and_shows_raid(self) -> None:
        self.pipeline.start()
        self._raid(4)
        self.pipeline.post(GameEvent.roster_changed())
        tokens = [s.unit.token if s.unit else None for s in self.pipeline.slots]
        self.assertEqual(tokens[:4], ["raid1", "raid2", "raid3", "raid4"])
        self.assertTrue(all(t is None for t in tokens[4:]))
        self.assertEqual(sum(1 for s in self.pipeline.slots if s.active), 4)
        self.assertEqual(self.renderer.latest[3].label, "Mem")

    def test_roster_change_in_lockdown_keeps_assignment(self) -> None:
        self.pipeline.start()
        before = [s.unit for s in self.pipeline.slots]
        self.state.set_lockdown(True)
        self._raid(4)
        with self.assertLogs("raid_squares.engine.slot_assigner", level="WARNING"):
            self.pipeline.post(GameEvent.roster_changed())
        self.assertEqual([s.unit for s in self.pipeline.slots], before)
        self.assertEqual(len(self.notices), 1)

    def test_damage_event_records_but_does_not_redraw(self) -> None:
        self._raid(3)
        self.pipeline.start()
        applied_before = len(self.renderer.applied)
        self.pipeline.post(GameEvent.combat_log("SPELL_DAMAGE", "g-2"))
        self.assertEqual(len(self.renderer.applied), applied_before)
        self.assertEqual(self.pipeline.memory.last_damage("g-2"), 100.0)
        self.assertEqual(self.renderer.latest[1].border, BorderStyle.THIN)

        self.pipeline.post(GameEvent.tick())
        self.assertEqual(self.renderer.latest[1].border, BorderStyle.DAMAGED)

    def test_damage_border_expires_after_window(self) -> None:
        self._raid(2)
        self.pipeline.start()
        self.pipeline.post(GameEvent.combat_log("SWING_DAMAGE", "g-2"))
        self.pipeline.post(GameEvent.tick())
        self.assertEqual(self.renderer.latest[1].border, BorderStyle.DAMAGED)
        self.clock.now += self.config.damage_window_sec + 0.1
        self.pipeline.post(GameEvent.tick())
        self.assertEqual(self.renderer.latest[1].border, BorderStyle.THIN)

    def test_non_damage_sub_events_are_ignored(self) -> None:
        self._raid(2)
        self.pipeline.start()
        for sub_event in ("SPELL_HEAL", "SPELL_AURA_APPLIED", "ENVIRONMENTAL_DAMAGE"):
            self.pipeline.post(GameEvent.combat_log(sub_event, "g-2"))
        self.pipeline.post(GameEvent.combat_log("RANGE_DAMAGE", None))
        self.assertEqual(len(self.pipeline.memory), 0)

    def test_target_change_recomputes_without_reassigning(self) -> None:
        self._raid(3)
        self.pipeline.start()
        assigned_before = self.pipeline.assigner.current
        self.state.set_target("g-3")
        self.pipeline.post(GameEvent.target_changed())
        self.assertIs(self.pipeline.assigner.current, assigned_before)
        self.assertEqual(self.renderer.latest[2].border, BorderStyle.TARGETED)
        targeted = [d for d in self.renderer.latest.values() if d.border == BorderStyle.TARGETED]
        self.assertEqual(len(targeted), 1)

    def test_clicked_slot_becomes_the_only_target(self) -> None:
        self._raid(4)
        self.pipeline.start()
        self.state.set_target("g-2")
        self.pipeline.post(GameEvent.target_changed())
        self.assertEqual(self.renderer.latest[1].border, BorderStyle.TARGETED)

        self.assertTrue(self.pipeline.target_slot(3))
        self.assertTrue(self.state.unit_is_target(UnitRef.raid(4)))
        self.assertEqual(self.renderer.latest[3].border, BorderStyle.TARGETED)
        targeted = [i for i, d in self.renderer.latest.items() if d.border == BorderStyle.TARGETED]
        self.assertEqual(targeted, [3])

    def test_click_on_empty_or_out_of_grid_slot_changes_nothing(self) -> None:
        self._raid(2)
        self.pipeline.start()
        self.state.set_target("g-2")
        self.pipeline.post(GameEvent.target_changed())
        applied = len(self.renderer.applied)
        self.assertFalse(self.pipeline.target_slot(5))
        self.assertFalse(self.pipeline.target_slot(len(self.pipeline.slots)))
        self.assertFalse(self.pipeline.target_slot(-1))
        self.assertTrue(self.state.unit_is_target(UnitRef.raid(2)))
        self.assertEqual(len(self.renderer.applied), applied)

    def test_click_on_departed_member_is_ignored(self) -> None:
        self._raid(3)
        self.pipeline.start()
        self.state.set_group(GroupMode.RAID, self.state.records()[:2])
        self.assertFalse(self.pipeline.target_slot(2))
        self.assertFalse(any(d.border == BorderStyle.TARGETED for d in self.renderer.latest.values()))

    def test_tick_surfaces_health_change(self) -> None:
        members = self._raid(2)
        self.pipeline.start()
        full_scale = self.renderer.latest[1].scale
        members[1].health = 10.0
        self.pipeline.post(GameEvent.tick())
        self.assertLess(self.renderer.latest[1].scale, full_scale)

    def test_departed_member_slot_hides_on_tick(self) -> None:
        self._raid(3)
        self.pipeline.start()
        self.assertTrue(self.renderer.latest[2].visible)
        self.state.set_group(GroupMode.RAID, self.state.records()[:2])
        self.pipeline.post(GameEvent.tick())
        self.assertFalse(self.renderer.latest[2].visible)
        self.assertFalse(self.pipeline.slots[2].active)

    def test_unchanged_descriptors_are_not_reapplied(self) -> None:
        self._raid(3)
        self.pipeline.start()
        count = len(self.renderer.applied)
        self.pipeline.post(GameEvent.tick())
        self.pipeline.post(GameEvent.tick())
        self.assertEqual(len(self.renderer.applied), count)

    def test_modifier_events_reach_drag_hook(self) -> None:
        self.pipeline.post(GameEvent.modifier_state(True))
        self.pipeline.post(GameEvent.modifier_state(False))
        self.assertEqual(self.renderer.drag_calls, [True, False])
        seen: list[bool] = []
        self.pipeline.on_modifier_changed = seen.append
        self.pipeline.post(GameEvent.modifier_state(True))
        self.assertEqual(seen, [True])

    def test_advance_fires_tick_only_past_interval(self) -> None:
        self._raid(2)
        self.pipeline.start()
        self.assertFalse(self.pipeline.advance(0.1))
        self.assertFalse(self.pipeline.advance(0.1))
        self.assertTrue(self.pipeline.advance(0.1))
        self.assertFalse(self.pipeline.advance(0.1))

    def test_posts_during_drain_run_after_current_event(self) -> None:
        order: list[str] = []
        pipeline = self.pipeline

        class _ReentrantRenderer(_RecordingRenderer):
            def set_drag_enabled(self, enabled) -> None:
                order.append(f"drag:{enabled}")
                if enabled:
                    pipeline.post(GameEvent.modifier_state(False))
                    order.append("posted")

        self.pipeline._renderer = _ReentrantRenderer()
        self.pipeline.post(GameEvent.modifier_state(True))
        self.assertEqual(order, ["drag:True", "posted", "drag:False"])


class TickThrottleTests(unittest.TestCase):
    def test_resets_on_fire(self) -> None:
        throttle = TickThrottle(0.25)
        self.assertFalse(throttle.advance(0.2))
        self.assertTrue(throttle.advance(0.2))
        self.assertEqual(throttle.elapsed, 0.0)

    def test_long_frame_fires_once(self) -> None:
        throttle = TickThrottle(0.25)
        self.assertTrue(throttle.advance(5.0))
        self.assertFalse(throttle.advance(0.01))

    def test_rejects_non_positive_interval(self) -> None:
        with self.assertRaises(ValueError):
            TickThrottle(0)


if __name__ == "__main__":
    unittest.main()
