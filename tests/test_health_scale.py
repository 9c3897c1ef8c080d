import unittest

from raid_squares.engine.health_scale import HealthScaler, health_fraction


class HealthScaleTests(unittest.TestCase):
    def setUp(self) -> None:
        self.scaler = HealthScaler(0.3, 1.5, 0.3)

    def test_endpoints_hit_bounds(self) -> None:
        self.assertAlmostEqual(self.scaler.scale(0.0), 0.3)
        self.assertAlmostEqual(self.scaler.scale(1.0), 1.5)

    def test_stays_in_bounds_and_is_monotonic(self) -> None:
        previous = None
        for step in range(101):
            value = self.scaler.scale(step / 100)
            self.assertGreaterEqual(value, 0.3)
            self.assertLessEqual(value, 1.5)
            if previous is not None:
                self.assertGreaterEqual(value, previous)
            previous = value

    def test_curve_is_concave_shrinks_fast_near_full_health(self) -> None:
        drop_near_full = self.scaler.scale(1.0) - self.scaler.scale(0.9)
        drop_near_empty = self.scaler.scale(0.1) - self.scaler.scale(0.0)
        self.assertGreater(drop_near_full, drop_near_empty)

    def test_half_health_matches_formula(self) -> None:
        expected = 0.3 + 1.2 * (1 - 0.5 ** 0.3)
        self.assertAlmostEqual(self.scaler.scale(0.5), expected)

    def test_out_of_range_fraction_is_clamped(self) -> None:
        self.assertAlmostEqual(self.scaler.scale(-0.5), 0.3)
        self.assertAlmostEqual(self.scaler.scale(2.0), 1.5)

    def test_zero_or_negative_max_health_is_fraction_zero(self) -> None:
        self.assertEqual(health_fraction(500, 0), 0.0)
        self.assertEqual(health_fraction(500, -10), 0.0)
        self.assertAlmostEqual(self.scaler.scale_for_health(500, 0), 0.3)

    def test_overheal_clamps_to_full(self) -> None:
        self.assertEqual(health_fraction(150, 100), 1.0)

    def test_rejects_exponent_outside_open_unit_interval(self) -> None:
        with self.assertRaises(ValueError):
            HealthScaler(0.3, 1.5, 1.0)
        with self.assertRaises(ValueError):
            HealthScaler(0.3, 1.5, 0.0)

    def test_rejects_inverted_bounds(self) -> None:
        with self.assertRaises(ValueError):
            HealthScaler(1.5, 0.3, 0.3)


if __name__ == "__main__":
    unittest.main()
