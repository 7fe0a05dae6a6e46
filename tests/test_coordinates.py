from __future__ import annotations

import math
import unittest

from axisgraph.coordinates import CoordinateTransform, Margins, ranges_about
from axisgraph.errors import AxisConfigError, SingularTransformError


class CoordinateTransformTests(unittest.TestCase):
    def test_default_ranges_flip_y(self) -> None:
        t = CoordinateTransform(width=100, height=50)
        self.assertEqual(t.forward(0.0, 0.0), (0.0, 50.0))
        self.assertEqual(t.forward(100.0, 50.0), (100.0, 0.0))

    def test_margins_and_ranges(self) -> None:
        t = CoordinateTransform(width=200, height=100)
        t.set_margins(10, 20)
        t.set_ranges(0.0, 9.0, 0.0, 3.0)
        self.assertEqual(t.margins, Margins(10, 10, 20, 20))
        self.assertAlmostEqual(t.x_scale_signed, 20.0)
        self.assertAlmostEqual(t.y_scale_signed, -20.0)
        self.assertEqual(t.forward(0.0, 0.0), (10.0, 80.0))
        u, v = t.forward(9.0, 3.0)
        self.assertAlmostEqual(u, 190.0)
        self.assertAlmostEqual(v, 20.0)
        x, y = t.inverse(190.0, 20.0)
        self.assertAlmostEqual(x, 9.0)
        self.assertAlmostEqual(y, 3.0)

    def test_four_value_margins(self) -> None:
        t = CoordinateTransform(width=100, height=100)
        t.set_margins(5, 15, 10, 20)
        t.set_ranges(0.0, 1.0, 0.0, 1.0)
        self.assertEqual(t.forward(0.0, 0.0), (5.0, 90.0))
        self.assertEqual(t.forward(1.0, 1.0), (85.0, 20.0))
        with self.assertRaises(AxisConfigError):
            t.set_margins(1, 2, 3)

    def test_inverse_round_trip(self) -> None:
        t = CoordinateTransform(width=640, height=480)
        t.set_margins(30, 40)
        t.set_ranges(-2.5, 7.5, 100.0, 300.0)
        for x, y in ((-2.5, 100.0), (0.0, 0.0), (3.25, 212.5), (7.5, 300.0)):
            u, v = t.forward(x, y)
            bx, by = t.inverse(u, v)
            self.assertAlmostEqual(bx, x, places=9)
            self.assertAlmostEqual(by, y, places=9)

    def test_forward_many_matches_scalar_forward(self) -> None:
        t = CoordinateTransform(width=200, height=100)
        t.set_ranges(0.0, 10.0, 0.0, 10.0)
        us, vs = t.forward_many([0.0, 2.5, 10.0], [0.0, 5.0, 10.0])
        self.assertEqual(us.tolist(), [0.0, 50.0, 200.0])
        self.assertEqual(vs.tolist(), [100.0, 50.0, 0.0])

    def test_zero_width_range_marks_inverse_unavailable(self) -> None:
        t = CoordinateTransform(width=100, height=100)
        t.set_ranges(1.0, 1.0, 0.0, 10.0)
        self.assertFalse(t.has_inverse)
        t.forward(1.0, 5.0)
        with self.assertRaises(SingularTransformError):
            t.inverse(10.0, 10.0)
        self.assertEqual(t.parity, 0)

    def test_polarity_and_orientation(self) -> None:
        t = CoordinateTransform(width=100, height=100)
        self.assertEqual((t.polarity_x(), t.polarity_y()), (1, -1))
        self.assertTrue(t.x_axis_points_right)
        self.assertFalse(t.y_axis_points_down)
        self.assertEqual(t.parity, 1)

        t.set_ranges(10.0, 0.0, 10.0, 0.0)
        self.assertEqual((t.polarity_x(), t.polarity_y()), (-1, 1))
        self.assertFalse(t.x_axis_points_right)
        self.assertTrue(t.y_axis_points_down)
        self.assertEqual(t.parity, 1)

        t.set_ranges(0.0, 10.0, 10.0, 0.0)
        self.assertEqual(t.parity, -1)

    def test_invalid_construction_rejected(self) -> None:
        with self.assertRaises(AxisConfigError):
            CoordinateTransform(width=0, height=10)
        t = CoordinateTransform(width=10, height=10)
        with self.assertRaises(AxisConfigError):
            t.set_margins(-1, 0)
        with self.assertRaises(AxisConfigError):
            t.set_margins(5, 0)
        with self.assertRaises(AxisConfigError):
            t.set_ranges(0.0, math.inf, 0.0, 1.0)

    def test_ranges_about_anchor(self) -> None:
        t = CoordinateTransform(width=100, height=100)
        t.set_ranges_about(5.0, 5.0, 0.5, 0.5, 10.0, 10.0)
        self.assertEqual((t.x_lower, t.x_upper, t.y_lower, t.y_upper), (0.0, 10.0, 0.0, 10.0))
        self.assertEqual(t.forward(5.0, 5.0), (50.0, 50.0))
        ranges = ranges_about(120, 100, Margins(10, 10, 0, 0), 0.0, 0.0, 0.0, 1.0, 2.0, 4.0)
        self.assertEqual((ranges.x_lower, ranges.x_upper), (0.0, 50.0))
        self.assertEqual((ranges.y_lower, ranges.y_upper), (-25.0, 0.0))
        with self.assertRaises(AxisConfigError):
            t.set_ranges_about(0.0, 0.0, 0.5, 0.5, 0.0, 1.0)

    def test_rotation_about_anchor(self) -> None:
        t = CoordinateTransform(width=100, height=100)
        t.set_rotation(math.pi / 2, 50.0, 50.0)
        u, v = t.forward(100.0, 50.0)
        self.assertAlmostEqual(u, 50.0)
        self.assertAlmostEqual(v, 100.0)
        u0, v0 = t.forward(50.0, 50.0)
        self.assertAlmostEqual(u0, 50.0)
        self.assertAlmostEqual(v0, 50.0)
        x, y = t.inverse(u, v)
        self.assertAlmostEqual(x, 100.0)
        self.assertAlmostEqual(y, 50.0)

    def test_setters_invalidate_cached_matrix(self) -> None:
        t = CoordinateTransform(width=100, height=100)
        before = t.forward(10.0, 10.0)
        t.set_ranges(0.0, 50.0, 0.0, 50.0)
        after = t.forward(10.0, 10.0)
        self.assertNotEqual(before, after)
        self.assertEqual(after, (20.0, 80.0))

    def test_matrix_is_a_copy(self) -> None:
        t = CoordinateTransform(width=100, height=100)
        m = t.matrix()
        m[0, 0] = 99.0
        self.assertEqual(t.forward(1.0, 0.0), (1.0, 100.0))

    def test_surface_angle(self) -> None:
        t = CoordinateTransform(width=100, height=100)
        self.assertAlmostEqual(t.surface_angle(0.5), 0.5)
        self.assertAlmostEqual(t.surface_angle(0.5, counterclockwise=False), -0.5)
        t.set_ranges(0.0, 100.0, 100.0, 0.0)
        self.assertAlmostEqual(t.surface_angle(0.5), -0.5)

    def test_bounding_box_and_visibility(self) -> None:
        t = CoordinateTransform(width=100, height=50)
        box = t.bounding_box(design=True)
        self.assertAlmostEqual(box.x, 0.0)
        self.assertAlmostEqual(box.y, 0.0)
        self.assertAlmostEqual(box.width, 100.0)
        self.assertAlmostEqual(box.height, 50.0)
        self.assertEqual(t.bounding_box().width, 100.0)
        self.assertTrue(t.maybe_visible([(200.0, 200.0), (10.0, 10.0)]))
        self.assertFalse(t.maybe_visible([(200.0, 200.0), (-1.0, 10.0)]))
        self.assertFalse(t.maybe_visible([]))
        self.assertTrue(t.maybe_visible([(99.0, 1.0)], design=False))

    def test_overlay_shares_surface_and_margins(self) -> None:
        t = CoordinateTransform(width=200, height=100)
        t.set_margins(10, 10)
        t.set_ranges(0.0, 10.0, 0.0, 10.0)
        overlay = t.overlay(0.0, 1.0, 0.0, 1000.0)
        self.assertEqual(overlay.margins, t.margins)
        ou, ov = overlay.forward(1.0, 1000.0)
        self.assertAlmostEqual(ou, 190.0)
        self.assertAlmostEqual(ov, 10.0)
        self.assertEqual((t.x_upper, t.y_upper), (10.0, 10.0))


if __name__ == "__main__":
    unittest.main()
