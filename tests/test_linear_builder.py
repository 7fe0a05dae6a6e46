from __future__ import annotations

import math
import unittest

from axisgraph.axis import Direction
from axisgraph.builders import LinearAxisBuilder
from axisgraph.coordinates import CoordinateTransform
from axisgraph.errors import AxisConfigError


class LinearAxisBuilderTests(unittest.TestCase):
    def test_unit_ticks_with_labels(self) -> None:
        builder = LinearAxisBuilder(0.0, 0.0, 30.0, True).add_tick_spec(0, 0, format="%3.0f")
        axis = builder.create_axis()
        marks = list(axis.iter_ticks())
        self.assertEqual(axis.tick_increment, 1.0)
        self.assertEqual(len(marks), 31)
        self.assertEqual([m.label for m in marks], [str(i) for i in range(31)])

    def test_decade_ticks_with_higher_exponent(self) -> None:
        builder = LinearAxisBuilder(0.0, 0.0, 30.0, True).set_maximum_exponent(1).add_tick_spec(0, 0, format="%g")
        self.assertEqual(builder.min_exponent, 1)
        marks = list(builder.create_axis().iter_ticks())
        self.assertEqual([m.coord for m in marks], [0.0, 10.0, 20.0, 30.0])
        self.assertEqual([m.label for m in marks], ["0", "10", "20", "30"])

    def test_middle_rule_adds_half_ticks(self) -> None:
        builder = LinearAxisBuilder(0.0, 0.0, 30.0, True).set_maximum_exponent(1).add_tick_spec(0, 0, middle=True)
        self.assertEqual(builder.tick_increment(), 1.0)
        marks = list(builder.create_axis().iter_ticks())
        major = [m.coord for m in marks if m.spec.length == 10.0]
        middle = [m.coord for m in marks if m.spec.length == 7.5]
        self.assertEqual(major, [0.0, 10.0, 20.0, 30.0])
        self.assertEqual(middle, [5.0, 15.0, 25.0])

    def test_step_rules(self) -> None:
        builder = (
            LinearAxisBuilder(0.0, 0.0, 2.0, True)
            .set_number_of_steps(4)
            .add_tick_spec(0, 0)
            .add_step_tick_spec(1, 2)
        )
        self.assertEqual(builder.tick_increment(), 0.25)
        axis = builder.create_axis()
        self.assertEqual([s.mod for s in axis.tick_specs], [4, 2])
        self.assertEqual(len(list(axis.iter_ticks())), 5)

    def test_step_rule_errors_leave_state_unchanged(self) -> None:
        builder = LinearAxisBuilder(0.0, 0.0, 2.0, True).set_number_of_steps(4).add_step_tick_spec(1, 2)
        with self.assertRaises(AxisConfigError):
            builder.add_step_tick_spec(0, 3)
        with self.assertRaises(AxisConfigError):
            builder.set_number_of_steps(3)
        with self.assertRaises(AxisConfigError):
            builder.set_number_of_steps(0)
        self.assertEqual(builder.number_of_steps, 4)
        self.assertEqual(len(builder.rules), 1)

    def test_level_and_depth_errors(self) -> None:
        builder = LinearAxisBuilder(0.0, 0.0, 10.0, True)
        with self.assertRaises(AxisConfigError):
            builder.add_tick_spec(5, 0)
        with self.assertRaises(AxisConfigError):
            builder.add_tick_spec(4, 0, middle=True)
        with self.assertRaises(AxisConfigError):
            builder.add_tick_spec(-1, 0)
        with self.assertRaises(AxisConfigError):
            builder.add_tick_spec(0, -1)
        with self.assertRaises(AxisConfigError):
            builder.add_tick_spec(0, 0, format="{bogus}")
        self.assertEqual(builder.rules, ())

    def test_non_integer_arguments_rejected(self) -> None:
        builder = LinearAxisBuilder(0.0, 0.0, 10.0, True)
        for call in (
            lambda: builder.add_tick_spec(1.0, 0),
            lambda: builder.add_tick_spec(True, 0),
            lambda: builder.add_tick_spec(0, 1.5),
            lambda: builder.add_tick_spec("0", 0),
            lambda: builder.add_step_tick_spec(0, 1.0),
            lambda: builder.set_number_of_steps(2.0),
            lambda: builder.set_maximum_exponent(1.5),
        ):
            with self.assertRaises(AxisConfigError):
                call()
        self.assertEqual(builder.rules, ())
        self.assertEqual((builder.number_of_steps, builder.max_exponent), (1, 0))

    def test_configure_levels(self) -> None:
        builder = LinearAxisBuilder(0.0, 0.0, 10.0, True).add_tick_spec(2, 0)
        with self.assertRaises(AxisConfigError):
            builder.configure_levels([4.0])
        with self.assertRaises(AxisConfigError):
            builder.configure_levels([4.0], [1.0], [2.0])
        builder.configure_levels([8.0, 6.0, 4.0], [1.0, 1.0, 1.0], [2.0, 2.0, 2.0])
        self.assertEqual(builder.number_of_levels, 3)
        self.assertEqual(builder.create_axis().tick_specs[0].length, 4.0)

    def test_tick_scaling(self) -> None:
        builder = LinearAxisBuilder(0.0, 0.0, 10.0, True)
        self.assertEqual(builder.tick_scaling(), 1.0)
        self.assertAlmostEqual(builder.tick_scaling(3.0), 0.5 * (1.0 - 0.75 * math.log(0.5)))
        self.assertEqual(builder.tick_scaling(0.75), 2.0)
        builder.set_linear_tick_scaling(True).set_tick_scaling_factor(1.5)
        self.assertEqual(builder.tick_scaling(3.0), 1.5)

    def test_tick_base_snaps_toward_zero(self) -> None:
        self.assertEqual(LinearAxisBuilder(23.0, 0.0, 10.0, True).set_maximum_exponent(1).tick_base(), 20.0)
        self.assertEqual(LinearAxisBuilder(-23.0, 0.0, 10.0, True).set_maximum_exponent(1).tick_base(), -20.0)
        self.assertEqual(LinearAxisBuilder(0.0, 7.0, 10.0, False).set_maximum_exponent(1).tick_base(), 0.0)

    def test_counterclockwise_rules(self) -> None:
        self.assertFalse(LinearAxisBuilder(0.0, 0.0, 1.0, True).counterclockwise)
        self.assertTrue(LinearAxisBuilder(0.0, 0.0, 1.0, True, flip=True).counterclockwise)
        self.assertTrue(LinearAxisBuilder(0.0, 0.0, 1.0, False).counterclockwise)
        self.assertFalse(LinearAxisBuilder(0.0, 0.0, 1.0, False, flip=True).counterclockwise)
        inverted = CoordinateTransform(100, 100)
        inverted.set_ranges(0.0, 10.0, 10.0, 0.0)
        self.assertFalse(LinearAxisBuilder(0.0, 0.0, 1.0, False, transform=inverted).counterclockwise)
        self.assertIs(LinearAxisBuilder(0.0, 0.0, 1.0, False).direction, Direction.VERTICAL_INCREASING)

    def test_appearance_is_carried_to_axis(self) -> None:
        builder = (
            LinearAxisBuilder(0.0, 0.0, 10.0, True, label="Time")
            .set_width(3.0)
            .set_color((10, 20, 30, 255))
            .set_axis_scale(2.0)
            .set_label_offset(7.0)
            .set_tick_labels_horizontal(True)
        )
        axis = builder.create_axis()
        self.assertEqual(axis.width, 3.0)
        self.assertEqual(axis.color, (10, 20, 30, 255))
        self.assertEqual(axis.axis_scale, 2.0)
        self.assertEqual(axis.label_offset, 7.0)
        self.assertEqual(axis.label, "Time")
        self.assertTrue(axis.tick_labels_horizontal)
        self.assertEqual(builder.set_width(0.0).width, 1.5)
        with self.assertRaises(AxisConfigError):
            builder.set_axis_scale(0.0)

    def test_create_axis_is_repeatable(self) -> None:
        builder = LinearAxisBuilder(0.0, 0.0, 10.0, True).add_tick_spec(0, 0).add_tick_spec(1, 1, middle=True)
        first = builder.create_axis()
        second = builder.create_axis()
        self.assertIsNot(first, second)
        self.assertEqual(first.tick_specs, second.tick_specs)


if __name__ == "__main__":
    unittest.main()
