from __future__ import annotations

import math
import unittest

from axisgraph.builders import LogAxisBuilder
from axisgraph.builders.log import DecadeRule
from axisgraph.errors import AxisConfigError


class LogAxisBuilderTests(unittest.TestCase):
    def test_decades_with_middle_ticks(self) -> None:
        builder = LogAxisBuilder(0.0, 0.0, 3.0, True).add_decade_tick_spec(0, middle=True, format="%g")
        axis = builder.create_axis()
        self.assertEqual(axis.tick_increment, 1.0)
        marks = list(axis.iter_ticks())
        decades = [m for m in marks if m.label is not None]
        middles = [m for m in marks if m.label is None]
        self.assertEqual([m.coord for m in decades], [0.0, 1.0, 2.0, 3.0])
        self.assertEqual([m.label for m in decades], ["1", "10", "100", "1000"])
        for k, mark in enumerate(middles):
            self.assertAlmostEqual(mark.coord, k + math.log10(5.0))
        self.assertEqual(len(middles), 3)

    def test_decade_only_uses_whole_decade_increment(self) -> None:
        builder = LogAxisBuilder(0.0, 0.0, 2.0, True).add_decade_tick_spec(0, format="%g")
        self.assertEqual(builder.max_depth, 0)
        self.assertEqual(builder.tick_increment(), 9.0)
        self.assertEqual([m.label for m in builder.create_axis().iter_ticks()], ["1", "10", "100"])

    def test_unit_subdivision(self) -> None:
        builder = LogAxisBuilder(0.0, 0.0, 1.0, True).add_decade_tick_spec(0).add_tick_spec(1, 1)
        values = [m.value for m in builder.create_axis().iter_ticks()]
        self.assertEqual(len(values), 10)
        for expected, value in zip([1, 2, 3, 4, 5, 6, 7, 8, 9, 10], values):
            self.assertAlmostEqual(value, expected)

    def test_divisor_halves_subdivision(self) -> None:
        builder = LogAxisBuilder(0.0, 0.0, 1.0, True).add_tick_spec(0, 1, divisor=2)
        self.assertEqual(builder.max_depth, 2)
        values = [m.value for m in builder.create_axis().iter_ticks()]
        self.assertEqual(len(values), 19)
        for expected, value in zip([1.0, 1.5, 2.0, 2.5], values):
            self.assertAlmostEqual(value, expected)
        self.assertAlmostEqual(values[-1], 10.0)

    def test_cutoff_hides_upper_ticks(self) -> None:
        builder = LogAxisBuilder(0.0, 0.0, 1.0, True).add_tick_spec(0, 1, cutoff=5)
        values = [m.value for m in builder.create_axis().iter_ticks()]
        self.assertEqual(len(values), 6)
        for expected, value in zip([1, 2, 3, 4, 5, 10], values):
            self.assertAlmostEqual(value, expected)

    def test_one_tick_positions(self) -> None:
        builder = LogAxisBuilder(0.0, 0.0, 1.0, True).add_one_tick(0, 2.5, "%g").add_one_tick(1, 5.0)
        marks = list(builder.create_axis().iter_ticks())
        self.assertEqual(len(marks), 2)
        self.assertAlmostEqual(marks[0].value, 2.5)
        self.assertEqual(marks[0].label, "2.5")
        self.assertAlmostEqual(marks[1].value, 5.0)
        self.assertIsNone(marks[1].label)

    def test_depth_zero_becomes_decade_rule(self) -> None:
        builder = LogAxisBuilder(0.0, 0.0, 1.0, True).add_tick_spec(0, 0, format="%g")
        self.assertEqual(builder.rules, (DecadeRule(0, False, "%g", None),))

    def test_invalid_rules_rejected(self) -> None:
        builder = LogAxisBuilder(0.0, 0.0, 1.0, True)
        for call in (
            lambda: builder.add_tick_spec(0, 1, divisor=3),
            lambda: builder.add_tick_spec(0, 1, cutoff=1),
            lambda: builder.add_tick_spec(0, 1, cutoff=10),
            lambda: builder.add_tick_spec(0, 0, divisor=2),
            lambda: builder.add_tick_spec(0, -1),
            lambda: builder.add_one_tick(0, 10.0),
            lambda: builder.add_one_tick(0, 0.5),
            lambda: builder.add_one_tick(0, 1.2345678),
            lambda: builder.add_decade_tick_spec(4, middle=True),
        ):
            with self.assertRaises(AxisConfigError):
                call()
        self.assertEqual(builder.rules, ())

    def test_non_integer_arguments_rejected(self) -> None:
        builder = LogAxisBuilder(0.0, 0.0, 1.0, True)
        for call in (
            lambda: builder.add_tick_spec(0, 1.5),
            lambda: builder.add_tick_spec(1.0, 1),
            lambda: builder.add_tick_spec(0, 1, divisor=2.0),
            lambda: builder.add_tick_spec(0, 1, cutoff=5.0),
            lambda: builder.add_decade_tick_spec(0.0),
            lambda: builder.add_one_tick("1", 2.5),
        ):
            with self.assertRaises(AxisConfigError):
                call()
        self.assertEqual(builder.rules, ())

    def test_vertical_axis_runs_upward(self) -> None:
        axis = LogAxisBuilder(0.0, 0.0, 2.0, False).add_decade_tick_spec(0).create_axis()
        self.assertTrue(axis.increasing)
        self.assertEqual([m.coord for m in axis.iter_ticks()], [0.0, 1.0, 2.0])


if __name__ == "__main__":
    unittest.main()
