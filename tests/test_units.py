"""Tests for unit conversions."""

import math
import unittest

from bmi_tracker.units import (
    centimeters_to_inches,
    centimeters_to_meters,
    convert_height,
    convert_weight,
    height_to_meters,
    inches_to_centimeters,
    kilograms_to_pounds,
    pounds_to_kilograms,
    weight_to_kilograms,
)


class TestWeightConversion(unittest.TestCase):
    def test_pounds_to_kilograms(self):
        self.assertAlmostEqual(pounds_to_kilograms(100), 45.3592)

    def test_kilograms_to_pounds(self):
        self.assertAlmostEqual(kilograms_to_pounds(45.3592), 100)

    def test_round_trip(self):
        for w in (0.5, 1, 2.2, 70, 154.3, 1100, 12345.678):
            back = kilograms_to_pounds(pounds_to_kilograms(w))
            self.assertTrue(math.isclose(back, w, rel_tol=1e-9), f"Failed for w={w}")

    def test_weight_to_kilograms(self):
        self.assertEqual(weight_to_kilograms(70, "kg"), 70)
        self.assertAlmostEqual(weight_to_kilograms(154, "lbs"), 69.853168)

    def test_non_positive_values_pass_through(self):
        self.assertEqual(pounds_to_kilograms(0), 0)
        self.assertLess(pounds_to_kilograms(-10), 0)


class TestHeightConversion(unittest.TestCase):
    def test_inches_to_centimeters(self):
        self.assertAlmostEqual(inches_to_centimeters(69), 175.26)

    def test_centimeters_to_inches(self):
        self.assertAlmostEqual(centimeters_to_inches(254), 100)

    def test_centimeters_to_meters(self):
        self.assertAlmostEqual(centimeters_to_meters(175), 1.75)

    def test_round_trip(self):
        for h in (0.1, 20, 69, 100, 180.5, 250):
            back = centimeters_to_inches(inches_to_centimeters(h))
            self.assertTrue(math.isclose(back, h, rel_tol=1e-9), f"Failed for h={h}")

    def test_height_to_meters(self):
        self.assertAlmostEqual(height_to_meters(180, "cm"), 1.8)
        self.assertAlmostEqual(height_to_meters(69, "inches"), 1.7526)


class TestConvertBetweenUnits(unittest.TestCase):
    def test_convert_weight(self):
        self.assertAlmostEqual(convert_weight(100, "lbs", "kg"), 45.3592)
        self.assertAlmostEqual(convert_weight(45.3592, "kg", "lbs"), 100)
        self.assertEqual(convert_weight(70, "kg", "kg"), 70)

    def test_convert_height(self):
        self.assertAlmostEqual(convert_height(10, "inches", "cm"), 25.4)
        self.assertAlmostEqual(convert_height(25.4, "cm", "inches"), 10)
        self.assertEqual(convert_height(180, "cm", "cm"), 180)


if __name__ == "__main__":
    unittest.main()
