"""Tests for the BMI calculation engine."""

import math
import unittest

from bmi_tracker.bmi_calculator import (
    category_for,
    compute_bmi,
    description_for,
    evaluate,
    evaluate_values,
    format_result,
    ideal_weight_range,
)
from bmi_tracker.models import BMICategory, HeightUnit, HeightValue, WeightUnit, WeightValue


class TestComputeBMI(unittest.TestCase):
    def test_metric(self):
        # 70 / 1.75² = 22.857
        self.assertAlmostEqual(compute_bmi(70, "kg", 175, "cm"), 22.857, places=3)

    def test_imperial(self):
        # 154 lbs = 69.853 kg, 69 in = 1.7526 m
        self.assertAlmostEqual(compute_bmi(154, "lbs", 69, "inches"), 22.74, delta=0.1)

    def test_mixed_units(self):
        metric = compute_bmi(70, "kg", 175.26, "cm")
        mixed = compute_bmi(70, "kg", 69, "inches")
        self.assertAlmostEqual(metric, mixed)

    def test_enum_units_accepted(self):
        self.assertAlmostEqual(
            compute_bmi(70, WeightUnit.KG, 175, HeightUnit.CM),
            compute_bmi(70, "kg", 175, "cm"),
        )

    def test_zero_height_is_infinite(self):
        self.assertEqual(compute_bmi(70, "kg", 0, "cm"), math.inf)

    def test_zero_weight_and_height_is_nan(self):
        self.assertTrue(math.isnan(compute_bmi(0, "kg", 0, "cm")))

    def test_deterministic(self):
        self.assertEqual(compute_bmi(81.3, "kg", 182, "cm"), compute_bmi(81.3, "kg", 182, "cm"))


class TestCategory(unittest.TestCase):
    def test_boundaries_are_closed_on_the_lower_end(self):
        self.assertEqual(category_for(18.4999), BMICategory.UNDERWEIGHT)
        self.assertEqual(category_for(18.5), BMICategory.NORMAL)
        self.assertEqual(category_for(24.9999), BMICategory.NORMAL)
        self.assertEqual(category_for(25), BMICategory.OVERWEIGHT)
        self.assertEqual(category_for(29.9999), BMICategory.OVERWEIGHT)
        self.assertEqual(category_for(30), BMICategory.OBESE)

    def test_extremes(self):
        self.assertEqual(category_for(-5), BMICategory.UNDERWEIGHT)
        self.assertEqual(category_for(0), BMICategory.UNDERWEIGHT)
        self.assertEqual(category_for(1e6), BMICategory.OBESE)

    def test_every_finite_value_has_a_known_category(self):
        value = -10.0
        while value < 60:
            self.assertNotEqual(category_for(value), BMICategory.UNKNOWN, f"Failed for bmi={value}")
            value += 0.05

    def test_non_finite(self):
        self.assertEqual(category_for(math.inf), BMICategory.OBESE)
        self.assertEqual(category_for(-math.inf), BMICategory.UNDERWEIGHT)
        self.assertEqual(category_for(math.nan), BMICategory.UNKNOWN)

    def test_category_compares_as_string(self):
        self.assertEqual(category_for(22), "Normal")


class TestDescription(unittest.TestCase):
    def test_each_category_has_text(self):
        self.assertEqual(
            description_for(BMICategory.NORMAL),
            "You have a healthy weight. Keep up the good work!",
        )
        self.assertEqual(
            description_for(BMICategory.OBESE),
            "You may be obese. Consult a healthcare provider for guidance.",
        )
        for category in BMICategory:
            self.assertTrue(description_for(category))

    def test_accepts_stored_category_string(self):
        self.assertEqual(description_for("Underweight"), description_for(BMICategory.UNDERWEIGHT))


class TestIdealWeightRange(unittest.TestCase):
    def test_metric(self):
        ideal = ideal_weight_range(180, "cm")
        # 18.5 * 1.8² = 59.94, 24.9 * 1.8² = 80.676
        self.assertAlmostEqual(ideal.min_kg, 59.94)
        self.assertAlmostEqual(ideal.max_kg, 80.676)

    def test_imperial_matches_metric(self):
        low, high = ideal_weight_range(69, "inches")
        ideal = ideal_weight_range(175.26, "cm")
        self.assertAlmostEqual(low, ideal.min_kg)
        self.assertAlmostEqual(high, ideal.max_kg)

    def test_min_below_max(self):
        for height in (50, 120, 175, 250):
            low, high = ideal_weight_range(height, "cm")
            self.assertLess(low, high)


class TestEvaluate(unittest.TestCase):
    def test_result_fields(self):
        result = evaluate(70, "kg", 175, "cm")
        self.assertAlmostEqual(result.value, 22.857, places=3)
        self.assertEqual(result.category, BMICategory.NORMAL)
        self.assertEqual(result.description, description_for(BMICategory.NORMAL))

    def test_unit_tagged_values(self):
        result = evaluate_values(WeightValue(154, WeightUnit.LBS), HeightValue(69, HeightUnit.INCHES))
        self.assertAlmostEqual(result.value, compute_bmi(154, "lbs", 69, "inches"))
        self.assertEqual(result.category, BMICategory.NORMAL)

    def test_format_result(self):
        result = evaluate(70, "kg", 175, "cm")
        text = format_result(result, ideal_weight_range(175, "cm"))
        self.assertIn("22.9", text)
        self.assertIn("Normal", text)
        self.assertIn("Ideal:", text)


if __name__ == "__main__":
    unittest.main()
