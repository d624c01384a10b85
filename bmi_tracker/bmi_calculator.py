"""BMI calculation engine.

BMI = weight (kg) / height (m)²

Categories follow the WHO adult cut-offs, as half-open intervals:

    (-inf, 18.5)  Underweight
    [18.5, 25)    Normal
    [25, 30)      Overweight
    [30, +inf)    Obese

The ideal weight range for a height is the weight at BMI 18.5 to 24.9.
Everything here is a pure function; inputs are expected to be validated
upstream (see ``validators``).
"""

import math

from bmi_tracker.config import (
    IDEAL_BMI_MAX,
    IDEAL_BMI_MIN,
    NORMAL_MIN_BMI,
    OBESE_MIN_BMI,
    OVERWEIGHT_MIN_BMI,
)
from bmi_tracker.models import BMICategory, BMIResult, HeightValue, IdealWeightRange, WeightValue
from bmi_tracker.units import height_to_meters, weight_to_kilograms

CATEGORY_DESCRIPTIONS = {
    BMICategory.UNDERWEIGHT: "You may be underweight. Consider consulting a healthcare provider.",
    BMICategory.NORMAL: "You have a healthy weight. Keep up the good work!",
    BMICategory.OVERWEIGHT: "You may be overweight. Consider healthy lifestyle changes.",
    BMICategory.OBESE: "You may be obese. Consult a healthcare provider for guidance.",
    BMICategory.UNKNOWN: "BMI category unknown.",
}

# Display ranges for the category reference table
CATEGORY_RANGES = [
    (BMICategory.UNDERWEIGHT, "< 18.5"),
    (BMICategory.NORMAL, "18.5 - 24.9"),
    (BMICategory.OVERWEIGHT, "25 - 29.9"),
    (BMICategory.OBESE, "≥ 30"),
]


def _divide(numerator: float, denominator: float) -> float:
    # IEEE semantics instead of ZeroDivisionError: x/0 -> ±inf, 0/0 -> nan
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def compute_bmi(weight: float, weight_unit: str, height: float, height_unit: str) -> float:
    """Calculate BMI from a weight and a height in any supported units.

    Weight units: "kg" or "lbs". Height units: "cm" or "inches".
    A zero height gives ``inf`` (or ``nan`` for zero weight); callers are
    expected to reject it before getting here.
    """
    weight_kg = weight_to_kilograms(weight, weight_unit)
    height_m = height_to_meters(height, height_unit)
    return _divide(weight_kg, height_m * height_m)


def category_for(bmi: float) -> BMICategory:
    """Classify a BMI value. Total over the reals; NaN is UNKNOWN."""
    if math.isnan(bmi):
        return BMICategory.UNKNOWN
    if bmi < NORMAL_MIN_BMI:
        return BMICategory.UNDERWEIGHT
    if bmi < OVERWEIGHT_MIN_BMI:
        return BMICategory.NORMAL
    if bmi < OBESE_MIN_BMI:
        return BMICategory.OVERWEIGHT
    return BMICategory.OBESE


def description_for(category: BMICategory) -> str:
    """Advisory sentence for a category. Informational only."""
    return CATEGORY_DESCRIPTIONS[BMICategory(category)]


def ideal_weight_range(height: float, height_unit: str) -> IdealWeightRange:
    """Weight range (kg) corresponding to BMI 18.5 to 24.9 at this height."""
    height_m = height_to_meters(height, height_unit)
    height_sq = height_m * height_m
    return IdealWeightRange(
        min_kg=IDEAL_BMI_MIN * height_sq,
        max_kg=IDEAL_BMI_MAX * height_sq,
    )


def evaluate(weight: float, weight_unit: str, height: float, height_unit: str) -> BMIResult:
    """Compute BMI and derive its category and description in one go."""
    bmi = compute_bmi(weight, weight_unit, height, height_unit)
    category = category_for(bmi)
    return BMIResult(value=bmi, category=category, description=description_for(category))


def evaluate_values(weight: WeightValue, height: HeightValue) -> BMIResult:
    """Same as ``evaluate`` for unit-tagged values."""
    return evaluate(weight.magnitude, weight.unit.value, height.magnitude, height.unit.value)


def format_result(result: BMIResult, ideal: IdealWeightRange = None) -> str:
    """Format a BMI result for display."""
    lines = [
        f"BMI:      {result.value:.1f}",
        f"Category: {result.category.value}",
        f"          {result.description}",
    ]
    if ideal is not None:
        lines.append(f"Ideal:    {ideal.min_kg:.1f} - {ideal.max_kg:.1f} kg")
    return "\n".join(lines)
