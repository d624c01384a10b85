"""Unit conversion utilities for imperial/metric conversion.

All functions are total: no input is rejected here, so negative or zero
values pass straight through. Range checks live in ``validators``.
"""

from bmi_tracker.config import CM_PER_INCH, CM_PER_METER, KG_PER_LB


def pounds_to_kilograms(lbs: float) -> float:
    """Convert pounds to kilograms."""
    return lbs * KG_PER_LB


def kilograms_to_pounds(kg: float) -> float:
    """Convert kilograms to pounds."""
    return kg / KG_PER_LB


def inches_to_centimeters(inches: float) -> float:
    """Convert inches to centimeters."""
    return inches * CM_PER_INCH


def centimeters_to_inches(cm: float) -> float:
    """Convert centimeters to inches."""
    return cm / CM_PER_INCH


def centimeters_to_meters(cm: float) -> float:
    """Convert centimeters to meters."""
    return cm / CM_PER_METER


def weight_to_kilograms(weight: float, unit: str) -> float:
    """Weight in kg. Anything other than ``kg`` is taken to be pounds."""
    if unit == "kg":
        return weight
    return pounds_to_kilograms(weight)


def height_to_meters(height: float, unit: str) -> float:
    """Height in meters. Anything other than ``inches`` is taken to be centimeters."""
    if unit == "inches":
        return centimeters_to_meters(inches_to_centimeters(height))
    return centimeters_to_meters(height)


def convert_weight(weight: float, from_unit: str, to_unit: str) -> float:
    """Convert a weight between ``kg`` and ``lbs``."""
    kg = weight_to_kilograms(weight, from_unit)
    return kg if to_unit == "kg" else kilograms_to_pounds(kg)


def convert_height(height: float, from_unit: str, to_unit: str) -> float:
    """Convert a height between ``cm`` and ``inches``."""
    cm = inches_to_centimeters(height) if from_unit == "inches" else height
    return centimeters_to_inches(cm) if to_unit == "inches" else cm
