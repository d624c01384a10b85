"""Body metrics tracking.

Ties validation, BMI calculation and storage together: saving a user's
details records a new BMI and weight entry, and the dashboard view gathers
the latest result alongside recent history.
"""

import logging
from datetime import datetime
from typing import Optional

from bmi_tracker.bmi_calculator import CATEGORY_RANGES, category_for, description_for, evaluate_values
from bmi_tracker.config import BMI_HISTORY_DAYS, WEIGHT_HISTORY_DAYS
from bmi_tracker.db import DB_PATH
from bmi_tracker.exceptions import ValidationFailed
from bmi_tracker.models import (
    BMIRecord,
    BMIResult,
    Dashboard,
    Gender,
    HeightUnit,
    HeightValue,
    UserProfile,
    ValidationOutcome,
    WeightEntry,
    WeightUnit,
    WeightValue,
)
from bmi_tracker.store import (
    fetch_bmi_history,
    fetch_latest_bmi,
    fetch_user_profile,
    fetch_weight_history,
    record_details,
)
from bmi_tracker.units import height_to_meters, weight_to_kilograms
from bmi_tracker.validators import validate_details

logger = logging.getLogger(__name__)


def _value(member) -> str:
    return getattr(member, "value", member)


def _parse_unit(unit_type, value, label: str):
    try:
        return unit_type(_value(value))
    except ValueError:
        raise ValidationFailed(ValidationOutcome.fail(f"Invalid {label} unit")) from None


def save_details(
    user_id: str,
    weight_text: str,
    weight_unit: str,
    height_text: str,
    height_unit: str,
    gender: str,
    now: Optional[datetime] = None,
    db_path: str = DB_PATH,
) -> BMIResult:
    """Validate and store a user's body details, then record their BMI.

    Raises ValidationFailed with the first failing field's message, or for
    a unit or gender outside the supported choices. On success the profile
    is created or replaced, and one BMI record and one weight entry are
    appended to the user's history, all in a single transaction.
    """
    weight_unit = _parse_unit(WeightUnit, weight_unit, "weight")
    height_unit = _parse_unit(HeightUnit, height_unit, "height")
    try:
        gender = Gender(_value(gender))
    except ValueError:
        raise ValidationFailed(ValidationOutcome.fail("Please select a gender")) from None

    outcome = validate_details(weight_text, weight_unit.value, height_text, height_unit.value)
    if not outcome.is_valid:
        raise ValidationFailed(outcome)

    weight = float(weight_text)
    height = float(height_text)
    now = now or datetime.now()

    existing = fetch_user_profile(user_id, db_path)
    profile = UserProfile(
        user_id=user_id,
        weight=weight,
        height=height,
        gender=gender.value,
        weight_unit=weight_unit.value,
        height_unit=height_unit.value,
        created_at=existing.created_at if existing else None,
    )
    result = evaluate_values(WeightValue(weight, weight_unit), HeightValue(height, height_unit))
    record = BMIRecord(
        user_id=user_id,
        bmi=result.value,
        category=result.category.value,
        calculated_at=now,
    )
    entry = WeightEntry(
        user_id=user_id,
        weight=weight,
        unit=weight_unit.value,
        recorded_at=now,
    )
    record_details(profile, record, entry, db_path)

    logger.info("Recorded BMI %.1f (%s) for user %s", result.value, result.category.value, user_id)
    return result


def load_dashboard(
    user_id: str,
    now: Optional[datetime] = None,
    weight_days: int = WEIGHT_HISTORY_DAYS,
    bmi_days: int = BMI_HISTORY_DAYS,
    db_path: str = DB_PATH,
) -> Dashboard:
    """Collect the latest BMI, recent history and profile for one user."""
    profile = fetch_user_profile(user_id, db_path)
    latest = fetch_latest_bmi(user_id, db_path)

    dashboard = Dashboard(
        profile=profile,
        latest=latest,
        weight_history=fetch_weight_history(user_id, weight_days, now, db_path),
        bmi_history=fetch_bmi_history(user_id, bmi_days, now, db_path),
    )
    if latest is not None:
        dashboard.description = description_for(category_for(latest.bmi))
    if profile is not None:
        dashboard.weight_kg = weight_to_kilograms(profile.weight, profile.weight_unit)
        dashboard.height_m = height_to_meters(profile.height, profile.height_unit)
    return dashboard


def format_dashboard(dashboard: Dashboard) -> str:
    """Format the dashboard for display."""
    lines = ["BMI Dashboard", "=" * 45]

    if not dashboard.has_data:
        lines.append("No BMI data yet. Enter your details to calculate your BMI:")
        lines.append("  python -m bmi_tracker details set --weight 70 --height 175")
        return "\n".join(lines)

    latest = dashboard.latest
    lines.append(f"Your BMI: {latest.bmi:.1f} ({latest.category})")
    lines.append(f"  {dashboard.description}")

    lines.append("\nBMI = weight (kg) / (height (m))²")
    if dashboard.weight_kg is not None and dashboard.height_m is not None:
        lines.append(
            f"For you: {dashboard.weight_kg:.1f} kg / ({dashboard.height_m:.2f} m)² "
            f"= {latest.bmi:.1f}"
        )

    if dashboard.weight_history:
        lines.append("\nWeight History (Past Week):")
        for entry in dashboard.weight_history:
            lines.append(f"  {entry.recorded_at:%b %d}  {entry.weight:.1f} {entry.unit}")

    if dashboard.bmi_history:
        lines.append("\nBMI Trend (Past Month):")
        for record in dashboard.bmi_history:
            lines.append(f"  {record.calculated_at:%b %d}  {record.bmi:.1f}  {record.category}")

    lines.append("\nBMI Categories:")
    for category, label in CATEGORY_RANGES:
        lines.append(f"  {category.value:<12} {label}")

    return "\n".join(lines)
