"""Validation of raw form input.

Each check runs presence, then format, then range, and stops at the first
failure. Nothing here raises: an invalid value is reported through the
return value (a message string, a bool or a ``ValidationOutcome``).
"""

import re
from datetime import datetime
from typing import Optional

from bmi_tracker.config import HEIGHT_RANGES, PASSWORD_MIN_LENGTH, WEIGHT_RANGES
from bmi_tracker.models import ValidationOutcome

EMAIL_PATTERN = re.compile(r"[A-Z0-9a-z._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,64}")
NUMERIC_PATTERN = re.compile(r"[0-9]*\.?[0-9]*")

INVALID_NUMBER_MESSAGE = "Please enter a valid numeric value"
PASSWORD_MISMATCH_MESSAGE = "Passwords do not match"


# --- Email ---

def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def email_validation_message(email: str) -> Optional[str]:
    """Return the first problem with an email address, or None."""
    if not email:
        return "Email is required"
    if not is_valid_email(email):
        return "Please enter a valid email address"
    return None


# --- Password ---

def _has_letter(text: str) -> bool:
    return any(ch.isalpha() for ch in text)


def _has_digit(text: str) -> bool:
    return any(ch.isdecimal() for ch in text)


def is_valid_password(password: str) -> bool:
    """At least 8 characters with at least one letter and one number."""
    return (
        len(password) >= PASSWORD_MIN_LENGTH
        and _has_letter(password)
        and _has_digit(password)
    )


def password_validation_message(password: str) -> Optional[str]:
    """Return the first problem with a password, or None."""
    if not password:
        return "Password is required"
    if len(password) < PASSWORD_MIN_LENGTH:
        return f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
    if not _has_letter(password):
        return "Password must contain at least one letter"
    if not _has_digit(password):
        return "Password must contain at least one number"
    return None


def passwords_match(password: str, confirm_password: str) -> bool:
    """Both entries are equal. An empty password never matches."""
    return password == confirm_password and password != ""


# --- Numeric fields ---

def is_valid_numeric(text: str) -> bool:
    """Digits with at most one decimal point. No sign, no exponent."""
    return NUMERIC_PATTERN.fullmatch(text) is not None


def _fmt(value: float) -> str:
    return f"{value:g}"


def _validate_measurement(text: str, label: str, bounds: tuple, unit_label: str) -> ValidationOutcome:
    if not text:
        return ValidationOutcome.fail(f"{label} is required")
    if not is_valid_numeric(text):
        return ValidationOutcome.fail(INVALID_NUMBER_MESSAGE)
    try:
        value = float(text)
    except ValueError:
        # "." matches the numeric pattern but is not a number
        return ValidationOutcome.fail(f"Invalid {label.lower()} value")

    low, high = bounds
    if value < low or value > high:
        return ValidationOutcome.fail(
            f"{label} must be between {_fmt(low)} and {_fmt(high)} {unit_label}"
        )
    return ValidationOutcome.ok()


def is_valid_weight(weight: str, unit: str) -> ValidationOutcome:
    """Validate a weight entry. ``unit`` is "kg"; anything else means "lbs"."""
    if unit == "kg":
        return _validate_measurement(weight, "Weight", WEIGHT_RANGES["kg"], "kg")
    return _validate_measurement(weight, "Weight", WEIGHT_RANGES["lbs"], "lbs")


def is_valid_height(height: str, unit: str) -> ValidationOutcome:
    """Validate a height entry. ``unit`` is "cm"; anything else means "inches"."""
    if unit == "cm":
        return _validate_measurement(height, "Height", HEIGHT_RANGES["cm"], "cm")
    return _validate_measurement(height, "Height", HEIGHT_RANGES["inches"], "inches")


# --- General fields ---

def is_not_empty(text: str, field_name: str) -> ValidationOutcome:
    if not text.strip():
        return ValidationOutcome.fail(f"{field_name} is required")
    return ValidationOutcome.ok()


def is_valid_date(text: str, fmt: str = "%Y-%m-%d") -> bool:
    try:
        datetime.strptime(text, fmt)
    except ValueError:
        return False
    return True


# --- Form-level checks ---

def _from_message(message: Optional[str]) -> ValidationOutcome:
    if message is None:
        return ValidationOutcome.ok()
    return ValidationOutcome.fail(message)


def validate_login(email: str, password: str) -> ValidationOutcome:
    """Log-in form: a well-formed email and any non-empty password."""
    outcome = _from_message(email_validation_message(email))
    if not outcome.is_valid:
        return outcome
    if not password:
        return ValidationOutcome.fail("Password is required")
    return ValidationOutcome.ok()


def validate_password_change(new_password: str, confirm_password: str) -> ValidationOutcome:
    outcome = _from_message(password_validation_message(new_password))
    if not outcome.is_valid:
        return outcome
    if not passwords_match(new_password, confirm_password):
        return ValidationOutcome.fail(PASSWORD_MISMATCH_MESSAGE)
    return ValidationOutcome.ok()


def validate_sign_up(email: str, password: str, confirm_password: str) -> ValidationOutcome:
    outcome = _from_message(email_validation_message(email))
    if not outcome.is_valid:
        return outcome
    return validate_password_change(password, confirm_password)


def validate_reset_request(email: str) -> ValidationOutcome:
    return _from_message(email_validation_message(email))


def validate_details(weight: str, weight_unit: str, height: str, height_unit: str) -> ValidationOutcome:
    """Body details form: weight first, then height."""
    outcome = is_valid_weight(weight, weight_unit)
    if not outcome.is_valid:
        return outcome
    return is_valid_height(height, height_unit)
