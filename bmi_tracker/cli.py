"""Command-line interface for the BMI tracking application."""

import argparse
import sys

from bmi_tracker.bmi_calculator import evaluate, format_result, ideal_weight_range
from bmi_tracker.config import (
    BMI_HISTORY_DAYS,
    DB_PATH,
    DEFAULT_USER_ID,
    REMOTE_API_KEY,
    REMOTE_URL,
    WEIGHT_HISTORY_DAYS,
)
from bmi_tracker.db import init_db
from bmi_tracker.exceptions import RemoteStoreError, ValidationFailed
from bmi_tracker.log import configure_logging
from bmi_tracker.models import Gender, HeightUnit, WeightUnit
from bmi_tracker.store import (
    fetch_bmi_history,
    fetch_user_profile,
    fetch_weight_history,
    update_profile,
)
from bmi_tracker.tracker import format_dashboard, load_dashboard, save_details
from bmi_tracker.units import convert_height, convert_weight, kilograms_to_pounds
from bmi_tracker.validators import (
    email_validation_message,
    is_valid_height,
    is_valid_weight,
    password_validation_message,
    validate_details,
    validate_password_change,
)

WEIGHT_UNITS = [u.value for u in WeightUnit]
HEIGHT_UNITS = [u.value for u in HeightUnit]
GENDERS = [g.value for g in Gender]
STORAGE_COMMANDS = ("details", "history", "dashboard", "sync")


def _fail(message: str) -> None:
    print(message)
    sys.exit(1)


# --- Command handlers ---

def cmd_details_set(args):
    try:
        result = save_details(
            args.user, args.weight, args.weight_unit,
            args.height, args.height_unit, args.gender,
            db_path=args.db,
        )
    except ValidationFailed as e:
        _fail(e.outcome.message)
    print("Profile saved successfully!")
    print()
    print(format_result(result, ideal_weight_range(float(args.height), args.height_unit)))


def cmd_details_show(args):
    profile = fetch_user_profile(args.user, args.db)
    if not profile:
        print("No details found. Enter them first:")
        print("  python -m bmi_tracker details set --weight 70 --height 175")
        sys.exit(1)
    print(f"User:     {profile.user_id}")
    other_weight = "lbs" if profile.weight_unit == "kg" else "kg"
    other_height = "inches" if profile.height_unit == "cm" else "cm"
    weight = convert_weight(profile.weight, profile.weight_unit, other_weight)
    height = convert_height(profile.height, profile.height_unit, other_height)
    print(f"Weight:   {profile.weight:g} {profile.weight_unit} ({weight:.1f} {other_weight})")
    print(f"Height:   {profile.height:g} {profile.height_unit} ({height:.1f} {other_height})")
    print(f"Gender:   {profile.gender}")
    if profile.updated_at:
        print(f"Updated:  {profile.updated_at:%Y-%m-%d %H:%M}")


def cmd_details_update(args):
    if not update_profile(args.user, gender=args.gender, db_path=args.db):
        _fail("No details found to update.")
    print("Profile updated.")


def cmd_bmi_calc(args):
    outcome = validate_details(args.weight, args.weight_unit, args.height, args.height_unit)
    if not outcome.is_valid:
        _fail(outcome.message)
    weight, height = float(args.weight), float(args.height)
    result = evaluate(weight, args.weight_unit, height, args.height_unit)
    print(format_result(result, ideal_weight_range(height, args.height_unit)))


def cmd_bmi_ideal(args):
    outcome = is_valid_height(args.height, args.height_unit)
    if not outcome.is_valid:
        _fail(outcome.message)
    ideal = ideal_weight_range(float(args.height), args.height_unit)
    print(f"Ideal weight: {ideal.min_kg:.1f} - {ideal.max_kg:.1f} kg "
          f"({kilograms_to_pounds(ideal.min_kg):.1f} - {kilograms_to_pounds(ideal.max_kg):.1f} lbs)")


def cmd_history_weight(args):
    entries = fetch_weight_history(args.user, args.days, db_path=args.db)
    if not entries:
        print(f"No weight entries in the past {args.days} days.")
        return
    for entry in entries:
        print(f"{entry.recorded_at:%Y-%m-%d %H:%M}  {entry.weight:>7.1f} {entry.unit}")


def cmd_history_bmi(args):
    records = fetch_bmi_history(args.user, args.days, db_path=args.db)
    if not records:
        print(f"No BMI records in the past {args.days} days.")
        return
    for record in records:
        print(f"{record.calculated_at:%Y-%m-%d %H:%M}  {record.bmi:>5.1f}  {record.category}")


def cmd_dashboard(args):
    print(format_dashboard(load_dashboard(args.user, db_path=args.db)))


def cmd_validate_email(args):
    message = email_validation_message(args.value)
    if message:
        _fail(message)
    print("Valid email address.")


def cmd_validate_password(args):
    if args.confirm is not None:
        outcome = validate_password_change(args.value, args.confirm)
        message = outcome.message
    else:
        message = password_validation_message(args.value)
    if message:
        _fail(message)
    print("Valid password.")


def cmd_validate_weight(args):
    outcome = is_valid_weight(args.value, args.unit)
    if not outcome.is_valid:
        _fail(outcome.message)
    print("Valid weight.")


def cmd_validate_height(args):
    outcome = is_valid_height(args.value, args.unit)
    if not outcome.is_valid:
        _fail(outcome.message)
    print("Valid height.")


def cmd_sync(args):
    # Imported here so the CLI works without the backend configured
    from bmi_tracker.remote import RemoteStore

    try:
        remote = RemoteStore(args.url or REMOTE_URL, args.key or REMOTE_API_KEY)
        counts = remote.push_local(args.user, args.days, db_path=args.db)
    except RemoteStoreError as e:
        _fail(f"Sync failed: {e}")
    for table, count in counts.items():
        print(f"  {table}: {count}")


# --- Argument parser ---

def _add_measurement_args(parser):
    parser.add_argument("--weight", required=True, help="Weight value")
    parser.add_argument("--weight-unit", choices=WEIGHT_UNITS, default="kg")
    parser.add_argument("--height", required=True, help="Height value")
    parser.add_argument("--height-unit", choices=HEIGHT_UNITS, default="cm")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bmi_tracker",
        description="BMI Tracker - body metrics and BMI trends",
    )
    parser.add_argument("--user", default=DEFAULT_USER_ID, help="User identifier")
    parser.add_argument("--db", default=DB_PATH, help="SQLite database path")
    parser.add_argument("--log-level", default=None, help="Logging level (e.g. INFO)")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- details ---
    details_parser = subparsers.add_parser("details", help="Manage body details")
    details_sub = details_parser.add_subparsers(dest="subcommand")

    set_p = details_sub.add_parser("set", help="Save weight, height and gender, and record BMI")
    _add_measurement_args(set_p)
    set_p.add_argument("--gender", choices=GENDERS, default="Male")
    set_p.set_defaults(func=cmd_details_set)

    show_p = details_sub.add_parser("show", help="Show saved details")
    show_p.set_defaults(func=cmd_details_show)

    update_p = details_sub.add_parser("update", help="Change gender without recording a new BMI")
    update_p.add_argument("--gender", choices=GENDERS, required=True)
    update_p.set_defaults(func=cmd_details_update)

    # --- bmi ---
    bmi_parser = subparsers.add_parser("bmi", help="Calculate without saving")
    bmi_sub = bmi_parser.add_subparsers(dest="subcommand")

    calc_p = bmi_sub.add_parser("calc", help="Calculate BMI and category")
    _add_measurement_args(calc_p)
    calc_p.set_defaults(func=cmd_bmi_calc)

    ideal_p = bmi_sub.add_parser("ideal", help="Ideal weight range for a height")
    ideal_p.add_argument("--height", required=True)
    ideal_p.add_argument("--height-unit", choices=HEIGHT_UNITS, default="cm")
    ideal_p.set_defaults(func=cmd_bmi_ideal)

    # --- history ---
    history_parser = subparsers.add_parser("history", help="Show recorded history")
    history_sub = history_parser.add_subparsers(dest="subcommand")

    weight_p = history_sub.add_parser("weight", help="Weight entries")
    weight_p.add_argument("--days", type=int, default=WEIGHT_HISTORY_DAYS)
    weight_p.set_defaults(func=cmd_history_weight)

    bmi_hp = history_sub.add_parser("bmi", help="BMI records")
    bmi_hp.add_argument("--days", type=int, default=BMI_HISTORY_DAYS)
    bmi_hp.set_defaults(func=cmd_history_bmi)

    # --- dashboard ---
    dash_p = subparsers.add_parser("dashboard", help="Latest BMI with recent trends")
    dash_p.set_defaults(func=cmd_dashboard)

    # --- validate ---
    validate_parser = subparsers.add_parser("validate", help="Check a form value")
    validate_sub = validate_parser.add_subparsers(dest="subcommand")

    email_p = validate_sub.add_parser("email")
    email_p.add_argument("value")
    email_p.set_defaults(func=cmd_validate_email)

    password_p = validate_sub.add_parser("password")
    password_p.add_argument("value")
    password_p.add_argument("--confirm", help="Confirmation entry to compare against")
    password_p.set_defaults(func=cmd_validate_password)

    vweight_p = validate_sub.add_parser("weight")
    vweight_p.add_argument("value")
    vweight_p.add_argument("--unit", choices=WEIGHT_UNITS, default="kg")
    vweight_p.set_defaults(func=cmd_validate_weight)

    vheight_p = validate_sub.add_parser("height")
    vheight_p.add_argument("value")
    vheight_p.add_argument("--unit", choices=HEIGHT_UNITS, default="cm")
    vheight_p.set_defaults(func=cmd_validate_height)

    # --- sync ---
    sync_p = subparsers.add_parser("sync", help="Push local data to the hosted backend")
    sync_p.add_argument("--url", help="Backend base URL (default: BMI_TRACKER_REMOTE_URL)")
    sync_p.add_argument("--key", help="Backend API key (default: BMI_TRACKER_REMOTE_KEY)")
    sync_p.add_argument("--days", type=int, default=BMI_HISTORY_DAYS)
    sync_p.set_defaults(func=cmd_sync)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if not args.command:
        parser.print_help()
        return

    if args.command in STORAGE_COMMANDS:
        init_db(args.db)
    if hasattr(args, "func"):
        args.func(args)
    elif args.command in ("details", "bmi", "history", "validate"):
        # Subcommand not specified
        sub = parser._subparsers._group_actions[0].choices[args.command]
        sub.print_help()
    else:
        parser.print_help()
