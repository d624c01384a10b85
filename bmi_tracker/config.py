"""Application configuration and constants."""

import os

# Database
DB_DIR = os.path.join(os.path.expanduser("~"), ".bmi_tracker")
DB_PATH = os.environ.get("BMI_TRACKER_DB", os.path.join(DB_DIR, "bmi_tracker.db"))

# Active user for the CLI and Streamlit front-end (auth happens upstream)
DEFAULT_USER_ID = os.environ.get("BMI_TRACKER_USER", "local")

LOG_LEVEL = os.environ.get("BMI_TRACKER_LOG_LEVEL", "WARNING")

# Hosted backend (PostgREST-style table API)
REMOTE_URL = os.environ.get("BMI_TRACKER_REMOTE_URL", "")
REMOTE_API_KEY = os.environ.get("BMI_TRACKER_REMOTE_KEY", "")
REMOTE_TIMEOUT_SECONDS = float(os.environ.get("BMI_TRACKER_REMOTE_TIMEOUT", "10"))

# Unit conversion factors
KG_PER_LB = 0.453592
CM_PER_INCH = 2.54
CM_PER_METER = 100.0

# BMI category lower bounds (inclusive)
NORMAL_MIN_BMI = 18.5
OVERWEIGHT_MIN_BMI = 25.0
OBESE_MIN_BMI = 30.0

# BMI bounds used for the ideal weight range
IDEAL_BMI_MIN = 18.5
IDEAL_BMI_MAX = 24.9

# Accepted input ranges per unit: (min, max), both inclusive
WEIGHT_RANGES = {
    "kg": (1.0, 500.0),
    "lbs": (2.2, 1100.0),
}
HEIGHT_RANGES = {
    "cm": (50.0, 250.0),
    "inches": (20.0, 100.0),
}

PASSWORD_MIN_LENGTH = 8

# Dashboard history windows
WEIGHT_HISTORY_DAYS = 7
BMI_HISTORY_DAYS = 30
