"""Storage for user profiles, weight history and BMI records.

Timestamps are stored as ISO-8601 strings so that range filters and ordering
work on the text columns directly.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from bmi_tracker.config import BMI_HISTORY_DAYS, WEIGHT_HISTORY_DAYS
from bmi_tracker.db import DB_PATH, get_connection
from bmi_tracker.models import BMIRecord, UserProfile, WeightEntry

logger = logging.getLogger(__name__)


def _text(value) -> str:
    # Enum members are stored by value
    return getattr(value, "value", value)


def _parse_ts(value) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromisoformat(value)


def _row_to_profile(row) -> UserProfile:
    return UserProfile(
        id=row["id"],
        user_id=row["user_id"],
        weight=row["weight"],
        height=row["height"],
        gender=row["gender"],
        weight_unit=row["weight_unit"],
        height_unit=row["height_unit"],
        created_at=_parse_ts(row["created_at"]),
        updated_at=_parse_ts(row["updated_at"]),
    )


def _row_to_weight_entry(row) -> WeightEntry:
    return WeightEntry(
        id=row["id"],
        user_id=row["user_id"],
        weight=row["weight"],
        unit=row["unit"],
        recorded_at=_parse_ts(row["recorded_at"]),
    )


def _row_to_bmi_record(row) -> BMIRecord:
    return BMIRecord(
        id=row["id"],
        user_id=row["user_id"],
        bmi=row["bmi"],
        category=row["category"],
        calculated_at=_parse_ts(row["calculated_at"]),
    )


def _upsert_profile(conn, profile: UserProfile) -> int:
    now = datetime.now()
    profile.updated_at = now
    if profile.created_at is None:
        profile.created_at = now

    conn.execute(
        """INSERT INTO user_profiles
               (user_id, weight, height, gender, weight_unit, height_unit,
                created_at, updated_at)
           VALUES (?, ?, ?, ?, ?, ?, ?, ?)
           ON CONFLICT(user_id) DO UPDATE SET
               weight=excluded.weight, height=excluded.height,
               gender=excluded.gender, weight_unit=excluded.weight_unit,
               height_unit=excluded.height_unit, updated_at=excluded.updated_at""",
        (profile.user_id, profile.weight, profile.height, _text(profile.gender),
         _text(profile.weight_unit), _text(profile.height_unit),
         profile.created_at.isoformat(), profile.updated_at.isoformat()),
    )
    row = conn.execute(
        "SELECT id FROM user_profiles WHERE user_id = ?", (profile.user_id,)
    ).fetchone()
    profile.id = row["id"]
    return profile.id


def _insert_weight_entry(conn, entry: WeightEntry) -> int:
    cursor = conn.execute(
        """INSERT INTO weight_history (user_id, weight, unit, recorded_at)
           VALUES (?, ?, ?, ?)""",
        (entry.user_id, entry.weight, _text(entry.unit), entry.recorded_at.isoformat()),
    )
    entry.id = cursor.lastrowid
    return entry.id


def _insert_bmi_record(conn, record: BMIRecord) -> int:
    cursor = conn.execute(
        """INSERT INTO bmi_records (user_id, bmi, category, calculated_at)
           VALUES (?, ?, ?, ?)""",
        (record.user_id, record.bmi, _text(record.category), record.calculated_at.isoformat()),
    )
    record.id = cursor.lastrowid
    return record.id


# --- User profiles ---

def fetch_user_profile(user_id: str, db_path: str = DB_PATH) -> Optional[UserProfile]:
    """Load the profile for a user, or None if they have not saved one."""
    with get_connection(db_path) as conn:
        row = conn.execute(
            "SELECT * FROM user_profiles WHERE user_id = ?", (user_id,)
        ).fetchone()
        if not row:
            return None
        return _row_to_profile(row)


def save_user_profile(profile: UserProfile, db_path: str = DB_PATH) -> int:
    """Create or replace a user's profile. Returns the row ID.

    ``updated_at`` is always refreshed; ``created_at`` is kept on update.
    """
    with get_connection(db_path) as conn:
        profile_id = _upsert_profile(conn, profile)
    logger.info("Saved profile for user %s", profile.user_id)
    return profile_id


def update_profile(
    user_id: str,
    weight: Optional[float] = None,
    height: Optional[float] = None,
    gender: Optional[str] = None,
    db_path: str = DB_PATH,
) -> bool:
    """Update only the supplied profile fields. Returns False if no profile exists."""
    updates = {"weight": weight, "height": height, "gender": gender}
    assignments = [(col, _text(val)) for col, val in updates.items() if val is not None]
    assignments.append(("updated_at", datetime.now().isoformat()))

    set_clause = ", ".join(f"{col}=?" for col, _ in assignments)
    params = [val for _, val in assignments] + [user_id]

    with get_connection(db_path) as conn:
        cursor = conn.execute(
            f"UPDATE user_profiles SET {set_clause} WHERE user_id=?", params
        )
        updated = cursor.rowcount > 0
    if not updated:
        logger.warning("No profile to update for user %s", user_id)
    return updated


# --- Weight history ---

def add_weight_entry(entry: WeightEntry, db_path: str = DB_PATH) -> int:
    """Record a weight measurement. Returns the entry ID."""
    with get_connection(db_path) as conn:
        return _insert_weight_entry(conn, entry)


def fetch_weight_history(
    user_id: str,
    days: int = WEIGHT_HISTORY_DAYS,
    now: Optional[datetime] = None,
    db_path: str = DB_PATH,
) -> list:
    """Weight entries from the past ``days`` days, oldest first."""
    start = (now or datetime.now()) - timedelta(days=days)
    with get_connection(db_path) as conn:
        rows = conn.execute(
            """SELECT * FROM weight_history
               WHERE user_id = ? AND recorded_at >= ?
               ORDER BY recorded_at""",
            (user_id, start.isoformat()),
        ).fetchall()
        return [_row_to_weight_entry(row) for row in rows]


# --- BMI records ---

def save_bmi_record(record: BMIRecord, db_path: str = DB_PATH) -> int:
    """Store a computed BMI. Returns the record ID."""
    with get_connection(db_path) as conn:
        return _insert_bmi_record(conn, record)


def record_details(
    profile: UserProfile,
    record: BMIRecord,
    entry: WeightEntry,
    db_path: str = DB_PATH,
) -> None:
    """Save a profile with its new BMI record and weight entry.

    All three writes share one transaction: if any of them fails, none is kept.
    """
    with get_connection(db_path) as conn:
        _upsert_profile(conn, profile)
        _insert_bmi_record(conn, record)
        _insert_weight_entry(conn, entry)
    logger.info("Saved profile and new readings for user %s", profile.user_id)


def fetch_bmi_history(
    user_id: str,
    days: int = BMI_HISTORY_DAYS,
    now: Optional[datetime] = None,
    db_path: str = DB_PATH,
) -> list:
    """BMI records from the past ``days`` days, oldest first."""
    start = (now or datetime.now()) - timedelta(days=days)
    with get_connection(db_path) as conn:
        rows = conn.execute(
            """SELECT * FROM bmi_records
               WHERE user_id = ? AND calculated_at >= ?
               ORDER BY calculated_at""",
            (user_id, start.isoformat()),
        ).fetchall()
        return [_row_to_bmi_record(row) for row in rows]


def fetch_latest_bmi(user_id: str, db_path: str = DB_PATH) -> Optional[BMIRecord]:
    """Most recent BMI record for a user, or None."""
    with get_connection(db_path) as conn:
        row = conn.execute(
            """SELECT * FROM bmi_records WHERE user_id = ?
               ORDER BY calculated_at DESC, id DESC LIMIT 1""",
            (user_id,),
        ).fetchone()
        if not row:
            return None
        return _row_to_bmi_record(row)
