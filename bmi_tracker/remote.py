"""Client for the hosted backend's row-level REST table API.

The backend exposes ``user_profiles``, ``weight_history`` and ``bmi_records``
as PostgREST tables under ``<base_url>/rest/v1``. Rows use snake_case keys
and ISO-8601 timestamps, matching the local SQLite schema.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

import requests

from bmi_tracker.config import (
    BMI_HISTORY_DAYS,
    REMOTE_API_KEY,
    REMOTE_TIMEOUT_SECONDS,
    REMOTE_URL,
    WEIGHT_HISTORY_DAYS,
)
from bmi_tracker.db import DB_PATH
from bmi_tracker.exceptions import RemoteStoreError
from bmi_tracker.models import BMIRecord, UserProfile, WeightEntry
from bmi_tracker import store

logger = logging.getLogger(__name__)

PROFILES_TABLE = "user_profiles"
WEIGHT_TABLE = "weight_history"
BMI_TABLE = "bmi_records"


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _parse_ts(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    # PostgREST returns a trailing "Z" for UTC timestamps
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _profile_to_row(profile: UserProfile) -> dict:
    return {
        "user_id": profile.user_id,
        "weight": profile.weight,
        "height": profile.height,
        "gender": getattr(profile.gender, "value", profile.gender),
        "weight_unit": getattr(profile.weight_unit, "value", profile.weight_unit),
        "height_unit": getattr(profile.height_unit, "value", profile.height_unit),
        "created_at": _iso(profile.created_at),
        "updated_at": _iso(profile.updated_at or datetime.now()),
    }


def _row_to_profile(row: dict) -> UserProfile:
    return UserProfile(
        user_id=row["user_id"],
        weight=row["weight"],
        height=row["height"],
        gender=row["gender"],
        weight_unit=row.get("weight_unit", "kg"),
        height_unit=row.get("height_unit", "cm"),
        created_at=_parse_ts(row.get("created_at")),
        updated_at=_parse_ts(row.get("updated_at")),
    )


def _weight_entry_to_row(entry: WeightEntry) -> dict:
    return {
        "user_id": entry.user_id,
        "weight": entry.weight,
        "unit": getattr(entry.unit, "value", entry.unit),
        "recorded_at": _iso(entry.recorded_at),
    }


def _row_to_weight_entry(row: dict) -> WeightEntry:
    return WeightEntry(
        user_id=row["user_id"],
        weight=row["weight"],
        unit=row["unit"],
        recorded_at=_parse_ts(row["recorded_at"]),
    )


def _bmi_record_to_row(record: BMIRecord) -> dict:
    return {
        "user_id": record.user_id,
        "bmi": record.bmi,
        "category": getattr(record.category, "value", record.category),
        "calculated_at": _iso(record.calculated_at),
    }


def _row_to_bmi_record(row: dict) -> BMIRecord:
    return BMIRecord(
        user_id=row["user_id"],
        bmi=row["bmi"],
        category=row["category"],
        calculated_at=_parse_ts(row["calculated_at"]),
    )


class RemoteStore:
    """Profile and history storage on the hosted backend.

    Method names mirror ``bmi_tracker.store`` so either can back the
    tracking workflow.
    """

    def __init__(
        self,
        base_url: str = REMOTE_URL,
        api_key: str = REMOTE_API_KEY,
        session: Optional[requests.Session] = None,
        timeout: float = REMOTE_TIMEOUT_SECONDS,
    ):
        if not base_url:
            raise RemoteStoreError("No backend URL configured (set BMI_TRACKER_REMOTE_URL)")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        })

    def _url(self, table: str) -> str:
        return f"{self.base_url}/rest/v1/{table}"

    def _request(self, method: str, table: str, params=None, json=None, headers=None):
        try:
            response = self.session.request(
                method,
                self._url(table),
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, table, e)
            raise RemoteStoreError(f"Backend request to {table} failed") from e

        if not response.content:
            return []
        return response.json()

    # --- User profiles ---

    def fetch_user_profile(self, user_id: str) -> Optional[UserProfile]:
        rows = self._request("GET", PROFILES_TABLE, params={
            "select": "*",
            "user_id": f"eq.{user_id}",
            "limit": 1,
        })
        return _row_to_profile(rows[0]) if rows else None

    def save_user_profile(self, profile: UserProfile) -> None:
        """Insert the profile, or merge into the existing row for this user."""
        profile.updated_at = datetime.now()
        self._request(
            "POST", PROFILES_TABLE,
            params={"on_conflict": "user_id"},
            json=_profile_to_row(profile),
            headers={"Prefer": "resolution=merge-duplicates,return=minimal"},
        )

    def update_profile(
        self,
        user_id: str,
        weight: Optional[float] = None,
        height: Optional[float] = None,
        gender: Optional[str] = None,
    ) -> None:
        update = {
            key: getattr(value, "value", value)
            for key, value in (("weight", weight), ("height", height), ("gender", gender))
            if value is not None
        }
        update["updated_at"] = datetime.now().isoformat()
        self._request(
            "PATCH", PROFILES_TABLE,
            params={"user_id": f"eq.{user_id}"},
            json=update,
            headers={"Prefer": "return=minimal"},
        )

    # --- History ---

    def add_weight_entry(self, entry: WeightEntry) -> None:
        self._request("POST", WEIGHT_TABLE, json=_weight_entry_to_row(entry),
                      headers={"Prefer": "return=minimal"})

    def fetch_weight_history(
        self, user_id: str, days: int = WEIGHT_HISTORY_DAYS, now: Optional[datetime] = None,
    ) -> list:
        start = (now or datetime.now()) - timedelta(days=days)
        rows = self._request("GET", WEIGHT_TABLE, params={
            "select": "*",
            "user_id": f"eq.{user_id}",
            "recorded_at": f"gte.{start.isoformat()}",
            "order": "recorded_at.asc",
        })
        return [_row_to_weight_entry(row) for row in rows]

    def save_bmi_record(self, record: BMIRecord) -> None:
        self._request("POST", BMI_TABLE, json=_bmi_record_to_row(record),
                      headers={"Prefer": "return=minimal"})

    def fetch_bmi_history(
        self, user_id: str, days: int = BMI_HISTORY_DAYS, now: Optional[datetime] = None,
    ) -> list:
        start = (now or datetime.now()) - timedelta(days=days)
        rows = self._request("GET", BMI_TABLE, params={
            "select": "*",
            "user_id": f"eq.{user_id}",
            "calculated_at": f"gte.{start.isoformat()}",
            "order": "calculated_at.asc",
        })
        return [_row_to_bmi_record(row) for row in rows]

    def fetch_latest_bmi(self, user_id: str) -> Optional[BMIRecord]:
        rows = self._request("GET", BMI_TABLE, params={
            "select": "*",
            "user_id": f"eq.{user_id}",
            "order": "calculated_at.desc",
            "limit": 1,
        })
        return _row_to_bmi_record(rows[0]) if rows else None

    # --- Sync ---

    def push_local(
        self,
        user_id: str,
        days: int = BMI_HISTORY_DAYS,
        now: Optional[datetime] = None,
        db_path: str = DB_PATH,
    ) -> dict:
        """Upload the local profile and the last ``days`` of history.

        History rows are inserted as-is, so pushing the same window twice
        duplicates them on the backend. Returns counts per table.
        """
        counts = {PROFILES_TABLE: 0, WEIGHT_TABLE: 0, BMI_TABLE: 0}

        profile = store.fetch_user_profile(user_id, db_path)
        if profile is not None:
            self.save_user_profile(profile)
            counts[PROFILES_TABLE] = 1

        weights = store.fetch_weight_history(user_id, days, now, db_path)
        if weights:
            self._request("POST", WEIGHT_TABLE,
                          json=[_weight_entry_to_row(e) for e in weights],
                          headers={"Prefer": "return=minimal"})
            counts[WEIGHT_TABLE] = len(weights)

        records = store.fetch_bmi_history(user_id, days, now, db_path)
        if records:
            self._request("POST", BMI_TABLE,
                          json=[_bmi_record_to_row(r) for r in records],
                          headers={"Prefer": "return=minimal"})
            counts[BMI_TABLE] = len(records)

        logger.info("Pushed %s for user %s", counts, user_id)
        return counts
