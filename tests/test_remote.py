"""Tests for the hosted backend client."""

import json
import os
import tempfile
import unittest
from datetime import datetime, timezone
from unittest import mock

import requests

from bmi_tracker.db import init_db
from bmi_tracker.exceptions import RemoteStoreError
from bmi_tracker.models import BMIRecord, UserProfile, WeightEntry
from bmi_tracker.remote import RemoteStore
from bmi_tracker.tracker import save_details

BASE_URL = "https://project.example.co"


def _response(rows=None):
    response = mock.Mock()
    response.content = json.dumps(rows).encode() if rows is not None else b""
    response.json.return_value = rows
    response.raise_for_status.return_value = None
    return response


class RemoteTestCase(unittest.TestCase):
    def setUp(self):
        self.session = mock.MagicMock()
        self.session.headers = {}
        self.session.request.return_value = _response([])
        self.remote = RemoteStore(BASE_URL + "/", "secret", session=self.session, timeout=5)

    def last_call(self):
        args, kwargs = self.session.request.call_args
        return args[0], args[1], kwargs


class TestRemoteStore(RemoteTestCase):
    def test_requires_url(self):
        with self.assertRaises(RemoteStoreError):
            RemoteStore("", "secret", session=self.session)

    def test_auth_headers(self):
        self.assertEqual(self.session.headers["apikey"], "secret")
        self.assertEqual(self.session.headers["Authorization"], "Bearer secret")

    def test_fetch_user_profile(self):
        self.session.request.return_value = _response([{
            "id": "3f1c", "user_id": "u1", "weight": 154.0, "height": 69.0,
            "gender": "Female", "weight_unit": "lbs", "height_unit": "inches",
            "created_at": "2026-02-01T08:00:00Z", "updated_at": "2026-02-05T08:00:00Z",
        }])
        profile = self.remote.fetch_user_profile("u1")

        method, url, kwargs = self.last_call()
        self.assertEqual(method, "GET")
        self.assertEqual(url, BASE_URL + "/rest/v1/user_profiles")
        self.assertEqual(kwargs["params"]["user_id"], "eq.u1")
        self.assertEqual(kwargs["timeout"], 5)

        self.assertEqual(profile.weight_unit, "lbs")
        self.assertEqual(profile.created_at, datetime(2026, 2, 1, 8, 0, tzinfo=timezone.utc))

    def test_fetch_missing_profile(self):
        self.assertIsNone(self.remote.fetch_user_profile("nobody"))

    def test_save_user_profile_upserts(self):
        self.remote.save_user_profile(UserProfile("u1", 70, 175, "Male"))
        method, url, kwargs = self.last_call()
        self.assertEqual(method, "POST")
        self.assertEqual(kwargs["params"], {"on_conflict": "user_id"})
        self.assertIn("resolution=merge-duplicates", kwargs["headers"]["Prefer"])
        self.assertEqual(kwargs["json"]["weight_unit"], "kg")

    def test_update_profile_sends_only_supplied_fields(self):
        self.remote.update_profile("u1", gender="Other")
        method, _, kwargs = self.last_call()
        self.assertEqual(method, "PATCH")
        self.assertEqual(set(kwargs["json"]), {"gender", "updated_at"})

    def test_history_queries(self):
        self.session.request.return_value = _response([
            {"user_id": "u1", "weight": 70.5, "unit": "kg", "recorded_at": "2026-02-05T08:00:00"},
        ])
        entries = self.remote.fetch_weight_history("u1", 7, now=datetime(2026, 2, 10, 12, 0))
        _, url, kwargs = self.last_call()
        self.assertTrue(url.endswith("/weight_history"))
        self.assertEqual(kwargs["params"]["recorded_at"], "gte.2026-02-03T12:00:00")
        self.assertEqual(kwargs["params"]["order"], "recorded_at.asc")
        self.assertEqual(entries[0].weight, 70.5)

    def test_latest_bmi(self):
        self.session.request.return_value = _response([
            {"user_id": "u1", "bmi": 22.9, "category": "Normal", "calculated_at": "2026-02-09T08:00:00"},
        ])
        latest = self.remote.fetch_latest_bmi("u1")
        _, _, kwargs = self.last_call()
        self.assertEqual(kwargs["params"]["order"], "calculated_at.desc")
        self.assertEqual(latest.category, "Normal")

    def test_inserts(self):
        self.remote.add_weight_entry(WeightEntry("u1", 70, "kg", datetime(2026, 2, 9, 8, 0)))
        _, url, kwargs = self.last_call()
        self.assertTrue(url.endswith("/weight_history"))
        self.assertEqual(kwargs["json"]["recorded_at"], "2026-02-09T08:00:00")

        self.remote.save_bmi_record(BMIRecord("u1", 22.9, "Normal", datetime(2026, 2, 9, 8, 0)))
        _, url, kwargs = self.last_call()
        self.assertTrue(url.endswith("/bmi_records"))
        self.assertEqual(kwargs["json"]["category"], "Normal")

    def test_network_error_is_wrapped(self):
        self.session.request.side_effect = requests.ConnectionError("connection refused")
        with self.assertRaises(RemoteStoreError):
            self.remote.fetch_latest_bmi("u1")

    def test_http_error_is_wrapped(self):
        response = _response([])
        response.raise_for_status.side_effect = requests.HTTPError("401 Unauthorized")
        self.session.request.return_value = response
        with self.assertRaises(RemoteStoreError):
            self.remote.fetch_user_profile("u1")


class TestPushLocal(RemoteTestCase):
    def setUp(self):
        super().setUp()
        self.db_fd, self.db_path = tempfile.mkstemp(suffix=".db")
        init_db(self.db_path)

    def tearDown(self):
        os.close(self.db_fd)
        os.unlink(self.db_path)

    def test_push_nothing(self):
        counts = self.remote.push_local("u1", db_path=self.db_path)
        self.assertEqual(sum(counts.values()), 0)
        self.session.request.assert_not_called()

    def test_push_profile_and_history(self):
        now = datetime(2026, 2, 10, 12, 0)
        save_details("u1", "70", "kg", "175", "cm", "Male",
                     now=datetime(2026, 2, 8, 8, 0), db_path=self.db_path)
        save_details("u1", "69", "kg", "175", "cm", "Male",
                     now=datetime(2026, 2, 9, 8, 0), db_path=self.db_path)

        counts = self.remote.push_local("u1", days=30, now=now, db_path=self.db_path)
        self.assertEqual(counts, {"user_profiles": 1, "weight_history": 2, "bmi_records": 2})
        self.assertEqual(self.session.request.call_count, 3)

        _, url, kwargs = self.last_call()
        self.assertTrue(url.endswith("/bmi_records"))
        self.assertEqual(len(kwargs["json"]), 2)
        self.assertNotIn("id", kwargs["json"][0])


if __name__ == "__main__":
    unittest.main()
