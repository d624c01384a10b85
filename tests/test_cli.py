"""Tests for the command-line interface."""

import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from bmi_tracker.cli import main


class TestCLI(unittest.TestCase):
    def setUp(self):
        self.db_fd, self.db_path = tempfile.mkstemp(suffix=".db")

    def tearDown(self):
        os.close(self.db_fd)
        os.unlink(self.db_path)

    def run_cli(self, *argv):
        out = io.StringIO()
        code = 0
        with redirect_stdout(out):
            try:
                main(["--db", self.db_path, "--user", "u1", *argv])
            except SystemExit as e:
                code = e.code
        return code, out.getvalue()

    def test_bmi_calc(self):
        code, out = self.run_cli("bmi", "calc", "--weight", "70", "--height", "175")
        self.assertEqual(code, 0)
        self.assertIn("BMI:      22.9", out)
        self.assertIn("Normal", out)

    def test_bmi_calc_rejects_out_of_range(self):
        code, out = self.run_cli("bmi", "calc", "--weight", "600", "--height", "175")
        self.assertEqual(code, 1)
        self.assertIn("Weight must be between 1 and 500 kg", out)

    def test_bmi_ideal(self):
        code, out = self.run_cli("bmi", "ideal", "--height", "180")
        self.assertEqual(code, 0)
        self.assertIn("59.9 - 80.7 kg", out)

    def test_validate_email(self):
        code, out = self.run_cli("validate", "email", "bad@")
        self.assertEqual(code, 1)
        self.assertIn("Please enter a valid email address", out)

        code, _ = self.run_cli("validate", "email", "a@b.com")
        self.assertEqual(code, 0)

    def test_validate_password_with_confirmation(self):
        code, out = self.run_cli("validate", "password", "abcd1234", "--confirm", "abcd9999")
        self.assertEqual(code, 1)
        self.assertIn("Passwords do not match", out)

    def test_details_then_dashboard(self):
        code, out = self.run_cli("details", "set", "--weight", "154", "--weight-unit", "lbs",
                                 "--height", "69", "--height-unit", "inches", "--gender", "Female")
        self.assertEqual(code, 0)
        self.assertIn("Profile saved successfully!", out)

        code, out = self.run_cli("details", "show")
        self.assertIn("154 lbs (69.9 kg)", out)
        self.assertIn("69 inches (175.3 cm)", out)

        code, out = self.run_cli("details", "update", "--gender", "Other")
        self.assertEqual(code, 0)

        code, out = self.run_cli("dashboard")
        self.assertIn("Your BMI: 22.7 (Normal)", out)

    def test_stateless_commands_do_not_create_database(self):
        with tempfile.TemporaryDirectory() as tmp:
            db_path = os.path.join(tmp, "data", "bmi.db")
            out = io.StringIO()
            with redirect_stdout(out):
                main(["--db", db_path, "validate", "weight", "70"])
                main(["--db", db_path, "bmi", "calc", "--weight", "70", "--height", "175"])
                main(["--db", db_path, "bmi", "ideal", "--height", "180"])
            self.assertIn("Valid weight.", out.getvalue())
            self.assertFalse(os.path.exists(os.path.join(tmp, "data")))

    def test_details_show_without_profile(self):
        code, out = self.run_cli("details", "show")
        self.assertEqual(code, 1)
        self.assertIn("No details found", out)


if __name__ == "__main__":
    unittest.main()
