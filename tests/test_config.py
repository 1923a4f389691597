"""Tests for config persistence and input sanitization.

Ensures malformed config data is safely normalized on load.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from tabrecency import config


class ConfigBehaviorTests(unittest.TestCase):
    def test_missing_config_yields_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            settings = config.load_settings(Path(tmp) / "missing.json")

        self.assertEqual(settings, config.Settings(debounce_ms=250, log_level="WARNING"))

    def test_settings_round_trip_through_default_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("tabrecency.config.CONFIG_PATH", config_path):
                config.save_config({"debounce_ms": 400, "log_level": "debug"})
                settings = config.load_settings()

            self.assertTrue(config_path.exists())
        self.assertEqual(settings.debounce_ms, 400)
        self.assertEqual(settings.log_level, "DEBUG")

    def test_malformed_json_falls_back_to_empty_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("{not json", encoding="utf-8")

            with self.assertLogs("tabrecency.config", level="WARNING"):
                loaded = config.load_config(config_path)

        self.assertEqual(loaded, {})

    def test_non_object_json_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("[1, 2]\n", encoding="utf-8")

            self.assertEqual(config.load_config(config_path), {})

    def test_invalid_values_are_dropped_individually(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            for raw_debounce, raw_level in ((-5, "LOUD"), (True, 3), (12.5, None), ("100", "info")):
                with self.subTest(debounce=raw_debounce, level=raw_level):
                    config.save_config({"debounce_ms": raw_debounce, "log_level": raw_level}, config_path)
                    settings = config.load_settings(config_path)
                    self.assertEqual(settings.debounce_ms, 250)
                    expected_level = "INFO" if raw_level == "info" else "WARNING"
                    self.assertEqual(settings.log_level, expected_level)

    def test_zero_debounce_is_allowed(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config.save_config({"debounce_ms": 0}, config_path)

            self.assertEqual(config.load_settings(config_path).debounce_ms, 0)

    def test_save_config_logs_and_ignores_write_errors(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "file"
            blocker.write_text("", encoding="utf-8")

            with self.assertLogs("tabrecency.config", level="WARNING"):
                config.save_config({"debounce_ms": 1}, blocker / "config.json")


if __name__ == "__main__":
    unittest.main()
