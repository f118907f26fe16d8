import logging
import os
import tempfile
import unittest
from unittest.mock import patch

import yaml

from config_loader import CARELINK_ENV_VAR, load_config


def _load_yaml(path):
    with open(path, "r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _write_temp_yaml(data):
    handle = tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False, encoding="utf-8")
    try:
        yaml.safe_dump(data, handle, sort_keys=False)
        return handle.name
    finally:
        handle.close()


def _load_payload(payload):
    path = _write_temp_yaml(payload)
    try:
        return load_config(path)
    finally:
        os.unlink(path)


class ConfigLoaderUploadsTests(unittest.TestCase):
    def setUp(self):
        patcher = patch.dict("os.environ", {}, clear=False)
        patcher.start()
        self.addCleanup(patcher.stop)
        os.environ.pop(CARELINK_ENV_VAR, None)

    def test_defaults_from_repo_config(self):
        config = load_config("config.yaml")
        self.assertEqual(config["LOG_LEVEL"], logging.INFO)
        self.assertEqual(config["TIMEZONE_NAME"], "Europe/Madrid")
        self.assertFalse(config["CARELINK"])
        self.assertEqual(config["DEVICE_DRIVER_ID"], "DexcomG4")

    def test_empty_file_uses_defaults(self):
        config = _load_payload({})
        self.assertEqual(config["LOG_LEVEL"], logging.INFO)
        self.assertFalse(config["CARELINK"])
        self.assertEqual(config["DEVICE_DRIVER_ID"], "DexcomG4")

    def test_carelink_enabled_from_yaml(self):
        payload = _load_yaml("config.yaml")
        payload["uploads"]["carelink"] = "yes"
        self.assertTrue(_load_payload(payload)["CARELINK"])

    def test_carelink_env_var_overrides_yaml(self):
        payload = _load_yaml("config.yaml")
        payload["uploads"]["carelink"] = False
        with patch.dict("os.environ", {CARELINK_ENV_VAR: "1"}):
            self.assertTrue(_load_payload(payload)["CARELINK"])

        payload["uploads"]["carelink"] = True
        with patch.dict("os.environ", {CARELINK_ENV_VAR: "off"}):
            self.assertFalse(_load_payload(payload)["CARELINK"])

    def test_blank_driver_id_falls_back_to_default(self):
        payload = _load_yaml("config.yaml")
        payload["uploads"]["device_driver_id"] = "   "
        with self.assertLogs(level="WARNING"):
            config = _load_payload(payload)
        self.assertEqual(config["DEVICE_DRIVER_ID"], "DexcomG4")

    def test_custom_driver_id_and_log_level(self):
        payload = _load_yaml("config.yaml")
        payload["uploads"]["device_driver_id"] = " OmniPod "
        payload["general"]["log_level"] = "debug"
        config = _load_payload(payload)
        self.assertEqual(config["DEVICE_DRIVER_ID"], "OmniPod")
        self.assertEqual(config["LOG_LEVEL"], logging.DEBUG)

    def test_invalid_timezone_falls_back_to_default(self):
        payload = _load_yaml("config.yaml")
        payload["time"]["timezone"] = "Mars/Olympus_Mons"
        with self.assertLogs(level="WARNING"):
            config = _load_payload(payload)
        self.assertEqual(config["TIMEZONE_NAME"], "Europe/Madrid")

    def test_missing_file_raises(self):
        with self.assertRaises(FileNotFoundError):
            load_config("does-not-exist.yaml")


if __name__ == "__main__":
    unittest.main()
