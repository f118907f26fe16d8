"""Configuration loader for the device uploader."""

import logging
import os
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from runtime.defaults import (
    DEFAULT_CARELINK_ENABLED,
    DEFAULT_DEVICE_DRIVER_ID,
    DEFAULT_TIMEZONE_NAME,
)
from runtime.parsing import parse_bool

CARELINK_ENV_VAR = "UPLOADER_CARELINK"


def _parse_timezone(timezone_name):
    try:
        ZoneInfo(timezone_name)
        return timezone_name
    except (ZoneInfoNotFoundError, TypeError, ValueError):
        logging.warning(
            "Invalid time.timezone='%s'. Using default '%s'.",
            timezone_name,
            DEFAULT_TIMEZONE_NAME,
        )
        return DEFAULT_TIMEZONE_NAME


def _parse_driver_id(value, default, key_name):
    if value is None:
        return default
    driver_id = str(value).strip()
    if not driver_id:
        logging.warning("Invalid %s='%s'. Using default '%s'.", key_name, value, default)
        return default
    return driver_id


def _parse_carelink(uploads_cfg):
    enabled = parse_bool(uploads_cfg.get("carelink", DEFAULT_CARELINK_ENABLED), DEFAULT_CARELINK_ENABLED)
    env_value = os.environ.get(CARELINK_ENV_VAR)
    if env_value is not None:
        enabled = parse_bool(env_value, enabled)
    return enabled


def load_config(config_path="config.yaml"):
    """Load configuration from YAML and return validated runtime dict."""
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_file, "r", encoding="utf-8") as handle:
        yaml_config = yaml.safe_load(handle) or {}

    config = {}

    general = yaml_config.get("general", {}) or {}
    log_level_str = str(general.get("log_level", "INFO")).upper()
    config["LOG_LEVEL"] = getattr(logging, log_level_str, logging.INFO)

    time_cfg = yaml_config.get("time", {}) or {}
    config["TIMEZONE_NAME"] = _parse_timezone(time_cfg.get("timezone", DEFAULT_TIMEZONE_NAME))

    uploads_cfg = yaml_config.get("uploads", {}) or {}
    config["CARELINK"] = _parse_carelink(uploads_cfg)
    config["DEVICE_DRIVER_ID"] = _parse_driver_id(
        uploads_cfg.get("device_driver_id", DEFAULT_DEVICE_DRIVER_ID),
        DEFAULT_DEVICE_DRIVER_ID,
        "uploads.device_driver_id",
    )

    return config
