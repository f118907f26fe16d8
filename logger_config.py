"""
Logger configuration module for the device uploader.

Records go to the console and to one log file per day under logs/, with the
day taken in the configured timezone.
"""

import logging
import os
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from runtime.paths import get_logs_dir

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class DateRoutedFileHandler(logging.Handler):
    """File handler that appends each record to <logs_dir>/YYYY-MM-DD_uploader.log."""

    def __init__(self, logs_dir, timezone_name, *, encoding="utf-8"):
        super().__init__()
        self.logs_dir = logs_dir
        self.encoding = encoding
        try:
            self.timezone = ZoneInfo(timezone_name)
        except (TypeError, ValueError, ZoneInfoNotFoundError):
            self.timezone = datetime.now().astimezone().tzinfo

        self.current_path = None
        self._stream = None

    def path_for(self, record):
        day = datetime.fromtimestamp(record.created, tz=self.timezone).strftime("%Y-%m-%d")
        return os.path.join(self.logs_dir, f"{day}_uploader.log")

    def _switch_to(self, path):
        if path == self.current_path and self._stream is not None:
            return
        self._close_stream()
        self._stream = open(path, "a", encoding=self.encoding)
        self.current_path = path

    def _close_stream(self):
        if self._stream is not None:
            try:
                self._stream.close()
            finally:
                self._stream = None

    def emit(self, record):
        try:
            self._switch_to(self.path_for(record))
            self._stream.write(self.format(record) + "\n")
            self._stream.flush()
        except Exception:
            self.handleError(record)

    def close(self):
        try:
            self._close_stream()
        finally:
            super().close()


def setup_logging(config, logs_dir=None):
    """
    Set up console and per-day file logging on the root logger.

    Args:
        config: Configuration dictionary with LOG_LEVEL and TIMEZONE_NAME
        logs_dir: Directory for the daily log files, defaults to <repo>/logs

    Returns:
        logging.Logger: The configured root logger
    """
    log_level = config.get("LOG_LEVEL", logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if logs_dir is None:
        logs_dir = get_logs_dir(__file__)
    os.makedirs(logs_dir, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    for handler in (
        logging.StreamHandler(),
        DateRoutedFileHandler(logs_dir, config.get("TIMEZONE_NAME"), encoding="utf-8"),
    ):
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    return root_logger
