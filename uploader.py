import logging
import sys

from config_loader import load_config
from logger_config import setup_logging
from runtime.paths import get_config_path
from runtime.shared_state import build_app_state_holder, snapshot_state
from ui.upload_state import upload_screen_summary, uploads_with_flags

FLAG_NAMES = (
    "disabled",
    "disconnected",
    "carelink",
    "uploading",
    "fetchingCarelinkData",
    "completed",
    "successful",
    "failed",
)


def _describe_upload(upload):
    source = upload.get("source") or {}
    label = source.get("driverId") or source.get("type") or "unknown"
    flags = [name for name in FLAG_NAMES if upload.get(name)]
    return f"{label} [{', '.join(flags) or 'idle'}]"


def log_upload_screen(state):
    """Log what the upload screen would render for the given state."""
    summary = upload_screen_summary(state)
    logging.info(
        "Upload screen: logged_in=%s uploads=%d devices=%d current=%d",
        summary["logged_in"],
        summary["upload_count"],
        summary["device_count"],
        summary["current_upload_index"],
    )
    for index, upload in enumerate(uploads_with_flags(state)):
        logging.info("Upload %d: %s", index, _describe_upload(upload))
        if upload.get("failed"):
            logging.warning("Upload %d failed: %s", index, upload.get("error"))
    return summary


def main(argv=None):
    """Director: load config, build the state holder and report the initial upload screen."""
    argv = sys.argv[1:] if argv is None else argv
    config_path = argv[0] if argv else get_config_path(__file__)

    config = load_config(config_path)
    holder = build_app_state_holder(config)
    setup_logging(config)
    logging.info("Uploader starting with config '%s'.", config_path)

    try:
        log_upload_screen(snapshot_state(holder))
    except Exception as exc:
        logging.error("An unexpected error occurred while deriving the upload screen: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
