"""Shared runtime defaults for the upload screen.

Keep this module free of heavy imports so the UI helpers and the config loader
can both read these constants.
"""

DEFAULT_TIMEZONE_NAME = "Europe/Madrid"

DEFAULT_DEVICE_DRIVER_ID = "DexcomG4"

DEFAULT_CARELINK_ENABLED = False

DEFAULT_PAGE = "loading"


def default_app_state(uploads=None):
    """Return a fresh application state with nobody logged in."""
    return {
        "page": DEFAULT_PAGE,
        "user": None,
        "targetId": None,
        "uploads": list(uploads or []),
    }
