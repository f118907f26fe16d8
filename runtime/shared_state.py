"""Host-side holder for the application state and its lock-based access helpers."""

import copy
import threading

from ui.upload_state import get_initial_state


def build_app_state_holder(config):
    """Create the host container the upload screen reads its state from."""
    return {
        "state": get_initial_state(config),
        "lock": threading.Lock(),
    }


def snapshot_state(holder):
    """Return a deep copy of the application state taken under lock."""
    with holder["lock"]:
        return copy.deepcopy(holder["state"])


def update_state(holder, **updates):
    """Apply a shallow setState-style update under lock."""
    with holder["lock"]:
        holder["state"].update(updates)
