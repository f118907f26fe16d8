"""Pure UI state helpers for the device upload screen."""

from collections.abc import Mapping

from runtime.defaults import DEFAULT_DEVICE_DRIVER_ID, default_app_state


def get_initial_state(config):
    config = dict(config or {})
    driver_id = config.get("DEVICE_DRIVER_ID") or DEFAULT_DEVICE_DRIVER_ID
    uploads = [{"source": {"type": "device", "driverId": driver_id}}]

    if config.get("CARELINK"):
        uploads.insert(0, {"source": {"type": "carelink"}})

    return default_app_state(uploads)


def is_logged_in(state):
    return bool(state.get("user"))


def _progress(upload):
    progress = upload.get("progress")
    return progress if isinstance(progress, Mapping) else None


def is_upload_in_progress(upload):
    progress = _progress(upload)
    return progress is not None and not progress.get("finish")


def _uploads(state):
    return state.get("uploads") or []


def current_upload_index(state):
    """
    Return the index of the upload in progress, or -1.

    Only one upload runs at a time, so the current upload is the first entry
    of the list that is in progress.
    """
    for index, upload in enumerate(_uploads(state)):
        if is_upload_in_progress(upload):
            return index
    return -1


def has_upload_in_progress(state):
    return current_upload_index(state) != -1


def device_count(state):
    return sum(
        1 for upload in _uploads(state) if (upload.get("source") or {}).get("type") == "device"
    )


def uploads_with_flags(state):
    """
    Return shallow copies of the uploads annotated with rendering flags.

    Flags that do not apply are left out of the entry rather than set to False.
    """
    current_index = current_upload_index(state)
    flagged = []
    for index, upload in enumerate(_uploads(state)):
        upload = dict(upload)
        source = upload.get("source") or {}
        source_type = source.get("type")

        if current_index != -1 and current_index != index:
            upload["disabled"] = True
        if source_type == "device" and source.get("connected") is False:
            upload["disconnected"] = True
            upload["disabled"] = True
        if source_type == "carelink":
            upload["carelink"] = True

        progress = _progress(upload)
        if is_upload_in_progress(upload):
            upload["uploading"] = True
            if source_type == "carelink" and progress.get("step") == "start":
                upload["fetchingCarelinkData"] = True
        elif progress is not None:
            upload["completed"] = True
            if progress.get("success"):
                upload["successful"] = True
            elif progress.get("error"):
                upload["failed"] = True
                upload["error"] = progress["error"]

        flagged.append(upload)
    return flagged


def upload_screen_summary(state):
    current_index = current_upload_index(state)
    return {
        "logged_in": is_logged_in(state),
        "device_count": device_count(state),
        "upload_count": len(_uploads(state)),
        "current_upload_index": current_index,
        "has_upload_in_progress": current_index != -1,
    }
