"""Shared parsing helpers for config and environment coercions."""


def parse_bool(value, default):
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if not text:
            return default
        return text in ["1", "true", "yes", "on"]
    if value is None:
        return default
    return bool(value)
