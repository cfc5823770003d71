"""Input validation helpers."""

from __future__ import annotations

from typing import List

STANDARD_STREAMS = {"stdout", "stderr"}


def is_standard_stream(path: str) -> bool:
    """Check whether *path* names one of the process's standard streams."""
    return path.strip().lower() in STANDARD_STREAMS


def normalize_paths(paths: List[str]) -> List[str]:
    """Strip whitespace, drop blanks and lower-case standard stream names."""
    result: List[str] = []
    for path in paths:
        path = path.strip()
        if not path:
            continue
        result.append(path.lower() if is_standard_stream(path) else path)
    return result


def split_csv(value: str) -> List[str]:
    """Parse a comma-separated list, ignoring empty items."""
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_key_value(text: str) -> tuple[tuple[str, str] | None, str | None]:
    """Split ``key=value`` on the first ``=``.

    Returns
    -------
    ((key, value) | None, error_message | None)
        If error_message is not None the pair is None.
    """
    if "=" not in text:
        return None, f"expected key=value, got {text!r}"

    key, value = text.split("=", 1)
    key = key.strip()
    if not key:
        return None, f"empty key in {text!r}"

    return (key, value), None
