"""Shared constants for the multilang reader."""

from __future__ import annotations

#: Maximum bytes per line from child stdout (1 MB).
MAX_LINE_BYTES = 1_048_576

#: Max characters of a line to include in log previews.
PREVIEW_CHARS = 200

#: Stream identifier used when the caller doesn't supply one.
DEFAULT_STREAM_ID = "child"


def preview(line: str, limit: int = PREVIEW_CHARS) -> str:
    """Truncate *line* for log output."""
    if len(line) <= limit:
        return line
    return line[:limit] + "..."
