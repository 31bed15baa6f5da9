from __future__ import annotations

import math

_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def format_file_size(size_bytes: int) -> str:
    if size_bytes <= 0:
        return "0 Bytes"
    i = 0
    while size_bytes >= 1024 ** (i + 1) and i < len(_SIZE_UNITS) - 1:
        i += 1
    # halves round up
    value = math.floor(size_bytes / 1024 ** i * 100 + 0.5) / 100
    if value == int(value):
        value = int(value)
    return f"{value} {_SIZE_UNITS[i]}"


def format_duration(seconds: float) -> str:
    """m:ss, minutes unbounded."""
    mins = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{mins}:{secs:02d}"
