"""Runtime configuration helpers for the stage QC engines."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

DEFAULT_MAX_FILE_SIZE = 500 * 1024 * 1024  # 500 MiB


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(name, default)


def get_stage_spec_path() -> Optional[Path]:
    """JSON file describing an alternate stage; unset means the built-in 5-screen stage."""
    raw = _get_env("STAGE_SPEC_PATH")
    return Path(raw) if raw else None


def get_max_file_size() -> int:
    raw = _get_env("STAGEQC_MAX_FILE_SIZE")
    if not raw:
        return DEFAULT_MAX_FILE_SIZE
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"STAGEQC_MAX_FILE_SIZE must be an integer, got {raw!r}")
    if value <= 0:
        raise ValueError("STAGEQC_MAX_FILE_SIZE must be positive")
    return value


def get_ffprobe_bin() -> str:
    return _get_env("STAGEQC_FFPROBE_BIN") or "ffprobe"
