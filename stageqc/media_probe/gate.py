"""Upload gate: MIME allow-list and size cap, checked before any probing."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, NonNegativeInt

from stageqc.config.runtime_config import get_max_file_size
from stageqc.media_qc.models import MediaKind

ACCEPTED_FILE_TYPES: Dict[str, Tuple[str, ...]] = {
    "image": ("image/png", "image/jpeg", "image/jpg"),
    "video": ("video/mp4", "video/quicktime", "video/x-m4v"),
}

SUFFIX_MIME_TYPES: Dict[str, str] = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".mp4": "video/mp4",
    ".mov": "video/quicktime",
    ".qt": "video/quicktime",
    ".m4v": "video/x-m4v",
}


class MediaGateError(ValueError):
    """Upload refused before probing."""


class UnsupportedMediaType(MediaGateError):
    pass


class MediaTooLarge(MediaGateError):
    pass


class GateRequest(BaseModel):
    mime_type: str
    size_bytes: NonNegativeInt


class GateDecision(BaseModel):
    allowed: bool
    kind: Optional[MediaKind] = None
    reason: Optional[str] = None


def media_kind_for(mime_type: Optional[str]) -> Optional[MediaKind]:
    if not mime_type:
        return None
    mime_type = mime_type.lower()
    for kind, types in ACCEPTED_FILE_TYPES.items():
        if mime_type in types:
            return kind
    return None


def is_accepted(mime_type: Optional[str]) -> bool:
    return media_kind_for(mime_type) is not None


def check_upload(mime_type: Optional[str], size_bytes: int, max_size: Optional[int] = None) -> MediaKind:
    """Return the media kind or raise the matching MediaGateError."""
    kind = media_kind_for(mime_type)
    if kind is None:
        raise UnsupportedMediaType(f"unsupported file type: {mime_type or 'unknown'}")
    limit = max_size if max_size is not None else get_max_file_size()
    if size_bytes > limit:
        raise MediaTooLarge(f"file is {size_bytes} bytes, limit is {limit} bytes")
    return kind


def guess_mime_type(path: Path) -> Optional[str]:
    return SUFFIX_MIME_TYPES.get(Path(path).suffix.lower())


def check_path(path: Path, max_size: Optional[int] = None) -> MediaKind:
    path = Path(path)
    return check_upload(guess_mime_type(path), path.stat().st_size, max_size=max_size)


def decide(req: GateRequest) -> GateDecision:
    try:
        kind = check_upload(req.mime_type, req.size_bytes)
    except MediaGateError as exc:
        return GateDecision(allowed=False, reason=str(exc))
    return GateDecision(allowed=True, kind=kind)
