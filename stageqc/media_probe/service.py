from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any, Dict, Optional

from PIL import Image, UnidentifiedImageError

from stageqc.config.runtime_config import get_ffprobe_bin
from stageqc.media_probe.gate import check_path
from stageqc.media_qc.models import MeasuredAsset, MediaKind

logger = logging.getLogger(__name__)


class ProbeError(Exception):
    """The file could not be measured (corrupt, unsupported codec, missing ffprobe)."""


def _parse_duration(raw: Any) -> Optional[float]:
    # ffprobe reports "N/A" for streams without a duration.
    try:
        return float(raw) if raw else None
    except (TypeError, ValueError):
        return None


class MediaProbeService:
    def __init__(self, ffprobe_bin: Optional[str] = None):
        self.ffprobe_bin = ffprobe_bin or get_ffprobe_bin()

    def _run_ffprobe(self, file_path: str) -> Dict[str, Any]:
        cmd = [
            self.ffprobe_bin,
            "-v", "quiet",
            "-print_format", "json",
            "-show_format",
            "-show_streams",
            file_path,
        ]
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=True)
            return json.loads(result.stdout)
        except (subprocess.CalledProcessError, FileNotFoundError, json.JSONDecodeError) as exc:
            logger.warning("ffprobe failed for %s: %s", file_path, exc)
            raise ProbeError(f"ffprobe failed for {file_path}") from exc

    def probe_image(self, path: Path) -> MeasuredAsset:
        try:
            with Image.open(path) as img:
                width, height = img.size
        except (OSError, UnidentifiedImageError) as exc:
            logger.warning("Cannot read image %s: %s", path, exc)
            raise ProbeError(f"cannot read image {path}") from exc
        return self._measured(path, "image", width, height, None)

    def probe_video(self, path: Path) -> MeasuredAsset:
        probe_data = self._run_ffprobe(str(path))
        video = next(
            (s for s in probe_data.get("streams", []) if s.get("codec_type") == "video"),
            None,
        )
        if video is None:
            raise ProbeError(f"no video stream in {path}")

        duration = video.get("duration") or probe_data.get("format", {}).get("duration")
        return self._measured(
            path, "video", video.get("width"), video.get("height"), _parse_duration(duration),
        )

    def probe(self, path: Path, kind: Optional[MediaKind] = None) -> MeasuredAsset:
        """Gate the file, then measure it. Gate errors propagate unchanged."""
        path = Path(path)
        if kind is None:
            try:
                kind = check_path(path)
            except OSError as exc:
                logger.warning("Cannot stat %s: %s", path, exc)
                raise ProbeError(f"cannot read {path}: {exc.strerror or exc}") from exc
        if kind == "image":
            return self.probe_image(path)
        return self.probe_video(path)

    def _measured(
        self,
        path: Path,
        kind: MediaKind,
        width: Optional[int],
        height: Optional[int],
        duration: Optional[float],
    ) -> MeasuredAsset:
        # Zero or missing dimensions never reach the QC engines.
        if not width or not height or width <= 0 or height <= 0:
            raise ProbeError(f"{path} reported invalid dimensions {width}x{height}")
        size = path.stat().st_size if path.exists() else None
        return MeasuredAsset(
            width=int(width),
            height=int(height),
            kind=kind,
            duration_seconds=duration,
            file_name=path.name,
            file_size=size,
        )

