from __future__ import annotations

import logging
import math
from typing import Optional, Protocol

from stageqc.media_qc.models import MeasuredAsset, QCResult, Size
from stageqc.stage_layout.models import StageSpec
from stageqc.stage_layout.service import get_stage_spec

logger = logging.getLogger(__name__)

ASPECT_TOLERANCE = 0.01


class HasSize(Protocol):
    width: int
    height: int


def _aspect(width: int, height: int) -> float:
    # Zero height yields NaN, which never compares below the tolerance.
    return width / height if height else math.nan


def evaluate(measured: HasSize, expected: HasSize) -> QCResult:
    """
    Classify measured dimensions against the expected stage size.

    PASS when the pixels match exactly, WARNING when only the proportions
    match (within ASPECT_TOLERANCE on the ratio), FAIL otherwise.
    """
    dimensions_match = measured.width == expected.width and measured.height == expected.height
    expected_aspect = _aspect(expected.width, expected.height)
    actual_aspect = _aspect(measured.width, measured.height)
    aspect_ratio_match = abs(expected_aspect - actual_aspect) < ASPECT_TOLERANCE

    exp = Size(width=expected.width, height=expected.height)
    act = Size(width=measured.width, height=measured.height)
    if dimensions_match:
        message = "Perfect! Dimensions match exactly."
    elif aspect_ratio_match:
        message = (
            "Aspect ratio is correct but resolution differs. "
            f"Expected {exp.as_text()}, got {act.as_text()}"
        )
    else:
        message = f"Dimensions mismatch. Expected {exp.as_text()}, got {act.as_text()}"

    return QCResult(
        dimensions_match=dimensions_match,
        aspect_ratio_match=aspect_ratio_match,
        expected=exp,
        actual=act,
        message=message,
    )


class MediaQCService:
    def __init__(self, spec: Optional[StageSpec] = None):
        self.spec = spec or get_stage_spec()

    def check(self, asset: MeasuredAsset) -> QCResult:
        result = evaluate(asset, self.spec.expected_dimensions)
        logger.debug(
            "QC %s %s against %s: %s",
            asset.file_name or asset.kind, result.actual.as_text(), result.expected.as_text(), result.tier.value,
        )
        return result


def get_media_qc_service() -> MediaQCService:
    return MediaQCService(get_stage_spec())
