"""Dimension QC for stage media."""

from stageqc.media_qc.models import MeasuredAsset, QCResult, QCTier  # noqa: F401
from stageqc.media_qc.service import ASPECT_TOLERANCE, MediaQCService, evaluate  # noqa: F401
