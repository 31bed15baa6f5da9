from __future__ import annotations

from fastapi import APIRouter

from stageqc.media_qc.models import MeasuredAsset, QCResult
from stageqc.media_qc.service import get_media_qc_service

router = APIRouter(prefix="/stage", tags=["media_qc"])


@router.post("/qc", response_model=QCResult)
def run_qc(asset: MeasuredAsset):
    return get_media_qc_service().check(asset)
