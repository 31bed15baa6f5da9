from __future__ import annotations

from fastapi import APIRouter

from stageqc.stage_layout.models import LayoutRequest, ProjectedLayout, StageSpec
from stageqc.stage_layout.service import get_stage_layout_service, get_stage_spec

router = APIRouter(prefix="/stage", tags=["stage_layout"])


@router.get("/spec", response_model=StageSpec)
def read_stage_spec():
    return get_stage_spec()


@router.post("/layout", response_model=ProjectedLayout)
def project_layout(req: LayoutRequest):
    service = get_stage_layout_service()
    return service.layout(req.surface_width, req.surface_height, req.asset_width, req.asset_height)
