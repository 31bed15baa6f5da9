"""Health Probe for K8s/GCP."""
from fastapi import APIRouter
from pydantic import BaseModel

from stageqc import __version__

router = APIRouter(tags=["system"])

class HealthStatus(BaseModel):
    status: str
    version: str = __version__

@router.get("/health", response_model=HealthStatus)
def health_check():
    return HealthStatus(status="ok")

@router.get("/ready", response_model=HealthStatus)
def readiness_check():
    # Ready once the stage spec resolves; a broken STAGE_SPEC_PATH raises here.
    from stageqc.stage_layout.service import get_stage_spec

    get_stage_spec()
    return HealthStatus(status="ok")
