from __future__ import annotations

from fastapi import APIRouter

from stageqc.media_probe.gate import GateDecision, GateRequest, decide

router = APIRouter(prefix="/stage", tags=["media_gate"])


@router.post("/gate", response_model=GateDecision)
def gate_upload(req: GateRequest):
    return decide(req)
