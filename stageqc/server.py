"""Aggregate app for the stage QC engines."""
from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from stageqc import __version__
from stageqc.common.contracts import StageContractError
from stageqc.common.error_envelope import build_error_envelope, contract_violation_error
from stageqc.common.health import router as health_router
from stageqc.media_probe.routes import router as gate_router
from stageqc.media_qc.routes import router as qc_router
from stageqc.stage_layout.routes import router as layout_router
from stageqc.stage_layout.service import StageSpecError

logger = logging.getLogger(__name__)

# --- Error Handling ---

async def _http_exception_handler(request: Request, exc: HTTPException):
    # Normalize existing envelopes if possible
    detail = exc.detail
    if isinstance(detail, dict) and "error" in detail:
        return JSONResponse(content=detail, status_code=exc.status_code)

    envelope = build_error_envelope(
        code="http.exception",
        message=str(detail) if detail else "HTTP exception",
        status_code=exc.status_code,
    )
    return JSONResponse(content=envelope.model_dump(), status_code=exc.status_code)

async def _validation_exception_handler(request: Request, exc: RequestValidationError):
    envelope = build_error_envelope(
        code="validation.error",
        message="Validation failed",
        status_code=400,
        details={"errors": jsonable_errors(exc)},
    )
    return JSONResponse(content=envelope.model_dump(), status_code=400)

async def _contract_exception_handler(request: Request, exc: StageContractError):
    logger.error("Contract violation on %s: %s", request.url.path, exc)
    envelope = contract_violation_error(str(exc))
    return JSONResponse(content=envelope.model_dump(), status_code=500)

async def _stage_spec_exception_handler(request: Request, exc: StageSpecError):
    logger.error("Stage spec unusable: %s", exc)
    envelope = build_error_envelope(
        code="stage.spec_invalid",
        message=str(exc),
        status_code=500,
        resource_kind="stage_spec",
    )
    return JSONResponse(content=envelope.model_dump(), status_code=500)

async def _generic_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    envelope = build_error_envelope(
        code="internal.error",
        message="Internal server error",
        status_code=500,
    )
    return JSONResponse(content=envelope.model_dump(), status_code=500)

def jsonable_errors(exc: RequestValidationError) -> list:
    # ctx may carry exception instances that JSON cannot encode
    return [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]

def register_error_handlers(target_app: FastAPI) -> None:
    target_app.add_exception_handler(HTTPException, _http_exception_handler)
    target_app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    target_app.add_exception_handler(StageContractError, _contract_exception_handler)
    target_app.add_exception_handler(StageSpecError, _stage_spec_exception_handler)
    target_app.add_exception_handler(Exception, _generic_exception_handler)

# --- App Factory ---

def create_app() -> FastAPI:
    app = FastAPI(title="Stage QC", version=__version__)
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(layout_router)
    app.include_router(qc_router)
    app.include_router(gate_router)
    return app


app = create_app()
