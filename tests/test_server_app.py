from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from stageqc.common.contracts import StageContractError
from stageqc.server import create_app
from stageqc.stage_layout.service import StageLayoutService

client = TestClient(create_app())


def test_health_and_ready():
    assert client.get("/health").json()["status"] == "ok"
    assert client.get("/ready").json()["status"] == "ok"


def test_routes_mounted():
    assert client.get("/stage/spec").status_code == 200
    resp = client.post("/stage/qc", json={"width": 4140, "height": 1080})
    assert resp.json()["tier"] == "PASS"
    resp = client.post("/stage/gate", json={"mime_type": "video/mp4", "size_bytes": 10})
    assert resp.json()["allowed"] is True


def test_validation_errors_use_envelope():
    resp = client.post("/stage/qc", json={"width": 0, "height": 1080})
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"]["code"] == "validation.error"
    assert body["error"]["details"]["errors"]


def test_contract_violation_is_500_envelope():
    with patch(
        "stageqc.stage_layout.routes.get_stage_layout_service",
        side_effect=StageContractError("asset_width must be positive, got 0"),
    ):
        resp = client.post("/stage/layout", json={
            "surface_width": 10, "surface_height": 10, "asset_width": 4140, "asset_height": 1080,
        })
    assert resp.status_code == 500
    assert resp.json()["error"]["code"] == "stage.contract_violation"


def test_broken_stage_spec_config_is_500(tmp_path, monkeypatch):
    path = tmp_path / "stage.json"
    path.write_text("{not json")
    monkeypatch.setenv("STAGE_SPEC_PATH", str(path))
    resp = client.get("/stage/spec")
    assert resp.status_code == 500
    assert resp.json()["error"]["code"] == "stage.spec_invalid"


def test_unknown_route_uses_envelope():
    resp = client.get("/stage/nope")
    assert resp.status_code == 404


def test_unhandled_error_uses_internal_envelope(monkeypatch):
    monkeypatch.setenv("STAGEQC_MAX_FILE_SIZE", "lots")
    quiet_client = TestClient(create_app(), raise_server_exceptions=False)
    resp = quiet_client.post("/stage/gate", json={"mime_type": "video/mp4", "size_bytes": 10})
    assert resp.status_code == 500
    assert resp.json()["error"]["code"] == "internal.error"


def test_zero_asset_layout_is_contract_violation():
    with pytest.raises(StageContractError):
        StageLayoutService().layout(10, 10, 0, 1080)
