import sys
from pathlib import Path

import pytest

# Ensure repo root on sys.path for imports from anywhere in tests tree.
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from stageqc.stage_layout.service import set_stage_spec


@pytest.fixture(autouse=True)
def _reset_stage_spec(monkeypatch):
    monkeypatch.delenv("STAGE_SPEC_PATH", raising=False)
    set_stage_spec(None)
    yield
    set_stage_spec(None)
