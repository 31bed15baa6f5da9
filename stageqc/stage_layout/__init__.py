"""Stage geometry and overlay projection."""

from stageqc.stage_layout.models import (  # noqa: F401
    Dimensions,
    ProjectedLayout,
    StageSpec,
    ZoneRect,
)
from stageqc.stage_layout.service import (  # noqa: F401
    DEFAULT_STAGE_SPEC,
    StageSpecError,
    build_stage_spec,
    get_stage_spec,
    project,
    set_stage_spec,
)
