from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from stageqc.common.contracts import Number, require_positive
from stageqc.config.runtime_config import get_stage_spec_path
from stageqc.stage_layout import constants
from stageqc.stage_layout.models import (
    CenterZone,
    HdGuide,
    PillarSize,
    PillarSlot,
    ProjectedLayout,
    Rect,
    StageSpec,
    ZoneKind,
    ZoneRect,
)

logger = logging.getLogger(__name__)


class StageSpecError(ValueError):
    """Raised when a configured stage does not tile its total width."""


def build_stage_spec(
    *,
    left_pillars: int = constants.LEFT_PILLARS,
    right_pillars: int = constants.RIGHT_PILLARS,
    pillar_width: int = constants.PILLAR_WIDTH,
    center_width: int = constants.CENTER_WIDTH,
    height: int = constants.STAGE_HEIGHT,
    hd_width: int = constants.HD_GUIDE_WIDTH,
    hd_height: int = constants.HD_GUIDE_HEIGHT,
    name: str = "5-screen stage",
) -> StageSpec:
    """Derive every offset from the zone widths so the stage tiles by construction."""
    pillars: List[PillarSlot] = []
    x = 0
    for i in range(left_pillars):
        pillars.append(PillarSlot(id=f"P{i + 1}", x_offset=x, label=f"Pillar {i + 1} (Left)"))
        x += pillar_width
    center_x = x
    x += center_width
    for i in range(right_pillars):
        n = left_pillars + i + 1
        pillars.append(PillarSlot(id=f"P{n}", x_offset=x, label=f"Pillar {n} (Right)"))
        x += pillar_width

    return StageSpec(
        name=name,
        total_width=x,
        total_height=height,
        pillar=PillarSize(width=pillar_width, height=height),
        pillars=tuple(pillars),
        center_zone=CenterZone(x_offset=center_x, width=center_width, height=height),
        hd_guide=HdGuide(
            x_offset=center_x + (center_width - hd_width) / 2,
            width=hd_width,
            height=hd_height,
        ),
    )


DEFAULT_STAGE_SPEC = build_stage_spec()


def load_stage_spec(path: Path) -> StageSpec:
    try:
        raw = json.loads(Path(path).read_text())
    except (OSError, json.JSONDecodeError) as exc:
        raise StageSpecError(f"cannot read stage spec {path}: {exc}") from exc
    try:
        spec = StageSpec.model_validate(raw)
    except ValidationError as exc:
        raise StageSpecError(f"invalid stage spec {path}: {exc}") from exc
    logger.info(
        "Loaded stage spec %r from %s: %dx%d, %d pillars",
        spec.name, path, spec.total_width, spec.total_height, len(spec.pillars),
    )
    return spec


def project(
    spec: StageSpec,
    surface_width: Number,
    surface_height: Number,
    asset_width: Number,
    asset_height: Number,
) -> ProjectedLayout:
    """
    Map the stage zones onto a display surface showing the asset letterboxed.

    Zones are scaled against the displayed asset width, not the surface, so
    they stay aligned with the picture whatever the asset's own size. The
    displayed asset is centered on both axes.
    """
    require_positive("asset_width", asset_width)
    require_positive("asset_height", asset_height)
    if surface_width <= 0 or surface_height <= 0:
        # Surface not measured yet.
        return ProjectedLayout.empty(max(surface_width, 0), max(surface_height, 0))

    scale = min(surface_width / asset_width, surface_height / asset_height)
    display_width = asset_width * scale
    display_height = asset_height * scale
    overlay_scale = display_width / spec.total_width
    origin_x = (surface_width - display_width) / 2
    origin_y = (surface_height - display_height) / 2

    def _zone(zone_id: str, kind: ZoneKind, label: str, x_offset: float, width: float) -> ZoneRect:
        return ZoneRect(
            id=zone_id,
            kind=kind,
            label=label,
            x=origin_x + x_offset * overlay_scale,
            y=origin_y,
            width=width * overlay_scale,
            height=display_height,
        )

    pillars = [
        _zone(p.id, "pillar", p.label, p.x_offset, spec.pillar.width)
        for p in spec.pillars
    ]
    center = _zone(
        "center", "center", constants.CENTER_LABEL,
        spec.center_zone.x_offset, spec.center_zone.width,
    )
    hd_guide = _zone(
        "hd_guide", "hd_guide",
        constants.HD_GUIDE_LABEL.format(width=spec.hd_guide.width, height=spec.hd_guide.height),
        spec.hd_guide.x_offset, spec.hd_guide.width,
    )

    return ProjectedLayout(
        surface_width=surface_width,
        surface_height=surface_height,
        scale=scale,
        overlay_scale=overlay_scale,
        display=Rect(x=origin_x, y=origin_y, width=display_width, height=display_height),
        pillars=pillars,
        center_zone=center,
        hd_guide=hd_guide,
        boundaries=[origin_x + b * overlay_scale for b in spec.boundaries],
    )


class StageLayoutService:
    def __init__(self, spec: Optional[StageSpec] = None):
        self.spec = spec or get_stage_spec()

    def layout(
        self,
        surface_width: Number,
        surface_height: Number,
        asset_width: Number,
        asset_height: Number,
    ) -> ProjectedLayout:
        layout = project(self.spec, surface_width, surface_height, asset_width, asset_height)
        if layout.is_empty:
            logger.debug("Skipping projection for unmeasured surface %sx%s", surface_width, surface_height)
        return layout


_stage_spec: Optional[StageSpec] = None


def get_stage_spec() -> StageSpec:
    """Active stage, resolved once from STAGE_SPEC_PATH or the built-in default."""
    global _stage_spec
    if _stage_spec is None:
        path = get_stage_spec_path()
        _stage_spec = load_stage_spec(path) if path else DEFAULT_STAGE_SPEC
    return _stage_spec


def set_stage_spec(spec: Optional[StageSpec]) -> None:
    """Inject a stage at startup; None resets to configuration on next access."""
    global _stage_spec
    _stage_spec = spec


def get_stage_layout_service() -> StageLayoutService:
    return StageLayoutService(get_stage_spec())
