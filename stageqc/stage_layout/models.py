"""Stage Layout Models.

Geometry of a multi-screen stage (pillar screens flanking one center screen)
and the rectangles produced when that stage is projected onto a display
surface.
"""

from __future__ import annotations

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, NonNegativeInt, PositiveInt, model_validator

ZoneKind = Literal["pillar", "center", "hd_guide"]


class Dimensions(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: PositiveInt
    height: PositiveInt


class PillarSize(BaseModel):
    """Shared size of every pillar screen."""
    model_config = ConfigDict(frozen=True)

    width: PositiveInt
    height: PositiveInt


class PillarSlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    x_offset: NonNegativeInt
    label: str


class CenterZone(BaseModel):
    model_config = ConfigDict(frozen=True)

    x_offset: NonNegativeInt
    width: PositiveInt
    height: PositiveInt


class HdGuide(BaseModel):
    """Advisory reference box inside the center zone; never a pass/fail criterion."""
    model_config = ConfigDict(frozen=True)

    x_offset: NonNegativeFloat
    width: PositiveInt
    height: PositiveInt


class StageSpec(BaseModel):
    """
    Full stage canvas. Pillars and the center zone must tile
    [0, total_width) left to right with no gaps and no overlaps.
    """
    model_config = ConfigDict(frozen=True)

    name: str = "stage"
    total_width: PositiveInt
    total_height: PositiveInt
    pillar: PillarSize
    pillars: Tuple[PillarSlot, ...] = ()
    center_zone: CenterZone
    hd_guide: HdGuide

    @model_validator(mode="after")
    def validate_tiling(self):
        ids = [p.id for p in self.pillars]
        if len(set(ids)) != len(ids):
            raise ValueError("pillar ids must be unique")
        offsets = [p.x_offset for p in self.pillars]
        if offsets != sorted(offsets):
            raise ValueError("pillars must be ordered left to right")

        spans = [(p.x_offset, p.x_offset + self.pillar.width, p.id) for p in self.pillars]
        spans.append((self.center_zone.x_offset, self.center_zone.x_offset + self.center_zone.width, "center"))
        cursor = 0
        for start, end, zone_id in sorted(spans):
            if start < cursor:
                raise ValueError(f"zone {zone_id} overlaps the previous zone at x={start}")
            if start > cursor:
                raise ValueError(f"gap before zone {zone_id}: x={cursor}..{start}")
            cursor = end
        if cursor != self.total_width:
            raise ValueError(f"zone widths sum to {cursor}, expected total_width {self.total_width}")

        if self.pillar.height != self.total_height or self.center_zone.height != self.total_height:
            raise ValueError("pillars and center zone must span the full stage height")

        hd_end = self.hd_guide.x_offset + self.hd_guide.width
        center_end = self.center_zone.x_offset + self.center_zone.width
        if self.hd_guide.x_offset < self.center_zone.x_offset or hd_end > center_end:
            raise ValueError("hd_guide must lie within the center zone")
        if self.hd_guide.height > self.total_height:
            raise ValueError("hd_guide is taller than the stage")
        return self

    @property
    def expected_dimensions(self) -> Dimensions:
        return Dimensions(width=self.total_width, height=self.total_height)

    @property
    def boundaries(self) -> List[int]:
        """Interior x positions where one screen ends and the next begins."""
        edges = {p.x_offset for p in self.pillars} | {self.center_zone.x_offset}
        edges |= {p.x_offset + self.pillar.width for p in self.pillars}
        edges.add(self.center_zone.x_offset + self.center_zone.width)
        return sorted(e for e in edges if 0 < e < self.total_width)


class LayoutRequest(BaseModel):
    surface_width: NonNegativeFloat
    surface_height: NonNegativeFloat
    asset_width: PositiveInt
    asset_height: PositiveInt


class Rect(BaseModel):
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width


class ZoneRect(Rect):
    id: str
    kind: ZoneKind
    label: str


class ProjectedLayout(BaseModel):
    """Stage zones expressed in the coordinate space of a display surface."""
    surface_width: float
    surface_height: float
    scale: float = 0.0  # asset px -> surface px
    overlay_scale: float = 0.0  # stage px -> surface px
    display: Optional[Rect] = None
    pillars: List[ZoneRect] = Field(default_factory=list)
    center_zone: Optional[ZoneRect] = None
    hd_guide: Optional[ZoneRect] = None
    boundaries: List[float] = Field(default_factory=list)

    @classmethod
    def empty(cls, surface_width: float, surface_height: float) -> "ProjectedLayout":
        return cls(surface_width=surface_width, surface_height=surface_height)

    @property
    def is_empty(self) -> bool:
        return self.display is None

    def zones(self) -> List[ZoneRect]:
        """Every projected zone, pillars first, in drawing order."""
        out = list(self.pillars)
        if self.center_zone is not None:
            out.append(self.center_zone)
        if self.hd_guide is not None:
            out.append(self.hd_guide)
        return out
