from __future__ import annotations

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field, NonNegativeFloat, NonNegativeInt, PositiveInt, computed_field

MediaKind = Literal["image", "video"]


class QCTier(str, Enum):
    PASS = "PASS"
    WARNING = "WARNING"
    FAIL = "FAIL"


class MeasuredAsset(BaseModel):
    """Dimensions reported by the probing step for one uploaded file."""
    width: PositiveInt
    height: PositiveInt
    kind: MediaKind = "image"
    duration_seconds: Optional[NonNegativeFloat] = None
    file_name: Optional[str] = None
    file_size: Optional[NonNegativeInt] = None


class Size(BaseModel):
    width: int
    height: int

    def as_text(self) -> str:
        return f"{self.width}x{self.height}"


class QCResult(BaseModel):
    dimensions_match: bool
    aspect_ratio_match: bool
    expected: Size
    actual: Size
    message: str
    # Reserved: pillar content detection is not implemented.
    has_content_in_pillars: Optional[bool] = Field(default=None)

    @computed_field
    @property
    def tier(self) -> QCTier:
        if self.dimensions_match:
            return QCTier.PASS
        if self.aspect_ratio_match:
            return QCTier.WARNING
        return QCTier.FAIL
