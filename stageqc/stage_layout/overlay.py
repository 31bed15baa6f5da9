"""Preview renderer: draws the projected stage zones over an image asset."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, ImageDraw

from stageqc.stage_layout import constants
from stageqc.stage_layout.models import ProjectedLayout, StageSpec
from stageqc.stage_layout.service import get_stage_spec, project

logger = logging.getLogger(__name__)

DEFAULT_SURFACE = (1380, 360)
BACKGROUND = (0, 0, 0, 255)


def _box(x: float, y: float, width: float, height: float) -> Tuple[int, int, int, int]:
    x0, y0 = round(x), round(y)
    return (x0, y0, max(x0, round(x + width) - 1), max(y0, round(y + height) - 1))


def draw_layout(canvas: Image.Image, layout: ProjectedLayout) -> Image.Image:
    """Alpha-composite zone fills, outlines and boundary lines onto an RGBA canvas."""
    if layout.is_empty:
        return canvas
    overlay = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    for zone in layout.zones():
        style = constants.ZONE_STYLES[zone.kind]
        draw.rectangle(_box(zone.x, zone.y, zone.width, zone.height), fill=style["fill"], outline=style["outline"], width=2)
    top = round(layout.display.y)
    bottom = max(top, round(layout.display.y + layout.display.height) - 1)
    for x in layout.boundaries:
        draw.line([(round(x), top), (round(x), bottom)], fill=constants.BOUNDARY_COLOR, width=1)
    return Image.alpha_composite(canvas, overlay)


def render_overlay_preview(
    source: Path,
    destination: Path,
    surface: Tuple[int, int] = DEFAULT_SURFACE,
    spec: Optional[StageSpec] = None,
) -> ProjectedLayout:
    """Letterbox an image into a surface, draw the stage on top and save as PNG."""
    spec = spec or get_stage_spec()
    surface_width, surface_height = surface
    with Image.open(source) as img:
        asset = img.convert("RGBA")
    layout = project(spec, surface_width, surface_height, asset.width, asset.height)

    canvas = Image.new("RGBA", (surface_width, surface_height), BACKGROUND)
    if not layout.is_empty:
        display = layout.display
        size = (max(1, round(display.width)), max(1, round(display.height)))
        canvas.paste(asset.resize(size), (round(display.x), round(display.y)))
    canvas = draw_layout(canvas, layout)

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    canvas.convert("RGB").save(destination, format="PNG")
    logger.info("Wrote overlay preview %s (%dx%d)", destination, surface_width, surface_height)
    return layout
