"""Built-in 5-screen stage: two pillars, one center screen, two pillars."""
from __future__ import annotations

PILLAR_WIDTH = 360
CENTER_WIDTH = 2700
STAGE_HEIGHT = 1080
LEFT_PILLARS = 2
RIGHT_PILLARS = 2

HD_GUIDE_WIDTH = 1920
HD_GUIDE_HEIGHT = 1080

# Overlay styling (RGBA), shared by the preview renderer.
ZONE_STYLES = {
    "pillar": {"fill": (239, 68, 68, 77), "outline": (239, 68, 68, 255)},
    "center": {"fill": (34, 197, 94, 77), "outline": (34, 197, 94, 255)},
    "hd_guide": {"fill": (59, 130, 246, 26), "outline": (59, 130, 246, 255)},
}
BOUNDARY_COLOR = (255, 255, 255, 128)

CENTER_LABEL = "Center Screen"
HD_GUIDE_LABEL = "HD {width}x{height}"
