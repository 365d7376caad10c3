"""
units.py — Percentage coordinates to canvas coordinates.

This is the foundation module. ALL positioning math goes through these
functions. Percentages are resolved against the canvas size of the current
render; the vertical axis is flipped (0% is the bottom edge, 100% the top).
"""

import math
from typing import Tuple

# =============================================================================
# DRAWING CONSTANTS
# =============================================================================

# Fill used by shapes that leave their color unset
DEFAULT_SHAPE_COLOR = "rgb(127,127,127)"

# Foreground used by text and lists when the slide leaves it unset
DEFAULT_FOREGROUND = "black"

# Stroke width used when a line, curve or arc resolves to zero width
DEFAULT_STROKE_WIDTH = 2.0

# Caption size (percent of canvas width) when an image leaves sp unset
DEFAULT_CAPTION_SIZE_PCT = 2.0

GRADIENT_ID = "slidegrad"


# =============================================================================
# CONVERSIONS
# =============================================================================

def pct(p: float, m: float) -> float:
    """Return p percent of measure m."""
    return (p / 100.0) * m


def dimen(w: float, h: float, xp: float, yp: float, sp: float) -> Tuple[float, float, float]:
    """
    Resolve a percentage position and size against a w x h canvas.

    Returns (x, y, s) where y is measured from the top of the canvas and s is
    a percentage of the canvas width.
    """
    return pct(xp, w), pct(100.0 - yp, h), pct(sp, w)


def pwidth(wp: float, cw: float, default: float) -> float:
    """Percentage of canvas width, or default when wp is unset."""
    if wp == 0:
        return default
    return pct(wp, cw)


def radians(deg: float) -> float:
    """Convert degrees to radians."""
    return (deg * math.pi) / 180.0


def polar(x: float, y: float, r: float, angle: float) -> Tuple[float, float]:
    """Point at distance r and angle (degrees) from (x, y)."""
    return x + r * math.cos(radians(angle)), y + r * math.sin(radians(angle))
