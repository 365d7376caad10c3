"""
color.py — Color tokens, opacity controls and resolved draw styles.

Color tokens pass through unchanged unless they are ``hsv(h,s,v)``
expressions, which are converted to ``rgb(r,g,b)``. Opacity controls use the
deck convention where zero means opaque.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .diagnostics import RenderDiagnostics

logger = logging.getLogger(__name__)

HSV_PREFIX = "hsv("
HSV_SUFFIX = ")"

STROKE_FORMAT = "stroke-width:{:.2f}px;stroke:{};stroke-opacity:{:.2f}"
FILL_FORMAT = "fill:{};fill-opacity:{:.2f}"


# =============================================================================
# OPACITY
# =============================================================================

def setop(v: float) -> float:
    """
    Resolve an opacity control.

    0 means opaque (1.0), a negative value is fully transparent (0.0) and a
    positive value is a percentage.
    """
    if v < 0:
        return 0.0
    if v > 0:
        return v / 100.0
    return 1.0


# =============================================================================
# HSV CONVERSION
# =============================================================================

def is_hsv(token: str) -> bool:
    return token.startswith(HSV_PREFIX) and token.endswith(HSV_SUFFIX) and len(token) > 5


def color_numbers(token: str) -> List[str]:
    """Split the arguments of ``xxx(a, b, c)`` after removing blanks."""
    inner = token[4:-1].replace(" ", "").replace("\t", "")
    return inner.split(",")


def hsv_in_range(s: float, v: float) -> bool:
    return 0 <= s <= 100 and 0 <= v <= 100


def hsv_to_rgb(h: float, s: float, v: float) -> Tuple[int, int, int]:
    """
    Convert hue (0-360), saturation and value (0-100) to 0-255 channels.

    Channels are truncated, not rounded. Out of range or non-finite input
    yields black.
    """
    s /= 100
    v /= 100
    if not (0 <= s <= 1 and 0 <= v <= 1) or not math.isfinite(h):
        return 0, 0, 0
    h = math.fmod(h, 360)
    c = v * s
    section = h / 60
    x = c * (1 - abs(math.fmod(section, 2) - 1))

    if 0 <= section <= 1:
        r, g, b = c, x, 0.0
    elif 1 < section <= 2:
        r, g, b = x, c, 0.0
    elif 2 < section <= 3:
        r, g, b = 0.0, c, x
    elif 3 < section <= 4:
        r, g, b = 0.0, x, c
    elif 4 < section <= 5:
        r, g, b = x, 0.0, c
    elif 5 < section <= 6:
        r, g, b = c, 0.0, x
    else:
        return 0, 0, 0

    m = v - c
    return int((r + m) * 255), int((g + m) * 255), int((b + m) * 255)


def _number(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        return 0.0


def hsv_token_to_rgb(token: str, diagnostics: Optional[RenderDiagnostics] = None) -> str:
    """Convert an ``hsv(h,s,v)`` token to an ``rgb(r,g,b)`` string."""
    red = green = blue = 0
    values = color_numbers(token)
    if len(values) == 3:
        hue, sat, value = (_number(n) for n in values)
        if not hsv_in_range(sat, value) or not math.isfinite(hue) or hue < 0:
            if diagnostics is not None:
                diagnostics.hsv_fallback(token)
            else:
                logger.debug(f"HSV color {token!r} out of range, using black")
        red, green, blue = hsv_to_rgb(hue, sat, value)
    elif diagnostics is not None:
        diagnostics.hsv_fallback(token)
    return f"rgb({red},{green},{blue})"


def resolve_color(token: str, diagnostics: Optional[RenderDiagnostics] = None) -> str:
    """Return a color usable by the surface: HSV converted, everything else unchanged."""
    if is_hsv(token):
        return hsv_token_to_rgb(token, diagnostics)
    return token


# =============================================================================
# RESOLVED STYLES
# =============================================================================

@dataclass(frozen=True)
class FillStyle:
    """Resolved fill color and opacity (0.0 - 1.0)."""
    color: str
    opacity: float = 1.0

    def css(self) -> str:
        return FILL_FORMAT.format(self.color, self.opacity)


@dataclass(frozen=True)
class StrokeStyle:
    """Resolved stroke: absolute width, color and opacity."""
    width: float
    color: str
    opacity: float = 1.0

    def css(self) -> str:
        return STROKE_FORMAT.format(self.width, self.color, self.opacity)


@dataclass(frozen=True)
class TextStyle:
    """
    Text attributes. Unset fields inherit from the enclosing group.
    """
    color: Optional[str] = None
    opacity: Optional[float] = None
    font_size: Optional[float] = None
    font_family: Optional[str] = None
    anchor: Optional[str] = None

    def css(self) -> str:
        parts = []
        if self.opacity is not None:
            parts.append(f"fill-opacity:{self.opacity:.2f}")
        if self.color is not None:
            parts.append(f"fill:{self.color}")
        if self.font_size is not None:
            parts.append(f"font-size:{self.font_size:.2f}px")
        if self.font_family is not None:
            parts.append(f"font-family:{self.font_family}")
        if self.anchor is not None:
            parts.append(f"text-anchor:{self.anchor}")
        return ";".join(parts)


def fill_style(color: str, opacity: float,
               diagnostics: Optional[RenderDiagnostics] = None) -> FillStyle:
    """Resolve a color token and opacity control into a FillStyle."""
    return FillStyle(resolve_color(color, diagnostics), setop(opacity))


def stroke_style(width: float, color: str, opacity: float,
                 diagnostics: Optional[RenderDiagnostics] = None) -> StrokeStyle:
    """Resolve a color token and opacity control into a StrokeStyle."""
    return StrokeStyle(width, resolve_color(color, diagnostics), setop(opacity))
