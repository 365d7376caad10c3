"""
primitives.py — Shape entries to absolute surface calls.

Each draw_* method resolves one shape entry against the canvas size, applies
category defaults, and emits exactly one surface call (or none, for
degenerate polygons). Images additionally emit their caption.
"""

import logging
from typing import Optional

from ..config import FontAliases
from ..dsl.schema import Arc, Curve, Ellipse, Image, Line, Polygon, Rect
from .color import FillStyle, TextStyle, fill_style, resolve_color, stroke_style
from .diagnostics import RenderDiagnostics
from .surface import CanvasSurface, GradientStop
from .units import (
    DEFAULT_CAPTION_SIZE_PCT,
    DEFAULT_SHAPE_COLOR,
    DEFAULT_STROKE_WIDTH,
    GRADIENT_ID,
    dimen,
    pct,
    polar,
    pwidth,
)

logger = logging.getLogger(__name__)


# Text anchors by alignment token
TEXT_ANCHORS = {
    "center": "middle", "middle": "middle", "mid": "middle", "c": "middle",
    "left": "start", "start": "start", "l": "start",
    "right": "end", "end": "end", "e": "end",
}


def text_anchor(align: str) -> str:
    """Map an alignment token to a text anchor; unknown tokens start-align."""
    return TEXT_ANCHORS.get(align, "start")


def stroke_width(sw: float) -> float:
    """Zero width means unspecified."""
    return DEFAULT_STROKE_WIDTH if sw == 0 else sw


class PrimitiveDrawer:
    """Draws shape entries onto a surface of size cw x ch."""

    def __init__(
        self,
        surface: CanvasSurface,
        cw: float,
        ch: float,
        fonts: FontAliases,
        diagnostics: Optional[RenderDiagnostics] = None,
    ):
        self.surface = surface
        self.cw = cw
        self.ch = ch
        self.fonts = fonts
        self.diagnostics = diagnostics if diagnostics is not None else RenderDiagnostics()

    # =========================================================================
    # STYLE HELPERS
    # =========================================================================

    def color(self, token: str) -> str:
        return resolve_color(token, self.diagnostics)

    def font_family(self, token: str) -> str:
        if token not in self.fonts:
            self.diagnostics.font_fallback(token)
        return self.fonts.lookup(token)

    # =========================================================================
    # BACKGROUND
    # =========================================================================

    def background(self, color: str) -> None:
        """Fill the whole canvas with an opaque color."""
        self.surface.fill_rect(0, 0, self.cw, self.ch, FillStyle(self.color(color), 1.0))

    def gradient(self, color1: str, color2: str) -> None:
        """Top-to-bottom gradient over the whole canvas."""
        stops = [
            GradientStop(0, self.color(color1), 1.0),
            GradientStop(100, self.color(color2), 1.0),
        ]
        self.surface.define_linear_gradient(GRADIENT_ID, stops)
        self.surface.fill_with_gradient(GRADIENT_ID, 0, 0, self.cw, self.ch)

    # =========================================================================
    # FILLED SHAPES
    # =========================================================================

    def _box(self, shape: Rect):
        """Center, width and height; hr (ratio of width) wins over hp."""
        x, y, _ = dimen(self.cw, self.ch, shape.xp, shape.yp, 0)
        w = pct(shape.wp, self.cw)
        if shape.hr == 0:
            h = pct(shape.hp, self.ch)
        else:
            h = pct(shape.hr, w)
        return x, y, w, h

    def draw_rect(self, rect: Rect) -> None:
        x, y, w, h = self._box(rect)
        style = fill_style(rect.color or DEFAULT_SHAPE_COLOR, rect.opacity, self.diagnostics)
        self.surface.fill_rect(x - w / 2, y - h / 2, w, h, style)

    def draw_ellipse(self, ellipse: Ellipse) -> None:
        x, y, w, h = self._box(ellipse)
        style = fill_style(ellipse.color or DEFAULT_SHAPE_COLOR, ellipse.opacity, self.diagnostics)
        self.surface.fill_ellipse(x, y, w / 2, h / 2, style)

    def draw_polygon(self, polygon: Polygon) -> None:
        if not polygon.is_well_formed:
            self.diagnostics.polygon_skipped(len(polygon.xc), len(polygon.yc))
            return
        xs = [pct(x, self.cw) for x in polygon.xc]
        ys = [pct(100 - y, self.ch) for y in polygon.yc]
        style = fill_style(polygon.color or DEFAULT_SHAPE_COLOR, polygon.opacity, self.diagnostics)
        self.surface.fill_polygon(xs, ys, style)

    # =========================================================================
    # STROKED SHAPES
    # =========================================================================

    def draw_line(self, line: Line) -> None:
        x1, y1, sw = dimen(self.cw, self.ch, line.xp1, line.yp1, line.sp)
        x2, y2, _ = dimen(self.cw, self.ch, line.xp2, line.yp2, 0)
        style = stroke_style(stroke_width(sw), line.color or DEFAULT_SHAPE_COLOR,
                             line.opacity, self.diagnostics)
        self.surface.stroke_line(x1, y1, x2, y2, style)

    def draw_curve(self, curve: Curve) -> None:
        x1, y1, sw = dimen(self.cw, self.ch, curve.xp1, curve.yp1, curve.sp)
        x2, y2, _ = dimen(self.cw, self.ch, curve.xp2, curve.yp2, 0)
        x3, y3, _ = dimen(self.cw, self.ch, curve.xp3, curve.yp3, 0)
        style = stroke_style(stroke_width(sw), curve.color or DEFAULT_SHAPE_COLOR,
                             curve.opacity, self.diagnostics)
        self.surface.stroke_quadratic_curve(x1, y1, x2, y2, x3, y3, style)

    def draw_arc(self, arc: Arc) -> None:
        x, y, sw = dimen(self.cw, self.ch, arc.xp, arc.yp, arc.sp)
        rx = pct(arc.wp, self.cw) / 2
        ry = pct(arc.hp, self.cw) / 2
        # Negated angles: screen y grows downwards
        sx, sy = polar(x, y, rx, -arc.a1)
        ex, ey = polar(x, y, ry, -arc.a2)
        large = arc.a2 - arc.a1 >= 180
        style = stroke_style(stroke_width(sw), arc.color or DEFAULT_SHAPE_COLOR,
                             arc.opacity, self.diagnostics)
        self.surface.stroke_arc(sx, sy, rx, ry, large, False, ex, ey, style)

    # =========================================================================
    # TEXT & MARKERS
    # =========================================================================

    def text(
        self,
        x: float,
        y: float,
        s: str,
        font_size: float,
        font: str,
        color: str,
        align: str,
        opacity: Optional[float] = None,
    ) -> None:
        """One line of fully attributed text."""
        style = TextStyle(
            color=self.color(color),
            opacity=opacity,
            font_size=font_size,
            font_family=self.font_family(font),
            anchor=text_anchor(align),
        )
        self.surface.draw_text(x, y, s, style)

    def bullet(self, x: float, y: float, font_size: float, color: str, opacity: float = 1.0) -> None:
        """Filled circle up and to the left of a list item's baseline."""
        rs = font_size / 2
        self.surface.fill_ellipse(
            x - font_size,
            y - (rs * 2) / 3,
            rs / 2,
            rs / 2,
            FillStyle(self.color(color), opacity),
        )

    # =========================================================================
    # IMAGES
    # =========================================================================

    def draw_image(self, image: Image, foreground: str) -> None:
        """
        Place an image by its center, then its caption below it.

        scale shrinks or grows both sides; autoscale only ever stretches a
        narrower image up to the canvas width, keeping the aspect ratio.
        Placed sizes are whole pixels, truncated, so an autoscaled image is
        int(cw) wide on a canvas with a fractional width.
        """
        x, y, _ = dimen(self.cw, self.ch, image.xp, image.yp, 0)
        iw, ih = float(image.width), float(image.height)

        if image.scale > 0:
            iw *= image.scale / 100
            ih *= image.scale / 100
        if image.autoscale and 0 < iw < self.cw:
            ih = (self.cw / iw) * ih
            iw = self.cw

        midx = iw / 2
        midy = ih / 2
        self.surface.place_image(x - midx, y - midy, int(iw), int(ih), image.name)

        if image.caption:
            capsize = pwidth(image.sp, self.cw, pct(DEFAULT_CAPTION_SIZE_PCT, self.cw))
            self.text(
                x,
                y + midy + capsize * 2,
                image.caption,
                capsize,
                image.font or "sans",
                image.color or foreground,
                image.align or "center",
            )
