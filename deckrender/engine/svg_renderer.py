"""
svg_renderer.py — SVG encoding of surface calls.

SVGSurface receives fully resolved drawing calls from the engine and builds
an SVG document. It NEVER computes positions; the engine does that.
It only formats numbers and creates SVG elements.

Used for:
1. Per-slide SVG output
2. Embedding in web pages (data URIs)
"""

import base64
from pathlib import Path
from typing import List, Optional, Sequence, Union
from xml.etree import ElementTree as ET
from xml.etree.ElementTree import Element, SubElement

from .color import FillStyle, StrokeStyle, TextStyle
from .surface import CanvasSurface, GradientStop, Rotation


# =============================================================================
# CONSTANTS
# =============================================================================

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
XML_SPACE = "{http://www.w3.org/XML/1998/namespace}space"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


# =============================================================================
# FORMAT HELPERS
# =============================================================================

def format_px(value: float) -> str:
    """Format a coordinate for SVG (2 decimal places)."""
    return f"{value:.2f}"


def format_points(xs: Sequence[float], ys: Sequence[float]) -> str:
    return " ".join(f"{format_px(x)},{format_px(y)}" for x, y in zip(xs, ys))


def format_rotation(rotation: Rotation) -> str:
    # SVG rotates clockwise; deck rotation is counter-clockwise
    return f"rotate({format_px(-rotation.angle)} {format_px(rotation.cx)} {format_px(rotation.cy)})"


# =============================================================================
# SVG SURFACE
# =============================================================================

class SVGSurface(CanvasSurface):
    """
    Builds one SVG document per viewport.

    A surface is single-use: begin_viewport() starts the document,
    end_viewport() closes it, and to_string() returns the result.
    """

    def __init__(self, indent: bool = True):
        """
        Initialize surface.

        Args:
            indent: Whether to pretty-print the output
        """
        self.indent = indent
        self._root: Optional[Element] = None
        self._defs: Optional[Element] = None
        self._stack: List[Element] = []
        self._closed = False

    @property
    def _parent(self) -> Element:
        if not self._stack:
            raise RuntimeError("SVGSurface has no open viewport")
        return self._stack[-1]

    # =========================================================================
    # VIEWPORT
    # =========================================================================

    def begin_viewport(self, width: float, height: float) -> None:
        if self._root is not None:
            raise RuntimeError("SVGSurface viewport already started")
        svg = Element('svg')
        svg.set('xmlns', SVG_NS)
        svg.set('xmlns:xlink', XLINK_NS)
        svg.set('width', format_px(width))
        svg.set('height', format_px(height))
        svg.set('viewBox', f"0 0 {format_px(width)} {format_px(height)}")
        self._root = svg
        self._stack = [svg]

    def end_viewport(self) -> None:
        if len(self._stack) != 1:
            raise RuntimeError(f"SVGSurface closed with {len(self._stack) - 1} open group(s)")
        self._stack = []
        self._closed = True

    def to_string(self) -> str:
        """Serialize the finished document, with XML declaration."""
        if self._root is None or not self._closed:
            raise RuntimeError("SVGSurface viewport is not finished")
        if self.indent:
            ET.indent(self._root, space="  ")
        return XML_DECLARATION + ET.tostring(self._root, encoding='unicode')

    def to_data_uri(self) -> str:
        """Document as a data URI (data:image/svg+xml;base64,...)."""
        b64 = base64.b64encode(self.to_string().encode('utf-8')).decode('ascii')
        return f"data:image/svg+xml;base64,{b64}"

    def write(self, filepath: Union[str, Path]) -> None:
        Path(filepath).write_text(self.to_string(), encoding='utf-8')

    # =========================================================================
    # SHAPES
    # =========================================================================

    def fill_rect(self, x: float, y: float, width: float, height: float, style: FillStyle) -> None:
        rect = SubElement(self._parent, 'rect')
        rect.set('x', format_px(x))
        rect.set('y', format_px(y))
        rect.set('width', format_px(width))
        rect.set('height', format_px(height))
        rect.set('style', style.css())

    def fill_ellipse(self, cx: float, cy: float, rx: float, ry: float, style: FillStyle) -> None:
        if rx == ry:
            shape = SubElement(self._parent, 'circle')
            shape.set('cx', format_px(cx))
            shape.set('cy', format_px(cy))
            shape.set('r', format_px(rx))
        else:
            shape = SubElement(self._parent, 'ellipse')
            shape.set('cx', format_px(cx))
            shape.set('cy', format_px(cy))
            shape.set('rx', format_px(rx))
            shape.set('ry', format_px(ry))
        shape.set('style', style.css())

    def fill_polygon(self, xs: Sequence[float], ys: Sequence[float], style: FillStyle) -> None:
        polygon = SubElement(self._parent, 'polygon')
        polygon.set('points', format_points(xs, ys))
        polygon.set('style', style.css())

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float, style: StrokeStyle) -> None:
        line = SubElement(self._parent, 'line')
        line.set('x1', format_px(x1))
        line.set('y1', format_px(y1))
        line.set('x2', format_px(x2))
        line.set('y2', format_px(y2))
        line.set('style', style.css())

    def stroke_arc(self, sx, sy, rx, ry, large_arc, sweep, ex, ey, style: StrokeStyle) -> None:
        path = SubElement(self._parent, 'path')
        path.set('d', (
            f"M{format_px(sx)},{format_px(sy)} "
            f"A{format_px(rx)},{format_px(ry)} 0 {int(large_arc)} {int(sweep)} "
            f"{format_px(ex)},{format_px(ey)}"
        ))
        path.set('style', "fill:none;" + style.css())

    def stroke_quadratic_curve(self, x1, y1, cx, cy, x2, y2, style: StrokeStyle) -> None:
        path = SubElement(self._parent, 'path')
        path.set('d', (
            f"M{format_px(x1)},{format_px(y1)} "
            f"Q{format_px(cx)},{format_px(cy)} {format_px(x2)},{format_px(y2)}"
        ))
        path.set('style', "fill:none;" + style.css())

    def place_image(self, x: float, y: float, width: int, height: int, reference: str) -> None:
        image = SubElement(self._parent, 'image')
        image.set('x', format_px(x))
        image.set('y', format_px(y))
        image.set('width', str(width))
        image.set('height', str(height))
        image.set('xlink:href', reference)

    # =========================================================================
    # TEXT & GROUPS
    # =========================================================================

    def draw_text(self, x: float, y: float, text: str, style: Optional[TextStyle] = None) -> None:
        text_elem = SubElement(self._parent, 'text')
        text_elem.set('x', format_px(x))
        text_elem.set('y', format_px(y))
        text_elem.set(XML_SPACE, 'preserve')
        if style is not None:
            css = style.css()
            if css:
                text_elem.set('style', css)
        text_elem.text = text

    def begin_group(self, rotation: Optional[Rotation] = None, style: Optional[TextStyle] = None) -> None:
        g = SubElement(self._parent, 'g')
        if rotation is not None:
            g.set('transform', format_rotation(rotation))
        if style is not None:
            css = style.css()
            if css:
                g.set('style', css)
        self._stack.append(g)

    def end_group(self) -> None:
        if len(self._stack) < 2:
            raise RuntimeError("SVGSurface end_group without matching begin_group")
        self._stack.pop()

    # =========================================================================
    # GRADIENTS
    # =========================================================================

    def define_linear_gradient(self, gradient_id: str, stops: Sequence[GradientStop]) -> None:
        if self._defs is None:
            self._defs = SubElement(self._parent, 'defs')
        gradient = SubElement(self._defs, 'linearGradient')
        gradient.set('id', gradient_id)
        gradient.set('x1', '0%')
        gradient.set('y1', '0%')
        gradient.set('x2', '0%')
        gradient.set('y2', '100%')
        for stop in stops:
            stop_elem = SubElement(gradient, 'stop')
            stop_elem.set('offset', f"{stop.offset:g}%")
            stop_elem.set('stop-color', stop.color)
            stop_elem.set('stop-opacity', f"{stop.opacity:.2f}")

    def fill_with_gradient(self, gradient_id: str, x: float, y: float, width: float, height: float) -> None:
        rect = SubElement(self._parent, 'rect')
        rect.set('x', format_px(x))
        rect.set('y', format_px(y))
        rect.set('width', format_px(width))
        rect.set('height', format_px(height))
        rect.set('style', f"fill:url(#{gradient_id})")
