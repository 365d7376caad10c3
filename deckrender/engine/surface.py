"""
surface.py — The contract between the layout engine and output encoders.

The engine resolves every coordinate and style, then calls a CanvasSurface.
Surfaces NEVER compute positions or validate shapes. They only encode the
calls they receive (SVG documents, or a plain call log for tests).

All coordinates are absolute canvas units with y measured from the top.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .color import FillStyle, StrokeStyle, TextStyle


@dataclass(frozen=True)
class GradientStop:
    """One color stop. offset is a percentage along the gradient axis."""
    offset: float
    color: str
    opacity: float = 1.0


@dataclass(frozen=True)
class Rotation:
    """Rotate by angle degrees (counter-clockwise on screen) around (cx, cy)."""
    angle: float
    cx: float
    cy: float


class CanvasSurface(ABC):
    """Drawing vocabulary used by the engine."""

    @abstractmethod
    def begin_viewport(self, width: float, height: float) -> None:
        ...

    @abstractmethod
    def end_viewport(self) -> None:
        ...

    @abstractmethod
    def fill_rect(self, x: float, y: float, width: float, height: float, style: FillStyle) -> None:
        """Rectangle with top-left corner at (x, y)."""

    @abstractmethod
    def fill_ellipse(self, cx: float, cy: float, rx: float, ry: float, style: FillStyle) -> None:
        ...

    @abstractmethod
    def fill_polygon(self, xs: Sequence[float], ys: Sequence[float], style: FillStyle) -> None:
        ...

    @abstractmethod
    def stroke_line(self, x1: float, y1: float, x2: float, y2: float, style: StrokeStyle) -> None:
        ...

    @abstractmethod
    def stroke_arc(
        self,
        sx: float,
        sy: float,
        rx: float,
        ry: float,
        large_arc: bool,
        sweep: bool,
        ex: float,
        ey: float,
        style: StrokeStyle,
    ) -> None:
        """Unfilled elliptical arc from (sx, sy) to (ex, ey)."""

    @abstractmethod
    def stroke_quadratic_curve(
        self,
        x1: float,
        y1: float,
        cx: float,
        cy: float,
        x2: float,
        y2: float,
        style: StrokeStyle,
    ) -> None:
        """Unfilled quadratic Bezier from (x1, y1) to (x2, y2) with control (cx, cy)."""

    @abstractmethod
    def place_image(self, x: float, y: float, width: int, height: int, reference: str) -> None:
        ...

    @abstractmethod
    def draw_text(self, x: float, y: float, text: str, style: Optional[TextStyle] = None) -> None:
        """Text with its baseline anchored at (x, y); whitespace is preserved."""

    @abstractmethod
    def begin_group(self, rotation: Optional[Rotation] = None, style: Optional[TextStyle] = None) -> None:
        ...

    @abstractmethod
    def end_group(self) -> None:
        ...

    @abstractmethod
    def define_linear_gradient(self, gradient_id: str, stops: Sequence[GradientStop]) -> None:
        """Top-to-bottom linear gradient."""

    @abstractmethod
    def fill_with_gradient(self, gradient_id: str, x: float, y: float, width: float, height: float) -> None:
        ...


# =============================================================================
# RECORDING SURFACE
# =============================================================================

VIEWPORT_OPS = frozenset({"begin_viewport", "end_viewport"})
STRUCTURE_OPS = VIEWPORT_OPS | {"begin_group", "end_group", "define_linear_gradient"}


@dataclass
class DrawCall:
    """A single recorded surface call."""
    op: str
    args: Dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.args[key]


class RecordingSurface(CanvasSurface):
    """
    Surface that records every call in order.

    Useful for tests and for replaying a render onto several encoders.
    """

    def __init__(self):
        self.calls: List[DrawCall] = []

    def _record(self, op: str, **args: Any) -> None:
        self.calls.append(DrawCall(op, args))

    @property
    def ops(self) -> List[str]:
        return [call.op for call in self.calls]

    def calls_of(self, op: str) -> List[DrawCall]:
        return [call for call in self.calls if call.op == op]

    def drawing_calls(self) -> List[DrawCall]:
        """Calls that put marks on the canvas."""
        return [call for call in self.calls if call.op not in STRUCTURE_OPS]

    def replay(self, target: CanvasSurface) -> None:
        """Send the recorded calls to another surface."""
        for call in self.calls:
            getattr(target, call.op)(**call.args)

    def begin_viewport(self, width, height):
        self._record("begin_viewport", width=width, height=height)

    def end_viewport(self):
        self._record("end_viewport")

    def fill_rect(self, x, y, width, height, style):
        self._record("fill_rect", x=x, y=y, width=width, height=height, style=style)

    def fill_ellipse(self, cx, cy, rx, ry, style):
        self._record("fill_ellipse", cx=cx, cy=cy, rx=rx, ry=ry, style=style)

    def fill_polygon(self, xs, ys, style):
        self._record("fill_polygon", xs=list(xs), ys=list(ys), style=style)

    def stroke_line(self, x1, y1, x2, y2, style):
        self._record("stroke_line", x1=x1, y1=y1, x2=x2, y2=y2, style=style)

    def stroke_arc(self, sx, sy, rx, ry, large_arc, sweep, ex, ey, style):
        self._record(
            "stroke_arc", sx=sx, sy=sy, rx=rx, ry=ry,
            large_arc=large_arc, sweep=sweep, ex=ex, ey=ey, style=style,
        )

    def stroke_quadratic_curve(self, x1, y1, cx, cy, x2, y2, style):
        self._record("stroke_quadratic_curve", x1=x1, y1=y1, cx=cx, cy=cy, x2=x2, y2=y2, style=style)

    def place_image(self, x, y, width, height, reference):
        self._record("place_image", x=x, y=y, width=width, height=height, reference=reference)

    def draw_text(self, x, y, text, style=None):
        self._record("draw_text", x=x, y=y, text=text, style=style)

    def begin_group(self, rotation=None, style=None):
        self._record("begin_group", rotation=rotation, style=style)

    def end_group(self):
        self._record("end_group")

    def define_linear_gradient(self, gradient_id, stops):
        self._record("define_linear_gradient", gradient_id=gradient_id, stops=list(stops))

    def fill_with_gradient(self, gradient_id, x, y, width, height):
        self._record("fill_with_gradient", gradient_id=gradient_id, x=x, y=y, width=width, height=height)
