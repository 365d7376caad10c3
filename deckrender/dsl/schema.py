"""Pydantic v2 models for the slide record.

A deck is a list of slides, each holding shape entries grouped by category.
All positions and sizes are percentages of the canvas: x grows to the right,
y grows upwards (0 is the bottom edge, 100 the top edge). Colors are CSS
color strings or ``hsv(h,s,v)`` expressions. Opacity follows the deck
convention: 0 is opaque, a negative value is fully transparent and a positive
value is a percentage.
"""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator


def _parse_coordinates(value: Any) -> Any:
    """Accept coordinate lists as space-separated strings; bad entries become 0."""
    if isinstance(value, str):
        coords = []
        for token in value.split(" "):
            try:
                coords.append(float(token))
            except ValueError:
                coords.append(0.0)
        return coords
    return value


def _parse_switch(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower() in ("on", "true", "yes", "1")
    return value


CoordinateList = Annotated[list[float], BeforeValidator(_parse_coordinates)]
Switch = Annotated[bool, BeforeValidator(_parse_switch)]


# ============================================================================
# Shape Models
# ============================================================================


class ShapeEntry(BaseModel):
    """Fields shared by every shape entry."""

    model_config = ConfigDict(frozen=True)

    xp: float = Field(default=0.0, description="X position, percent of canvas width")
    yp: float = Field(default=0.0, description="Y position, percent of canvas height")
    sp: float = Field(default=0.0, description="Size control (stroke width or font size), percent of canvas width")
    color: str = Field(default="", description="Color token; empty means category default")
    opacity: float = Field(default=0.0, description="Opacity control (0 = opaque)")


class Rect(ShapeEntry):
    """Filled rectangle, positioned by its center."""

    wp: float = Field(default=0.0, description="Width, percent of canvas width")
    hp: float = Field(default=0.0, description="Height, percent of canvas height")
    hr: float = Field(default=0.0, description="Height as a percentage of the computed width; overrides hp")


class Ellipse(Rect):
    """Filled ellipse, positioned by its center."""


class Line(ShapeEntry):
    """Straight stroked line."""

    xp1: float = 0.0
    yp1: float = 0.0
    xp2: float = 0.0
    yp2: float = 0.0


class Curve(ShapeEntry):
    """Quadratic Bezier: start, control point, end."""

    xp1: float = 0.0
    yp1: float = 0.0
    xp2: float = 0.0
    yp2: float = 0.0
    xp3: float = 0.0
    yp3: float = 0.0


class Arc(ShapeEntry):
    """Elliptical arc around (xp, yp), from angle a1 to a2 (degrees, counter-clockwise)."""

    wp: float = Field(default=0.0, description="Arc width, percent of canvas width")
    hp: float = Field(default=0.0, description="Arc height, percent of canvas width")
    a1: float = Field(default=0.0, description="Start angle in degrees")
    a2: float = Field(default=0.0, description="End angle in degrees")


class Polygon(ShapeEntry):
    """Filled polygon given by parallel x and y percentage lists."""

    xc: CoordinateList = Field(default_factory=list, description="X coordinates, percent of canvas width")
    yc: CoordinateList = Field(default_factory=list, description="Y coordinates, percent of canvas height")

    @property
    def is_well_formed(self) -> bool:
        """True when both lists have the same length and at least three points."""
        return len(self.xc) == len(self.yc) and len(self.xc) >= 3


class Image(ShapeEntry):
    """Raster image placed by its center, with an optional caption."""

    name: str = Field(default="", description="Image reference, resolved by the surface")
    width: int = Field(default=0, description="Image width in pixels")
    height: int = Field(default=0, description="Image height in pixels")
    scale: float = Field(default=0.0, description="Scale percentage (0 = unscaled)")
    autoscale: Switch = Field(default=False, description="Stretch to canvas width when narrower")
    caption: str = ""
    font: str = ""
    align: str = ""


# ============================================================================
# Text Models
# ============================================================================


class Text(ShapeEntry):
    """A text run. ``type`` is ``plain`` (or empty), ``block`` or ``code``."""

    tdata: str = Field(default="", description="Literal text, may contain line breaks")
    file: str = Field(default="", description="Pre-loaded file content; takes precedence over tdata")
    font: str = ""
    align: str = ""
    type: str = ""
    wp: float = Field(default=0.0, description="Wrap width, percent of canvas width (block mode)")
    lp: float = Field(default=0.0, description="Line spacing multiplier (0 = default)")
    rotation: float = Field(default=0.0, description="Rotation in degrees")

    @property
    def content(self) -> str:
        return self.file if self.file else self.tdata


class ListItem(BaseModel):
    """One list entry with optional per-item overrides."""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    color: str = ""
    font: str = ""
    opacity: float = 0.0


class TextList(ShapeEntry):
    """A list of items. ``type`` is ``bullet``, ``number`` or plain."""

    items: list[ListItem] = Field(default_factory=list)
    font: str = ""
    align: str = ""
    type: str = ""
    wp: float = 0.0
    lp: float = Field(default=0.0, description="Line spacing multiplier (0 = default)")
    rotation: float = 0.0

    @field_validator("items", mode="before")
    @classmethod
    def _coerce_items(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [{"text": item} if isinstance(item, str) else item for item in value]
        return value


# ============================================================================
# Slide & Deck Models
# ============================================================================


class Slide(BaseModel):
    """One slide: optional background, gradient, foreground and shape entries."""

    model_config = ConfigDict(frozen=True)

    bg: str = Field(default="", description="Background color")
    gradcolor1: str = Field(default="", description="Gradient top color")
    gradcolor2: str = Field(default="", description="Gradient bottom color")
    fg: str = Field(default="", description="Default text color")

    images: list[Image] = Field(default_factory=list)
    rects: list[Rect] = Field(default_factory=list)
    ellipses: list[Ellipse] = Field(default_factory=list)
    curves: list[Curve] = Field(default_factory=list)
    arcs: list[Arc] = Field(default_factory=list)
    lines: list[Line] = Field(default_factory=list)
    polygons: list[Polygon] = Field(default_factory=list)
    texts: list[Text] = Field(default_factory=list)
    lists: list[TextList] = Field(default_factory=list)

    @property
    def has_gradient(self) -> bool:
        return bool(self.gradcolor1) and bool(self.gradcolor2)


class Canvas(BaseModel):
    """Canvas size in absolute units; zero means "use the configured default"."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(default=0, ge=0)
    height: float = Field(default=0, ge=0)


class Deck(BaseModel):
    """A complete presentation."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    canvas: Canvas = Field(default_factory=Canvas)
    slides: list[Slide] = Field(default_factory=list)

    @property
    def slide_count(self) -> int:
        return len(self.slides)

