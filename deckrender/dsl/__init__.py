"""Slide record data model."""

from deckrender.dsl.schema import (
    Arc,
    Canvas,
    Curve,
    Deck,
    Ellipse,
    Image,
    Line,
    ListItem,
    Polygon,
    Rect,
    ShapeEntry,
    Slide,
    Text,
    TextList,
)

__all__ = [
    "Arc",
    "Canvas",
    "Curve",
    "Deck",
    "Ellipse",
    "Image",
    "Line",
    "ListItem",
    "Polygon",
    "Rect",
    "ShapeEntry",
    "Slide",
    "Text",
    "TextList",
]
