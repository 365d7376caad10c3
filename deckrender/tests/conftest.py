"""Pytest configuration and fixtures."""

import pytest

from deckrender.config import FontAliases, RenderConfig
from deckrender.dsl.schema import Canvas, Deck, Slide
from deckrender.engine.diagnostics import RenderDiagnostics
from deckrender.engine.primitives import PrimitiveDrawer
from deckrender.engine.surface import RecordingSurface
from deckrender.engine.text_layout import TextLayout


@pytest.fixture
def fonts() -> FontAliases:
    """Alias table with easy-to-spot family names."""
    return FontAliases(sans="TestSans", serif="TestSerif", mono="TestMono")


@pytest.fixture
def config(fonts: FontAliases) -> RenderConfig:
    return RenderConfig(width=1000, height=1000, fonts=fonts)


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def diagnostics() -> RenderDiagnostics:
    return RenderDiagnostics()


@pytest.fixture
def drawer(surface, fonts, diagnostics) -> PrimitiveDrawer:
    """Drawer on a 1000 x 1000 canvas."""
    return PrimitiveDrawer(surface, 1000.0, 1000.0, fonts, diagnostics)


@pytest.fixture
def layout(drawer, config) -> TextLayout:
    return TextLayout(drawer, config)


@pytest.fixture
def make_deck():
    """Build a deck from slide keyword dicts on a 1000 x 1000 canvas."""
    def _make(*slides: dict, width: float = 1000, height: float = 1000, title: str = "Test") -> Deck:
        return Deck(
            title=title,
            canvas=Canvas(width=width, height=height),
            slides=[Slide.model_validate(s) for s in slides],
        )
    return _make
