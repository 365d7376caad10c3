"""
compositor.py — One slide, one pass, fixed layer order.

The compositor owns the draw order: background, gradient, then every shape
category in LAYER_ORDER. Within a category entries keep their input order.
Slides are independent; rendering a deck is a loop over slides with a fresh
surface for each.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from ..config import RenderConfig
from ..dsl.schema import Deck, Slide
from .diagnostics import RenderDiagnostics
from .primitives import PrimitiveDrawer
from .surface import CanvasSurface
from .svg_renderer import SVGSurface
from .text_layout import TextLayout
from .units import DEFAULT_FOREGROUND

logger = logging.getLogger(__name__)


LAYER_ORDER = ("image", "rect", "ellipse", "curve", "arc", "line", "poly", "text", "list")


# =============================================================================
# ERRORS
# =============================================================================

class DeckRenderError(Exception):
    """Base class for rendering errors."""


class SlideIndexError(DeckRenderError, IndexError):
    """Requested slide does not exist."""

    def __init__(self, index: int, slide_count: int):
        self.index = index
        self.slide_count = slide_count
        super().__init__(f"slide index {index} out of range (deck has {slide_count} slides)")


# =============================================================================
# SLIDE COMPOSITOR
# =============================================================================

class SlideCompositor:
    """
    Renders a single slide onto a surface.

    Stateless between calls: each compose() builds its own drawer and layout.
    """

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()

    def compose(
        self,
        slide: Slide,
        surface: CanvasSurface,
        cw: float,
        ch: float,
        diagnostics: Optional[RenderDiagnostics] = None,
    ) -> RenderDiagnostics:
        """
        Draw slide on surface at cw x ch.

        Returns the diagnostics for this render (the one passed in, if any).
        """
        diagnostics = diagnostics if diagnostics is not None else RenderDiagnostics()
        drawer = PrimitiveDrawer(surface, cw, ch, self.config.fonts, diagnostics)
        layout = TextLayout(drawer, self.config)

        surface.begin_viewport(cw, ch)

        if slide.bg:
            drawer.background(slide.bg)
        if slide.has_gradient:
            drawer.gradient(slide.gradcolor1, slide.gradcolor2)

        foreground = slide.fg or DEFAULT_FOREGROUND

        for layer in LAYER_ORDER:
            if layer == "image":
                for image in slide.images:
                    drawer.draw_image(image, foreground)
            elif layer == "rect":
                for rect in slide.rects:
                    drawer.draw_rect(rect)
            elif layer == "ellipse":
                for ellipse in slide.ellipses:
                    drawer.draw_ellipse(ellipse)
            elif layer == "curve":
                for curve in slide.curves:
                    drawer.draw_curve(curve)
            elif layer == "arc":
                for arc in slide.arcs:
                    drawer.draw_arc(arc)
            elif layer == "line":
                for line in slide.lines:
                    drawer.draw_line(line)
            elif layer == "poly":
                for polygon in slide.polygons:
                    drawer.draw_polygon(polygon)
            elif layer == "text":
                for text in slide.texts:
                    layout.draw_text(text, foreground)
            elif layer == "list":
                for tlist in slide.lists:
                    layout.draw_list(tlist, foreground)

        surface.end_viewport()
        return diagnostics


# =============================================================================
# DECK RENDERING
# =============================================================================

@dataclass
class RenderResult:
    """Output of rendering a whole deck: one SVG document per slide."""
    title: str
    slide_count: int
    slides: List[str] = field(default_factory=list)
    diagnostics: RenderDiagnostics = field(default_factory=RenderDiagnostics)


class DeckRenderer:
    """Renders decks slide by slide."""

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()
        self.compositor = SlideCompositor(self.config)

    def canvas_size(self, deck: Deck) -> Tuple[float, float]:
        """Deck canvas size, with zero dimensions taken from the config."""
        cw = deck.canvas.width or self.config.width
        ch = deck.canvas.height or self.config.height
        return float(cw), float(ch)

    def render_slide(
        self,
        deck: Deck,
        index: int,
        surface: CanvasSurface,
        diagnostics: Optional[RenderDiagnostics] = None,
    ) -> RenderDiagnostics:
        """Render one slide of deck onto surface; raises SlideIndexError when out of range."""
        if index < 0 or index >= deck.slide_count:
            logger.warning(f"Slide index {index} out of range for deck with {deck.slide_count} slides")
            raise SlideIndexError(index, deck.slide_count)
        cw, ch = self.canvas_size(deck)
        logger.debug(f"Rendering slide {index} at {cw:g}x{ch:g}")
        result = self.compositor.compose(deck.slides[index], surface, cw, ch, diagnostics)
        logger.debug(f"Finished slide {index} ({result.total} anomalies)")
        return result

    def render_svg(self, deck: Deck, index: int) -> Tuple[str, RenderDiagnostics]:
        surface = SVGSurface()
        diagnostics = self.render_slide(deck, index, surface)
        return surface.to_string(), diagnostics

    def render(self, deck: Deck, max_workers: Optional[int] = None) -> RenderResult:
        """
        Render every slide of deck to SVG.

        Slides share nothing but the read-only config, so they may be
        rendered concurrently when max_workers is greater than 1.
        """
        indices = range(deck.slide_count)
        if max_workers and max_workers > 1 and deck.slide_count > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                outputs = list(pool.map(lambda i: self.render_svg(deck, i), indices))
        else:
            outputs = [self.render_svg(deck, i) for i in indices]

        result = RenderResult(title=deck.title, slide_count=deck.slide_count)
        for svg, diagnostics in outputs:
            result.slides.append(svg)
            result.diagnostics.merge(diagnostics)
        logger.info(f"Rendered {result.slide_count} slide(s) of {deck.title or 'untitled deck'!r}")
        return result

    def render_selected(
        self,
        deck: Deck,
        indices: List[int],
        on_error: Optional[Callable[[int, DeckRenderError], None]] = None,
    ) -> List[Optional[str]]:
        """
        Render chosen slides; a bad index yields None for that slide only.
        """
        outputs: List[Optional[str]] = []
        for index in indices:
            try:
                svg, _ = self.render_svg(deck, index)
            except SlideIndexError as e:
                if on_error is not None:
                    on_error(index, e)
                outputs.append(None)
                continue
            outputs.append(svg)
        return outputs


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def render_slide(
    deck: Deck,
    index: int,
    surface: CanvasSurface,
    config: Optional[RenderConfig] = None,
) -> RenderDiagnostics:
    """Render one slide onto any surface."""
    return DeckRenderer(config).render_slide(deck, index, surface)


def render_deck(deck: Deck, config: Optional[RenderConfig] = None) -> RenderResult:
    """Render every slide of a deck to SVG strings."""
    return DeckRenderer(config).render(deck)


def render_to_data_uri(deck: Deck, index: int, config: Optional[RenderConfig] = None) -> str:
    """Render one slide to an SVG data URI (for img src or CSS background)."""
    surface = SVGSurface(indent=False)
    DeckRenderer(config).render_slide(deck, index, surface)
    return surface.to_data_uri()
