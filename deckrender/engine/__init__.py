# deckrender layout and rendering engine

from .units import (
    DEFAULT_FOREGROUND,
    DEFAULT_SHAPE_COLOR,
    DEFAULT_STROKE_WIDTH,
    pct,
    dimen,
    pwidth,
    radians,
    polar,
)

from .color import (
    FillStyle,
    StrokeStyle,
    TextStyle,
    setop,
    is_hsv,
    hsv_to_rgb,
    resolve_color,
    fill_style,
    stroke_style,
)

from .diagnostics import RenderDiagnostics

from .surface import (
    CanvasSurface,
    RecordingSurface,
    DrawCall,
    GradientStop,
    Rotation,
)

from .svg_renderer import SVGSurface

from .primitives import PrimitiveDrawer, text_anchor

from .text_layout import TextLayout, wrap_lines, estimated_width

from .compositor import (
    LAYER_ORDER,
    DeckRenderError,
    SlideIndexError,
    SlideCompositor,
    DeckRenderer,
    RenderResult,
    render_slide,
    render_deck,
    render_to_data_uri,
)

__all__ = [
    # Geometry
    'DEFAULT_FOREGROUND',
    'DEFAULT_SHAPE_COLOR',
    'DEFAULT_STROKE_WIDTH',
    'pct',
    'dimen',
    'pwidth',
    'radians',
    'polar',
    # Color
    'FillStyle',
    'StrokeStyle',
    'TextStyle',
    'setop',
    'is_hsv',
    'hsv_to_rgb',
    'resolve_color',
    'fill_style',
    'stroke_style',
    # Surfaces
    'CanvasSurface',
    'RecordingSurface',
    'DrawCall',
    'GradientStop',
    'Rotation',
    'SVGSurface',
    # Drawing
    'PrimitiveDrawer',
    'text_anchor',
    'TextLayout',
    'wrap_lines',
    'estimated_width',
    'RenderDiagnostics',
    # Compositor
    'LAYER_ORDER',
    'DeckRenderError',
    'SlideIndexError',
    'SlideCompositor',
    'DeckRenderer',
    'RenderResult',
    'render_slide',
    'render_deck',
    'render_to_data_uri',
]
