"""
text_layout.py — Text runs and lists.

Line breaking here is a heuristic, not glyph measurement: a line is
considered full once font_size * characters * wrap_factor passes the wrap
limit. The line that crosses the limit is kept whole, so a wrapped line can
overflow by at most one word.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..config import RenderConfig
from ..dsl.schema import Text, TextList
from .color import TextStyle, fill_style, setop
from .primitives import PrimitiveDrawer
from .surface import Rotation
from .units import dimen

logger = logging.getLogger(__name__)

# Literal two-character token that forces a break inside block text
LINE_BREAK_TOKEN = "\\n"

MODE_PLAIN = "plain"
MODE_BLOCK = "block"
MODE_CODE = "code"

LIST_BULLET = "bullet"
LIST_NUMBER = "number"


def wrap_lines(text: str, font_size: float, width: float, x: float, wrap_factor: float) -> List[str]:
    """
    Break text into lines for block mode.

    Words are separated by spaces, tabs or newlines. The break test is
    ``font_size * len(line) * wrap_factor > width + x`` where ``line`` carries
    a trailing space after every word. A ``\\n`` token ends the current line;
    on an empty line it yields a blank line. Returned lines keep their
    position: entry i is drawn i line-spacings below the first.
    """
    lines: List[str] = []
    line = ""
    for word in text.replace("\t", " ").replace("\n", " ").split(" "):
        if not word:
            continue
        if word == LINE_BREAK_TOKEN:
            lines.append(line.rstrip())
            line = ""
            continue
        line += word + " "
        if font_size * len(line) * wrap_factor > (width + x):
            lines.append(line.rstrip())
            line = ""
    if line:
        lines.append(line.rstrip())
    return lines


def estimated_width(line: str, font_size: float, wrap_factor: float) -> float:
    """Approximate rendered width of a line."""
    return font_size * len(line) * wrap_factor


@dataclass(frozen=True)
class TextPlacement:
    """Absolute anchor and size of a text run or list."""
    x: float
    y: float
    font_size: float
    leading: float


class TextLayout:
    """Lays out text runs and lists through a PrimitiveDrawer."""

    def __init__(self, drawer: PrimitiveDrawer, config: RenderConfig):
        self.drawer = drawer
        self.config = config

    @property
    def surface(self):
        return self.drawer.surface

    def _rotate(self, rotation: float, x: float, y: float) -> bool:
        if rotation > 0:
            self.surface.begin_group(rotation=Rotation(rotation, x, y))
            return True
        return False

    # =========================================================================
    # TEXT RUNS
    # =========================================================================

    def place_text(self, text: Text) -> TextPlacement:
        x, y, fs = dimen(self.drawer.cw, self.drawer.ch, text.xp, text.yp, text.sp)
        spacing = text.lp if text.lp != 0 else self.config.line_spacing
        return TextPlacement(x, y, fs, spacing * fs)

    def draw_text(self, text: Text, foreground: str) -> None:
        """Draw a text run in plain, code or block mode."""
        place = self.place_text(text)
        color = text.color or foreground
        font = text.font or "sans"
        lines = text.content.split("\n")

        rotated = self._rotate(text.rotation, place.x, place.y)

        if text.type == MODE_CODE:
            font = "mono"
            self._code_background(place, len(lines), text.opacity)

        if text.type == MODE_BLOCK:
            self._draw_block(text, place, font, color)
        else:
            opacity = setop(text.opacity)
            y = place.y
            for line in lines:
                self.drawer.text(place.x, y, line, place.font_size, font, color, text.align, opacity)
                y += place.leading

        if rotated:
            self.surface.end_group()

    def _code_background(self, place: TextPlacement, line_count: int, opacity: float) -> None:
        height = line_count * place.leading
        width = self.drawer.cw - place.x - self.config.code_right_inset
        style = fill_style(self.config.code_background, opacity, self.drawer.diagnostics)
        self.surface.fill_rect(place.x - place.font_size, place.y - place.font_size, width, height, style)

    def block_width(self, wp: float) -> float:
        """Wrap width: half the canvas unless wp is set."""
        if wp == 0:
            return self.drawer.cw / 2
        return self.drawer.cw * (wp / 100.0)

    def _draw_block(self, text: Text, place: TextPlacement, font: str, color: str) -> None:
        width = self.block_width(text.wp)
        lines = wrap_lines(text.content, place.font_size, width, place.x, self.config.wrap_factor)
        logger.debug(f"Wrapped block text into {len(lines)} line(s) at width {width:.2f}")

        style = TextStyle(
            color=self.drawer.color(color),
            opacity=setop(text.opacity),
            font_size=place.font_size,
            font_family=self.drawer.font_family(font),
        )
        self.surface.begin_group(style=style)
        for i, line in enumerate(lines):
            if line:
                self.surface.draw_text(place.x, place.y + i * place.leading, line)
        self.surface.end_group()

    # =========================================================================
    # LISTS
    # =========================================================================

    def draw_list(self, tlist: TextList, foreground: str) -> None:
        """Draw a bullet, numbered or plain list; items may override color, font and opacity."""
        x, y, fs = dimen(self.drawer.cw, self.drawer.ch, tlist.xp, tlist.yp, tlist.sp)
        spacing = tlist.lp if tlist.lp != 0 else self.config.list_spacing
        leading = spacing * fs
        color = tlist.color or foreground
        font = tlist.font or "sans"

        rotated = self._rotate(tlist.rotation, x, y)

        opacity = setop(tlist.opacity)
        group_style = TextStyle(
            color=self.drawer.color(color),
            opacity=opacity,
            font_size=fs,
            font_family=self.drawer.font_family(font),
        )
        self.surface.begin_group(style=group_style)

        if tlist.type == LIST_BULLET:
            x += fs
        anchor = "middle" if tlist.align in ("center", "c") else None

        for i, item in enumerate(tlist.items):
            if tlist.type == LIST_NUMBER:
                label = f"{i + 1}. {item.text}"
            else:
                label = item.text
            if tlist.type == LIST_BULLET:
                self.drawer.bullet(x, y, fs, color, opacity)
            self.surface.draw_text(x, y, label, self._item_style(item, anchor))
            y += leading

        self.surface.end_group()
        if rotated:
            self.surface.end_group()

    def _item_style(self, item, anchor: Optional[str]) -> TextStyle:
        # unset fields inherit from the list group
        return TextStyle(
            color=self.drawer.color(item.color) if item.color else None,
            opacity=setop(item.opacity) if item.opacity != 0 else None,
            font_family=self.drawer.font_family(item.font) if item.font else None,
            anchor=anchor,
        )
