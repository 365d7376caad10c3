"""
config.py — Render configuration and environment settings.

FontAliases and RenderConfig are immutable: build them once before rendering
and share them freely between concurrent slide renders.
"""

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional

logger = logging.getLogger(__name__)


# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_WIDTH = 1920
DEFAULT_HEIGHT = 1080

DEFAULT_SANS_FONT = "Helvetica, Arial, sans-serif"
DEFAULT_SERIF_FONT = "Georgia, Times, serif"
DEFAULT_MONO_FONT = "Monaco, Consolas, monospace"

# Approximate glyph advance as a fraction of the font size
DEFAULT_WRAP_FACTOR = 0.65

DEFAULT_LINE_SPACING = 1.4
DEFAULT_LIST_SPACING = 2.0

CODE_RIGHT_INSET = 20.0
CODE_BACKGROUND = "rgb(240,240,240)"


# Load .env file if it exists
def _load_dotenv():
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip()
                    if key and value and key not in os.environ:
                        os.environ[key] = value


# =============================================================================
# FONT ALIASES
# =============================================================================

class FontAliases:
    """
    Read-only table mapping generic font tokens to concrete font families.

    The table always carries ``sans``, ``serif`` and ``mono``. Tokens that are
    not registered resolve to the ``sans`` family.
    """

    SANS = "sans"
    SERIF = "serif"
    MONO = "mono"

    def __init__(
        self,
        sans: str = DEFAULT_SANS_FONT,
        serif: str = DEFAULT_SERIF_FONT,
        mono: str = DEFAULT_MONO_FONT,
        extra: Optional[Mapping[str, str]] = None,
    ):
        table: Dict[str, str] = dict(extra or {})
        table[self.SANS] = sans
        table[self.SERIF] = serif
        table[self.MONO] = mono
        self._table = MappingProxyType(table)

    @property
    def table(self) -> Mapping[str, str]:
        return self._table

    def __contains__(self, token: str) -> bool:
        return token in self._table

    def __eq__(self, other) -> bool:
        if not isinstance(other, FontAliases):
            return NotImplemented
        return dict(self._table) == dict(other._table)

    def __hash__(self) -> int:
        return hash(tuple(sorted(self._table.items())))

    def __repr__(self) -> str:
        return f"FontAliases({dict(self._table)!r})"

    def lookup(self, token: str) -> str:
        """Resolve a font token, falling back to the sans family."""
        family = self._table.get(token)
        if family is None:
            logger.debug(f"Unknown font alias {token!r}, using sans")
            return self._table[self.SANS]
        return family

    def with_alias(self, token: str, family: str) -> "FontAliases":
        """Return a new table with one alias added or replaced."""
        extra = {k: v for k, v in self._table.items()
                 if k not in (self.SANS, self.SERIF, self.MONO)}
        sans = self._table[self.SANS]
        serif = self._table[self.SERIF]
        mono = self._table[self.MONO]
        if token == self.SANS:
            sans = family
        elif token == self.SERIF:
            serif = family
        elif token == self.MONO:
            mono = family
        else:
            extra[token] = family
        return FontAliases(sans=sans, serif=serif, mono=mono, extra=extra)


# =============================================================================
# RENDER CONFIG
# =============================================================================

@dataclass(frozen=True)
class RenderConfig:
    """
    Everything the engine needs besides the slide itself.

    width/height are only used when a deck leaves its canvas size at zero.
    """
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    fonts: FontAliases = field(default_factory=FontAliases)
    wrap_factor: float = DEFAULT_WRAP_FACTOR
    line_spacing: float = DEFAULT_LINE_SPACING
    list_spacing: float = DEFAULT_LIST_SPACING
    code_right_inset: float = CODE_RIGHT_INSET
    code_background: str = CODE_BACKGROUND

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Canvas size must be positive, got {self.width}x{self.height}")


# =============================================================================
# ENVIRONMENT SETTINGS
# =============================================================================

class Settings:
    """Settings loaded from DECKRENDER_* environment variables."""

    def __init__(self):
        self.width: int = int(os.environ.get("DECKRENDER_WIDTH", str(DEFAULT_WIDTH)))
        self.height: int = int(os.environ.get("DECKRENDER_HEIGHT", str(DEFAULT_HEIGHT)))

        # Fonts (CSS font-family values)
        self.sans_font: str = os.environ.get("DECKRENDER_SANS_FONT", DEFAULT_SANS_FONT)
        self.serif_font: str = os.environ.get("DECKRENDER_SERIF_FONT", DEFAULT_SERIF_FONT)
        self.mono_font: str = os.environ.get("DECKRENDER_MONO_FONT", DEFAULT_MONO_FONT)

        self.wrap_factor: float = float(
            os.environ.get("DECKRENDER_WRAP_FACTOR", str(DEFAULT_WRAP_FACTOR))
        )
        self.log_level: str = os.environ.get("DECKRENDER_LOG_LEVEL", "WARNING").upper()

    def font_aliases(self) -> FontAliases:
        return FontAliases(sans=self.sans_font, serif=self.serif_font, mono=self.mono_font)

    def to_render_config(self) -> RenderConfig:
        """Build the immutable render configuration."""
        return RenderConfig(
            width=self.width,
            height=self.height,
            fonts=self.font_aliases(),
            wrap_factor=self.wrap_factor,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance, after loading .env from the working directory."""
    _load_dotenv()
    return Settings()
