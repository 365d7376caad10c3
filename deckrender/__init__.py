"""deckrender — percentage-coordinate slides to vector drawing calls."""

import logging
from typing import Optional, Union

from deckrender.config import FontAliases, RenderConfig, Settings, get_settings
from deckrender.engine import (
    DeckRenderer,
    RecordingSurface,
    SVGSurface,
    SlideIndexError,
    render_deck,
    render_slide,
)

__version__ = "0.1.0"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    """Send deckrender log records to stderr at level (default from settings)."""
    if level is None:
        level = get_settings().log_level
    logger = logging.getLogger("deckrender")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)


__all__ = [
    "DeckRenderer",
    "FontAliases",
    "RecordingSurface",
    "RenderConfig",
    "SVGSurface",
    "Settings",
    "SlideIndexError",
    "configure_logging",
    "get_settings",
    "render_deck",
    "render_slide",
]
