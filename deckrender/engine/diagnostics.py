"""
diagnostics.py — Observable record of anomalies absorbed during a render.

The engine never fails on malformed shapes; it skips or substitutes and
notes the event here. One instance per render; not shared between threads.
"""

import logging
from dataclasses import dataclass, field
from typing import List

logger = logging.getLogger(__name__)


@dataclass
class RenderDiagnostics:
    """Counters and messages for degraded rendering."""
    skipped_polygons: int = 0
    hsv_fallbacks: int = 0
    font_fallbacks: int = 0
    messages: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.skipped_polygons + self.hsv_fallbacks + self.font_fallbacks

    @property
    def clean(self) -> bool:
        return self.total == 0

    def polygon_skipped(self, x_count: int, y_count: int) -> None:
        self.skipped_polygons += 1
        self._note(f"Skipped polygon with {x_count} x and {y_count} y coordinates")

    def hsv_fallback(self, token: str) -> None:
        self.hsv_fallbacks += 1
        self._note(f"HSV color {token!r} out of range, using black")

    def font_fallback(self, token: str) -> None:
        self.font_fallbacks += 1
        self._note(f"Unknown font alias {token!r}, using sans")

    def merge(self, other: "RenderDiagnostics") -> None:
        """Fold another render's diagnostics into this one."""
        self.skipped_polygons += other.skipped_polygons
        self.hsv_fallbacks += other.hsv_fallbacks
        self.font_fallbacks += other.font_fallbacks
        self.messages.extend(other.messages)

    def _note(self, message: str) -> None:
        logger.debug(message)
        self.messages.append(message)
