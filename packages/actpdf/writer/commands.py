"""Drawing primitives placed on the act page.

The four command types form a closed union consumed by
:func:`actpdf.writer.content.render_command`. Coordinates use PDF user space
(origin bottom-left, units in points).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

RGB = tuple[float, float, float]

BLACK: RGB = (0.0, 0.0, 0.0)
WHITE: RGB = (1.0, 1.0, 1.0)


class Font(str, Enum):
    """Logical font resources of the page."""

    REGULAR = "F1"
    BOLD = "F2"

    @property
    def base_font(self) -> str:
        return BASE_FONTS[self]


BASE_FONTS = {
    Font.REGULAR: "Helvetica",
    Font.BOLD: "Helvetica-Bold",
}


@dataclass(frozen=True, slots=True)
class FillRect:
    x: float
    y: float
    width: float
    height: float
    color: RGB


@dataclass(frozen=True, slots=True)
class StrokeRect:
    x: float
    y: float
    width: float
    height: float
    color: RGB
    line_width: float = 1.0


@dataclass(frozen=True, slots=True)
class StrokeLine:
    x1: float
    y1: float
    x2: float
    y2: float
    color: RGB
    line_width: float = 1.0


@dataclass(frozen=True, slots=True)
class Text:
    """A single positioned text run; text is never measured or wrapped."""

    text: str
    x: float
    y: float
    size: float
    font: Font = Font.REGULAR
    color: RGB = BLACK


DrawCommand = Union[FillRect, StrokeRect, StrokeLine, Text]

__all__ = [
    "BASE_FONTS",
    "BLACK",
    "DrawCommand",
    "FillRect",
    "Font",
    "RGB",
    "StrokeLine",
    "StrokeRect",
    "Text",
    "WHITE",
]
