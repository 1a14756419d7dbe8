"""Render drawing commands into PDF content-stream operators."""

from __future__ import annotations

from typing import Iterable

from ..core.utils import get_logger
from .commands import RGB, DrawCommand, FillRect, StrokeLine, StrokeRect, Text

__all__ = [
    "build_content_stream",
    "escape_text",
    "format_color",
    "format_number",
    "render_command",
]

LOGGER = get_logger("actpdf.writer.content")

_ESCAPES = str.maketrans({"\\": "\\\\", "(": "\\(", ")": "\\)"})


def format_number(value: float) -> str:
    """Format a coordinate or dimension with exactly two decimals."""

    # %-formatting ignores the process locale, so the separator is always ".".
    return "%.2f" % float(value)


def format_color(color: RGB) -> str:
    """Format an RGB triple as three components with exactly three decimals."""

    return " ".join("%.3f" % min(1.0, max(0.0, float(component))) for component in color)


def escape_text(value: str) -> str:
    """Escape ``value`` for use inside a PDF literal string."""

    return value.translate(_ESCAPES)


def _rect(x: float, y: float, width: float, height: float) -> str:
    return f"{format_number(x)} {format_number(y)} {format_number(width)} {format_number(height)} re"


def render_command(command: DrawCommand) -> list[str]:
    """Return the operator lines drawing ``command``."""

    if isinstance(command, FillRect):
        return [
            "q",
            f"{format_color(command.color)} rg",
            _rect(command.x, command.y, command.width, command.height),
            "f",
            "Q",
        ]
    if isinstance(command, StrokeRect):
        return [
            "q",
            f"{format_color(command.color)} RG",
            f"{format_number(command.line_width)} w",
            _rect(command.x, command.y, command.width, command.height),
            "S",
            "Q",
        ]
    if isinstance(command, StrokeLine):
        return [
            "q",
            f"{format_color(command.color)} RG",
            f"{format_number(command.line_width)} w",
            f"{format_number(command.x1)} {format_number(command.y1)} m",
            f"{format_number(command.x2)} {format_number(command.y2)} l",
            "S",
            "Q",
        ]
    if isinstance(command, Text):
        return [
            "BT",
            f"/{command.font.value} {format_number(command.size)} Tf",
            f"{format_color(command.color)} rg",
            f"{format_number(command.x)} {format_number(command.y)} Td ({escape_text(command.text)}) Tj",
            "ET",
        ]
    raise TypeError(f"Unsupported draw command: {type(command).__name__}")


def build_content_stream(commands: Iterable[DrawCommand]) -> str:
    """Render ``commands`` in order into the text of a page content stream."""

    lines: list[str] = []
    count = 0
    for command in commands:
        lines.extend(render_command(command))
        count += 1
    LOGGER.debug("Rendered %d draw command(s) into %d operator line(s)", count, len(lines))
    return "\n".join(lines)
