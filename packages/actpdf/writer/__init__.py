"""Hand-written PDF 1.4 object, content-stream and cross-reference writers."""

from __future__ import annotations

from .commands import BASE_FONTS, DrawCommand, FillRect, Font, StrokeLine, StrokeRect, Text
from .content import build_content_stream, escape_text, format_color, format_number, render_command
from .objects import ObjectTable, PdfObject, TableState
from .xref import PDF_EOF, PDF_HEADER, SerializedDocument, XrefWriter

__all__ = [
    "BASE_FONTS",
    "DrawCommand",
    "FillRect",
    "Font",
    "ObjectTable",
    "PDF_EOF",
    "PDF_HEADER",
    "PdfObject",
    "SerializedDocument",
    "StrokeLine",
    "StrokeRect",
    "TableState",
    "Text",
    "XrefWriter",
    "build_content_stream",
    "escape_text",
    "format_color",
    "format_number",
    "render_command",
]
