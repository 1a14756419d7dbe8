"""Assemble the single-page assignment act PDF.

:class:`DocumentBuilder` owns one :class:`~actpdf.writer.objects.ObjectTable`
and drives it through a single straight-line pass: allocate every object,
resolve forward references, record the content length, seal and serialize.
A builder produces exactly one document; build a new one per request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .core.model import PAGE_HEIGHT, PAGE_WIDTH, ActOptions, AssignmentRecord, act_filename
from .core.utils import get_logger
from .layout.assignment import build_assignment_commands
from .writer.commands import DrawCommand, Font
from .writer.content import build_content_stream, format_number
from .writer.objects import ObjectTable
from .writer.xref import SerializedDocument, XrefWriter

__all__ = [
    "ActRenderResult",
    "DocumentBuilder",
    "build_assignment_act",
    "render_assignment_act",
]

LOGGER = get_logger("actpdf.document")

PDF_CONTENT_TYPE = "application/pdf"


@dataclass(slots=True)
class ActRenderResult:
    """Rendered act bytes plus the facts callers use for transport and checks."""

    data: bytes
    filename: str
    object_count: int
    content_length: int
    xref_offset: int
    offsets: dict[int, int] = field(default_factory=dict)
    content_type: str = PDF_CONTENT_TYPE


class DocumentBuilder:
    """Builds one single-page PDF from an ordered list of draw commands."""

    def __init__(self, options: ActOptions | None = None) -> None:
        self.options = options or ActOptions()
        self.table = ObjectTable()
        self.content_length: int | None = None

    def _font_body(self, font: Font) -> str:
        body = f"<< /Type /Font /Subtype /Type1 /BaseFont /{font.base_font}"
        if self.options.text_encoding == "cp1252":
            body += " /Encoding /WinAnsiEncoding"
        return body + " >>"

    def encode_content(self, content: str) -> bytes:
        return content.encode(self.options.text_encoding, errors="replace")

    def build(self, commands: Iterable[DrawCommand]) -> SerializedDocument:
        data = self.encode_content(build_content_stream(commands))
        table = self.table

        length_id = table.allocate("0")
        content_id = table.allocate(f"<< /Length {length_id} 0 R >>")
        regular_id = table.allocate(self._font_body(Font.REGULAR))
        bold_id = table.allocate(self._font_body(Font.BOLD))
        media_box = f"[0 0 {format_number(PAGE_WIDTH)} {format_number(PAGE_HEIGHT)}]"
        page_id = table.allocate(
            f"<< /Type /Page /Parent {table.placeholder('pages')} 0 R /MediaBox {media_box} "
            f"/Resources << /Font << /{Font.REGULAR.value} {regular_id} 0 R "
            f"/{Font.BOLD.value} {bold_id} 0 R >> >> /Contents {content_id} 0 R >>"
        )
        pages_id = table.allocate(f"<< /Type /Pages /Count 1 /Kids [{page_id} 0 R] >>")
        catalog_id = table.allocate(f"<< /Type /Catalog /Pages {pages_id} 0 R >>")

        table.resolve("pages", pages_id)
        table.set_stream(content_id, data)
        self.content_length = table.finalize_length(length_id, data)
        table.seal()
        return XrefWriter(table).serialize(catalog_id)


def render_assignment_act(
    record: AssignmentRecord,
    options: ActOptions | None = None,
) -> ActRenderResult:
    """Render ``record`` into a PDF and return the bytes with build details."""

    options = options or ActOptions()
    commands = build_assignment_commands(record, options)
    builder = DocumentBuilder(options)
    document = builder.build(commands)
    LOGGER.debug(
        "Rendered assignment act for %r: %d object(s), %d byte(s)",
        record.product_name,
        document.object_count,
        len(document.data),
    )
    return ActRenderResult(
        data=document.data,
        filename=act_filename(record),
        object_count=document.object_count,
        content_length=builder.content_length or 0,
        xref_offset=document.xref_offset,
        offsets=dict(document.offsets),
    )


def build_assignment_act(record: AssignmentRecord, options: ActOptions | None = None) -> bytes:
    """Return the PDF bytes of the assignment act for ``record``."""

    return render_assignment_act(record, options).data
