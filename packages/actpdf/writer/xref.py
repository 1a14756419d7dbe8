"""Serialize a sealed :class:`ObjectTable` into a complete PDF 1.4 file."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..core.exceptions import SerializationStateError, UnresolvedReferenceError
from ..core.utils import get_logger
from .objects import ObjectTable, TableState

__all__ = ["PDF_HEADER", "PDF_EOF", "SerializedDocument", "XrefWriter"]

LOGGER = get_logger("actpdf.writer.xref")

PDF_HEADER = b"%PDF-1.4\n"
PDF_EOF = b"%%EOF"

FREE_ENTRY = b"0000000000 65535 f \n"


@dataclass(slots=True)
class SerializedDocument:
    """Final file bytes together with the layout facts recorded while writing."""

    data: bytes
    offsets: dict[int, int] = field(default_factory=dict)
    xref_offset: int = 0
    root_id: int = 0

    @property
    def object_count(self) -> int:
        return len(self.offsets)


class XrefWriter:
    """Writes objects in ascending id order followed by the xref table and trailer."""

    def __init__(self, table: ObjectTable) -> None:
        self.table = table

    def serialize(self, root_id: int) -> SerializedDocument:
        table = self.table
        if table.state is not TableState.PATCHED:
            raise SerializationStateError(
                f"Object table must be sealed before serialization (state: {table.state.value})"
            )
        if root_id not in {obj.id for obj in table}:
            raise UnresolvedReferenceError(f"Root object {root_id} is not allocated")

        buffer = bytearray(PDF_HEADER)
        offsets: dict[int, int] = {}
        for obj in table:
            offsets[obj.id] = len(buffer)
            buffer += f"{obj.id} 0 obj\n{obj.body}\n".encode("ascii")
            if obj.stream is not None:
                buffer += b"stream\n"
                buffer += obj.stream
                buffer += b"\nendstream\n"
            buffer += b"endobj\n"

        size = len(offsets) + 1
        xref_offset = len(buffer)
        buffer += b"xref\n"
        buffer += f"0 {size}\n".encode("ascii")
        buffer += FREE_ENTRY
        for obj_id in sorted(offsets):
            buffer += f"{offsets[obj_id]:010d} 00000 n \n".encode("ascii")
        buffer += f"trailer\n<< /Size {size} /Root {root_id} 0 R >>\n".encode("ascii")
        buffer += f"startxref\n{xref_offset}\n".encode("ascii")
        buffer += PDF_EOF

        table.mark_serialized()
        LOGGER.debug(
            "Serialized %d object(s) into %d byte(s); xref at %d",
            len(offsets),
            len(buffer),
            xref_offset,
        )
        return SerializedDocument(
            data=bytes(buffer),
            offsets=offsets,
            xref_offset=xref_offset,
            root_id=root_id,
        )
