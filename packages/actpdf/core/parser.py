"""Structural inspection of PDF buffers written by actpdf.

The inspector reads the raw bytes directly to check what a generated file
promises about itself (header, ``startxref`` pointer, cross-reference
offsets, stream lengths) and then opens the same buffer with
:class:`pypdf.PdfReader` to confirm that a third-party reader accepts it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from .exceptions import InvalidPDFStructureError
from .utils import get_logger, resolve_path

__all__ = ["PdfStructureReport", "inspect_pdf", "inspect_pdf_bytes"]

LOGGER = get_logger("actpdf.core.parser")

_WHITESPACE = b"\x00\t\n\r\f "
_OBJECT_HEADER = re.compile(rb"(?m)^(\d+) 0 obj\b")
_STREAM_START = re.compile(rb"(?s)\s*<<((?:(?!endobj).)*?)>>\s*stream\r?\n")
_ENDSTREAM = re.compile(rb"\r?\nendstream\b")


@dataclass(slots=True)
class PdfStructureReport:
    """Facts recovered from a PDF buffer and the consistency checks derived from them."""

    version: str
    size: int
    startxref: int
    xref_offsets: dict[int, int]
    scanned_offsets: dict[int, int]
    root_ref: int | None
    trailer_size: int | None
    stream_lengths: dict[int, tuple[int, int]] = field(default_factory=dict)
    page_count: int = 0
    media_box: tuple[float, float, float, float] | None = None
    text: str = ""
    problems: list[str] = field(default_factory=list)

    @property
    def object_count(self) -> int:
        return len(self.xref_offsets)

    @property
    def is_consistent(self) -> bool:
        return not self.problems


# -- Utility helpers ---------------------------------------------------------


def _skip_ws(buffer: bytes, index: int) -> int:
    while index < len(buffer) and buffer[index] in _WHITESPACE:
        index += 1
    return index


def _read_int(buffer: bytes, index: int) -> tuple[int, int]:
    index = _skip_ws(buffer, index)
    start = index
    while index < len(buffer) and buffer[index] in b"+-0123456789":
        index += 1
    if start == index:
        raise ValueError("Expected integer in xref table")
    return int(buffer[start:index]), index


def _detect_version(data: bytes) -> str:
    if not data.startswith(b"%PDF-"):
        raise InvalidPDFStructureError("Missing %PDF- header")
    header_line = data.splitlines()[0].decode("latin-1", "ignore")
    return header_line[5:].strip() or "1.0"


def _locate_startxref(data: bytes) -> int:
    marker = b"startxref"
    index = data.rfind(marker)
    if index == -1:
        raise InvalidPDFStructureError("Unable to locate startxref marker")
    for line in data[index + len(marker) :].splitlines():
        stripped = line.strip()
        if stripped.isdigit():
            return int(stripped)
        if stripped:
            break
    raise InvalidPDFStructureError("startxref offset not found")


def _parse_xref_table(data: bytes, start: int) -> tuple[dict[int, int], bytes]:
    """Return in-use offsets keyed by object id and the raw trailer dictionary."""

    offsets: dict[int, int] = {}
    length = len(data)
    index = _skip_ws(data, start + len(b"xref"))

    while index < length:
        if data[index : index + 7] == b"trailer":
            end = data.find(b">>", index)
            return offsets, data[index + 7 : end + 2 if end != -1 else length]
        try:
            start_obj, index = _read_int(data, index)
            count, index = _read_int(data, index)
        except ValueError:
            break
        index = _skip_ws(data, index)
        for i in range(count):
            record = data[index : index + 20]
            if len(record) < 20:
                break
            try:
                offset = int(record[0:10])
            except ValueError:
                break
            if record[17:18] == b"n":
                offsets[start_obj + i] = offset
            index += 20
            while index < length and data[index] in b"\r\n":
                index += 1
        index = _skip_ws(data, index)

    raise InvalidPDFStructureError("Cross-reference table has no trailer")


def _length_value(data: bytes, dictionary: bytes, offsets: dict[int, int]) -> int | None:
    """Resolve the ``/Length`` entry of a stream dictionary, direct or indirect."""

    indirect = re.search(rb"/Length (\d+) 0 R", dictionary)
    if indirect:
        target = offsets.get(int(indirect.group(1)))
        if target is None:
            return None
        end = data.find(b"endobj", target)
        value = re.match(rb"\d+ 0 obj\s+(\d+)\s+$", data[target : end if end != -1 else len(data)])
        return int(value.group(1)) if value else None
    direct = re.search(rb"/Length (\d+)", dictionary)
    return int(direct.group(1)) if direct else None


def _walk_objects(data: bytes) -> tuple[dict[int, int], list[tuple[int, bytes, int]]]:
    """Locate every ``<id> 0 obj`` header that starts a line.

    Stream data is skipped using its declared length, so stream bytes that
    happen to look like an object header are never reported. Returns the
    header offsets and ``(id, dictionary, data start)`` for every stream.
    """

    offsets: dict[int, int] = {}
    streams: list[tuple[int, bytes, int]] = []
    index = 0
    while True:
        match = _OBJECT_HEADER.search(data, index)
        if match is None:
            return offsets, streams
        obj_id = int(match.group(1))
        offsets.setdefault(obj_id, match.start())
        index = match.end()
        stream = _STREAM_START.match(data, index)
        if stream is None:
            continue
        start = stream.end()
        streams.append((obj_id, stream.group(1), start))
        length = _length_value(data, stream.group(1), offsets)
        if length is not None and _ENDSTREAM.match(data, start + length):
            index = start + length
        else:
            end = data.find(b"endstream", start)
            index = end if end != -1 else len(data)


def _stream_lengths(
    data: bytes,
    streams: list[tuple[int, bytes, int]],
    offsets: dict[int, int],
) -> dict[int, tuple[int, int]]:
    """Return ``(declared, actual)`` byte lengths for every stream object."""

    lengths: dict[int, tuple[int, int]] = {}
    for obj_id, dictionary, start in streams:
        declared = _length_value(data, dictionary, offsets)
        if declared is not None and _ENDSTREAM.match(data, start + declared):
            actual = declared
        else:
            end = data.find(b"\nendstream", start)
            actual = (end if end != -1 else len(data)) - start
        lengths[obj_id] = (declared if declared is not None else -1, actual)
    return lengths


def _read_with_pypdf(data: bytes, report: PdfStructureReport) -> None:
    try:
        reader = PdfReader(BytesIO(data))
        report.page_count = len(reader.pages)
        if report.page_count:
            page = reader.pages[0]
            box = page.mediabox
            report.media_box = (float(box.left), float(box.bottom), float(box.right), float(box.top))
            report.text = page.extract_text() or ""
    except PdfReadError as exc:
        report.problems.append(f"pypdf rejected the document: {exc}")


# -- Public API --------------------------------------------------------------


def inspect_pdf_bytes(data: bytes) -> PdfStructureReport:
    """Inspect ``data`` and report structural facts and inconsistencies."""

    version = _detect_version(data)
    startxref = _locate_startxref(data)
    if data[startxref : startxref + 4] != b"xref":
        raise InvalidPDFStructureError(f"startxref {startxref} does not point at an xref table")

    xref_offsets, trailer = _parse_xref_table(data, startxref)
    scanned_offsets, streams = _walk_objects(data)
    root_match = re.search(rb"/Root (\d+) 0 R", trailer)
    size_match = re.search(rb"/Size (\d+)", trailer)
    report = PdfStructureReport(
        version=version,
        size=len(data),
        startxref=startxref,
        xref_offsets=xref_offsets,
        scanned_offsets=scanned_offsets,
        root_ref=int(root_match.group(1)) if root_match else None,
        trailer_size=int(size_match.group(1)) if size_match else None,
    )

    if not data.rstrip().endswith(b"%%EOF"):
        report.problems.append("File does not end with %%EOF")
    expected_ids = list(range(1, len(xref_offsets) + 1))
    if sorted(xref_offsets) != expected_ids:
        report.problems.append(f"Object ids are not contiguous: {sorted(xref_offsets)}")
    if report.trailer_size != len(xref_offsets) + 1:
        report.problems.append(
            f"Trailer /Size {report.trailer_size} does not match {len(xref_offsets) + 1} xref entries"
        )
    if report.root_ref not in xref_offsets:
        report.problems.append(f"Trailer /Root {report.root_ref} is not in the xref table")
    for obj_id, offset in sorted(xref_offsets.items()):
        header = f"{obj_id} 0 obj".encode("ascii")
        if data[offset : offset + len(header)] != header:
            report.problems.append(f"Xref offset {offset} for object {obj_id} does not land on its header")
        if report.scanned_offsets.get(obj_id) != offset:
            report.problems.append(
                f"Scanned offset {report.scanned_offsets.get(obj_id)} for object {obj_id} "
                f"differs from xref offset {offset}"
            )

    report.stream_lengths = _stream_lengths(data, streams, xref_offsets)
    for obj_id, (declared, actual) in sorted(report.stream_lengths.items()):
        if declared != actual:
            report.problems.append(f"Stream {obj_id} declares {declared} byte(s) but holds {actual}")

    _read_with_pypdf(data, report)
    if report.problems:
        LOGGER.debug("Inspection found %d problem(s)", len(report.problems))
    return report


def inspect_pdf(path: str | Path) -> PdfStructureReport:
    """Inspect the PDF file at ``path``."""

    return inspect_pdf_bytes(resolve_path(path).read_bytes())
