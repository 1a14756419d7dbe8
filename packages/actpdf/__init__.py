"""
actpdf - hand-written PDF 1.4 writer for product assignment acts.

The package renders one fixed A4 page describing the delivery of an
inventory item to a person, without any PDF formatting library: objects,
the content stream, byte offsets and the cross-reference table are all
produced here.

Quick Start:
    >>> from actpdf import AssignmentRecord, build_assignment_act
    >>> record = AssignmentRecord(product_name="Laptop X1", serial_number="SN123")
    >>> data = build_assignment_act(record)
    >>> data[:8]
    b'%PDF-1.4'

Main API:
    - build_assignment_act: record -> PDF bytes
    - render_assignment_act: record -> ActRenderResult (bytes plus offsets)
    - inspect_pdf_bytes: structural report of a PDF buffer

For CLI usage, use the 'actpdf' command after installation.
"""

from __future__ import annotations

from .core.exceptions import (
    ActPdfError,
    InvalidPDFStructureError,
    ObjectTableError,
    SerializationStateError,
    StreamLengthMismatchError,
    UnresolvedReferenceError,
)
from .core.model import PAGE_HEIGHT, PAGE_WIDTH, ActOptions, AssignmentRecord, act_filename
from .core.parser import PdfStructureReport, inspect_pdf, inspect_pdf_bytes
from .document import ActRenderResult, DocumentBuilder, build_assignment_act, render_assignment_act
from .layout import build_assignment_commands

__version__ = "1.0.0"

__all__ = [
    "ActOptions",
    "ActPdfError",
    "ActRenderResult",
    "AssignmentRecord",
    "DocumentBuilder",
    "InvalidPDFStructureError",
    "ObjectTableError",
    "PAGE_HEIGHT",
    "PAGE_WIDTH",
    "PdfStructureReport",
    "SerializationStateError",
    "StreamLengthMismatchError",
    "UnresolvedReferenceError",
    "act_filename",
    "build_assignment_act",
    "build_assignment_commands",
    "inspect_pdf",
    "inspect_pdf_bytes",
    "render_assignment_act",
    "__version__",
]
