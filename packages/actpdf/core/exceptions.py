"""
Custom exceptions for actpdf.

The writer never fails because of missing input data; every exception below
signals a broken internal contract (an unpatched reference, a stream whose
declared length is wrong, a pipeline stage entered twice) or, for
:class:`InvalidPDFStructureError`, a file that fails structural inspection.
"""

from __future__ import annotations


class ActPdfError(Exception):
    """Base exception for all actpdf errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown actpdf error occurred."


class ObjectTableError(ActPdfError):
    """Raised when an object id is unknown to the object table."""

    @property
    def default_message(self) -> str:
        return "Object id is not allocated in this document."


class UnresolvedReferenceError(ObjectTableError):
    """Raised when a placeholder or indirect reference cannot be resolved."""

    @property
    def default_message(self) -> str:
        return "Document contains an unresolved object reference."


class StreamLengthMismatchError(ObjectTableError):
    """Raised when a stream's declared length differs from its byte count."""

    @property
    def default_message(self) -> str:
        return "Declared stream length does not match the encoded stream."


class SerializationStateError(ActPdfError):
    """Raised when a build stage is entered out of order or re-entered."""

    @property
    def default_message(self) -> str:
        return "Operation is not allowed in the current build stage."


class InvalidPDFStructureError(ActPdfError):
    """Raised when a PDF buffer fails structural inspection."""

    @property
    def default_message(self) -> str:
        return "PDF buffer has an invalid structure."
