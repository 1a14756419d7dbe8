"""Numbered PDF objects with deferred reference patching.

An :class:`ObjectTable` is owned by a single document build. Objects are
allocated first (bodies may contain ``{{name}}`` placeholder slots for ids
that do not exist yet), placeholders are then resolved, and
:meth:`ObjectTable.seal` verifies the table before it is serialized. The
table moves through :class:`TableState` strictly forward.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from ..core.exceptions import (
    ObjectTableError,
    SerializationStateError,
    StreamLengthMismatchError,
    UnresolvedReferenceError,
)
from ..core.utils import get_logger

__all__ = ["ObjectTable", "PdfObject", "TableState"]

LOGGER = get_logger("actpdf.writer.objects")

_PLACEHOLDER = re.compile(r"\{\{([A-Za-z_][A-Za-z0-9_]*)\}\}")
_REFERENCE = re.compile(r"(?<![0-9.])([0-9]+) 0 R\b")
_LENGTH_REFERENCE = re.compile(r"/Length ([0-9]+) 0 R\b")


class TableState(str, Enum):
    UNPOPULATED = "unpopulated"
    ALLOCATED = "allocated"
    PATCHED = "patched"
    SERIALIZED = "serialized"


@dataclass(slots=True)
class PdfObject:
    """A single indirect object: its id, dictionary/value text and optional stream."""

    id: int
    body: str
    stream: bytes | None = None

    def references(self) -> list[int]:
        return [int(match.group(1)) for match in _REFERENCE.finditer(self.body)]


class ObjectTable:
    """Sequential object id allocator and body store for one document."""

    def __init__(self) -> None:
        self._objects: list[PdfObject] = []
        self._state = TableState.UNPOPULATED

    # -- Introspection -------------------------------------------------------

    @property
    def state(self) -> TableState:
        return self._state

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[PdfObject]:
        return iter(self._objects)

    def get(self, obj_id: int) -> PdfObject:
        if not 1 <= obj_id <= len(self._objects):
            raise ObjectTableError(f"Object {obj_id} is not allocated (table holds 1..{len(self._objects)})")
        return self._objects[obj_id - 1]

    @staticmethod
    def placeholder(name: str) -> str:
        """Return the slot text standing in for the id registered as ``name``."""

        if not re.fullmatch(r"[A-Za-z_][A-Za-z0-9_]*", name):
            raise ValueError(f"Invalid placeholder name: {name!r}")
        return "{{" + name + "}}"

    # -- Objects-Allocated stage ----------------------------------------------

    def _require(self, *states: TableState, action: str) -> None:
        if self._state not in states:
            raise SerializationStateError(f"Cannot {action} while the object table is {self._state.value}")

    def allocate(self, body: str = "", *, stream: bytes | None = None) -> int:
        """Store ``body`` under the next sequential id and return that id."""

        self._require(TableState.UNPOPULATED, TableState.ALLOCATED, action="allocate objects")
        obj_id = len(self._objects) + 1
        self._objects.append(PdfObject(id=obj_id, body=body, stream=stream))
        self._state = TableState.ALLOCATED
        return obj_id

    def patch(self, obj_id: int, placeholder: str, value: str) -> None:
        """Replace the exact text ``placeholder`` in object ``obj_id`` with ``value``."""

        self._require(TableState.ALLOCATED, action="patch objects")
        obj = self.get(obj_id)
        if placeholder not in obj.body:
            raise UnresolvedReferenceError(f"Object {obj_id} does not contain {placeholder!r}")
        obj.body = obj.body.replace(placeholder, value)

    def resolve(self, name: str, target_id: int) -> int:
        """Point every ``{{name}}`` slot at ``target_id``; return how many objects changed."""

        self.get(target_id)
        slot = self.placeholder(name)
        patched = 0
        for obj in self._objects:
            if slot in obj.body:
                self.patch(obj.id, slot, str(target_id))
                patched += 1
        if not patched:
            raise UnresolvedReferenceError(f"No object references placeholder {slot!r}")
        LOGGER.debug("Resolved %s -> object %d in %d object(s)", slot, target_id, patched)
        return patched

    def set_body(self, obj_id: int, body: str) -> None:
        self._require(TableState.ALLOCATED, action="replace object bodies")
        self.get(obj_id).body = body

    def set_stream(self, obj_id: int, data: bytes) -> None:
        self._require(TableState.ALLOCATED, action="attach streams")
        self.get(obj_id).stream = bytes(data)

    def finalize_length(self, length_id: int, data: bytes) -> int:
        """Write the exact byte count of ``data`` as the body of ``length_id``."""

        length = len(data)
        self.set_body(length_id, str(length))
        return length

    # -- Patched stage -------------------------------------------------------

    def seal(self) -> None:
        """Verify every object is fully resolved and freeze the table."""

        if self._state is TableState.PATCHED:
            return
        self._require(TableState.ALLOCATED, action="seal the table")
        for obj in self._objects:
            leftover = _PLACEHOLDER.search(obj.body)
            if leftover:
                raise UnresolvedReferenceError(
                    f"Object {obj.id} still contains placeholder {leftover.group(0)!r}"
                )
            for ref in obj.references():
                if not 1 <= ref <= len(self._objects):
                    raise UnresolvedReferenceError(f"Object {obj.id} references missing object {ref}")
            if obj.stream is not None:
                self._check_stream_length(obj, obj.stream)
        self._state = TableState.PATCHED
        LOGGER.debug("Sealed object table with %d object(s)", len(self._objects))

    def _check_stream_length(self, obj: PdfObject, stream: bytes) -> None:
        match = _LENGTH_REFERENCE.search(obj.body)
        if match:
            declared_text = self.get(int(match.group(1))).body.strip()
        else:
            direct = re.search(r"/Length ([0-9]+)\b(?! 0 R)", obj.body)
            if direct is None:
                raise StreamLengthMismatchError(f"Stream object {obj.id} declares no /Length")
            declared_text = direct.group(1)
        if not declared_text.isdigit() or int(declared_text) != len(stream):
            raise StreamLengthMismatchError(
                f"Stream object {obj.id} declares length {declared_text!r} "
                f"but holds {len(stream)} byte(s)"
            )

    # -- Serialized stage ----------------------------------------------------

    def mark_serialized(self) -> None:
        self._require(TableState.PATCHED, action="serialize")
        self._state = TableState.SERIALIZED
