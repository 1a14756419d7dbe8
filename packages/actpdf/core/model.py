"""Shared domain models used across actpdf modules."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Callable, Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from babel import Locale, UnknownLocaleError

from .utils import safe_filename_part, update_dict

PAGE_WIDTH = 595.28
PAGE_HEIGHT = 841.89

SUPPORTED_ENCODINGS = ("utf-8", "cp1252")


_RECORD_ALIASES = {
    "productName": "product_name",
    "serialNumber": "serial_number",
    "assignedTo": "assigned_to",
    "assignedEmail": "assigned_email",
    "assignmentDate": "assignment_date",
    "issuerName": "issuer_name",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class AssignmentRecord:
    """Validated assignment data supplied by the inventory back office.

    Every field is optional; the layout substitutes a fallback string for
    anything missing.
    """

    product_name: str | None = None
    serial_number: str | None = None
    assigned_to: str | None = None
    assigned_email: str | None = None
    location: str | None = None
    assignment_date: datetime | str | None = None
    notes: str | None = None
    issuer_name: str | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "AssignmentRecord":
        """Build a record from snake_case or camelCase keys, ignoring unknown keys."""

        known = {item.name for item in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in payload.items():
            name = _RECORD_ALIASES.get(key, key)
            if name in known:
                update_dict(values, **{name: value})
        return cls(**values)


@dataclass(slots=True)
class ActOptions:
    """Options controlling how an assignment act is rendered."""

    locale: str = "es_CL"
    timezone: str = "America/Santiago"
    text_encoding: str = "utf-8"
    issuer_fallback: str = "Responsable no registrado"
    clock: Callable[[], datetime] = field(default=_utcnow)

    def __post_init__(self) -> None:
        encoding = self.text_encoding.lower()
        if encoding not in SUPPORTED_ENCODINGS:
            raise ValueError(
                f"Unsupported text encoding {self.text_encoding!r}; "
                f"expected one of {', '.join(SUPPORTED_ENCODINGS)}"
            )
        self.text_encoding = encoding
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {self.timezone!r}") from exc
        try:
            Locale.parse(self.locale)
        except (UnknownLocaleError, ValueError) as exc:
            raise ValueError(f"Unknown locale: {self.locale!r}") from exc

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> "ActOptions":
        if not payload:
            return cls()
        values: dict[str, Any] = {}
        update_dict(
            values,
            locale=payload.get("locale"),
            timezone=payload.get("timezone"),
            text_encoding=payload.get("text_encoding") or payload.get("textEncoding"),
            issuer_fallback=payload.get("issuer_fallback") or payload.get("issuerFallback"),
        )
        return cls(**values)


def act_filename(record: AssignmentRecord) -> str:
    """Return the attachment filename for ``record``'s act."""

    safe = safe_filename_part(record.product_name, record.serial_number)
    if not safe:
        return "acta-entrega.pdf"
    return f"acta-{safe}.pdf"
