"""Page layout of the product assignment act (acta de entrega).

The layout is a fixed, purely additive sequence of draw commands: a coloured
header band, a framed body holding one label/value block per field and a
signature area. A vertical cursor starts below the header and moves down by
:data:`BLOCK_PITCH` after every block. Text is never measured or wrapped.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time

from babel.dates import format_date, format_time

from ..core.model import PAGE_HEIGHT, PAGE_WIDTH, ActOptions, AssignmentRecord
from ..core.utils import get_logger
from ..writer.commands import BLACK, RGB, WHITE, DrawCommand, FillRect, Font, StrokeLine, StrokeRect, Text

__all__ = [
    "BLOCK_PITCH",
    "LabelBlock",
    "MARGIN",
    "MISSING",
    "build_assignment_commands",
    "format_datetime",
    "safe_text",
]

LOGGER = get_logger("actpdf.layout.assignment")

MARGIN = 40.0
HEADER_HEIGHT = 160.0
ACCENT_HEIGHT = 10.0
BLOCK_PITCH = 50.0
LABEL_VALUE_GAP = 16.0
SIGNATURE_CAPTION_GAP = 14.0

MISSING = "—"

BRAND_PRIMARY: RGB = (0.043, 0.365, 0.639)
BRAND_ACCENT: RGB = (0.898, 0.098, 0.082)
SOFT_BACKGROUND: RGB = (0.957, 0.969, 0.984)
SUBTITLE_GREY: RGB = (0.97, 0.97, 0.97)
SIGNATURE_GREY: RGB = (0.2, 0.2, 0.2)
FOOTNOTE_GREY: RGB = (0.25, 0.25, 0.25)

TITLE = "Acta de Entrega de Producto"
SUBTITLE = "Registro formal de asignación generado por Bodega"
EMAIL_FALLBACK = "Correo no registrado"


def safe_text(value: object, fallback: str = MISSING) -> str:
    """Return ``value`` as text, or ``fallback`` when it is missing or blank."""

    if value is None:
        return fallback
    text = str(value)
    if not text.strip():
        return fallback
    return text


def _coerce_datetime(value: datetime | date | str, options: ActOptions) -> datetime | None:
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime.combine(value, time())
    else:
        raw = str(value).strip()
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(raw)
        except ValueError:
            return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=options.tzinfo)
    return moment


def format_datetime(value: datetime | date | str | None, options: ActOptions | None = None) -> str:
    """Format ``value`` as a long local date followed by a short time.

    ``None`` or blank input falls back to ``options.clock()``. Strings that are
    not ISO-8601 are returned unchanged.
    """

    options = options or ActOptions()
    if value is None or (isinstance(value, str) and not value.strip()):
        value = options.clock()
    moment = _coerce_datetime(value, options)
    if moment is None:
        LOGGER.warning("Unparseable assignment date %r; rendering it verbatim", value)
        return str(value)
    zone = options.tzinfo
    try:
        local = moment.astimezone(zone)
        day = format_date(local.date(), format="full", locale=options.locale)
        clock = format_time(local, format="short", tzinfo=zone, locale=options.locale)
    except (OverflowError, ValueError):
        LOGGER.warning("Assignment date %r is out of range in %s; rendering it verbatim", value, options.timezone)
        return str(value)
    return f"{day}, {clock}"


@dataclass(frozen=True, slots=True)
class LabelBlock:
    """A bold label with its value drawn directly underneath."""

    label: str
    value: str

    def commands(self, x: float, y: float) -> list[DrawCommand]:
        return [
            Text(self.label, x, y, 12, Font.BOLD, BRAND_PRIMARY),
            Text(self.value, x, y - LABEL_VALUE_GAP, 12, Font.REGULAR, BLACK),
        ]


def _label_blocks(record: AssignmentRecord, options: ActOptions) -> list[LabelBlock]:
    product = f"{safe_text(record.product_name)} (Serie: {safe_text(record.serial_number)})"
    assignee = f"{safe_text(record.assigned_to)} — {safe_text(record.assigned_email, EMAIL_FALLBACK)}"
    blocks = [
        LabelBlock("Producto asignado", product),
        LabelBlock("Fecha y hora de entrega", format_datetime(record.assignment_date, options)),
        LabelBlock(
            "Responsable de bodega (quien entrega)",
            safe_text(record.issuer_name, options.issuer_fallback),
        ),
        LabelBlock("Asignado a", assignee),
        LabelBlock("Ubicación de entrega", safe_text(record.location)),
    ]
    if safe_text(record.notes, ""):
        blocks.append(LabelBlock("Observaciones", str(record.notes)))
    return blocks


def _header() -> list[DrawCommand]:
    return [
        FillRect(0, PAGE_HEIGHT - HEADER_HEIGHT, PAGE_WIDTH, HEADER_HEIGHT, BRAND_PRIMARY),
        FillRect(0, PAGE_HEIGHT - HEADER_HEIGHT - ACCENT_HEIGHT, PAGE_WIDTH, ACCENT_HEIGHT, BRAND_ACCENT),
        Text(TITLE, MARGIN, PAGE_HEIGHT - 70, 26, Font.BOLD, WHITE),
        Text(SUBTITLE, MARGIN, PAGE_HEIGHT - 95, 12, Font.REGULAR, SUBTITLE_GREY),
    ]


def _body_frame() -> list[DrawCommand]:
    x = MARGIN
    y = MARGIN + 120
    width = PAGE_WIDTH - MARGIN * 2
    height = PAGE_HEIGHT - 320
    return [
        FillRect(x, y, width, height, SOFT_BACKGROUND),
        StrokeRect(x, y, width, height, BRAND_PRIMARY, 1),
    ]


def _signature_area() -> list[DrawCommand]:
    signature_y = MARGIN + 170
    line_width = (PAGE_WIDTH - MARGIN * 2 - 40) / 2
    left = MARGIN + 10
    right = MARGIN + 30 + line_width
    caption_y = signature_y - SIGNATURE_CAPTION_GAP
    return [
        Text("Firmas de recepción", left, signature_y + 40, 14, Font.BOLD, BRAND_PRIMARY),
        StrokeLine(left, signature_y, left + line_width, signature_y, SIGNATURE_GREY, 1),
        Text("Entrega - Responsable de bodega", left, caption_y, 11),
        StrokeLine(right, signature_y, right + line_width, signature_y, SIGNATURE_GREY, 1),
        Text("Recepción - Persona asignada", right, caption_y, 11),
        Text(
            "Al firmar, ambas partes confirman la recepción conforme del producto.",
            left,
            MARGIN + 120,
            11,
            Font.REGULAR,
            FOOTNOTE_GREY,
        ),
    ]


def build_assignment_commands(
    record: AssignmentRecord,
    options: ActOptions | None = None,
) -> list[DrawCommand]:
    """Map ``record`` to the ordered draw commands of the act page."""

    options = options or ActOptions()
    commands: list[DrawCommand] = []
    commands.extend(_header())
    commands.extend(_body_frame())

    cursor_y = PAGE_HEIGHT - 200
    blocks = _label_blocks(record, options)
    for block in blocks:
        commands.extend(block.commands(MARGIN + 10, cursor_y))
        cursor_y -= BLOCK_PITCH

    commands.extend(_signature_area())
    LOGGER.debug("Laid out %d label block(s) into %d command(s)", len(blocks), len(commands))
    return commands
