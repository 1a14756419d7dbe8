"""FastAPI application serving assignment act PDFs from the shared library."""

from __future__ import annotations

from typing import Literal

from fastapi import FastAPI, HTTPException, Query
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ConfigDict, Field

from actpdf import ActOptions, ActPdfError, AssignmentRecord, render_assignment_act
from actpdf.core.utils import get_logger

app = FastAPI(title="actpdf API", version="1.0.0")

LOGGER = get_logger("actpdf.backend")


class AssignmentPayload(BaseModel):
    """Assignment record as sent by the inventory front end."""

    model_config = ConfigDict(populate_by_name=True)

    product_name: str | None = Field(None, alias="productName")
    serial_number: str | None = Field(None, alias="serialNumber")
    assigned_to: str | None = Field(None, alias="assignedTo")
    assigned_email: str | None = Field(None, alias="assignedEmail")
    location: str | None = None
    assignment_date: str | None = Field(None, alias="assignmentDate")
    notes: str | None = None
    issuer_name: str | None = Field(None, alias="issuerName")

    def to_record(self) -> AssignmentRecord:
        return AssignmentRecord.from_mapping(self.model_dump())


@app.get("/health", response_class=JSONResponse)
async def health() -> dict[str, str]:
    """Lightweight health endpoint for uptime checks."""
    return {"status": "ok"}


@app.post(
    "/acts/assignment",
    response_class=Response,
    summary="Render a product assignment act",
    response_description="Single-page PDF describing the assignment.",
)
async def render_assignment(
    payload: AssignmentPayload,
    disposition: Literal["attachment", "inline"] = Query(
        "attachment",
        description="Use 'inline' to open the act as a browser preview.",
    ),
    locale: str | None = Query(None, description="Locale used to format the delivery date."),
    timezone: str | None = Query(None, description="Timezone used to format the delivery date."),
) -> Response:
    """Render the assignment act for ``payload`` and return it as a PDF."""

    try:
        options = ActOptions.from_mapping({"locale": locale, "timezone": timezone})
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    record = payload.to_record()
    try:
        result = await run_in_threadpool(render_assignment_act, record, options)
    except ActPdfError as exc:  # pragma: no cover - contract violation inside the writer
        LOGGER.error("Failed to render assignment act: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return Response(
        content=result.data,
        media_type=result.content_type,
        headers={
            "Content-Disposition": f'{disposition}; filename="{result.filename}"',
            "X-Actpdf-Object-Count": str(result.object_count),
        },
    )
