from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Callable
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
for candidate in (PROJECT_ROOT, PROJECT_ROOT / "packages"):
    if str(candidate) not in sys.path:
        sys.path.insert(0, str(candidate))

from actpdf import ActOptions, AssignmentRecord, render_assignment_act  # noqa: E402

FIXED_NOW = datetime(2024, 3, 1, 13, 30, tzinfo=timezone.utc)


@pytest.fixture()
def options() -> ActOptions:
    return ActOptions(clock=lambda: FIXED_NOW)


@pytest.fixture()
def laptop_record() -> AssignmentRecord:
    return AssignmentRecord.from_mapping(
        {
            "productName": "Laptop X1",
            "serialNumber": "SN123",
            "assignedTo": "Jane Doe",
            "assignedEmail": "jane@x.com",
            "location": "Floor 2",
            "assignmentDate": "2024-03-01T10:00:00Z",
            "notes": None,
            "issuerName": "Bodega",
        }
    )


@pytest.fixture()
def laptop_pdf(laptop_record: AssignmentRecord, options: ActOptions) -> bytes:
    return render_assignment_act(laptop_record, options).data


@pytest.fixture()
def pdf_file_factory(tmp_path: Path, options: ActOptions) -> Callable[..., Path]:
    def _create(filename: str = "acta.pdf", **fields: object) -> Path:
        path = tmp_path / filename
        record = AssignmentRecord(**fields)  # type: ignore[arg-type]
        path.write_bytes(render_assignment_act(record, options).data)
        return path

    return _create
