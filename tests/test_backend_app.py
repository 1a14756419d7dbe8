from __future__ import annotations

from fastapi.testclient import TestClient

from actpdf import inspect_pdf_bytes

from apps.backend.app.main import app


client = TestClient(app)


def test_health_endpoint() -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_assignment_act_endpoint_returns_pdf_attachment() -> None:
    payload = {
        "productName": "Laptop X1",
        "serialNumber": "SN123",
        "assignedTo": "Jane Doe",
        "assignedEmail": "jane@x.com",
        "location": "Floor 2",
        "assignmentDate": "2024-03-01T10:00:00Z",
        "issuerName": "Bodega",
    }

    response = client.post("/acts/assignment", json=payload)

    assert response.status_code == 200
    assert response.headers.get("content-type") == "application/pdf"
    disposition = response.headers.get("content-disposition", "")
    assert disposition.startswith("attachment")
    assert 'filename="acta-Laptop_X1-SN123.pdf"' in disposition
    assert response.headers.get("x-actpdf-object-count") == "7"
    assert response.content.startswith(b"%PDF-1.4")
    report = inspect_pdf_bytes(response.content)
    assert report.is_consistent, report.problems
    assert "Jane Doe" in report.text


def test_assignment_act_endpoint_accepts_empty_record() -> None:
    response = client.post("/acts/assignment", json={}, params={"disposition": "inline"})

    assert response.status_code == 200
    assert response.headers.get("content-disposition", "").startswith("inline")
    assert 'filename="acta-entrega.pdf"' in response.headers.get("content-disposition", "")
    assert response.content.endswith(b"%%EOF")


def test_assignment_act_endpoint_rejects_unknown_timezone() -> None:
    response = client.post("/acts/assignment", json={}, params={"timezone": "Nowhere/Land"})

    assert response.status_code == 400
    assert "Unknown timezone" in response.json()["detail"]


def test_assignment_act_endpoint_validates_field_types() -> None:
    response = client.post("/acts/assignment", json={"productName": ["not", "a", "string"]})

    assert response.status_code == 422
