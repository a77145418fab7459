import pytest
from fastapi.testclient import TestClient

from docextract.api.deps import get_job_service
from docextract.application.services.job_service import JobService
from docextract.main import create_app
from docextract.models.extraction import ExtractedRecord, ExtractionOptions


@pytest.fixture
def client(job_store):
    app = create_app()
    app.dependency_overrides[get_job_service] = lambda: JobService(store=job_store)
    return TestClient(app)


def _submit(job_store) -> str:
    return job_store.submit(b"%PDF", "application/pdf", ExtractionOptions())


def test_pending_job_has_no_result_or_error(client, job_store, clock):
    job_id = _submit(job_store)
    job_store.append_progress(job_id, "\n[System: Sending document to Gemini...]\n")
    clock.advance(1.5)

    response = client.get(f"/api/v1/jobs/{job_id}")

    assert response.status_code == 200
    data = response.json()
    assert data == {
        "jobId": job_id,
        "status": "pending",
        "elapsedTime": 1500,
        "progressLog": "\n[System: Sending document to Gemini...]\n",
    }


def test_completed_job_returns_records(client, job_store):
    job_id = _submit(job_store)
    job_store.claim_next()
    record = ExtractedRecord.from_raw(
        {"title": "Reset password for Alice", "dueDate": "2024-05-01", "priority": "high"}
    )
    job_store.complete(job_id, [record])

    data = client.get(f"/api/v1/jobs/{job_id}").json()

    assert data["status"] == "completed"
    assert "error" not in data
    assert data["result"] == [
        {
            "title": "Reset password for Alice",
            "details": "",
            "assignee": None,
            "group": None,
            "category": None,
            "dueDate": "2024-05-01",
            "priority": "High",
            "ticketNumber": None,
            "externalUrl": None,
        }
    ]


def test_failed_job_returns_error(client, job_store):
    job_id = _submit(job_store)
    job_store.claim_next()
    job_store.fail(job_id, "No tasks could be extracted from the document")

    data = client.get(f"/api/v1/jobs/{job_id}").json()

    assert data["status"] == "failed"
    assert data["error"] == "No tasks could be extracted from the document"
    assert "result" not in data


def test_get_job_not_found(client):
    response = client.get("/api/v1/jobs/does-not-exist")

    assert response.status_code == 404
    assert "not found" in response.json()["detail"].lower()
