"""
Test suite for the extraction endpoint.

Covers upload validation, polling submission through the real lifespan
(workers running against a scripted chat client) and streaming output.

System role: Verification of the extraction HTTP API
"""

import json
import time

import pytest
from fastapi.testclient import TestClient

from docextract.api.deps import get_extraction_service, get_service_cache
from docextract.application.services import ExtractionService
from docextract.core.agentic_system.extraction_agent import ConsolidationAgent, ExtractionAgent
from docextract.main import create_app
from docextract.workers.pool import ExtractionWorkerPool

PDF = b"%PDF-1.4\n%%EOF"

TASKS = json.dumps(
    {"tasks": [{"title": "Reset password for Alice", "details": "<p>Locked out</p>"}]}
)
MERGED = json.dumps([{"title": "Reset password for Alice", "details": "<p>Locked out</p>"}])


@pytest.fixture
def build_service(job_store, gemini_settings, extraction_settings):
    def _build(client) -> ExtractionService:
        return ExtractionService(
            store=job_store,
            pool=ExtractionWorkerPool(job_store),
            extraction_agent=ExtractionAgent(
                client, gemini_settings, extraction_settings, retry_delay=0
            ),
            consolidation_agent=ConsolidationAgent(client, model="consolidation-model"),
            settings=extraction_settings,
        )

    return _build


@pytest.fixture
def app_with_service(build_service, chat_factory):
    """App whose extraction service is built from scripted replies (no workers)."""

    def _build(*scripts):
        client, sessions = chat_factory(*scripts)
        app = create_app()
        app.dependency_overrides[get_extraction_service] = lambda: build_service(client)
        return TestClient(app), sessions

    return _build


def _pdf_upload(content: bytes = PDF, content_type: str = "application/pdf") -> dict:
    return {"file": ("minutes.pdf", content, content_type)}


class TestValidation:
    """400/503 responses."""

    def test_missing_file(self, app_with_service) -> None:
        client, _ = app_with_service()

        response = client.post("/api/v1/extractions", data={"technicians": "[]"})

        assert response.status_code == 400
        assert response.json()["detail"] == "No PDF file provided"

    def test_wrong_media_type(self, app_with_service) -> None:
        client, _ = app_with_service()

        response = client.post(
            "/api/v1/extractions", files=_pdf_upload(b"hello", "text/plain")
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Uploaded file is not a PDF"

    def test_oversized_file(self, app_with_service) -> None:
        client, _ = app_with_service()

        response = client.post("/api/v1/extractions", files=_pdf_upload(b"x" * 2048))

        assert response.status_code == 400
        assert "too large" in response.json()["detail"]

    def test_malformed_candidate_list(self, app_with_service) -> None:
        client, _ = app_with_service()

        response = client.post(
            "/api/v1/extractions",
            files=_pdf_upload(),
            data={"technicians": "{not json"},
        )

        assert response.status_code == 400
        assert "technicians" in response.json()["detail"]

    def test_workers_not_running(self, app_with_service) -> None:
        client, _ = app_with_service()

        response = client.post("/api/v1/extractions", files=_pdf_upload())

        assert response.status_code == 503


class TestStreaming:
    """stream_output=true returns the live channel."""

    def test_streamed_extraction(self, app_with_service) -> None:
        client, (extraction, _) = app_with_service([TASKS], [MERGED])

        response = client.post(
            "/api/v1/extractions",
            files=_pdf_upload(),
            data={
                "technicians": json.dumps([{"id": 1, "name": "Alice"}, "Bob"]),
                "categories": json.dumps([{"value": "Access"}]),
                "stream_output": "true",
            },
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "[System: Sending document to Gemini...]" in response.text
        assert "```json" in response.text
        assert response.text.endswith("\nExtracted 1 task.\n")
        assert "Available technicians: Alice, Bob." in extraction.sent[0]
        assert "Available categories: Access." in extraction.sent[0]


class TestPolling:
    """Full round trip through the lifespan-managed worker pool."""

    def test_submit_then_poll_until_completed(self, chat_factory) -> None:
        fake_client, _ = chat_factory([TASKS], [MERGED])
        cache = get_service_cache()
        cache.clear()
        cache.chat_client = fake_client

        with TestClient(create_app()) as client:
            response = client.post("/api/v1/extractions", files=_pdf_upload())
            assert response.status_code == 202
            body = response.json()
            assert body["status"] == "pending"

            data = {}
            for _ in range(100):
                data = client.get(f"/api/v1/jobs/{body['jobId']}").json()
                if data["status"] in ("completed", "failed"):
                    break
                time.sleep(0.02)

        assert data["status"] == "completed"
        assert [task["title"] for task in data["result"]] == ["Reset password for Alice"]
        assert "[System: Sending document to Gemini...]" in data["progressLog"]
