"""
Test suite for extraction and job models.

System role: Verification of record normalization and wire format
"""

import pytest
from pydantic import ValidationError

from docextract.models.extraction import ExtractedRecord, ExtractionOptions, Priority
from docextract.models.job import JobSnapshot, JobStatus, JobSubmittedResponse


class TestPriority:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Low", Priority.LOW),
            ("HIGH", Priority.HIGH),
            (" critical ", Priority.CRITICAL),
            (None, Priority.MEDIUM),
            ("P1", Priority.MEDIUM),
            (3, Priority.MEDIUM),
        ],
    )
    def test_coerce(self, raw, expected) -> None:
        assert Priority.coerce(raw) is expected


class TestExtractedRecord:
    """Test suite for ExtractedRecord."""

    def test_from_raw_defaults(self) -> None:
        record = ExtractedRecord.from_raw({})

        assert record.title == "Untitled Task"
        assert record.details == ""
        assert record.priority is Priority.MEDIUM
        assert record.assignee is None
        assert record.due_date is None

    def test_details_fall_back_to_explanation(self) -> None:
        record = ExtractedRecord.from_raw({"title": "A", "explanation": "<p>Why</p>"})

        assert record.details == "<p>Why</p>"

    def test_snake_case_and_ref_synonyms(self) -> None:
        record = ExtractedRecord.from_raw(
            {
                "title": "A",
                "due_date": "2024-07-04T09:00:00Z",
                "ticketRef": "INC-7",
                "externalRef": "https://tickets.example.com/7",
            }
        )

        assert record.due_date == "2024-07-04"
        assert record.ticket_number == "INC-7"
        assert record.external_url == "https://tickets.example.com/7"

    def test_nested_values_are_not_strings(self) -> None:
        record = ExtractedRecord.from_raw({"title": "A", "assignee": {"name": "Bob"}})

        assert record.assignee is None

    def test_to_wire_uses_camel_case(self) -> None:
        wire = ExtractedRecord.from_raw({"title": "A", "ticketNumber": "T-1"}).to_wire()

        assert set(wire) == {
            "title",
            "details",
            "assignee",
            "group",
            "category",
            "dueDate",
            "priority",
            "ticketNumber",
            "externalUrl",
        }
        assert wire["priority"] == "Medium"

    def test_records_are_frozen(self) -> None:
        record = ExtractedRecord.from_raw({"title": "A"})

        with pytest.raises(ValidationError):
            record.title = "B"

    def test_empty_title_rejected_by_constructor(self) -> None:
        with pytest.raises(ValidationError):
            ExtractedRecord(title="")


class TestJobModels:
    def test_snapshot_response_omits_missing_outcome(self) -> None:
        snapshot = JobSnapshot(job_id="j", status=JobStatus.PROCESSING, elapsed_time=10)

        assert snapshot.to_response() == {
            "jobId": "j",
            "status": "processing",
            "elapsedTime": 10,
            "progressLog": "",
        }

    def test_submitted_response_wire_names(self) -> None:
        payload = JobSubmittedResponse(job_id="j").model_dump(mode="json", by_alias=True)

        assert payload["jobId"] == "j"
        assert payload["status"] == "pending"

    def test_terminal_statuses(self) -> None:
        assert JobStatus.COMPLETED.is_terminal
        assert JobStatus.FAILED.is_terminal
        assert not JobStatus.PROCESSING.is_terminal

    def test_options_default_to_standard_tier(self) -> None:
        options = ExtractionOptions()

        assert options.use_thinking_model is False
        assert options.technicians == []
