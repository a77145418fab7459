"""
Extraction domain models.

Task records recovered from model output and the per-request options that
shape the extraction prompt.

Dependencies: pydantic
System role: Extraction API contracts
"""

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

UNTITLED_TASK = "Untitled Task"


class Priority(str, Enum):
    """Task priority levels."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @classmethod
    def coerce(cls, value: Any) -> "Priority":
        """Match a priority case-insensitively, defaulting to Medium."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value.lower() == lowered:
                    return member
        return cls.MEDIUM


def _clean_text(value: Any) -> str | None:
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None


def _clean_date(value: Any) -> str | None:
    text = _clean_text(value)
    if text is None:
        return None
    try:
        return date.fromisoformat(text[:10]).isoformat()
    except ValueError:
        return None


class ExtractedRecord(BaseModel):
    """One task recovered from the document."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    title: str = Field(min_length=1, description="Clear, concise title summarizing the task")
    details: str = Field(default="", description="Task explanation as HTML")
    assignee: str | None = Field(default=None, description="Person assigned to the task")
    group: str | None = Field(default=None, description="Group responsible for the task")
    category: str | None = Field(default=None, description="Category the task belongs to")
    due_date: str | None = Field(default=None, description="Due date in YYYY-MM-DD format")
    priority: Priority = Field(default=Priority.MEDIUM, description="Task priority level")
    ticket_number: str | None = Field(default=None, description="Associated ticket number")
    external_url: str | None = Field(default=None, description="External URL related to the task")

    @field_validator("priority", mode="before")
    @classmethod
    def _coerce_priority(cls, value: Any) -> Priority:
        return Priority.coerce(value)

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> "ExtractedRecord":
        """
        Normalize a loosely-shaped dict produced by the model.

        Missing titles become a placeholder, details fall back to an
        ``explanation`` key, unknown priorities become Medium and blank
        optional values become None.

        Args:
            raw: Parsed JSON object for a single task

        Returns:
            ExtractedRecord: Normalized record
        """
        details = raw.get("details")
        if details is None or isinstance(details, (dict, list)) or not str(details).strip():
            details = raw.get("explanation")
        return cls(
            title=_clean_text(raw.get("title")) or UNTITLED_TASK,
            details=_clean_text(details) or "",
            assignee=_clean_text(raw.get("assignee")),
            group=_clean_text(raw.get("group")),
            category=_clean_text(raw.get("category")),
            due_date=_clean_date(raw.get("dueDate", raw.get("due_date"))),
            priority=raw.get("priority"),
            ticket_number=_clean_text(
                raw.get("ticketNumber", raw.get("ticketRef", raw.get("ticket_number")))
            ),
            external_url=_clean_text(
                raw.get("externalUrl", raw.get("externalRef", raw.get("external_url")))
            ),
        )

    def to_wire(self) -> dict[str, Any]:
        """Serialize with the camelCase keys the model and clients use."""
        return self.model_dump(mode="json", by_alias=True)


class ExtractionOptions(BaseModel):
    """Candidate context and model tier for one extraction."""

    technicians: list[str] = Field(default_factory=list, description="Candidate assignees")
    groups: list[str] = Field(default_factory=list, description="Candidate groups")
    categories: list[str] = Field(default_factory=list, description="Candidate categories")
    use_thinking_model: bool = Field(default=False, description="Use the higher capability tier")
