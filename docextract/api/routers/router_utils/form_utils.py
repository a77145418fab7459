"""
Multipart form helpers for the extraction endpoint.

Candidate lists arrive as JSON text. Clients send either plain strings or
the objects they already hold for technicians/groups (``name``) and
categories (``value``); both shapes reduce to a list of display names.

Dependencies: json, docextract.core.exceptions
System role: Request parsing utilities
"""

import json
from typing import Any

from docextract.core.exceptions import DocumentValidationError

_NAME_KEYS = ("name", "value", "label")

_TRUE_VALUES = {"true", "1", "yes", "on"}


def _candidate_name(item: Any) -> str | None:
    if isinstance(item, str):
        return item.strip() or None
    if isinstance(item, dict):
        for key in _NAME_KEYS:
            value = item.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None


def parse_candidate_list(raw: str | None, field: str) -> list[str]:
    """
    Parse a JSON-encoded candidate list form field.

    Args:
        raw: Form field text, may be None or empty
        field: Field name, reported on validation errors

    Returns:
        list[str]: Candidate names in submitted order, blanks dropped

    Raises:
        DocumentValidationError: Field is not a JSON array
    """
    if raw is None or not raw.strip():
        return []

    try:
        parsed = json.loads(raw)
    except ValueError:
        raise DocumentValidationError(
            f"Field '{field}' must be a JSON array", field=field
        ) from None

    if not isinstance(parsed, list):
        raise DocumentValidationError(f"Field '{field}' must be a JSON array", field=field)

    names = []
    for item in parsed:
        name = _candidate_name(item)
        if name is not None:
            names.append(name)
    return names


def parse_form_flag(raw: str | bool | None) -> bool:
    """Interpret a form checkbox/flag value."""
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return False
    return raw.strip().lower() in _TRUE_VALUES
