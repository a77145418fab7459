"""
Unit tests for extraction form parsing helpers.
"""

import pytest

from docextract.api.routers.router_utils import parse_candidate_list, parse_form_flag
from docextract.core.exceptions import DocumentValidationError


class TestParseCandidateList:
    def test_missing_or_blank_is_empty(self) -> None:
        assert parse_candidate_list(None, "groups") == []
        assert parse_candidate_list("  ", "groups") == []

    def test_strings_and_objects(self) -> None:
        raw = '["Alice", {"id": 2, "name": "Bob"}, {"value": "Access"}, {"id": 3}, "", 7]'

        assert parse_candidate_list(raw, "technicians") == ["Alice", "Bob", "Access"]

    def test_invalid_json(self) -> None:
        with pytest.raises(DocumentValidationError) as exc_info:
            parse_candidate_list("[oops", "groups")

        assert exc_info.value.details["field"] == "groups"

    def test_non_array_json(self) -> None:
        with pytest.raises(DocumentValidationError, match="must be a JSON array"):
            parse_candidate_list('{"name": "Alice"}', "technicians")


class TestParseFormFlag:
    @pytest.mark.parametrize("raw", ["true", "True", "1", "on", True])
    def test_truthy(self, raw) -> None:
        assert parse_form_flag(raw) is True

    @pytest.mark.parametrize("raw", [None, "", "false", "0", False])
    def test_falsy(self, raw) -> None:
        assert parse_form_flag(raw) is False
