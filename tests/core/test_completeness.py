"""
Test suite for the completeness heuristic.

System role: Verification of continuation decisions
"""

import json

import pytest

from docextract.core.completeness import is_complete

VALID_OBJECT = json.dumps(
    {"tasks": [{"title": "Reset password for Alice", "details": "<p>Locked out</p>"}]}
)


class TestIsComplete:
    """Test suite for is_complete."""

    def test_valid_object_is_complete(self) -> None:
        assert is_complete(VALID_OBJECT) is True

    def test_valid_object_missing_final_brace_is_incomplete(self) -> None:
        assert is_complete(VALID_OBJECT[:-1]) is False

    def test_surrounding_whitespace_still_complete(self) -> None:
        assert is_complete(f"\n  {VALID_OBJECT}  \n") is True

    def test_valid_array_is_complete(self) -> None:
        assert is_complete('[{"title": "A"}]') is True

    @pytest.mark.parametrize("text", ["", "   ", "\n\n"])
    def test_blank_text_is_incomplete(self, text: str) -> None:
        assert is_complete(text) is False

    def test_truncated_mid_string_is_incomplete(self) -> None:
        assert is_complete('{"tasks": [{"title": "Reset pass') is False

    def test_trailing_comma_is_incomplete(self) -> None:
        assert is_complete('{"tasks": [{"title": "A"},') is False

    def test_balanced_but_unparseable_is_incomplete(self) -> None:
        """Fenced JSON with prose parses only after recovery, so it counts as cut off."""
        text = f"Here are the tasks:\n```json\n{VALID_OBJECT}\n```"
        assert is_complete(text) is False

    def test_prose_without_json_is_incomplete(self) -> None:
        assert is_complete("I could not find any tasks in this document.") is False

    def test_concatenated_continuation_is_complete(self) -> None:
        first = '{"tasks": [{"title": "Reset password for Alice", '
        second = '"details": "<p>Locked out</p>"}]}'
        assert is_complete(first) is False
        assert is_complete(first + second) is True
