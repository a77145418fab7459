"""
Staged recovery of task records from free-form model output.

Model replies are concatenated across turns and may be wrapped in prose or
markdown fences, split mid-object, or followed by an explanation turn. The
strategies below run cheapest-and-most-specific first and stop at the first
one that yields records:

1. The value of a ``"tasks": [`` key, decoded in place, or its complete
   leading items when the array was cut off.
2. Object candidates in order of appearance that carry ``tasks`` or an array.
3. The first top-level object (or array) in the text.
4. Interpretation of whatever parsed (tasks array, bare array, single task).
5. An array of objects anchored on a ``"title"`` key.
6. ``Task:`` / ``Title:`` lines (bulleted, numbered or bold) as a last resort.

Every record is normalized through ``ExtractedRecord.from_raw``. Nothing here
raises; an empty list means nothing could be recovered.

Dependencies: json, re, docextract.models
System role: Pure parsing core shared by extraction and consolidation
"""

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from docextract.models.extraction import ExtractedRecord

logger = logging.getLogger(__name__)

_DECODER = json.JSONDecoder()

_TASKS_KEY = re.compile(r'"tasks"\s*:\s*\[')
_TASKS_KEY_LAZY = re.compile(r'"tasks"\s*:\s*\[([\s\S]*?)\]')
_TITLE_ARRAY = re.compile(r'\[\s*\{\s*"title"')
_TITLE_ARRAY_LAZY = re.compile(r'\[\s*\{\s*"title"[\s\S]*?\}\s*\]')
_TASK_LINE = re.compile(
    r"^\s*(?:[-*]|\d+[.)])?\s*\**(?:Task|Title)\**:\**\s*(\S[^\n]*)$", re.MULTILINE
)

EMERGENCY_DETAILS = "<p>Automatically extracted from text: {title}</p>"


def _decode_at(text: str, index: int) -> Any:
    """Decode one JSON value starting at ``index``, or return None."""
    try:
        value, _ = _DECODER.raw_decode(text, index)
    except ValueError:
        return None
    return value


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return None


def _tasks_array(text: str) -> list | None:
    """Strategy 1: the array bound to a ``"tasks"`` key."""
    for match in _TASKS_KEY.finditer(text):
        value = _decode_at(text, match.end() - 1)
        if isinstance(value, list):
            return value

    lazy = _TASKS_KEY_LAZY.search(text)
    if lazy:
        wrapped = _loads('{"tasks":[' + lazy.group(1) + "]}")
        if isinstance(wrapped, dict):
            return wrapped["tasks"]

    match = _TASKS_KEY.search(text)
    if match:
        return _salvage_array(text, match.end())
    return None


def _salvage_array(text: str, index: int) -> list | None:
    """Collect the complete leading items of an array cut off mid-item."""
    items = []
    while True:
        while index < len(text) and text[index] in " \t\r\n,":
            index += 1
        if index >= len(text) or text[index] == "]":
            break
        try:
            value, index = _DECODER.raw_decode(text, index)
        except ValueError:
            break
        items.append(value)
    return items or None


def _object_candidates(text: str, require_tasks: bool = False) -> Any:
    """Strategy 2: first decodable object that looks like a task container."""
    for match in re.finditer(r"\{", text):
        value = _decode_at(text, match.start())
        if not isinstance(value, dict):
            continue
        if "tasks" in value:
            return value
        if not require_tasks and any(isinstance(v, list) for v in value.values()):
            return value
    return None


def _first_object(text: str) -> Any:
    """Strategy 3: the first top-level ``{ ... }`` (or ``[ ... ]``) in the text."""
    start = text.find("{")
    bracket = text.find("[")
    if bracket >= 0 and (start < 0 or bracket < start):
        value = _decode_at(text, bracket)
        if isinstance(value, list):
            return value
    if start < 0:
        return None
    value = _decode_at(text, start)
    if value is not None:
        return value
    end = text.find("}", start)
    if end < 0:
        return None
    return _loads(text[start : end + 1])


def _interpret(data: Any, allow_single: bool = True) -> list:
    """Strategy 4: turn a parsed value into a list of raw items."""
    if isinstance(data, dict):
        tasks = data.get("tasks")
        if isinstance(tasks, list):
            return tasks
        if allow_single and isinstance(data.get("title"), str):
            return [data]
        return []
    if isinstance(data, list):
        return data
    return []


def _title_array(text: str) -> list | None:
    """Strategy 5: an array of objects whose first key is ``title``."""
    for match in _TITLE_ARRAY.finditer(text):
        value = _decode_at(text, match.start())
        if isinstance(value, list):
            return value

    lazy = _TITLE_ARRAY_LAZY.search(text)
    if lazy:
        value = _loads(lazy.group(0))
        if isinstance(value, list):
            return value
    return None


def _emergency_scan(text: str) -> list[dict[str, Any]]:
    """Strategy 6: synthesize minimal tasks from ``Task:`` / ``Title:`` lines."""
    items = []
    for match in _TASK_LINE.finditer(text):
        title = match.group(1).strip()
        items.append({"title": title, "details": EMERGENCY_DETAILS.format(title=title)})
    return items


def _normalize(items: list) -> list[ExtractedRecord]:
    records = []
    for item in items:
        if not isinstance(item, dict):
            continue
        try:
            records.append(ExtractedRecord.from_raw(item))
        except ValidationError as exc:
            logger.debug(f"{__name__}:_normalize - Skipping unusable item: {exc}")
    return records


def recover_records(text: str) -> list[ExtractedRecord]:
    """
    Recover task records from accumulated model output.

    Args:
        text: Raw text of every model turn, concatenated

    Returns:
        list[ExtractedRecord]: Normalized records, empty when nothing was found
    """
    if not text:
        return []

    data: Any = None
    tasks = _tasks_array(text)
    if tasks is not None:
        data = {"tasks": tasks}
    if data is None:
        data = _object_candidates(text)
    if data is None:
        data = _first_object(text)

    records = _normalize(_interpret(data)) if data is not None else []
    if records:
        logger.debug(f"{__name__}:recover_records - Structured parse found {len(records)} records")
        return records

    title_array = _title_array(text)
    if title_array is not None:
        records = _normalize(title_array)
        if records:
            logger.debug(f"{__name__}:recover_records - Title array found {len(records)} records")
            return records

    records = _normalize(_emergency_scan(text))
    if records:
        logger.warning(
            f"{__name__}:recover_records - Fell back to line scan, found {len(records)} records"
        )
    return records


def recover_record_array(text: str) -> list[ExtractedRecord]:
    """
    Recover a task array from a reply that should contain only an array.

    Array-oriented subset of ``recover_records``: a bare single task object is
    not accepted and there is no line scan.

    Args:
        text: Raw reply text

    Returns:
        list[ExtractedRecord]: Normalized records, empty when nothing was found
    """
    if not text:
        return []

    candidates: list[Any] = [_tasks_array(text), _loads(text.strip())]

    start = text.find("[")
    if start >= 0:
        candidates.append(_decode_at(text, start))
        end = text.rfind("]")
        if end > start:
            candidates.append(_loads(text[start : end + 1]))

    candidates.append(_object_candidates(text, require_tasks=True))
    candidates.append(_title_array(text))

    for candidate in candidates:
        if candidate is None:
            continue
        records = _normalize(_interpret(candidate, allow_single=False))
        if records:
            return records
    return []
