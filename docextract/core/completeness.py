"""
Completeness heuristic for accumulated model output.

Decides whether the text gathered so far looks like a finished JSON
document or whether another continuation turn should be requested.
Anything that is not strictly parseable counts as incomplete, so a
malformed reply costs an extra round instead of being accepted silently.

Dependencies: json
System role: Pure helper for the conversation orchestrator
"""

import json


def is_complete(text: str) -> bool:
    """
    Check whether accumulated model text looks finished.

    Args:
        text: Concatenated reply text of every turn so far

    Returns:
        bool: True only when the whole text parses as JSON
    """
    if not text or not text.strip():
        return False

    try:
        json.loads(text)
        return True
    except ValueError:
        pass

    if text.count("{") != text.count("}"):
        return False

    stripped = text.rstrip()
    if stripped.endswith('"') or stripped.endswith(","):
        return False

    # Balanced but unparseable is still treated as cut off.
    return False
