"""Codec for the project metadata bag stored as JSON text in ``project.comment_student``.

The bag is schemaless storage on a relational column, so decoding is permissive:
anything that is not a JSON object yields ``None`` and badly-shaped list elements
are dropped one by one instead of failing the read.
"""

import json
from typing import Any, Dict, Optional

STRING_LIST_FIELDS = ("keywords", "externalLinks")
STRING_FIELDS = ("award", "courseCode", "completionDate", "grade")


def _string_list(value: Any) -> list:
    return [item for item in value if isinstance(item, str)]


def _team_members(value: Any) -> list:
    return [item for item in value if isinstance(item, dict) and isinstance(item.get("email"), str)]


def _files(value: Any) -> list:
    return [item for item in value if isinstance(item, dict) and isinstance(item.get("name"), str)]


def sanitize(bag: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``bag`` with known fields filtered to their expected shapes."""
    clean: Dict[str, Any] = {}
    for key, value in bag.items():
        if value is None:
            continue
        if key in STRING_LIST_FIELDS:
            if isinstance(value, list):
                clean[key] = _string_list(value)
        elif key == "teamMembers":
            if isinstance(value, list):
                clean[key] = _team_members(value)
        elif key == "files":
            if isinstance(value, list):
                clean[key] = _files(value)
        elif key in STRING_FIELDS:
            if isinstance(value, str):
                clean[key] = value
        else:
            clean[key] = value
    return clean


def decode(raw: Optional[str]) -> Optional[Dict[str, Any]]:
    if not raw or not isinstance(raw, str):
        return None
    try:
        parsed = json.loads(raw)
    except (ValueError, RecursionError):
        return None
    if not isinstance(parsed, dict):
        return None
    return sanitize(parsed)


def encode(metadata: Optional[Dict[str, Any]]) -> Optional[str]:
    if not metadata:
        return None
    clean = sanitize(metadata)
    if not clean:
        return None
    return json.dumps(clean, ensure_ascii=False, sort_keys=True, separators=(",", ":"))
