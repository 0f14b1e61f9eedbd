"""Normalization of free-text project input into the fixed enums and bag shapes."""

from datetime import date
from typing import Any, Dict, List, Optional

GRADE_VALUES = ("A", "B+", "B", "C+", "C", "D+", "D", "F")

STUDENT_MEMBER = "student"
LECTURER_MEMBER = "lecturer"

DISPLAY_TYPE_MAP = {
    "academic": "Capstone",
    "competition": "Competition Work",
    "service": "Social Service",
    "other": "Other",
}

DISPLAY_STATUS_MAP = {
    "draft": "Draft",
    "underreview": "Under Review",
    "approved": "Approved",
    "reject": "Rejected",
}

PROJECT_TYPE_LOOKUP = {
    "capstone": "academic",
    "academic": "academic",
    "academic publication": "academic",
    "competition work": "competition",
    "competition": "competition",
    "social service": "service",
    "service": "service",
    "other": "other",
}

PROJECT_STATUS_LOOKUP = {
    "draft": "draft",
    "under review": "underreview",
    "underreview": "underreview",
    "submitted": "underreview",
    "in review": "underreview",
    "approved": "approved",
    "completed": "approved",
    "reject": "reject",
    "rejected": "reject",
    "deny": "reject",
}

KEYWORD_LOOKUP = {
    "ai": "ai",
    "service": "service",
    "game": "game",
    "gaming": "game",
    "health": "health",
    "academic": "academic",
    "research": "academic",
    "other": "other",
}


def normalize_string(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text or None


def normalize_string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def normalize_project_type(value: Any) -> str:
    text = normalize_string(value)
    if not text:
        return "other"
    return PROJECT_TYPE_LOOKUP.get(text.lower(), "other")


def normalize_project_status(value: Any) -> str:
    text = normalize_string(value)
    if not text:
        return "underreview"
    return PROJECT_STATUS_LOOKUP.get(text.lower(), "underreview")


def normalize_semester(value: Any) -> str:
    text = normalize_string(value)
    if text and "2" in text:
        return "2"
    return "1"


def normalize_grade(value: Any) -> Optional[str]:
    """Return the canonical grade, ``None`` to clear, or raise ``ValueError`` for an unknown letter."""
    text = normalize_string(value)
    if text is None:
        return None
    grade = text.upper()
    if grade not in GRADE_VALUES:
        raise ValueError(grade)
    return grade


def resolve_keyword(keywords: List[str]) -> str:
    for candidate in keywords:
        keyword = KEYWORD_LOOKUP.get(candidate.lower())
        if keyword:
            return keyword
    return "other"


def parse_date(value: Any) -> Optional[date]:
    text = normalize_string(value)
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def normalize_team_members(value: Any) -> List[Dict[str, Any]]:
    """Keep entries that carry an email and a student/lecturer role (student when omitted)."""
    if not isinstance(value, list):
        return []
    members = []
    for entry in value:
        if not isinstance(entry, dict):
            continue
        email = normalize_string(entry.get("email"))
        role = (normalize_string(entry.get("role")) or STUDENT_MEMBER).lower()
        if not email or role not in (STUDENT_MEMBER, LECTURER_MEMBER):
            continue
        member = {
            "name": normalize_string(entry.get("name")) or "",
            "email": email,
            "role": role,
            "isPrimary": bool(entry.get("isPrimary")),
        }
        if isinstance(entry.get("id"), str):
            member["id"] = entry["id"]
        members.append(member)
    return members


def normalize_files(value: Any) -> List[Dict[str, str]]:
    if not isinstance(value, list):
        return []
    files = []
    for entry in value:
        if not isinstance(entry, dict):
            continue
        name = normalize_string(entry.get("name"))
        if not name:
            continue
        summary = {"name": name}
        for key in ("size", "type"):
            if isinstance(entry.get(key), str):
                summary[key] = entry[key]
        files.append(summary)
    return files


def pick_advisor_member(members: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    return next((m for m in members if m["role"] == LECTURER_MEMBER), None)
