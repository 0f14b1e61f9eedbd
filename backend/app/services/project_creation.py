"""Multi-table project creation with compensating rollback.

The store commits each table write separately, so creation runs as an ordered
saga: project row, then team members, then links. When a later step fails the
rows written before it are removed again, team members before the project row.
"""

import logging
from datetime import date
from typing import Dict, List, Optional

from app.exceptions import PersistenceError, ValidationError
from app.models.course import Course
from app.models.project import Link, Project, TeamMember
from app.models.user import User
from app.schemas.project import ProjectCreate
from app.services import metadata_codec
from app.utils.project_fields import (
    STUDENT_MEMBER,
    normalize_files,
    normalize_project_status,
    normalize_project_type,
    normalize_semester,
    normalize_string,
    normalize_string_list,
    normalize_team_members,
    parse_date,
    pick_advisor_member,
    resolve_keyword,
)
from app.services.project_hydrator import ProjectAggregate, get_project_aggregate
from app.services.table_store import TableStore
from app.services.user_service import find_user_by_email

logger = logging.getLogger(__name__)


def ensure_submitter_member(submitter: User, members: List[Dict]) -> List[Dict]:
    submitter_email = submitter.email.lower()
    if any(m["email"].lower() == submitter_email for m in members):
        return members
    return [
        {
            "id": str(submitter.id),
            "name": submitter.name,
            "email": submitter.email,
            "role": STUDENT_MEMBER,
            "isPrimary": all(not m["isPrimary"] for m in members),
        },
        *members,
    ]


def resolve_advisor(store: TableStore, members: List[Dict]) -> Optional[User]:
    candidate = pick_advisor_member(members)
    if candidate is None:
        return None
    return find_user_by_email(store, candidate["email"])


def resolve_course_id(store: TableStore, course_code: Optional[str]) -> Optional[int]:
    if not course_code:
        return None
    course = store.first(Course, Course.course_code == course_code)
    return course.id if course else None


def resolve_students(store: TableStore, submitter: User, members: List[Dict]) -> List[User]:
    emails = [submitter.email.lower()]
    for member in members:
        email = member["email"].lower()
        if member["role"] == STUDENT_MEMBER and email not in emails:
            emails.append(email)

    students = []
    for email in emails:
        user = find_user_by_email(store, email)
        if user is None:
            logger.info("[projects] dropping team member without an account: %s", email)
            continue
        students.append(user)
    return students


def _rollback_project(store: TableStore, project_id: int, remove_members: bool) -> None:
    if remove_members:
        try:
            store.delete(TeamMember, TeamMember.project_id == project_id)
        except PersistenceError:
            logger.exception("[projects] cleanup of team members for project %s failed; continuing", project_id)
    try:
        store.delete(Project, Project.id == project_id)
    except PersistenceError:
        logger.exception("[projects] cleanup of project %s failed", project_id)


def create_project(store: TableStore, submitter: User, data: ProjectCreate) -> ProjectAggregate:
    title = normalize_string(data.title)
    description = normalize_string(data.description)
    if not title or not description:
        raise ValidationError("Both title and description are required.", field="title" if not title else "description")

    keywords = normalize_string_list(data.keywords)
    external_links = normalize_string_list(data.external_links)
    members = ensure_submitter_member(submitter, normalize_team_members(data.team_members))
    if all(not m["isPrimary"] for m in members):
        members[0]["isPrimary"] = True

    advisor = resolve_advisor(store, members)
    students = resolve_students(store, submitter, members)
    if not students:
        raise ValidationError("No valid student members found for project submission.", field="team_members")

    today = date.today()
    completion_text = normalize_string(data.completion_date)
    completion_date = parse_date(completion_text)
    course_code = normalize_string(data.course_code)
    files = normalize_files(data.files)

    metadata = {
        "keywords": keywords,
        "externalLinks": external_links,
        "teamMembers": members,
        "award": normalize_string(data.award),
        "courseCode": course_code,
        "completionDate": completion_text,
        "files": files or None,
    }

    project = store.insert_one(Project, {
        "name": title,
        "keyword": resolve_keyword(keywords),
        "description": description,
        "project_type": normalize_project_type(data.type),
        "status": normalize_project_status(data.status or "Under Review"),
        "semester": normalize_semester(data.semester or "Semester 1"),
        "year": (completion_date or today).year,
        "team_name": normalize_string(data.team_name),
        "competition_name": normalize_string(data.competition_name),
        "start_date": today,
        "end_date": completion_date or today,
        "advisor_id": advisor.id if advisor else None,
        "course_id": resolve_course_id(store, course_code),
        "comment_student": metadata_codec.encode(metadata),
    })
    project_id = project.id

    try:
        store.upsert(
            TeamMember,
            [{"project_id": project_id, "student_id": s.id} for s in students],
            on_conflict=("student_id", "project_id"),
        )
    except PersistenceError:
        logger.warning("[projects] team member insert failed, removing project %s", project_id)
        _rollback_project(store, project_id, remove_members=False)
        raise

    try:
        store.insert(Link, [{"project_id": project_id, "link": link} for link in external_links])
    except PersistenceError:
        logger.warning("[projects] link insert failed, removing project %s and its team", project_id)
        _rollback_project(store, project_id, remove_members=True)
        raise

    logger.info("[projects] created project %s with %d student(s)", project_id, len(students))
    return get_project_aggregate(store, project_id)
