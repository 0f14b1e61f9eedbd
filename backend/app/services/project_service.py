"""Role-gated mutations of an existing project: field edits, grade, feedback and status.

Every command checks the caller against the freshly hydrated aggregate, writes,
and re-hydrates before returning. A failed write raises before the re-hydrate so
callers never see a half-applied change.
"""

import logging
from typing import Any, Dict, List, Optional

from app.exceptions import AuthorizationError, ValidationError
from app.models.project import Link, Project, TeamMember
from app.models.user import User
from app.schemas.project import ProjectUpdate
from app.services import metadata_codec
from app.services.project_creation import resolve_advisor, resolve_course_id
from app.utils.project_fields import (
    GRADE_VALUES,
    normalize_files,
    normalize_grade,
    normalize_project_status,
    normalize_project_type,
    normalize_semester,
    normalize_string,
    normalize_string_list,
    normalize_team_members,
    resolve_keyword,
    parse_date,
)
from app.services.project_hydrator import ProjectAggregate, get_project_aggregate
from app.services.table_store import TableStore
from app.utils.permissions import (
    ADVISOR,
    REVIEWER_ROLES,
    can_review,
    can_set_grade,
    can_update_project_fields,
    is_advisor,
    is_student,
)

logger = logging.getLogger(__name__)


def is_team_member(store: TableStore, project_id: int, user_id: int) -> bool:
    return store.first(
        TeamMember,
        TeamMember.project_id == project_id,
        TeamMember.student_id == user_id,
    ) is not None


def replace_links(store: TableStore, project_id: int, links: List[str]) -> None:
    store.delete(Link, Link.project_id == project_id)
    store.insert(Link, [{"project_id": project_id, "link": link} for link in links])


def update_project(store: TableStore, project_id: int, data: ProjectUpdate, current_user: User) -> ProjectAggregate:
    if is_advisor(current_user):
        raise AuthorizationError("Advisors cannot update project details.", required_role="student or coordinator")
    if not can_update_project_fields(current_user):
        raise AuthorizationError("Only team members or coordinators can update a project.", required_role="student or coordinator")

    aggregate = get_project_aggregate(store, project_id)
    if is_student(current_user) and not is_team_member(store, project_id, current_user.id):
        raise AuthorizationError("You are not a member of this project.")

    keywords = normalize_string_list(data.keywords)
    external_links = normalize_string_list(data.external_links)
    members = normalize_team_members(data.team_members)
    files = normalize_files(data.files)
    completion_text = normalize_string(data.completion_date)
    course_code = normalize_string(data.course_code)
    advisor = resolve_advisor(store, members)

    metadata: Dict[str, Any] = dict(aggregate.metadata or {})
    metadata.update({
        "keywords": keywords,
        "externalLinks": external_links,
        "teamMembers": members,
        "award": normalize_string(data.award),
        "courseCode": course_code,
        "completionDate": completion_text,
        "files": files or None,
    })

    values: Dict[str, Any] = {
        "advisor_id": advisor.id if advisor else None,
        "keyword": resolve_keyword(keywords),
        "comment_student": metadata_codec.encode(metadata),
    }
    optional_values = {
        "name": normalize_string(data.title),
        "description": normalize_string(data.description),
        "project_type": normalize_project_type(data.type) if data.type else None,
        "team_name": normalize_string(data.team_name),
        "semester": normalize_semester(data.semester) if data.semester else None,
        "competition_name": normalize_string(data.competition_name),
        "end_date": parse_date(completion_text),
        "course_id": resolve_course_id(store, course_code),
    }
    values.update({k: v for k, v in optional_values.items() if v is not None})

    store.update(Project, values, Project.id == project_id)
    replace_links(store, project_id, external_links)
    logger.info("[projects] project %s updated by user %s", project_id, current_user.id)
    return get_project_aggregate(store, project_id)


def set_grade(store: TableStore, project_id: int, grade: Optional[str], current_user: User) -> ProjectAggregate:
    if not is_advisor(current_user):
        raise AuthorizationError("Only advisors can update grades.", required_role=ADVISOR)
    try:
        grade_value = normalize_grade(grade)
    except ValueError:
        raise ValidationError(f"Unsupported grade value. Use one of: {', '.join(GRADE_VALUES)}.", field="grade")

    aggregate = get_project_aggregate(store, project_id)
    if not can_set_grade(aggregate.project, current_user):
        raise AuthorizationError("You are not assigned as the advisor for this project.")

    if aggregate.grade == grade_value and aggregate.project.grade is None:
        return aggregate

    metadata = dict(aggregate.metadata or {})
    if grade_value:
        metadata["grade"] = grade_value
    else:
        metadata.pop("grade", None)

    # The bag is the grade's home; the column stays null.
    store.update(
        Project,
        {"comment_student": metadata_codec.encode(metadata), "grade": None},
        Project.id == project_id,
    )
    logger.info("[projects] grade for project %s set to %s", project_id, grade_value)
    return get_project_aggregate(store, project_id)


def set_feedback(store: TableStore, project_id: int, feedback: Optional[str], current_user: User) -> ProjectAggregate:
    if current_user.role not in REVIEWER_ROLES:
        raise AuthorizationError("Only advisors or coordinators can update feedback.", required_role="advisor or coordinator")
    text = normalize_string(feedback)
    if not text:
        raise ValidationError("Feedback text is required.", field="feedback")

    aggregate = get_project_aggregate(store, project_id)
    if not can_review(aggregate.project, current_user):
        raise AuthorizationError("You are not assigned as the advisor for this project.")

    column = "feedback_advisor" if is_advisor(current_user) else "feedback_coordinator"
    store.update(Project, {column: text}, Project.id == project_id)
    return get_project_aggregate(store, project_id)


def set_status(store: TableStore, project_id: int, status: Optional[str], current_user: User) -> ProjectAggregate:
    if current_user.role not in REVIEWER_ROLES:
        raise AuthorizationError("Only advisors or coordinators can update project status.", required_role="advisor or coordinator")
    text = normalize_string(status)
    if not text:
        raise ValidationError("Status value is required.", field="status")
    target = normalize_project_status(text)

    aggregate = get_project_aggregate(store, project_id)
    if not can_review(aggregate.project, current_user):
        raise AuthorizationError("You are not assigned as the advisor for this project.")

    current = aggregate.project.status
    store.update(Project, {"status": target}, Project.id == project_id)
    logger.info("[projects] project %s status %s -> %s", project_id, current, target)
    return get_project_aggregate(store, project_id)
