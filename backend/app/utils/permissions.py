"""Role constants and role-gate helpers shared by the project services."""

from app.models.project import Project
from app.models.user import User


STUDENT = "student"
ADVISOR = "advisor"
COORDINATOR = "coordinator"

REVIEWER_ROLES = (ADVISOR, COORDINATOR)


def is_student(user: User) -> bool:
    return user.role == STUDENT


def is_advisor(user: User) -> bool:
    return user.role == ADVISOR


def is_coordinator(user: User) -> bool:
    return user.role == COORDINATOR


def is_assigned_advisor(project: Project, user: User) -> bool:
    return project.advisor_id is not None and project.advisor_id == user.id


def can_update_project_fields(user: User) -> bool:
    # Students additionally have to be on the team; checked against team_member rows.
    return user.role in (STUDENT, COORDINATOR)


def can_set_grade(project: Project, user: User) -> bool:
    return is_advisor(user) and is_assigned_advisor(project, user)


def can_review(project: Project, user: User) -> bool:
    """Feedback and status changes: the assigned advisor or any coordinator."""
    if is_coordinator(user):
        return True
    return is_advisor(user) and is_assigned_advisor(project, user)


def can_delete_comment(comment_user_id: int, user: User) -> bool:
    return comment_user_id == user.id or is_coordinator(user)
