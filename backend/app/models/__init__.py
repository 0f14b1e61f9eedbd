"""SQLAlchemy model package."""

from app.models.user import User
from app.models.course import Course
from app.models.project import Project, TeamMember, Link
from app.models.comment import ProjectComment

__all__ = [
    "User",
    "Course",
    "Project", "TeamMember", "Link",
    "ProjectComment",
]
