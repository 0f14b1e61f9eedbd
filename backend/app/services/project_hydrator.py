"""Builds read-only project aggregates from separately queried tables.

The store has no joins, so related rows are fetched in one batched read per table
and assembled from lookup maps instead of issuing per-project queries. Any store
failure propagates and no partial result is returned.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from app.exceptions import NotFoundError
from app.models.project import Link, Project, TeamMember
from app.models.user import User
from app.services import metadata_codec
from app.services.table_store import TableStore
from app.utils.permissions import ADVISOR, STUDENT


@dataclass(frozen=True)
class ProjectAggregate:
    project: Project
    advisor: Optional[User]
    students: Tuple[User, ...]
    metadata: Optional[Dict[str, Any]]
    links: Tuple[str, ...]

    @property
    def grade(self) -> Optional[str]:
        bag_grade = (self.metadata or {}).get("grade")
        if isinstance(bag_grade, str):
            return bag_grade
        return self.project.grade


def hydrate(store: TableStore, projects: List[Project]) -> List[ProjectAggregate]:
    if not projects:
        return []

    project_ids = [p.id for p in projects]

    memberships = store.select(
        TeamMember,
        TeamMember.project_id.in_(project_ids),
        order_by=[TeamMember.member_id.asc()],
    )
    link_rows = store.select(Link, Link.project_id.in_(project_ids), order_by=[Link.link_id.asc()])

    user_ids = {m.student_id for m in memberships}
    user_ids.update(p.advisor_id for p in projects if p.advisor_id is not None)
    users_by_id: Dict[int, User] = {}
    if user_ids:
        users_by_id = {u.id: u for u in store.select(User, User.id.in_(sorted(user_ids)))}

    students_by_project: Dict[int, List[User]] = {}
    for membership in memberships:
        student = users_by_id.get(membership.student_id)
        if student is None:
            continue
        students_by_project.setdefault(membership.project_id, []).append(student)

    links_by_project: Dict[int, List[str]] = {}
    for row in link_rows:
        links_by_project.setdefault(row.project_id, []).append(row.link)

    return [
        ProjectAggregate(
            project=project,
            advisor=users_by_id.get(project.advisor_id) if project.advisor_id is not None else None,
            students=tuple(students_by_project.get(project.id, [])),
            metadata=metadata_codec.decode(project.comment_student),
            links=tuple(links_by_project.get(project.id, [])),
        )
        for project in projects
    ]


def hydrate_one(store: TableStore, project_id: int) -> List[ProjectAggregate]:
    return hydrate(store, store.select(Project, Project.id == project_id, limit=1))


def get_project_aggregate(store: TableStore, project_id: int) -> ProjectAggregate:
    aggregates = hydrate_one(store, project_id)
    if not aggregates:
        raise NotFoundError("Project")
    return aggregates[0]


def list_projects_for_student(store: TableStore, student_id: int) -> List[ProjectAggregate]:
    memberships = store.select(TeamMember, TeamMember.student_id == student_id)
    project_ids = [m.project_id for m in memberships]
    if not project_ids:
        return []
    return hydrate(store, store.select(Project, Project.id.in_(project_ids), order_by=[Project.id.asc()]))


def list_projects_for_advisor(store: TableStore, advisor_id: int) -> List[ProjectAggregate]:
    return hydrate(store, store.select(Project, Project.advisor_id == advisor_id, order_by=[Project.id.asc()]))


def list_projects_by_course(store: TableStore, course_id: int) -> List[ProjectAggregate]:
    return hydrate(store, store.select(Project, Project.course_id == course_id, order_by=[Project.id.asc()]))


def list_all_projects(store: TableStore) -> List[ProjectAggregate]:
    return hydrate(store, store.select(Project, order_by=[Project.id.asc()]))


def list_approved_projects(store: TableStore) -> List[ProjectAggregate]:
    return hydrate(store, store.select(Project, Project.status == "approved", order_by=[Project.id.asc()]))


def list_projects_for_user(store: TableStore, user: User) -> List[ProjectAggregate]:
    if user.role == STUDENT:
        return list_projects_for_student(store, user.id)
    if user.role == ADVISOR:
        return list_projects_for_advisor(store, user.id)
    return list_all_projects(store)
