"""Projects API router. Role checks and consistency rules live in the services."""

from fastapi import APIRouter, Depends, status
from app.schemas.project import (
    FeedbackUpdate,
    GradeUpdate,
    ProjectCreate,
    ProjectEnvelope,
    ProjectListEnvelope,
    ProjectOut,
    ProjectUpdate,
    StatusUpdate,
)
from app.services import project_creation, project_hydrator, project_service
from app.services.table_store import TableStore, get_store
from app.middleware.auth_middleware import get_current_user, require_roles
from app.models.user import User
from app.utils.permissions import STUDENT

router = APIRouter(prefix="/api/projects", tags=["projects"])


def _envelope(aggregate) -> ProjectEnvelope:
    return ProjectEnvelope(project=ProjectOut.from_aggregate(aggregate))


@router.get("", response_model=ProjectListEnvelope)
def list_projects(store: TableStore = Depends(get_store), current_user: User = Depends(get_current_user)):
    aggregates = project_hydrator.list_projects_for_user(store, current_user)
    return ProjectListEnvelope(projects=[ProjectOut.from_aggregate(a) for a in aggregates])


@router.get("/archive", response_model=ProjectListEnvelope)
def list_archive(store: TableStore = Depends(get_store), current_user: User = Depends(get_current_user)):
    aggregates = project_hydrator.list_approved_projects(store)
    return ProjectListEnvelope(projects=[ProjectOut.from_aggregate(a) for a in aggregates])


@router.get("/{project_id}", response_model=ProjectEnvelope)
def get_project(project_id: int, store: TableStore = Depends(get_store), current_user: User = Depends(get_current_user)):
    return _envelope(project_hydrator.get_project_aggregate(store, project_id))


@router.post("", response_model=ProjectEnvelope, status_code=status.HTTP_201_CREATED)
def create_project(
    data: ProjectCreate,
    store: TableStore = Depends(get_store),
    current_user: User = Depends(require_roles(STUDENT)),
):
    return _envelope(project_creation.create_project(store, current_user, data))


@router.patch("/{project_id}", response_model=ProjectEnvelope)
def update_project(
    project_id: int,
    data: ProjectUpdate,
    store: TableStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    return _envelope(project_service.update_project(store, project_id, data, current_user))


@router.patch("/{project_id}/grade", response_model=ProjectEnvelope)
def set_grade(
    project_id: int,
    data: GradeUpdate,
    store: TableStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    return _envelope(project_service.set_grade(store, project_id, data.grade, current_user))


@router.patch("/{project_id}/feedback", response_model=ProjectEnvelope)
def set_feedback(
    project_id: int,
    data: FeedbackUpdate,
    store: TableStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    return _envelope(project_service.set_feedback(store, project_id, data.feedback, current_user))


@router.patch("/{project_id}/status", response_model=ProjectEnvelope)
def set_status(
    project_id: int,
    data: StatusUpdate,
    store: TableStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    return _envelope(project_service.set_status(store, project_id, data.status, current_user))
