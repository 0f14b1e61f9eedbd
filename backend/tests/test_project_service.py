"""Role-gated grade, feedback, status and field updates."""

import pytest

from app.exceptions import AuthorizationError, NotFoundError, ValidationError
from app.models.project import Link, Project
from app.schemas.project import ProjectCreate, ProjectUpdate
from app.services import project_service
from app.services.project_creation import create_project
from app.services.table_store import TableStore


@pytest.fixture
def project(store, seed_users):
    aggregate = create_project(store, seed_users["student"], ProjectCreate(
        title="Campus Navigator",
        description="Indoor wayfinding",
        keywords=["ai"],
        external_links=["https://github.com/x/nav"],
        team_members=[{"name": "Dr. Lee", "email": "lee@x.edu", "role": "lecturer"}],
    ))
    return aggregate.project


def test_assigned_advisor_grade_lives_in_metadata(db, store, seed_users, project):
    aggregate = project_service.set_grade(store, project.id, "b+", seed_users["advisor"])

    assert aggregate.grade == "B+"
    assert aggregate.metadata["grade"] == "B+"
    assert aggregate.metadata["keywords"] == ["ai"]
    assert aggregate.project.grade is None
    assert db.query(Project).filter(Project.id == project.id).one().grade is None


def test_regrading_with_same_value_skips_write(store, seed_users, project, monkeypatch):
    project_service.set_grade(store, project.id, "A", seed_users["advisor"])

    def _no_writes(*args, **kwargs):
        raise AssertionError("unchanged grade must not be written")

    monkeypatch.setattr(TableStore, "update", _no_writes)
    aggregate = project_service.set_grade(store, project.id, "A", seed_users["advisor"])

    assert aggregate.grade == "A"


def test_clearing_grade_held_only_in_column(db, store, seed_users, project):
    db.query(Project).filter(Project.id == project.id).update({"grade": "A"})
    db.commit()
    assert project_service.get_project_aggregate(store, project.id).grade == "A"

    aggregate = project_service.set_grade(store, project.id, None, seed_users["advisor"])

    assert aggregate.grade is None
    db.expire_all()
    assert db.query(Project).filter(Project.id == project.id).one().grade is None


def test_column_grade_moves_into_metadata_when_regraded(db, store, seed_users, project):
    db.query(Project).filter(Project.id == project.id).update({"grade": "B"})
    db.commit()

    aggregate = project_service.set_grade(store, project.id, "B", seed_users["advisor"])

    assert aggregate.metadata["grade"] == "B"
    assert aggregate.project.grade is None


def test_clearing_grade_removes_it_from_metadata(store, seed_users, project):
    project_service.set_grade(store, project.id, "C", seed_users["advisor"])
    aggregate = project_service.set_grade(store, project.id, None, seed_users["advisor"])

    assert aggregate.grade is None
    assert "grade" not in aggregate.metadata


def test_invalid_grade_is_rejected(store, seed_users, project):
    with pytest.raises(ValidationError):
        project_service.set_grade(store, project.id, "E", seed_users["advisor"])


def test_only_advisors_grade(store, seed_users, project):
    with pytest.raises(AuthorizationError):
        project_service.set_grade(store, project.id, "A", seed_users["coordinator"])
    with pytest.raises(AuthorizationError):
        project_service.set_grade(store, project.id, "A", seed_users["student"])


def test_unassigned_advisor_cannot_change_anything(db, store, seed_users, project):
    outsider = seed_users["advisor2"]

    with pytest.raises(AuthorizationError):
        project_service.set_grade(store, project.id, "A", outsider)
    with pytest.raises(AuthorizationError):
        project_service.set_feedback(store, project.id, "Nice work", outsider)
    with pytest.raises(AuthorizationError):
        project_service.set_status(store, project.id, "approved", outsider)

    db.expire_all()
    row = db.query(Project).filter(Project.id == project.id).one()
    assert row.status == "underreview"
    assert row.feedback_advisor is None
    assert '"grade"' not in row.comment_student


def test_feedback_goes_to_role_specific_field(store, seed_users, project):
    project_service.set_feedback(store, project.id, "  Needs a demo video  ", seed_users["advisor"])
    aggregate = project_service.set_feedback(store, project.id, "Approved for showcase", seed_users["coordinator"])

    assert aggregate.project.feedback_advisor == "Needs a demo video"
    assert aggregate.project.feedback_coordinator == "Approved for showcase"


def test_empty_feedback_is_rejected(store, seed_users, project):
    with pytest.raises(ValidationError):
        project_service.set_feedback(store, project.id, "   ", seed_users["advisor"])


def test_students_cannot_review(store, seed_users, project):
    with pytest.raises(AuthorizationError):
        project_service.set_feedback(store, project.id, "Looks good to me", seed_users["student"])
    with pytest.raises(AuthorizationError):
        project_service.set_status(store, project.id, "approved", seed_users["student"])


@pytest.mark.parametrize(
    "text,expected",
    [("Completed", "approved"), ("Rejected", "reject"), ("something else", "underreview")],
)
def test_status_text_is_normalized(store, seed_users, project, text, expected):
    aggregate = project_service.set_status(store, project.id, text, seed_users["advisor"])
    assert aggregate.project.status == expected


def test_draft_project_can_be_completed_directly(store, seed_users):
    draft = create_project(store, seed_users["student"], ProjectCreate(
        title="Early Prototype", description="Work in progress", status="Draft",
    ))
    assert draft.project.status == "draft"

    aggregate = project_service.set_status(store, draft.project.id, "completed", seed_users["coordinator"])

    assert aggregate.project.status == "approved"


def test_reviewer_may_move_between_any_statuses(store, seed_users, project):
    project_service.set_status(store, project.id, "approved", seed_users["advisor"])
    rejected = project_service.set_status(store, project.id, "rejected", seed_users["advisor"])
    assert rejected.project.status == "reject"

    back_to_draft = project_service.set_status(store, project.id, "draft", seed_users["coordinator"])
    assert back_to_draft.project.status == "draft"


def test_empty_status_is_rejected(store, seed_users, project):
    with pytest.raises(ValidationError):
        project_service.set_status(store, project.id, "  ", seed_users["coordinator"])


def test_missing_project_is_not_found(store, seed_users):
    with pytest.raises(NotFoundError):
        project_service.set_status(store, 999, "approved", seed_users["coordinator"])


def test_team_member_update_replaces_links_and_keeps_grade(db, store, seed_users, project):
    project_service.set_grade(store, project.id, "A", seed_users["advisor"])

    aggregate = project_service.update_project(store, project.id, ProjectUpdate(
        title="Campus Navigator v2",
        keywords=["Health"],
        external_links=[],
        team_members=[{"name": "Dr. Park", "email": "park@x.edu", "role": "lecturer"}],
    ), seed_users["student"])

    assert aggregate.project.name == "Campus Navigator v2"
    assert aggregate.project.description == "Indoor wayfinding"
    assert aggregate.project.keyword == "health"
    assert aggregate.advisor.email == "park@x.edu"
    assert aggregate.links == ()
    assert aggregate.grade == "A"
    assert db.query(Link).filter(Link.project_id == project.id).count() == 0


def test_update_forbidden_for_advisor_and_outside_student(store, seed_users, project):
    with pytest.raises(AuthorizationError):
        project_service.update_project(store, project.id, ProjectUpdate(title="x"), seed_users["advisor"])
    with pytest.raises(AuthorizationError):
        project_service.update_project(store, project.id, ProjectUpdate(title="x"), seed_users["student2"])


def test_coordinator_may_update_any_project(store, seed_users, project):
    aggregate = project_service.update_project(
        store, project.id, ProjectUpdate(semester="Semester 2"), seed_users["coordinator"]
    )
    assert aggregate.project.semester == "2"
