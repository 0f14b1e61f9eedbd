"""User listing and deletion with weak project references."""

from app.models.project import Project, TeamMember
from app.services import project_hydrator
from tests.conftest import auth_headers


def test_list_users_coordinator_success(client, seed_users):
    headers = auth_headers(client, "dana@x.edu")
    resp = client.get("/api/users", headers=headers)
    assert resp.status_code == 200
    assert len(resp.json()) == 5


def test_list_users_forbidden_for_others(client, seed_users):
    for email in ("a@x.edu", "lee@x.edu"):
        resp = client.get("/api/users", headers=auth_headers(client, email))
        assert resp.status_code == 403


def test_delete_advisor_keeps_project(client, db, store, seed_users):
    advisor = seed_users["advisor"]
    project = Project(
        name="Drone Mapping", project_type="academic", status="underreview",
        semester="1", year=2026, advisor_id=advisor.id,
    )
    db.add(project)
    db.commit()
    db.add(TeamMember(project_id=project.id, student_id=seed_users["student"].id))
    db.commit()

    resp = client.delete(f"/api/users/{advisor.id}", headers=auth_headers(client, "dana@x.edu"))
    assert resp.status_code == 204

    db.expire_all()
    kept = db.query(Project).filter(Project.id == project.id).one()
    assert kept.advisor_id is None
    [aggregate] = project_hydrator.list_projects_for_student(store, seed_users["student"].id)
    assert aggregate.advisor is None
    assert [s.email for s in aggregate.students] == ["a@x.edu"]


def test_delete_student_leaves_membership_to_hydrator(client, db, store, seed_users):
    project = Project(name="Chatbot", project_type="other", status="draft", semester="2", year=2026)
    db.add(project)
    db.commit()
    db.add_all([
        TeamMember(project_id=project.id, student_id=seed_users["student"].id),
        TeamMember(project_id=project.id, student_id=seed_users["student2"].id),
    ])
    db.commit()

    resp = client.delete(f"/api/users/{seed_users['student2'].id}", headers=auth_headers(client, "dana@x.edu"))
    assert resp.status_code == 204

    [aggregate] = project_hydrator.hydrate_one(store, project.id)
    assert [s.email for s in aggregate.students] == ["a@x.edu"]


def test_delete_unknown_user_is_404(client, seed_users):
    resp = client.delete("/api/users/999", headers=auth_headers(client, "dana@x.edu"))
    assert resp.status_code == 404
