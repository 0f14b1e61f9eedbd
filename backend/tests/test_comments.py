"""Comment threads on projects."""

import pytest

from app.exceptions import AuthorizationError, NotFoundError, ValidationError
from app.models.project import Project
from app.services import comment_service
from tests.conftest import auth_headers


@pytest.fixture
def project(db):
    project = Project(name="Weather Station", project_type="academic", status="underreview", semester="1", year=2026)
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


def test_add_and_list_comments(client, seed_users, project):
    headers = auth_headers(client, "a@x.edu")
    resp = client.post(f"/api/comments/{project.id}", json={"comment": "  First draft uploaded "}, headers=headers)
    assert resp.status_code == 201
    comment = resp.json()["comment"]
    assert comment["comment"] == "First draft uploaded"
    assert comment["user_name"] == "Alex Kim"
    assert comment["project_title"] == "Weather Station"

    client.post(f"/api/comments/{project.id}", json={"comment": "Please add sources"}, headers=auth_headers(client, "lee@x.edu"))

    listed = client.get(f"/api/comments/{project.id}", headers=headers).json()["comments"]
    assert [c["user_role"] for c in listed] == ["student", "advisor"]


def test_empty_comment_and_unknown_project(store, seed_users, project):
    with pytest.raises(ValidationError):
        comment_service.add_comment(store, project.id, "   ", seed_users["student"])
    with pytest.raises(NotFoundError):
        comment_service.add_comment(store, 999, "hello", seed_users["student"])


def test_recent_feed_is_newest_first_and_limited(store, seed_users, project):
    for text in ("one", "two", "three"):
        comment_service.add_comment(store, project.id, text, seed_users["student"])

    feed = comment_service.list_recent_comments(store, limit=2)

    assert [c["comment"] for c in feed] == ["three", "two"]


def test_deleted_author_renders_as_unknown(db, store, seed_users, project):
    comment_service.add_comment(store, project.id, "orphan soon", seed_users["student2"])
    db.delete(seed_users["student2"])
    db.commit()

    [comment] = comment_service.list_comments(store, project.id)

    assert comment["user_name"] == "Unknown User"
    assert comment["user_email"] == ""


def test_only_author_or_coordinator_deletes(client, store, seed_users, project):
    first = comment_service.add_comment(store, project.id, "mine", seed_users["student"])
    second = comment_service.add_comment(store, project.id, "also mine", seed_users["student"])

    with pytest.raises(AuthorizationError):
        comment_service.delete_comment(store, first["id"], seed_users["advisor"])

    resp = client.delete(f"/api/comments/{first['id']}", headers=auth_headers(client, "a@x.edu"))
    assert resp.status_code == 200
    resp = client.delete(f"/api/comments/{second['id']}", headers=auth_headers(client, "dana@x.edu"))
    assert resp.status_code == 200
    resp = client.delete(f"/api/comments/{second['id']}", headers=auth_headers(client, "dana@x.edu"))
    assert resp.status_code == 404

    assert comment_service.list_comments(store, project.id) == []


def test_recent_feed_endpoint(client, store, seed_users, project):
    comment_service.add_comment(store, project.id, "hello", seed_users["student"])

    resp = client.get("/api/comments/all", headers=auth_headers(client, "dana@x.edu"))

    assert resp.status_code == 200
    assert [c["comment"] for c in resp.json()] == ["hello"]
