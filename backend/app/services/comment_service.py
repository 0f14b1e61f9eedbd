"""Project comment threads. Author details are attached with one batched user read."""

from typing import Any, Dict, List, Optional

from app.config import settings
from app.exceptions import AuthorizationError, NotFoundError, ValidationError
from app.models.comment import ProjectComment
from app.models.project import Project
from app.models.user import User
from app.utils.project_fields import normalize_string
from app.services.table_store import TableStore
from app.utils.permissions import can_delete_comment


def _serialize(comment: ProjectComment, users_by_id: Dict[int, User], project_names: Dict[int, str]) -> Dict[str, Any]:
    author = users_by_id.get(comment.user_id)
    return {
        "id": comment.id,
        "project_id": comment.project_id,
        "project_title": project_names.get(comment.project_id, "Unknown Project"),
        "user_id": comment.user_id,
        "user_name": author.name if author else "Unknown User",
        "user_email": author.email if author else "",
        "user_role": author.role if author else "user",
        "comment": comment.comment,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
    }


def _attach_details(store: TableStore, comments: List[ProjectComment]) -> List[Dict[str, Any]]:
    if not comments:
        return []
    user_ids = {c.user_id for c in comments}
    project_ids = {c.project_id for c in comments}
    users_by_id = {u.id: u for u in store.select(User, User.id.in_(sorted(user_ids)))}
    project_names = {p.id: p.name for p in store.select(Project, Project.id.in_(sorted(project_ids)))}
    return [_serialize(c, users_by_id, project_names) for c in comments]


def list_comments(store: TableStore, project_id: int) -> List[Dict[str, Any]]:
    comments = store.select(
        ProjectComment,
        ProjectComment.project_id == project_id,
        order_by=[ProjectComment.created_at.asc(), ProjectComment.id.asc()],
    )
    return _attach_details(store, comments)


def list_recent_comments(store: TableStore, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    comments = store.select(
        ProjectComment,
        order_by=[ProjectComment.created_at.desc(), ProjectComment.id.desc()],
        limit=limit or settings.COMMENT_FEED_LIMIT,
    )
    return _attach_details(store, comments)


def add_comment(store: TableStore, project_id: int, text: str, current_user: User) -> Dict[str, Any]:
    body = normalize_string(text)
    if not body:
        raise ValidationError("Comment text is required.", field="comment")
    if store.first(Project, Project.id == project_id) is None:
        raise NotFoundError("Project")
    comment = store.insert_one(ProjectComment, {
        "project_id": project_id,
        "user_id": current_user.id,
        "comment": body,
    })
    return _attach_details(store, [comment])[0]


def delete_comment(store: TableStore, comment_id: int, current_user: User) -> None:
    comment = store.first(ProjectComment, ProjectComment.id == comment_id)
    if comment is None:
        raise NotFoundError("Comment")
    if not can_delete_comment(comment.user_id, current_user):
        raise AuthorizationError("You can only delete your own comments.", required_role="coordinator")
    store.delete(ProjectComment, ProjectComment.id == comment_id)
