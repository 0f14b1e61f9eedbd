"""Comments API router."""

from fastapi import APIRouter, Depends, status
from app.schemas.comment import CommentCreate, CommentEnvelope, CommentListEnvelope, CommentOut
from app.services import comment_service
from app.services.table_store import TableStore, get_store
from app.middleware.auth_middleware import get_current_user
from app.models.user import User
from typing import List

router = APIRouter(prefix="/api/comments", tags=["comments"])


@router.get("/all", response_model=List[CommentOut])
def list_recent_comments(store: TableStore = Depends(get_store), current_user: User = Depends(get_current_user)):
    return comment_service.list_recent_comments(store)


@router.get("/{project_id}", response_model=CommentListEnvelope)
def list_comments(project_id: int, store: TableStore = Depends(get_store), current_user: User = Depends(get_current_user)):
    return {"comments": comment_service.list_comments(store, project_id)}


@router.post("/{project_id}", response_model=CommentEnvelope, status_code=status.HTTP_201_CREATED)
def add_comment(
    project_id: int,
    data: CommentCreate,
    store: TableStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    return {"comment": comment_service.add_comment(store, project_id, data.comment, current_user)}


@router.delete("/{comment_id}")
def delete_comment(comment_id: int, store: TableStore = Depends(get_store), current_user: User = Depends(get_current_user)):
    comment_service.delete_comment(store, comment_id, current_user)
    return {"message": "Comment deleted."}
