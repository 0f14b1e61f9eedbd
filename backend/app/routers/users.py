"""Users API router (coordinator only)."""

from fastapi import APIRouter, Depends, Response, status
from typing import List

from app.middleware.auth_middleware import require_roles
from app.models.user import User
from app.schemas.user import UserOut
from app.services import user_service
from app.services.table_store import TableStore, get_store
from app.utils.permissions import COORDINATOR

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=List[UserOut])
def list_users(
    store: TableStore = Depends(get_store),
    _current_user: User = Depends(require_roles(COORDINATOR)),
):
    return user_service.list_users(store)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    store: TableStore = Depends(get_store),
    _current_user: User = Depends(require_roles(COORDINATOR)),
):
    user_service.delete_user(store, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
