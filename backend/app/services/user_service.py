"""User lookups consumed by the project core, plus the weak-reference-safe user delete."""

import logging
from typing import List, Optional

from sqlalchemy import func

from app.exceptions import NotFoundError
from app.models.project import Project
from app.models.user import User
from app.services.table_store import TableStore

logger = logging.getLogger(__name__)


def find_user_by_email(store: TableStore, email: Optional[str]) -> Optional[User]:
    text = (email or "").strip().lower()
    if not text:
        return None
    return store.first(User, func.lower(User.email) == text)


def find_user_by_id(store: TableStore, user_id: int) -> Optional[User]:
    return store.first(User, User.id == user_id)


def list_users(store: TableStore) -> List[User]:
    return store.select(User, order_by=[User.id.asc()])


def delete_user(store: TableStore, user_id: int) -> None:
    """Delete a user without touching the projects that point at them.

    Advisor references are nulled first. Team-member rows are left behind and are
    skipped by the hydrator when it cannot resolve the student.
    """
    user = find_user_by_id(store, user_id)
    if not user:
        raise NotFoundError("User")
    released = store.update(Project, {"advisor_id": None}, Project.advisor_id == user_id)
    if released:
        logger.info("[users] cleared advisor on %d project(s) before deleting user %s", len(released), user_id)
    store.delete(User, User.id == user_id)
