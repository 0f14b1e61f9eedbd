"""Token issuing and mock SSO login. Real identity verification happens upstream."""

from datetime import datetime, timedelta, timezone
from jose import jwt
from fastapi import HTTPException, status
from app.models.user import User
from app.config import settings
from app.services.table_store import TableStore
from app.services.user_service import find_user_by_email

ALGORITHM = "HS256"


def create_access_token(user_id: int) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {"sub": str(user_id), "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def mock_sso_login(store: TableStore, email: str) -> User:
    user = find_user_by_email(store, email)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"No account found for '{email}'.",
        )
    return user
