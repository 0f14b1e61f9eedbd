from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from app.models.user import User
from app.config import settings
from app.exceptions import AuthorizationError
from app.services.table_store import TableStore, get_store
from app.services.user_service import find_user_by_id

security = HTTPBearer()

ALGORITHM = "HS256"


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session token is invalid or expired. Sign in again.",
        )


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    store: TableStore = Depends(get_store),
) -> User:
    payload = decode_token(credentials.credentials)
    user_id = payload.get("sub")
    if user_id is None:
        raise HTTPException(status_code=401, detail="Invalid token payload")

    user = find_user_by_id(store, int(user_id))
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    return user


def require_roles(*roles: str):
    """Route guard; a caller outside ``roles`` gets a 403 naming the role the route needs."""
    required = " or ".join(roles)

    def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise AuthorizationError(
                f"This action requires the {required} role; you are signed in as {current_user.role}.",
                required_role=required,
            )
        return current_user
    return checker
