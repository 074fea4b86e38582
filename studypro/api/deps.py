from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session

from studypro.core.config import settings
from studypro.core.errors import Unauthorized
from studypro.core.roles import Role, ensure_admin
from studypro.core.security import decode_token
from studypro.db.session import get_db
from studypro.models.user import User
from studypro.repositories.sql import SqlRepository

bearer_scheme = HTTPBearer(auto_error=False)

def get_repo(db: Session = Depends(get_db)) -> SqlRepository:
    return SqlRepository(db)

def get_current_user(
        request: Request,
        creds: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
        repo: SqlRepository = Depends(get_repo),
) -> User:
    # Bearer header first, then the cookie set at login
    token = creds.credentials if creds else request.cookies.get(settings.auth_cookie_name)
    if not token:
        raise Unauthorized()
    try:
        payload = decode_token(token)
        user_id = int(payload.get("sub"))
    except (JWTError, TypeError, ValueError):
        raise Unauthorized("Invalid or expired token")

    user = repo.get_user(user_id)
    if not user:
        raise Unauthorized("User not found")
    return user

def get_current_admin(user: User = Depends(get_current_user)) -> User:
    ensure_admin(Role(user.role))
    return user
