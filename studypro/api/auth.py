from fastapi import APIRouter, Depends, Response

from studypro.api.deps import get_current_user, get_repo
from studypro.core.config import settings
from studypro.core.security import create_access_token
from studypro.models.user import User
from studypro.repositories.sql import SqlRepository
from studypro.schemas.auth import RegisterIn, LoginIn, TokenOut
from studypro.schemas.billing import SubscriptionOut
from studypro.schemas.common import OkOut
from studypro.schemas.user import MeOut, UserOut
from studypro.services import accounts, ledger

router = APIRouter(prefix="/api/auth", tags=["auth"])

def _issue_token(response: Response, user: User) -> TokenOut:
    token = create_access_token(subject=str(user.id), role=user.role)
    response.set_cookie(
        settings.auth_cookie_name,
        token,
        httponly=True,
        samesite="lax",
        max_age=settings.jwt_access_ttl_min * 60,
    )
    return TokenOut(access_token=token, user=UserOut.model_validate(user))

@router.post("/register", response_model=TokenOut)
def register(payload: RegisterIn, response: Response, repo: SqlRepository = Depends(get_repo)):
    user = accounts.register(repo, payload.name, payload.email, payload.password)
    return _issue_token(response, user)


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, response: Response, repo: SqlRepository = Depends(get_repo)):
    user = accounts.authenticate(repo, payload.email, payload.password)
    return _issue_token(response, user)

@router.post("/logout", response_model=OkOut)
def logout(response: Response):
    response.delete_cookie(settings.auth_cookie_name)
    return OkOut()

@router.get("/me", response_model=MeOut)
def me(user: User = Depends(get_current_user), repo: SqlRepository = Depends(get_repo)):
    sub = ledger.current_active(repo, user.id)
    return MeOut(
        user=UserOut.model_validate(user),
        subscription=SubscriptionOut.model_validate(sub) if sub else None,
    )
