from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from starlette import status

from medportal.core.auth import get_current_session, oauth2_scheme
from medportal.core.db import get_db
from medportal.core.errors import AuthError
from medportal.models.schemas.user import (
    SessionModel,
    SignInModel,
    SignInResultModel,
    TokenModel,
)
from medportal.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/token",
    response_model=TokenModel,
    status_code=status.HTTP_200_OK,
    summary="Exchange email and password for a bearer token",
)
def issue_token(
    form: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: Session = Depends(get_db),
):
    """OAuth2 password flow. The `username` field carries the email."""
    result = AuthService(db).sign_in(form.username, form.password)
    if not result.ok:
        raise AuthError(result.error)
    return TokenModel(access_token=result.access_token)


@router.post(
    "/sign-in",
    response_model=SignInResultModel,
    status_code=status.HTTP_200_OK,
    summary="Sign in with a JSON body",
)
def sign_in(credentials: SignInModel, db: Session = Depends(get_db)):
    """
    Bad credentials are reported in the body ({"ok": false, "error": ...})
    rather than as an HTTP error.
    """
    return AuthService(db).sign_in(credentials.email, credentials.password)


@router.post(
    "/sign-out",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Close the current session",
)
def sign_out(
    token: Annotated[str, Depends(oauth2_scheme)],
    session: SessionModel = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    AuthService(db).sign_out(token)


@router.get(
    "/session",
    response_model=SessionModel,
    status_code=status.HTTP_200_OK,
    summary="The signed-in user and role",
)
def read_session(session: SessionModel = Depends(get_current_session)):
    return session
