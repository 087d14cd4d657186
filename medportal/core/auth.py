from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from medportal.core.db import get_db
from medportal.core.errors import PermissionDenied
from medportal.models.schemas.user import SessionModel
from medportal.services.auth_service import AuthService
from medportal.services.permissions import Permission, has_permission, unauthorized_message

# Clients exchange email/password for a session token at this URL.
# auto_error is off so a missing header goes through the same AuthError path.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token", auto_error=False)


def get_current_session(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Session = Depends(get_db),
) -> SessionModel:
    """
    Dependency that resolves the Bearer token into the signed-in session.

    Unknown, missing or expired tokens raise AuthError, which the app maps to
    401 with a WWW-Authenticate header.
    """
    return AuthService(db).current_session(token)


def require_permission(permission: Permission, action: str = "perform this action"):
    """Dependency factory: the session's role must hold `permission`."""

    def dependency(session: SessionModel = Depends(get_current_session)) -> SessionModel:
        if not has_permission(session.role, permission):
            raise PermissionDenied(unauthorized_message(action))
        return session

    return dependency
