import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy.orm import Session

from medportal.core.errors import AuthError, RecordConflict
from medportal.core.security import hash_password, new_session_token, verify_password
from medportal.core.settings import config_settings
from medportal.models.orm.user import UserORM, UserRole
from medportal.models.orm.base import utcnow
from medportal.models.schemas.user import SessionModel, SignInResultModel, UserModel
from medportal.repositories.base_repo import parse_record
from medportal.repositories.representative_repo import RepresentativeRepository
from medportal.repositories.user_repo import ManagerRepository, SessionRepository, UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    def __init__(self, db: Session):
        self.user_repo = UserRepository(db)
        self.session_repo = SessionRepository(db)
        self.manager_repo = ManagerRepository(db)
        self.representative_repo = RepresentativeRepository(db)

    def sign_in(self, email: str, password: str) -> SignInResultModel:
        """
        Checks the credentials and opens a session.

        Bad credentials are an expected outcome, not an exception: the result
        carries ok=False and no session is created.
        """
        user = self.user_repo.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Rejected sign-in for %s", email.strip().lower())
            return SignInResultModel(ok=False, error=INVALID_CREDENTIALS)

        token = new_session_token()
        expires_at = utcnow() + timedelta(minutes=config_settings.SESSION_TTL_MINUTES)
        self.session_repo.create_session(token=token, user_id=user.id, expires_at=expires_at)
        logger.info("User %s signed in as %s", user.id, user.role.value)

        session = self._build_session(user)
        session.expires_at = expires_at
        return SignInResultModel(ok=True, access_token=token, session=session)

    def current_session(self, token: Optional[str]) -> SessionModel:
        """Resolves a bearer token into the session context, or raises AuthError."""
        record = self.session_repo.get_by_id(token) if token else None
        if record is None:
            raise AuthError()

        if record.expires_at <= utcnow():
            self.session_repo.delete_if_exists(record.token)
            raise AuthError("Session expired")

        session = self._build_session(record.user)
        session.expires_at = record.expires_at
        return session

    def sign_out(self, token: str) -> None:
        if self.session_repo.delete_if_exists(token):
            logger.info("Session closed")

    def register_user(self, email: str, password: str, role: UserRole) -> UserORM:
        """Stage a new login account; the caller's repository commits it."""
        if self.user_repo.get_by_email(email) is not None:
            raise RecordConflict(f"A user with email {email.strip().lower()} already exists.")
        return self.user_repo.build(email, hash_password(password), role)

    def create_account(self, email: str, password: str, role: UserRole) -> UserModel:
        user = self.register_user(email, password, role)
        self.user_repo.commit()
        logger.info("Created %s account %s", role.value, user.id)
        return parse_record(UserModel, user)

    def _build_session(self, user: UserORM) -> SessionModel:
        session = SessionModel(user=parse_record(UserModel, user), role=user.role)

        if user.role == UserRole.REP:
            rep = self.representative_repo.get_by_user_id(user.id)
            if rep is None:
                # Tolerated: the account works, rep-scoped views come back empty
                logger.warning("No representative profile linked to user %s", user.id)
            else:
                session.representative_id = rep.id
        else:
            manager = self.manager_repo.get_by_user_id(user.id)
            if manager is not None:
                session.manager_id = manager.id

        return session
