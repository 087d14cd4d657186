from datetime import datetime
from typing import Optional

from sqlalchemy import func, select

from medportal.models.orm.user import ManagerORM, SessionORM, UserORM, UserRole

from .base_repo import RecordRepository


class UserRepository(RecordRepository[UserORM]):
    model = UserORM
    label = "user"
    order_by = (UserORM.email,)

    def get_by_email(self, email: str) -> Optional[UserORM]:
        """Case-insensitive lookup on the trimmed address."""
        stmt = select(UserORM).where(func.lower(UserORM.email) == email.strip().lower())
        users = self._scalars(stmt)
        return users[0] if users else None

    def build(self, email: str, password_hash: str, role: UserRole) -> UserORM:
        """Stage a new user in the session without committing."""
        user = UserORM(email=email.strip().lower(), password_hash=password_hash, role=role)
        self.db.add(user)
        return user

    def count_by_role(self, role: UserRole) -> int:
        return len(self.filter_by(role=role))


class SessionRepository(RecordRepository[SessionORM]):
    model = SessionORM
    label = "session"
    order_by = (SessionORM.created_at,)

    def get_by_id(self, token: str) -> Optional[SessionORM]:
        if not token:
            return None
        return super().get_by_id(token)

    def create_session(self, token: str, user_id: str, expires_at: datetime) -> SessionORM:
        return self.insert(token=token, user_id=user_id, expires_at=expires_at)

    def delete_if_exists(self, token: str) -> bool:
        session = self.get_by_id(token)
        if session is None:
            return False
        self.db.delete(session)
        self.commit()
        return True


class ManagerRepository(RecordRepository[ManagerORM]):
    model = ManagerORM
    label = "manager"
    order_by = (ManagerORM.full_name,)

    def get_by_user_id(self, user_id: str) -> Optional[ManagerORM]:
        managers = self.filter_by(user_id=user_id)
        return managers[0] if managers else None

    def create_with_user(self, user: UserORM, full_name: str) -> ManagerORM:
        """Insert the manager and its (staged) user account in one commit."""
        manager = ManagerORM(user=user, full_name=full_name)
        self.db.add(manager)
        self.commit()
        self.db.refresh(manager)
        return manager

    def update_with_user(
        self, manager: ManagerORM, full_name: Optional[str] = None, email: Optional[str] = None
    ) -> ManagerORM:
        """Apply a rename and/or a new login email in one commit."""
        if full_name:
            manager.full_name = full_name
        if email and manager.user is not None:
            manager.user.email = email
        self.commit()
        self.db.refresh(manager)
        return manager

    def delete_with_user(self, manager_id: str) -> None:
        manager = self.require(manager_id)
        user = manager.user
        self.db.delete(manager)
        if user is not None:
            self.db.delete(user)
        self.commit()
