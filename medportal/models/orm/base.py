import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Naive UTC timestamp; SQLite drops tzinfo so everything is stored naive."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class CustomBase:
    def __repr__(self) -> str:
        class_name = self.__class__.__name__

        columns = [(c.name, getattr(self, c.name)) for c in self.__table__.columns]

        column_str = ", ".join(
            f"{name}={repr(value)}" for name, value in columns if name != "password_hash"
        )

        return f"{class_name}({column_str})"


Base = declarative_base(cls=CustomBase)
