from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from medportal.models.orm.user import UserRole


class UserModel(BaseModel):
    """Public view of a user account (never carries the password hash)."""

    id: str
    email: str
    role: UserRole

    model_config = ConfigDict(from_attributes=True)


class SessionModel(BaseModel):
    """The signed-in user and their role, plus the profile the role links to."""

    user: UserModel
    role: UserRole
    representative_id: Optional[str] = Field(
        None, description="Set for representatives whose profile could be resolved."
    )
    manager_id: Optional[str] = None
    expires_at: Optional[datetime] = None


# --- Sign in flow ---


class SignInModel(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class SignInResultModel(BaseModel):
    ok: bool
    error: Optional[str] = None
    access_token: Optional[str] = None
    token_type: str = "bearer"
    session: Optional[SessionModel] = None


class TokenModel(BaseModel):
    access_token: str
    token_type: str = "bearer"


# --- Managers ---


class ManagerCreateModel(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6, max_length=72)
    full_name: str = Field(..., min_length=1)


class ManagerUpdateModel(BaseModel):
    full_name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, min_length=3)


class ManagerResponseModel(BaseModel):
    id: str
    full_name: str
    user: Optional[UserModel] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
