from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import Field

from boutique.core.db import MongoModel
from boutique.core.results import ApiModel
from boutique.utils import now


class UserRole(StrEnum):
    """Roles a user can hold."""

    USER = "user"
    ADMIN = "admin"


class User(MongoModel):
    """Registered customer or administrator.

    Indexed on email - unique, mobile - unique for string values, created_at.
    Local registrations carry first/last name and mobile, Google sign-ins carry
    a display name and photo.
    """

    email: str
    first_name: str | None = None
    last_name: str | None = None
    name: str | None = None  # Display name from Google
    mobile: str | None = None
    photo: str = ""
    role: UserRole = UserRole.USER
    created_at: datetime = Field(default_factory=now)


class UserView(ApiModel):
    """User account information (API representation)."""

    id: UUID = Field(..., description="User ID")
    email: str = Field(..., description="Email address")
    first_name: str | None = Field(None, description="First name (local registration)")
    last_name: str | None = Field(None, description="Last name (local registration)")
    name: str | None = Field(None, description="Display name (Google sign-in)")
    mobile: str | None = Field(None, description="Mobile number (local registration)")
    photo: str = Field("", description="Profile photo URL")
    role: UserRole = Field(..., description="User role")
    created_at: datetime = Field(..., description="Registration time")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            name=user.name,
            mobile=user.mobile,
            photo=user.photo,
            role=user.role,
            created_at=user.created_at,
        )
