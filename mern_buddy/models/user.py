"""User model definitions."""
from pydantic import EmailStr, Field

from mern_buddy.models.base import CamelModel, UtcDatetime


class UserBase(CamelModel):
    """Base user fields."""

    email: EmailStr
    name: str = ""


class UserCreate(UserBase):
    """User creation model with password."""

    password: str = Field(min_length=6)


class User(UserBase):
    """User model without password (for API responses)."""

    id: str = Field(alias="_id", serialization_alias="id")
    created_at: UtcDatetime
    updated_at: UtcDatetime
