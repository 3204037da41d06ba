"""
Tienda Back Office — User Request/Response Schemas
====================================================

What:  Pydantic models for registration, profile update and user output.
Security:
    UserResponse has no password field at all, so no code path that
    serializes through it can leak the hash.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from backoffice.models.user import EMAIL_MAX_LENGTH, FULL_NAME_MAX_LENGTH

MIN_PASSWORD_LENGTH = 6


class UserCreateInput(BaseModel):
    """Body accepted by POST on the users resource."""

    full_name: str = Field(min_length=1, max_length=FULL_NAME_MAX_LENGTH)
    email: str = Field(min_length=1, max_length=EMAIL_MAX_LENGTH)
    # Not stripped: leading/trailing spaces are part of the secret
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)

    @field_validator("full_name", "email", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v


class UserUpdateInput(BaseModel):
    """
    Body accepted by PUT on the users resource.

    Only name and email can change here; a `password` key in the body is
    ignored like any other unknown field.
    """

    model_config = {"str_strip_whitespace": True}

    full_name: str = Field(min_length=1, max_length=FULL_NAME_MAX_LENGTH)
    email: str = Field(min_length=1, max_length=EMAIL_MAX_LENGTH)


class UserResponse(BaseModel):
    """Public representation of a user row."""
    id: int
    full_name: str
    email: str
    registered_at: datetime

    model_config = {"from_attributes": True}
