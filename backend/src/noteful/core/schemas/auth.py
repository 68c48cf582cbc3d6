"""
Authentication and account schemas.

Registration fields are declared as strict strings so a missing or
non-string value is rejected before it reaches the service. A null
``full_name`` is the same as leaving it out. The trimming and length rules
live in the service so they apply to every caller.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class LoginRequest(BaseModel):
    """User login request schema."""

    username: str = Field(description="Username")
    password: str = Field(description="User password")

    model_config = ConfigDict(
        json_schema_extra={"example": {"username": "john_doe", "password": "securepassword123"}}
    )


class RegisterRequest(BaseModel):
    """User registration request schema."""

    username: StrictStr = Field(description="Unique username, 3-20 characters")
    password: StrictStr = Field(description="Password, 8-30 characters")
    full_name: Optional[StrictStr] = Field(default="", description="Display name (optional)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "new_user",
                "password": "securepassword123",
                "full_name": "New User",
            }
        }
    )


class UserResponse(BaseModel):
    """Public account representation. Never carries the password digest."""

    id: uuid.UUID = Field(description="User unique identifier")
    username: str = Field(description="Username")
    full_name: str = Field(description="Display name")
    created_at: datetime = Field(description="Account creation timestamp")
    updated_at: Optional[datetime] = Field(default=None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class IdentityResponse(BaseModel):
    """Identity snapshot embedded in a token."""

    id: uuid.UUID
    username: str
    full_name: str = ""


class TokenResponse(BaseModel):
    """JWT token response schema."""

    access_token: str = Field(description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(description="Token lifetime in seconds")
    user: IdentityResponse = Field(description="Identity embedded in the token")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "token_type": "bearer",
                "expires_in": 604800,
                "user": {
                    "id": "123e4567-e89b-12d3-a456-426614174000",
                    "username": "user123",
                    "full_name": "User Name",
                },
            }
        }
    )
