# ==============================================================================
# ACCOUNT SCHEMAS - Registration, Credentials & Profiles
# ==============================================================================
# Request/Response schemas for account management
# ==============================================================================

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import EmailStr, Field

from thinklock.core.constants import Role
from thinklock.schemas.base import BaseSchema, TimestampSchema


class AccountCreate(BaseSchema):
    """Schema for account registration."""

    id: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Externally supplied account identifier",
        examples=["uid-7f3a"],
    )
    password: str = Field(
        ...,
        min_length=8,
        max_length=128,
        description="Account password (min 8 chars)",
    )
    role: Literal["student", "instructor"] = Field(
        "student",
        description="Requested role; admin cannot be self-assigned",
    )
    name: Optional[str] = Field(
        None,
        max_length=255,
        description="Display name",
    )
    email: Optional[EmailStr] = Field(
        None,
        description="Contact email address",
    )
    photo: Optional[str] = Field(
        None,
        max_length=1000,
        description="Profile image URL",
    )


class AccountUpdate(BaseSchema):
    """Schema for admin updates to an account."""

    role: Optional[Role] = Field(
        None,
        description="New role",
    )
    name: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = None
    photo: Optional[str] = Field(None, max_length=1000)


class AccountResponse(TimestampSchema):
    """Full account record (password hash never included)."""

    id: str
    role: Role
    name: Optional[str] = None
    email: Optional[str] = None
    photo: Optional[str] = None
    courses: List[str] = Field(
        default_factory=list,
        description="Enrolled course identifiers",
    )


class InstructorProfile(BaseSchema):
    """Public instructor projection."""

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    photo: Optional[str] = None


# ==============================================================================
# TOKEN SCHEMAS
# ==============================================================================

class Credentials(BaseSchema):
    """Schema for token issuance."""

    id: str = Field(..., min_length=1, description="Account identifier")
    password: str = Field(..., min_length=1, description="Account password")


class TokenResponse(BaseSchema):
    """Issued access token."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")


class TokenClaims(BaseSchema):
    """Verified claims of the bearer token on the current request."""

    sub: str
    role: Optional[str] = None
