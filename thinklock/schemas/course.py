# ==============================================================================
# COURSE SCHEMAS - Listings, Creation & Updates
# ==============================================================================

from __future__ import annotations

from typing import Optional

from pydantic import Field

from thinklock.core.constants import CourseStatus
from thinklock.schemas.base import BaseSchema, TimestampSchema


class CourseCreate(BaseSchema):
    """Schema for an instructor creating a course."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Course title",
    )
    description: Optional[str] = Field(
        None,
        max_length=5000,
        description="Course description",
    )
    seat: int = Field(
        ...,
        ge=1,
        description="Seat capacity",
    )
    price: float = Field(
        ...,
        ge=0,
        description="Price in major currency units",
    )
    image: Optional[str] = Field(
        None,
        max_length=1000,
        description="Course image URL",
    )


class CourseUpdate(BaseSchema):
    """Instructor-editable course fields."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    seat: Optional[int] = Field(None, ge=1)
    price: Optional[float] = Field(None, ge=0)
    image: Optional[str] = Field(None, max_length=1000)


class CourseAdminUpdate(CourseUpdate):
    """Admin review: approval status, feedback and any editable field."""

    status: Optional[CourseStatus] = Field(
        None,
        description="Approval status",
    )
    feedback: Optional[str] = Field(
        None,
        max_length=5000,
        description="Note to the instructor",
    )


class CoursePublic(BaseSchema):
    """Public course projection."""

    id: str
    instructor_id: Optional[str] = None
    name: Optional[str] = None
    seat: int = 0
    purchase: int = 0
    price: float = 0
    image: Optional[str] = None


class BasketCourse(BaseSchema):
    """Course details shown in a basket (no purchase count)."""

    id: str
    instructor_id: Optional[str] = None
    name: Optional[str] = None
    seat: int = 0
    price: float = 0
    image: Optional[str] = None


class CourseResponse(TimestampSchema):
    """Full course record."""

    id: str
    instructor_id: str
    instructor_name: Optional[str] = None
    instructor_email: Optional[str] = None
    name: str
    description: Optional[str] = None
    seat: int
    purchase: int = 0
    price: float
    image: Optional[str] = None
    status: CourseStatus
    feedback: Optional[str] = None
