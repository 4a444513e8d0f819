# ==============================================================================
# APPLICATION CONSTANTS - Centralized Configuration Values
# ==============================================================================
# Immutable constants used throughout the application
# Organized by category for easy maintenance
# ==============================================================================

from __future__ import annotations

from enum import Enum
from typing import Dict, Final


# ==============================================================================
# API CONSTANTS
# ==============================================================================

class APIConstants:
    """API-related constants."""

    REQUEST_ID_HEADER: Final[str] = "X-Request-ID"
    RESPONSE_TIME_HEADER: Final[str] = "X-Response-Time"
    LIVENESS_MESSAGE: Final[str] = "ThinkLock is running..."


# ==============================================================================
# DATABASE CONSTANTS
# ==============================================================================

class DatabaseConstants:
    """Collection names and query limits."""

    USERS_COLLECTION: Final[str] = "users"
    COURSES_COLLECTION: Final[str] = "courses"
    BASKETS_COLLECTION: Final[str] = "bookedCourses"
    ORDERS_COLLECTION: Final[str] = "orders"

    POPULAR_COURSES_LIMIT: Final[int] = 6


# ==============================================================================
# DOMAIN ENUMERATIONS
# ==============================================================================

class Role(str, Enum):
    """Account roles."""
    ADMIN = "admin"
    INSTRUCTOR = "instructor"
    STUDENT = "student"


class CourseStatus(str, Enum):
    """Course approval workflow states."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# ==============================================================================
# PROJECTIONS
# ==============================================================================

class Projections:
    """Field projections for publicly visible documents."""

    PUBLIC_COURSE: Final[Dict[str, int]] = {
        "instructor_id": 1,
        "name": 1,
        "seat": 1,
        "purchase": 1,
        "price": 1,
        "image": 1,
    }
    # Basket view hides purchase counts
    BASKET_COURSE: Final[Dict[str, int]] = {
        "instructor_id": 1,
        "name": 1,
        "seat": 1,
        "price": 1,
        "image": 1,
    }
    PUBLIC_PROFILE: Final[Dict[str, int]] = {
        "name": 1,
        "email": 1,
        "photo": 1,
    }
    ACCOUNT_PRIVATE: Final[Dict[str, int]] = {
        "hashed_password": 0,
    }


# ==============================================================================
# IMAGE STORAGE CONSTANTS
# ==============================================================================

class ImageFolders:
    """Sub-folders under the image storage root."""
    USERS: Final[str] = "users"
    COURSES: Final[str] = "courses"


# ==============================================================================
# ERROR MESSAGES
# ==============================================================================

class ErrorMessages:
    """Standardized error messages."""

    UNAUTHORIZED: Final[str] = "Unauthorized access!"
    FORBIDDEN: Final[str] = "Forbidden access!"
    INVALID_CREDENTIALS: Final[str] = "Invalid identifier or password"
    ACCOUNT_NOT_FOUND: Final[str] = "Account not found"
    ACCOUNT_EXISTS: Final[str] = "Account already exists"
    COURSE_NOT_FOUND: Final[str] = "Course not found"
    INSTRUCTOR_NOT_FOUND: Final[str] = "Instructor not found"
    EMPTY_BASKET: Final[str] = "Basket is empty"
    COURSE_FULL: Final[str] = "Course has no free seats"
    NO_COVERING_ORDER: Final[str] = "No paid order covers these courses"
    INTENT_REUSED: Final[str] = "Payment intent has already been used"
    INTERNAL_ERROR: Final[str] = "An internal error occurred"
