# ==============================================================================
# MAIN API ROUTER - Route Aggregation
# ==============================================================================
# Combines all resource routers
# ==============================================================================

from __future__ import annotations

from fastapi import APIRouter

from thinklock.core.settings import settings
from thinklock.api.endpoints import (
    auth_router,
    checkout_router,
    courses_router,
    instructors_router,
    students_router,
    uploads_router,
    users_router,
)

# Create main API router
api_router = APIRouter()

# Uploads first so fixed upload paths win over parameterized ones
api_router.include_router(uploads_router, prefix=settings.API_PREFIX)
api_router.include_router(auth_router, prefix=settings.API_PREFIX)
api_router.include_router(users_router, prefix=settings.API_PREFIX)
api_router.include_router(instructors_router, prefix=settings.API_PREFIX)
api_router.include_router(courses_router, prefix=settings.API_PREFIX)
api_router.include_router(students_router, prefix=settings.API_PREFIX)
api_router.include_router(checkout_router, prefix=settings.API_PREFIX)
