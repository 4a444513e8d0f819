# ==============================================================================
# API ENDPOINTS PACKAGE
# ==============================================================================

"""
API Endpoints
=============

One router per resource family.
"""

from thinklock.api.endpoints.auth import router as auth_router
from thinklock.api.endpoints.checkout import router as checkout_router
from thinklock.api.endpoints.courses import router as courses_router
from thinklock.api.endpoints.instructors import router as instructors_router
from thinklock.api.endpoints.students import router as students_router
from thinklock.api.endpoints.uploads import router as uploads_router
from thinklock.api.endpoints.users import router as users_router

__all__ = [
    "auth_router",
    "checkout_router",
    "courses_router",
    "instructors_router",
    "students_router",
    "uploads_router",
    "users_router",
]
