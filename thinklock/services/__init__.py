# ==============================================================================
# SERVICES PACKAGE INITIALIZATION
# ==============================================================================
# Business logic layer between the API routes and the repositories
# ==============================================================================

from thinklock.services.base_service import BaseService
from thinklock.services.account_service import AccountService
from thinklock.services.course_service import CourseService
from thinklock.services.basket_service import BasketService
from thinklock.services.checkout_service import CheckoutService

__all__ = [
    "BaseService",
    "AccountService",
    "CourseService",
    "BasketService",
    "CheckoutService",
]
