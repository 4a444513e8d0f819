# ==============================================================================
# CORE PACKAGE INITIALIZATION
# ==============================================================================
# Core utilities: Settings, Security, Exceptions, Constants
# ==============================================================================

"""
Core Module
===========

Contains core utilities and configurations for the application:
- settings: Environment configuration management
- security: JWT issuance and password hashing
- exceptions: Custom exception classes
- constants: Roles, collection names, projections
"""

from thinklock.core.settings import settings, get_settings
from thinklock.core.exceptions import (
    AppException,
    AlreadyExistsError,
    AuthenticationError,
    AuthorizationError,
    BusinessRuleError,
    DatabaseError,
    NotFoundError,
    PaymentRequiredError,
    ServiceUnavailableError,
    ValidationError,
)

__all__ = [
    "settings",
    "get_settings",
    "AppException",
    "AlreadyExistsError",
    "AuthenticationError",
    "AuthorizationError",
    "BusinessRuleError",
    "DatabaseError",
    "NotFoundError",
    "PaymentRequiredError",
    "ServiceUnavailableError",
    "ValidationError",
]
