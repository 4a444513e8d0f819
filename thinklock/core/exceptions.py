# ==============================================================================
# EXCEPTIONS - ThinkLock error envelope
# ==============================================================================
# Every domain failure carries an HTTP status and a stable error code and is
# rendered by the global handler as {"success": false, "error": {...}}
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, Optional


class AppException(Exception):
    """Root of the ThinkLock errors; ``to_dict`` is the response body."""

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        error_code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ==============================================================================
# STORAGE
# ==============================================================================

class DatabaseError(AppException):
    """MongoDB is unreachable or a driver call failed (503)."""

    def __init__(
        self,
        message: str = "Database operation failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="DATABASE_ERROR",
            status_code=503,
            details=details,
        )


class NotFoundError(AppException):
    """An account, course or order id that does not resolve (404)."""

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[Any] = None,
    ) -> None:
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = str(resource_id)

        super().__init__(
            message=message,
            error_code="NOT_FOUND",
            status_code=404,
            details=details,
        )


class AlreadyExistsError(AppException):
    """Duplicate account id or an order for an already used payment intent (409)."""

    def __init__(
        self,
        message: str = "Resource already exists",
        resource_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        _details = details or {}
        if resource_type:
            _details["resource_type"] = resource_type

        super().__init__(
            message=message,
            error_code="ALREADY_EXISTS",
            status_code=409,
            details=_details,
        )


class ValidationError(AppException):
    """Request body rejected; field errors go under ``validation_errors`` (422)."""

    def __init__(
        self,
        message: str = "Validation error",
        errors: Optional[Any] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=422,
            details={"validation_errors": errors or {}},
        )


# ==============================================================================
# ACCESS
# ==============================================================================

class AuthenticationError(AppException):
    """No bearer token, or wrong id/password at ``POST /jwt`` (401)."""

    def __init__(
        self,
        message: str = "Unauthorized access!",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="AUTHENTICATION_ERROR",
            status_code=401,
            details=details,
        )


class AuthorizationError(AppException):
    """Wrong role, someone else's resource, or a token that fails verification (403)."""

    def __init__(
        self,
        message: str = "Forbidden access!",
        required_permission: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        _details = details or {}
        if required_permission:
            _details["required_permission"] = required_permission

        super().__init__(
            message=message,
            error_code="AUTHORIZATION_ERROR",
            status_code=403,
            details=_details,
        )


class TokenExpiredError(AuthenticationError):

    def __init__(self, message: str = "Token has expired") -> None:
        super().__init__(message=message)
        self.error_code = "TOKEN_EXPIRED"


class InvalidTokenError(AuthenticationError):

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message=message)
        self.error_code = "INVALID_TOKEN"


# ==============================================================================
# CHECKOUT
# ==============================================================================

class BusinessRuleError(AppException):
    """
    Marketplace rule broken (409).

    Empty basket at intent creation, a full course, or no paid order
    covering the courses being finalized. ``rule`` is reported as
    ``violated_rule``.
    """

    def __init__(
        self,
        message: str = "Business rule violation",
        rule: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        _details = details or {}
        if rule:
            _details["violated_rule"] = rule

        super().__init__(
            message=message,
            error_code="BUSINESS_RULE_ERROR",
            status_code=409,
            details=_details,
        )


class PaymentRequiredError(AppException):
    """The Stripe intent behind an order is missing, unpaid or mismatched (402)."""

    def __init__(
        self,
        message: str = "Payment has not been completed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="PAYMENT_REQUIRED",
            status_code=402,
            details=details,
        )


class ServiceUnavailableError(AppException):
    """Stripe or ImageKit call failed (502)."""

    def __init__(
        self,
        message: str = "External service unavailable",
        service_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        _details = details or {}
        if service_name:
            _details["service"] = service_name

        super().__init__(
            message=message,
            error_code="SERVICE_UNAVAILABLE",
            status_code=502,
            details=_details,
        )
