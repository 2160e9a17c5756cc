# core/exceptions.py
"""
Error taxonomy shared by every feature package.

Crud functions raise these; the handlers registered in ``main.py`` turn them
into ``{"success": false, "message": ..., "code": ...}`` responses.
"""

from typing import Optional


class AppError(Exception):
    status_code = 400
    code = "ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"


class AuthenticationError(AppError):
    status_code = 401
    code = "UNAUTHENTICATED"

    def __init__(self, message: str = "Not authenticated", code: Optional[str] = None):
        super().__init__(message, code)


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"


class BusinessRuleError(AppError):
    status_code = 400
    code = "BUSINESS_RULE_VIOLATION"


class InvalidOtpError(BusinessRuleError):
    code = "INVALID_OTP"

    def __init__(self, message: str = "Invalid or expired OTP", code: Optional[str] = None):
        super().__init__(message, code)


class InternalError(AppError):
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str = "Internal server error", code: Optional[str] = None):
        super().__init__(message, code)
