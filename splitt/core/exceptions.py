"""Custom exception classes"""
from typing import Any, Optional


class AppException(Exception):
    """Base exception for application errors"""

    def __init__(
        self,
        message: str,
        error_type: str = "AppError",
        details: Optional[Any] = None
    ):
        self.message = message
        self.error_type = error_type
        self.details = details
        super().__init__(self.message)


class ValidationError(AppException):
    """A value is outside the domain accepted by a setter or operation"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(
            message=message,
            error_type="ValidationError",
            details=details
        )


class InvariantViolation(AppException):
    """Operation would break a structural invariant of the expense state"""

    def __init__(
        self,
        message: str = "Invariant violated",
        details: Optional[Any] = None,
        error_type: str = "InvariantViolation"
    ):
        super().__init__(
            message=message,
            error_type=error_type,
            details=details
        )


class DuplicateUserError(InvariantViolation):
    """User is already assigned to another Paid By entry"""

    def __init__(self, message: str = "User already present", details: Optional[Any] = None):
        super().__init__(
            message=message,
            details=details,
            error_type="DuplicateUserError"
        )


class NotFoundError(AppException, LookupError):
    """Resource not found exception"""

    def __init__(
        self,
        message: str = "Resource not found",
        details: Optional[Any] = None,
        error_type: str = "NotFoundError"
    ):
        super().__init__(
            message=message,
            error_type=error_type,
            details=details
        )


class EntryNotFoundError(NotFoundError):
    """No active Paid By entry with the requested ID"""

    def __init__(self, message: str = "Entry not found", details: Optional[Any] = None):
        super().__init__(
            message=message,
            details=details,
            error_type="EntryNotFoundError"
        )
