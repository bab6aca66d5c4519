"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions. Each family carries the
HTTP status the API layer reports for it.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    status_code = 400

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class NotFoundError(DomainException):
    """Base exception for missing records."""

    status_code = 404


class ForbiddenError(DomainException):
    """Base exception for policy rejections."""

    status_code = 403


class ConflictError(DomainException):
    """Base exception for uniqueness and capacity conflicts."""

    status_code = 409


class InvalidTokenError(DomainException):
    """Base exception for token verification failures."""

    status_code = 401


class LicenseNotFoundError(NotFoundError):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class LicenseNotActiveError(ForbiddenError):
    """Raised when a license has been revoked."""

    def __init__(self, message: str = "License is not active"):
        super().__init__(message, code="LICENSE_NOT_ACTIVE")


class LicenseExpiredError(ForbiddenError):
    """Raised when a license has expired."""

    def __init__(self, message: str = "License expired"):
        super().__init__(message, code="LICENSE_EXPIRED")


class MachineLockMismatchError(ForbiddenError):
    """Raised when a machine-bound license is used from another machine."""

    def __init__(self, message: str = "License is locked to another machine"):
        super().__init__(message, code="MACHINE_LOCK_MISMATCH")


class SeatLimitExceededError(ConflictError):
    """Raised when every seat of a license is taken."""

    def __init__(self, message: str = "Activation limit reached"):
        super().__init__(message, code="ACTIVATION_LIMIT_REACHED")


class ActivationNotFoundError(NotFoundError):
    """Raised when an activation is not found."""

    def __init__(self, message: str = "Activation not found"):
        super().__init__(message, code="ACTIVATION_NOT_FOUND")


class ActivationNotActiveError(ForbiddenError):
    """Raised when an activation exists but is pending or revoked."""

    def __init__(self, message: str = "Activation not active"):
        super().__init__(message, code="ACTIVATION_NOT_ACTIVE")


class InvalidActivationTokenError(InvalidTokenError):
    """Raised when an activation token fails verification."""

    def __init__(self, message: str = "Invalid or expired activation token"):
        super().__init__(message, code="INVALID_ACTIVATION_TOKEN")


class TokenContextMismatchError(InvalidTokenError):
    """Raised when a valid token is presented for another app or machine."""

    def __init__(self, message: str = "Activation token does not match app or machine"):
        super().__init__(message, code="TOKEN_CONTEXT_MISMATCH")


class AppNotFoundError(NotFoundError):
    """Raised when an app is not found."""

    def __init__(self, message: str = "App not found"):
        super().__init__(message, code="APP_NOT_FOUND")


class AppNotRegisteredError(DomainException):
    """Raised when issuing a license for an app that cannot be resolved or created."""

    def __init__(self, message: str = "App does not exist. Add app first."):
        super().__init__(message, code="APP_NOT_FOUND")


class AppNameConflictError(ConflictError):
    """Raised when renaming an app onto an existing name."""

    def __init__(self, message: str = "App name already exists"):
        super().__init__(message, code="APP_NAME_CONFLICT")


class ActivationExistsError(ConflictError):
    """Raised when creating a pending activation for a triple that already has one."""

    def __init__(self, message: str = "Activation already exists"):
        super().__init__(message, code="ACTIVATION_EXISTS")
