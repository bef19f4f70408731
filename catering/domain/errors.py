"""
Error taxonomy for the catering service.

Every error carries an HTTP status code and a machine-readable error code so the
API layer can render it without knowing the concrete type.
"""
from typing import Any, Dict, Optional


class CateringError(Exception):
    """Base error with status code, error code and optional context."""

    def __init__(self, message: str, error_code: Optional[str] = None, status_code: int = 400,
                 context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code or "CATERING_ERROR"
        self.status_code = status_code
        self.context = context or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "status_code": self.status_code,
            "context": self.context,
        }


class ValidationError(CateringError):
    """Malformed or missing input. Never touches persisted state."""

    def __init__(self, message: str = "Invalid input", field_errors: Optional[Dict[str, str]] = None):
        self.field_errors = dict(field_errors or {})
        super().__init__(message, "VALIDATION_ERROR", status_code=422,
                         context={"field_errors": self.field_errors})


class AuthenticationError(CateringError):
    def __init__(self, message: str = "Authentication required. Please sign in."):
        super().__init__(message, "AUTHENTICATION_REQUIRED", status_code=401)


class AuthorizationError(CateringError):
    def __init__(self, message: str = "Access denied"):
        super().__init__(message, "ACCESS_DENIED", status_code=403)


class SecurityTokenError(CateringError):
    """Anti-forgery token mismatch or rate limit exceeded.

    The message is the same for both causes so a client cannot tell which
    check failed.
    """

    def __init__(self, retry_after: Optional[int] = None):
        context = {"retry_after": retry_after} if retry_after is not None else {}
        super().__init__("Request could not be verified. Please wait a moment and try again.",
                         "SECURITY_CHECK_FAILED", status_code=429, context=context)


class PersistenceError(CateringError):
    def __init__(self, message: str = "Something went wrong while saving your data. Please try again.",
                 error_code: str = "PERSISTENCE_ERROR", status_code: int = 503):
        super().__init__(message, error_code, status_code=status_code)


class ConcurrentModificationError(PersistenceError):
    """The record changed between read and write (version mismatch)."""

    def __init__(self, record_id: Any = None):
        super().__init__("This record was changed by someone else. Reload and try again.",
                         "CONCURRENT_MODIFICATION", status_code=409)
        if record_id is not None:
            self.context["id"] = record_id


class InvalidTransitionError(CateringError):
    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot change subscription from '{current}' to '{requested}'",
                         "INVALID_TRANSITION", status_code=409,
                         context={"current_status": current, "requested_status": requested})


class NotFoundError(CateringError):
    def __init__(self, resource: str, record_id: Any):
        super().__init__(f"{resource} not found", "NOT_FOUND", status_code=404,
                         context={"id": record_id})


__all__ = [
    'CateringError', 'ValidationError', 'AuthenticationError', 'AuthorizationError',
    'SecurityTokenError', 'PersistenceError', 'ConcurrentModificationError',
    'InvalidTransitionError', 'NotFoundError',
]
