"""
Common Exception Classes

Every error the engine, the stores or the auth layer raise on purpose
derives from ``BaseError``. Each class carries the HTTP status and the
machine-readable code the API layer renders it with.
"""

from typing import Any, Dict, Optional


class BaseError(Exception):
    """Base class for all custom exceptions."""

    status_code: int = 500
    code: str = "internal_error"

    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.original_exception = original_exception


class ValidationError(BaseError):
    """
    Input rejected by an engine rule.

    Args:
        message: Human readable reason, returned to the client as is
        errors: Optional field -> problem mapping returned as ``details``
    """

    status_code = 400
    code = "validation_error"

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.errors = errors or {}


class NotFoundError(BaseError):
    """A referenced assessment or profile does not exist."""

    status_code = 404
    code = "not_found_error"

    def __init__(self, resource_type: str, resource_id: Any):
        super().__init__(f"{resource_type} with ID {resource_id} not found")
        self.resource_type = resource_type
        self.resource_id = resource_id


class AuthenticationError(BaseError):
    """No caller identity could be established from the request."""

    status_code = 401
    code = "authentication_error"


class AuthorizationError(BaseError):
    """The caller's role may not perform the requested action."""

    status_code = 403
    code = "authorization_error"

    def __init__(self, message: str, action: Optional[str] = None):
        super().__init__(message)
        self.action = action


class DatabaseError(BaseError):
    """The store failed; the operation may be retried."""

    status_code = 503
    code = "database_error"

    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        super().__init__(f"Database error: {message}", original_exception)


class ConfigurationError(BaseError):
    """A setting is missing or outside its allowed range. Raised at startup."""

    code = "configuration_error"

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(f"Configuration error: {message}")
        self.config_key = config_key
