"""Domain-specific exceptions for neo-rbac.

This module defines exceptions raised by the access control engine
when its inputs or referenced entities are invalid.
"""

from .base import RBACError


# Configuration Errors
class ConfigurationError(RBACError):
    """Raised when there's a configuration issue."""
    pass


# Validation Errors
class ValidationError(RBACError):
    """Raised when a value fails construction-time validation."""
    pass


class InvalidConditionError(ValidationError):
    """Raised when a condition is built with invalid parameters."""
    pass


# Authorization Errors
class AuthorizationError(RBACError):
    """Base class for authorization-related errors."""
    pass


class PrincipalNotFoundError(AuthorizationError):
    """Raised when an operation references a principal that does not exist."""

    def __init__(self, principal_id: str):
        super().__init__(
            f"Principal with id {principal_id} does not exist",
            details={"principal_id": principal_id}
        )
        self.principal_id = principal_id


class GroupNotFoundError(AuthorizationError):
    """Raised when an operation references a group that does not exist."""

    def __init__(self, message: str, **details):
        super().__init__(message, details=details)
