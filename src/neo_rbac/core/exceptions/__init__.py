"""Exceptions module for neo-rbac."""

from .base import RBACError, create_error_response
from .domain import (
    ConfigurationError,
    ValidationError,
    InvalidConditionError,
    AuthorizationError,
    PrincipalNotFoundError,
    GroupNotFoundError,
)

__all__ = [
    "RBACError",
    "create_error_response",
    "ConfigurationError",
    "ValidationError",
    "InvalidConditionError",
    "AuthorizationError",
    "PrincipalNotFoundError",
    "GroupNotFoundError",
]
