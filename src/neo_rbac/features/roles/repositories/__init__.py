"""Role repositories package."""

from .role_registry import RoleRegistry

__all__ = ["RoleRegistry"]
