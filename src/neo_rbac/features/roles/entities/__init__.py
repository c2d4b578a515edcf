"""Role entities package."""

from .role import RoleDefinition

__all__ = ["RoleDefinition"]
