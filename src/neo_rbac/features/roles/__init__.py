"""Roles feature for neo-rbac: role definitions, inheritance and defaults."""

from .entities import RoleDefinition
from .repositories import RoleRegistry
from .defaults import DEFAULT_ROLES, create_default_registry, seed_default_roles

__all__ = [
    "RoleDefinition",
    "RoleRegistry",
    "DEFAULT_ROLES",
    "create_default_registry",
    "seed_default_roles",
]
