"""Default role seed.

``DEFAULT_ROLES`` holds immutable definitions and ``create_default_registry``
builds a fresh registry every time, so engines never share role state.
"""

from typing import Optional, Tuple

from ...config.constants import DefaultPermission, WILDCARD
from ..audit.services import AuditEmitter
from ..permissions.entities import Permission
from .entities import RoleDefinition
from .repositories import RoleRegistry


def _everywhere(action: str) -> Permission:
    return Permission(action=action)


# editor repeats viewer's read grant instead of inheriting it
DEFAULT_ROLES: Tuple[RoleDefinition, ...] = (
    RoleDefinition.create("viewer", [_everywhere(DefaultPermission.READ)]),
    RoleDefinition.create(
        "editor",
        [_everywhere(DefaultPermission.READ), _everywhere(DefaultPermission.WRITE)],
    ),
    RoleDefinition.create("owner", [_everywhere(DefaultPermission.DELETE)], inherits=["editor"]),
    RoleDefinition.create("manager", [_everywhere(DefaultPermission.MANAGE)], inherits=["viewer"]),
    RoleDefinition.create("admin", [_everywhere(WILDCARD)]),
)


def seed_default_roles(registry: RoleRegistry) -> RoleRegistry:
    """Add the default roles to ``registry`` and return it."""
    for role in DEFAULT_ROLES:
        registry.add_role(role.name, role.permissions, role.inherits)
    return registry


def create_default_registry(emitter: Optional[AuditEmitter] = None) -> RoleRegistry:
    """Create a new registry populated with the default roles."""
    return seed_default_roles(RoleRegistry(emitter or AuditEmitter()))
