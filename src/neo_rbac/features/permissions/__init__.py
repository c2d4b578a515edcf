"""Permissions feature for neo-rbac.

- entities/: Permission, ResourceId and Resource value objects, scope matching
- repositories/: resource-scoped grants and explicit denials
"""

from .entities import (
    Permission,
    Resource,
    ResourceId,
    permission_matches,
    resource_key,
)
from .repositories import NegativePermissionTable, ResourceGrantTable

__all__ = [
    "Permission",
    "Resource",
    "ResourceId",
    "permission_matches",
    "resource_key",
    "NegativePermissionTable",
    "ResourceGrantTable",
]
