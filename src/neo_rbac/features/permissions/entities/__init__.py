"""Permission entities package."""

from .permission import (
    Permission,
    Resource,
    ResourceId,
    permission_matches,
    resource_key,
)

__all__ = [
    "Permission",
    "Resource",
    "ResourceId",
    "permission_matches",
    "resource_key",
]
