"""Permission repositories package."""

from .negative_permissions import NegativePermissionTable
from .resource_grants import ResourceGrantTable

__all__ = ["NegativePermissionTable", "ResourceGrantTable"]
