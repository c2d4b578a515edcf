"""Principal entities package."""

from .principal import Group, Principal, Service, User

__all__ = ["Group", "Principal", "Service", "User"]
