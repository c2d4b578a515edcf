"""Principals feature for neo-rbac: users, services, groups and membership."""

from .entities import Group, Principal, Service, User
from .repositories import PrincipalDirectory

__all__ = ["Group", "Principal", "Service", "User", "PrincipalDirectory"]
